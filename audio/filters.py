# audio/filters.py
# ============================================================================
# Filtros de Voz (Butterworth)
# ============================================================================
# Las voces son buffers cortos que se generan enteros al disparar la acción,
# así que se filtran de una vez con secciones de segundo orden (SOS), sin
# estado entre bloques. Los coeficientes se cachean por parámetros.
# ============================================================================

import numpy as np
from scipy.signal import butter, sosfilt

class VoiceFilter:
    def __init__(self, samplerate=48000):
        self.samplerate = samplerate
        self.nyquist = samplerate / 2.0
        self._sos_cache = {}  # Clave: (tipo, orden, frecuencias) -> sos

    def _sos(self, btype, order, freqs):
        key = (btype, order, freqs)
        if key not in self._sos_cache:
            self._sos_cache[key] = butter(order, freqs, btype=btype, fs=self.samplerate, output="sos")
        return self._sos_cache[key]

    def _filtrar(self, sos, signal):
        signal = np.asarray(signal, dtype=np.float64)
        if len(signal) == 0:
            return np.zeros(0, dtype=np.float32)
        return sosfilt(sos, signal).astype(np.float32)

    def band_pass(self, signal, center, q, order=2):
        """
        Paso banda resonante. El ancho de banda es center / q: con q alto el
        ruido blanco se vuelve casi un tono.
        """
        if center <= 0 or q <= 0:
            raise ValueError("El centro y la resonancia del paso banda deben ser positivos")
        ancho = center / q
        bajo, alto = center - ancho / 2.0, center + ancho / 2.0
        if bajo <= 0 or alto >= self.nyquist:
            raise ValueError(f"Banda fuera de rango: {bajo:.1f}-{alto:.1f} Hz (Nyquist {self.nyquist:.0f} Hz)")
        return self._filtrar(self._sos("bandpass", order, (bajo, alto)), signal)

    def low_pass(self, signal, cutoff, order=2):
        """Paso bajo Butterworth del orden indicado."""
        if cutoff <= 0 or cutoff >= self.nyquist:
            raise ValueError(f"Frecuencia de corte fuera de rango: {cutoff} Hz")
        return self._filtrar(self._sos("lowpass", order, cutoff), signal)
