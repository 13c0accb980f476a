# audio/synth.py
# ============================================================================
# Síntesis de Sonido
# ============================================================================
# Voces de un solo disparo por tipo de acción, tono ambiente y mezclador.
# Todo es numpy puro: el stream de sounddevice solo pide bloques al mezclador.
#
#   Happy   -> campana brillante (440 Hz + octava)
#   Sad     -> golpe sordo en diente de sierra (110 Hz)
#   Noise   -> ráfaga de ruido filtrada (paso banda 800 Hz)
#   Silence -> pulso apagado (150 Hz con paso bajo)
# ============================================================================

import math
import numpy as np

from core.catalog import ActionKind, profile_for
from core.numeric import lerp, map_range
from .filters import VoiceFilter

def adsr(attack, decay, sustain, release, peak, samplerate):
    """
    Envolvente de disparo: sube a 'peak', cae a sustain*peak y se libera
    enseguida (sin tiempo de sostenido).
    Args:
        attack, decay, release (float): Segundos.
        sustain (float): Nivel relativo al pico (0.0 a 1.0).
    Returns:
        ndarray float32.
    """
    n_a = max(1, int(attack * samplerate))
    n_d = max(1, int(decay * samplerate))
    n_r = max(1, int(release * samplerate))
    nivel = sustain * peak

    subida = np.linspace(0.0, peak, n_a, endpoint=False)
    caida = np.linspace(peak, nivel, n_d, endpoint=False)
    libera = np.linspace(nivel, 0.0, n_r)
    return np.concatenate((subida, caida, libera)).astype(np.float32)

def sine(freq, n, samplerate, phase=0.0):
    t = np.arange(n) / samplerate
    return np.sin(2.0 * np.pi * freq * t + phase).astype(np.float32)

def sawtooth(freq, n, samplerate):
    t = np.arange(n) * freq / samplerate
    return (2.0 * (t - np.floor(t + 0.5))).astype(np.float32)

def white_noise(n, rng=None):
    rng = rng or np.random.default_rng()
    return rng.uniform(-1.0, 1.0, n).astype(np.float32)

class VoiceBank:
    """Genera el buffer mono de cada acción."""
    def __init__(self, samplerate=48000, master_volume=0.5, rng=None):
        self.samplerate = samplerate
        self.master_volume = master_volume
        self.rng = rng or np.random.default_rng()
        self.filters = VoiceFilter(samplerate)

    def voice_for(self, kind):
        profile_for(kind)
        if kind is ActionKind.POSITIVE:
            return self._campana()
        elif kind is ActionKind.NEGATIVE:
            return self._golpe()
        elif kind is ActionKind.NOISE_COMMENT:
            return self._rafaga()
        return self._pulso()

    def _campana(self):
        sr, vol = self.samplerate, self.master_volume
        env = adsr(0.01, 0.1, 0.3, 0.5, 0.3 * vol, sr)
        tono = sine(440.0, len(env), sr) * env

        # Armónico una octava arriba, 10 ms después
        env2 = adsr(0.01, 0.05, 0.2, 0.3, 0.15 * vol, sr)
        armonico = sine(880.0, len(env2), sr) * env2
        retraso = int(0.01 * sr)

        out = np.zeros(max(len(tono), retraso + len(armonico)), dtype=np.float32)
        out[:len(tono)] += tono
        out[retraso:retraso + len(armonico)] += armonico
        return out

    def _golpe(self):
        sr = self.samplerate
        env = adsr(0.05, 0.2, 0.4, 0.8, 0.25 * self.master_volume, sr)
        return sawtooth(110.0, len(env), sr) * env

    def _rafaga(self):
        sr = self.samplerate
        env = adsr(0.01, 0.05, 0.1, 0.2, 0.2 * self.master_volume, sr)
        ruido = self.filters.band_pass(white_noise(len(env), self.rng), 800.0, 10.0)

        # El paso banda se come casi toda la energía: normalizamos al pico
        pico = float(np.max(np.abs(ruido)))
        if pico > 0:
            ruido = ruido / pico
        return (ruido * env).astype(np.float32)

    def _pulso(self):
        sr = self.samplerate
        env = adsr(0.1, 0.2, 0.3, 0.5, 0.1 * self.master_volume, sr)
        tono = self.filters.low_pass(sine(150.0, len(env), sr), 200.0)
        return (tono * env).astype(np.float32)

class AmbientTone:
    """
    Tono de agua de fondo. Con el medidor de actividad sube en volumen y en
    frecuencia (más áspero). La amplitud se suaviza en cada tick.
    """
    BASE_FREQ = 60.0
    BASE_AMP = 0.05
    SMOOTHING = 0.05

    def __init__(self, samplerate=48000, master_volume=0.5):
        self.samplerate = samplerate
        self.master_volume = master_volume
        self.amp = self.BASE_AMP * master_volume
        self.freq = self.BASE_FREQ
        self.phase = 0.0
        self._last_amp = self.amp

    def update(self, meter):
        """Llamado una vez por frame desde el hilo principal."""
        aspereza = map_range(meter, 0.0, 1.0, 0.0, 0.3, clamp=True)
        objetivo = (self.BASE_AMP + aspereza) * self.master_volume
        self.amp = lerp(self.amp, objetivo, self.SMOOTHING)
        self.freq = self.BASE_FREQ + aspereza * 40.0

    def silence(self):
        self.amp = 0.0

    def restore(self):
        self.amp = self.BASE_AMP * self.master_volume

    def render(self, frames):
        """Bloque continuo en fase. Rampa de amplitud para evitar clics."""
        amp = self.amp
        paso = 2.0 * math.pi * self.freq / self.samplerate
        fases = self.phase + paso * np.arange(frames)
        self.phase = float((self.phase + paso * frames) % (2.0 * math.pi))

        rampa = np.linspace(self._last_amp, amp, frames, dtype=np.float32)
        self._last_amp = amp
        return (np.sin(fases).astype(np.float32) * rampa)

class Mixer:
    """Suma las voces activas en bloques de tamaño fijo."""
    def __init__(self):
        self.voices = []  # [buffer, posición]

    def add(self, buffer):
        if len(buffer):
            self.voices.append([np.asarray(buffer, dtype=np.float32), 0])

    def mix(self, frames):
        out = np.zeros(frames, dtype=np.float32)
        vivas = []
        for voz in self.voices:
            buf, pos = voz
            trozo = buf[pos:pos + frames]
            out[:len(trozo)] += trozo
            voz[1] = pos + len(trozo)
            if voz[1] < len(buf):
                vivas.append(voz)
        self.voices = vivas
        return out
