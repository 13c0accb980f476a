# audio/engine.py
# ============================================================================
# Motor de Audio (SoundDevice)
# ============================================================================
# Salida de audio por callback. El hilo de audio de PortAudio solo lee:
#   - la cola de voces nuevas (queue.Queue), que llena el hilo principal,
#   - los parámetros del tono ambiente (floats).
# Nunca toca el estado del estanque: el hilo principal le pasa 'meter' y la
# señal de silencio en cada frame.
# ============================================================================

import queue
import numpy as np
import sounddevice as sd

from core.activity import Phase
from .synth import VoiceBank, AmbientTone, Mixer

class AudioEngine:
    def __init__(self, ctx):
        self.ctx = ctx
        cfg = ctx.config
        self.samplerate = cfg["samplerate"]
        self.blocksize = cfg["blocksize"]
        self.master_volume = cfg["master_volume"]

        self.voices = VoiceBank(self.samplerate, self.master_volume)
        self.ambient = AmbientTone(self.samplerate, self.master_volume)
        self.mixer = Mixer()            # Solo lo usa el callback
        self.q = queue.Queue()          # Voces pendientes (hilo principal -> audio)
        self.is_muted = False
        self.stream = None

    def start(self):
        """Abre el stream de salida. Sin dispositivo la instalación sigue muda."""
        try:
            self.stream = sd.OutputStream(
                samplerate=self.samplerate,
                blocksize=self.blocksize,
                channels=1,
                dtype="float32",
                callback=self._callback,
            )
            self.stream.start()
            print(f"🔊 Audio iniciado ({self.samplerate} Hz, bloque {self.blocksize})")
        except (sd.PortAudioError, OSError) as e:
            print(f"⚠️ Error abriendo la salida de audio, se continúa en silencio: {e}")
            self.stream = None

    def stop(self):
        if self.stream is not None:
            self.stream.stop()
            self.stream.close()
            self.stream = None

    def _callback(self, outdata, frames, time, status):
        # Hilo de audio de alta prioridad: nada de prints ni bloqueos.
        while True:
            try:
                self.mixer.add(self.q.get_nowait())
            except queue.Empty:
                break

        mezcla = self.ambient.render(frames) + self.mixer.mix(frames)
        np.clip(mezcla, -1.0, 1.0, out=mezcla)
        outdata[:, 0] = mezcla

    def play_action(self, kind):
        """
        Sonido de la acción recién aparecida. Sin stream abierto nadie vacía
        la cola, así que tampoco se genera la voz.
        """
        if self.is_muted or self.stream is None:
            return
        self.q.put(self.voices.voice_for(kind))

    def update(self, frame):
        """
        Un frame del hilo principal: aspereza del ambiente según el medidor,
        silencio durante OVERLOAD y vuelta del sonido al regresar a CALM.
        """
        self.ambient.update(frame.meter)

        if frame.muted:
            self.mute()
        elif frame.phase is Phase.CALM:
            self.unmute()

    def mute(self):
        self.is_muted = True
        self.ambient.silence()

    def unmute(self):
        if self.is_muted:
            self.is_muted = False
            self.ambient.restore()
