# core/activity.py
# ============================================================================
# Estado de Actividad (Máquina de Estados)
# ============================================================================
# Acumula las acciones del público en un medidor continuo y gobierna el ciclo
# CALM -> ACTIVE -> OVERLOAD -> RECOVER -> CALM. Del medidor se derivan las
# curvas de modulación del fondo (turbulencia, viñeta, parpadeo) y el alfa
# del apagón.
#
# Todos los tiempos están en milisegundos y los recibe desde fuera ('now'),
# así el ciclo completo se puede probar sin esperar tiempo real.
# ============================================================================

import random
from enum import Enum

from .catalog import profile_for
from .numeric import lerp, map_range

class Phase(Enum):
    CALM = "CALM"
    ACTIVE = "ACTIVE"
    OVERLOAD = "OVERLOAD"
    RECOVER = "RECOVER"

class ActivityState:
    def __init__(self,
                 overload_threshold=1.0,
                 meter_ceiling=1.5,
                 decay_rate=0.001,
                 active_threshold=0.3,
                 calm_threshold=0.2,
                 fade_out_ms=2000.0,
                 overload_ms=7000.0,
                 recover_ms=3000.0,
                 recover_meter=0.3,
                 rng=None):
        if fade_out_ms <= 0 or recover_ms <= 0:
            raise ValueError("Las duraciones de fundido deben ser positivas")
        if not calm_threshold <= active_threshold < overload_threshold <= meter_ceiling:
            raise ValueError("Umbrales inconsistentes: se espera calm <= active < overload <= techo")

        self.overload_threshold = overload_threshold
        self.meter_ceiling = meter_ceiling
        self.decay_rate = decay_rate          # Por tick
        self.active_threshold = active_threshold
        self.calm_threshold = calm_threshold
        self.fade_out_ms = fade_out_ms        # Fundido a negro
        self.overload_ms = overload_ms        # Tiempo total en OVERLOAD
        self.recover_ms = recover_ms          # Regreso desde negro
        self.recover_meter = recover_meter    # El siguiente ciclo arranca "tibio"
        self.rng = rng or random

        self.meter = 0.0
        self.phase = Phase.CALM
        self.overload_start_time = 0.0
        self.recover_start_time = 0.0
        self.blackout_alpha = 0.0

    def __repr__(self):
        return f"<ActivityState {self.phase.value} meter={self.meter:.2f}>"

    # ------------------------------------------------------------------
    # Eventos
    # ------------------------------------------------------------------

    def add_activity(self, kind, now):
        """
        Registra el peso de una acción en el medidor.
        Durante OVERLOAD los eventos se descartan (no se encolan).
        Returns:
            bool: True si el peso se registró, False si se descartó.
        """
        peso = profile_for(kind).activity_weight

        if self.phase is Phase.OVERLOAD:
            return False

        # El techo permite pasar un poco el umbral sin crecer sin límite
        self.meter = min(self.meter + peso, self.meter_ceiling)

        if self.meter > self.active_threshold and self.phase is Phase.CALM:
            self.phase = Phase.ACTIVE

        if self.meter >= self.overload_threshold and self.phase is not Phase.OVERLOAD:
            self._trigger_overload(now)

        return True

    def _trigger_overload(self, now):
        self.phase = Phase.OVERLOAD
        self.overload_start_time = now
        self.blackout_alpha = 0.0

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def update(self, now):
        """Avanza la máquina de estados un frame."""
        # Decaimiento (solo en CALM/ACTIVE)
        if self.phase in (Phase.CALM, Phase.ACTIVE):
            self.meter = max(0.0, self.meter - self.decay_rate)
            if self.meter < self.calm_threshold and self.phase is Phase.ACTIVE:
                self.phase = Phase.CALM

        if self.phase is Phase.OVERLOAD:
            transcurrido = now - self.overload_start_time

            # Fundido a negro y luego negro total
            if transcurrido < self.fade_out_ms:
                self.blackout_alpha = lerp(0.0, 255.0, max(0.0, transcurrido) / self.fade_out_ms)
            else:
                self.blackout_alpha = 255.0

            if transcurrido > self.overload_ms:
                self.phase = Phase.RECOVER
                self.recover_start_time = now

        # Se evalúa en la misma llamada en la que se entra en RECOVER
        if self.phase is Phase.RECOVER:
            transcurrido = now - self.recover_start_time
            if transcurrido < self.recover_ms:
                self.blackout_alpha = lerp(255.0, 0.0, max(0.0, transcurrido) / self.recover_ms)
            else:
                self.blackout_alpha = 0.0
                self.meter = self.recover_meter
                self.phase = Phase.CALM

    # ------------------------------------------------------------------
    # Valores derivados
    # ------------------------------------------------------------------

    def background_turbulence(self):
        return map_range(self.meter, 0.0, 1.0, 0.3, 1.5, clamp=True)

    def vignette_intensity(self):
        return map_range(self.meter, 0.5, 1.0, 0.0, 0.8, clamp=True)

    def flicker_intensity(self):
        # Muestra nueva en cada llamada: es un parpadeo, no se cachea
        if self.meter > 0.7:
            techo = map_range(self.meter, 0.7, 1.0, 0.0, 0.3, clamp=True)
            return self.rng.uniform(0.0, techo)
        return 0.0

    def should_spawn_ripples(self):
        return self.phase is not Phase.OVERLOAD

    def is_muted(self):
        return self.phase is Phase.OVERLOAD

    def snapshot(self):
        """Valores del estado para el informe periódico de la consola."""
        return {
            "meter": self.meter,
            "phase": self.phase.value,
            "blackout_alpha": self.blackout_alpha,
            "turbulence": self.background_turbulence(),
            "vignette": self.vignette_intensity(),
        }
