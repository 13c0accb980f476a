# core/engine.py
# ============================================================================
# Motor del Estanque
# ============================================================================
# Punto de contacto entre el núcleo y el resto del programa. Solo hay dos
# entradas que modifican el estado:
#   - trigger_action(kind, now): una acción del público.
#   - tick(now): un frame del reloj externo.
# Todo lo demás (render, audio, UI) solo lee lo que devuelven.
# ============================================================================

import random
from collections import namedtuple

from .activity import ActivityState
from .catalog import parse_action
from .config import load_config, pond_height, activity_kwargs
from .field import RippleField
from .ripple import Ripple
from .spawn import spawn_point

SpawnResult = namedtuple("SpawnResult", ["position", "ripple"])

Frame = namedtuple("Frame", [
    "shapes",           # Formas de todas las ondas vivas
    "turbulence",       # Grano del fondo
    "vignette",         # Oscurecimiento de bordes
    "flicker",          # Destello blanco (aleatorio)
    "blackout_alpha",   # 0-255 sobre el estanque
    "meter",            # Para el ambiente de audio
    "phase",            # Phase actual
    "muted",            # Señal de silencio para el audio
    "ripple_count",
    "damped_count",
])

class PondEngine:
    def __init__(self, config=None, rng=None):
        self.config = config or load_config()
        self.rng = rng or random.Random()

        self.width = self.config["W"]
        self.pond_height = pond_height(self.config)

        self.activity = ActivityState(rng=self.rng, **activity_kwargs(self.config))
        self.field = RippleField(damped_scale=self.config["damped_scale"])

    def trigger_action(self, kind, now):
        """
        Procesa una acción del público.
        Returns:
            SpawnResult o None si el estanque está en apagón.
        Raises:
            ValueError: Acción desconocida. Se rechaza antes de tocar el estado.
        """
        kind = parse_action(kind)

        if not self.activity.should_spawn_ripples():
            return None

        posicion = spawn_point(kind, self.width, self.pond_height,
                               rng=self.rng, margin=self.config["spawn_margin"])
        ripple = Ripple(posicion, kind, now, rng=self.rng,
                        radius_scale=self.config["radius_scale"])
        self.field.add(ripple)
        self.activity.add_activity(kind, now)
        return SpawnResult(posicion, ripple)

    def tick(self, now):
        """Avanza un frame: primero la actividad, luego las ondas."""
        self.activity.update(now)
        formas = self.field.tick(now)

        act = self.activity
        return Frame(
            shapes=formas,
            turbulence=act.background_turbulence(),
            vignette=act.vignette_intensity(),
            flicker=act.flicker_intensity(),
            blackout_alpha=act.blackout_alpha,
            meter=act.meter,
            phase=act.phase,
            muted=act.is_muted(),
            ripple_count=len(self.field),
            damped_count=self.field.last_damped,
        )
