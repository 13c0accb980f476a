# core/catalog.py
# ============================================================================
# Catálogo de Acciones
# ============================================================================
# Tabla estática con los cuatro tipos de acción del público. Cada tipo tiene
# un perfil fijo (forma de la onda, color y peso de actividad). Los perfiles
# se crean una sola vez al importar el módulo y nunca se modifican.
# ============================================================================

from collections import namedtuple
from enum import Enum
from types import MappingProxyType

class ActionKind(Enum):
    POSITIVE = "POSITIVE"               # Like      -> "Happy"
    NEGATIVE = "NEGATIVE"               # Dislike   -> "Sad"
    NOISE_COMMENT = "NOISE_COMMENT"     # Comentario positivo -> "Noise"
    SILENCE_COMMENT = "SILENCE_COMMENT" # Comentario negativo -> "Silence"

ActionProfile = namedtuple("ActionProfile", [
    "max_radius",       # Radio máximo en píxeles
    "base_amplitude",   # Amplitud inicial (0.0 a 1.0)
    "damping",          # Coeficiente de amortiguación por cada 10px de radio
    "speed",            # Velocidad de expansión (unidades de diseño)
    "lifespan_ms",      # Vida útil de la onda
    "tint",             # Color RGBA 0-255
    "activity_weight",  # Cuánto suma al medidor de actividad
    "label",            # Texto del botón
    "axis",             # Dirección del cuadrante (x, y)
])

_PROFILES = {
    ActionKind.POSITIVE: ActionProfile(
        max_radius=400, base_amplitude=1.0, damping=0.95, speed=3.5,
        lifespan_ms=3000, tint=(100, 200, 255, 180), activity_weight=0.15,
        label="Happy", axis=(1, 0),
    ),
    ActionKind.NEGATIVE: ActionProfile(
        max_radius=350, base_amplitude=0.8, damping=0.92, speed=2.0,
        lifespan_ms=4000, tint=(150, 100, 150, 160), activity_weight=0.18,
        label="Sad", axis=(-1, 0),
    ),
    ActionKind.NOISE_COMMENT: ActionProfile(
        max_radius=300, base_amplitude=0.6, damping=0.98, speed=4.0,
        lifespan_ms=2500, tint=(255, 220, 100, 140), activity_weight=0.20,
        label="Noise", axis=(0, 1),
    ),
    ActionKind.SILENCE_COMMENT: ActionProfile(
        max_radius=250, base_amplitude=0.4, damping=0.99, speed=2.5,
        lifespan_ms=3500, tint=(50, 50, 80, 120), activity_weight=0.12,
        label="Silence", axis=(0, -1),
    ),
}

# Vista de solo lectura para el resto del programa
PROFILES = MappingProxyType(_PROFILES)

# Orden de los botones en el panel (teclas 1-4)
BUTTON_ORDER = (
    ActionKind.POSITIVE,
    ActionKind.NEGATIVE,
    ActionKind.NOISE_COMMENT,
    ActionKind.SILENCE_COMMENT,
)

def profile_for(kind):
    """
    Devuelve el perfil fijo de un tipo de acción.
    Un valor que no sea ActionKind es un error de programación: se rechaza.
    """
    if not isinstance(kind, ActionKind):
        raise ValueError(f"Tipo de acción desconocido: {kind!r}")
    return _PROFILES[kind]

def parse_action(value):
    """
    Convierte la entrada externa en un ActionKind.
    Acepta el propio enum, su nombre ("positive"), su etiqueta ("Happy")
    o el número de botón (1-4, entero o texto).
    Returns:
        ActionKind
    Raises:
        ValueError: Si el valor no corresponde a ninguna acción.
    """
    if isinstance(value, ActionKind):
        return value

    # bool es subclase de int; no es un número de botón válido
    if isinstance(value, int) and not isinstance(value, bool):
        if 1 <= value <= len(BUTTON_ORDER):
            return BUTTON_ORDER[value - 1]
        raise ValueError(f"Número de botón fuera de rango: {value}")

    if isinstance(value, str):
        texto = value.strip()
        if texto.isdigit():
            return parse_action(int(texto))
        clave = texto.upper()
        if clave in ActionKind.__members__:
            return ActionKind[clave]
        for kind, perfil in _PROFILES.items():
            if perfil.label.upper() == clave:
                return kind

    raise ValueError(f"Tipo de acción desconocido: {value!r}")
