# core/spawn.py
# ============================================================================
# Punto de Aparición
# ============================================================================
# Cada acción tiene su cuadrante en el estanque:
#   Happy -> derecha, Sad -> izquierda, Noise -> arriba, Silence -> abajo.
# ============================================================================

import random

from .catalog import ActionKind, profile_for

def spawn_point(kind, width, pond_height, rng=None, margin=100):
    """
    Elige una posición aleatoria sesgada hacia el cuadrante de la acción.
    Args:
        width (float): Ancho del estanque en píxeles.
        pond_height (float): Alto del estanque (sin el panel de botones).
        margin (float): Distancia mínima a los bordes.
    Returns:
        tuple: (x, y)
    """
    profile_for(kind)
    rng = rng or random

    if width <= 2 * margin or pond_height <= 2 * margin:
        raise ValueError(f"Estanque demasiado pequeño para el margen {margin}: {width}x{pond_height}")

    centro_x = width / 2
    centro_y = pond_height / 2

    if kind is ActionKind.POSITIVE:
        x = rng.uniform(centro_x, width - margin)
        y = rng.uniform(margin, pond_height - margin)
    elif kind is ActionKind.NEGATIVE:
        x = rng.uniform(margin, centro_x)
        y = rng.uniform(margin, pond_height - margin)
    elif kind is ActionKind.NOISE_COMMENT:
        x = rng.uniform(margin, width - margin)
        y = rng.uniform(margin, centro_y)
    else:
        x = rng.uniform(margin, width - margin)
        y = rng.uniform(centro_y, pond_height - margin)

    return (x, y)
