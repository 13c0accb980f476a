# ui/quadrant.py
# ============================================================================
# Indicador de Cuadrante
# ============================================================================
# Posición persistente en dos ejes:
#   happy_sad:     -1.0 (Sad)     a +1.0 (Happy)
#   noise_silence: -1.0 (Silence) a +1.0 (Noise)
# Cada acción acerca su eje hacia su extremo un porcentaje fijo.
# ============================================================================

from core.catalog import profile_for
from core.numeric import lerp, map_range

class QuadrantTracker:
    def __init__(self, smoothing=0.15):
        self.smoothing = smoothing
        self.happy_sad = 0.0
        self.noise_silence = 0.0

    def update(self, kind):
        eje_x, eje_y = profile_for(kind).axis
        if eje_x:
            self.happy_sad = lerp(self.happy_sad, float(eje_x), self.smoothing)
        if eje_y:
            self.noise_silence = lerp(self.noise_silence, float(eje_y), self.smoothing)

    def indicator_offset(self, size, padding=10):
        """Desplazamiento del punto respecto al centro del indicador (y crece hacia abajo)."""
        medio = size / 2
        x = map_range(self.happy_sad, -1, 1, -medio + padding, medio - padding)
        y = map_range(self.noise_silence, -1, 1, medio - padding, -medio + padding)
        return x, y
