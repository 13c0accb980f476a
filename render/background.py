# render/background.py
# ============================================================================
# Fondo del Estanque
# ============================================================================
# Genera los datos del fondo a partir de la modulación del estado de
# actividad: degradado base, grano animado (ruido de valor 3D), anillos de
# viñeta. Solo numpy: la subida a GPU la hace el renderizador.
# ============================================================================

import numpy as np

from .geometry import stroke_ring, FLOATS_PER_VERTEX

# Colores del degradado (arriba / abajo), escala 0-255
GRADIENT_TOP = (10, 15, 20, 255)
GRADIENT_BOTTOM = (25, 30, 35, 255)

GRAIN_CELL = 4          # Píxeles por celda de grano
GRAIN_FREQ = 0.01       # Frecuencia espacial (por píxel)
GRAIN_SPEED = 0.01      # Avance en z por frame
GRAIN_GAIN = 8.0        # Brillo máximo del grano por unidad de turbulencia
GRAIN_ALPHA = 30

VIGNETTE_RINGS = 8

class ValueNoise:
    """
    Ruido de valor 3D con tabla de permutación, vectorizado con numpy.
    Devuelve valores en [0, 1], suaves en x/y y animables en z.
    """
    def __init__(self, seed=None, size=256):
        rng = np.random.default_rng(seed)
        self.size = size
        self.perm = rng.permutation(size).astype(np.int64)
        self.values = rng.random(size)

    def _lattice(self, i, j, k):
        m = self.size - 1
        p = self.perm
        return self.values[p[(p[(p[i & m] + j) & m] + k) & m]]

    def sample(self, x, y, z):
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        x, y = np.broadcast_arrays(x, y)

        xi, yi = np.floor(x).astype(np.int64), np.floor(y).astype(np.int64)
        zi = int(np.floor(z))
        fx, fy, fz = x - xi, y - yi, z - zi

        # Interpolación suave (smoothstep)
        sx = fx * fx * (3 - 2 * fx)
        sy = fy * fy * (3 - 2 * fy)
        sz = fz * fz * (3 - 2 * fz)

        def plano(k):
            v00 = self._lattice(xi, yi, k)
            v10 = self._lattice(xi + 1, yi, k)
            v01 = self._lattice(xi, yi + 1, k)
            v11 = self._lattice(xi + 1, yi + 1, k)
            arriba = v00 + (v10 - v00) * sx
            abajo = v01 + (v11 - v01) * sx
            return arriba + (abajo - arriba) * sy

        a = plano(zi)
        b = plano(zi + 1)
        return a + (b - a) * sz

    def fractal(self, x, y, z, octaves=4, falloff=0.5):
        """Suma de octavas normalizada a [0, 1]."""
        total = 0.0
        amp_total = 0.0
        amp = 0.5
        freq = 1.0
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        for _ in range(octaves):
            total = total + amp * self.sample(x * freq, y * freq, z * freq)
            amp_total += amp
            amp *= falloff
            freq *= 2.0
        return total / amp_total

def gradient_vertices(width, height):
    """Quad de pantalla del estanque con degradado vertical."""
    top = np.asarray(GRADIENT_TOP, dtype=np.float32) / 255.0
    bottom = np.asarray(GRADIENT_BOTTOM, dtype=np.float32) / 255.0
    esquinas = [
        (0, 0, top), (width, 0, top), (0, height, bottom),
        (width, 0, top), (width, height, bottom), (0, height, bottom),
    ]
    out = np.zeros((6, FLOATS_PER_VERTEX), dtype=np.float32)
    for i, (x, y, color) in enumerate(esquinas):
        out[i, 0:2] = (x, y)
        out[i, 2:6] = color
    return out

class GrainField:
    """Textura de grano: una celda de 4x4 píxeles por texel."""
    def __init__(self, width, height, seed=None):
        self.cols = max(1, int(np.ceil(width / GRAIN_CELL)))
        self.rows = max(1, int(np.ceil(height / GRAIN_CELL)))
        self.noise = ValueNoise(seed)

        # Coordenadas de cada celda en el espacio del ruido
        xs = np.arange(self.cols) * GRAIN_CELL * GRAIN_FREQ
        ys = np.arange(self.rows) * GRAIN_CELL * GRAIN_FREQ
        self.gx, self.gy = np.meshgrid(xs, ys)

    def image(self, frame_count, turbulence):
        """
        Imagen RGBA uint8 de forma (rows, cols, 4).
        El brillo del grano crece con la turbulencia del estado de actividad.
        """
        valor = self.noise.fractal(self.gx, self.gy, frame_count * GRAIN_SPEED)
        valor = valor * turbulence * GRAIN_GAIN

        img = np.empty((self.rows, self.cols, 4), dtype=np.uint8)
        img[..., 0] = np.clip(valor, 0, 255)
        img[..., 1] = np.clip(valor * 1.1, 0, 255)
        img[..., 2] = np.clip(valor * 1.2, 0, 255)
        img[..., 3] = GRAIN_ALPHA
        return img

def vignette_vertices(width, height, intensity):
    """Anillos elípticos oscuros concéntricos. Vacío si la intensidad es 0."""
    if intensity <= 0:
        return np.zeros((0, FLOATS_PER_VERTEX), dtype=np.float32)

    cx, cy = width / 2, height / 2
    partes = []
    for r in range(VIGNETTE_RINGS):
        alpha = intensity * (1 - r / VIGNETTE_RINGS) * 25
        rx = (width * 1.5 - r * 60) / 2
        ry = (height * 1.5 - r * 60) / 2
        if rx <= 0 or ry <= 0:
            continue
        partes.append(stroke_ring(cx, cy, rx, ry, 3.0, (0, 0, 0, alpha), segments=96))
    if not partes:
        return np.zeros((0, FLOATS_PER_VERTEX), dtype=np.float32)
    return np.concatenate(partes, axis=0)
