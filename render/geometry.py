# render/geometry.py
# ============================================================================
# Teselado de Trazos
# ============================================================================
# El Core Profile de OpenGL no garantiza glLineWidth > 1, así que cada trazo
# se convierte en quads (dos triángulos) con el grosor pedido.
# Formato de vértice (igual que el batch 2D): [x, y, r, g, b, a, u, v]
# ============================================================================

import math
import numpy as np

from core.shapes import Ring, Polyline, Segment

FLOATS_PER_VERTEX = 8
MIN_SEGMENTS = 16
MAX_SEGMENTS = 128

def circle_segments(radius):
    """Número de lados según el tamaño: ~1 lado cada 6px de perímetro."""
    return int(max(MIN_SEGMENTS, min(MAX_SEGMENTS, 2 * math.pi * radius / 6.0)))

def ellipse_points(cx, cy, rx, ry, segments):
    angulos = np.linspace(0.0, 2.0 * np.pi, segments, endpoint=False)
    return np.column_stack((cx + np.cos(angulos) * rx, cy + np.sin(angulos) * ry))

def polyline_pairs(points, closed):
    """Devuelve los extremos (p0, p1) de cada tramo de una polilínea."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if closed:
        return pts, np.roll(pts, -1, axis=0)
    return pts[:-1], pts[1:]

def stroke_segments(p0, p1, width, color):
    """
    Convierte N segmentos en 6*N vértices (2 triángulos por segmento).
    Args:
        p0, p1 (ndarray): Extremos, forma (N, 2).
        width (float): Grosor en píxeles.
        color (tuple): RGBA en escala 0-255.
    Returns:
        ndarray float32 de forma (6*M, 8). Los segmentos de longitud cero se
        descartan, por eso M <= N.
    """
    p0 = np.asarray(p0, dtype=np.float64).reshape(-1, 2)
    p1 = np.asarray(p1, dtype=np.float64).reshape(-1, 2)

    d = p1 - p0
    largo = np.hypot(d[:, 0], d[:, 1])
    validos = largo > 1e-9
    if not np.any(validos):
        return np.zeros((0, FLOATS_PER_VERTEX), dtype=np.float32)

    p0, p1, d, largo = p0[validos], p1[validos], d[validos], largo[validos]

    # Normal unitaria escalada a medio grosor
    normal = np.column_stack((-d[:, 1], d[:, 0])) / largo[:, None] * (width * 0.5)

    a = p0 + normal
    b = p0 - normal
    c = p1 + normal
    e = p1 - normal

    # Triángulos (a, b, c) y (c, b, e) intercalados por segmento
    esquinas = np.stack((a, b, c, c, b, e), axis=1).reshape(-1, 2)

    out = np.zeros((len(esquinas), FLOATS_PER_VERTEX), dtype=np.float32)
    out[:, 0:2] = esquinas
    out[:, 2:6] = np.asarray(color, dtype=np.float32) / 255.0
    return out

def stroke_ring(cx, cy, rx, ry, width, color, segments=None):
    if segments is None:
        segments = circle_segments(max(rx, ry))
    p0, p1 = polyline_pairs(ellipse_points(cx, cy, rx, ry, segments), closed=True)
    return stroke_segments(p0, p1, width, color)

def shape_vertices(shape):
    """Vértices de un único descriptor de forma."""
    if isinstance(shape, Ring):
        if shape.radius <= 0:
            return np.zeros((0, FLOATS_PER_VERTEX), dtype=np.float32)
        return stroke_ring(shape.cx, shape.cy, shape.radius, shape.radius, shape.width, shape.color)
    if isinstance(shape, Polyline):
        if len(shape.points) < 2:
            return np.zeros((0, FLOATS_PER_VERTEX), dtype=np.float32)
        p0, p1 = polyline_pairs(shape.points, shape.closed)
        return stroke_segments(p0, p1, shape.width, shape.color)
    if isinstance(shape, Segment):
        return stroke_segments([(shape.x1, shape.y1)], [(shape.x2, shape.y2)], shape.width, shape.color)
    raise TypeError(f"Forma no soportada: {type(shape).__name__}")

def shapes_to_vertices(shapes):
    """Concatena los vértices de todas las formas de un frame."""
    partes = [shape_vertices(s) for s in shapes]
    partes = [p for p in partes if len(p)]
    if not partes:
        return np.zeros((0, FLOATS_PER_VERTEX), dtype=np.float32)
    return np.concatenate(partes, axis=0)
