# core/shapes.py
# ============================================================================
# Descriptores de Formas
# ============================================================================
# El núcleo nunca dibuja: describe lo que hay que dibujar. Cada onda produce
# una lista de estas tuplas inmutables y la capa de render las convierte en
# triángulos para la GPU.
# ============================================================================

from collections import namedtuple

# Anillo circular (contorno, sin relleno)
Ring = namedtuple("Ring", ["cx", "cy", "radius", "color", "width"])

# Polilínea. Si 'closed' es True se une el último vértice con el primero.
Polyline = namedtuple("Polyline", ["points", "color", "width", "closed"])

# Segmento de recta suelto (destellos)
Segment = namedtuple("Segment", ["x1", "y1", "x2", "y2", "color", "width"])

def rgba(r, g, b, a):
    """
    Construye un color RGBA en escala 0-255 limitando cada canal.
    Los desplazamientos de color (+50, -20...) pueden salirse del rango.
    """
    return (
        max(0.0, min(255.0, float(r))),
        max(0.0, min(255.0, float(g))),
        max(0.0, min(255.0, float(b))),
        max(0.0, min(255.0, float(a))),
    )
