# core/numeric.py
# ============================================================================
# Utilidades Numéricas
# ============================================================================
# Mapeo lineal entre rangos e interpolación. Todas las curvas derivadas del
# estado de actividad pasan por aquí.
# ============================================================================

def lerp(a, b, t):
    """Interpolación lineal entre a y b."""
    return a + (b - a) * t

def map_range(value, in_min, in_max, out_min, out_max, clamp=False):
    """
    Mapea 'value' del rango [in_min, in_max] al rango [out_min, out_max].
    Args:
        clamp (bool): Si es True el resultado queda limitado al rango de salida,
                      sin importar lo extremo que sea el valor de entrada.
    Returns:
        float: Valor mapeado.
    """
    if in_max == in_min:
        raise ValueError("El rango de entrada no puede tener ancho cero")

    t = (value - in_min) / (in_max - in_min)
    result = out_min + (out_max - out_min) * t

    if clamp:
        lo, hi = min(out_min, out_max), max(out_min, out_max)
        result = max(lo, min(result, hi))
    return result

def clamp(value, lo, hi):
    return max(lo, min(value, hi))
