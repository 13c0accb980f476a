# core/field.py
# ============================================================================
# Campo de Ondas
# ============================================================================
# Colección de ondas vivas. En cada tick envejece, descarta las expiradas y
# aplica la absorción de los comentarios "Silence" sobre las vecinas.
# ============================================================================

# Escala de amplitud para una onda absorbida (solo durante ese frame)
DAMPED_SCALE = 0.3

class RippleField:
    def __init__(self, damped_scale=DAMPED_SCALE):
        self.damped_scale = damped_scale
        self._ripples = []
        self.last_damped = 0

    def __len__(self):
        return len(self._ripples)

    def __iter__(self):
        return iter(list(self._ripples))

    def add(self, ripple):
        if any(r is ripple for r in self._ripples):
            raise ValueError("La onda ya pertenece al campo")
        self._ripples.append(ripple)

    def clear(self):
        self._ripples = []
        self.last_damped = 0

    def tick(self, now):
        """
        Avanza todas las ondas y devuelve las formas del frame.
        La comprobación de absorción es O(n^2); con decenas de ondas
        simultáneas no es un problema.
        """
        self._ripples = [r for r in self._ripples if r.advance(now)]

        formas = []
        absorbidas = 0
        for ripple in self._ripples:
            amortiguada = any(other.should_damp(ripple, now) for other in self._ripples)
            if amortiguada:
                absorbidas += 1
                formas.extend(ripple.render(self.damped_scale))
            else:
                formas.extend(ripple.render())

        self.last_damped = absorbidas
        return formas
