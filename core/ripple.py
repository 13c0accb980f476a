# core/ripple.py
# ============================================================================
# Onda (Ripple)
# ============================================================================
# Una perturbación en la superficie del estanque creada por una acción.
# Su radio y amplitud son funciones puras de la edad, y cada tipo de acción
# tiene su propio estilo visual. El render devuelve descriptores de forma
# (core/shapes.py), nunca dibuja directamente.
# ============================================================================

import math
import random
from collections import namedtuple

from .catalog import ActionKind, profile_for
from .shapes import Ring, Polyline, Segment, rgba

# Escala de diseño que convierte unidades de velocidad en píxeles
RADIUS_SCALE = 50.0

# Micro-ondas del comentario "Noise"
MICRO_COUNT = 15
MICRO_DIST_MIN, MICRO_DIST_MAX = 20.0, 80.0
MICRO_OFFSET_MS = 100.0
MICRO_RADIUS_MIN, MICRO_RADIUS_MAX = 30.0, 60.0
MICRO_LIFE_MS = 1000.0

# Paso angular de los anillos deformados del "Sad"
DROOP_STEP = 0.1

# Offset relativo a la onda madre
MicroRipple = namedtuple("MicroRipple", ["offset_x", "offset_y", "start_offset_ms", "radius"])

class Ripple:
    def __init__(self, position, kind, spawn_time, rng=None, radius_scale=RADIUS_SCALE):
        perfil = profile_for(kind)

        self.x, self.y = float(position[0]), float(position[1])
        self.kind = kind
        self.spawn_time = spawn_time
        self.age_ms = 0.0
        self.radius_scale = radius_scale

        # Copia de los parámetros del perfil. Una onda viva no cambia aunque
        # cambie el catálogo.
        self.max_radius = perfil.max_radius
        self.base_amplitude = perfil.base_amplitude
        self.damping = perfil.damping
        self.speed = perfil.speed
        self.lifespan_ms = perfil.lifespan_ms
        self.tint = perfil.tint

        self.micro_ripples = ()
        if kind is ActionKind.NOISE_COMMENT:
            self.micro_ripples = self._generar_micro_ondas(rng or random)

    def __repr__(self):
        return f"<Ripple {self.kind.name} ({self.x:.0f}, {self.y:.0f}) age={self.age_ms:.0f}ms>"

    @property
    def position(self):
        return (self.x, self.y)

    def _generar_micro_ondas(self, rng):
        micros = []
        for _ in range(MICRO_COUNT):
            angulo = rng.uniform(0.0, 2.0 * math.pi)
            dist = rng.uniform(MICRO_DIST_MIN, MICRO_DIST_MAX)
            micros.append(MicroRipple(
                offset_x=math.cos(angulo) * dist,
                offset_y=math.sin(angulo) * dist,
                start_offset_ms=rng.uniform(-MICRO_OFFSET_MS, MICRO_OFFSET_MS),
                radius=rng.uniform(MICRO_RADIUS_MIN, MICRO_RADIUS_MAX),
            ))
        return tuple(micros)

    # ------------------------------------------------------------------
    # Evolución temporal
    # ------------------------------------------------------------------

    def advance(self, now):
        """
        Actualiza la edad a partir del reloj.
        Returns:
            bool: True mientras la onda siga viva. Una vez que devuelve False
                  el llamador debe descartarla.
        """
        self.age_ms = max(0.0, now - self.spawn_time)
        return self.age_ms < self.lifespan_ms

    def progress(self):
        return self.age_ms / self.lifespan_ms

    def current_radius(self):
        return min(self.progress() * self.speed * self.radius_scale, self.max_radius)

    def current_amplitude(self):
        progreso = self.progress()
        radio = self.current_radius()

        # Decaimiento exponencial con el radio
        amp = self.base_amplitude * self.damping ** (radio / 10.0)

        # Caída oscilante del "Sad", acotada a +-10%
        if self.kind is ActionKind.NEGATIVE:
            amp *= 1.0 - 0.1 * math.sin(progreso * 2.0 * math.pi)

        # Desvanecimiento lineal del 70% a lo largo de la vida
        return max(0.0, amp * (1.0 - progreso * 0.7))

    def should_damp(self, other, now=None):
        """
        Solo el comentario "Silence" absorbe ondas cercanas. Es una relación
        de lectura: no modifica ninguna de las dos ondas.
        """
        if self.kind is not ActionKind.SILENCE_COMMENT:
            return False
        if other is self:
            return False

        distancia = math.hypot(self.x - other.x, self.y - other.y)
        return distancia < self.current_radius() * 1.5

    def micro_position(self, micro):
        return (self.x + micro.offset_x, self.y + micro.offset_y)

    # ------------------------------------------------------------------
    # Render (descriptores de forma)
    # ------------------------------------------------------------------

    def render(self, amplitude_scale=1.0):
        """
        Genera las formas de este frame.
        Args:
            amplitude_scale (float): Escala transitoria (ej. 0.3 si otra onda
                                     la está absorbiendo). No se guarda.
        Returns:
            list: Ring / Polyline / Segment. Vacía si no hay nada visible.
        """
        radio = self.current_radius()
        amplitud = self.current_amplitude() * amplitude_scale

        if radio <= 0 or amplitud <= 0:
            return []

        if self.kind is ActionKind.POSITIVE:
            return self._render_positive(radio, amplitud)
        elif self.kind is ActionKind.NEGATIVE:
            return self._render_negative(radio, amplitud)
        elif self.kind is ActionKind.NOISE_COMMENT:
            return self._render_noise(radio, amplitud)
        return self._render_silence(radio, amplitud)

    def _render_positive(self, radio, amplitud):
        # Círculos concéntricos limpios con el borde exterior brillante
        r, g, b, a = self.tint
        anillos = 5
        formas = []
        for i in range(anillos):
            radio_anillo = radio - i * 15
            if radio_anillo <= 0:
                continue
            alpha = a * amplitud * (1 - i / anillos) * 0.6
            if i == 0:
                formas.append(Ring(self.x, self.y, radio_anillo, rgba(r + 50, g + 50, b + 50, alpha * 1.2), 3.0))
            else:
                formas.append(Ring(self.x, self.y, radio_anillo, rgba(r, g, b, alpha), 2.0))
        return formas

    def _render_negative(self, radio, amplitud):
        # Anillos pesados con deformación "caída" por ángulo
        r, g, b, a = self.tint
        anillos = 4
        pasos = int(math.ceil(2.0 * math.pi / DROOP_STEP))
        formas = []
        for i in range(anillos):
            radio_anillo = radio - i * 20
            if radio_anillo <= 0:
                continue
            alpha = a * amplitud * (1 - i / anillos) * 0.5

            puntos = []
            for paso in range(pasos):
                angulo = paso * DROOP_STEP
                caida = math.sin(angulo * 3 + self.age_ms * 0.01) * 5
                puntos.append((
                    self.x + math.cos(angulo) * (radio_anillo + caida),
                    self.y + math.sin(angulo) * (radio_anillo + caida * 0.5),
                ))
            formas.append(Polyline(tuple(puntos), rgba(r, g, b, alpha), 3.0, True))
        return formas

    def _render_noise(self, radio, amplitud):
        r, g, b, a = self.tint
        formas = []

        # Onda principal, tenue
        for i in range(3):
            radio_anillo = radio - i * 12
            if radio_anillo <= 0:
                continue
            alpha = a * amplitud * (1 - i / 3) * 0.4
            formas.append(Ring(self.x, self.y, radio_anillo, rgba(r, g, b, alpha), 1.5))

        # Micro-ondas con su propio reloj
        for micro in self.micro_ripples:
            edad_local = self.age_ms - micro.start_offset_ms
            if edad_local < 0 or edad_local > MICRO_LIFE_MS:
                continue
            t = edad_local / MICRO_LIFE_MS
            mx, my = self.micro_position(micro)
            alpha = a * amplitud * (1 - t) * 0.3
            formas.append(Ring(mx, my, t * micro.radius, rgba(r + 50, g + 30, b - 20, alpha), 1.0))

        # Destellos de interferencia que giran
        color = rgba(r + 100, g + 80, b, amplitud * 30)
        dist = radio * 0.7
        for i in range(8):
            angulo = (self.age_ms * 0.02 + i * math.pi / 4) % (2.0 * math.pi)
            cos_a, sin_a = math.cos(angulo), math.sin(angulo)
            formas.append(Segment(
                self.x + cos_a * dist, self.y + sin_a * dist,
                self.x + cos_a * dist * 1.2, self.y + sin_a * dist * 1.2,
                color, 1.0,
            ))
        return formas

    def _render_silence(self, radio, amplitud):
        # Apenas visible. La absorción no se dibuja, la aplica RippleField.
        r, g, b, a = self.tint
        formas = []
        for i in range(2):
            radio_anillo = radio - i * 15
            if radio_anillo <= 0:
                continue
            alpha = a * amplitud * (1 - i / 2) * 0.2
            formas.append(Ring(self.x, self.y, radio_anillo, rgba(r, g, b, alpha), 1.0))
        return formas
