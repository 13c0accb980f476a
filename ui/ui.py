# ui/ui.py
# ============================================================================
# Interfaz de Usuario
# ============================================================================
# Botones de acción, atajos de teclado, overlay de debug e indicador de
# cuadrante. Convierte eventos de pygame en ActionKind; quien decide si la
# onda aparece es el motor (core/engine.py).
# ============================================================================

import pygame
from OpenGL.GL import *

from core.activity import Phase
from core.catalog import BUTTON_ORDER, profile_for
from render.geometry import stroke_segments
from .layout import ButtonPanel, meter_bar_width
from .quadrant import QuadrantTracker

# Colores de UI en floats 0.0-1.0 (formato del batch 2D)
PANEL_BG = (12 / 255, 14 / 255, 20 / 255, 1.0)
BUTTON_BG = (30 / 255, 30 / 255, 40 / 255, 1.0)
BUTTON_BG_PRESSED = (40 / 255, 30 / 255, 40 / 255, 1.0)
BUTTON_BORDER = (100 / 255, 100 / 255, 120 / 255, 1.0)
TEXT_COLOR = (200 / 255, 200 / 255, 220 / 255)

METER_COLORS = {
    Phase.CALM: (100 / 255, 200 / 255, 1.0, 1.0),
    Phase.ACTIVE: (1.0, 200 / 255, 100 / 255, 1.0),
    Phase.OVERLOAD: (150 / 255, 50 / 255, 50 / 255, 1.0),
    Phase.RECOVER: (150 / 255, 50 / 255, 50 / 255, 1.0),
}

class TextureCache:
    """
    Gestiona la creación y caché de texturas de texto.
    Evita recrear texturas idénticas en cada frame.
    """
    def __init__(self):
        self.cache = {} # Clave: (texto, tamaño, color) -> Valor: (tex_id, w, h)
        self.font_cache = {} # Clave: tamaño -> objeto Font

    def get_font(self, size):
        if size not in self.font_cache:
            self.font_cache[size] = pygame.font.SysFont("Segoe UI", size, bold=True)
        return self.font_cache[size]

    def get_texture(self, text, size, color):
        # Normalizar color a tupla de enteros 0-255 para clave de caché
        color_key = (int(color[0]*255), int(color[1]*255), int(color[2]*255))
        key = (text, size, color_key)

        if key not in self.cache:
            surf = self.get_font(size).render(text, True, color_key)
            w, h = surf.get_size()
            data = pygame.image.tobytes(surf, "RGBA", False)

            tex_id = glGenTextures(1)
            glBindTexture(GL_TEXTURE_2D, tex_id)
            glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
            glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)
            glPixelStorei(GL_UNPACK_ALIGNMENT, 1)
            glTexImage2D(GL_TEXTURE_2D, 0, GL_RGBA, w, h, 0, GL_RGBA, GL_UNSIGNED_BYTE, data)

            self.cache[key] = (tex_id, w, h)

        return self.cache[key]

    def cleanup(self):
        if self.cache:
            glDeleteTextures(len(self.cache), [tex_id for tex_id, _, _ in self.cache.values()])
        self.cache = {}

class UIManager:
    def __init__(self, ctx):
        self.ctx = ctx
        self.panel = ButtonPanel(ctx.config)
        self.quadrant = QuadrantTracker(ctx.config["quadrant_smoothing"])

        # Comparte el batch del renderizador para respetar el orden de capas
        self.batch = ctx.renderer.batch
        self.tex_cache = TextureCache()

        self.teclas_accion = {
            pygame.K_1: BUTTON_ORDER[0],
            pygame.K_2: BUTTON_ORDER[1],
            pygame.K_3: BUTTON_ORDER[2],
            pygame.K_4: BUTTON_ORDER[3],
        }

        print("UIManager: Panel de botones inicializado.")

    # ------------------------------------------------------------------
    # Eventos
    # ------------------------------------------------------------------

    def to_canvas(self, mx, my):
        """Coordenadas de ventana -> coordenadas del lienzo (la ventana puede escalar)."""
        surface = pygame.display.get_surface()
        if surface is None:
            return mx, my
        ww, wh = surface.get_size()
        if ww == 0 or wh == 0:
            return mx, my
        return mx * self.ctx.W / ww, my * self.ctx.H / wh

    def procesar_evento(self, evt, now):
        """
        Returns:
            ActionKind si el evento es una acción del público, si no None.
        """
        if evt.type == pygame.MOUSEBUTTONDOWN and evt.button == 1:
            x, y = self.to_canvas(*evt.pos)
            kind = self.panel.hit_test(x, y)
            if kind is not None:
                self.panel.press(kind, now)
            return kind

        if evt.type == pygame.KEYDOWN:
            if evt.key in self.teclas_accion:
                kind = self.teclas_accion[evt.key]
                self.panel.press(kind, now)
                return kind
            elif evt.key == pygame.K_d:
                self.ctx.show_debug = not self.ctx.show_debug
            elif evt.key == pygame.K_f:
                self._alternar_pantalla_completa()
            elif evt.key == pygame.K_ESCAPE:
                self.ctx.running = False
        return None

    def registrar_accion(self, kind):
        """La acción se aceptó: mueve el indicador de cuadrante."""
        self.quadrant.update(kind)

    def _alternar_pantalla_completa(self):
        try:
            pygame.display.toggle_fullscreen()
            self.ctx.fullscreen = not self.ctx.fullscreen
        except pygame.error as e:
            print(f"⚠️ No se pudo cambiar a pantalla completa: {e}")

    # ------------------------------------------------------------------
    # Render
    # ------------------------------------------------------------------

    def render(self, frame, now):
        self._render_panel(now)
        if self.ctx.show_debug:
            self._render_debug(frame)
            self._render_cuadrante()

    def _texto(self, texto, x, y, size, color=TEXT_COLOR, centrado=False):
        tex_id, tw, th = self.tex_cache.get_texture(texto, size, color)
        if centrado:
            x -= tw / 2
        self.batch.draw_texture_rect(tex_id, x, y, tw, th, (1.0, 1.0, 1.0, 1.0))

    def _borde(self, x, y, w, h, grosor, color):
        self.batch.add_rect(x, y, w, grosor, color)
        self.batch.add_rect(x, y + h - grosor, w, grosor, color)
        self.batch.add_rect(x, y, grosor, h, color)
        self.batch.add_rect(x + w - grosor, y, grosor, h, color)

    def _render_panel(self, now):
        W, pond_h = self.ctx.W, self.ctx.pond_h
        self.batch.add_rect(0, pond_h, W, self.ctx.H - pond_h, PANEL_BG)

        for boton in self.panel.buttons:
            kind = boton["kind"]
            x, y, w, h = boton["rect"]
            pulsado = self.panel.is_pressed(kind, now)
            if pulsado:
                y += 5

            self.batch.add_rect(x, y, w, h, BUTTON_BG_PRESSED if pulsado else BUTTON_BG)
            self._borde(x, y, w, h, 2, BUTTON_BORDER)

            # Muestra del color de la onda (en lugar de un icono)
            perfil = profile_for(kind)
            r, g, b, _ = perfil.tint
            lado = min(w, h) * 0.3
            self.batch.add_rect(x + (w - lado) / 2, y + h * 0.2, lado, lado, (r / 255, g / 255, b / 255, 1.0))

            self._texto(perfil.label, x + w / 2, y + h - 38, 16, centrado=True)

    def _render_debug(self, frame):
        ancho, alto = 300, 20
        x, y = self.ctx.W - ancho - 30, 30

        self.batch.add_rect(x, y, ancho, alto, (20 / 255, 20 / 255, 30 / 255, 1.0))
        self.batch.add_rect(x, y, meter_bar_width(frame.meter, ancho), alto, METER_COLORS[frame.phase])

        self._texto(f"Activity: {frame.meter:.2f} [{frame.phase.value}]", x, y - 24, 14)
        fps = self.ctx.time.get_fps() if self.ctx.time else 0.0
        self._texto(f"Ripples: {frame.ripple_count} (absorbidas {frame.damped_count})  FPS: {fps:.0f}", x, y + alto + 6, 14)

    def _render_cuadrante(self):
        size = 120
        cx = self.ctx.W - size / 2 - 20
        cy = self.ctx.pond_h + self.ctx.config["UI_PANEL_H"] / 2
        medio = size / 2

        self.batch.add_rect(cx - medio, cy - medio, size, size, (20 / 255, 20 / 255, 30 / 255, 200 / 255))
        self._borde(cx - medio, cy - medio, size, size, 2, BUTTON_BORDER)

        # Ejes: horizontal Happy/Sad, vertical Noise/Silence
        eje = (80, 80, 100, 255)
        self.batch.add_vertices(stroke_segments(
            [(cx - medio, cy), (cx, cy - medio)],
            [(cx + medio, cy), (cx, cy + medio)],
            1.0, eje,
        ))

        dx, dy = self.quadrant.indicator_offset(size)
        self.batch.add_vertices(stroke_segments([(cx, cy)], [(cx + dx, cy + dy)], 1.0, (100, 200, 255, 100)))
        self.batch.add_rect(cx + dx - 4, cy + dy - 4, 8, 8, (100 / 255, 200 / 255, 1.0, 1.0))

        self._texto("Happy", cx + medio - 15, cy - 18, 11, centrado=True)
        self._texto("Sad", cx - medio + 15, cy - 18, 11, centrado=True)
        self._texto("Noise", cx - medio + 22, cy - medio + 4, 11, centrado=True)
        self._texto("Silence", cx - medio + 26, cy + medio - 18, 11, centrado=True)

    def cleanup(self):
        self.tex_cache.cleanup()
