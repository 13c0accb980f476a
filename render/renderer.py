# render/renderer.py
# ============================================================================
# Renderizador del Estanque (OpenGL Core Profile)
# ============================================================================
# Convierte un Frame del motor (formas + modulación del fondo) en geometría
# para la GPU. El orden de capas es:
#   1. Degradado base   2. Grano   3. Viñeta   4. Parpadeo   5. Ondas
#   (UI y overlay de debug)         6. Apagón sobre el estanque
# ============================================================================

from OpenGL.GL import *

from .batch import Batch2D
from .background import GrainField, gradient_vertices, vignette_vertices
from .geometry import shapes_to_vertices

class PondRenderer:
    def __init__(self, ctx):
        self.ctx = ctx
        self.batch = Batch2D(ctx)

        # --- Grano animado ---
        # Una textura pequeña (1 texel = 4x4 px) que se estira sobre el estanque.
        self.grain = GrainField(ctx.W, ctx.pond_h)
        self.grain_tex = glGenTextures(1)
        glBindTexture(GL_TEXTURE_2D, self.grain_tex)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_NEAREST)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_NEAREST)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_S, GL_CLAMP_TO_EDGE)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_T, GL_CLAMP_TO_EDGE)
        glBindTexture(GL_TEXTURE_2D, 0)

        # El degradado no cambia: se calcula una vez
        self.gradient = gradient_vertices(ctx.W, ctx.pond_h)

    def resize(self, w, h):
        """
        La escena se dibuja siempre en coordenadas del lienzo (config W x H);
        al cambiar la ventana solo cambia el viewport.
        """
        glViewport(0, 0, w, h)

    def _upload_grain(self, turbulence):
        img = self.grain.image(self.ctx.time.frame_count, turbulence)
        glBindTexture(GL_TEXTURE_2D, self.grain_tex)
        glPixelStorei(GL_UNPACK_ALIGNMENT, 1)
        glTexImage2D(GL_TEXTURE_2D, 0, GL_RGBA, self.grain.cols, self.grain.rows, 0,
                     GL_RGBA, GL_UNSIGNED_BYTE, img)
        glBindTexture(GL_TEXTURE_2D, 0)

    def render_scene(self, frame):
        """Fondo modulado + ondas."""
        W, H = self.ctx.W, self.ctx.pond_h

        # 1. Base
        self.batch.add_vertices(self.gradient)

        # 2. Grano (crece con la turbulencia)
        with self.ctx.profiler.region("grano"):
            self._upload_grain(frame.turbulence)
        self.batch.draw_texture_rect(self.grain_tex, 0, 0, W, H)

        # 3. Viñeta
        self.batch.add_vertices(vignette_vertices(W, H, frame.vignette))

        # 4. Parpadeo
        if frame.flicker > 0:
            self.batch.add_rect(0, 0, W, H, (1.0, 1.0, 1.0, frame.flicker))

        # 5. Ondas
        with self.ctx.profiler.region("teselado"):
            self.batch.add_vertices(shapes_to_vertices(frame.shapes))

    def render_blackout(self, frame):
        """El apagón cubre solo el estanque: los botones siguen visibles."""
        if frame.blackout_alpha > 0:
            self.batch.add_rect(0, 0, self.ctx.W, self.ctx.pond_h, (0.0, 0.0, 0.0, frame.blackout_alpha / 255.0))

    def flush(self):
        self.batch.render()

    def cleanup(self):
        glDeleteTextures(1, [self.grain_tex])
        self.batch.cleanup()
