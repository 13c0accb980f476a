# render/batch.py
# ============================================================================
# Batch 2D (Modern OpenGL)
# ============================================================================
# Acumula la geometría 2D de un frame (trazos, rectángulos, texto, grano) y
# la dibuja respetando el orden en que se añadió. Un solo programa de shaders
# y un solo VAO/VBO para todo.
# ============================================================================

from OpenGL.GL import *
import numpy as np
import ctypes
import pyrr

from . import shaders
from .geometry import FLOATS_PER_VERTEX

class Batch2D:
    def __init__(self, ctx):
        self.ctx = ctx

        self.program = shaders.load_shader_program("render/pond.vert", "render/pond.frag")
        if not self.program:
            raise RuntimeError("Error crítico: No se pudieron cargar los shaders 2D.")

        self.u_proj_loc = glGetUniformLocation(self.program, "u_proj")
        self.u_texture_loc = glGetUniformLocation(self.program, "u_texture")
        self.u_use_texture_loc = glGetUniformLocation(self.program, "u_use_texture")

        # --- Configuración de Buffers (VAO/VBO) ---
        self.vao = glGenVertexArrays(1)
        glBindVertexArray(self.vao)

        self.vbo = glGenBuffers(1)
        glBindBuffer(GL_ARRAY_BUFFER, self.vbo)

        # Formato de vértice: [x, y, r, g, b, a, u, v]
        stride = FLOATS_PER_VERTEX * 4

        # Atributo 0: Posición (vec2)
        glEnableVertexAttribArray(0)
        glVertexAttribPointer(0, 2, GL_FLOAT, GL_FALSE, stride, ctypes.c_void_p(0))
        # Atributo 1: Color (vec4)
        glEnableVertexAttribArray(1)
        glVertexAttribPointer(1, 4, GL_FLOAT, GL_FALSE, stride, ctypes.c_void_p(2 * 4))
        # Atributo 2: UV (vec2)
        glEnableVertexAttribArray(2)
        glVertexAttribPointer(2, 2, GL_FLOAT, GL_FALSE, stride, ctypes.c_void_p(6 * 4))

        glBindVertexArray(0)
        glBindBuffer(GL_ARRAY_BUFFER, 0)

        # Cola de comandos del frame: (texture_id o None, array de vértices)
        self.commands = []

    def _push(self, texture_id, vertices):
        if len(vertices) == 0:
            return
        # Geometría plana consecutiva se fusiona en una sola llamada
        if texture_id is None and self.commands and self.commands[-1][0] is None:
            self.commands[-1][1].append(vertices)
        else:
            self.commands.append((texture_id, [vertices]))

    def add_vertices(self, vertices):
        """Agrega triángulos ya teselados (ver render/geometry.py)."""
        self._push(None, np.asarray(vertices, dtype=np.float32))

    def add_rect(self, x, y, w, h, color):
        """Rectángulo plano. Color RGBA en floats 0.0-1.0."""
        self._push(None, _quad(x, y, w, h, color))

    def draw_texture_rect(self, texture_id, x, y, w, h, color=(1.0, 1.0, 1.0, 1.0)):
        """Rectángulo texturizado (texto, grano). La UV (0,0) es arriba-izquierda."""
        self._push(texture_id, _quad(x, y, w, h, color, textured=True))

    def render(self):
        """Dibuja todo lo acumulado en el frame y vacía la cola."""
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glDisable(GL_DEPTH_TEST)

        proj_matrix = pyrr.matrix44.create_orthogonal_projection(0, self.ctx.W, self.ctx.H, 0, -1, 1, dtype=np.float32)

        glUseProgram(self.program)
        glUniformMatrix4fv(self.u_proj_loc, 1, GL_FALSE, proj_matrix)
        glUniform1i(self.u_texture_loc, 0)
        glActiveTexture(GL_TEXTURE0)

        glBindVertexArray(self.vao)
        glBindBuffer(GL_ARRAY_BUFFER, self.vbo)

        for texture_id, partes in self.commands:
            data = partes[0] if len(partes) == 1 else np.concatenate(partes, axis=0)
            if texture_id is None:
                glUniform1i(self.u_use_texture_loc, 0)
            else:
                glUniform1i(self.u_use_texture_loc, 1)
                glBindTexture(GL_TEXTURE_2D, texture_id)
            glBufferData(GL_ARRAY_BUFFER, data.nbytes, data, GL_DYNAMIC_DRAW)
            glDrawArrays(GL_TRIANGLES, 0, len(data))

        # --- Limpieza del frame ---
        glBindVertexArray(0)
        glBindBuffer(GL_ARRAY_BUFFER, 0)
        self.commands = []

    def cleanup(self):
        """Libera los recursos de OpenGL."""
        glDeleteProgram(self.program)
        glDeleteVertexArrays(1, [self.vao])
        glDeleteBuffers(1, [self.vbo])

def _quad(x, y, w, h, color, textured=False):
    r, g, b, a = color
    u0, v0, u1, v1 = (0.0, 0.0, 1.0, 1.0) if textured else (0.0, 0.0, 0.0, 0.0)
    return np.array([
        [x,     y,     r, g, b, a, u0, v0],  # Arriba-Izquierda
        [x + w, y,     r, g, b, a, u1, v0],  # Arriba-Derecha
        [x,     y + h, r, g, b, a, u0, v1],  # Abajo-Izquierda

        [x + w, y,     r, g, b, a, u1, v0],  # Arriba-Derecha
        [x + w, y + h, r, g, b, a, u1, v1],  # Abajo-Derecha
        [x,     y + h, r, g, b, a, u0, v1],  # Abajo-Izquierda
    ], dtype=np.float32)
