# render/shaders.py
# ============================================================================
# Gestión de Shaders
# ============================================================================
# Carga, compila y enlaza los shaders de GLSL para crear un programa de GPU.
# ============================================================================

import os

from OpenGL.GL import *
from core.recursos import resource_path

def _compilar(tipo, fuente, nombre):
    shader = glCreateShader(tipo)
    glShaderSource(shader, fuente)
    glCompileShader(shader)
    # Comprobar errores de compilación
    if not glGetShaderiv(shader, GL_COMPILE_STATUS):
        error = glGetShaderInfoLog(shader).decode()
        print(f"Error de compilación en {nombre}:\n{error}")
        glDeleteShader(shader)
        return None
    return shader

def load_shader_program(vertex_path, fragment_path):
    """
    Carga los shaders, los compila y los enlaza en un programa.
    Args:
        vertex_path (str): Ruta relativa al proyecto del vertex shader.
        fragment_path (str): Ruta relativa al proyecto del fragment shader.
    Returns:
        int: El ID del programa enlazado, o None si algo falló.
    """
    vertex_path = resource_path(vertex_path)
    fragment_path = resource_path(fragment_path)

    # --- Cargar código fuente de los shaders ---
    try:
        with open(vertex_path, 'r') as f:
            vertex_src = f.read()
        with open(fragment_path, 'r') as f:
            fragment_src = f.read()
    except FileNotFoundError as e:
        print(f"Error: No se pudo encontrar el archivo de shader: {e}")
        return None

    vertex_shader = _compilar(GL_VERTEX_SHADER, vertex_src, "Vertex Shader")
    if vertex_shader is None:
        return None
    fragment_shader = _compilar(GL_FRAGMENT_SHADER, fragment_src, "Fragment Shader")
    if fragment_shader is None:
        glDeleteShader(vertex_shader)
        return None

    # --- Enlazar Shaders en un Programa ---
    shader_program = glCreateProgram()
    glAttachShader(shader_program, vertex_shader)
    glAttachShader(shader_program, fragment_shader)
    glLinkProgram(shader_program)

    # Una vez enlazados, los shaders individuales ya no son necesarios.
    glDeleteShader(vertex_shader)
    glDeleteShader(fragment_shader)

    if not glGetProgramiv(shader_program, GL_LINK_STATUS):
        error = glGetProgramInfoLog(shader_program).decode()
        print(f"Error de enlazado del programa de shaders:\n{error}")
        glDeleteProgram(shader_program)
        return None

    print(f"✅ Shaders listos: {os.path.basename(vertex_path)} + {os.path.basename(fragment_path)}")
    return shader_program
