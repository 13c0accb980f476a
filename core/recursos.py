# core/recursos.py
# ============================================================================
# Gestor de Recursos
# ============================================================================
# Resuelve rutas de archivos de datos (shaders) tanto en desarrollo como en
# un ejecutable empaquetado con PyInstaller.
# ============================================================================

import os
import sys

def resource_path(relative_path):
    """
    Devuelve la ruta absoluta de un recurso.
    PyInstaller descomprime los datos en sys._MEIPASS; fuera de él usamos la
    raíz del proyecto (la carpeta que contiene 'core', 'render', etc.).
    """
    base = getattr(sys, "_MEIPASS", None)
    if base is None:
        base = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(base, relative_path)
