# core/context.py
# ============================================================================
# Contexto Central
# ============================================================================
# Clase que centraliza el estado de la aplicación y permite la comunicación
# entre módulos sin importaciones circulares ni variables globales.
# ============================================================================

from .config import load_config, pond_height
from .engine import PondEngine
from .profiler import Profiler

class Context:
    def __init__(self, config=None, rng=None):
        self.config = config or load_config()

        # Dimensiones de la ventana
        self.W = self.config["W"]
        self.H = self.config["H"]
        self.pond_h = pond_height(self.config)

        # Estado de ejecución
        self.running = True
        self.show_debug = self.config["show_debug"]
        self.fullscreen = self.config["fullscreen"]

        # Núcleo: ondas + actividad. Es el único estado mutable del estanque.
        self.engine = PondEngine(self.config, rng=rng)

        # Último frame calculado (lo leen render y audio)
        self.frame = None

        # Referencias a los subsistemas (se asignan en main.py)
        self.audio = None
        self.renderer = None
        self.ui = None
        self.time = None
        self.profiler = Profiler()
