# core/profiler.py
# ============================================================================
# Sistema de Medición de Rendimiento
# ============================================================================
# Mide bloques de código con un gestor de contexto. Guarda la última medición
# y una media móvil exponencial para que el informe por consola no salte.
# ============================================================================

import time

class Profiler:
    def __init__(self, smoothing=0.1):
        self.smoothing = smoothing
        self.records = {}   # Última medición (ms)
        self.averages = {}  # Media suavizada (ms)

    def region(self, name):
        return ProfileRegion(self, name)

    def record(self, name, duration_ms):
        self.records[name] = duration_ms
        previo = self.averages.get(name)
        if previo is None:
            self.averages[name] = duration_ms
        else:
            self.averages[name] = previo + (duration_ms - previo) * self.smoothing

    def report(self):
        """Línea compacta para el informe periódico."""
        return " | ".join(f"{nombre}: {ms:<5.2f}ms" for nombre, ms in sorted(self.averages.items()))

class ProfileRegion:
    def __init__(self, profiler, name):
        self.profiler = profiler
        self.name = name

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, type, value, traceback):
        duration_ms = (time.perf_counter() - self.start_time) * 1000
        self.profiler.record(self.name, duration_ms)
