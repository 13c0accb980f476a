# core/time.py
# ============================================================================
# Sistema de Tiempo
# ============================================================================
# Reloj de frames. El núcleo trabaja con 'now' en milisegundos; este módulo
# es el único que lo lee del sistema (pygame.time).
# ============================================================================

import pygame

class TimeManager:
    def __init__(self):
        self.clock = pygame.time.Clock()
        self.delta_time = 0.0
        self.frame_count = 0
        self.start_time = pygame.time.get_ticks()

    def tick(self, fps):
        """
        Limita los FPS y cuenta el frame.
        Args:
            fps (int): Frames por segundo objetivo.
        Returns:
            float: Delta time en segundos.
        """
        self.delta_time = self.clock.tick(fps) / 1000.0
        self.frame_count += 1
        return self.delta_time

    def get_fps(self):
        """Devuelve los FPS actuales."""
        return self.clock.get_fps()

    def now(self):
        """Milisegundos desde que arrancó la instalación."""
        return float(pygame.time.get_ticks() - self.start_time)
