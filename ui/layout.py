# ui/layout.py
# ============================================================================
# Panel de Botones
# ============================================================================
# Cuatro botones centrados en el panel inferior. Aquí solo vive la geometría,
# la detección de clics y el estado "pulsado"; el dibujo está en ui/ui.py.
#
# El estado pulsado es un vencimiento programado (pressed_until) que se
# consulta al dibujar, no un temporizador que dispara después.
# ============================================================================

from core.catalog import BUTTON_ORDER
from core.config import pond_height
from core.numeric import clamp

class ButtonPanel:
    def __init__(self, config):
        self.W = config["W"]
        self.pond_h = pond_height(config)
        self.panel_h = config["UI_PANEL_H"]
        self.button_w = config["button_w"]
        self.button_h = config["button_h"]
        self.spacing = config["button_spacing"]
        self.press_ms = config["press_ms"]

        ancho_total = len(BUTTON_ORDER) * self.button_w + (len(BUTTON_ORDER) - 1) * self.spacing
        inicio_x = (self.W - ancho_total) / 2
        y = self.pond_h + (self.panel_h - self.button_h) / 2

        self.buttons = []
        for i, kind in enumerate(BUTTON_ORDER):
            self.buttons.append({
                "kind": kind,
                "rect": (inicio_x + i * (self.button_w + self.spacing), y, self.button_w, self.button_h),
                "pressed_until": 0.0,
            })

    def button(self, kind):
        for boton in self.buttons:
            if boton["kind"] is kind:
                return boton
        raise ValueError(f"No hay botón para {kind!r}")

    def hit_test(self, x, y):
        """Devuelve el ActionKind del botón bajo (x, y) o None."""
        for boton in self.buttons:
            bx, by, bw, bh = boton["rect"]
            if bx <= x <= bx + bw and by <= y <= by + bh:
                return boton["kind"]
        return None

    def press(self, kind, now):
        self.button(kind)["pressed_until"] = now + self.press_ms

    def is_pressed(self, kind, now):
        return now < self.button(kind)["pressed_until"]

def meter_bar_width(meter, full_width):
    """Ancho de la barra del medidor. El medidor pasa de 1.0 durante OVERLOAD; la barra no."""
    return full_width * clamp(meter, 0.0, 1.0)
