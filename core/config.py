# core/config.py
# ============================================================================
# Configuración
# ============================================================================
# Presets en forma de diccionario. El preset de instalación reproduce los
# valores de la pieza expuesta; el de ensayo acorta el ciclo de apagón para
# probar en sala sin esperar.
# ============================================================================

PRESET_INSTALACION = {
    # Lienzo
    "W": 1920, "H": 1080,
    "UI_PANEL_H": 200,
    "FPS": 60,
    "spawn_margin": 100,
    # Ondas
    "radius_scale": 50.0,
    "damped_scale": 0.3,
    # Máquina de estados
    "overload_threshold": 1.0,
    "meter_ceiling": 1.5,
    "decay_rate": 0.001,
    "active_threshold": 0.3,
    "calm_threshold": 0.2,
    "fade_out_ms": 2000.0,
    "overload_ms": 7000.0,
    "recover_ms": 3000.0,
    "recover_meter": 0.3,
    # Audio
    "master_volume": 0.5,
    "samplerate": 48000,
    "blocksize": 512,
    # Interfaz
    "button_w": 200, "button_h": 150, "button_spacing": 30,
    "press_ms": 200,
    "quadrant_smoothing": 0.15,
    "show_debug": False,
    "fullscreen": True,
}

PRESET_ENSAYO = {
    **PRESET_INSTALACION,
    "W": 1280, "H": 720,
    "UI_PANEL_H": 160,
    "button_w": 160, "button_h": 120, "button_spacing": 24,
    "spawn_margin": 60,
    "decay_rate": 0.003,
    "fade_out_ms": 1000.0,
    "overload_ms": 3000.0,
    "recover_ms": 1500.0,
    "show_debug": True,
    "fullscreen": False,
}

PRESETS = {
    "instalacion": PRESET_INSTALACION,
    "ensayo": PRESET_ENSAYO,
}

# Claves que se pasan tal cual al constructor de ActivityState
ACTIVITY_KEYS = (
    "overload_threshold", "meter_ceiling", "decay_rate",
    "active_threshold", "calm_threshold",
    "fade_out_ms", "overload_ms", "recover_ms", "recover_meter",
)

def load_config(preset="instalacion", **overrides):
    """
    Devuelve una copia del preset con los cambios aplicados.
    Raises:
        ValueError: Preset desconocido o clave que no existe en el preset.
    """
    if preset not in PRESETS:
        raise ValueError(f"Preset desconocido: {preset!r} (opciones: {', '.join(PRESETS)})")

    config = dict(PRESETS[preset])
    for clave, valor in overrides.items():
        if clave not in config:
            raise ValueError(f"Clave de configuración desconocida: {clave!r}")
        config[clave] = valor

    if config["UI_PANEL_H"] >= config["H"]:
        raise ValueError("El panel de botones no puede ocupar toda la pantalla")
    return config

def pond_height(config):
    """Alto del estanque: la pantalla menos el panel de botones."""
    return config["H"] - config["UI_PANEL_H"]

def activity_kwargs(config):
    return {clave: config[clave] for clave in ACTIVITY_KEYS}
