# main.py
# ============================================================================
# Punto de Entrada Principal
# ============================================================================
# Orquesta los módulos (Core, Audio, Render, UI) y ejecuta el loop principal.
# Orden de cada frame:
#   motor (actividad + ondas) -> audio -> eventos -> render -> UI -> apagón
# ============================================================================

import argparse
import time

import pygame
from pygame.locals import DOUBLEBUF, OPENGL, RESIZABLE, FULLSCREEN, VIDEORESIZE, QUIT
from OpenGL.GL import glClear, glClearColor, GL_COLOR_BUFFER_BIT

# Importar módulos propios
from core.config import PRESETS, load_config
from core.context import Context
from core.time import TimeManager
from audio.engine import AudioEngine
from render.renderer import PondRenderer
from ui.ui import UIManager

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Ondas Digitales: estanque interactivo")
    parser.add_argument("--preset", choices=sorted(PRESETS), default="instalacion",
                        help="Preset de configuración")
    parser.add_argument("--windowed", action="store_true", help="Forzar modo ventana")
    parser.add_argument("--debug", action="store_true", help="Mostrar overlay de debug al arrancar")
    return parser.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)

    overrides = {}
    if args.windowed:
        overrides["fullscreen"] = False
    if args.debug:
        overrides["show_debug"] = True
    config = load_config(args.preset, **overrides)

    # Inicialización básica
    pygame.init()

    # Solicitar un contexto OpenGL 3.3 Core Profile
    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_PROFILE_MASK, pygame.GL_CONTEXT_PROFILE_CORE)
    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MAJOR_VERSION, 3)
    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MINOR_VERSION, 3)

    # Crear contexto central
    ctx = Context(config)

    # Configurar ventana
    flags = DOUBLEBUF | OPENGL | (FULLSCREEN if ctx.fullscreen else RESIZABLE)
    pygame.display.set_caption("Ondas Digitales")
    pygame.display.set_mode((ctx.W, ctx.H), flags)
    glClearColor(0.0, 0.0, 0.0, 1.0)

    # Inicializar subsistemas inyectando el contexto.
    # La UI comparte el batch del renderizador, así que va después.
    ctx.time = TimeManager()
    ctx.renderer = PondRenderer(ctx)
    ctx.ui = UIManager(ctx)
    ctx.audio = AudioEngine(ctx)

    # Iniciar motor de audio
    ctx.audio.start()
    print(f"🌊 Estanque listo: {ctx.W}x{ctx.H} (preset '{args.preset}')")

    # Variables para debug
    ultimo_print_debug = time.time()

    try:
        # Loop Principal
        while ctx.running:
            # 1. Gestión de Tiempo
            ctx.time.tick(ctx.config["FPS"])
            now = ctx.time.now()

            # 2. Núcleo: actividad, ondas y modulación del fondo
            with ctx.profiler.region("motor"):
                ctx.frame = ctx.engine.tick(now)
            ctx.audio.update(ctx.frame)

            # 3. Procesamiento de Eventos
            for evt in pygame.event.get():
                if evt.type == QUIT:
                    ctx.running = False
                elif evt.type == VIDEORESIZE:
                    pygame.display.set_mode((evt.w, evt.h), DOUBLEBUF | OPENGL | RESIZABLE)
                    ctx.renderer.resize(evt.w, evt.h)
                else:
                    kind = ctx.ui.procesar_evento(evt, now)
                    if kind is not None and ctx.engine.trigger_action(kind, now) is not None:
                        ctx.audio.play_action(kind)
                        ctx.ui.registrar_accion(kind)

            # 4. Renderizado
            glClear(GL_COLOR_BUFFER_BIT)

            with ctx.profiler.region("render"):
                ctx.renderer.render_scene(ctx.frame)
                ctx.ui.render(ctx.frame, now)
                ctx.renderer.render_blackout(ctx.frame)
                ctx.renderer.flush()

            pygame.display.flip()

            # 5. Profiling
            ahora = time.time()
            if ahora - ultimo_print_debug >= 1.0:
                fps = ctx.time.get_fps()
                estado = ctx.engine.activity.snapshot()
                print(f"FPS: {fps:<5.1f} | {ctx.profiler.report()} | "
                      f"Actividad: {estado['meter']:.2f} [{estado['phase']}] | "
                      f"Apagón: {estado['blackout_alpha']:.0f} | Ondas: {ctx.frame.ripple_count}")
                ultimo_print_debug = ahora
    finally:
        # Limpieza
        ctx.audio.stop()
        ctx.ui.cleanup()
        ctx.renderer.cleanup()
        pygame.quit()
        print("🛑 Sistema finalizado.")

if __name__ == "__main__":
    main()
