#main.py

import pygame
import cProfile
import pstats
import constants as C
from world import World
from renderer import Renderer
from ui import draw_loading_screen, draw_hud
import logger

SPEED_KEYS = {pygame.K_0: 0, pygame.K_1: 1, pygame.K_2: 2, pygame.K_3: 3}

def initialize_simulation():
    logger.log("Attempting to initialize Pygame...")
    pygame.init()
    logger.log("Pygame initialized successfully.")
    logger.log(f"Creating display surface with width: {C.SCREEN_WIDTH} and height: {C.SCREEN_HEIGHT}")
    screen = pygame.display.set_mode((C.SCREEN_WIDTH, C.SCREEN_HEIGHT))
    pygame.display.set_caption("Tile Garden")
    font = pygame.font.Font(None, C.UI_FONT_SIZE)
    logger.log("Display surface and font created.")
    return screen, font

def handle_event(event, world):
    """Applies one pygame event to the world. Returns False when the window should close."""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.MOUSEBUTTONDOWN:
        tile_x, tile_y = world.screen_to_world(*event.pos)
        if event.button == 1:
            # Clicks snap to the surface row of the column first.
            if not world.plant_seed(tile_x, world.ground_level - 1):
                world.plant_seed(tile_x, tile_y)
        elif event.button == 3: world.focus_plant_at(tile_x, tile_y)
    if event.type == pygame.MOUSEWHEEL:
        world.zoom_camera(event.y * C.CAMERA_ZOOM_STEP)
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_SPACE: world.time_manager.toggle_pause()
        if event.key in SPEED_KEYS: world.time_manager.set_speed(SPEED_KEYS[event.key])
        if event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS): world.zoom_camera(C.CAMERA_ZOOM_STEP)
        if event.key in (pygame.K_MINUS, pygame.K_KP_MINUS): world.zoom_camera(-C.CAMERA_ZOOM_STEP)
        if event.key == pygame.K_HOME: world.reset_camera()
        if event.key == pygame.K_LEFTBRACKET: world.branch_growth_rate -= C.BRANCH_GROWTH_RATE_STEP
        if event.key == pygame.K_RIGHTBRACKET: world.branch_growth_rate += C.BRANCH_GROWTH_RATE_STEP
    return True

def pan_camera(world, real_delta_ms):
    keys = pygame.key.get_pressed()
    step = C.CAMERA_SPEED * (real_delta_ms / 1000.0) / world.camera.zoom
    if keys[pygame.K_LEFT] or keys[pygame.K_a]: world.move_camera(-step, 0)
    if keys[pygame.K_RIGHT] or keys[pygame.K_d]: world.move_camera(step, 0)
    if keys[pygame.K_UP] or keys[pygame.K_w]: world.move_camera(0, -step)
    if keys[pygame.K_DOWN] or keys[pygame.K_s]: world.move_camera(0, step)

def run_simulation():
    screen, font = initialize_simulation()
    clock = pygame.time.Clock()
    draw_loading_screen(screen, font, 0, 1)
    world = World()
    logger.set_time_manager(world.time_manager)
    draw_loading_screen(screen, font, 1, 1)
    renderer = Renderer(screen, font)

    logger.log("Starting main simulation loop...")
    logger.log("CONTROLS: [Arrows/WASD] Pan, [+/-/Wheel] Zoom, [Home] Reset Camera, [SPACE] Pause, [0-3] Speed, "
               "[ / ] Branch Growth Rate, [Left Click] Plant Seed, [Right Click] Focus Plant.")

    running = True
    while running:
        # --- Get Real Time ---
        # Capped to prevent a "spiral of death" if a frame takes too long.
        real_delta_ms = min(clock.tick(C.CLOCK_TICK_RATE), C.MAX_REAL_DELTA_MS)

        for event in pygame.event.get():
            if not handle_event(event, world):
                running = False

        pan_camera(world, real_delta_ms)

        # --- Simulation Logic (The "Update" part) ---
        scaled_delta_ms = world.time_manager.get_scaled_delta_time(real_delta_ms)
        if scaled_delta_ms > 0:
            world.update(scaled_delta_ms)

        # --- Drawing (The "Render" part) ---
        renderer.draw(world)
        draw_hud(screen, font, world)
        pygame.display.flip()

    logger.log("Main simulation loop ended.")
    world.graphing_manager.generate_and_save_graph()

def shutdown_simulation():
    logger.log("Quitting Pygame...")
    pygame.quit()
    logger.log("Simulation ended cleanly.")

def main():
    logger.log("--- Simulation Start ---")
    run_simulation()
    shutdown_simulation()
    logger.log("--- Simulation Exit ---")

if __name__ == '__main__':
    profiler = cProfile.Profile()
    try:
        profiler.run('main()')
    except SystemExit:
        # This allows the simulation to exit cleanly without a profiler error
        pass
    finally:
        print("\n\n--- PROFILER REPORT ---")
        stats = pstats.Stats(profiler)
        # Sort the stats by the cumulative time spent in each function
        stats.sort_stats(pstats.SortKey.CUMULATIVE)
        stats.print_stats(C.PROFILER_PRINT_LINE_COUNT)
