import numpy as np
import pygame
import pytest

import constants as C
from main import handle_event
from renderer import Renderer, tile_color_array
from ui import get_hud_lines, draw_hud


@pytest.fixture
def screen():
    pygame.init()
    yield pygame.Surface((C.SCREEN_WIDTH, C.SCREEN_HEIGHT))
    pygame.quit()


def test_tile_colors() -> None:
    types = np.array([[C.TILE_AIR, C.TILE_DIRT, C.TILE_DIRT, C.TILE_WATER]], dtype=np.int8)
    moisture = np.array([[0.0, 0.0, 100.0, 100.0]])
    colors = tile_color_array(types, moisture, (1, 2, 3))

    assert colors.shape == (1, 4, 3)
    assert colors.dtype == np.uint8
    assert tuple(colors[0, 0]) == (1, 2, 3)
    assert tuple(colors[0, 1]) == C.COLOR_DIRT
    assert all(wet < dry for wet, dry in zip(colors[0, 2], colors[0, 1]) if dry > 0)
    assert tuple(colors[0, 3]) == C.COLOR_WATER


def test_renderer_draws_a_growing_garden(world, screen) -> None:
    y = world.ground_level - 1
    for x in (12, 18, 24):
        world.plant_seed(x, y)
    for _ in range(200):
        world.update(C.MAX_DELTA_MS)

    renderer = Renderer(screen, pygame.font.Font(None, C.UI_FONT_SIZE))
    renderer.draw(world)
    draw_hud(screen, renderer.font, world)


def test_hud_lines_show_focus(world) -> None:
    y = world.ground_level - 1
    world.plant_seed(6, y)
    assert len(get_hud_lines(world)) == 2
    world.focus_plant_at(6, y)
    lines = get_hud_lines(world)
    assert len(lines) == 3
    assert lines[2].startswith("Focused #")


def test_left_click_plants_and_right_click_focuses(world) -> None:
    y = world.ground_level - 1
    screen_x, screen_y = world.world_to_screen(10.5, y + 0.5)

    handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(screen_x, screen_y)), world)
    plant = world.plant_manager.find_at(10, y)
    assert plant is not None

    handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(screen_x, screen_y)), world)
    assert world.debug_focused_plant_id == plant.id


def test_left_click_in_the_sky_snaps_to_the_surface(world) -> None:
    screen_pos = world.world_to_screen(10.5, 2.5)

    handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=screen_pos), world)

    assert world.plant_manager.find_at(10, world.ground_level - 1) is not None
    assert len(world.plant_manager.plants) == 1


def test_left_click_falls_back_to_the_clicked_dirt(world) -> None:
    surface = world.ground_level - 1
    world.plant_seed(10, surface)
    screen_pos = world.world_to_screen(10.5, surface + 3.5)

    handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=screen_pos), world)

    assert world.plant_manager.find_at(10, surface + 3) is not None
    assert len(world.plant_manager.plants) == 2


def test_keys_drive_time_and_growth_rate(world) -> None:
    handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE), world)
    assert world.time_manager.is_paused
    handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_3), world)
    assert world.time_manager.current_multiplier == C.TIME_MULTIPLIERS[3]

    rate = world.branch_growth_rate
    handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RIGHTBRACKET), world)
    assert world.branch_growth_rate == pytest.approx(rate + C.BRANCH_GROWTH_RATE_STEP)


def test_quit_event_stops_the_loop(world) -> None:
    assert handle_event(pygame.event.Event(pygame.QUIT), world) is False
