#ui.py

import pygame
import constants as C

def draw_loading_screen(screen, font, progress, total, message="Generating World..."):
    """Draws a progress bar and loading text."""
    screen.fill(C.COLOR_BLACK)

    text_surface = font.render(message, True, C.COLOR_WHITE)
    text_rect = text_surface.get_rect(center=(C.SCREEN_WIDTH / 2, C.SCREEN_HEIGHT / 2 - C.UI_LOADING_TEXT_OFFSET_Y))
    screen.blit(text_surface, text_rect)

    bar_x = (C.SCREEN_WIDTH - C.UI_LOADING_BAR_WIDTH) / 2
    bar_y = (C.SCREEN_HEIGHT - C.UI_LOADING_BAR_HEIGHT) / 2
    progress_ratio = progress / total if total > 0 else 1.0
    current_bar_width = C.UI_LOADING_BAR_WIDTH * progress_ratio

    pygame.draw.rect(screen, C.COLOR_LOADING_BAR_BG, (bar_x, bar_y, C.UI_LOADING_BAR_WIDTH, C.UI_LOADING_BAR_HEIGHT))
    pygame.draw.rect(screen, C.COLOR_LOADING_BAR_FG, (bar_x, bar_y, current_bar_width, C.UI_LOADING_BAR_HEIGHT))

    pygame.display.flip()

def get_hud_lines(world):
    """The text lines shown in the top-left corner."""
    lines = [
        world.time_manager.get_display_string(),
        f"Plants: {len(world.plant_manager)} | Branch growth rate: {world.branch_growth_rate:.1f}",
    ]
    if world.debug_focused_plant_id is not None:
        plant = world.plant_manager.find_by_id(world.debug_focused_plant_id)
        if plant is not None:
            lines.append(f"Focused #{plant.id}: {C.STAGE_NAMES[plant.stage]}, health {plant.health:.0f}, "
                         f"height {plant.height}, roots {plant.root_depth} deep, {len(plant.leaves)} leaves")
    return lines

def draw_hud(screen, font, world):
    y = C.UI_TIME_DISPLAY_POS_Y
    for line in get_hud_lines(world):
        text_surface = font.render(line, True, C.COLOR_WHITE)
        screen.blit(text_surface, (C.UI_TIME_DISPLAY_POS_X, y))
        y += C.UI_LINE_SPACING
