# renderer.py

import math
import numpy as np
import pygame
import constants as C
from world import lerp_color
import logger as log

# Colour lookup indexed by tile type. Air is filled in with the sky colour each frame.
_TILE_COLOR_TABLE = np.zeros((max(C.TILE_TYPE_NAMES) + 1, 3), dtype=np.float64)
for _tile_type, _color in C.TILE_COLORS.items():
    _TILE_COLOR_TABLE[_tile_type] = _color

def tile_color_array(types, moisture, sky_color):
    """
    Returns an (h, w, 3) uint8 array of tile colours. Wet dirt is drawn darker
    than dry dirt; air takes the sky colour.
    """
    table = _TILE_COLOR_TABLE.copy()
    table[C.TILE_AIR] = sky_color
    colors = table[types]
    dirt = types == C.TILE_DIRT
    colors[dirt] *= (1.0 - 0.35 * (moisture[dirt] / C.RESOURCE_MAX))[:, np.newaxis]
    return colors.astype(np.uint8)

class Renderer:
    """Draws the world read-only: sky, tiles, plants, sun or moon, ground line and mini-map."""
    def __init__(self, screen, font):
        self.screen = screen
        self.font = font
        log.log("Renderer initialized.")

    def draw(self, world):
        self.screen.fill(world.sky_color)
        self.draw_celestial_body(world)
        self.draw_tiles(world)
        self.draw_ground_indicator(world)
        for plant in world.plant_manager:
            self.draw_plant(world, plant)
        self.draw_minimap(world)

    # --- Terrain ---
    def draw_tiles(self, world):
        camera = world.camera
        camera.sanitize()
        x0 = max(0, int(camera.x))
        y0 = max(0, int(camera.y))
        x1 = min(world.width, x0 + camera.visible_width() + 1)
        y1 = min(world.height, y0 + camera.visible_height() + 1)
        if x1 <= x0 or y1 <= y0:
            return

        grid = world.tile_grid
        colors = tile_color_array(grid.types[y0:y1, x0:x1], grid.moisture[y0:y1, x0:x1], world.sky_color)
        surface = pygame.surfarray.make_surface(colors.transpose(1, 0, 2))
        scale = C.TILE_SIZE * camera.zoom
        scaled_size = (int(math.ceil((x1 - x0) * scale)), int(math.ceil((y1 - y0) * scale)))
        scaled = pygame.transform.scale(surface, scaled_size)
        self.screen.blit(scaled, world.world_to_screen(x0, y0))

    def draw_ground_indicator(self, world):
        _, screen_y = world.world_to_screen(0, world.ground_level)
        overlay = pygame.Surface((C.SCREEN_WIDTH, 2), pygame.SRCALPHA)
        overlay.fill(C.COLOR_GROUND_INDICATOR)
        self.screen.blit(overlay, (0, screen_y))

    def draw_celestial_body(self, world):
        """Sun by day, moon by night, travelling left to right across the top of the screen."""
        hour = world.current_hour
        if world.time_manager.is_daytime():
            progress = (hour - C.DAYTIME_START_HOUR) / (C.DAYTIME_END_HOUR - C.DAYTIME_START_HOUR)
            color = C.COLOR_SUN
        else:
            night_length = C.HOURS_PER_DAY - (C.DAYTIME_END_HOUR - C.DAYTIME_START_HOUR)
            progress = ((hour - C.DAYTIME_END_HOUR) % C.HOURS_PER_DAY) / night_length
            color = C.COLOR_MOON
        x = progress * C.SCREEN_WIDTH
        arc_height = C.SCREEN_HEIGHT * 0.25
        y = C.CELESTIAL_BODY_RADIUS * 2 + arc_height * (1 - math.sin(progress * math.pi))
        pygame.draw.circle(self.screen, color, (int(x), int(y)), C.CELESTIAL_BODY_RADIUS)

    # --- Plants ---
    def _part_to_screen(self, world, plant, x, y):
        return world.world_to_screen(plant.x + x + 0.5, plant.y + y + 0.5)

    def _width(self, world, size):
        return max(1, int(world.camera.scale(size)))

    def draw_plant(self, world, plant):
        anchor = self._part_to_screen(world, plant, 0, 0)
        health_ratio = plant.health / C.PLANT_MAX_HEALTH

        # --- Roots, each drawn from the closest earlier root ---
        for index, root in enumerate(plant.roots):
            parent = None
            best = None
            for earlier in plant.roots[:index]:
                distance = math.hypot(earlier.x - root.x, earlier.y - root.y)
                if best is None or distance < best:
                    parent, best = earlier, distance
            start = self._part_to_screen(world, plant, parent.x, parent.y) if parent else anchor
            end = self._part_to_screen(world, plant, root.x, root.y)
            pygame.draw.line(self.screen, root.color, start, end, self._width(world, root.size))
            for zone in root.absorption:
                zone_pos = self._part_to_screen(world, plant, root.x + zone.x * 0.4, root.y + zone.y * 0.4)
                pygame.draw.line(self.screen, C.COLOR_PLANT_ABSORPTION_ZONE, end, zone_pos, 1)

        # --- Stem ---
        for index, segment in enumerate(plant.stem):
            start = self._part_to_screen(world, plant, segment.x, segment.y)
            if index + 1 < len(plant.stem):
                end_y = plant.stem[index + 1].y
            else:
                end_y = segment.y - 1
            end = self._part_to_screen(world, plant, segment.x, end_y)
            pygame.draw.line(self.screen, segment.color, start, end, self._width(world, segment.size))

        # --- Branches, sub-branches and tertiary branches ---
        for branch in plant.branches:
            self._draw_linear_part(world, plant, branch)
            for sub_branch in branch.sub_branches:
                self._draw_linear_part(world, plant, sub_branch)
                for tertiary in sub_branch.tertiary_branches:
                    self._draw_linear_part(world, plant, tertiary)

        for connector in plant.connectors:
            center = self._part_to_screen(world, plant, connector.x, connector.y)
            pygame.draw.circle(self.screen, connector.color, center, max(1, int(world.camera.scale(connector.radius))))

        for leaf in plant.leaves:
            self._draw_leaf(world, plant, leaf, health_ratio)

    def _draw_linear_part(self, world, plant, part):
        start = self._part_to_screen(world, plant, part.start_x, part.start_y)
        end = self._part_to_screen(world, plant, part.x, part.y)
        pygame.draw.line(self.screen, part.color, start, end, self._width(world, part.size))

    def _draw_leaf(self, world, plant, leaf, health_ratio):
        center = self._part_to_screen(world, plant, leaf.x, leaf.y)
        length = leaf.size * C.TILE_SIZE * 0.4 * world.camera.zoom
        width = length * (0.6 if leaf.leaf_type == C.LEAF_COTYLEDON else 0.4)
        if length < 1:
            return

        # Leaf outline: a pointed oval along the leaf's angle, offset from its connector by the leaf stalk.
        cos_a, sin_a = math.cos(leaf.angle), math.sin(leaf.angle)
        stalk = leaf.stem_length * C.TILE_SIZE * 0.3 * world.camera.zoom
        base_x = center[0] + cos_a * stalk
        base_y = center[1] + sin_a * stalk
        points = []
        for i in range(12):
            t = i / 11
            along = t * length
            across = math.sin(t * math.pi) * width / 2
            points.append((base_x + cos_a * along - sin_a * across, base_y + sin_a * along + cos_a * across))
        for i in range(10, 0, -1):
            t = i / 11
            along = t * length
            across = -math.sin(t * math.pi) * width / 2
            points.append((base_x + cos_a * along - sin_a * across, base_y + sin_a * along + cos_a * across))

        color = lerp_color(C.COLOR_PLANT_HEALTH_LOW, leaf.color, health_ratio)
        pygame.draw.line(self.screen, C.COLOR_PLANT_CONNECTOR, center, (base_x, base_y), 1)
        pygame.draw.polygon(self.screen, color, points)
        if leaf.leaf_type in (C.LEAF_DETAILED, C.LEAF_COMPOUND):
            tip = (base_x + cos_a * length, base_y + sin_a * length)
            pygame.draw.line(self.screen, C.COLOR_PLANT_LEAF_VEIN, (base_x, base_y), tip, 1)

    # --- Mini-map ---
    def draw_minimap(self, world):
        """Downsampled overview of the whole world with the camera's view outlined."""
        grid = world.tile_grid
        step_x = max(1, world.width // C.MINIMAP_WIDTH)
        step_y = max(1, world.height // C.MINIMAP_HEIGHT)
        types = grid.types[::step_y, ::step_x]
        colors = tile_color_array(types, grid.moisture[::step_y, ::step_x], world.sky_color)
        surface = pygame.transform.scale(pygame.surfarray.make_surface(colors.transpose(1, 0, 2)),
                                         (C.MINIMAP_WIDTH, C.MINIMAP_HEIGHT))

        left = C.SCREEN_WIDTH - C.MINIMAP_WIDTH - C.MINIMAP_MARGIN
        top = C.MINIMAP_MARGIN
        self.screen.blit(surface, (left, top))

        camera = world.camera
        scale_x = C.MINIMAP_WIDTH / world.width
        scale_y = C.MINIMAP_HEIGHT / world.height
        view_rect = pygame.Rect(left + camera.x * scale_x, top + camera.y * scale_y,
                                max(1, camera.visible_width() * scale_x), max(1, camera.visible_height() * scale_y))
        pygame.draw.rect(self.screen, C.COLOR_MINIMAP_VIEW, view_rect, 1)

        for plant in world.plant_manager:
            pygame.draw.circle(self.screen, C.COLOR_PLANT_LEAF,
                               (int(left + plant.x * scale_x), int(top + plant.y * scale_y)), 2)
