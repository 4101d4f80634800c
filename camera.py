#camera.py

import math
import constants as C
import logger as log

class Camera:
    """
    Camera over the tile grid. Position is in tiles (top-left corner of the
    view) and zoom is a multiplier on C.TILE_SIZE.

    The input layer mutates x, y and zoom directly, so every accessor first
    replaces non-finite values with safe defaults.
    """
    def __init__(self, world_width, world_height, ground_level=C.GROUND_LEVEL, view_width=C.SCREEN_WIDTH, view_height=C.SCREEN_HEIGHT):
        self.world_width = world_width
        self.world_height = world_height
        self.ground_level = ground_level
        self.view_width = view_width # Screen pixels
        self.view_height = view_height
        self.zoom = C.CAMERA_DEFAULT_ZOOM
        self.x = max(0.0, math.floor(world_width / 2 - self.visible_width() / 2))
        self.y = max(0.0, self.ground_level - C.CAMERA_GROUND_MARGIN_ROWS)
        self.y = min(self.y, max(0.0, world_height - self.visible_height()))
        log.log(f"Camera initialized at tile ({self.x:.0f}, {self.y:.0f}) with zoom {self.zoom:.2f}")

    def sanitize(self):
        """Replaces non-finite camera values with the defaults (0, 0, 1.0)."""
        if not math.isfinite(self.x): self.x = C.CAMERA_DEFAULT_X
        if not math.isfinite(self.y): self.y = C.CAMERA_DEFAULT_Y
        if not math.isfinite(self.zoom) or self.zoom <= 0: self.zoom = C.CAMERA_DEFAULT_ZOOM

    def visible_width(self):
        """Number of tiles that fit horizontally at the current zoom."""
        return min(self.world_width, math.ceil(self.view_width / (C.TILE_SIZE * self.zoom)))

    def visible_height(self):
        return min(self.world_height, math.ceil(self.view_height / (C.TILE_SIZE * self.zoom)))

    def _clamp(self):
        self.x = max(0.0, min(self.world_width - self.visible_width(), self.x))
        self.y = max(0.0, min(self.world_height - self.visible_height(), self.y))

    def world_to_screen(self, world_x, world_y):
        self.sanitize()
        scale = C.TILE_SIZE * self.zoom
        return (world_x - self.x) * scale, (world_y - self.y) * scale

    def screen_to_world(self, screen_x, screen_y):
        """Converts a screen pixel to the tile coordinates under it."""
        self.sanitize()
        scale = C.TILE_SIZE * self.zoom
        return math.floor(screen_x / scale + self.x), math.floor(screen_y / scale + self.y)

    def scale(self, value):
        self.sanitize()
        return value * self.zoom

    def move(self, dx, dy):
        """Pans the camera by a number of tiles and clamps it to the world."""
        self.sanitize()
        self.x += dx
        self.y += dy
        self._clamp()

    def zoom_by(self, delta):
        """Changes zoom by delta, clamped to [CAMERA_MIN_ZOOM, CAMERA_MAX_ZOOM]."""
        self.sanitize()
        self.zoom = max(C.CAMERA_MIN_ZOOM, min(C.CAMERA_MAX_ZOOM, self.zoom + delta))
        self._clamp()

    def reset(self):
        self.x = 0.0
        self.y = max(0.0, self.ground_level - C.CAMERA_GROUND_MARGIN_ROWS)
        self.zoom = C.CAMERA_DEFAULT_ZOOM
        self._clamp()
