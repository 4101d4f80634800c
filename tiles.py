# tiles.py

import numpy as np
import constants as C

# Offsets of the 8 neighbours, in the same order Tile.update receives them.
NEIGHBOR_OFFSETS = [(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)]

def clamp_resource(value):
    return max(C.RESOURCE_MIN, min(C.RESOURCE_MAX, value))

class Tile:
    """
    A single grid cell. Tiles are lightweight views over one (x, y) slot of a
    TileGrid's arrays, so reading or writing an attribute goes straight to the
    grid. Moisture and nutrient writes are clamped to [0, 100].
    """
    __slots__ = ("grid", "x", "y")

    def __init__(self, grid, x, y):
        self.grid = grid
        self.x = x
        self.y = y

    @property
    def type(self):
        return int(self.grid.types[self.y, self.x])

    @type.setter
    def type(self, value):
        self.grid.types[self.y, self.x] = value

    @property
    def moisture(self):
        return float(self.grid.moisture[self.y, self.x])

    @moisture.setter
    def moisture(self, value):
        self.grid.moisture[self.y, self.x] = clamp_resource(value)

    @property
    def nutrients(self):
        return float(self.grid.nutrients[self.y, self.x])

    @nutrients.setter
    def nutrients(self, value):
        self.grid.nutrients[self.y, self.x] = clamp_resource(value)

    @property
    def has_plant(self):
        return bool(self.grid.has_plant[self.y, self.x])

    @has_plant.setter
    def has_plant(self, value):
        self.grid.has_plant[self.y, self.x] = bool(value)

    def update(self, neighbors):
        """
        Applies the neighbour rule to this tile. Dirt next to water soaks up
        moisture until it reaches DIRT_WET_CAP; otherwise it slowly dries out
        down to DIRT_DRY_FLOOR. No other tile type reacts.
        """
        if self.type != C.TILE_DIRT:
            return
        water_nearby = any(n is not None and n.type == C.TILE_WATER for n in neighbors)
        moisture = self.moisture
        if water_nearby and moisture < C.DIRT_WET_CAP:
            self.moisture = moisture + C.DIRT_WET_GAIN_PER_TICK
        elif moisture > C.DIRT_DRY_FLOOR:
            self.moisture = moisture - C.DIRT_DRY_LOSS_PER_TICK

    def __repr__(self):
        return (f"Tile({self.x}, {self.y}, {C.TILE_TYPE_NAMES.get(self.type, self.type)}, "
                f"moisture={self.moisture:.1f}, nutrients={self.nutrients:.1f}, has_plant={self.has_plant})")

def _shifted(arr, dx, dy, fill):
    """Returns arr shifted so out[y, x] == arr[y + dy, x + dx], padding with fill."""
    out = np.full_like(arr, fill)
    h, w = arr.shape
    src_y = slice(max(0, dy), h + min(0, dy))
    src_x = slice(max(0, dx), w + min(0, dx))
    dst_y = slice(max(0, -dy), h + min(0, -dy))
    dst_x = slice(max(0, -dx), w + min(0, -dx))
    out[dst_y, dst_x] = arr[src_y, src_x]
    return out

class TileGrid:
    """
    The world's tile subsystem. Stores every tile attribute in a NumPy array of
    shape (height, width) so the per-tick moisture pass runs over the whole grid
    in a few vectorized operations.
    """
    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.types = np.full((height, width), C.TILE_AIR, dtype=np.int8)
        self.moisture = np.zeros((height, width), dtype=np.float64)
        self.nutrients = np.zeros((height, width), dtype=np.float64)
        self.has_plant = np.zeros((height, width), dtype=bool)

    def in_bounds(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x, y):
        """Returns the Tile at (x, y), or None when out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return Tile(self, x, y)

    def get_neighbors(self, x, y):
        """Returns the 8 surrounding tiles; out-of-bounds slots are None."""
        return [self.get_tile(x + dx, y + dy) for dx, dy in NEIGHBOR_OFFSETS]

    def set_tile(self, x, y, tile_type, moisture=None, nutrients=None):
        """Overwrites a cell as a freshly created tile of tile_type."""
        self.types[y, x] = tile_type
        if moisture is None:
            moisture = C.TILE_DEFAULT_MOISTURE.get(tile_type, 0.0)
        if nutrients is None:
            nutrients = C.TILE_DEFAULT_NUTRIENTS.get(tile_type, 0.0)
        self.moisture[y, x] = clamp_resource(moisture)
        self.nutrients[y, x] = clamp_resource(nutrients)

    def clamp_resources(self):
        np.clip(self.moisture, C.RESOURCE_MIN, C.RESOURCE_MAX, out=self.moisture)
        np.clip(self.nutrients, C.RESOURCE_MIN, C.RESOURCE_MAX, out=self.nutrients)

    def _apply_neighbor_rule(self):
        """Vectorized Tile.update over every cell."""
        is_water = self.types == C.TILE_WATER
        water_nearby = np.zeros_like(is_water)
        for dx, dy in NEIGHBOR_OFFSETS:
            water_nearby |= _shifted(is_water, dx, dy, False)

        is_dirt = self.types == C.TILE_DIRT
        wetting = is_dirt & water_nearby & (self.moisture < C.DIRT_WET_CAP)
        drying = is_dirt & ~wetting & (self.moisture > C.DIRT_DRY_FLOOR)
        self.moisture[wetting] += C.DIRT_WET_GAIN_PER_TICK
        self.moisture[drying] -= C.DIRT_DRY_LOSS_PER_TICK

    def _diffuse_moisture(self):
        """
        Blends each non-air, non-water tile toward the average moisture of
        itself and its non-air neighbours (exponential smoothing, not full
        equalization). All tiles read the same pre-pass snapshot.
        """
        present = self.types != C.TILE_AIR
        present_moisture = np.where(present, self.moisture, 0.0)
        total = present_moisture.copy()
        count = present.astype(np.float64)
        for dx, dy in NEIGHBOR_OFFSETS:
            total += _shifted(present_moisture, dx, dy, 0.0)
            count += _shifted(present, dx, dy, False)

        diffusing = present & (self.types != C.TILE_WATER)
        average = total[diffusing] / count[diffusing]
        retain = C.DIFFUSION_RETAIN_FRACTION
        self.moisture[diffusing] = self.moisture[diffusing] * retain + average * (1 - retain)
        self.moisture[self.types == C.TILE_WATER] = C.RESOURCE_MAX

    def update(self):
        """One tick of tile dynamics: neighbour rule, then diffusion, then clamping."""
        self._apply_neighbor_rule()
        self._diffuse_moisture()
        self.clamp_resources()

    def count_type(self, tile_type):
        return int(np.count_nonzero(self.types == tile_type))
