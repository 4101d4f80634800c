# terrain.py

import numpy as np
import constants as C
from numpy_noise import make_permutation, layered_noise
import logger as log

class TerrainGenerator:
    """
    Fills a TileGrid with terrain. Deterministic for a given seed: noise layers
    come from a seeded permutation table and every random draw comes from one
    seeded RandomState.
    """
    def __init__(self, seed=C.TERRAIN_NOISE_SEED, ground_level=C.GROUND_LEVEL):
        self.seed = seed
        self.ground_level = ground_level
        self.p = make_permutation(seed)
        self.rng = np.random.RandomState(seed)
        log.log(f"TerrainGenerator initialized with seed {seed}, ground level {ground_level}.")

    def _noise(self, xs, ys, scale, offset):
        return layered_noise(self.p, xs, ys, scale, offset,
                             octaves=C.NOISE_OCTAVES, persistence=C.NOISE_PERSISTENCE,
                             lacunarity=C.NOISE_LACUNARITY)

    def generate(self, grid):
        """Runs every generation pass over the grid, in order."""
        log.log(f"Generating terrain of size {grid.width}x{grid.height}...")
        self._generate_layers(grid)
        self._initialize_resources(grid)
        self._create_formations(grid)
        self._prepare_planting_row(grid)
        self._spread_moisture_from_water(grid)
        grid.clamp_resources()
        log.log(f"Terrain complete. Dirt: {grid.count_type(C.TILE_DIRT):,}, Stone: {grid.count_type(C.TILE_STONE):,}, "
                f"Mineral: {grid.count_type(C.TILE_MINERAL):,}, Water: {grid.count_type(C.TILE_WATER):,}")

    def _generate_layers(self, grid):
        """Assigns a base tile type to every cell from the layered noise fields."""
        g = self.ground_level
        ys, xs = np.mgrid[0:grid.height, 0:grid.width].astype(np.float64)

        stone = self._noise(xs, ys, C.STONE_NOISE_SCALE, C.STONE_NOISE_OFFSET)
        shallow_stone = self._noise(xs, ys, C.SHALLOW_STONE_NOISE_SCALE, C.SHALLOW_STONE_NOISE_OFFSET)
        mineral = self._noise(xs, ys, C.MINERAL_NOISE_SCALE, C.MINERAL_NOISE_OFFSET)
        water = self._noise(xs, ys, C.WATER_NOISE_SCALE, C.WATER_NOISE_OFFSET)

        types = np.full((grid.height, grid.width), C.TILE_AIR, dtype=np.int8)
        underground = ys >= g
        shallow = underground & (ys > g) & (ys < g + C.TERRAIN_SHALLOW_DEPTH)
        deep = ys >= g + C.TERRAIN_SHALLOW_DEPTH

        types[underground] = C.TILE_DIRT
        types[shallow & (shallow_stone > C.TERRAIN_SHALLOW_STONE_THRESHOLD)] = C.TILE_STONE
        types[deep & (stone > C.TERRAIN_STONE_THRESHOLD)] = C.TILE_STONE
        types[deep & (mineral > C.TERRAIN_MINERAL_THRESHOLD)] = C.TILE_MINERAL
        types[(ys > g) & (water > C.TERRAIN_WATER_THRESHOLD)] = C.TILE_WATER
        grid.types[:] = types

    def _initialize_resources(self, grid):
        shape = (grid.height, grid.width)
        types = grid.types
        ys = np.arange(grid.height)[:, np.newaxis] * np.ones((1, grid.width))

        moisture = np.zeros(shape)
        nutrients = np.zeros(shape)

        dirt = types == C.TILE_DIRT
        moisture[dirt] = C.DIRT_BASE_RESOURCE_MIN + self.rng.random_sample(np.count_nonzero(dirt)) * C.DIRT_BASE_RESOURCE_RANGE
        nutrients[dirt] = C.DIRT_BASE_RESOURCE_MIN + self.rng.random_sample(np.count_nonzero(dirt)) * C.DIRT_BASE_RESOURCE_RANGE
        topsoil = dirt & (ys <= self.ground_level + C.TERRAIN_TOPSOIL_DEPTH)
        moisture[topsoil] += C.TOPSOIL_RESOURCE_BONUS
        nutrients[topsoil] += C.TOPSOIL_RESOURCE_BONUS

        water = types == C.TILE_WATER
        moisture[water] = C.WATER_MOISTURE_MIN + self.rng.random_sample(np.count_nonzero(water)) * C.WATER_MOISTURE_RANGE
        nutrients[water] = C.WATER_NUTRIENT_MIN + self.rng.random_sample(np.count_nonzero(water)) * C.WATER_NUTRIENT_RANGE

        mineral = types == C.TILE_MINERAL
        moisture[mineral] = C.MINERAL_MOISTURE_MIN + self.rng.random_sample(np.count_nonzero(mineral)) * C.MINERAL_MOISTURE_RANGE
        nutrients[mineral] = C.MINERAL_NUTRIENT_MIN + self.rng.random_sample(np.count_nonzero(mineral)) * C.MINERAL_NUTRIENT_RANGE

        grid.moisture[:] = moisture
        grid.nutrients[:] = nutrients

    def _create_formations(self, grid):
        """Places stone formations (some with mineral cores) and mineral veins."""
        g = self.ground_level
        for _ in range(grid.width // C.FORMATION_STONE_WIDTH_DIVISOR):
            span = max(1, grid.height - g - 2 * C.FORMATION_STONE_DEPTH_MARGIN)
            center_x = self.rng.randint(0, grid.width)
            center_y = int(g + C.FORMATION_STONE_DEPTH_MARGIN + self.rng.random_sample() * span)
            size = C.FORMATION_STONE_MIN_SIZE + self.rng.randint(0, C.FORMATION_STONE_SIZE_RANGE)
            self.create_formation(grid, center_x, center_y, size, C.TILE_STONE)

            if self.rng.random_sample() < C.FORMATION_MINERAL_CORE_CHANCE:
                self.create_formation(grid, center_x, center_y, size // 2, C.TILE_MINERAL)

        for _ in range(grid.width // C.FORMATION_MINERAL_WIDTH_DIVISOR):
            span = max(1, grid.height - g - 2 * C.FORMATION_MINERAL_DEPTH_MARGIN)
            center_x = self.rng.randint(0, grid.width)
            center_y = int(g + C.FORMATION_MINERAL_DEPTH_MARGIN + self.rng.random_sample() * span)
            size = C.FORMATION_MINERAL_MIN_SIZE + self.rng.randint(0, C.FORMATION_MINERAL_SIZE_RANGE)
            self.create_formation(grid, center_x, center_y, size, C.TILE_MINERAL)

    def create_formation(self, grid, center_x, center_y, size, tile_type):
        """
        Converts a noise-perturbed disc around (center_x, center_y) to tile_type.
        Each cell inside the disc is converted with probability 1 - d / r, so the
        edge of the formation frays out. Rows above ground level are never touched.
        Returns the number of converted cells.
        """
        y0 = max(self.ground_level, center_y - size)
        y1 = min(grid.height - 1, center_y + size)
        x0 = max(0, center_x - size)
        x1 = min(grid.width - 1, center_x + size)
        if y0 > y1 or x0 > x1 or size <= 0:
            return 0

        ys, xs = np.mgrid[y0:y1 + 1, x0:x1 + 1].astype(np.float64)
        distance = np.sqrt((xs - center_x) ** 2 + (ys - center_y) ** 2)
        perturbation = self._noise(xs, ys, C.FORMATION_NOISE_SCALE, C.FORMATION_NOISE_OFFSET)
        noisy_radius = size * (0.8 + perturbation * 0.4)
        inside = distance <= noisy_radius
        probability = np.where(inside, 1 - distance / noisy_radius, 0.0)
        converted = inside & (self.rng.random_sample(distance.shape) < probability)

        rows, cols = np.nonzero(converted)
        for row, col in zip(rows, cols):
            grid.set_tile(x0 + int(col), y0 + int(row), tile_type)
        return len(rows)

    def _prepare_planting_row(self, grid):
        """The row directly above ground level is all fertile dirt so seeds can go anywhere."""
        row = self.ground_level - 1
        if not 0 <= row < grid.height:
            return
        grid.types[row, :] = C.TILE_DIRT
        grid.moisture[row, :] = C.PLANTING_ROW_MOISTURE
        grid.nutrients[row, :] = C.PLANTING_ROW_NUTRIENTS

    def _spread_moisture_from_water(self, grid):
        """
        One-time pass that makes soil wetter (and dirt richer) near water. Every
        water tile adds a boost that falls off linearly to zero at
        WATER_SPREAD_RADIUS; boosts from several sources add up and the result is
        capped at 100.
        """
        water = grid.types == C.TILE_WATER
        if not water.any():
            return
        radius = C.WATER_SPREAD_RADIUS
        h, w = water.shape
        moisture_boost = np.zeros((h, w))
        nutrient_boost = np.zeros((h, w))
        water_f = water.astype(np.float64)

        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                distance = np.sqrt(dx * dx + dy * dy)
                if distance > radius:
                    continue
                falloff = 1 - distance / radius
                # Number of water sources sitting at offset (-dx, -dy) from each cell.
                sources = np.zeros((h, w))
                sources[max(0, dy):h + min(0, dy), max(0, dx):w + min(0, dx)] = \
                    water_f[max(0, -dy):h + min(0, -dy), max(0, -dx):w + min(0, -dx)]
                moisture_boost += sources * C.WATER_SPREAD_MOISTURE_BOOST * falloff
                nutrient_boost += sources * C.WATER_SPREAD_NUTRIENT_BOOST * falloff

        receiving = (grid.types != C.TILE_WATER) & (grid.types != C.TILE_AIR)
        dirt = grid.types == C.TILE_DIRT
        grid.moisture[receiving] = np.minimum(C.RESOURCE_MAX, grid.moisture[receiving] + moisture_boost[receiving])
        grid.nutrients[dirt] = np.minimum(C.RESOURCE_MAX, grid.nutrients[dirt] + nutrient_boost[dirt])
