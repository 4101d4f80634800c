#world.py

import math
import weakref
from collections import deque
import constants as C
from camera import Camera
from tiles import TileGrid
from terrain import TerrainGenerator
from plant import Plant
from time_manager import TimeManager
from plant_manager import PlantManager
from graphing_manager import GraphingManager
import logger as log

def lerp_color(c1, c2, t):
    t = max(0, min(1, t))
    return tuple(int(start + (end - start) * t) for start, end in zip(c1, c2))

class World:
    def __init__(self, width=C.GRID_WIDTH, height=C.GRID_HEIGHT, ground_level=C.GROUND_LEVEL,
                 seed=C.TERRAIN_NOISE_SEED, generator=None):
        if width <= 0 or height <= 0:
            raise ValueError(f"World dimensions must be positive, got {width}x{height}.")
        if not 0 < ground_level < height:
            raise ValueError(f"Ground level must lie inside the world, got {ground_level} for height {height}.")

        log.log(f"Creating a new World of {width}x{height} tiles...")
        self.width = width
        self.height = height
        self.ground_level = ground_level
        self.time_manager = TimeManager()
        self.camera = Camera(width, height, ground_level)
        self.tile_grid = TileGrid(width, height)
        self.plant_manager = PlantManager()
        self.graphing_manager = GraphingManager()

        # --- Deferred growth queue ---
        # FIFO of (plant weakref, method name, args, kwargs), drained once per tick after the plant pass.
        self.deferred_growth = deque()

        self._branch_growth_rate = C.PLANT_GROWTH_RATE
        self.debug_focused_plant_id = None

        self.last_log_time = 0.0
        self.plant_births_this_period = 0
        self.plant_deaths_this_period = 0

        if generator is None:
            generator = TerrainGenerator(seed, ground_level)
        generator.generate(self.tile_grid)
        log.log("World created. No plants yet.")

    # --- Clock ---
    @property
    def game_time(self):
        return self.time_manager.game_time

    @property
    def current_hour(self):
        return self.time_manager.current_hour

    @property
    def current_day(self):
        return self.time_manager.current_day

    @property
    def plants(self):
        return self.plant_manager

    @property
    def sky_color(self):
        """Sky colour for the current hour: blends through dawn and dusk, flat at midday and midnight."""
        hour = self.current_hour
        if C.DAYTIME_START_HOUR <= hour < C.DAYTIME_END_HOUR:
            day_progress = (hour - C.DAYTIME_START_HOUR) / 12
            if day_progress < 0.25:
                return lerp_color(C.COLOR_SKY_DAWN, C.COLOR_SKY_DAY, day_progress * 4)
            if day_progress > 0.75:
                return lerp_color(C.COLOR_SKY_DAY, C.COLOR_SKY_DUSK, (day_progress - 0.75) * 4)
            return C.COLOR_SKY_DAY

        if hour >= C.DAYTIME_END_HOUR:
            night_progress = (hour - C.DAYTIME_END_HOUR) / 12
            if night_progress < 0.25:
                return lerp_color(C.COLOR_SKY_DUSK, C.COLOR_SKY_NIGHT, night_progress * 4)
        else:
            night_progress = (hour + C.HOURS_PER_DAY - C.DAYTIME_END_HOUR) / 12
            if night_progress > 0.75:
                return lerp_color(C.COLOR_SKY_NIGHT, C.COLOR_SKY_DAWN, (night_progress - 0.75) * 4)
        return C.COLOR_SKY_NIGHT

    # --- Plant settings ---
    @property
    def branch_growth_rate(self):
        return self._branch_growth_rate

    @branch_growth_rate.setter
    def branch_growth_rate(self, value):
        """Applies to every living plant and to plants planted later."""
        self._branch_growth_rate = max(C.BRANCH_GROWTH_RATE_MIN, min(C.BRANCH_GROWTH_RATE_MAX, value))
        self.plant_manager.set_growth_rate(self._branch_growth_rate)
        log.log(f"Event: Branch growth rate set to {self._branch_growth_rate:.2f}.")

    # --- Tiles ---
    def get_tile(self, x, y):
        return self.tile_grid.get_tile(x, y)

    def get_neighbors(self, x, y):
        return self.tile_grid.get_neighbors(x, y)

    def in_bounds(self, x, y):
        return self.tile_grid.in_bounds(x, y)

    # --- Planting ---
    def plant_seed(self, x, y):
        """
        Plants a seed on tile (x, y). Only empty dirt accepts a seed. Returns
        True on success; a rejected spot is logged and returns False.
        """
        tile = self.get_tile(x, y)
        if tile is None:
            log.log(f"Cannot plant at ({x}, {y}): outside the world.")
            return False
        if tile.type != C.TILE_DIRT:
            log.log(f"Cannot plant at ({x}, {y}): tile is {C.TILE_TYPE_NAMES.get(tile.type, tile.type)}, not dirt.")
            return False
        if tile.has_plant:
            log.log(f"Cannot plant at ({x}, {y}): a plant is already growing there.")
            return False

        plant = Plant(self, x, y)
        self.plant_manager.add_plant(plant)
        tile.has_plant = True
        self.plant_births_this_period += 1
        log.log(f"Planted seed {plant.id} at ({x}, {y}).")

        plant.check_growth(self)
        return True

    def _clear_anchor(self, plant):
        tile = self.get_tile(plant.x, plant.y)
        if tile is not None:
            tile.has_plant = False

    def _drop_plant(self, plant):
        """Removes a plant as a death: frees its tile, counts it and drops any focus on it."""
        self.plant_manager.remove_plant(plant)
        self._clear_anchor(plant)
        self.plant_deaths_this_period += 1
        if self.debug_focused_plant_id == plant.id:
            self.debug_focused_plant_id = None
            self.graphing_manager.clear_focus()
        return plant

    def _remove_plant_at(self, index):
        return self._drop_plant(self.plant_manager[index])

    # --- Deferred growth ---
    def schedule_growth(self, plant, method_name, *args, **kwargs):
        """
        Queues plant.<method_name>(world, *args, **kwargs) to run after the
        current plant pass. Only a weak reference to the plant is kept.
        """
        self.deferred_growth.append((weakref.ref(plant), method_name, args, kwargs))

    def _drain_deferred_growth(self):
        """Runs the items queued so far. Items queued while draining wait for the next tick."""
        for _ in range(len(self.deferred_growth)):
            plant_ref, method_name, args, kwargs = self.deferred_growth.popleft()
            plant = plant_ref()
            if plant is None or not plant.is_alive or plant not in self.plant_manager:
                continue
            try:
                getattr(plant, method_name)(self, *args, **kwargs)
            except Exception as e:
                log.log(f"ERROR: Deferred {method_name} failed for plant {plant.id}. Removing it. Reason: {e}")
                self._drop_plant(plant)

    # --- Simulation ---
    def update(self, delta_ms):
        """Advances the world by delta_ms of game time (clamped to [0, MAX_DELTA_MS])."""
        if math.isnan(delta_ms):
            delta_ms = 0.0
        delta_ms = max(0.0, min(C.MAX_DELTA_MS, delta_ms))
        self.time_manager.advance(delta_ms)
        game_time = self.game_time

        # --- 1. Tile dynamics ---
        self.tile_grid.update()

        # --- 2. Plant pass, newest first so removals don't shift unvisited plants ---
        for index in range(len(self.plant_manager) - 1, -1, -1):
            plant = self.plant_manager[index]
            try:
                alive = plant.update(self, game_time)
            except Exception as e:
                log.log(f"ERROR: Plant {plant.id} at ({plant.x}, {plant.y}) failed to update and was removed. Reason: {e}")
                self._remove_plant_at(index)
                continue
            if not alive:
                log.log(f"Plant {plant.id} at ({plant.x}, {plant.y}) has died.")
                self._remove_plant_at(index)

        # --- 3. Deferred growth ---
        self._drain_deferred_growth()

        # --- 4. Population Statistics Logging ---
        if game_time - self.last_log_time >= C.POPULATION_LOG_INTERVAL_MS:
            self._print_population_statistics()
            self.last_log_time = game_time
            self.plant_births_this_period = 0
            self.plant_deaths_this_period = 0

    def _print_population_statistics(self):
        """Prints a formatted summary of the world's population statistics."""
        log.log("--- Population Statistics ---")
        log.log(f"  > Report for Day {self.current_day}")
        log.log(f"  {self.plant_manager.get_population_summary()}")
        log.log(f"  - Plant Births this Period: {self.plant_births_this_period:,}")
        log.log(f"  - Plant Deaths this Period: {self.plant_deaths_this_period:,}")

    # --- Camera ---
    def move_camera(self, dx, dy):
        self.camera.move(dx, dy)

    def zoom_camera(self, delta):
        self.camera.zoom_by(delta)

    def reset_camera(self):
        self.camera.reset()

    def world_to_screen(self, x, y):
        return self.camera.world_to_screen(x, y)

    def screen_to_world(self, screen_x, screen_y):
        return self.camera.screen_to_world(screen_x, screen_y)

    # --- Focus ---
    def focus_plant_at(self, x, y):
        """
        Toggles detailed logging and graphing for the plant nearest tile (x, y).
        Returns the newly focused plant, or None if focus was cleared or nothing is near.
        """
        plant = self.plant_manager.find_at(x, y)
        if plant is None:
            plant = self.plant_manager.find_nearest(x, y, C.FOCUS_SEARCH_RADIUS)
        if plant is None:
            return None

        if self.debug_focused_plant_id == plant.id:
            self.debug_focused_plant_id = None
            self.graphing_manager.clear_focus()
            log.log(f"DEBUG: Stopped focusing on Plant ID: {plant.id}. Detailed logs disabled.")
            return None

        self.debug_focused_plant_id = plant.id
        self.graphing_manager.set_focused_plant(plant.id)
        log.log(f"DEBUG: Now focusing on Plant ID: {plant.id}. Detailed logs enabled.")
        return plant
