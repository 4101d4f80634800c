# constants.py

# =============================================================================
# --- SIMULATION & PERFORMANCE SETTINGS ---
# =============================================================================
CLOCK_TICK_RATE = 60
MAX_REAL_DELTA_MS = 250.0 # Cap on a single frame's real time before scaling
MAX_DELTA_MS = 1000.0 # Largest simulation step World.update will accept
PROFILER_PRINT_LINE_COUNT = 20
UI_LOADING_BAR_UPDATE_INTERVAL = 10

# =============================================================================
# --- WORLD & TERRAIN ---
# =============================================================================
GRID_WIDTH = 1200
GRID_HEIGHT = 500
GROUND_LEVEL = 200 # Row where the ground starts. The row above it is the planting row.
TILE_SIZE = 32 # Size of a tile in screen pixels at zoom 1.0

TERRAIN_NOISE_SEED = 24322

# Layered noise settings. Each layer samples the same Perlin field with its own
# offset so the layers are independent of each other.
NOISE_OCTAVES = 4
NOISE_PERSISTENCE = 0.5
NOISE_LACUNARITY = 2.0
STONE_NOISE_SCALE = 30.0
STONE_NOISE_OFFSET = 0.0
SHALLOW_STONE_NOISE_SCALE = 40.0
SHALLOW_STONE_NOISE_OFFSET = 250.0
MINERAL_NOISE_SCALE = 20.0
MINERAL_NOISE_OFFSET = 500.0
WATER_NOISE_SCALE = 60.0
WATER_NOISE_OFFSET = 1000.0
FORMATION_NOISE_SCALE = 10.0
FORMATION_NOISE_OFFSET = 1500.0

# Thresholds on the normalized [0, 1] noise value.
TERRAIN_MINERAL_THRESHOLD = 0.70
TERRAIN_STONE_THRESHOLD = 0.66
TERRAIN_SHALLOW_STONE_THRESHOLD = 0.74
TERRAIN_WATER_THRESHOLD = 0.72
TERRAIN_SHALLOW_DEPTH = 3 # Rows below ground level that only get occasional stone
TERRAIN_TOPSOIL_DEPTH = 3 # Rows below ground level with the topsoil bonus

# --- Formations ---
FORMATION_STONE_WIDTH_DIVISOR = 100 # One stone formation per 100 columns
FORMATION_MINERAL_WIDTH_DIVISOR = 150 # One mineral vein per 150 columns
FORMATION_STONE_MIN_SIZE = 10
FORMATION_STONE_SIZE_RANGE = 20
FORMATION_STONE_DEPTH_MARGIN = 10
FORMATION_MINERAL_CORE_CHANCE = 0.4
FORMATION_MINERAL_MIN_SIZE = 5
FORMATION_MINERAL_SIZE_RANGE = 10
FORMATION_MINERAL_DEPTH_MARGIN = 15

# --- Resource Initialization ---
DIRT_BASE_RESOURCE_MIN = 50.0
DIRT_BASE_RESOURCE_RANGE = 30.0
TOPSOIL_RESOURCE_BONUS = 20.0
WATER_MOISTURE_MIN = 90.0
WATER_MOISTURE_RANGE = 10.0
WATER_NUTRIENT_MIN = 30.0
WATER_NUTRIENT_RANGE = 20.0
MINERAL_MOISTURE_MIN = 20.0
MINERAL_MOISTURE_RANGE = 20.0
MINERAL_NUTRIENT_MIN = 80.0
MINERAL_NUTRIENT_RANGE = 20.0
PLANTING_ROW_MOISTURE = 80.0
PLANTING_ROW_NUTRIENTS = 80.0

# --- Moisture Spreading (one-time, at generation) ---
WATER_SPREAD_RADIUS = 6
WATER_SPREAD_MOISTURE_BOOST = 50.0
WATER_SPREAD_NUTRIENT_BOOST = 20.0

# =============================================================================
# --- TILES ---
# =============================================================================
TILE_AIR = 0
TILE_DIRT = 1
TILE_STONE = 2
TILE_MINERAL = 3
TILE_WATER = 4
TILE_ROOT = 5

TILE_TYPE_NAMES = {
    TILE_AIR: "air",
    TILE_DIRT: "dirt",
    TILE_STONE: "stone",
    TILE_MINERAL: "mineral",
    TILE_WATER: "water",
    TILE_ROOT: "root",
}

# Moisture and nutrients a freshly created tile of each type carries.
TILE_DEFAULT_MOISTURE = {TILE_DIRT: 50.0, TILE_WATER: 100.0}
TILE_DEFAULT_NUTRIENTS = {TILE_DIRT: 70.0, TILE_MINERAL: 100.0}

RESOURCE_MIN = 0.0
RESOURCE_MAX = 100.0

# --- Per-tick tile dynamics ---
DIRT_WET_GAIN_PER_TICK = 0.5 # Moisture gained by dirt next to water
DIRT_WET_CAP = 90.0 # Dirt stops gaining from water at this moisture
DIRT_DRY_LOSS_PER_TICK = 0.1 # Moisture lost by dirt drying out
DIRT_DRY_FLOOR = 30.0 # Dirt stops drying out at this moisture
DIFFUSION_RETAIN_FRACTION = 0.9 # Exponential smoothing: keep 90% of the old value

# =============================================================================
# --- TIME ---
# =============================================================================
DAY_LENGTH_MS = 24000.0 # A full day-night cycle in milliseconds of game time
HOURS_PER_DAY = 24
HOUR_LENGTH_MS = DAY_LENGTH_MS / HOURS_PER_DAY
STARTING_HOUR = 6 # The game starts at 6 AM
DAYTIME_START_HOUR = 6
DAYTIME_END_HOUR = 18
NOON_HOUR = 12
TIME_MULTIPLIERS = {
    0: 0.5,
    1: 1.0,
    2: 2.0,
    3: 5.0,
}
DEFAULT_TIME_MULTIPLIER_LEVEL = 1
POPULATION_LOG_INTERVAL_MS = DAY_LENGTH_MS # Log population statistics once a day

# =============================================================================
# --- UI, CAMERA & COLORS ---
# =============================================================================
SCREEN_WIDTH = 1024
SCREEN_HEIGHT = 768
CAMERA_SPEED = 10 # Tiles per second at zoom 1.0
CAMERA_ZOOM_STEP = 0.1
CAMERA_MIN_ZOOM = 0.5
CAMERA_MAX_ZOOM = 2.0
CAMERA_DEFAULT_X = 0.0
CAMERA_DEFAULT_Y = 0.0
CAMERA_DEFAULT_ZOOM = 1.0
CAMERA_GROUND_MARGIN_ROWS = 10 # Rows of sky shown above ground level by default

UI_FONT_SIZE = 28
UI_TIME_DISPLAY_POS_X = 10
UI_TIME_DISPLAY_POS_Y = 10
UI_LINE_SPACING = 24
UI_LOADING_TEXT_OFFSET_Y = 50
UI_LOADING_BAR_WIDTH = 400
UI_LOADING_BAR_HEIGHT = 30
MINIMAP_WIDTH = 200
MINIMAP_HEIGHT = 100
MINIMAP_MARGIN = 10
CELESTIAL_BODY_RADIUS = 30

COLOR_WHITE = (255, 255, 255); COLOR_BLACK = (0, 0, 0)
COLOR_LOADING_BAR_BG = (50, 50, 50); COLOR_LOADING_BAR_FG = (100, 200, 100)
COLOR_SKY_DAY = (135, 206, 235) # '#87CEEB'
COLOR_SKY_NIGHT = (12, 20, 69) # '#0C1445'
COLOR_SKY_DAWN = (255, 160, 122) # '#FFA07A'
COLOR_SKY_DUSK = (255, 140, 0) # '#FF8C00'
COLOR_SUN = (253, 184, 19)
COLOR_MOON = (248, 248, 255)
COLOR_GROUND_INDICATOR = (255, 255, 255, 90)
COLOR_MINIMAP_BG = (0, 0, 0, 160)
COLOR_MINIMAP_VIEW = (255, 255, 255)

COLOR_DIRT = (139, 69, 19) # '#8B4513'
COLOR_STONE = (128, 128, 128)
COLOR_MINERAL = (255, 215, 0)
COLOR_WATER = (30, 144, 255)
COLOR_ROOT_TILE = (165, 42, 42)

TILE_COLORS = {
    TILE_DIRT: COLOR_DIRT,
    TILE_STONE: COLOR_STONE,
    TILE_MINERAL: COLOR_MINERAL,
    TILE_WATER: COLOR_WATER,
    TILE_ROOT: COLOR_ROOT_TILE,
}

COLOR_PLANT_STEM = (34, 139, 34) # '#228B22' forest green
COLOR_PLANT_STEM_YOUNG = (50, 205, 50) # '#32CD32' bright green
COLOR_PLANT_STEM_WOODY = (139, 69, 19) # '#8B4513' brown
COLOR_PLANT_LEAF = (50, 205, 50)
COLOR_PLANT_LEAF_VEIN = (27, 105, 27)
COLOR_PLANT_ROOT = (139, 69, 19)
COLOR_PLANT_ROOT_TIP = (101, 67, 33)
COLOR_PLANT_ROOT_ADVANCED = (139, 105, 20) # '#8B6914'
COLOR_PLANT_ABSORPTION_ZONE = (101, 67, 33)
COLOR_PLANT_BRANCH = (93, 64, 55) # Mature branches
COLOR_PLANT_BRANCH_YOUNG = (58, 95, 11) # '#3A5F0B'
COLOR_PLANT_CONNECTOR = (139, 69, 19)
COLOR_PLANT_SEED = (139, 69, 19)
COLOR_PLANT_HEALTH_LOW = (189, 183, 107)

# =============================================================================
# --- PLANTS: ENUMERATIONS ---
# =============================================================================
STAGE_SEED = 0
STAGE_GERMINATION = 1
STAGE_SAPLING = 2
STAGE_JUVENILE = 3
STAGE_MATURE = 4
STAGE_ADVANCED = 5

STAGE_NAMES = {
    STAGE_SEED: "seed",
    STAGE_GERMINATION: "germination",
    STAGE_SAPLING: "sapling",
    STAGE_JUVENILE: "juvenile",
    STAGE_MATURE: "mature",
    STAGE_ADVANCED: "advanced",
}

PART_ROOT = 0
PART_LEAF = 1
PART_BRANCH = 2
PART_STEM = 3
PART_CONNECTOR = 4
PART_SUB_BRANCH = 5
PART_TERTIARY_BRANCH = 6

LEAF_SIMPLE = "simple"
LEAF_DETAILED = "detailed"
LEAF_COMPOUND = "compound"
LEAF_COTYLEDON = "cotyledon"

# =============================================================================
# --- PLANTS: VITALS & RESOURCES ---
# =============================================================================
PLANT_INITIAL_HEALTH = 100.0
PLANT_MAX_HEALTH = 100.0
PLANT_INITIAL_HEIGHT = 1
PLANT_INITIAL_ROOT_DEPTH = 1
PLANT_GROWTH_RATE = 0.4
PLANT_WATER_ABSORPTION = 0.5 # Moisture taken from each root tile per growth check
PLANT_NUTRIENT_ABSORPTION = 0.3 # Nutrients taken from each root tile per growth check
PLANT_GROWTH_CHECK_INTERVAL_MS = HOUR_LENGTH_MS
PLANT_HOURLY_GROWTH_CHANCE = 0.5

# Environmental factors are averages over root tiles divided by this value, capped at 1.
PLANT_FACTOR_NORMALIZER = 50.0
PLANT_NIGHT_SUNLIGHT_FACTOR = 0.1
PLANT_EARLY_GROWTH_CHANCE_FLOOR = 0.8 # SEED and GERMINATION
PLANT_GROWTH_CHANCE_FLOOR = 0.5 # Every later stage
PLANT_BOOTSTRAP_MIN_STEM = 3
PLANT_BOOTSTRAP_MIN_ROOTS = 3

PLANT_STRESS_FACTOR_THRESHOLD = 0.3
PLANT_THRIVE_FACTOR_THRESHOLD = 0.7
PLANT_STRESS_HEALTH_LOSS = 0.5
PLANT_THRIVE_HEALTH_GAIN = 0.2

# =============================================================================
# --- PLANTS: GROWTH RULES ---
# =============================================================================
SEED_ROOT_CHANCE = 0.9
SEED_ROOT_SIZE = 4
COTYLEDON_SIZE = 0.8
COTYLEDON_OFFSET_X = 0.4

GERMINATION_STEM_CHANCE = 0.8
GERMINATION_STEM_SIZE = 4
GERMINATION_ROOT_SIZE = 4
GERMINATION_SAPLING_STEM_COUNT = 2

SAPLING_STEM_CHANCE = 0.4
SAPLING_STEM_BASE_SIZE = 4.5
SAPLING_STEM_AGE_FACTOR = 0.05
SAPLING_MIN_STEM_FOR_BRANCHES = 2
SAPLING_BRANCH_SIDE_CHANCE = 0.7
SAPLING_BRANCH_SIZE = 3.5
SAPLING_JUVENILE_STEM_COUNT = 3
SAPLING_JUVENILE_BRANCH_COUNT = 2

JUVENILE_STEM_CHANCE = 0.3
JUVENILE_BRANCH_CHANCE = 0.9 # Cumulative with the stem chance
JUVENILE_STEM_BASE_SIZE = 5
JUVENILE_STEM_AGE_FACTOR = 0.08
JUVENILE_SUB_BRANCH_CHANCE = 0.3
JUVENILE_TERTIARY_CHANCE = 0.3
JUVENILE_BRANCH_SIDE_CHANCE = 0.6
JUVENILE_BRANCH_SIZE = 4
JUVENILE_ROOT_SPREAD = 2
JUVENILE_ROOT_DEPTH_RANGE = 3

# --- Stems ---
STEM_BASE_SIZE = 4
STEM_STAGE_SIZE_FACTOR = 0.5
STEM_BASE_SEGMENT_COUNT = 3 # The first segments are thicker
STEM_BASE_SEGMENT_BONUS = 1
STEM_BASE_SEGMENT_STAGE_FACTOR = 0.2
STEM_SEED_SIZE = 6
STEM_CONNECTION_PAIRS_MIN = 2
STEM_CONNECTION_PAIRS_RANGE = 2 # 2-3 pairs of points
STEM_CONNECTION_FIRST_POSITION = 0.3
STEM_CONNECTION_SPACING = 0.4
STEM_CONNECTION_RIGHT_OFFSET = 0.15

# --- Roots ---
ROOT_DEFAULT_SIZE = 4
ROOT_ADVANCED_SIZE = 6
ROOT_INITIAL_SIZE = 5
ROOT_SCORE_THRESHOLD = 50.0
ROOT_SCORE_DIVISOR = 10.0
ROOT_SCORE_UNROOTED_BONUS = 5.0
ROOT_SCORE_DOWNWARD_BONUS = 3.0
ROOT_SCORE_DISTANCE_FACTOR = 2.0
ROOT_NEIGHBOR_RADIUS = 1
ROOT_ABSORPTION_ZONES_MIN = 3
ROOT_ABSORPTION_ZONES_RANGE = 3
ROOT_ABSORPTION_ZONE_RADIUS = 1.0
ROOT_ABSORPTION_ZONE_MIN_SIZE = 4.0
ROOT_ABSORPTION_ZONE_SIZE_RANGE = 2.0
ROOT_ABSORPTION_MIN_EFFICIENCY = 0.5
ROOT_ABSORPTION_EFFICIENCY_RANGE = 0.5
ROOT_SECOND_GROWTH_CHANCE = 0.6
ROOT_SECOND_ADVANCED_CHANCE = 0.3
ROOT_THIRD_GROWTH_CHANCE = 0.4

# --- Branches ---
BRANCH_NEARBY_DISTANCE = 2
BRANCH_COLLISION_ANGLE = 0.5235987755982988 # 30 degrees
BRANCH_MIN_LENGTH = 1.5
BRANCH_LENGTH_RANGE = 0.5
BRANCH_START_OFFSET_X = 0.2
BRANCH_DEFAULT_SIZE = 4
BRANCH_LEAF_POINTS_MIN = 4
BRANCH_LEAF_POINTS_RANGE = 3
BRANCH_LEAF_POINTS_START = 0.2
BRANCH_LEAF_POINTS_SPAN = 0.6
BRANCH_SUB_POINTS_MIN = 3
BRANCH_SUB_POINTS_RANGE = 2
BRANCH_SUB_POINTS_START = 0.3
BRANCH_SUB_POINTS_SPAN = 0.4
BRANCH_EXTENSION_MIN = 0.5
BRANCH_EXTENSION_RANGE = 0.3
BRANCH_EXTENSION_POINTS_MIN = 1
BRANCH_EXTENSION_POINTS_RANGE = 2
BRANCH_EXTENSION_POINTS_START = 0.8
BRANCH_EXTENSION_POINTS_SPACING = 0.15
BRANCH_TIP_LEAF_SIZE = 1.3
BRANCH_MID_LEAF_SIZE = 1.2
BRANCH_MID_LEAF_CHANCE = 0.7
BRANCH_LEAF_ANGLE_JITTER = 0.2

SUB_BRANCH_SIZE_FACTOR = 0.75
SUB_BRANCH_MIN_LENGTH = 0.8
SUB_BRANCH_LENGTH_RANGE = 0.7
SUB_BRANCH_MIN_SPACING = 0.3
SUB_BRANCH_LEAF_POINTS_MIN = 2
SUB_BRANCH_LEAF_POINTS_RANGE = 2
SUB_BRANCH_LEAF_POINTS_START = 0.3
SUB_BRANCH_LEAF_POINTS_SPAN = 0.4
SUB_BRANCH_TERTIARY_POINTS_MIN = 1
SUB_BRANCH_TERTIARY_POINTS_RANGE = 2
SUB_BRANCH_TERTIARY_POINTS_START = 0.5
SUB_BRANCH_TERTIARY_POINTS_SPACING = 0.3
SUB_BRANCH_TIP_LEAF_CHANCE = 0.8
SUB_BRANCH_LEAF_SIZE = 1.2

TERTIARY_SIZE_FACTOR = 0.6
TERTIARY_MIN_LENGTH = 0.5
TERTIARY_LENGTH_RANGE = 0.3
TERTIARY_ANGLE_OFFSET = 0.7853981633974483 # 45 degrees
TERTIARY_LEAF_POINT = 0.6
TERTIARY_LEAF_CHANCE = 0.8
TERTIARY_MAX_LEAVES = 40
TERTIARY_LEAF_SIZE = 1.2

# --- Leaves ---
LEAF_DEFAULT_SIZE = 1.0
LEAF_OVERLAP_DISTANCE = 0.5
LEAF_JITTER = 0.2
LEAF_MIN_STEM_LENGTH = 0.3
LEAF_STEM_LENGTH_RANGE = 0.2
LEAF_DETAILED_CHANCE = 0.6 # From JUVENILE on
LEAF_COMPOUND_CHANCE = 0.7 # From ADVANCED on
LEAF_CONNECTOR_RADIUS_FACTOR = 0.2
SEED_CONNECTOR_RADIUS = 5

# =============================================================================
# --- GRAPHING ---
# =============================================================================
FOCUS_GRAPH_FILENAME = "focused_plant_graph.png"
GRAPHING_DATA_LOG_INTERVAL_MS = HOUR_LENGTH_MS

# =============================================================================
# --- WORLD CONTROLS ---
# =============================================================================
BRANCH_GROWTH_RATE_STEP = 0.1 # Change per [ or ] key press
BRANCH_GROWTH_RATE_MIN = 0.0
BRANCH_GROWTH_RATE_MAX = 2.0
FOCUS_SEARCH_RADIUS = 3 # Tiles around a right click searched for a plant to focus
