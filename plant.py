# plant.py

import math
import random
import itertools
import constants as C
from genes import PlantGenes
from plant_parts import (END_SLOT, ConnectionPoint, StemSegment, Root, AbsorptionZone, Branch,
                         SubBranch, TertiaryBranch, Leaf, Connector)
from branching import choose_branch_angle, choose_leaf_type, leaf_orientation, point_along
import logger as log

_plant_ids = itertools.count(1)

def _sign(value):
    return (value > 0) - (value < 0)

class Plant:
    """
    A single plant anchored on one tile. Growth is a stage-based state machine:
    each growth check may add roots, stem segments, branches or leaves depending
    on the current stage, and secondary growth (extra roots, leaves at branch
    tips) is handed to the world's deferred queue to run on a later pass.
    """
    def __init__(self, world, x, y, genes=None):
        self.id = next(_plant_ids)
        self.x = x
        self.y = y
        self.genes = genes if genes is not None else PlantGenes(growth_rate=world.branch_growth_rate)

        # --- Life Cycle State ---
        self.stage = C.STAGE_SEED
        self.planted_at = world.game_time # Game ms at which the seed went into the ground
        self.age = 0 # Whole days since planting
        self.health = C.PLANT_INITIAL_HEALTH
        self.height = C.PLANT_INITIAL_HEIGHT # Tallest stem offset reached, in tiles
        self.root_depth = C.PLANT_INITIAL_ROOT_DEPTH # Deepest root offset reached, in tiles
        self.last_update_time = self.planted_at
        self.branch_count = 0
        self.leaf_count = 0
        self.last_graph_log_time = -1.0

        # --- Part Graph ---
        self.roots = []
        self.stem = []
        self.leaves = []
        self.branches = []
        self.connectors = []
        self._parts = {} # part_id -> part, for every part this plant owns
        self._next_part_id = 0

        self._add(self.roots, Root(self._new_part_id(), 0, 0, C.ROOT_INITIAL_SIZE, C.COLOR_PLANT_ROOT))
        self._add(self.stem, StemSegment(self._new_part_id(), 0, 0, C.ROOT_INITIAL_SIZE, C.COLOR_PLANT_STEM))
        # The seedling stem and the seed coat are visible from the moment of planting.
        self.grow_stem(0, -1, size=C.STEM_SEED_SIZE, color=C.COLOR_PLANT_STEM_YOUNG)
        self._add(self.connectors, Connector(self._new_part_id(), 0, -1, C.SEED_CONNECTOR_RADIUS, C.COLOR_PLANT_SEED))

    # --- Gene accessors ---
    @property
    def growth_rate(self):
        return self.genes.growth_rate

    @growth_rate.setter
    def growth_rate(self, value):
        self.genes.growth_rate = value

    @property
    def water_absorption(self):
        return self.genes.water_absorption

    @property
    def nutrient_absorption(self):
        return self.genes.nutrient_absorption

    @property
    def growth_check_interval(self):
        return self.genes.growth_check_interval

    @property
    def is_alive(self):
        return self.health > 0

    # --- Part bookkeeping ---
    def _new_part_id(self):
        part_id = self._next_part_id
        self._next_part_id += 1
        return part_id

    def _add(self, collection, part):
        collection.append(part)
        self._parts[part.part_id] = part
        return part

    def get_part(self, part_id):
        """Returns the part with this id, or None if the plant has no such part."""
        return self._parts.get(part_id)

    def part_count(self):
        return len(self._parts)

    def iter_sub_branches(self):
        for branch in self.branches:
            yield from branch.sub_branches

    def iter_tertiary_branches(self):
        for sub_branch in self.iter_sub_branches():
            yield from sub_branch.tertiary_branches

    def _advance_stage(self, stage, is_debug_focused=False):
        """Stages only ever move forward."""
        if stage > self.stage:
            self.stage = stage
            if is_debug_focused:
                log.log(f"MILESTONE ({self.id}): Plant progressed to {C.STAGE_NAMES[stage]} stage.")

    def _is_debug_focused(self, world):
        return world.debug_focused_plant_id == self.id

    # --- Per-tick update ---
    def update(self, world, game_time):
        """
        Advances the plant to game_time. Returns False once the plant is dead;
        a dead plant never recovers.
        """
        if self.health <= 0:
            return False

        is_debug_focused = self._is_debug_focused(world)

        days_since_planting = int((game_time - self.planted_at) // C.DAY_LENGTH_MS)
        if days_since_planting > self.age:
            self.age = days_since_planting
            if is_debug_focused: log.log(f"DEBUG ({self.id}): Age is now {self.age} days. Forcing growth check.")
            self.check_growth(world)

        if game_time - self.last_update_time > self.growth_check_interval:
            self.last_update_time = game_time
            if random.random() < self.genes.hourly_growth_chance:
                self.check_growth(world)

        self.check_environment(world)
        self.update_leaf_orientations()

        # --- Graphing Data Collection ---
        if is_debug_focused and game_time >= self.last_graph_log_time + C.GRAPHING_DATA_LOG_INTERVAL_MS:
            world.graphing_manager.add_data_point(game_time, self)
            self.last_graph_log_time = game_time

        return self.health > 0

    # --- Environment ---
    def _average_root_resource(self, world, attribute):
        total = 0.0
        tile_count = 0
        for root in self.roots:
            tile = world.get_tile(self.x + root.x, self.y + root.y)
            if tile is not None and tile.type != C.TILE_AIR:
                total += getattr(tile, attribute)
                tile_count += 1
        return total / tile_count if tile_count > 0 else 0.0

    def calculate_moisture_factor(self, world):
        """Mean moisture under the roots, normalized to [0, 1]."""
        return min(self._average_root_resource(world, "moisture") / C.PLANT_FACTOR_NORMALIZER, 1.0)

    def calculate_nutrient_factor(self, world):
        return min(self._average_root_resource(world, "nutrients") / C.PLANT_FACTOR_NORMALIZER, 1.0)

    def calculate_sunlight_factor(self, world):
        """Peaks at noon, falls to zero at dawn and dusk, and stays low all night."""
        hour = world.current_hour
        if C.DAYTIME_START_HOUR <= hour < C.DAYTIME_END_HOUR:
            return 1 - abs(C.NOON_HOUR - hour) / C.NOON_HOUR
        return C.PLANT_NIGHT_SUNLIGHT_FACTOR

    def check_growth(self, world):
        is_debug_focused = self._is_debug_focused(world)
        moisture_factor = self.calculate_moisture_factor(world)
        nutrient_factor = self.calculate_nutrient_factor(world)
        sunlight_factor = self.calculate_sunlight_factor(world)

        growth_potential = self.growth_rate * moisture_factor * nutrient_factor * sunlight_factor
        if self.stage in (C.STAGE_SEED, C.STAGE_GERMINATION):
            growth_chance = max(C.PLANT_EARLY_GROWTH_CHANCE_FLOOR, growth_potential)
        else:
            growth_chance = max(C.PLANT_GROWTH_CHANCE_FLOOR, growth_potential)

        if is_debug_focused:
            log.log(f"DEBUG ({self.id}): Growth check. Moisture={moisture_factor:.2f}, Nutrients={nutrient_factor:.2f}, "
                    f"Sunlight={sunlight_factor:.2f}, Potential={growth_potential:.2f}, Chance={growth_chance:.2f}")

        if random.random() < growth_chance:
            self.grow(world)

        # Young plants always put out at least one part per check.
        if len(self.stem) < C.PLANT_BOOTSTRAP_MIN_STEM or len(self.roots) < C.PLANT_BOOTSTRAP_MIN_ROOTS:
            self.grow(world)

        self.absorb_resources(world)

    def absorb_resources(self, world):
        """Draws moisture from dirt and water under each root, and nutrients from dirt."""
        for root in self.roots:
            tile = world.get_tile(self.x + root.x, self.y + root.y)
            if tile is None or tile.type not in (C.TILE_DIRT, C.TILE_WATER):
                continue
            tile.moisture = max(0.0, tile.moisture - min(tile.moisture, self.water_absorption))
            if tile.type == C.TILE_DIRT:
                tile.nutrients = max(0.0, tile.nutrients - min(tile.nutrients, self.nutrient_absorption))

    def check_environment(self, world):
        """Adjusts health from soil conditions. Returns whether the plant is still alive."""
        moisture_factor = self.calculate_moisture_factor(world)
        nutrient_factor = self.calculate_nutrient_factor(world)

        if moisture_factor < C.PLANT_STRESS_FACTOR_THRESHOLD or nutrient_factor < C.PLANT_STRESS_FACTOR_THRESHOLD:
            self.health = max(0.0, self.health - C.PLANT_STRESS_HEALTH_LOSS)
        elif moisture_factor > C.PLANT_THRIVE_FACTOR_THRESHOLD and nutrient_factor > C.PLANT_THRIVE_FACTOR_THRESHOLD:
            self.health = min(C.PLANT_MAX_HEALTH, self.health + C.PLANT_THRIVE_HEALTH_GAIN)

        if self.health <= 0:
            if self._is_debug_focused(world):
                log.log(f"DEATH ({self.id}): Died from poor soil. Moisture factor {moisture_factor:.2f}, nutrient factor {nutrient_factor:.2f}.")
            return False
        return True

    # --- Growth state machine ---
    def grow(self, world):
        is_debug_focused = self._is_debug_focused(world)

        if self.stage == C.STAGE_SEED:
            if random.random() < C.SEED_ROOT_CHANCE:
                self.grow_root(world, 0, 1, size=C.SEED_ROOT_SIZE)
                self._advance_stage(C.STAGE_GERMINATION, is_debug_focused)
                self._grow_cotyledons()

        elif self.stage == C.STAGE_GERMINATION:
            if random.random() < C.GERMINATION_STEM_CHANCE:
                self.grow_stem(0, -len(self.stem) - 1, size=C.GERMINATION_STEM_SIZE)
                if len(self.stem) >= C.GERMINATION_SAPLING_STEM_COUNT:
                    self._advance_stage(C.STAGE_SAPLING, is_debug_focused)
            else:
                self.grow_root(world, random.randint(-1, 1), random.randint(1, 2), size=C.GERMINATION_ROOT_SIZE)

        elif self.stage == C.STAGE_SAPLING:
            if random.random() < C.SAPLING_STEM_CHANCE:
                size = C.SAPLING_STEM_BASE_SIZE + self.age * C.SAPLING_STEM_AGE_FACTOR
                self.grow_stem(0, -len(self.stem) - 1, size=size)
            elif len(self.stem) >= C.SAPLING_MIN_STEM_FOR_BRANCHES:
                self._grow_branch_pair(world, C.SAPLING_BRANCH_SIDE_CHANCE, C.SAPLING_BRANCH_SIZE)

            if len(self.stem) >= C.SAPLING_JUVENILE_STEM_COUNT and len(self.branches) >= C.SAPLING_JUVENILE_BRANCH_COUNT:
                self._advance_stage(C.STAGE_JUVENILE, is_debug_focused)

        elif self.stage == C.STAGE_JUVENILE:
            growth = random.random()
            if growth < C.JUVENILE_STEM_CHANCE:
                size = C.JUVENILE_STEM_BASE_SIZE + self.age * C.JUVENILE_STEM_AGE_FACTOR
                self.grow_stem(0, -len(self.stem) - 1, size=size)
            elif growth < C.JUVENILE_BRANCH_CHANCE:
                if self.branches and random.random() < C.JUVENILE_SUB_BRANCH_CHANCE:
                    self._grow_side_shoot(world)
                else:
                    self._grow_branch_pair(world, C.JUVENILE_BRANCH_SIDE_CHANCE, C.JUVENILE_BRANCH_SIZE)
            else:
                dx = random.randint(-C.JUVENILE_ROOT_SPREAD, C.JUVENILE_ROOT_SPREAD)
                dy = self.root_depth + random.randint(0, C.JUVENILE_ROOT_DEPTH_RANGE - 1)
                self.grow_root(world, dx, dy, advanced=True)

        # MATURE and ADVANCED have no growth rules of their own yet.

    def _grow_branch_pair(self, world, side_chance, size):
        """Tries a branch on each side of the stem, each with side_chance."""
        for side in (1, -1):
            if random.random() < side_chance:
                stem_y = -int(random.random() * len(self.stem))
                self.grow_branch(world, side, stem_y, size=size, color=C.COLOR_PLANT_BRANCH_YOUNG)

    def _grow_side_shoot(self, world):
        """Grows a sub-branch on a random branch, or sometimes a tertiary branch on one of its sub-branches."""
        branch = random.choice(self.branches)
        if branch.sub_branches and random.random() < C.JUVENILE_TERTIARY_CHANCE:
            sub_branch = random.choice(branch.sub_branches)
            return self.grow_tertiary_branch(world, sub_branch.part_id)
        side = random.choice((-1, 1))
        angle = math.pi / 2 * random.choice((1, -1))
        return self.grow_sub_branch(world, side, branch.part_id, angle=angle)

    def _grow_cotyledons(self):
        """The two seed leaves that open as the seed germinates."""
        for side in (-1, 1):
            self.grow_leaf(side * C.COTYLEDON_OFFSET_X, -1, leaf_type=C.LEAF_COTYLEDON,
                           size=C.COTYLEDON_SIZE, angle=side * math.pi / 4)

    # --- Growth operations ---
    def grow_stem(self, dx, dy, size=None, color=None, woody=False, curved=False):
        """
        Adds a stem segment at height dy. The stem is always a single vertical
        column, so dx is ignored. Growing where a segment already exists returns
        that segment.
        """
        new_x = 0
        existing = next((segment for segment in self.stem if segment.x == new_x and segment.y == dy), None)
        if existing is not None:
            return existing

        stem_color = C.COLOR_PLANT_STEM_YOUNG
        if self.stage >= C.STAGE_JUVENILE:
            stem_color = C.COLOR_PLANT_STEM
        if self.stage >= C.STAGE_ADVANCED:
            stem_color = C.COLOR_PLANT_STEM_WOODY
        if color is not None:
            stem_color = color

        # Stems thicken with stage, and the lowest segments are thicker still.
        stem_size = C.STEM_BASE_SIZE + self.stage * C.STEM_STAGE_SIZE_FACTOR
        if len(self.stem) < C.STEM_BASE_SEGMENT_COUNT:
            stem_size += C.STEM_BASE_SEGMENT_BONUS + self.stage * C.STEM_BASE_SEGMENT_STAGE_FACTOR
        if size is not None:
            stem_size = size

        segment = StemSegment(self._new_part_id(), new_x, dy, stem_size, stem_color, woody=woody, curved=curved)

        if self.stage >= C.STAGE_GERMINATION:
            pair_count = C.STEM_CONNECTION_PAIRS_MIN + random.randint(0, C.STEM_CONNECTION_PAIRS_RANGE - 1)
            for i in range(pair_count):
                position = C.STEM_CONNECTION_FIRST_POSITION + i * C.STEM_CONNECTION_SPACING
                segment.branch_points.append(ConnectionPoint(position, side=-1))
                segment.branch_points.append(ConnectionPoint(position + C.STEM_CONNECTION_RIGHT_OFFSET, side=1))

        self._add(self.stem, segment)

        if dy < 0 and -dy > self.height:
            self.height = -dy
        return segment

    def _score_root_neighbors(self, world, world_x, world_y):
        """Scores the tiles around a new root; the best places for further roots come first."""
        scores = []
        radius = C.ROOT_NEIGHBOR_RADIUS
        for ny in range(world_y - radius, world_y + radius + 1):
            for nx in range(world_x - radius, world_x + radius + 1):
                if nx == world_x and ny == world_y:
                    continue
                tile = world.get_tile(nx, ny)
                if tile is None:
                    continue

                score = 0.0
                if tile.moisture > C.ROOT_SCORE_THRESHOLD:
                    score += tile.moisture / C.ROOT_SCORE_DIVISOR
                if tile.nutrients > C.ROOT_SCORE_THRESHOLD:
                    score += tile.nutrients / C.ROOT_SCORE_DIVISOR
                if tile.type != C.TILE_ROOT:
                    score += C.ROOT_SCORE_UNROOTED_BONUS
                if ny > world_y:
                    score += C.ROOT_SCORE_DOWNWARD_BONUS
                score += math.hypot(nx - self.x, ny - self.y) * C.ROOT_SCORE_DISTANCE_FACTOR
                scores.append((score, nx - self.x, ny - self.y))

        scores.sort(key=lambda entry: entry[0], reverse=True)
        return [(dx, dy) for _, dx, dy in scores]

    def grow_root(self, world, dx, dy, size=None, color=None, advanced=False):
        """
        Grows a root at offset (dx, dy) from the anchor. Stone cannot be rooted
        into; any other tile there becomes a ROOT tile. Advanced roots carry
        absorption zones and may schedule up to two more roots in the best
        neighbouring spots. Returns the root, or None when refused.
        """
        is_debug_focused = self._is_debug_focused(world)
        world_x = self.x + dx
        world_y = self.y + dy

        tile = world.get_tile(world_x, world_y)
        if tile is not None:
            if tile.type == C.TILE_STONE:
                if is_debug_focused: log.log(f"DEBUG ({self.id}): Cannot grow root into stone at ({world_x}, {world_y}).")
                return None
            tile.type = C.TILE_ROOT

        best_offsets = self._score_root_neighbors(world, world_x, world_y)

        existing = next((root for root in self.roots if root.x == dx and root.y == dy), None)
        if existing is not None:
            if size is not None:
                existing.size = size
            if color is not None:
                existing.color = color
            return existing

        if advanced:
            root_size = C.ROOT_ADVANCED_SIZE
            root_color = C.COLOR_PLANT_ROOT_ADVANCED
        else:
            root_size = size if size is not None else C.ROOT_DEFAULT_SIZE
            root_color = color if color is not None else C.COLOR_PLANT_ROOT

        root = Root(self._new_part_id(), dx, dy, root_size, root_color, advanced=advanced)
        if advanced:
            zone_count = C.ROOT_ABSORPTION_ZONES_MIN + random.randint(0, C.ROOT_ABSORPTION_ZONES_RANGE - 1)
            for i in range(zone_count):
                angle = 2 * math.pi / zone_count * i
                root.absorption.append(AbsorptionZone(
                    math.cos(angle) * C.ROOT_ABSORPTION_ZONE_RADIUS,
                    math.sin(angle) * C.ROOT_ABSORPTION_ZONE_RADIUS,
                    C.ROOT_ABSORPTION_ZONE_MIN_SIZE + random.random() * C.ROOT_ABSORPTION_ZONE_SIZE_RANGE,
                    C.ROOT_ABSORPTION_MIN_EFFICIENCY + random.random() * C.ROOT_ABSORPTION_EFFICIENCY_RANGE))
        self._add(self.roots, root)

        if dy > self.root_depth:
            self.root_depth = dy

        if is_debug_focused:
            log.log(f"DEBUG ({self.id}): Grew {'advanced ' if advanced else ''}root at ({dx}, {dy}). Root depth {self.root_depth}.")

        # --- Deferred follow-up roots ---
        if advanced and best_offsets and random.random() < C.ROOT_SECOND_GROWTH_CHANCE:
            next_dx, next_dy = best_offsets[min(1, len(best_offsets) - 1)]
            if (next_dx, next_dy) != (dx, dy):
                world.schedule_growth(self, "grow_root", next_dx, next_dy,
                                      size=root_size - 1, advanced=random.random() < C.ROOT_SECOND_ADVANCED_CHANCE)

        if advanced and len(best_offsets) > 2 and random.random() < C.ROOT_THIRD_GROWTH_CHANCE:
            third_dx, third_dy = best_offsets[min(2, len(best_offsets) - 1)]
            if (third_dx, third_dy) != (dx, dy):
                world.schedule_growth(self, "grow_root", third_dx, third_dy, size=root_size - 2, advanced=False)

        return root

    def grow_branch(self, world, side, stem_y, size=None, color=None, add_leaf=True, complex=False):
        """
        Grows a branch off the stem segment at stem_y on the given side. When no
        slot is usable, an unextended branch already at that height is
        lengthened instead. Returns the new or extended branch, or None.
        """
        is_debug_focused = self._is_debug_focused(world)
        segment = next((s for s in self.stem if s.y == stem_y), None)
        if segment is None:
            if is_debug_focused: log.log(f"DEBUG ({self.id}): No stem segment at y={stem_y} for a branch.")
            return None

        nearby = [b for b in self.branches
                  if abs(b.y - stem_y) < C.BRANCH_NEARBY_DISTANCE and _sign(b.x) == side]
        angle = choose_branch_angle([b.angle for b in nearby])

        slot_index = None
        if angle is not None:
            free_slots = [i for i, point in enumerate(segment.branch_points)
                          if point.side == side and not point.occupied]
            if free_slots:
                slot_index = max(free_slots, key=lambda i: segment.branch_points[i].position)

        if slot_index is None:
            return self._extend_branch(side, stem_y, is_debug_focused)

        point = segment.branch_points[slot_index]
        length = C.BRANCH_MIN_LENGTH + random.random() * C.BRANCH_LENGTH_RANGE
        if color is None:
            color = C.COLOR_PLANT_STEM_WOODY if self.stage >= C.STAGE_ADVANCED else C.COLOR_PLANT_BRANCH_YOUNG

        branch = Branch(self._new_part_id(), segment.part_id, slot_index,
                        start_x=side * C.BRANCH_START_OFFSET_X,
                        start_y=stem_y + point.position - 0.5,
                        x=side * math.cos(angle) * length,
                        y=stem_y + math.sin(angle) * length,
                        size=size if size is not None else C.BRANCH_DEFAULT_SIZE,
                        color=color, angle=angle, complex=complex)

        leaf_point_count = C.BRANCH_LEAF_POINTS_MIN + random.randint(0, C.BRANCH_LEAF_POINTS_RANGE - 1)
        for i in range(leaf_point_count):
            t = C.BRANCH_LEAF_POINTS_START + i * (C.BRANCH_LEAF_POINTS_SPAN / (leaf_point_count - 1))
            branch.leaf_points.append(ConnectionPoint(t))

        sub_point_count = C.BRANCH_SUB_POINTS_MIN + random.randint(0, C.BRANCH_SUB_POINTS_RANGE - 1)
        for i in range(sub_point_count):
            t = C.BRANCH_SUB_POINTS_START + i * (C.BRANCH_SUB_POINTS_SPAN / sub_point_count)
            branch.sub_branch_points.append(ConnectionPoint(t, side=1 if i % 2 == 0 else -1))

        self._add(self.branches, branch)
        self.branch_count += 1
        point.occupy(branch.part_id)

        if is_debug_focused:
            log.log(f"DEBUG ({self.id}): Grew branch {branch.part_id} on side {side} at y={stem_y}, angle {math.degrees(angle):.0f}.")

        if add_leaf:
            world.schedule_growth(self, "_grow_branch_leaves", branch.part_id)
        return branch

    def _extend_branch(self, side, stem_y, is_debug_focused):
        existing = next((b for b in self.branches
                         if b.y == stem_y and _sign(b.x) == side and not b.extended), None)
        if existing is None:
            if is_debug_focused: log.log(f"DEBUG ({self.id}): No free branch slot at y={stem_y}, side {side}.")
            return None

        existing.x += side * (C.BRANCH_EXTENSION_MIN + random.random() * C.BRANCH_EXTENSION_RANGE)
        existing.extended = True
        new_points = C.BRANCH_EXTENSION_POINTS_MIN + random.randint(0, C.BRANCH_EXTENSION_POINTS_RANGE - 1)
        for i in range(new_points):
            existing.leaf_points.append(ConnectionPoint(C.BRANCH_EXTENSION_POINTS_START + i * C.BRANCH_EXTENSION_POINTS_SPACING))
        return existing

    def _grow_branch_leaves(self, world, branch_id):
        """Deferred: a leaf at the branch tip and, often, one part way along it."""
        branch = self.get_part(branch_id)
        if branch is None:
            return

        if not branch.end_point.occupied:
            self.grow_leaf(branch.x, branch.y,
                           leaf_type=choose_leaf_type(self.stage, random.random()),
                           size=C.BRANCH_TIP_LEAF_SIZE,
                           angle=branch.angle + random.uniform(-C.BRANCH_LEAF_ANGLE_JITTER, C.BRANCH_LEAF_ANGLE_JITTER),
                           parent_id=branch.part_id, slot=END_SLOT)

        slot = next((i for i, point in enumerate(branch.leaf_points) if not point.occupied), None)
        if slot is not None and random.random() < C.BRANCH_MID_LEAF_CHANCE:
            leaf_x, leaf_y = point_along(branch, branch.leaf_points[slot].t)
            self.grow_leaf(leaf_x, leaf_y,
                           leaf_type=choose_leaf_type(self.stage, random.random()),
                           size=C.BRANCH_MID_LEAF_SIZE,
                           angle=branch.angle + random.uniform(-C.BRANCH_LEAF_ANGLE_JITTER, C.BRANCH_LEAF_ANGLE_JITTER),
                           parent_id=branch.part_id, slot=slot)

    def grow_sub_branch(self, world, side, parent_branch_id, angle=None):
        """
        Grows a sub-branch from a free slot on a branch, preferring slots on the
        requested side that keep some distance from occupied ones.
        """
        parent = self.get_part(parent_branch_id)
        if parent is None or parent.kind != C.PART_BRANCH:
            return None

        points = parent.sub_branch_points
        occupied = [p for p in points if p.occupied]
        slot_index = next((i for i, p in enumerate(points)
                           if p.side == side and not p.occupied
                           and all(abs(o.t - p.t) >= C.SUB_BRANCH_MIN_SPACING for o in occupied)), None)
        if slot_index is None:
            slot_index = next((i for i, p in enumerate(points) if not p.occupied), None)
        if slot_index is None:
            if self._is_debug_focused(world): log.log(f"DEBUG ({self.id}): Branch {parent_branch_id} has no free sub-branch slot.")
            return None

        point = points[slot_index]
        start_x, start_y = point_along(parent, point.t)
        length = C.SUB_BRANCH_MIN_LENGTH + random.random() * C.SUB_BRANCH_LENGTH_RANGE
        if angle is None:
            angle = random.choice((math.pi / 2, -math.pi / 2))

        sub_branch = SubBranch(self._new_part_id(), parent.part_id, slot_index,
                               start_x, start_y,
                               start_x + math.cos(angle) * length,
                               start_y + math.sin(angle) * length,
                               size=parent.size * C.SUB_BRANCH_SIZE_FACTOR,
                               color=parent.color, angle=angle, length=length)

        leaf_point_count = C.SUB_BRANCH_LEAF_POINTS_MIN + random.randint(0, C.SUB_BRANCH_LEAF_POINTS_RANGE - 1)
        for i in range(leaf_point_count):
            sub_branch.leaf_points.append(ConnectionPoint(
                C.SUB_BRANCH_LEAF_POINTS_START + i * C.SUB_BRANCH_LEAF_POINTS_SPAN / leaf_point_count))

        tertiary_point_count = C.SUB_BRANCH_TERTIARY_POINTS_MIN + random.randint(0, C.SUB_BRANCH_TERTIARY_POINTS_RANGE - 1)
        for i in range(tertiary_point_count):
            sub_branch.tertiary_points.append(ConnectionPoint(
                C.SUB_BRANCH_TERTIARY_POINTS_START + i * C.SUB_BRANCH_TERTIARY_POINTS_SPACING))

        parent.sub_branches.append(sub_branch)
        self._parts[sub_branch.part_id] = sub_branch
        point.occupy(sub_branch.part_id)

        if random.random() < C.SUB_BRANCH_TIP_LEAF_CHANCE:
            world.schedule_growth(self, "_grow_sub_branch_leaf", sub_branch.part_id)
        return sub_branch

    def _grow_sub_branch_leaf(self, world, sub_branch_id):
        sub_branch = self.get_part(sub_branch_id)
        if sub_branch is None or sub_branch.end_point.occupied:
            return
        leaf_type = C.LEAF_DETAILED if self.stage >= C.STAGE_JUVENILE else C.LEAF_SIMPLE
        self.grow_leaf(sub_branch.x, sub_branch.y, leaf_type=leaf_type, size=C.SUB_BRANCH_LEAF_SIZE,
                       angle=sub_branch.angle + random.uniform(-C.BRANCH_LEAF_ANGLE_JITTER, C.BRANCH_LEAF_ANGLE_JITTER),
                       parent_id=sub_branch.part_id, slot=END_SLOT)

    def grow_tertiary_branch(self, world, parent_sub_branch_id):
        """Grows a short twig at 45 degrees off a sub-branch, with room for a single leaf."""
        parent = self.get_part(parent_sub_branch_id)
        if parent is None or parent.kind != C.PART_SUB_BRANCH:
            return None

        slot_index = next((i for i, p in enumerate(parent.tertiary_points) if not p.occupied), None)
        if slot_index is None:
            return None

        point = parent.tertiary_points[slot_index]
        start_x, start_y = point_along(parent, point.t)
        angle = parent.angle + random.choice((1, -1)) * C.TERTIARY_ANGLE_OFFSET
        length = C.TERTIARY_MIN_LENGTH + random.random() * C.TERTIARY_LENGTH_RANGE

        tertiary = TertiaryBranch(self._new_part_id(), parent.part_id, slot_index,
                                  start_x, start_y,
                                  start_x + math.cos(angle) * length,
                                  start_y + math.sin(angle) * length,
                                  size=parent.size * C.TERTIARY_SIZE_FACTOR,
                                  color=parent.color, angle=angle, length=length)
        tertiary.leaf_points.append(ConnectionPoint(C.TERTIARY_LEAF_POINT))

        parent.tertiary_branches.append(tertiary)
        self._parts[tertiary.part_id] = tertiary
        point.occupy(tertiary.part_id)

        if random.random() < C.TERTIARY_LEAF_CHANCE and self.leaf_count < C.TERTIARY_MAX_LEAVES:
            world.schedule_growth(self, "_grow_tertiary_leaf", tertiary.part_id)
        return tertiary

    def _grow_tertiary_leaf(self, world, tertiary_id):
        tertiary = self.get_part(tertiary_id)
        if tertiary is None or self.leaf_count >= C.TERTIARY_MAX_LEAVES:
            return
        leaf_x, leaf_y = point_along(tertiary, tertiary.leaf_points[0].t)
        self.grow_leaf(leaf_x, leaf_y, leaf_type=C.LEAF_SIMPLE, size=C.TERTIARY_LEAF_SIZE,
                       parent_id=tertiary.part_id, slot=0)

    def grow_leaf(self, dx, dy, leaf_type=C.LEAF_SIMPLE, size=None, color=None, angle=None,
                  parent_id=None, slot=None, stem_length=None):
        """
        Adds a leaf at (dx, dy). A leaf attached to a part takes that part's slot,
        faces outward from it and gets a small connector. Returns None if the
        parent or its slot is missing or the slot is already taken.
        """
        parent = None
        point = None
        if parent_id is not None:
            parent = self.get_part(parent_id)
            if parent is None:
                return None
            if slot is not None:
                point = parent.get_slot(slot)
                if point is None or point.occupied:
                    return None

        if any(abs(leaf.x - dx) < C.LEAF_OVERLAP_DISTANCE and abs(leaf.y - dy) < C.LEAF_OVERLAP_DISTANCE
               for leaf in self.leaves):
            dx += random.uniform(-C.LEAF_JITTER, C.LEAF_JITTER)
            dy += random.uniform(-C.LEAF_JITTER, C.LEAF_JITTER)

        leaf = Leaf(self._new_part_id(), dx, dy, leaf_type,
                    size=size if size is not None else C.LEAF_DEFAULT_SIZE,
                    color=color if color is not None else C.COLOR_PLANT_LEAF,
                    angle=angle if angle is not None else random.uniform(-math.pi / 2, math.pi / 2),
                    stem_length=stem_length if stem_length is not None
                    else C.LEAF_MIN_STEM_LENGTH + random.random() * C.LEAF_STEM_LENGTH_RANGE,
                    parent_id=parent_id, slot=slot)

        if parent is not None:
            self._add(self.connectors, Connector(self._new_part_id(), dx, dy,
                                                 leaf.size * C.LEAF_CONNECTOR_RADIUS_FACTOR,
                                                 C.COLOR_PLANT_BRANCH_YOUNG, is_leaf_connector=True))
            leaf.angle = leaf_orientation(parent, leaf.x, leaf.y)
            if point is not None:
                point.occupy(leaf.part_id)

        self._add(self.leaves, leaf)
        self.leaf_count += 1
        return leaf

    def update_leaf_orientations(self):
        """Keeps attached leaves facing outward as their branches change."""
        for leaf in self.leaves:
            if leaf.parent_id is None:
                continue
            parent = self.get_part(leaf.parent_id)
            if parent is not None:
                leaf.angle = leaf_orientation(parent, leaf.x, leaf.y)

    def __repr__(self):
        return (f"Plant(id={self.id}, at=({self.x}, {self.y}), stage={C.STAGE_NAMES[self.stage]}, "
                f"health={self.health:.1f}, parts={self.part_count()})")
