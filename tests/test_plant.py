import math

import pytest

import constants as C
from genes import PlantGenes
from plant import Plant
from plant_parts import END_SLOT


def add_plant(world, x=10):
    plant = Plant(world, x, world.ground_level - 1)
    world.plant_manager.add_plant(plant)
    world.get_tile(plant.x, plant.y).has_plant = True
    return plant


def set_hour(world, hour):
    world.time_manager.game_time = ((hour - C.STARTING_HOUR) % C.HOURS_PER_DAY) * C.HOUR_LENGTH_MS


def test_new_plant_starts_as_a_seed(world) -> None:
    plant = add_plant(world)

    assert plant.stage == C.STAGE_SEED
    assert plant.health == C.PLANT_INITIAL_HEALTH
    assert [(s.x, s.y) for s in plant.stem] == [(0, 0), (0, -1)]
    assert [(r.x, r.y) for r in plant.roots] == [(0, 0)]
    assert len(plant.connectors) == 1
    assert plant.growth_rate == world.branch_growth_rate


def test_part_ids_are_unique_and_resolvable(world) -> None:
    plant = add_plant(world)
    parts = plant.roots + plant.stem + plant.connectors
    ids = [part.part_id for part in parts]
    assert len(ids) == len(set(ids))
    for part in parts:
        assert plant.get_part(part.part_id) is part
    assert plant.get_part(10_000) is None


def test_genes_drive_growth_rate() -> None:
    genes = PlantGenes(growth_rate=1.5)
    assert genes.growth_rate == 1.5
    assert genes.water_absorption == C.PLANT_WATER_ABSORPTION
    assert genes.growth_check_interval == C.PLANT_GROWTH_CHECK_INTERVAL_MS


def test_custom_genes_are_used(world) -> None:
    plant = Plant(world, 3, world.ground_level - 1, genes=PlantGenes(growth_rate=0.9))
    assert plant.growth_rate == 0.9
    plant.growth_rate = 0.2
    assert plant.genes.growth_rate == 0.2


def test_sunlight_factor_follows_the_day(world) -> None:
    plant = add_plant(world)

    set_hour(world, 12)
    assert plant.calculate_sunlight_factor(world) == pytest.approx(1.0)
    set_hour(world, 9)
    assert plant.calculate_sunlight_factor(world) == pytest.approx(0.75)
    set_hour(world, 22)
    assert plant.calculate_sunlight_factor(world) == pytest.approx(C.PLANT_NIGHT_SUNLIGHT_FACTOR)


def test_soil_factors_are_normalized(make_world) -> None:
    wet = make_world(moisture=90.0, nutrients=20.0)
    plant = add_plant(wet)
    assert plant.calculate_moisture_factor(wet) == 1.0
    assert plant.calculate_nutrient_factor(wet) == pytest.approx(20.0 / C.PLANT_FACTOR_NORMALIZER)


def test_poor_soil_costs_health(make_world) -> None:
    dry = make_world(moisture=5.0, nutrients=5.0)
    plant = add_plant(dry)
    assert plant.check_environment(dry)
    assert plant.health == pytest.approx(C.PLANT_INITIAL_HEALTH - C.PLANT_STRESS_HEALTH_LOSS)


def test_good_soil_restores_health_up_to_max(world) -> None:
    plant = add_plant(world)
    plant.health = 50.0
    plant.check_environment(world)
    assert plant.health == pytest.approx(50.0 + C.PLANT_THRIVE_HEALTH_GAIN)

    plant.health = C.PLANT_MAX_HEALTH
    plant.check_environment(world)
    assert plant.health == C.PLANT_MAX_HEALTH


def test_dead_plant_stays_dead(world) -> None:
    plant = add_plant(world)
    plant.health = 0
    assert plant.update(world, world.game_time + 5 * C.DAY_LENGTH_MS) is False
    assert plant.health == 0
    assert not plant.is_alive


def test_absorption_never_drives_resources_negative(world) -> None:
    plant = add_plant(world)
    tile = world.get_tile(plant.x, plant.y)
    tile.moisture = 0.2
    tile.nutrients = 0.1

    plant.absorb_resources(world)

    assert tile.moisture == 0.0
    assert tile.nutrients == 0.0


def test_water_roots_only_take_moisture(world) -> None:
    plant = add_plant(world)
    tile = world.get_tile(plant.x, plant.y)
    tile.type = C.TILE_WATER
    tile.moisture = 50.0
    tile.nutrients = 40.0

    plant.absorb_resources(world)

    assert tile.moisture == pytest.approx(50.0 - C.PLANT_WATER_ABSORPTION)
    assert tile.nutrients == 40.0


def test_seed_germinates_with_cotyledons(world) -> None:
    plant = add_plant(world)
    for _ in range(50):
        plant.grow(world)
        if plant.stage == C.STAGE_GERMINATION:
            break

    assert plant.stage == C.STAGE_GERMINATION
    assert any((r.x, r.y) == (0, 1) for r in plant.roots)
    cotyledons = [leaf for leaf in plant.leaves if leaf.leaf_type == C.LEAF_COTYLEDON]
    assert sorted(leaf.x for leaf in cotyledons) == pytest.approx([-C.COTYLEDON_OFFSET_X, C.COTYLEDON_OFFSET_X])
    assert all(leaf.y == -1 for leaf in cotyledons)


def test_seed_reaches_germination_within_a_few_days(world) -> None:
    set_hour(world, 8)
    world.plant_seed(10, world.ground_level - 1)
    plant = world.plant_manager.find_at(10, world.ground_level - 1)

    for _ in range(72):
        world.update(C.HOUR_LENGTH_MS)
        if plant.stage >= C.STAGE_GERMINATION:
            break
    assert plant.stage >= C.STAGE_GERMINATION


def test_growth_is_monotonic_over_many_ticks(world) -> None:
    world.plant_seed(12, world.ground_level - 1)
    plant = world.plant_manager.find_at(12, world.ground_level - 1)
    stage, height, depth = plant.stage, plant.height, plant.root_depth

    for _ in range(600):
        world.update(C.MAX_DELTA_MS)
        assert plant.stage >= stage
        assert plant.height >= height
        assert plant.root_depth >= depth
        stage, height, depth = plant.stage, plant.height, plant.root_depth

    assert plant.stage > C.STAGE_SEED
    assert len(plant.stem) > 2


def test_stage_is_never_lowered(world) -> None:
    plant = add_plant(world)
    plant.stage = C.STAGE_JUVENILE
    plant._advance_stage(C.STAGE_GERMINATION)
    assert plant.stage == C.STAGE_JUVENILE


def test_stem_segments_stack_upward(world) -> None:
    plant = add_plant(world)
    plant.stage = C.STAGE_GERMINATION
    segment = plant.grow_stem(0, -len(plant.stem) - 1)

    assert segment.y == -3
    assert plant.height == 3
    assert C.STEM_CONNECTION_PAIRS_MIN * 2 <= len(segment.branch_points) <= \
        (C.STEM_CONNECTION_PAIRS_MIN + C.STEM_CONNECTION_PAIRS_RANGE - 1) * 2
    assert plant.grow_stem(5, -3) is segment


def test_root_refused_by_stone(world) -> None:
    plant = add_plant(world)
    tile = world.get_tile(plant.x, plant.y + 1)
    tile.type = C.TILE_STONE
    root_count = len(plant.roots)

    assert plant.grow_root(world, 0, 1) is None
    assert tile.type == C.TILE_STONE
    assert len(plant.roots) == root_count
    assert plant.root_depth == C.PLANT_INITIAL_ROOT_DEPTH


def test_root_overwrites_terrain(world) -> None:
    plant = add_plant(world)
    tile = world.get_tile(plant.x, plant.y + 3)
    tile.type = C.TILE_MINERAL

    root = plant.grow_root(world, 0, 3)

    assert root is not None
    assert tile.type == C.TILE_ROOT
    assert plant.root_depth == 3


def test_growing_an_existing_root_updates_it(world) -> None:
    plant = add_plant(world)
    first = plant.grow_root(world, 1, 2, size=3)
    again = plant.grow_root(world, 1, 2, size=7)
    assert again is first
    assert first.size == 7


def test_advanced_root_has_absorption_zones(world) -> None:
    plant = add_plant(world)
    root = plant.grow_root(world, 0, 4, advanced=True)
    assert root.advanced
    assert root.size == C.ROOT_ADVANCED_SIZE
    assert C.ROOT_ABSORPTION_ZONES_MIN <= len(root.absorption) <= \
        C.ROOT_ABSORPTION_ZONES_MIN + C.ROOT_ABSORPTION_ZONES_RANGE - 1
    for zone in root.absorption:
        assert C.ROOT_ABSORPTION_MIN_EFFICIENCY <= zone.efficiency <= 1.0


def sapling(world):
    plant = add_plant(world)
    plant.stage = C.STAGE_SAPLING
    plant.grow_stem(0, -3)
    return plant


def test_first_branch_grows_horizontally_from_a_stem_slot(world) -> None:
    plant = sapling(world)
    segment = plant.stem[-1]

    branch = plant.grow_branch(world, 1, -3)

    assert branch.angle == 0.0
    assert branch.x > 0
    assert branch.stem_id == segment.part_id
    assert segment.branch_points[branch.slot_index].occupant_id == branch.part_id
    assert len(world.deferred_growth) == 1


def test_crowded_branch_extends_the_first(world) -> None:
    plant = sapling(world)
    first = plant.grow_branch(world, 1, -3)
    tip_x = first.x
    leaf_points = len(first.leaf_points)

    second = plant.grow_branch(world, 1, -3)

    assert second is first
    assert first.extended
    assert first.angle == 0.0
    assert first.x > tip_x
    assert len(first.leaf_points) > leaf_points
    assert len(plant.branches) == 1


def test_branch_extends_once_then_is_refused(world) -> None:
    plant = sapling(world)
    segment = plant.stem[-1]

    results = [plant.grow_branch(world, 1, -3, add_leaf=False) for _ in range(4)]

    assert results[0] is results[1]
    assert results[2:] == [None, None]
    assert len(plant.branches) == 1
    assert sum(p.occupied for p in segment.branch_points) == 1


def test_each_side_gets_its_own_horizontal_branch(world) -> None:
    plant = sapling(world)
    right = plant.grow_branch(world, 1, -3, add_leaf=False)
    left = plant.grow_branch(world, -1, -3, add_leaf=False)

    assert right is not left
    assert right.angle == left.angle == 0.0
    assert right.x > 0 > left.x


def test_branch_needs_a_stem_segment(world) -> None:
    plant = sapling(world)
    assert plant.grow_branch(world, 1, -20) is None


def test_branch_leaves_are_deferred(world) -> None:
    plant = sapling(world)
    branch = plant.grow_branch(world, -1, -3)
    assert not plant.leaves

    world._drain_deferred_growth()

    tip = [leaf for leaf in plant.leaves if leaf.slot == END_SLOT]
    assert len(tip) == 1
    assert tip[0].parent_id == branch.part_id
    assert branch.end_point.occupant_id == tip[0].part_id
    assert any(c.is_leaf_connector for c in plant.connectors)


def test_sub_branches_fill_distinct_slots(world) -> None:
    plant = sapling(world)
    branch = plant.grow_branch(world, 1, -3, add_leaf=False)

    subs = []
    while True:
        sub = plant.grow_sub_branch(world, 1, branch.part_id)
        if sub is None:
            break
        subs.append(sub)

    assert len(subs) == len(branch.sub_branch_points)
    assert len({sub.slot_index for sub in subs}) == len(subs)
    for sub in subs:
        assert sub.size == pytest.approx(branch.size * C.SUB_BRANCH_SIZE_FACTOR)
        assert branch.sub_branch_points[sub.slot_index].occupant_id == sub.part_id
        assert plant.get_part(sub.part_id) is sub


def test_sub_branch_rejects_non_branch_parent(world) -> None:
    plant = sapling(world)
    assert plant.grow_sub_branch(world, 1, plant.stem[0].part_id) is None
    assert plant.grow_sub_branch(world, 1, 999) is None


def test_tertiary_branch_angles_off_its_sub_branch(world) -> None:
    plant = sapling(world)
    branch = plant.grow_branch(world, 1, -3, add_leaf=False)
    sub = plant.grow_sub_branch(world, 1, branch.part_id, angle=math.pi / 2)

    tertiary = plant.grow_tertiary_branch(world, sub.part_id)

    assert abs(tertiary.angle - sub.angle) == pytest.approx(C.TERTIARY_ANGLE_OFFSET)
    assert tertiary.size == pytest.approx(sub.size * C.TERTIARY_SIZE_FACTOR)
    assert sub.tertiary_points[tertiary.slot_index].occupant_id == tertiary.part_id
    assert list(plant.iter_tertiary_branches()) == [tertiary]
    assert plant.grow_tertiary_branch(world, branch.part_id) is None


def test_leaf_slot_takes_one_leaf(world) -> None:
    plant = sapling(world)
    branch = plant.grow_branch(world, 1, -3, add_leaf=False)

    first = plant.grow_leaf(branch.x, branch.y, parent_id=branch.part_id, slot=END_SLOT)
    second = plant.grow_leaf(branch.x, branch.y, parent_id=branch.part_id, slot=END_SLOT)

    assert first is not None
    assert second is None
    assert plant.grow_leaf(0, 0, parent_id=branch.part_id, slot=99) is None
    assert plant.grow_leaf(0, 0, parent_id=12345) is None


def test_attached_leaf_faces_away_from_its_branch(world) -> None:
    plant = sapling(world)
    branch = plant.grow_branch(world, 1, -3, add_leaf=False)
    leaf = plant.grow_leaf(branch.x, branch.y, parent_id=branch.part_id, slot=END_SLOT)
    outward = math.atan2(branch.y - branch.start_y, branch.x - branch.start_x) + math.pi / 2
    assert leaf.angle == pytest.approx(outward)

    leaf.angle = 0.0
    plant.update_leaf_orientations()
    assert leaf.angle == pytest.approx(outward)
