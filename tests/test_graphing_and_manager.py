import matplotlib.pyplot as plt

import constants as C
from graphing_manager import GraphingManager
from plant import Plant
from plant_manager import PlantManager


def test_graph_is_skipped_without_data(tmp_path) -> None:
    manager = GraphingManager()
    assert manager.generate_and_save_graph(str(tmp_path / "graph.png")) is None


def test_graph_is_written_for_focused_plant(world, tmp_path) -> None:
    y = world.ground_level - 1
    world.plant_seed(5, y)
    plant = world.plant_manager.find_at(5, y)
    world.focus_plant_at(5, y)
    for _ in range(10):
        world.update(C.MAX_DELTA_MS)

    data = world.graphing_manager.data
    assert len(data['time_days']) == len(data['leaves']) >= 5
    assert data['stage'][-1] == plant.stage

    path = tmp_path / "graph.png"
    assert world.graphing_manager.generate_and_save_graph(str(path)) == str(path)
    assert path.stat().st_size > 0


def test_new_focus_clears_old_series(world) -> None:
    manager = world.graphing_manager
    manager.set_focused_plant(1)
    manager.add_data_point(1000, Plant(world, 1, world.ground_level - 1))
    manager.set_focused_plant(2)
    assert not manager.has_data()


def test_graph_save_failure_returns_none(world, tmp_path) -> None:
    manager = world.graphing_manager
    manager.add_data_point(0, Plant(world, 1, world.ground_level - 1))
    missing_dir = tmp_path / "missing" / "graph.png"
    assert manager.generate_and_save_graph(str(missing_dir)) is None


def test_stage_is_plotted_as_a_step_line(world) -> None:
    manager = world.graphing_manager
    plant = Plant(world, 1, world.ground_level - 1)
    manager.add_data_point(0, plant)
    plant.stage = C.STAGE_SAPLING
    manager.add_data_point(C.DAY_LENGTH_MS, plant)

    fig = manager.build_figure()
    try:
        lines = {line.get_label(): line for ax in fig.axes for line in ax.get_lines()}
        assert {'Health', 'Height', 'Leaves', 'Stage'} <= set(lines)
        assert list(lines['Stage'].get_ydata()) == [C.STAGE_SEED, C.STAGE_SAPLING]
        assert lines['Stage'].get_drawstyle() == 'steps-post'
    finally:
        plt.close(fig)


def test_manager_lookup_and_removal(world) -> None:
    manager = PlantManager()
    first = Plant(world, 2, 14)
    second = Plant(world, 9, 14)
    manager.add_plant(first)
    manager.add_plant(second)

    assert manager.find_at(9, 14) is second
    assert manager.find_at(3, 14) is None
    assert manager.find_nearest(8, 13, 3) is second
    assert manager.find_nearest(20, 14, 3) is None
    assert manager.find_by_id(first.id) is first
    assert manager[0] is first and len(manager) == 2

    assert manager.remove_plant(first)
    assert first not in manager
    assert not manager.remove_plant(first)


def test_stage_counts(world) -> None:
    manager = PlantManager()
    assert manager.get_population_summary() == "Population: 0 plants."
    for x, stage in ((1, C.STAGE_SEED), (2, C.STAGE_SAPLING), (3, C.STAGE_SAPLING)):
        plant = Plant(world, x, 14)
        plant.stage = stage
        manager.add_plant(plant)

    counts = manager.get_stage_counts()
    assert counts["seed"] == 1
    assert counts["sapling"] == 2
    assert counts["advanced"] == 0
    assert "3 plants" in manager.get_population_summary()
