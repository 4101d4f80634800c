import math

import pytest

import constants as C
import logger
from camera import Camera
from time_manager import TimeManager


def make_camera():
    return Camera(200, 100, ground_level=40, view_width=320, view_height=320)


def test_camera_starts_near_ground() -> None:
    camera = make_camera()
    assert camera.y == 40 - C.CAMERA_GROUND_MARGIN_ROWS
    assert camera.zoom == C.CAMERA_DEFAULT_ZOOM


def test_non_finite_values_are_replaced() -> None:
    camera = make_camera()
    camera.x = math.nan
    camera.y = math.inf
    camera.zoom = math.nan

    assert camera.world_to_screen(0, 0) == (0.0, 0.0)
    assert (camera.x, camera.y, camera.zoom) == (C.CAMERA_DEFAULT_X, C.CAMERA_DEFAULT_Y, C.CAMERA_DEFAULT_ZOOM)


def test_zero_zoom_is_replaced() -> None:
    camera = make_camera()
    camera.zoom = 0
    assert camera.scale(2) == 2 * C.CAMERA_DEFAULT_ZOOM


def test_zoom_is_bounded() -> None:
    camera = make_camera()
    for _ in range(50):
        camera.zoom_by(C.CAMERA_ZOOM_STEP)
    assert camera.zoom == C.CAMERA_MAX_ZOOM
    for _ in range(50):
        camera.zoom_by(-C.CAMERA_ZOOM_STEP)
    assert camera.zoom == C.CAMERA_MIN_ZOOM


def test_move_is_clamped_to_the_world() -> None:
    camera = make_camera()
    camera.move(-1000, -1000)
    assert (camera.x, camera.y) == (0.0, 0.0)
    camera.move(10_000, 10_000)
    assert camera.x == 200 - camera.visible_width()
    assert camera.y == 100 - camera.visible_height()


def test_screen_and_world_coordinates_round_trip() -> None:
    camera = make_camera()
    camera.move(3, 4)
    screen_x, screen_y = camera.world_to_screen(12, 20)
    assert camera.screen_to_world(screen_x + 1, screen_y + 1) == (12, 20)


def test_reset_returns_to_default_view() -> None:
    camera = make_camera()
    camera.move(50, 20)
    camera.zoom_by(0.5)
    camera.reset()
    assert camera.x == 0.0
    assert camera.zoom == C.CAMERA_DEFAULT_ZOOM


def test_hour_and_day_are_derived_from_game_time() -> None:
    tm = TimeManager()
    assert tm.current_hour == C.STARTING_HOUR
    assert tm.current_day == 1
    assert tm.is_daytime()

    tm.advance(13 * C.HOUR_LENGTH_MS)
    assert tm.current_hour == pytest.approx(19.0)
    assert not tm.is_daytime()

    tm.advance(C.DAY_LENGTH_MS)
    assert tm.current_day == 2


def test_clock_never_runs_backwards() -> None:
    tm = TimeManager()
    tm.advance(500)
    tm.advance(-200)
    assert tm.game_time == 500


def test_pause_and_speed() -> None:
    tm = TimeManager()
    assert tm.get_scaled_delta_time(100) == 100 * C.TIME_MULTIPLIERS[C.DEFAULT_TIME_MULTIPLIER_LEVEL]

    tm.set_speed(3)
    assert tm.get_scaled_delta_time(100) == 100 * C.TIME_MULTIPLIERS[3]
    tm.set_speed(42)
    assert tm.time_multiplier_level == 3

    tm.toggle_pause()
    assert tm.get_scaled_delta_time(100) == 0.0
    assert "PAUSED" in tm.get_display_string()


def test_display_string() -> None:
    tm = TimeManager()
    assert tm.get_display_string().startswith("Day 1, 6:00 AM")


def test_log_timestamps(capsys) -> None:
    logger.log("before the clock")
    tm = TimeManager()
    logger.set_time_manager(tm)
    tm.advance(C.DAY_LENGTH_MS + 90 * C.HOUR_LENGTH_MS / 60)
    logger.log("after")

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "[Sim Start] before the clock"
    assert out[1] == "[Day 002 07:30] after"
