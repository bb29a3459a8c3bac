"""Respawn timer model."""

import pytest

from matchlens.core.timeline.death_timer import (
    BASE_RESPAWN_SECONDS,
    expected_respawn_seconds,
    minute_of,
    respawn_ramp_factor,
)


@pytest.mark.parametrize("level", range(1, 19))
@pytest.mark.parametrize("minute", [0, 14, 30, 60])
def test_aram_is_flat(level: int, minute: int) -> None:
    assert expected_respawn_seconds(minute, level, "ARAM") == 2 * level + 4


@pytest.mark.parametrize("level", range(1, 19))
def test_early_game_equals_base_table(level: int) -> None:
    for minute in range(0, 15):
        assert expected_respawn_seconds(minute, level, "CLASSIC") == BASE_RESPAWN_SECONDS[level - 1]


@pytest.mark.parametrize("level", range(1, 19))
def test_non_decreasing_in_minute_and_saturates(level: int) -> None:
    timers = [expected_respawn_seconds(m, level, "CLASSIC") for m in range(0, 80)]

    assert all(a <= b for a, b in zip(timers, timers[1:]))
    base = BASE_RESPAWN_SECONDS[level - 1]
    for minute in range(55, 80):
        assert expected_respawn_seconds(minute, level, "CLASSIC") == pytest.approx(base * 1.5)


def test_ramp_segment_boundaries() -> None:
    assert respawn_ramp_factor(14) == 0.0
    assert respawn_ramp_factor(15) == 0.0
    assert respawn_ramp_factor(16) == pytest.approx(0.0085)
    assert respawn_ramp_factor(30) == pytest.approx(0.1275)
    assert respawn_ramp_factor(31) == pytest.approx(0.1335)
    assert respawn_ramp_factor(45) == pytest.approx(0.2175)
    assert respawn_ramp_factor(46) == pytest.approx(0.2465)
    assert respawn_ramp_factor(55) == 0.5


def test_level_is_clamped_into_table() -> None:
    assert expected_respawn_seconds(0, 0, "CLASSIC") == BASE_RESPAWN_SECONDS[0]
    assert expected_respawn_seconds(0, 25, "CLASSIC") == BASE_RESPAWN_SECONDS[-1]


def test_game_mode_case_and_missing_mode() -> None:
    assert expected_respawn_seconds(20, 5, "aram") == 14
    assert expected_respawn_seconds(0, 5, None) == BASE_RESPAWN_SECONDS[4]


def test_minute_of_floors() -> None:
    assert minute_of(59.9) == 0
    assert minute_of(60) == 1
    assert minute_of(905) == 15
