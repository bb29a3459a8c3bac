"""Respawn timer model.

Pure functions with zero I/O: ``expected_respawn_seconds`` maps the floored
game minute, champion level and game mode to the modeled seconds spent dead.
"""

import math

ARAM_GAME_MODE = "ARAM"

# Base respawn wait by champion level (index 0 = level 1)
BASE_RESPAWN_SECONDS: tuple[float, ...] = (
    10, 10, 12, 12, 14, 16, 20, 25, 28, 32.5, 35, 37.5, 40, 42.5, 45, 47.5, 50, 52.5,
)  # fmt: skip

MAX_LEVEL = len(BASE_RESPAWN_SECONDS)
MAX_RAMP_FACTOR = 0.50


def respawn_ramp_factor(current_minute: int) -> float:
    """Time-increase factor applied on top of the base wait."""
    m = current_minute
    if m < 15:
        return 0.0
    if m < 30:
        return min(math.ceil(2 * (m - 15)) * 0.00425, 0.1275)
    if m < 45:
        return min(0.1275 + math.ceil(2 * (m - 30)) * 0.003, 0.2175)
    if m < 55:
        return min(0.2175 + math.ceil(2 * (m - 45)) * 0.0145, MAX_RAMP_FACTOR)
    return MAX_RAMP_FACTOR


def expected_respawn_seconds(current_minute: int, level: int, game_mode: str | None) -> float:
    """Expected seconds dead for a death at ``current_minute`` (floored).

    ARAM uses a flat ``2 * level + 4``. Other modes scale the base table by
    the ramp factor; levels outside 1..18 are clamped into the table.
    """
    if game_mode is not None and game_mode.upper() == ARAM_GAME_MODE:
        return float(2 * level + 4)

    clamped = max(1, min(level, MAX_LEVEL))
    base = BASE_RESPAWN_SECONDS[clamped - 1]
    return base * (1 + respawn_ramp_factor(current_minute))


def minute_of(timestamp_seconds: float) -> int:
    """Floored game minute for an in-game timestamp."""
    return math.floor(timestamp_seconds / 60)
