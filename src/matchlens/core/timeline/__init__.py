from .death_timer import BASE_RESPAWN_SECONDS, expected_respawn_seconds, respawn_ramp_factor
from .levels import LevelTimeline

__all__ = [
    "BASE_RESPAWN_SECONDS",
    "LevelTimeline",
    "expected_respawn_seconds",
    "respawn_ramp_factor",
]
