"""Champion level history reconstructed from LEVEL_UP events."""

import logging
from bisect import bisect_right
from collections.abc import Iterable

from pydantic import ValidationError

from matchlens.contracts.events import EventType, LevelUpEvent
from matchlens.contracts.timeline import Frame
from matchlens.core.errors import MalformedTimelineError

logger = logging.getLogger(__name__)

STARTING_LEVEL = 1


class LevelTimeline:
    """Per-participant ordered ``(level, timestamp_seconds)`` transitions.

    Every participant starts implicitly at level 1 at time 0. An entry is
    accepted only when it raises the level by exactly one and is not earlier
    than the previous accepted entry.
    """

    def __init__(self) -> None:
        self._levels: dict[int, list[int]] = {}
        self._timestamps: dict[int, list[float]] = {}

    @classmethod
    def from_frames(cls, frames: Iterable[Frame]) -> "LevelTimeline":
        timeline = cls()
        for frame in frames:
            level_ups = []
            for raw in frame.events:
                if raw.get("type") != EventType.LEVEL_UP.value:
                    continue
                try:
                    level_ups.append(LevelUpEvent.model_validate(raw))
                except ValidationError as e:
                    raise MalformedTimelineError(f"Invalid LEVEL_UP event: {e}") from e
            # sorted() is stable, so equal timestamps keep payload order
            for event in sorted(level_ups, key=lambda ev: ev.timestamp):
                timeline.record(event.participant_id, event.level, event.timestamp_seconds)
        return timeline

    def record(self, participant_id: int, level: int, timestamp: float) -> bool:
        """Append a transition. Returns False when it was rejected."""
        levels = self._levels.setdefault(participant_id, [])
        timestamps = self._timestamps.setdefault(participant_id, [])
        current = levels[-1] if levels else STARTING_LEVEL
        if level != current + 1 or (timestamps and timestamp < timestamps[-1]):
            logger.debug(
                "Discarding level-up",
                extra={
                    "participant_id": participant_id,
                    "level": level,
                    "current_level": current,
                    "timestamp": timestamp,
                },
            )
            return False
        levels.append(level)
        timestamps.append(timestamp)
        return True

    def level_at(self, participant_id: int, timestamp: float) -> int:
        """Level of the latest transition at or before ``timestamp``."""
        timestamps = self._timestamps.get(participant_id)
        if not timestamps:
            return STARTING_LEVEL
        idx = bisect_right(timestamps, timestamp)
        if idx == 0:
            return STARTING_LEVEL
        return self._levels[participant_id][idx - 1]

    def history(self, participant_id: int) -> list[tuple[int, float]]:
        return list(
            zip(self._levels.get(participant_id, []), self._timestamps.get(participant_id, []))
        )
