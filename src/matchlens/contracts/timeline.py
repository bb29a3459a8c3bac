"""
Match Timeline data contracts for Riot API Match-V5.

Frames keep their events as raw dictionaries; typed parsing happens in the
analysis layer so that one unknown event kind does not reject a whole match.
"""

from typing import Any

from pydantic import Field

from .common import RiotPayload
from .match import MatchMetadata


class Frame(RiotPayload):
    """A single frame in the match timeline."""

    timestamp: int = Field(0, description="Frame timestamp in milliseconds")
    events: list[dict[str, Any]] = Field(
        default_factory=list, description="Events that occurred during this frame"
    )


class TimelineInfo(RiotPayload):
    """Timeline information containing frames."""

    frame_interval: int = Field(60000, alias="frameInterval")
    frames: list[Frame] = Field(..., min_length=1, description="List of all frames in the match")


class MatchTimeline(RiotPayload):
    """Complete match timeline from Riot API Match-V5."""

    metadata: MatchMetadata
    info: TimelineInfo

    @property
    def match_id(self) -> str:
        return self.metadata.match_id

    def iter_raw_events(self) -> list[dict[str, Any]]:
        """All raw events across frames, in frame order."""
        return [event for frame in self.info.frames for event in frame.events]
