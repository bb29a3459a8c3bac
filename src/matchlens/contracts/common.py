"""
Common data types and base models for matchlens.
All models use Pydantic V2.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Perspective(str, Enum):
    """Lens through which a statistic is attributed."""

    PLAYER = "player"
    TEAM = "team"  # Allies, excluding the tracked player
    ENEMY = "enemy"


class Outcome(str, Enum):
    """Match outcome from the tracked player's point of view."""

    WIN = "win"
    LOSS = "loss"
    SURRENDER_WIN = "surrenderWin"
    SURRENDER_LOSS = "surrenderLoss"


class RiotPayload(BaseModel):
    """Base model for raw Riot API payloads.

    Fields are declared in snake_case with camelCase aliases. Unknown keys are
    ignored because Match-V5 grows new fields every patch.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class BaseContract(BaseModel):
    """Base model for all engine output contracts."""

    model_config = ConfigDict(
        # Records are built once and never mutated afterwards
        frozen=True,
        # Use enum values in JSON
        use_enum_values=False,
        # Forbid extra fields to ensure data integrity
        extra="forbid",
    )
