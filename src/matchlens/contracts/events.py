"""
Timeline event models for Match-V5 API.
Each event kind the engine consumes has its own model for type safety.
"""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, Field

from .common import RiotPayload


class EventType(str, Enum):
    """All known event types in Match Timeline."""

    PAUSE_START = "PAUSE_START"
    PAUSE_END = "PAUSE_END"
    SKILL_LEVEL_UP = "SKILL_LEVEL_UP"
    LEVEL_UP = "LEVEL_UP"
    ITEM_PURCHASED = "ITEM_PURCHASED"
    ITEM_SOLD = "ITEM_SOLD"
    ITEM_DESTROYED = "ITEM_DESTROYED"
    ITEM_UNDO = "ITEM_UNDO"
    TURRET_PLATE_DESTROYED = "TURRET_PLATE_DESTROYED"
    CHAMPION_KILL = "CHAMPION_KILL"
    CHAMPION_SPECIAL_KILL = "CHAMPION_SPECIAL_KILL"
    WARD_PLACED = "WARD_PLACED"
    WARD_KILL = "WARD_KILL"
    BUILDING_KILL = "BUILDING_KILL"
    ELITE_MONSTER_KILL = "ELITE_MONSTER_KILL"
    GAME_END = "GAME_END"
    CHAMPION_TRANSFORM = "CHAMPION_TRANSFORM"
    DRAGON_SOUL_GIVEN = "DRAGON_SOUL_GIVEN"
    FEAT_UPDATE = "FEAT_UPDATE"
    OBJECTIVE_BOUNTY_PRESTART = "OBJECTIVE_BOUNTY_PRESTART"
    OBJECTIVE_BOUNTY_FINISH = "OBJECTIVE_BOUNTY_FINISH"


class MonsterType(str, Enum):
    """Elite monster types."""

    DRAGON = "DRAGON"
    BARON_NASHOR = "BARON_NASHOR"
    ELDER_DRAGON = "ELDER_DRAGON"
    RIFTHERALD = "RIFTHERALD"
    HORDE = "HORDE"
    ATAKHAN = "ATAKHAN"


class BuildingType(str, Enum):
    """Building types."""

    TOWER_BUILDING = "TOWER_BUILDING"
    INHIBITOR_BUILDING = "INHIBITOR_BUILDING"


class BaseEvent(RiotPayload):
    """Base class for all consumed timeline events."""

    type: EventType = Field(..., description="Type of the event")
    timestamp: int = Field(..., ge=0, description="Game time in milliseconds when event occurred")

    @property
    def timestamp_seconds(self) -> float:
        return self.timestamp / 1000


class ChampionKillEvent(BaseEvent):
    """Champion kill event. ``killer_id`` is 0 for executions."""

    killer_id: int = Field(0, alias="killerId", ge=0, le=10)
    victim_id: int = Field(..., alias="victimId", ge=0, le=10)
    assisting_participant_ids: list[int] = Field(
        default_factory=list, alias="assistingParticipantIds"
    )


class BuildingKillEvent(BaseEvent):
    """Building (tower / inhibitor) destruction event."""

    killer_id: int = Field(0, alias="killerId", ge=0, le=10)
    building_type: str | None = Field(None, alias="buildingType")
    tower_type: str | None = Field(None, alias="towerType")
    lane_type: str | None = Field(None, alias="laneType")
    team_id: int | None = Field(None, alias="teamId", description="Team owning the building")


class EliteMonsterKillEvent(BaseEvent):
    """Elite monster kill event."""

    killer_id: int = Field(0, alias="killerId", ge=0, le=10)
    killer_team_id: int | None = Field(None, alias="killerTeamId")
    monster_type: str | None = Field(None, alias="monsterType")
    monster_sub_type: str | None = Field(None, alias="monsterSubType")


class ItemPurchasedEvent(BaseEvent):
    """Item purchase event."""

    participant_id: int = Field(..., alias="participantId", ge=1, le=10)
    item_id: int = Field(..., alias="itemId")


class LevelUpEvent(BaseEvent):
    """Champion level up event."""

    participant_id: int = Field(..., alias="participantId", ge=1, le=10)
    level: int = Field(..., validation_alias=AliasChoices("level", "newLevel"), ge=1)


TimelineEvent = (
    ChampionKillEvent | BuildingKillEvent | EliteMonsterKillEvent | ItemPurchasedEvent | LevelUpEvent
)

CONSUMED_EVENT_MODELS: dict[EventType, type[BaseEvent]] = {
    EventType.CHAMPION_KILL: ChampionKillEvent,
    EventType.BUILDING_KILL: BuildingKillEvent,
    EventType.ELITE_MONSTER_KILL: EliteMonsterKillEvent,
    EventType.ITEM_PURCHASED: ItemPurchasedEvent,
    EventType.LEVEL_UP: LevelUpEvent,
}

# Known kinds that carry nothing the engine aggregates
IGNORED_EVENT_TYPES: frozenset[EventType] = frozenset(
    t for t in EventType if t not in CONSUMED_EVENT_MODELS
)


def resolve_event_type(raw: dict[str, Any]) -> EventType | None:
    """Map the raw ``type`` string onto :class:`EventType`, or None if unrecognized."""
    try:
        return EventType(raw.get("type"))
    except ValueError:
        return None


def parse_event(event_type: EventType, raw: dict[str, Any]) -> TimelineEvent | None:
    """Validate a raw event of a known type.

    Returns None for known kinds the engine does not consume. Raises
    ``pydantic.ValidationError`` when a consumed event is malformed.
    """
    model = CONSUMED_EVENT_MODELS.get(event_type)
    if model is None:
        return None
    return model.model_validate(raw)  # type: ignore[return-value]
