"""Perspective classification of timeline events.

Participants 1-5 form one side (team 100) and 6-10 the other (team 200).
Relative to the tracked player every actor is the player, a teammate, or
an enemy; each event is split into one attribution per involved actor.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from matchlens.contracts.common import Perspective
from matchlens.contracts.events import (
    BuildingKillEvent,
    ChampionKillEvent,
    EliteMonsterKillEvent,
    ItemPurchasedEvent,
    TimelineEvent,
)

logger = logging.getLogger(__name__)

BLUE_SIDE = 100
RED_SIDE = 200
PARTICIPANTS_PER_SIDE = 5


class EventKind(str, Enum):
    KILL = "kill"
    DEATH = "death"
    ASSIST = "assist"
    BUILDING = "building"
    MONSTER = "monster"
    PURCHASE = "purchase"


@dataclass(slots=True, frozen=True)
class Attribution:
    """One event credited to one perspective.

    ``actor_id`` is 0 for objectives credited to a side without a champion
    killer (minion tower kills, for example).
    """

    perspective: Perspective
    kind: EventKind
    actor_id: int
    event: TimelineEvent


def side_of(participant_id: int) -> int:
    return BLUE_SIDE if participant_id <= PARTICIPANTS_PER_SIDE else RED_SIDE


def opposite_side(side: int) -> int:
    return RED_SIDE if side == BLUE_SIDE else BLUE_SIDE


class EventClassifier:
    def __init__(self, participant_id: int) -> None:
        if not 1 <= participant_id <= 2 * PARTICIPANTS_PER_SIDE:
            raise ValueError(f"participant_id must be in 1..10, got {participant_id}")
        self.participant_id = participant_id
        self.side = side_of(participant_id)

    @property
    def teammate_ids(self) -> frozenset[int]:
        first = 1 if self.side == BLUE_SIDE else PARTICIPANTS_PER_SIDE + 1
        return frozenset(range(first, first + PARTICIPANTS_PER_SIDE)) - {self.participant_id}

    def perspective_of(self, actor_id: int) -> Perspective:
        if actor_id == self.participant_id:
            return Perspective.PLAYER
        if side_of(actor_id) == self.side:
            return Perspective.TEAM
        return Perspective.ENEMY

    def perspective_of_side(self, side: int) -> Perspective:
        return Perspective.TEAM if side == self.side else Perspective.ENEMY

    def classify(self, event: TimelineEvent) -> list[Attribution]:
        """Split an event into per-perspective attributions.

        LEVEL_UP events carry nothing to attribute and yield an empty list.
        """
        if isinstance(event, ChampionKillEvent):
            return self._classify_champion_kill(event)
        if isinstance(event, BuildingKillEvent):
            # teamId names the side that owned the building
            destroyer = opposite_side(event.team_id) if event.team_id else None
            return self._classify_objective(event, EventKind.BUILDING, event.killer_id, destroyer)
        if isinstance(event, EliteMonsterKillEvent):
            return self._classify_objective(
                event, EventKind.MONSTER, event.killer_id, event.killer_team_id
            )
        if isinstance(event, ItemPurchasedEvent):
            return [
                Attribution(
                    self.perspective_of(event.participant_id),
                    EventKind.PURCHASE,
                    event.participant_id,
                    event,
                )
            ]
        return []

    def _classify_champion_kill(self, event: ChampionKillEvent) -> list[Attribution]:
        attributions = []
        # killerId 0 is an execution: nobody is credited with the kill
        if event.killer_id:
            attributions.append(
                Attribution(self.perspective_of(event.killer_id), EventKind.KILL, event.killer_id, event)
            )
        if event.victim_id:
            attributions.append(
                Attribution(self.perspective_of(event.victim_id), EventKind.DEATH, event.victim_id, event)
            )
        for assister_id in event.assisting_participant_ids:
            attributions.append(
                Attribution(self.perspective_of(assister_id), EventKind.ASSIST, assister_id, event)
            )
        return attributions

    def _classify_objective(
        self,
        event: TimelineEvent,
        kind: EventKind,
        killer_id: int,
        credited_side: int | None,
    ) -> list[Attribution]:
        if killer_id:
            return [Attribution(self.perspective_of(killer_id), kind, killer_id, event)]
        if credited_side is None:
            logger.debug(f"Unattributable {kind.value} event at {event.timestamp}ms")
            return []
        return [Attribution(self.perspective_of_side(credited_side), kind, 0, event)]
