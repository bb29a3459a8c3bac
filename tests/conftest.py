"""Pytest configuration and shared payload builders for matchlens tests.

Builders return plain Match-V5 shaped dictionaries so tests exercise the
same validation path as real API payloads.
"""

from types import SimpleNamespace
from typing import Any

import pytest

from matchlens.core import observability
from matchlens.core.economy.catalog import ItemCatalog, ItemCatalogEntry

PLAYER_PUUID = "player-puuid-0001"


def make_participant(participant_id: int, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "puuid": PLAYER_PUUID if participant_id == 1 else f"puuid-{participant_id:04d}",
        "participantId": participant_id,
        "teamId": 100 if participant_id <= 5 else 200,
        "win": participant_id <= 5,
        "gameEndedInSurrender": False,
        "kills": 0,
        "deaths": 0,
        "assists": 0,
        "champLevel": 10,
        "goldSpent": 8000,
        "totalTimeSpentDead": 60,
        "turretKills": 0,
        "inhibitorKills": 0,
    }
    payload.update(overrides)
    return payload


def make_match(
    match_id: str = "NA1_1",
    *,
    game_mode: str = "CLASSIC",
    participants: list[dict[str, Any]] | None = None,
    win: bool = True,
    surrender: bool = False,
    duration_ms: int = 1_800_000,
) -> dict[str, Any]:
    """Match detail where the tracked player is participant 1 (blue side)."""
    if participants is None:
        participants = [
            make_participant(
                pid,
                win=(pid <= 5) == win,
                gameEndedInSurrender=surrender,
            )
            for pid in range(1, 11)
        ]
    return {
        "metadata": {"matchId": match_id, "participants": [p["puuid"] for p in participants]},
        "info": {
            "gameMode": game_mode,
            "gameDuration": duration_ms // 1000,
            "gameStartTimestamp": 1_700_000_000_000,
            "gameEndTimestamp": 1_700_000_000_000 + duration_ms,
            "queueId": 420,
            "participants": participants,
            "teams": [{"teamId": 100, "win": win}, {"teamId": 200, "win": not win}],
        },
    }


def make_timeline(match_id: str = "NA1_1", frames: list[list[dict[str, Any]]] | None = None) -> dict[str, Any]:
    """Timeline whose i-th frame holds ``frames[i]``."""
    frames = frames if frames is not None else [[]]
    return {
        "metadata": {"matchId": match_id},
        "info": {
            "frameInterval": 60000,
            "frames": [
                {"timestamp": i * 60000, "events": events} for i, events in enumerate(frames)
            ],
        },
    }


def kill(timestamp: int, killer: int, victim: int, assists: list[int] | None = None) -> dict[str, Any]:
    return {
        "type": "CHAMPION_KILL",
        "timestamp": timestamp,
        "killerId": killer,
        "victimId": victim,
        "assistingParticipantIds": assists or [],
    }


def level_up(timestamp: int, participant: int, level: int) -> dict[str, Any]:
    return {"type": "LEVEL_UP", "timestamp": timestamp, "participantId": participant, "level": level}


def purchase(timestamp: int, participant: int, item_id: int) -> dict[str, Any]:
    return {
        "type": "ITEM_PURCHASED",
        "timestamp": timestamp,
        "participantId": participant,
        "itemId": item_id,
    }


def tower(timestamp: int, killer: int, tower_type: str, owner_team: int = 200) -> dict[str, Any]:
    return {
        "type": "BUILDING_KILL",
        "timestamp": timestamp,
        "killerId": killer,
        "buildingType": "TOWER_BUILDING",
        "towerType": tower_type,
        "laneType": "MID_LANE",
        "teamId": owner_team,
    }


def monster(timestamp: int, killer: int, monster_type: str, killer_team: int = 100) -> dict[str, Any]:
    return {
        "type": "ELITE_MONSTER_KILL",
        "timestamp": timestamp,
        "killerId": killer,
        "killerTeamId": killer_team,
        "monsterType": monster_type,
    }


# Item ids used across tests
LONG_SWORD = 1036
RUBY_CRYSTAL = 1028
PHAGE = 3044
TRINITY_FORCE = 3078
DORANS_BLADE = 1055


@pytest.fixture
def item_catalog() -> ItemCatalog:
    return ItemCatalog(
        [
            ItemCatalogEntry(id=LONG_SWORD, name="Long Sword", base_gold=350, total_gold=350),
            ItemCatalogEntry(id=RUBY_CRYSTAL, name="Ruby Crystal", base_gold=400, total_gold=400),
            ItemCatalogEntry(
                id=PHAGE,
                name="Phage",
                base_gold=350,
                total_gold=1100,
                component_ids=[LONG_SWORD, RUBY_CRYSTAL],
            ),
            ItemCatalogEntry(
                id=TRINITY_FORCE,
                name="Trinity Force",
                base_gold=333,
                total_gold=3333,
                component_ids=[PHAGE, 3057, 3051],
            ),
            ItemCatalogEntry(id=DORANS_BLADE, name="Doran's Blade", base_gold=450, total_gold=450),
        ]
    )


@pytest.fixture
def player_puuid() -> str:
    return PLAYER_PUUID


@pytest.fixture
def payloads() -> SimpleNamespace:
    """Raw payload builders and item ids."""
    return SimpleNamespace(
        participant=make_participant,
        match=make_match,
        timeline=make_timeline,
        kill=kill,
        level_up=level_up,
        purchase=purchase,
        tower=tower,
        monster=monster,
        LONG_SWORD=LONG_SWORD,
        RUBY_CRYSTAL=RUBY_CRYSTAL,
        PHAGE=PHAGE,
        TRINITY_FORCE=TRINITY_FORCE,
        DORANS_BLADE=DORANS_BLADE,
    )


class RecordingLogger:
    """Stand-in for the structlog logger used by the tracing decorators."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def _record(self, level: str):
        def log(event: str, **fields: Any) -> None:
            self.events.append((level, event, fields))

        return log

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)
        return self._record(name)

    def levels(self) -> list[str]:
        return [level for level, _, _ in self.events]


@pytest.fixture
def recorder(monkeypatch: Any) -> RecordingLogger:
    rec = RecordingLogger()
    monkeypatch.setattr(observability, "logger", rec)
    return rec
