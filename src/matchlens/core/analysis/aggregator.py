"""Per-match aggregation.

``build_match_record`` turns one raw match detail plus its timeline into a
``MatchRecord`` holding the player, team and enemy statistics. Mutable
accumulators live only for the duration of the call; the returned record is
frozen and the raw payloads are not retained.

CRITICAL: This module MUST NOT perform I/O. The item catalog is passed in
fully built.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from matchlens.contracts.common import Outcome, Perspective
from matchlens.contracts.events import (
    BuildingKillEvent,
    BuildingType,
    EliteMonsterKillEvent,
    ItemPurchasedEvent,
    LevelUpEvent,
    MonsterType,
    TimelineEvent,
    parse_event,
    resolve_event_type,
)
from matchlens.contracts.match import MatchDetail, Participant
from matchlens.contracts.stats import (
    BasicStats,
    DeathSeries,
    Economy,
    EndGameSummary,
    EventSeries,
    ItemPurchase,
    KdaHistory,
    KdaPoint,
    MatchRecord,
    Objectives,
    OutcomeInfo,
    PerspectiveStats,
    TowerKills,
)
from matchlens.contracts.timeline import MatchTimeline
from matchlens.core.analysis.classifier import Attribution, EventClassifier, EventKind
from matchlens.core.economy.ledger import ItemGoldLedger
from matchlens.core.errors import (
    MalformedMatchError,
    MalformedTimelineError,
    MissingParticipantError,
)
from matchlens.core.ports import ItemCatalogPort
from matchlens.core.timeline.death_timer import expected_respawn_seconds, minute_of
from matchlens.core.timeline.levels import LevelTimeline

logger = logging.getLogger(__name__)

TOWER_TIERS = ("outer", "inner", "base", "nexus")


def kda_ratio(kills: float, deaths: float, assists: float) -> float:
    return (kills + assists) / max(deaths, 1)


def normalize_tower_type(tower_type: str | None) -> str | None:
    """``OUTER_TURRET`` -> ``outer``; None for anything outside the four tiers."""
    if not tower_type:
        return None
    tier = tower_type.replace("_TURRET", "").lower()
    return tier if tier in TOWER_TIERS else None


def classify_outcome(participant: Participant) -> OutcomeInfo:
    surrender = participant.game_ended_in_surrender
    if participant.win:
        result = Outcome.SURRENDER_WIN if surrender else Outcome.WIN
    else:
        result = Outcome.SURRENDER_LOSS if surrender else Outcome.LOSS
    return OutcomeInfo(result=result, surrender=surrender)


def _series(timestamps: list[float]) -> EventSeries:
    return EventSeries(count=len(timestamps), timestamps=timestamps)


class _PerspectiveAccumulator:
    """Mutable working state for one perspective of one match."""

    def __init__(self, perspective: Perspective) -> None:
        self.perspective = perspective
        self.kills: list[float] = []
        self.assists: list[float] = []
        self.deaths: list[float] = []
        self.death_levels: list[int] = []
        self.death_timers: list[float] = []
        self.death_totals: list[float] = []
        self.kda_history: list[KdaPoint] = []
        self.turrets: list[float] = []
        self.towers: dict[str, list[float]] = {tier: [] for tier in TOWER_TIERS}
        self.inhibitors: list[float] = []
        self.elite_monsters: list[float] = []
        self.dragons: list[float] = []
        self.barons: list[float] = []
        self.elders: list[float] = []
        self.purchases: list[ItemPurchase] = []

    def add_kill(self, timestamp: float) -> None:
        self.kills.append(timestamp)
        self._update_kda(timestamp)

    def add_assist(self, timestamp: float) -> None:
        self.assists.append(timestamp)
        self._update_kda(timestamp)

    def add_death(self, timestamp: float, level: int, timer: float) -> None:
        previous = self.death_totals[-1] if self.death_totals else 0.0
        self.deaths.append(timestamp)
        self.death_levels.append(level)
        self.death_timers.append(timer)
        self.death_totals.append(previous + timer)
        self._update_kda(timestamp)

    def add_building(self, event: BuildingKillEvent, timestamp: float) -> None:
        if event.building_type == BuildingType.TOWER_BUILDING.value:
            self.turrets.append(timestamp)
            tier = normalize_tower_type(event.tower_type)
            if tier is None:
                logger.debug(f"Unknown tower type {event.tower_type!r}; counted in turrets only")
            else:
                self.towers[tier].append(timestamp)
        elif event.building_type == BuildingType.INHIBITOR_BUILDING.value:
            self.inhibitors.append(timestamp)

    def add_monster(self, event: EliteMonsterKillEvent, timestamp: float) -> None:
        self.elite_monsters.append(timestamp)
        if event.monster_type == MonsterType.DRAGON.value:
            self.dragons.append(timestamp)
        elif event.monster_type == MonsterType.BARON_NASHOR.value:
            self.barons.append(timestamp)
        elif event.monster_type == MonsterType.ELDER_DRAGON.value:
            self.elders.append(timestamp)

    def add_purchase(
        self, participant_id: int, item_id: int, timestamp: float, gold: float, lookup_failed: bool
    ) -> None:
        previous = self.purchases[-1].cumulative_gold if self.purchases else 0.0
        self.purchases.append(
            ItemPurchase(
                item_id=item_id,
                participant_id=participant_id,
                timestamp=timestamp,
                gold_attributed=gold,
                cumulative_gold=previous + gold,
                lookup_failed=lookup_failed,
            )
        )

    def _update_kda(self, timestamp: float) -> None:
        value = kda_ratio(len(self.kills), len(self.deaths), len(self.assists))
        self.kda_history.append(KdaPoint(timestamp=timestamp, value=value))

    def build(self, outcome: OutcomeInfo, end_game: EndGameSummary | None) -> PerspectiveStats:
        kda_total = self.kda_history[-1].value if self.kda_history else 0.0
        return PerspectiveStats(
            perspective=self.perspective,
            basic_stats=BasicStats(
                kills=_series(self.kills),
                deaths=DeathSeries(
                    count=len(self.deaths),
                    timestamps=self.deaths,
                    levels_at_death=self.death_levels,
                    timers=self.death_timers,
                    total_time_dead=self.death_totals,
                ),
                assists=_series(self.assists),
                kda=KdaHistory(total=kda_total, history=self.kda_history),
            ),
            objectives=Objectives(
                turrets=_series(self.turrets),
                towers=TowerKills(**{tier: _series(ts) for tier, ts in self.towers.items()}),
                inhibitors=_series(self.inhibitors),
                elite_monsters=_series(self.elite_monsters),
                dragons=_series(self.dragons),
                barons=_series(self.barons),
                elders=_series(self.elders),
            ),
            economy=Economy(purchases=self.purchases),
            outcome=outcome,
            end_game=end_game,
        )


def summarize_end_game(
    members: list[Participant], duration_seconds: float, *, average: bool
) -> EndGameSummary | None:
    """End-of-game totals for a group of participants.

    With ``average`` the per-player values (KDA included) are averaged over
    the members, while turrets and inhibitors are summed for the group.
    """
    if not members:
        return None
    n = len(members) if average else 1
    return EndGameSummary(
        kills=sum(p.kills for p in members) / n,
        deaths=sum(p.deaths for p in members) / n,
        assists=sum(p.assists for p in members) / n,
        kda=sum(kda_ratio(p.kills, p.deaths, p.assists) for p in members) / n,
        level=sum(p.champ_level for p in members) / n,
        gold_spent=sum(p.gold_spent for p in members) / n,
        time_spent_dead=sum(p.total_time_spent_dead for p in members) / n,
        turrets_killed=sum(p.turret_kills for p in members),
        inhibitors_killed=sum(p.inhibitor_kills for p in members),
        game_duration=max(duration_seconds, 0.0),
    )


def _validate_match(match: MatchDetail | Mapping[str, Any]) -> MatchDetail:
    if isinstance(match, MatchDetail):
        return match
    try:
        return MatchDetail.model_validate(match)
    except ValidationError as e:
        metadata = match.get("metadata") if isinstance(match, Mapping) else None
        match_id = metadata.get("matchId") if isinstance(metadata, Mapping) else None
        raise MalformedMatchError(f"Invalid match detail: {e}", match_id=match_id) from e


def _validate_timeline(
    timeline: MatchTimeline | Mapping[str, Any] | None, match_id: str
) -> MatchTimeline:
    if timeline is None:
        raise MalformedTimelineError("No timeline for match", match_id=match_id)
    if not isinstance(timeline, MatchTimeline):
        try:
            timeline = MatchTimeline.model_validate(timeline)
        except ValidationError as e:
            raise MalformedTimelineError(f"Invalid timeline: {e}", match_id=match_id) from e
    if timeline.match_id != match_id:
        raise MalformedTimelineError(
            f"Timeline {timeline.match_id} does not belong to match {match_id}", match_id=match_id
        )
    return timeline


def _ordered_events(timeline: MatchTimeline) -> list[TimelineEvent]:
    """Parse consumed events and stable-sort them by timestamp across frames."""
    events: list[TimelineEvent] = []
    unknown: set[str] = set()
    for raw in timeline.iter_raw_events():
        event_type = resolve_event_type(raw)
        if event_type is None:
            unknown.add(str(raw.get("type")))
            continue
        try:
            event = parse_event(event_type, raw)
        except ValidationError as e:
            raise MalformedTimelineError(
                f"Invalid {event_type.value} event: {e}", match_id=timeline.match_id
            ) from e
        if event is None or isinstance(event, LevelUpEvent):
            continue
        events.append(event)

    for event_type_name in sorted(unknown):
        logger.warning(
            f"Ignoring unrecognized event type {event_type_name!r} in match {timeline.match_id}"
        )
    events.sort(key=lambda ev: ev.timestamp)
    return events


def build_match_record(
    match: MatchDetail | Mapping[str, Any],
    timeline: MatchTimeline | Mapping[str, Any] | None,
    puuid: str,
    catalog: ItemCatalogPort,
) -> MatchRecord:
    """Build the statistics of one match for the player identified by ``puuid``.

    Raises:
        MalformedMatchError: The detail payload failed validation.
        MissingParticipantError: No participant list, or ``puuid`` not in it.
        MalformedTimelineError: No frames, a foreign timeline, or an invalid
            consumed event.
    """
    detail = _validate_match(match)
    match_id = detail.match_id
    participants = detail.info.participants
    if not participants:
        raise MissingParticipantError("Match has no participant list", match_id=match_id)
    player = detail.get_participant_by_puuid(puuid)
    if player is None:
        raise MissingParticipantError("Player is not a participant", match_id=match_id)

    parsed_timeline = _validate_timeline(timeline, match_id)
    levels = LevelTimeline.from_frames(parsed_timeline.info.frames)
    events = _ordered_events(parsed_timeline)

    classifier = EventClassifier(player.participant_id)
    ledger = ItemGoldLedger(catalog)
    game_mode = detail.info.game_mode
    accumulators = {p: _PerspectiveAccumulator(p) for p in Perspective}

    for event in events:
        for attribution in classifier.classify(event):
            _apply(accumulators[attribution.perspective], attribution, levels, ledger, game_mode)

    outcome = classify_outcome(player)
    duration = detail.info.duration_seconds
    groups: dict[Perspective, list[Participant]] = {p: [] for p in Perspective}
    for participant in participants:
        groups[classifier.perspective_of(participant.participant_id)].append(participant)
    end_game = {
        Perspective.PLAYER: summarize_end_game([player], duration, average=False),
        Perspective.TEAM: summarize_end_game(groups[Perspective.TEAM], duration, average=True),
        Perspective.ENEMY: summarize_end_game(groups[Perspective.ENEMY], duration, average=True),
    }

    built = {p: acc.build(outcome, end_game[p]) for p, acc in accumulators.items()}
    return MatchRecord(
        match_id=match_id,
        game_mode=game_mode,
        participant_id=player.participant_id,
        player=built[Perspective.PLAYER],
        team=built[Perspective.TEAM],
        enemy=built[Perspective.ENEMY],
    )


def _apply(
    acc: _PerspectiveAccumulator,
    attribution: Attribution,
    levels: LevelTimeline,
    ledger: ItemGoldLedger,
    game_mode: str | None,
) -> None:
    event = attribution.event
    timestamp = event.timestamp_seconds

    match attribution.kind, event:
        case EventKind.KILL, _:
            acc.add_kill(timestamp)
        case EventKind.ASSIST, _:
            acc.add_assist(timestamp)
        case EventKind.DEATH, _:
            level = levels.level_at(attribution.actor_id, timestamp)
            timer = expected_respawn_seconds(minute_of(timestamp), level, game_mode)
            acc.add_death(timestamp, level, timer)
        case EventKind.BUILDING, BuildingKillEvent():
            acc.add_building(event, timestamp)
        case EventKind.MONSTER, EliteMonsterKillEvent():
            acc.add_monster(event, timestamp)
        case EventKind.PURCHASE, ItemPurchasedEvent():
            entry = ledger.record_purchase(event.participant_id, event.item_id)
            acc.add_purchase(
                event.participant_id, event.item_id, timestamp, entry.gold, entry.lookup_failed
            )
        case kind, _:
            logger.warning(f"No handler for {kind.value} attribution of {type(event).__name__}")
