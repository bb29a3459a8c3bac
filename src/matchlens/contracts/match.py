"""
Match detail contracts for Riot API Match-V5.

Only the fields the engine reads are declared; everything else in the payload
is ignored.
"""

from pydantic import Field

from .common import RiotPayload


class MatchMetadata(RiotPayload):
    """Metadata for a match."""

    match_id: str = Field(..., alias="matchId")


class Participant(RiotPayload):
    """Participant (player) information in a match."""

    puuid: str = Field(..., description="Player's PUUID")
    participant_id: int = Field(..., alias="participantId", ge=1, le=10)
    team_id: int | None = Field(None, alias="teamId", description="100 (blue) or 200 (red)")
    win: bool = Field(False)
    game_ended_in_surrender: bool = Field(False, alias="gameEndedInSurrender")

    # End-of-game totals
    kills: int = Field(0, ge=0)
    deaths: int = Field(0, ge=0)
    assists: int = Field(0, ge=0)
    champ_level: int = Field(1, alias="champLevel", ge=1)
    gold_spent: int = Field(0, alias="goldSpent", ge=0)
    total_time_spent_dead: int = Field(0, alias="totalTimeSpentDead", ge=0)
    turret_kills: int = Field(0, alias="turretKills", ge=0)
    inhibitor_kills: int = Field(0, alias="inhibitorKills", ge=0)


class Team(RiotPayload):
    """Team result in a match."""

    team_id: int = Field(..., alias="teamId")
    win: bool = Field(False)


class MatchInfo(RiotPayload):
    """Match information block."""

    game_mode: str | None = Field(None, alias="gameMode")
    game_duration: int | None = Field(None, alias="gameDuration", description="Seconds")
    game_start_timestamp: int | None = Field(None, alias="gameStartTimestamp")
    game_end_timestamp: int | None = Field(None, alias="gameEndTimestamp")
    queue_id: int | None = Field(None, alias="queueId")
    participants: list[Participant] | None = Field(None)
    teams: list[Team] = Field(default_factory=list)

    @property
    def duration_seconds(self) -> float:
        """Game length in seconds, preferring the wall-clock timestamps."""
        if self.game_start_timestamp is not None and self.game_end_timestamp is not None:
            return (self.game_end_timestamp - self.game_start_timestamp) / 1000
        return float(self.game_duration or 0)


class MatchDetail(RiotPayload):
    """Complete match detail from Riot API Match-V5."""

    metadata: MatchMetadata
    info: MatchInfo

    @property
    def match_id(self) -> str:
        return self.metadata.match_id

    def get_participant_by_puuid(self, puuid: str) -> Participant | None:
        """Get participant by PUUID."""
        for participant in self.info.participants or []:
            if participant.puuid == puuid:
                return participant
        return None
