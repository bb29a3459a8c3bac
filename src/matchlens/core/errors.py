"""Exception hierarchy for the analysis engine."""


class MatchlensError(Exception):
    """Base exception for all matchlens failures."""

    pass


# ========================================================================
# Per-match failures (the match is skipped, the run continues)
# ========================================================================


class MatchSkippedError(MatchlensError):
    def __init__(self, message: str, match_id: str | None = None) -> None:
        super().__init__(message)
        self.match_id = match_id


class MissingParticipantError(MatchSkippedError):
    """Raised when the participant list is absent or the puuid is not in it."""

    pass


class MalformedTimelineError(MatchSkippedError):
    """Raised when a timeline has no frames or a consumed event fails validation."""

    pass


class MalformedMatchError(MatchSkippedError):
    """Raised when a match detail payload fails validation."""

    pass


# ========================================================================
# Lookup / input failures
# ========================================================================


class ItemLookupError(MatchlensError):
    def __init__(self, item_id: int) -> None:
        super().__init__(f"Item {item_id} not found in catalog")
        self.item_id = item_id


class EmptyInputError(MatchlensError):
    """Raised when there is nothing left to aggregate."""

    pass


class CatalogUnavailableError(MatchlensError):
    """Raised when the item catalog source cannot provide any version."""

    pass
