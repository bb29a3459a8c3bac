from .player_stats_service import PlayerStatsService

__all__ = ["PlayerStatsService"]
