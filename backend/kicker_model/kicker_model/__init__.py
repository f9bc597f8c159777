from .config import Config
from .errors import InvalidTransition
from .ratings import compute_delta, win_threshold
from .seasons import pick_season_winner, rank_players
from .session import MatchSession
from .stats import compute_player_updates
from .types import Goal, MatchSummary, PlayerRef, PlayerStatDelta, RankedPlayer, RatingDelta, Team

__all__ = [
    "Config",
    "Goal",
    "InvalidTransition",
    "MatchSession",
    "MatchSummary",
    "PlayerRef",
    "PlayerStatDelta",
    "RankedPlayer",
    "RatingDelta",
    "Team",
    "compute_delta",
    "compute_player_updates",
    "pick_season_winner",
    "rank_players",
    "win_threshold",
]
