from .config import Config
from .types import RatingDelta
from .utils import clamp, mean, round_half_up


def compute_delta(avg_winner_rating: float, avg_loser_rating: float, is_shutout: bool, cfg: Config | None = None) -> RatingDelta:
    """Symmetric rating change for one match.

    ``diff`` is positive when the losing side was rated higher, so upsets pay
    more. The shutout bonus only raises the winners' gain; the losers always
    drop by the bare ``dynamic`` amount. Rounding is half-up, which agrees with
    half-away-from-zero on every value that survives the clamp.
    """
    cfg = cfg or Config()
    diff = avg_loser_rating - avg_winner_rating
    dynamic = round_half_up(cfg.delta_base + diff / cfg.delta_diff_divisor)
    dynamic = int(clamp(dynamic, cfg.delta_min, cfg.delta_max))
    bonus = cfg.shutout_bonus if is_shutout else 0
    return RatingDelta(win_delta=dynamic + bonus, lose_delta=dynamic, dynamic=dynamic)


def team_average(ratings: list[int]) -> float:
    return mean(ratings)


def win_threshold(score1: int, score2: int, cfg: Config | None = None) -> int:
    cfg = cfg or Config()
    if score1 == cfg.deuce_score and score2 == cfg.deuce_score:
        return cfg.deuce_win_score
    return cfg.win_score
