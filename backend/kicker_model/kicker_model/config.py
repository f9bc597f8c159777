from dataclasses import dataclass


@dataclass(frozen=True)
class Config:
    baseline_rating: int = 1500

    delta_base: float = 10.0
    delta_diff_divisor: float = 40.0
    delta_min: int = 1
    delta_max: int = 20
    shutout_bonus: int = 5

    win_score: int = 6
    deuce_score: int = 5
    deuce_win_score: int = 7

    commit_max_attempts: int = 5
    commit_backoff_seconds: float = 0.05
