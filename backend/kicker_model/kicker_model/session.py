from datetime import datetime
from typing import Callable, List, Optional, Tuple

from .config import Config
from .errors import InvalidTransition
from .ratings import win_threshold
from .types import TEAM1, TEAM2, TEAMS, Goal, MatchSummary, Team

PLAYING = "playing"
PROVISIONAL_WIN = "provisional_win"
CONFIRMED = "confirmed"
ABANDONED = "abandoned"

ACTIVE_STATES = (PLAYING, PROVISIONAL_WIN)


class MatchSession:
    """One live match, driven goal by goal by a single controller.

    Every mutating call re-evaluates the win condition before returning, so
    ``state`` and ``winner`` always reflect the current score. ``team1`` and
    ``team2`` are the logical teams fixed at start; ``sides_swapped`` only
    changes which one is shown on the left.
    """

    def __init__(self, team1: Team, team2: Team, cfg: Config | None = None, clock: Callable[[], datetime] | None = None):
        ids = [p.id for p in team1.players + team2.players]
        if len(set(ids)) != len(ids):
            raise InvalidTransition("duplicate_player", "a match needs four distinct players")
        self.cfg = cfg or Config()
        self._clock = clock or datetime.utcnow
        self.teams = {TEAM1: team1, TEAM2: team2}
        self.scores = {TEAM1: 0, TEAM2: 0}
        self.goals: List[Goal] = []
        self.winner: Optional[str] = None
        self.state = PLAYING
        self.sides_swapped = False
        self.started_at = self._clock()
        self.summary: Optional[MatchSummary] = None

    @classmethod
    def start(cls, team1: Team, team2: Team, cfg: Config | None = None, clock: Callable[[], datetime] | None = None) -> "MatchSession":
        return cls(team1, team2, cfg=cfg, clock=clock)

    @property
    def win_threshold(self) -> int:
        return win_threshold(self.scores[TEAM1], self.scores[TEAM2], self.cfg)

    @property
    def is_active(self) -> bool:
        return self.state in ACTIVE_STATES

    @property
    def display_order(self) -> Tuple[str, str]:
        if self.sides_swapped:
            return TEAM2, TEAM1
        return TEAM1, TEAM2

    def team_of(self, player_id: int) -> Optional[str]:
        for key in TEAMS:
            if self.teams[key].has(player_id):
                return key
        return None

    def _require_active(self) -> None:
        if not self.is_active:
            raise InvalidTransition("match_finished", f"match is {self.state}")

    def _require_team(self, team: str) -> None:
        if team not in TEAMS:
            raise InvalidTransition("unknown_team", f"unknown team {team!r}")

    def _evaluate(self) -> None:
        score1, score2 = self.scores[TEAM1], self.scores[TEAM2]
        threshold = self.win_threshold
        if (score1 >= threshold or score2 >= threshold) and score1 != score2:
            self.winner = TEAM1 if score1 > score2 else TEAM2
            self.state = PROVISIONAL_WIN
        else:
            self.winner = None
            self.state = PLAYING

    def record_goal(self, player_id: int, position: str | None = None) -> Goal:
        self._require_active()
        team = self.team_of(player_id)
        if team is None:
            raise InvalidTransition("player_not_in_match", f"player {player_id} is not playing")
        current = self.teams[team].position_of(player_id)
        if position is not None and position != current:
            raise InvalidTransition("position_mismatch", f"player {player_id} is playing {current}, not {position}")
        goal = Goal(player=player_id, position=current, team=team)
        self.scores[team] += 1
        self.goals.append(goal)
        self._evaluate()
        return goal

    def undo_last_goal(self) -> Optional[Goal]:
        self._require_active()
        if not self.goals:
            return None
        goal = self.goals.pop()
        self.scores[goal.team] = max(0, self.scores[goal.team] - 1)
        self._evaluate()
        return goal

    def swap_positions(self, team: str) -> Team:
        self._require_active()
        self._require_team(team)
        self.teams[team] = self.teams[team].swapped()
        return self.teams[team]

    def swap_sides(self) -> bool:
        self._require_active()
        self.sides_swapped = not self.sides_swapped
        return self.sides_swapped

    def confirm(self) -> MatchSummary:
        if self.state != PROVISIONAL_WIN or self.winner is None:
            raise InvalidTransition("winner_not_declared", f"cannot confirm while {self.state}")
        self.summary = MatchSummary(
            team1=self.teams[TEAM1],
            team2=self.teams[TEAM2],
            score1=self.scores[TEAM1],
            score2=self.scores[TEAM2],
            goals=tuple(self.goals),
            duration=self._clock() - self.started_at,
            winner=self.winner,
            started_at=self.started_at,
        )
        self.state = CONFIRMED
        return self.summary

    def abandon(self) -> None:
        self._require_active()
        self.goals = []
        self.scores = {TEAM1: 0, TEAM2: 0}
        self.winner = None
        self.state = ABANDONED

    def to_dict(self) -> dict:
        left, right = self.display_order
        return {
            "state": self.state,
            "teams": {key: self.teams[key].to_dict() for key in TEAMS},
            "score": dict(self.scores),
            "win_threshold": self.win_threshold,
            "winner": self.winner,
            "sides": {"left": left, "right": right},
            "goals": [
                {"i": i, "player_id": g.player, "position": g.position, "team": g.team}
                for i, g in enumerate(self.goals)
            ],
            "started_at": self.started_at.isoformat(),
        }
