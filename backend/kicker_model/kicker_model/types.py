import hashlib
import json
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

STRIKER = "striker"
DEFENDER = "defender"

TEAM1 = "team1"
TEAM2 = "team2"
TEAMS = (TEAM1, TEAM2)
TEAM_LABELS = {TEAM1: "Team 1", TEAM2: "Team 2"}


def other_team(team: str) -> str:
    return TEAM2 if team == TEAM1 else TEAM1


@dataclass(frozen=True)
class PlayerRef:
    id: int
    name: str = ""


@dataclass(frozen=True)
class Team:
    striker: PlayerRef
    defender: PlayerRef

    @property
    def players(self) -> List[PlayerRef]:
        return [self.striker, self.defender]

    def has(self, player_id: int) -> bool:
        return player_id in (self.striker.id, self.defender.id)

    def position_of(self, player_id: int) -> Optional[str]:
        if self.striker.id == player_id:
            return STRIKER
        if self.defender.id == player_id:
            return DEFENDER
        return None

    def swapped(self) -> "Team":
        return Team(striker=self.defender, defender=self.striker)

    def to_dict(self) -> dict:
        return {
            STRIKER: {"id": self.striker.id, "name": self.striker.name},
            DEFENDER: {"id": self.defender.id, "name": self.defender.name},
        }


@dataclass(frozen=True)
class Goal:
    player: int
    position: str  # "striker" or "defender" at the moment of scoring
    team: str  # "team1" or "team2"


@dataclass(frozen=True)
class MatchSummary:
    team1: Team
    team2: Team
    score1: int
    score2: int
    goals: Tuple[Goal, ...]
    duration: timedelta
    winner: str
    started_at: datetime

    @property
    def loser(self) -> str:
        return other_team(self.winner)

    @property
    def winner_label(self) -> str:
        return TEAM_LABELS[self.winner]

    def team(self, key: str) -> Team:
        return self.team1 if key == TEAM1 else self.team2

    def score(self, key: str) -> int:
        return self.score1 if key == TEAM1 else self.score2

    @property
    def is_shutout(self) -> bool:
        return self.score(self.loser) == 0

    @property
    def participants(self) -> List[PlayerRef]:
        return self.team1.players + self.team2.players

    @property
    def participant_ids(self) -> List[int]:
        return [p.id for p in self.participants]

    @property
    def duration_ms(self) -> int:
        return int(self.duration.total_seconds() * 1000)

    def to_dict(self) -> dict:
        return {
            "teams": {TEAM1: self.team1.to_dict(), TEAM2: self.team2.to_dict()},
            "score": {TEAM1: self.score1, TEAM2: self.score2},
            "goals": [
                {"i": i, "player_id": g.player, "position": g.position, "team": g.team}
                for i, g in enumerate(self.goals)
            ],
            "duration_ms": self.duration_ms,
            "winner": self.winner,
            "started_at": self.started_at.isoformat(),
        }

    @property
    def idempotency_key(self) -> str:
        payload = json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class RatingDelta:
    win_delta: int
    lose_delta: int
    dynamic: int


@dataclass
class PlayerStatDelta:
    player_id: int
    team: str
    won: bool
    rating_change: int = 0
    games_as_striker: int = 0
    games_as_defender: int = 0
    goals_as_striker: int = 0
    goals_as_defender: int = 0
    shutout_win: bool = False
    playtime_ms: int = 0


@dataclass
class RankedPlayer:
    id: int
    name: str
    rating: int
