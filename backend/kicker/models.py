from datetime import datetime

from sqlalchemy import (
    JSON,
    BigInteger,
    Column,
    DateTime,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base


Base = declarative_base()

JSONType = JSON().with_variant(JSONB(), "postgresql")


class Player(Base):
    __tablename__ = "players"
    id = Column(Integer, primary_key=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False, default="")
    country = Column(String(3), nullable=False, default="")
    img = Column(Text, nullable=True)
    rating = Column(Integer, nullable=False, default=1500)
    games_won = Column(Integer, nullable=False, default=0)
    games_lost = Column(Integer, nullable=False, default=0)
    total_games = Column(Integer, nullable=False, default=0)
    games_as_striker = Column(Integer, nullable=False, default=0)
    games_as_defender = Column(Integer, nullable=False, default=0)
    goals_as_striker = Column(Integer, nullable=False, default=0)
    goals_as_defender = Column(Integer, nullable=False, default=0)
    shutout_wins = Column(Integer, nullable=False, default=0)
    total_playtime_ms = Column(BigInteger, nullable=False, default=0)
    seasons_won = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    version = Column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class MatchRecord(Base):
    __tablename__ = "match_records"
    id = Column(Integer, primary_key=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    duration_ms = Column(BigInteger, nullable=False, default=0)
    score_team1 = Column(Integer, nullable=False)
    score_team2 = Column(Integer, nullable=False)
    winner = Column(String, nullable=False)  # "Team 1" | "Team 2"
    teams_json = Column(JSONType, nullable=False)
    goals_json = Column(JSONType, nullable=False)
    rating_deltas_json = Column(JSONType, nullable=True)
    commit_key = Column(String(64), nullable=False, unique=True)


class SeasonRecord(Base):
    __tablename__ = "season_records"
    id = Column(Integer, primary_key=True)
    season_number = Column(Integer, nullable=False, unique=True)
    winner_id = Column(Integer, nullable=False)
    winner_name = Column(String, nullable=False)
    ended_at = Column(DateTime, server_default=func.now(), nullable=False)


class AppState(Base):
    __tablename__ = "app_state"
    id = Column(Integer, primary_key=True)
    current_season = Column(Integer, nullable=False, default=1)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    version = Column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}
