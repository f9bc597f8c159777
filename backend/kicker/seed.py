from __future__ import annotations

import logging
from datetime import datetime

from .config import Config
from .db import SessionLocal, engine
from .models import AppState, Base, MatchRecord, Player, SeasonRecord

logger = logging.getLogger(__name__)

DEMO_PLAYERS = [
    {"first_name": "Anna", "last_name": "Keller", "country": "DE"},
    {"first_name": "Jonas", "last_name": "Brandt", "country": "DE"},
    {"first_name": "Mara", "last_name": "Huber", "country": "AT"},
    {"first_name": "Luca", "last_name": "Meier", "country": "CH"},
    {"first_name": "Sven", "last_name": "Olsen", "country": "DK"},
    {"first_name": "Eva", "last_name": "Novak", "country": "CZ"},
]


def ensure_schema() -> None:
    Base.metadata.create_all(engine)


def _reset_db(session) -> None:
    for model in (MatchRecord, SeasonRecord, Player, AppState):
        session.query(model).delete()
    session.commit()


def _ensure_app_state(session) -> AppState:
    state = session.query(AppState).filter_by(id=1).one_or_none()
    if state is None:
        state = AppState(id=1, current_season=1, updated_at=datetime.utcnow())
        session.add(state)
    return state


def _ensure_players(session) -> None:
    for data in DEMO_PLAYERS:
        session.add(Player(rating=Config.BASELINE_RATING, **data))


def seed(reset: bool = False) -> bool:
    session = SessionLocal()
    try:
        if reset:
            _reset_db(session)
        _ensure_app_state(session)
        _ensure_players(session)
        session.commit()
    finally:
        session.close()
    logger.info("seeded %d demo players", len(DEMO_PLAYERS))
    return True


def seed_if_empty() -> bool:
    if not Config.DATABASE_URL or not Config.AUTO_SEED:
        return False
    session = SessionLocal()
    try:
        existing = session.query(Player).first()
        if existing is not None:
            _ensure_app_state(session)
            session.commit()
    finally:
        session.close()
    if existing is not None:
        return False
    return seed(reset=False)
