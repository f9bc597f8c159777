import os

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["AUTO_SEED"] = "0"
os.environ["COMMIT_BACKOFF_SECONDS"] = "0"

import pytest

from kicker import create_app
from kicker.db import SessionLocal, engine
from kicker.models import Base, Player
from kicker.services.live import games


@pytest.fixture
def app():
    SessionLocal.remove()
    Base.metadata.drop_all(engine)
    app = create_app()
    app.config["TESTING"] = True
    yield app
    SessionLocal.remove()
    games.clear()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    yield SessionLocal()
    SessionLocal.remove()


@pytest.fixture
def fetch():
    """Load a row through a fresh view of the database."""

    def _fetch(model, pk):
        session = SessionLocal()
        session.expire_all()
        return session.get(model, pk)

    return _fetch


@pytest.fixture
def make_player(db):
    def _make(first_name: str, last_name: str = "", rating: int = 1500, **extra) -> int:
        player = Player(first_name=first_name, last_name=last_name, rating=rating, **extra)
        db.add(player)
        db.commit()
        return player.id

    return _make


@pytest.fixture
def roster(make_player):
    return [
        make_player("Anna", "Keller"),
        make_player("Ben", "Dorn"),
        make_player("Cem", "Aydin"),
        make_player("Dana", "Berg"),
    ]
