from sqlalchemy import create_engine
from sqlalchemy.orm import scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import Config


def _engine_kwargs(url: str) -> dict:
    kwargs = {"echo": Config.SQLALCHEMY_ECHO}
    if url.startswith("sqlite"):
        # in-memory SQLite must reuse one connection to keep its schema
        if ":memory:" in url:
            kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_pre_ping"] = True
    return kwargs


engine = create_engine(Config.DATABASE_URL, **_engine_kwargs(Config.DATABASE_URL))
SessionLocal = scoped_session(sessionmaker(bind=engine, autoflush=False, autocommit=False))


def get_db():
    return SessionLocal()
