import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from kicker_model import Config as ModelConfig
from kicker_model import RankedPlayer, pick_season_winner

from ..errors import DomainError, NoPlayers, PartialClosureFailure, SeasonMismatch
from ..models import AppState, Player, SeasonRecord
from .transactions import run_transaction

logger = logging.getLogger(__name__)

APP_STATE_ID = 1

HISTORY_APPEND = "history_append"
TITLE_INCREMENT = "title_increment"
RATING_RESET = "rating_reset"
SEASON_INCREMENT = "season_increment"
CLOSURE_STEPS = (HISTORY_APPEND, TITLE_INCREMENT, RATING_RESET, SEASON_INCREMENT)


@dataclass
class ClosureResult:
    season_number: int
    next_season: int
    winner_id: int
    winner_name: str
    players_reset: int


@dataclass
class _Progress:
    completed: list[str] = field(default_factory=list)
    current: str | None = None

    def reset(self) -> None:
        self.completed = []
        self.current = None


def get_app_state(db, for_update: bool = False) -> AppState:
    query = db.query(AppState).filter_by(id=APP_STATE_ID)
    if for_update:
        query = query.populate_existing().with_for_update()
    state = query.one_or_none()
    if state is None:
        state = AppState(id=APP_STATE_ID, current_season=1, updated_at=datetime.utcnow())
        db.add(state)
        db.flush()
    return state


def _roster_query(db):
    # rows stay locked until the reset commits
    return db.query(Player).order_by(Player.id.asc()).populate_existing().with_for_update()


def _append_history(db, season_number: int, winner: Player) -> SeasonRecord:
    record = SeasonRecord(season_number=season_number, winner_id=winner.id, winner_name=winner.full_name)
    db.add(record)
    db.flush()
    return record


def _increment_title(db, winner: Player) -> None:
    winner.seasons_won = (winner.seasons_won or 0) + 1
    db.flush()


def _reset_ratings(db, baseline: int) -> int:
    # bumping the version makes any ledger transaction that read the old
    # ratings conflict and re-read
    result = db.execute(
        update(Player)
        .values(rating=baseline, version=Player.version + 1)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount


def _advance_season(db, state: AppState) -> int:
    state.current_season = state.current_season + 1
    state.updated_at = datetime.utcnow()
    db.flush()
    return state.current_season


def _close(db, season_number: int, cfg: ModelConfig, progress: _Progress) -> ClosureResult:
    progress.reset()
    state = get_app_state(db, for_update=True)
    if state.current_season != season_number:
        raise SeasonMismatch(season_number, state.current_season)

    players = _roster_query(db).all()
    leader = pick_season_winner(RankedPlayer(p.id, p.full_name, p.rating) for p in players)
    if leader is None:
        raise NoPlayers("cannot close a season without players")
    winner = next(p for p in players if p.id == leader.id)
    winner_name = winner.full_name

    progress.current = HISTORY_APPEND
    _append_history(db, season_number, winner)
    progress.completed.append(HISTORY_APPEND)

    progress.current = TITLE_INCREMENT
    _increment_title(db, winner)
    progress.completed.append(TITLE_INCREMENT)

    progress.current = RATING_RESET
    reset = _reset_ratings(db, cfg.baseline_rating)
    progress.completed.append(RATING_RESET)

    progress.current = SEASON_INCREMENT
    next_season = _advance_season(db, state)
    progress.completed.append(SEASON_INCREMENT)
    progress.current = None

    return ClosureResult(
        season_number=season_number,
        next_season=next_season,
        winner_id=leader.id,
        winner_name=winner_name,
        players_reset=reset,
    )


def close_season(db, season_number: int, cfg: ModelConfig | None = None) -> ClosureResult:
    """Close ``season_number``: record the leader, crown them, reset ratings.

    All four writes share one transaction, so either every one of them lands
    or none does. Closing a season that is no longer current raises
    :class:`SeasonMismatch`, which makes a retried request harmless.
    """
    cfg = cfg or ModelConfig()
    progress = _Progress()
    try:
        result = run_transaction(db, lambda session: _close(session, season_number, cfg, progress), cfg, "close_season")
    except (SeasonMismatch, NoPlayers):
        raise
    except (DomainError, SQLAlchemyError) as exc:
        logger.exception(
            "closing season %s failed at %s after %s", season_number, progress.current, progress.completed
        )
        raise PartialClosureFailure(season_number, progress.completed, progress.current, str(exc)) from exc
    logger.info(
        "season %s closed: winner %s (%s), %d ratings reset",
        result.season_number,
        result.winner_name,
        result.winner_id,
        result.players_reset,
    )
    return result
