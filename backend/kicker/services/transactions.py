import logging
import time
from typing import Callable, TypeVar

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm.exc import StaleDataError

from kicker_model import Config as ModelConfig

from ..errors import StoreUnavailable, TransactionConflict

logger = logging.getLogger(__name__)

T = TypeVar("T")

# unique keys two writers can race on; any other integrity error is a bug
CONFLICT_KEYS = ("commit_key", "season_number", "app_state.id", "app_state_pkey")


def _is_conflict(exc: Exception) -> bool:
    if isinstance(exc, StaleDataError):
        return True
    message = str(getattr(exc, "orig", None) or exc)
    if "unique" not in message.lower():
        return False
    return any(key in message for key in CONFLICT_KEYS)


def _is_unavailable(exc: DBAPIError) -> bool:
    return isinstance(exc, OperationalError) or bool(getattr(exc, "connection_invalidated", False))


def run_transaction(db, work: Callable[[object], T], cfg: ModelConfig, label: str) -> T:
    """Run ``work(db)`` and commit, retrying the whole unit on write conflicts.

    ``work`` must re-read everything it depends on: each retry starts from a
    rolled-back session. A stale row version or a duplicate on one of
    ``CONFLICT_KEYS`` counts as a conflict; after ``cfg.commit_max_attempts``
    tries it is raised as :class:`TransactionConflict`. Other integrity errors
    propagate unchanged. Connection failures are not retried here and surface
    as :class:`StoreUnavailable`.
    """
    attempts = max(1, cfg.commit_max_attempts)
    for attempt in range(1, attempts + 1):
        try:
            result = work(db)
            db.commit()
            return result
        except (StaleDataError, IntegrityError) as exc:
            db.rollback()
            if not _is_conflict(exc):
                logger.error("%s: integrity error: %s", label, exc)
                raise
            if attempt >= attempts:
                logger.error("%s: giving up after %d conflicting attempts", label, attempt)
                raise TransactionConflict(f"{label}: {exc}", attempts=attempt) from exc
            delay = cfg.commit_backoff_seconds * (2 ** (attempt - 1))
            logger.warning("%s: write conflict on attempt %d, retrying in %.3fs", label, attempt, delay)
            time.sleep(delay)
        except DBAPIError as exc:
            db.rollback()
            if _is_unavailable(exc):
                logger.error("%s: store unavailable: %s", label, exc)
                raise StoreUnavailable(f"{label}: {exc.orig or exc}") from exc
            raise
        except Exception:
            db.rollback()
            raise
