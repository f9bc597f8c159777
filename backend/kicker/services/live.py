import logging
import threading
import uuid
from datetime import datetime, timedelta

from kicker_model import Config as ModelConfig
from kicker_model import MatchSession, Team

from ..errors import GameNotFound

logger = logging.getLogger(__name__)


class LiveGames:
    """Process-local registry of running match sessions.

    The lock only guards the dict itself; each session has a single
    controller and is mutated through plain sequential calls.
    """

    def __init__(self) -> None:
        self._games: dict[str, MatchSession] = {}
        self._lock = threading.Lock()

    def start(self, team1: Team, team2: Team, cfg: ModelConfig | None = None) -> tuple[str, MatchSession]:
        session = MatchSession.start(team1, team2, cfg=cfg)
        game_id = uuid.uuid4().hex
        with self._lock:
            self._games[game_id] = session
        return game_id, session

    def get(self, game_id: str) -> MatchSession:
        with self._lock:
            session = self._games.get(game_id)
        if session is None:
            raise GameNotFound(game_id)
        return session

    def finish(self, game_id: str) -> None:
        with self._lock:
            self._games.pop(game_id, None)

    def sweep(self, max_age: timedelta, now: datetime | None = None) -> int:
        """Drop games started more than ``max_age`` ago; return how many."""
        cutoff = (now or datetime.utcnow()) - max_age
        with self._lock:
            stale = [gid for gid, session in self._games.items() if session.started_at < cutoff]
            for gid in stale:
                del self._games[gid]
        if stale:
            logger.info("dropped %d stale live games", len(stale))
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._games.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)


games = LiveGames()
