"""Errors raised by the ledger and season services.

Each carries an HTTP status and a short problem code so the Flask error
handler can render it without knowing the concrete type.
"""

from __future__ import annotations


class DomainError(Exception):
    status_code = 400
    code = "domain_error"
    retryable = False

    def __init__(self, detail: str | None = None, **extra) -> None:
        super().__init__(detail or self.code)
        self.detail = detail
        self.extra = extra

    def to_dict(self) -> dict:
        payload = {"detail": self.detail, "retryable": self.retryable}
        payload.update(self.extra)
        return payload


class TransactionConflict(DomainError):
    status_code = 409
    code = "transaction_conflict"
    retryable = True


class StoreUnavailable(DomainError):
    status_code = 503
    code = "store_unavailable"
    retryable = True


class PlayerNotFound(DomainError):
    status_code = 404
    code = "player_not_found"

    def __init__(self, player_id) -> None:
        super().__init__(f"player '{player_id}' not found", player_id=player_id)


class GameNotFound(DomainError):
    status_code = 404
    code = "game_not_found"

    def __init__(self, game_id: str) -> None:
        super().__init__(f"game '{game_id}' not found", game_id=game_id)


class NoPlayers(DomainError):
    status_code = 409
    code = "no_players"


class SeasonMismatch(DomainError):
    status_code = 409
    code = "season_mismatch"

    def __init__(self, expected: int, current: int) -> None:
        super().__init__(
            f"season {expected} is not the current season ({current})",
            expected=expected,
            current=current,
        )


class PartialClosureFailure(DomainError):
    """Season closure aborted part-way.

    ``completed`` lists the steps that ran inside the aborted transaction and
    ``failed_step`` the one that raised. ``persisted`` is always ``False``:
    the transaction was rolled back, so the closure can simply be retried.
    """

    status_code = 500
    code = "partial_closure_failure"
    retryable = True

    def __init__(self, season_number: int, completed: list[str], failed_step: str | None, cause: str) -> None:
        super().__init__(
            f"closing season {season_number} failed at {failed_step}: {cause}",
            season_number=season_number,
            completed=list(completed),
            failed_step=failed_step,
            persisted=False,
        )
        self.completed = list(completed)
        self.failed_step = failed_step
