from .ledger import CommitResult, commit_match
from .seasons import ClosureResult, close_season, get_app_state

__all__ = ["ClosureResult", "CommitResult", "close_season", "commit_match", "get_app_state"]
