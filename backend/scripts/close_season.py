#!/usr/bin/env python3
"""Close a season from the command line.

Usage: close_season.py SEASON_NUMBER

The season number must match the current one, so running the script twice
never closes two seasons.
"""
from __future__ import annotations

import pathlib
import sys

BACKEND = pathlib.Path(__file__).resolve().parents[1]
MODEL = BACKEND / "kicker_model"
for path in (BACKEND, MODEL):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from kicker.config import model_config
from kicker.db import SessionLocal
from kicker.errors import DomainError
from kicker.seed import ensure_schema
from kicker.services.seasons import close_season


def main(argv: list[str]) -> int:
    if len(argv) != 1 or not argv[0].isdigit():
        print(__doc__.strip().splitlines()[2])
        return 2
    ensure_schema()
    db = SessionLocal()
    try:
        result = close_season(db, int(argv[0]), model_config())
    except DomainError as exc:
        print(f"Season not closed: {exc.code}: {exc.detail}")
        for key, value in exc.extra.items():
            print(f"  {key}: {value}")
        return 1
    finally:
        db.close()
    print(
        f"Season {result.season_number} closed. Winner: {result.winner_name} "
        f"(#{result.winner_id}). {result.players_reset} ratings reset. "
        f"Current season: {result.next_season}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
