#!/usr/bin/env python3
"""Reset the database and seed the demo roster."""
from __future__ import annotations

import pathlib
import sys

BACKEND = pathlib.Path(__file__).resolve().parents[1]
MODEL = BACKEND / "kicker_model"
for path in (BACKEND, MODEL):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from kicker.seed import DEMO_PLAYERS, ensure_schema, seed


def main() -> None:
    ensure_schema()
    seed(reset=True)
    print(f"Seed complete: {len(DEMO_PLAYERS)} players, season 1")


if __name__ == "__main__":
    main()
