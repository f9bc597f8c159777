import pathlib
import sys

BACKEND = pathlib.Path(__file__).resolve().parent
MODEL = BACKEND / "kicker_model"
for path in (BACKEND, MODEL):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from kicker import create_app

app = create_app()
