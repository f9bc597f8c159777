import os

from kicker_model import Config as ModelConfig

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _load_env() -> None:
    candidates = [
        os.path.join(BASE_DIR, ".env"),
        os.path.join(BASE_DIR, "backend", ".env"),
    ]
    for path in candidates:
        if not os.path.exists(path):
            continue
        with open(path, "r", encoding="utf-8") as handle:
            for raw in handle:
                line = raw.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = value


_load_env()


class Config:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///" + os.path.join(BASE_DIR, "kicker.db"))
    SQLALCHEMY_ECHO = os.getenv("SQLALCHEMY_ECHO", "0") == "1"
    AUTO_SEED = os.getenv("AUTO_SEED", "1") == "1"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    BASELINE_RATING = int(os.getenv("BASELINE_RATING", "1500"))
    COMMIT_MAX_ATTEMPTS = int(os.getenv("COMMIT_MAX_ATTEMPTS", "5"))
    COMMIT_BACKOFF_SECONDS = float(os.getenv("COMMIT_BACKOFF_SECONDS", "0.05"))
    LIVE_GAME_MAX_AGE_SECONDS = int(os.getenv("LIVE_GAME_MAX_AGE_SECONDS", "21600"))


def model_config() -> ModelConfig:
    return ModelConfig(
        baseline_rating=Config.BASELINE_RATING,
        commit_max_attempts=Config.COMMIT_MAX_ATTEMPTS,
        commit_backoff_seconds=Config.COMMIT_BACKOFF_SECONDS,
    )
