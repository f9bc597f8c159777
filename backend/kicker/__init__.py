import logging

from flask import Flask
from flask_cors import CORS

from kicker_model import InvalidTransition

from .config import Config
from .db import SessionLocal
from .errors import DomainError
from .seed import ensure_schema, seed_if_empty
from .utils import err

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=Config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> Flask:
    _configure_logging()
    app = Flask(__name__)
    app.url_map.strict_slashes = False
    CORS(
        app,
        resources={r"/api/*": {"origins": "*"}},
        allow_headers=["Content-Type"],
    )

    from .routes import games, matches, players, seasons

    api_prefix = "/api"
    app.register_blueprint(players.bp, url_prefix=f"{api_prefix}/players")
    app.register_blueprint(games.bp, url_prefix=f"{api_prefix}/games")
    app.register_blueprint(matches.bp, url_prefix=f"{api_prefix}/matches")
    app.register_blueprint(seasons.bp, url_prefix=f"{api_prefix}/seasons")

    @app.get("/api/health")
    def healthcheck():
        return {"ok": True}

    @app.teardown_appcontext
    def shutdown_session(_exc=None):
        SessionLocal.remove()

    @app.errorhandler(InvalidTransition)
    def handle_invalid_transition(exc):
        return err(exc.code, 409, detail=exc.detail)

    @app.errorhandler(DomainError)
    def handle_domain_error(exc):
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.code, exc.detail)
        return err(exc.code, exc.status_code, **exc.to_dict())

    ensure_schema()
    seed_if_empty()

    return app
