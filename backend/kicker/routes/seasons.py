from flask import Blueprint, request

from ..config import model_config
from ..db import get_db
from ..models import SeasonRecord
from ..services.seasons import close_season, get_app_state
from ..utils import err, isoformat, ok

bp = Blueprint("seasons", __name__, url_prefix="/seasons")


@bp.get("")
def list_seasons():
    db = get_db()
    state = get_app_state(db)
    current = state.current_season
    db.commit()
    history = db.query(SeasonRecord).order_by(SeasonRecord.season_number.desc()).all()
    return ok(
        {
            "current_season": current,
            "history": [
                {
                    "season_number": s.season_number,
                    "winner_id": s.winner_id,
                    "winner_name": s.winner_name,
                    "ended_at": isoformat(s.ended_at),
                }
                for s in history
            ],
        }
    )


@bp.post("/close")
def close_current_season():
    data = request.get_json(silent=True) or {}
    season_number = data.get("season_number")
    try:
        season_number = int(season_number)
    except (TypeError, ValueError):
        return err("missing_season_number", 400)
    result = close_season(get_db(), season_number, model_config())
    return ok(
        {
            "season_number": result.season_number,
            "current_season": result.next_season,
            "winner_id": result.winner_id,
            "winner_name": result.winner_name,
            "players_reset": result.players_reset,
        }
    )
