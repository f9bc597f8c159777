from flask import Blueprint, request

from ..db import get_db
from ..models import MatchRecord
from ..utils import err, isoformat, ok

bp = Blueprint("matches", __name__, url_prefix="/matches")


def match_json(record: MatchRecord) -> dict:
    return {
        "id": record.id,
        "created_at": isoformat(record.created_at),
        "duration_ms": record.duration_ms,
        "score": {"team1": record.score_team1, "team2": record.score_team2},
        "winner": record.winner,
        "teams": record.teams_json,
        "goals": record.goals_json,
        "rating_deltas": record.rating_deltas_json,
    }


@bp.get("")
def list_matches():
    limit = request.args.get("limit", default=50, type=int)
    if limit is None or limit <= 0:
        return err("invalid_limit", 400)
    db = get_db()
    records = (
        db.query(MatchRecord)
        .order_by(MatchRecord.created_at.desc(), MatchRecord.id.desc())
        .limit(min(limit, 500))
        .all()
    )
    return ok({"matches": [match_json(r) for r in records]})


@bp.get("/<int:match_id>")
def get_match(match_id: int):
    db = get_db()
    record = db.query(MatchRecord).filter_by(id=match_id).one_or_none()
    if record is None:
        return err("match_not_found", 404)
    return ok({"match": match_json(record)})
