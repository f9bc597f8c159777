from flask import Blueprint, request
from sqlalchemy.orm.exc import StaleDataError

from ..config import Config
from ..db import get_db
from ..models import Player
from ..utils import err, isoformat, ok

bp = Blueprint("players", __name__, url_prefix="/players")

_EDITABLE = ("first_name", "last_name", "country", "img")


def player_json(player: Player) -> dict:
    return {
        "id": player.id,
        "first_name": player.first_name,
        "last_name": player.last_name,
        "name": player.full_name,
        "country": player.country,
        "img": player.img,
        "rating": player.rating,
        "games_won": player.games_won,
        "games_lost": player.games_lost,
        "total_games": player.total_games,
        "games_as_striker": player.games_as_striker,
        "games_as_defender": player.games_as_defender,
        "goals_as_striker": player.goals_as_striker,
        "goals_as_defender": player.goals_as_defender,
        "shutout_wins": player.shutout_wins,
        "total_playtime_ms": player.total_playtime_ms,
        "seasons_won": player.seasons_won,
        "created_at": isoformat(player.created_at),
    }


def _clean(field: str, value):
    if value is None:
        return None if field == "img" else ""
    value = str(value).strip()
    if field == "country":
        return value.upper()
    if field == "img":
        return value or None
    return value


@bp.get("")
def list_players():
    order = request.args.get("order", "ranking")
    db = get_db()
    query = db.query(Player)
    if order == "name":
        query = query.order_by(Player.last_name.asc(), Player.first_name.asc(), Player.id.asc())
    else:
        query = query.order_by(Player.rating.desc(), Player.id.asc())
    players = query.all()
    return ok({"players": [player_json(p) for p in players]})


@bp.post("")
def create_player():
    data = request.get_json(silent=True) or {}
    first_name = _clean("first_name", data.get("first_name"))
    if not first_name:
        return err("missing_name", 400)
    db = get_db()
    player = Player(
        first_name=first_name,
        last_name=_clean("last_name", data.get("last_name")),
        country=_clean("country", data.get("country")),
        img=_clean("img", data.get("img")),
        rating=Config.BASELINE_RATING,
    )
    db.add(player)
    db.commit()
    return ok({"player": player_json(player)}, 201)


@bp.get("/<int:player_id>")
def get_player(player_id: int):
    db = get_db()
    player = db.query(Player).filter_by(id=player_id).one_or_none()
    if player is None:
        return err("player_not_found", 404)
    return ok({"player": player_json(player)})


@bp.patch("/<int:player_id>")
def patch_player(player_id: int):
    db = get_db()
    player = db.query(Player).filter_by(id=player_id).one_or_none()
    if player is None:
        return err("player_not_found", 404)
    data = request.get_json(silent=True) or {}
    for field in _EDITABLE:
        if field in data:
            setattr(player, field, _clean(field, data[field]))
    if not player.first_name:
        db.rollback()
        return err("missing_name", 400)
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        return err("transaction_conflict", 409)
    return ok({"player": player_json(player)})


@bp.delete("/<int:player_id>")
def delete_player(player_id: int):
    db = get_db()
    player = db.query(Player).filter_by(id=player_id).one_or_none()
    if player is None:
        return err("player_not_found", 404)
    db.delete(player)
    db.commit()
    return ok()
