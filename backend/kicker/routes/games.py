from datetime import timedelta

from flask import Blueprint, request

from kicker_model import InvalidTransition, PlayerRef, Team
from kicker_model.session import CONFIRMED
from kicker_model.types import DEFENDER, STRIKER, TEAM1, TEAM2

from ..config import Config, model_config
from ..db import get_db
from ..errors import PlayerNotFound
from ..models import Player
from ..services.ledger import commit_match
from ..services.live import games
from ..utils import err, ok

bp = Blueprint("games", __name__, url_prefix="/games")


def _roster_ids(data: dict) -> dict[str, dict[str, int]] | None:
    roster = {}
    for team in (TEAM1, TEAM2):
        slots = data.get(team) or {}
        striker, defender = slots.get(STRIKER), slots.get(DEFENDER)
        if striker is None or defender is None:
            return None
        try:
            roster[team] = {STRIKER: int(striker), DEFENDER: int(defender)}
        except (TypeError, ValueError):
            return None
    return roster


def _team(slots: dict[str, int], players: dict[int, Player]) -> Team:
    refs = {}
    for position, pid in slots.items():
        player = players.get(pid)
        if player is None:
            raise PlayerNotFound(pid)
        refs[position] = PlayerRef(id=player.id, name=player.full_name)
    return Team(striker=refs[STRIKER], defender=refs[DEFENDER])


def _game_json(game_id: str, session) -> dict:
    return {"game_id": game_id, "game": session.to_dict()}


@bp.post("")
def start_game():
    data = request.get_json(silent=True) or {}
    roster = _roster_ids(data)
    if roster is None:
        return err("invalid_roster", 400)
    games.sweep(timedelta(seconds=Config.LIVE_GAME_MAX_AGE_SECONDS))
    ids = [pid for slots in roster.values() for pid in slots.values()]
    db = get_db()
    players = {p.id: p for p in db.query(Player).filter(Player.id.in_(ids)).all()}
    team1 = _team(roster[TEAM1], players)
    team2 = _team(roster[TEAM2], players)
    game_id, session = games.start(team1, team2, cfg=model_config())
    return ok(_game_json(game_id, session), 201)


@bp.get("/<game_id>")
def get_game(game_id: str):
    return ok(_game_json(game_id, games.get(game_id)))


@bp.post("/<game_id>/goals")
def record_goal(game_id: str):
    session = games.get(game_id)
    data = request.get_json(silent=True) or {}
    player_id = data.get("player_id")
    if player_id is None:
        return err("invalid_payload", 400)
    try:
        player_id = int(player_id)
    except (TypeError, ValueError):
        return err("invalid_payload", 400)
    session.record_goal(player_id, data.get("position"))
    return ok(_game_json(game_id, session))


@bp.post("/<game_id>/undo")
def undo_goal(game_id: str):
    session = games.get(game_id)
    undone = session.undo_last_goal()
    payload = _game_json(game_id, session)
    payload["undone"] = None if undone is None else {"player_id": undone.player, "position": undone.position, "team": undone.team}
    return ok(payload)


@bp.post("/<game_id>/swap-positions")
def swap_positions(game_id: str):
    session = games.get(game_id)
    data = request.get_json(silent=True) or {}
    session.swap_positions(data.get("team"))
    return ok(_game_json(game_id, session))


@bp.post("/<game_id>/swap-sides")
def swap_sides(game_id: str):
    session = games.get(game_id)
    session.swap_sides()
    return ok(_game_json(game_id, session))


def _commit(game_id: str, session):
    try:
        result = commit_match(get_db(), session.summary, model_config())
    except PlayerNotFound:
        # a deleted participant means this game can never be committed
        games.finish(game_id)
        raise
    games.finish(game_id)
    return ok(
        {
            "game_id": game_id,
            "match_id": result.match_id,
            "already_committed": result.already_committed,
            "win_delta": result.delta.win_delta if result.delta else None,
            "lose_delta": result.delta.lose_delta if result.delta else None,
            "ratings": {str(pid): value for pid, value in result.ratings.items()},
        }
    )


@bp.post("/<game_id>/confirm")
def confirm_game(game_id: str):
    session = games.get(game_id)
    session.confirm()
    return _commit(game_id, session)


@bp.post("/<game_id>/commit")
def commit_game(game_id: str):
    session = games.get(game_id)
    if session.state != CONFIRMED or session.summary is None:
        raise InvalidTransition("not_confirmed", f"game is {session.state}")
    return _commit(game_id, session)


@bp.delete("/<game_id>")
def abandon_game(game_id: str):
    session = games.get(game_id)
    session.abandon()
    games.finish(game_id)
    return ok()
