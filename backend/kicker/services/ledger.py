import logging
from dataclasses import dataclass, field

from kicker_model import Config as ModelConfig
from kicker_model import InvalidTransition, MatchSummary, RatingDelta, compute_player_updates
from kicker_model.types import DEFENDER, STRIKER, TEAM1, TEAM2

from ..errors import PlayerNotFound
from ..models import MatchRecord, Player
from .transactions import run_transaction

logger = logging.getLogger(__name__)


@dataclass
class CommitResult:
    match_id: int
    already_committed: bool
    delta: RatingDelta | None = None
    ratings: dict[int, int] = field(default_factory=dict)


def _load_players(db, player_ids: list[int]) -> dict[int, Player]:
    rows = (
        db.query(Player)
        .filter(Player.id.in_(player_ids))
        .populate_existing()
        .with_for_update()
        .all()
    )
    players = {p.id: p for p in rows}
    for pid in player_ids:
        if pid not in players:
            raise PlayerNotFound(pid)
    return players


def _teams_json(summary: MatchSummary, players: dict[int, Player]) -> dict:
    teams = {}
    for key in (TEAM1, TEAM2):
        team = summary.team(key)
        teams[key] = {
            STRIKER: {"id": team.striker.id, "name": team.striker.name or players[team.striker.id].full_name},
            DEFENDER: {"id": team.defender.id, "name": team.defender.name or players[team.defender.id].full_name},
        }
    return teams


def _apply(db, summary: MatchSummary, cfg: ModelConfig) -> CommitResult:
    ids = summary.participant_ids
    if len(set(ids)) != len(ids):
        raise InvalidTransition("duplicate_player", f"match lists players {ids}, need four distinct")

    key = summary.idempotency_key
    existing = db.query(MatchRecord).filter_by(commit_key=key).one_or_none()
    if existing is not None:
        deltas = existing.rating_deltas_json or {}
        logger.info("match %s already committed as record %s", key[:12], existing.id)
        return CommitResult(
            match_id=existing.id,
            already_committed=True,
            ratings={int(pid): value for pid, value in (deltas.get("ratings") or {}).items()},
        )

    players = _load_players(db, summary.participant_ids)
    delta, updates = compute_player_updates(summary, {pid: p.rating for pid, p in players.items()}, cfg)

    for pid, upd in updates.items():
        player = players[pid]
        player.rating = player.rating + upd.rating_change
        player.total_games = player.total_games + 1
        if upd.won:
            player.games_won = player.games_won + 1
        else:
            player.games_lost = player.games_lost + 1
        player.games_as_striker = player.games_as_striker + upd.games_as_striker
        player.games_as_defender = player.games_as_defender + upd.games_as_defender
        player.goals_as_striker = player.goals_as_striker + upd.goals_as_striker
        player.goals_as_defender = player.goals_as_defender + upd.goals_as_defender
        if upd.shutout_win:
            player.shutout_wins = player.shutout_wins + 1
        player.total_playtime_ms = player.total_playtime_ms + upd.playtime_ms

    ratings = {pid: players[pid].rating for pid in summary.participant_ids}
    record = MatchRecord(
        duration_ms=summary.duration_ms,
        score_team1=summary.score1,
        score_team2=summary.score2,
        winner=summary.winner_label,
        teams_json=_teams_json(summary, players),
        goals_json=summary.to_dict()["goals"],
        rating_deltas_json={
            "win_delta": delta.win_delta,
            "lose_delta": delta.lose_delta,
            "dynamic": delta.dynamic,
            "changes": {str(pid): upd.rating_change for pid, upd in updates.items()},
            "ratings": {str(pid): value for pid, value in ratings.items()},
        },
        commit_key=key,
    )
    db.add(record)
    db.flush()
    return CommitResult(match_id=record.id, already_committed=False, delta=delta, ratings=ratings)


def commit_match(db, summary: MatchSummary, cfg: ModelConfig | None = None) -> CommitResult:
    """Write a confirmed match to the ledger in one transaction.

    Ratings are re-read inside the transaction, so the delta reflects whatever
    other matches or a season closure did since this match started. Committing
    the same summary twice is safe: the second call finds the record by its
    content hash and changes nothing.
    """
    cfg = cfg or ModelConfig()
    result = run_transaction(db, lambda session: _apply(session, summary, cfg), cfg, "commit_match")
    if not result.already_committed:
        logger.info(
            "match record %s committed: %s won %d:%d, +%d/-%d",
            result.match_id,
            summary.winner_label,
            summary.score1,
            summary.score2,
            result.delta.win_delta,
            result.delta.lose_delta,
        )
    return result
