from collections import defaultdict

from .config import Config
from .ratings import compute_delta, team_average
from .types import DEFENDER, STRIKER, TEAMS, MatchSummary, PlayerStatDelta, RatingDelta


def goals_by_player(summary: MatchSummary) -> dict[int, dict[str, int]]:
    tally: dict[int, dict[str, int]] = defaultdict(lambda: {STRIKER: 0, DEFENDER: 0})
    for goal in summary.goals:
        tally[goal.player][goal.position] += 1
    return dict(tally)


def compute_player_updates(
    summary: MatchSummary, ratings: dict[int, int], cfg: Config | None = None
) -> tuple[RatingDelta, dict[int, PlayerStatDelta]]:
    """Return the rating delta and per-player counter increments for a match.

    ``ratings`` must hold the current rating of all four participants; the
    averages are taken from it rather than from anything captured when the
    match started. Goals are credited to the position recorded on each goal,
    games to the role held at confirmation.
    """
    cfg = cfg or Config()
    winning = summary.team(summary.winner)
    losing = summary.team(summary.loser)
    delta = compute_delta(
        team_average([ratings[p.id] for p in winning.players]),
        team_average([ratings[p.id] for p in losing.players]),
        summary.is_shutout,
        cfg,
    )
    tally = goals_by_player(summary)

    updates: dict[int, PlayerStatDelta] = {}
    for key in TEAMS:
        team = summary.team(key)
        won = key == summary.winner
        for position, player in ((STRIKER, team.striker), (DEFENDER, team.defender)):
            goals = tally.get(player.id, {STRIKER: 0, DEFENDER: 0})
            updates[player.id] = PlayerStatDelta(
                player_id=player.id,
                team=key,
                won=won,
                rating_change=delta.win_delta if won else -delta.lose_delta,
                games_as_striker=1 if position == STRIKER else 0,
                games_as_defender=1 if position == DEFENDER else 0,
                goals_as_striker=goals[STRIKER],
                goals_as_defender=goals[DEFENDER],
                shutout_win=won and summary.is_shutout,
                playtime_ms=summary.duration_ms,
            )
    return delta, updates
