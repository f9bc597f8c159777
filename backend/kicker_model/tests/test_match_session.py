from datetime import datetime, timedelta

import pytest

from kicker_model import InvalidTransition, MatchSession, PlayerRef, Team
from kicker_model.session import ABANDONED, CONFIRMED, PLAYING, PROVISIONAL_WIN


def _teams():
    team1 = Team(striker=PlayerRef(1, "Anna S"), defender=PlayerRef(2, "Ben D"))
    team2 = Team(striker=PlayerRef(3, "Cem S"), defender=PlayerRef(4, "Dana D"))
    return team1, team2


def _session(clock=None):
    return MatchSession.start(*_teams(), clock=clock)


def _score(session, team1_goals, team2_goals):
    for _ in range(team1_goals):
        session.record_goal(1)
    for _ in range(team2_goals):
        session.record_goal(3)


def test_initial_state():
    session = _session()
    assert session.state == PLAYING
    assert session.scores == {"team1": 0, "team2": 0}
    assert session.goals == []
    assert session.winner is None
    assert session.win_threshold == 6


def test_duplicate_players_rejected():
    team1, _ = _teams()
    with pytest.raises(InvalidTransition, match="duplicate_player"):
        MatchSession.start(team1, Team(striker=PlayerRef(1), defender=PlayerRef(4)))


def test_first_to_six_wins():
    session = _session()
    _score(session, 5, 3)
    assert session.state == PLAYING
    session.record_goal(2)
    assert session.state == PROVISIONAL_WIN
    assert session.winner == "team1"


def test_deuce_extends_match():
    session = _session()
    _score(session, 5, 5)
    assert session.win_threshold == 7
    assert session.state == PLAYING
    assert session.winner is None


def test_team_two_can_win():
    session = _session()
    _score(session, 2, 6)
    assert session.winner == "team2"


def test_undo_after_win_clears_winner():
    session = _session()
    _score(session, 3, 0)
    _score(session, 0, 3)
    _score(session, 3, 0)
    assert session.scores == {"team1": 6, "team2": 3}
    assert session.winner == "team1"
    undone = session.undo_last_goal()
    assert undone.player == 1
    assert session.scores == {"team1": 5, "team2": 3}
    assert session.win_threshold == 6
    assert session.winner is None
    assert session.state == PLAYING


def test_undo_on_empty_log_is_noop():
    session = _session()
    assert session.undo_last_goal() is None
    assert session.scores == {"team1": 0, "team2": 0}
    assert session.state == PLAYING


def test_undo_pops_in_reverse_order():
    session = _session()
    session.record_goal(1)
    session.record_goal(4)
    assert session.undo_last_goal().player == 4
    assert session.scores == {"team1": 1, "team2": 0}


def test_goal_while_provisional_win_keeps_winner():
    session = _session()
    _score(session, 6, 0)
    session.record_goal(3)
    assert session.state == PROVISIONAL_WIN
    assert session.winner == "team1"


def test_swap_positions_changes_future_attribution_only():
    session = _session()
    first = session.record_goal(1)
    session.swap_positions("team1")
    second = session.record_goal(1)
    assert first.position == "striker"
    assert second.position == "defender"
    assert session.teams["team1"].striker.id == 2
    assert session.scores["team1"] == 2


def test_swap_positions_only_touches_one_team():
    session = _session()
    session.swap_positions("team2")
    assert session.teams["team1"].striker.id == 1
    assert session.teams["team2"].striker.id == 4


def test_swap_positions_unknown_team():
    session = _session()
    with pytest.raises(InvalidTransition, match="unknown_team"):
        session.swap_positions("team3")


def test_swap_sides_is_display_only():
    session = _session()
    assert session.display_order == ("team1", "team2")
    session.swap_sides()
    assert session.display_order == ("team2", "team1")
    session.record_goal(1)
    assert session.scores == {"team1": 1, "team2": 0}
    assert session.goals[0].team == "team1"


def test_goal_by_outsider_rejected():
    session = _session()
    with pytest.raises(InvalidTransition, match="player_not_in_match"):
        session.record_goal(99)
    assert session.goals == []


def test_goal_with_wrong_position_rejected():
    session = _session()
    with pytest.raises(InvalidTransition, match="position_mismatch"):
        session.record_goal(1, "defender")
    assert session.record_goal(1, "striker").position == "striker"


def test_confirm_while_playing_is_error():
    session = _session()
    _score(session, 5, 0)
    with pytest.raises(InvalidTransition, match="winner_not_declared"):
        session.confirm()
    assert session.state == PLAYING
    assert session.summary is None


def test_confirm_produces_summary():
    now = [datetime(2026, 5, 1, 18, 0, 0)]
    session = _session(clock=lambda: now[0])
    _score(session, 6, 2)
    now[0] += timedelta(minutes=7)
    summary = session.confirm()
    assert session.state == CONFIRMED
    assert summary.winner == "team1"
    assert summary.winner_label == "Team 1"
    assert (summary.score1, summary.score2) == (6, 2)
    assert len(summary.goals) == 8
    assert summary.duration == timedelta(minutes=7)
    assert summary.duration_ms == 420000
    assert not summary.is_shutout


def test_confirmed_session_is_terminal():
    session = _session()
    _score(session, 6, 0)
    session.confirm()
    with pytest.raises(InvalidTransition, match="match_finished"):
        session.record_goal(1)
    with pytest.raises(InvalidTransition, match="match_finished"):
        session.undo_last_goal()
    with pytest.raises(InvalidTransition, match="winner_not_declared"):
        session.confirm()


def test_abandon_discards_state():
    session = _session()
    _score(session, 3, 2)
    session.abandon()
    assert session.state == ABANDONED
    assert session.goals == []
    assert session.summary is None
    with pytest.raises(InvalidTransition):
        session.abandon()


def test_to_dict_reports_sides_and_threshold():
    session = _session()
    _score(session, 5, 5)
    session.swap_sides()
    data = session.to_dict()
    assert data["win_threshold"] == 7
    assert data["sides"] == {"left": "team2", "right": "team1"}
    assert data["score"] == {"team1": 5, "team2": 5}
    assert len(data["goals"]) == 10
