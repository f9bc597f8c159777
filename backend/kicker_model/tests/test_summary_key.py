from datetime import datetime, timedelta

from kicker_model import Goal, MatchSummary, PlayerRef, Team


def _summary(**overrides):
    data = dict(
        team1=Team(striker=PlayerRef(1, "A"), defender=PlayerRef(2, "B")),
        team2=Team(striker=PlayerRef(3, "C"), defender=PlayerRef(4, "D")),
        score1=6,
        score2=0,
        goals=tuple(Goal(player=1, position="striker", team="team1") for _ in range(6)),
        duration=timedelta(seconds=300),
        winner="team1",
        started_at=datetime(2026, 5, 1, 18, 0, 0),
    )
    data.update(overrides)
    return MatchSummary(**data)


def test_key_is_stable_for_equal_summaries():
    assert _summary().idempotency_key == _summary().idempotency_key
    assert len(_summary().idempotency_key) == 64


def test_key_changes_with_content():
    base = _summary().idempotency_key
    assert _summary(started_at=datetime(2026, 5, 1, 18, 0, 1)).idempotency_key != base
    assert _summary(duration=timedelta(seconds=301)).idempotency_key != base


def test_summary_helpers():
    summary = _summary()
    assert summary.is_shutout
    assert summary.loser == "team2"
    assert summary.participant_ids == [1, 2, 3, 4]
