from kicker.models import AppState, Player
from kicker.seed import DEMO_PLAYERS, seed, seed_if_empty


def test_seed_if_empty_respects_auto_seed(app, db):
    assert seed_if_empty() is False
    assert db.query(Player).count() == 0


def test_seed_creates_players_and_state(app, db, make_player):
    make_player("Gone")
    assert seed(reset=True) is True
    db.expire_all()
    players = db.query(Player).all()
    assert len(players) == len(DEMO_PLAYERS)
    assert {p.rating for p in players} == {1500}
    assert db.get(AppState, 1).current_season == 1
