from kicker_model import RankedPlayer, pick_season_winner, rank_players


def test_rank_by_rating_descending():
    players = [RankedPlayer(1, "A", 1490), RankedPlayer(2, "B", 1560), RankedPlayer(3, "C", 1500)]
    assert [p.id for p in rank_players(players)] == [2, 3, 1]
    assert pick_season_winner(players).id == 2


def test_ties_keep_encounter_order():
    players = [RankedPlayer(7, "G", 1520), RankedPlayer(3, "C", 1520), RankedPlayer(5, "E", 1400)]
    assert pick_season_winner(players).id == 7
    assert pick_season_winner(list(reversed(players[:2]))).id == 3


def test_negative_ratings_rank_last():
    players = [RankedPlayer(1, "A", -15), RankedPlayer(2, "B", 3)]
    assert pick_season_winner(players).id == 2


def test_no_players():
    assert pick_season_winner([]) is None
