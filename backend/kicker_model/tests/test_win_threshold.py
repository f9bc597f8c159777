from kicker_model import win_threshold


def test_default_threshold():
    assert win_threshold(0, 0) == 6
    assert win_threshold(5, 4) == 6
    assert win_threshold(4, 5) == 6


def test_deuce_raises_target():
    assert win_threshold(5, 5) == 7


def test_threshold_drops_back_after_deuce_is_broken():
    assert win_threshold(6, 5) == 6
    assert win_threshold(6, 6) == 6
