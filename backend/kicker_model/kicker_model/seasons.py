from typing import Iterable, List, Optional

from .types import RankedPlayer


def rank_players(players: Iterable[RankedPlayer]) -> List[RankedPlayer]:
    # sorted() is stable: equal ratings keep the order they were given in
    return sorted(players, key=lambda p: p.rating, reverse=True)


def pick_season_winner(players: Iterable[RankedPlayer]) -> Optional[RankedPlayer]:
    ranked = rank_players(players)
    if not ranked:
        return None
    return ranked[0]
