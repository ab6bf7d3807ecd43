from __future__ import annotations

from enum import Enum
from typing import Hashable, List, Mapping, Optional, Tuple, TypeVar

from .outcomes import Category, Outcome

K = TypeVar("K", bound=Hashable)


class Ordering(str, Enum):
    A_WINS = "a_wins"
    B_WINS = "b_wins"
    TIE = "tie"


def compare(a: Outcome, b: Outcome) -> Ordering:
    """
    Head-to-head result of two finalized outcomes.

    Reroll loses to everything and ties only with another reroll; lose
    beats only reroll. Remaining hands are ordered by rank.
    """
    for category in (Category.REROLL, Category.LOSE):
        a_in = a.category is category
        b_in = b.category is category
        if a_in and b_in:
            return Ordering.TIE
        if a_in:
            return Ordering.B_WINS
        if b_in:
            return Ordering.A_WINS
    return _by_rank(a.rank, b.rank)


def compare_numeric(a: Outcome, b: Outcome) -> Ordering:
    """Rank-only shortcut; agrees with ``compare`` because the rank bands are disjoint."""
    return _by_rank(a.rank, b.rank)


def _by_rank(ra: int, rb: int) -> Ordering:
    if ra > rb:
        return Ordering.A_WINS
    if ra < rb:
        return Ordering.B_WINS
    return Ordering.TIE


def round_winner(outcomes: Mapping[K, Outcome]) -> Optional[K]:
    """
    Key of the single best outcome, or None when nobody takes the round:
    every player rerolled, or the best hands tie.
    """
    if not outcomes:
        return None
    if all(o.category is Category.REROLL for o in outcomes.values()):
        return None

    best: List[Tuple[K, Outcome]] = []
    for key, outcome in outcomes.items():
        if not best:
            best = [(key, outcome)]
            continue
        verdict = compare(outcome, best[0][1])
        if verdict is Ordering.A_WINS:
            best = [(key, outcome)]
        elif verdict is Ordering.TIE:
            best.append((key, outcome))

    if len(best) != 1:
        return None
    return best[0][0]
