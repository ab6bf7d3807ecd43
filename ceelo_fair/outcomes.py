"""
Cee-Lo hand classification.

Rules are checked top to bottom against the dice multiset; the first
matching rule decides the outcome:

    4-5-6             -> win,    rank 1000
    triple v-v-v      -> win,    rank 900 + v
    1-2-3             -> lose,   rank 0
    pair + odd 2..5   -> point,  rank 100 + odd
    anything else     -> reroll, rank -1

A pair whose odd die is 1 or 6 is not a point; it falls through to reroll.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .dice import DiceTriple, validate_dice
from .errors import MalformedInput

RANK_456 = 1000
RANK_TRIPLE_BASE = 900
RANK_POINT_BASE = 100
RANK_LOSE = 0
RANK_REROLL = -1

POINT_VALUES = frozenset({2, 3, 4, 5})

JACKPOT_POINTS = 3
STANDARD_POINTS = 1

_FOUR_FIVE_SIX = Counter((4, 5, 6))
_ONE_TWO_THREE = Counter((1, 2, 3))


class Category(str, Enum):
    WIN = "win"
    LOSE = "lose"
    POINT = "point"
    REROLL = "reroll"


@dataclass(frozen=True)
class Outcome:
    category: Category
    rank: int
    point: Optional[int] = None
    triple_value: Optional[int] = None
    dice: Optional[DiceTriple] = None

    @property
    def is_terminal(self) -> bool:
        """Win and lose end a round; point and reroll do not settle."""
        return self.category in (Category.WIN, Category.LOSE)

    @property
    def is_456(self) -> bool:
        return self.category is Category.WIN and self.rank == RANK_456

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"outcome": self.category.value, "rank": self.rank}
        if self.point is not None:
            d["point"] = self.point
        if self.triple_value is not None:
            d["triple_value"] = self.triple_value
        if self.dice is not None:
            d["dice"] = list(self.dice)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Outcome":
        try:
            category = Category(data["outcome"])
            rank = int(data["rank"])
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedInput(f"not an outcome record: {data!r}") from e
        dice = data.get("dice")
        return cls(
            category=category,
            rank=rank,
            point=data.get("point"),
            triple_value=data.get("triple_value"),
            dice=validate_dice(dice) if dice is not None else None,
        )


# ------------------------------- Rule table --------------------------------- #

_Counts = Counter
_Rule = Tuple[str, Callable[[_Counts], bool], Callable[[_Counts, DiceTriple], Outcome]]


def _pair_odd(counts: _Counts) -> Optional[int]:
    """The odd die of a pair hand, or None when the dice are not a pair."""
    if sorted(counts.values()) != [1, 2]:
        return None
    return next(v for v, n in counts.items() if n == 1)


def _triple_value(counts: _Counts) -> int:
    (value,) = counts.keys()
    return value


_RULES: List[_Rule] = [
    (
        "four_five_six",
        lambda c: c == _FOUR_FIVE_SIX,
        lambda c, d: Outcome(Category.WIN, RANK_456, dice=d),
    ),
    (
        "triple",
        lambda c: len(c) == 1,
        lambda c, d: Outcome(
            Category.WIN,
            RANK_TRIPLE_BASE + _triple_value(c),
            triple_value=_triple_value(c),
            dice=d,
        ),
    ),
    (
        "one_two_three",
        lambda c: c == _ONE_TWO_THREE,
        lambda c, d: Outcome(Category.LOSE, RANK_LOSE, dice=d),
    ),
    (
        "point",
        lambda c: _pair_odd(c) in POINT_VALUES,
        lambda c, d: Outcome(
            Category.POINT,
            RANK_POINT_BASE + _pair_odd(c),  # type: ignore[operator]
            point=_pair_odd(c),
            dice=d,
        ),
    ),
]


def resolve(dice: Sequence[int]) -> Outcome:
    """Classify three dice. Raises MalformedInput for anything but three 1-6 ints."""
    triple = validate_dice(dice)
    counts = Counter(triple)
    for _name, matches, build in _RULES:
        if matches(counts):
            return build(counts, triple)
    return Outcome(Category.REROLL, RANK_REROLL, dice=triple)


def round_points(outcome: Outcome) -> int:
    """
    Leaderboard points for a round won with ``outcome``.

    4-5-6 and triples of 4, 5 or 6 are jackpots; every other hand that takes
    a round (low triples, points, even a 1-2-3 against rerolls) scores the
    standard amount.
    """
    if outcome.is_456:
        return JACKPOT_POINTS
    if outcome.triple_value is not None and outcome.triple_value >= 4:
        return JACKPOT_POINTS
    return STANDARD_POINTS
