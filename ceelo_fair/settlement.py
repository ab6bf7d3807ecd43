"""
Settlement of terminal outcomes.

All money is integral (smallest currency unit). The house edge is turned
into an exact ``Fraction`` before any arithmetic, so the winning profit

    profit = floor(stake * (1/edge - 1))

is computed without floating point. Rounding is always toward zero profit
(floor), which means the realized payout never exceeds the nominal one;
``rounding_remainder`` reports the fraction of a unit the player gives up
and ``effective_edge`` the edge that flooring actually realizes.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Any, Dict, Hashable, Mapping, TypeVar

from .errors import InvalidConfiguration, MalformedInput, RoundStateError
from .outcomes import Category, Outcome

log = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True)
class SettlementResult:
    stake: int
    won: bool
    payout: int
    profit: int  # player's perspective; -stake on a loss

    @property
    def house_delta(self) -> int:
        return -self.profit

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stake": self.stake,
            "won": self.won,
            "payout": self.payout,
            "profit": self.profit,
            "house_delta": self.house_delta,
        }


def parse_house_edge(value: Any) -> Fraction:
    """
    Exact house edge in the open interval (0, 1).

    Floats are read through their shortest repr so ``0.03`` becomes 3/100
    rather than the binary approximation.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidConfiguration(f"house edge must be a number, got {value!r}")
    try:
        if isinstance(value, Fraction):
            edge = value
        elif isinstance(value, (int, Decimal)):
            edge = Fraction(value)
        elif isinstance(value, float):
            edge = Fraction(repr(value))
        elif isinstance(value, str):
            edge = Fraction(value.strip())
        else:
            raise TypeError(type(value).__name__)
    except (TypeError, ValueError, OverflowError, ZeroDivisionError) as e:
        raise InvalidConfiguration(f"house edge is not a number: {value!r}") from e
    if not 0 < edge < 1:
        raise InvalidConfiguration(f"house edge must be in (0, 1), got {value!r}")
    return edge


def win_multiplier(house_edge: Any) -> Fraction:
    edge = parse_house_edge(house_edge)
    return 1 / edge - 1


def validate_stake(stake: Any) -> int:
    if isinstance(stake, bool) or not isinstance(stake, int):
        raise MalformedInput(f"stake must be an int in the smallest currency unit, got {stake!r}")
    if stake <= 0:
        raise MalformedInput(f"stake must be positive, got {stake}")
    return stake


def settle(stake: int, won: bool, house_edge: Any) -> SettlementResult:
    # edge is checked on losses too
    multiplier = win_multiplier(house_edge)
    stake = validate_stake(stake)
    if not isinstance(won, bool):
        raise MalformedInput(f"won must be a bool, got {won!r}")

    if won:
        profit = math.floor(stake * multiplier)
        result = SettlementResult(stake=stake, won=True, payout=stake + profit, profit=profit)
    else:
        result = SettlementResult(stake=stake, won=False, payout=0, profit=-stake)
    log.info(
        "Settled stake=%d won=%s payout=%d profit=%d", stake, won, result.payout, result.profit
    )
    return result


def settle_outcome(stake: int, outcome: Outcome, house_edge: Any) -> SettlementResult:
    """Settle a resolved hand; only win and lose are settleable."""
    if not outcome.is_terminal:
        raise RoundStateError(f"{outcome.category.value} is not a settleable outcome")
    return settle(stake, outcome.category is Category.WIN, house_edge)


def rounding_remainder(stake: int, house_edge: Any) -> Fraction:
    """Fraction of a unit dropped by flooring a winning profit, in [0, 1)."""
    exact = validate_stake(stake) * win_multiplier(house_edge)
    return exact - math.floor(exact)


def award_pot(stakes: Mapping[K, int], winner: K) -> Dict[K, SettlementResult]:
    """
    Winner-takes-all pot: the winner is paid every stake (including their
    own), everyone else forfeits theirs. No house edge is applied.
    """
    if winner not in stakes:
        raise MalformedInput(f"winner {winner!r} has no stake in the pot")
    checked = {k: validate_stake(v) for k, v in stakes.items()}
    pot = sum(checked.values())
    out: Dict[K, SettlementResult] = {}
    for key, stake in checked.items():
        if key == winner:
            out[key] = SettlementResult(stake=stake, won=True, payout=pot, profit=pot - stake)
        else:
            out[key] = SettlementResult(stake=stake, won=False, payout=0, profit=-stake)
    log.info("Pot of %d awarded to %s", pot, winner)
    return out


def effective_edge(stake: int, house_edge: Any) -> Fraction:
    """
    Edge actually realized on a winning ``stake`` after flooring:
    ``1 - payout / (stake / edge)``. Equals 0 when the profit divides
    exactly and is never negative.
    """
    edge = parse_house_edge(house_edge)
    result = settle(stake, True, edge)
    return 1 - Fraction(result.payout) * edge / result.stake
