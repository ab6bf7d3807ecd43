"""
Multi-round lobby scoring.

Every player rolls once per round. The best hand takes the round and
scores ``round_points`` (jackpot hands score more). A round nobody takes
(all rerolls, or tied top hands) is replayed and does not count toward
``total_rounds``. When the scheduled rounds are done and the leaderboard
top is shared, play continues in sudden-death rounds until one leader
remains. The winner takes the whole pot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Generic, Hashable, List, Mapping, Optional, Sequence, TypeVar

from .comparator import round_winner
from .errors import MalformedInput, RoundStateError
from .outcomes import Outcome, round_points
from .settlement import SettlementResult, award_pot, validate_stake

log = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True)
class RoundRecord(Generic[K]):
    number: int
    outcomes: Dict[K, Outcome]
    winner: Optional[K]
    points: int
    sudden_death: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.number,
            "winner": self.winner,
            "points": self.points,
            "sudden_death": self.sudden_death,
            "rolls": {str(k): o.to_dict() for k, o in self.outcomes.items()},
        }


class Match(Generic[K]):
    def __init__(self, players: Sequence[K], stakes: Mapping[K, int], total_rounds: int = 3):
        if len(players) < 2:
            raise MalformedInput("a match needs at least two players")
        if len(set(players)) != len(players):
            raise MalformedInput("duplicate player in match")
        if set(stakes) != set(players):
            raise MalformedInput("every player needs exactly one stake")
        if isinstance(total_rounds, bool) or not isinstance(total_rounds, int) or total_rounds < 1:
            raise MalformedInput(f"total_rounds must be a positive int, got {total_rounds!r}")
        self.players: List[K] = list(players)
        self.stakes: Dict[K, int] = {p: validate_stake(stakes[p]) for p in self.players}
        self.total_rounds = total_rounds
        self.leaderboard: Dict[K, int] = {p: 0 for p in self.players}
        self.history: List[RoundRecord[K]] = []
        self.rounds_scored = 0

    # ------------------------------ state ---------------------------------- #

    def leaders(self) -> List[K]:
        top = max(self.leaderboard.values())
        return [p for p in self.players if self.leaderboard[p] == top]

    @property
    def in_sudden_death(self) -> bool:
        return self.rounds_scored >= self.total_rounds and len(self.leaders()) > 1

    @property
    def finished(self) -> bool:
        return self.rounds_scored >= self.total_rounds and len(self.leaders()) == 1

    @property
    def winner(self) -> Optional[K]:
        return self.leaders()[0] if self.finished else None

    # ------------------------------ play ----------------------------------- #

    def record_round(self, outcomes: Mapping[K, Outcome]) -> Optional[K]:
        """Score one round of rolls. Returns the round winner, or None for a replay."""
        if self.finished:
            raise RoundStateError("match already finished")
        if set(outcomes) != set(self.players):
            missing = [p for p in self.players if p not in outcomes]
            extra = [k for k in outcomes if k not in self.leaderboard]
            raise MalformedInput(f"round needs one roll per player (missing={missing}, extra={extra})")

        sudden_death = self.in_sudden_death
        winner = round_winner(outcomes)
        points = 0
        if winner is not None:
            points = round_points(outcomes[winner])
            self.leaderboard[winner] += points
            self.rounds_scored += 1
            log.info("Round %d won by %s (+%d)", len(self.history) + 1, winner, points)
        else:
            log.info("Round %d has no winner; replaying", len(self.history) + 1)

        self.history.append(
            RoundRecord(
                number=len(self.history) + 1,
                outcomes=dict(outcomes),
                winner=winner,
                points=points,
                sudden_death=sudden_death,
            )
        )
        if self.finished:
            log.info("Match won by %s with %d points", self.winner, self.leaderboard[self.winner])
        return winner

    def payouts(self) -> Dict[K, SettlementResult]:
        if not self.finished:
            raise RoundStateError("match has no winner yet")
        return award_pot(self.stakes, self.winner)
