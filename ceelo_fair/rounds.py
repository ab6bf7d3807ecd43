"""
Commit/reveal state machine for a single round and for a two-party duel.

    Round.open(commitment, stake)   -> COMMITTED
    round.reveal(seed)              -> REVEALED   (seed must hash to commitment)
    round.settle(house_edge)        -> SETTLED    (win/lose hands only)

A failed reveal raises VerificationFailure and leaves the round COMMITTED;
nothing about the failed seed is kept. Ordering of commit vs. seed
disclosure across processes is the caller's concern.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union
from uuid import uuid4

from . import commitment as _commitment
from .comparator import Ordering, compare
from .dice import DiceTriple, derive
from .errors import MalformedInput, RoundStateError, VerificationFailure
from .logging_utils import RoundLogAdapter, round_logger
from .outcomes import Outcome, resolve
from .settlement import SettlementResult, settle_outcome

log = logging.getLogger(__name__)


class Phase(str, Enum):
    COMMITTED = "committed"
    REVEALED = "revealed"
    SETTLED = "settled"


@dataclass
class Round:
    commitment: bytes
    stake: Optional[int] = None
    round_id: str = field(default_factory=lambda: uuid4().hex)
    phase: Phase = Phase.COMMITTED
    seed: Optional[bytes] = None
    dice: Optional[DiceTriple] = None
    outcome: Optional[Outcome] = None
    settlement: Optional[SettlementResult] = None

    @classmethod
    def open(
        cls,
        commitment: Union[bytes, str],
        stake: Optional[int] = None,
        round_id: Optional[str] = None,
    ) -> "Round":
        if stake is not None and (isinstance(stake, bool) or not isinstance(stake, int) or stake <= 0):
            raise MalformedInput(f"stake must be a positive int, got {stake!r}")
        kwargs: Dict[str, Any] = {"commitment": _commitment.parse_commitment(commitment), "stake": stake}
        if round_id is not None:
            kwargs["round_id"] = round_id
        rnd = cls(**kwargs)
        rnd.log.info("opened (commitment %s)", rnd.commitment.hex())
        return rnd

    @property
    def log(self) -> RoundLogAdapter:
        return round_logger(log, self.round_id)

    @classmethod
    def start(cls, seed: _commitment.Seed, stake: Optional[int] = None) -> "Round":
        """Open a round committed to ``seed`` (the seed is still revealed later)."""
        return cls.open(_commitment.commit(seed), stake)

    def reveal(self, seed: _commitment.Seed) -> Outcome:
        if self.phase is not Phase.COMMITTED:
            raise RoundStateError(f"round {self.round_id} already revealed")
        if not _commitment.verify(self.commitment, seed):
            self.log.warning("reveal rejected; seed does not match commitment")
            raise VerificationFailure(self.commitment.hex())
        data = _commitment.seed_bytes(seed)
        self.seed = data
        self.dice = derive(data)
        self.outcome = resolve(self.dice)
        self.phase = Phase.REVEALED
        self.log.info(
            "revealed dice=%s outcome=%s",
            self.dice,
            self.outcome.category.value,
        )
        return self.outcome

    def settle(self, house_edge: Any) -> SettlementResult:
        if self.phase is Phase.COMMITTED:
            raise RoundStateError(f"round {self.round_id} has not been revealed")
        if self.phase is Phase.SETTLED:
            raise RoundStateError(f"round {self.round_id} already settled")
        if self.stake is None:
            raise RoundStateError(f"round {self.round_id} has no stake to settle")
        assert self.outcome is not None
        self.settlement = settle_outcome(self.stake, self.outcome, house_edge)
        self.phase = Phase.SETTLED
        self.log.info("settled payout=%d profit=%d", self.settlement.payout, self.settlement.profit)
        return self.settlement

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready record of the round for activity feeds and audits."""
        snap: Dict[str, Any] = {
            "round_id": self.round_id,
            "phase": self.phase.value,
            "commitment": self.commitment.hex(),
            "stake": self.stake,
        }
        if self.seed is not None:
            snap["seed"] = self.seed.hex()
        if self.outcome is not None:
            snap.update(self.outcome.to_dict())
        if self.settlement is not None:
            snap["settlement"] = self.settlement.to_dict()
        return snap


class Duel:
    """
    Two-party round. Each side commits before either reveals; the comparison
    is only available once both sides have revealed.
    """

    SIDES = ("a", "b")

    def __init__(self, commitment_a: Union[bytes, str], commitment_b: Union[bytes, str]):
        self.rounds: Dict[str, Round] = {
            "a": Round.open(commitment_a),
            "b": Round.open(commitment_b),
        }

    def _side(self, side: str) -> Round:
        try:
            return self.rounds[side]
        except KeyError:
            raise MalformedInput(f"unknown side {side!r}; expected one of {self.SIDES}") from None

    def reveal(self, side: str, seed: _commitment.Seed) -> Outcome:
        return self._side(side).reveal(seed)

    @property
    def complete(self) -> bool:
        return all(r.phase is not Phase.COMMITTED for r in self.rounds.values())

    def result(self) -> Ordering:
        if not self.complete:
            pending = [s for s, r in self.rounds.items() if r.phase is Phase.COMMITTED]
            raise RoundStateError(f"duel not fully revealed; waiting on {pending}")
        a, b = self.rounds["a"].outcome, self.rounds["b"].outcome
        assert a is not None and b is not None
        verdict = compare(a, b)
        log.info("Duel result %s (a rank=%d, b rank=%d)", verdict.value, a.rank, b.rank)
        return verdict
