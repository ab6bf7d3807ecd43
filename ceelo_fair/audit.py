"""
Replayable fairness records for revealed rounds.

A record only carries what the player supplied (commitment, seed, stake)
and the configured house edge. Everything else, including whether the
round was won, is recomputed from the seed on replay.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from . import commitment as _commitment
from .dice import derive, digest_words
from .errors import CeeloError, MalformedInput
from .outcomes import resolve
from .settlement import settle_outcome

RECORD_VERSION = "1"


def audit_record(
    commitment: Any,
    seed: _commitment.Seed,
    stake: Optional[int] = None,
    house_edge: Any = None,
) -> Dict[str, Any]:
    """
    Build a JSON-ready proof for a revealed round. When ``stake`` and
    ``house_edge`` are both given the settlement of the resolved hand is
    included; point and reroll hands raise RoundStateError.
    """
    _commitment.require_valid(commitment, seed)
    data = _commitment.seed_bytes(seed)
    outcome = resolve(derive(data))
    record: Dict[str, Any] = {
        "version": RECORD_VERSION,
        "commitment": _commitment.parse_commitment(commitment).hex(),
        "seed": data.hex(),
        "words": list(digest_words(data)),
    }
    record.update(outcome.to_dict())
    if stake is not None and house_edge is not None:
        record["house_edge"] = str(house_edge)
        record["settlement"] = settle_outcome(stake, outcome, house_edge).to_dict()
    return record


def replay(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Recompute every derived field of ``record`` from its commitment and seed."""
    try:
        commitment = record["commitment"]
        seed_hex = record["seed"]
    except KeyError as e:
        raise MalformedInput(f"audit record missing field {e.args[0]!r}") from None
    try:
        seed = bytes.fromhex(str(seed_hex))
    except ValueError as e:
        raise MalformedInput(f"seed is not valid hex: {seed_hex!r}") from e

    settlement = record.get("settlement")
    if settlement is None:
        return audit_record(commitment, seed)
    if not isinstance(settlement, Mapping):
        raise MalformedInput(f"settlement must be a mapping, got {settlement!r}")
    # only the stake is taken from the record; won comes from the dice
    return audit_record(
        commitment,
        seed,
        stake=settlement.get("stake"),
        house_edge=record.get("house_edge"),
    )


def _canonical(key: str, value: Any) -> Any:
    if key == "commitment":
        try:
            return _commitment.parse_commitment(value).hex()
        except MalformedInput:
            return value
    return value


def verify_record(record: Mapping[str, Any]) -> List[str]:
    """
    List every field of ``record`` that does not match a fresh replay.
    An empty list means the record is consistent.
    """
    try:
        expected = replay(record)
    except CeeloError as e:
        return [str(e)]

    problems: List[str] = []
    for key, value in expected.items():
        if key == "version":
            continue
        if key not in record:
            problems.append(f"missing {key}")
        elif _canonical(key, record[key]) != value:
            problems.append(f"{key}: recorded {record[key]!r}, replay gives {value!r}")
    for key in record:
        if key not in expected and key != "version":
            problems.append(f"unexpected {key}")
    return problems
