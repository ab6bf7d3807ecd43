"""
Seed commitment for the commit/reveal protocol.

A round starts by publishing ``commit(seed)``; the seed itself is revealed
only after the commitment has been recorded. ``verify`` is the single check
that the revealed seed is the one that was committed to.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from typing import Union

from .errors import MalformedInput, VerificationFailure

log = logging.getLogger(__name__)

Seed = Union[bytes, str]

SEED_BYTES = 32
COMMITMENT_BYTES = hashlib.sha256().digest_size


def seed_bytes(seed: Seed) -> bytes:
    """Normalize a seed to bytes. Text seeds are UTF-8 encoded."""
    if isinstance(seed, str):
        data = seed.encode("utf-8")
    elif isinstance(seed, (bytes, bytearray, memoryview)):
        data = bytes(seed)
    else:
        raise MalformedInput(f"seed must be bytes or str, not {type(seed).__name__}")
    if not data:
        raise MalformedInput("seed must not be empty")
    return data


def generate_seed() -> bytes:
    return secrets.token_bytes(SEED_BYTES)


def commit(seed: Seed) -> bytes:
    digest = hashlib.sha256(seed_bytes(seed)).digest()
    log.debug("Committed seed -> %s", digest.hex())
    return digest


def commit_hex(seed: Seed) -> str:
    return commit(seed).hex()


def parse_commitment(value: Union[bytes, str]) -> bytes:
    """
    Accept a raw 32-byte digest or its hex form (``0x`` prefix optional,
    any case). Anything else is MalformedInput.
    """
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    elif isinstance(value, str):
        text = value.strip().lower()
        if text.startswith("0x"):
            text = text[2:]
        try:
            raw = bytes.fromhex(text)
        except ValueError as e:
            raise MalformedInput(f"commitment is not valid hex: {value!r}") from e
    else:
        raise MalformedInput(f"commitment must be bytes or hex str, not {type(value).__name__}")
    if len(raw) != COMMITMENT_BYTES:
        raise MalformedInput(
            f"commitment must be {COMMITMENT_BYTES} bytes, got {len(raw)}"
        )
    return raw


def verify(commitment: Union[bytes, str], seed: Seed) -> bool:
    """
    True only when ``seed`` hashes to ``commitment``.

    Fails closed: an unparseable commitment or seed is a non-match.
    """
    try:
        expected = parse_commitment(commitment)
        actual = hashlib.sha256(seed_bytes(seed)).digest()
    except MalformedInput as e:
        log.warning("Rejected reveal: %s", e)
        return False
    ok = hmac.compare_digest(expected, actual)
    if not ok:
        log.warning("Reveal does not match commitment %s", expected.hex())
    return ok


def require_valid(commitment: Union[bytes, str], seed: Seed) -> None:
    if not verify(commitment, seed):
        shown = commitment.hex() if isinstance(commitment, (bytes, bytearray)) else str(commitment)
        raise VerificationFailure(shown)
