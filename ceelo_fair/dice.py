"""
Deterministic dice from a seed.

Each die reads its own 4-byte big-endian word of SHA-256(seed):

    die[i] = int.from_bytes(digest[4*i : 4*i + 4], "big") % 6 + 1

Residual bias: 2**32 % 6 == 4, so faces 1-4 each have one more preimage
word than faces 5-6 (715,827,883 vs 715,827,882). The skew is about 1.4e-9
relative and is accepted as is.
"""

from __future__ import annotations

import hashlib
from typing import Sequence, Tuple

from .commitment import Seed, seed_bytes
from .errors import MalformedInput

DiceTriple = Tuple[int, int, int]

FACES = 6
DICE_COUNT = 3
WORD_BYTES = 4


def digest_words(seed: Seed) -> Tuple[int, int, int]:
    """The three raw 32-bit words the dice are reduced from."""
    digest = hashlib.sha256(seed_bytes(seed)).digest()
    return tuple(  # type: ignore[return-value]
        int.from_bytes(digest[i * WORD_BYTES:(i + 1) * WORD_BYTES], "big")
        for i in range(DICE_COUNT)
    )


def derive(seed: Seed) -> DiceTriple:
    d1, d2, d3 = (w % FACES + 1 for w in digest_words(seed))
    return d1, d2, d3


def validate_dice(dice: Sequence[int]) -> DiceTriple:
    """Return ``dice`` as a tuple or raise MalformedInput. Order is kept."""
    try:
        values = tuple(dice)
    except TypeError as e:
        raise MalformedInput(f"dice must be a sequence of three ints, got {dice!r}") from e
    if len(values) != DICE_COUNT:
        raise MalformedInput(f"expected {DICE_COUNT} dice, got {len(values)}")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int):
            raise MalformedInput(f"die value must be int, got {v!r}")
        if not 1 <= v <= FACES:
            raise MalformedInput(f"die value out of range 1-{FACES}: {v}")
    return values  # type: ignore[return-value]
