# ceelo_fair/__init__.py
"""
Cee-Lo fair play: commit/reveal seeds, deterministic dice, hand resolution,
head-to-head comparison and integer settlement.
"""

__version__ = "1.0.0"

from .errors import (
    CeeloError,
    InvalidConfiguration,
    MalformedInput,
    RoundStateError,
    VerificationFailure,
)
from .commitment import commit, commit_hex, generate_seed, require_valid, verify
from .dice import DiceTriple, derive
from .outcomes import Category, Outcome, resolve, round_points
from .comparator import Ordering, compare, round_winner
from .settlement import SettlementResult, award_pot, settle, settle_outcome
from .rounds import Duel, Phase, Round
from .match import Match
from .config import EngineConfig, load_config

__all__ = [
    # Commit / reveal
    "commit",
    "commit_hex",
    "verify",
    "require_valid",
    "generate_seed",
    # Dice and hands
    "DiceTriple",
    "derive",
    "Category",
    "Outcome",
    "resolve",
    "round_points",
    # Comparison
    "Ordering",
    "compare",
    "round_winner",
    # Settlement
    "SettlementResult",
    "settle",
    "settle_outcome",
    "award_pot",
    # Rounds
    "Phase",
    "Round",
    "Duel",
    "Match",
    # Config
    "EngineConfig",
    "load_config",
    # Errors
    "CeeloError",
    "VerificationFailure",
    "InvalidConfiguration",
    "MalformedInput",
    "RoundStateError",
    "__version__",
]
