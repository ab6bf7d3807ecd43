"""Pytest configuration for the Cee-Lo fair play engine."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_on_path() -> None:
    """Make the repository importable without an editable install."""
    repo_root = Path(__file__).resolve().parent.parent
    if repo_root.exists():
        path_str = str(repo_root)
        if path_str not in sys.path:
            sys.path.insert(0, path_str)


_ensure_repo_on_path()


# Seeds with known SHA-256-derived dice, in the order derive() returns them.
KNOWN_ROLLS = {
    "hello": (1, 5, 3),
    "seed-1": (2, 5, 5),
    "round-42": (2, 5, 2),
    "abc": (4, 1, 3),
    "s10": (6, 4, 5),
    "s1010": (2, 1, 3),
    "s1138": (3, 3, 3),
    "s124": (6, 6, 6),
    "s1126": (6, 1, 1),
}


@pytest.fixture
def known_rolls():
    return dict(KNOWN_ROLLS)
