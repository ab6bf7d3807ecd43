"""
Module entrypoint:

  python -m ceelo_fair roll <seed>
"""
from __future__ import annotations

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
