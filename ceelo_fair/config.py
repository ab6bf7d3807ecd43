"""Engine configuration defaults, file loading and environment overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from fractions import Fraction
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .errors import InvalidConfiguration, MalformedInput
from .settlement import parse_house_edge

log = logging.getLogger(__name__)

DEFAULT_HOUSE_EDGE: str = "0.03"
DEFAULT_MIN_STAKE: int = 1

ENV_HOUSE_EDGE = "HOUSE_EDGE"
ENV_MIN_STAKE = "CEELO_MIN_STAKE"

KNOWN_KEYS = {"house_edge", "min_stake"}


@dataclass(frozen=True)
class EngineConfig:
    house_edge: Fraction = parse_house_edge(DEFAULT_HOUSE_EDGE)
    min_stake: int = DEFAULT_MIN_STAKE

    def check_stake(self, stake: int) -> int:
        if isinstance(stake, bool) or not isinstance(stake, int):
            raise MalformedInput(f"stake must be an int, got {stake!r}")
        if stake < self.min_stake:
            raise MalformedInput(f"stake {stake} is below the minimum of {self.min_stake}")
        return stake

    def to_dict(self) -> Dict[str, Any]:
        return {"house_edge": str(self.house_edge), "min_stake": self.min_stake}


def coerce_int(value: Any) -> Tuple[Optional[int], bool]:
    """Coerce ``value`` to ``int``. The boolean reports whether it worked."""

    if isinstance(value, bool):
        return None, False
    if isinstance(value, int):
        return value, True
    if isinstance(value, float) and value.is_integer():
        return int(value), True
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text), True
        except ValueError:
            return None, False
    return None, False


def read_mapping_file(path: str | Path) -> Dict[str, Any]:
    """Read a JSON or YAML mapping. YAML is used for ``.yaml``/``.yml``."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidConfiguration(f"cannot read {p}: {e}") from e
    try:
        if p.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise InvalidConfiguration(f"cannot parse {p}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"{p} must be a mapping, got {type(data).__name__}")
    return data


def build_config(values: Mapping[str, Any]) -> EngineConfig:
    unknown = set(values) - KNOWN_KEYS
    if unknown:
        raise InvalidConfiguration(f"unknown config keys: {sorted(unknown)}")

    edge = parse_house_edge(values.get("house_edge", DEFAULT_HOUSE_EDGE))

    raw_min = values.get("min_stake", DEFAULT_MIN_STAKE)
    min_stake, ok = coerce_int(raw_min)
    if not ok or min_stake is None or min_stake < 1:
        raise InvalidConfiguration(f"min_stake must be a positive int, got {raw_min!r}")
    return EngineConfig(house_edge=edge, min_stake=min_stake)


def load_config(
    path: str | Path | None = None, env: Optional[Mapping[str, str]] = None
) -> EngineConfig:
    """
    Defaults, then the optional file, then environment overrides
    (``HOUSE_EDGE``, ``CEELO_MIN_STAKE``). Invalid values raise
    InvalidConfiguration here, before any round starts.
    """
    env = os.environ if env is None else env
    values: Dict[str, Any] = {}
    if path is not None:
        values.update(read_mapping_file(path))
        log.debug("Loaded config file %s: %s", path, values)

    if env.get(ENV_HOUSE_EDGE):
        values["house_edge"] = env[ENV_HOUSE_EDGE]
    if env.get(ENV_MIN_STAKE):
        values["min_stake"] = env[ENV_MIN_STAKE]

    cfg = build_config(values)
    log.info("Engine config: house_edge=%s min_stake=%d", cfg.house_edge, cfg.min_stake)
    return cfg
