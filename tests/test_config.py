import json
from fractions import Fraction

import pytest

from ceelo_fair.config import (
    DEFAULT_MIN_STAKE,
    EngineConfig,
    build_config,
    coerce_int,
    load_config,
)
from ceelo_fair.errors import InvalidConfiguration, MalformedInput


def test_defaults_without_file_or_env():
    cfg = load_config(env={})
    assert cfg.house_edge == Fraction(3, 100)
    assert cfg.min_stake == DEFAULT_MIN_STAKE
    assert cfg == EngineConfig()


def test_yaml_file(tmp_path):
    p = tmp_path / "engine.yaml"
    p.write_text("house_edge: 0.05\nmin_stake: 1000\n", encoding="utf-8")
    cfg = load_config(p, env={})
    assert cfg.house_edge == Fraction(1, 20)
    assert cfg.min_stake == 1000


def test_json_file(tmp_path):
    p = tmp_path / "engine.json"
    p.write_text(json.dumps({"house_edge": "0.02"}), encoding="utf-8")
    assert load_config(p, env={}).house_edge == Fraction(1, 50)


def test_env_overrides_file(tmp_path):
    p = tmp_path / "engine.yml"
    p.write_text("house_edge: 0.05\n", encoding="utf-8")
    cfg = load_config(p, env={"HOUSE_EDGE": "0.01", "CEELO_MIN_STAKE": "5"})
    assert cfg.house_edge == Fraction(1, 100)
    assert cfg.min_stake == 5


def test_process_env_is_read(monkeypatch):
    monkeypatch.setenv("HOUSE_EDGE", "0.04")
    monkeypatch.delenv("CEELO_MIN_STAKE", raising=False)
    assert load_config().house_edge == Fraction(1, 25)


@pytest.mark.parametrize("edge", ["0", "1", "1.2", "-0.01", "lots"])
def test_bad_env_edge_fails_at_load(edge):
    with pytest.raises(InvalidConfiguration):
        load_config(env={"HOUSE_EDGE": edge})


def test_empty_yaml_uses_defaults(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_config(p, env={}) == EngineConfig()


@pytest.mark.parametrize(
    "name, text",
    [
        ("list.yaml", "- 1\n- 2\n"),
        ("broken.yaml", "house_edge: [0.03\n"),
        ("broken.json", "{house_edge"),
        ("extra.yaml", "house_edge: 0.03\nodds: 3x\n"),
        ("minstake.yaml", "min_stake: 0\n"),
        ("minstake2.yaml", "min_stake: many\n"),
    ],
)
def test_bad_files(tmp_path, name, text):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    with pytest.raises(InvalidConfiguration):
        load_config(p, env={})


def test_missing_file(tmp_path):
    with pytest.raises(InvalidConfiguration):
        load_config(tmp_path / "nope.yaml", env={})


@pytest.mark.parametrize(
    "value, expected, ok",
    [
        (5, 5, True),
        (" 7 ", 7, True),
        (3.0, 3, True),
        (3.5, None, False),
        ("x", None, False),
        (True, None, False),
        (None, None, False),
    ],
)
def test_coerce_int(value, expected, ok):
    assert coerce_int(value) == (expected, ok)


def test_check_stake():
    cfg = build_config({"min_stake": 10})
    assert cfg.check_stake(10) == 10
    with pytest.raises(MalformedInput):
        cfg.check_stake(9)
    with pytest.raises(MalformedInput):
        cfg.check_stake("10")  # type: ignore[arg-type]


def test_to_dict():
    assert EngineConfig().to_dict() == {"house_edge": "3/100", "min_stake": 1}
