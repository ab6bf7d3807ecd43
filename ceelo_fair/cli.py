from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from . import __version__ as CEELO_VERSION
from .audit import audit_record, verify_record
from .commitment import commit_hex, generate_seed, require_valid
from .config import load_config, read_mapping_file
from .dice import derive
from .errors import CeeloError
from .logging_utils import setup_logging
from .outcomes import resolve
from .settlement import settle

log = logging.getLogger(__name__)


# ------------------------------- Helpers ------------------------------------ #


def _emit(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _seed_arg(args: argparse.Namespace) -> bytes | str:
    """Seeds are text unless --hex says they are hex-encoded bytes."""
    if getattr(args, "hex", False):
        return bytes.fromhex(args.seed)
    return args.seed


# ------------------------------- Commands ----------------------------------- #


def _cmd_seed(args: argparse.Namespace) -> int:
    print(generate_seed().hex())
    return 0


def _cmd_commit(args: argparse.Namespace) -> int:
    print(commit_hex(_seed_arg(args)))
    return 0


def _cmd_verify(args: argparse.Namespace) -> int:
    require_valid(args.commitment, _seed_arg(args))
    print("ok")
    return 0


def _cmd_roll(args: argparse.Namespace) -> int:
    seed = _seed_arg(args)
    if args.commitment:
        require_valid(args.commitment, seed)
    dice = derive(seed)
    out = resolve(dice).to_dict()
    out["commitment"] = commit_hex(seed)
    _emit(out)
    return 0


def _cmd_settle(args: argparse.Namespace) -> int:
    cfg = load_config(args.config)
    edge = args.house_edge if args.house_edge is not None else cfg.house_edge
    result = settle(cfg.check_stake(args.stake), args.won, edge)
    _emit(result.to_dict())
    return 0


def _cmd_audit(args: argparse.Namespace) -> int:
    record = read_mapping_file(args.record)
    problems = verify_record(record)
    if problems:
        print("audit failed:", file=sys.stderr)
        for p in problems:
            print(f"- {p}", file=sys.stderr)
        return 1
    print("ok")
    return 0


def _cmd_prove(args: argparse.Namespace) -> int:
    seed = _seed_arg(args)
    record = audit_record(commit_hex(seed), seed)
    if args.out:
        Path(args.out).write_text(json.dumps(record, indent=2, sort_keys=True), encoding="utf-8")
        log.info("Wrote audit record to %s", args.out)
    else:
        _emit(record)
    return 0


# ------------------------------- Parser ------------------------------------- #


def _add_seed(p: argparse.ArgumentParser) -> None:
    p.add_argument("seed", help="Round seed (text, or hex with --hex)")
    p.add_argument("--hex", action="store_true", help="Treat SEED as hex-encoded bytes")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ceelo-fair",
        description="Provably-fair Cee-Lo: commit, reveal, resolve and settle rounds.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {CEELO_VERSION}")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)"
    )

    sub = parser.add_subparsers(dest="subcommand", required=False)

    p_seed = sub.add_parser("seed", help="Print a fresh random seed (hex)")
    p_seed.set_defaults(func=_cmd_seed)

    p_commit = sub.add_parser("commit", help="Print the commitment for a seed")
    _add_seed(p_commit)
    p_commit.set_defaults(func=_cmd_commit)

    p_verify = sub.add_parser("verify", help="Check a revealed seed against its commitment")
    p_verify.add_argument("commitment", help="Commitment (hex)")
    _add_seed(p_verify)
    p_verify.set_defaults(func=_cmd_verify)

    p_roll = sub.add_parser("roll", help="Derive and resolve the dice for a seed")
    _add_seed(p_roll)
    p_roll.add_argument("--commitment", default=None, help="Verify against this commitment first")
    p_roll.set_defaults(func=_cmd_roll)

    p_settle = sub.add_parser("settle", help="Compute payout for a finished round")
    p_settle.add_argument("stake", type=int, help="Stake in the smallest currency unit")
    result = p_settle.add_mutually_exclusive_group(required=True)
    result.add_argument("--win", dest="won", action="store_true", help="Player won")
    result.add_argument("--lose", dest="won", action="store_false", help="Player lost")
    p_settle.add_argument("--house-edge", default=None, help="Override configured house edge")
    p_settle.add_argument("--config", default=None, help="Path to JSON/YAML engine config")
    p_settle.set_defaults(func=_cmd_settle)

    p_prove = sub.add_parser("prove", help="Write a replayable audit record for a seed")
    _add_seed(p_prove)
    p_prove.add_argument("--out", default=None, help="Write record JSON here instead of stdout")
    p_prove.set_defaults(func=_cmd_prove)

    p_audit = sub.add_parser("audit", help="Replay an audit record (JSON or YAML)")
    p_audit.add_argument("record", help="Path to the record file")
    p_audit.set_defaults(func=_cmd_audit)

    return parser


def main(argv: List[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if not hasattr(args, "func") or args.func is None:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except CeeloError as e:
        log.debug("Command failed", exc_info=True)
        print(f"failed: {e}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as e:
        # unwritable --out, bad --hex input
        print(f"failed: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
