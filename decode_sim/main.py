"""
CLI Entry Point for the FTC DECODE board-game simulator.

Usage:
    python -m decode_sim.main [OPTIONS]

Examples:
    # Default rules, fresh match
    python -m decode_sim.main

    # Score a situation
    python -m decode_sim.main --robot R1=leave,full --robot R2=leave --robot B1=partial

    # Move robots, then render the field to a PNG
    python -m decode_sim.main --move R1=3,2 --move B2=1,4 --render field.png

    # Custom rules, printed as a share fragment
    python -m decode_sim.main --grid-size 8 --rp-threshold 20 --share

    # Restore rules from a share fragment, output JSON
    python -m decode_sim.main --rules eyJmIjoxMC... --output json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from decode_sim.match_engine import MatchEngine
from decode_sim.models import BaseReturn, Phase
from decode_sim.renderer import initialize
from decode_sim.rules import DEFAULT_RULES, RuleSet, decode_rules, encode_rules
from decode_sim.summary import build_summary, format_summary, to_csv_header, to_csv_row, to_json
from decode_sim.surfaces import ImageSurface


def parse_robot_flags(value: str) -> Tuple[str, bool, BaseReturn]:
    """Parse ``ID=leave,full`` into (id, leave, base_return)."""
    robot_id, sep, flags = value.partition("=")
    if not sep or not robot_id.strip():
        raise ValueError(f"Bad --robot value {value!r}; expected ID=leave,partial|full")
    leave = False
    base = BaseReturn.NONE
    for token in filter(None, (t.strip().lower() for t in flags.split(","))):
        if token == "leave":
            leave = True
        elif token in {b.value for b in BaseReturn}:
            base = BaseReturn(token)
        else:
            raise ValueError(f"Unknown robot flag {token!r} in {value!r}")
    return robot_id.strip(), leave, base


def parse_move(value: str) -> Tuple[str, int, int]:
    """Parse ``ID=COL,ROW``."""
    robot_id, sep, target = value.partition("=")
    parts = target.split(",")
    if not sep or len(parts) != 2:
        raise ValueError(f"Bad --move value {value!r}; expected ID=COL,ROW")
    try:
        col, row = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"Bad --move value {value!r}; COL and ROW must be integers")
    return robot_id.strip(), col, row


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="decode-sim",
        description="FTC DECODE Board-Game Simulator",
    )

    # Rules
    parser.add_argument(
        "--rules",
        type=str,
        default=None,
        help="Rule set share fragment (falls back to defaults if malformed).",
    )
    parser.add_argument("--grid-size", type=int, default=None, help="Tiles per side (4-10).")
    parser.add_argument("--leave-points", type=int, default=None)
    parser.add_argument("--partial-points", type=int, default=None, help="Partial base return points.")
    parser.add_argument("--full-points", type=int, default=None, help="Full base return points.")
    parser.add_argument("--rp-threshold", type=int, default=None, help="Movement RP threshold.")

    # Match
    parser.add_argument(
        "--robot",
        action="append",
        default=[],
        metavar="ID=FLAGS",
        help="Robot achievements, e.g. R1=leave,full (repeatable).",
    )
    parser.add_argument(
        "--move",
        action="append",
        default=[],
        metavar="ID=COL,ROW",
        help="Move a robot to a tile (repeatable).",
    )
    parser.add_argument(
        "--phase",
        choices=[p.value for p in Phase],
        default=None,
        help="Match phase to report.",
    )

    # Output
    parser.add_argument(
        "--output", "-o",
        choices=["text", "json", "csv"],
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Write output to file instead of stdout.",
    )
    parser.add_argument("--share", action="store_true", help="Print only the rules share fragment.")
    parser.add_argument("--render", type=str, default=None, metavar="PNG", help="Render the field to an image.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log command handling.")

    return parser


def rules_from_args(args: argparse.Namespace) -> RuleSet:
    rules = decode_rules(args.rules) if args.rules else DEFAULT_RULES
    overrides = {
        "grid_size": args.grid_size,
        "leave_points": args.leave_points,
        "base_return_partial_points": args.partial_points,
        "base_return_full_points": args.full_points,
        "movement_rp_threshold": args.rp_threshold,
    }
    changes = {k: v for k, v in overrides.items() if v is not None}
    return rules.replace(**changes) if changes else rules


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        robot_flags = [parse_robot_flags(s) for s in args.robot]
        moves = [parse_move(s) for s in args.move]
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    rules = rules_from_args(args)
    if args.share:
        print(encode_rules(rules))
        return 0

    engine = MatchEngine(rules)
    if args.phase:
        engine.select_phase(args.phase)

    results = []
    for robot_id, col, row in moves:
        results.append(engine.move_robot(robot_id, col, row))
    for robot_id, leave, base in robot_flags:
        results.append(engine.set_leave(robot_id, leave))
        results.append(engine.set_base_return(robot_id, base))
    for result in results:
        if not result.applied:
            print(f"Warning: command for {result.robot_id} ignored ({result.status.value})", file=sys.stderr)

    summary = build_summary(engine)
    if args.output == "json":
        output = to_json(summary)
    elif args.output == "csv":
        output = to_csv_header() + "\n" + to_csv_row(summary)
    else:
        output = format_summary(summary)

    if args.render:
        surface = ImageSurface()
        handle = initialize(surface, rules.grid_size)
        handle.draw(engine.snapshot())
        path = Path(args.render)
        path.parent.mkdir(parents=True, exist_ok=True)
        surface.save(path)
        print(f"Field rendered to {path}", file=sys.stderr)

    # Write output
    if args.file:
        path = Path(args.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(output)
        print(f"Output written to {path}")
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
