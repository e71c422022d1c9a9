"""
Match summary and output formatting for the DECODE board-game simulator.

Provides:
- build_summary: flat dict of the current match (scores, RP flags, roster)
- Output formatting: human-readable summary, JSON export, CSV row
"""

from __future__ import annotations

import json
from typing import Any, Dict

from decode_sim.match_engine import MatchEngine
from decode_sim.models import Alliance
from decode_sim.rules import encode_rules


def build_summary(engine: MatchEngine) -> Dict[str, Any]:
    """Collect everything worth reporting about the current match."""
    snapshot = engine.snapshot()
    score = snapshot.score
    rules = engine.rules
    return {
        "phase": snapshot.phase.value,
        "time_remaining": snapshot.time_remaining,
        "rules": rules.to_dict(),
        "share": encode_rules(rules),
        "red_score": score.subtotal(Alliance.RED),
        "blue_score": score.subtotal(Alliance.BLUE),
        "red_rp": score.ranking_point(Alliance.RED),
        "blue_rp": score.ranking_point(Alliance.BLUE),
        "total_score": score.total,
        "robots": [
            {
                "id": r.id,
                "alliance": r.alliance.value,
                "col": r.position[0],
                "row": r.position[1],
                "leave": r.has_left_start,
                "base_return": r.base_return.value,
                "points": r.points,
            }
            for r in snapshot.roster
        ],
    }


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------

def _rp_text(earned: bool) -> str:
    return "Earned" if earned else "Not Earned"


def format_summary(summary: Dict[str, Any]) -> str:
    """Format a match summary as a human-readable text block."""
    rules = summary["rules"]
    lines = [
        "=" * 60,
        "FTC DECODE - Board-Game Match",
        "=" * 60,
        f"Phase: {summary['phase']} ({summary['time_remaining']}s left)",
        f"Field: {rules['grid_size']}x{rules['grid_size']}",
        f"Rules: leave={rules['leave_points']} "
        f"partial={rules['base_return_partial_points']} "
        f"full={rules['base_return_full_points']} "
        f"rp_at={rules['movement_rp_threshold']}",
        "",
        "--- Robots ---",
    ]
    for r in summary["robots"]:
        lines.append(
            f"  {r['id']:<3} {r['alliance']:<4} ({r['col']}, {r['row']})  "
            f"leave={'yes' if r['leave'] else 'no':<3}  base={r['base_return']:<7}  {r['points']} pts"
        )
    lines += [
        "",
        "--- Scores ---",
        f"  Red:   {summary['red_score']}  Movement RP: {_rp_text(summary['red_rp'])}",
        f"  Blue:  {summary['blue_score']}  Movement RP: {_rp_text(summary['blue_rp'])}",
        f"  Total: {summary['total_score']}",
        "",
        f"Share: #rules={summary['share']}",
        "=" * 60,
    ]
    return "\n".join(lines)


def to_json(summary: Dict[str, Any]) -> str:
    """Export a summary as a JSON string."""
    return json.dumps(summary, indent=2)


CSV_FIELDS = [
    "phase", "time_remaining",
    "red_score", "blue_score", "total_score",
    "red_rp", "blue_rp",
    "share",
]


def to_csv_header() -> str:
    """Return CSV header row."""
    return ",".join(CSV_FIELDS)


def to_csv_row(summary: Dict[str, Any]) -> str:
    """Export the headline numbers as a CSV row."""
    return ",".join(str(summary[name]) for name in CSV_FIELDS)
