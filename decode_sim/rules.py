"""
Rule set for the DECODE board-game simulator.

A ``RuleSet`` is an immutable bundle of the numbers the scoring engine and
the field model need. It is always valid: out-of-range or unusable values are
clamped (or replaced by the default) at construction time and a warning is
logged, so no caller ever holds a half-defined rule set.

Rule sets travel in share links as ``encode_rules`` output: compact JSON with
short keys, base64url encoded with the padding stripped.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping

from decode_sim.config import (
    DEFAULT_BASE_FULL_POINTS,
    DEFAULT_BASE_PARTIAL_POINTS,
    DEFAULT_GRID_SIZE,
    DEFAULT_LEAVE_POINTS,
    DEFAULT_MOVEMENT_RP_THRESHOLD,
    GRID_SIZE_MAX,
    GRID_SIZE_MIN,
    POINTS_MAX,
    POINTS_MIN,
)

logger = logging.getLogger(__name__)


# field name -> (default, lower bound, upper bound)
_BOUNDS: Dict[str, tuple] = {
    "grid_size": (DEFAULT_GRID_SIZE, GRID_SIZE_MIN, GRID_SIZE_MAX),
    "leave_points": (DEFAULT_LEAVE_POINTS, POINTS_MIN, POINTS_MAX),
    "base_return_partial_points": (DEFAULT_BASE_PARTIAL_POINTS, POINTS_MIN, POINTS_MAX),
    "base_return_full_points": (DEFAULT_BASE_FULL_POINTS, POINTS_MIN, POINTS_MAX),
    "movement_rp_threshold": (DEFAULT_MOVEMENT_RP_THRESHOLD, POINTS_MIN, POINTS_MAX),
}

# Short keys used in the share-link payload.
_SHORT_KEYS: Dict[str, str] = {
    "grid_size": "g",
    "leave_points": "l",
    "base_return_partial_points": "p",
    "base_return_full_points": "f",
    "movement_rp_threshold": "t",
}
_LONG_KEYS: Dict[str, str] = {short: name for name, short in _SHORT_KEYS.items()}


def _coerce(name: str, value: Any) -> int:
    """Return *value* as an in-bounds int for field *name*."""
    default, lo, hi = _BOUNDS[name]
    if isinstance(value, bool):
        logger.warning(f"Rule {name}={value!r} is not a number; using {default}")
        return default
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Rule {name}={value!r} is not a number; using {default}")
        return default
    clamped = min(hi, max(lo, number))
    if clamped != number or (isinstance(value, float) and value != number):
        logger.warning(f"Rule {name}={value!r} outside [{lo}, {hi}]; clamped to {clamped}")
    return clamped


@dataclass(frozen=True)
class RuleSet:
    """Scoring and field parameters in effect for a match."""

    grid_size: int = DEFAULT_GRID_SIZE
    leave_points: int = DEFAULT_LEAVE_POINTS
    base_return_partial_points: int = DEFAULT_BASE_PARTIAL_POINTS
    base_return_full_points: int = DEFAULT_BASE_FULL_POINTS
    movement_rp_threshold: int = DEFAULT_MOVEMENT_RP_THRESHOLD

    def __post_init__(self) -> None:
        for name in _BOUNDS:
            object.__setattr__(self, name, _coerce(name, getattr(self, name)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RuleSet":
        """Build a rule set from a mapping, ignoring unknown keys.

        Missing fields take their defaults; present fields are clamped.
        """
        known = {name: data[name] for name in _BOUNDS if name in data}
        return cls(**known)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def replace(self, **changes: Any) -> "RuleSet":
        """Return a copy with *changes* applied (and validated)."""
        values = self.to_dict()
        values.update(changes)
        return RuleSet.from_dict(values)


DEFAULT_RULES = RuleSet()


# ---------------------------------------------------------------------------
# Share-link codec
# ---------------------------------------------------------------------------

def encode_rules(rules: RuleSet) -> str:
    """Encode *rules* as a URL-safe fragment."""
    payload = {_SHORT_KEYS[name]: value for name, value in rules.to_dict().items()}
    raw = json.dumps(payload, separators=(",", ":"), sort_keys=True).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_rules(fragment: str) -> RuleSet:
    """Decode a fragment produced by :func:`encode_rules`.

    Anything undecodable (bad base64, truncated JSON, wrong shape) yields
    ``DEFAULT_RULES``; a decodable payload with odd values is clamped.
    """
    text = (fragment or "").strip().lstrip("#")
    if text.startswith("rules="):
        text = text[len("rules="):]
    if not text:
        logger.warning("Empty rules fragment; using defaults")
        return DEFAULT_RULES
    try:
        padded = text + "=" * (-len(text) % 4)
        raw = base64.b64decode(padded, altchars=b"-_", validate=True)
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors.
        logger.warning(f"Malformed rules fragment {fragment!r} ({e}); using defaults")
        return DEFAULT_RULES
    if not isinstance(payload, dict):
        logger.warning(f"Rules fragment {fragment!r} is not an object; using defaults")
        return DEFAULT_RULES
    expanded = {_LONG_KEYS.get(key, key): value for key, value in payload.items()}
    return RuleSet.from_dict(expanded)
