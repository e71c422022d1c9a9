"""
Shared dataclasses and enums for the FTC DECODE board-game simulator.

All modules import their data structures from here. This file has no
internal dependencies -- it relies only on the Python standard library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Alliance(str, Enum):
    RED = "red"
    BLUE = "blue"

    @property
    def opponent(self) -> "Alliance":
        return Alliance.BLUE if self is Alliance.RED else Alliance.RED


class Phase(str, Enum):
    AUTONOMOUS = "autonomous"
    TELEOP = "teleop"
    ENDGAME = "endgame"


class BaseReturn(str, Enum):
    NONE = "none"
    PARTIAL = "partial"
    FULL = "full"


class CommandStatus(str, Enum):
    APPLIED = "applied"
    UNKNOWN_ROBOT = "unknown_robot"      # id not in roster -> no-op
    OUT_OF_BOUNDS = "out_of_bounds"      # target tile off the grid -> no-op
    INVALID_VALUE = "invalid_value"      # unrecognised phase or base level -> no-op


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------

Tile = Tuple[int, int]                   # (column, row)


@dataclass
class Robot:
    """One robot token on the field."""

    id: str = ""                                       # e.g. "R1", "B2"
    alliance: Alliance = Alliance.RED
    position: Tile = (0, 0)
    has_left_start: bool = False
    base_return: BaseReturn = BaseReturn.NONE


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a match command.

    ``applied`` is False whenever the command was ignored and state was left
    unchanged, so callers can always tell the two cases apart.
    """

    status: CommandStatus
    robot_id: Optional[str] = None
    detail: str = ""

    @property
    def applied(self) -> bool:
        return self.status is CommandStatus.APPLIED


@dataclass(frozen=True)
class AllianceScore:
    alliance: Alliance
    subtotal: int = 0
    ranking_point: bool = False


@dataclass(frozen=True)
class MatchScore:
    """Read model produced by the scoring engine for one roster snapshot."""

    alliances: Dict[Alliance, AllianceScore] = field(default_factory=dict)
    total: int = 0

    def subtotal(self, alliance: Alliance) -> int:
        entry = self.alliances.get(alliance)
        return entry.subtotal if entry else 0

    def ranking_point(self, alliance: Alliance) -> bool:
        entry = self.alliances.get(alliance)
        return entry.ranking_point if entry else False


@dataclass(frozen=True)
class RosterEntry:
    """Immutable copy of a robot handed across the read boundary."""

    id: str
    alliance: Alliance
    position: Tile
    has_left_start: bool
    base_return: BaseReturn
    points: int = 0


@dataclass
class MatchSnapshot:
    """Everything the UI needs to draw one frame."""

    phase: Phase = Phase.AUTONOMOUS
    time_remaining: int = 0
    roster: List[RosterEntry] = field(default_factory=list)
    score: MatchScore = field(default_factory=MatchScore)
