"""
Command objects consumed from the UI layer.

Each command is a small frozen dataclass whose ``apply`` calls the matching
``MatchEngine`` method, so UI code can queue, log or replay commands as
plain values. ``move_command_for_click`` is the one seam the core offers for
robot selection: the UI remembers which robot was picked and hands over the
tile that was clicked next.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from decode_sim.models import BaseReturn, CommandResult, Phase, Tile
from decode_sim.rules import RuleSet

if TYPE_CHECKING:
    from decode_sim.match_engine import MatchEngine


@dataclass(frozen=True)
class MoveRobot:
    robot_id: str
    col: int
    row: int

    def apply(self, engine: "MatchEngine") -> CommandResult:
        return engine.move_robot(self.robot_id, self.col, self.row)


@dataclass(frozen=True)
class SetLeave:
    robot_id: str
    has_left: bool

    def apply(self, engine: "MatchEngine") -> CommandResult:
        return engine.set_leave(self.robot_id, self.has_left)


@dataclass(frozen=True)
class SetBaseReturn:
    robot_id: str
    level: Union[BaseReturn, str]

    def apply(self, engine: "MatchEngine") -> CommandResult:
        return engine.set_base_return(self.robot_id, self.level)


@dataclass(frozen=True)
class ResetRoster:
    def apply(self, engine: "MatchEngine") -> CommandResult:
        return engine.reset_roster()


@dataclass(frozen=True)
class ReplaceRuleSet:
    rules: RuleSet

    def apply(self, engine: "MatchEngine") -> CommandResult:
        return engine.replace_rule_set(self.rules)


@dataclass(frozen=True)
class SelectPhase:
    phase: Union[Phase, str]

    def apply(self, engine: "MatchEngine") -> CommandResult:
        return engine.select_phase(self.phase)


@dataclass(frozen=True)
class AdvancePhase:
    def apply(self, engine: "MatchEngine") -> CommandResult:
        return engine.advance_phase()


@dataclass(frozen=True)
class Tick:
    seconds: int = 1

    def apply(self, engine: "MatchEngine") -> CommandResult:
        return engine.tick(self.seconds)


Command = Union[
    MoveRobot, SetLeave, SetBaseReturn, ResetRoster,
    ReplaceRuleSet, SelectPhase, AdvancePhase, Tick,
]


def move_command_for_click(selected_id: Optional[str], tile: Optional[Tile]) -> Optional[MoveRobot]:
    """Turn "robot picked, then tile clicked" into a move command.

    Returns None when nothing is selected or the click missed the field.
    """
    if not selected_id or tile is None:
        return None
    col, row = tile
    return MoveRobot(selected_id, col, row)
