"""
Match Engine for the DECODE board-game simulator.

Owns the mutable session: robot roster, rule set, current phase and the
phase clock. Every change goes through a command method that returns a
``CommandResult``; a rejected command leaves the state untouched and says so.

Phases (Autonomous -> TeleOp -> Endgame) are operator driven. The clock is
advanced by an external ticker calling ``tick``; reaching zero is only an
observable condition (``time_expired``), it never forces a phase change.
Scores are recomputed from the roster on every read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Union

from decode_sim.config import (
    AUTONOMOUS_DURATION,
    ENDGAME_DURATION,
    ROBOTS_PER_ALLIANCE,
    TELEOP_DURATION,
    TICK_SECONDS,
)
from decode_sim.field import start_tiles
from decode_sim.geometry import in_bounds
from decode_sim.models import (
    Alliance,
    BaseReturn,
    CommandResult,
    CommandStatus,
    MatchScore,
    MatchSnapshot,
    Phase,
    Robot,
    RosterEntry,
)
from decode_sim.rules import DEFAULT_RULES, RuleSet
from decode_sim.scoring import robot_score, score_match

logger = logging.getLogger(__name__)


PHASE_ORDER: List[Phase] = [Phase.AUTONOMOUS, Phase.TELEOP, Phase.ENDGAME]

PHASE_DURATIONS: Dict[Phase, int] = {
    Phase.AUTONOMOUS: AUTONOMOUS_DURATION,
    Phase.TELEOP: TELEOP_DURATION,
    Phase.ENDGAME: ENDGAME_DURATION,
}

# Roster order is display order: red robots, then blue.
_ID_PREFIX: Dict[Alliance, str] = {Alliance.RED: "R", Alliance.BLUE: "B"}


def starting_roster(rules: RuleSet) -> List[Robot]:
    """Fresh robots on their start tiles with no achievements."""
    robots: List[Robot] = []
    for alliance in (Alliance.RED, Alliance.BLUE):
        tiles = start_tiles(alliance, rules.grid_size)
        for i in range(ROBOTS_PER_ALLIANCE):
            robots.append(Robot(
                id=f"{_ID_PREFIX[alliance]}{i + 1}",
                alliance=alliance,
                position=tiles[i % len(tiles)],
            ))
    return robots


@dataclass
class MatchState:
    """Central match state, owned by the Match Engine."""

    rules: RuleSet = DEFAULT_RULES
    phase: Phase = Phase.AUTONOMOUS
    time_remaining: int = AUTONOMOUS_DURATION
    robots: List[Robot] = field(default_factory=list)


class MatchEngine:
    """A persistent match session driven by discrete commands."""

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self.state = MatchState(
            rules=rules,
            phase=PHASE_ORDER[0],
            time_remaining=PHASE_DURATIONS[PHASE_ORDER[0]],
            robots=starting_roster(rules),
        )

    # ------------------------------------------------------------------
    # Read boundary
    # ------------------------------------------------------------------

    @property
    def rules(self) -> RuleSet:
        return self.state.rules

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def time_remaining(self) -> int:
        return self.state.time_remaining

    @property
    def time_elapsed(self) -> int:
        return PHASE_DURATIONS[self.state.phase] - self.state.time_remaining

    @property
    def time_expired(self) -> bool:
        return self.state.time_remaining <= 0

    def get_robot(self, robot_id: str) -> Optional[Robot]:
        for robot in self.state.robots:
            if robot.id == robot_id:
                return robot
        return None

    def roster(self) -> List[RosterEntry]:
        """Immutable copies of the robots, in display order."""
        return [
            RosterEntry(
                id=r.id,
                alliance=r.alliance,
                position=r.position,
                has_left_start=r.has_left_start,
                base_return=r.base_return,
                points=robot_score(r, self.state.rules),
            )
            for r in self.state.robots
        ]

    def score(self) -> MatchScore:
        return score_match(self.state.robots, self.state.rules)

    def snapshot(self) -> MatchSnapshot:
        return MatchSnapshot(
            phase=self.state.phase,
            time_remaining=self.state.time_remaining,
            roster=self.roster(),
            score=self.score(),
        )

    # ------------------------------------------------------------------
    # Robot commands
    # ------------------------------------------------------------------

    def _unknown(self, robot_id: str) -> CommandResult:
        logger.info(f"Ignoring command for unknown robot {robot_id!r}")
        return CommandResult(CommandStatus.UNKNOWN_ROBOT, robot_id, "unknown robot id")

    def move_robot(self, robot_id: str, col: int, row: int) -> CommandResult:
        """Teleport a robot to any tile on the field. No path checks."""
        robot = self.get_robot(robot_id)
        if robot is None:
            return self._unknown(robot_id)
        size = self.state.rules.grid_size
        if not in_bounds(col, row, size):
            logger.info(f"Rejected move of {robot_id} to ({col}, {row}) on a {size}x{size} field")
            return CommandResult(
                CommandStatus.OUT_OF_BOUNDS, robot_id, f"({col}, {row}) is off the field"
            )
        robot.position = (col, row)
        logger.debug(f"Moved {robot_id} to ({col}, {row})")
        return CommandResult(CommandStatus.APPLIED, robot_id)

    def set_leave(self, robot_id: str, has_left: bool) -> CommandResult:
        robot = self.get_robot(robot_id)
        if robot is None:
            return self._unknown(robot_id)
        robot.has_left_start = bool(has_left)
        return CommandResult(CommandStatus.APPLIED, robot_id)

    def set_base_return(self, robot_id: str, level: Union[BaseReturn, str]) -> CommandResult:
        robot = self.get_robot(robot_id)
        if robot is None:
            return self._unknown(robot_id)
        try:
            robot.base_return = BaseReturn(level)
        except ValueError:
            logger.info(f"Ignoring unknown base return level {level!r} for {robot_id}")
            return CommandResult(CommandStatus.INVALID_VALUE, robot_id, f"unknown base return {level!r}")
        return CommandResult(CommandStatus.APPLIED, robot_id)

    def reset_roster(self) -> CommandResult:
        """Put every robot back on its start tile and clear achievements.

        Phase, clock and rules are left alone.
        """
        self.state.robots = starting_roster(self.state.rules)
        logger.debug("Roster reset")
        return CommandResult(CommandStatus.APPLIED)

    # ------------------------------------------------------------------
    # Rule and phase commands
    # ------------------------------------------------------------------

    def replace_rule_set(self, rules: RuleSet) -> CommandResult:
        """Swap the rule set wholesale; roster and phase are kept.

        ``rules`` is re-validated. If the new grid is smaller, robots that
        would fall off it are pulled onto the nearest edge tile, and the
        result's ``detail`` names them.
        """
        rules = RuleSet.from_dict(rules.to_dict())
        last = rules.grid_size - 1
        moved: List[str] = []
        for robot in self.state.robots:
            col, row = robot.position
            clamped = (min(col, last), min(row, last))
            if clamped != robot.position:
                logger.info(f"{robot.id} at {robot.position} moved to {clamped} for the smaller field")
                moved.append(f"{robot.id}->{clamped}")
                robot.position = clamped
        self.state.rules = rules
        detail = f"moved onto the field: {', '.join(moved)}" if moved else ""
        return CommandResult(CommandStatus.APPLIED, detail=detail)

    def select_phase(self, phase: Union[Phase, str]) -> CommandResult:
        """Jump to *phase* and restart its clock. Robots are not touched."""
        try:
            phase = Phase(phase)
        except ValueError:
            logger.info(f"Ignoring unknown phase {phase!r}")
            return CommandResult(CommandStatus.INVALID_VALUE, detail=f"unknown phase {phase!r}")
        self.state.phase = phase
        self.state.time_remaining = PHASE_DURATIONS[phase]
        logger.debug(f"Phase -> {phase.value} ({self.state.time_remaining}s)")
        return CommandResult(CommandStatus.APPLIED)

    def advance_phase(self) -> CommandResult:
        """Move to the next phase, wrapping from the last back to the first."""
        index = PHASE_ORDER.index(self.state.phase)
        return self.select_phase(PHASE_ORDER[(index + 1) % len(PHASE_ORDER)])

    def tick(self, seconds: int = TICK_SECONDS) -> CommandResult:
        """Count the clock down. Never goes below zero."""
        self.state.time_remaining = max(0, self.state.time_remaining - max(0, seconds))
        return CommandResult(CommandStatus.APPLIED)

    # ------------------------------------------------------------------
    # Command objects
    # ------------------------------------------------------------------

    def dispatch(self, command) -> CommandResult:
        """Apply a command object from :mod:`decode_sim.commands`."""
        return command.apply(self)

    def copy_state(self) -> MatchState:
        """Detached copy of the state, for before/after comparisons."""
        return replace(
            self.state,
            robots=[replace(r) for r in self.state.robots],
        )
