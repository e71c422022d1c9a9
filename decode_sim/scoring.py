"""
Scoring engine for the DECODE board-game simulator.

Pure functions of (roster, RuleSet). Nothing here reads the field geometry,
the match phase, or the clock, and nothing here raises for a roster and rule
set that satisfy their own invariants.

Only two achievements score:
    Leave        -- ``leave_points`` once the robot has left its start tile
    Base Return  -- ``base_return_partial_points`` or ``base_return_full_points``

They are independent, so a robot that leaves and fully returns earns both.
The Movement Ranking Point is judged per alliance on that alliance's own
subtotal, never on the combined total.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from decode_sim.models import (
    Alliance,
    AllianceScore,
    BaseReturn,
    MatchScore,
    Robot,
)
from decode_sim.rules import RuleSet


def robot_score(robot: Robot, rules: RuleSet) -> int:
    """Points contributed by one robot."""
    points = 0
    if robot.has_left_start:
        points += rules.leave_points
    if robot.base_return == BaseReturn.FULL:
        points += rules.base_return_full_points
    elif robot.base_return == BaseReturn.PARTIAL:
        points += rules.base_return_partial_points
    return points


def alliance_subtotal(roster: Iterable[Robot], alliance: Alliance, rules: RuleSet) -> int:
    """Sum of :func:`robot_score` over the robots fielded by *alliance*."""
    return sum(robot_score(r, rules) for r in roster if r.alliance == alliance)


def alliances_present(roster: Iterable[Robot]) -> List[Alliance]:
    """Alliances with at least one robot, in enum order."""
    seen = {r.alliance for r in roster}
    return [a for a in Alliance if a in seen]


def total_score(roster: Iterable[Robot], rules: RuleSet) -> int:
    """Combined score of every alliance on the field."""
    robots = list(roster)
    return sum(alliance_subtotal(robots, a, rules) for a in alliances_present(robots))


def ranking_point_earned(subtotal: int, rules: RuleSet) -> bool:
    """Whether an alliance subtotal meets the Movement RP threshold."""
    return subtotal >= rules.movement_rp_threshold


def score_match(roster: Iterable[Robot], rules: RuleSet) -> MatchScore:
    """Score every alliance in *roster* and bundle the results."""
    robots = list(roster)
    alliances: Dict[Alliance, AllianceScore] = {}
    for alliance in alliances_present(robots):
        subtotal = alliance_subtotal(robots, alliance, rules)
        alliances[alliance] = AllianceScore(
            alliance=alliance,
            subtotal=subtotal,
            ranking_point=ranking_point_earned(subtotal, rules),
        )
    return MatchScore(
        alliances=alliances,
        total=sum(entry.subtotal for entry in alliances.values()),
    )
