"""
Script-level tests for the Streamlit front end.

Run with: pytest tests/test_ui.py
"""

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from decode_sim.match_engine import PHASE_DURATIONS
from decode_sim.models import BaseReturn, Phase
from decode_sim.rules import RuleSet, encode_rules

UI_SCRIPT = str(Path(__file__).resolve().parent.parent / "ui.py")


@pytest.fixture
def app():
    at = AppTest.from_file(UI_SCRIPT, default_timeout=30)
    at.run()
    assert not at.exception
    return at


def engine_of(at):
    return at.session_state["engine"]


def time_left(at):
    return next(m for m in at.metric if m.label == "Time left").value


class TestRobotWidgets:
    """Per-robot Leave and Base Return controls."""

    def test_leave_checkbox_sets_leave(self, app):
        app.checkbox(key="leave_R1").check().run()
        assert engine_of(app).get_robot("R1").has_left_start is True
        assert engine_of(app).score().total == 3

    def test_base_selectbox_sets_level(self, app):
        app.selectbox(key="base_B2").select_index(2).run()
        assert engine_of(app).get_robot("B2").base_return == BaseReturn.FULL

    def test_reset_clears_achievements(self, app):
        app.checkbox(key="leave_R1").check().run()
        app.selectbox(key="base_R1").select_index(2).run()
        assert engine_of(app).score().total == 13

        app.button(key="reset_robots").click().run()
        robot = engine_of(app).get_robot("R1")
        assert robot.has_left_start is False
        assert robot.base_return == BaseReturn.NONE
        assert app.checkbox(key="leave_R1").value is False

    def test_reset_survives_the_next_rerun(self, app):
        app.checkbox(key="leave_B1").check().run()
        app.button(key="reset_robots").click().run()
        app.run()
        assert engine_of(app).get_robot("B1").has_left_start is False
        assert engine_of(app).score().total == 0


class TestMatchControls:
    """Phase select, clock and phase buttons."""

    def test_phase_select(self, app):
        app.selectbox(key="phase").select_index(2).run()
        assert engine_of(app).phase == Phase.ENDGAME
        assert time_left(app) == f"{PHASE_DURATIONS[Phase.ENDGAME]}s"

    def test_tick_shows_in_same_run(self, app):
        app.button(key="tick").click().run()
        assert time_left(app) == f"{PHASE_DURATIONS[Phase.AUTONOMOUS] - 1}s"

    def test_next_phase_updates_select_and_clock(self, app):
        app.button(key="next_phase").click().run()
        assert engine_of(app).phase == Phase.TELEOP
        assert time_left(app) == f"{PHASE_DURATIONS[Phase.TELEOP]}s"
        app.run()
        assert engine_of(app).phase == Phase.TELEOP


class TestSharedRules:
    """The ?rules= query parameter."""

    def test_rules_restored_from_query(self):
        rules = RuleSet(grid_size=8, leave_points=4, movement_rp_threshold=20)
        at = AppTest.from_file(UI_SCRIPT, default_timeout=30)
        at.query_params["rules"] = encode_rules(rules)
        at.run()
        assert not at.exception
        assert engine_of(at).rules == rules

    def test_corrupt_query_falls_back_to_defaults(self):
        at = AppTest.from_file(UI_SCRIPT, default_timeout=30)
        at.query_params["rules"] = "@@@"
        at.run()
        assert not at.exception
        assert engine_of(at).rules == RuleSet()
