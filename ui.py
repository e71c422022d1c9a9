"""
FTC DECODE Board-Game Simulator - Streamlit front end.

Run with: streamlit run ui.py

A thin shell around ``decode_sim``: every widget turns into one engine
command, and the field figure is redrawn from the engine snapshot each run.
Rules can be shared through the ``?rules=`` query parameter.
"""

import streamlit as st
import pandas as pd

from decode_sim.commands import (
    AdvancePhase,
    ReplaceRuleSet,
    ResetRoster,
    SelectPhase,
    SetBaseReturn,
    SetLeave,
    Tick,
    move_command_for_click,
)
from decode_sim.config import (
    GRID_SIZE_MAX,
    GRID_SIZE_MIN,
    POINTS_MAX,
    POINTS_MIN,
)
from decode_sim.match_engine import MatchEngine
from decode_sim.models import Alliance, BaseReturn, Phase
from decode_sim.renderer import initialize
from decode_sim.rules import DEFAULT_RULES, RuleSet, decode_rules, encode_rules
from decode_sim.surfaces import PlotlySurface

# ---------------------------------------------------------------------------
# Page Configuration
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="FTC DECODE | Board-Game Simulator",
    page_icon="🤖",
    layout="wide",
)

BASE_LABELS = {
    BaseReturn.NONE: "None",
    BaseReturn.PARTIAL: "Partial",
    BaseReturn.FULL: "Full",
}
PHASE_LABELS = {
    Phase.AUTONOMOUS: "Autonomous",
    Phase.TELEOP: "TeleOp",
    Phase.ENDGAME: "Endgame",
}

# ---------------------------------------------------------------------------
# Session State
# ---------------------------------------------------------------------------
if "engine" not in st.session_state:
    shared = st.query_params.get("rules")
    st.session_state.engine = MatchEngine(decode_rules(shared) if shared else DEFAULT_RULES)
if "last_result" not in st.session_state:
    st.session_state.last_result = None

engine: MatchEngine = st.session_state.engine

# Widgets whose stored value mirrors engine state and must be dropped when
# a command changes that state behind their back.
ROBOT_WIDGET_PREFIXES = ("leave_", "base_")
PHASE_WIDGET_KEY = "phase"

def forget_widgets(*prefixes):
    for key in [k for k in st.session_state if str(k).startswith(prefixes)]:
        del st.session_state[key]

def run(command):
    st.session_state.last_result = engine.dispatch(command)
    if isinstance(command, (ResetRoster, ReplaceRuleSet)):
        forget_widgets(*ROBOT_WIDGET_PREFIXES)
    if isinstance(command, AdvancePhase):
        forget_widgets(PHASE_WIDGET_KEY)

# ---------------------------------------------------------------------------
# Sidebar: rules
# ---------------------------------------------------------------------------
st.sidebar.header("⚙️ Rules")
with st.sidebar.form("rules_form"):
    rules = engine.rules
    grid_size = st.number_input("Grid size", GRID_SIZE_MIN, GRID_SIZE_MAX, rules.grid_size)
    leave_pts = st.number_input("Leave points", POINTS_MIN, POINTS_MAX, rules.leave_points)
    partial_pts = st.number_input("Base return (partial)", POINTS_MIN, POINTS_MAX, rules.base_return_partial_points)
    full_pts = st.number_input("Base return (full)", POINTS_MIN, POINTS_MAX, rules.base_return_full_points)
    threshold = st.number_input(
        "Movement RP threshold", POINTS_MIN, POINTS_MAX, rules.movement_rp_threshold,
        help="Each alliance earns the Movement RP when its own subtotal reaches this value.",
    )
    if st.form_submit_button("Apply rules", width="stretch"):
        new_rules = RuleSet(
            grid_size=grid_size,
            leave_points=leave_pts,
            base_return_partial_points=partial_pts,
            base_return_full_points=full_pts,
            movement_rp_threshold=threshold,
        )
        run(ReplaceRuleSet(new_rules))
        st.query_params["rules"] = encode_rules(engine.rules)

if st.sidebar.button("Restore default rules", key="restore_rules", width="stretch"):
    run(ReplaceRuleSet(DEFAULT_RULES))
    st.query_params["rules"] = encode_rules(DEFAULT_RULES)
st.sidebar.caption("Share link fragment")
st.sidebar.code(f"?rules={encode_rules(engine.rules)}", language=None)

# ---------------------------------------------------------------------------
# Match controls
# ---------------------------------------------------------------------------
st.title("FTC DECODE Board-Game Simulator")

c_phase, c_clock, c_buttons = st.columns([2, 1, 3])
# Buttons first, so the phase and clock below show their effect in this run.
with c_buttons:
    b1, b2, b3 = st.columns(3)
    if b1.button("Tick -1s", key="tick", width="stretch"):
        run(Tick())
    if b2.button("Next phase", key="next_phase", width="stretch"):
        run(AdvancePhase())
    if b3.button("Reset robots", key="reset_robots", width="stretch"):
        run(ResetRoster())
with c_phase:
    phase_choice = st.selectbox(
        "Phase", list(Phase), index=list(Phase).index(engine.phase),
        format_func=lambda p: PHASE_LABELS[p], key=PHASE_WIDGET_KEY,
    )
    if phase_choice != engine.phase:
        run(SelectPhase(phase_choice))
with c_clock:
    st.metric("Time left", f"{engine.time_remaining}s")
    if engine.time_expired:
        st.warning("⏱️ Time!")

# ---------------------------------------------------------------------------
# Robots
# ---------------------------------------------------------------------------
robot_cols = st.columns(len(engine.roster()))
for col, robot in zip(robot_cols, engine.roster()):
    with col:
        st.subheader(f"{'🔴' if robot.alliance == Alliance.RED else '🔵'} {robot.id}")
        leave = st.checkbox("Leave", value=robot.has_left_start, key=f"leave_{robot.id}")
        if leave != robot.has_left_start:
            run(SetLeave(robot.id, leave))
        base = st.selectbox(
            "Base Return", list(BaseReturn), index=list(BaseReturn).index(robot.base_return),
            format_func=lambda b: BASE_LABELS[b], key=f"base_{robot.id}",
        )
        if base != robot.base_return:
            run(SetBaseReturn(robot.id, base))

with st.form("move_form"):
    m1, m2, m3, m4 = st.columns([2, 1, 1, 1])
    selected = m1.selectbox("Robot", [r.id for r in engine.roster()])
    target_col = m2.number_input("Column", 0, engine.rules.grid_size - 1, 0)
    target_row = m3.number_input("Row", 0, engine.rules.grid_size - 1, 0)
    if m4.form_submit_button("Move", width="stretch"):
        command = move_command_for_click(selected, (int(target_col), int(target_row)))
        if command is not None:
            run(command)

result = st.session_state.last_result
if result is not None and not result.applied:
    st.error(f"Command ignored: {result.detail or result.status.value}")

# ---------------------------------------------------------------------------
# Scores & Field
# ---------------------------------------------------------------------------
snapshot = engine.snapshot()
score = snapshot.score

s_red, s_blue, s_total = st.columns(3)
for container, alliance in ((s_red, Alliance.RED), (s_blue, Alliance.BLUE)):
    with container:
        st.metric(f"{alliance.value.title()} Score", score.subtotal(alliance))
        if score.ranking_point(alliance):
            st.success("Movement RP: Earned ✅")
        else:
            st.error("Movement RP: Not Earned ❌")
s_total.metric("Total Score", score.total)

left, right = st.columns([3, 2])
with left:
    handle = initialize(PlotlySurface(), engine.rules.grid_size)
    st.plotly_chart(handle.draw(snapshot), width="content")
with right:
    st.dataframe(
        pd.DataFrame([
            {
                "Robot": r.id,
                "Alliance": r.alliance.value.title(),
                "Tile": f"({r.position[0]}, {r.position[1]})",
                "Leave": "✅" if r.has_left_start else "",
                "Base": BASE_LABELS[r.base_return],
                "Points": r.points,
            }
            for r in snapshot.roster
        ]),
        hide_index=True,
        width="stretch",
    )
