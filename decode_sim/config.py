"""
FTC DECODE Board-Game Simulator -- Configuration Constants

All tunable numbers live here, grouped by category. Rule defaults come from
the original scoring sheet (Leave 3, Base partial 5, Base full 10, Movement
RP at 16); everything else is layout and display configuration.
"""

from typing import Dict, List, Tuple

# =============================================================================
# Scoring rule defaults
# =============================================================================
DEFAULT_GRID_SIZE: int = 6
DEFAULT_LEAVE_POINTS: int = 3
DEFAULT_BASE_PARTIAL_POINTS: int = 5
DEFAULT_BASE_FULL_POINTS: int = 10
DEFAULT_MOVEMENT_RP_THRESHOLD: int = 16

# =============================================================================
# Rule bounds (inclusive)
# =============================================================================
GRID_SIZE_MIN: int = 4
GRID_SIZE_MAX: int = 10
POINTS_MIN: int = 0
POINTS_MAX: int = 999                # keeps share links short

# =============================================================================
# Match timing (seconds)
# =============================================================================
AUTONOMOUS_DURATION: int = 30
TELEOP_DURATION: int = 100
ENDGAME_DURATION: int = 20
TICK_SECONDS: int = 1

# =============================================================================
# Roster
# =============================================================================
ROBOTS_PER_ALLIANCE: int = 2
# Start tiles declared for BLUE; RED starts are mirrored.
BLUE_START_TILES: List[Tuple[int, int]] = [(0, 1), (0, 2)]

# =============================================================================
# Field drawing (pixels)
# =============================================================================
DEFAULT_TILE_SIZE: float = 60.0
RAMP_LENGTH_TILES: int = 2            # strip length beyond the field edge
RAMP_WIDTH_FRACTION: float = 0.5      # strip thickness as a fraction of a tile
BASE_ZONE_FRACTION: float = 0.5       # base square side as a fraction of a tile
TOKEN_FRACTION: float = 0.7           # robot token side as a fraction of a tile
ARTIFACT_RADIUS_FRACTION: float = 0.1
GRID_LINE_WIDTH: float = 1.0
FIELD_MARGIN_PX: float = 10.0

# =============================================================================
# Colours
# =============================================================================
ALLIANCE_COLORS: Dict[str, str] = {
    "red": "#e74c3c",
    "blue": "#3498db",
}
ALLIANCE_TINTS: Dict[str, str] = {    # zone fills
    "red": "#f5b7b1",
    "blue": "#aed6f1",
}
TUNNEL_COLORS: Dict[str, str] = {
    "red": "#922b21",
    "blue": "#1f618d",
}
FIELD_COLOR: str = "#d5d8dc"
GRID_LINE_COLOR: str = "#7f8c8d"
TEXT_COLOR: str = "#000000"

ARTIFACT_PALETTE: Dict[str, str] = {
    "green": "#27ae60",
    "purple": "#8e44ad",
}

# Colour sequence for each artifact tile, nearest the goal first.
ARTIFACT_SEQUENCES: List[Tuple[str, str, str]] = [
    ("green", "purple", "purple"),
    ("purple", "green", "purple"),
    ("purple", "purple", "green"),
]
