"""
Field coordinate model for the DECODE board-game simulator.

Maps abstract grid tiles to pixel rectangles. Row 0 is the far edge of the
field from the driver stations and row ``grid_size - 1`` the near edge, while
screen y grows downward, so the vertical axis is inverted:

    x = offset_x + col * tile_size
    y = offset_y + (grid_size - 1 - row) * tile_size

Everything here is a pure function of ``(grid_size, tile_size, offset)``.
A coordinate outside ``[0, grid_size - 1]`` raises ``OutOfBoundsError``;
nothing is ever silently clamped onto (or drawn off) the field.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from decode_sim.config import DEFAULT_TILE_SIZE, FIELD_MARGIN_PX, RAMP_LENGTH_TILES
from decode_sim.errors import OutOfBoundsError
from decode_sim.models import Tile

Point = Tuple[float, float]


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    def contains(self, other: "Rect") -> bool:
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


# ---------------------------------------------------------------------------
# Pure coordinate functions
# ---------------------------------------------------------------------------

def in_bounds(col: int, row: int, grid_size: int) -> bool:
    return 0 <= col < grid_size and 0 <= row < grid_size


def check_tile(col: int, row: int, grid_size: int) -> None:
    """Raise ``OutOfBoundsError`` unless (col, row) is on the field."""
    if not in_bounds(col, row, grid_size):
        raise OutOfBoundsError(col, row, grid_size)


def tile_origin(
    col: int,
    row: int,
    grid_size: int,
    tile_size: float,
    offset: Point = (0.0, 0.0),
) -> Point:
    """Top-left pixel of tile (col, row)."""
    check_tile(col, row, grid_size)
    return (
        offset[0] + col * tile_size,
        offset[1] + (grid_size - 1 - row) * tile_size,
    )


def tile_at(
    x: float,
    y: float,
    grid_size: int,
    tile_size: float,
    offset: Point = (0.0, 0.0),
) -> Optional[Tile]:
    """Inverse of :func:`tile_origin`: the tile containing pixel (x, y).

    Returns None for points off the field.
    """
    col = math.floor((x - offset[0]) / tile_size)
    row = grid_size - 1 - math.floor((y - offset[1]) / tile_size)
    if not in_bounds(col, row, grid_size):
        return None
    return (col, row)


def mirror_col(col: int, grid_size: int) -> int:
    """Column reflected across the field's vertical centre line."""
    return grid_size - 1 - col


# ---------------------------------------------------------------------------
# Geometry bound to one drawing surface
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldGeometry:
    """Grid size, tile size and pixel offset for one rendering of the field."""

    grid_size: int
    tile_size: float = DEFAULT_TILE_SIZE
    offset: Point = (0.0, 0.0)

    def __post_init__(self) -> None:
        if not self.tile_size > 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size!r}")

    @classmethod
    def for_grid(cls, grid_size: int, tile_size: float = DEFAULT_TILE_SIZE) -> "FieldGeometry":
        """Geometry with enough left/right margin for the ramp strips."""
        side = RAMP_LENGTH_TILES * tile_size + FIELD_MARGIN_PX
        return cls(grid_size=grid_size, tile_size=tile_size, offset=(side, FIELD_MARGIN_PX))

    @property
    def field_rect(self) -> Rect:
        span = self.grid_size * self.tile_size
        return Rect(self.offset[0], self.offset[1], span, span)

    @property
    def canvas_size(self) -> Tuple[float, float]:
        field = self.field_rect
        return (field.right + self.offset[0], field.bottom + self.offset[1])

    @property
    def center_x(self) -> float:
        return self.field_rect.center[0]

    def tile_origin(self, col: int, row: int) -> Point:
        return tile_origin(col, row, self.grid_size, self.tile_size, self.offset)

    def tile_rect(self, col: int, row: int) -> Rect:
        x, y = self.tile_origin(col, row)
        return Rect(x, y, self.tile_size, self.tile_size)

    def tile_at(self, x: float, y: float) -> Optional[Tile]:
        return tile_at(x, y, self.grid_size, self.tile_size, self.offset)

    def mirror_x(self, x: float) -> float:
        """Pixel x reflected across the field's vertical centre line."""
        return 2.0 * self.center_x - x

    def mirror_rect(self, rect: Rect) -> Rect:
        return Rect(self.mirror_x(rect.right), rect.y, rect.width, rect.height)
