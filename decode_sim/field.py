"""
Zone layout for the DECODE field.

Zones are declared once, for the BLUE alliance, in ``blue_zones``. The RED
layout is never written by hand: ``Zone.mirrored`` reflects the anchor column
(``col -> grid_size - 1 - col``) and swaps every left/right qualifier. Any
change to the BLUE declaration therefore carries over to RED mechanically.

BLUE layout for an ``n x n`` grid (RED mirrors the columns):

    GOAL       tile (0, n-1), triangle in the TOP_LEFT corner
    RAMP       strip off the LEFT edge beside row n-2
    TUNNEL     strip off the LEFT edge beside row n-3
    ARTIFACTS  column 1, rows n-1, n-2, n-3 (three markers each)
    LOADING    tile (n-1, 0), whole tile
    BASE       tile (n-2, 0), half-size square in the BOTTOM_LEFT corner
    START      the configured start tiles (outline only, not scored)

``zone_geometry`` turns a zone into pixels for a given ``FieldGeometry``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple

from decode_sim.config import (
    ARTIFACT_SEQUENCES,
    BASE_ZONE_FRACTION,
    BLUE_START_TILES,
    RAMP_LENGTH_TILES,
    RAMP_WIDTH_FRACTION,
)
from decode_sim.geometry import FieldGeometry, Point, Rect, check_tile, mirror_col
from decode_sim.models import Alliance, Tile


class ZoneKind(str, Enum):
    GOAL = "goal"
    RAMP = "ramp"
    TUNNEL = "tunnel"
    LOADING = "loading"
    BASE = "base"
    ARTIFACTS = "artifacts"
    START = "start"


class Side(str, Enum):
    LEFT = "left"
    RIGHT = "right"

    def mirrored(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class Corner(str, Enum):
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"

    def mirrored(self) -> "Corner":
        return _CORNER_MIRROR[self]

    @property
    def is_left(self) -> bool:
        return self in (Corner.TOP_LEFT, Corner.BOTTOM_LEFT)

    @property
    def is_top(self) -> bool:
        return self in (Corner.TOP_LEFT, Corner.TOP_RIGHT)


_CORNER_MIRROR = {
    Corner.TOP_LEFT: Corner.TOP_RIGHT,
    Corner.TOP_RIGHT: Corner.TOP_LEFT,
    Corner.BOTTOM_LEFT: Corner.BOTTOM_RIGHT,
    Corner.BOTTOM_RIGHT: Corner.BOTTOM_LEFT,
}


@dataclass(frozen=True)
class Zone:
    """A named field feature anchored to one grid tile."""

    kind: ZoneKind
    alliance: Alliance
    tile: Tile
    side: Optional[Side] = None
    corner: Optional[Corner] = None
    colors: Tuple[str, ...] = ()

    def mirrored(self, grid_size: int) -> "Zone":
        """The same feature for the opposite alliance."""
        col, row = self.tile
        return replace(
            self,
            alliance=self.alliance.opponent,
            tile=(mirror_col(col, grid_size), row),
            side=self.side.mirrored() if self.side else None,
            corner=self.corner.mirrored() if self.corner else None,
        )


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

def blue_zones(grid_size: int) -> List[Zone]:
    """Canonical zone declaration for the BLUE alliance."""
    n = grid_size
    blue = Alliance.BLUE
    zones = [
        Zone(ZoneKind.GOAL, blue, (0, n - 1), corner=Corner.TOP_LEFT),
        Zone(ZoneKind.RAMP, blue, (0, n - 2), side=Side.LEFT),
        Zone(ZoneKind.TUNNEL, blue, (0, n - 3), side=Side.LEFT),
        Zone(ZoneKind.LOADING, blue, (n - 1, 0)),
        Zone(ZoneKind.BASE, blue, (n - 2, 0), corner=Corner.BOTTOM_LEFT),
    ]
    for i, sequence in enumerate(ARTIFACT_SEQUENCES):
        zones.append(Zone(ZoneKind.ARTIFACTS, blue, (1, n - 1 - i), colors=tuple(sequence)))
    for tile in BLUE_START_TILES:
        zones.append(Zone(ZoneKind.START, blue, tile))
    for zone in zones:
        check_tile(zone.tile[0], zone.tile[1], n)
    return zones


def alliance_zones(alliance: Alliance, grid_size: int) -> List[Zone]:
    zones = blue_zones(grid_size)
    if alliance == Alliance.BLUE:
        return zones
    return [z.mirrored(grid_size) for z in zones]


def field_zones(grid_size: int) -> List[Zone]:
    """Every zone on the field, BLUE first then RED, declaration order kept."""
    return alliance_zones(Alliance.BLUE, grid_size) + alliance_zones(Alliance.RED, grid_size)


def start_tiles(alliance: Alliance, grid_size: int) -> List[Tile]:
    return [z.tile for z in alliance_zones(alliance, grid_size) if z.kind == ZoneKind.START]


# ---------------------------------------------------------------------------
# Pixel geometry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ZoneGeometry:
    """Pixel shape of a zone.

    ``rect`` is always the bounding box. Goals also carry a triangle in
    ``polygon``; artifact clusters carry ``(centre, colour)`` markers.
    """

    zone: Zone
    rect: Rect
    polygon: Tuple[Point, ...] = ()
    markers: Tuple[Tuple[Point, str], ...] = ()


def _corner_point(tile: Rect, corner: Corner) -> Point:
    x = tile.x if corner.is_left else tile.right
    y = tile.y if corner.is_top else tile.bottom
    return (x, y)


def _goal(zone: Zone, geom: FieldGeometry) -> ZoneGeometry:
    tile = geom.tile_rect(*zone.tile)
    corner = zone.corner or Corner.TOP_LEFT
    apex = _corner_point(tile, corner)
    # The two tile corners sharing an edge with the apex.
    along_x = (tile.right if corner.is_left else tile.x, apex[1])
    along_y = (apex[0], tile.bottom if corner.is_top else tile.y)
    return ZoneGeometry(zone, tile, polygon=(apex, along_x, along_y))


def _strip(zone: Zone, geom: FieldGeometry) -> ZoneGeometry:
    tile = geom.tile_rect(*zone.tile)
    field = geom.field_rect
    length = RAMP_LENGTH_TILES * geom.tile_size
    width = RAMP_WIDTH_FRACTION * geom.tile_size
    y = tile.y + (tile.height - width) / 2.0
    if (zone.side or Side.LEFT) is Side.LEFT:
        x = field.x - length
    else:
        x = field.right
    return ZoneGeometry(zone, Rect(x, y, length, width))


def _base(zone: Zone, geom: FieldGeometry) -> ZoneGeometry:
    tile = geom.tile_rect(*zone.tile)
    side = BASE_ZONE_FRACTION * geom.tile_size
    corner = zone.corner or Corner.BOTTOM_LEFT
    x = tile.x if corner.is_left else tile.right - side
    y = tile.y if corner.is_top else tile.bottom - side
    return ZoneGeometry(zone, Rect(x, y, side, side))


def _artifacts(zone: Zone, geom: FieldGeometry) -> ZoneGeometry:
    tile = geom.tile_rect(*zone.tile)
    count = len(zone.colors)
    spacing = tile.width / (count + 1)
    mid_y = tile.y + tile.height / 2.0
    markers = tuple(
        ((tile.x + (i + 1) * spacing, mid_y), color)
        for i, color in enumerate(zone.colors)
    )
    return ZoneGeometry(zone, tile, markers=markers)


def zone_geometry(zone: Zone, geom: FieldGeometry) -> ZoneGeometry:
    """Pixel shape of *zone* on the surface described by *geom*."""
    if zone.kind == ZoneKind.GOAL:
        return _goal(zone, geom)
    if zone.kind in (ZoneKind.RAMP, ZoneKind.TUNNEL):
        return _strip(zone, geom)
    if zone.kind == ZoneKind.BASE:
        return _base(zone, geom)
    if zone.kind == ZoneKind.ARTIFACTS:
        return _artifacts(zone, geom)
    # LOADING and START fill their whole tile.
    return ZoneGeometry(zone, geom.tile_rect(*zone.tile))
