"""
Scene renderer for the DECODE board-game simulator.

``render_scene`` is a one-way projection: a ``MatchSnapshot`` plus a
``FieldGeometry`` in, an ordered list of drawing primitives out. It never
touches the engine and never computes a score; the numbers it labels come
already computed inside the snapshot.

Draw order (back to front): field, zones, grid lines, artifact markers,
robot tokens, score labels.

Surfaces (see ``decode_sim.surfaces``) turn a ``Scene`` into real drawing
calls. ``initialize`` binds one surface to one geometry and returns the
``SceneHandle`` the UI redraws through.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Tuple, Union

from decode_sim.config import (
    ALLIANCE_COLORS,
    ALLIANCE_TINTS,
    ARTIFACT_PALETTE,
    ARTIFACT_RADIUS_FRACTION,
    DEFAULT_TILE_SIZE,
    FIELD_COLOR,
    GRID_LINE_COLOR,
    GRID_LINE_WIDTH,
    TEXT_COLOR,
    TOKEN_FRACTION,
    TUNNEL_COLORS,
)
from decode_sim.field import ZoneKind, field_zones, zone_geometry
from decode_sim.geometry import FieldGeometry, Point, Rect
from decode_sim.models import Alliance, MatchSnapshot, Tile


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RectShape:
    rect: Rect
    fill: Optional[str] = None
    stroke: Optional[str] = None
    tag: str = ""


@dataclass(frozen=True)
class PolygonShape:
    points: Tuple[Point, ...]
    fill: Optional[str] = None
    stroke: Optional[str] = None
    tag: str = ""


@dataclass(frozen=True)
class LineShape:
    start: Point
    end: Point
    color: str = GRID_LINE_COLOR
    width: float = GRID_LINE_WIDTH
    tag: str = ""


@dataclass(frozen=True)
class CircleShape:
    center: Point
    radius: float
    fill: Optional[str] = None
    stroke: Optional[str] = None
    tag: str = ""


@dataclass(frozen=True)
class TextShape:
    position: Point                      # centre of the text
    text: str
    color: str = TEXT_COLOR
    size: float = 12.0
    tag: str = ""


Primitive = Union[RectShape, PolygonShape, LineShape, CircleShape, TextShape]


@dataclass
class Scene:
    width: float
    height: float
    primitives: List[Primitive] = field(default_factory=list)

    def tagged(self, prefix: str) -> List[Primitive]:
        return [p for p in self.primitives if p.tag.startswith(prefix)]


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

def token_rect(tile: Tile, geom: FieldGeometry) -> Rect:
    """Robot token inside *tile*, inset so it never touches the tile edge."""
    cell = geom.tile_rect(*tile)
    size = TOKEN_FRACTION * geom.tile_size
    inset = (geom.tile_size - size) / 2.0
    return Rect(cell.x + inset, cell.y + inset, size, size)


def _zone_primitives(geom: FieldGeometry) -> List[Primitive]:
    shapes: List[Primitive] = []
    for zone in field_zones(geom.grid_size):
        zg = zone_geometry(zone, geom)
        alliance = zone.alliance.value
        tag = f"zone:{zone.kind.value}:{alliance}"
        if zone.kind == ZoneKind.GOAL:
            shapes.append(PolygonShape(zg.polygon, fill=ALLIANCE_COLORS[alliance], tag=tag))
        elif zone.kind == ZoneKind.RAMP:
            shapes.append(RectShape(zg.rect, fill=ALLIANCE_COLORS[alliance], tag=tag))
        elif zone.kind == ZoneKind.TUNNEL:
            shapes.append(RectShape(zg.rect, fill=TUNNEL_COLORS[alliance], tag=tag))
        elif zone.kind in (ZoneKind.LOADING, ZoneKind.BASE):
            shapes.append(RectShape(
                zg.rect, fill=ALLIANCE_TINTS[alliance], stroke=ALLIANCE_COLORS[alliance], tag=tag,
            ))
        elif zone.kind == ZoneKind.START:
            shapes.append(RectShape(zg.rect, stroke=ALLIANCE_COLORS[alliance], tag=tag))
    return shapes


def _artifact_primitives(geom: FieldGeometry) -> List[Primitive]:
    radius = ARTIFACT_RADIUS_FRACTION * geom.tile_size
    shapes: List[Primitive] = []
    for zone in field_zones(geom.grid_size):
        if zone.kind != ZoneKind.ARTIFACTS:
            continue
        tag = f"zone:artifacts:{zone.alliance.value}"
        for center, color in zone_geometry(zone, geom).markers:
            shapes.append(CircleShape(center, radius, fill=ARTIFACT_PALETTE[color], tag=tag))
    return shapes


def _grid_primitives(geom: FieldGeometry) -> List[Primitive]:
    f = geom.field_rect
    lines: List[Primitive] = []
    for i in range(geom.grid_size + 1):
        x = f.x + i * geom.tile_size
        y = f.y + i * geom.tile_size
        lines.append(LineShape((x, f.y), (x, f.bottom), tag="grid"))
        lines.append(LineShape((f.x, y), (f.right, y), tag="grid"))
    return lines


def _score_labels(snapshot: MatchSnapshot, geom: FieldGeometry) -> List[Primitive]:
    f = geom.field_rect
    side_margin = geom.offset[0]
    y = f.bottom - geom.tile_size / 2.0
    labels: List[Primitive] = []
    for alliance, x in ((Alliance.BLUE, side_margin / 2.0), (Alliance.RED, f.right + side_margin / 2.0)):
        subtotal = snapshot.score.subtotal(alliance)
        rp = " RP" if snapshot.score.ranking_point(alliance) else ""
        labels.append(TextShape(
            (x, y), f"{alliance.value.upper()} {subtotal}{rp}",
            color=ALLIANCE_COLORS[alliance.value], tag=f"score:{alliance.value}",
        ))
    # Top margin band is clear of the ramp strips.
    top = f.y + geom.tile_size / 2.0
    labels.append(TextShape(
        (side_margin / 2.0, top),
        f"{snapshot.phase.value.upper()} {snapshot.time_remaining}s",
        size=10.0, tag="clock",
    ))
    labels.append(TextShape(
        (f.right + side_margin / 2.0, top),
        f"TOTAL {snapshot.score.total}",
        size=10.0, tag="score:total",
    ))
    return labels


def render_scene(snapshot: MatchSnapshot, geom: FieldGeometry) -> Scene:
    """Project a match snapshot onto the field as drawing primitives."""
    width, height = geom.canvas_size
    scene = Scene(width=width, height=height)
    scene.primitives.append(RectShape(geom.field_rect, fill=FIELD_COLOR, tag="field"))
    scene.primitives.extend(_zone_primitives(geom))
    scene.primitives.extend(_grid_primitives(geom))
    scene.primitives.extend(_artifact_primitives(geom))
    for robot in snapshot.roster:
        rect = token_rect(robot.position, geom)
        color = ALLIANCE_COLORS[robot.alliance.value]
        stroke = TEXT_COLOR if robot.has_left_start else color
        scene.primitives.append(RectShape(rect, fill=color, stroke=stroke, tag=f"robot:{robot.id}"))
        scene.primitives.append(TextShape(rect.center, robot.id, color="#ffffff", tag=f"robot:{robot.id}"))
    scene.primitives.extend(_score_labels(snapshot, geom))
    return scene


# ---------------------------------------------------------------------------
# Surface binding
# ---------------------------------------------------------------------------

class Surface(Protocol):
    def draw(self, scene: Scene) -> Any:
        ...


@dataclass
class SceneHandle:
    """One surface bound to one field geometry."""

    surface: Surface
    geometry: FieldGeometry

    def draw(self, snapshot: MatchSnapshot) -> Any:
        return self.surface.draw(render_scene(snapshot, self.geometry))

    def tile_at(self, x: float, y: float) -> Optional[Tile]:
        return self.geometry.tile_at(x, y)

    def resized(self, grid_size: int) -> "SceneHandle":
        """Handle for the same surface after the grid size changed."""
        return initialize(self.surface, grid_size, self.geometry.tile_size)


def initialize(surface: Surface, grid_size: int, tile_size: float = DEFAULT_TILE_SIZE) -> SceneHandle:
    """Bind *surface* to a field of *grid_size* tiles. Draws nothing yet."""
    return SceneHandle(surface=surface, geometry=FieldGeometry.for_grid(grid_size, tile_size))
