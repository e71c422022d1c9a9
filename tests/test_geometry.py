"""
Unit tests for the field coordinate model and the zone layout.

Run with: pytest tests/test_geometry.py
"""

import pytest

from decode_sim.errors import OutOfBoundsError
from decode_sim.field import (
    Corner,
    Side,
    ZoneKind,
    alliance_zones,
    blue_zones,
    field_zones,
    start_tiles,
    zone_geometry,
)
from decode_sim.geometry import FieldGeometry, mirror_col, tile_at, tile_origin
from decode_sim.models import Alliance

GRID_SIZES = range(4, 11)
ON_FIELD_KINDS = {ZoneKind.GOAL, ZoneKind.LOADING, ZoneKind.BASE, ZoneKind.ARTIFACTS, ZoneKind.START}


def _points(points):
    return sorted((round(x, 6), round(y, 6)) for x, y in points)


class TestTileOrigin:
    """Grid cell -> pixel mapping."""

    def test_row_zero_is_bottom_of_screen(self):
        assert tile_origin(0, 0, 6, 60.0) == (0.0, 300.0)
        assert tile_origin(5, 5, 6, 60.0) == (300.0, 0.0)

    def test_offset_is_applied(self):
        assert tile_origin(2, 3, 6, 60.0, (130.0, 10.0)) == (250.0, 130.0)

    @pytest.mark.parametrize("col, row", [(6, 0), (0, 6), (-1, 0), (0, -1), (7, 7)])
    def test_out_of_bounds_raises(self, col, row):
        with pytest.raises(OutOfBoundsError):
            tile_origin(col, row, 6, 60.0)

    def test_out_of_bounds_is_a_value_error(self):
        with pytest.raises(ValueError):
            tile_origin(7, 0, 6, 60.0)

    @pytest.mark.parametrize("grid_size", GRID_SIZES)
    @pytest.mark.parametrize("tile_size, offset", [(60.0, (0.0, 0.0)), (37.5, (130.0, 10.0))])
    def test_inverse_recovers_tile(self, grid_size, tile_size, offset):
        for col in range(grid_size):
            for row in range(grid_size):
                x, y = tile_origin(col, row, grid_size, tile_size, offset)
                assert tile_at(x, y, grid_size, tile_size, offset) == (col, row)
                centre = (x + tile_size / 2, y + tile_size / 2)
                assert tile_at(*centre, grid_size, tile_size, offset) == (col, row)

    def test_tile_at_off_field_is_none(self):
        geom = FieldGeometry.for_grid(6)
        field = geom.field_rect
        assert geom.tile_at(field.x - 1, field.y + 1) is None
        assert geom.tile_at(field.right, field.y + 1) is None
        assert geom.tile_at(field.x + 1, field.bottom + 5) is None


class TestFieldGeometry:
    """Surface-bound geometry helpers."""

    def test_for_grid_leaves_room_for_ramps(self):
        geom = FieldGeometry.for_grid(6, 50.0)
        assert geom.offset[0] >= 2 * 50.0
        width, height = geom.canvas_size
        assert width == pytest.approx(2 * geom.offset[0] + 6 * 50.0)
        assert height == pytest.approx(2 * geom.offset[1] + 6 * 50.0)

    @pytest.mark.parametrize("tile_size", [0, 0.0, -10.0])
    def test_rejects_non_positive_tile_size(self, tile_size):
        with pytest.raises(ValueError):
            FieldGeometry(grid_size=6, tile_size=tile_size)
        with pytest.raises(ValueError):
            FieldGeometry.for_grid(6, tile_size)

    def test_mirror_col(self):
        assert mirror_col(0, 6) == 5
        assert mirror_col(2, 6) == 3

    def test_mirror_rect_of_tile_is_mirrored_tile(self):
        geom = FieldGeometry.for_grid(7)
        for col in range(7):
            mirrored = geom.mirror_rect(geom.tile_rect(col, 3))
            expected = geom.tile_rect(mirror_col(col, 7), 3)
            assert (mirrored.x, mirrored.y) == pytest.approx((expected.x, expected.y))


class TestZoneLayout:
    """Declared zones and their alliance mirroring."""

    def test_blue_declaration(self):
        zones = {z.kind: z for z in blue_zones(6)}
        assert zones[ZoneKind.GOAL].tile == (0, 5)
        assert zones[ZoneKind.GOAL].corner == Corner.TOP_LEFT
        assert zones[ZoneKind.RAMP].side == Side.LEFT
        assert zones[ZoneKind.LOADING].tile == (5, 0)
        assert zones[ZoneKind.BASE].tile == (4, 0)

    def test_artifact_clusters_have_three_slot_sequences(self):
        clusters = [z for z in blue_zones(6) if z.kind == ZoneKind.ARTIFACTS]
        assert len(clusters) == 3
        assert [z.tile for z in clusters] == [(1, 5), (1, 4), (1, 3)]
        for zone in clusters:
            assert len(zone.colors) == 3
            assert set(zone.colors) <= {"green", "purple"}
        assert len({z.colors for z in clusters}) == 3

    def test_start_tiles_mirror(self):
        assert start_tiles(Alliance.BLUE, 6) == [(0, 1), (0, 2)]
        assert start_tiles(Alliance.RED, 6) == [(5, 1), (5, 2)]

    @pytest.mark.parametrize("grid_size", GRID_SIZES)
    def test_red_is_blue_mirrored(self, grid_size):
        blue = alliance_zones(Alliance.BLUE, grid_size)
        red = alliance_zones(Alliance.RED, grid_size)
        assert len(blue) == len(red)
        for b, r in zip(blue, red):
            assert r.kind == b.kind
            assert r.alliance == Alliance.RED
            assert r.tile == (grid_size - 1 - b.tile[0], b.tile[1])
            assert r.colors == b.colors
            if b.side is not None:
                assert r.side == b.side.mirrored() != b.side
            if b.corner is not None:
                assert r.corner == b.corner.mirrored() != b.corner

    def test_every_zone_kind_is_declared(self):
        kinds = {z.kind for z in blue_zones(6)}
        assert kinds == set(ZoneKind)

    @pytest.mark.parametrize("grid_size", GRID_SIZES)
    def test_on_field_zones_do_not_overlap(self, grid_size):
        tiles = [z.tile for z in field_zones(grid_size) if z.kind in ON_FIELD_KINDS]
        assert len(tiles) == len(set(tiles))


class TestZoneGeometry:
    """Pixel shapes of zones, and their mirror symmetry."""

    @pytest.mark.parametrize("grid_size", GRID_SIZES)
    def test_pixel_shapes_are_mirror_images(self, grid_size):
        geom = FieldGeometry.for_grid(grid_size, 40.0)
        blue = alliance_zones(Alliance.BLUE, grid_size)
        red = alliance_zones(Alliance.RED, grid_size)
        for b, r in zip(blue, red):
            bg, rg = zone_geometry(b, geom), zone_geometry(r, geom)
            mirrored = geom.mirror_rect(bg.rect)
            assert (rg.rect.x, rg.rect.y, rg.rect.width, rg.rect.height) == pytest.approx(
                (mirrored.x, mirrored.y, mirrored.width, mirrored.height)
            ), b.kind
            assert _points(rg.polygon) == _points((geom.mirror_x(x), y) for x, y in bg.polygon)
            assert _points(c for c, _ in rg.markers) == _points(
                (geom.mirror_x(x), y) for (x, y), _ in bg.markers
            )

    def test_goal_is_corner_triangle(self):
        geom = FieldGeometry.for_grid(6)
        goal = next(z for z in blue_zones(6) if z.kind == ZoneKind.GOAL)
        tile = geom.tile_rect(*goal.tile)
        shape = zone_geometry(goal, geom)
        assert _points(shape.polygon) == _points([
            (tile.x, tile.y), (tile.right, tile.y), (tile.x, tile.bottom),
        ])

    @pytest.mark.parametrize("kind", [ZoneKind.RAMP, ZoneKind.TUNNEL])
    def test_strips_extend_two_tiles_outward(self, kind):
        geom = FieldGeometry.for_grid(6, 60.0)
        field = geom.field_rect
        blue = next(z for z in alliance_zones(Alliance.BLUE, 6) if z.kind == kind)
        red = next(z for z in alliance_zones(Alliance.RED, 6) if z.kind == kind)
        blue_rect = zone_geometry(blue, geom).rect
        red_rect = zone_geometry(red, geom).rect
        assert blue_rect.right == pytest.approx(field.x)
        assert blue_rect.width == pytest.approx(120.0)
        assert red_rect.x == pytest.approx(field.right)
        assert red_rect.height == blue_rect.height < 60.0
        assert blue_rect.x >= 0

    def test_base_zone_sits_in_its_corner(self):
        geom = FieldGeometry.for_grid(6, 60.0)
        for alliance in Alliance:
            base = next(z for z in alliance_zones(alliance, 6) if z.kind == ZoneKind.BASE)
            tile = geom.tile_rect(*base.tile)
            rect = zone_geometry(base, geom).rect
            assert tile.contains(rect)
            assert rect.width == rect.height == pytest.approx(30.0)
            assert rect.bottom == pytest.approx(tile.bottom)
            if base.corner.is_left:
                assert rect.x == pytest.approx(tile.x)
            else:
                assert rect.right == pytest.approx(tile.right)

    def test_loading_zone_fills_tile(self):
        geom = FieldGeometry.for_grid(6)
        loading = next(z for z in blue_zones(6) if z.kind == ZoneKind.LOADING)
        assert zone_geometry(loading, geom).rect == geom.tile_rect(5, 0)

    def test_artifact_markers_evenly_spaced(self):
        geom = FieldGeometry.for_grid(6, 60.0)
        cluster = next(z for z in blue_zones(6) if z.kind == ZoneKind.ARTIFACTS)
        tile = geom.tile_rect(*cluster.tile)
        markers = zone_geometry(cluster, geom).markers
        assert [c for _, c in markers] == list(cluster.colors)
        xs = [p[0] for p, _ in markers]
        assert xs == pytest.approx([tile.x + 15.0, tile.x + 30.0, tile.x + 45.0])
        assert all(p[1] == pytest.approx(tile.y + 30.0) for p, _ in markers)
