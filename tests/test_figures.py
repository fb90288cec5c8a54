import pytest

from geometrylabs.model.figures.detail import Detail, SegmentId, resize_line
from geometrylabs.model.figures.grid import AXIS_GREEN, AXIS_RED, Grid2D, Grid3D
from geometrylabs.model.figures.star import Star3D
from geometrylabs.model.geometry_primitives import Point, Point3D
from geometrylabs.model.units import Distance


def test_grid_covers_visible_region(viewport):
    lines = Grid2D().lines(viewport)
    assert len(lines) == 16
    assert lines[-2].stroke == AXIS_RED
    assert lines[-1].stroke == AXIS_GREEN


def test_grid_first_quadrant_only(viewport):
    lines = Grid2D(is_negative_enabled=False).lines(viewport)
    assert len(lines) == 9
    for line in lines:
        for p in line.points():
            assert p.x.value >= 0.0
            assert p.y.value >= 0.0


def test_grid_disabled(viewport):
    assert Grid2D(is_enabled=False).lines(viewport) == []
    assert Grid3D(is_enabled=False).lines() == []


def test_grid3d_axes():
    lines = Grid3D(length=Distance(2.0)).lines()
    assert [line.end for line in lines] == [
        Point3D.from_xyz(2.0, 0.0, 0.0),
        Point3D.from_xyz(0.0, 2.0, 0.0),
        Point3D.from_xyz(0.0, 0.0, 2.0),
    ]


def test_detail_outline_and_arcs():
    detail = Detail()
    lines = detail.lines()
    # eleven sides, an outer arc and the hole
    assert len(lines) > 11 + 128
    assert lines[0].start == Point.from_xy(30.0, 30.0)
    assert lines[10].end == Point.from_xy(30.0, 70.0)
    assert all(not line.is_transparent for line in lines)


def test_detail_default_lengths():
    detail = Detail()
    assert detail.lengths[SegmentId.AB] == Distance(20.0)
    assert detail.lengths[SegmentId.IJ] == Distance(20.0)


def test_set_length_keeps_midpoint_and_updates_neighbour():
    detail = Detail()
    detail.set_length(SegmentId.AB, 30.0)
    assert detail.points["a"] == Point.from_xy(25.0, 30.0)
    assert detail.points["b"] == Point.from_xy(55.0, 30.0)
    assert detail.lengths[SegmentId.BC].value == pytest.approx(Point.from_xy(55.0, 30.0).distance_to(Point.from_xy(50.0, 10.0)))
    # point c itself is not moved
    assert detail.points["c"] == Point.from_xy(50.0, 10.0)


def test_segment_neighbours_at_chain_ends():
    assert SegmentId.AB.neighbours() == [SegmentId.BC]
    assert SegmentId.KL.neighbours() == [SegmentId.JK]
    assert SegmentId.DE.neighbours() == [SegmentId.CD, SegmentId.EF]


def test_resize_degenerate_segment():
    p = Point.from_xy(1.0, 1.0)
    assert resize_line(p, p, Distance(10.0)) == (p, p)


def test_star_edges():
    star = Star3D()
    lines = star.lines()
    assert len(lines) == 30
    assert star.pivot_point() == Point3D.from_xyz(0.0, 0.0, 1.25)
    tip = lines[0].start
    assert tip.x.value == pytest.approx(0.0, abs=1e-9)
    assert tip.y.value == pytest.approx(5.0)
    assert lines[0].end.z.value == pytest.approx(2.5)
