import math

import numpy as np
import pytest

from geometrylabs.model.geometry_primitives import (
    BLACK,
    RED,
    Line,
    Line3D,
    Point,
    Point3D,
    Polyline,
    ScreenPoint,
    ScreenVector,
    Stroke,
    Vector,
    array_to_lines,
    lines_to_array,
)
from geometrylabs.model.geometry_utils import Angle
from geometrylabs.model.units import DevicePixel, Distance


def test_point_vector_algebra():
    p = Point.from_xy(1.0, 2.0)
    v = Vector.from_xy(3.0, -1.0)
    assert p + v == Point.from_xy(4.0, 1.0)
    assert p - v == Point.from_xy(-2.0, 3.0)
    assert Point.from_xy(4.0, 1.0) - p == v


def test_point_plus_point_raises():
    with pytest.raises(TypeError):
        Point.from_xy(1.0, 1.0) + Point.from_xy(2.0, 2.0)


def test_vector_normalized_guards_zero_length():
    assert Vector().normalized() is None
    unit = Vector.from_xy(3.0, 4.0).normalized()
    assert unit.magnitude == pytest.approx(1.0)
    assert unit.x.value == pytest.approx(0.6)


def test_vector_perpendicular_is_left_normal():
    v = Vector.from_xy(1.0, 0.0)
    assert v.perpendicular() == Vector.from_xy(0.0, 1.0)
    assert v.cross(v.perpendicular()) == pytest.approx(1.0)


def test_point_homogeneous_round_trip():
    p = Point.from_xy(-1.5, 2.25)
    row = p.to_homogeneous()
    assert list(row) == [-1.5, 2.25, 1.0]
    assert Point.from_homogeneous(row) == p


def test_point_rotate_quarter_turn():
    p = Point.from_xy(2.0, 1.0).rotate(Angle.from_degrees(90.0), Point.from_xy(1.0, 1.0))
    assert p.x.value == pytest.approx(1.0)
    assert p.y.value == pytest.approx(2.0)


def test_point_midpoint_and_distance():
    a = Point.from_xy(0.0, 0.0)
    b = Point.from_xy(6.0, 8.0)
    assert a.distance_to(b) == pytest.approx(10.0)
    assert a.midpoint(b) == Point.from_xy(3.0, 4.0)


def test_screen_point_algebra():
    p = ScreenPoint.from_xy(10.0, 20.0)
    moved = p + ScreenVector.from_xy(5.0, -5.0)
    assert moved.to_tuple() == (15.0, 15.0)
    assert moved - p == ScreenVector.from_xy(5.0, -5.0)
    assert isinstance(moved.x, DevicePixel)


def test_default_stroke_is_transparent():
    line = Line(Point(), Point.from_xy(1.0, 0.0))
    assert line.is_transparent
    assert Line.with_transparent(Point(), Point()).is_transparent
    assert not Line(Point(), Point(), Stroke(1.0, BLACK)).is_transparent


def test_line_map_and_length():
    line = Line(Point(), Point.from_xy(3.0, 4.0), Stroke(2.0, RED))
    assert line.length == pytest.approx(5.0)
    doubled = line.map(lambda p: p.scale(2.0))
    assert doubled.end == Point.from_xy(6.0, 8.0)
    assert doubled.stroke == line.stroke


def test_polyline_open_and_closed():
    pts = [Point.from_xy(0, 0), Point.from_xy(1, 0), Point.from_xy(1, 1)]
    assert len(Polyline.from_points(pts).lines()) == 2
    closed = Polyline.from_points(pts, closed=True).lines()
    assert len(closed) == 3
    assert closed[-1].end == pts[0]
    # two points never get a closing segment
    assert len(Polyline.from_points(pts[:2], closed=True).lines()) == 1


def test_lines_array_packing_keeps_strokes():
    stroke = Stroke(1.0, RED)
    lines = [Line(Point.from_xy(1, 2), Point.from_xy(3, 4), stroke)]
    arr = lines_to_array(lines)
    assert arr.shape == (2, 3)
    assert np.allclose(arr[:, 2], 1.0)
    back = array_to_lines(arr, lines)
    assert back == lines


def test_line3d_homogeneous_and_transparency():
    line = Line3D(Point3D.from_xyz(1, 2, 3), Point3D.zero())
    assert line.is_transparent
    assert list(line.start.to_homogeneous()) == [1.0, 2.0, 3.0, 1.0]
    assert Point3D.from_homogeneous(np.array([1.0, 2.0, 3.0, 1.0])) == line.start


def test_distance_components_are_typed():
    p = Point.from_xy(1, 2)
    assert isinstance(p.x, Distance)
    assert not math.isnan(p.y.value)


def test_color_hex_and_transparency():
    assert RED.to_hex() == "#FF0000FF"
    assert not RED.is_transparent
    assert Stroke().color.is_transparent


def test_point3d_projects_through_perspective():
    from geometrylabs.model.projections import TwoPointPerspective

    flat = Point3D.from_xyz(2.0, 3.0, 0.0).to_2d(TwoPointPerspective(angle=0.0))
    assert flat.x.value == pytest.approx(2.0)
    assert flat.y.value == pytest.approx(3.0)
    line = Line3D(Point3D.zero(), Point3D.from_xyz(2.0, 3.0, 0.0), Stroke(1.0, RED)).to_2d(TwoPointPerspective(angle=0.0))
    assert line.end == flat
