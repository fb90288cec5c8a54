import math

import numpy as np
import pytest

from geometrylabs.model.geometry_primitives import Point, Point3D
from geometrylabs.model.geometry_utils import (
    Angle,
    CircularShape,
    ShapeKind,
    arc_from_two_points,
    rotation_matrix,
    rotation_matrix_3d,
)
from geometrylabs.model.units import Distance


def test_angle_normalization():
    assert Angle.from_degrees(370.0).degrees == pytest.approx(10.0)
    assert Angle.from_degrees(-90.0).degrees == pytest.approx(270.0)
    assert Angle.from_radians(math.pi).degrees == pytest.approx(180.0)


def test_rotation_by_zero_is_identity():
    assert np.allclose(rotation_matrix(Angle(), Point.from_xy(3.0, -4.0)), np.identity(3))


def test_rotation_keeps_pivot_fixed():
    pivot = Point.from_xy(3.0, -4.0)
    moved = pivot.to_homogeneous() @ rotation_matrix(Angle.from_degrees(123.0), pivot)
    assert np.allclose(moved, pivot.to_homogeneous())


def test_rotation_3d_keeps_pivot_fixed():
    pivot = Point3D.from_xyz(1.0, 2.0, 3.0)
    m = rotation_matrix_3d(
        Angle.from_degrees(10.0), Angle.from_degrees(20.0), Angle.from_degrees(30.0), pivot
    )
    assert np.allclose(pivot.to_homogeneous() @ m, pivot.to_homogeneous())


def test_rotation_3d_about_x():
    m = rotation_matrix_3d(Angle.from_degrees(90.0), Angle(), Angle(), Point3D.zero())
    row = Point3D.from_xyz(0.0, 1.0, 0.0).to_homogeneous() @ m
    assert np.allclose(row, [0.0, 0.0, 1.0, 1.0])


def test_arc_radius_widened_to_half_chord():
    arc = arc_from_two_points(Point.from_xy(0.0, 0.0), Point.from_xy(10.0, 0.0), Distance(1.0))
    assert arc.radius == Distance(5.0)
    assert arc.center.x.value == pytest.approx(5.0)
    assert arc.center.y.value == pytest.approx(0.0)
    assert arc.sweep == pytest.approx(math.pi)


def test_arc_is_minor_and_counter_clockwise():
    arc = arc_from_two_points(Point.from_xy(0.0, 0.0), Point.from_xy(10.0, 0.0), Distance(10.0))
    assert arc.center.x.value == pytest.approx(5.0)
    assert arc.center.y.value == pytest.approx(math.sqrt(75.0))
    assert arc.sweep == pytest.approx(math.pi / 3.0)


def test_arc_of_coincident_points():
    p = Point.from_xy(1.0, 1.0)
    assert arc_from_two_points(p, p, Distance(5.0)) is None
    assert CircularShape.from_points_and_radius(p, p, Distance(5.0)) is None


def test_full_circle_outline_closes():
    circle = CircularShape(Point.zero(), Distance(2.0))
    points = circle.polyline(16)
    assert len(points) == 17
    assert points[0].x.value == pytest.approx(points[-1].x.value)
    assert points[0].y.value == pytest.approx(points[-1].y.value, abs=1e-9)
    assert all(p.distance_to(Point.zero()) == pytest.approx(2.0) for p in points)
    assert len(circle.lines(16)) == 16


def test_semicircle_faces_angle():
    semi = CircularShape(Point.zero(), Distance(1.0), kind=ShapeKind.SEMI, angle=Angle.from_degrees(90.0))
    points = semi.polyline(8)
    assert len(points) == 5
    assert all(p.y.value >= -1e-9 for p in points)


def test_arc_shape_ends_on_chord_points():
    p1 = Point.from_xy(0.0, 0.0)
    p2 = Point.from_xy(4.0, 0.0)
    points = CircularShape.from_points_and_radius(p1, p2, Distance(3.0)).polyline(64)
    assert points[0].distance_to(p1) == pytest.approx(0.0, abs=1e-9)
    assert points[-1].distance_to(p2) == pytest.approx(0.0, abs=1e-9)


def test_polyline_rejects_non_positive_resolution():
    with pytest.raises(ValueError):
        CircularShape(Point.zero(), Distance(1.0)).polyline(0)
