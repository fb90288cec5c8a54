import numpy as np
import pytest

from geometrylabs.model.geometry_primitives import BLACK, Line, Line3D, Point, Point3D, Stroke
from geometrylabs.model.geometry_utils import Angle
from geometrylabs.model.pipeline import (
    Offset3DOperation,
    OffsetOperation,
    Pipeline,
    Pipeline3D,
    Placement,
    Placement3D,
    PointSymmetryOperation,
    Rotation3DOperation,
    RotationOperation,
)
from geometrylabs.model.units import Distance

STROKE = Stroke(1.0, BLACK)


def _line(x0, y0, x1, y1):
    return Line(Point.from_xy(x0, y0), Point.from_xy(x1, y1), STROKE)


def _assert_point(point, x, y):
    assert point.x.value == pytest.approx(x, abs=1e-9)
    assert point.y.value == pytest.approx(y, abs=1e-9)


def test_empty_pipeline_is_identity():
    lines = [_line(0, 0, 1, 2)]
    assert Pipeline().do_tasks(lines) == lines


def test_operations_run_in_insertion_order():
    pipeline = Pipeline()
    pipeline.add_operation(OffsetOperation(Distance(1.0), Distance(0.0)))
    pipeline.add_operation(RotationOperation(Point.zero(), Angle.from_degrees(90.0)))
    result = pipeline.do_tasks([_line(0, 0, 1, 0)])[0]
    # offset first: (1, 0) -> rotated to (0, 1)
    _assert_point(result.start, 0.0, 1.0)
    _assert_point(result.end, 0.0, 2.0)
    assert result.stroke == STROKE


def test_make_tasks_drains():
    pipeline = Pipeline()
    pipeline.add_operation(OffsetOperation(Distance(2.0), Distance(3.0)))
    lines = [_line(0, 0, 1, 1)]
    moved = pipeline.make_tasks(lines)
    _assert_point(moved[0].start, 2.0, 3.0)
    assert pipeline.is_empty
    assert pipeline.do_tasks(moved) == moved


def test_point_symmetry_is_an_involution():
    pipeline = Pipeline()
    center = Point.from_xy(1.0, -2.0)
    pipeline.add_operation(PointSymmetryOperation(center))
    pipeline.add_operation(PointSymmetryOperation(center))
    result = pipeline.do_tasks_point(Point.from_xy(7.5, 3.0))
    _assert_point(result, 7.5, 3.0)


def test_point_symmetry_reflects_through_center():
    pipeline = Pipeline()
    pipeline.add_operation(PointSymmetryOperation(Point.from_xy(1.0, 1.0)))
    _assert_point(pipeline.make_tasks_point(Point.from_xy(3.0, 0.0)), -1.0, 2.0)


def test_rotation_there_and_back():
    pipeline = Pipeline()
    pivot = Point.from_xy(2.0, 3.0)
    pipeline.add_operation(RotationOperation(pivot, Angle.from_degrees(37.0)))
    pipeline.add_operation(RotationOperation(pivot, Angle.from_degrees(-37.0)))
    _assert_point(pipeline.do_tasks_point(Point.from_xy(-4.0, 9.0)), -4.0, 9.0)


def test_pipeline3d_offset_moves_pivot():
    pipeline = Pipeline3D()
    pipeline.add_operation(Offset3DOperation(Distance(1.0), Distance(0.0), Distance(0.0)))
    pipeline.add_operation(Rotation3DOperation(angle_z=Angle.from_degrees(90.0)))
    point = Point3D.from_xyz(2.0, 0.0, 0.0)
    lines, pivot = pipeline.make_tasks([Line3D(point, point, STROKE)], Point3D.zero())
    assert pivot == Point3D.from_xyz(1.0, 0.0, 0.0)
    end = lines[0].end
    assert end.x.value == pytest.approx(1.0)
    assert end.y.value == pytest.approx(2.0)
    assert end.z.value == pytest.approx(0.0)
    assert pipeline.is_empty


def test_pipeline3d_empty_keeps_pivot():
    pivot = Point3D.from_xyz(0.0, 5.0, 0.0)
    lines, moved = Pipeline3D().do_tasks([], pivot)
    assert lines == []
    assert moved == pivot


def test_placement_keeps_drained_edits():
    placement = Placement()
    pipeline = Pipeline()
    pipeline.add_operation(OffsetOperation(Distance(4.0), Distance(0.0)))
    base = [_line(0, 0, 1, 0)]

    committed = placement.commit(pipeline, base)
    _assert_point(committed[0].start, 4.0, 0.0)
    assert pipeline.is_empty

    # next frame regenerates the figure at its original position
    again = placement.apply(base)
    _assert_point(again[0].start, 4.0, 0.0)
    _assert_point(placement.apply_point(Point.zero()), 4.0, 0.0)


def test_placement_commit_with_empty_pipeline():
    placement = Placement()
    base = [_line(0, 0, 1, 0)]
    assert placement.commit(Pipeline(), base) == base
    assert np.allclose(placement.matrix, np.identity(3))


def test_placement3d_tracks_pivot():
    placement = Placement3D()
    pipeline = Pipeline3D()
    pipeline.add_operation(Offset3DOperation(Distance(0.0), Distance(0.0), Distance(2.0)))
    pivot = Point3D.zero()
    placement.commit(pipeline, [], pivot)
    lines, moved = placement.apply([], pivot)
    assert lines == []
    assert moved.z.value == pytest.approx(2.0)
