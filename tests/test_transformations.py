import logging
import math

import numpy as np
import pytest

from geometrylabs.model.geometry_primitives import BLACK, Line, Point, Stroke
from geometrylabs.model.pipeline import OffsetOperation, Pipeline, Pipeline3D, RotationOperation
from geometrylabs.model.transformations import (
    Affine,
    AffinePointSymmetry,
    AffineScaling,
    CommittedForm,
    EuclideanOffset,
    EuclideanOffset3D,
    EuclideanRotation,
    EuclideanRotation3D,
    LiveOperator,
    Projective,
)
from geometrylabs.model.units import Distance

STROKE = Stroke(1.0, BLACK)


def _line(x0, y0, x1, y1):
    return Line(Point.from_xy(x0, y0), Point.from_xy(x1, y1), STROKE)


def test_unarmed_form_queues_nothing():
    form = EuclideanOffset(x=3.0)
    pipeline = Pipeline()
    assert not form.handle([pipeline])
    assert pipeline.is_empty
    assert form.x == 3.0


def test_armed_form_queues_once_and_resets():
    form = EuclideanOffset(x=1.0, y=2.0)
    first, second = Pipeline(), Pipeline()
    form.run()
    assert form.handle([first, second])
    assert first.operations == (OffsetOperation(Distance(1.0), Distance(2.0)),)
    assert len(second) == 1
    assert (form.x, form.y, form.is_enabled) == (0.0, 0.0, False)
    assert not form.handle([first])
    assert len(first) == 1


def test_rotation_form_builds_pivoted_operation():
    form = EuclideanRotation(x=1.0, y=2.0, angle=450.0)
    operation = form.create_operation()
    assert isinstance(operation, RotationOperation)
    assert operation.pivot == Point.from_xy(1.0, 2.0)
    assert operation.angle.degrees == pytest.approx(90.0)


def test_pivot_markers_hidden_at_origin(viewport):
    assert EuclideanRotation().marker(viewport) is None
    assert AffinePointSymmetry().marker(viewport) is None
    marker = EuclideanRotation(x=1.0, y=1.0).marker(viewport)
    assert marker.center.to_tuple() == (120.0, 30.0)
    assert AffinePointSymmetry(x=-1.0).marker(viewport) is not None


def test_symmetry_form_applied_twice_restores_lines():
    pipeline = Pipeline()
    form = AffinePointSymmetry(x=2.0, y=2.0)
    form.run()
    form.handle([pipeline])
    form.x, form.y = 2.0, 2.0
    form.run()
    form.handle([pipeline])
    line = pipeline.do_tasks([_line(1, 1, 5, 0)])[0]
    assert line.end.x.value == pytest.approx(5.0)
    assert line.end.y.value == pytest.approx(0.0)


def test_3d_forms_feed_3d_pipelines():
    pipeline = Pipeline3D()
    offset = EuclideanOffset3D(z=1.0)
    rotation = EuclideanRotation3D(angle_y=30.0)
    offset.run()
    rotation.run()
    assert offset.handle([pipeline])
    assert rotation.handle([pipeline])
    assert len(pipeline) == 2
    assert rotation.angle_y == 0.0


def test_live_operator_disabled_returns_copy():
    lines = [_line(0, 0, 1, 1)]
    result = Affine(xx=5.0).handle(lines)
    assert result == lines
    assert result is not lines


def test_affine_shear_and_shift():
    affine = Affine(is_enabled=True, xx=1.0, xy=0.0, yx=1.0, yy=1.0, zero_x=2.0, zero_y=0.0)
    line = affine.handle([_line(0, 0, 0, 1)])[0]
    assert line.start == Point.from_xy(2.0, 0.0)
    assert line.end == Point.from_xy(3.0, 1.0)
    assert line.stroke == STROKE


def test_scaling():
    line = AffineScaling(is_enabled=True, mx=2.0, my=-1.0).handle([_line(1, 1, 2, 3)])[0]
    assert line.start == Point.from_xy(2.0, -1.0)
    assert line.end == Point.from_xy(4.0, -3.0)


def test_projective_default_map():
    projective = Projective(is_enabled=True)
    line = projective.handle([_line(0, 0, 1, 0)])[0]
    assert line.start.x.value == pytest.approx(0.0)
    assert line.end.x.value == pytest.approx(1000.0 / 502.0)
    assert line.end.y.value == pytest.approx(0.0)


def test_projective_vanishing_weight_is_not_finite(caplog):
    projective = Projective(is_enabled=True)
    with caplog.at_level(logging.WARNING):
        line = projective.handle([_line(-125, -125, 0, 0)])[0]
    assert not math.isfinite(line.start.x.value)
    assert math.isfinite(line.end.x.value)
    assert "close to zero" in caplog.text


def test_live_operator_reset():
    projective = Projective(is_enabled=True, wx=7.0, w_zero=1.0)
    projective.reset()
    assert projective == Projective()


def test_affine_identity_matrix_by_default():
    assert np.allclose(Affine().matrix(), np.identity(3))


@pytest.mark.parametrize("base", [CommittedForm, LiveOperator])
def test_bases_are_abstract(base):
    with pytest.raises(TypeError):
        base()
