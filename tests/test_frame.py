import math

import pytest

from geometrylabs.model.frame import (
    handle_pan,
    handle_scroll,
    render,
    render_detail,
    render_fractal,
    reset_pan,
    reset_zoom,
    set_anchoring,
)
from geometrylabs.model.geometry_primitives import ScreenVector
from geometrylabs.model.state import LabKey, create_lab
from geometrylabs.model.viewport import Anchoring, DeviceRect

RECT = DeviceRect.from_size(800.0, 600.0)


def test_detail_frame_without_edits():
    lab = create_lab(LabKey.DETAIL)
    frame = render(lab, RECT)
    grid = lab.grid.lines(lab.viewport)
    assert len(frame.lines) == len(grid) + len(lab.detail.lines())
    assert frame.markers == []
    assert not frame.wants_repaint


def test_committed_offset_persists_across_frames():
    baseline = render_detail(create_lab(LabKey.DETAIL), RECT)

    lab = create_lab(LabKey.DETAIL)
    lab.forms.offset.x = 2.0
    lab.forms.offset.run()
    first = render_detail(lab, RECT)

    # form is back to neutral and the queue is drained
    assert lab.forms.offset.x == 0.0
    assert not lab.forms.offset.is_enabled
    assert lab.pipeline.is_empty

    second = render_detail(lab, RECT)
    for frame in (first, second):
        shift = frame.lines[-1].start.x.value - baseline.lines[-1].start.x.value
        assert shift == pytest.approx(40.0)
        # grid is not moved by committed edits
        assert frame.lines[0] == baseline.lines[0]


def test_live_operator_reverts_when_disabled():
    lab = create_lab(LabKey.DETAIL)
    baseline = render(lab, RECT)
    lab.live.scaling.is_enabled = True
    lab.live.scaling.mx = 2.0
    scaled = render(lab, RECT)
    assert scaled.lines[-1] != baseline.lines[-1]
    lab.live.scaling.is_enabled = False
    assert render(lab, RECT).lines == baseline.lines


def test_pivot_markers_are_shown():
    lab = create_lab(LabKey.DETAIL)
    lab.forms.rotation.x = 1.0
    lab.forms.symmetry.y = 1.0
    assert len(render(lab, RECT).markers) == 2


def test_projective_singularity_reaches_the_frame():
    lab = create_lab(LabKey.DETAIL)
    lab.live.projective.is_enabled = True
    lab.live.projective.w_zero = 0.0
    frame = render(lab, RECT)
    # grid ends on the line x + y = 0 get w = 0
    assert any(not math.isfinite(line.start.x.value) for line in frame.lines)


def test_epicycloid_walker_markers():
    lab = create_lab(LabKey.EPICYCLOID)
    lab.walker.show_toggle()
    lab.walker.set_increasing()
    lab.walker.is_tangent_enabled = True
    lab.walker.is_inflection_points_enabled = True
    frame = render(lab, RECT)
    assert frame.wants_repaint
    assert len(frame.markers) == 1 + len(lab.epicycloid.stats.inflection_points)


def test_epicycloid_animation_requests_frames():
    lab = create_lab(LabKey.EPICYCLOID)
    lab.animation.toggle()
    assert render(lab, RECT).wants_repaint
    assert lab.epicycloid.pen_offset.value == pytest.approx(20.5)


def test_contour_skeleton_markers_and_morph():
    lab = create_lab(LabKey.CONTOUR)
    lab.contour.is_skeleton_mode_enabled = True
    frame = render(lab, RECT, dt=0.016)
    assert len(frame.markers) == 62
    assert not frame.wants_repaint

    lab.morph.play_forward()
    assert render(lab, RECT, dt=0.016).wants_repaint
    assert lab.morph.t > 0.0


def test_fractal_markers_are_cached_until_view_changes():
    lab = create_lab(LabKey.FRACTAL)
    lab.seed = 1
    lab.fractal.iterations = 200
    frame = render_fractal(lab, RECT)
    assert len(frame.markers) == 201
    cached = lab.markers

    render_fractal(lab, RECT)
    assert lab.markers is cached

    assert handle_scroll(lab, 10.0)
    assert lab.markers is None
    render_fractal(lab, RECT)
    assert lab.markers is not cached

    assert handle_pan(lab, ScreenVector.from_xy(3.0, 0.0))
    assert lab.markers is None

    render_fractal(lab, RECT)
    cached = lab.markers
    render_fractal(lab, DeviceRect.from_size(400.0, 300.0))
    assert lab.markers is not cached


def test_star_frame_and_spin():
    lab = create_lab(LabKey.STAR)
    frame = render(lab, RECT)
    assert len(frame.lines) == 3 + 30
    assert not frame.wants_repaint

    lab.animation.toggle()
    assert render(lab, RECT).wants_repaint
    assert lab.spin.angle_y.degrees == pytest.approx(1.0)


def test_surface_committed_offset_moves_placement():
    lab = create_lab(LabKey.SURFACE)
    frame = render(lab, RECT)
    assert len(frame.lines) == 3 + 21 * 20 + 20 * 20

    lab.forms.offset.x = 1.0
    lab.forms.offset.run()
    render(lab, RECT)
    assert lab.pipeline.is_empty
    assert lab.placement.matrix[3, 0] == pytest.approx(1.0)


def test_surface_texture_adds_lines():
    lab = create_lab(LabKey.SURFACE)
    plain = len(render(lab, RECT).lines)
    lab.surface.is_texture_enabled = True
    assert len(render(lab, RECT).lines) == plain + len(lab.texture.lines())


def test_unknown_lab():
    with pytest.raises(TypeError):
        render(object(), RECT)


def test_non_fractal_scroll():
    lab = create_lab(LabKey.DETAIL)
    assert handle_scroll(lab, 10.0)
    assert lab.viewport.ppc == pytest.approx(21.0)


def test_view_resets_invalidate_fractal_cache():
    lab = create_lab(LabKey.FRACTAL)
    lab.fractal.iterations = 10
    render_fractal(lab, RECT)
    reset_zoom(lab)
    assert lab.markers is None

    render_fractal(lab, RECT)
    reset_pan(lab)
    assert lab.markers is None

    render_fractal(lab, RECT)
    set_anchoring(lab, Anchoring.bottom_left())
    assert lab.markers is None
    frame = render_fractal(lab, RECT)
    assert frame.markers[0].center.to_tuple() == (50.0, 550.0)
