"""
Frame Composition
=================
Renders one frame of a lab into device-space lines and markers.

Per frame, in this order:

1. ``Viewport.update_state`` with the reported device rectangle,
2. animations step and the figures produce model-space lines,
3. live operators run over a per-frame copy,
4. the placement re-applies every edit committed in earlier frames,
5. armed forms queue into the pipeline (offset, rotation, symmetry), the
   pipeline runs once and is drained into the placement,
6. 3D batches are projected, then everything is converted to pixels.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from geometrylabs.model.geometry_primitives import (
    BLACK,
    BROWN,
    Line,
    Line3D,
    Marker,
    MarkerStyle,
    Point,
    ScreenPoint,
    ScreenVector,
    Stroke,
    array_to_lines3d,
    lines3d_to_array,
)
from geometrylabs.model.animations import WALKER_POINT_STYLE
from geometrylabs.model.figures.contour import CONTROL_STYLE, TANGENT_STYLE
from geometrylabs.model.geometry_utils import rotation_matrix_3d
from geometrylabs.model.pipeline import Placement
from geometrylabs.model.state import (
    ContourLab,
    DetailLab,
    EpicycloidLab,
    FractalLab,
    Lab,
    LiveOperators,
    StarLab,
    SurfaceLab,
)
from geometrylabs.model.viewport import Anchoring, DeviceRect

logger = logging.getLogger(__name__)

INFLECTION_POINT_STYLE = MarkerStyle(radius=5.0, fill=BROWN, stroke=Stroke(0.5, BLACK))


@dataclass
class Frame:
    lines: list[Line[ScreenPoint]] = field(default_factory=list)
    markers: list[Marker] = field(default_factory=list)
    wants_repaint: bool = False


def _transform_points(points: list[Point], live: LiveOperators, placement: Placement) -> list[Point]:
    """Send points down the same path as the figure lines."""
    if not points:
        return []
    carriers = [Line(p, p) for p in points]
    carriers = placement.apply(live.handle(carriers))
    return [line.start for line in carriers]


def _commit_2d(lab: DetailLab | EpicycloidLab | ContourLab, lines: list[Line[Point]]) -> list[Line[Point]]:
    lines = lab.live.handle(lines)
    lines = lab.placement.apply(lines)
    lab.forms.handle([lab.pipeline])
    return lab.placement.commit(lab.pipeline, lines)


# -------------------------------------------------------------------------------
# 2D labs
# -------------------------------------------------------------------------------

def render_detail(lab: DetailLab, rect: DeviceRect) -> Frame:
    vp = lab.viewport
    vp.update_state(rect)

    grid = lab.live.handle(lab.grid.lines(vp))
    detail = _commit_2d(lab, lab.detail.lines())

    return Frame(
        lines=vp.lines_to_pixels(grid + detail),
        markers=lab.forms.markers(vp),
    )


def render_epicycloid(lab: EpicycloidLab, rect: DeviceRect) -> Frame:
    vp = lab.viewport
    vp.update_state(rect)

    epicycloid = lab.epicycloid
    wants_repaint = lab.animation.run(epicycloid)

    raw = epicycloid.lines()
    grid = lab.live.handle(lab.grid.lines(vp))
    curve = _commit_2d(lab, raw)

    walker = lab.walker
    wants_repaint |= walker.advance(raw)

    extras = [line for line in (walker.tangent(epicycloid), walker.normal(epicycloid)) if line is not None]
    extras = lab.placement.apply(lab.live.handle(extras))

    markers = lab.forms.markers(vp)
    if walker.is_visible:
        (point,) = _transform_points([walker.current_point], lab.live, lab.placement)
        markers.append(vp.marker(point, WALKER_POINT_STYLE))
    if walker.is_inflection_points_enabled:
        for point in _transform_points(epicycloid.stats.inflection_points, lab.live, lab.placement):
            markers.append(vp.marker(point, INFLECTION_POINT_STYLE))

    return Frame(
        lines=vp.lines_to_pixels(grid + curve + extras),
        markers=markers,
        wants_repaint=wants_repaint,
    )


def render_contour(lab: ContourLab, rect: DeviceRect, dt: float = 0.0) -> Frame:
    vp = lab.viewport
    vp.update_state(rect)

    contour = lab.contour
    wants_repaint = lab.morph.step(dt, contour.curve.knots)

    grid = lab.live.handle(lab.grid.lines(vp))
    skeleton = contour.skeleton()
    figure = _commit_2d(lab, contour.lines() + skeleton.lines)

    markers = lab.forms.markers(vp)
    for point in _transform_points(skeleton.controls, lab.live, lab.placement):
        markers.append(vp.marker(point, CONTROL_STYLE))
    for point in _transform_points(skeleton.tangents, lab.live, lab.placement):
        markers.append(vp.marker(point, TANGENT_STYLE))

    return Frame(
        lines=vp.lines_to_pixels(grid + figure),
        markers=markers,
        wants_repaint=wants_repaint,
    )


def render_fractal(lab: FractalLab, rect: DeviceRect) -> Frame:
    vp = lab.viewport
    vp.update_state(rect)

    if lab.markers is None or lab.cached_rect != rect:
        lab.markers = [
            vp.marker(point, MarkerStyle(radius=lab.fractal.radius, fill=color, stroke=Stroke()))
            for point, color in lab.fractal.points(lab.rng())
        ]
        lab.cached_rect = rect
        logger.debug(f"Fractal regenerated ({len(lab.markers)} points)")

    return Frame(
        lines=vp.lines_to_pixels(lab.grid.lines(vp)),
        markers=list(lab.markers),
    )


# -------------------------------------------------------------------------------
# 3D labs
# -------------------------------------------------------------------------------

def render_star(lab: StarLab, rect: DeviceRect) -> Frame:
    vp = lab.viewport
    vp.update_state(rect)

    wants_repaint, lab.spin = lab.animation.run(lab.star, lab.spin)

    grid = lab.projection.project_lines(lab.grid.lines())

    star = lab.star.lines()
    pivot = lab.star.pivot_point()
    spin = rotation_matrix_3d(lab.spin.angle_x, lab.spin.angle_y, lab.spin.angle_z, pivot)
    star = array_to_lines3d(lines3d_to_array(star) @ spin, star)

    star, pivot = lab.placement.apply(star, pivot)
    lab.forms.handle([lab.pipeline])
    star, pivot = lab.placement.commit(lab.pipeline, star, pivot)

    projected = lab.projection.project_lines(star)
    return Frame(lines=vp.lines_to_pixels(grid + projected), wants_repaint=wants_repaint)


def render_surface(lab: SurfaceLab, rect: DeviceRect) -> Frame:
    vp = lab.viewport
    vp.update_state(rect)

    wants_repaint = lab.animation.run(lab.surface)

    grid = lab.projection.project_lines(lab.grid.lines())

    lines3d: list[Line3D] = lab.surface.lines() + lab.surface.handle_texture(lab.texture)
    pivot = lab.surface.pivot_point()

    lines3d, pivot = lab.placement.apply(lines3d, pivot)
    lab.forms.handle([lab.pipeline])
    lines3d, pivot = lab.placement.commit(lab.pipeline, lines3d, pivot)

    projected = lab.projection.project_lines(lines3d)
    return Frame(lines=vp.lines_to_pixels(grid + projected), wants_repaint=wants_repaint)


# -------------------------------------------------------------------------------
# Dispatch
# -------------------------------------------------------------------------------

def render(lab: Lab, rect: DeviceRect, dt: float = 0.0) -> Frame:
    match lab:
        case DetailLab():
            return render_detail(lab, rect)
        case EpicycloidLab():
            return render_epicycloid(lab, rect)
        case ContourLab():
            return render_contour(lab, rect, dt)
        case FractalLab():
            return render_fractal(lab, rect)
        case StarLab():
            return render_star(lab, rect)
        case SurfaceLab():
            return render_surface(lab, rect)
    raise TypeError(f"Unsupported lab: {type(lab).__name__}")


def _view_changed(lab: Lab) -> None:
    # cached fractal markers are in device pixels
    if isinstance(lab, FractalLab):
        lab.invalidate()


def handle_pan(lab: Lab, delta: ScreenVector) -> bool:
    changed = lab.viewport.handle_pan(delta)
    if changed:
        _view_changed(lab)
    return changed


def handle_scroll(lab: Lab, delta: float) -> bool:
    changed = lab.viewport.handle_scroll(delta)
    if changed:
        _view_changed(lab)
    return changed


def reset_zoom(lab: Lab) -> None:
    lab.viewport.reset_pixels_per_centimeter()
    _view_changed(lab)


def reset_pan(lab: Lab) -> None:
    lab.viewport.reset_offset()
    _view_changed(lab)


def set_anchoring(lab: Lab, anchoring: Anchoring) -> None:
    lab.viewport.set_anchoring(anchoring)
    _view_changed(lab)
