import math

import pytest

from geometrylabs.model.animations import (
    ConeAnimation,
    ContourMorph,
    CurveWalker,
    Direction,
    EpicycloidAnimation,
    Oscillator,
    StarAnimation,
    circle_knots,
)
from geometrylabs.model.figures.contour import default_knots
from geometrylabs.model.figures.epicycloid import Epicycloid
from geometrylabs.model.figures.star import Star3D
from geometrylabs.model.figures.surface import Surface
from geometrylabs.model.pipeline import Rotation3DOperation
from geometrylabs.model.units import Distance


def test_oscillator_bounces_at_limits():
    osc = Oscillator(0.0, 1.0, step=0.5)
    assert osc.advance(0.75) == 1.0
    assert osc.direction is Direction.DECREASE
    assert osc.advance(1.0) == 0.5
    assert osc.advance(0.2) == 0.0
    assert osc.direction is Direction.INCREASE


def test_cone_animation_breathes_radius():
    surface = Surface()
    animation = ConeAnimation()
    assert not animation.run(surface)
    animation.toggle()
    assert animation.run(surface)
    assert surface.radius_base == Distance(5.5)


def test_epicycloid_animation_moves_pen():
    epicycloid = Epicycloid()
    animation = EpicycloidAnimation(is_enabled=True)
    assert animation.run(epicycloid)
    assert epicycloid.pen_offset == Distance(20.5)


def test_star_animation_spins_and_grows():
    star = Star3D()
    changed, spin = StarAnimation(is_enabled=True).run(star, Rotation3DOperation())
    assert changed
    assert spin.angle_y.degrees == pytest.approx(1.0)
    assert star.radius == Distance(5.5)


def test_star_animation_idle():
    spin = Rotation3DOperation()
    assert StarAnimation().run(Star3D(), spin) == (False, spin)


def test_circle_knots():
    knots = circle_knots(4, Distance(1.0))
    assert len(knots) == 4
    first = knots[0]
    assert first.control.x.value == pytest.approx(-1.0)
    assert first.control.y.value == pytest.approx(0.0, abs=1e-12)
    assert first.tangent.x.value == pytest.approx(-1.0)
    assert first.tangent.y.value == pytest.approx(-math.pi / 2.0)


def test_morph_step_is_time_based_and_capped():
    morph = ContourMorph()
    knots = default_knots()
    assert not morph.step(0.016, knots)
    morph.play_forward()
    assert morph.step(1.0, knots)
    assert morph.t == pytest.approx(0.05)
    a, b = morph.start_knots[0].control, morph.end_knots[0].control
    assert knots[0].control.x.value == pytest.approx(a.x.value * 0.95 + b.x.value * 0.05)


def test_morph_bounces_at_circle():
    morph = ContourMorph()
    knots = default_knots()
    morph.play_forward()
    morph.t = 0.99
    morph.step(0.1, knots)
    assert morph.t == 1.0
    assert morph.direction is Direction.DECREASE
    assert knots[5].control.x.value == pytest.approx(morph.end_knots[5].control.x.value)


def test_morph_reset_restores_shape():
    morph = ContourMorph()
    knots = default_knots()
    morph.play_backward()
    morph.t = 0.5
    morph.interpolate(knots)
    morph.reset(knots)
    assert not morph.is_enabled
    assert morph.t == 0.0
    assert [k.control for k in knots] == [k.control for k in default_knots()]


def test_morph_ignores_mismatched_knots():
    morph = ContourMorph(t=0.5)
    knots = default_knots()[:3]
    before = [k.control for k in knots]
    morph.interpolate(knots)
    assert [k.control for k in knots] == before


def test_walker_step_is_clamped():
    assert CurveWalker(step=50).step == 10
    assert CurveWalker(step=0).step == 1


def test_walker_restarts_and_wraps():
    lines = Epicycloid().lines()
    walker = CurveWalker()
    assert not walker.advance(lines)

    walker.show_toggle()
    walker.set_increasing()
    assert walker.advance(lines)
    assert walker.current_index == 0
    assert walker.current_point == lines[0].start
    walker.advance(lines)
    assert walker.current_index == 1

    walker.direction = Direction.DECREASE
    walker.advance(lines)
    walker.advance(lines)
    assert walker.current_index == len(lines) - 1


def test_walker_toggles_only_while_visible():
    walker = CurveWalker()
    walker.set_increasing()
    assert not walker.is_enabled
    walker.show_toggle()
    walker.set_decreasing()
    assert walker.is_enabled
    assert walker.direction is Direction.DECREASE
    walker.show_toggle()
    assert not walker.is_enabled


def test_walker_tangent_and_normal():
    epicycloid = Epicycloid()
    lines = epicycloid.lines()
    walker = CurveWalker(is_visible=True, is_enabled=True, is_tangent_enabled=True, is_normal_enabled=True)
    walker.advance(lines)
    # cusp at t = 0
    assert walker.tangent(epicycloid) is None

    walker.advance(lines)
    walker.advance(lines)
    tangent = walker.tangent(epicycloid)
    normal = walker.normal(epicycloid)
    assert tangent.length == pytest.approx(60.0)
    assert normal.length == pytest.approx(60.0)
    tx = tangent.end.x.value - tangent.start.x.value
    ty = tangent.end.y.value - tangent.start.y.value
    nx = normal.end.x.value - normal.start.x.value
    ny = normal.end.y.value - normal.start.y.value
    assert tx * nx + ty * ny == pytest.approx(0.0, abs=1e-6)
    assert walker.current_t(epicycloid) == pytest.approx(0.1)


def test_walker_hide():
    walker = CurveWalker(is_visible=True, is_enabled=True, is_tangent_enabled=True)
    walker.hide()
    assert not (walker.is_visible or walker.is_enabled or walker.is_tangent_enabled)
