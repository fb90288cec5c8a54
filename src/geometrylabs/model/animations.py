"""
Animations
==========
Per-frame step functions over state they are handed. Each ``step``/``run``
returns True when it changed something and wants another frame; the Qt canvas
keeps its frame timer running only while some animation asks for it.
"""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field, replace
from typing import Optional

from geometrylabs.config import EPSILON
from geometrylabs.model.figures.contour import Knot, default_knots
from geometrylabs.model.figures.epicycloid import Epicycloid
from geometrylabs.model.figures.star import Star3D
from geometrylabs.model.figures.surface import Surface
from geometrylabs.model.geometry_primitives import (
    BLACK,
    BLUE,
    GREEN,
    ORANGE,
    Line,
    MarkerStyle,
    Point,
    Stroke,
)
from geometrylabs.model.geometry_utils import Angle
from geometrylabs.model.pipeline import Rotation3DOperation
from geometrylabs.model.units import Distance

OSCILLATION_STEP = 0.5
MAX_FRAME_DT = 0.1

CONE_RADIUS_RANGE = (1.0, 20.0)
PEN_OFFSET_RANGE = (1.0, 100.0)
STAR_RADIUS_RANGE = (1.0, 30.0)
STAR_SPIN_DEGREES = 1.0

WALKER_STEP_RANGE = (1, 10)
WALKER_POINT_STYLE = MarkerStyle(radius=5.0, fill=GREEN, stroke=Stroke(0.5, BLACK))
TANGENT_STROKE = Stroke(1.5, BLUE)
NORMAL_STROKE = Stroke(1.5, ORANGE)


class Direction(enum.Enum):
    INCREASE = 1.0
    DECREASE = -1.0

    @property
    def factor(self) -> float:
        return self.value

    def toggled(self) -> Direction:
        return Direction.DECREASE if self is Direction.INCREASE else Direction.INCREASE


@dataclass
class Oscillator:
    """Ping-pong a scalar between ``low`` and ``high`` by ``step`` per frame."""
    low: float
    high: float
    step: float = OSCILLATION_STEP
    direction: Direction = Direction.INCREASE

    def advance(self, value: float) -> float:
        value += self.step * self.direction.factor
        if value < self.low:
            value = self.low
            self.direction = self.direction.toggled()
        elif value > self.high:
            value = self.high
            self.direction = self.direction.toggled()
        return value


@dataclass
class ConeAnimation:
    """Breathing cone: oscillates the base radius."""
    is_enabled: bool = False
    oscillator: Oscillator = field(default_factory=lambda: Oscillator(*CONE_RADIUS_RANGE))

    def toggle(self) -> None:
        self.is_enabled = not self.is_enabled

    def run(self, surface: Surface) -> bool:
        if not self.is_enabled:
            return False
        surface.radius_base = Distance(self.oscillator.advance(surface.radius_base.value))
        return True


@dataclass
class EpicycloidAnimation:
    """Oscillates the pen offset."""
    is_enabled: bool = False
    oscillator: Oscillator = field(default_factory=lambda: Oscillator(*PEN_OFFSET_RANGE))

    def toggle(self) -> None:
        self.is_enabled = not self.is_enabled

    def run(self, epicycloid: Epicycloid) -> bool:
        if not self.is_enabled:
            return False
        epicycloid.update(pen_offset=self.oscillator.advance(epicycloid.pen_offset.value))
        return True


@dataclass
class StarAnimation:
    """Oscillates the star radius and spins it about Y by one degree per frame."""
    is_enabled: bool = False
    oscillator: Oscillator = field(default_factory=lambda: Oscillator(*STAR_RADIUS_RANGE))

    def toggle(self) -> None:
        self.is_enabled = not self.is_enabled

    def run(self, star: Star3D, spin: Rotation3DOperation) -> tuple[bool, Rotation3DOperation]:
        if not self.is_enabled:
            return False, spin
        star.radius = Distance(self.oscillator.advance(star.radius.value))
        spin = replace(spin, angle_y=Angle.from_degrees(spin.angle_y.degrees + STAR_SPIN_DEGREES))
        return True, spin


# -------------------------------------------------------------------------------
# Contour morph
# -------------------------------------------------------------------------------

def circle_knots(count: int, radius: Distance) -> list[Knot]:
    """
    ``count`` knots evenly spread on a circle, starting at angle pi, with
    tangent points along the counter-clockwise direction.
    """
    step_angle = 2.0 * math.pi / count
    magnitude = radius.value * step_angle
    knots = []
    for i in range(count):
        theta = math.pi + step_angle * i
        cx = radius.value * math.cos(theta)
        cy = radius.value * math.sin(theta)
        knots.append(Knot.from_xy(
            cx, cy,
            cx - math.sin(theta) * magnitude,
            cy + math.cos(theta) * magnitude,
        ))
    return knots


def _lerp(a: Point, b: Point, t: float) -> Point:
    return Point.from_xy(
        a.x.value * (1.0 - t) + b.x.value * t,
        a.y.value * (1.0 - t) + b.y.value * t,
    )


@dataclass
class ContourMorph:
    """Blends the contour knots towards a circle and back: ``K = K0 (1 - t) + K1 t``."""
    is_enabled: bool = False
    speed: float = 0.5
    t: float = 0.0
    direction: Direction = Direction.INCREASE
    start_knots: list[Knot] = field(default_factory=default_knots)
    end_knots: list[Knot] = field(default_factory=list)
    circle_radius: Distance = Distance(12.0)

    def __post_init__(self) -> None:
        if not self.end_knots:
            self.end_knots = circle_knots(len(self.start_knots), self.circle_radius)

    def play_forward(self) -> None:
        self.direction = Direction.INCREASE
        self.is_enabled = True

    def play_backward(self) -> None:
        self.direction = Direction.DECREASE
        self.is_enabled = True

    def toggle(self) -> None:
        self.is_enabled = not self.is_enabled

    def reset(self, knots: list[Knot]) -> None:
        self.is_enabled = False
        self.t = 0.0
        self.interpolate(knots)

    def interpolate(self, knots: list[Knot]) -> None:
        """Write the blend at the current ``t`` into ``knots`` (left untouched on a count mismatch)."""
        if len(knots) != len(self.start_knots) or len(knots) != len(self.end_knots):
            return
        for knot, a, b in zip(knots, self.start_knots, self.end_knots):
            knot.control = _lerp(a.control, b.control, self.t)
            knot.tangent = _lerp(a.tangent, b.tangent, self.t)

    def step(self, dt: float, knots: list[Knot]) -> bool:
        if not self.is_enabled:
            return False

        dt = min(dt, MAX_FRAME_DT)
        self.t += self.speed * dt * self.direction.factor
        if self.t >= 1.0:
            self.t = 1.0
            self.direction = self.direction.toggled()
        elif self.t <= 0.0:
            self.t = 0.0
            self.direction = self.direction.toggled()

        self.interpolate(knots)
        return True


# -------------------------------------------------------------------------------
# Curve walker
# -------------------------------------------------------------------------------

@dataclass
class CurveWalker:
    """
    Walks along the start points of the epicycloid's line batch, ``step``
    indices per frame, and exposes tangent/normal lines of fixed half-length
    ``lines_size`` at the current position.
    """
    is_enabled: bool = False
    is_visible: bool = False
    step: int = 1
    is_inflection_points_enabled: bool = False
    is_normal_enabled: bool = False
    is_tangent_enabled: bool = False
    lines_size: Distance = Distance(30.0)

    current_point: Point = field(default_factory=Point)
    current_index: int = 0
    current_length: int = 0
    direction: Direction = Direction.INCREASE

    def __post_init__(self) -> None:
        low, high = WALKER_STEP_RANGE
        self.step = min(max(int(self.step), low), high)

    def advance(self, lines: list[Line[Point]]) -> bool:
        if not self.is_enabled or not self.is_visible:
            return False

        if self.current_length != len(lines):
            # the batch changed size: restart from its first point
            if not lines:
                return False
            self.current_point = lines[0].start
            self.current_index = 0
            self.current_length = len(lines)
            return True

        delta = int(self.direction.factor) * self.step
        self.current_index = (self.current_index + delta) % self.current_length
        self.current_point = lines[self.current_index].start
        return True

    def set_increasing(self) -> None:
        if self.is_visible:
            self.is_enabled = not self.is_enabled
            self.direction = Direction.INCREASE

    def set_decreasing(self) -> None:
        if self.is_visible:
            self.is_enabled = not self.is_enabled
            self.direction = Direction.DECREASE

    def show_toggle(self) -> None:
        self.is_visible = not self.is_visible
        if not self.is_visible:
            self.is_enabled = False

    def hide(self) -> None:
        self.is_normal_enabled = False
        self.is_tangent_enabled = False
        self.is_inflection_points_enabled = False
        self.is_visible = False
        self.is_enabled = False

    def current_t(self, epicycloid: Epicycloid) -> float:
        return self.current_index * epicycloid.step

    def current_curvature_radius(self, epicycloid: Epicycloid) -> float:
        return epicycloid.curvature_radius_at(self.current_t(epicycloid))

    def _vector_line(self, dx: float, dy: float, stroke: Stroke) -> Optional[Line[Point]]:
        length = math.hypot(dx, dy)
        if length < EPSILON:
            return None
        scale = self.lines_size.value / length
        p = self.current_point
        return Line(
            Point.from_xy(p.x.value - dx * scale, p.y.value - dy * scale),
            Point.from_xy(p.x.value + dx * scale, p.y.value + dy * scale),
            stroke,
        )

    def tangent(self, epicycloid: Epicycloid) -> Optional[Line[Point]]:
        if not self.is_visible or not self.is_tangent_enabled:
            return None
        der = epicycloid.derivatives(self.current_t(epicycloid))
        return self._vector_line(der.dx, der.dy, TANGENT_STROKE)

    def normal(self, epicycloid: Epicycloid) -> Optional[Line[Point]]:
        if not self.is_visible or not self.is_normal_enabled:
            return None
        der = epicycloid.derivatives(self.current_t(epicycloid))
        return self._vector_line(-der.dy, der.dx, NORMAL_STROKE)
