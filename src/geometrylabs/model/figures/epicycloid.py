"""
Epicycloid
==========
Curve traced by a pen attached to a circle of radius ``r`` rolling around a
fixed circle of radius ``R``::

    x(t) = (R + r) cos t - d cos(k t)
    y(t) = (R + r) sin t - d sin(k t),      k = (R + r) / r

``d = r`` gives the classic epicycloid with cusps; other pen offsets give
curtate/prolate variants.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np

from geometrylabs.config import EPSILON, MIN_RADIUS
from geometrylabs.model.geometry_primitives import PURPLE, Line, Point, Polyline, Stroke
from geometrylabs.model.units import Distance

logger = logging.getLogger(__name__)

INFLECTION_STEP = 0.01


@dataclass
class EpicycloidStats:
    area: float = 0.0
    length: float = 0.0
    inflection_points: list[Point] = field(default_factory=list)


@dataclass
class Derivatives:
    x: float
    y: float
    dx: float
    dy: float
    ddx: float
    ddy: float

    @property
    def cross(self) -> float:
        """Cross product of velocity and acceleration."""
        return self.dx * self.ddy - self.dy * self.ddx


@dataclass
class Epicycloid:
    fixed_radius: Distance = Distance(100.0)
    rolling_radius: Distance = Distance(20.0)
    pen_offset: Distance = Distance(20.0)
    rotations: int = 5
    step: float = 0.05
    stroke: Stroke = Stroke(1.0, PURPLE)

    stats: EpicycloidStats = field(default_factory=EpicycloidStats)

    def __post_init__(self) -> None:
        if self.step <= 0.0:
            raise ValueError("Epicycloid step must be positive.")
        self._clamp()
        self.calculate_stats()

    def _clamp(self) -> None:
        self.fixed_radius = Distance(max(self.fixed_radius.value, MIN_RADIUS))
        self.rolling_radius = Distance(max(self.rolling_radius.value, MIN_RADIUS))
        self.pen_offset = Distance(max(self.pen_offset.value, 0.0))
        self.rotations = max(int(self.rotations), 1)

    def update(self, **params) -> None:
        """Set parameters (``fixed_radius=...``, ...), floor the radii and refresh stats."""
        for name, value in params.items():
            if name in ("fixed_radius", "rolling_radius", "pen_offset") and not isinstance(value, Distance):
                value = Distance(value)
            setattr(self, name, value)
        if self.step <= 0.0:
            raise ValueError("Epicycloid step must be positive.")
        self._clamp()
        self.calculate_stats()

    @property
    def max_angle(self) -> float:
        return self.rotations * 2.0 * math.pi

    @property
    def k(self) -> float:
        return (self.fixed_radius.value + self.rolling_radius.value) / self.rolling_radius.value

    def _xy(self, t: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        s = self.fixed_radius.value + self.rolling_radius.value
        d = self.pen_offset.value
        k = self.k
        return s * np.cos(t) - d * np.cos(k * t), s * np.sin(t) - d * np.sin(k * t)

    def point_at(self, t: float) -> Point:
        x, y = self._xy(np.array([t]))
        return Point.from_xy(x[0], y[0])

    def parameters(self) -> np.ndarray:
        """Sample values of ``t`` from 0 to the full sweep."""
        count = math.ceil(self.max_angle / self.step)
        return np.minimum(np.arange(count + 1) * self.step, self.max_angle)

    def points(self) -> list[Point]:
        xs, ys = self._xy(self.parameters())
        return [Point.from_xy(x, y) for x, y in zip(xs, ys)]

    def lines(self) -> list[Line[Point]]:
        return Polyline.from_points(self.points(), self.stroke).lines()

    def derivatives(self, t: float) -> Derivatives:
        s = self.fixed_radius.value + self.rolling_radius.value
        d = self.pen_offset.value
        k = self.k
        sin_t, cos_t = math.sin(t), math.cos(t)
        sin_kt, cos_kt = math.sin(k * t), math.cos(k * t)

        return Derivatives(
            x=s * cos_t - d * cos_kt,
            y=s * sin_t - d * sin_kt,
            dx=-s * sin_t + d * k * sin_kt,
            dy=s * cos_t - d * k * cos_kt,
            ddx=-s * cos_t + d * k ** 2 * cos_kt,
            ddy=-s * sin_t + d * k ** 2 * sin_kt,
        )

    def curvature_radius_at(self, t: float) -> float:
        """``(x'^2 + y'^2)^1.5 / |x'y'' - y'x''|``; ``inf`` where the curve does not bend."""
        der = self.derivatives(t)
        denominator = abs(der.cross)
        if denominator < EPSILON:
            return math.inf
        return (der.dx ** 2 + der.dy ** 2) ** 1.5 / denominator

    def find_inflection_points(self) -> list[Point]:
        """Points where the cross product of velocity and acceleration changes sign."""
        s = self.fixed_radius.value + self.rolling_radius.value
        d = self.pen_offset.value
        k = self.k

        t = np.arange(0.0, self.max_angle, INFLECTION_STEP)
        dx = -s * np.sin(t) + d * k * np.sin(k * t)
        dy = s * np.cos(t) - d * k * np.cos(k * t)
        ddx = -s * np.cos(t) + d * k ** 2 * np.cos(k * t)
        ddy = -s * np.sin(t) + d * k ** 2 * np.sin(k * t)
        positive = (dx * ddy - dy * ddx) >= 0.0

        changed = np.nonzero(positive[1:] != positive[:-1])[0] + 1
        xs, ys = self._xy(t[changed])
        return [Point.from_xy(x, y) for x, y in zip(xs, ys)]

    def calculate_stats(self) -> EpicycloidStats:
        xs, ys = self._xy(self.parameters())
        length = float(np.sum(np.hypot(np.diff(xs), np.diff(ys))))
        # shoelace over consecutive samples
        double_area = float(np.sum(xs[:-1] * ys[1:] - xs[1:] * ys[:-1]))

        self.stats = EpicycloidStats(
            area=abs(double_area) / 2.0,
            length=length,
            inflection_points=self.find_inflection_points(),
        )
        logger.debug(f"Epicycloid stats: area={self.stats.area:.2f}, length={self.stats.length:.2f}, "
                     f"inflections={len(self.stats.inflection_points)}")
        return self.stats
