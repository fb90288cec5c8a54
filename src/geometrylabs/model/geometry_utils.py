from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt

from geometrylabs.config import EPSILON
from geometrylabs.model.geometry_primitives import Line, Point, Point3D, Polyline, Stroke
from geometrylabs.model.units import Distance


@dataclass(frozen=True)
class Angle:
    """An angle normalized to [0, 360) degrees, carrying its radian value."""
    degrees: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "degrees", float(self.degrees) % 360.0)

    @classmethod
    def from_degrees(cls, degrees: float) -> Angle:
        return cls(degrees)

    @classmethod
    def from_radians(cls, radians: float) -> Angle:
        return cls(math.degrees(radians))

    @property
    def radians(self) -> float:
        return math.radians(self.degrees)


def rotation_matrix(angle: Angle, pivot: Point) -> npt.NDArray[np.float64]:
    """
    Counter-clockwise rotation about ``pivot`` for row vectors ``[x y 1] . M``.
    """
    c = math.cos(angle.radians)
    s = math.sin(angle.radians)
    px = pivot.x.value
    py = pivot.y.value
    return np.array([
        [c, s, 0.0],
        [-s, c, 0.0],
        [-px * (c - 1.0) + py * s, -py * (c - 1.0) - px * s, 1.0],
    ])


def point_symmetry_matrix(center: Point) -> npt.NDArray[np.float64]:
    """Reflection through ``center`` (a half-turn)."""
    return np.array([
        [-1.0, 0.0, 0.0],
        [0.0, -1.0, 0.0],
        [2.0 * center.x.value, 2.0 * center.y.value, 1.0],
    ])


def translation_matrix(dx: float, dy: float) -> npt.NDArray[np.float64]:
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [dx, dy, 1.0],
    ])


def translation_matrix_3d(dx: float, dy: float, dz: float) -> npt.NDArray[np.float64]:
    m = np.identity(4)
    m[3, :3] = (dx, dy, dz)
    return m


def rotation_matrix_3d(angle_x: Angle, angle_y: Angle, angle_z: Angle, pivot: Point3D) -> npt.NDArray[np.float64]:
    """
    Rotation about the X, then Y, then Z axis through ``pivot``, combined into
    one 4x4 matrix for row vectors ``[x y z 1] . M``::

        M = T(-pivot) . Rx . Ry . Rz . T(pivot)
    """
    cx, sx = math.cos(angle_x.radians), math.sin(angle_x.radians)
    cy, sy = math.cos(angle_y.radians), math.sin(angle_y.radians)
    cz, sz = math.cos(angle_z.radians), math.sin(angle_z.radians)

    rx = np.array([
        [1.0, 0.0, 0.0, 0.0],
        [0.0, cx, sx, 0.0],
        [0.0, -sx, cx, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])
    ry = np.array([
        [cy, 0.0, -sy, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [sy, 0.0, cy, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])
    rz = np.array([
        [cz, sz, 0.0, 0.0],
        [-sz, cz, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])

    px, py, pz = pivot.x.value, pivot.y.value, pivot.z.value
    return translation_matrix_3d(-px, -py, -pz) @ rx @ ry @ rz @ translation_matrix_3d(px, py, pz)


# -------------------------------------------------------------------------------
# Arcs and circles
# -------------------------------------------------------------------------------

@dataclass(frozen=True)
class Arc:
    """
    Counter-clockwise arc from ``start_angle`` to ``end_angle`` (radians,
    ``end_angle > start_angle``).
    """
    center: Point
    radius: Distance
    start_angle: float
    end_angle: float

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle


def arc_from_two_points(p1: Point, p2: Point, radius: Distance) -> Optional[Arc]:
    """
    Circle arc through two points with a requested radius.

    The center lies on the perpendicular bisector of the chord, on the side
    that makes the traversal from ``p1`` to ``p2`` counter-clockwise (the
    minor arc). A radius shorter than half of the chord is widened to exactly
    half of it, which yields a semicircle.

    Args:
        p1: Start point of the arc.
        p2: End point of the arc.
        radius: Requested radius.

    Returns:
        The arc, or None when the points coincide.
    """
    chord = p2 - p1
    length = chord.magnitude
    if length < EPSILON:
        return None

    half = length / 2.0
    r = max(abs(radius.value), half)

    # distance from the chord midpoint to the center
    h = math.sqrt(max(r * r - half * half, 0.0))
    normal = chord.perpendicular() * (1.0 / length)
    center = p1.midpoint(p2) + normal * h

    start = math.atan2(p1.y.value - center.y.value, p1.x.value - center.x.value)
    end = math.atan2(p2.y.value - center.y.value, p2.x.value - center.x.value)
    while end <= start:
        end += 2.0 * math.pi

    return Arc(center=center, radius=Distance(r), start_angle=start, end_angle=end)


class ShapeKind(enum.Enum):
    FULL = "full"
    SEMI = "semi"
    ARC = "arc"


@dataclass
class CircularShape:
    """
    A full circle, a semicircle facing ``angle``, or an explicit arc.
    """
    center: Point
    radius: Distance
    kind: ShapeKind = ShapeKind.FULL
    angle: Angle = Angle()
    start_angle: float = 0.0
    end_angle: float = 2.0 * math.pi
    stroke: Stroke = Stroke()

    @classmethod
    def from_arc(cls, arc: Arc, stroke: Stroke = Stroke()) -> CircularShape:
        return cls(
            center=arc.center,
            radius=arc.radius,
            kind=ShapeKind.ARC,
            start_angle=arc.start_angle,
            end_angle=arc.end_angle,
            stroke=stroke,
        )

    @classmethod
    def from_points_and_radius(cls, p1: Point, p2: Point, radius: Distance, stroke: Stroke = Stroke()) -> Optional[CircularShape]:
        arc = arc_from_two_points(p1, p2, radius)
        if arc is None:
            return None
        return cls.from_arc(arc, stroke)

    def _angles(self) -> tuple[float, float]:
        match self.kind:
            case ShapeKind.FULL:
                return 0.0, 2.0 * math.pi
            case ShapeKind.SEMI:
                a = self.angle.radians
                return a - math.pi / 2.0, a + math.pi / 2.0
            case ShapeKind.ARC:
                return self.start_angle, self.end_angle
        raise ValueError(f"Unknown shape kind: {self.kind}")

    def polyline(self, resolution: int) -> list[Point]:
        """
        Sample the outline. ``resolution`` is the number of segments of a full turn;
        partial arcs get a proportional share (rounded up).
        """
        if resolution <= 0:
            raise ValueError("Resolution must be a positive number of segments.")

        start, end = self._angles()
        sweep = end - start
        steps = max(1, math.ceil(sweep / (2.0 * math.pi) * resolution))

        theta = start + np.arange(steps + 1) * (sweep / steps)
        xs = self.center.x.value + self.radius.value * np.cos(theta)
        ys = self.center.y.value + self.radius.value * np.sin(theta)
        return [Point.from_xy(x, y) for x, y in zip(xs, ys)]

    def lines(self, resolution: int) -> list[Line[Point]]:
        return Polyline.from_points(self.polyline(resolution), self.stroke).lines()
