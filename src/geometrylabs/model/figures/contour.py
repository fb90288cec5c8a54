"""
Ferguson (cubic Hermite) contour
================================
Each knot carries a control point on the curve and a free "tangent point";
the Hermite tangent at the knot is ``tangent - control``. A segment between
knots P0 (tangent T0) and P1 (tangent T1) is::

    C(t) = h1 P0 + h2 P1 + h3 T0 + h4 T1,   t in [0, 1]

    h1 = 2t^3 - 3t^2 + 1     h2 = -2t^3 + 3t^2
    h3 = t^3 - 2t^2 + t      h4 = t^3 - t^2
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from geometrylabs.model.geometry_primitives import (
    BLACK,
    DARK_GRAY,
    DARK_GREEN,
    GREEN,
    RED,
    Line,
    MarkerStyle,
    Point,
    Stroke,
)

CONTOUR_STROKE = Stroke(2.0, BLACK)
SKELETON_STROKE = Stroke(1.6, DARK_GRAY)
CONTROL_TO_TANGENT_STROKE = Stroke(1.0, DARK_GREEN)
CONTROL_STYLE = MarkerStyle(radius=5.0, fill=RED, stroke=Stroke(0.5, BLACK), shape="circle")
TANGENT_STYLE = MarkerStyle(radius=5.0, fill=GREEN, stroke=Stroke(0.5, BLACK), shape="square")

# (control x, control y, tangent x, tangent y)
DEFAULT_KNOTS: list[tuple[float, float, float, float]] = [
    (1.02011, -8.9539, -2.9082, -8.45039),
    (-2.57812, -4.25937, -2.0705, -3.69433),
    (-11.21499940368627, -2.9941134058440477, -14.831832156238951, -0.80444295212432),
    (-14.228291375486565, -0.12198798368550326, -12.328674990838119, 2.2451162890802476),
    (-9.97698281234206, 2.8346457797572246, -5.8401819112369475, 3.990045716729621),
    (-6.3958775171549185, 3.8785035308882505, -4.434602310064234, 3.317793015151888),
    (-7.112860463766285, 10.035839898050087, -2.7874835520080725, 8.572557808866835),
    (-2.676282745918255, 4.789741734933403, -2.602211030698747, 3.0901043114669156),
    (3.556262044747978, 10.101223588434513, 6.625739419182469, 11.14758134548919),
    (5.390144612009004, 9.154267148166994, 0.4290323743080803, 5.386406090061552),
    (1.8854850913662917, 2.5035405438065554, 1.219927374118533, -1.0327243857573374),
    (3.8334775576725946, 1.6024243115932943, 4.076671268023657, 0.4524572075772364),
    (7.571347256075643, 6.0936956959692425, 10.485816861775529, 6.671258930993505),
    (8.716791539342216, 5.042138394495609, 6.2405913030773075, 3.6880759019755005),
    (7.572503423298151, 1.082574552103942, 8.65645263032965, -1.3779622250390882),
    (9.465559525994093, 0.6877470235008322, 10.44226160081697, 0.7300056323602206),
    (14.759256269148503, 8.500284622434885, 15.065184833168402, 12.074115639660603),
    (15.483009096548447, 8.653382532751975, 16.275236938110325, 3.6458556649725584),
    (13.52670352093569, 0.9832184338498043, 7.658246820047673, -5.471083938872315),
    (11.624266957917081, -3.525219347892877, 10.145560495887011, -7.826989464818565),
    (13.241039622993377, -6.78097926523506, 17.0872924578732, -11.06824656573134),
    (15.635647915902004, -7.604476379990596, 16.253620505580958, -9.944169360259641),
    (15.004187980209167, -8.61564340053936, 13.267700209337248, -8.637344281072494),
    (11.498449118768706, -7.209828107048276, 10.118710543558842, -5.442599841625735),
    (8.757031249999997, -3.5929687500000007, 7.332031250000002, -0.7474609375000006),
    (6.344335937500004, -3.4855468750000003, 4.606249999999999, -3.50703125),
    (6.268164062499997, -5.420898437499998, 3.3839843750000016, -6.825781250000002),
    (3.815820312500003, -3.939648437499996, -3.3201171875000006, -1.1154296875000018),
    (0.9818359374999983, -3.939453124999999, -0.24082031250000108, -3.5933593749999986),
    (2.1382812499999995, -6.560546874999997, 2.5269531249999964, -7.505468749999999),
    (1.9167968749999984, -8.800585937500001, 0.03710937500000225, -9.857421874999996),
]


@dataclass
class Knot:
    control: Point
    tangent: Point

    @classmethod
    def from_xy(cls, cx: float, cy: float, tx: float, ty: float) -> Knot:
        return cls(Point.from_xy(cx, cy), Point.from_xy(tx, ty))

    def tangent_vector(self) -> np.ndarray:
        return np.array([
            self.tangent.x.value - self.control.x.value,
            self.tangent.y.value - self.control.y.value,
        ])

    def control_array(self) -> np.ndarray:
        return np.array([self.control.x.value, self.control.y.value])


def default_knots() -> list[Knot]:
    return [Knot.from_xy(*row) for row in DEFAULT_KNOTS]


def hermite_basis(t: np.ndarray) -> np.ndarray:
    """(N, 4) matrix of ``h1..h4`` evaluated at ``t``."""
    t2 = t * t
    t3 = t2 * t
    return np.column_stack((
        2.0 * t3 - 3.0 * t2 + 1.0,
        -2.0 * t3 + 3.0 * t2,
        t3 - 2.0 * t2 + t,
        t3 - t2,
    ))


@dataclass
class Skeleton:
    lines: list[Line[Point]]
    controls: list[Point]
    tangents: list[Point]


@dataclass
class FergusonCurve:
    knots: list[Knot] = field(default_factory=default_knots)
    is_closed: bool = True
    step: float = 0.01
    stroke: Stroke = CONTOUR_STROKE

    def _parameters(self) -> np.ndarray:
        if self.step <= 0.0:
            raise ValueError("Curve step must be positive.")
        count = math.ceil(1.0 / self.step)
        return np.minimum(np.arange(count + 1) * self.step, 1.0)

    def pairs(self) -> list[tuple[Knot, Knot]]:
        pairs = list(zip(self.knots[:-1], self.knots[1:]))
        if self.is_closed and len(self.knots) > 2:
            pairs.append((self.knots[-1], self.knots[0]))
        return pairs

    def segment_points(self, start: Knot, end: Knot) -> np.ndarray:
        """(N, 2) samples of one Hermite segment, both ends included."""
        geometry = np.vstack((
            start.control_array(),
            end.control_array(),
            start.tangent_vector(),
            end.tangent_vector(),
        ))
        return hermite_basis(self._parameters()) @ geometry

    def contour(self) -> list[Line[Point]]:
        lines: list[Line[Point]] = []
        for start, end in self.pairs():
            pts = [Point.from_xy(x, y) for x, y in self.segment_points(start, end)]
            lines.extend(Line(a, b, self.stroke) for a, b in zip(pts[:-1], pts[1:]))
        return lines

    def skeleton(self) -> Skeleton:
        lines = [
            Line(a.control, b.control, SKELETON_STROKE)
            for a, b in zip(self.knots[:-1], self.knots[1:])
        ]
        lines.extend(Line(k.control, k.tangent, CONTROL_TO_TANGENT_STROKE) for k in self.knots)
        return Skeleton(
            lines=lines,
            controls=[k.control for k in self.knots],
            tangents=[k.tangent for k in self.knots],
        )


@dataclass
class Contour:
    curve: FergusonCurve = field(default_factory=FergusonCurve)
    is_skeleton_mode_enabled: bool = False

    def lines(self) -> list[Line[Point]]:
        return self.curve.contour()

    def skeleton(self) -> Skeleton:
        if not self.is_skeleton_mode_enabled:
            return Skeleton([], [], [])
        return self.curve.skeleton()
