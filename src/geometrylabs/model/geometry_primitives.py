"""
Geometric Primitives for the model and device spaces.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Callable, Generic, Iterable, Iterator, Optional, Protocol, TypeVar, Union, TYPE_CHECKING

import numpy as np

from geometrylabs.config import EPSILON
from geometrylabs.model.units import DevicePixel, Distance

if TYPE_CHECKING:
    import numpy.typing as npt
    from geometrylabs.model.geometry_utils import Angle
    from geometrylabs.model.projections import TwoPointPerspective


# -------------------------------------------------------------------------------
# Styling
# -------------------------------------------------------------------------------

@dataclass(frozen=True)
class Color:
    """RGBA color, channels in 0..255."""
    r: int
    g: int
    b: int
    a: int = 255

    @property
    def is_transparent(self) -> bool:
        return self.a == 0

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}{self.a:02X}"


TRANSPARENT = Color(0, 0, 0, 0)
BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
GRAY = Color(160, 160, 160)
DARK_GRAY = Color(96, 96, 96)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
DARK_GREEN = Color(0, 100, 0)
BLUE = Color(0, 0, 255)
YELLOW = Color(255, 255, 0)
ORANGE = Color(255, 165, 0)
PURPLE = Color(128, 0, 128)
PINK = Color(255, 105, 180)
BROWN = Color(165, 42, 42)


@dataclass(frozen=True)
class Stroke:
    """Line style. The default stroke is invisible ("transparent")."""
    width: float = 0.0
    color: Color = TRANSPARENT


@dataclass(frozen=True)
class MarkerStyle:
    radius: float = 5.0
    fill: Color = BLACK
    stroke: Stroke = Stroke(0.5, BLACK)
    shape: str = "circle"  # "circle" | "square"


# -------------------------------------------------------------------------------
# Model space (Distance)
# -------------------------------------------------------------------------------

@dataclass(frozen=True)
class Vector:
    """
    A direction/offset in model space. Unlike a Point it has no origin, so it
    must never be passed through origin-dependent conversions.
    """
    x: Distance = Distance(0.0)
    y: Distance = Distance(0.0)

    @classmethod
    def from_xy(cls, x: float, y: float) -> Vector:
        return cls(Distance(x), Distance(y))

    def __add__(self, other: Vector) -> Vector:
        if isinstance(other, Vector):
            return Vector(self.x + other.x, self.y + other.y)
        return NotImplemented

    def __sub__(self, other: Vector) -> Vector:
        if isinstance(other, Vector):
            return Vector(self.x - other.x, self.y - other.y)
        return NotImplemented

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vector:
        return self.__mul__(scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x.value, self.y.value)

    def normalized(self) -> Optional[Vector]:
        """Unit vector, or None for a (near) zero vector."""
        mag = self.magnitude
        if mag < EPSILON:
            return None
        return Vector(self.x / mag, self.y / mag)

    def perpendicular(self) -> Vector:
        """The vector rotated by +90 degrees (left normal)."""
        return Vector(-self.y, self.x)

    def cross(self, other: Vector) -> float:
        return self.x.value * other.y.value - self.y.value * other.x.value


@dataclass(frozen=True)
class Point:
    """An absolute position in model space."""
    x: Distance = Distance(0.0)
    y: Distance = Distance(0.0)

    @classmethod
    def from_xy(cls, x: float, y: float) -> Point:
        return cls(Distance(x), Distance(y))

    @classmethod
    def zero(cls) -> Point:
        return cls()

    def __add__(self, other: Vector) -> Point:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y)
        raise TypeError("Can only add a Vector to a Point.")

    def __sub__(self, other: Union[Vector, Point]) -> Union[Vector, Point]:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        # Point - Vector = Point (Inverse translation)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y)
        raise TypeError("Can only subtract a Vector or Point from a Point.")

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x.value - other.x.value, self.y.value - other.y.value)

    def to_homogeneous(self) -> npt.NDArray[np.float64]:
        """Row vector [x, y, 1] for the ``[x y 1] . M`` convention."""
        return np.array([self.x.value, self.y.value, 1.0])

    @classmethod
    def from_homogeneous(cls, row: npt.NDArray[np.float64]) -> Point:
        return cls(Distance(row[0]), Distance(row[1]))

    def scale(self, factor: float) -> Point:
        return Point(self.x * factor, self.y * factor)

    def rotate(self, angle: Angle, pivot: Point) -> Point:
        """Rotate counter-clockwise about ``pivot``."""
        from geometrylabs.model.geometry_utils import rotation_matrix

        return Point.from_homogeneous(self.to_homogeneous() @ rotation_matrix(angle, pivot))

    def midpoint(self, other: Point) -> Point:
        return Point((self.x + other.x) / 2.0, (self.y + other.y) / 2.0)


@dataclass(frozen=True)
class Point3D:
    """An absolute position in 3D model space."""
    x: Distance = Distance(0.0)
    y: Distance = Distance(0.0)
    z: Distance = Distance(0.0)

    @classmethod
    def from_xyz(cls, x: float, y: float, z: float) -> Point3D:
        return cls(Distance(x), Distance(y), Distance(z))

    @classmethod
    def zero(cls) -> Point3D:
        return cls()

    def to_homogeneous(self) -> npt.NDArray[np.float64]:
        return np.array([self.x.value, self.y.value, self.z.value, 1.0])

    @classmethod
    def from_homogeneous(cls, row: npt.NDArray[np.float64]) -> Point3D:
        return cls(Distance(row[0]), Distance(row[1]), Distance(row[2]))

    def to_2d(self, projection: TwoPointPerspective) -> Point:
        return projection.project(self)


# -------------------------------------------------------------------------------
# Device space (DevicePixel)
# -------------------------------------------------------------------------------

@dataclass(frozen=True)
class ScreenVector:
    """
    A screen-space delta (drag, scroll). Independent of the current zero point
    and pan offset.
    """
    x: DevicePixel = DevicePixel(0.0)
    y: DevicePixel = DevicePixel(0.0)

    @classmethod
    def from_xy(cls, x: float, y: float) -> ScreenVector:
        return cls(DevicePixel(x), DevicePixel(y))

    def __add__(self, other: ScreenVector) -> ScreenVector:
        if isinstance(other, ScreenVector):
            return ScreenVector(self.x + other.x, self.y + other.y)
        return NotImplemented

    def __mul__(self, scalar: float) -> ScreenVector:
        return ScreenVector(self.x * scalar, self.y * scalar)


@dataclass(frozen=True)
class ScreenPoint:
    """A position in device pixels. Produced by conversion from a Point via a Viewport."""
    x: DevicePixel = DevicePixel(0.0)
    y: DevicePixel = DevicePixel(0.0)

    @classmethod
    def from_xy(cls, x: float, y: float) -> ScreenPoint:
        return cls(DevicePixel(x), DevicePixel(y))

    def __add__(self, other: ScreenVector) -> ScreenPoint:
        if isinstance(other, ScreenVector):
            return ScreenPoint(self.x + other.x, self.y + other.y)
        raise TypeError("Can only add a ScreenVector to a ScreenPoint.")

    def __sub__(self, other: ScreenPoint) -> ScreenVector:
        if isinstance(other, ScreenPoint):
            return ScreenVector(self.x - other.x, self.y - other.y)
        raise TypeError("Can only subtract a ScreenPoint from a ScreenPoint.")

    def to_tuple(self) -> tuple[float, float]:
        return self.x.value, self.y.value


@dataclass(frozen=True)
class Marker:
    """A positioned point marker ready for rasterization."""
    center: ScreenPoint
    style: MarkerStyle = MarkerStyle()


# -------------------------------------------------------------------------------
# Lines
# -------------------------------------------------------------------------------

class Pointable(Protocol):
    """Capability shared by Point and ScreenPoint: two coordinates convertible to float."""
    @property
    def x(self) -> Union[Distance, DevicePixel]: ...

    @property
    def y(self) -> Union[Distance, DevicePixel]: ...


P = TypeVar("P", Point, ScreenPoint)
Q = TypeVar("Q", Point, ScreenPoint)


@dataclass(frozen=True)
class Line(Generic[P]):
    """A straight segment between two points of the same kind."""
    start: P
    end: P
    stroke: Stroke = field(default_factory=Stroke)

    @classmethod
    def with_transparent(cls, start: P, end: P) -> Line[P]:
        return cls(start, end, Stroke())

    @property
    def is_transparent(self) -> bool:
        return self.stroke == Stroke()

    @property
    def length(self) -> float:
        return math.hypot(
            float(self.end.x) - float(self.start.x),
            float(self.end.y) - float(self.start.y),
        )

    def map(self, fn: Callable[[P], Q]) -> Line[Q]:
        """Apply a point function to both ends, keeping the stroke."""
        return Line(fn(self.start), fn(self.end), self.stroke)

    def with_stroke(self, stroke: Stroke) -> Line[P]:
        return replace(self, stroke=stroke)

    def points(self) -> Iterator[P]:
        yield self.start
        yield self.end


@dataclass(frozen=True)
class Polyline(Generic[P]):
    """An ordered chain of same-kind points sharing one stroke."""
    points: tuple[P, ...]
    stroke: Stroke = field(default_factory=Stroke)
    closed: bool = False

    @classmethod
    def from_points(cls, points: Iterable[P], stroke: Stroke = Stroke(), closed: bool = False) -> Polyline[P]:
        return cls(tuple(points), stroke, closed)

    def lines(self) -> list[Line[P]]:
        pts = list(self.points)
        if self.closed and len(pts) > 2:
            pts.append(pts[0])
        return [Line(a, b, self.stroke) for a, b in zip(pts[:-1], pts[1:])]


@dataclass(frozen=True)
class Line3D:
    """A straight segment in 3D model space."""
    start: Point3D
    end: Point3D
    stroke: Stroke = field(default_factory=Stroke)

    @classmethod
    def with_transparent(cls, start: Point3D, end: Point3D) -> Line3D:
        return cls(start, end, Stroke())

    @property
    def is_transparent(self) -> bool:
        return self.stroke == Stroke()

    def to_2d(self, projection: TwoPointPerspective) -> Line[Point]:
        return Line(projection.project(self.start), projection.project(self.end), self.stroke)


# -------------------------------------------------------------------------------
# Batch helpers (numpy)
# -------------------------------------------------------------------------------

def lines_to_array(lines: list[Line[Point]]) -> npt.NDArray[np.float64]:
    """Pack line endpoints into an (N*2, 3) array of homogeneous rows."""
    arr = np.ones((len(lines) * 2, 3), dtype=np.float64)
    for i, line in enumerate(lines):
        arr[2 * i, 0] = line.start.x.value
        arr[2 * i, 1] = line.start.y.value
        arr[2 * i + 1, 0] = line.end.x.value
        arr[2 * i + 1, 1] = line.end.y.value
    return arr


def array_to_lines(arr: npt.NDArray[np.float64], template: list[Line[Point]]) -> list[Line[Point]]:
    """Inverse of `lines_to_array`, taking strokes from ``template``."""
    return [
        Line(
            Point(Distance(arr[2 * i, 0]), Distance(arr[2 * i, 1])),
            Point(Distance(arr[2 * i + 1, 0]), Distance(arr[2 * i + 1, 1])),
            line.stroke,
        )
        for i, line in enumerate(template)
    ]


def lines3d_to_array(lines: list[Line3D]) -> npt.NDArray[np.float64]:
    """Pack 3D line endpoints into an (N*2, 4) array of homogeneous rows."""
    arr = np.ones((len(lines) * 2, 4), dtype=np.float64)
    for i, line in enumerate(lines):
        arr[2 * i, :3] = (line.start.x.value, line.start.y.value, line.start.z.value)
        arr[2 * i + 1, :3] = (line.end.x.value, line.end.y.value, line.end.z.value)
    return arr


def array_to_lines3d(arr: npt.NDArray[np.float64], template: list[Line3D]) -> list[Line3D]:
    return [
        Line3D(
            Point3D.from_homogeneous(arr[2 * i]),
            Point3D.from_homogeneous(arr[2 * i + 1]),
            line.stroke,
        )
        for i, line in enumerate(template)
    ]
