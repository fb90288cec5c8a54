"""
Viewport Mapper
===============
The only bridge between model space (``Distance``) and device space
(``DevicePixel``).

The viewport holds three parts:

* ``config``   - what the user is allowed to do (pan, zoom),
* ``geometry`` - authoritative placement (anchoring, zoom, pan offset),
* ``state``    - values derived from ``geometry`` and the last reported device
  rectangle. It is recomputed by ``update_state`` every frame and never edited
  directly.

Conversion (model Y-up, device Y-down)::

    x_px = zero.x + x * ppc + offset.x
    y_px = zero.y - y * ppc + offset.y
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Optional

from geometrylabs.config import (
    ANCHOR_OFFSET_PX,
    DEFAULT_PX_PER_CM,
    DRAGGING_COEFFICIENT,
    PX_PER_CM_RANGE,
    SCROLL_COEFFICIENT,
)
from geometrylabs.model.geometry_primitives import (
    Line,
    Marker,
    MarkerStyle,
    Point,
    ScreenPoint,
    ScreenVector,
    Vector,
)
from geometrylabs.model.units import DevicePixel, Distance

logger = logging.getLogger(__name__)


def clamp_pixels_per_centimeter(value: float) -> float:
    low, high = PX_PER_CM_RANGE
    return min(max(value, low), high)


@dataclass(frozen=True)
class DeviceRect:
    """Device rectangle reported by the UI (Y grows downwards)."""
    min_x: DevicePixel
    min_y: DevicePixel
    max_x: DevicePixel
    max_y: DevicePixel

    @classmethod
    def from_corners(cls, x0: float, y0: float, x1: float, y1: float) -> DeviceRect:
        return cls(
            DevicePixel(min(x0, x1)),
            DevicePixel(min(y0, y1)),
            DevicePixel(max(x0, x1)),
            DevicePixel(max(y0, y1)),
        )

    @classmethod
    def from_size(cls, width: float, height: float) -> DeviceRect:
        return cls.from_corners(0.0, 0.0, width, height)

    @property
    def center(self) -> ScreenPoint:
        return ScreenPoint((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    @property
    def width(self) -> DevicePixel:
        return self.max_x - self.min_x

    @property
    def height(self) -> DevicePixel:
        return self.max_y - self.min_y


class AnchorKind(enum.Enum):
    CENTER = "center"
    BOTTOM_LEFT = "bottom_left"
    TOP_LEFT = "top_left"
    BOTTOM_RIGHT = "bottom_right"
    TOP_RIGHT = "top_right"


@dataclass(frozen=True)
class Anchoring:
    """Where the model origin lands inside the device rectangle."""
    kind: AnchorKind = AnchorKind.CENTER
    offset: DevicePixel = DevicePixel(ANCHOR_OFFSET_PX)

    @classmethod
    def center(cls) -> Anchoring:
        return cls(AnchorKind.CENTER)

    @classmethod
    def bottom_left(cls, offset: float = ANCHOR_OFFSET_PX) -> Anchoring:
        return cls(AnchorKind.BOTTOM_LEFT, DevicePixel(offset))

    @classmethod
    def top_left(cls, offset: float = ANCHOR_OFFSET_PX) -> Anchoring:
        return cls(AnchorKind.TOP_LEFT, DevicePixel(offset))

    @classmethod
    def bottom_right(cls, offset: float = ANCHOR_OFFSET_PX) -> Anchoring:
        return cls(AnchorKind.BOTTOM_RIGHT, DevicePixel(offset))

    @classmethod
    def top_right(cls, offset: float = ANCHOR_OFFSET_PX) -> Anchoring:
        return cls(AnchorKind.TOP_RIGHT, DevicePixel(offset))

    def resolve(self, rect: DeviceRect) -> ScreenPoint:
        """Zero point for ``rect``. Independent of zoom and pan."""
        off = self.offset
        match self.kind:
            case AnchorKind.CENTER:
                return rect.center
            case AnchorKind.BOTTOM_LEFT:
                return ScreenPoint(rect.min_x + off, rect.max_y - off)
            case AnchorKind.TOP_LEFT:
                return ScreenPoint(rect.min_x + off, rect.min_y + off)
            case AnchorKind.BOTTOM_RIGHT:
                return ScreenPoint(rect.max_x - off, rect.max_y - off)
            case AnchorKind.TOP_RIGHT:
                return ScreenPoint(rect.max_x - off, rect.min_y + off)
        raise ValueError(f"Unknown anchoring: {self.kind}")


@dataclass
class ViewportConfig:
    is_pannable: bool = True
    is_zoomable: bool = True


@dataclass
class ViewportGeometry:
    anchoring: Anchoring = field(default_factory=Anchoring)
    pixels_per_centimeter: float = DEFAULT_PX_PER_CM
    offset: ScreenVector = field(default_factory=ScreenVector)

    def __post_init__(self) -> None:
        self.pixels_per_centimeter = clamp_pixels_per_centimeter(self.pixels_per_centimeter)


@dataclass
class ViewportState:
    bounds: Optional[DeviceRect] = None
    zero_point: ScreenPoint = field(default_factory=ScreenPoint)


@dataclass
class Viewport:
    config: ViewportConfig = field(default_factory=ViewportConfig)
    geometry: ViewportGeometry = field(default_factory=ViewportGeometry)
    state: ViewportState = field(default_factory=ViewportState)

    @classmethod
    def with_anchoring(cls, anchoring: Anchoring, **geometry) -> Viewport:
        return cls(geometry=ViewportGeometry(anchoring=anchoring, **geometry))

    # ---------------------------------------------------------------------------
    # Frame input
    # ---------------------------------------------------------------------------

    def update_state(self, rect: DeviceRect) -> None:
        """Recompute bounds and zero point. Must run before any conversion in a frame."""
        self.state.bounds = rect
        self.state.zero_point = self.geometry.anchoring.resolve(rect)

    def set_anchoring(self, anchoring: Anchoring) -> None:
        self.geometry.anchoring = anchoring
        if self.state.bounds is not None:
            self.update_state(self.state.bounds)

    def handle_pan(self, delta: ScreenVector) -> bool:
        """Accumulate a drag delta. Returns True when the offset changed."""
        if not self.config.is_pannable:
            return False
        if delta.x.value == 0.0 and delta.y.value == 0.0:
            return False
        self.geometry.offset = self.geometry.offset + delta * DRAGGING_COEFFICIENT
        return True

    def handle_scroll(self, delta: float) -> bool:
        """Zoom by a scroll delta. Returns True when the zoom changed."""
        if not self.config.is_zoomable:
            return False
        old = self.geometry.pixels_per_centimeter
        new = clamp_pixels_per_centimeter(old + delta * SCROLL_COEFFICIENT)
        if new == old:
            return False
        self.geometry.pixels_per_centimeter = new
        logger.debug(f"Zoom changed: {old:.2f} -> {new:.2f} px/cm")
        return True

    def reset_pixels_per_centimeter(self) -> None:
        self.geometry.pixels_per_centimeter = DEFAULT_PX_PER_CM

    def reset_offset(self) -> None:
        self.geometry.offset = ScreenVector()

    # ---------------------------------------------------------------------------
    # Conversion
    # ---------------------------------------------------------------------------

    @property
    def ppc(self) -> float:
        return self.geometry.pixels_per_centimeter

    def to_pixels(self, point: Point) -> ScreenPoint:
        zero = self.state.zero_point
        off = self.geometry.offset
        return ScreenPoint(
            zero.x + DevicePixel(point.x.value * self.ppc) + off.x,
            zero.y - DevicePixel(point.y.value * self.ppc) + off.y,
        )

    def to_distance(self, point: ScreenPoint) -> Point:
        zero = self.state.zero_point
        off = self.geometry.offset
        return Point(
            Distance((point.x - zero.x - off.x).value / self.ppc),
            Distance((zero.y + off.y - point.y).value / self.ppc),
        )

    def vector_to_pixels(self, vector: Vector) -> ScreenVector:
        return ScreenVector(
            DevicePixel(vector.x.value * self.ppc),
            DevicePixel(-vector.y.value * self.ppc),
        )

    def vector_to_distance(self, vector: ScreenVector) -> Vector:
        return Vector(
            Distance(vector.x.value / self.ppc),
            Distance(-vector.y.value / self.ppc),
        )

    def length_to_pixels(self, length: Distance) -> DevicePixel:
        return DevicePixel(length.value * self.ppc)

    def length_to_distance(self, length: DevicePixel) -> Distance:
        return Distance(length.value / self.ppc)

    def line_to_pixels(self, line: Line[Point]) -> Line[ScreenPoint]:
        return line.map(self.to_pixels)

    def lines_to_pixels(self, lines: list[Line[Point]]) -> list[Line[ScreenPoint]]:
        return [line.map(self.to_pixels) for line in lines]

    def marker(self, point: Point, style: MarkerStyle = MarkerStyle()) -> Marker:
        return Marker(self.to_pixels(point), style)

    def visible_region(self) -> tuple[Point, Point]:
        """Model-space (min, max) corners of the last reported device rectangle."""
        rect = self.state.bounds
        if rect is None:
            zero = Point.zero()
            return zero, zero
        top_left = self.to_distance(ScreenPoint(rect.min_x, rect.min_y))
        bottom_right = self.to_distance(ScreenPoint(rect.max_x, rect.max_y))
        return (
            Point(top_left.x, bottom_right.y),
            Point(bottom_right.x, top_left.y),
        )
