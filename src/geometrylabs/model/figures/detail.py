"""
Mechanical part outline: a stepped profile of eleven straight sides closed by
an outer arc, with a round hole at ``m``.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from geometrylabs.config import EPSILON
from geometrylabs.model.geometry_primitives import BLACK, Line, Point, Stroke
from geometrylabs.model.geometry_utils import CircularShape, ShapeKind
from geometrylabs.model.units import Distance

logger = logging.getLogger(__name__)

DETAIL_BLACK = Stroke(3.0, BLACK)
CIRCLE_RESOLUTION = 128

DEFAULT_POINTS: dict[str, tuple[float, float]] = {
    "a": (30.0, 30.0),
    "b": (50.0, 30.0),
    "c": (50.0, 10.0),
    "d": (70.0, 10.0),
    "e": (70.0, 34.0),
    "f": (57.0, 34.0),
    "g": (57.0, 66.0),
    "h": (70.0, 66.0),
    "i": (70.0, 116.0),
    "j": (50.0, 116.0),
    "k": (50.0, 70.0),
    "l": (30.0, 70.0),
    "m": (30.0, 50.0),
}


class SegmentId(enum.Enum):
    AB = "ab"
    BC = "bc"
    CD = "cd"
    DE = "de"
    EF = "ef"
    FG = "fg"
    GH = "gh"
    HI = "hi"
    IJ = "ij"
    JK = "jk"
    KL = "kl"

    @property
    def endpoints(self) -> tuple[str, str]:
        return self.value[0], self.value[1]

    def neighbours(self) -> list[SegmentId]:
        order = list(SegmentId)
        index = order.index(self)
        return [order[i] for i in (index - 1, index + 1) if 0 <= i < len(order)]


def _default_points() -> dict[str, Point]:
    return {name: Point.from_xy(x, y) for name, (x, y) in DEFAULT_POINTS.items()}


def _default_lengths() -> dict[SegmentId, Distance]:
    points = _default_points()
    return {
        segment: Distance(points[segment.endpoints[0]].distance_to(points[segment.endpoints[1]]))
        for segment in SegmentId
    }


def resize_line(start: Point, end: Point, length: Distance) -> tuple[Point, Point]:
    """
    Stretch or shrink a segment to ``length`` keeping its midpoint and
    direction. Degenerate segments are returned unchanged.
    """
    direction = (end - start).normalized()
    if direction is None or start.distance_to(end) < EPSILON:
        return start, end
    half = direction * (length.value / 2.0)
    mid = start.midpoint(end)
    return mid - half, mid + half


@dataclass
class Detail:
    points: dict[str, Point] = field(default_factory=_default_points)
    lengths: dict[SegmentId, Distance] = field(default_factory=_default_lengths)
    inner_radius: Distance = Distance(11.0)
    outer_radius: Distance = Distance(20.0)
    stroke: Stroke = DETAIL_BLACK

    def outline(self) -> list[Point]:
        return [self.points[name] for name in "abcdefghijkl"]

    def lines(self) -> list[Line[Point]]:
        outline = self.outline()
        lines = [Line(a, b, self.stroke) for a, b in zip(outline[:-1], outline[1:])]

        outer = CircularShape.from_points_and_radius(self.points["l"], self.points["a"], self.outer_radius, self.stroke)
        if outer is not None:
            lines.extend(outer.lines(CIRCLE_RESOLUTION))

        inner = CircularShape(center=self.points["m"], radius=self.inner_radius, kind=ShapeKind.FULL, stroke=self.stroke)
        lines.extend(inner.lines(CIRCLE_RESOLUTION))
        return lines

    def set_length(self, segment: SegmentId, length: float) -> None:
        self.lengths[segment] = Distance(length)
        self.update_chain(segment)

    def update_chain(self, segment: SegmentId) -> None:
        """Apply the stored length of ``segment`` and refresh its neighbours' lengths."""
        first, second = segment.endpoints
        self.points[first], self.points[second] = resize_line(
            self.points[first], self.points[second], self.lengths[segment]
        )
        logger.debug(f"Side {segment.value} resized to {self.lengths[segment]}")

        for neighbour in segment.neighbours():
            a, b = neighbour.endpoints
            self.lengths[neighbour] = Distance(self.points[a].distance_to(self.points[b]))
