from __future__ import annotations

import math
from dataclasses import dataclass, field

from geometrylabs.model.geometry_primitives import (
    BLUE,
    GRAY,
    GREEN,
    RED,
    Line,
    Line3D,
    Point,
    Point3D,
    Stroke,
)
from geometrylabs.model.units import Distance
from geometrylabs.model.viewport import Viewport

UNIT_LENGTH = 1.0
AXIS_RED = Stroke(2.0, RED)
AXIS_GREEN = Stroke(2.0, GREEN)
AXIS_BLUE = Stroke(2.0, BLUE)
GRID_GRAY = Stroke(0.8, GRAY)


@dataclass
class Grid2D:
    """
    Unit grid and the two main axes covering the visible part of the plane.

    With ``is_negative_enabled`` off only the first quadrant is drawn, which
    suits a viewport anchored at a corner.
    """
    is_enabled: bool = True
    is_negative_enabled: bool = True
    unit: float = UNIT_LENGTH

    axis_x_stroke: Stroke = AXIS_RED
    axis_y_stroke: Stroke = AXIS_GREEN
    grid_stroke: Stroke = GRID_GRAY

    def lines(self, viewport: Viewport) -> list[Line[Point]]:
        if not self.is_enabled:
            return []

        low, high = viewport.visible_region()
        min_x, max_x = low.x.value, high.x.value
        min_y, max_y = low.y.value, high.y.value
        if not self.is_negative_enabled:
            min_x = max(min_x, 0.0)
            min_y = max(min_y, 0.0)

        lines: list[Line[Point]] = []

        # vertical lines
        for i in range(math.ceil(min_x / self.unit), math.floor(max_x / self.unit) + 1):
            if i == 0:
                continue
            x = i * self.unit
            lines.append(Line(Point.from_xy(x, min_y), Point.from_xy(x, max_y), self.grid_stroke))

        # horizontal lines
        for i in range(math.ceil(min_y / self.unit), math.floor(max_y / self.unit) + 1):
            if i == 0:
                continue
            y = i * self.unit
            lines.append(Line(Point.from_xy(min_x, y), Point.from_xy(max_x, y), self.grid_stroke))

        # axes last so they are drawn on top
        lines.append(Line(Point.from_xy(min_x, 0.0), Point.from_xy(max_x, 0.0), self.axis_x_stroke))
        lines.append(Line(Point.from_xy(0.0, min_y), Point.from_xy(0.0, max_y), self.axis_y_stroke))
        return lines


@dataclass
class Grid3D:
    """Three unit axes from the origin (X red, Y green, Z blue)."""
    is_enabled: bool = True
    origin: Point3D = field(default_factory=Point3D)
    length: Distance = Distance(UNIT_LENGTH)

    def lines(self) -> list[Line3D]:
        if not self.is_enabled:
            return []
        o = self.origin
        return [
            Line3D(o, Point3D(o.x + self.length, o.y, o.z), AXIS_RED),
            Line3D(o, Point3D(o.x, o.y + self.length, o.z), AXIS_GREEN),
            Line3D(o, Point3D(o.x, o.y, o.z + self.length), AXIS_BLUE),
        ]
