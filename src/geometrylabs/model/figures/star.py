from __future__ import annotations

import math
from dataclasses import dataclass

from geometrylabs.model.geometry_primitives import BLACK, Line3D, Point3D, Stroke
from geometrylabs.model.units import Distance

STAR_STROKE = Stroke(5.0, BLACK)


@dataclass
class Star3D:
    """A five-pointed star in the XY plane extruded along Z by ``thickness``."""
    radius: Distance = Distance(5.0)
    thickness: Distance = Distance(2.5)
    stroke: Stroke = STAR_STROKE

    @staticmethod
    def _point(angle: float, radius: float, z: float) -> Point3D:
        return Point3D.from_xyz(radius * math.cos(angle), radius * math.sin(angle), z)

    def lines(self) -> list[Line3D]:
        radius = self.radius.value
        inner_radius = radius / 2.0
        top = self.thickness.value

        bottom_loop: list[Point3D] = []
        top_loop: list[Point3D] = []
        lines: list[Line3D] = []

        for k in range(5):
            angle = k * 2.0 * math.pi / 5.0 + math.pi / 2.0
            offset_angle = angle + math.pi / 5.0

            outer = self._point(angle, radius, 0.0)
            inner = self._point(offset_angle, inner_radius, 0.0)
            upper_outer = self._point(angle, radius, top)
            upper_inner = self._point(offset_angle, inner_radius, top)

            bottom_loop += [outer, inner]
            top_loop += [upper_outer, upper_inner]

            # vertical edges
            lines.append(Line3D(outer, upper_outer, self.stroke))
            lines.append(Line3D(inner, upper_inner, self.stroke))

        for loop in (bottom_loop, top_loop):
            closed = loop + [loop[0]]
            lines.extend(Line3D(a, b, self.stroke) for a, b in zip(closed[:-1], closed[1:]))

        return lines

    def pivot_point(self) -> Point3D:
        return Point3D.from_xyz(0.0, 0.0, self.thickness.value / 2.0)
