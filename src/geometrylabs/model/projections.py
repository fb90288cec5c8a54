"""
Projection of 3D model space onto the 2D model plane.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from geometrylabs.config import EPSILON
from geometrylabs.model.geometry_primitives import Line, Line3D, Point, Point3D, lines3d_to_array
from geometrylabs.model.geometry_utils import Angle
from geometrylabs.model.units import Distance


@dataclass
class TwoPointPerspective:
    """
    Turn the scene about the Y axis by ``angle`` degrees and flatten it onto
    the XY plane.

    The perspective factor ``-1 / distance`` only feeds the depth column, so
    the plane coordinates are ``x' = cos(a) x - sin(a) z`` and ``y' = y``.
    """
    angle: float = 45.0
    distance: Distance = Distance(50.0)

    def matrix(self) -> np.ndarray:
        radians = Angle.from_degrees(self.angle).radians
        c, s = math.cos(radians), math.sin(radians)

        rotation = np.array([
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])
        perspective = np.identity(4)
        perspective[2, 2] = 0.0
        d = self.distance.value
        if abs(d) > EPSILON:
            perspective[3, 2] = -1.0 / d
        return rotation @ perspective

    def project_array(self, arr: np.ndarray) -> np.ndarray:
        """(N, 4) homogeneous rows -> (N, 2) plane coordinates."""
        return (arr @ self.matrix())[:, :2]

    def project(self, point: Point3D) -> Point:
        x, y = self.project_array(point.to_homogeneous()[None, :])[0]
        return Point(Distance(x), Distance(y))

    def project_lines(self, lines: list[Line3D]) -> list[Line[Point]]:
        if not lines:
            return []
        xy = self.project_array(lines3d_to_array(lines))
        return [
            Line(
                Point(Distance(xy[2 * i, 0]), Distance(xy[2 * i, 1])),
                Point(Distance(xy[2 * i + 1, 0]), Distance(xy[2 * i + 1, 1])),
                line.stroke,
            )
            for i, line in enumerate(lines)
        ]
