"""
Revolved surface (cone) with an optional 2D texture wrapped onto it.

The surface is parametrized by the angular sweep ``u`` and the height sweep
``v``, both in [0, 1]::

    theta = 2 pi u,   r = radius_base (1 - v)
    P(u, v) = (r cos theta, height v, r sin theta)
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from geometrylabs.config import EPSILON
from geometrylabs.model.figures.contour import FergusonCurve
from geometrylabs.model.geometry_primitives import BLACK, PINK, Line, Line3D, Point, Point3D, Stroke
from geometrylabs.model.geometry_utils import Angle
from geometrylabs.model.units import Distance

SURFACE_STROKE = Stroke(2.0, BLACK)
TEXTURE_STROKE = Stroke(1.5, PINK)
SEAM_THRESHOLD = 0.8


def _default_texture_lines() -> list[Line[Point]]:
    return FergusonCurve().contour()


@dataclass
class Texture:
    """2D line art to wrap around the surface. Defaults to the contour drawing."""
    source: list[Line[Point]] = field(default_factory=_default_texture_lines)
    stroke: Stroke = TEXTURE_STROKE

    def lines(self) -> list[Line[Point]]:
        return [line.with_stroke(self.stroke) for line in self.source]


@dataclass
class Surface:
    height: Distance = Distance(10.0)
    radius_base: Distance = Distance(5.0)
    mesh: int = 20
    stroke: Stroke = SURFACE_STROKE

    is_texture_enabled: bool = False
    texture_scale_width: float = 0.3
    texture_scale_height: float = 0.5
    texture_offset_angle: float = 0.0
    texture_offset_height: float = 0.5
    texture_rotation_angle: float = 0.0

    def point_at(self, u: float, v: float) -> Point3D:
        theta = u * 2.0 * math.pi
        r = self.radius_base.value * (1.0 - v)
        return Point3D.from_xyz(r * math.cos(theta), self.height.value * v, r * math.sin(theta))

    def lines(self) -> list[Line3D]:
        """Ring lines at every height step plus lines joining each ring to the one below."""
        steps = self.mesh
        if steps <= 0:
            raise ValueError("Surface mesh must be a positive number of steps.")

        lines: list[Line3D] = []
        for i in range(steps + 1):
            v = i / steps
            for j in range(steps):
                u1 = j / steps
                u2 = ((j + 1) % steps) / steps
                p1 = self.point_at(u1, v)
                lines.append(Line3D(p1, self.point_at(u2, v), self.stroke))
                if i > 0:
                    lines.append(Line3D(self.point_at(u1, (i - 1) / steps), p1, self.stroke))
        return lines

    def pivot_point(self) -> Point3D:
        return Point3D.from_xyz(0.0, self.height.value / 2.0, 0.0)

    def uv_transform(self, uv: np.ndarray) -> np.ndarray:
        """Center, scale, rotate and shift (N, 2) raw texture coordinates."""
        local = (uv - 0.5) * np.array([self.texture_scale_width, self.texture_scale_height])
        rad = Angle.from_degrees(self.texture_rotation_angle).radians
        c, s = math.cos(rad), math.sin(rad)
        rotated = np.column_stack((
            local[:, 0] * c - local[:, 1] * s,
            local[:, 0] * s + local[:, 1] * c,
        ))
        return rotated + np.array([self.texture_offset_angle, self.texture_offset_height])

    def map_texture(self, texture_lines: list[Line[Point]]) -> list[Line3D]:
        """
        Wrap 2D lines onto the surface.

        The texture bounds are normalized to the unit square, transformed by the
        texture settings and evaluated with ``point_at``. A segment whose ends
        land on opposite sides of the seam (``|du| > 0.8``) becomes a
        transparent line at the origin.
        """
        if not texture_lines:
            return []

        xy = np.array([
            (float(p.x), float(p.y))
            for line in texture_lines
            for p in (line.start, line.end)
        ])
        low = xy.min(axis=0)
        size = np.maximum(np.abs(xy.max(axis=0) - low), EPSILON)
        uv = self.uv_transform((xy - low) / size)

        mapped: list[Line3D] = []
        for i, line in enumerate(texture_lines):
            (u1, v1), (u2, v2) = uv[2 * i], uv[2 * i + 1]
            if abs(u1 - u2) > SEAM_THRESHOLD:
                mapped.append(Line3D.with_transparent(Point3D.zero(), Point3D.zero()))
                continue
            mapped.append(Line3D(self.point_at(u1, v1), self.point_at(u2, v2), line.stroke))
        return mapped

    def handle_texture(self, texture: Texture) -> list[Line3D]:
        if not self.is_texture_enabled:
            return []
        return self.map_texture(texture.lines())
