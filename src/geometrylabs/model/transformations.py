"""
Transform Operators
===================
Two execution tiers:

* Committed forms (offset, rotation, point symmetry and the 3D variants) hold
  editable parameters. ``run()`` arms a form; the next ``handle(pipelines)``
  pushes one operation into every given pipeline and resets the form to its
  neutral values, so the edit is baked in exactly once.
* Live operators (affine, projective, scaling) are applied to a per-frame copy
  of the line batch every frame while enabled. They never touch stored
  geometry, so disabling one reverts the picture immediately.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import MISSING, dataclass, fields
from typing import Iterable, Optional, Union

import numpy as np

from geometrylabs.config import EPSILON
from geometrylabs.model.geometry_primitives import (
    BLACK,
    PURPLE,
    RED,
    Line,
    Marker,
    MarkerStyle,
    Point,
    Stroke,
    array_to_lines,
    lines_to_array,
)
from geometrylabs.model.geometry_utils import Angle
from geometrylabs.model.pipeline import (
    Offset3DOperation,
    OffsetOperation,
    Pipeline,
    Pipeline3D,
    PointSymmetryOperation,
    Rotation3DOperation,
    RotationOperation,
)
from geometrylabs.model.units import Distance
from geometrylabs.model.viewport import Viewport

logger = logging.getLogger(__name__)

ROTATION_PIVOT_STYLE = MarkerStyle(radius=5.0, fill=RED, stroke=Stroke(0.5, BLACK))
SYMMETRY_POINT_STYLE = MarkerStyle(radius=5.0, fill=PURPLE, stroke=Stroke(0.5, BLACK))


# -------------------------------------------------------------------------------
# Committed forms
# -------------------------------------------------------------------------------

@dataclass
class CommittedForm(ABC):
    """Base for forms that queue a one-shot operation on Apply."""
    is_enabled: bool = False

    def run(self) -> None:
        self.is_enabled = True

    def reset(self) -> None:
        """Restore every field to its neutral default without queueing anything."""
        for f in fields(self):
            if f.default is not MISSING:
                setattr(self, f.name, f.default)
            elif f.default_factory is not MISSING:
                setattr(self, f.name, f.default_factory())

    @abstractmethod
    def create_operation(self):
        pass

    def handle(self, pipelines: Iterable[Union[Pipeline, Pipeline3D]]) -> bool:
        """Queue the operation into every pipeline if armed. Returns True when queued."""
        if not self.is_enabled:
            return False
        for pipeline in pipelines:
            pipeline.add_operation(self.create_operation())
        self.reset()
        return True


@dataclass
class EuclideanOffset(CommittedForm):
    x: float = 0.0
    y: float = 0.0

    def create_operation(self) -> OffsetOperation:
        return OffsetOperation(Distance(self.x), Distance(self.y))


@dataclass
class EuclideanRotation(CommittedForm):
    x: float = 0.0
    y: float = 0.0
    angle: float = 0.0

    @property
    def pivot(self) -> Point:
        return Point.from_xy(self.x, self.y)

    def create_operation(self) -> RotationOperation:
        return RotationOperation(self.pivot, Angle.from_degrees(self.angle))

    def marker(self, viewport: Viewport) -> Optional[Marker]:
        """Pivot marker; hidden while the pivot sits at the origin."""
        if self.x == 0.0 and self.y == 0.0:
            return None
        return viewport.marker(self.pivot, ROTATION_PIVOT_STYLE)


@dataclass
class AffinePointSymmetry(CommittedForm):
    x: float = 0.0
    y: float = 0.0

    @property
    def point(self) -> Point:
        return Point.from_xy(self.x, self.y)

    def create_operation(self) -> PointSymmetryOperation:
        return PointSymmetryOperation(self.point)

    def marker(self, viewport: Viewport) -> Optional[Marker]:
        if self.x == 0.0 and self.y == 0.0:
            return None
        return viewport.marker(self.point, SYMMETRY_POINT_STYLE)


@dataclass
class EuclideanOffset3D(CommittedForm):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def create_operation(self) -> Offset3DOperation:
        return Offset3DOperation(Distance(self.x), Distance(self.y), Distance(self.z))


@dataclass
class EuclideanRotation3D(CommittedForm):
    angle_x: float = 0.0
    angle_y: float = 0.0
    angle_z: float = 0.0

    def create_operation(self) -> Rotation3DOperation:
        return Rotation3DOperation(
            Angle.from_degrees(self.angle_x),
            Angle.from_degrees(self.angle_y),
            Angle.from_degrees(self.angle_z),
        )


# -------------------------------------------------------------------------------
# Live operators
# -------------------------------------------------------------------------------

@dataclass
class LiveOperator(ABC):
    """Base for operators re-applied to a fresh copy of the batch every frame."""
    is_enabled: bool = False

    @abstractmethod
    def matrix(self) -> np.ndarray:
        pass

    def transform(self, arr: np.ndarray) -> np.ndarray:
        return arr @ self.matrix()

    def handle(self, lines: list[Line[Point]]) -> list[Line[Point]]:
        if not self.is_enabled or not lines:
            return list(lines)
        return array_to_lines(self.transform(lines_to_array(lines)), lines)

    def reset(self) -> None:
        for f in fields(self):
            setattr(self, f.name, f.default)


@dataclass
class Affine(LiveOperator):
    xx: float = 1.0
    xy: float = 0.0
    yx: float = 0.0
    yy: float = 1.0
    zero_x: float = 0.0
    zero_y: float = 0.0

    def matrix(self) -> np.ndarray:
        return np.array([
            [self.xx, self.xy, 0.0],
            [self.yx, self.yy, 0.0],
            [self.zero_x, self.zero_y, 1.0],
        ])


@dataclass
class Projective(LiveOperator):
    """
    Homogeneous projective map with weights ``wx``, ``wy`` and ``w_zero``::

        x' = (x0 w0 + xx wx x + xy wy y) / (w0 + wx x + wy y)
        y' = (y0 w0 + yx wx x + yy wy y) / (w0 + wx x + wy y)

    The divide by ``w`` is not guarded: points where it vanishes come out as
    inf/nan and are left for the renderer to skip.
    """
    xx: float = 500.0
    xy: float = 0.0
    wx: float = 2.0
    yx: float = 0.0
    yy: float = 500.0
    wy: float = 2.0
    zero_x: float = 0.0
    zero_y: float = 0.0
    w_zero: float = 500.0

    def matrix(self) -> np.ndarray:
        return np.array([
            [self.xx * self.wx, self.yx * self.wx, self.wx],
            [self.xy * self.wy, self.yy * self.wy, self.wy],
            [self.zero_x * self.w_zero, self.zero_y * self.w_zero, self.w_zero],
        ])

    def transform(self, arr: np.ndarray) -> np.ndarray:
        result = arr @ self.matrix()
        w = result[:, 2:3]
        if np.any(np.abs(w) < EPSILON):
            logger.warning("Projective map: homogeneous w is close to zero for some points.")
        with np.errstate(divide="ignore", invalid="ignore"):
            result = result / w
        return result


@dataclass
class AffineScaling(LiveOperator):
    mx: float = 1.0
    my: float = 1.0

    def matrix(self) -> np.ndarray:
        return np.diag([self.mx, self.my, 1.0])
