"""
Transform Pipeline
==================
Queue of committed operations (offset, pivoted rotation, point symmetry and
their 3D counterparts).

An "Apply" action pushes one operation into every pipeline that must honour
it. The frame driver runs the queue once over the frame's line batch and then
drains it (``make_tasks`` does both). Operations run in insertion order.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

import numpy as np

from geometrylabs.model.geometry_primitives import (
    Line,
    Line3D,
    Point,
    Point3D,
    array_to_lines,
    array_to_lines3d,
    lines3d_to_array,
    lines_to_array,
)
from geometrylabs.model.geometry_utils import (
    Angle,
    point_symmetry_matrix,
    rotation_matrix,
    rotation_matrix_3d,
    translation_matrix,
    translation_matrix_3d,
)
from geometrylabs.model.units import Distance

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------------------
# Operations
# -------------------------------------------------------------------------------

@dataclass(frozen=True)
class OffsetOperation:
    x: Distance = Distance(0.0)
    y: Distance = Distance(0.0)


@dataclass(frozen=True)
class RotationOperation:
    pivot: Point = Point()
    angle: Angle = Angle()


@dataclass(frozen=True)
class PointSymmetryOperation:
    point: Point = Point()


@dataclass(frozen=True)
class Offset3DOperation:
    x: Distance = Distance(0.0)
    y: Distance = Distance(0.0)
    z: Distance = Distance(0.0)


@dataclass(frozen=True)
class Rotation3DOperation:
    angle_x: Angle = Angle()
    angle_y: Angle = Angle()
    angle_z: Angle = Angle()


Operation = Union[OffsetOperation, RotationOperation, PointSymmetryOperation]
Operation3D = Union[Offset3DOperation, Rotation3DOperation]


def operation_matrix(operation: Operation) -> np.ndarray:
    """3x3 row-vector matrix of a 2D operation."""
    match operation:
        case OffsetOperation(x=x, y=y):
            return translation_matrix(x.value, y.value)
        case RotationOperation(pivot=pivot, angle=angle):
            return rotation_matrix(angle, pivot)
        case PointSymmetryOperation(point=point):
            return point_symmetry_matrix(point)
    raise TypeError(f"Unsupported operation: {type(operation).__name__}")


# -------------------------------------------------------------------------------
# Pipelines
# -------------------------------------------------------------------------------

class Pipeline:
    """Ordered queue of 2D operations."""

    def __init__(self) -> None:
        self._buffer: list[Operation] = []

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def is_empty(self) -> bool:
        return not self._buffer

    @property
    def operations(self) -> tuple[Operation, ...]:
        return tuple(self._buffer)

    def add_operation(self, operation: Operation) -> None:
        logger.debug(f"Queued {type(operation).__name__}")
        self._buffer.append(operation)

    def matrix(self) -> np.ndarray:
        """Product of the queued operations in insertion order."""
        m = np.identity(3)
        for operation in self._buffer:
            m = m @ operation_matrix(operation)
        return m

    def do_tasks(self, lines: list[Line[Point]]) -> list[Line[Point]]:
        """Run every queued operation over ``lines`` and return the new batch."""
        if self.is_empty or not lines:
            return list(lines)
        arr = lines_to_array(lines) @ self.matrix()
        return array_to_lines(arr, lines)

    def do_tasks_point(self, point: Point) -> Point:
        if self.is_empty:
            return point
        return Point.from_homogeneous(point.to_homogeneous() @ self.matrix())

    def make_tasks(self, lines: list[Line[Point]]) -> list[Line[Point]]:
        """Run then drain."""
        result = self.do_tasks(lines)
        self.clear()
        return result

    def make_tasks_point(self, point: Point) -> Point:
        result = self.do_tasks_point(point)
        self.clear()
        return result

    def clear(self) -> None:
        if self._buffer:
            logger.debug(f"Pipeline drained ({len(self._buffer)} operations)")
        self._buffer.clear()


class Pipeline3D:
    """
    Ordered queue of 3D operations. Rotations turn about a pivot that the
    caller owns; offsets move that pivot along with the lines.
    """

    def __init__(self) -> None:
        self._buffer: list[Operation3D] = []

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def is_empty(self) -> bool:
        return not self._buffer

    def add_operation(self, operation: Operation3D) -> None:
        logger.debug(f"Queued {type(operation).__name__}")
        self._buffer.append(operation)

    def matrix(self, pivot: Point3D) -> tuple[np.ndarray, Point3D]:
        """Product of the queued operations starting from ``pivot``, and the pivot afterwards."""
        result = np.identity(4)
        pivot_row = pivot.to_homogeneous()
        for operation in self._buffer:
            match operation:
                case Offset3DOperation(x=x, y=y, z=z):
                    m = translation_matrix_3d(x.value, y.value, z.value)
                    pivot_row = pivot_row @ m
                case Rotation3DOperation(angle_x=ax, angle_y=ay, angle_z=az):
                    m = rotation_matrix_3d(ax, ay, az, Point3D.from_homogeneous(pivot_row))
                case _:
                    raise TypeError(f"Unsupported operation: {type(operation).__name__}")
            result = result @ m
        return result, Point3D.from_homogeneous(pivot_row)

    def do_tasks(self, lines: list[Line3D], pivot: Point3D) -> tuple[list[Line3D], Point3D]:
        if self.is_empty:
            return list(lines), pivot
        m, pivot = self.matrix(pivot)
        if not lines:
            return [], pivot
        return array_to_lines3d(lines3d_to_array(lines) @ m, lines), pivot

    def make_tasks(self, lines: list[Line3D], pivot: Point3D) -> tuple[list[Line3D], Point3D]:
        result = self.do_tasks(lines, pivot)
        self.clear()
        return result

    def clear(self) -> None:
        if self._buffer:
            logger.debug(f"3D pipeline drained ({len(self._buffer)} operations)")
        self._buffer.clear()


# -------------------------------------------------------------------------------
# Placement (drained operations folded together)
# -------------------------------------------------------------------------------

class Placement:
    """
    Product of every 2D operation drained so far. Figures are regenerated
    from their parameters each frame, so the placement re-applies past edits
    to the fresh batch.
    """

    def __init__(self) -> None:
        self.matrix = np.identity(3)

    def absorb(self, pipeline: Pipeline) -> None:
        if not pipeline.is_empty:
            self.matrix = self.matrix @ pipeline.matrix()

    def apply(self, lines: list[Line[Point]]) -> list[Line[Point]]:
        if not lines:
            return []
        return array_to_lines(lines_to_array(lines) @ self.matrix, lines)

    def apply_point(self, point: Point) -> Point:
        return Point.from_homogeneous(point.to_homogeneous() @ self.matrix)

    def commit(self, pipeline: Pipeline, lines: list[Line[Point]]) -> list[Line[Point]]:
        """Run the queue over ``lines``, fold it into the placement and drain it."""
        result = pipeline.do_tasks(lines)
        self.absorb(pipeline)
        pipeline.clear()
        return result


class Placement3D:
    """3D counterpart of `Placement`; also tracks where the figure pivot has moved."""

    def __init__(self) -> None:
        self.matrix = np.identity(4)

    def apply(self, lines: list[Line3D], pivot: Point3D) -> tuple[list[Line3D], Point3D]:
        moved_pivot = Point3D.from_homogeneous(pivot.to_homogeneous() @ self.matrix)
        if not lines:
            return [], moved_pivot
        return array_to_lines3d(lines3d_to_array(lines) @ self.matrix, lines), moved_pivot

    def commit(self, pipeline: Pipeline3D, lines: list[Line3D], pivot: Point3D) -> tuple[list[Line3D], Point3D]:
        """Run the queue about ``pivot``, fold it into the placement and drain it."""
        if pipeline.is_empty:
            return list(lines), pivot
        m, _ = pipeline.matrix(pivot)
        result = pipeline.do_tasks(lines, pivot)
        self.matrix = self.matrix @ m
        pipeline.clear()
        return result
