"""
Iterated Function Systems
=========================
Each ``EquationSystem`` is an affine map::

    x' = a x + b y + c
    y' = d x + e y + f

chosen at every iteration with probability ``p``. Starting from the origin,
the orbit of randomly chosen maps traces the attractor.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from geometrylabs.model.geometry_primitives import BLACK, BLUE, TRANSPARENT, YELLOW, Color, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EquationSystem:
    a: float
    b: float
    d: float
    e: float
    c: float
    f: float
    p: float
    color: Color = BLACK

    @classmethod
    def from_coefficients(cls, coefficients: tuple[float, ...], color: Color = BLACK) -> EquationSystem:
        """Build from ``(a, b, d, e, c, f, p)``."""
        a, b, d, e, c, f, p = coefficients
        return cls(a, b, d, e, c, f, p, color)

    def next_point(self, x: float, y: float) -> tuple[float, float]:
        return self.a * x + self.b * y + self.c, self.d * x + self.e * y + self.f


def zigzag_systems() -> list[EquationSystem]:
    return [
        EquationSystem.from_coefficients(
            (-0.632407, -0.614815, -0.545370, 0.659259, 3.840822, 1.282321, 0.888128), BLUE
        ),
        EquationSystem.from_coefficients(
            (-0.036111, 0.444444, 0.210185, 0.037037, 2.071081, 8.330552, 0.111872), YELLOW
        ),
    ]


def normalized_probabilities(systems: list[EquationSystem]) -> np.ndarray:
    """Selection weights scaled to sum to one."""
    if not systems:
        raise ValueError("An IFS needs at least one equation system.")
    p = np.array([s.p for s in systems], dtype=np.float64)
    if np.any(p < 0.0):
        raise ValueError("IFS probabilities must be non-negative.")
    total = p.sum()
    if total <= 0.0:
        raise ValueError("IFS probabilities must have a positive sum.")
    return p / total


@dataclass
class FractalIFS:
    iterations: int = 10000
    radius: float = 1.5
    systems: list[EquationSystem] = field(default_factory=zigzag_systems)

    def points(self, rng: Optional[np.random.Generator] = None) -> list[tuple[Point, Color]]:
        """
        Sample the attractor.

        Returns:
            ``iterations + 1`` (point, color) pairs. The first is the origin in
            the transparent color.
        """
        if self.iterations < 0:
            raise ValueError("Iteration count cannot be negative.")
        probabilities = normalized_probabilities(self.systems)
        rng = rng if rng is not None else np.random.default_rng()

        choices = rng.choice(len(self.systems), size=self.iterations, p=probabilities)

        result: list[tuple[Point, Color]] = [(Point.zero(), TRANSPARENT)]
        x, y = 0.0, 0.0
        for index in choices:
            system = self.systems[index]
            x, y = system.next_point(x, y)
            result.append((Point.from_xy(x, y), system.color))

        logger.debug(f"IFS sampled {self.iterations} iterations over {len(self.systems)} systems")
        return result
