"""
Lab State (Data Model)
======================
This module defines the state aggregates behind every lab.

Why is this file needed?
------------------------
1. State Management: Each lab keeps its viewport, figures, operator forms,
   pipelines and animations in one dataclass owned by the frame driver.
2. Reset: "Reset all to defaults" discards the aggregate and builds a fresh
   one from its factory function. Nothing is reset field-by-field.
3. Decoupling: Panels write form values into these objects; ``frame.py``
   reads them to compose a frame.

Classes:
    Forms2D / Forms3D: Committed forms queued in a fixed order.
    LiveOperators: Affine, projective and scaling maps re-applied every frame.
    DetailLab, EpicycloidLab, ContourLab, StarLab, FractalLab, SurfaceLab.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

import numpy as np

from geometrylabs.model.animations import (
    ConeAnimation,
    ContourMorph,
    CurveWalker,
    EpicycloidAnimation,
    StarAnimation,
)
from geometrylabs.model.figures.contour import Contour
from geometrylabs.model.figures.detail import Detail
from geometrylabs.model.figures.epicycloid import Epicycloid
from geometrylabs.model.figures.fractals import FractalIFS
from geometrylabs.model.figures.grid import Grid2D, Grid3D
from geometrylabs.model.figures.star import Star3D
from geometrylabs.model.figures.surface import Surface, Texture
from geometrylabs.model.geometry_primitives import Line, Marker, Point
from geometrylabs.model.pipeline import Pipeline, Pipeline3D, Placement, Placement3D, Rotation3DOperation
from geometrylabs.model.projections import TwoPointPerspective
from geometrylabs.model.transformations import (
    Affine,
    AffinePointSymmetry,
    AffineScaling,
    EuclideanOffset,
    EuclideanOffset3D,
    EuclideanRotation,
    EuclideanRotation3D,
    Projective,
)
from geometrylabs.model.viewport import Anchoring, DeviceRect, Viewport

logger = logging.getLogger(__name__)


class LabKey(enum.Enum):
    DETAIL = "detail"
    EPICYCLOID = "epicycloid"
    CONTOUR = "contour"
    STAR = "star"
    FRACTAL = "fractal"
    SURFACE = "surface"


# -------------------------------------------------------------------------------
# Operator bundles
# -------------------------------------------------------------------------------

@dataclass
class Forms2D:
    offset: EuclideanOffset = field(default_factory=EuclideanOffset)
    rotation: EuclideanRotation = field(default_factory=EuclideanRotation)
    symmetry: AffinePointSymmetry = field(default_factory=AffinePointSymmetry)

    def handle(self, pipelines: list[Pipeline]) -> bool:
        """Queue every armed form: offset, then rotation, then symmetry."""
        queued = self.offset.handle(pipelines)
        queued |= self.rotation.handle(pipelines)
        queued |= self.symmetry.handle(pipelines)
        return queued

    def markers(self, viewport: Viewport) -> list[Marker]:
        found = (self.rotation.marker(viewport), self.symmetry.marker(viewport))
        return [m for m in found if m is not None]


@dataclass
class Forms3D:
    offset: EuclideanOffset3D = field(default_factory=EuclideanOffset3D)
    rotation: EuclideanRotation3D = field(default_factory=EuclideanRotation3D)

    def handle(self, pipelines: list[Pipeline3D]) -> bool:
        queued = self.offset.handle(pipelines)
        queued |= self.rotation.handle(pipelines)
        return queued


@dataclass
class LiveOperators:
    scaling: AffineScaling = field(default_factory=AffineScaling)
    affine: Affine = field(default_factory=Affine)
    projective: Projective = field(default_factory=Projective)

    @property
    def is_any_enabled(self) -> bool:
        return self.scaling.is_enabled or self.affine.is_enabled or self.projective.is_enabled

    def handle(self, lines: list[Line[Point]]) -> list[Line[Point]]:
        """Scaling, then affine, then projective, on a fresh copy of ``lines``."""
        lines = self.scaling.handle(lines)
        lines = self.affine.handle(lines)
        return self.projective.handle(lines)

    def reset(self) -> None:
        self.scaling.reset()
        self.affine.reset()
        self.projective.reset()


def _center_viewport() -> Viewport:
    return Viewport.with_anchoring(Anchoring.center())


# -------------------------------------------------------------------------------
# Labs
# -------------------------------------------------------------------------------

@dataclass
class DetailLab:
    viewport: Viewport = field(default_factory=_center_viewport)
    grid: Grid2D = field(default_factory=Grid2D)
    detail: Detail = field(default_factory=Detail)
    forms: Forms2D = field(default_factory=Forms2D)
    live: LiveOperators = field(default_factory=LiveOperators)
    pipeline: Pipeline = field(default_factory=Pipeline)
    placement: Placement = field(default_factory=Placement)

    @property
    def is_animating(self) -> bool:
        return False


@dataclass
class EpicycloidLab:
    viewport: Viewport = field(default_factory=_center_viewport)
    grid: Grid2D = field(default_factory=lambda: Grid2D(unit=10.0))
    epicycloid: Epicycloid = field(default_factory=Epicycloid)
    forms: Forms2D = field(default_factory=Forms2D)
    live: LiveOperators = field(default_factory=LiveOperators)
    pipeline: Pipeline = field(default_factory=Pipeline)
    placement: Placement = field(default_factory=Placement)
    animation: EpicycloidAnimation = field(default_factory=EpicycloidAnimation)
    walker: CurveWalker = field(default_factory=CurveWalker)

    @property
    def is_animating(self) -> bool:
        return self.animation.is_enabled or (self.walker.is_enabled and self.walker.is_visible)


@dataclass
class ContourLab:
    viewport: Viewport = field(default_factory=_center_viewport)
    grid: Grid2D = field(default_factory=lambda: Grid2D(unit=5.0))
    contour: Contour = field(default_factory=Contour)
    forms: Forms2D = field(default_factory=Forms2D)
    live: LiveOperators = field(default_factory=LiveOperators)
    pipeline: Pipeline = field(default_factory=Pipeline)
    placement: Placement = field(default_factory=Placement)
    morph: ContourMorph = field(default_factory=ContourMorph)

    @property
    def is_animating(self) -> bool:
        return self.morph.is_enabled


@dataclass
class StarLab:
    viewport: Viewport = field(default_factory=_center_viewport)
    grid: Grid3D = field(default_factory=Grid3D)
    star: Star3D = field(default_factory=Star3D)
    projection: TwoPointPerspective = field(default_factory=TwoPointPerspective)
    forms: Forms3D = field(default_factory=Forms3D)
    pipeline: Pipeline3D = field(default_factory=Pipeline3D)
    placement: Placement3D = field(default_factory=Placement3D)
    animation: StarAnimation = field(default_factory=StarAnimation)
    spin: Rotation3DOperation = field(default_factory=Rotation3DOperation)

    @property
    def is_animating(self) -> bool:
        return self.animation.is_enabled


@dataclass
class FractalLab:
    """
    The point cloud is sampled once and kept in ``markers`` until the zoom,
    the pan, the device rectangle or the IFS parameters change.
    """
    viewport: Viewport = field(default_factory=_center_viewport)
    grid: Grid2D = field(default_factory=lambda: Grid2D(is_enabled=False))
    fractal: FractalIFS = field(default_factory=FractalIFS)
    seed: Optional[int] = None

    markers: Optional[list[Marker]] = None
    cached_rect: Optional[DeviceRect] = None

    def invalidate(self) -> None:
        self.markers = None

    def rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)

    @property
    def is_animating(self) -> bool:
        return False


@dataclass
class SurfaceLab:
    viewport: Viewport = field(default_factory=_center_viewport)
    grid: Grid3D = field(default_factory=Grid3D)
    surface: Surface = field(default_factory=Surface)
    texture: Texture = field(default_factory=Texture)
    projection: TwoPointPerspective = field(default_factory=TwoPointPerspective)
    forms: Forms3D = field(default_factory=Forms3D)
    pipeline: Pipeline3D = field(default_factory=Pipeline3D)
    placement: Placement3D = field(default_factory=Placement3D)
    animation: ConeAnimation = field(default_factory=ConeAnimation)

    @property
    def is_animating(self) -> bool:
        return self.animation.is_enabled


Lab = Union[DetailLab, EpicycloidLab, ContourLab, StarLab, FractalLab, SurfaceLab]


# -------------------------------------------------------------------------------
# Factories
# -------------------------------------------------------------------------------

def create_detail_lab() -> DetailLab:
    return DetailLab()


def create_epicycloid_lab() -> EpicycloidLab:
    return EpicycloidLab()


def create_contour_lab() -> ContourLab:
    return ContourLab()


def create_star_lab() -> StarLab:
    return StarLab()


def create_fractal_lab() -> FractalLab:
    return FractalLab()


def create_surface_lab() -> SurfaceLab:
    return SurfaceLab()


LAB_FACTORIES: dict[LabKey, Callable[[], Lab]] = {
    LabKey.DETAIL: create_detail_lab,
    LabKey.EPICYCLOID: create_epicycloid_lab,
    LabKey.CONTOUR: create_contour_lab,
    LabKey.STAR: create_star_lab,
    LabKey.FRACTAL: create_fractal_lab,
    LabKey.SURFACE: create_surface_lab,
}


def create_lab(key: LabKey) -> Lab:
    """Build a fresh aggregate for ``key``."""
    lab = LAB_FACTORIES[key]()
    logger.info(f"Lab '{key.value}' created with default state.")
    return lab
