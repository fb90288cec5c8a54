from __future__ import annotations

import math

from geometrylabs.app.ui.panels.base import LabPanel
from geometrylabs.app.ui.panels.registry import register_panel
from geometrylabs.model.state import LabKey


def _fmt_radius(value: float) -> str:
    return "∞" if math.isinf(value) else f"{value:.3f} cm"


@register_panel
class EpicycloidPanel(LabPanel):
    KEY = LabKey.EPICYCLOID
    TITLE = "Epicycloid"

    def _build_ui(self) -> None:
        epi = lambda: self.lab.epicycloid

        grid = self._group("Curve")
        self._add_spin(grid, "Fixed radius:", lambda: epi().fixed_radius.value,
                       lambda v: epi().update(fixed_radius=v), min_value=0.1, max_value=500.0, step=1.0, suffix="cm")
        self._add_spin(grid, "Rolling radius:", lambda: epi().rolling_radius.value,
                       lambda v: epi().update(rolling_radius=v), min_value=0.1, max_value=500.0, step=1.0, suffix="cm")
        self._add_spin(grid, "Pen offset:", lambda: epi().pen_offset.value,
                       lambda v: epi().update(pen_offset=v), min_value=0.0, max_value=500.0, step=1.0, suffix="cm")
        self._add_int_spin(grid, "Rotations:", lambda: epi().rotations,
                           lambda v: epi().update(rotations=v), min_value=1, max_value=100)
        self._add_spin(grid, "Step:", lambda: epi().step, lambda v: epi().update(step=v),
                       min_value=0.001, max_value=1.0, step=0.01, decimals=3)
        self._add_check(grid, "Animate pen offset", lambda: self.lab.animation.is_enabled,
                        lambda v: setattr(self.lab.animation, "is_enabled", v))

        grid = self._group("Statistics")
        self._add_readout(grid, "Area:", lambda: epi().stats.area, lambda v: f"{v:.3f} cm²")
        self._add_readout(grid, "Length:", lambda: epi().stats.length, lambda v: f"{v:.3f} cm")
        self._add_readout(grid, "Inflection points:", lambda: len(epi().stats.inflection_points), str)

        walker = lambda: self.lab.walker
        grid = self._group("Walker")
        self._add_button(grid, "Show / hide", lambda: walker().show_toggle())
        self._add_button(grid, "Walk forward / stop", lambda: walker().set_increasing())
        self._add_button(grid, "Walk backward / stop", lambda: walker().set_decreasing())
        self._add_int_spin(grid, "Step:", lambda: walker().step,
                           lambda v: setattr(walker(), "step", v), min_value=1, max_value=10)
        self._add_check(grid, "Tangent", lambda: walker().is_tangent_enabled,
                        lambda v: setattr(walker(), "is_tangent_enabled", v))
        self._add_check(grid, "Normal", lambda: walker().is_normal_enabled,
                        lambda v: setattr(walker(), "is_normal_enabled", v))
        self._add_check(grid, "Inflection points", lambda: walker().is_inflection_points_enabled,
                        lambda v: setattr(walker(), "is_inflection_points_enabled", v))
        self._add_readout(grid, "t:", lambda: walker().current_t(epi()), lambda v: f"{v:.3f}")
        self._add_readout(grid, "Curvature radius:", lambda: walker().current_curvature_radius(epi()), _fmt_radius)

        self._add_forms_2d(lambda: self.lab.forms)
        self._add_live_operators(lambda: self.lab.live)
