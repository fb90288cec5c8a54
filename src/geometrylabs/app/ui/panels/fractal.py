from __future__ import annotations

from geometrylabs.app.ui.panels.base import LabPanel
from geometrylabs.app.ui.panels.registry import register_panel
from geometrylabs.model.state import LabKey


@register_panel
class FractalPanel(LabPanel):
    KEY = LabKey.FRACTAL
    TITLE = "Fractal (IFS)"

    def _build_ui(self) -> None:
        grid = self._group("Sampling")
        self._add_int_spin(grid, "Iterations:", lambda: self.lab.fractal.iterations,
                           self._set_iterations, min_value=0, max_value=200000, step=1000)
        self._add_spin(grid, "Dot radius:", lambda: self.lab.fractal.radius, self._set_radius,
                       min_value=0.5, max_value=10.0, step=0.5, suffix="px")
        self._add_check(grid, "Show grid", lambda: self.lab.grid.is_enabled,
                        lambda v: setattr(self.lab.grid, "is_enabled", v))
        self._add_button(grid, "Regenerate", lambda: self.lab.invalidate())
        self._add_readout(grid, "Systems:", lambda: len(self.lab.fractal.systems), str)

    def _set_radius(self, value: float) -> None:
        self.lab.fractal.radius = value
        self.lab.invalidate()

    def _set_iterations(self, value: int) -> None:
        self.lab.fractal.iterations = value
        self.lab.invalidate()
