from __future__ import annotations

from geometrylabs.app.ui.panels.base import LabPanel
from geometrylabs.app.ui.panels.registry import register_panel
from geometrylabs.model.state import LabKey


@register_panel
class ContourPanel(LabPanel):
    KEY = LabKey.CONTOUR
    TITLE = "Contour"

    def _build_ui(self) -> None:
        grid = self._group("Curve")
        self._add_check(grid, "Show skeleton", lambda: self.lab.contour.is_skeleton_mode_enabled,
                        lambda v: setattr(self.lab.contour, "is_skeleton_mode_enabled", v))
        self._add_check(grid, "Closed", lambda: self.lab.contour.curve.is_closed,
                        lambda v: setattr(self.lab.contour.curve, "is_closed", v))
        self._add_spin(grid, "Step:", lambda: self.lab.contour.curve.step,
                       lambda v: setattr(self.lab.contour.curve, "step", v),
                       min_value=0.005, max_value=1.0, step=0.005, decimals=3)

        morph = lambda: self.lab.morph
        grid = self._group("Morph to circle")
        self._add_spin(grid, "Speed:", lambda: morph().speed, lambda v: setattr(morph(), "speed", v),
                       min_value=0.01, max_value=5.0, step=0.05)
        self._add_readout(grid, "t:", lambda: morph().t, lambda v: f"{v:.3f}")
        self._add_button(grid, "Play forward", lambda: morph().play_forward())
        self._add_button(grid, "Play backward", lambda: morph().play_backward())
        self._add_button(grid, "Pause / resume", lambda: morph().toggle())
        self._add_button(grid, "Back to contour", lambda: morph().reset(self.lab.contour.curve.knots))

        self._add_forms_2d(lambda: self.lab.forms)
        self._add_live_operators(lambda: self.lab.live)
