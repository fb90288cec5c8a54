from __future__ import annotations

from geometrylabs.app.ui.panels.base import LabPanel
from geometrylabs.app.ui.panels.registry import register_panel
from geometrylabs.model.state import LabKey
from geometrylabs.model.units import Distance


@register_panel
class StarPanel(LabPanel):
    KEY = LabKey.STAR
    TITLE = "Star"

    def _build_ui(self) -> None:
        grid = self._group("Star")
        self._add_spin(grid, "Radius:", lambda: self.lab.star.radius.value,
                       lambda v: setattr(self.lab.star, "radius", Distance(v)),
                       min_value=0.1, max_value=100.0, step=0.5, suffix="cm")
        self._add_spin(grid, "Thickness:", lambda: self.lab.star.thickness.value,
                       lambda v: setattr(self.lab.star, "thickness", Distance(v)),
                       min_value=0.0, max_value=100.0, step=0.5, suffix="cm")
        self._add_check(grid, "Animate", lambda: self.lab.animation.is_enabled,
                        lambda v: setattr(self.lab.animation, "is_enabled", v))

        self._add_projection(lambda: self.lab.projection)
        self._add_forms_3d(lambda: self.lab.forms)
