from __future__ import annotations

from geometrylabs.app.ui.panels.base import LabPanel
from geometrylabs.app.ui.panels.registry import register_panel
from geometrylabs.model.figures.detail import SegmentId
from geometrylabs.model.state import LabKey
from geometrylabs.model.units import Distance


@register_panel
class DetailPanel(LabPanel):
    KEY = LabKey.DETAIL
    TITLE = "Detail"

    def _build_ui(self) -> None:
        grid = self._group("Grid")
        self._add_check(grid, "Show grid", lambda: self.lab.grid.is_enabled,
                        lambda v: setattr(self.lab.grid, "is_enabled", v))

        grid = self._group("Side lengths")
        for segment in SegmentId:
            self._add_spin(
                grid, f"{segment.value.upper()}:",
                lambda s=segment: self.lab.detail.lengths[s].value,
                lambda v, s=segment: self.lab.detail.set_length(s, v),
                min_value=0.0, max_value=500.0, step=1.0, suffix="cm",
            )
        self._add_spin(grid, "Outer radius:", lambda: self.lab.detail.outer_radius.value,
                       lambda v: self._set_radius("outer_radius", v), min_value=0.1, max_value=500.0, suffix="cm")
        self._add_spin(grid, "Hole radius:", lambda: self.lab.detail.inner_radius.value,
                       lambda v: self._set_radius("inner_radius", v), min_value=0.1, max_value=500.0, suffix="cm")

        self._add_forms_2d(lambda: self.lab.forms)
        self._add_live_operators(lambda: self.lab.live)

    def _set_radius(self, name: str, value: float) -> None:
        setattr(self.lab.detail, name, Distance(value))
