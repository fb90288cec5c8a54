from __future__ import annotations

from geometrylabs.app.ui.panels.base import LabPanel
from geometrylabs.app.ui.panels.registry import register_panel
from geometrylabs.model.state import LabKey
from geometrylabs.model.units import Distance


@register_panel
class SurfacePanel(LabPanel):
    KEY = LabKey.SURFACE
    TITLE = "Surface"

    def _build_ui(self) -> None:
        surface = lambda: self.lab.surface

        grid = self._group("Cone")
        self._add_spin(grid, "Height:", lambda: surface().height.value,
                       lambda v: setattr(surface(), "height", Distance(v)),
                       min_value=0.1, max_value=100.0, step=0.5, suffix="cm")
        self._add_spin(grid, "Base radius:", lambda: surface().radius_base.value,
                       lambda v: setattr(surface(), "radius_base", Distance(v)),
                       min_value=0.1, max_value=100.0, step=0.5, suffix="cm")
        self._add_int_spin(grid, "Mesh:", lambda: surface().mesh,
                           lambda v: setattr(surface(), "mesh", v), min_value=1, max_value=200)
        self._add_check(grid, "Animate radius", lambda: self.lab.animation.is_enabled,
                        lambda v: setattr(self.lab.animation, "is_enabled", v))

        grid = self._group("Texture")
        self._add_check(grid, "Enabled", lambda: surface().is_texture_enabled,
                        lambda v: setattr(surface(), "is_texture_enabled", v))
        for name, label in (
            ("texture_scale_width", "Scale width:"),
            ("texture_scale_height", "Scale height:"),
            ("texture_offset_angle", "Offset angle:"),
            ("texture_offset_height", "Offset height:"),
        ):
            self._add_spin(grid, label, lambda n=name: getattr(surface(), n),
                           lambda v, n=name: setattr(surface(), n, v),
                           min_value=-10.0, max_value=10.0, step=0.01, decimals=3)
        self._add_spin(grid, "Rotation:", lambda: surface().texture_rotation_angle,
                       lambda v: setattr(surface(), "texture_rotation_angle", v),
                       min_value=-360.0, max_value=360.0, step=1.0, suffix="°")

        self._add_projection(lambda: self.lab.projection)
        self._add_forms_3d(lambda: self.lab.forms)
