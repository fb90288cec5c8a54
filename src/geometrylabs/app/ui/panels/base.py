from __future__ import annotations

from typing import Any, Callable, Union

from PySide6.QtCore import Slot
from PySide6.QtWidgets import (
    QCheckBox, QDoubleSpinBox, QGridLayout, QGroupBox, QLabel, QPushButton,
    QSizePolicy, QSpinBox, QVBoxLayout, QWidget,
)

from geometrylabs.app.state import Store
from geometrylabs.model.state import Forms2D, Forms3D, LabKey, LiveOperators
from geometrylabs.model.projections import TwoPointPerspective
from geometrylabs.model.units import Distance

Getter = Callable[[], Any]
Setter = Callable[[Any], None]
Editor = Union[QDoubleSpinBox, QSpinBox, QCheckBox, QLabel]


class LabPanel(QWidget):
    """
    Base class for the left-side lab panels.

    Every editor is bound to a getter/setter pair over the current lab
    aggregate. Setters write into the model and request a repaint; after each
    frame ``sync_from_model`` pulls values back, so forms that reset
    themselves on Apply show their neutral values again.
    """
    KEY: LabKey = LabKey.DETAIL  # Override in subclass
    TITLE: str = "Lab"

    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        self._bindings: list[tuple[Editor, Getter, Callable[[Any], str] | None]] = []

        self._root = QVBoxLayout(self)
        title = QLabel(f"<b>{self.tr(self.TITLE)}</b>", self)
        self._root.addWidget(title)

        self._build_ui()  # subclass defines inputs

        reset = QPushButton(self.tr("Reset all to defaults"), self)
        reset.clicked.connect(self._on_reset)
        self._root.addStretch()
        self._root.addWidget(reset)

    @property
    def lab(self):
        return self.store.lab(self.KEY)

    # ---- utilities ----

    def _group(self, title: str) -> QGridLayout:
        box = QGroupBox(self.tr(title), self)
        grid = QGridLayout(box)
        grid.setVerticalSpacing(6)
        self._root.addWidget(box)
        return grid

    def _changed(self) -> None:
        self.store.touch()

    def _add_spin(
        self,
        grid: QGridLayout,
        label: str,
        getter: Getter,
        setter: Setter,
        *,
        min_value: float = -1e4,
        max_value: float = 1e4,
        step: float = 0.1,
        decimals: int = 2,
        suffix: str = "",
    ) -> QDoubleSpinBox:
        row = grid.rowCount()
        grid.addWidget(QLabel(self.tr(label), self), row, 0)
        w = QDoubleSpinBox(self)
        w.setRange(min_value, max_value)
        w.setSingleStep(step)
        w.setDecimals(decimals)
        w.setValue(getter())
        w.setKeyboardTracking(False)
        w.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        if suffix:
            w.setSuffix(f" {suffix}")
        w.valueChanged.connect(lambda value: (setter(value), self._changed()))
        grid.addWidget(w, row, 1)
        self._bindings.append((w, getter, None))
        return w

    def _add_int_spin(
        self,
        grid: QGridLayout,
        label: str,
        getter: Getter,
        setter: Setter,
        *,
        min_value: int = 0,
        max_value: int = 100000,
        step: int = 1,
    ) -> QSpinBox:
        row = grid.rowCount()
        grid.addWidget(QLabel(self.tr(label), self), row, 0)
        w = QSpinBox(self)
        w.setRange(min_value, max_value)
        w.setSingleStep(step)
        w.setValue(getter())
        w.setKeyboardTracking(False)
        w.valueChanged.connect(lambda value: (setter(value), self._changed()))
        grid.addWidget(w, row, 1)
        self._bindings.append((w, getter, None))
        return w

    def _add_check(self, grid: QGridLayout, label: str, getter: Getter, setter: Setter) -> QCheckBox:
        w = QCheckBox(self.tr(label), self)
        w.setChecked(getter())
        w.toggled.connect(lambda checked: (setter(checked), self._changed()))
        grid.addWidget(w, grid.rowCount(), 0, 1, 2)
        self._bindings.append((w, getter, None))
        return w

    def _add_button(self, grid: QGridLayout, label: str, action: Callable[[], None]) -> QPushButton:
        w = QPushButton(self.tr(label), self)
        w.clicked.connect(lambda: (action(), self._changed()))
        grid.addWidget(w, grid.rowCount(), 0, 1, 2)
        return w

    def _add_readout(self, grid: QGridLayout, label: str, getter: Getter, fmt: Callable[[Any], str]) -> QLabel:
        row = grid.rowCount()
        grid.addWidget(QLabel(self.tr(label), self), row, 0)
        w = QLabel(fmt(getter()), self)
        grid.addWidget(w, row, 1)
        self._bindings.append((w, getter, fmt))
        return w

    def sync_from_model(self) -> None:
        """Pull current model values into the editors without re-triggering setters."""
        for widget, getter, fmt in self._bindings:
            value = getter()
            widget.blockSignals(True)
            match widget:
                case QLabel():
                    widget.setText(fmt(value))
                case QCheckBox():
                    if widget.isChecked() != bool(value):
                        widget.setChecked(bool(value))
                case QSpinBox():
                    if widget.value() != int(value):
                        widget.setValue(int(value))
                case QDoubleSpinBox():
                    if abs(widget.value() - float(value)) > 1e-9:
                        widget.setValue(float(value))
            widget.blockSignals(False)

    @Slot()
    def _on_reset(self) -> None:
        self.store.reset(self.KEY)
        self.sync_from_model()

    # ---- shared sections ----

    def _add_forms_2d(self, forms: Callable[[], Forms2D]) -> None:
        grid = self._group("Offset")
        self._add_spin(grid, "X:", lambda: forms().offset.x, lambda v: setattr(forms().offset, "x", v), suffix="cm")
        self._add_spin(grid, "Y:", lambda: forms().offset.y, lambda v: setattr(forms().offset, "y", v), suffix="cm")
        self._add_button(grid, "Apply", lambda: forms().offset.run())

        grid = self._group("Rotation")
        self._add_spin(grid, "Pivot X:", lambda: forms().rotation.x, lambda v: setattr(forms().rotation, "x", v), suffix="cm")
        self._add_spin(grid, "Pivot Y:", lambda: forms().rotation.y, lambda v: setattr(forms().rotation, "y", v), suffix="cm")
        self._add_spin(grid, "Angle:", lambda: forms().rotation.angle, lambda v: setattr(forms().rotation, "angle", v),
                       min_value=-360.0, max_value=360.0, step=1.0, suffix="°")
        self._add_button(grid, "Apply", lambda: forms().rotation.run())

        grid = self._group("Point symmetry")
        self._add_spin(grid, "X:", lambda: forms().symmetry.x, lambda v: setattr(forms().symmetry, "x", v), suffix="cm")
        self._add_spin(grid, "Y:", lambda: forms().symmetry.y, lambda v: setattr(forms().symmetry, "y", v), suffix="cm")
        self._add_button(grid, "Apply", lambda: forms().symmetry.run())

    def _add_forms_3d(self, forms: Callable[[], Forms3D]) -> None:
        grid = self._group("Offset")
        for axis in ("x", "y", "z"):
            self._add_spin(
                grid, f"{axis.upper()}:",
                lambda a=axis: getattr(forms().offset, a),
                lambda v, a=axis: setattr(forms().offset, a, v),
                suffix="cm",
            )
        self._add_button(grid, "Apply", lambda: forms().offset.run())

        grid = self._group("Rotation about the pivot")
        for axis in ("x", "y", "z"):
            name = f"angle_{axis}"
            self._add_spin(
                grid, f"About {axis.upper()}:",
                lambda n=name: getattr(forms().rotation, n),
                lambda v, n=name: setattr(forms().rotation, n, v),
                min_value=-360.0, max_value=360.0, step=1.0, suffix="°",
            )
        self._add_button(grid, "Apply", lambda: forms().rotation.run())

    def _add_live_operators(self, live: Callable[[], LiveOperators]) -> None:
        grid = self._group("Scaling")
        self._add_check(grid, "Enabled", lambda: live().scaling.is_enabled,
                        lambda v: setattr(live().scaling, "is_enabled", v))
        for name in ("mx", "my"):
            self._add_spin(grid, f"{name}:", lambda n=name: getattr(live().scaling, n),
                           lambda v, n=name: setattr(live().scaling, n, v), step=0.05)

        grid = self._group("Affine")
        self._add_check(grid, "Enabled", lambda: live().affine.is_enabled,
                        lambda v: setattr(live().affine, "is_enabled", v))
        for name in ("xx", "xy", "yx", "yy", "zero_x", "zero_y"):
            self._add_spin(grid, f"{name}:", lambda n=name: getattr(live().affine, n),
                           lambda v, n=name: setattr(live().affine, n, v), step=0.05)

        grid = self._group("Projective")
        self._add_check(grid, "Enabled", lambda: live().projective.is_enabled,
                        lambda v: setattr(live().projective, "is_enabled", v))
        for name in ("xx", "xy", "wx", "yx", "yy", "wy", "zero_x", "zero_y", "w_zero"):
            self._add_spin(grid, f"{name}:", lambda n=name: getattr(live().projective, n),
                           lambda v, n=name: setattr(live().projective, n, v), step=1.0)
        self._add_button(grid, "Reset live operators", lambda: live().reset())

    def _add_projection(self, projection: Callable[[], TwoPointPerspective]) -> None:
        grid = self._group("Projection")
        self._add_spin(grid, "Angle:", lambda: projection().angle, lambda v: setattr(projection(), "angle", v),
                       min_value=-360.0, max_value=360.0, step=1.0, suffix="°")
        self._add_spin(grid, "Eye distance:", lambda: projection().distance.value,
                       lambda v: setattr(projection(), "distance", Distance(v)),
                       min_value=1.0, max_value=1000.0, step=1.0, suffix="cm")

    # ---- abstract API for subclasses ----

    def _build_ui(self) -> None:
        """Create form widgets (use the ``_add_*`` helpers)."""
        raise NotImplementedError("`_build_ui` must be implemented in subclass.")
