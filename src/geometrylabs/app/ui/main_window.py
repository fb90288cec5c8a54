from __future__ import annotations

import logging

from PySide6.QtCore import QSettings, QT_TRANSLATE_NOOP, Slot
from PySide6.QtWidgets import QMainWindow, QTabBar, QVBoxLayout, QWidget

from geometrylabs.app.application import VISIBLE_APP_NAME
from geometrylabs.app.state import Store
from geometrylabs.app.ui import panels  # noqa: F401  (registers the lab panels)
from geometrylabs.app.ui.panels.base import LabPanel
from geometrylabs.app.ui.panels.registry import create_panel, list_keys
from geometrylabs.app.ui.workarea import WorkArea
from geometrylabs.config import SETTINGS_LAST_LAB
from geometrylabs.model.frame import Frame
from geometrylabs.model.state import LabKey

logger = logging.getLogger(__name__)

LAB_LABELS = {
    LabKey.DETAIL: QT_TRANSLATE_NOOP("Labs", "Detail"),
    LabKey.EPICYCLOID: QT_TRANSLATE_NOOP("Labs", "Epicycloid"),
    LabKey.CONTOUR: QT_TRANSLATE_NOOP("Labs", "Contour"),
    LabKey.STAR: QT_TRANSLATE_NOOP("Labs", "Star"),
    LabKey.SURFACE: QT_TRANSLATE_NOOP("Labs", "Surface"),
    LabKey.FRACTAL: QT_TRANSLATE_NOOP("Labs", "Fractal"),
}


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        self._settings = QSettings()
        self._keys = list_keys()
        self.store = Store(self._restore_last_lab())

        # ---- Central: TabBar on top + WorkArea below ----
        central = QWidget(self)
        v = QVBoxLayout(central)
        v.setContentsMargins(0, 0, 0, 0)
        v.setSpacing(0)

        self.tabs = QTabBar(central)
        self.tabs.setExpanding(True)
        self.tabs.setDrawBase(True)
        v.addWidget(self.tabs, 0)

        self.work_area = WorkArea(central)
        v.addWidget(self.work_area, 1)
        self.setCentralWidget(central)

        self.panels: list[LabPanel] = [create_panel(key, self.store, parent=self) for key in self._keys]
        for p in self.panels:
            self.work_area.panel_stack.addWidget(p)
        for key in self._keys:
            self.tabs.addTab(self.tr(LAB_LABELS[key]))

        canvas = self.work_area.canvas
        self.store.changed.connect(canvas.update)
        self.store.lab_replaced.connect(self._on_lab_replaced)
        canvas.frame_rendered.connect(self._on_frame_rendered)
        self.tabs.currentChanged.connect(self._on_tab_changed)

        index = self._keys.index(self.store.current_key)
        self.tabs.setCurrentIndex(index)
        self._on_tab_changed(index)

    def _restore_last_lab(self) -> LabKey:
        value = self._settings.value(SETTINGS_LAST_LAB, LabKey.DETAIL.value, type=str)
        try:
            key = LabKey(value)
        except ValueError:
            logger.warning(f"Unknown lab '{value}' in settings, falling back to '{LabKey.DETAIL.value}'.")
            return LabKey.DETAIL
        return key if key in self._keys else LabKey.DETAIL

    @Slot(int)
    def _on_tab_changed(self, idx: int) -> None:
        key = self._keys[idx]
        self.store.select(key)
        self.work_area.set_panel_index(idx)
        self.work_area.canvas.set_lab(self.store.current())
        self._settings.setValue(SETTINGS_LAST_LAB, key.value)
        logger.debug(f"Switched to lab '{key.value}'")

    def _on_lab_replaced(self, key: LabKey) -> None:
        if key == self.store.current_key:
            self.work_area.canvas.set_lab(self.store.current())

    def _on_frame_rendered(self, frame: Frame) -> None:
        self.panels[self.tabs.currentIndex()].sync_from_model()
        ppc = self.store.current().viewport.ppc
        self.statusBar().showMessage(
            self.tr("{ppc:.1f} px/cm, {n} lines, {m} markers").format(
                ppc=ppc, n=len(frame.lines), m=len(frame.markers)
            )
        )
