from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from geometrylabs.model.state import Lab, LabKey, create_lab

logger = logging.getLogger(__name__)


class Store(QObject):
    """Owns one state aggregate per lab and tells the window when to repaint."""
    lab_replaced = Signal(object)   # LabKey
    changed = Signal()

    def __init__(self, current: LabKey = LabKey.DETAIL) -> None:
        super().__init__()
        self._labs: dict[LabKey, Lab] = {key: create_lab(key) for key in LabKey}
        self.current_key = current

    def lab(self, key: LabKey) -> Lab:
        return self._labs[key]

    def current(self) -> Lab:
        return self._labs[self.current_key]

    def select(self, key: LabKey) -> None:
        self.current_key = key
        self.changed.emit()

    def reset(self, key: LabKey) -> None:
        """Discard the lab and build a fresh one."""
        self._labs[key] = create_lab(key)
        logger.info(f"Lab '{key.value}' reset to defaults.")
        self.lab_replaced.emit(key)
        self.changed.emit()

    def touch(self) -> None:
        self.changed.emit()
