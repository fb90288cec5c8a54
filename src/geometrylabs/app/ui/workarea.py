from __future__ import annotations

from PySide6.QtCore import QT_TRANSLATE_NOOP, Qt, Slot
from PySide6.QtWidgets import (
    QComboBox, QHBoxLayout, QLabel, QPushButton, QScrollArea, QSplitter, QStackedWidget, QVBoxLayout, QWidget,
)

from geometrylabs.app.ui.canvas import Canvas
from geometrylabs.model.viewport import Anchoring

ANCHORINGS = [
    (QT_TRANSLATE_NOOP("WorkArea", "Center"), Anchoring.center),
    (QT_TRANSLATE_NOOP("WorkArea", "Bottom left"), Anchoring.bottom_left),
    (QT_TRANSLATE_NOOP("WorkArea", "Top left"), Anchoring.top_left),
    (QT_TRANSLATE_NOOP("WorkArea", "Bottom right"), Anchoring.bottom_right),
    (QT_TRANSLATE_NOOP("WorkArea", "Top right"), Anchoring.top_right),
]


class WorkArea(QWidget):
    """
    Side panels stack on the left, canvas on the right and a small view bar
    above the canvas (origin anchoring, zoom and pan reset).
    """
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        v = QVBoxLayout(self)
        split = QSplitter(Qt.Orientation.Horizontal, self)
        split.setChildrenCollapsible(False)
        v.addWidget(split, 1)

        scroll = QScrollArea(split)
        scroll.setWidgetResizable(True)
        scroll.setMinimumWidth(320)
        self.panel_stack = QStackedWidget(scroll)
        scroll.setWidget(self.panel_stack)

        right = QWidget(split)
        rv = QVBoxLayout(right)
        rv.setContentsMargins(0, 0, 0, 0)

        bar = QHBoxLayout()
        bar.addWidget(QLabel(self.tr("Origin:"), right))
        self.anchoring = QComboBox(right)
        for label, _ in ANCHORINGS:
            self.anchoring.addItem(self.tr(label))
        self.anchoring.activated.connect(self._on_anchoring)
        bar.addWidget(self.anchoring)

        reset_zoom = QPushButton(self.tr("Reset zoom"), right)
        reset_zoom.clicked.connect(self._on_reset_zoom)
        bar.addWidget(reset_zoom)
        reset_pan = QPushButton(self.tr("Reset pan"), right)
        reset_pan.clicked.connect(self._on_reset_pan)
        bar.addWidget(reset_pan)
        bar.addStretch()
        rv.addLayout(bar)

        self.canvas = Canvas(right)
        rv.addWidget(self.canvas, 1)

        split.addWidget(scroll)
        split.addWidget(right)
        split.setStretchFactor(0, 0)
        split.setStretchFactor(1, 1)

    def set_panel_index(self, index: int) -> None:
        """Set the currently visible panel by index."""
        self.panel_stack.setCurrentIndex(index)

    @Slot(int)
    def _on_anchoring(self, index: int) -> None:
        _, factory = ANCHORINGS[index]
        self.canvas.set_anchoring(factory())

    @Slot()
    def _on_reset_zoom(self) -> None:
        self.canvas.reset_zoom()

    @Slot()
    def _on_reset_pan(self) -> None:
        self.canvas.reset_pan()
