from __future__ import annotations

import logging
import math
from typing import Optional

from PySide6.QtCore import QElapsedTimer, QPointF, QRectF, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPaintEvent, QPen, QWheelEvent
from PySide6.QtWidgets import QSizePolicy, QWidget

from geometrylabs.config import ANIMATION_INTERVAL_MS
from geometrylabs.model.frame import handle_pan, handle_scroll, render, reset_pan, reset_zoom, set_anchoring
from geometrylabs.model.geometry_primitives import Color, Line, Marker, Pointable, ScreenPoint, ScreenVector, Stroke
from geometrylabs.model.state import Lab
from geometrylabs.model.viewport import Anchoring, DeviceRect

logger = logging.getLogger(__name__)

# angleDelta() is in 1/8 of a degree; one wheel notch is 15 degrees
WHEEL_UNITS_PER_DEGREE = 8.0


def to_qcolor(color: Color) -> QColor:
    return QColor(color.r, color.g, color.b, color.a)


def _is_finite(point: Pointable) -> bool:
    return math.isfinite(float(point.x)) and math.isfinite(float(point.y))


class Canvas(QWidget):
    """
    Paints one frame of the current lab per paint event.

    Mouse drag pans and the wheel zooms the lab's viewport. While the frame
    asks for a repaint (a running animation) a timer keeps scheduling paints.
    """
    frame_rendered = Signal(object)  # Frame

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(400, 300)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        self._lab: Optional[Lab] = None
        self._last_pos: Optional[QPointF] = None
        self._pens: dict[Stroke, QPen] = {}

        self._timer = QTimer(self)
        self._timer.setInterval(ANIMATION_INTERVAL_MS)
        self._timer.timeout.connect(self.update)

        self._clock = QElapsedTimer()
        self._clock.start()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_lab(self, lab: Lab) -> None:
        self._lab = lab
        self._last_pos = None
        self.update()

    def set_anchoring(self, anchoring: Anchoring) -> None:
        if self._lab is not None:
            set_anchoring(self._lab, anchoring)
            self.update()

    def reset_zoom(self) -> None:
        if self._lab is not None:
            reset_zoom(self._lab)
            self.update()

    def reset_pan(self) -> None:
        if self._lab is not None:
            reset_pan(self._lab)
            self.update()

    # ------------------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------------------

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), Qt.GlobalColor.white)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        if self._lab is None:
            painter.end()
            return

        dt = self._clock.restart() / 1000.0
        rect = DeviceRect.from_size(self.width(), self.height())
        frame = render(self._lab, rect, dt)

        self._draw_lines(painter, frame.lines)
        self._draw_markers(painter, frame.markers)
        painter.end()

        if frame.wants_repaint or self._lab.is_animating:
            if not self._timer.isActive():
                self._timer.start()
        elif self._timer.isActive():
            self._timer.stop()

        self.frame_rendered.emit(frame)

    def _pen(self, stroke: Stroke) -> QPen:
        pen = self._pens.get(stroke)
        if pen is None:
            pen = QPen(to_qcolor(stroke.color))
            pen.setWidthF(stroke.width)
            pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            self._pens[stroke] = pen
        return pen

    def _draw_lines(self, painter: QPainter, lines: list[Line[ScreenPoint]]) -> None:
        for line in lines:
            if line.is_transparent or line.stroke.color.is_transparent:
                continue
            # projective maps may send points to infinity
            if not (_is_finite(line.start) and _is_finite(line.end)):
                continue
            painter.setPen(self._pen(line.stroke))
            painter.drawLine(QPointF(*line.start.to_tuple()), QPointF(*line.end.to_tuple()))

    def _draw_markers(self, painter: QPainter, markers: list[Marker]) -> None:
        for marker in markers:
            style = marker.style
            if style.fill.is_transparent and style.stroke.color.is_transparent:
                continue
            if not _is_finite(marker.center):
                continue

            if style.stroke.color.is_transparent:
                painter.setPen(Qt.PenStyle.NoPen)
            else:
                painter.setPen(self._pen(style.stroke))
            painter.setBrush(to_qcolor(style.fill))

            x, y = marker.center.to_tuple()
            r = style.radius
            match style.shape:
                case "square":
                    painter.drawRect(QRectF(x - r, y - r, 2.0 * r, 2.0 * r))
                case _:
                    painter.drawEllipse(QPointF(x, y), r, r)

    # ------------------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._last_pos = event.position()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._last_pos is None or self._lab is None:
            return
        pos = event.position()
        delta = ScreenVector.from_xy(pos.x() - self._last_pos.x(), pos.y() - self._last_pos.y())
        self._last_pos = pos
        if handle_pan(self._lab, delta):
            self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._last_pos = None
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        if self._lab is None:
            return
        delta = event.angleDelta().y() / WHEEL_UNITS_PER_DEGREE
        if handle_scroll(self._lab, delta):
            self.update()
        event.accept()
