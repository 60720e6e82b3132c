from __future__ import annotations

from PySide6.QtCore import Qt, QPointF, QRectF, QSize
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPaintEvent, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from perceptronlab.app.state import Store
from perceptronlab.config import (
    AXIS_COLOR, BOUNDARY_COLOR, CELL_SIZE, HIT_RADIUS, POINT_RADIUS
)
from perceptronlab.model.colors import RGB
from perceptronlab.model.scene import Scene, build_scene, nearest_point
from perceptronlab.model.update import AddCanvasPoint, RemovePoint


def _qcolor(color: RGB) -> QColor:
    return QColor(color.to_hex())


class PerceptronCanvas(QWidget):
    """
    Fixed-size drawing surface for the current session:
      - background cells colored by network output,
      - graph axes,
      - decision boundary,
      - data points (labelled points outlined in black, unlabelled in grey).

    Left click adds a point with the selected label, right click removes the
    point under the cursor.
    """
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        dims = store.session.dimensions
        self.setFixedSize(dims.width, dims.height)
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self.setCursor(Qt.CursorShape.CrossCursor)

        self.store.session_changed.connect(lambda *_: self.update())

    def sizeHint(self) -> QSize:
        dims = self.store.session.dimensions
        return QSize(dims.width, dims.height)

    # ---- input ----

    def mousePressEvent(self, event: QMouseEvent) -> None:
        pos = event.position()
        if event.button() == Qt.MouseButton.LeftButton:
            self.store.dispatch(AddCanvasPoint(pos.x(), pos.y()))
        elif event.button() == Qt.MouseButton.RightButton:
            point_id = nearest_point(self.store.session, pos.x(), pos.y(), HIT_RADIUS)
            if point_id is not None:
                self.store.dispatch(RemovePoint(point_id))
        else:
            super().mousePressEvent(event)

    # ---- painting ----

    def paintEvent(self, event: QPaintEvent) -> None:
        scene = build_scene(self.store.session, CELL_SIZE)
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            self._paint_scene(painter, scene)
        finally:
            painter.end()

    def _paint_scene(self, painter: QPainter, scene: Scene) -> None:
        painter.setPen(Qt.PenStyle.NoPen)
        for cell in scene.background:
            painter.fillRect(QRectF(cell.x, cell.y, cell.size, cell.size), _qcolor(cell.color))

        painter.setPen(QPen(QColor(AXIS_COLOR), 1.0, Qt.PenStyle.DashLine))
        for line in scene.gridlines:
            painter.drawLine(QPointF(line.x0, line.y0), QPointF(line.x1, line.y1))

        if scene.boundary is not None:
            b = scene.boundary
            painter.setPen(QPen(QColor(BOUNDARY_COLOR), 2.0))
            painter.drawLine(QPointF(b.x0, b.y0), QPointF(b.x1, b.y1))

        for dot in scene.points:
            outline = QColor("black") if dot.labelled else QColor("grey")
            painter.setPen(QPen(outline, 1.5))
            painter.setBrush(_qcolor(dot.color))
            painter.drawEllipse(QPointF(dot.x, dot.y), POINT_RADIUS, POINT_RADIUS)
