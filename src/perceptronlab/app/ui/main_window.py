from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QMainWindow, QWidget, QHBoxLayout, QStatusBar

from perceptronlab.app.application import VISIBLE_APP_NAME
from perceptronlab.app.state import Store
from perceptronlab.app.ui.canvas import PerceptronCanvas
from perceptronlab.app.ui.panels.controls import ControlsPanel
from perceptronlab.controller.training import TrainingTimer
from perceptronlab.model.state import Session


class MainWindow(QMainWindow):
    def __init__(self, store: Store):
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)

        self.store = store
        self.training_timer = TrainingTimer(self.store, parent=self)

        # ---- Central: controls on the left, canvas on the right ----
        central = QWidget(self)
        h = QHBoxLayout(central)

        self.controls = ControlsPanel(self.store, parent=central)
        self.canvas = PerceptronCanvas(self.store, parent=central)
        h.addWidget(self.controls, 0)
        h.addWidget(self.canvas, 1, Qt.AlignmentFlag.AlignCenter)

        self.setCentralWidget(central)

        self.setStatusBar(QStatusBar(self))
        self.statusBar().showMessage(
            self.tr("Left click adds a point, right click removes one.")
        )
        self._was_training = self.store.session.training.is_training
        self.store.session_changed.connect(self._on_session_changed)

    def _on_session_changed(self, session: Session) -> None:
        was_training, self._was_training = self._was_training, session.training.is_training
        # Only the Training -> Idle transition caused by the epoch limit
        if was_training and not session.training.is_training \
                and session.training.epochs >= session.epoch_limit:
            self.statusBar().showMessage(
                self.tr("Training halted after {0} epochs.").format(session.training.epochs)
            )
