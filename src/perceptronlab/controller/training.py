"""
Training Timer
==============
Drives automatic training from the Qt event loop.

Why is this file needed?
------------------------
1. Cadence: Training advances one epoch per timer tick (100 ms by default) so
   the user can watch the decision boundary move.
2. Single thread: Each tick is a plain `Tick` message dispatched on the GUI
   thread. An epoch over a handful of points is far cheaper than a frame, so
   no worker thread is needed and no locking exists.

Classes:
    TrainingTimer: Starts/stops a QTimer following the store's training flag.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QTimer

from perceptronlab.app.state import Store
from perceptronlab.config import TICK_INTERVAL_MS
from perceptronlab.model.state import Session
from perceptronlab.model.update import Tick

logger = logging.getLogger(__name__)


class TrainingTimer(QObject):
    def __init__(self, store: Store, interval_ms: int = TICK_INTERVAL_MS, parent: QObject | None = None):
        super().__init__(parent)
        self.store = store

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

        self.store.session_changed.connect(self._sync)
        self._sync(self.store.session)

    def is_active(self) -> bool:
        return self._timer.isActive()

    def _sync(self, session: Session) -> None:
        """Run the timer exactly while the session is training."""
        if session.training.is_training and not self._timer.isActive():
            logger.debug("Training timer started.")
            self._timer.start()
        elif not session.training.is_training and self._timer.isActive():
            logger.debug("Training timer stopped.")
            self._timer.stop()

    def _on_timeout(self) -> None:
        self.store.dispatch(Tick())
