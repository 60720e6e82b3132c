from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from perceptronlab.model.state import Session
from perceptronlab.model.update import Message, update

logger = logging.getLogger(__name__)


class Store(QObject):
    """Owns the single Session and notifies views whenever it is replaced."""
    session_changed = Signal(object)

    def __init__(self, session: Session) -> None:
        super().__init__()
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def dispatch(self, message: Message) -> None:
        new_session = update(self._session, message)
        if new_session is self._session:
            return
        self._session = new_session
        self.session_changed.emit(self._session)
