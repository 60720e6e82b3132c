from __future__ import annotations

from PySide6.QtCore import Slot
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QComboBox, QLabel, QGridLayout, QLineEdit,
    QPushButton, QHBoxLayout,
)

from perceptronlab.app.state import Store
from perceptronlab.app.ui.panels.base import BasePanel
from perceptronlab.model.perceptron import ROLE_ORDER, WeightRole
from perceptronlab.model.state import Session
from perceptronlab.model.update import (
    ClearPoints, RandomizeWeights, SetLabel, SetWeight, StartTraining, Step, StopTraining
)

LABEL_CHOICES: list[tuple[float | None, str]] = [
    (1.0, "Class 1"),
    (0.0, "Class 0"),
    (None, "Unlabelled"),
]

WEIGHT_LABELS = {
    "w1": "Weight x1",
    "w2": "Weight x2",
    "bias": "Bias",
}


class ControlsPanel(BasePanel):
    """
    Side panel driving the session.

    Top: label given to the next clicked point.
    Middle: free-text weight editors (unparsable input becomes 0).
    Bottom: training buttons and epoch/error status.
    """
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)

        root = QVBoxLayout(self)

        # label selection
        label_box = QGroupBox(self.tr("Next point"), self)
        root.addWidget(label_box, 0)
        sel = QGridLayout(label_box)
        sel.addWidget(QLabel(self.tr("Label:"), label_box), 0, 0)
        self.label_combo = QComboBox(label_box)
        for _, text in LABEL_CHOICES:
            self.label_combo.addItem(self.tr(text))
        sel.addWidget(self.label_combo, 0, 1)

        # weights
        weight_box = QGroupBox(self.tr("Weights"), self)
        root.addWidget(weight_box, 0)
        grid = QGridLayout(weight_box)
        self._weight_edits: dict[str, QLineEdit] = {}
        for row, role in enumerate(ROLE_ORDER):
            grid.addWidget(QLabel(self.tr(WEIGHT_LABELS[role.value]), weight_box), row, 0)
            edit = QLineEdit(weight_box)
            edit.editingFinished.connect(lambda weight_id=role.value: self._on_weight_edited(weight_id))
            grid.addWidget(edit, row, 1)
            self._weight_edits[role.value] = edit
        self.btn_randomize = QPushButton(self.tr("Randomize"), weight_box)
        grid.addWidget(self.btn_randomize, len(ROLE_ORDER), 0, 1, 2)

        # training
        train_box = QGroupBox(self.tr("Training"), self)
        root.addWidget(train_box, 0)
        v = QVBoxLayout(train_box)
        buttons = QHBoxLayout()
        self.btn_train = QPushButton(self.tr("Start"), train_box)
        self.btn_step = QPushButton(self.tr("Step"), train_box)
        self.btn_clear = QPushButton(self.tr("Clear points"), train_box)
        for b in (self.btn_train, self.btn_step, self.btn_clear):
            buttons.addWidget(b)
        v.addLayout(buttons)
        self.lbl_epochs = QLabel(train_box)
        self.lbl_errors = QLabel(train_box)
        v.addWidget(self.lbl_epochs)
        v.addWidget(self.lbl_errors)

        root.addStretch()

        # wiring
        self.label_combo.currentIndexChanged.connect(self._on_label_changed)
        self.btn_randomize.clicked.connect(lambda: self.store.dispatch(RandomizeWeights()))
        self.btn_train.clicked.connect(self._on_train_clicked)
        self.btn_step.clicked.connect(lambda: self.store.dispatch(Step()))
        self.btn_clear.clicked.connect(lambda: self.store.dispatch(ClearPoints()))
        self.store.session_changed.connect(self._refresh)

        self._select_label(self.store.session.next_label)
        self._refresh(self.store.session)

    def _select_label(self, value: float | None) -> None:
        values = [v for v, _ in LABEL_CHOICES]
        if value in values:
            self.label_combo.setCurrentIndex(values.index(value))

    @Slot()
    def _on_label_changed(self) -> None:
        self.store.dispatch(SetLabel(LABEL_CHOICES[self.label_combo.currentIndex()][0]))

    def _on_weight_edited(self, weight_id: str) -> None:
        edit = self._weight_edits[weight_id]
        # editingFinished also fires on focus-out; untouched text may be stale
        if not edit.isModified():
            return
        self.store.dispatch(SetWeight(weight_id, edit.text()))
        # Show the coerced value, the edit still has focus so _refresh skipped it
        edit.setText(f"{self.store.session.weights.get(WeightRole(weight_id)):g}")

    @Slot()
    def _on_train_clicked(self) -> None:
        if self.store.session.training.is_training:
            self.store.dispatch(StopTraining())
        else:
            self.store.dispatch(StartTraining())

    def _refresh(self, session: Session) -> None:
        for weight in session.current_weights():
            edit = self._weight_edits[weight.id]
            # Don't overwrite what the user is typing
            if not edit.hasFocus():
                edit.setText(f"{weight.value:g}")

        self.btn_train.setText(self.tr("Stop") if session.training.is_training else self.tr("Start"))
        self.lbl_epochs.setText(self.tr("Epochs: {0} / {1}").format(
            session.training.epochs, session.epoch_limit
        ))
        self.lbl_errors.setText(self.tr("Misclassified: {0} / {1}").format(
            session.error_count(), sum(p.expected is not None for p in session.points)
        ))
