"""
Session State (Data Model)
==========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the weights, the clicked points, the canvas size
   and the training state in one place.
2. Immutability: A `Session` is never modified in place. Every change is a new
   value produced by `perceptronlab.model.update.update()`, so views can keep
   a reference to the session they painted without it shifting underneath.
3. Queries: Renderers ask the session for network output, the decision
   boundary and colors instead of recomputing them.

Classes:
    DataPoint: A clicked point with its optional label.
    Dimensions: Canvas pixel size.
    TrainingState: Training flag and epoch counter.
    Session: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional

import numpy as np

from perceptronlab.config import SessionConfig, LEARNING_RATE, EPOCH_LIMIT
from perceptronlab.model import perceptron
from perceptronlab.model.colors import RGB, color_for
from perceptronlab.model.perceptron import Activation, Weight, Weights

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataPoint:
    """A point in graph space. `expected` is 0.0, 1.0, or None when unlabelled."""
    id: str
    x1: float
    x2: float
    expected: Optional[float] = None


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int


@dataclass(frozen=True)
class TrainingState:
    is_training: bool = False
    epochs: int = 0


@dataclass(frozen=True)
class Session:
    """
    Everything the application knows at one moment in time.
    Replace it, never mutate it.
    """
    dimensions: Dimensions
    weights: Weights = field(default_factory=Weights)
    points: tuple[DataPoint, ...] = ()
    training: TrainingState = field(default_factory=TrainingState)
    next_label: Optional[float] = 1.0
    activation: Activation = Activation.STEP
    learning_rate: float = LEARNING_RATE
    epoch_limit: int = EPOCH_LIMIT
    next_serial: int = 1

    # ---- query surface ----

    def current_weights(self) -> list[Weight]:
        return self.weights.as_list()

    def current_points(self) -> list[DataPoint]:
        return list(self.points)

    def evaluate(self, point: DataPoint) -> float:
        return perceptron.evaluate(self.weights, self.activation, point)

    def decision_boundary_y(self, x: float) -> float:
        return perceptron.decision_boundary_y(self.weights, x)

    def color_for(self, output: float) -> RGB:
        return color_for(output)

    def error_count(self) -> int:
        return perceptron.error_count(self.weights, self.activation, self.points)

    def find_point(self, point_id: str) -> Optional[DataPoint]:
        for point in self.points:
            if point.id == point_id:
                return point
        return None


def new_session(config: SessionConfig = SessionConfig()) -> Session:
    """Create the startup session: default (or random) weights, no points, idle."""
    dimensions = Dimensions(config.width, config.height)
    if config.random_weights:
        rng = np.random.default_rng(config.seed)
        weights = perceptron.random_weights(config.width, rng)
    else:
        weights = Weights()

    logger.info(
        f"New session {dimensions.width}x{dimensions.height}, "
        f"activation={config.activation.value}, weights={weights}"
    )
    return Session(
        dimensions=dimensions,
        weights=weights,
        activation=config.activation,
        learning_rate=config.learning_rate,
        epoch_limit=config.epoch_limit,
    )
