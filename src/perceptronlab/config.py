"""
Configuration & Constants
=========================
This module serves as the central registry for the numbers the rest of the
application is tuned with.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (learning rate, timer cadence,
   canvas size) from being scattered throughout the code.
2. Startup: It bundles the values a new session is created from into a single
   `SessionConfig` that the entry point can fill from command-line flags.

Exports:
    LEARNING_RATE (float): Step size of the weight-update rule.
    SIGMOID_STEEPNESS (float): Steepness k of the sigmoid activation.
    EPOCH_LIMIT (int): Number of epochs after which automatic training halts.
    TICK_INTERVAL_MS (int): Cadence of the training timer.
    DISABLED_COLOR, ENABLED_COLOR (RGB): Color endpoints, from model.colors.
    SessionConfig: Settings used to create the initial session.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from perceptronlab.model.colors import DISABLED_COLOR, ENABLED_COLOR
from perceptronlab.model.perceptron import Activation, SIGMOID_STEEPNESS

# Model
LEARNING_RATE: float = 0.4
EPOCH_LIMIT: int = 500

# Training loop
TICK_INTERVAL_MS: int = 100

# Canvas
CANVAS_WIDTH: int = 500
CANVAS_HEIGHT: int = 500
CELL_SIZE: int = 20
POINT_RADIUS: int = 6
HIT_RADIUS: int = 10

# Colors (endpoints DISABLED_COLOR and ENABLED_COLOR live in model.colors)
AXIS_COLOR: str = "#606060"
BOUNDARY_COLOR: str = "black"


@dataclass(frozen=True)
class SessionConfig:
    """Values a fresh session is built from."""
    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT
    activation: Activation = Activation.STEP
    learning_rate: float = LEARNING_RATE
    epoch_limit: int = EPOCH_LIMIT
    random_weights: bool = False
    seed: Optional[int] = None
