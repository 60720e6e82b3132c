"""
Perceptron Model
================
A single neuron with two inputs and a bias.

The "network" is not an object with hidden state: it is the weights plus an
activation policy, and `evaluate()` is a pure function of both. Anything that
needs the network output (rendering, training) calls `evaluate()` with the
current weights, so it can never work against a stale snapshot.

Classes:
    WeightRole: Named role of each weight (x1, x2, bias).
    Weight: `{id, value}` view of a single weight.
    Weights: Immutable set of exactly one weight per role.
    Activation: Step or sigmoid activation policy.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import logging
from typing import Iterable, Optional, Protocol, Sequence

import numpy as np

logger = logging.getLogger(__name__)

SIGMOID_STEEPNESS: float = 0.01


class WeightLayoutError(ValueError):
    """Weights do not line up one-to-one with the feature vector."""


class WeightRole(str, Enum):
    X1 = "w1"
    X2 = "w2"
    BIAS = "bias"


# Order of the weights, aligned with the feature vector (x1, x2, 1.0)
ROLE_ORDER: tuple[WeightRole, ...] = (WeightRole.X1, WeightRole.X2, WeightRole.BIAS)


class Point(Protocol):
    x1: float
    x2: float


class LabelledPoint(Point, Protocol):
    expected: Optional[float]


@dataclass(frozen=True)
class Weight:
    id: str
    value: float


@dataclass(frozen=True)
class Weights:
    """One value per weight role. The count can never change."""
    x1: float = 1.0
    x2: float = 1.0
    bias: float = 1.0

    @classmethod
    def from_sequence(cls, weights: Sequence[Weight]) -> Weights:
        """
        Build from an ordered `{id, value}` sequence.

        Raises:
            WeightLayoutError: If the ids are not exactly w1, w2, bias in that order.
        """
        ids = tuple(w.id for w in weights)
        expected = tuple(role.value for role in ROLE_ORDER)
        if ids != expected:
            raise WeightLayoutError(
                f"Expected weights {list(expected)} to match the feature vector, got {list(ids)}."
            )
        return cls(*(float(w.value) for w in weights))

    def get(self, role: WeightRole) -> float:
        return getattr(self, _FIELDS[role])

    def with_value(self, weight_id: str, value: float) -> Weights:
        """Return a copy with the weight `weight_id` replaced."""
        try:
            role = WeightRole(weight_id)
        except ValueError:
            raise KeyError(f"No weight with id '{weight_id}'") from None
        return replace(self, **{_FIELDS[role]: float(value)})

    def as_list(self) -> list[Weight]:
        return [Weight(role.value, self.get(role)) for role in ROLE_ORDER]


_FIELDS: dict[WeightRole, str] = {
    WeightRole.X1: "x1",
    WeightRole.X2: "x2",
    WeightRole.BIAS: "bias",
}


class Activation(str, Enum):
    """Activation policy. Fixed per session, not chosen per call."""
    STEP = "step"
    SIGMOID = "sigmoid"

    def __call__(self, raw: float) -> float:
        if self is Activation.STEP:
            return 1.0 if raw > 0 else 0.0
        # exp overflow only happens for very negative raw, where the output is 0
        with np.errstate(over="ignore"):
            return float(1.0 / (1.0 + np.exp(-SIGMOID_STEEPNESS * np.float64(raw))))


def feature_vector(point: Point) -> dict[WeightRole, float]:
    return {
        WeightRole.X1: point.x1,
        WeightRole.X2: point.x2,
        WeightRole.BIAS: 1.0,
    }


def sigma(weights: Weights, point: Point) -> float:
    """Weighted sum w1*x1 + w2*x2 + bias*1."""
    features = feature_vector(point)
    return sum(weights.get(role) * features[role] for role in ROLE_ORDER)


def evaluate(weights: Weights, activation: Activation, point: Point) -> float:
    """Network output for `point` under the given weights."""
    return activation(sigma(weights, point))


def train_point(
    weights: Weights,
    activation: Activation,
    point: LabelledPoint,
    learning_rate: float
) -> Weights:
    """Apply the delta rule for a single labelled point."""
    error = point.expected - evaluate(weights, activation, point)
    if error == 0:
        return weights
    features = feature_vector(point)
    return Weights(**{
        _FIELDS[role]: weights.get(role) + learning_rate * error * features[role]
        for role in ROLE_ORDER
    })


def train_epoch(
    weights: Weights,
    points: Iterable[LabelledPoint],
    activation: Activation,
    learning_rate: float
) -> Weights:
    """
    One pass of the weight-update rule over `points`, in order.

    Updates accumulate: each point is evaluated against the weights left by the
    previous point of the same epoch, not against the epoch-start weights.
    Unlabelled points (``expected is None``) are skipped.

    Args:
        weights: Weights at the start of the epoch.
        points: Training points in stored order.
        activation: Activation policy of the session.
        learning_rate: Step size of the update.

    Returns:
        Weights after the last point has been applied.
    """
    for point in points:
        if point.expected is None:
            continue
        weights = train_point(weights, activation, point, learning_rate)
    return weights


def decision_boundary_y(weights: Weights, x: float) -> float:
    """
    Solve w1*x + w2*y + bias = 0 for y.

    Division follows IEEE-754: a zero w2 gives +-inf (or NaN when the
    numerator is zero too) instead of raising.
    """
    w2 = np.float64(weights.x2)
    with np.errstate(divide="ignore", invalid="ignore"):
        y = -(np.float64(weights.x1) / w2) * x - np.float64(weights.bias) / w2
    return float(y)


def parse_weight(text: str) -> float:
    """Parse user input for a weight; anything unparsable becomes 0.0."""
    try:
        return float(text)
    except (TypeError, ValueError):
        logger.warning(f"Could not parse weight value {text!r}, using 0.0.")
        return 0.0


def random_weights(span: float, rng: np.random.Generator) -> Weights:
    """Sample every weight uniformly from [-span/2, span/2]."""
    values = rng.uniform(-0.5 * span, 0.5 * span, size=len(ROLE_ORDER))
    return Weights(*(float(v) for v in values))


def error_count(
    weights: Weights,
    activation: Activation,
    points: Iterable[LabelledPoint]
) -> int:
    """Number of labelled points whose rounded output differs from the label."""
    errors = 0
    for point in points:
        if point.expected is None:
            continue
        predicted = 1.0 if evaluate(weights, activation, point) >= 0.5 else 0.0
        if predicted != point.expected:
            errors += 1
    return errors
