import math
import logging

import numpy as np
import pytest

from perceptronlab.model.perceptron import (
    Activation, Weight, WeightLayoutError, WeightRole, Weights,
    decision_boundary_y, error_count, evaluate, parse_weight, random_weights,
    sigma, train_epoch,
)
from perceptronlab.model.state import DataPoint


class TestWeights:
    def test_default_weights_are_one(self):
        assert Weights().as_list() == [Weight("w1", 1.0), Weight("w2", 1.0), Weight("bias", 1.0)]

    def test_with_value_replaces_only_named_weight(self):
        weights = Weights(1.0, 2.0, 3.0).with_value("w2", -4.0)
        assert weights == Weights(1.0, -4.0, 3.0)

    def test_with_value_unknown_id(self):
        with pytest.raises(KeyError):
            Weights().with_value("w3", 1.0)

    def test_from_sequence(self):
        seq = [Weight("w1", 2.0), Weight("w2", 1.0), Weight("bias", 4.0)]
        assert Weights.from_sequence(seq) == Weights(2.0, 1.0, 4.0)

    @pytest.mark.parametrize("ids", [
        ("w1", "w2"),
        ("w1", "w2", "bias", "w3"),
        ("w2", "w1", "bias"),
    ])
    def test_from_sequence_rejects_bad_layout(self, ids):
        with pytest.raises(WeightLayoutError):
            Weights.from_sequence([Weight(i, 1.0) for i in ids])

    def test_get_by_role(self):
        weights = Weights(1.0, 2.0, 3.0)
        assert weights.get(WeightRole.X2) == 2.0
        assert weights.get(WeightRole.BIAS) == 3.0


class TestActivation:
    def test_step(self):
        assert Activation.STEP(0.1) == 1.0
        assert Activation.STEP(0.0) == 0.0
        assert Activation.STEP(-3.0) == 0.0

    def test_sigmoid(self):
        assert Activation.SIGMOID(0.0) == 0.5
        assert Activation.SIGMOID(100.0) == pytest.approx(1 / (1 + math.exp(-1.0)))

    def test_sigmoid_saturates_without_overflow(self):
        assert Activation.SIGMOID(-1e6) == 0.0
        assert Activation.SIGMOID(1e6) == 1.0


def test_sigma_is_linear_combination():
    point = DataPoint("p", 3.0, -2.0)
    assert sigma(Weights(2.0, 0.5, 4.0), point) == 2.0 * 3.0 + 0.5 * -2.0 + 4.0


def test_evaluate_is_idempotent():
    weights = Weights(0.3, -1.2, 0.7)
    point = DataPoint("p", 12.0, 5.0)
    for activation in Activation:
        assert evaluate(weights, activation, point) == evaluate(weights, activation, point)


class TestTrainEpoch:
    def test_no_points_leaves_weights_unchanged(self):
        weights = Weights(0.1, 0.2, 0.3)
        assert train_epoch(weights, (), Activation.STEP, 0.4) == weights

    def test_unlabelled_points_are_skipped(self):
        weights = Weights(1.0, 1.0, 1.0)
        points = (DataPoint("p", 5.0, 5.0, None),)
        assert train_epoch(weights, points, Activation.STEP, 0.4) == weights

    def test_single_update(self):
        # sigma = 1 > 0 -> output 1, error -1
        points = (DataPoint("p", 0.0, 0.0, 0.0),)
        result = train_epoch(Weights(1.0, 1.0, 1.0), points, Activation.STEP, 0.4)
        assert result.x1 == 1.0
        assert result.x2 == 1.0
        assert result.bias == pytest.approx(0.6)

    def test_single_sigmoid_update(self):
        weights = Weights(0.5, -0.25, 2.0)
        point = DataPoint("p", 30.0, 40.0, 1.0)
        lr = 0.4

        raw = 0.5 * 30.0 + -0.25 * 40.0 + 2.0
        output = 1 / (1 + math.exp(-0.01 * raw))
        delta = lr * (1.0 - output)

        result = train_epoch(weights, (point,), Activation.SIGMOID, lr)
        assert 0.0 < 1.0 - output < 1.0
        assert result.x1 == pytest.approx(0.5 + delta * 30.0)
        assert result.x2 == pytest.approx(-0.25 + delta * 40.0)
        assert result.bias == pytest.approx(2.0 + delta)

    def test_updates_fold_sequentially(self):
        """
        The second point must see the weights left by the first one.

        With the epoch-start weights the second point is already classified
        correctly; after the first point lowers the bias it is not.
        """
        start = Weights(1.0, 0.1, 0.3)
        first = DataPoint("p1", 0.0, 0.0, 0.0)
        second = DataPoint("p2", 0.0, 1.0, 1.0)
        lr = 0.4

        folded = train_epoch(start, (first, second), Activation.STEP, lr)

        # every point evaluated against the epoch-start weights
        deltas = {"x1": 0.0, "x2": 0.0, "bias": 0.0}
        for p in (first, second):
            error = p.expected - evaluate(start, Activation.STEP, p)
            deltas["x1"] += lr * error * p.x1
            deltas["x2"] += lr * error * p.x2
            deltas["bias"] += lr * error
        batched = Weights(start.x1 + deltas["x1"], start.x2 + deltas["x2"], start.bias + deltas["bias"])

        assert folded.x2 == pytest.approx(0.5)
        assert folded.bias == pytest.approx(0.3)
        assert batched.x2 == pytest.approx(0.1)
        assert batched.bias == pytest.approx(-0.1)
        assert folded != batched

    def test_and_gate_converges(self, and_gate):
        weights = Weights(1.0, 1.0, 1.0)
        for epoch in range(500):
            if error_count(weights, Activation.STEP, and_gate) == 0:
                break
            weights = train_epoch(weights, and_gate, Activation.STEP, 0.4)

        assert error_count(weights, Activation.STEP, and_gate) == 0
        for point in and_gate:
            assert evaluate(weights, Activation.STEP, point) == point.expected


class TestDecisionBoundary:
    def test_intercept(self):
        assert decision_boundary_y(Weights(2.0, 1.0, 4.0), 0.0) == -4.0

    def test_slope(self):
        # 2x + 1y + 4 = 0 -> y = -2x - 4
        assert decision_boundary_y(Weights(2.0, 1.0, 4.0), 3.0) == -10.0

    def test_zero_second_weight_is_not_finite(self):
        assert math.isinf(decision_boundary_y(Weights(2.0, 0.0, 4.0), 1.0))
        assert math.isnan(decision_boundary_y(Weights(0.0, 0.0, 0.0), 1.0))


class TestParseWeight:
    @pytest.mark.parametrize("text, expected", [
        ("1.5", 1.5),
        ("-3", -3.0),
        (" 2e2 ", 200.0),
    ])
    def test_valid(self, text, expected):
        assert parse_weight(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "1,5", "--1"])
    def test_invalid_becomes_zero(self, text, caplog):
        with caplog.at_level(logging.WARNING, logger="perceptronlab"):
            assert parse_weight(text) == 0.0
        assert "Could not parse weight" in caplog.text


def test_random_weights_within_span():
    rng = np.random.default_rng(42)
    for _ in range(20):
        weights = random_weights(500, rng)
        for weight in weights.as_list():
            assert -250.0 <= weight.value <= 250.0


def test_random_weights_reproducible_with_seed():
    a = random_weights(500, np.random.default_rng(7))
    b = random_weights(500, np.random.default_rng(7))
    assert a == b


def test_error_count(and_gate):
    # all-ones weights put every point in class 1, only (1, 1) is right
    assert error_count(Weights(1.0, 1.0, 1.0), Activation.STEP, and_gate) == 3
    unlabelled = and_gate + (DataPoint("p5", -9.0, -9.0, None),)
    assert error_count(Weights(1.0, 1.0, 1.0), Activation.STEP, unlabelled) == 3
