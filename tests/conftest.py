import math
from typing import Callable, Sequence

import numpy as np
import pytest

from netprobe.core import (
    BinaryPrediction,
    Hyperparameters,
    MulticlassPrediction,
    Point,
    TrainResult,
)


class FunctionOracle:
    """Binary oracle whose class-1 probability is a fixed function of (x, y)."""

    def __init__(self, prob_fn: Callable[[float, float], float]):
        self.prob_fn = prob_fn
        self.batch_sizes: list[int] = []

    def initialize(self, hyperparameters: Hyperparameters) -> None:
        pass

    def update_learning_rate(self, learning_rate: float) -> None:
        pass

    def train(self, points: Sequence[Point]) -> TrainResult:
        return TrainResult(loss=0.0, accuracy=0.0)

    def evaluate(self, points: Sequence[Point]) -> TrainResult:
        predictions = self.predict(points)
        correct = sum(p.predicted_class == q.label for p, q in zip(predictions, points))
        return TrainResult(loss=0.0, accuracy=correct / len(points))

    def predict(self, points: Sequence[Point]) -> list:
        self.batch_sizes.append(len(points))
        predictions = []
        for point in points:
            p1 = self.prob_fn(point.x, point.y)
            predicted_class = 1 if p1 > 0.5 else 0
            confidence = p1 if predicted_class == 1 else 1.0 - p1
            predictions.append(BinaryPrediction(point.x, point.y, predicted_class, confidence))
        return predictions


class ConstantMulticlassOracle(FunctionOracle):
    """Always class 1 with probabilities (0.2, 0.8)."""

    def __init__(self):
        super().__init__(lambda x, y: 0.8)

    def predict(self, points: Sequence[Point]) -> list:
        self.batch_sizes.append(len(points))
        return [MulticlassPrediction(p.x, p.y, 1, 0.8, (0.2, 0.8)) for p in points]


class SilentOracle(FunctionOracle):
    """Returns no predictions at all."""

    def __init__(self):
        super().__init__(lambda x, y: 0.5)

    def predict(self, points: Sequence[Point]) -> list:
        return []


class FailingOracle(FunctionOracle):
    """Raises for any batch that contains a point with x above ``limit``."""

    def __init__(self, prob_fn: Callable[[float, float], float], limit: float):
        super().__init__(prob_fn)
        self.limit = limit

    def predict(self, points: Sequence[Point]) -> list:
        if any(p.x > self.limit for p in points):
            raise RuntimeError("oracle unavailable")
        return super().predict(points)


def sigmoid(value: float) -> float:
    return 1.0 / (1.0 + math.exp(-value))


class ScoredOracle:
    """
    Oracle for architecture search tests.

    Validation accuracy is a deterministic function of the hyperparameters it
    was initialised with, so searches can be checked without training.
    """

    def __init__(self, log: list):
        self.log = log
        self.hyperparameters: Hyperparameters | None = None
        self.train_calls = 0

    def initialize(self, hyperparameters: Hyperparameters) -> None:
        self.hyperparameters = hyperparameters
        self.log.append(self)

    def update_learning_rate(self, learning_rate: float) -> None:
        pass

    def train(self, points: Sequence[Point]) -> TrainResult:
        self.train_calls += 1
        return TrainResult(loss=1.0, accuracy=0.5)

    def evaluate(self, points: Sequence[Point]) -> TrainResult:
        hp = self.hyperparameters
        accuracy = min(1.0, sum(hp.layers) / 100 + hp.learning_rate)
        return TrainResult(loss=1.0 - accuracy, accuracy=accuracy)

    def predict(self, points: Sequence[Point]) -> list:
        return []


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def constant_oracle():
    return ConstantMulticlassOracle()


@pytest.fixture
def vertical_boundary_oracle():
    """Class 1 right of x = 0, independent of y."""
    return FunctionOracle(lambda x, y: sigmoid(4.0 * x))


@pytest.fixture
def linear_oracle():
    """Class-1 probability linear in x and y around the origin."""
    return FunctionOracle(lambda x, y: min(1.0, max(0.0, 0.5 + 0.1 * x - 0.05 * y)))


@pytest.fixture
def silent_oracle():
    return SilentOracle()


@pytest.fixture
def oracle_log():
    return []


@pytest.fixture
def scored_factory(oracle_log):
    return lambda: ScoredOracle(oracle_log)


@pytest.fixture
def labelled_points():
    """Points on both sides of x = 0, labelled by that side."""
    xs = np.linspace(-3, 3, 20)
    ys = np.linspace(-2, 2, 20)
    return [Point(float(x), float(y), int(x > 0)) for x, y in zip(xs, ys[::-1])]
