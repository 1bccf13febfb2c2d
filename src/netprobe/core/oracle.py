"""
The prediction oracle every toolkit component queries.

Components only see this protocol, never a concrete framework.
"""

from typing import Callable, Protocol, Sequence, runtime_checkable

from .models import Hyperparameters, Point, Prediction, TrainResult


@runtime_checkable
class PredictionOracle(Protocol):
    """Opaque classifier with a train/evaluate/predict lifecycle."""

    def initialize(self, hyperparameters: Hyperparameters) -> None:
        """Build a fresh network. Raises on an invalid configuration."""
        ...

    def update_learning_rate(self, learning_rate: float) -> None:
        """Change the learning rate while keeping trained weights."""
        ...

    def train(self, points: Sequence[Point]) -> TrainResult:
        """Run one optimisation step over ``points``."""
        ...

    def evaluate(self, points: Sequence[Point]) -> TrainResult:
        """Score ``points`` without updating weights."""
        ...

    def predict(self, points: Sequence[Point]) -> list[Prediction]:
        """Batched inference, one prediction per input point."""
        ...


OracleFactory = Callable[[], PredictionOracle]


def predict_one(oracle: PredictionOracle, point: Point) -> Prediction | None:
    """Query a single point, returning None when the oracle gives nothing back."""
    predictions = oracle.predict([point])
    return predictions[0] if predictions else None
