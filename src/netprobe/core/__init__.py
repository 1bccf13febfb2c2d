"""
Core types, the oracle protocol and numeric helpers.
"""

from .errors import (
    GradientExplosionError,
    MissingPredictionError,
    ModelNotInitialisedError,
    OracleError,
)
from .linalg import solve_linear_system, weighted_least_squares, weighted_r2
from .models import (
    BinaryPrediction,
    Bounds,
    Hyperparameters,
    MulticlassPrediction,
    Point,
    Prediction,
    TrainResult,
    probability_of,
)
from .oracle import OracleFactory, PredictionOracle, predict_one
from .random import gaussian_noise, make_rng

__all__ = [
    "BinaryPrediction",
    "Bounds",
    "GradientExplosionError",
    "Hyperparameters",
    "MissingPredictionError",
    "ModelNotInitialisedError",
    "MulticlassPrediction",
    "OracleError",
    "OracleFactory",
    "Point",
    "Prediction",
    "PredictionOracle",
    "TrainResult",
    "gaussian_noise",
    "make_rng",
    "predict_one",
    "probability_of",
    "solve_linear_system",
    "weighted_least_squares",
    "weighted_r2",
]
