"""
Permutation feature importance.

Measures how much accuracy drops when one input coordinate is shuffled across
the dataset, breaking its relationship with the label.
"""

from typing import Sequence

import numpy as np
from sklearn.metrics import accuracy_score

from ..core.models import Point
from ..core.oracle import PredictionOracle
from .models import FeatureImportanceResult


def calculate_accuracy(oracle: PredictionOracle, data: Sequence[Point]) -> float:
    """Fraction of points whose predicted class matches the label."""
    predictions = oracle.predict(data)
    y_true = [point.label for point in data]
    # A missing prediction counts as wrong
    y_pred = [
        predictions[i].predicted_class if i < len(predictions) else -1
        for i in range(len(data))
    ]
    return float(accuracy_score(y_true, y_pred))


def permute_feature(
    data: Sequence[Point], feature_index: int, rng: np.random.Generator
) -> list[Point]:
    """Copy of ``data`` with one coordinate shuffled across points."""
    values = rng.permutation([point.x if feature_index == 0 else point.y for point in data])

    if feature_index == 0:
        return [Point(v, p.y, p.label, p.is_validation) for p, v in zip(data, values.tolist())]
    return [Point(p.x, v, p.label, p.is_validation) for p, v in zip(data, values.tolist())]


def calculate_feature_importance(
    oracle: PredictionOracle,
    data: Sequence[Point],
    feature_names: Sequence[str] = ("X", "Y"),
    iterations: int = 10,
    rng: np.random.Generator | None = None,
) -> list[FeatureImportanceResult]:
    """
    Calculate permutation importance for each input feature.

    Args:
        oracle: Trained prediction oracle
        data: Labelled points to score on
        feature_names: Names of the x and y features
        iterations: Shuffles per feature
        rng: Random generator for the shuffles

    Returns:
        Results sorted by importance, most important first
    """
    if len(data) == 0:
        raise ValueError("No data provided for feature importance calculation")
    if iterations < 1:
        raise ValueError(f"iterations must be at least 1, got {iterations}")

    rng = rng or np.random.default_rng()
    baseline_accuracy = calculate_accuracy(oracle, data)

    results = []
    for feature_index in range(2):
        drops = np.array(
            [
                baseline_accuracy
                - calculate_accuracy(oracle, permute_feature(data, feature_index, rng))
                for _ in range(iterations)
            ]
        )
        mean_importance = float(drops.mean())

        results.append(
            FeatureImportanceResult(
                feature_name=(
                    feature_names[feature_index]
                    if feature_index < len(feature_names)
                    else f"Feature {feature_index}"
                ),
                feature_index=feature_index,
                importance=mean_importance,
                importance_std=float(drops.std()),
                baseline_accuracy=baseline_accuracy,
                permuted_accuracy=baseline_accuracy - mean_importance,
            )
        )

    results.sort(key=lambda r: r.importance, reverse=True)
    return results
