"""
LIME - Local Interpretable Model-agnostic Explanations.

Explains a single prediction by sampling a neighbourhood around the point,
querying the oracle on it and fitting a kernel-weighted linear surrogate.
"""

import numpy as np

from ..core.errors import MissingPredictionError
from ..core.linalg import weighted_least_squares, weighted_r2
from ..core.models import Point, probability_of
from ..core.oracle import PredictionOracle, predict_one
from .models import FeatureContribution, LIMEConfig, LIMEExplanation

DEFAULT_FEATURE_NAMES = ("X", "Y")


class LIMEExplainer:
    """
    Local surrogate explainer for 2D classifiers.

    The surrogate is ``p(target) ≈ b0 + b1 * x + b2 * y`` fitted by weighted
    least squares, with Gaussian kernel weights on the distance to the
    explained point.
    """

    def __init__(
        self,
        oracle: PredictionOracle,
        config: LIMEConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        """
        Initialize the explainer.

        Args:
            oracle: Trained prediction oracle
            config: Sampling settings (defaults: 100 samples, width 0.75)
            rng: Random generator for neighbourhood sampling
        """
        self.oracle = oracle
        self.config = config or LIMEConfig()
        self.rng = rng or np.random.default_rng()

    def explain(self, point: Point) -> LIMEExplanation:
        """
        Explain the oracle's prediction at ``point``.

        Args:
            point: Point to explain

        Returns:
            LIMEExplanation with one contribution per feature

        Raises:
            MissingPredictionError: If the oracle returns nothing for the point
        """
        num_samples = self.config.num_samples
        width = self.config.kernel_width

        original = predict_one(self.oracle, point)
        if original is None:
            raise MissingPredictionError()
        target_class = original.predicted_class

        offsets = self.rng.uniform(-width, width, size=(num_samples, 2))
        coords = np.array([point.x, point.y]) + offsets
        distances = np.sqrt(np.sum(offsets**2, axis=1))

        samples = [Point(float(sx), float(sy)) for sx, sy in coords]
        sample_predictions = self.oracle.predict(samples)
        if len(sample_predictions) != num_samples:
            raise MissingPredictionError(
                f"Oracle returned {len(sample_predictions)} predictions "
                f"for {num_samples} neighbourhood samples"
            )

        weights = np.exp(-((distances / width) ** 2))
        design = np.column_stack([np.ones(num_samples), coords])
        targets = np.array(
            [probability_of(pred, target_class) for pred in sample_predictions]
        )

        coefficients = weighted_least_squares(design, targets, weights)
        fitted = design @ coefficients
        local_fidelity = weighted_r2(targets, fitted, weights)

        contributions = tuple(
            self._contribution(index, value, float(coefficients[index + 1]))
            for index, value in enumerate((point.x, point.y))
        )

        return LIMEExplanation(
            point=point,
            predicted_class=original.predicted_class,
            confidence=original.confidence,
            contributions=contributions,
            intercept=float(coefficients[0]),
            local_fidelity=local_fidelity,
        )

    def _contribution(self, index: int, value: float, weight: float) -> FeatureContribution:
        names = self.config.feature_names
        name = names[index] if index < len(names) else DEFAULT_FEATURE_NAMES[index]
        return FeatureContribution(
            feature_name=name,
            feature_value=value,
            weight=weight,
            contribution=weight * value,
        )
