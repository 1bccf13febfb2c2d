import math
from collections import Counter
from typing import Callable

import numpy as np

from ..core.models import Bounds, Point
from ..core.oracle import PredictionOracle, predict_one
from ..core.random import gaussian_noise
from .models import MCDropoutConfig, UncertaintyCell, UncertaintyMapResult, UncertaintyResult


class MCDropoutEstimator:
    """
    Monte Carlo Dropout uncertainty estimator.

    The oracle does not expose stochastic dropout at inference, so the
    dropout effect is approximated by Gaussian noise on the input
    coordinates. The spread of the noisy predictions is decomposed into an
    epistemic part (confidence variance) and an aleatoric part (class
    entropy).
    """

    def __init__(
        self,
        oracle: PredictionOracle,
        config: MCDropoutConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        """
        Initialize MC Dropout estimator.

        Args:
            oracle: Trained prediction oracle
            config: Number of samples and dropout rate
            rng: Random generator for the input noise
        """
        self.oracle = oracle
        self.config = config or MCDropoutConfig()
        self.rng = rng or np.random.default_rng()

    def estimate(self, point: Point) -> UncertaintyResult:
        """
        Estimate uncertainty for a single input.

        Args:
            point: Point to evaluate

        Returns:
            UncertaintyResult with predictions and uncertainty estimates
        """
        num_samples = self.config.num_samples
        noise_scale = self.config.dropout_rate * 0.5

        noise_x = gaussian_noise(self.rng, num_samples) * noise_scale
        noise_y = gaussian_noise(self.rng, num_samples) * noise_scale
        noisy_points = [
            Point(point.x + float(nx), point.y + float(ny), point.label)
            for nx, ny in zip(noise_x, noise_y)
        ]

        samples = tuple(self.oracle.predict(noisy_points))
        clean_prediction = predict_one(self.oracle, point)

        if not samples:
            fallback = clean_prediction.predicted_class if clean_prediction else 0
            return UncertaintyResult(
                point=point,
                predicted_class=fallback,
                mean_confidence=clean_prediction.confidence if clean_prediction else 0.0,
                epistemic_uncertainty=0.0,
                aleatoric_uncertainty=0.0,
                total_uncertainty=0.0,
                confidence_interval=(0.0, 1.0),
                samples=samples,
                clean_prediction=clean_prediction,
            )

        confidences = np.array([p.confidence for p in samples], dtype=float)

        # Epistemic uncertainty: spread of confidence across samples
        mean_confidence = float(confidences.mean())
        epistemic = float(confidences.std()) if np.ptp(confidences) > 0 else 0.0

        # Aleatoric uncertainty: entropy of the sampled class distribution
        class_counts = Counter(p.predicted_class for p in samples)
        probs = np.array(list(class_counts.values()), dtype=float) / len(samples)
        aleatoric = max(0.0, float(-np.sum(probs * np.log2(probs))))

        total = math.sqrt(epistemic**2 + aleatoric**2)

        # 95% interval by nearest rank
        sorted_conf = np.sort(confidences)
        n = len(sorted_conf)
        lower = float(sorted_conf[min(int(math.floor(0.025 * n)), n - 1)])
        upper = float(sorted_conf[min(int(math.floor(0.975 * n)), n - 1)])

        # Majority vote; Counter keeps first-seen order so ties go to the earliest class
        predicted_class = max(class_counts, key=class_counts.__getitem__)

        return UncertaintyResult(
            point=point,
            predicted_class=predicted_class,
            mean_confidence=mean_confidence,
            epistemic_uncertainty=epistemic,
            aleatoric_uncertainty=aleatoric,
            total_uncertainty=total,
            confidence_interval=(lower, upper),
            samples=samples,
            clean_prediction=clean_prediction,
        )

    def estimate_map(
        self,
        resolution: int = 20,
        bounds: Bounds | None = None,
        on_progress: Callable[[int, int], None] | None = None,
    ) -> UncertaintyMapResult:
        """
        Estimate uncertainty at every cell centre of a grid.

        Costs ``num_samples * resolution²`` oracle points, so use a small
        ``num_samples`` (see ``MCDropoutConfig.for_map``).

        Args:
            resolution: Cells per axis
            bounds: Region to cover (default: [-6, 6] on both axes)
            on_progress: Called with (current, total) after each cell

        Returns:
            UncertaintyMapResult with ``resolution`` rows of ``resolution`` cells
        """
        if resolution < 1:
            raise ValueError(f"resolution must be at least 1, got {resolution}")

        bounds = bounds or Bounds()
        total = resolution * resolution
        current = 0
        max_uncertainty = 0.0
        grid = []

        for row_centers in bounds.cell_centers(resolution):
            row = []
            for x, y in row_centers:
                result = self.estimate(Point(x, y))
                row.append(
                    UncertaintyCell(
                        x=x,
                        y=y,
                        predicted_class=result.predicted_class,
                        mean_confidence=result.mean_confidence,
                        uncertainty=result.total_uncertainty,
                    )
                )
                max_uncertainty = max(max_uncertainty, result.total_uncertainty)
                current += 1
                if on_progress is not None:
                    on_progress(current, total)
            grid.append(tuple(row))

        return UncertaintyMapResult(
            grid=tuple(grid),
            max_uncertainty=max_uncertainty,
            resolution=resolution,
            bounds=bounds,
        )
