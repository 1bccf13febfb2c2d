"""
Saliency maps from central finite differences.

For every cell of a grid over the input plane, estimates the gradient of the
target-class probability with respect to (x, y). The oracle is opaque, so the
gradient is numerical: one batched query of 5 points per cell.
"""

import math

from ..core.models import Bounds, Point, probability_of
from ..core.oracle import PredictionOracle
from .models import SaliencyCell, SaliencyConfig, SaliencyResult


class SaliencyMapper:
    """Computes gradient-magnitude saliency over a rectangular region."""

    def __init__(self, oracle: PredictionOracle, config: SaliencyConfig | None = None):
        """
        Initialize the saliency mapper.

        Args:
            oracle: Trained prediction oracle
            config: Grid resolution, finite-difference step and target class
        """
        self.oracle = oracle
        self.config = config or SaliencyConfig()

    def compute(self, bounds: Bounds | None = None) -> SaliencyResult:
        """
        Compute the saliency grid.

        Costs ``resolution²`` oracle calls of 5 points each.

        Args:
            bounds: Region to cover (default: [-6, 6] on both axes)

        Returns:
            SaliencyResult with ``resolution`` rows of ``resolution`` cells
        """
        bounds = bounds or Bounds()
        resolution = self.config.resolution

        grid = []
        max_saliency = 0.0
        min_saliency = math.inf

        for row_centers in bounds.cell_centers(resolution):
            row = []
            for x, y in row_centers:
                cell = self.cell_at(x, y)
                row.append(cell)
                max_saliency = max(max_saliency, cell.saliency)
                min_saliency = min(min_saliency, cell.saliency)
            grid.append(tuple(row))

        return SaliencyResult(
            grid=tuple(grid),
            min_saliency=min_saliency,
            max_saliency=max_saliency,
            resolution=resolution,
            bounds=bounds,
        )

    def cell_at(self, x: float, y: float) -> SaliencyCell:
        """Estimate the gradient at (x, y) with one 5-point oracle query."""
        eps = self.config.epsilon
        points = [
            Point(x, y),
            Point(x + eps, y),
            Point(x - eps, y),
            Point(x, y + eps),
            Point(x, y - eps),
        ]
        predictions = self.oracle.predict(points)

        center = predictions[0] if predictions else None
        target = self.config.target_class
        if target is None:
            target = center.predicted_class if center is not None else 0

        f_center = probability_of(center, target) if center is not None else 0.0

        def score(index: int) -> float:
            if index < len(predictions) and predictions[index] is not None:
                return probability_of(predictions[index], target)
            return f_center

        grad_x = (score(1) - score(2)) / (2 * eps)
        grad_y = (score(3) - score(4)) / (2 * eps)

        return SaliencyCell(
            x=x,
            y=y,
            saliency=math.hypot(grad_x, grad_y),
            gradient_x=grad_x,
            gradient_y=grad_y,
        )
