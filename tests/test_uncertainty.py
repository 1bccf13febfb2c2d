import math

import numpy as np
import pytest

from netprobe.core import BinaryPrediction, Bounds, Point
from netprobe.uncertainty import (
    MCDropoutConfig,
    MCDropoutEstimator,
    get_uncertainty_interpretation,
    is_reliable,
    uncertainty_level,
)


class TestMCDropoutEstimator:
    def test_constant_oracle_is_certain(self, constant_oracle, rng):
        result = MCDropoutEstimator(constant_oracle, rng=rng).estimate(Point(0.5, 0.5))

        assert result.predicted_class == 1
        assert result.mean_confidence == pytest.approx(0.8)
        assert result.epistemic_uncertainty == 0.0
        assert result.aleatoric_uncertainty == 0.0
        assert result.total_uncertainty == 0.0
        assert result.confidence_interval == (0.8, 0.8)
        assert len(result.samples) == 30

    def test_one_batched_query_plus_clean(self, constant_oracle, rng):
        config = MCDropoutConfig(num_samples=12)
        result = MCDropoutEstimator(constant_oracle, config, rng=rng).estimate(Point(0, 0))

        assert constant_oracle.batch_sizes == [12, 1]
        assert result.clean_prediction.predicted_class == 1

    def test_boundary_point_is_uncertain(self, vertical_boundary_oracle, rng):
        config = MCDropoutConfig(num_samples=200, dropout_rate=1.0)
        result = MCDropoutEstimator(vertical_boundary_oracle, config, rng=rng).estimate(
            Point(0.0, 0.0)
        )

        assert 0.5 < result.aleatoric_uncertainty <= 1.0
        assert result.epistemic_uncertainty > 0.0
        assert result.total_uncertainty == pytest.approx(
            math.hypot(result.epistemic_uncertainty, result.aleatoric_uncertainty)
        )
        lower, upper = result.confidence_interval
        assert lower <= result.mean_confidence <= upper

        votes = [p.predicted_class for p in result.samples]
        assert votes.count(result.predicted_class) >= len(votes) / 2

    def test_seeded_runs_match(self, vertical_boundary_oracle):
        first = MCDropoutEstimator(vertical_boundary_oracle, rng=np.random.default_rng(3))
        second = MCDropoutEstimator(vertical_boundary_oracle, rng=np.random.default_rng(3))

        assert first.estimate(Point(0.05, 0.0)) == second.estimate(Point(0.05, 0.0))

    def test_no_samples_falls_back(self, silent_oracle, rng):
        result = MCDropoutEstimator(silent_oracle, rng=rng).estimate(Point(0.0, 0.0))

        assert result.samples == ()
        assert result.predicted_class == 0
        assert result.total_uncertainty == 0.0
        assert result.confidence_interval == (0.0, 1.0)


class TestUncertaintyMap:
    def test_grid(self, vertical_boundary_oracle, rng):
        estimator = MCDropoutEstimator(
            vertical_boundary_oracle, MCDropoutConfig.for_map(), rng=rng
        )
        progress = []

        result = estimator.estimate_map(
            3, Bounds(-1, 1, -1, 1), on_progress=lambda c, t: progress.append((c, t))
        )

        assert len(result.grid) == 3
        assert all(len(row) == 3 for row in result.grid)
        assert progress[-1] == (9, 9)
        assert all(
            cell.uncertainty <= result.max_uncertainty for row in result.grid for cell in row
        )
        # Ten noisy points and one clean query per cell
        assert vertical_boundary_oracle.batch_sizes == [10, 1] * 9

    def test_invalid_resolution(self, constant_oracle):
        with pytest.raises(ValueError):
            MCDropoutEstimator(constant_oracle).estimate_map(0)


class TestInterpretation:
    @pytest.mark.parametrize(
        "value, level", [(0.0, "Low"), (0.19, "Low"), (0.2, "Medium"), (0.5, "High")]
    )
    def test_levels(self, value, level):
        assert uncertainty_level(value) == level

    def test_reliable_report(self, constant_oracle, rng):
        result = MCDropoutEstimator(constant_oracle, rng=rng).estimate(Point(0.5, 0.5))

        assert is_reliable(result)
        report = get_uncertainty_interpretation(result)
        assert "Status: RELIABLE" in report
        assert "Predicted Class: 1" in report


class TestMCDropoutConfig:
    def test_invalid(self):
        with pytest.raises(ValueError):
            MCDropoutConfig(num_samples=0)

    def test_from_dict(self):
        config = MCDropoutConfig.from_dict({"num_samples": 5})
        assert config.num_samples == 5
        assert config.dropout_rate == 0.1


class AlternatingOracle:
    """Predicts class 1, 0, 1, 0, ... by position within each batch."""

    def initialize(self, hyperparameters):
        pass

    def update_learning_rate(self, learning_rate):
        pass

    def train(self, points):
        raise NotImplementedError

    def evaluate(self, points):
        raise NotImplementedError

    def predict(self, points):
        return [
            BinaryPrediction(p.x, p.y, 1 - i % 2, 0.7) for i, p in enumerate(points)
        ]


class TestMajorityVote:
    def test_tie_goes_to_first_seen_class(self, rng):
        config = MCDropoutConfig(num_samples=4)
        result = MCDropoutEstimator(AlternatingOracle(), config, rng=rng).estimate(
            Point(0.0, 0.0)
        )

        assert [p.predicted_class for p in result.samples] == [1, 0, 1, 0]
        assert result.predicted_class == 1
