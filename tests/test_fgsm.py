import math

import pytest

from conftest import FailingOracle, sigmoid
from netprobe.adversarial import (
    FGSMAttacker,
    FGSMConfig,
    calculate_robustness_metrics,
    create_adversarial_report,
    create_robustness_report,
)
from netprobe.core import MissingPredictionError, Point


class TestUntargetedAttack:
    def test_crosses_nearby_boundary(self, vertical_boundary_oracle):
        result = FGSMAttacker(vertical_boundary_oracle, FGSMConfig(epsilon=0.3)).attack(
            Point(0.1, 0.0)
        )

        assert result.original_prediction.predicted_class == 1
        assert result.adversarial_prediction.predicted_class == 0
        assert result.success
        assert result.perturbation == pytest.approx((-0.3, 0.0))
        assert result.adversarial.x == pytest.approx(-0.2)

    def test_fails_far_from_boundary(self, vertical_boundary_oracle):
        result = FGSMAttacker(vertical_boundary_oracle, FGSMConfig(epsilon=0.3)).attack(
            Point(3.0, 0.0)
        )

        assert not result.success
        assert result.adversarial_prediction.predicted_class == 1

    def test_perturbation_grows_with_epsilon(self, linear_oracle):
        norms = [
            FGSMAttacker(linear_oracle, FGSMConfig(epsilon=eps))
            .attack(Point(0.5, 0.5))
            .perturbation_norm
            for eps in (0.05, 0.1, 0.2, 0.4)
        ]

        assert norms == sorted(norms)
        assert norms[-1] == pytest.approx(0.4 * math.sqrt(2))

    def test_zero_epsilon_leaves_point(self, linear_oracle):
        result = FGSMAttacker(linear_oracle, FGSMConfig(epsilon=0.0)).attack(Point(1.0, 1.0))

        assert result.adversarial == result.original
        assert not result.success

    def test_missing_prediction_raises(self, silent_oracle):
        with pytest.raises(MissingPredictionError):
            FGSMAttacker(silent_oracle).attack(Point(0.0, 0.0))


class TestTargetedAttack:
    def test_refines_until_target(self, vertical_boundary_oracle):
        config = FGSMConfig(epsilon=0.3, target_class=0, max_iterations=10)
        result = FGSMAttacker(vertical_boundary_oracle, config).attack(Point(0.4, 0.0))

        # One full step to x=0.1, then a refinement of epsilon / 2
        assert result.success
        assert result.adversarial.x == pytest.approx(-0.05)
        assert result.perturbation[0] == pytest.approx(-0.45)

    def test_gives_up_after_budget(self, vertical_boundary_oracle):
        config = FGSMConfig(epsilon=0.3, target_class=0, max_iterations=2)
        result = FGSMAttacker(vertical_boundary_oracle, config).attack(Point(5.0, 0.0))

        assert not result.success
        assert result.adversarial.x == pytest.approx(5.0 - 0.3 - 0.15 - 0.1)


class TestAttackBatch:
    def test_skips_failing_points(self):
        oracle = FailingOracle(lambda x, y: sigmoid(4.0 * x), limit=5.0)
        attacker = FGSMAttacker(oracle, FGSMConfig(epsilon=0.3))
        points = [Point(0.1, 0.0), Point(10.0, 0.0), Point(-0.1, 0.0)]
        progress = []

        results = attacker.attack_batch(
            points, on_progress=lambda current, total: progress.append((current, total))
        )

        assert [r.original for r in results] == [points[0], points[2]]
        assert progress == [(1, 3), (2, 3), (3, 3)]


class TestRobustnessMetrics:
    def test_empty(self):
        metrics = calculate_robustness_metrics([])

        assert metrics.attack_success_rate == 0.0
        assert metrics.average_perturbation == 0.0
        assert metrics.robustness_score == 1.0

    def test_mixed_outcomes(self, vertical_boundary_oracle):
        attacker = FGSMAttacker(vertical_boundary_oracle, FGSMConfig(epsilon=0.3))
        results = attacker.attack_batch([Point(0.1, 0.0), Point(3.0, 0.0)])

        metrics = calculate_robustness_metrics(results)

        assert metrics.attack_success_rate == pytest.approx(0.5)
        assert metrics.average_perturbation == pytest.approx(0.3)
        assert metrics.robustness_score == pytest.approx(1.0 - 0.5 / 1.3)

    def test_reports(self, vertical_boundary_oracle):
        result = FGSMAttacker(vertical_boundary_oracle).attack(Point(0.1, 0.0))

        assert "Succeeded" in create_adversarial_report(result)
        report = create_robustness_report(calculate_robustness_metrics([result]), 1)
        assert "Points attacked: 1" in report
