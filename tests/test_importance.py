import numpy as np
import pytest

from netprobe.explainability import (
    calculate_feature_importance,
    create_feature_importance_report,
)
from netprobe.explainability.importance import calculate_accuracy, permute_feature


class TestPermuteFeature:
    def test_shuffles_one_coordinate(self, labelled_points, rng):
        permuted = permute_feature(labelled_points, 0, rng)

        assert sorted(p.x for p in permuted) == sorted(p.x for p in labelled_points)
        assert [p.y for p in permuted] == [p.y for p in labelled_points]
        assert [p.label for p in permuted] == [p.label for p in labelled_points]

    def test_shuffles_y_coordinate(self, labelled_points, rng):
        permuted = permute_feature(labelled_points, 1, rng)

        assert sorted(p.y for p in permuted) == sorted(p.y for p in labelled_points)
        assert [p.x for p in permuted] == [p.x for p in labelled_points]
        assert all(isinstance(p.y, float) for p in permuted)


class TestFeatureImportance:
    def test_baseline_accuracy(self, vertical_boundary_oracle, labelled_points):
        assert calculate_accuracy(vertical_boundary_oracle, labelled_points) == 1.0

    def test_ignored_feature_has_zero_importance(
        self, vertical_boundary_oracle, labelled_points, rng
    ):
        results = calculate_feature_importance(
            vertical_boundary_oracle, labelled_points, iterations=5, rng=rng
        )

        by_name = {r.feature_name: r for r in results}
        assert by_name["Y"].importance == 0.0
        assert by_name["Y"].importance_std == 0.0
        assert by_name["X"].importance > 0.0
        assert results[0].feature_name == "X"
        assert by_name["X"].baseline_accuracy == 1.0
        assert by_name["X"].permuted_accuracy == pytest.approx(
            1.0 - by_name["X"].importance
        )

    def test_seeded_runs_match(self, vertical_boundary_oracle, labelled_points):
        first = calculate_feature_importance(
            vertical_boundary_oracle, labelled_points, rng=np.random.default_rng(5)
        )
        second = calculate_feature_importance(
            vertical_boundary_oracle, labelled_points, rng=np.random.default_rng(5)
        )
        assert first == second

    def test_empty_data(self, vertical_boundary_oracle):
        with pytest.raises(ValueError):
            calculate_feature_importance(vertical_boundary_oracle, [])

    def test_report(self, vertical_boundary_oracle, labelled_points, rng):
        results = calculate_feature_importance(
            vertical_boundary_oracle, labelled_points, rng=rng
        )
        report = create_feature_importance_report(results)

        assert "Baseline accuracy: 100.0%" in report
        assert create_feature_importance_report([]) == "No results"
