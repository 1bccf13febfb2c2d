import numpy as np
import pytest

from netprobe.core import MissingPredictionError, Point
from netprobe.explainability import LIMEConfig, LIMEExplainer, create_lime_report


class TestLIMEExplainer:
    def test_constant_oracle(self, constant_oracle, rng):
        explainer = LIMEExplainer(
            constant_oracle, LIMEConfig(num_samples=100, kernel_width=0.75), rng=rng
        )

        explanation = explainer.explain(Point(0.5, 0.5))

        assert explanation.predicted_class == 1
        assert explanation.confidence == pytest.approx(0.8)
        assert [c.feature_name for c in explanation.contributions] == ["X", "Y"]
        assert 0.0 <= explanation.local_fidelity <= 1.0
        assert explanation.intercept == pytest.approx(0.8, abs=1e-6)
        for contribution in explanation.contributions:
            assert contribution.weight == pytest.approx(0.0, abs=1e-6)

    def test_single_batched_query(self, constant_oracle, rng):
        LIMEExplainer(constant_oracle, LIMEConfig(num_samples=40), rng=rng).explain(
            Point(0.0, 0.0)
        )
        # One query for the point itself, one for the whole neighbourhood
        assert constant_oracle.batch_sizes == [1, 40]

    def test_linear_oracle_recovers_slopes(self, linear_oracle, rng):
        explanation = LIMEExplainer(linear_oracle, rng=rng).explain(Point(0.5, 0.5))

        x_part, y_part = explanation.contributions
        assert x_part.weight == pytest.approx(0.1, abs=1e-6)
        assert y_part.weight == pytest.approx(-0.05, abs=1e-6)
        assert x_part.contribution == pytest.approx(x_part.weight * 0.5)
        assert explanation.local_fidelity == pytest.approx(1.0, abs=1e-6)

    def test_custom_feature_names(self, constant_oracle, rng):
        config = LIMEConfig(feature_names=("width",))
        explanation = LIMEExplainer(constant_oracle, config, rng=rng).explain(Point(0, 0))

        assert [c.feature_name for c in explanation.contributions] == ["width", "Y"]

    def test_seeded_runs_match(self, vertical_boundary_oracle):
        first = LIMEExplainer(vertical_boundary_oracle, rng=np.random.default_rng(7))
        second = LIMEExplainer(vertical_boundary_oracle, rng=np.random.default_rng(7))

        assert first.explain(Point(0.1, 0.2)) == second.explain(Point(0.1, 0.2))

    def test_missing_prediction_raises(self, silent_oracle, rng):
        with pytest.raises(MissingPredictionError):
            LIMEExplainer(silent_oracle, rng=rng).explain(Point(0.0, 0.0))

    def test_report(self, linear_oracle, rng):
        explanation = LIMEExplainer(linear_oracle, rng=rng).explain(Point(0.5, 0.5))
        report = create_lime_report(explanation)

        assert "good local fit" in report
        assert report.count("weight") == 2


class TestLIMEConfig:
    @pytest.mark.parametrize("kwargs", [{"num_samples": 0}, {"kernel_width": 0.0}])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            LIMEConfig(**kwargs)

    def test_from_dict(self):
        config = LIMEConfig.from_dict({"num_samples": 50, "feature_names": ["a", "b"]})
        assert config.num_samples == 50
        assert config.kernel_width == 0.75
        assert tuple(config.feature_names) == ("a", "b")
