from pathlib import Path

import pytest

from netprobe.adversarial import FGSMConfig
from netprobe.data import create_datasets, generate_dataset
from netprobe.search import NASConfig
from netprobe.utils import load_config

ROOT_CONFIG = Path(__file__).parent.parent / "config.yaml"


class TestLoadConfig:
    def test_reads_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("seed: 7\nnas:\n  strategy: grid\n")

        config = load_config(path)

        assert config["seed"] == 7
        assert NASConfig.from_dict(config["nas"]).strategy == "grid"

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_shipped_config_builds_components(self):
        config = load_config(ROOT_CONFIG)

        assert FGSMConfig.from_dict(config["fgsm"]).target_class is None
        assert NASConfig.from_dict(config["nas"]).num_candidates == 20


class TestDatasets:
    def test_stratified_split(self):
        config = {"seed": 0, "data": {"dataset": "moons", "num_samples": 100, "val_split": 0.2}}

        train, val = create_datasets(config)

        assert len(train) == 80
        assert len(val) == 20
        assert all(p.is_validation for p in val)
        assert not any(p.is_validation for p in train)
        assert sum(p.label for p in val) == 10

    @pytest.mark.parametrize("name", ["moons", "circles"])
    def test_binary_labels(self, name):
        X, y = generate_dataset(name, num_samples=50, seed=1)

        assert X.shape == (50, 2)
        assert set(y.tolist()) == {0, 1}

    def test_blobs_multiclass(self):
        _, y = generate_dataset("blobs", num_samples=60, num_classes=3, seed=1)
        assert set(y.tolist()) == {0, 1, 2}

    def test_unknown_dataset(self):
        with pytest.raises(ValueError):
            generate_dataset("spirals")
