"""
Toy 2D datasets for training the reference oracle.
"""

from typing import Any

import numpy as np
from sklearn.datasets import make_blobs, make_circles, make_moons
from sklearn.model_selection import train_test_split

from ..core.models import Point

DATASETS = ("moons", "circles", "blobs")


def generate_dataset(
    name: str = "moons",
    num_samples: int = 200,
    noise: float = 0.1,
    num_classes: int = 2,
    scale: float = 3.0,
    seed: int | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Generate a labelled 2D dataset.

    Args:
        name: moons, circles or blobs (blobs supports more than two classes)
        num_samples: Total number of points
        noise: Standard deviation of the added noise
        num_classes: Number of classes (blobs only)
        scale: Multiplier that spreads the points over the input plane
        seed: Random seed

    Returns:
        Tuple of (features (N, 2), labels (N,))
    """
    if name == "moons":
        X, y = make_moons(n_samples=num_samples, noise=noise, random_state=seed)
        X = X - X.mean(axis=0)
    elif name == "circles":
        X, y = make_circles(n_samples=num_samples, noise=noise, factor=0.5, random_state=seed)
    elif name == "blobs":
        X, y = make_blobs(
            n_samples=num_samples,
            centers=num_classes,
            cluster_std=max(noise, 1e-3) * 5,
            center_box=(-1.5, 1.5),
            random_state=seed,
        )
        X = X / 5
    else:
        raise ValueError(f"Unsupported dataset: {name}. Supported: {', '.join(DATASETS)}")

    return X * scale, y.astype(int)


def to_points(X: np.ndarray, y: np.ndarray, is_validation: bool = False) -> list[Point]:
    """Wrap feature rows and labels as Points."""
    return [
        Point(float(row[0]), float(row[1]), int(label), is_validation)
        for row, label in zip(X, y)
    ]


def create_datasets(config: dict[str, Any]) -> tuple[list[Point], list[Point]]:
    """
    Create stratified train and validation splits from the ``data`` section.

    Args:
        config: Configuration dictionary

    Returns:
        Tuple of (train_points, val_points)
    """
    data_config = config.get("data", {})
    seed = config.get("seed")

    X, y = generate_dataset(
        name=data_config.get("dataset", "moons"),
        num_samples=data_config.get("num_samples", 200),
        noise=data_config.get("noise", 0.1),
        num_classes=data_config.get("num_classes", 2),
        scale=data_config.get("scale", 3.0),
        seed=seed,
    )

    X_train, X_val, y_train, y_val = train_test_split(
        X,
        y,
        test_size=data_config.get("val_split", 0.2),
        stratify=y,
        random_state=seed,
    )

    return to_points(X_train, y_train), to_points(X_val, y_val, is_validation=True)
