"""
Reference PyTorch implementation of the prediction oracle.
"""

from .mlp import (
    DenseClassifier,
    TorchMLPOracle,
    create_hyperparameters,
    create_oracle,
    create_oracle_factory,
)

__all__ = [
    "DenseClassifier",
    "TorchMLPOracle",
    "create_hyperparameters",
    "create_oracle",
    "create_oracle_factory",
]
