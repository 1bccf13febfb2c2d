"""
Uncertainty Estimation Module.
"""

from .mc_dropout import MCDropoutEstimator
from .models import MCDropoutConfig, UncertaintyCell, UncertaintyMapResult, UncertaintyResult
from .utils import get_uncertainty_interpretation, is_reliable, uncertainty_level

__all__ = [
    "MCDropoutEstimator",
    "MCDropoutConfig",
    "UncertaintyCell",
    "UncertaintyMapResult",
    "UncertaintyResult",
    "get_uncertainty_interpretation",
    "is_reliable",
    "uncertainty_level",
]
