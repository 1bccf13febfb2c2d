"""
Neural architecture search over small dense classifiers.
"""

from .models import ArchitectureCandidate, ArchitectureResult, NASConfig, NASRun
from .nas import ArchitectureSearch
from .space import SearchSpace, estimate_parameters, grid_candidates, random_candidate
from .utils import create_nas_report

__all__ = [
    "ArchitectureSearch",
    "ArchitectureCandidate",
    "ArchitectureResult",
    "NASConfig",
    "NASRun",
    "SearchSpace",
    "estimate_parameters",
    "grid_candidates",
    "random_candidate",
    "create_nas_report",
]
