"""
Black-box explanations: LIME surrogates, saliency maps and permutation importance.
"""

from .colormaps import get_color, saliency_to_colors
from .importance import calculate_feature_importance
from .lime import LIMEExplainer
from .models import (
    FeatureContribution,
    FeatureImportanceResult,
    LIMEConfig,
    LIMEExplanation,
    SaliencyCell,
    SaliencyConfig,
    SaliencyResult,
)
from .saliency import SaliencyMapper
from .utils import (
    create_feature_importance_report,
    create_lime_report,
    create_saliency_report,
    find_hotspots,
)

__all__ = [
    "LIMEExplainer",
    "SaliencyMapper",
    "calculate_feature_importance",
    "FeatureContribution",
    "FeatureImportanceResult",
    "LIMEConfig",
    "LIMEExplanation",
    "SaliencyCell",
    "SaliencyConfig",
    "SaliencyResult",
    "get_color",
    "saliency_to_colors",
    "create_lime_report",
    "create_saliency_report",
    "create_feature_importance_report",
    "find_hotspots",
]
