"""
Adversarial perturbations against black-box classifiers.
"""

from .fgsm import FGSMAttacker, calculate_robustness_metrics
from .models import AdversarialResult, FGSMConfig, RobustnessMetrics
from .utils import create_adversarial_report, create_robustness_report

__all__ = [
    "FGSMAttacker",
    "FGSMConfig",
    "AdversarialResult",
    "RobustnessMetrics",
    "calculate_robustness_metrics",
    "create_adversarial_report",
    "create_robustness_report",
]
