import math
from dataclasses import dataclass

from ..core.models import Point, Prediction


@dataclass(frozen=True)
class FGSMConfig:
    """Settings for Fast Gradient Sign Method attacks."""

    epsilon: float = 0.3  # Perturbation magnitude per axis
    gradient_step: float = 0.01  # Finite-difference step
    target_class: int | None = None  # None = untargeted
    max_iterations: int = 10  # Refinement steps for targeted attacks

    def __post_init__(self):
        if self.epsilon < 0:
            raise ValueError(f"epsilon must be non-negative, got {self.epsilon}")
        if self.gradient_step <= 0:
            raise ValueError(f"gradient_step must be positive, got {self.gradient_step}")
        if self.max_iterations < 0:
            raise ValueError(
                f"max_iterations must be non-negative, got {self.max_iterations}"
            )

    @classmethod
    def from_dict(cls, config: dict | None) -> "FGSMConfig":
        config = config or {}
        return cls(
            epsilon=config.get("epsilon", 0.3),
            gradient_step=config.get("gradient_step", 0.01),
            target_class=config.get("target_class"),
            max_iterations=config.get("max_iterations", 10),
        )


@dataclass(frozen=True)
class AdversarialResult:
    """Container for one adversarial example."""

    original: Point
    adversarial: Point
    original_prediction: Prediction
    adversarial_prediction: Prediction
    perturbation: tuple[float, float]  # (dx, dy)
    epsilon: float
    success: bool  # Targeted: reached target. Untargeted: class changed

    @property
    def perturbation_norm(self) -> float:
        return math.hypot(*self.perturbation)


@dataclass(frozen=True)
class RobustnessMetrics:
    """Aggregate statistics over a batch of attacks."""

    attack_success_rate: float
    average_perturbation: float
    robustness_score: float  # In (0, 1], higher = more robust
