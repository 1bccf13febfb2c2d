from dataclasses import dataclass, field

from ..core.models import Bounds, Point


@dataclass(frozen=True)
class LIMEConfig:
    """Settings for local surrogate explanations."""

    num_samples: int = 100
    kernel_width: float = 0.75
    feature_names: tuple[str, ...] = ("X", "Y")

    def __post_init__(self):
        if self.num_samples < 1:
            raise ValueError(f"num_samples must be at least 1, got {self.num_samples}")
        if self.kernel_width <= 0:
            raise ValueError(f"kernel_width must be positive, got {self.kernel_width}")
        object.__setattr__(self, "feature_names", tuple(self.feature_names))

    @classmethod
    def from_dict(cls, config: dict | None) -> "LIMEConfig":
        config = config or {}
        return cls(
            num_samples=config.get("num_samples", 100),
            kernel_width=config.get("kernel_width", 0.75),
            feature_names=tuple(config.get("feature_names", ("X", "Y"))),
        )


@dataclass(frozen=True)
class FeatureContribution:
    """Surrogate weight of one input feature."""

    feature_name: str
    feature_value: float
    weight: float
    contribution: float  # weight * feature_value


@dataclass(frozen=True)
class LIMEExplanation:
    """Container for a local surrogate explanation."""

    point: Point
    predicted_class: int  # From the oracle, not the surrogate
    confidence: float
    contributions: tuple[FeatureContribution, ...]
    intercept: float
    local_fidelity: float  # Weighted R², at most 1


@dataclass(frozen=True)
class SaliencyConfig:
    """Settings for finite-difference saliency maps."""

    resolution: int = 30
    epsilon: float = 0.01
    target_class: int | None = None  # None = predicted class per cell

    def __post_init__(self):
        if self.resolution < 1:
            raise ValueError(f"resolution must be at least 1, got {self.resolution}")
        if self.epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon}")

    @classmethod
    def from_dict(cls, config: dict | None) -> "SaliencyConfig":
        config = config or {}
        return cls(
            resolution=config.get("resolution", 30),
            epsilon=config.get("epsilon", 0.01),
            target_class=config.get("target_class"),
        )


@dataclass(frozen=True)
class SaliencyCell:
    """Gradient magnitude and components at one grid cell centre."""

    x: float
    y: float
    saliency: float
    gradient_x: float
    gradient_y: float


@dataclass(frozen=True)
class SaliencyResult:
    """Container for a full saliency grid."""

    grid: tuple[tuple[SaliencyCell, ...], ...]
    min_saliency: float
    max_saliency: float
    resolution: int
    bounds: Bounds = field(default_factory=Bounds)


@dataclass(frozen=True)
class FeatureImportanceResult:
    """Permutation importance of one input feature."""

    feature_name: str
    feature_index: int
    importance: float  # Mean accuracy drop when the feature is shuffled
    importance_std: float
    baseline_accuracy: float
    permuted_accuracy: float
