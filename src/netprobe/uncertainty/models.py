from dataclasses import dataclass, field

from ..core.models import Bounds, Point, Prediction


@dataclass(frozen=True)
class MCDropoutConfig:
    """Settings for Monte Carlo uncertainty estimation."""

    num_samples: int = 30  # Noisy queries per point
    dropout_rate: float = 0.1  # Noise std is dropout_rate * 0.5

    def __post_init__(self):
        if self.num_samples < 1:
            raise ValueError(f"num_samples must be at least 1, got {self.num_samples}")
        if self.dropout_rate < 0:
            raise ValueError(f"dropout_rate must be non-negative, got {self.dropout_rate}")

    @classmethod
    def for_map(cls, dropout_rate: float = 0.1) -> "MCDropoutConfig":
        """Cheaper budget for grid maps, which cost num_samples per cell."""
        return cls(num_samples=10, dropout_rate=dropout_rate)

    @classmethod
    def from_dict(cls, config: dict | None) -> "MCDropoutConfig":
        config = config or {}
        return cls(
            num_samples=config.get("num_samples", 30),
            dropout_rate=config.get("dropout_rate", 0.1),
        )


@dataclass(frozen=True)
class UncertaintyResult:
    """Container for uncertainty estimation results."""

    point: Point
    predicted_class: int  # Majority vote across samples
    mean_confidence: float
    epistemic_uncertainty: float  # Std-dev of confidence across samples
    aleatoric_uncertainty: float  # Entropy (bits) of the sampled classes
    total_uncertainty: float  # sqrt(epistemic² + aleatoric²)
    confidence_interval: tuple[float, float]  # 95%, nearest rank
    samples: tuple[Prediction, ...]
    clean_prediction: Prediction | None = None


@dataclass(frozen=True)
class UncertaintyCell:
    """Uncertainty summary at one grid cell centre."""

    x: float
    y: float
    predicted_class: int
    mean_confidence: float
    uncertainty: float


@dataclass(frozen=True)
class UncertaintyMapResult:
    """Container for a grid of uncertainty estimates."""

    grid: tuple[tuple[UncertaintyCell, ...], ...]
    max_uncertainty: float
    resolution: int
    bounds: Bounds = field(default_factory=Bounds)
