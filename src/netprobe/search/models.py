from dataclasses import dataclass

from ..core.models import Hyperparameters

STRATEGIES = ("random", "evolutionary", "grid")


@dataclass(frozen=True)
class ArchitectureCandidate:
    """One fully specified architecture and training configuration."""

    layers: tuple[int, ...]
    activation: str = "relu"
    optimizer: str = "adam"
    learning_rate: float = 0.01
    dropout_rate: float = 0.0
    l2_regularization: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "layers", tuple(int(n) for n in self.layers))

    def to_hyperparameters(self, num_classes: int = 2) -> Hyperparameters:
        return Hyperparameters(
            learning_rate=self.learning_rate,
            layers=self.layers,
            optimizer=self.optimizer,
            activation=self.activation,
            l2_regularization=self.l2_regularization,
            dropout_rate=self.dropout_rate,
            num_classes=num_classes,
        )

    def describe(self) -> str:
        return (
            f"[{', '.join(str(n) for n in self.layers)}] {self.activation} "
            f"{self.optimizer} lr={self.learning_rate}"
        )


@dataclass(frozen=True)
class ArchitectureResult:
    """Outcome of training and validating one candidate."""

    candidate: ArchitectureCandidate
    accuracy: float  # Validation accuracy
    loss: float  # Validation loss
    training_time_ms: float
    num_parameters: int  # Analytic estimate, binary output assumed
    epochs_trained: int


@dataclass(frozen=True)
class NASConfig:
    """Settings for a neural architecture search run."""

    num_candidates: int = 20
    epochs_per_candidate: int = 30
    strategy: str = "random"
    population_size: int = 10  # Evolutionary only
    mutation_rate: float = 0.3  # Evolutionary only

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"Unsupported strategy: {self.strategy}. Supported: {', '.join(STRATEGIES)}"
            )
        if self.num_candidates < 1:
            raise ValueError(f"num_candidates must be at least 1, got {self.num_candidates}")
        if self.epochs_per_candidate < 0:
            raise ValueError(
                f"epochs_per_candidate must be non-negative, got {self.epochs_per_candidate}"
            )
        if self.population_size < 1:
            raise ValueError(
                f"population_size must be at least 1, got {self.population_size}"
            )
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must be in [0, 1], got {self.mutation_rate}")

    @classmethod
    def from_dict(cls, config: dict | None) -> "NASConfig":
        config = config or {}
        return cls(
            num_candidates=config.get("num_candidates", 20),
            epochs_per_candidate=config.get("epochs_per_candidate", 30),
            strategy=config.get("strategy", "random"),
            population_size=config.get("population_size", 10),
            mutation_rate=config.get("mutation_rate", 0.3),
        )


@dataclass(frozen=True)
class NASRun:
    """Container for a finished search."""

    best: ArchitectureResult
    history: tuple[ArchitectureResult, ...]  # Evaluation order
    config: NASConfig
    total_time_ms: float
