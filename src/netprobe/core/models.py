"""
Core value types shared by every toolkit component.
"""

from dataclasses import dataclass

ACTIVATIONS = ("relu", "sigmoid", "tanh", "elu")
OPTIMIZERS = ("sgd", "adam", "rmsprop", "adagrad")


@dataclass(frozen=True)
class Point:
    """A labelled point in the 2D input plane."""

    x: float
    y: float
    label: int = 0
    is_validation: bool = False

    def moved(self, dx: float, dy: float) -> "Point":
        """Return a copy shifted by (dx, dy), keeping the label."""
        return Point(self.x + dx, self.y + dy, self.label, self.is_validation)


@dataclass(frozen=True)
class BinaryPrediction:
    """Sigmoid-style output: only the winning class and its confidence."""

    x: float
    y: float
    predicted_class: int
    confidence: float

    @property
    def probabilities(self) -> tuple[float, float]:
        p1 = self.confidence if self.predicted_class == 1 else 1.0 - self.confidence
        return (1.0 - p1, p1)


@dataclass(frozen=True)
class MulticlassPrediction:
    """Softmax-style output with the full class distribution."""

    x: float
    y: float
    predicted_class: int
    confidence: float
    probabilities: tuple[float, ...]


Prediction = BinaryPrediction | MulticlassPrediction


def probability_of(prediction: Prediction, class_index: int) -> float:
    """
    Probability the oracle assigns to ``class_index``.

    Multiclass predictions read it from the distribution. Binary predictions
    (or a distribution too short to contain the class) fall back to the
    confidence when the class won and its complement otherwise.
    """
    if isinstance(prediction, MulticlassPrediction):
        if 0 <= class_index < len(prediction.probabilities):
            return float(prediction.probabilities[class_index])
    if prediction.predicted_class == class_index:
        return float(prediction.confidence)
    return 1.0 - float(prediction.confidence)


@dataclass(frozen=True)
class TrainResult:
    """Loss and accuracy reported by one train or evaluate call."""

    loss: float
    accuracy: float


@dataclass(frozen=True)
class Hyperparameters:
    """Network architecture and training settings handed to an oracle."""

    learning_rate: float
    layers: tuple[int, ...]
    optimizer: str = "adam"
    momentum: float = 0.9
    activation: str = "relu"
    l2_regularization: float = 0.0
    num_classes: int = 2
    dropout_rate: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "layers", tuple(int(n) for n in self.layers))
        if not self.layers:
            raise ValueError("At least one hidden layer is required")
        if any(n < 1 for n in self.layers):
            raise ValueError(f"Layer sizes must be positive, got {list(self.layers)}")
        if self.learning_rate <= 0:
            raise ValueError(f"Learning rate must be positive, got {self.learning_rate}")
        if not 0.0 <= self.dropout_rate < 1.0:
            raise ValueError(f"Dropout rate must be in [0, 1), got {self.dropout_rate}")
        if self.num_classes < 2:
            raise ValueError(f"num_classes must be at least 2, got {self.num_classes}")
        if self.optimizer not in OPTIMIZERS:
            raise ValueError(
                f"Unsupported optimizer: {self.optimizer}. Supported: {', '.join(OPTIMIZERS)}"
            )
        if self.activation not in ACTIVATIONS:
            raise ValueError(
                f"Unsupported activation: {self.activation}. "
                f"Supported: {', '.join(ACTIVATIONS)}"
            )


@dataclass(frozen=True)
class Bounds:
    """Rectangular region of the input plane."""

    min_x: float = -6.0
    max_x: float = 6.0
    min_y: float = -6.0
    max_y: float = 6.0

    @classmethod
    def from_dict(cls, config: dict | None) -> "Bounds":
        config = config or {}
        return cls(
            min_x=config.get("min_x", -6.0),
            max_x=config.get("max_x", 6.0),
            min_y=config.get("min_y", -6.0),
            max_y=config.get("max_y", 6.0),
        )

    def cell_centers(self, resolution: int) -> list[list[tuple[float, float]]]:
        """
        Centres of a ``resolution x resolution`` grid over the bounds.

        Row ``i`` walks the x axis and cell ``j`` walks the y axis.
        """
        step_x = (self.max_x - self.min_x) / resolution
        step_y = (self.max_y - self.min_y) / resolution
        return [
            [
                (self.min_x + (i + 0.5) * step_x, self.min_y + (j + 0.5) * step_y)
                for j in range(resolution)
            ]
            for i in range(resolution)
        ]
