from typing import Sequence

import numpy as np
import torch
import torch.nn as nn
from rich.console import Console

from ..core.errors import GradientExplosionError, ModelNotInitialisedError
from ..core.models import (
    BinaryPrediction,
    Hyperparameters,
    MulticlassPrediction,
    Point,
    Prediction,
    TrainResult,
)
from ..core.oracle import OracleFactory
from ..utils.metrics import MetricsTracker

console = Console()

INPUT_SIZE = 2

ACTIVATION_LAYERS = {
    "relu": nn.ReLU,
    "sigmoid": nn.Sigmoid,
    "tanh": nn.Tanh,
    "elu": nn.ELU,
}


class DenseClassifier(nn.Module):
    """
    Fully connected classifier over 2D points.

    Args:
        layers: Hidden layer sizes
        activation: Hidden activation name (relu/sigmoid/tanh/elu)
        num_classes: Number of classes; 2 uses a single sigmoid logit
        dropout_rate: Dropout after each hidden layer
    """

    def __init__(
        self,
        layers: Sequence[int],
        activation: str = "relu",
        num_classes: int = 2,
        dropout_rate: float = 0.0,
    ):
        super().__init__()

        if activation not in ACTIVATION_LAYERS:
            raise ValueError(
                f"Unsupported activation: {activation}. "
                f"Supported: {', '.join(ACTIVATION_LAYERS)}"
            )

        self.num_classes = num_classes
        self.hidden_layers = nn.ModuleList()

        blocks: list[nn.Module] = []
        prev_size = INPUT_SIZE
        for size in layers:
            linear = nn.Linear(prev_size, size)
            nn.init.kaiming_normal_(linear.weight, nonlinearity="relu")
            nn.init.zeros_(linear.bias)
            self.hidden_layers.append(linear)
            blocks.extend([linear, ACTIVATION_LAYERS[activation](), nn.Dropout(p=dropout_rate)])
            prev_size = size

        self.features = nn.Sequential(*blocks)
        self.classifier = nn.Linear(prev_size, 1 if num_classes == 2 else num_classes)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """
        Forward pass.

        Args:
            x: Input tensor (batch_size, 2)

        Returns:
            Logits tensor (batch_size, 1) for binary, (batch_size, num_classes) otherwise
        """
        return self.classifier(self.features(x))

    def probabilities(self, x: torch.Tensor) -> torch.Tensor:
        """Class probabilities (batch_size, num_classes)."""
        logits = self.forward(x)
        if self.num_classes == 2:
            p1 = torch.sigmoid(logits.squeeze(-1))
            return torch.stack([1.0 - p1, p1], dim=-1)
        return torch.softmax(logits, dim=-1)

    def l2_penalty(self) -> torch.Tensor:
        """Sum of squared hidden-layer weights."""
        return sum(layer.weight.pow(2).sum() for layer in self.hidden_layers)


def create_optimizer(
    network: nn.Module, hyperparameters: Hyperparameters
) -> torch.optim.Optimizer:
    params = network.parameters()
    lr = hyperparameters.learning_rate
    if hyperparameters.optimizer == "sgd":
        return torch.optim.SGD(params, lr=lr, momentum=hyperparameters.momentum)
    if hyperparameters.optimizer == "adam":
        return torch.optim.Adam(params, lr=lr)
    if hyperparameters.optimizer == "rmsprop":
        return torch.optim.RMSprop(params, lr=lr)
    if hyperparameters.optimizer == "adagrad":
        return torch.optim.Adagrad(params, lr=lr)
    raise ValueError(f"Unsupported optimizer: {hyperparameters.optimizer}")


class TorchMLPOracle:
    """
    PyTorch prediction oracle backed by a small dense network.

    Each ``train`` call is one full-batch optimisation step.
    """

    def __init__(self, device: str | torch.device = "cpu", seed: int | None = None):
        self.device = torch.device(device)
        self.seed = seed
        self.network: DenseClassifier | None = None
        self.optimizer: torch.optim.Optimizer | None = None
        self.hyperparameters: Hyperparameters | None = None
        self.metrics = MetricsTracker()

    def initialize(self, hyperparameters: Hyperparameters) -> None:
        """Build a fresh network, discarding any previous weights."""
        if self.seed is not None:
            torch.manual_seed(self.seed)

        network = DenseClassifier(
            layers=hyperparameters.layers,
            activation=hyperparameters.activation,
            num_classes=hyperparameters.num_classes,
            dropout_rate=hyperparameters.dropout_rate,
        ).to(self.device)

        self.network = network
        self.optimizer = create_optimizer(network, hyperparameters)
        self.hyperparameters = hyperparameters
        self.metrics = MetricsTracker(num_classes=hyperparameters.num_classes)

    def update_learning_rate(self, learning_rate: float) -> None:
        self._require_network()
        if learning_rate <= 0:
            raise ValueError(f"Learning rate must be positive, got {learning_rate}")
        for group in self.optimizer.param_groups:
            group["lr"] = learning_rate

    def train(self, points: Sequence[Point]) -> TrainResult:
        """
        Run one optimisation step over all ``points``.

        Returns:
            Loss and accuracy measured before the weight update
        """
        network = self._require_network()
        inputs, labels = self._to_tensors(points)

        network.train()
        self.optimizer.zero_grad()
        logits = network(inputs)
        loss = self._loss(logits, labels)
        loss = loss + self.hyperparameters.l2_regularization * network.l2_penalty()

        if torch.isnan(loss):
            raise GradientExplosionError()

        loss.backward()
        self.optimizer.step()

        with torch.no_grad():
            predicted = self._predicted_classes(logits)
            accuracy = (predicted == labels).float().mean().item()

        return TrainResult(loss=float(loss.item()), accuracy=float(accuracy))

    def evaluate(self, points: Sequence[Point]) -> TrainResult:
        network = self._require_network()
        inputs, labels = self._to_tensors(points)

        network.eval()
        with torch.no_grad():
            probs = network.probabilities(inputs).cpu().numpy().astype(np.float64)

        # float32 rows drift from 1 by more than log_loss tolerates
        probs /= probs.sum(axis=1, keepdims=True)
        metrics = self.metrics.calculate_metrics(labels.cpu().numpy(), probs)
        return TrainResult(loss=metrics["loss"], accuracy=metrics["accuracy"])

    def predict(self, points: Sequence[Point]) -> list[Prediction]:
        network = self._require_network()
        if len(points) == 0:
            return []

        inputs = torch.tensor(
            [[p.x, p.y] for p in points], dtype=torch.float32, device=self.device
        )
        network.eval()
        with torch.no_grad():
            probs = network.probabilities(inputs).cpu().numpy().astype(np.float64)

        predictions: list[Prediction] = []
        for point, row in zip(points, probs):
            predicted_class = int(row.argmax())
            confidence = float(row[predicted_class])
            if network.num_classes == 2:
                predictions.append(
                    BinaryPrediction(point.x, point.y, predicted_class, confidence)
                )
            else:
                predictions.append(
                    MulticlassPrediction(
                        point.x,
                        point.y,
                        predicted_class,
                        confidence,
                        tuple(float(p) for p in row),
                    )
                )
        return predictions

    def _require_network(self) -> DenseClassifier:
        if self.network is None:
            raise ModelNotInitialisedError()
        return self.network

    def _to_tensors(self, points: Sequence[Point]) -> tuple[torch.Tensor, torch.Tensor]:
        if len(points) == 0:
            raise ValueError("Cannot train or evaluate on an empty set of points")
        inputs = torch.tensor(
            [[p.x, p.y] for p in points], dtype=torch.float32, device=self.device
        )
        labels = torch.tensor([p.label for p in points], dtype=torch.long, device=self.device)
        return inputs, labels

    def _loss(self, logits: torch.Tensor, labels: torch.Tensor) -> torch.Tensor:
        if self.network.num_classes == 2:
            return nn.functional.binary_cross_entropy_with_logits(
                logits.squeeze(-1), labels.float()
            )
        return nn.functional.cross_entropy(logits, labels)

    def _predicted_classes(self, logits: torch.Tensor) -> torch.Tensor:
        if self.network.num_classes == 2:
            return (logits.squeeze(-1) > 0).long()
        return logits.argmax(dim=-1)


def create_hyperparameters(config: dict) -> Hyperparameters:
    """
    Build hyperparameters from the ``model`` and ``data`` config sections.

    Args:
        config: Configuration dictionary

    Returns:
        Validated Hyperparameters
    """
    model_config = config.get("model", {})
    data_config = config.get("data", {})

    return Hyperparameters(
        learning_rate=model_config.get("learning_rate", 0.03),
        layers=tuple(model_config.get("layers", (8, 4))),
        optimizer=model_config.get("optimizer", "adam"),
        momentum=model_config.get("momentum", 0.9),
        activation=model_config.get("activation", "relu"),
        l2_regularization=model_config.get("l2_regularization", 0.0),
        num_classes=data_config.get("num_classes", 2),
        dropout_rate=model_config.get("dropout_rate", 0.0),
    )


def resolve_device(requested: str) -> torch.device:
    """Use the requested device, falling back to CPU when CUDA is missing."""
    if requested.startswith("cuda") and not torch.cuda.is_available():
        console.print(f"[yellow]Warning: {requested} unavailable, using cpu[/yellow]")
        return torch.device("cpu")
    return torch.device(requested)


def create_oracle(config: dict) -> TorchMLPOracle:
    """
    Factory function to create an uninitialised oracle from config.

    Args:
        config: Configuration dictionary

    Returns:
        TorchMLPOracle on the configured device
    """
    return TorchMLPOracle(
        device=resolve_device(config.get("device", "cpu")),
        seed=config.get("seed"),
    )


def create_oracle_factory(config: dict) -> OracleFactory:
    """Factory producing a fresh oracle per call, for architecture search."""
    device = resolve_device(config.get("device", "cpu"))
    seed = config.get("seed")

    def factory() -> TorchMLPOracle:
        return TorchMLPOracle(device=device, seed=seed)

    return factory
