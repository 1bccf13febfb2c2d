"""
Search space and genetic operators for architecture search.

Candidates are immutable; every operator returns a new candidate.
"""

from dataclasses import dataclass, replace
from typing import Sequence, TypeVar

import numpy as np

from .models import ArchitectureCandidate

T = TypeVar("T")

INPUT_SIZE = 2

GRID_LAYERS = ((4,), (8,), (8, 4), (16, 8), (16, 8, 4))
GRID_LEARNING_RATES = (0.01, 0.03, 0.1)
GRID_ACTIVATIONS = ("relu", "tanh")


@dataclass(frozen=True)
class SearchSpace:
    """Bounds and discrete choices of the architecture search."""

    min_layers: int = 1
    max_layers: int = 4
    min_neurons: int = 2
    max_neurons: int = 32
    learning_rates: tuple[float, ...] = (0.001, 0.003, 0.01, 0.03, 0.1)
    activations: tuple[str, ...] = ("relu", "tanh", "sigmoid")
    optimizers: tuple[str, ...] = ("adam", "sgd", "rmsprop")
    dropout_rates: tuple[float, ...] = (0.0, 0.1, 0.2, 0.3)
    l2_values: tuple[float, ...] = (0.0, 0.001, 0.01)


DEFAULT_SPACE = SearchSpace()


def _choice(rng: np.random.Generator, options: Sequence[T]) -> T:
    return options[int(rng.integers(0, len(options)))]


def _randint(rng: np.random.Generator, low: int, high: int) -> int:
    """Uniform integer in [low, high], both inclusive."""
    return int(rng.integers(low, high + 1))


def random_candidate(
    rng: np.random.Generator, space: SearchSpace = DEFAULT_SPACE
) -> ArchitectureCandidate:
    """
    Draw a random candidate.

    Each layer after the first is capped by the previous layer's size, which
    favours funnel-shaped networks.
    """
    num_layers = _randint(rng, space.min_layers, space.max_layers)
    layers: list[int] = []
    for i in range(num_layers):
        upper = space.max_neurons if i == 0 else layers[-1]
        layers.append(_randint(rng, space.min_neurons, upper))

    return ArchitectureCandidate(
        layers=tuple(layers),
        activation=_choice(rng, space.activations),
        optimizer=_choice(rng, space.optimizers),
        learning_rate=_choice(rng, space.learning_rates),
        dropout_rate=_choice(rng, space.dropout_rates),
        l2_regularization=_choice(rng, space.l2_values),
    )


def grid_candidates() -> list[ArchitectureCandidate]:
    """The fixed 5 x 3 x 2 grid, in evaluation order."""
    return [
        ArchitectureCandidate(
            layers=layers,
            activation=activation,
            optimizer="adam",
            learning_rate=lr,
            dropout_rate=0.0,
            l2_regularization=0.0,
        )
        for layers in GRID_LAYERS
        for lr in GRID_LEARNING_RATES
        for activation in GRID_ACTIVATIONS
    ]


def crossover(
    a: ArchitectureCandidate, b: ArchitectureCandidate, rng: np.random.Generator
) -> ArchitectureCandidate:
    """Uniform crossover: every gene comes from a randomly chosen parent."""

    def pick(gene: str):
        return getattr(a if rng.random() < 0.5 else b, gene)

    return ArchitectureCandidate(
        layers=pick("layers"),
        activation=pick("activation"),
        optimizer=pick("optimizer"),
        learning_rate=pick("learning_rate"),
        dropout_rate=pick("dropout_rate"),
        l2_regularization=pick("l2_regularization"),
    )


def mutate_layers(
    layers: tuple[int, ...], rng: np.random.Generator, space: SearchSpace = DEFAULT_SPACE
) -> tuple[int, ...]:
    """
    Drop the last layer, append a half-size layer, or resize one layer.

    The three moves are equally likely; when dropping or appending would
    leave the allowed depth, the layer is resized instead.
    """
    move = rng.random()
    if move < 1 / 3 and len(layers) > space.min_layers:
        return layers[:-1]
    if 1 / 3 <= move < 2 / 3 and len(layers) < space.max_layers:
        return layers + (max(space.min_neurons, layers[-1] // 2),)

    index = _randint(rng, 0, len(layers) - 1)
    resized = list(layers)
    resized[index] = _randint(rng, space.min_neurons, space.max_neurons)
    return tuple(resized)


def mutate(
    candidate: ArchitectureCandidate,
    rate: float,
    rng: np.random.Generator,
    space: SearchSpace = DEFAULT_SPACE,
) -> ArchitectureCandidate:
    """Replace each gene independently with probability ``rate``."""
    changes = {}
    if rng.random() < rate:
        changes["layers"] = mutate_layers(candidate.layers, rng, space)
    if rng.random() < rate:
        changes["activation"] = _choice(rng, space.activations)
    if rng.random() < rate:
        changes["optimizer"] = _choice(rng, space.optimizers)
    if rng.random() < rate:
        changes["learning_rate"] = _choice(rng, space.learning_rates)
    if rng.random() < rate:
        changes["dropout_rate"] = _choice(rng, space.dropout_rates)
    if rng.random() < rate:
        changes["l2_regularization"] = _choice(rng, space.l2_values)
    return replace(candidate, **changes)


def estimate_parameters(layers: Sequence[int], input_size: int = INPUT_SIZE) -> int:
    """Weights and biases of a dense network with a single output unit."""
    params = 0
    prev_size = input_size
    for size in layers:
        params += prev_size * size + size
        prev_size = size

    # Output layer (binary classification)
    params += prev_size * 1 + 1
    return params
