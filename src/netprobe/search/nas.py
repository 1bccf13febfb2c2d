"""
Neural Architecture Search (NAS).

Trains and validates many candidate configurations through fresh oracles and
ranks them by validation accuracy. Three strategies are available: random
search, a fixed grid, and a small genetic algorithm.
"""

import math
import time
from typing import Callable, Sequence

import numpy as np

from ..core.models import Point
from ..core.oracle import OracleFactory
from .models import ArchitectureCandidate, ArchitectureResult, NASConfig, NASRun
from .space import (
    DEFAULT_SPACE,
    SearchSpace,
    crossover,
    estimate_parameters,
    grid_candidates,
    mutate,
    random_candidate,
)

ProgressCallback = Callable[[int, int, ArchitectureResult | None], None]

OFFSPRING_PER_GENERATION = 2


class ArchitectureSearch:
    """
    Architecture search driving full initialize/train/evaluate cycles.

    Every candidate gets its own oracle from ``oracle_factory`` so no trained
    state is shared between candidates.
    """

    def __init__(
        self,
        oracle_factory: OracleFactory,
        config: NASConfig | None = None,
        rng: np.random.Generator | None = None,
        space: SearchSpace = DEFAULT_SPACE,
        num_classes: int = 2,
    ):
        """
        Initialize the search.

        Args:
            oracle_factory: Builds a fresh, uninitialised oracle per call
            config: Strategy and budget
            rng: Random generator for sampling and genetic operators
            space: Bounds and choices of the search space
            num_classes: Output classes of every candidate network
        """
        self.oracle_factory = oracle_factory
        self.config = config or NASConfig()
        self.rng = rng or np.random.default_rng()
        self.space = space
        self.num_classes = num_classes

    def expected_evaluations(self) -> int:
        """Number of candidates the configured strategy will evaluate."""
        config = self.config
        if config.strategy == "grid":
            return min(config.num_candidates, len(grid_candidates()))
        if config.strategy == "evolutionary":
            return config.population_size + OFFSPRING_PER_GENERATION * self._generations()
        return config.num_candidates

    def search(
        self,
        train_data: Sequence[Point],
        val_data: Sequence[Point],
        on_progress: ProgressCallback | None = None,
    ) -> NASRun:
        """
        Run the search.

        Args:
            train_data: Points for training every candidate
            val_data: Held-out points for ranking
            on_progress: Called with (current, total_expected, best_so_far)
                after every evaluation

        Returns:
            NASRun with the best result and the full evaluation history

        Raises:
            ValueError: If ``train_data`` is empty
        """
        if len(train_data) == 0:
            raise ValueError("Training data is empty; nothing to search over")

        start = time.perf_counter()
        history: list[ArchitectureResult] = []
        best: ArchitectureResult | None = None
        total = self.expected_evaluations()

        def evaluate(candidate: ArchitectureCandidate) -> ArchitectureResult:
            nonlocal best
            result = self.evaluate_candidate(candidate, train_data, val_data)
            history.append(result)
            if best is None or result.accuracy > best.accuracy:
                best = result
            if on_progress is not None:
                on_progress(len(history), total, best)
            return result

        if self.config.strategy == "random":
            self._run_random(evaluate)
        elif self.config.strategy == "grid":
            self._run_grid(evaluate)
        else:
            self._run_evolutionary(evaluate)

        return NASRun(
            best=best,
            history=tuple(history),
            config=self.config,
            total_time_ms=(time.perf_counter() - start) * 1000.0,
        )

    def evaluate_candidate(
        self,
        candidate: ArchitectureCandidate,
        train_data: Sequence[Point],
        val_data: Sequence[Point],
    ) -> ArchitectureResult:
        """Initialise a fresh oracle, train it, and score it on ``val_data``."""
        epochs = self.config.epochs_per_candidate
        oracle = self.oracle_factory()
        start = time.perf_counter()

        oracle.initialize(candidate.to_hyperparameters(self.num_classes))
        for _ in range(epochs):
            oracle.train(train_data)
        evaluation = oracle.evaluate(val_data)

        return ArchitectureResult(
            candidate=candidate,
            accuracy=evaluation.accuracy,
            loss=evaluation.loss,
            training_time_ms=(time.perf_counter() - start) * 1000.0,
            num_parameters=estimate_parameters(candidate.layers),
            epochs_trained=epochs,
        )

    def _generations(self) -> int:
        remaining = self.config.num_candidates - self.config.population_size
        return max(0, remaining // OFFSPRING_PER_GENERATION)

    def _run_random(self, evaluate: Callable[[ArchitectureCandidate], ArchitectureResult]):
        for _ in range(self.config.num_candidates):
            evaluate(random_candidate(self.rng, self.space))

    def _run_grid(self, evaluate: Callable[[ArchitectureCandidate], ArchitectureResult]):
        for candidate in grid_candidates()[: self.config.num_candidates]:
            evaluate(candidate)

    def _run_evolutionary(
        self, evaluate: Callable[[ArchitectureCandidate], ArchitectureResult]
    ):
        population_size = self.config.population_size
        population = [
            evaluate(random_candidate(self.rng, self.space)) for _ in range(population_size)
        ]

        for _ in range(self._generations()):
            population = self.next_generation(population, evaluate)

    def next_generation(
        self,
        population: list[ArchitectureResult],
        evaluate: Callable[[ArchitectureCandidate], ArchitectureResult],
    ) -> list[ArchitectureResult]:
        """
        Breed two offspring from the top half and keep the fittest.

        Survivors are drawn from the whole population plus the offspring, not
        only from the parents, so the returned population has the same size as
        the one passed in.
        """
        # Stable sort keeps the earlier result first on ties
        ranked = sorted(population, key=lambda r: r.accuracy, reverse=True)
        parents = ranked[: math.ceil(len(ranked) / 2)]

        offspring = []
        for _ in range(OFFSPRING_PER_GENERATION):
            first = parents[int(self.rng.integers(0, len(parents)))]
            second = parents[int(self.rng.integers(0, len(parents)))]
            child = crossover(first.candidate, second.candidate, self.rng)
            child = mutate(child, self.config.mutation_rate, self.rng, self.space)
            offspring.append(evaluate(child))

        # Stable sort keeps incumbents ahead of offspring with equal accuracy
        survivors = sorted(ranked + offspring, key=lambda r: r.accuracy, reverse=True)
        return survivors[: len(population)]
