"""
Adversarial examples with the Fast Gradient Sign Method (FGSM).

The oracle exposes no gradients, so the input gradient of the class
probability is estimated with central finite differences and the point is
moved by ``epsilon`` along its sign.
"""

from typing import Callable, Sequence

import numpy as np
from rich.console import Console

from ..core.errors import MissingPredictionError
from ..core.models import Point, probability_of
from ..core.oracle import PredictionOracle, predict_one
from .models import AdversarialResult, FGSMConfig, RobustnessMetrics

console = Console()


class FGSMAttacker:
    """
    FGSM attacker against a black-box oracle.

    Untargeted attacks take a single step that lowers the probability of the
    original class. Targeted attacks step toward the target class and then
    refine with decaying steps until the oracle predicts it.
    """

    def __init__(self, oracle: PredictionOracle, config: FGSMConfig | None = None):
        """
        Initialize the attacker.

        Args:
            oracle: Trained prediction oracle
            config: Epsilon, gradient step, target class and iteration budget
        """
        self.oracle = oracle
        self.config = config or FGSMConfig()

    def attack(self, point: Point) -> AdversarialResult:
        """
        Generate an adversarial example for ``point``.

        Args:
            point: Point to perturb

        Returns:
            AdversarialResult describing the perturbation and its outcome

        Raises:
            MissingPredictionError: If the oracle returns no prediction
        """
        epsilon = self.config.epsilon
        target_class = self.config.target_class

        original_prediction = predict_one(self.oracle, point)
        if original_prediction is None:
            raise MissingPredictionError("Failed to get original prediction")

        score_class = (
            target_class if target_class is not None else original_prediction.predicted_class
        )
        grad_x, grad_y = self.input_gradient(point, score_class)

        if target_class is None:
            # Ascend the loss: lower the probability of the original class
            dx = -epsilon * np.sign(grad_x)
            dy = -epsilon * np.sign(grad_y)
        else:
            dx = epsilon * np.sign(grad_x)
            dy = epsilon * np.sign(grad_y)

        adversarial = point.moved(float(dx), float(dy))

        if target_class is not None:
            for iteration in range(self.config.max_iterations):
                current = predict_one(self.oracle, adversarial)
                if current is not None and current.predicted_class == target_class:
                    break

                grad_x, grad_y = self.input_gradient(adversarial, target_class)
                step = epsilon / (iteration + 2)
                adversarial = adversarial.moved(
                    float(step * np.sign(grad_x)), float(step * np.sign(grad_y))
                )

            dx = adversarial.x - point.x
            dy = adversarial.y - point.y

        adversarial_prediction = predict_one(self.oracle, adversarial)
        if adversarial_prediction is None:
            raise MissingPredictionError("Failed to get adversarial prediction")

        if target_class is not None:
            success = adversarial_prediction.predicted_class == target_class
        else:
            success = (
                adversarial_prediction.predicted_class
                != original_prediction.predicted_class
            )

        return AdversarialResult(
            original=point,
            adversarial=adversarial,
            original_prediction=original_prediction,
            adversarial_prediction=adversarial_prediction,
            perturbation=(float(dx), float(dy)),
            epsilon=epsilon,
            success=success,
        )

    def input_gradient(self, point: Point, class_index: int) -> tuple[float, float]:
        """
        Central-difference gradient of the probability of ``class_index``.

        Uses one batched query of 4 points (x±h, y±h).
        """
        h = self.config.gradient_step
        points = [
            Point(point.x + h, point.y),
            Point(point.x - h, point.y),
            Point(point.x, point.y + h),
            Point(point.x, point.y - h),
        ]
        predictions = self.oracle.predict(points)
        if len(predictions) < len(points):
            raise MissingPredictionError("Failed to get predictions for gradient estimate")

        f = [probability_of(pred, class_index) for pred in predictions[:4]]
        return (f[0] - f[1]) / (2 * h), (f[2] - f[3]) / (2 * h)

    def attack_batch(
        self,
        points: Sequence[Point],
        on_progress: Callable[[int, int], None] | None = None,
    ) -> list[AdversarialResult]:
        """
        Attack every point independently.

        A point whose attack raises is reported and skipped; the batch goes on.

        Args:
            points: Points to attack
            on_progress: Called with (current, total) after each point

        Returns:
            Results for the points that could be attacked, in input order
        """
        results = []
        total = len(points)

        for index, point in enumerate(points):
            try:
                results.append(self.attack(point))
            except Exception as e:
                console.print(
                    f"[yellow]Warning: Failed to generate adversarial for point "
                    f"{index}: {e}[/yellow]"
                )

            if on_progress is not None:
                on_progress(index + 1, total)

        return results


def calculate_robustness_metrics(results: Sequence[AdversarialResult]) -> RobustnessMetrics:
    """
    Aggregate attack outcomes into robustness metrics.

    The score is ``1 - success_rate / (1 + average_perturbation)``: it drops
    as more attacks succeed and as they need smaller perturbations.
    """
    if not results:
        return RobustnessMetrics(
            attack_success_rate=0.0, average_perturbation=0.0, robustness_score=1.0
        )

    success_rate = sum(1 for r in results if r.success) / len(results)
    average_perturbation = sum(r.perturbation_norm for r in results) / len(results)
    robustness_score = 1.0 - success_rate * (1.0 / (1.0 + average_perturbation))

    return RobustnessMetrics(
        attack_success_rate=success_rate,
        average_perturbation=average_perturbation,
        robustness_score=robustness_score,
    )
