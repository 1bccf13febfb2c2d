from .models import AdversarialResult, RobustnessMetrics


def create_adversarial_report(result: AdversarialResult) -> str:
    """
    Create human-readable report for one adversarial example.

    Args:
        result: AdversarialResult from FGSMAttacker.attack()

    Returns:
        Formatted report string
    """
    original = result.original
    adversarial = result.adversarial
    orig_pred = result.original_prediction
    adv_pred = result.adversarial_prediction

    lines = [
        "=" * 60,
        "ADVERSARIAL EXAMPLE (FGSM)",
        "=" * 60,
        f"Original:    ({original.x:.2f}, {original.y:.2f}) -> "
        f"Class {orig_pred.predicted_class} ({orig_pred.confidence:.0%} conf)",
        f"Adversarial: ({adversarial.x:.2f}, {adversarial.y:.2f}) -> "
        f"Class {adv_pred.predicted_class} ({adv_pred.confidence:.0%} conf)",
        f"Perturbation: {result.perturbation_norm:.3f} "
        f"(dx={result.perturbation[0]:+.3f}, dy={result.perturbation[1]:+.3f})",
        f"Epsilon: {result.epsilon}",
        f"Attack: {'Succeeded' if result.success else 'Failed'}",
        "=" * 60,
    ]
    return "\n".join(lines)


def create_robustness_report(metrics: RobustnessMetrics, num_points: int) -> str:
    """Summarise batch attack metrics."""
    if metrics.robustness_score > 0.8:
        level = "Robust"
    elif metrics.robustness_score > 0.5:
        level = "Moderately robust"
    else:
        level = "Fragile"

    lines = [
        f"Points attacked: {num_points}",
        f"Attack success rate: {metrics.attack_success_rate:.1%}",
        f"Average perturbation: {metrics.average_perturbation:.3f}",
        f"Robustness score: {metrics.robustness_score:.3f} ({level})",
    ]
    return "\n".join(lines)
