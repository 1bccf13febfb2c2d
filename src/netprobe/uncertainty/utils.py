"""
Utility functions for uncertainty estimation.
"""

from .models import UncertaintyResult


def uncertainty_level(total_uncertainty: float) -> str:
    """Bucket total uncertainty into Low / Medium / High."""
    if total_uncertainty < 0.2:
        return "Low"
    if total_uncertainty < 0.5:
        return "Medium"
    return "High"


def is_reliable(result: UncertaintyResult, threshold: float = 0.5) -> bool:
    """True when total uncertainty is below ``threshold``."""
    return result.total_uncertainty < threshold


def get_uncertainty_interpretation(result: UncertaintyResult, threshold: float = 0.5) -> str:
    """
    Generate human-readable interpretation of uncertainty.

    Args:
        result: UncertaintyResult from MC Dropout estimation
        threshold: Total uncertainty below which the prediction is reliable

    Returns:
        Interpretation string
    """
    lines = []
    point = result.point
    lower, upper = result.confidence_interval

    lines.append(f"Point: ({point.x:.2f}, {point.y:.2f})")
    lines.append(f"Predicted Class: {result.predicted_class}")
    lines.append(f"Mean Confidence: {result.mean_confidence:.1%}")
    lines.append(f"95% CI: [{lower:.0%}, {upper:.0%}]")
    lines.append(f"Epistemic (Model): {result.epistemic_uncertainty:.3f}")
    lines.append(f"Aleatoric (Data):  {result.aleatoric_uncertainty:.3f}")
    lines.append(
        f"Total Uncertainty: {uncertainty_level(result.total_uncertainty)} "
        f"({result.total_uncertainty:.3f})"
    )

    # Source of uncertainty
    if result.total_uncertainty == 0:
        source = "No variation across samples"
    elif result.epistemic_uncertainty > result.aleatoric_uncertainty:
        source = "Confidence varies near this point - the model is unsure of its fit here"
    else:
        source = "Samples disagree on the class - the point sits near a decision boundary"
    lines.append(f"Uncertainty Source: {source}")

    if is_reliable(result, threshold):
        lines.append("Status: RELIABLE")
    else:
        lines.append("Status: UNCERTAIN - prediction should not be trusted as-is")

    return "\n".join(lines)
