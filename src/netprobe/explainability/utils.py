from .models import FeatureImportanceResult, LIMEExplanation, SaliencyCell, SaliencyResult


def create_lime_report(explanation: LIMEExplanation) -> str:
    """
    Create human-readable LIME report.

    Args:
        explanation: LIMEExplanation from LIMEExplainer.explain()

    Returns:
        Formatted report string
    """
    point = explanation.point
    fidelity_note = "good local fit" if explanation.local_fidelity > 0.7 else "weak local fit"

    lines = [
        "=" * 60,
        "LOCAL SURROGATE EXPLANATION (LIME)",
        "=" * 60,
        f"Point: ({point.x:.2f}, {point.y:.2f})",
        f"Predicted: Class {explanation.predicted_class} ({explanation.confidence:.0%})",
        f"Local Fidelity: {explanation.local_fidelity:.0%} ({fidelity_note})",
        f"Intercept: {explanation.intercept:+.3f}",
        "",
        "Feature Contributions:",
        "(+ pushes toward this class, - pushes away)",
        "-" * 40,
    ]

    max_contrib = max(
        [abs(c.contribution) for c in explanation.contributions] + [0.01]
    )
    for c in explanation.contributions:
        bar = "#" * round(abs(c.contribution) / max_contrib * 20)
        lines.append(
            f"  {c.feature_name:10s} = {c.feature_value:6.2f}: "
            f"{c.contribution:+.3f} (weight {c.weight:+.3f}) {bar}"
        )

    lines.append("=" * 60)
    return "\n".join(lines)


def find_hotspots(
    result: SaliencyResult, threshold: float = 0.8, top_k: int = 3
) -> list[SaliencyCell]:
    """
    Cells whose saliency is at least ``threshold`` times the maximum.

    Returns at most ``top_k`` cells, most salient first.
    """
    cutoff = result.max_saliency * threshold
    cells = [cell for row in result.grid for cell in row if cell.saliency >= cutoff]
    cells.sort(key=lambda c: c.saliency, reverse=True)
    return cells[:top_k]


def create_saliency_report(result: SaliencyResult) -> str:
    """Summarise a saliency map and its most sensitive regions."""
    lines = [
        "=" * 60,
        "SALIENCY MAP",
        "=" * 60,
        f"Max Saliency: {result.max_saliency:.3f}",
        f"Min Saliency: {result.min_saliency:.3f}",
        f"Resolution: {result.resolution}x{result.resolution}",
    ]

    hotspots = find_hotspots(result)
    if hotspots:
        lines.append("")
        lines.append("High Sensitivity Regions:")
        for h in hotspots:
            lines.append(f"  - ({h.x:.1f}, {h.y:.1f}): {h.saliency:.3f}")

    lines.append("=" * 60)
    return "\n".join(lines)


def create_feature_importance_report(results: list[FeatureImportanceResult]) -> str:
    """Report permutation importances as accuracy drops."""
    if not results:
        return "No results"

    lines = [
        "=" * 60,
        "PERMUTATION FEATURE IMPORTANCE",
        "=" * 60,
        f"Baseline accuracy: {results[0].baseline_accuracy:.1%}",
        "-" * 40,
    ]
    for r in results:
        lines.append(
            f"  {r.feature_name:10s}: {r.importance:+.1%} ± {r.importance_std:.1%}"
        )
    lines.append("")
    lines.append("Higher = more important. Shows accuracy drop when feature is shuffled.")
    lines.append("=" * 60)
    return "\n".join(lines)
