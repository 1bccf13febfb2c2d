from .models import NASRun


def create_nas_report(run: NASRun, top_k: int = 5) -> str:
    """
    Create human-readable architecture search report.

    Args:
        run: NASRun from ArchitectureSearch.search()
        top_k: Number of ranked architectures to list

    Returns:
        Formatted report string
    """
    best = run.best
    ranked = sorted(run.history, key=lambda r: r.accuracy, reverse=True)[:top_k]

    lines = [
        "=" * 60,
        "NEURAL ARCHITECTURE SEARCH",
        "=" * 60,
        f"Strategy: {run.config.strategy}",
        "",
        "Best Architecture:",
        f"  Layers: [{', '.join(str(n) for n in best.candidate.layers)}]",
        f"  Activation: {best.candidate.activation}",
        f"  Optimizer: {best.candidate.optimizer}",
        f"  LR: {best.candidate.learning_rate}",
        f"  Dropout: {best.candidate.dropout_rate}",
        f"  L2: {best.candidate.l2_regularization}",
        f"  Accuracy: {best.accuracy:.1%}",
        f"  Params: {best.num_parameters}",
        "",
        f"Top {len(ranked)} Architectures:",
        "-" * 40,
    ]
    for rank, result in enumerate(ranked, start=1):
        lines.append(f"  {rank}. {result.candidate.describe():40s} {result.accuracy:.1%}")

    lines.append("")
    lines.append(
        f"Evaluated {len(run.history)} architectures in {run.total_time_ms / 1000:.1f}s"
    )
    lines.append("=" * 60)
    return "\n".join(lines)
