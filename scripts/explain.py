"""
Explanation script for a trained toy classifier.

Trains the reference PyTorch oracle on a 2D toy dataset, then prints LIME,
saliency, FGSM, uncertainty and permutation-importance reports.

Args:
    --config: Path to configuration YAML file
    --x, --y: (Optional) Point to explain (default: first validation point)
    --seed: (Optional) Override the config seed

Usage:
    python scripts/explain.py --config config.yaml --x 0.5 --y 0.5
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import argparse
from typing import Any

from rich.console import Console
from rich.progress import Progress
from rich.table import Table
from tqdm import tqdm

from netprobe.adversarial import (
    FGSMAttacker,
    FGSMConfig,
    calculate_robustness_metrics,
    create_adversarial_report,
    create_robustness_report,
)
from netprobe.core import Bounds, Point, PredictionOracle, make_rng
from netprobe.data import create_datasets
from netprobe.explainability import (
    LIMEConfig,
    LIMEExplainer,
    SaliencyConfig,
    SaliencyMapper,
    calculate_feature_importance,
    create_feature_importance_report,
    create_lime_report,
    create_saliency_report,
)
from netprobe.models import create_hyperparameters, create_oracle
from netprobe.uncertainty import (
    MCDropoutConfig,
    MCDropoutEstimator,
    get_uncertainty_interpretation,
)
from netprobe.utils import load_config, set_seed

console = Console()


def train_oracle(
    config: dict[str, Any], train_points: list[Point], val_points: list[Point]
) -> PredictionOracle:
    """
    Train the reference oracle for the configured number of epochs.

    Args:
        config: Configuration dictionary
        train_points: Training split
        val_points: Validation split

    Returns:
        Trained oracle
    """
    oracle = create_oracle(config)
    hyperparameters = create_hyperparameters(config)
    oracle.initialize(hyperparameters)

    epochs = config.get("model", {}).get("epochs", 200)
    pbar = tqdm(range(epochs), desc="Training")
    for _ in pbar:
        result = oracle.train(train_points)
        pbar.set_postfix({"loss": f"{result.loss:.4f}", "acc": f"{result.accuracy:.3f}"})

    val = oracle.evaluate(val_points)
    table = Table(title="Reference Oracle")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Layers", str(list(hyperparameters.layers)))
    table.add_row("Activation", hyperparameters.activation)
    table.add_row("Optimizer", hyperparameters.optimizer)
    table.add_row("Val Loss", f"{val.loss:.4f}")
    table.add_row("Val Accuracy", f"{val.accuracy:.4f}")
    console.print(table)

    return oracle


def explain(config: dict[str, Any], point: Point | None = None) -> None:
    """
    Run every explainer against a freshly trained oracle.

    Args:
        config: Configuration dictionary
        point: Point to explain (default: first validation point)
    """
    seed = config.get("seed", 42)
    set_seed(seed)
    rng = make_rng(seed)

    console.print("[bold]Generating data...[/bold]")
    train_points, val_points = create_datasets(config)
    console.print(f"Train: {len(train_points)} points, Val: {len(val_points)} points")

    console.print("[bold]Training oracle...[/bold]")
    oracle = train_oracle(config, train_points, val_points)

    point = point or val_points[0]
    console.print(f"\n[bold cyan]Explaining point ({point.x:.3f}, {point.y:.3f})[/bold cyan]\n")

    # LIME
    lime = LIMEExplainer(oracle, LIMEConfig.from_dict(config.get("lime")), rng=rng)
    console.print(create_lime_report(lime.explain(point)))

    # Saliency
    saliency_config = SaliencyConfig.from_dict(config.get("saliency"))
    bounds = Bounds.from_dict(config.get("bounds"))
    saliency = SaliencyMapper(oracle, saliency_config).compute(bounds)
    console.print(create_saliency_report(saliency))

    # FGSM
    attacker = FGSMAttacker(oracle, FGSMConfig.from_dict(config.get("fgsm")))
    console.print(create_adversarial_report(attacker.attack(point)))

    with Progress() as progress:
        task = progress.add_task("Attacking validation set...", total=len(val_points))
        results = attacker.attack_batch(
            val_points, on_progress=lambda current, _: progress.update(task, completed=current)
        )
    metrics = calculate_robustness_metrics(results)
    console.print(create_robustness_report(metrics, len(results)))

    # Uncertainty
    uncertainty_config = config.get("uncertainty", {})
    estimator = MCDropoutEstimator(
        oracle, MCDropoutConfig.from_dict(uncertainty_config), rng=rng
    )
    result = estimator.estimate(point)
    console.print(get_uncertainty_interpretation(result, uncertainty_config.get("threshold", 0.5)))

    map_resolution = uncertainty_config.get("map_resolution", 0)
    if map_resolution > 0:
        map_estimator = MCDropoutEstimator(
            oracle, MCDropoutConfig.for_map(estimator.config.dropout_rate), rng=rng
        )
        with Progress() as progress:
            task = progress.add_task("Uncertainty map...", total=map_resolution**2)
            uncertainty_map = map_estimator.estimate_map(
                map_resolution,
                bounds,
                on_progress=lambda current, _: progress.update(task, completed=current),
            )
        console.print(f"Max uncertainty on map: {uncertainty_map.max_uncertainty:.4f}\n")

    # Permutation importance
    importance_config = config.get("importance", {})
    importance = calculate_feature_importance(
        oracle,
        val_points,
        iterations=importance_config.get("iterations", 10),
        rng=rng,
    )
    console.print(create_feature_importance_report(importance))


def main():
    parser = argparse.ArgumentParser(description="Explain a toy classifier")
    parser.add_argument("--config", type=str, required=True, help="Path to config file")
    parser.add_argument("--x", type=float, default=None, help="X coordinate to explain")
    parser.add_argument("--y", type=float, default=None, help="Y coordinate to explain")
    parser.add_argument("--seed", type=int, default=None, help="Override config seed")
    args = parser.parse_args()

    config = load_config(args.config)
    if args.seed is not None:
        config["seed"] = args.seed

    point = None
    if args.x is not None and args.y is not None:
        point = Point(args.x, args.y)

    explain(config, point)


if __name__ == "__main__":
    main()
