"""
Neural architecture search script.

Searches over dense architectures for a 2D toy dataset, prints a ranked
results table, then retrains the best candidate.

Args:
    --config: Path to configuration YAML file
    --strategy: (Optional) Override nas.strategy (random/grid/evolutionary)
    --num-candidates: (Optional) Override nas.num_candidates

Usage:
    python scripts/search.py --config config.yaml --strategy evolutionary
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

from netprobe.core import make_rng
from netprobe.data import create_datasets
from netprobe.models import create_oracle, create_oracle_factory
from netprobe.search import ArchitectureSearch, NASConfig, NASRun, create_nas_report
from netprobe.utils import load_config, set_seed

console = Console()


def print_results_table(run: NASRun, top_k: int = 10) -> None:
    """Print the best ``top_k`` evaluated architectures."""
    ranked = sorted(run.history, key=lambda r: r.accuracy, reverse=True)[:top_k]

    table = Table(title=f"Top {len(ranked)} Architectures ({run.config.strategy})")
    table.add_column("Rank", style="cyan")
    table.add_column("Layers")
    table.add_column("Activation")
    table.add_column("Optimizer")
    table.add_column("LR")
    table.add_column("Params", justify="right")
    table.add_column("Val Loss", justify="right")
    table.add_column("Val Acc", style="green", justify="right")

    for rank, result in enumerate(ranked, start=1):
        candidate = result.candidate
        table.add_row(
            str(rank),
            str(list(candidate.layers)),
            candidate.activation,
            candidate.optimizer,
            f"{candidate.learning_rate}",
            f"{result.num_parameters:,}",
            f"{result.loss:.4f}",
            f"{result.accuracy:.4f}",
        )

    console.print(table)


def search(config: dict[str, Any]) -> NASRun:
    """
    Run architecture search and retrain the winner.

    Args:
        config: Configuration dictionary

    Returns:
        Finished NASRun
    """
    seed = config.get("seed", 42)
    set_seed(seed)

    console.print("[bold]Generating data...[/bold]")
    train_points, val_points = create_datasets(config)

    nas_config = NASConfig.from_dict(config.get("nas"))
    num_classes = config.get("data", {}).get("num_classes", 2)
    engine = ArchitectureSearch(
        create_oracle_factory(config),
        nas_config,
        rng=make_rng(seed),
        num_classes=num_classes,
    )

    console.print(
        f"\n[bold cyan]Starting {nas_config.strategy} search "
        f"({engine.expected_evaluations()} candidates, "
        f"{nas_config.epochs_per_candidate} epochs each)...[/bold cyan]\n"
    )

    with Progress() as progress:
        task = progress.add_task("Searching...", total=engine.expected_evaluations())

        def on_progress(current, total, best):
            description = "Searching..."
            if best is not None:
                description = f"Searching... best {best.accuracy:.1%}"
            progress.update(task, completed=current, total=total, description=description)

        run = engine.search(train_points, val_points, on_progress=on_progress)

    print_results_table(run)
    console.print(create_nas_report(run))

    # Retrain the best candidate for longer
    epochs = config.get("model", {}).get("epochs", 200)
    oracle = create_oracle(config)
    oracle.initialize(run.best.candidate.to_hyperparameters(num_classes))
    pbar = tqdm(range(epochs), desc="Retraining best")
    for _ in pbar:
        result = oracle.train(train_points)
        pbar.set_postfix({"loss": f"{result.loss:.4f}", "acc": f"{result.accuracy:.3f}"})

    final = oracle.evaluate(val_points)
    console.print(
        f"\n[bold green]Search complete! Best architecture "
        f"{run.best.candidate.describe()} reaches {final.accuracy:.1%} "
        f"after {epochs} epochs[/bold green]"
    )
    return run


def main():
    parser = argparse.ArgumentParser(description="Neural architecture search")
    parser.add_argument("--config", type=str, required=True, help="Path to config file")
    parser.add_argument(
        "--strategy",
        type=str,
        default=None,
        choices=["random", "grid", "evolutionary"],
        help="Search strategy (overrides config)",
    )
    parser.add_argument(
        "--num-candidates",
        type=int,
        default=None,
        help="Number of candidates (overrides config)",
    )
    args = parser.parse_args()

    config = load_config(args.config)
    nas = config.setdefault("nas", {})
    if args.strategy is not None:
        nas["strategy"] = args.strategy
    if args.num_candidates is not None:
        nas["num_candidates"] = args.num_candidates

    search(config)


if __name__ == "__main__":
    main()
