"""Render the vehicles walkthrough, diamonds charts and model comparison.

Usage:
    python -m mpg_report.report.build_report --vehicles-path data/raw/vehicles.csv
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Sequence

import numpy as np
import pandas as pd

from mpg_report.train.compare_models import RANDOM_SEED, train_and_compare
from mpg_report.train.models import DEFAULT_MODELS, MODEL_KINDS, TreeParams

from . import charts, explore
from .loaders import load_diamonds, load_vehicles

logger = logging.getLogger(__name__)


def _diamonds_section(diamonds: pd.DataFrame, output_dir: Path) -> list[Path]:
    figures = {
        "diamonds_carat_price": charts.plot_carat_vs_price(diamonds),
        "diamonds_cut_counts": charts.plot_cut_counts(diamonds),
        "diamonds_price_density": charts.plot_price_density(diamonds),
    }
    return [charts.save_figure(fig, output_dir, name) for name, fig in figures.items()]


def run_report(
    vehicles: pd.DataFrame,
    output_dir: Path,
    seed: int = RANDOM_SEED,
    models: Sequence[str] = DEFAULT_MODELS,
    diamonds: pd.DataFrame | None = None,
    tree_params: TreeParams | None = None,
    mean_year: int = 1999,
    top_year: int = 2015,
) -> dict[str, Any]:
    summary: dict[str, Any] = {"figures": []}

    if diamonds is not None:
        summary["figures"].extend(_diamonds_section(diamonds, output_dir))
    else:
        logger.info("No diamonds data supplied, skipping diamonds charts")

    summary["mean_cty"] = explore.mean_city_mpg(vehicles, mean_year)
    print(f"Average city mpg in {mean_year}: {summary['mean_cty']:.2f}")

    summary["city_mpg_by_year"] = explore.mean_city_mpg_by(vehicles, "year")
    print("\nAverage city mpg by year:")
    print(summary["city_mpg_by_year"].to_string(index=False))

    summary["top_city_mpg"] = explore.top_city_mpg(vehicles, top_year)
    print(f"\nBest city mpg in {top_year} (non-electric):")
    print(summary["top_city_mpg"].to_string(index=False))

    summary["top_classes"] = explore.top_classes(vehicles)
    print("\nMost common size classes:")
    print(summary["top_classes"].to_string(index=False))

    # One generator per run, handed to the splitter explicitly.
    rng = np.random.RandomState(seed)
    result = train_and_compare(vehicles, random_state=rng, models=models, tree_params=tree_params)
    summary["comparison"] = result

    print()
    for name, predicted in result.predictions.items():
        print(f"{name} RMSE: {result.rmse[name]:.3f}")
        fig = charts.plot_actual_vs_predicted(predicted, title=f"{name}: actual vs predicted")
        summary["figures"].append(charts.save_figure(fig, output_dir, f"{name}_actual_vs_predicted"))

    if "tree" in result.fitted:
        fig = charts.plot_tree_structure(result.fitted["tree"])
        summary["figures"].append(charts.save_figure(fig, output_dir, "tree_structure"))

    return summary


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Build the fuel-economy and diamonds report.")
    parser.add_argument(
        "--vehicles-path",
        type=Path,
        default=None,
        help="Path to the vehicles CSV (defaults to data/raw/vehicles.csv).",
    )
    parser.add_argument(
        "--diamonds-path",
        type=Path,
        default=None,
        help="Path to the diamonds CSV; the diamonds charts are skipped when omitted.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the report figures (defaults to reports/).",
    )
    parser.add_argument("--seed", type=int, default=RANDOM_SEED, help="Seed for the train/test split.")
    parser.add_argument(
        "--models",
        nargs="+",
        choices=MODEL_KINDS,
        default=list(DEFAULT_MODELS),
        help="Models to fit and compare.",
    )
    parser.add_argument("--mean-year", type=int, default=1999, help="Year for the average city mpg.")
    parser.add_argument("--top-year", type=int, default=2015, help="Year for the best city mpg table.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    base_dir = Path(__file__).resolve().parents[2]
    vehicles_path = args.vehicles_path or (base_dir / "data" / "raw" / "vehicles.csv")
    output_dir = args.output_dir or (base_dir / "reports")

    diamonds = load_diamonds(args.diamonds_path) if args.diamonds_path else None
    summary = run_report(
        load_vehicles(vehicles_path),
        output_dir=output_dir,
        seed=args.seed,
        models=args.models,
        diamonds=diamonds,
        mean_year=args.mean_year,
        top_year=args.top_year,
    )

    print(f"\nFigures exported: {len(summary['figures'])} to {output_dir}")


if __name__ == "__main__":
    main()
