"""Fit the fuel-economy models on a seeded train/test split and compare them.

Usage:
    python -m mpg_report.train.compare_models --data-path data/raw/vehicles.csv
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd
from sklearn.metrics import mean_squared_error
from sklearn.model_selection import train_test_split

from mpg_report.report.loaders import load_vehicles

from .features import TARGET_COLUMN, derive_features, drop_electric
from .models import DEFAULT_MODELS, MODEL_KINDS, FittedModel, TreeParams, fit_model

logger = logging.getLogger(__name__)

RANDOM_SEED = 42
TEST_SIZE = 0.25
PREDICTION_COLUMN = ".pred"

RandomState = int | np.random.RandomState


@dataclass
class ComparisonResult:
    train: pd.DataFrame
    test: pd.DataFrame
    fitted: dict[str, FittedModel] = field(default_factory=dict)
    predictions: dict[str, pd.DataFrame] = field(default_factory=dict)
    rmse: dict[str, float] = field(default_factory=dict)


def split_dataset(
    frame: pd.DataFrame,
    random_state: RandomState,
    test_size: float = TEST_SIZE,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Shuffle ``frame`` and split it into disjoint train and test subsets.

    ``random_state`` is either a seed or a ``RandomState`` owned by the caller;
    passing the same seed for the same table always yields the same split.
    """
    if len(frame) < 2:
        raise ValueError(f"Need at least 2 rows to split, got {len(frame)}.")

    train, test = train_test_split(
        frame,
        test_size=test_size,
        random_state=random_state,
        shuffle=True,
    )
    logger.info("Split %d rows into %d train / %d test", len(frame), len(train), len(test))
    return train, test


def rmse(actual: Sequence[float] | pd.Series, predicted: Sequence[float] | np.ndarray) -> float:
    actual_np = np.asarray(actual, dtype=float)
    predicted_np = np.asarray(predicted, dtype=float)
    return float(np.sqrt(mean_squared_error(actual_np, predicted_np)))


def predict_frame(model: FittedModel, test: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``test`` with the model's predictions in ``.pred``."""
    if test.empty:
        raise ValueError("Test subset is empty.")

    predictors = test.drop(columns=[model.target], errors="ignore")
    out = test.copy()
    out[PREDICTION_COLUMN] = model.predict(predictors)
    return out


def train_and_compare(
    vehicles: pd.DataFrame,
    random_state: RandomState = RANDOM_SEED,
    models: Sequence[str] = DEFAULT_MODELS,
    tree_params: TreeParams | None = None,
) -> ComparisonResult:
    unknown = [kind for kind in models if kind not in MODEL_KINDS]
    if unknown:
        raise ValueError(f"Unknown model kind(s): {', '.join(unknown)}")

    modeling = drop_electric(derive_features(vehicles))
    train, test = split_dataset(modeling, random_state)
    result = ComparisonResult(train=train, test=test)

    for kind in models:
        fitted = fit_model(kind, train, tree_params=tree_params)
        predicted = predict_frame(fitted, test)
        result.fitted[kind] = fitted
        result.predictions[kind] = predicted
        result.rmse[kind] = rmse(predicted[TARGET_COLUMN], predicted[PREDICTION_COLUMN])
        logger.info("%s RMSE: %.4f", kind, result.rmse[kind])

    return result


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Compare fuel-economy regression models.")
    parser.add_argument(
        "--data-path",
        type=Path,
        default=None,
        help="Path to the vehicles CSV (defaults to data/raw/vehicles.csv).",
    )
    parser.add_argument("--seed", type=int, default=RANDOM_SEED, help="Seed for the train/test split.")
    parser.add_argument(
        "--models",
        nargs="+",
        choices=MODEL_KINDS,
        default=list(DEFAULT_MODELS),
        help="Models to fit and compare.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    base_dir = Path(__file__).resolve().parents[2]
    data_path = args.data_path or (base_dir / "data" / "raw" / "vehicles.csv")

    result = train_and_compare(
        load_vehicles(data_path),
        random_state=np.random.RandomState(args.seed),
        models=args.models,
    )
    for name, value in result.rmse.items():
        print(f"{name} RMSE: {value:.3f}")


if __name__ == "__main__":
    main()
