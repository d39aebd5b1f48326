"""CSV loaders for the report datasets."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import seaborn as sns

from mpg_report.train.features import VEHICLE_COLUMNS

DIAMOND_COLUMNS = ["carat", "cut", "color", "clarity", "depth", "table", "price", "x", "y", "z"]

# Quality grades from worst to best, as ordered in the diamonds dataset.
CUT_ORDER = ["Fair", "Good", "Very Good", "Premium", "Ideal"]


def _check_columns(frame: pd.DataFrame, required: list[str], label: str) -> None:
    missing = [col for col in required if col not in frame.columns]
    if missing:
        raise ValueError(f"{label} data is missing column(s): {', '.join(missing)}")


def load_vehicles(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Vehicles data not found: {path}")

    frame = pd.read_csv(path)
    _check_columns(frame, VEHICLE_COLUMNS, "Vehicles")
    return frame


def load_diamonds(path: Path | None = None) -> pd.DataFrame:
    """Read the diamonds table from ``path``, or from seaborn's sample data."""
    if path is None:
        frame = sns.load_dataset("diamonds")
    else:
        if not path.exists():
            raise FileNotFoundError(f"Diamonds data not found: {path}")
        frame = pd.read_csv(path)

    _check_columns(frame, DIAMOND_COLUMNS, "Diamonds")
    cuts = frame["cut"].astype(str)
    unknown = sorted(set(cuts) - set(CUT_ORDER))
    if unknown:
        raise ValueError(f"Diamonds data has unknown cut grade(s): {', '.join(unknown)}")

    frame = frame.copy()
    frame["cut"] = pd.Categorical(cuts, categories=CUT_ORDER, ordered=True)
    return frame
