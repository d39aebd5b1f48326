"""Filter / arrange / select / summarise walkthrough over the vehicles table."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

TOP_CITY_COLUMNS = ("make", "model", "cty", "trans")


def mean_city_mpg(frame: pd.DataFrame, year: int) -> float:
    """Average city economy of the records from ``year``."""
    cty = frame.loc[frame["year"] == year, "cty"]
    if cty.empty:
        raise ValueError(f"No records for year {year}.")
    return float(cty.mean())


def mean_city_mpg_by(frame: pd.DataFrame, column: str) -> pd.DataFrame:
    return (
        frame.groupby(column, sort=True)["cty"]
        .mean()
        .rename("mean_cty")
        .reset_index()
    )


def top_city_mpg(
    frame: pd.DataFrame,
    year: int,
    n: int = 5,
    columns: Sequence[str] = TOP_CITY_COLUMNS,
) -> pd.DataFrame:
    """Best city economy among the non-electric records of ``year``.

    Sorting is stable, so rows with equal ``cty`` keep their input order.
    """
    subset = frame.loc[(frame["year"] == year) & (frame["fuel"] != "Electricity")]
    ranked = subset.sort_values("cty", ascending=False, kind="mergesort")
    return ranked.head(n).loc[:, list(columns)].reset_index(drop=True)


def top_classes(frame: pd.DataFrame, n: int = 10) -> pd.DataFrame:
    """The ``n`` most common size classes; ties are ordered by class name."""
    counts = frame.groupby("class", sort=True).size().rename("n").reset_index()
    counts = counts.sort_values("n", ascending=False, kind="mergesort")
    return counts.head(n).reset_index(drop=True)
