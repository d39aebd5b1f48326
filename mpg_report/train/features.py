"""Derived columns and predictor encoding for the fuel-economy models."""

from __future__ import annotations

import logging
from typing import Iterable

import pandas as pd

logger = logging.getLogger(__name__)

VEHICLE_COLUMNS = [
    "id",
    "make",
    "model",
    "year",
    "class",
    "trans",
    "drive",
    "cyl",
    "displ",
    "fuel",
    "hwy",
    "cty",
]

TARGET_COLUMN = "comb_mpg"
FUEL_CATEGORY_COLUMN = "fuel_category"

NUMERIC_PREDICTORS = ["year", "cyl", "displ"]
CATEGORICAL_PREDICTORS = [FUEL_CATEGORY_COLUMN]

UNDEFINED_LEVEL = "undefined"

# "Electricty" is the spelling used by the source data.
FUEL_CATEGORIES = {
    "Premium": "Gas",
    "Regular": "Gas",
    "Gasoline or E85": "Gas",
    "Midgrade": "Gas",
    "Gasoline or propane": "Gas",
    "Gasoline or natural gas": "Gas",
    "Premium or E85": "Gas",
    "Regular Gas and Electricity": "Hybrid",
    "Premium Gas or Electricity": "Hybrid",
    "Premium and Electricty": "Hybrid",
    "Electricity": "Electric",
    "Diesel": "Diesel",
    "CNG": "CNG",
}


def _require_columns(frame: pd.DataFrame, columns: Iterable[str]) -> None:
    missing = [col for col in columns if col not in frame.columns]
    if missing:
        raise ValueError(f"Missing required column(s): {', '.join(missing)}")


def simplify_fuel(value: object) -> str | None:
    """Map a raw fuel string to its simplified category, or None if unmapped."""
    if not isinstance(value, str):
        return None
    return FUEL_CATEGORIES.get(value)


def derive_features(frame: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``frame`` with ``comb_mpg`` and ``fuel_category`` appended."""
    _require_columns(frame, ["cty", "hwy", "fuel"])
    work = frame.copy()
    work[TARGET_COLUMN] = (work["cty"] + work["hwy"]) / 2
    work[FUEL_CATEGORY_COLUMN] = work["fuel"].map(simplify_fuel)

    unmapped = work.loc[work[FUEL_CATEGORY_COLUMN].isna(), "fuel"]
    if not unmapped.empty:
        logger.warning(
            "%d record(s) have an unmapped fuel type: %s",
            len(unmapped),
            sorted(unmapped.astype(str).unique()),
        )
    return work


def drop_electric(frame: pd.DataFrame) -> pd.DataFrame:
    """Remove all-electric records; records with an undefined category are kept."""
    _require_columns(frame, [FUEL_CATEGORY_COLUMN])
    return frame.loc[frame[FUEL_CATEGORY_COLUMN] != "Electric"].copy()


class FeatureEncoder:
    """Turns vehicle rows into a numeric design matrix.

    Category levels are learned on ``fit`` and frozen afterwards, so the
    training and test matrices always share the same columns. With
    ``drop_reference`` the alphabetically first level of each categorical
    predictor is the reference level and gets no indicator column.
    """

    def __init__(
        self,
        numeric_columns: list[str] | None = None,
        categorical_columns: list[str] | None = None,
        drop_reference: bool = False,
    ) -> None:
        self.numeric_columns = list(NUMERIC_PREDICTORS if numeric_columns is None else numeric_columns)
        self.categorical_columns = list(
            CATEGORICAL_PREDICTORS if categorical_columns is None else categorical_columns
        )
        self.drop_reference = drop_reference
        self.category_levels: dict[str, list[str]] = {}
        self.feature_columns: list[str] = []

    @property
    def is_fitted(self) -> bool:
        return bool(self.feature_columns)

    def _prepare(self, frame: pd.DataFrame) -> pd.DataFrame:
        _require_columns(frame, self.numeric_columns + self.categorical_columns)
        work = frame[self.numeric_columns + self.categorical_columns].copy()

        for col in self.numeric_columns:
            try:
                work[col] = pd.to_numeric(work[col]).astype(float)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Field '{col}' must be numeric.") from exc
            if work[col].isna().any():
                raise ValueError(f"Field '{col}' has missing values.")

        for col in self.categorical_columns:
            work[col] = work[col].astype(object).where(work[col].notna(), UNDEFINED_LEVEL)
            work[col] = work[col].astype(str)

        return work

    def fit(self, frame: pd.DataFrame) -> "FeatureEncoder":
        if frame.empty:
            raise ValueError("Cannot fit an encoder on an empty table.")
        work = self._prepare(frame)
        self.category_levels = {
            col: sorted(work[col].unique().tolist()) for col in self.categorical_columns
        }
        self.feature_columns = list(self._encode(work).columns)
        return self

    def transform(self, frame: pd.DataFrame) -> pd.DataFrame:
        if not self.is_fitted:
            raise ValueError("Encoder must be fitted before transform.")
        encoded = self._encode(self._prepare(frame))
        return encoded[self.feature_columns]

    def fit_transform(self, frame: pd.DataFrame) -> pd.DataFrame:
        return self.fit(frame).transform(frame)

    def _encode(self, work: pd.DataFrame) -> pd.DataFrame:
        encoded = work[self.numeric_columns].astype(float)
        for col in self.categorical_columns:
            levels = self.category_levels[col]
            unseen = sorted(set(work[col]) - set(levels))
            if unseen:
                raise ValueError(
                    f"Field '{col}' has level(s) not seen during fitting: {', '.join(unseen)}"
                )
            kept = levels[1:] if self.drop_reference else levels
            for level in kept:
                encoded[f"{col}_{level}"] = (work[col] == level).astype(float)
        return encoded
