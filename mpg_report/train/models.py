"""Estimators compared in the fuel-economy report."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np
import pandas as pd
from sklearn.linear_model import LinearRegression
from sklearn.tree import DecisionTreeRegressor

from .features import FUEL_CATEGORY_COLUMN, TARGET_COLUMN, FeatureEncoder

logger = logging.getLogger(__name__)

MODEL_KINDS = ("linear", "tree")
DEFAULT_MODELS = MODEL_KINDS


@dataclass(frozen=True)
class TreeParams:
    """Regression tree settings.

    The defaults are the usual CART defaults (minimum split size 20, minimum
    leaf size 7, maximum depth 30, complexity 0.01). ``complexity`` is the
    fraction of the root node's squared error a split has to remove; it is
    converted into scikit-learn's ``min_impurity_decrease`` at fit time.
    """

    max_depth: int = 30
    min_samples_split: int = 20
    min_samples_leaf: int = 7
    complexity: float = 0.01
    random_state: int = 42

    def estimator_kwargs(self, target: pd.Series) -> dict[str, Any]:
        root_error = float(np.var(target.to_numpy(dtype=float)))
        return {
            "criterion": "squared_error",
            "max_depth": self.max_depth,
            "min_samples_split": self.min_samples_split,
            "min_samples_leaf": self.min_samples_leaf,
            "min_impurity_decrease": self.complexity * root_error,
            "random_state": self.random_state,
        }

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FittedModel:
    name: str
    estimator: Any
    encoder: FeatureEncoder
    target: str = TARGET_COLUMN
    params: dict[str, Any] = field(default_factory=dict)

    def predict(self, frame: pd.DataFrame) -> np.ndarray:
        features = self.encoder.transform(frame)
        return np.asarray(self.estimator.predict(features), dtype=float)


def _training_data(train: pd.DataFrame, encoder: FeatureEncoder, target: str) -> tuple[pd.DataFrame, pd.Series]:
    if train.empty:
        raise ValueError("Training subset is empty.")
    if target not in train.columns:
        raise ValueError(f"Column '{target}' is required in the training subset.")

    y = pd.to_numeric(train[target], errors="coerce")
    if y.isna().any():
        raise ValueError(f"Target column '{target}' has missing or non-numeric values.")

    x = encoder.fit_transform(train)
    if FUEL_CATEGORY_COLUMN in train.columns:
        undefined = int(train[FUEL_CATEGORY_COLUMN].isna().sum())
        if undefined:
            logger.warning("%d training row(s) have an undefined fuel category", undefined)
    return x, y


def fit_linear(train: pd.DataFrame, target: str = TARGET_COLUMN) -> FittedModel:
    encoder = FeatureEncoder(drop_reference=True)
    x, y = _training_data(train, encoder, target)

    estimator = LinearRegression()
    estimator.fit(x, y)
    logger.info("Fitted linear regression on %d rows, %d features", len(x), x.shape[1])
    return FittedModel("linear", estimator, encoder, target)


def fit_tree(
    train: pd.DataFrame,
    params: TreeParams | None = None,
    target: str = TARGET_COLUMN,
) -> FittedModel:
    params = params or TreeParams()
    encoder = FeatureEncoder()
    x, y = _training_data(train, encoder, target)

    estimator = DecisionTreeRegressor(**params.estimator_kwargs(y))
    estimator.fit(x, y)
    logger.info(
        "Fitted decision tree on %d rows: depth %d, %d leaves",
        len(x),
        estimator.get_depth(),
        estimator.get_n_leaves(),
    )
    return FittedModel("tree", estimator, encoder, target, params.as_dict())


def fit_model(
    kind: str,
    train: pd.DataFrame,
    tree_params: TreeParams | None = None,
    target: str = TARGET_COLUMN,
) -> FittedModel:
    if kind == "linear":
        return fit_linear(train, target=target)
    if kind == "tree":
        return fit_tree(train, tree_params, target=target)
    raise ValueError(f"Unknown model kind '{kind}'. Expected one of: {', '.join(MODEL_KINDS)}")
