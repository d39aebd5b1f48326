"""Report figures: model comparison panels, tree diagram and diamonds charts."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from matplotlib.figure import Figure
from sklearn.tree import DecisionTreeRegressor, plot_tree

from mpg_report.train.compare_models import PREDICTION_COLUMN
from mpg_report.train.features import FUEL_CATEGORY_COLUMN, TARGET_COLUMN, UNDEFINED_LEVEL
from mpg_report.train.models import FittedModel


def plot_actual_vs_predicted(predictions: pd.DataFrame, title: str = "") -> Figure:
    """Side-by-side displacement scatters of actual and predicted combined mpg."""
    data = predictions.copy()
    data[FUEL_CATEGORY_COLUMN] = data[FUEL_CATEGORY_COLUMN].fillna(UNDEFINED_LEVEL).astype(str)
    hue_order = sorted(data[FUEL_CATEGORY_COLUMN].unique())
    size_norm = (float(data["cyl"].min()), float(data["cyl"].max()))

    fig, axes = plt.subplots(1, 2, figsize=(12, 5), sharex=True, sharey=True)
    panels = [(TARGET_COLUMN, "Actual"), (PREDICTION_COLUMN, "Predicted")]
    for ax, (column, label) in zip(axes, panels):
        sns.scatterplot(
            data=data,
            x="displ",
            y=column,
            hue=FUEL_CATEGORY_COLUMN,
            hue_order=hue_order,
            size="cyl",
            size_norm=size_norm,
            alpha=0.6,
            legend="auto" if column == PREDICTION_COLUMN else False,
            ax=ax,
        )
        ax.set_title(label)
        ax.set_xlabel("Displacement (L)")
        ax.set_ylabel("Combined mpg")

    if title:
        fig.suptitle(title)
    fig.tight_layout()
    return fig


def plot_tree_structure(model: FittedModel, max_depth: int | None = None) -> Figure:
    if not isinstance(model.estimator, DecisionTreeRegressor):
        raise ValueError(f"Model '{model.name}' is not a decision tree.")

    fig, ax = plt.subplots(figsize=(16, 9))
    plot_tree(
        model.estimator,
        feature_names=model.encoder.feature_columns,
        filled=True,
        rounded=True,
        precision=2,
        max_depth=max_depth,
        ax=ax,
    )
    ax.set_title(f"Decision tree for {model.target}")
    return fig


def plot_carat_vs_price(diamonds: pd.DataFrame) -> Figure:
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.scatterplot(data=diamonds, x="carat", y="price", hue="cut", alpha=0.4, s=10, ax=ax)
    ax.set_title("Price by carat")
    return fig


def plot_cut_counts(diamonds: pd.DataFrame) -> Figure:
    fig, ax = plt.subplots(figsize=(8, 5))
    sns.countplot(data=diamonds, x="cut", ax=ax)
    ax.set_title("Diamonds by cut")
    return fig


def plot_price_density(diamonds: pd.DataFrame) -> Figure:
    fig, ax = plt.subplots(figsize=(10, 5))
    sns.kdeplot(data=diamonds, x="price", fill=True, ax=ax)
    ax.set_title("Distribution of price")
    ax.set_xlabel("Price (USD)")
    return fig


def save_figure(fig: Figure, output_dir: Path, name: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{name}.png"
    fig.savefig(path, dpi=100, bbox_inches="tight")
    plt.close(fig)
    return path
