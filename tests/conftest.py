"""Shared synthetic tables for the report tests."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from mpg_report.report.loaders import CUT_ORDER

FUELS = [
    "Regular",
    "Premium",
    "Diesel",
    "Electricity",
    "Regular Gas and Electricity",
    "CNG",
]
FUEL_WEIGHTS = [0.4, 0.2, 0.15, 0.1, 0.1, 0.05]
CLASSES = [
    "Compact Cars",
    "Midsize Cars",
    "Large Cars",
    "Small Station Wagons",
    "Standard Pickup Trucks",
    "Sport Utility Vehicle - 4WD",
    "Sport Utility Vehicle - 2WD",
    "Minivan - 2WD",
    "Subcompact Cars",
    "Two Seaters",
    "Vans",
    "Special Purpose Vehicle",
]


def make_vehicles(n: int = 240, seed: int = 7) -> pd.DataFrame:
    rng = np.random.default_rng(seed)

    fuel = rng.choice(FUELS, p=FUEL_WEIGHTS, size=n)
    year = rng.integers(1999, 2016, size=n)
    # Guarantee rows for the years the report queries.
    fuel[:12] = "Regular"
    year[:8] = 2015
    year[8:12] = 1999

    displ = rng.uniform(1.0, 6.5, size=n).round(1)
    cyl = np.where(displ < 2.5, 4, np.where(displ < 4.0, 6, 8)).astype(float)
    cty = 36.0 - 3.5 * displ + 0.1 * (year - 1999) + rng.normal(0.0, 1.5, size=n)
    hwy = cty + 8.0 + rng.normal(0.0, 1.0, size=n)

    electric = fuel == "Electricity"
    displ = np.where(electric, np.nan, displ)
    cyl = np.where(electric, np.nan, cyl)
    cty = np.where(electric, 110.0, cty)
    hwy = np.where(electric, 95.0, hwy)

    return pd.DataFrame(
        {
            "id": np.arange(1, n + 1),
            "make": rng.choice(["Toyota", "Ford", "Honda", "BMW", "Tesla"], size=n),
            "model": [f"Model {i}" for i in range(n)],
            "year": year,
            "class": rng.choice(CLASSES, size=n),
            "trans": rng.choice(["Automatic 4-spd", "Manual 5-spd", "Automatic (S6)"], size=n),
            "drive": rng.choice(["Front-Wheel Drive", "Rear-Wheel Drive", "4-Wheel Drive"], size=n),
            "cyl": cyl,
            "displ": displ,
            "fuel": fuel,
            "hwy": hwy.round(1),
            "cty": cty.round(1),
        }
    )


def make_diamonds(n: int = 80, seed: int = 3) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    carat = rng.uniform(0.2, 2.5, size=n).round(2)
    return pd.DataFrame(
        {
            "carat": carat,
            "cut": pd.Categorical(rng.choice(CUT_ORDER, size=n), categories=CUT_ORDER, ordered=True),
            "color": rng.choice(list("DEFGHIJ"), size=n),
            "clarity": rng.choice(["SI2", "SI1", "VS2", "VS1", "IF"], size=n),
            "depth": rng.uniform(58.0, 65.0, size=n).round(1),
            "table": rng.uniform(53.0, 62.0, size=n).round(0),
            "price": (4000 * carat + rng.normal(0, 300, size=n)).clip(min=326).round(0),
            "x": (carat * 4).round(2),
            "y": (carat * 4).round(2),
            "z": (carat * 2.5).round(2),
        }
    )


@pytest.fixture
def vehicles() -> pd.DataFrame:
    return make_vehicles()


@pytest.fixture
def diamonds() -> pd.DataFrame:
    return make_diamonds()


@pytest.fixture
def vehicles_csv(tmp_path, vehicles):
    path = tmp_path / "vehicles.csv"
    vehicles.to_csv(path, index=False)
    return path
