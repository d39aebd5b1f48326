"""Tests for the filter / arrange / summarise walkthrough."""

from __future__ import annotations

import pandas as pd
import pytest
from pytest_check import check

from mpg_report.report.explore import mean_city_mpg, mean_city_mpg_by, top_city_mpg, top_classes


def test_mean_city_mpg_for_year():
    frame = pd.DataFrame({"year": [1999, 1999, 1999, 2008], "cty": [15, 17, 19, 30]})
    assert mean_city_mpg(frame, 1999) == 17.0


def test_mean_city_mpg_without_rows_raises():
    frame = pd.DataFrame({"year": [2008], "cty": [30]})
    with pytest.raises(ValueError, match="1999"):
        mean_city_mpg(frame, 1999)


def test_mean_city_mpg_by_year():
    frame = pd.DataFrame({"year": [2008, 1999, 1999], "cty": [30, 15, 19]})
    summary = mean_city_mpg_by(frame, "year")
    assert summary.to_dict("list") == {"year": [1999, 2008], "mean_cty": [17.0, 30.0]}


class TestTopCityMpg:
    def test_returns_best_non_electric_rows(self, vehicles):
        top = top_city_mpg(vehicles, 2015)
        eligible = vehicles.loc[(vehicles["year"] == 2015) & (vehicles["fuel"] != "Electricity")]
        excluded = eligible.loc[~eligible["model"].isin(top["model"])]

        with check:
            assert len(top) == 5
        with check:
            assert list(top.columns) == ["make", "model", "cty", "trans"]
        with check:
            assert top["cty"].is_monotonic_decreasing
        with check:
            assert excluded.empty or top["cty"].min() >= excluded["cty"].max()

    def test_electric_rows_are_ignored(self):
        frame = pd.DataFrame(
            {
                "make": ["Tesla", "Honda", "Ford"],
                "model": ["S", "Civic", "Focus"],
                "year": [2015, 2015, 2015],
                "cty": [120, 31, 27],
                "trans": ["A1", "M6", "A6"],
                "fuel": ["Electricity", "Regular", "Regular"],
            }
        )
        top = top_city_mpg(frame, 2015, n=5)
        assert top["model"].tolist() == ["Civic", "Focus"]

    def test_ties_keep_input_order(self):
        frame = pd.DataFrame(
            {
                "make": ["A", "B", "C"],
                "model": ["a", "b", "c"],
                "year": [2015] * 3,
                "cty": [30, 30, 30],
                "trans": ["M"] * 3,
                "fuel": ["Regular"] * 3,
            }
        )
        assert top_city_mpg(frame, 2015, n=2)["make"].tolist() == ["A", "B"]


class TestTopClasses:
    def test_ten_largest_counts(self, vehicles):
        top = top_classes(vehicles)
        counts = vehicles["class"].value_counts()
        excluded = counts.loc[~counts.index.isin(top["class"])]

        with check:
            assert len(top) == 10
        with check:
            assert list(top.columns) == ["class", "n"]
        with check:
            assert top["n"].is_monotonic_decreasing
        with check:
            assert excluded.empty or top["n"].min() >= excluded.max()

    def test_ties_are_ordered_by_name(self):
        frame = pd.DataFrame({"class": ["Vans", "Compact", "Vans", "Midsize", "Compact", "Large"]})
        top = top_classes(frame, n=3)
        assert top.to_dict("list") == {"class": ["Compact", "Vans", "Large"], "n": [2, 2, 1]}

    def test_is_stable_across_runs(self, vehicles):
        pd.testing.assert_frame_equal(top_classes(vehicles), top_classes(vehicles))
