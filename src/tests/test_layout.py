"""
Tests for chart ordering and scale construction.
"""

import math

import pandas as pd
import pytest

from diet_by_age.layout import (
    ColorScale,
    LinearScale,
    build_age_scale,
    build_color_scale,
    build_value_scale,
    column_max,
    nice_domain,
    order_by_peak_age,
    tick_increment,
    ticks,
)
from diet_by_age.preparation import ColumnSummary


# ===== FIXTURES =====


@pytest.fixture
def records():
    """Parsed records with one all-missing column."""
    return pd.DataFrame(
        {
            "age": [0.5, 20.0, 40.0, 78.5],
            "Fruit": [10.0, 50.0, 50.0, 30.0],
            "Sodium": [1.0, math.nan, 3.5, 2.0],
            "Empty": [math.nan] * 4,
        }
    )


# ===== ORDERING TESTS =====


def test_order_by_peak_age_ascending():
    summaries = [
        ColumnSummary("Sodium", 3.5, 40.0),
        ColumnSummary("Milk", 300.0, 0.5),
        ColumnSummary("Fruit", 120.0, 20.0),
    ]
    ordered = order_by_peak_age(summaries)
    assert [s.name for s in ordered] == ["Milk", "Fruit", "Sodium"]


def test_order_by_peak_age_is_stable():
    summaries = [
        ColumnSummary("Fruit", 120.0, 20.0),
        ColumnSummary("Milk", 300.0, 0.5),
        ColumnSummary("Red.meat", 60.0, 20.0),
        ColumnSummary("Nuts", 7.0, 20.0),
    ]
    ordered = order_by_peak_age(summaries)
    assert [s.name for s in ordered] == ["Milk", "Fruit", "Red.meat", "Nuts"]


def test_order_by_peak_age_missing_peaks_last():
    summaries = [
        ColumnSummary("Empty", None, None),
        ColumnSummary("Fruit", 120.0, 20.0),
        ColumnSummary("Blank", None, None),
        ColumnSummary("Milk", 300.0, 0.5),
    ]
    ordered = order_by_peak_age(summaries)
    assert [s.name for s in ordered] == ["Milk", "Fruit", "Empty", "Blank"]


def test_order_by_peak_age_does_not_mutate_input():
    summaries = [ColumnSummary("B", 1.0, 9.0), ColumnSummary("A", 1.0, 1.0)]
    order_by_peak_age(summaries)
    assert [s.name for s in summaries] == ["B", "A"]


def test_order_by_peak_age_empty():
    assert order_by_peak_age([]) == []


# ===== NICE DOMAIN & TICKS TESTS =====


@pytest.mark.parametrize(
    "start,stop,expected",
    [
        (0, 78.5, (0.0, 80.0)),
        (0, 100, (0.0, 100.0)),
        (0, 123, (0.0, 130.0)),
        (0, 45, (0.0, 45.0)),
        (0, 0.97, (0.0, 1.0)),
        (1.2, 9.7, (1.0, 10.0)),
        (0, 0, (0, 0)),
    ],
)
def test_nice_domain(start, stop, expected):
    assert nice_domain(start, stop) == expected


def test_nice_domain_reversed():
    assert nice_domain(78.5, 0) == (80.0, 0.0)


@pytest.mark.parametrize("stop", [0.3, 7.2, 19.0, 78.5, 99.9, 1234.5])
def test_nice_domain_covers_maximum(stop):
    low, high = nice_domain(0, stop)
    assert low == 0
    assert high >= stop


@pytest.mark.parametrize(
    "start,stop,expected",
    [
        (0, 78.5, 10.0),
        (0, 45, 5.0),
        (0, 20, 2.0),
        (0, 10, 1.0),
        # Negative increments encode fractional steps: -10 means 0.1
        (0, 1, -10.0),
    ],
)
def test_tick_increment(start, stop, expected):
    assert tick_increment(start, stop, 10) == expected


def test_ticks_on_nice_age_domain():
    assert ticks(0, 80) == [0.0, 10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0, 80.0]


def test_ticks_fractional():
    assert ticks(0, 1) == [i / 10 for i in range(11)]


def test_ticks_degenerate():
    assert ticks(5, 5) == [5.0]
    assert ticks(0, math.nan) == []


def test_ticks_reversed():
    assert ticks(20, 0) == [20.0, 18.0, 16.0, 14.0, 12.0, 10.0, 8.0, 6.0, 4.0, 2.0, 0.0]


# ===== LINEAR SCALE TESTS =====


def test_linear_scale_maps_and_inverts():
    scale = LinearScale(domain=(0.0, 80.0), output_range=(100.0, 340.0))
    assert scale(0) == 100.0
    assert scale(40) == 220.0
    assert scale(80) == 340.0
    assert scale.invert(220.0) == 40.0


def test_linear_scale_inverted_range():
    scale = LinearScale(domain=(0.0, 300.0), output_range=(40.0, 20.0))
    assert scale(0) == 40.0
    assert scale(300) == 20.0
    assert scale(150) == 30.0


def test_linear_scale_missing_value():
    scale = LinearScale(domain=(0.0, 10.0), output_range=(0.0, 100.0))
    assert math.isnan(scale(None))
    assert math.isnan(scale(math.nan))


def test_linear_scale_zero_width_domain_maps_to_middle():
    scale = LinearScale(domain=(0.0, 0.0), output_range=(40.0, 20.0))
    assert scale(0) == 30.0
    assert scale(12) == 30.0


def test_linear_scale_nice_returns_new_scale():
    scale = LinearScale(domain=(0.0, 78.5), output_range=(100.0, 340.0))
    niced = scale.nice()
    assert niced.domain == (0.0, 80.0)
    assert niced.output_range == (100.0, 340.0)
    assert scale.domain == (0.0, 78.5)


# ===== SCALE BUILDER TESTS =====


def test_build_age_scale_nice_upper_bound(records):
    scale = build_age_scale(records, (100, 340))
    assert scale.domain == (0.0, 80.0)
    assert scale.output_range == (100, 340)
    assert scale.ticks()[-1] == 80.0


def test_build_age_scale_empty_records():
    empty = pd.DataFrame({"age": pd.Series(dtype=float)})
    scale = build_age_scale(empty, (100, 340))
    assert scale.domain == (0.0, 0.0)
    assert scale(10) == 220.0


def test_build_value_scale_per_column(records):
    fruit = build_value_scale(records, "Fruit", (40.0, 20.0))
    sodium = build_value_scale(records, "Sodium", (40.0, 20.0))

    assert fruit.domain == (0.0, 50.0)
    # Missing values are skipped, not propagated into the domain
    assert sodium.domain == (0.0, 3.5)
    assert fruit(50.0) == sodium(3.5) == 20.0


def test_build_value_scale_all_missing_column(records):
    scale = build_value_scale(records, "Empty", (40.0, 20.0))
    assert scale.domain == (0.0, 0.0)
    assert not math.isnan(scale(0.0))


def test_column_max(records):
    assert column_max(records, "Fruit") == 50.0
    assert column_max(records, "Empty") == 0.0
    assert column_max(records, "Unknown") == 0.0


# ===== COLOR SCALE TESTS =====


def test_color_scale_endpoints():
    scale = ColorScale(domain=(0.0, 80.0), colors=("#6a87a1", "#04213b"))
    assert scale(0) == "rgb(106, 135, 161)"
    assert scale(80) == "rgb(4, 33, 59)"
    assert scale(40) == "rgb(55, 84, 110)"


def test_color_scale_missing_age():
    scale = ColorScale(domain=(0.0, 80.0), colors=("#6a87a1", "#04213b"))
    assert scale(None) is None
    assert scale(math.nan) is None


def test_build_color_scale_uses_age_maximum(records):
    scale = build_color_scale(records["age"], ("#ffffff", "#000000"))
    assert scale.domain == (0.0, 78.5)
    assert scale(78.5) == "rgb(0, 0, 0)"


def test_build_color_scale_no_ages():
    scale = build_color_scale([], ("#ffffff", "#000000"))
    assert scale.domain == (0.0, 0.0)
    assert scale(5) == "rgb(128, 128, 128)"
