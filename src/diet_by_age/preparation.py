"""
Data preparation for the small-multiples chart.

Turns the raw text table into numeric records and summarizes each nutrient
column by its peak value and the age at which that peak occurs.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Sequence, Union

import pandas as pd

from diet_by_age.constants import AGE_COLUMN

RawRows = Union[pd.DataFrame, Sequence[Mapping[str, str]]]


@dataclass(frozen=True)
class ColumnSummary:
    """Peak information for one nutrient column."""

    name: str
    peak_value: Optional[float]
    peak_age: Optional[float]


def _optional_float(value) -> Optional[float]:
    """Convert a pandas scalar to float, mapping missing values to None."""
    if value is None or pd.isna(value):
        return None
    return float(value)


def display_name(column: str) -> str:
    """Human readable label for a column name (dots become spaces)."""
    return column.replace(".", " ")


def select_columns(
    headers: Iterable[str], exclusions: Iterable[str], marker: str
) -> List[str]:
    """Pick the nutrient columns to chart, preserving header order.

    Drops the age column, anything in ``exclusions`` and any header that
    contains ``marker`` (case-sensitive). An empty marker matches nothing.
    """
    excluded = set(exclusions)
    excluded.add(AGE_COLUMN)

    columns = []
    for header in headers:
        if header in excluded:
            continue
        if marker and marker in header:
            continue
        columns.append(header)
    return columns


def _to_frame(rows: RawRows) -> pd.DataFrame:
    if isinstance(rows, pd.DataFrame):
        return rows
    return pd.DataFrame(list(rows))


def prepare_records(
    rows: RawRows, columns: Sequence[str], trim_count: int = 0
) -> pd.DataFrame:
    """Parse raw rows into numeric records.

    The last ``trim_count`` rows are dropped first. The result has an ``age``
    column followed by ``columns``; text that is not a number becomes NaN and
    a column missing from the input is entirely NaN.
    """
    if trim_count < 0:
        raise ValueError(f"trim_count must be >= 0, got {trim_count}")

    raw = _to_frame(rows)
    keep = max(len(raw) - trim_count, 0)
    raw = raw.iloc[:keep]

    records = pd.DataFrame(index=range(len(raw)))
    for col in [AGE_COLUMN, *columns]:
        if col in raw.columns:
            values = raw[col].reset_index(drop=True)
            values = values.map(lambda v: v.strip() if isinstance(v, str) else v)
            records[col] = pd.to_numeric(values, errors="coerce").astype(float)
        else:
            records[col] = math.nan
    return records


def summarize_column(records: pd.DataFrame, column: str) -> ColumnSummary:
    """Peak value of one column and the age of the first record reaching it."""
    values = records[column] if column in records.columns else pd.Series(dtype=float)
    valid = values.dropna()
    if valid.empty:
        return ColumnSummary(name=column, peak_value=None, peak_age=None)

    # idxmax returns the first record in iteration order on ties
    first_label = valid.idxmax()
    peak_value = float(valid[first_label])
    peak_age = _optional_float(records.at[first_label, AGE_COLUMN])
    return ColumnSummary(name=column, peak_value=peak_value, peak_age=peak_age)


def summarize(records: pd.DataFrame, columns: Sequence[str]) -> List[ColumnSummary]:
    """One ColumnSummary per column, in column order."""
    return [summarize_column(records, col) for col in columns]


def summaries_to_dataframe(summaries: Sequence[ColumnSummary]) -> pd.DataFrame:
    """Tabular view of the summaries for display and printing."""
    return pd.DataFrame(
        [
            {
                "column": s.name,
                "nutrient": display_name(s.name),
                "peak_value": s.peak_value,
                "peak_age": s.peak_age,
            }
            for s in summaries
        ],
        columns=["column", "nutrient", "peak_value", "peak_age"],
    )
