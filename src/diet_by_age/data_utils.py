"""
Data loading utilities for the dietary factors dataset.

The dataset is a wide table: one row per age group, one column per dietary
factor. Every cell is read as text so that numeric coercion happens in one
place (see ``diet_by_age.preparation``).
"""

from pathlib import Path
from typing import List, Union

import pandas as pd

from diet_by_age.constants import DATA_URL


def is_remote(source: str) -> bool:
    """Return True when the source looks like a URL rather than a local path."""
    return str(source).startswith(("http://", "https://"))


def load_dietary_data(source: Union[str, Path] = DATA_URL) -> pd.DataFrame:
    """Load the raw dietary factors table from a URL or a local CSV file.

    A single attempt is made; any failure is fatal and re-raised as a
    ``RuntimeError`` carrying the original cause.
    """
    source = str(source)
    if not is_remote(source) and not Path(source).exists():
        raise FileNotFoundError(f"Dietary data file not found: {source}")

    try:
        df: pd.DataFrame = pd.read_csv(
            source, dtype=str, keep_default_na=False, encoding="utf-8"
        )
    except Exception as e:
        raise RuntimeError(f"Could not load dietary data from {source}: {e}") from e

    # Clean up the column names
    df.columns = df.columns.str.strip()
    return df


def get_headers(df: pd.DataFrame) -> List[str]:
    """Column names in file order."""
    return [str(col) for col in df.columns]
