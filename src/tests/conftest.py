"""
Shared fixtures for the diet-by-age tests.
"""

import pandas as pd
import pytest

AGES = ["0.5", "10", "20", "40", "60", "78.5", "85", "90", "95", "100"]


@pytest.fixture
def raw_dietary_frame():
    """Raw text table shaped like the dietary factors CSV (10 age groups)."""
    return pd.DataFrame(
        {
            "age": AGES,
            "Milk": ["300", "250", "200", "180", "170", "160", "150", "140", "500", "130"],
            "Fruit": ["50", "80", "120", "110", "100", "90", "85", "80", "75", "70"],
            "Vitamin.A": ["1", "2", "3", "4", "5", "6", "7", "8", "9", "10"],
            "Potatoes": ["9", "9", "9", "9", "9", "9", "9", "9", "9", "9"],
            "Red.meat": ["20", "40", "60", "55", "50", "45", "40", "35", "30", "25"],
            "Sodium": ["1.0", "2.0", "3.0", "3.5", "3.2", "3.1", "9", "9", "9", "9"],
        }
    )


@pytest.fixture
def dietary_csv(tmp_path, raw_dietary_frame):
    """The raw table written to a CSV file."""
    path = tmp_path / "dietary_factors.csv"
    raw_dietary_frame.to_csv(path, index=False)
    return path
