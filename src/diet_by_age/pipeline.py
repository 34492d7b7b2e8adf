"""
One-shot pipeline from raw dietary rows to everything the renderer needs.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import pandas as pd

from diet_by_age.config import LayoutConfig, PipelineConfig, get_layout
from diet_by_age.constants import AGE_COLUMN
from diet_by_age.data_utils import get_headers
from diet_by_age.layout import (
    ColorScale,
    LinearScale,
    build_age_scale,
    build_color_scale,
    build_value_scale,
    order_by_peak_age,
)
from diet_by_age.preparation import (
    ColumnSummary,
    RawRows,
    prepare_records,
    select_columns,
    summarize,
)


@dataclass(frozen=True)
class ChartModel:
    """Prepared records plus the ordering and scales for drawing."""

    columns: List[str]
    ordering: List[ColumnSummary]
    records: pd.DataFrame
    age_scale: LinearScale
    value_scales: Dict[str, LinearScale]
    color_scale: ColorScale

    @property
    def is_empty(self) -> bool:
        return not self.ordering


def _headers_of(rows: RawRows) -> List[str]:
    if isinstance(rows, pd.DataFrame):
        return get_headers(rows)
    # The first row's keys define the header set
    return [str(key) for key in rows[0].keys()] if len(rows) else []


def run_pipeline(
    rows: RawRows,
    config: Optional[PipelineConfig] = None,
    layout: Optional[LayoutConfig] = None,
) -> ChartModel:
    """Select columns, parse rows, summarize, order and build the scales."""
    config = config or PipelineConfig()
    layout = layout or get_layout()

    columns = select_columns(_headers_of(rows), config.exclusions, config.marker)
    records = prepare_records(rows, columns, config.trim_count)
    summaries = summarize(records, columns)
    ordering = order_by_peak_age(summaries)

    age_scale = build_age_scale(records, tuple(layout.age_range))
    value_scales = {
        col: build_value_scale(records, col, layout.value_range) for col in columns
    }
    color_scale = build_color_scale(records[AGE_COLUMN], tuple(layout.peak_colors))

    return ChartModel(
        columns=columns,
        ordering=ordering,
        records=records,
        age_scale=age_scale,
        value_scales=value_scales,
        color_scale=color_scale,
    )
