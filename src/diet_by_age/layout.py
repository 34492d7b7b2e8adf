"""
Layout derivation: chart ordering and the numeric scales used for drawing.

Scales follow the usual linear-scale conventions of charting libraries:
a ``nice`` domain is extended outward to round tick steps (1, 2, 5 times a
power of ten) so the axis labels land on clean numbers.
"""

import math
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd
from plotly.colors import find_intermediate_color, hex_to_rgb, label_rgb

from diet_by_age.constants import AGE_COLUMN, NICE_TICK_COUNT, PEAK_COLORS
from diet_by_age.preparation import ColumnSummary

# Thresholds between the 1, 2, 5 and 10 step multipliers
E10 = math.sqrt(50)
E5 = math.sqrt(10)
E2 = math.sqrt(2)


def _js_round(x: float) -> int:
    """Round half up, as chart tick arithmetic expects."""
    return math.floor(x + 0.5)


def tick_spec(start: float, stop: float, count: int) -> Tuple[int, int, float]:
    """Return (first index, last index, increment) for ticks in [start, stop].

    A negative increment ``-k`` stands for a step of ``1 / k`` and keeps
    fractional steps exact.
    """
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    if error >= E10:
        factor = 10
    elif error >= E5:
        factor = 5
    elif error >= E2:
        factor = 2
    else:
        factor = 1

    if power < 0:
        inc = math.pow(10, -power) / factor
        i1 = _js_round(start * inc)
        i2 = _js_round(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = math.pow(10, power) * factor
        i1 = _js_round(start / inc)
        i2 = _js_round(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1

    if i2 < i1 and 0.5 <= count < 2:
        return tick_spec(start, stop, count * 2)
    return i1, i2, inc


def tick_increment(start: float, stop: float, count: int) -> float:
    """Tick step for the interval; negative values are inverted steps."""
    return tick_spec(start, stop, count)[2]


def _is_degenerate(start: float, stop: float, count: int) -> bool:
    return (
        not (math.isfinite(start) and math.isfinite(stop))
        or start == stop
        or count <= 0
    )


def ticks(start: float, stop: float, count: int = NICE_TICK_COUNT) -> List[float]:
    """Round tick values covering [start, stop]."""
    if math.isnan(start) or math.isnan(stop):
        return []
    if start == stop:
        return [float(start)]
    if _is_degenerate(start, stop, count):
        return []

    reverse = stop < start
    if reverse:
        start, stop = stop, start
    i1, i2, inc = tick_spec(start, stop, count)
    if i2 < i1:
        return []

    if inc < 0:
        values = [(i1 + i) / -inc for i in range(i2 - i1 + 1)]
    else:
        values = [float((i1 + i) * inc) for i in range(i2 - i1 + 1)]
    return values[::-1] if reverse else values


def nice_domain(
    start: float, stop: float, count: int = NICE_TICK_COUNT
) -> Tuple[float, float]:
    """Extend [start, stop] outward so both ends sit on round tick steps."""
    if _is_degenerate(start, stop, count):
        return start, stop

    reverse = stop < start
    if reverse:
        start, stop = stop, start

    prestep = None
    for _ in range(10):
        step = tick_increment(start, stop, count)
        if step == prestep:
            break
        if step > 0:
            start = math.floor(start / step) * step
            stop = math.ceil(stop / step) * step
        elif step < 0:
            start = math.ceil(start * step) / step
            stop = math.floor(stop * step) / step
        else:
            break
        prestep = step

    start, stop = float(start), float(stop)
    return (stop, start) if reverse else (start, stop)


@dataclass(frozen=True)
class LinearScale:
    """Linear mapping from a data domain onto an output (pixel) range."""

    domain: Tuple[float, float]
    output_range: Tuple[float, float]

    def __call__(self, value: Optional[float]) -> float:
        if value is None or pd.isna(value):
            return math.nan
        d0, d1 = self.domain
        r0, r1 = self.output_range
        if d1 == d0:
            # Zero-width domain: everything maps to the middle of the range
            return r0 + (r1 - r0) * 0.5
        return r0 + (float(value) - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, position: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.output_range
        if r1 == r0:
            return d0 + (d1 - d0) * 0.5
        return d0 + (position - r0) / (r1 - r0) * (d1 - d0)

    def nice(self, count: int = NICE_TICK_COUNT) -> "LinearScale":
        return replace(self, domain=nice_domain(*self.domain, count=count))

    def ticks(self, count: int = NICE_TICK_COUNT) -> List[float]:
        return ticks(self.domain[0], self.domain[1], count)


@dataclass(frozen=True)
class ColorScale:
    """Linear interpolation of a numeric domain between two hex colors."""

    domain: Tuple[float, float]
    colors: Tuple[str, str]

    def __call__(self, value: Optional[float]) -> Optional[str]:
        if value is None or pd.isna(value):
            return None
        d0, d1 = self.domain
        t = 0.5 if d1 == d0 else (float(value) - d0) / (d1 - d0)
        low, high = (hex_to_rgb(c) for c in self.colors)
        rgb = find_intermediate_color(low, high, t)
        return label_rgb(tuple(min(255, max(0, _js_round(c))) for c in rgb))


def column_max(records: pd.DataFrame, column: str) -> float:
    """Largest numeric value of a column, or 0.0 when it has none."""
    if column not in records.columns:
        return 0.0
    peak = records[column].max(skipna=True)
    if pd.isna(peak):
        return 0.0
    return float(peak)


def order_by_peak_age(summaries: Iterable[ColumnSummary]) -> List[ColumnSummary]:
    """Stable ascending sort by peak age; columns without a peak go last."""
    return sorted(
        summaries,
        key=lambda s: (s.peak_age is None, s.peak_age if s.peak_age is not None else 0),
    )


def build_age_scale(
    records: pd.DataFrame,
    pixel_range: Tuple[float, float],
    count: int = NICE_TICK_COUNT,
) -> LinearScale:
    """Shared age axis scale over [0, max age], extended to a nice bound."""
    scale = LinearScale(
        domain=(0.0, column_max(records, AGE_COLUMN)),
        output_range=tuple(pixel_range),
    )
    return scale.nice(count)


def build_value_scale(
    records: pd.DataFrame, column: str, pixel_range: Tuple[float, float]
) -> LinearScale:
    """Per-chart value scale over [0, max of the column]."""
    return LinearScale(
        domain=(0.0, column_max(records, column)), output_range=tuple(pixel_range)
    )


def build_color_scale(
    ages: Sequence[float], color_range: Tuple[str, str] = PEAK_COLORS
) -> ColorScale:
    """Age to color mapping for the peak markers."""
    numeric = [float(a) for a in ages if a is not None and not pd.isna(a)]
    upper = max(numeric) if numeric else 0.0
    return ColorScale(domain=(0.0, upper), colors=tuple(color_range))
