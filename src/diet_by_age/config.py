"""
Configuration objects for the chart pipeline.

Defaults are structured dataclasses; a YAML file and ``key=value`` command
line arguments are merged on top of them with OmegaConf.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from diet_by_age.constants import (
    CHART_SUBTITLE,
    CHART_TITLE,
    DATA_URL,
    DEFAULT_OUTPUT,
    EXCLUDED_COLUMNS,
    PEAK_COLORS,
    SOURCE_NOTE,
    TRIM_COUNT,
    VITAMIN_MARKER,
)


@dataclass
class PipelineConfig:
    """Which columns and rows of the dataset feed the charts."""

    exclusions: List[str] = field(default_factory=lambda: list(EXCLUDED_COLUMNS))
    marker: str = VITAMIN_MARKER
    trim_count: int = TRIM_COUNT


@dataclass
class LayoutConfig:
    """Geometry and text of the small-multiples figure (pixels)."""

    width: int = 800
    margin_top: int = 20
    margin_right: int = 20
    margin_bottom: int = 30
    margin_left: int = 40
    title_margin: int = 135
    footer_height: int = 110
    chart_height: int = 85
    # Rows overlap: consecutive charts start chart_height - row_overlap apart
    row_overlap: int = 60
    label_width: int = 200
    age_range: List[float] = field(default_factory=lambda: [100.0, 340.0])
    peak_colors: List[str] = field(default_factory=lambda: list(PEAK_COLORS))
    line_color: str = "#04213b"
    grid_color: str = "#9a9a9a"
    legend_color: str = "#4a5e70"
    marker_size: int = 12
    font_family: str = "Helvetica, Arial, sans-serif"
    title: str = CHART_TITLE
    subtitle: str = CHART_SUBTITLE
    source_note: str = SOURCE_NOTE

    @property
    def row_pitch(self) -> int:
        return max(self.chart_height - self.row_overlap, 1)

    @property
    def value_range(self) -> Tuple[float, float]:
        """Vertical pixel span of one chart, bottom to top."""
        return (self.chart_height - 1.5 * self.margin_bottom, float(self.margin_top))

    def figure_height(self, n_charts: int) -> int:
        return int(
            self.margin_top
            + self.title_margin
            + n_charts * self.row_pitch
            + self.margin_bottom
            + self.footer_height
        )


LAYOUT_PRESETS: Dict[str, LayoutConfig] = {
    "full": LayoutConfig(),
    "compact": LayoutConfig(
        width=600,
        title_margin=110,
        footer_height=90,
        chart_height=70,
        row_overlap=48,
        label_width=160,
        age_range=[80.0, 260.0],
        marker_size=10,
    ),
}
DEFAULT_LAYOUT = "full"


@dataclass
class RunConfig:
    """Everything a single chart run needs; keys match the CLI arguments."""

    source: str = DATA_URL
    exclusions: List[str] = field(default_factory=lambda: list(EXCLUDED_COLUMNS))
    marker: str = VITAMIN_MARKER
    trim_count: int = TRIM_COUNT
    layout: str = DEFAULT_LAYOUT
    geometry: Dict[str, Any] = field(default_factory=dict)
    output: str = DEFAULT_OUTPUT
    config: Optional[str] = None

    def pipeline_config(self) -> PipelineConfig:
        return PipelineConfig(
            exclusions=list(self.exclusions),
            marker=self.marker,
            trim_count=self.trim_count,
        )

    def layout_config(self) -> LayoutConfig:
        return get_layout(self.layout, self.geometry)


def get_layout(
    name: str = DEFAULT_LAYOUT, overrides: Optional[Dict[str, Any]] = None
) -> LayoutConfig:
    """Return a layout preset, optionally with some fields overridden."""
    if name not in LAYOUT_PRESETS:
        available = ", ".join(sorted(LAYOUT_PRESETS))
        raise ValueError(f"Unknown layout preset '{name}' (available: {available})")

    base = OmegaConf.structured(LAYOUT_PRESETS[name])
    if not overrides:
        return OmegaConf.to_object(base)
    try:
        merged = OmegaConf.merge(base, overrides)
    except OmegaConfBaseException as e:
        raise ValueError(f"Invalid layout override: {e}") from e
    return OmegaConf.to_object(merged)


def load_config(args: Optional[List[str]] = None) -> RunConfig:
    """Merge defaults, an optional YAML file and CLI ``key=value`` pairs.

    ``args`` defaults to ``sys.argv[1:]``. The YAML file is named by the
    ``config`` key and sits between the defaults and the CLI values.
    """
    try:
        cli_config = OmegaConf.from_cli(args) if args is not None else OmegaConf.from_cli()
    except Exception as e:
        raise RuntimeError(f"Failed to parse CLI arguments: {e}") from e

    layers = [OmegaConf.structured(RunConfig)]
    config_path = cli_config.get("config")
    if config_path:
        if not Path(config_path).exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        try:
            layers.append(OmegaConf.load(config_path))
        except Exception as e:
            raise RuntimeError(f"Failed to read config file {config_path}: {e}") from e
    layers.append(cli_config)

    try:
        merged = OmegaConf.merge(*layers)
    except OmegaConfBaseException as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    run_config: RunConfig = OmegaConf.to_object(merged)
    if run_config.trim_count < 0:
        raise ValueError(f"trim_count must be >= 0, got {run_config.trim_count}")
    if run_config.layout not in LAYOUT_PRESETS:
        available = ", ".join(sorted(LAYOUT_PRESETS))
        raise ValueError(
            f"Unknown layout preset '{run_config.layout}' (available: {available})"
        )
    return run_config
