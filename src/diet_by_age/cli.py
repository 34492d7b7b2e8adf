#!/usr/bin/env python3
"""CLI for rendering the dietary-intake-by-age chart."""

import sys

from diet_by_age.config import RunConfig, load_config
from diet_by_age.data_utils import load_dietary_data
from diet_by_age.layout import LinearScale
from diet_by_age.pipeline import ChartModel, run_pipeline
from diet_by_age.preparation import display_name
from diet_by_age.visualization.charts import create_small_multiples_chart, save_chart

# Output formatting constants
TABLE_WIDTH = 60
RANK_COLUMN_WIDTH = 4
NUTRIENT_COLUMN_WIDTH = 32
PEAK_AGE_COLUMN_WIDTH = 9
PEAK_VALUE_COLUMN_WIDTH = 11


def format_optional(value, spec: str) -> str:
    return "n/a" if value is None else format(value, spec)


def print_configuration(config: RunConfig):
    """Print run configuration."""
    print(f"Source: {config.source}")
    print(f"Layout: {config.layout}")
    print(f"Excluded columns: {len(config.exclusions)} (+ marker '{config.marker}')")
    print(f"Trimmed tail rows: {config.trim_count}")
    print(f"Output: {config.output}")
    print("-" * 50)


def print_scale(name: str, scale: LinearScale):
    print(f"{name}: domain {list(scale.domain)} → range {list(scale.output_range)}")


def print_summary(model: ChartModel):
    """Print nutrients in chart order (earliest peak first)."""
    if model.is_empty:
        print("⚠️  No nutrient columns to chart")
        return

    print(f"📊 {len(model.ordering)} nutrients ordered by peak age:")
    print(
        f"{'Rank':>{RANK_COLUMN_WIDTH}} {'Nutrient':<{NUTRIENT_COLUMN_WIDTH}} {'Peak Age':>{PEAK_AGE_COLUMN_WIDTH}} {'Peak Value':>{PEAK_VALUE_COLUMN_WIDTH}}"
    )
    print("─" * TABLE_WIDTH)
    for i, summary in enumerate(model.ordering, 1):
        print(
            f"  {i:2d}. {display_name(summary.name):<{NUTRIENT_COLUMN_WIDTH}} "
            f"{format_optional(summary.peak_age, '.1f'):>{PEAK_AGE_COLUMN_WIDTH - 1}} "
            f"{format_optional(summary.peak_value, '.2f'):>{PEAK_VALUE_COLUMN_WIDTH}}"
        )
    print("─" * TABLE_WIDTH)
    print_scale("Age axis", model.age_scale)


def main(args=None):
    """Main CLI function."""
    print("🚀 Starting diet-by-age")

    try:
        config = load_config(args)
        print_configuration(config)

        print("🔄 Loading dietary data...")
        raw = load_dietary_data(config.source)
        print(f"Loaded {len(raw)} rows, {len(raw.columns)} columns")

        layout = config.layout_config()
        model = run_pipeline(raw, config.pipeline_config(), layout)
        print_summary(model)

        print("🔄 Rendering chart...")
        fig = create_small_multiples_chart(model, layout)
        output = save_chart(fig, config.output, layout)

        print(f"\n✅ Chart written to {output}")

    except KeyboardInterrupt:
        print("\n❌ Interrupted by user")
        sys.exit(1)
    except (ValueError, RuntimeError, FileNotFoundError) as e:
        print(f"❌ Error rendering chart: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Unexpected error: {e}")
        print("Please report this issue with the full error message.")
        sys.exit(1)


if __name__ == "__main__":
    main()
