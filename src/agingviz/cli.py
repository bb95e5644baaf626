#!/usr/bin/env python3
"""CLI for summarizing the survey data and exporting the chart."""

import sys
from pathlib import Path

from omegaconf import DictConfig

from .aggregation import AggregateResult
from .config import load_config
from .data import load_base_data
from .visualization.charts import build_dimension_figure

# Output formatting constants
TABLE_WIDTH = 72
RANK_COLUMN_WIDTH = 4
AGE_COLUMN_WIDTH = 22
CATEGORY_COLUMN_WIDTH = 34
VALUE_COLUMN_WIDTH = 10


def parse_config() -> DictConfig:
    """Parse CLI configuration."""
    return load_config(overrides=sys.argv[1:])


def print_configuration(config: DictConfig):
    """Print run configuration."""
    print(f"Data file: {config.csv_path}")
    print(f"Dimension: {config.dimension}")
    if config.output:
        print(f"Output file: {config.output}")
    print("-" * 50)


def print_summary(result: AggregateResult):
    """Print the aggregate table ranked by mean value."""
    if result.is_empty:
        print(f"⚠️  No rows for age group by {result.dimension.label}")
        return

    print(f"📊 Mean reported percentage by age group and {result.dimension.label}:")

    ranked = result.series.sort_values("Value", ascending=False, kind="stable")

    print(
        f"{'Rank':>{RANK_COLUMN_WIDTH}} {'Age group':<{AGE_COLUMN_WIDTH}} {result.dimension.label:<{CATEGORY_COLUMN_WIDTH}} {'Mean':>{VALUE_COLUMN_WIDTH}}"
    )
    print("─" * TABLE_WIDTH)

    for i, row in enumerate(ranked.itertuples(index=False), 1):
        missing = "" if row.Category in result.table.get(row.AgeGroup, {}) else " *"
        print(
            f"  {i:2d}. {row.AgeGroup:<{AGE_COLUMN_WIDTH}} {row.Category:<{CATEGORY_COLUMN_WIDTH}} {row.Value:>{VALUE_COLUMN_WIDTH}.2f}{missing}"
        )

    print("─" * TABLE_WIDTH)
    if any(
        category not in result.table.get(age, {})
        for age in result.age_groups
        for category in result.categories
    ):
        print("* no matching rows; shown as 0")


def write_figure(fig, output: str) -> Path:
    """Write the figure as standalone HTML with plotly.js inlined."""
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(path), include_plotlyjs=True)
    return path


def main():
    """Main CLI function."""
    print("🚀 Starting agingviz")

    try:
        config = parse_config()
        print_configuration(config)

        print("🔄 Loading survey data...")
        base = load_base_data(config.csv_path, verbose=bool(config.verbose))

        print("🔄 Aggregating...")
        result, fig = build_dimension_figure(
            base, str(config.dimension), config.chart, verbose=bool(config.verbose)
        )

        print()
        print_summary(result)

        if config.output:
            path = write_figure(fig, str(config.output))
            print(f"\n💾 Chart written to {path}")

        print("\n✅ Done!")

    except KeyboardInterrupt:
        print("\n❌ Interrupted by user")
        sys.exit(1)
    except (ValueError, RuntimeError, FileNotFoundError) as e:
        print(f"❌ Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Unexpected error: {e}")
        print("Please report this issue with the full error message.")
        sys.exit(1)


if __name__ == "__main__":
    main()
