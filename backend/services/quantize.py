"""Reduce a year of daily contribution counts to a handful of display symbols.

Two presentation modes over the same series:
- tiered bitmap: 32 column buckets × 7 threshold rows, two symbols
- intensity levels: one palette symbol per day, 8 levels
"""

import math
from typing import Sequence

import pandas as pd

BITMAP_COLUMNS = 32
BITMAP_ROWS = 7

FILLED = "1"
EMPTY = "0"

# Level 0 = no activity ... level 7 = heaviest
INTENSITY_PALETTE = (
    "#161B22",
    "#0E4429",
    "#006D32",
    "#1A8A3C",
    "#26A641",
    "#30BD4A",
    "#39D353",
    "#7CF08C",
)


def column_averages(counts: Sequence[int], columns: int = BITMAP_COLUMNS) -> list[float]:
    """Mean count per contiguous bucket; buckets with no days average 0."""
    if not counts:
        return [0.0] * columns

    values = pd.Series(counts, dtype="float64")
    days_per_column = math.ceil(len(values) / columns)
    buckets = values.index // days_per_column
    averages = values.groupby(buckets).mean().reindex(range(columns), fill_value=0.0)
    return averages.tolist()


def tiered_bitmap(
    counts: Sequence[int],
    filled: str = FILLED,
    empty: str = EMPTY,
    columns: int = BITMAP_COLUMNS,
    rows: int = BITMAP_ROWS,
) -> list[str]:
    """Row-major ``columns × rows`` grid, top (highest threshold) row first.

    A cell is filled when its column average reaches the row's share of the
    busiest column. With no contributions at all every cell is empty.
    """
    averages = column_averages(counts, columns)
    max_value = max(averages)
    if max_value == 0:
        return [empty] * (columns * rows)

    grid = []
    for y in range(rows - 1, -1, -1):
        # avg >= (max / rows) * (y + 1), scaled so the busiest column always
        # reaches the top row
        for x in range(columns):
            reached = averages[x] * rows >= max_value * (y + 1)
            grid.append(filled if reached else empty)
    return grid


def intensity_level(count: int, max_level: int = len(INTENSITY_PALETTE) - 1) -> int:
    if count <= 0:
        return 0
    return min(math.ceil(count / 2), max_level)


def intensity_levels(counts: Sequence[int], palette: Sequence[str] = INTENSITY_PALETTE) -> list[str]:
    """One palette symbol per day, in input order."""
    max_level = len(palette) - 1
    return [palette[intensity_level(count, max_level)] for count in counts]


def encode_symbols(symbols: Sequence[str], delimiter: str = ",") -> str:
    return delimiter.join(symbols)
