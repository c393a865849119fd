"""
Text rendering helpers: default pretty-printed forms and a fixed-size ASCII
density chart.
"""

import pprint
from typing import Any, List

import numpy as np
import pandas as pd

from ..exceptions import DensityPlotError
from .stats_utils import density_estimate


def pretty_print(value: Any) -> str:
    """
    Default pretty-printed text of a value.

    pandas and numpy containers are converted to plain Python values first so
    numbers print without their numpy type wrappers.

    Example:
        >>> pretty_print(pd.Series([1, 2, 3]))
        '[1, 2, 3]'
    """
    if isinstance(value, pd.DataFrame):
        return value.to_string()
    if isinstance(value, (pd.Series, pd.Index, np.ndarray)):
        value = value.tolist()
    elif isinstance(value, np.generic):
        value = value.item()
    return pprint.pformat(value, width=80, sort_dicts=False)


def _format_tick(value: float) -> str:
    return f"{value:.3g}"


def _place(row: List[str], text: str, start: int) -> None:
    for i, ch in enumerate(text):
        if 0 <= start + i < len(row):
            row[start + i] = ch


def render_density(series: pd.Series, width: int = 45, height: int = 19) -> str:
    """
    Draw a kernel density curve as a width x height block of text.

    The bottom two lines hold the x axis and its tick labels; the left margin
    holds density tick labels for the top, middle and bottom plot rows.

    Args:
        series: Numeric values (missing values are ignored)
        width: Total characters per line
        height: Total number of lines

    Returns:
        The chart, lines joined with newlines

    Raises:
        DensityPlotError: If the density cannot be estimated or the chart
            does not fit the requested size
    """
    plot_rows = height - 2
    if plot_rows < 3:
        raise DensityPlotError(f"Plot height {height} is too small")

    # margin width depends on the labels, which depend on the estimate
    label_width = 8
    plot_cols = width - label_width - 1
    if plot_cols < 3:
        raise DensityPlotError(f"Plot width {width} is too small")

    grid, density = density_estimate(series, plot_cols)
    top = float(density.max())
    if top <= 0:
        raise DensityPlotError("Density estimate is zero everywhere")

    middle_row = (plot_rows - 1) // 2
    y_labels = {
        0: _format_tick(top),
        middle_row: _format_tick(top * (plot_rows - 1 - middle_row) / (plot_rows - 1)),
        plot_rows - 1: "0",
    }

    canvas = [[" "] * plot_cols for _ in range(plot_rows)]
    for col, level in enumerate(density / top):
        row = int(round((1 - level) * (plot_rows - 1)))
        canvas[row][col] = "*"

    lines = []
    for r in range(plot_rows):
        label = y_labels.get(r, "")
        axis = "+" if r in y_labels else "|"
        lines.append(label.rjust(label_width)[:label_width] + axis + "".join(canvas[r]))

    axis_row = ["-"] * plot_cols
    for col in (0, plot_cols // 2, plot_cols - 1):
        axis_row[col] = "+"
    lines.append(" " * label_width + "+" + "".join(axis_row))

    tick_row = [" "] * width
    left = _format_tick(grid[0])
    right = _format_tick(grid[-1])
    mid = _format_tick(grid[len(grid) // 2])
    left_start = label_width + 1
    right_start = width - len(right)
    mid_start = label_width + 1 + plot_cols // 2 - len(mid) // 2
    _place(tick_row, left, left_start)
    if left_start + len(left) < mid_start and mid_start + len(mid) < right_start:
        _place(tick_row, mid, mid_start)
    _place(tick_row, right, right_start)
    lines.append("".join(tick_row))

    return "\n".join(line.ljust(width)[:width] for line in lines)
