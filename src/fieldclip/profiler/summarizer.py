"""
Field Summarizer

Produces the report text for one classified field:
- Numeric: summary statistics, head/tail samples and a text density plot
- Categorical: head/tail samples and the most common values
- Opaque: total length and a truncated pretty-printed body

Fields with fewer than 2 values skip the statistics and are printed verbatim.
"""

from collections import Counter
from collections.abc import Mapping, Sized
from itertools import islice
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from ..config import ProfileSettings
from ..utils import stats_utils
from ..utils.logging_utils import get_logger
from ..utils.text_render import pretty_print, render_density
from .models import (
    CategoricalSummary,
    Field,
    NumericSummary,
    OpaqueSummary,
    Report,
    Variant,
)

logger = get_logger(__name__)

DENSITY_FAILURE_TEXT = "Could not generate density plot."


def sampling_note(sample_size: int) -> str:
    return f"Plot based on a random sample of {sample_size:,} observations."


def render_verbatim(series: pd.Series) -> str:
    """Pretty-print a short field: a lone value prints bare, otherwise as a list."""
    values = series.tolist()
    if len(values) == 1:
        return pretty_print(values[0])
    return pretty_print(values)


def _samples(series: pd.Series, size: int) -> Tuple[str, str]:
    return pretty_print(series.head(size)), pretty_print(series.tail(size))


def density_plot(series: pd.Series, settings: ProfileSettings) -> Tuple[str, str]:
    """
    Render the density plot and its note for a numeric field.

    Fields longer than the configured sample size are plotted from a uniform
    random sample of exactly that size.

    Returns:
        Tuple of (plot text, note); the placeholder text replaces the plot
        when it cannot be drawn
    """
    note = ""
    values = series
    if len(series) > settings.density_sample_size:
        values = stats_utils.random_sample(
            series, settings.density_sample_size, seed=settings.random_seed
        )
        note = sampling_note(settings.density_sample_size)

    try:
        plot = render_density(
            values.dropna(),
            width=settings.density_width,
            height=settings.density_height,
        )
    except Exception as e:
        logger.warning(f"Could not generate density plot: {e}")
        return DENSITY_FAILURE_TEXT, note

    return plot, note


def numeric_summary(field: Field, settings: ProfileSettings) -> NumericSummary:
    """
    Compute the numeric summary for a field with at least 2 values.

    Args:
        field: Numeric field
        settings: Profiling settings

    Returns:
        NumericSummary with statistics rounded to 2 decimals
    """
    series: pd.Series = field.values
    count = len(series)
    missing = stats_utils.count_missing(series)
    low, high = stats_utils.value_range(series)
    head, tail = _samples(series, settings.head_size)
    plot, note = density_plot(series, settings)

    return NumericSummary(
        name=field.display_name,
        type_label=field.type_label,
        count=count,
        distinct_count=int(series.nunique(dropna=False)),
        missing_count=missing,
        missing_pct=stats_utils.missing_percentage(missing, count),
        min=stats_utils.floor2(low),
        max=stats_utils.ceil2(high),
        mean=stats_utils.round2(stats_utils.mean(series)),
        median=stats_utils.round2(stats_utils.median(series)),
        stddev=stats_utils.round2(stats_utils.stddev(series)),
        iqr=stats_utils.round2(stats_utils.iqr(series)),
        kurtosis=stats_utils.round2(stats_utils.kurtosis(series)),
        skewness=stats_utils.round2(stats_utils.skewness(series)),
        head_sample=head,
        tail_sample=tail,
        density_plot_text=plot,
        density_note=note,
    )


def top_values(series: pd.Series, k: int) -> List[Tuple[Any, int]]:
    """
    Most frequent present values, most common first.

    Ties keep the order in which values first appear.

    Example:
        >>> top_values(pd.Series(["a", "a", "b", "c", "a", "b"]), 5)
        [('a', 3), ('b', 2), ('c', 1)]
    """
    counts = Counter(series.dropna().tolist())
    # sorted() is stable, so equal counts stay in first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[:k]


def categorical_summary(field: Field, settings: ProfileSettings) -> CategoricalSummary:
    series: pd.Series = field.values
    count = len(series)
    missing = stats_utils.count_missing(series)
    head, tail = _samples(series, settings.head_size)

    return CategoricalSummary(
        name=field.display_name,
        type_label=field.type_label,
        count=count,
        distinct_count=int(series.nunique(dropna=False)),
        missing_count=missing,
        missing_pct=stats_utils.missing_percentage(missing, count),
        head_sample=head,
        tail_sample=tail,
        top_values=top_values(series, settings.top_k),
    )


def value_length(value: Any) -> int:
    """Element count of a value; DataFrames count columns, scalars count 1."""
    if isinstance(value, pd.DataFrame):
        return len(value.columns)
    if isinstance(value, Sized):
        try:
            return len(value)
        except TypeError:
            return 1
    return 1


def truncate(value: Any, limit: int) -> Any:
    """First `limit` elements of a container, keeping its kind where possible."""
    if isinstance(value, pd.DataFrame):
        return value.iloc[:, :limit]
    if isinstance(value, pd.Series):
        return value.iloc[:limit]
    if isinstance(value, Mapping):
        return dict(islice(value.items(), limit))
    if isinstance(value, (list, tuple, np.ndarray, pd.Index)):
        return value[:limit]
    return list(islice(value, limit))


def opaque_summary(field: Field, settings: ProfileSettings) -> OpaqueSummary:
    value = field.values
    length = value_length(value)
    truncated = length > settings.opaque_max_elements
    if truncated:
        value = truncate(value, settings.opaque_max_elements)

    return OpaqueSummary(
        name=field.display_name,
        type_label=field.type_label,
        length=length,
        truncated=truncated,
        body_text=pretty_print(value),
    )


def summarize_numeric(field: Field, settings: ProfileSettings) -> str:
    if len(field.values) < 2:
        return render_verbatim(field.values)
    return numeric_summary(field, settings).render()


def summarize_categorical(field: Field, settings: ProfileSettings) -> str:
    if len(field.values) < 2:
        return render_verbatim(field.values)
    return categorical_summary(field, settings).render()


def summarize_opaque(field: Field, settings: ProfileSettings) -> str:
    return opaque_summary(field, settings).render()


SUMMARIZERS: Dict[Variant, Callable[[Field, ProfileSettings], str]] = {
    Variant.NUMERIC: summarize_numeric,
    Variant.CATEGORICAL: summarize_categorical,
    Variant.OPAQUE: summarize_opaque,
}


def summarize_field(field: Field, settings: Optional[ProfileSettings] = None) -> Report:
    """
    Produce the report for one field.

    Args:
        field: Classified field
        settings: Profiling settings (defaults when omitted)

    Returns:
        Report carrying the field's display name and report text
    """
    settings = settings or ProfileSettings()
    text = SUMMARIZERS[field.variant](field, settings)
    return Report(name=field.display_name, text=text)
