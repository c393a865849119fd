"""
Statistical utilities for fieldclip.
Summary statistics over numeric Series plus kernel density estimation for
the text density plot. Missing values are skipped unless stated otherwise.
"""

import math
from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR

import numpy as np
import pandas as pd
from scipy import stats as scipy_stats
from typing import Optional, Tuple

from ..exceptions import DensityPlotError
from .logging_utils import get_logger

logger = get_logger(__name__)


def round2(value) -> float:
    """Round a statistic to 2 decimal places (NaN stays NaN)."""
    return round(float(value), 2)


def _quantize2(value, rounding) -> float:
    value = float(value)
    # floats beyond 2**53 are whole numbers already
    if not math.isfinite(value) or abs(value) >= 2 ** 53:
        return value
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=rounding))


def floor2(value) -> float:
    """Round down to 2 decimals, so the result never exceeds the input."""
    return _quantize2(value, ROUND_FLOOR)


def ceil2(value) -> float:
    """Round up to 2 decimals, so the result is never below the input."""
    return _quantize2(value, ROUND_CEILING)


def count_missing(series: pd.Series) -> int:
    """Number of values failing the "present" check."""
    return int(series.isna().sum())


def missing_percentage(missing: int, total: int) -> float:
    """
    Share of missing values, in percent, rounded to 2 decimals.

    Example:
        >>> missing_percentage(1, 3)
        33.33
    """
    if total == 0:
        return 0.0
    return round(missing / total * 100, 2)


def mean(series: pd.Series, skip_missing: bool = True) -> float:
    return float(series.mean(skipna=skip_missing))


def median(series: pd.Series, skip_missing: bool = True) -> float:
    return float(series.median(skipna=skip_missing))


def stddev(series: pd.Series, skip_missing: bool = True) -> float:
    # sample standard deviation (ddof=1)
    return float(series.std(skipna=skip_missing))


def iqr(series: pd.Series, skip_missing: bool = True) -> float:
    """
    Interquartile range using linear interpolation between order statistics.

    Example:
        >>> iqr(pd.Series([1, 2, 3, 4, 5]))
        2.0
    """
    values = series.dropna() if skip_missing else series
    if not skip_missing and values.isna().any():
        return float('nan')
    return float(values.quantile(0.75) - values.quantile(0.25))


def kurtosis(series: pd.Series, skip_missing: bool = True) -> float:
    # bias-corrected excess kurtosis, NaN below 4 values
    return float(series.kurt(skipna=skip_missing))


def skewness(series: pd.Series, skip_missing: bool = True) -> float:
    # bias-corrected skewness, NaN below 3 values
    return float(series.skew(skipna=skip_missing))


def value_range(series: pd.Series) -> Tuple[float, float]:
    """Smallest and largest present values."""
    return float(series.min()), float(series.max())


def random_sample(
    series: pd.Series,
    size: int,
    seed: Optional[int] = None
) -> pd.Series:
    """
    Uniform random sample without replacement, keeping the original order.

    Args:
        series: Values to sample from
        size: Sample size; the series is returned unchanged when not larger
        seed: Seed for reproducible sampling

    Returns:
        Sampled Series
    """
    if len(series) <= size:
        return series

    rng = np.random.default_rng(seed)
    positions = np.sort(rng.choice(len(series), size=size, replace=False))
    return series.iloc[positions]


def density_estimate(
    series: pd.Series,
    points: int
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Gaussian kernel density estimate evaluated on an even grid.

    Args:
        series: Numeric values (missing values are dropped)
        points: Number of grid points spanning [min, max]

    Returns:
        Tuple of (grid, density)

    Raises:
        DensityPlotError: If fewer than 2 values remain, the values have no
            spread, or the estimator fails
    """
    values = pd.to_numeric(series, errors='coerce').dropna().to_numpy(dtype=float)
    values = values[np.isfinite(values)]

    if len(values) < 2:
        raise DensityPlotError(f"Need at least 2 finite values, got {len(values)}")

    low, high = values.min(), values.max()
    if low == high:
        raise DensityPlotError("Values have zero variance")

    try:
        kde = scipy_stats.gaussian_kde(values)
    except (np.linalg.LinAlgError, ValueError) as e:
        raise DensityPlotError(f"Density estimation failed: {e}") from e

    grid = np.linspace(low, high, points)
    density = kde(grid)

    if not np.all(np.isfinite(density)):
        raise DensityPlotError("Density estimate is not finite")

    return grid, density
