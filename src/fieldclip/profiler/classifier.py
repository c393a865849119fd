"""
Field classification.

Maps a field's raw value to exactly one Variant. Opaque is the catch-all:
unrecognised types and classification failures both land there.
"""

import numbers
from typing import Any, Hashable, Optional

import numpy as np
import pandas as pd
from pandas.api import types as ptypes
from pandas.api.extensions import ExtensionArray, ExtensionDtype

from ..utils.logging_utils import get_logger
from .models import Field, Variant

logger = get_logger(__name__)

CATEGORICAL_INFERRED = {'string', 'boolean', 'categorical', 'empty'}
NUMERIC_INFERRED = {'integer', 'floating', 'mixed-integer-float', 'decimal'}

SCALAR_TYPES = (str, bytes, numbers.Number, np.generic)


def as_series(value: Any) -> Optional[pd.Series]:
    """
    View a field value as a pandas Series, or None if it is not vector-like.

    Scalars become a one-element Series; lists, tuples and 1-D arrays are
    wrapped as-is, so nested containers end up in an object Series.
    """
    if isinstance(value, pd.Series):
        return value
    if isinstance(value, (pd.Index, ExtensionArray)):
        return pd.Series(value)
    if isinstance(value, np.ndarray):
        if value.ndim == 0:
            return pd.Series([value.item()])
        if value.ndim == 1:
            return pd.Series(value)
        return None
    if isinstance(value, (list, tuple)):
        return pd.Series(list(value), dtype=object if len(value) == 0 else None)
    if isinstance(value, SCALAR_TYPES) or value is None:
        return pd.Series([value])
    return None


def classify_series(series: pd.Series) -> Variant:
    """
    Classify a Series by its dtype, inferring element types for object data.

    Example:
        >>> classify_series(pd.Series([1.5, None]))
        <Variant.NUMERIC: 'numeric'>
        >>> classify_series(pd.Series([True, False]))
        <Variant.CATEGORICAL: 'categorical'>
    """
    dtype = series.dtype

    # bool is numeric to pandas, so it goes first
    if ptypes.is_bool_dtype(dtype):
        return Variant.CATEGORICAL
    if isinstance(dtype, pd.CategoricalDtype):
        return Variant.CATEGORICAL
    if dtype == object:
        inferred = ptypes.infer_dtype(series, skipna=True)
        if inferred in CATEGORICAL_INFERRED:
            return Variant.CATEGORICAL
        if inferred in NUMERIC_INFERRED:
            return Variant.NUMERIC
        return Variant.OPAQUE
    if ptypes.is_string_dtype(dtype):
        return Variant.CATEGORICAL
    if ptypes.is_complex_dtype(dtype):
        return Variant.OPAQUE
    if ptypes.is_numeric_dtype(dtype):
        return Variant.NUMERIC

    return Variant.OPAQUE


def classify_values(value: Any) -> Variant:
    """
    Classify a raw field value.

    Args:
        value: Any field value

    Returns:
        The field's Variant; never raises
    """
    try:
        series = as_series(value)
        if series is None:
            return Variant.OPAQUE
        return classify_series(series)
    except Exception as e:
        logger.debug(f"Classification failed for {type(value).__name__}: {e}")
        return Variant.OPAQUE


def type_label(value: Any) -> str:
    """dtype name for pandas/numpy containers, Python type name otherwise."""
    if isinstance(value, (pd.Series, pd.Index, np.ndarray, ExtensionArray)):
        return str(value.dtype)
    return type(value).__name__


def build_field(name: Optional[Hashable], position: int, value: Any) -> Field:
    """
    Classify a raw value and wrap it as a Field.

    Numeric and categorical fields carry a Series; numeric values stored as
    objects or in nullable extension dtypes (Int64, Float64) become float64
    with NaN for missing. Opaque fields keep the raw value.
    """
    variant = classify_values(value)
    values = value

    if variant is not Variant.OPAQUE:
        values = as_series(value)
        if variant is Variant.NUMERIC and values.dtype == object:
            values = pd.to_numeric(values, errors='coerce')
        if variant is Variant.NUMERIC and isinstance(values.dtype, ExtensionDtype):
            values = pd.Series(
                values.to_numpy(dtype='float64', na_value=np.nan),
                index=values.index,
                name=values.name,
            )

    return Field(
        name=name,
        position=position,
        values=values,
        variant=variant,
        type_label=type_label(value),
    )
