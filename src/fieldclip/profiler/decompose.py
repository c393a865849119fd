"""
Input decomposition: split an in-memory value into an ordered list of Fields.
"""

import dataclasses
import inspect
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Hashable, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd
from pandas.api.extensions import ExtensionArray

from ..exceptions import InputUnavailableError
from ..utils.logging_utils import get_logger
from .classifier import SCALAR_TYPES, build_field
from .models import Field

logger = get_logger(__name__)

VECTOR_TYPES = (pd.Series, pd.Index, ExtensionArray, np.ndarray, list, tuple, set, frozenset)


@dataclass
class Decomposition:
    """Fields of one input plus the table shape when the input is tabular."""

    fields: List[Field]
    shape: Optional[Tuple[int, int]] = None

    @property
    def tabular(self) -> bool:
        return self.shape is not None

    @property
    def cells(self) -> int:
        if self.shape is None:
            return 0
        rows, cols = self.shape
        return rows * cols


def _fields_from(items: Iterable[Tuple[Optional[Hashable], Any]]) -> List[Field]:
    return [
        build_field(name, position, value)
        for position, (name, value) in enumerate(items, start=1)
    ]


def _decompose_frame(df: pd.DataFrame, named: bool = True) -> Decomposition:
    items = ((label if named else None, column) for label, column in df.items())
    return Decomposition(fields=_fields_from(items), shape=df.shape)


def _public_attributes(value: Any) -> List[Tuple[str, Any]]:
    if dataclasses.is_dataclass(value):
        return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
    return [(k, v) for k, v in vars(value).items() if not k.startswith('_')]


def decompose(value: Any) -> Decomposition:
    """
    Split a value into fields.

    - DataFrame: one field per column (tabular)
    - 2-D ndarray: one positional field per column (tabular)
    - Mapping: one field per key
    - dataclass or plain object: one field per public attribute
    - Series, list, tuple, 1-D array or scalar: a single unnamed field

    Args:
        value: Value to profile

    Returns:
        Decomposition holding the fields in input order

    Raises:
        InputUnavailableError: If the value is None, is a routine, class,
            module or iterator, or decomposition fails for any other reason
    """
    if value is None:
        raise InputUnavailableError("Could not find object: input is None")

    if (inspect.isroutine(value) or inspect.isclass(value)
            or inspect.ismodule(value) or isinstance(value, Iterator)):
        raise InputUnavailableError(
            f"Could not decompose object of type {type(value).__name__}"
        )

    try:
        if isinstance(value, pd.DataFrame):
            decomposition = _decompose_frame(value)
        elif isinstance(value, np.ndarray) and value.ndim == 2:
            decomposition = _decompose_frame(pd.DataFrame(value), named=False)
        elif isinstance(value, np.ndarray) and value.ndim > 2:
            raise InputUnavailableError(
                f"Could not decompose array with {value.ndim} dimensions"
            )
        elif isinstance(value, Mapping):
            decomposition = Decomposition(fields=_fields_from(value.items()))
        elif isinstance(value, VECTOR_TYPES + SCALAR_TYPES):
            decomposition = Decomposition(fields=_fields_from([(None, value)]))
        elif dataclasses.is_dataclass(value) or hasattr(value, '__dict__'):
            decomposition = Decomposition(fields=_fields_from(_public_attributes(value)))
        else:
            decomposition = Decomposition(fields=_fields_from([(None, value)]))
    except InputUnavailableError:
        raise
    except Exception as e:
        raise InputUnavailableError(
            f"Could not decompose object of type {type(value).__name__}: {e}"
        ) from e

    logger.debug(
        f"Decomposed {type(value).__name__} into {len(decomposition.fields)} fields"
        + (f" ({decomposition.shape[0]} x {decomposition.shape[1]})" if decomposition.tabular else "")
    )
    return decomposition
