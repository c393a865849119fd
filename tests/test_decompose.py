"""
fieldclip - Unit Tests for Input Decomposition
"""

from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np
import pandas as pd
import pytest

from fieldclip.exceptions import InputUnavailableError
from fieldclip.profiler.decompose import decompose
from fieldclip.profiler.models import Variant


@dataclass
class Station:
    name: str
    readings: list


class Plain:
    def __init__(self):
        self.temperature = [20.5, 21.0]
        self._cache = {}


class BrokenMapping(Mapping):
    def __getitem__(self, key):
        raise KeyError(key)

    def __iter__(self):
        raise RuntimeError("cannot iterate")

    def __len__(self):
        return 1


class TestDecompose:
    """Tests for decompose"""

    def test_dataframe_columns(self, mixed_df):
        result = decompose(mixed_df)

        assert result.tabular
        assert result.shape == (60, 4)
        assert result.cells == 240
        assert [f.name for f in result.fields] == list(mixed_df.columns)
        assert [f.variant for f in result.fields] == [
            Variant.NUMERIC, Variant.CATEGORICAL, Variant.CATEGORICAL, Variant.OPAQUE,
        ]

    def test_two_dimensional_array_has_positional_columns(self):
        result = decompose(np.arange(6).reshape(3, 2))

        assert result.tabular
        assert [f.display_name for f in result.fields] == [1, 2]

    def test_mapping_keys_become_names(self):
        result = decompose({'b': [1, 2], 'a': ['x', 'y']})

        assert not result.tabular
        assert [f.name for f in result.fields] == ['b', 'a']

    def test_vector_is_one_unnamed_field(self):
        result = decompose([1, 2, 3])

        assert len(result.fields) == 1
        assert result.fields[0].name is None
        assert result.fields[0].display_name == 1

    def test_scalar_is_one_unnamed_field(self):
        result = decompose(42)
        assert [f.display_name for f in result.fields] == [1]

    def test_dataclass_fields(self):
        result = decompose(Station(name='north', readings=[1.0, 2.0]))
        assert [f.name for f in result.fields] == ['name', 'readings']

    def test_plain_object_public_attributes(self):
        result = decompose(Plain())
        assert [f.name for f in result.fields] == ['temperature']

    def test_none_is_unavailable(self):
        with pytest.raises(InputUnavailableError):
            decompose(None)

    @pytest.mark.parametrize("value", [len, lambda x: x, pd, iter([1, 2]), (i for i in range(3))])
    def test_undecomposable_inputs(self, value):
        with pytest.raises(InputUnavailableError):
            decompose(value)

    def test_high_dimensional_array(self):
        with pytest.raises(InputUnavailableError):
            decompose(np.zeros((2, 2, 2)))

    def test_failing_decomposition_is_wrapped(self):
        with pytest.raises(InputUnavailableError, match="cannot iterate"):
            decompose(BrokenMapping())
