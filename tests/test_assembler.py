"""
fieldclip - Tests for document assembly and the sink
"""

import json

import pandas as pd
import pytest

from fieldclip.config import ProfileSettings
from fieldclip.exceptions import InputUnavailableError
from fieldclip.profiler import fanout
from fieldclip.profiler.assembler import build_document, clip


class TestBuildDocument:
    """Tests for build_document"""

    def test_one_record_per_column_in_order(self, mixed_df, settings):
        records = build_document(mixed_df, settings).to_records()

        assert [r['name'] for r in records] == ['yield', 'crop', 'irrigated', 'sown']
        assert records[0]['contents'].startswith('Name: `yield` <float64>')
        assert 'Most common values:' in records[1]['contents']
        assert 'Length: 60' in records[3]['contents']

    def test_unnamed_input_uses_position(self, settings):
        records = build_document([1, 2, 3, 4, 5], settings).to_records()
        assert records[0]['name'] == 1

    def test_scalar_input_prints_verbatim(self, settings):
        records = build_document(42, settings).to_records()
        assert records == [{'name': 1, 'contents': '42'}]

    def test_none_raises_before_summarizing(self, monkeypatch):
        def unexpected(*args, **kwargs):
            raise AssertionError("summarizer must not run")

        monkeypatch.setattr(fanout, 'summarize_field', unexpected)
        with pytest.raises(InputUnavailableError):
            build_document(None)

    def test_json_keeps_non_ascii(self, settings):
        doc = build_document({'größe': ['ä', 'ö', 'ä']}, settings)
        text = doc.to_json()

        assert 'größe' in text
        assert json.loads(text)[0]['name'] == 'größe'

    def test_large_table_order_in_parallel_mode(self):
        df = pd.DataFrame({f'c{i}': range(3) for i in range(12)})
        settings = ProfileSettings(parallel_cell_threshold=10, max_workers=4)
        doc = build_document(df, settings)

        assert [r.name for r in doc.reports] == list(df.columns)


class TestClip:
    """Tests for clip"""

    def test_writes_document(self, mixed_df, settings, output):
        path = clip(mixed_df, settings=settings, output=output)

        assert path == output.document_path
        records = json.loads(path.read_text(encoding='utf-8'))
        assert records == build_document(mixed_df, settings).to_records()
        assert not output.error_path.exists()

    def test_none_writes_sentinel_and_raises(self, output):
        with pytest.raises(InputUnavailableError):
            clip(None, output=output)

        assert output.error_path.exists()
        assert output.error_path.read_text(encoding='utf-8').strip() == ''
        assert not output.document_path.exists()

    def test_overwrites_previous_document(self, settings, output):
        clip({'a': [1, 2, 3]}, settings=settings, output=output)
        clip({'b': ['x', 'y']}, settings=settings, output=output)

        records = json.loads(output.document_path.read_text(encoding='utf-8'))
        assert [r['name'] for r in records] == ['b']


class TestNullableColumns:
    """Tests for documents over tables with nullable numeric columns"""

    def test_nullable_columns_do_not_abort_the_document(self, settings):
        df = pd.DataFrame({
            'empty': pd.array([None] * 3, dtype='Int64'),
            'partial': pd.array([1, None, 3], dtype='Int64'),
            'floats': pd.array([1.5, None, 2.5], dtype='Float64'),
        })
        records = build_document(df, settings).to_records()

        assert [r['name'] for r in records] == ['empty', 'partial', 'floats']
        assert 'Missing: 3 (100%)' in records[0]['contents']
        assert records[0]['contents'].startswith('Name: `empty` <Int64>')
        assert 'Kurtosis: nan' in records[1]['contents']

    def test_extension_array_in_mapping_is_numeric(self, settings):
        records = build_document({'f': pd.array([None, None], dtype='Float64')}, settings).to_records()

        assert records[0]['contents'].startswith('Name: `f` <Float64>')
        assert 'Length:' not in records[0]['contents']
