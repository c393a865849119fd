"""
Field profiler

Decomposes a value into fields, classifies each field, summarizes it and
assembles the reports into one document.
"""

from .assembler import build_document, clip
from .classifier import build_field, classify_values
from .decompose import Decomposition, decompose
from .fanout import ExecutionPlan, plan_execution, summarize_all
from .models import Document, Field, Report, Variant
from .summarizer import summarize_field

__all__ = [
    'build_document',
    'clip',
    'build_field',
    'classify_values',
    'Decomposition',
    'decompose',
    'ExecutionPlan',
    'plan_execution',
    'summarize_all',
    'Document',
    'Field',
    'Report',
    'Variant',
    'summarize_field',
]
