"""fieldclip: compact text profiles of in-memory data, one report per field."""

from .config import Config, OutputSettings, ProfileSettings
from .exceptions import (
    ConfigError,
    DensityPlotError,
    FieldClipError,
    InputUnavailableError,
)
from .profiler import Document, Report, Variant, build_document, clip, summarize_field

__version__ = "0.1.0"

__all__ = [
    'Config',
    'OutputSettings',
    'ProfileSettings',
    'ConfigError',
    'DensityPlotError',
    'FieldClipError',
    'InputUnavailableError',
    'Document',
    'Report',
    'Variant',
    'build_document',
    'clip',
    'summarize_field',
]
