"""
Utility modules for fieldclip.
Provides common functionality for logging, file I/O, statistics and text
rendering.
"""

from .logging_utils import setup_logger, get_logger
from .file_utils import load_config, load_input, save_json, write_sentinel
from .text_render import pretty_print, render_density

__all__ = [
    'setup_logger',
    'get_logger',
    'load_config',
    'load_input',
    'save_json',
    'write_sentinel',
    'pretty_print',
    'render_density',
]
