"""
Document Assembler

Builds the ordered document for an input and stages it at the sink. Input
failures surface as InputUnavailableError; clip() additionally leaves an
empty-document sentinel at the error location before re-raising.
"""

from pathlib import Path
from typing import Any, Optional

from ..config import OutputSettings, ProfileSettings
from ..exceptions import InputUnavailableError
from ..utils.file_utils import save_json, write_sentinel
from ..utils.logging_utils import get_logger
from .decompose import decompose
from .fanout import summarize_all
from .models import Document

logger = get_logger(__name__)


def build_document(value: Any, settings: Optional[ProfileSettings] = None) -> Document:
    """
    Profile every field of a value.

    Args:
        value: Value to profile
        settings: Profiling settings (defaults when omitted)

    Returns:
        Document with one report per field, in input order

    Raises:
        InputUnavailableError: If the value is absent or cannot be decomposed;
            no field is summarized in that case

    Example:
        >>> doc = build_document({'x': [1, 2, 3, 4, 5]})
        >>> doc.to_records()[0]['name']
        'x'
    """
    settings = settings or ProfileSettings()
    decomposition = decompose(value)
    reports = summarize_all(decomposition, settings)
    logger.info(f"Built document with {len(reports)} reports")
    return Document(reports=reports)


def clip(
    value: Any,
    settings: Optional[ProfileSettings] = None,
    output: Optional[OutputSettings] = None
) -> Path:
    """
    Profile a value and write the document to the sink.

    The document is built completely before anything is written, so the sink
    never holds a partial document.

    Args:
        value: Value to profile
        settings: Profiling settings (defaults when omitted)
        output: Sink locations (defaults when omitted)

    Returns:
        Path of the written document

    Raises:
        InputUnavailableError: After writing the empty-document sentinel
    """
    output = output or OutputSettings()

    try:
        document = build_document(value, settings)
    except InputUnavailableError as e:
        logger.error(f"Could not profile input: {e}")
        write_sentinel(output.error_path)
        raise

    save_json(document.to_records(), output.document_path)
    return output.document_path
