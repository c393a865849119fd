"""
File I/O utilities for fieldclip.
Reads the YAML config and CSV, JSON or Parquet inputs; writes the output
document and its error sentinel.
"""

import json
import yaml
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from .logging_utils import get_logger

logger = get_logger(__name__)


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Parse a YAML config file; an empty file gives an empty mapping.

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is malformed
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        return yaml.safe_load(f) or {}


def _read_json(file_path: Path) -> Any:
    with open(file_path, 'r', encoding='utf-8') as f:
        return json.load(f)


READERS = {
    '.csv': pd.read_csv,
    '.json': _read_json,
    '.parquet': pd.read_parquet,
    '.pq': pd.read_parquet,
}


def load_input(
    file_path: Union[str, Path],
    sample_size: Optional[int] = None
) -> Any:
    """
    Load a CSV, JSON or Parquet file for profiling.

    JSON documents are returned as parsed (a mapping profiles one field per
    key); CSV and Parquet files become DataFrames.

    Args:
        file_path: Path to the input file
        sample_size: Number of table rows to keep (None = all rows)

    Returns:
        Loaded value

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the suffix is not supported
    """
    file_path = Path(file_path)
    reader = READERS.get(file_path.suffix.lower())

    if reader is None:
        raise ValueError(f"Unsupported file type: {file_path.suffix}")
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {file_path}")

    logger.info(f"Loading {file_path}")
    value = reader(file_path)

    if isinstance(value, pd.DataFrame):
        if sample_size:
            value = value.head(sample_size)
        logger.info(f"Loaded {len(value)} rows")

    return value


def save_json(
    data: Union[Dict, List],
    file_path: Union[str, Path],
    indent: int = 2
) -> None:
    """
    Save data to JSON file, creating parent directories.

    Args:
        data: Data to save (dict or list)
        file_path: Output file path
        indent: JSON indentation (default: 2)
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=False, default=str)

    logger.info(f"Saved JSON to: {file_path}")


def write_sentinel(file_path: Union[str, Path]) -> None:
    """
    Write an empty-document marker.

    Args:
        file_path: Sentinel file path
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, 'w', encoding='utf-8') as f:
        f.write("\n")

    logger.info(f"Wrote empty-document sentinel: {file_path}")
