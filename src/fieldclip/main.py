"""
Command-line entry point.

Usage:
    fieldclip data/yields.csv
    fieldclip data/records.json --stdout
    fieldclip data/big.parquet --max-workers 4 --output-dir /tmp/clip
"""

import argparse
import sys
from typing import List, Optional

from .config import Config
from .exceptions import FieldClipError
from .profiler.assembler import clip
from .utils.file_utils import load_input
from .utils.logging_utils import get_logger, setup_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='fieldclip',
        description="Profile every field of a CSV, JSON or Parquet file"
    )
    parser.add_argument('path', help='Input file')
    parser.add_argument('--config', default=None, help='YAML config file')
    parser.add_argument('--output-dir', default=None, help='Directory for the output document')
    parser.add_argument(
        '--sample-size',
        type=int,
        default=None,
        help='Number of rows to load (None = all)'
    )
    parser.add_argument('--max-workers', type=int, default=None, help='Worker pool size')
    parser.add_argument('--log-level', default=None, help='DEBUG, INFO, WARNING or ERROR')
    parser.add_argument(
        '--stdout',
        action='store_true',
        help='Also print the document to stdout'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = Config(args.config)
        if args.output_dir:
            config.set('output.output_dir', args.output_dir)
        if args.max_workers:
            config.set('profile.max_workers', args.max_workers)
        if args.log_level:
            config.set('logging.level', args.log_level)

        log_file = config.get('logging.file.path') if config.get('logging.file.enabled') else None
        setup_logger('fieldclip', log_file=log_file, level=config.get('logging.level', 'WARNING'))

        settings = config.profile_settings()
        output = config.output_settings()

        value = load_input(args.path, sample_size=args.sample_size)
        path = clip(value, settings=settings, output=output)
    except (FieldClipError, FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    if args.stdout:
        print(path.read_text(encoding='utf-8'))
    else:
        print(f"✓ Profile saved to: {path}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
