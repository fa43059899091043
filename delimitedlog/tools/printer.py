#!/usr/bin/env python3
"""
Print the records stored in a segment file.

Usage:
    # Uncompressed segment, offsets taken from the file name
    python -m delimitedlog.tools.printer data/events/partition-0/00000000000000000100.log

    # Gzip segment with explicit starting offset, printing payloads
    python -m delimitedlog.tools.printer segment.log.gz --compression gzip --offset 100 --print-values
"""

import argparse
import sys
from typing import List, Optional, TextIO

from delimitedlog.core.log.codec import CompressionType, get_codec
from delimitedlog.core.log.errors import SegmentError
from delimitedlog.core.log.path import LogFilePath
from delimitedlog.core.log.segment import DelimitedTextFileReader
from delimitedlog.utils.config import get_config
from delimitedlog.utils.logging import (
    LOG_FORMATS,
    configure_logging_from_config,
    get_logger,
)

logger = get_logger(__name__)


class SegmentPrinter:
    """
    Writes one line per record of a segment to a text stream.

    Attributes:
        path: Segment to print
        print_values: Whether to include record payloads
    """

    def __init__(
        self,
        path: LogFilePath,
        codec=None,
        print_values: bool = False,
        out: Optional[TextIO] = None,
    ):
        self.path = path
        self.codec = get_codec(codec)
        self.print_values = print_values
        self.out = out if out is not None else sys.stdout

    def print_records(self) -> int:
        """
        Print every record in the segment.

        Returns:
            Number of records printed

        Raises:
            UnterminatedRecordError: If the segment ends inside a record
            CorruptSegmentError: If compressed data cannot be decoded
        """
        count = 0
        with DelimitedTextFileReader(self.path, self.codec) as reader:
            for record in reader:
                line = f"offset={record.key} length={len(record.value)}"
                if self.print_values:
                    line += f" value={record.value.decode('utf-8', errors='replace')}"
                print(line, file=self.out)
                count += 1

        print(f"{count} records", file=self.out)
        return count


def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='Print the records of a delimited log segment'
    )

    parser.add_argument(
        'file',
        type=str,
        help='Path of the segment file'
    )

    parser.add_argument(
        '--offset',
        type=int,
        default=None,
        help='Starting offset of the segment (default: parsed from the file name, else 0)'
    )

    parser.add_argument(
        '--compression',
        type=str,
        default=None,
        choices=[t.value for t in CompressionType],
        help='Codec the segment was written with (default: segment.compression from config)'
    )

    parser.add_argument(
        '--print-values',
        action='store_true',
        help='Print record payloads'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: logging.level from config)'
    )

    parser.add_argument(
        '--log-format',
        type=str,
        default=None,
        choices=list(LOG_FORMATS),
        help='Log output format (default: logging.format from config)'
    )

    return parser.parse_args(argv)


def resolve_path(file: str, offset: Optional[int]) -> LogFilePath:
    """Build the segment location from the CLI arguments."""
    if offset is not None:
        return LogFilePath(path=file, offset=offset)
    try:
        return LogFilePath.parse(file)
    except ValueError:
        return LogFilePath(path=file, offset=0)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    config = get_config()

    # records go to stdout, logs to stderr
    configure_logging_from_config(
        config,
        log_level=args.log_level,
        log_format=args.log_format,
        log_output="stderr",
    )

    compression = args.compression or config.get("segment.compression", "none")

    printer = SegmentPrinter(
        resolve_path(args.file, args.offset),
        codec=get_codec(compression, level=config.get("segment.compression_level")),
        print_values=args.print_values,
    )

    try:
        printer.print_records()
    except (SegmentError, OSError) as e:
        logger.error("Failed to read segment", path=args.file, error=str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
