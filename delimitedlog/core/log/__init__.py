"""
Segment file implementation.

This package provides append-only segment files with:
- Newline-delimited framing
- Pluggable whole-file compression codecs
- Byte counting for rotation decisions
- Sequential reads with synthetic offsets
"""

from delimitedlog.core.log.codec import (
    CompressionCodec,
    CompressionType,
    GzipCodec,
    IdentityCodec,
    Lz4Codec,
    codec_from_config,
    get_codec,
)
from delimitedlog.core.log.errors import (
    CorruptSegmentError,
    SegmentError,
    UnknownCodecError,
    UnterminatedRecordError,
)
from delimitedlog.core.log.path import LogFilePath
from delimitedlog.core.log.segment import (
    DELIMITER,
    DelimitedTextFileReader,
    DelimitedTextFileWriter,
    FileReader,
    FileType,
    FileWriter,
    KeyValue,
    open_segment,
)

__all__ = [
    "CompressionCodec",
    "CompressionType",
    "CorruptSegmentError",
    "DELIMITER",
    "DelimitedTextFileReader",
    "DelimitedTextFileWriter",
    "FileReader",
    "FileType",
    "FileWriter",
    "GzipCodec",
    "IdentityCodec",
    "KeyValue",
    "LogFilePath",
    "Lz4Codec",
    "SegmentError",
    "UnknownCodecError",
    "UnterminatedRecordError",
    "codec_from_config",
    "get_codec",
    "open_segment",
]
