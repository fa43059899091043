"""
Delimited segment files.

A segment is a flat sequence of frames, each frame being the record value
followed by a single newline byte (0x0A). There is no header, no length
prefix, no checksum and no persisted key. The whole byte stream may be
compressed by a codec; the file does not say which one.

Writers and readers are separate types. A writer's wrapper chain is always

    file -> CountingWriter -> codec output stream -> BufferedWriter

so get_length() reports bytes that reached the file layer, i.e. compressed
bytes when a codec is active. Readers assign keys from a counter seeded with
the segment's starting offset; keys are positional and unrelated to the keys
passed to write().
"""

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

from delimitedlog.core.log.codec import CompressionCodec, CompressionType, get_codec
from delimitedlog.core.log.errors import (
    CorruptSegmentError,
    SegmentError,
    UnterminatedRecordError,
)
from delimitedlog.core.log.path import LogFilePath
from delimitedlog.core.log.streams import CountingWriter
from delimitedlog.utils.logging import get_logger

logger = get_logger(__name__)

DELIMITER = b"\n"

CodecLike = Union[None, str, CompressionType, CompressionCodec]


class FileType(Enum):
    """Mode a segment file is opened in."""
    READER = "reader"
    WRITER = "writer"


@dataclass(frozen=True)
class KeyValue:
    """
    A single record.

    Attributes:
        key: Offset of the record (ignored on write)
        value: Record payload, must not contain the delimiter byte
    """

    key: int
    value: bytes


class SegmentFile(ABC):
    """Common lifecycle of segment readers and writers."""

    def __init__(self, path: LogFilePath, codec: CodecLike = None):
        self.path = path
        self.codec = get_codec(codec)
        self.path.path.parent.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def close(self) -> None:
        """Release the underlying file."""

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


class FileReader(SegmentFile):
    """Sequential record source."""

    @abstractmethod
    def next(self) -> Optional[KeyValue]:
        """
        Read the next record.

        Returns:
            The next record, or None at the end of the segment
        """

    def __iter__(self) -> Iterator[KeyValue]:
        while (record := self.next()) is not None:
            yield record


class FileWriter(SegmentFile):
    """Append-only record sink."""

    @abstractmethod
    def write(self, key: int, value: bytes) -> None:
        """Append a record."""

    @abstractmethod
    def get_length(self) -> int:
        """Bytes written to the file layer so far."""

    @abstractmethod
    def flush(self) -> None:
        """Push buffered bytes down to the codec and the file."""


class DelimitedTextFileReader(FileReader):
    """
    Reads newline-delimited records from a segment.

    The file is always read from its first byte; path.offset only seeds the
    key counter.
    """

    def __init__(self, path: LogFilePath, codec: CodecLike = None):
        """
        Open a segment for reading.

        Args:
            path: Segment location and starting offset
            codec: Codec the segment was written with

        Raises:
            FileNotFoundError: If the segment does not exist
            OSError: If the segment cannot be opened
        """
        super().__init__(path, codec)

        self._raw = open(self.path.path, "rb", buffering=0)
        try:
            source = self.codec.create_input_stream(self._raw)
            if not isinstance(source, io.BufferedIOBase):
                source = io.BufferedReader(source)
            self._reader = source
        except Exception:
            self._raw.close()
            raise

        self._next_offset = self.path.offset
        self._failure: Optional[SegmentError] = None

        logger.debug(
            "Opened segment for reading",
            path=str(self.path),
            offset=self.path.offset,
            codec=self.codec.compression_type.name,
        )

    def next(self) -> Optional[KeyValue]:
        """
        Read the next record.

        Returns:
            The next record, or None when the segment ends on a frame boundary

        Raises:
            UnterminatedRecordError: If the segment ends inside a record
            CorruptSegmentError: If compressed data cannot be decoded
            OSError: If the read fails
        """
        if self._failure is not None:
            raise self._failure

        try:
            frame = self._reader.readline()
        except self.codec.decode_errors as e:
            logger.error(
                "Failed to decompress segment",
                path=str(self.path),
                offset=self._next_offset,
                codec=self.codec.compression_type.name,
                error=str(e),
            )
            self._failure = CorruptSegmentError(
                f"Failed to decompress {self.path} at offset {self._next_offset}: {e}"
            )
            raise self._failure from e

        if not frame:
            return None

        if not frame.endswith(DELIMITER):
            logger.warning(
                "Unterminated record at end of segment",
                path=str(self.path),
                offset=self._next_offset,
                partial_bytes=len(frame),
            )
            self._failure = UnterminatedRecordError(
                str(self.path), self._next_offset, len(frame)
            )
            raise self._failure

        record = KeyValue(key=self._next_offset, value=frame[:-1])
        self._next_offset += 1
        return record

    def next_offset(self) -> int:
        """Offset that will be assigned to the next record."""
        return self._next_offset

    def close(self) -> None:
        """Close the segment file."""
        try:
            self._reader.close()
        finally:
            self._raw.close()
        logger.debug(
            "Closed segment reader",
            path=str(self.path),
            records=self._next_offset - self.path.offset,
        )

    def __repr__(self) -> str:
        return (
            f"DelimitedTextFileReader(path={str(self.path)!r}, "
            f"next_offset={self._next_offset})"
        )


class DelimitedTextFileWriter(FileWriter):
    """
    Writes newline-delimited records to a new segment.

    An existing file at the same path is truncated.
    """

    def __init__(self, path: LogFilePath, codec: CodecLike = None):
        """
        Create a segment for writing.

        Args:
            path: Segment location
            codec: Codec applied to the whole segment

        Raises:
            OSError: If the segment cannot be created
        """
        super().__init__(path, codec)

        raw = open(self.path.path, "wb", buffering=0)
        self._counter = CountingWriter(raw)
        try:
            self._writer = io.BufferedWriter(self.codec.create_output_stream(self._counter))
        except Exception:
            self._counter.close()
            raise

        self._records = 0

        logger.debug(
            "Opened segment for writing",
            path=str(self.path),
            codec=self.codec.compression_type.name,
        )

    def write(self, key: int, value: bytes) -> None:
        """
        Append a record.

        Args:
            key: Ignored; keys are not persisted
            value: Record payload, must not contain the delimiter byte

        Raises:
            OSError: If the write fails
        """
        self._writer.write(value)
        self._writer.write(DELIMITER)
        self._records += 1

    def get_length(self) -> int:
        """
        Get the number of bytes that reached the file layer.

        Buffered and codec-internal bytes are not counted until they are
        flushed, so the value can lag behind write() calls.
        """
        return self._counter.count

    def flush(self) -> None:
        """Flush the write buffer into the codec stream."""
        self._writer.flush()

    def close(self) -> None:
        """Flush all layers and close the segment file."""
        try:
            self._writer.close()
        finally:
            self._counter.close()
        logger.info(
            "Closed segment writer",
            path=str(self.path),
            records=self._records,
            length=self._counter.count,
            codec=self.codec.compression_type.name,
        )

    def __repr__(self) -> str:
        return (
            f"DelimitedTextFileWriter(path={str(self.path)!r}, "
            f"records={self._records}, length={self._counter.count})"
        )


def open_segment(
    path: LogFilePath,
    codec: CodecLike = None,
    file_type: FileType = FileType.READER,
) -> SegmentFile:
    """
    Open a segment in the requested mode.

    Args:
        path: Segment location and starting offset
        codec: Codec used for the segment (None for no compression)
        file_type: FileType.READER or FileType.WRITER

    Returns:
        DelimitedTextFileReader or DelimitedTextFileWriter

    Raises:
        ValueError: If file_type is not a FileType
    """
    if file_type is FileType.READER:
        return DelimitedTextFileReader(path, codec)
    if file_type is FileType.WRITER:
        return DelimitedTextFileWriter(path, codec)
    raise ValueError(f"Undefined file type: {file_type!r}")
