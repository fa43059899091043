"""
Compression codecs for segment files.

A codec wraps the byte sink of a segment writer into a compressing file
object, and the raw byte source of a segment reader into a decompressing
file object. The whole file is compressed as one stream; the file does not
record which codec was used, so readers must be given the writer's codec.

Supported codecs:
- NONE: identity, bytes pass through untouched
- GZIP: gzip container, best ratio, slowest
- LZ4: LZ4 frame format, fastest, lower ratio

Codec streams never close the sink or source they wrap; segment files close
the file themselves.
"""

import gzip
import zlib
from abc import ABC, abstractmethod
from enum import Enum
from typing import BinaryIO, Optional, Tuple, Type, Union

import lz4.frame

from delimitedlog.core.log.errors import UnknownCodecError
from delimitedlog.utils.logging import get_logger

logger = get_logger(__name__)


class CompressionType(Enum):
    """Supported compression types."""
    NONE = "none"
    GZIP = "gzip"
    LZ4 = "lz4"


class CompressionCodec(ABC):
    """
    Stream-wrapping compression strategy.

    Attributes:
        decode_errors: Exceptions the input stream raises on undecodable or
            truncated data
    """

    compression_type: CompressionType
    default_extension: str = ""
    decode_errors: Tuple[Type[BaseException], ...] = ()

    @abstractmethod
    def create_output_stream(self, sink: BinaryIO) -> BinaryIO:
        """
        Wrap a sink into a compressing stream.

        Closing the returned stream finishes the compressed stream but
        leaves the sink open.
        """

    @abstractmethod
    def create_input_stream(self, source: BinaryIO) -> BinaryIO:
        """
        Wrap a source into a decompressing stream.

        Closing the returned stream leaves the source open.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class IdentityCodec(CompressionCodec):
    """Codec that leaves the byte stream unchanged."""

    compression_type = CompressionType.NONE

    def create_output_stream(self, sink: BinaryIO) -> BinaryIO:
        return sink

    def create_input_stream(self, source: BinaryIO) -> BinaryIO:
        return source


class LeveledCodec(CompressionCodec):
    """Codec with a configurable compression level."""

    default_level: int = 0

    def __init__(self, level: Optional[int] = None):
        self.level = self.default_level if level is None else level

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self.level})"


class GzipCodec(LeveledCodec):
    """Gzip container; concatenated members read back as one stream."""

    compression_type = CompressionType.GZIP
    default_extension = ".gz"
    default_level = 6
    decode_errors = (EOFError, gzip.BadGzipFile, zlib.error)

    def create_output_stream(self, sink: BinaryIO) -> BinaryIO:
        logger.debug("Created gzip output stream", level=self.level)
        return gzip.GzipFile(fileobj=sink, mode="wb", compresslevel=self.level)

    def create_input_stream(self, source: BinaryIO) -> BinaryIO:
        return gzip.GzipFile(fileobj=source, mode="rb")


class Lz4Codec(LeveledCodec):
    """LZ4 frame format; concatenated frames read back as one stream."""

    compression_type = CompressionType.LZ4
    default_extension = ".lz4"
    default_level = 0
    decode_errors = (EOFError, RuntimeError)

    def create_output_stream(self, sink: BinaryIO) -> BinaryIO:
        logger.debug("Created lz4 output stream", level=self.level)
        return lz4.frame.LZ4FrameFile(sink, mode="wb", compression_level=self.level)

    def create_input_stream(self, source: BinaryIO) -> BinaryIO:
        return lz4.frame.LZ4FrameFile(source, mode="rb")


_CODECS = {
    CompressionType.NONE: IdentityCodec,
    CompressionType.GZIP: GzipCodec,
    CompressionType.LZ4: Lz4Codec,
}


def get_codec(
    codec: Union[None, str, CompressionType, CompressionCodec] = None,
    level: Optional[int] = None,
) -> CompressionCodec:
    """
    Resolve a codec from a name, a compression type or an instance.

    Args:
        codec: None (identity), codec name, CompressionType or codec instance
        level: Compression level for gzip and lz4

    Returns:
        Codec instance

    Raises:
        UnknownCodecError: If the name does not match a supported codec
    """
    if isinstance(codec, CompressionCodec):
        return codec

    if codec is None:
        compression_type = CompressionType.NONE
    elif isinstance(codec, CompressionType):
        compression_type = codec
    else:
        try:
            compression_type = CompressionType(str(codec).strip().lower())
        except ValueError:
            raise UnknownCodecError(
                f"Unknown compression codec: {codec!r} "
                f"(expected one of {[t.value for t in CompressionType]})"
            ) from None

    codec_class = _CODECS[compression_type]
    if issubclass(codec_class, LeveledCodec):
        return codec_class(level=level)
    return codec_class()


def codec_from_config(config) -> CompressionCodec:
    """
    Build the codec selected by a Config instance.

    Args:
        config: Config with segment.compression and segment.compression_level

    Returns:
        Codec instance
    """
    return get_codec(
        config.get("segment.compression", "none"),
        level=config.get("segment.compression_level"),
    )
