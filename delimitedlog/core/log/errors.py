"""Exceptions raised by segment readers, writers and codecs."""


class SegmentError(Exception):
    """Base class for segment file errors."""


class UnterminatedRecordError(SegmentError, EOFError):
    """End of stream reached in the middle of a record.

    The segment is truncated or corrupted: bytes were read after the last
    delimiter but the delimiter that should close them never arrived.
    """

    def __init__(self, path: str, offset: int, partial_length: int):
        self.path = path
        self.offset = offset
        self.partial_length = partial_length
        super().__init__(
            f"Non-empty message without delimiter in {path} "
            f"at offset {offset} ({partial_length} bytes)"
        )


class CorruptSegmentError(SegmentError):
    """Compressed segment data could not be decoded."""


class UnknownCodecError(SegmentError, ValueError):
    """Requested compression codec is not supported."""
