"""
Byte counting layer for segment writers.

Writers stack: file -> CountingWriter -> codec stream -> BufferedWriter.
The counter sits directly on the file, so it sees compressed bytes.
"""

import io
from typing import BinaryIO


class CountingWriter(io.RawIOBase):
    """
    Raw writer that counts the bytes accepted by its sink.

    Closing the counter closes the sink.

    Attributes:
        count: Total bytes written to the sink so far
    """

    def __init__(self, sink: BinaryIO):
        super().__init__()
        self._sink = sink
        self.count = 0

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        # codec streams ignore short writes, so hand over every byte
        view = memoryview(data).cast("B")
        total = view.nbytes
        while view:
            written = self._sink.write(view)
            if written is None:
                written = len(view)
            self.count += written
            view = view[written:]
        return total

    def flush(self) -> None:
        super().flush()
        self._sink.flush()

    def close(self) -> None:
        if self.closed:
            return
        try:
            super().close()
        finally:
            self._sink.close()
