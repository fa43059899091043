#!/usr/bin/env python3
"""
Simple demo of writing and reading delimited log segments.

Writes the same messages to an uncompressed, a gzip and an lz4 segment,
compares their on-disk lengths and reads them back.
"""

import tempfile

from delimitedlog.core.log import (
    DelimitedTextFileReader,
    DelimitedTextFileWriter,
    LogFilePath,
    get_codec,
)
from delimitedlog.utils.logging import configure_logging


def main():
    configure_logging(log_level="WARNING", log_format="console")

    print("=" * 60)
    print("delimitedlog - Segment Write/Read Demo")
    print("=" * 60)

    messages = [f'{{"id": {i}, "event": "click"}}'.encode() for i in range(1000)]

    with tempfile.TemporaryDirectory() as base_dir:
        for name in ("none", "gzip", "lz4"):
            codec = get_codec(name)
            path = LogFilePath.for_partition(
                base_dir, "demo-topic", 0, 5000, extension=codec.default_extension
            )

            with DelimitedTextFileWriter(path, codec) as writer:
                for i, message in enumerate(messages):
                    writer.write(5000 + i, message)

            print(f"\n[{name}] wrote {len(messages)} messages to {path.path.name}")
            print(f"[{name}] length on disk: {writer.get_length()} bytes")

            with DelimitedTextFileReader(path, codec) as reader:
                records = list(reader)

            print(f"[{name}] read back {len(records)} records, "
                  f"offsets {records[0].key}..{records[-1].key}")
            assert [r.value for r in records] == messages


if __name__ == "__main__":
    main()
