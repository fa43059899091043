"""
delimitedlog - newline-delimited log segment files for log shipping.

This package implements the on-disk segment format of a log-shipping
pipeline with:
- Newline-delimited record framing
- Optional whole-file compression (gzip, lz4)
- Byte-length tracking for segment rotation
- Positional record offsets on read
"""

__version__ = "0.1.0"

from delimitedlog.core import log

__all__ = ["log"]
