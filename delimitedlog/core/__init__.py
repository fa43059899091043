"""Core components for segment storage."""

from delimitedlog.core import log

__all__ = ["log"]
