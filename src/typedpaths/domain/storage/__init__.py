"""Storage domain types and protocols."""

from .protocol import BackendProtocol
from .types import EntryType, FileAttributes

__all__ = [
    "BackendProtocol",
    "EntryType",
    "FileAttributes",
]
