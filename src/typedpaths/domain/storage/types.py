"""Storage domain types (pure data structures)."""

from datetime import datetime
from typing import Literal

from typing_extensions import TypedDict

EntryType = Literal[
    "file",
    "directory",
    "symlink",
]
"""Type of an entry as reported by a backend's ``attributes``."""


class FileAttributes(TypedDict):
    """Attributes of a single entry.

    ``type`` reports ``"symlink"`` for links without following them, so
    callers can detect links before resolving them.
    """

    type: EntryType
    size: int  # bytes
    created_at: datetime
    modified_at: datetime
