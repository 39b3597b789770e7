"""Domain layer: kinds, errors, path validation and the backend protocol."""

from .errors import (
    PathError,
    PathErrorReason,
    PathsError,
    ReadError,
    ReadErrorReason,
    WriteError,
    WriteErrorReason,
)
from .kinds import PathKind, SearchPathDirectory, SearchPathDomain
from .path_validator import make_parent_path, validate_path
from .storage import BackendProtocol, EntryType, FileAttributes

__all__ = [
    "BackendProtocol",
    "EntryType",
    "FileAttributes",
    "PathError",
    "PathErrorReason",
    "PathKind",
    "PathsError",
    "ReadError",
    "ReadErrorReason",
    "SearchPathDirectory",
    "SearchPathDomain",
    "WriteError",
    "WriteErrorReason",
    "make_parent_path",
    "validate_path",
]
