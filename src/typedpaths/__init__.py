"""Typed handles for files and folders backed by validated absolute paths."""

from .config import BackendConfig
from .domain import (
    BackendProtocol,
    FileAttributes,
    PathError,
    PathErrorReason,
    PathKind,
    PathsError,
    ReadError,
    ReadErrorReason,
    SearchPathDirectory,
    SearchPathDomain,
    WriteError,
    WriteErrorReason,
)
from .handles import ChildSequence, File, Folder, Location
from .infrastructure.backends import (
    FilesystemBackend,
    StateBackend,
    get_default_backend,
    set_default_backend,
)

__version__ = "1.0.0"

__all__ = [
    "BackendConfig",
    "BackendProtocol",
    "ChildSequence",
    "File",
    "FileAttributes",
    "FilesystemBackend",
    "Folder",
    "Location",
    "PathError",
    "PathErrorReason",
    "PathKind",
    "PathsError",
    "ReadError",
    "ReadErrorReason",
    "SearchPathDirectory",
    "SearchPathDomain",
    "StateBackend",
    "WriteError",
    "WriteErrorReason",
    "get_default_backend",
    "set_default_backend",
]
