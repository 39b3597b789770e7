"""Collaborators built on top of location handles."""

from .downloads import cache_name, download_file, download_file_to, fetch_bytes
from .observer import ChangeKind, FileChange, FileObserver

__all__ = [
    "ChangeKind",
    "FileChange",
    "FileObserver",
    "cache_name",
    "download_file",
    "download_file_to",
    "fetch_bytes",
]
