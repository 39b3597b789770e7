"""Typed location handles."""

from .children import ChildSequence
from .file import File
from .folder import Folder
from .location import Location

__all__ = [
    "ChildSequence",
    "File",
    "Folder",
    "Location",
]
