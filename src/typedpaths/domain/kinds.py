"""Location kinds and search path identifiers (domain layer)."""

from enum import Enum


class PathKind(str, Enum):
    """Type of location that can be found on a file system."""

    FILE = "file"
    FOLDER = "folder"

    def __str__(self) -> str:
        return self.value


class SearchPathDirectory(str, Enum):
    """Well-known folders that a backend may be able to resolve."""

    DOCUMENTS = "documents"
    DOWNLOADS = "downloads"
    DESKTOP = "desktop"
    CACHES = "caches"
    LIBRARY = "library"
    APPLICATION_SUPPORT = "application_support"
    MUSIC = "music"
    PICTURES = "pictures"
    MOVIES = "movies"


class SearchPathDomain(str, Enum):
    """Domain in which a search path is looked up."""

    USER = "user"
    LOCAL = "local"
    SYSTEM = "system"
