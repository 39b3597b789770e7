"""Storage backend protocol (domain interface)."""

import abc
import asyncio

from ..kinds import PathKind, SearchPathDirectory, SearchPathDomain
from .types import FileAttributes


class BackendProtocol(abc.ABC):
    """Capability interface over the operations a location needs from a file system.

    Every location handle holds one backend. Production code uses the
    filesystem backend, tests and sandboxes can substitute an in-memory one.

    All paths passed in are absolute. Folder paths may carry a trailing
    ``/``. Failures are raised as ``OSError`` subclasses
    (``FileNotFoundError``, ``FileExistsError``, ``IsADirectoryError``,
    ``NotADirectoryError``, ``PermissionError``); the handle layer turns
    those into typed path errors.
    """

    @abc.abstractmethod
    def exists(self, path: str, kind: PathKind) -> bool:
        """Return whether a location of the given kind exists at ``path``.

        Symbolic links are followed, so a link to a folder counts as a folder.
        """

    @abc.abstractmethod
    def current_directory(self) -> str:
        """Return the working directory as a folder path ending in ``/``."""

    @abc.abstractmethod
    def home(self) -> str | None:
        """Return the home folder path, or ``None`` when it can't be resolved."""

    @abc.abstractmethod
    def temporary_directory(self) -> str:
        """Return the temporary folder path ending in ``/``."""

    @abc.abstractmethod
    def change_current_directory(self, path: str) -> None:
        """Make ``path`` the backend's working directory."""

    @abc.abstractmethod
    def list_directory(self, path: str) -> set[str]:
        """Return the names of the entries in a folder, in no particular order."""

    @abc.abstractmethod
    def create_directory(self, path: str, create_intermediates: bool) -> None:
        """Create a folder.

        Args:
            path: Folder to create.
            create_intermediates: Whether missing parent folders are created
                too. When true, an already existing folder is not an error.
        """

    @abc.abstractmethod
    def create_file(self, path: str, contents: bytes | None = None) -> None:
        """Create (or truncate) a file holding ``contents``."""

    @abc.abstractmethod
    def move(self, source: str, destination: str) -> None:
        """Move an entry. ``destination`` must not exist."""

    @abc.abstractmethod
    def copy(self, source: str, destination: str) -> None:
        """Copy an entry, recursively for folders. ``destination`` must not exist."""

    @abc.abstractmethod
    def remove(self, path: str) -> None:
        """Remove an entry, recursively for folders."""

    @abc.abstractmethod
    def attributes(self, path: str) -> FileAttributes:
        """Return the attributes of the entry at ``path`` without following links."""

    @abc.abstractmethod
    def resolve_symlink(self, path: str) -> str:
        """Return ``path`` with every symbolic link in it resolved."""

    @abc.abstractmethod
    def search_path_directories(
        self, directory: SearchPathDirectory, domain: SearchPathDomain
    ) -> list[str]:
        """Return candidate folder paths for a well-known folder, best first.

        Backends that can't resolve search paths return an empty list.
        """

    @abc.abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """Return the full contents of a file."""

    @abc.abstractmethod
    def write_bytes(self, path: str, data: bytes) -> None:
        """Replace the full contents of a file, creating it if needed."""

    @abc.abstractmethod
    def append_bytes(self, path: str, data: bytes) -> None:
        """Append to an existing file. Fails if the file doesn't exist."""

    async def aread_bytes(self, path: str) -> bytes:
        """Async version of read_bytes."""
        return await asyncio.to_thread(self.read_bytes, path)

    async def awrite_bytes(self, path: str, data: bytes) -> None:
        """Async version of write_bytes."""
        await asyncio.to_thread(self.write_bytes, path, data)
