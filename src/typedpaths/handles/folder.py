"""Folder handles: lookup, creation and enumeration of children."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..domain.errors import PathError, PathErrorReason, WriteError, WriteErrorReason
from ..domain.kinds import PathKind, SearchPathDirectory, SearchPathDomain
from ..domain.path_validator import as_folder_path, make_parent_path, removing_prefix
from ..domain.storage.protocol import BackendProtocol
from ..infrastructure.backends.default import get_default_backend
from .children import ChildSequence
from .file import File
from .location import Location

logger = logging.getLogger(__name__)

Contents = bytes | Callable[[], bytes | None] | None


class Folder(Location):
    """A folder on disk.

    Reference an existing folder with ``Folder(path)`` (an empty path is the
    backend's current directory), or create one with ``create_subfolder``.
    """

    kind = PathKind.FOLDER

    def __init__(self, path: str = "", backend: BackendProtocol | None = None):
        super().__init__(path, backend)

    @classmethod
    def current(cls, backend: BackendProtocol | None = None) -> Folder:
        """The folder the backend resolves relative paths against."""
        return cls("", backend)

    @classmethod
    def root(cls, backend: BackendProtocol | None = None) -> Folder:
        return cls("/", backend)

    @classmethod
    def home(cls, backend: BackendProtocol | None = None) -> Folder:
        """The current user's home folder.

        Raises:
            PathError: ``MISSING`` if the backend has no home folder.
        """
        return cls("~", backend)

    @classmethod
    def temporary(cls, backend: BackendProtocol | None = None) -> Folder:
        backend = backend or get_default_backend()
        return cls(backend.temporary_directory(), backend)

    @classmethod
    def matching(
        cls,
        directory: SearchPathDirectory,
        domain: SearchPathDomain = SearchPathDomain.USER,
        backend: BackendProtocol | None = None,
    ) -> Folder:
        """Resolve a well-known folder within a domain.

        Raises:
            PathError: ``UNRESOLVED_SEARCH_PATH`` if the backend has no
                candidate, ``MISSING`` if the candidate doesn't exist.
        """
        backend = backend or get_default_backend()
        candidates = backend.search_path_directories(directory, domain)
        if not candidates:
            raise PathError(
                "",
                cls.kind,
                PathErrorReason.UNRESOLVED_SEARCH_PATH,
                detail=f"{directory.value} in {domain.value}",
            )
        return cls(candidates[0], backend)

    @classmethod
    def documents(cls, backend: BackendProtocol | None = None) -> Folder | None:
        try:
            return cls.matching(SearchPathDirectory.DOCUMENTS, backend=backend)
        except PathError:
            return None

    @classmethod
    def library(cls, backend: BackendProtocol | None = None) -> Folder | None:
        try:
            return cls.matching(SearchPathDirectory.LIBRARY, backend=backend)
        except PathError:
            return None

    @property
    def files(self) -> ChildSequence[File]:
        """This folder's files. Non-recursive, use ``.recursive`` to change that."""
        return ChildSequence(self, File)

    @property
    def subfolders(self) -> ChildSequence[Folder]:
        """This folder's subfolders. Non-recursive, use ``.recursive`` to change that."""
        return ChildSequence(self, Folder)

    def file(self, path: str) -> File:
        """Return the file at a path relative to this folder.

        Raises:
            PathError: If the file can't be found.
        """
        return File(self._child_path(path), self.backend)

    def subfolder(self, path: str) -> Folder:
        """Return the subfolder at a path relative to this folder.

        Raises:
            PathError: If the subfolder can't be found.
        """
        return Folder(self._child_path(path), self.backend)

    def contains_file(self, path: str) -> bool:
        try:
            self.file(path)
        except PathError:
            return False
        return True

    def contains_subfolder(self, path: str) -> bool:
        try:
            self.subfolder(path)
        except PathError:
            return False
        return True

    def contains(self, location: Location) -> bool:
        """Return whether ``location`` is a direct child of this folder."""
        if location.kind is PathKind.FILE:
            return self.contains_file(location.name)
        return self.contains_subfolder(location.name)

    def create_subfolder(self, path: str) -> Folder:
        """Create a subfolder, along with any missing intermediate folders.

        Raises:
            WriteError: ``EMPTY_PATH`` for an empty path,
                ``FOLDER_CREATION_FAILED`` if the backend couldn't create it.
        """
        folder_path = self._child_path(path)
        if as_folder_path(folder_path) == self.path:
            raise WriteError(folder_path, PathKind.FOLDER, WriteErrorReason.EMPTY_PATH)

        try:
            self.backend.create_directory(folder_path, create_intermediates=True)
            folder = Folder(folder_path, self.backend)
        except (OSError, PathError) as exc:
            raise WriteError(
                folder_path, PathKind.FOLDER, WriteErrorReason.FOLDER_CREATION_FAILED, cause=exc
            ) from exc

        logger.debug(f"Created folder {folder.path}")
        return folder

    def create_subfolder_if_needed(self, path: str) -> Folder:
        """Return the subfolder at ``path``, creating it if it doesn't exist."""
        try:
            return self.subfolder(path)
        except PathError:
            logger.debug(f"No subfolder at {path} in {self.path}, creating it")
        return self.create_subfolder(path)

    def create_file(self, path: str, contents: bytes | None = None) -> File:
        """Create a file, along with any missing intermediate folders.

        An existing file at the path is truncated and rewritten.

        Args:
            path: Path relative to this folder.
            contents: Initial contents, empty if omitted.

        Raises:
            WriteError: ``EMPTY_PATH``, ``FOLDER_CREATION_FAILED`` for the
                intermediate folders, or ``FILE_CREATION_FAILED``.
        """
        file_path = self._child_path(path)
        if file_path.endswith("/"):
            raise WriteError(file_path, PathKind.FILE, WriteErrorReason.EMPTY_PATH)

        parent_path = make_parent_path(file_path)
        if parent_path is not None and parent_path != self.path:
            try:
                self.backend.create_directory(parent_path, create_intermediates=True)
            except OSError as exc:
                raise WriteError(
                    parent_path, PathKind.FOLDER, WriteErrorReason.FOLDER_CREATION_FAILED, cause=exc
                ) from exc

        try:
            self.backend.create_file(file_path, contents)
            file = File(file_path, self.backend)
        except (OSError, PathError) as exc:
            raise WriteError(
                file_path, PathKind.FILE, WriteErrorReason.FILE_CREATION_FAILED, cause=exc
            ) from exc

        logger.debug(f"Created file {file.path}")
        return file

    def create_file_if_needed(self, path: str, contents: Contents = None) -> File:
        """Return the file at ``path``, creating it if it doesn't exist.

        Args:
            path: Path relative to this folder.
            contents: Initial contents for a new file, or a callable
                producing them. The callable is only called when a file is
                actually created.
        """
        try:
            return self.file(path)
        except PathError:
            logger.debug(f"No file at {path} in {self.path}, creating it")
        return self.create_file(path, contents() if callable(contents) else contents)

    def overwrite(self, path: str, contents: Contents = None) -> File:
        """Delete any file at ``path`` and create a new one."""
        if self.contains_file(path):
            self.file(path).delete()
        return self.create_file(path, contents() if callable(contents) else contents)

    def move_contents(self, to: Folder, include_hidden: bool = False) -> None:
        """Move every file and subfolder of this folder into ``to``."""
        files, subfolders = self.files, self.subfolders
        if include_hidden:
            files, subfolders = files.including_hidden, subfolders.including_hidden
        files.move(to)
        subfolders.move(to)

    def empty(self, include_hidden: bool = False) -> None:
        """Permanently delete every file and subfolder of this folder."""
        files, subfolders = self.files, self.subfolders
        if include_hidden:
            files, subfolders = files.including_hidden, subfolders.including_hidden
        files.delete()
        subfolders.delete()

    def is_empty(self, include_hidden: bool = False) -> bool:
        files, subfolders = self.files, self.subfolders
        if include_hidden:
            files, subfolders = files.including_hidden, subfolders.including_hidden
        return files.first is None and subfolders.first is None

    def set(self) -> None:
        """Make this folder the backend's current directory.

        Raises:
            PathError: ``MISSING`` if the folder no longer exists.
        """
        try:
            self.backend.change_current_directory(self.path)
        except OSError as exc:
            raise PathError(self.path, self.kind, PathErrorReason.MISSING, cause=exc) from exc

    def _child_path(self, path: str) -> str:
        return self.path + removing_prefix(path, "/")
