"""Location handles: typed references to existing files and folders."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, ClassVar

from typing_extensions import Self

from ..domain.errors import PathError, PathErrorReason
from ..domain.kinds import PathKind
from ..domain.path_validator import (
    appending_suffix_if_needed,
    as_folder_path,
    make_parent_path,
    removing_suffix,
    validate_path,
)
from ..domain.storage.protocol import BackendProtocol
from ..domain.storage.types import FileAttributes
from ..infrastructure.backends.default import get_default_backend

if TYPE_CHECKING:
    from .folder import Folder

logger = logging.getLogger(__name__)


class Location:
    """Base for ``File`` and ``Folder``.

    A location owns one canonical path (absolute, ``~`` and ``../``
    resolved, folders ending in ``/``) and the backend it was validated
    against. The path is the identity used for equality and hashing, and is
    updated in place when the location is renamed or moved, so a handle
    kept in a set or as a dict key must not be relocated. Holding a
    location doesn't keep the entry alive: once it is deleted or moved by
    someone else, operations on the handle fail when they reach the backend.

    Handles are not synchronized. Share one between threads only with
    external locking.
    """

    kind: ClassVar[PathKind]

    def __init__(self, path: str, backend: BackendProtocol | None = None):
        """Look up an existing location.

        Args:
            path: Absolute or relative path, may start with ``~`` and contain
                ``../`` references.
            backend: Backend to resolve against, the default backend if omitted.

        Raises:
            PathError: If the path is empty (files only) or no location of
                this kind exists there.
        """
        self.backend = backend or get_default_backend()
        self._path = validate_path(path, self.kind, self.backend)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def __str__(self) -> str:
        if self.kind is PathKind.FILE:
            return removing_suffix(self._path, "/")
        return self._path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path!r})"

    @property
    def path(self) -> str:
        """The canonical absolute path of this location."""
        return self._path

    @property
    def name(self) -> str:
        """The name of the location, including any extension."""
        if self._path == "/":
            return "/"
        return self._path.rstrip("/").rsplit("/", 1)[-1]

    @property
    def name_excluding_extension(self) -> str:
        name = self.name
        index = name.rfind(".")
        if index <= 0:
            return name
        return name[:index]

    @property
    def extension(self) -> str | None:
        """The text after the last dot, ``None`` if the only dot leads the name."""
        name = self.name
        index = name.rfind(".")
        if index <= 0:
            return None
        return name[index + 1 :]

    @property
    def parent(self) -> Folder | None:
        """The folder containing this location, ``None`` for the root or a stale parent."""
        from .folder import Folder

        parent_path = make_parent_path(self._path)
        if parent_path is None:
            return None
        try:
            return Folder(parent_path, self.backend)
        except PathError:
            return None

    @property
    def exists(self) -> bool:
        return self.backend.exists(self._path, self.kind)

    @property
    def attributes(self) -> FileAttributes | None:
        """Backend attributes, ``None`` once the location has been deleted."""
        try:
            return self.backend.attributes(self._path)
        except OSError:
            return None

    @property
    def creation_date(self) -> datetime | None:
        attributes = self.attributes
        return attributes["created_at"] if attributes else None

    @property
    def modification_date(self) -> datetime | None:
        attributes = self.attributes
        return attributes["modified_at"] if attributes else None

    @property
    def is_symlink(self) -> bool:
        attributes = self.attributes
        return attributes is not None and attributes["type"] == "symlink"

    def as_uri(self) -> str:
        return PurePosixPath(self._path).as_uri()

    def relative_path(self, folder: Folder) -> str:
        """Return this location's path relative to an ancestor folder.

        For example ``/users/john/documents`` relative to ``/users/john/``
        is ``documents``. If ``folder`` isn't an ancestor, the absolute path
        is returned.
        """
        if not self._path.startswith(folder.path):
            return self._path
        return removing_suffix(self._path[len(folder.path) :], "/")

    def resolving_symlinks(self) -> Self:
        """Return a location for the target of this symbolic link, or ``self``."""
        if not self.is_symlink:
            return self
        return type(self)(self.backend.resolve_symlink(self._path), self.backend)

    def rename(self, new_name: str, keep_extension: bool = True) -> None:
        """Rename this location within its parent folder.

        Args:
            new_name: The new name.
            keep_extension: Append the current extension to ``new_name``
                unless it already ends with it.

        Raises:
            PathError: ``CANNOT_RENAME_ROOT`` without a parent,
                ``RENAME_FAILED`` if the backend rejects the move.
        """
        parent = self.parent
        if parent is None:
            raise PathError(self._path, self.kind, PathErrorReason.CANNOT_RENAME_ROOT)

        extension = self.extension
        if keep_extension and extension is not None:
            new_name = appending_suffix_if_needed(new_name, f".{extension}")

        self._relocate(parent.path + new_name, PathErrorReason.RENAME_FAILED)

    def move(self, to: Folder) -> Self:
        """Move this location into another folder.

        The handle's path is updated in place and a freshly validated
        handle for the new location is returned.

        Raises:
            PathError: ``MOVE_FAILED`` if the move couldn't be completed.
        """
        self._relocate(to.path + self.name, PathErrorReason.MOVE_FAILED)
        return type(self)(self._path, self.backend)

    def copy(self, to: Folder) -> Self:
        """Copy this location into another folder and return the copy.

        Raises:
            PathError: ``COPY_FAILED`` if the backend couldn't copy, or the
                lookup error if the copy can't be found afterwards.
        """
        destination = to.path + self.name
        try:
            self.backend.copy(self._path, destination)
        except OSError as exc:
            raise PathError(self._path, self.kind, PathErrorReason.COPY_FAILED, cause=exc) from exc
        logger.debug(f"Copied {self._path} to {destination}")
        return type(self)(destination, self.backend)

    def delete(self) -> None:
        """Permanently delete this location (recursively for folders).

        Raises:
            PathError: ``DELETE_FAILED`` if the backend couldn't remove it.
        """
        try:
            self.backend.remove(self._path)
        except OSError as exc:
            raise PathError(self._path, self.kind, PathErrorReason.DELETE_FAILED, cause=exc) from exc
        logger.debug(f"Deleted {self._path}")

    def managed_by(self, backend: BackendProtocol) -> Self:
        """Return a new handle for the same path, validated against ``backend``."""
        return type(self)(self._path, backend)

    def _relocate(self, new_path: str, reason: PathErrorReason) -> None:
        """Move the entry to ``new_path`` and store the re-validated path.

        An existing entry at the destination is removed first, unless it
        contains this location, in which case the move is refused. The move is
        a rename when the backend can do one; otherwise it degrades to
        copy-then-delete, so a crash midway can leave both copies behind.
        """
        if self.kind is PathKind.FOLDER:
            new_path = as_folder_path(new_path)
        if new_path == self._path:
            return
        # Replacing the destination would remove this location along with it.
        if self._path.startswith(as_folder_path(new_path)):
            raise PathError(self._path, self.kind, reason)

        try:
            if self.backend.exists(new_path, PathKind.FILE) or self.backend.exists(
                new_path, PathKind.FOLDER
            ):
                self.backend.remove(new_path)
            self.backend.move(self._path, new_path)
            validated = validate_path(new_path, self.kind, self.backend)
        except (OSError, PathError) as exc:
            raise PathError(self._path, self.kind, reason, cause=exc) from exc

        logger.debug(f"Moved {self._path} to {validated}")
        self._path = validated
