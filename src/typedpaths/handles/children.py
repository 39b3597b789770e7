"""Lazy enumeration of a folder's files or subfolders."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Generic, TypeVar

from wcmatch import glob as wcglob

from ..domain.errors import PathError
from .location import Location

if TYPE_CHECKING:
    from .folder import Folder

logger = logging.getLogger(__name__)

ChildT = TypeVar("ChildT", bound=Location)
L = TypeVar("L", bound=Location)


@dataclass(frozen=True)
class ChildSequence(Generic[ChildT]):
    """A sequence of the files or subfolders contained in a folder.

    Obtained from ``Folder.files`` or ``Folder.subfolders``. The sequence is
    only a description: every iteration lists the folder again, so results
    reflect the file system at iteration time. Entries are visited in
    ordinal name order, hidden (dot) entries are skipped unless
    ``including_hidden`` is used, and entries that aren't of the requested
    kind or can't be validated are skipped.

    In recursive mode a folder's own matching children come first, then
    every subfolder is traversed completely, in name order.
    """

    folder: Folder
    child_type: type[ChildT]
    is_recursive: bool = False
    include_hidden: bool = False
    pattern: str | None = None

    @property
    def recursive(self) -> ChildSequence[ChildT]:
        """A copy of this sequence that also traverses subfolders. Complexity: O(1)."""
        return replace(self, is_recursive=True)

    @property
    def including_hidden(self) -> ChildSequence[ChildT]:
        """A copy of this sequence that includes hidden entries. Complexity: O(1)."""
        return replace(self, include_hidden=True)

    def matching(self, pattern: str) -> ChildSequence[ChildT]:
        """A copy of this sequence limited to children matching a glob pattern.

        The pattern is matched against each child's path relative to the
        enumerated folder, e.g. ``"*.txt"`` or ``"**/build/*.{o,a}"``.
        """
        return replace(self, pattern=pattern)

    def __iter__(self) -> Iterator[ChildT]:
        return self._traverse(reverse_top_level=False)

    def __str__(self) -> str:
        return "\n".join(str(child) for child in self)

    @property
    def first(self) -> ChildT | None:
        """The first child, ``None`` if there is none."""
        return next(iter(self), None)

    def last(self) -> ChildT | None:
        """The last child, ``None`` if there is none.

        Non-recursive sequences read the listing in reverse and stop at the
        first match. Recursive sequences must traverse everything: O(N).
        """
        if not self.is_recursive:
            return next(self._traverse(reverse_top_level=True), None)

        child = None
        for child in self:
            pass
        return child

    def count(self) -> int:
        return sum(1 for _ in self)

    def names(self) -> list[str]:
        return [child.name for child in self]

    def move(self, to: Folder) -> None:
        """Move every child into ``to``.

        Raises:
            PathError: On the first failure. Children moved before it stay moved.
        """
        for child in self:
            child.move(to)

    def delete(self) -> None:
        """Permanently delete every child.

        Raises:
            PathError: On the first failure. Children deleted before it are gone.
        """
        for child in self:
            child.delete()

    def _traverse(self, reverse_top_level: bool) -> Iterator[ChildT]:
        folder_type = type(self.folder)
        backend = self.folder.backend
        flags = wcglob.GLOBSTAR | wcglob.BRACE
        if self.include_hidden:
            flags |= wcglob.DOTGLOB

        # Folders still to list. Each folder's subfolders are pushed in
        # reverse once its own listing is done, so they pop in name order.
        pending: list[Folder] = [self.folder]
        reverse = reverse_top_level

        while pending:
            folder = pending.pop()
            discovered: list[Folder] = []

            for name in self._list_names(folder, reverse):
                if not self.include_hidden and name.startswith("."):
                    continue

                child_path = folder.path + name
                child = _lookup(self.child_type, child_path, backend)

                if self.is_recursive:
                    subfolder = child if isinstance(child, folder_type) else _lookup(
                        folder_type, child_path, backend
                    )
                    if subfolder is not None:
                        discovered.append(subfolder)

                if child is None:
                    continue
                if self.pattern is not None and not wcglob.globmatch(
                    child.relative_path(self.folder), self.pattern, flags=flags
                ):
                    continue
                yield child

            pending.extend(reversed(discovered))
            reverse = False

    def _list_names(self, folder: Folder, reverse: bool) -> list[str]:
        try:
            names = folder.backend.list_directory(folder.path)
        except OSError as exc:
            logger.debug(f"Skipping unreadable folder {folder.path}: {exc}")
            return []
        return sorted(names, reverse=reverse)


def _lookup(location_type: type[L], path: str, backend) -> L | None:
    try:
        return location_type(path, backend)
    except PathError:
        return None
