"""In-memory backend keeping every location in process state."""

import errno
import os
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

from ...config import BackendConfig
from ...domain.kinds import PathKind, SearchPathDirectory, SearchPathDomain
from ...domain.path_validator import as_folder_path
from ...domain.storage.protocol import BackendProtocol
from ...domain.storage.types import FileAttributes

MAX_SYMLINK_HOPS = 40

DEFAULT_CONFIG = BackendConfig(
    home="/home/user/",
    current_directory="/home/user/",
    temporary_directory="/tmp/",
)


def _os_error(cls: type[OSError], code: int, path: str) -> OSError:
    return cls(code, os.strerror(code), path)


@dataclass
class Entry:
    """One stored location."""

    is_dir: bool
    created_at: datetime
    modified_at: datetime
    content: bytes = b""
    link_target: str | None = None
    children: set[str] = field(default_factory=set)


class StateBackend(BackendProtocol):
    """Backend that keeps files and folders in memory.

    Entries are keyed by absolute path without a trailing separator (the
    root folder is ``/``). Symbolic links may be added with ``symlink`` and
    must point at absolute paths. Modification dates follow POSIX: writing a
    file touches the file, adding, removing or renaming an entry touches its
    parent folder.
    """

    def __init__(
        self,
        config: BackendConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize state backend.

        Args:
            config: Home, working and temporary folders. These folders are
                created up front.
            clock: Source of timestamps, ``datetime.now(UTC)`` by default.
        """
        self.config = config or DEFAULT_CONFIG
        self._clock = clock or (lambda: datetime.now(UTC))
        now = self._clock()
        self._entries: dict[str, Entry] = {"/": Entry(is_dir=True, created_at=now, modified_at=now)}

        for folder in (
            self.config.home,
            self.config.current_directory,
            self.config.temporary_directory,
            *self.config.search_paths.values(),
        ):
            if folder is not None:
                self.create_directory(folder, create_intermediates=True)

    # Path helpers

    @staticmethod
    def _split(key: str) -> tuple[str, str]:
        parent, _, name = key.rpartition("/")
        return parent or "/", name

    def _resolve(self, path: str, follow_last: bool = True, hops: int = 0) -> str:
        parts = [part for part in path.split("/") if part]
        resolved = ""
        for index, part in enumerate(parts):
            if part == ".":
                continue
            if part == "..":
                resolved = resolved.rpartition("/")[0]
                continue
            candidate = f"{resolved}/{part}"
            entry = self._entries.get(candidate)
            is_last = index == len(parts) - 1
            if entry is not None and entry.link_target is not None and (follow_last or not is_last):
                if hops >= MAX_SYMLINK_HOPS:
                    raise _os_error(OSError, errno.ELOOP, path)
                candidate = self._resolve(entry.link_target, True, hops + 1)
            resolved = candidate.rstrip("/")
        return resolved or "/"

    def _lookup(self, path: str, follow_last: bool = True) -> tuple[str, Entry]:
        key = self._resolve(path, follow_last)
        entry = self._entries.get(key)
        if entry is None:
            raise _os_error(FileNotFoundError, errno.ENOENT, path)
        return key, entry

    def _parent_folder(self, path: str) -> tuple[str, str, Entry]:
        parts = [part for part in path.split("/") if part]
        name = parts[-1] if parts else ""
        if name in ("", ".", ".."):
            raise _os_error(FileExistsError, errno.EEXIST, path)
        parent_path = "/" + "/".join(parts[:-1])
        parent_key, parent = self._lookup(parent_path)
        if not parent.is_dir:
            raise _os_error(NotADirectoryError, errno.ENOTDIR, parent_path)
        return f"{parent_key.rstrip('/')}/{name}", name, parent

    def _descendants(self, key: str) -> list[str]:
        prefix = key.rstrip("/") + "/"
        return [candidate for candidate in self._entries if candidate.startswith(prefix)]

    def _insert(self, key: str, entry: Entry) -> None:
        parent_key, name = self._split(key)
        parent = self._entries[parent_key]
        parent.children.add(name)
        parent.modified_at = self._clock()
        self._entries[key] = entry

    def _detach(self, key: str) -> None:
        parent_key, name = self._split(key)
        parent = self._entries[parent_key]
        parent.children.discard(name)
        parent.modified_at = self._clock()
        for descendant in self._descendants(key):
            del self._entries[descendant]
        del self._entries[key]

    # BackendProtocol

    def exists(self, path: str, kind: PathKind) -> bool:
        if kind is PathKind.FILE and path.endswith("/"):
            return False
        try:
            _, entry = self._lookup(path)
        except OSError:
            return False
        if kind is PathKind.FOLDER:
            return entry.is_dir
        return not entry.is_dir

    def current_directory(self) -> str:
        return self.config.current_directory

    def home(self) -> str | None:
        return self.config.home

    def temporary_directory(self) -> str:
        return self.config.temporary_directory

    def change_current_directory(self, path: str) -> None:
        _, entry = self._lookup(path)
        if not entry.is_dir:
            raise _os_error(NotADirectoryError, errno.ENOTDIR, path)
        self.config = self.config.model_copy(
            update={"current_directory": as_folder_path(path)}
        )

    def list_directory(self, path: str) -> set[str]:
        _, entry = self._lookup(path)
        if not entry.is_dir:
            raise _os_error(NotADirectoryError, errno.ENOTDIR, path)
        return set(entry.children)

    def create_directory(self, path: str, create_intermediates: bool) -> None:
        if create_intermediates:
            self._make_directories(path)
            return

        key, _, _ = self._parent_folder(path)
        if key in self._entries:
            raise _os_error(FileExistsError, errno.EEXIST, path)
        now = self._clock()
        self._insert(key, Entry(is_dir=True, created_at=now, modified_at=now))

    def _make_directories(self, path: str) -> None:
        # Walks segment by segment like os.makedirs, so "a/../b" creates both.
        current = "/"
        for part in [part for part in path.split("/") if part]:
            if part == ".":
                continue
            if part == "..":
                current, _ = self._split(current)
                continue

            candidate = self._resolve(f"{current.rstrip('/')}/{part}")
            entry = self._entries.get(candidate)
            if entry is None:
                key, _, _ = self._parent_folder(candidate)
                now = self._clock()
                self._insert(key, Entry(is_dir=True, created_at=now, modified_at=now))
            elif not entry.is_dir:
                raise _os_error(FileExistsError, errno.EEXIST, path)
            current = candidate

    def create_file(self, path: str, contents: bytes | None = None) -> None:
        key, _, _ = self._parent_folder(path)
        now = self._clock()
        existing = self._entries.get(key)
        if existing is not None:
            if existing.is_dir:
                raise _os_error(IsADirectoryError, errno.EISDIR, path)
            existing.content = bytes(contents or b"")
            existing.modified_at = now
            return
        self._insert(key, Entry(is_dir=False, created_at=now, modified_at=now, content=bytes(contents or b"")))

    def move(self, source: str, destination: str) -> None:
        source_key, entry = self._lookup(source, follow_last=False)
        if source_key == "/":
            raise _os_error(PermissionError, errno.EBUSY, source)
        destination_key, _, _ = self._parent_folder(destination)
        if destination_key in self._entries:
            raise _os_error(FileExistsError, errno.EEXIST, destination)
        if destination_key.startswith(source_key + "/"):
            raise _os_error(OSError, errno.EINVAL, destination)

        moved = {
            destination_key + descendant[len(source_key) :]: self._entries[descendant]
            for descendant in self._descendants(source_key)
        }
        self._detach(source_key)
        self._insert(destination_key, entry)
        self._entries.update(moved)

    def copy(self, source: str, destination: str) -> None:
        source_key, entry = self._lookup(source, follow_last=False)
        destination_key, _, _ = self._parent_folder(destination)
        if destination_key in self._entries:
            raise _os_error(FileExistsError, errno.EEXIST, destination)
        if destination_key.startswith(source_key.rstrip("/") + "/"):
            raise _os_error(OSError, errno.EINVAL, destination)

        now = self._clock()
        copied = {
            destination_key + descendant[len(source_key) :]: replace(
                self._entries[descendant],
                created_at=now,
                children=set(self._entries[descendant].children),
            )
            for descendant in self._descendants(source_key)
        }
        self._insert(
            destination_key,
            replace(entry, created_at=now, children=set(entry.children)),
        )
        self._entries.update(copied)

    def remove(self, path: str) -> None:
        key, _ = self._lookup(path.rstrip("/") or "/", follow_last=False)
        if key == "/":
            raise _os_error(PermissionError, errno.EBUSY, path)
        self._detach(key)

    def attributes(self, path: str) -> FileAttributes:
        _, entry = self._lookup(path.rstrip("/") or "/", follow_last=False)
        if entry.link_target is not None:
            entry_type = "symlink"
        elif entry.is_dir:
            entry_type = "directory"
        else:
            entry_type = "file"
        return FileAttributes(
            type=entry_type,
            size=len(entry.content),
            created_at=entry.created_at,
            modified_at=entry.modified_at,
        )

    def resolve_symlink(self, path: str) -> str:
        return self._resolve(path)

    def search_path_directories(
        self, directory: SearchPathDirectory, domain: SearchPathDomain
    ) -> list[str]:
        if domain is not SearchPathDomain.USER:
            return []
        match = self.config.search_paths.get(directory.value)
        return [match] if match else []

    def read_bytes(self, path: str) -> bytes:
        _, entry = self._lookup(path)
        if entry.is_dir:
            raise _os_error(IsADirectoryError, errno.EISDIR, path)
        return entry.content

    def write_bytes(self, path: str, data: bytes) -> None:
        try:
            _, entry = self._lookup(path)
        except FileNotFoundError:
            self.create_file(path, data)
            return
        if entry.is_dir:
            raise _os_error(IsADirectoryError, errno.EISDIR, path)
        entry.content = bytes(data)
        entry.modified_at = self._clock()

    def append_bytes(self, path: str, data: bytes) -> None:
        _, entry = self._lookup(path)
        if entry.is_dir:
            raise _os_error(IsADirectoryError, errno.EISDIR, path)
        entry.content += bytes(data)
        entry.modified_at = self._clock()

    # Helpers for tests and sandboxes

    def symlink(self, path: str, target: str) -> None:
        """Create a symbolic link at ``path`` pointing at the absolute ``target``."""
        if not target.startswith("/"):
            raise ValueError(f"Symlink target must be absolute: {target}")
        key, _, _ = self._parent_folder(path)
        if key in self._entries:
            raise _os_error(FileExistsError, errno.EEXIST, path)
        now = self._clock()
        self._insert(
            key,
            Entry(is_dir=False, created_at=now, modified_at=now, link_target=target),
        )

    def touch(self, path: str) -> None:
        """Bump the modification date of an existing entry."""
        _, entry = self._lookup(path)
        entry.modified_at = self._clock()
