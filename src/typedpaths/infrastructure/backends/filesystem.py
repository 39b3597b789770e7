"""Filesystem backend for disk-based locations."""

import logging
import os
import shutil
import stat
from datetime import UTC, datetime

from ...config import BackendConfig
from ...domain.kinds import PathKind, SearchPathDirectory, SearchPathDomain
from ...domain.path_validator import as_folder_path
from ...domain.storage.protocol import BackendProtocol
from ...domain.storage.types import FileAttributes

logger = logging.getLogger(__name__)

# Folder names under the home folder, following the XDG user-dirs defaults.
USER_SEARCH_PATHS: dict[SearchPathDirectory, str] = {
    SearchPathDirectory.DOCUMENTS: "Documents",
    SearchPathDirectory.DOWNLOADS: "Downloads",
    SearchPathDirectory.DESKTOP: "Desktop",
    SearchPathDirectory.CACHES: ".cache",
    SearchPathDirectory.LIBRARY: ".local/share",
    SearchPathDirectory.APPLICATION_SUPPORT: ".config",
    SearchPathDirectory.MUSIC: "Music",
    SearchPathDirectory.PICTURES: "Pictures",
    SearchPathDirectory.MOVIES: "Videos",
}

LOCAL_SEARCH_PATHS: dict[SearchPathDirectory, str] = {
    SearchPathDirectory.LIBRARY: "/usr/local/share",
    SearchPathDirectory.APPLICATION_SUPPORT: "/usr/local/etc",
}

SYSTEM_SEARCH_PATHS: dict[SearchPathDirectory, str] = {
    SearchPathDirectory.LIBRARY: "/usr/share",
    SearchPathDirectory.APPLICATION_SUPPORT: "/etc",
    SearchPathDirectory.CACHES: "/var/cache",
}


class FilesystemBackend(BackendProtocol):
    """Backend that operates on the local filesystem."""

    def __init__(self, config: BackendConfig | None = None):
        """Initialize filesystem backend.

        Args:
            config: Home, working and temporary folders. Read from the
                environment when omitted.
        """
        self.config = config or BackendConfig.from_environment()

    def exists(self, path: str, kind: PathKind) -> bool:
        try:
            mode = os.stat(path).st_mode
        except (OSError, ValueError):
            return False

        if kind is PathKind.FOLDER:
            return stat.S_ISDIR(mode)
        return not stat.S_ISDIR(mode)

    def current_directory(self) -> str:
        return self.config.current_directory

    def home(self) -> str | None:
        return self.config.home

    def temporary_directory(self) -> str:
        return self.config.temporary_directory

    def change_current_directory(self, path: str) -> None:
        if not os.path.isdir(path):
            raise NotADirectoryError(f"Not a directory: {path}")
        self.config = self.config.model_copy(
            update={"current_directory": as_folder_path(path)}
        )

    def list_directory(self, path: str) -> set[str]:
        return set(os.listdir(path))

    def create_directory(self, path: str, create_intermediates: bool) -> None:
        if create_intermediates:
            os.makedirs(path, exist_ok=True)
        else:
            os.mkdir(path)
        logger.debug(f"Created directory {path}")

    def create_file(self, path: str, contents: bytes | None = None) -> None:
        if os.path.isdir(path):
            raise IsADirectoryError(f"Is a directory: {path}")
        with open(path, "wb") as f:
            if contents:
                f.write(contents)
        logger.debug(f"Created file {path}")

    def move(self, source: str, destination: str) -> None:
        # shutil.move renames within a device and falls back to
        # copy-then-delete across devices.
        if os.path.lexists(destination.rstrip("/")):
            raise FileExistsError(f"Destination exists: {destination}")
        shutil.move(source.rstrip("/") or "/", destination.rstrip("/"))
        logger.debug(f"Moved {source} to {destination}")

    def copy(self, source: str, destination: str) -> None:
        destination = destination.rstrip("/")
        if os.path.lexists(destination):
            raise FileExistsError(f"Destination exists: {destination}")
        if os.path.isdir(source):
            shutil.copytree(source, destination, symlinks=True)
        else:
            shutil.copy2(source, destination)
        logger.debug(f"Copied {source} to {destination}")

    def remove(self, path: str) -> None:
        target = path.rstrip("/") or "/"
        if os.path.islink(target) or not os.path.isdir(target):
            os.remove(target)
        else:
            shutil.rmtree(target)
        logger.debug(f"Removed {path}")

    def attributes(self, path: str) -> FileAttributes:
        result = os.lstat(path.rstrip("/") or "/")
        if stat.S_ISLNK(result.st_mode):
            entry_type = "symlink"
        elif stat.S_ISDIR(result.st_mode):
            entry_type = "directory"
        else:
            entry_type = "file"

        # st_birthtime only exists on some platforms; ctime is the closest fallback.
        created = getattr(result, "st_birthtime", result.st_ctime)
        return FileAttributes(
            type=entry_type,
            size=result.st_size,
            created_at=datetime.fromtimestamp(created, UTC),
            modified_at=datetime.fromtimestamp(result.st_mtime, UTC),
        )

    def resolve_symlink(self, path: str) -> str:
        return os.path.realpath(path)

    def search_path_directories(
        self, directory: SearchPathDirectory, domain: SearchPathDomain
    ) -> list[str]:
        if domain is SearchPathDomain.USER:
            override = self.config.search_paths.get(directory.value)
            if override is not None:
                return [override]
            if self.config.home is None:
                return []
            relative = USER_SEARCH_PATHS.get(directory)
            return [self.config.home + relative + "/"] if relative else []

        table = LOCAL_SEARCH_PATHS if domain is SearchPathDomain.LOCAL else SYSTEM_SEARCH_PATHS
        match = table.get(directory)
        return [match + "/"] if match else []

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def write_bytes(self, path: str, data: bytes) -> None:
        with open(path, "wb") as f:
            f.write(data)

    def append_bytes(self, path: str, data: bytes) -> None:
        # "r+b" fails for a missing file, unlike "ab".
        with open(path, "r+b") as f:
            f.seek(0, os.SEEK_END)
            f.write(data)
