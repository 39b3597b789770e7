"""Path validation logic (domain layer)."""

from .errors import PathError, PathErrorReason
from .kinds import PathKind
from .storage.protocol import BackendProtocol

SEPARATOR = "/"
PARENT_REFERENCE = "/../"


def removing_prefix(value: str, prefix: str) -> str:
    if not value.startswith(prefix):
        return value
    return value[len(prefix) :]


def removing_suffix(value: str, suffix: str) -> str:
    if not suffix or not value.endswith(suffix):
        return value
    return value[: -len(suffix)]


def appending_suffix_if_needed(value: str, suffix: str) -> str:
    if value.endswith(suffix):
        return value
    return value + suffix


def as_folder_path(path: str) -> str:
    """Return ``path`` terminated by exactly one separator."""
    return path.rstrip(SEPARATOR) + SEPARATOR


def make_parent_path(path: str) -> str | None:
    """Return the folder path one level above ``path``.

    The root folder has no parent. A single-segment path such as ``/tmp``
    has the root as its parent.
    """
    if path == SEPARATOR:
        return None

    components = [component for component in path.split(SEPARATOR) if component][:-1]
    if not components:
        return SEPARATOR
    return SEPARATOR + SEPARATOR.join(components) + SEPARATOR


def validate_path(path: str, kind: PathKind, backend: BackendProtocol) -> str:
    """Validate and normalize a location path into its canonical form.

    Args:
        path: The raw path. May be relative to the backend's current
            directory, start with ``~`` or contain ``../`` references.
        kind: The kind of location expected at the path.
        backend: The backend that resolves home, the current directory and
            existence.

    Returns:
        Absolute path without parent references. Folder paths end with
        exactly one ``/``.

    Raises:
        PathError: ``EMPTY_FILE_PATH`` for an empty file path, ``MISSING``
            if the home folder, an intermediate parent or the location
            itself can't be found.
    """
    if kind is PathKind.FILE:
        if not path:
            raise PathError(path, kind, PathErrorReason.EMPTY_FILE_PATH)
    else:
        if not path:
            path = backend.current_directory()
        path = as_folder_path(path)

    if path.startswith("~"):
        home = backend.home()
        if home is None:
            raise PathError(path, kind, PathErrorReason.MISSING, detail="home")
        path = removing_suffix(home, SEPARATOR) + path[1:]

    if not path.startswith(SEPARATOR):
        path = as_folder_path(backend.current_directory()) + path

    # Resolve parent references left to right, checking each parent exists.
    while (index := path.find(PARENT_REFERENCE)) != -1:
        folder_path = path[: index + 1]
        parent_path = make_parent_path(folder_path) or SEPARATOR

        if not backend.exists(parent_path, PathKind.FOLDER):
            raise PathError(parent_path, kind, PathErrorReason.MISSING)

        path = parent_path + path[index + len(PARENT_REFERENCE) :]

    if not backend.exists(path, kind):
        raise PathError(path, kind, PathErrorReason.MISSING)

    return path
