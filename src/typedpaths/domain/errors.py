"""Error types raised by location operations (domain layer).

Three families share one shape: the offending path, the kind of location
and a reason. Callers are expected to branch on ``error.reason``.
"""

from __future__ import annotations

from enum import Enum

from .kinds import PathKind


class PathErrorReason(str, Enum):
    """Reasons that a lookup, rename, move, copy or delete could fail."""

    MISSING = "missing"
    EMPTY_FILE_PATH = "empty_file_path"
    CANNOT_RENAME_ROOT = "cannot_rename_root"
    RENAME_FAILED = "rename_failed"
    MOVE_FAILED = "move_failed"
    COPY_FAILED = "copy_failed"
    DELETE_FAILED = "delete_failed"
    UNRESOLVED_SEARCH_PATH = "unresolved_search_path"


class WriteErrorReason(str, Enum):
    """Reasons that a write or creation could fail."""

    EMPTY_PATH = "empty_path"
    FOLDER_CREATION_FAILED = "folder_creation_failed"
    FILE_CREATION_FAILED = "file_creation_failed"
    WRITE_FAILED = "write_failed"
    STRING_ENCODING_FAILED = "string_encoding_failed"


class ReadErrorReason(str, Enum):
    """Reasons that a read could fail."""

    READ_FAILED = "read_failed"
    STRING_DECODING_FAILED = "string_decoding_failed"
    NOT_AN_INT = "not_an_int"


class PathsError(Exception):
    """Base error for every failing location operation.

    Attributes:
        path: The absolute path that the error occurred at.
        kind: The kind of location involved.
        reason: Why the operation failed.
        cause: The underlying system error, when there is one.
        detail: Extra payload for the reason (an unencodable string,
            the text that wasn't an integer, a search path description).
    """

    def __init__(
        self,
        path: str,
        kind: PathKind,
        reason: Enum,
        *,
        cause: BaseException | None = None,
        detail: str | None = None,
    ):
        self.path = path
        self.kind = kind
        self.reason = reason
        self.cause = cause
        self.detail = detail
        super().__init__(self.description)

    @property
    def description(self) -> str:
        reason = self.reason.value
        if self.detail is not None:
            reason = f"{reason}({self.detail!r})"
        return f"{reason} {self.kind} {self.path}"

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(path={self.path!r}, kind={self.kind.value!r}, "
            f"reason={self.reason.value!r})"
        )


class PathError(PathsError):
    """Raised by lookups and by rename, move, copy and delete."""

    reason: PathErrorReason


class WriteError(PathsError):
    """Raised by writes and by file or folder creation."""

    reason: WriteErrorReason


class ReadError(PathsError):
    """Raised when reading a file's contents fails."""

    reason: ReadErrorReason
