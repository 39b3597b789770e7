"""File handles and content operations."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import TYPE_CHECKING

from ..domain.errors import (
    PathError,
    PathErrorReason,
    ReadError,
    ReadErrorReason,
    WriteError,
    WriteErrorReason,
)
from ..domain.kinds import PathKind
from ..domain.storage.protocol import BackendProtocol
from .location import Location

if TYPE_CHECKING:
    from .folder import Folder

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class File(Location):
    """A file on disk.

    Reference an existing file with ``File(path)``, or create one through
    ``Folder.create_file``. No file descriptor is held between calls: every
    read, write and append opens and closes the file within the call.
    """

    kind = PathKind.FILE

    def __init__(self, path: str, backend: BackendProtocol | None = None):
        super().__init__(path, backend)

    @property
    def size(self) -> int:
        """Size in bytes.

        Raises:
            PathError: ``MISSING`` if the file no longer exists.
        """
        attributes = self.attributes
        if attributes is None:
            raise PathError(self.path, self.kind, PathErrorReason.MISSING)
        return attributes["size"]

    def merge(self, into: Folder) -> None:
        """Move this file into ``into``, replacing any file with the same name."""
        self._relocate(into.path + self.name, PathErrorReason.MOVE_FAILED)

    def read(self) -> bytes:
        """Read the contents of the file.

        Raises:
            ReadError: ``READ_FAILED`` if the backend couldn't read the file.
        """
        try:
            return self.backend.read_bytes(self.path)
        except OSError as exc:
            raise ReadError(self.path, self.kind, ReadErrorReason.READ_FAILED, cause=exc) from exc

    def read_as_string(self, encoding: str = "utf-8") -> str:
        """Read the contents of the file decoded as a string.

        Raises:
            ReadError: ``READ_FAILED`` or ``STRING_DECODING_FAILED``.
        """
        data = self.read()
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as exc:
            raise ReadError(
                self.path, self.kind, ReadErrorReason.STRING_DECODING_FAILED, cause=exc
            ) from exc

    def read_as_int(self) -> int:
        """Read the contents of the file as a base-10 integer.

        The whole text must be the integer; surrounding whitespace is rejected.

        Raises:
            ReadError: ``NOT_AN_INT`` carrying the text that was read.
        """
        text = self.read_as_string()
        if not INTEGER_PATTERN.fullmatch(text):
            raise ReadError(self.path, self.kind, ReadErrorReason.NOT_AN_INT, detail=text)
        return int(text)

    def write(self, data: bytes | str, encoding: str = "utf-8") -> None:
        """Replace the contents of the file.

        Args:
            data: Bytes, or a string encoded with ``encoding``.
            encoding: Encoding used for string data.

        Raises:
            TypeError: If ``data`` is neither bytes-like nor a string.
            WriteError: ``STRING_ENCODING_FAILED`` or ``WRITE_FAILED``.
        """
        payload = self._encode(data, encoding)
        try:
            self.backend.write_bytes(self.path, payload)
        except OSError as exc:
            raise WriteError(self.path, self.kind, WriteErrorReason.WRITE_FAILED, cause=exc) from exc

    def append(self, data: bytes | str, encoding: str = "utf-8") -> None:
        """Append to the contents of the file. The file must still exist.

        Raises:
            WriteError: ``STRING_ENCODING_FAILED`` or ``WRITE_FAILED``.
        """
        payload = self._encode(data, encoding)
        try:
            self.backend.append_bytes(self.path, payload)
        except OSError as exc:
            raise WriteError(self.path, self.kind, WriteErrorReason.WRITE_FAILED, cause=exc) from exc

    async def aread(self) -> bytes:
        """Async version of read."""
        return await asyncio.to_thread(self.read)

    async def awrite(self, data: bytes | str, encoding: str = "utf-8") -> None:
        """Async version of write."""
        await asyncio.to_thread(self.write, data, encoding)

    def _encode(self, data: bytes | str, encoding: str) -> bytes:
        if isinstance(data, (bytes, bytearray, memoryview)):
            return bytes(data)
        if not isinstance(data, str):
            raise TypeError(f"Expected bytes or str, got {type(data).__name__}")
        try:
            return data.encode(encoding)
        except (UnicodeEncodeError, LookupError) as exc:
            raise WriteError(
                self.path, self.kind, WriteErrorReason.STRING_ENCODING_FAILED, cause=exc, detail=data
            ) from exc
