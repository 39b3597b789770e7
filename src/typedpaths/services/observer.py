"""Polling observer for file modifications.

This is not a change notification mechanism: it compares modification
dates of a file and its parent folder at a fixed interval.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from ..handles.file import File

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.777777777  # seconds


class ChangeKind(str, Enum):
    """What changed about an observed file."""

    MODIFICATION_DATE = "modification_date"


@dataclass(frozen=True)
class FileChange:
    """One observed change.

    ``changes`` is empty when only the parent folder changed (an entry was
    added, removed or renamed next to the file).
    """

    file: File
    changes: frozenset[ChangeKind]


class FileObserver:
    """Watch a file by polling modification dates.

    Iterate with ``async for change in observer``. Iteration ends when the
    parent folder can no longer be read or ``stop()`` is called.
    """

    def __init__(self, file: File, interval: float | None = None):
        """Initialize a file observer.

        Args:
            file: The file to observe.
            interval: Seconds between polls, about 0.78 by default.
        """
        self.file = file
        self.interval = DEFAULT_INTERVAL if interval is None else interval
        self._stopped = asyncio.Event()

    def stop(self) -> None:
        self._stopped.set()

    def __aiter__(self) -> AsyncIterator[FileChange]:
        return self._watch()

    async def run(self, handler: Callable[[FileChange], Awaitable[None]]) -> None:
        """Call ``handler`` for every change until the observer stops."""
        async for change in self:
            await handler(change)

    async def _watch(self) -> AsyncIterator[FileChange]:
        parent = self.file.parent
        if parent is None:
            return

        folder_date = parent.modification_date
        file_date = self.file.modification_date
        logger.info(f"Observing {self.file.path} every {self.interval}s")

        while not self._stopped.is_set():
            current_folder_date = parent.modification_date
            if folder_date is None or current_folder_date is None:
                break

            change = None
            if current_folder_date > folder_date:
                change = FileChange(self.file, frozenset())
            else:
                current_file_date = self.file.modification_date
                if (
                    current_file_date is not None
                    and file_date is not None
                    and current_file_date > file_date
                ):
                    change = FileChange(self.file, frozenset({ChangeKind.MODIFICATION_DATE}))

            if change is not None:
                yield change
                folder_date = parent.modification_date
                file_date = self.file.modification_date
                continue

            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.interval)
            except TimeoutError:
                pass

        logger.info(f"Stopped observing {self.file.path}")
