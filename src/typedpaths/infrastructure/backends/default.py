"""Process-wide default backend used when a location is built without one."""

import logging
from typing import Optional

from ...domain.storage.protocol import BackendProtocol

logger = logging.getLogger(__name__)

# Global backend instance
backend_instance: Optional[BackendProtocol] = None


def get_default_backend() -> BackendProtocol:
    """Return the default backend, creating a filesystem backend on first use."""
    global backend_instance

    if backend_instance is None:
        from .filesystem import FilesystemBackend

        backend_instance = FilesystemBackend()
        logger.debug("Default backend initialized: FilesystemBackend")
    return backend_instance


def set_default_backend(backend: Optional[BackendProtocol]) -> None:
    """Replace the default backend. Passing ``None`` resets it."""
    global backend_instance

    backend_instance = backend
    logger.debug(f"Default backend set to {type(backend).__name__}")
