from .default import get_default_backend, set_default_backend
from .filesystem import FilesystemBackend
from .state import StateBackend

__all__ = [
    "FilesystemBackend",
    "StateBackend",
    "get_default_backend",
    "set_default_backend",
]
