"""Shared fixtures: every core test runs against both backends."""

import os
from datetime import UTC, datetime, timedelta

import pytest

from typedpaths import (
    BackendConfig,
    FilesystemBackend,
    Folder,
    StateBackend,
    set_default_backend,
)


class FakeClock:
    """Deterministic clock for StateBackend timestamps."""

    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture(autouse=True)
def reset_default_backend():
    yield
    set_default_backend(None)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def state_backend(clock):
    return StateBackend(clock=clock)


@pytest.fixture
def fs_config(tmp_path):
    home = tmp_path / "home"
    work = tmp_path / "work"
    temporary = tmp_path / "tmp"
    for folder in (home, work, temporary):
        folder.mkdir()
    return BackendConfig(
        home=str(home),
        current_directory=str(work),
        temporary_directory=str(temporary),
    )


@pytest.fixture
def fs_backend(fs_config):
    return FilesystemBackend(fs_config)


@pytest.fixture(params=["state", "filesystem"])
def backend(request, clock, fs_config):
    if request.param == "state":
        return StateBackend(clock=clock)
    return FilesystemBackend(fs_config)


@pytest.fixture
def folder(backend):
    return Folder.temporary(backend).create_subfolder("filesTest")


@pytest.fixture
def make_symlink():
    """Create a symbolic link through whichever backend is in use."""

    def make(backend, path: str, target: str) -> None:
        if isinstance(backend, StateBackend):
            backend.symlink(path, target)
        else:
            os.symlink(target.rstrip("/"), path)

    return make
