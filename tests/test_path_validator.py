"""Tests for path validation and normalization."""

import pytest

from typedpaths import (
    BackendConfig,
    File,
    Folder,
    PathError,
    PathErrorReason,
    PathKind,
    StateBackend,
)
from typedpaths.domain.path_validator import as_folder_path, make_parent_path, validate_path


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/", None),
        ("/a", "/"),
        ("/a/", "/"),
        ("/a/b/c", "/a/b/"),
        ("/a/b/", "/a/"),
    ],
)
def test_make_parent_path(path, expected):
    """Test that the parent path is computed, with the root as the parent of shallow paths."""
    assert make_parent_path(path) == expected


def test_as_folder_path_keeps_one_separator():
    """Test that folder paths end with exactly one separator."""
    assert as_folder_path("/tmp") == "/tmp/"
    assert as_folder_path("/tmp//") == "/tmp/"
    assert as_folder_path("/") == "/"


def test_empty_file_path_is_rejected(state_backend):
    """Test that an empty file path fails before touching the backend."""
    with pytest.raises(PathError) as exc_info:
        File("", state_backend)

    assert exc_info.value.reason is PathErrorReason.EMPTY_FILE_PATH


def test_empty_folder_path_is_current_directory(state_backend):
    """Test that an empty folder path resolves to the current directory."""
    assert Folder("", state_backend).path == "/home/user/"
    assert Folder(backend=state_backend) == Folder.current(state_backend)


def test_folder_path_gets_trailing_separator(state_backend):
    """Test that folder paths are normalized to end with a separator."""
    assert Folder("/tmp", state_backend).path == "/tmp/"
    assert Folder("/tmp//", state_backend).path == "/tmp/"


def test_tilde_expands_to_home(state_backend):
    """Test that a leading tilde is replaced by the home folder."""
    state_backend.create_file("/home/user/notes.txt")

    assert File("~/notes.txt", state_backend).path == "/home/user/notes.txt"
    assert Folder("~", state_backend).path == "/home/user/"


def test_tilde_without_home_is_missing():
    """Test that a tilde path fails recoverably when there is no home folder."""
    backend = StateBackend(
        BackendConfig(home=None, current_directory="/", temporary_directory="/tmp/")
    )

    with pytest.raises(PathError) as exc_info:
        File("~/notes.txt", backend)

    assert exc_info.value.reason is PathErrorReason.MISSING
    assert exc_info.value.detail == "home"


def test_relative_path_resolves_against_current_directory(state_backend):
    """Test that relative paths are prefixed with the current directory."""
    state_backend.create_directory("/home/user/sub", create_intermediates=False)
    state_backend.create_file("/home/user/sub/file")

    assert File("sub/file", state_backend).path == "/home/user/sub/file"
    assert Folder("sub", state_backend).path == "/home/user/sub/"


def test_parent_references_are_resolved(state_backend):
    """Test that every parent reference is removed from the path."""
    for name in ("A", "B", "C"):
        state_backend.create_directory(f"/x/{name}", create_intermediates=True)
    state_backend.create_file("/x/C/file")

    file = File("/x/A/../B/../C/file", state_backend)

    assert file.path == "/x/C/file"
    assert file == File("/x/C/file", state_backend)


def test_relative_parent_reference(state_backend):
    """Test that a relative path can step out of the current directory."""
    state_backend.create_directory("/home/user/sub", create_intermediates=False)
    state_backend.create_file("/home/user/notes.txt")
    Folder("sub", state_backend).set()

    assert File("../notes.txt", state_backend).path == "/home/user/notes.txt"


def test_parent_reference_walks_up_levels(state_backend):
    """Test that N parent references land N levels above the starting folder."""
    state_backend.create_directory("/a/b/c/d", create_intermediates=True)
    start = Folder("/a/b/c/d", state_backend)

    expected = start
    for depth in range(1, 5):
        expected = expected.parent
        assert Folder("/a/b/c/d/" + "../" * depth, state_backend) == expected


def test_parent_reference_at_root_stays_at_root(state_backend):
    """Test that stepping above the root folder stays at the root."""
    assert Folder("/../tmp", state_backend).path == "/tmp/"


def test_missing_parent_in_reference_fails(state_backend):
    """Test that a parent reference through a missing folder reports that folder."""
    with pytest.raises(PathError) as exc_info:
        File("/nope/deeper/../file", state_backend)

    assert exc_info.value.reason is PathErrorReason.MISSING
    assert exc_info.value.path == "/nope/"


def test_wrong_kind_is_missing(state_backend):
    """Test that a folder can't be referenced as a file and vice versa."""
    state_backend.create_file("/tmp/file")

    with pytest.raises(PathError) as exc_info:
        File("/tmp", state_backend)
    assert exc_info.value.reason is PathErrorReason.MISSING

    with pytest.raises(PathError):
        Folder("/tmp/file", state_backend)


def test_validate_path_returns_canonical_path(state_backend):
    """Test validating a path directly."""
    assert validate_path("~/../user", PathKind.FOLDER, state_backend) == "/home/user/"
