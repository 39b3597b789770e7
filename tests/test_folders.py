"""Tests for folder lookup, creation and content management."""

import pytest

from typedpaths import (
    BackendConfig,
    File,
    Folder,
    PathError,
    PathErrorReason,
    SearchPathDirectory,
    SearchPathDomain,
    StateBackend,
    WriteError,
    WriteErrorReason,
)


def test_creating_and_deleting_subfolder(folder):
    """Test creating a subfolder and deleting it again."""
    subfolder = folder.create_subfolder("folder")

    assert subfolder.name == "folder"
    assert subfolder.path == folder.path + "folder/"
    assert folder.contains_subfolder("folder")
    assert folder.contains(subfolder)

    subfolder.delete()

    assert not folder.contains_subfolder("folder")


def test_creating_nested_subfolder(folder):
    """Test that intermediate folders are created."""
    nested = folder.create_subfolder("a/b/c")

    assert nested.path == folder.path + "a/b/c/"
    assert folder.subfolder("a").contains_subfolder("b")


def test_leading_separator_is_dropped(folder):
    """Test that child paths are always relative to the folder."""
    file = folder.create_file("/file")
    subfolder = folder.create_subfolder("/sub")

    assert file.path == folder.path + "file"
    assert subfolder.path == folder.path + "sub/"
    assert folder.file("/file") == file


def test_creating_with_empty_path_fails(folder):
    """Test that creation needs a name."""
    with pytest.raises(WriteError) as exc_info:
        folder.create_subfolder("")
    assert exc_info.value.reason is WriteErrorReason.EMPTY_PATH

    with pytest.raises(WriteError) as exc_info:
        folder.create_file("")
    assert exc_info.value.reason is WriteErrorReason.EMPTY_PATH

    with pytest.raises(WriteError) as exc_info:
        folder.create_file("dir/")
    assert exc_info.value.reason is WriteErrorReason.EMPTY_PATH


def test_creating_file_with_intermediate_folders(folder):
    """Test that creating a nested file creates its folders."""
    file = folder.create_file("a/b/file.txt", b"contents")

    assert file.path == folder.path + "a/b/file.txt"
    assert file.parent == folder.subfolder("a/b")
    assert file.read() == b"contents"


def test_creating_existing_file_truncates_it(folder):
    """Test that create_file replaces an existing file's contents."""
    folder.create_file("file", b"first")

    file = folder.create_file("file")

    assert file.read() == b""


def test_creating_existing_subfolder_keeps_contents(folder):
    """Test that create_subfolder leaves an existing folder alone."""
    folder.create_subfolder("sub").create_file("file")

    subfolder = folder.create_subfolder("sub")

    assert subfolder.contains_file("file")


def test_creating_file_over_folder_fails(folder):
    """Test that a file can't replace a folder."""
    folder.create_subfolder("taken")

    with pytest.raises(WriteError) as exc_info:
        folder.create_file("taken")

    assert exc_info.value.reason is WriteErrorReason.FILE_CREATION_FAILED


def test_creating_folder_over_file_fails(folder):
    """Test that a folder can't replace a file."""
    folder.create_file("taken")

    with pytest.raises(WriteError) as exc_info:
        folder.create_subfolder("taken")

    assert exc_info.value.reason is WriteErrorReason.FOLDER_CREATION_FAILED


def test_create_file_if_needed(folder):
    """Test that an existing file is returned untouched."""
    file = folder.create_file_if_needed("file", b"first")
    again = folder.create_file_if_needed("file", b"second")

    assert again == file
    assert again.read() == b"first"


def test_create_file_if_needed_evaluates_contents_lazily(folder):
    """Test that a contents callable only runs when a file is created."""
    calls = []

    def contents():
        calls.append(True)
        return b"generated"

    file = folder.create_file_if_needed("file", contents)
    folder.create_file_if_needed("file", contents)

    assert file.read() == b"generated"
    assert len(calls) == 1


def test_create_subfolder_if_needed(folder):
    """Test that an existing subfolder is returned."""
    subfolder = folder.create_subfolder_if_needed("sub")
    subfolder.create_file("file")

    again = folder.create_subfolder_if_needed("sub")

    assert again == subfolder
    assert again.contains_file("file")


def test_overwrite(folder):
    """Test replacing a file with a new one."""
    folder.create_file("file", b"old")

    file = folder.overwrite("file", b"new")

    assert file.read() == b"new"
    assert folder.files.count() == 1


def test_missing_children_fail_lookup(folder):
    """Test looking up children that don't exist or have the wrong kind."""
    folder.create_file("file")
    folder.create_subfolder("sub")

    with pytest.raises(PathError) as exc_info:
        folder.file("missing")
    assert exc_info.value.reason is PathErrorReason.MISSING

    with pytest.raises(PathError):
        folder.subfolder("file")
    with pytest.raises(PathError):
        folder.file("sub")


def test_contains_checks_direct_children(folder):
    """Test that contains only looks at direct children."""
    subfolder = folder.create_subfolder("sub")
    nested_file = subfolder.create_file("nested")
    nested_folder = subfolder.create_subfolder("deeper")
    file = folder.create_file("file")

    assert folder.contains(file)
    assert folder.contains(subfolder)
    assert not folder.contains(nested_file)
    assert not folder.contains(nested_folder)


def test_move_contents(folder):
    """Test moving every child into another folder."""
    source = folder.create_subfolder("source")
    target = folder.create_subfolder("target")
    source.create_file("A")
    source.create_file(".hidden")
    source.create_subfolder("sub").create_file("nested")

    source.move_contents(target)

    assert target.files.names() == ["A"]
    assert target.subfolders.names() == ["sub"]
    assert target.subfolder("sub").contains_file("nested")
    assert source.files.including_hidden.names() == [".hidden"]

    source.move_contents(target, include_hidden=True)

    assert source.is_empty(include_hidden=True)
    assert target.contains_file(".hidden")


def test_empty(folder):
    """Test deleting every child of a folder."""
    folder.create_file("A")
    folder.create_file(".hidden")
    folder.create_subfolder("sub").create_file("nested")

    folder.empty()

    assert folder.is_empty()
    assert not folder.is_empty(include_hidden=True)

    folder.empty(include_hidden=True)

    assert folder.is_empty(include_hidden=True)


def test_is_empty(folder):
    """Test emptiness with files and subfolders."""
    assert folder.is_empty()

    subfolder = folder.create_subfolder("sub")
    assert not folder.is_empty()

    subfolder.delete()
    folder.create_file("file")
    assert not folder.is_empty()


def test_current_home_and_temporary(backend):
    """Test the folders the backend resolves against."""
    assert Folder.current(backend).path == backend.current_directory()
    assert Folder.home(backend).path == backend.home()
    assert Folder.temporary(backend).path == backend.temporary_directory()


def test_set_changes_current_directory(folder):
    """Test making a folder the current directory."""
    backend = folder.backend
    folder.create_file("relative.txt")

    folder.set()

    assert Folder.current(backend) == folder
    assert File("relative.txt", backend).path == folder.path + "relative.txt"
    assert Folder("..", backend) == folder.parent


def test_set_on_deleted_folder_fails(folder):
    """Test that a stale folder can't become the current directory."""
    subfolder = folder.create_subfolder("sub")
    subfolder.delete()

    with pytest.raises(PathError) as exc_info:
        subfolder.set()

    assert exc_info.value.reason is PathErrorReason.MISSING


def test_search_paths_from_config():
    """Test resolving well-known folders from configured overrides."""
    backend = StateBackend(
        BackendConfig(
            home="/home/user",
            current_directory="/home/user",
            temporary_directory="/tmp",
            search_paths={"documents": "/home/user/Documents"},
        )
    )

    assert Folder.matching(SearchPathDirectory.DOCUMENTS, backend=backend).path == (
        "/home/user/Documents/"
    )
    assert Folder.documents(backend).path == "/home/user/Documents/"
    assert Folder.library(backend) is None


def test_unresolved_search_path(state_backend):
    """Test that a well-known folder without candidates is reported."""
    with pytest.raises(PathError) as exc_info:
        Folder.matching(SearchPathDirectory.LIBRARY, SearchPathDomain.SYSTEM, state_backend)

    assert exc_info.value.reason is PathErrorReason.UNRESOLVED_SEARCH_PATH
    assert exc_info.value.detail == "library in system"


def test_search_paths_under_home(fs_backend):
    """Test that user folders default to folders under home."""
    assert Folder.documents(fs_backend) is None
    with pytest.raises(PathError) as exc_info:
        Folder.matching(SearchPathDirectory.DOCUMENTS, backend=fs_backend)
    assert exc_info.value.reason is PathErrorReason.MISSING

    documents = Folder.home(fs_backend).create_subfolder("Documents")

    assert Folder.documents(fs_backend) == documents


def test_creating_subfolder_through_parent_reference(folder):
    """Test that parent references in a new path create each named folder."""
    subfolder = folder.create_subfolder("a/../b")

    assert subfolder.path == folder.path + "b/"
    assert folder.subfolders.names() == ["a", "b"]


def test_creating_file_through_parent_reference(folder):
    """Test that a file path stepping out of a new folder lands next to it."""
    file = folder.create_file("c/../file.txt", b"data")

    assert file.path == folder.path + "file.txt"
    assert folder.subfolders.names() == ["c"]
    assert folder.files.names() == ["file.txt"]
