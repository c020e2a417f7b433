import os

import pytest

from duatool.deletion import DeletionError, delete_directory_recursively


def test_deletes_nested_directory(tmp_path):
    root = tmp_path / "root"
    (root / "x" / "y").mkdir(parents=True)
    (root / "x" / "y" / "f").write_text("data")
    (root / "g").write_text("more")
    delete_directory_recursively(root)
    assert not root.exists()
    assert tmp_path.exists()


def test_deletes_single_file(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("content")
    delete_directory_recursively(target)
    assert not target.exists()


def test_missing_path_is_not_an_error(tmp_path):
    missing = tmp_path / "missing"
    delete_directory_recursively(missing)
    assert not missing.exists()


def test_symlink_is_not_followed(tmp_path):
    target = tmp_path / "target"
    target.mkdir()
    (target / "keep").write_text("keep")
    link = tmp_path / "link"
    os.symlink(target, link)
    delete_directory_recursively(link)
    assert not os.path.lexists(link)
    assert (target / "keep").read_text() == "keep"


def test_symlink_inside_directory_is_removed_not_followed(tmp_path):
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "keep").write_text("keep")
    root = tmp_path / "root"
    root.mkdir()
    os.symlink(outside, root / "link")
    delete_directory_recursively(root)
    assert not root.exists()
    assert (outside / "keep").exists()


def test_undeletable_path_raises_with_count(tmp_path):
    regular = tmp_path / "regular"
    regular.write_text("x")
    with pytest.raises(DeletionError) as info:
        delete_directory_recursively(regular / "child")
    assert info.value.num_errors == 1
    assert regular.exists()