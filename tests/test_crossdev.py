import os

import pytest

from duatool import crossdev


def test_init_matches_stat_device(tmp_path):
    assert crossdev.init(tmp_path) == os.stat(tmp_path).st_dev


def test_same_device_for_child(tmp_path):
    child = tmp_path / "file.txt"
    child.write_text("hello")
    device = crossdev.init(tmp_path)
    assert crossdev.is_same_device(device, os.stat(child)) is True


def test_different_device_id_is_rejected(tmp_path):
    meta = os.stat(tmp_path)
    assert crossdev.is_same_device(meta.st_dev + 1, meta) is False


def test_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        crossdev.init(tmp_path / "does-not-exist")