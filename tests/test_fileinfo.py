"""Tests for stat results."""
import dataclasses
import stat
from datetime import datetime

import pytest

from bucketfs.fileinfo import (
    BucketFileInfo,
    default_dir_info,
    default_file_info,
    new_dir_info,
    new_file_info,
)


class TestProjections:
    """Tests for the info constructors."""

    def test_new_file_info(self):
        info = new_file_info("/a.txt", 12, stat.S_IFREG | 0o640)
        assert info.name == "/a.txt"
        assert info.size == 12
        assert info.is_file
        assert not info.is_dir
        assert info.perms == 0o640

    def test_file_info_strips_directory_type(self):
        info = new_file_info("/d", 0, stat.S_IFDIR | 0o755)
        assert info.mode == stat.S_IFREG | 0o755
        assert not info.is_dir

    def test_file_info_keeps_link_type(self):
        info = new_file_info("/l", 0, stat.S_IFLNK | 0o777)
        assert info.is_symlink
        assert not info.is_file

    def test_file_info_adds_regular_type(self):
        assert new_file_info("/p", 0, 0o600).mode == stat.S_IFREG | 0o600

    def test_new_dir_info(self):
        info = new_dir_info("/d", 0, 0o750)
        assert info.is_dir
        assert stat.S_ISDIR(info.mode)
        assert info.perms == 0o750

    def test_defaults(self):
        info = default_file_info("/x")
        assert info.name == "/x"
        assert info.size == 0
        assert info.mode == stat.S_IFREG | 0o777
        assert not info.is_dir
        assert default_file_info().name == ""
        assert default_dir_info("/d").is_dir


class TestBucketFileInfo:
    """Tests for the snapshot itself."""

    def test_frozen(self):
        info = default_file_info("/x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            info.size = 3

    def test_stat_result_names(self):
        info = new_file_info("/x", 5, stat.S_IFREG | 0o644)
        assert info.st_mode == info.mode
        assert info.st_size == 5
        assert info.st_mtime == info.mod_time.timestamp()

    def test_mod_time_is_recent(self):
        before = datetime.now()
        info = default_file_info("/x")
        assert before <= info.mod_time <= datetime.now()

    def test_str_like_ls(self):
        when = datetime(2024, 3, 5, 14, 7)
        info = BucketFileInfo("/tmp/cv.doc", 1024, stat.S_IFREG | 0o644, when)
        assert str(info) == "-rw-r--r--    boot    foot     1024 05 Mar 2024 14:07 /tmp/cv.doc"
