"""Tests for symbolic links and dereferencing."""
import errno

import pytest

from bucketfs.core.errors import LinkConflictError, NotFoundError, SymlinkLoopError
from bucketfs.filesystem import BucketFS


class TestSymlink:
    """Tests for symlink creation."""

    def test_creates_link_entry(self, hybrid_fs):
        hybrid_fs.symlink("/home/notes.txt", "/home/link")
        assert "/home/link" in hybrid_fs
        assert hybrid_fs.entries()["/home/link"] == "lrwxrwxrwx ->/home/notes.txt"

    def test_target_untouched(self, hybrid_fs):
        hybrid_fs.symlink("/home/notes.txt", "/home/link")
        assert not hybrid_fs.lstat("/home/notes.txt").is_symlink

    def test_missing_target(self, hybrid_fs, injected):
        with pytest.raises(LinkConflictError) as exc_info:
            hybrid_fs.symlink("/nope", "/home/link")
        err = exc_info.value
        assert err.errno == errno.ENOENT
        assert err.filename == "/nope"
        assert err.filename2 == "/home/link"
        assert err.wraps(injected)

    def test_existing_link_name(self, hybrid_fs):
        with pytest.raises(LinkConflictError) as exc_info:
            hybrid_fs.symlink("/home/notes.txt", "/home/Documents")
        assert exc_info.value.errno == errno.EEXIST


class TestStatFollowsLinks:
    """stat dereferences, lstat does not."""

    def test_stat_file_link(self, hybrid_fs):
        hybrid_fs.symlink("/home/notes.txt", "/home/link")
        info = hybrid_fs.stat("/home/link")
        assert info.is_file
        assert info.name == "/home/notes.txt"

    def test_stat_directory_link(self, hybrid_fs):
        hybrid_fs.symlink("/home/Documents", "/docs")
        info = hybrid_fs.stat("/docs")
        assert info.is_dir
        assert info.name == "/home/Documents"

    def test_lstat_reports_link(self, hybrid_fs):
        hybrid_fs.symlink("/home/Documents", "/docs")
        info = hybrid_fs.lstat("/docs")
        assert info.is_symlink
        assert not info.is_dir
        assert info.name == "/docs"

    def test_chain(self, hybrid_fs, recorder):
        hybrid_fs.symlink("/home/notes.txt", "/l1")
        hybrid_fs.symlink("/l1", "/l2")
        hybrid_fs.symlink("/l2", "/l3")
        recorder.clear()
        info = hybrid_fs.stat("/l3")
        assert info.name == "/home/notes.txt"
        assert recorder.hops == ["/l2", "/l1", "/home/notes.txt"]

    def test_broken_link(self, hybrid_fs, injected):
        hybrid_fs.symlink("/home/notes.txt", "/link")
        hybrid_fs.remove("/home/notes.txt")
        with pytest.raises(NotFoundError) as exc_info:
            hybrid_fs.stat("/link")
        assert exc_info.value.path == "/home/notes.txt"
        assert exc_info.value.wraps(injected)
        assert hybrid_fs.lstat("/link").is_symlink

    def test_broken_link_reports_stat(self, hybrid_fs, recorder):
        hybrid_fs.symlink("/home/notes.txt", "/link")
        hybrid_fs.remove("/home/notes.txt")
        recorder.clear()
        with pytest.raises(NotFoundError):
            hybrid_fs.stat("/link")
        assert recorder.operations == ["Stat"]
        assert recorder.events[-1].paths == ("/link",)
        assert recorder.hops == ["/home/notes.txt"]

    def test_open_does_not_care_about_links(self, hybrid_fs):
        hybrid_fs.symlink("/home/notes.txt", "/link")
        assert hybrid_fs.open("/link").name == "/link"


class TestLoops:
    """Cycles and long chains end in SymlinkLoopError."""

    def test_cycle(self, hybrid_fs, injected):
        hybrid_fs.symlink("/home/notes.txt", "/a")
        hybrid_fs.symlink("/a", "/b")
        # drop /a and recreate it pointing at /b
        hybrid_fs.remove("/a")
        hybrid_fs.symlink("/b", "/a")
        with pytest.raises(SymlinkLoopError) as exc_info:
            hybrid_fs.stat("/a")
        assert exc_info.value.errno == errno.ELOOP
        assert exc_info.value.wraps(injected)

    def test_cycle_reports_stat(self, hybrid_fs, recorder):
        hybrid_fs.symlink("/home/notes.txt", "/a")
        hybrid_fs.symlink("/a", "/b")
        hybrid_fs.remove("/a")
        hybrid_fs.symlink("/b", "/a")
        recorder.clear()
        with pytest.raises(SymlinkLoopError):
            hybrid_fs.stat("/a")
        assert recorder.operations == ["Stat"]
        assert recorder.events[-1].paths == ("/a",)

    def test_self_loop(self, hybrid_fs):
        hybrid_fs.symlink("/home/notes.txt", "/self")
        hybrid_fs.remove("/home/notes.txt")
        hybrid_fs.rename("/self", "/home/notes.txt")
        with pytest.raises(SymlinkLoopError):
            hybrid_fs.stat("/home/notes.txt")

    def test_depth_limit(self, injected, recorder, quiet_logger):
        fs = BucketFS.create_with_error(
            injected, sink=recorder, logger=quiet_logger, max_symlink_depth=3
        ).with_fake_files(["/f"])
        previous = "/f"
        for i in range(5):
            fs.symlink(previous, f"/l{i}")
            previous = f"/l{i}"

        assert fs.stat("/l2").name == "/f"
        with pytest.raises(SymlinkLoopError):
            fs.stat("/l4")
