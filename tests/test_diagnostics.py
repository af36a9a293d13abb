"""Tests for the diagnostic side channel."""
import io
import logging

import pytest

from bucketfs.diagnostics import ConsoleSink, LoggerSink, NullSink, OperationEvent, RecordingSink
from bucketfs.filesystem import BucketFS
from bucketfs.infrastructure.logger import Logger, LogLevel


class TestOperationEvent:
    """Tests for event rendering."""

    def test_plain(self):
        assert OperationEvent("Remove", ("/x",)).render() == "\t⚡ Remove /x"

    def test_file_glyph(self):
        assert OperationEvent("Stat", ("/x",), is_dir=False).render() == "\t⚡ Stat Ⅎ /x"

    def test_dir_glyph(self):
        assert OperationEvent("Mkdir", ("/d",), is_dir=True).render() == "\t⚡ Mkdir Ⅾ /d"

    def test_rename(self):
        event = OperationEvent("Rename", ("/a", "/b"), is_dir=False)
        assert event.render() == "\t⚡ Rename Ⅎ /a ⇢ /b"

    def test_symlink(self):
        event = OperationEvent("Symlink", ("/link", "/target"))
        assert event.render() == "\t⚡ Symlink /link ⇉ /target"

    def test_hop(self):
        assert OperationEvent("Stat", ("/l1",), hop=True).render() == "\t⛓ /l1"

    def test_glyph_property(self):
        assert OperationEvent("Stat", ("/x",)).glyph == ""


class TestConsoleSink:
    """Tests for console output."""

    def test_writes_to_stdout(self, capsys):
        fs = BucketFS.create(sink=ConsoleSink())
        fs.rename("/a.txt", "/b.txt")
        fs.mkdir("/d")
        out = capsys.readouterr().out
        assert out == "\t⚡ Rename /a.txt ⇢ /b.txt\n\t⚡ Mkdir /d\n"

    def test_default_sink_is_console(self, capsys, quiet_logger):
        fs = BucketFS.create(logger=quiet_logger)
        fs.remove("/x")
        assert capsys.readouterr().out == "\t⚡ Remove /x\n"

    def test_custom_stream(self):
        stream = io.StringIO()
        sink = ConsoleSink(stream)
        sink.emit(OperationEvent("Open", ("/f",), is_dir=False))
        assert stream.getvalue() == "\t⚡ Open Ⅎ /f\n"

    def test_hybrid_output(self, capsys, injected, quiet_logger):
        fs = (
            BucketFS.create_with_error(injected, logger=quiet_logger)
            .with_fake_files(["/f"])
        )
        fs.symlink("/f", "/l")
        fs.stat("/l")
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["\t⚡ Symlink Ⅎ /l ⇉ /f", "\t⛓ /f", "\t⚡ Stat Ⅎ /f"]

    def test_not_verbose_hides_hops(self):
        stream = io.StringIO()
        sink = ConsoleSink(stream, verbose=False)
        sink.emit(OperationEvent("Stat", ("/l",), hop=True))
        sink.emit(OperationEvent("Stat", ("/f",)))
        assert stream.getvalue() == "\t⚡ Stat /f\n"


class TestRecordingSink:
    """Tests for the in-memory sink."""

    def test_failures_are_reported(self, hybrid_fs, recorder):
        with pytest.raises(FileNotFoundError):
            hybrid_fs.remove("/missing")
        assert recorder.events[-1] == OperationEvent("Remove", ("/missing",))

    def test_known_entries_get_glyph(self, hybrid_fs, recorder):
        hybrid_fs.stat("/home")
        hybrid_fs.stat("/home/notes.txt")
        assert recorder.lines()[-2:] == ["\t⚡ Stat Ⅾ /home", "\t⚡ Stat Ⅎ /home/notes.txt"]

    def test_clear(self, silent_fs, recorder):
        silent_fs.remove("/x")
        recorder.clear()
        assert recorder.events == []
        assert recorder.operations == []


class TestLoggerSink:
    """Tests for routing events into the logger."""

    def test_events_logged(self):
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        logger = Logger(name="bucketfs.sinktest", level=LogLevel.DEBUG, handlers=[handler])
        fs = BucketFS.create(sink=LoggerSink(logger), logger=logger)
        fs.mkdir("/d")
        output = stream.getvalue()
        assert "⚡ Mkdir /d" in output
        assert "op=Mkdir" in output

    def test_hops_at_debug(self):
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        logger = Logger(name="bucketfs.hoptest", level=LogLevel.INFO, handlers=[handler])
        LoggerSink(logger).emit(OperationEvent("Stat", ("/l",), hop=True))
        assert stream.getvalue() == ""


class TestNullSink:
    """Tests for the discarding sink."""

    def test_drops_everything(self, capsys, quiet_logger):
        fs = BucketFS.create(sink=NullSink(), logger=quiet_logger)
        fs.remove("/x")
        assert capsys.readouterr().out == ""
