"""
Diagnostic side channel for BucketFS.

Every filesystem operation reports one ``OperationEvent``; following a
symbolic link additionally reports one hop event per visited link. The
filesystem never prints by itself: it hands events to a ``DiagnosticSink``.

Sinks:
- ``ConsoleSink``: the classic dry-run output on stdout, e.g.
  ``\\t⚡ Rename Ⅎ /a.txt ⇢ /b.txt``
- ``LoggerSink``: routes events into a structured ``Logger``
- ``RecordingSink``: keeps events in memory (tests, dry-run reports)
- ``NullSink``: drops everything
"""
import sys
import threading
from dataclasses import dataclass
from typing import List, Optional, Protocol, TextIO, Tuple

from bucketfs.core.constants import Glyph
from bucketfs.infrastructure.logger import Logger


@dataclass(frozen=True)
class OperationEvent:
    """One reported filesystem operation.

    ``is_dir`` is None when the kind of the object is unknown (silent mode,
    or a hybrid path absent from the namespace).
    """

    operation: str
    paths: Tuple[str, ...]
    is_dir: Optional[bool] = None
    hop: bool = False

    @property
    def glyph(self) -> str:
        if self.is_dir is None:
            return ""
        return Glyph.DIR if self.is_dir else Glyph.FILE

    def render(self) -> str:
        """Render the console line (without trailing newline)."""
        if self.hop:
            return f"\t{Glyph.LINK} {self.paths[0]}"

        parts = [f"\t{Glyph.OPERATION} {self.operation}"]
        if self.glyph:
            parts.append(self.glyph)
        if self.operation == "Rename" and len(self.paths) == 2:
            parts.append(f"{self.paths[0]} {Glyph.RENAME_ARROW} {self.paths[1]}")
        elif self.operation == "Symlink" and len(self.paths) == 2:
            parts.append(f"{self.paths[0]} {Glyph.SYMLINK_ARROW} {self.paths[1]}")
        else:
            parts.extend(self.paths)
        return " ".join(parts)


class DiagnosticSink(Protocol):
    """Anything accepting operation events."""

    def emit(self, event: OperationEvent) -> None: ...


class ConsoleSink:
    """Write one line per event to a text stream (stdout by default).

    Args:
        stream: Target stream; resolved to ``sys.stdout`` at emit time when None
        verbose: When False, symlink hop lines are suppressed
    """

    def __init__(self, stream: Optional[TextIO] = None, verbose: bool = True):
        self.stream = stream
        self.verbose = verbose

    def emit(self, event: OperationEvent) -> None:
        if event.hop and not self.verbose:
            return
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(event.render() + "\n")


class LoggerSink:
    """Route events to a structured logger at INFO (hops at DEBUG)."""

    def __init__(self, logger: Logger):
        self.logger = logger

    def emit(self, event: OperationEvent) -> None:
        message = event.render().strip()
        if event.hop:
            self.logger.debug(message, hop=event.paths[0])
        else:
            self.logger.info(message, op=event.operation, paths=",".join(event.paths))


class RecordingSink:
    """Keep every event in memory."""

    def __init__(self) -> None:
        self.events: List[OperationEvent] = []
        self._lock = threading.Lock()

    def emit(self, event: OperationEvent) -> None:
        with self._lock:
            self.events.append(event)

    @property
    def operations(self) -> List[str]:
        """Names of the recorded non-hop operations, in order."""
        with self._lock:
            return [e.operation for e in self.events if not e.hop]

    @property
    def hops(self) -> List[str]:
        """Paths visited while following symbolic links."""
        with self._lock:
            return [e.paths[0] for e in self.events if e.hop]

    def lines(self) -> List[str]:
        with self._lock:
            return [e.render() for e in self.events]

    def clear(self) -> None:
        with self._lock:
            self.events.clear()


class NullSink:
    """Discard every event."""

    def emit(self, event: OperationEvent) -> None:
        pass
