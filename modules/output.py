"""
Output sinks for customer-facing text.

The shipment notice and the checkout receipt are written line by line to a
sink: a terminal (ConsoleSink), a buffer (MemorySink) or the application
log (LoggingSink).
"""

import logging
import sys
import threading
from typing import List, Optional, Protocol, TextIO


class OutputSink(Protocol):
    """Line-oriented text emitter."""

    def emit(self, line: str) -> None:
        ...


class ConsoleSink:
    """Writes each line to a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def emit(self, line: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(line + "\n")
        stream.flush()


class MemorySink:
    """
    Collects emitted lines in memory.

    Used by the HTTP layer to return receipts in responses, and by tests.
    """

    def __init__(self):
        self._lines: List[str] = []
        self._lock = threading.Lock()

    def emit(self, line: str) -> None:
        with self._lock:
            self._lines.append(line)

    @property
    def lines(self) -> List[str]:
        with self._lock:
            return list(self._lines)

    def drain(self) -> List[str]:
        """Return and forget every collected line."""
        with self._lock:
            lines, self._lines = self._lines, []
            return lines

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()


class LoggingSink:
    """Writes each line to a logger; used by the HTTP app."""

    def __init__(self, logger: logging.Logger, level: int = logging.INFO):
        self._logger = logger
        self._level = level

    def emit(self, line: str) -> None:
        self._logger.log(self._level, line)
