from __future__ import annotations

import logging
import sys
from typing import Protocol, TextIO


class LogSink(Protocol):
    """Where build-console lines go. One call per line, no trailing newline."""

    def write_line(self, text: str) -> None: ...


class StreamLogSink:
    def __init__(self, stream: TextIO | None = None):
        self._stream = stream if stream is not None else sys.stdout

    def write_line(self, text: str) -> None:
        self._stream.write(text + "\n")
        self._stream.flush()


class LoggerLogSink:
    def __init__(self, logger: logging.Logger, level: int = logging.INFO):
        self._logger = logger
        self._level = level

    def write_line(self, text: str) -> None:
        self._logger.log(self._level, "%s", text)
