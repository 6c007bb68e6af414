from __future__ import annotations

from typing import List

import pytest


class RecordingLogSink:
    def __init__(self) -> None:
        self.lines: List[str] = []

    def write_line(self, text: str) -> None:
        self.lines.append(text)

    def text(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture
def log() -> RecordingLogSink:
    return RecordingLogSink()
