# src/eddy/cli_formatters.py
"""Output sinks for scan results.

Provides console (human-readable) and JSON lines (structured) sinks that
satisfy the OutputSink protocol. A sink that can no longer write (closed
stream, broken pipe from ``eddy scan ... | head``) reports it through
``emit() -> False`` so the scan stops early without an error.
"""

from __future__ import annotations

import json
import sys
from abc import ABC, abstractmethod
from typing import TextIO

from eddy.contracts import Column, OutputSink


def _text(data: bytes) -> str:
    return data.decode("utf-8", errors="backslashreplace")


class _StreamSink(ABC):
    """Line-oriented sink over a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @abstractmethod
    def format_entry(self, row: bytes, column: Column, value: bytes) -> str:
        """Render one entry as a single line, without the newline."""

    def emit(self, row: bytes, column: Column, value: bytes) -> bool:
        if self._closed:
            return False
        try:
            self._stream.write(self.format_entry(row, column, value) + "\n")
            self._stream.flush()
        except (BrokenPipeError, ValueError):
            # ValueError: write to a closed file
            self._closed = True
            return False
        return True


class ConsoleSink(_StreamSink):
    """Writes ``row family:qualifier<TAB>value`` per entry."""

    def format_entry(self, row: bytes, column: Column, value: bytes) -> str:
        return f"{_text(row)} {column}\t{_text(value)}"


class JsonLinesSink(_StreamSink):
    """Writes one JSON object per entry."""

    def format_entry(self, row: bytes, column: Column, value: bytes) -> str:
        return json.dumps(
            {
                "row": _text(row),
                "family": _text(column.family),
                "qualifier": _text(column.qualifier),
                "value": _text(value),
            }
        )


def create_sink(output_format: str, stream: TextIO | None = None) -> OutputSink:
    """Sink for the ``--format`` option ('console' or 'json')."""
    sinks: dict[str, type[_StreamSink]] = {
        "console": ConsoleSink,
        "json": JsonLinesSink,
    }
    return sinks[output_format](stream)
