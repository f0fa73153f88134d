"""Error details reported by decoding and encoding."""

from __future__ import annotations

from dataclasses import dataclass

ERROR_TEXT_LENGTH = 160
ERROR_SOURCE_LENGTH = 80


def truncate_source(source: str) -> str:
    """Shorten a source name to fit, keeping its tail behind '...'."""
    length = len(source)
    if length < ERROR_SOURCE_LENGTH:
        return source
    extra = length - ERROR_SOURCE_LENGTH + 4
    return "..." + source[extra:]


@dataclass
class ErrorInfo:
    """Where and why an operation failed."""

    line: int = -1
    column: int = -1
    position: int = 0
    source: str = ""
    text: str = ""

    def __post_init__(self) -> None:
        self.source = truncate_source(self.source)
        self.text = self.text[:ERROR_TEXT_LENGTH - 1]

    def set(self, line: int, column: int, position: int, message: str) -> None:
        """Record an error; the first recorded error is kept."""
        if self.text:
            return
        self.line = line
        self.column = column
        self.position = int(position)
        self.text = message[:ERROR_TEXT_LENGTH - 1]


class JsonError(Exception):
    """Raised when a value cannot be decoded, encoded or unpacked."""

    def __init__(
        self,
        text: str,
        line: int = -1,
        column: int = -1,
        position: int = 0,
        source: str = "",
    ) -> None:
        self.info = ErrorInfo(line, column, position, source, text)
        super().__init__(self.info.text)

    @property
    def text(self) -> str:
        return self.info.text

    @property
    def line(self) -> int:
        return self.info.line

    @property
    def column(self) -> int:
        return self.info.column

    @property
    def position(self) -> int:
        return self.info.position

    @property
    def source(self) -> str:
        return self.info.source