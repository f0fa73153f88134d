"""Serialise Python values as JSON text, with jansson-style flags."""

from __future__ import annotations

import enum
import io
import math
import os
from collections.abc import Callable, Iterator, Mapping
from typing import Any, BinaryIO, TextIO

from .errors import JsonError

MAX_INDENT = 0x1F
_MAX_INTEGER_STR_LENGTH = 100
_DEFAULT_PRECISION = 17


class DumpFlags(enum.IntFlag):
    """Encoding flags; combine with indent_flag() and real_precision_flag()."""

    NONE = 0
    COMPACT = 0x20
    ENSURE_ASCII = 0x40
    SORT_KEYS = 0x80
    PRESERVE_ORDER = 0x100
    ENCODE_ANY = 0x200
    ESCAPE_SLASH = 0x400
    EMBED = 0x10000


class EncodeError(JsonError):
    """Raised when a value cannot be encoded or the output cannot be written."""

    def __init__(self, text: str, needed: int | None = None) -> None:
        super().__init__(text)
        self.needed = needed


def indent_flag(n: int) -> int:
    """Return the flag bits asking for ``n`` spaces of indentation (0-31)."""
    return n & MAX_INDENT


def real_precision_flag(n: int) -> int:
    """Return the flag bits asking for ``n`` significant digits in reals."""
    return (n & 0x1F) << 11


def _indent_of(flags: int) -> int:
    return flags & MAX_INDENT


def _precision_of(flags: int) -> int:
    return (flags >> 11) & 0x1F


_SHORT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "/": "\\/",
}


def _escape_char(ch: str) -> str:
    short = _SHORT_ESCAPES.get(ch)
    if short is not None:
        return short
    codepoint = ord(ch)
    if codepoint < 0x10000:
        return "\\u%04X" % codepoint
    codepoint -= 0x10000
    first = 0xD800 | ((codepoint & 0xFFC00) >> 10)
    last = 0xDC00 | (codepoint & 0x003FF)
    return "\\u%04X\\u%04X" % (first, last)


def _encode_string(text: str, flags: int) -> str:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodeError("invalid Unicode in string") from exc

    escape_slash = bool(flags & DumpFlags.ESCAPE_SLASH)
    ensure_ascii = bool(flags & DumpFlags.ENSURE_ASCII)
    parts = []
    for ch in text:
        codepoint = ord(ch)
        if (
            ch in '\\"'
            or codepoint < 0x20
            or (escape_slash and ch == "/")
            or (ensure_ascii and codepoint > 0x7F)
        ):
            parts.append(_escape_char(ch))
        else:
            parts.append(ch)
    return '"' + "".join(parts) + '"'


def _encode_real(value: float, flags: int) -> str:
    if math.isnan(value) or math.isinf(value):
        raise EncodeError("real value is not finite")
    precision = _precision_of(flags) or _DEFAULT_PRECISION
    text = "%.*g" % (precision, value)
    if "." not in text and "e" not in text:
        text += ".0"
    mantissa, sep, exponent = text.partition("e")
    if sep:
        sign = "-" if exponent.startswith("-") else ""
        digits = exponent.lstrip("+-").lstrip("0") or "0"
        text = f"{mantissa}e{sign}{digits}"
    return text


def _encode_integer(value: int) -> str:
    text = str(value)
    if len(text) >= _MAX_INTEGER_STR_LENGTH:
        raise EncodeError("integer too long to encode")
    return text


class _Encoder:
    def __init__(self, flags: int) -> None:
        self.flags = flags & ~DumpFlags.EMBED
        self.indent = _indent_of(flags)
        self.compact = bool(flags & DumpFlags.COMPACT)
        self.sort_keys = bool(flags & DumpFlags.SORT_KEYS)
        self.separator = ":" if self.compact else ": "
        self._active: set[int] = set()

    def _newline(self, depth: int, space: bool) -> str:
        if self.indent > 0:
            return "\n" + " " * (depth * self.indent)
        if space and not self.compact:
            return " "
        return ""

    def encode(self, value: Any, depth: int = 0, embed: bool = False) -> Iterator[str]:
        if value is None:
            yield "null"
        elif value is True:
            yield "true"
        elif value is False:
            yield "false"
        elif isinstance(value, int):
            yield _encode_integer(value)
        elif isinstance(value, float):
            yield _encode_real(value, self.flags)
        elif isinstance(value, str):
            yield _encode_string(value, self.flags)
        elif isinstance(value, (list, tuple)):
            yield from self._container(value, depth, embed, self._array_items)
        elif isinstance(value, Mapping):
            yield from self._container(value, depth, embed, self._object_items)
        else:
            raise EncodeError(f"cannot encode value of type {type(value).__name__}")

    def _container(
        self,
        value: Any,
        depth: int,
        embed: bool,
        items: Callable[[Any, int], Iterator[str]],
    ) -> Iterator[str]:
        marker = id(value)
        if marker in self._active:
            raise EncodeError("circular reference")
        self._active.add(marker)
        try:
            is_array = isinstance(value, (list, tuple))
            opening, closing = ("[", "]") if is_array else ("{", "}")
            if not embed:
                yield opening
            if len(value) == 0:
                if not embed:
                    yield closing
                return
            head = self._newline(depth + 1, False)
            if head:
                yield head
            yield from items(value, depth)
            if not embed:
                yield closing
        finally:
            self._active.discard(marker)

    def _separator_after(self, is_last: bool, depth: int) -> Iterator[str]:
        if is_last:
            tail = self._newline(depth, False)
            if tail:
                yield tail
        else:
            yield ","
            gap = self._newline(depth + 1, True)
            if gap:
                yield gap

    def _array_items(self, value: Any, depth: int) -> Iterator[str]:
        count = len(value)
        for position, item in enumerate(value, start=1):
            yield from self.encode(item, depth + 1)
            yield from self._separator_after(position == count, depth)

    def _object_items(self, value: Mapping, depth: int) -> Iterator[str]:
        keys = list(value.keys())
        for key in keys:
            if not isinstance(key, str):
                raise EncodeError(f"object key must be str, not {type(key).__name__}")
        if self.sort_keys:
            keys.sort()
        count = len(keys)
        for position, key in enumerate(keys, start=1):
            yield _encode_string(key, self.flags)
            yield self.separator
            yield from self.encode(value[key], depth + 1)
            yield from self._separator_after(position == count, depth)


def _iterencode(value: Any, flags: int) -> Iterator[str]:
    flags = int(flags)
    if not flags & DumpFlags.ENCODE_ANY and not isinstance(value, (list, tuple, Mapping)):
        raise EncodeError("top-level value must be an array or an object")
    embed = bool(flags & DumpFlags.EMBED)
    return _Encoder(flags).encode(value, 0, embed)


def dump_callback(value: Any, callback: Callable[[str], Any], flags: int = 0) -> None:
    """Encode ``value``, handing each piece of text to ``callback``.

    A callback that returns a true value signals failure, which raises
    EncodeError; exceptions raised by the callback propagate.
    """
    for chunk in _iterencode(value, flags):
        if callback(chunk):
            raise EncodeError("write callback failed")


def dumps(value: Any, flags: int = 0) -> str:
    """Return ``value`` encoded as JSON text."""
    return "".join(_iterencode(value, flags))


def dumpb(value: Any, size: int | None = None, flags: int = 0) -> bytes:
    """Return ``value`` encoded as UTF-8 JSON, at most ``size`` bytes long.

    Raises EncodeError, with ``needed`` set to the full length, when the
    output does not fit.
    """
    data = dumps(value, flags).encode("utf-8")
    if size is not None and len(data) > size:
        raise EncodeError(
            f"output of {len(data)} bytes does not fit in {size} bytes",
            needed=len(data),
        )
    return data


def dumpf(value: Any, stream: TextIO | BinaryIO, flags: int = 0) -> None:
    """Write ``value`` as JSON to a text or binary stream."""
    binary = isinstance(stream, (io.RawIOBase, io.BufferedIOBase))
    for chunk in _iterencode(value, flags):
        stream.write(chunk.encode("utf-8") if binary else chunk)


def dumpfd(value: Any, fd: int, flags: int = 0) -> None:
    """Write ``value`` as UTF-8 JSON to an open file descriptor."""
    for chunk in _iterencode(value, flags):
        data = chunk.encode("utf-8")
        if os.write(fd, data) != len(data):
            raise EncodeError("short write to file descriptor")


def dump_file(value: Any, path: str | os.PathLike, flags: int = 0) -> None:
    """Write ``value`` as UTF-8 JSON to the file at ``path``, replacing it."""
    with open(path, "w", encoding="utf-8", newline="") as output:
        dumpf(value, output, flags)