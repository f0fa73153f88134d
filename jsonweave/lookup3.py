"""Jenkins' lookup3 ``hashlittle`` hash and hash table sizing helpers."""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF


def hashsize(order: int) -> int:
    """Return the number of buckets for a table of the given order."""
    return (1 << order) & _MASK32


def hashmask(order: int) -> int:
    """Return the bit mask that maps a hash onto a table of the given order."""
    return (hashsize(order) - 1) & _MASK32


def _rot(x: int, k: int) -> int:
    return ((x << k) | (x >> (32 - k))) & _MASK32


def _mix(a: int, b: int, c: int) -> tuple[int, int, int]:
    a = (a - c) & _MASK32; a ^= _rot(c, 4); c = (c + b) & _MASK32
    b = (b - a) & _MASK32; b ^= _rot(a, 6); a = (a + c) & _MASK32
    c = (c - b) & _MASK32; c ^= _rot(b, 8); b = (b + a) & _MASK32
    a = (a - c) & _MASK32; a ^= _rot(c, 16); c = (c + b) & _MASK32
    b = (b - a) & _MASK32; b ^= _rot(a, 19); a = (a + c) & _MASK32
    c = (c - b) & _MASK32; c ^= _rot(b, 4); b = (b + a) & _MASK32
    return a, b, c


def _final(a: int, b: int, c: int) -> tuple[int, int, int]:
    c ^= b; c = (c - _rot(b, 14)) & _MASK32
    a ^= c; a = (a - _rot(c, 11)) & _MASK32
    b ^= a; b = (b - _rot(a, 25)) & _MASK32
    c ^= b; c = (c - _rot(b, 16)) & _MASK32
    a ^= c; a = (a - _rot(c, 4)) & _MASK32
    b ^= a; b = (b - _rot(a, 14)) & _MASK32
    c ^= b; c = (c - _rot(b, 24)) & _MASK32
    return a, b, c


def _words(block: bytes) -> tuple[int, int, int]:
    return (
        int.from_bytes(block[0:4], "little"),
        int.from_bytes(block[4:8], "little"),
        int.from_bytes(block[8:12], "little"),
    )


def hashlittle(key: bytes | str, initval: int = 0) -> int:
    """Hash ``key`` (bytes, or text encoded as UTF-8) to a 32-bit value."""
    data = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    length = len(data)
    a = b = c = (0xDEADBEEF + (length & _MASK32) + initval) & _MASK32

    if length == 0:
        return c

    offset = 0
    while length - offset > 12:
        k0, k1, k2 = _words(data[offset:offset + 12])
        a = (a + k0) & _MASK32
        b = (b + k1) & _MASK32
        c = (c + k2) & _MASK32
        a, b, c = _mix(a, b, c)
        offset += 12

    k0, k1, k2 = _words(data[offset:].ljust(12, b"\0"))
    a = (a + k0) & _MASK32
    b = (b + k1) & _MASK32
    c = (c + k2) & _MASK32
    _, _, c = _final(a, b, c)
    return c