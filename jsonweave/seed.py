"""Process-wide seed for object key hashing."""

from __future__ import annotations

import os
import threading
import time

_MASK32 = 0xFFFFFFFF

_lock = threading.Lock()
_seed = 0


def _seed_from_urandom() -> int:
    return int.from_bytes(os.urandom(4), "big")


def _seed_from_timestamp_and_pid() -> int:
    now = time.time()
    seconds = int(now) & _MASK32
    microseconds = int((now - int(now)) * 1_000_000) & _MASK32
    return (seconds ^ microseconds ^ os.getpid()) & _MASK32


def generate_seed() -> int:
    """Return a fresh non-zero 32-bit seed, as random as the system allows."""
    try:
        seed = _seed_from_urandom()
    except (NotImplementedError, OSError):
        seed = _seed_from_timestamp_and_pid()
    return seed or 1


def object_seed(seed: int = 0) -> None:
    """Set the hash seed once; zero asks for a generated one.

    Later calls have no effect until the seed is reset.
    """
    global _seed
    with _lock:
        if _seed != 0:
            return
        new_seed = seed & _MASK32
        if new_seed == 0:
            new_seed = generate_seed()
        _seed = new_seed


def current_seed() -> int:
    """Return the hash seed, generating one first if none is set yet."""
    if _seed == 0:
        object_seed(0)
    return _seed


def reset_seed() -> None:
    """Forget the current seed so that the next call to object_seed applies."""
    global _seed
    with _lock:
        _seed = 0