"""Timeseal v1 outbound encoding.

Every line the client sends is scrambled together with a millisecond
timestamp so the server can compensate for network lag. The server also
pings the client with ``[G]\\0``, which must be answered with
:data:`KEEPALIVE_REPLY`.
"""

from __future__ import annotations

import time

TIMESEAL_HELLO = "TIMESEAL2|freeseal|icsgo|"
KEEPALIVE_MARKER = "[G]\0"
KEEPALIVE_REPLY = "\x02\x39"

_KEY = b"Timestamp (FICS) v1.0 - programmed by Henrik Gram."
_BLOCK = 12
_SWAPS = ((0, 11), (2, 9), (4, 7))


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def encode(command: str, timestamp_ms: int | None = None) -> bytes:
    """Scramble *command* into a timeseal frame terminated by ``0x80 0x0a``."""
    if timestamp_ms is None:
        timestamp_ms = _timestamp_ms()
    # Only the low 10 000 seconds of the clock are transmitted.
    stamp = (timestamp_ms // 1000 % 10000) * 1000 + timestamp_ms % 1000

    buf = bytearray(command.encode("latin-1", errors="replace"))
    buf.append(0x18)
    buf.extend(str(stamp).encode("ascii"))
    buf.append(0x19)
    while len(buf) % _BLOCK:
        buf.append(0x31)

    for start in range(0, len(buf), _BLOCK):
        for a, b in _SWAPS:
            buf[start + a], buf[start + b] = buf[start + b], buf[start + a]

    for idx, value in enumerate(buf):
        buf[idx] = (((value | 0x80) ^ _KEY[idx % len(_KEY)]) - 32) & 0xFF

    buf.extend(b"\x80\x0a")
    return bytes(buf)
