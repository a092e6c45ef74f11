"""Decoder for the Free Internet Chess Server text protocol.

Quick start::

    from freechess import Decoder

    decoder = Decoder(send=lambda text, is_command: sock.sendall(...))
    for event in decoder.feed(chunk):
        print(event)
"""

from freechess.protocol import (
    DecodeResult,
    Decoder,
    DecoderState,
    Event,
    ReasonCode,
    decode,
)
from freechess.settings import SessionSettings

__all__ = [
    "DecodeResult",
    "Decoder",
    "DecoderState",
    "Event",
    "ReasonCode",
    "SessionSettings",
    "decode",
]
