"""Chunk decoding: normalisation, message splitting and dispatch.

``decode`` is a pure transition ``(state, chunk) -> (state, result)``; the
only side effect is the *send* callback, invoked to echo login credentials
and to answer keep-alive pings. :class:`Decoder` keeps the state for one
connection.

Quick start::

    decoder = Decoder(transport.send, username="guest")
    for event in decoder.feed(chunk):
        handle(event)
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from freechess.protocol.classifier import ClassifierContext, classify
from freechess.protocol.events import Event
from freechess.protocol.login import SendCallback, login_step
from freechess.protocol.timeseal import KEEPALIVE_MARKER, KEEPALIVE_REPLY

if TYPE_CHECKING:
    from freechess.settings import SessionSettings

_LOGGER = logging.getLogger(__name__)

MESSAGE_SEPARATOR = "fics%"

_NOISE_RE = re.compile(r"[\x07\x00\x01]|\\   |\r")


class DecoderStateError(RuntimeError):
    """The decoder state violates an internal invariant (programmer error)."""


@dataclass(frozen=True, slots=True)
class DecoderState:
    """Per-connection handshake state."""

    authenticated: bool = False
    username: str = "guest"
    pending_password: str = ""
    registered: bool = False


@dataclass(frozen=True, slots=True)
class DecodeResult:
    """Events decoded from one chunk, in arrival order.

    A chunk decodes to nothing (absorbed by the handshake, or blank), to one
    event, or to several; all three are the same shape here.
    """

    events: tuple[Event, ...] = ()

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)

    def __bool__(self) -> bool:
        return bool(self.events)

    @property
    def single(self) -> Event | None:
        """The event when exactly one was decoded, else ``None``."""
        return self.events[0] if len(self.events) == 1 else None


def _to_text(data: str | bytes | bytearray) -> str:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("latin-1")
    return data


def _clean(msg: str, send: SendCallback) -> str:
    pings = msg.count(KEEPALIVE_MARKER)
    if pings:
        _LOGGER.debug("Answering %d keep-alive ping(s)", pings)
        for _ in range(pings):
            send(KEEPALIVE_REPLY, False)
        msg = msg.replace(KEEPALIVE_MARKER, "")
    return _NOISE_RE.sub("", msg).strip()


def _decode_text(
    state: DecoderState, msg: str, send: SendCallback, default_timezone: float
) -> tuple[DecoderState, tuple[Event, ...]]:
    if not msg:
        return state, ()

    msg = _clean(msg, send)

    # The server packs several replies into one delivery, each ending in a prompt.
    pieces = [piece for piece in msg.split(MESSAGE_SEPARATOR) if piece]
    if len(pieces) > 1:
        events: list[Event] = []
        for piece in pieces:
            state, part = _decode_text(state, piece, send, default_timezone)
            events.extend(part)
        return state, tuple(events)

    msg = msg.replace(MESSAGE_SEPARATOR, "").strip()
    if not msg:
        return state, ()

    if not state.authenticated:
        return login_step(state, msg, send)

    if not state.username:
        raise DecoderStateError("Authenticated session has no username")

    def redecode(text: str) -> tuple[Event, ...]:
        return _decode_text(state, text, send, default_timezone)[1]

    context = ClassifierContext(redecode=redecode, default_timezone=default_timezone)
    return state, classify(msg, context)


def decode(
    state: DecoderState,
    data: str | bytes | bytearray,
    send: SendCallback,
    *,
    default_timezone: float = 0,
) -> tuple[DecoderState, DecodeResult]:
    """Decode one chunk received from the server.

    *data* may be text or raw bytes (decoded as Latin-1). *default_timezone*
    is the offset in hours used for mail dates whose zone is unknown.
    """
    new_state, events = _decode_text(state, _to_text(data), send, default_timezone)
    return new_state, DecodeResult(events)


class Decoder:
    """Stateful wrapper around :func:`decode` for a single connection."""

    __slots__ = ("_initial", "_state", "_send", "_default_timezone")

    def __init__(
        self,
        send: SendCallback,
        username: str = "guest",
        password: str = "",
        *,
        default_timezone: float = 0,
    ) -> None:
        self._initial = DecoderState(username=username, pending_password=password)
        self._state = self._initial
        self._send = send
        self._default_timezone = default_timezone

    @classmethod
    def from_settings(cls, settings: SessionSettings, send: SendCallback) -> Decoder:
        return cls(
            send,
            settings.username,
            settings.password,
            default_timezone=settings.default_timezone,
        )

    @property
    def state(self) -> DecoderState:
        return self._state

    def feed(self, data: str | bytes | bytearray) -> DecodeResult:
        """Decode *data* and advance the connection state."""
        self._state, result = decode(
            self._state, data, self._send, default_timezone=self._default_timezone
        )
        return result

    def submit_password(self, password: str) -> None:
        """Answer a ``NEED_PASSWORD`` prompt."""
        if self._state.authenticated:
            raise DecoderStateError("Password submitted after login completed")
        self._state = replace(self._state, pending_password=password, registered=True)
        self._send(password, False)

    def reset(self) -> None:
        """Forget the handshake, e.g. before reconnecting."""
        self._state = self._initial
