"""Qt bridge that decodes server chunks and republishes them as signals."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from freechess.protocol import timeseal
from freechess.protocol.decoder import Decoder
from freechess.protocol.events import LoginResult
from freechess.settings import SessionSettings

_LOGGER = logging.getLogger(__name__)


class SessionWorker(QObject):
    """Thread-affine worker owning the decoder of one connection.

    The transport feeds received chunks into :meth:`feed` and writes every
    ``outbound`` payload to the socket unchanged.
    """

    event_decoded = pyqtSignal(object)
    outbound = pyqtSignal(object)
    logged_in = pyqtSignal(str)
    login_failed = pyqtSignal(str)
    decode_error = pyqtSignal(str)

    __slots__ = ("_decoder", "_settings")

    def __init__(self, settings: SessionSettings | None = None) -> None:
        super().__init__()
        self._settings = settings or SessionSettings()
        self._decoder = Decoder.from_settings(self._settings, self._send)

    def _encode(self, text: str) -> bytes:
        if self._settings.timeseal:
            return timeseal.encode(text)
        return (text + "\n").encode("latin-1", errors="replace")

    def _send(self, text: str, is_command: bool) -> None:
        del is_command
        self.outbound.emit(self._encode(text))

    @property
    def decoder(self) -> Decoder:
        return self._decoder

    @pyqtSlot()
    def connected(self) -> None:
        """Greet the server once the socket is open."""
        if self._settings.timeseal:
            self.outbound.emit(self._encode(timeseal.TIMESEAL_HELLO))

    @pyqtSlot(object)
    def feed(self, data: object) -> None:
        """Decode one received chunk (``str`` or ``bytes``) and emit its events."""
        if not isinstance(data, (str, bytes, bytearray)):
            self.decode_error.emit(f"Cannot decode {type(data).__name__} chunk")
            return

        try:
            result = self._decoder.feed(data)
        except Exception as exc:
            _LOGGER.exception("Failed to decode server chunk")
            self.decode_error.emit(str(exc))
            return

        for event in result:
            if isinstance(event, LoginResult):
                if event.ok:
                    self.logged_in.emit(event.username or "")
                else:
                    self.login_failed.emit(event.error_text or "")
            self.event_decoded.emit(event)

    @pyqtSlot(str)
    def send_command(self, command: str) -> None:
        """Send a user command to the server."""
        self._send(command, True)

    @pyqtSlot(str)
    def submit_password(self, password: str) -> None:
        self._decoder.submit_password(password)

    @pyqtSlot()
    def reset(self) -> None:
        """Forget the login state before reconnecting."""
        self._decoder.reset()
