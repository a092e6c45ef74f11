"""Pre-authentication handshake.

Evaluated for every message until the server announces the session. Each
rule is terminal; a message matching none of them is absorbed silently
while the server is still talking.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import replace
from typing import TYPE_CHECKING

from freechess.protocol.enums import LoginPromptKind
from freechess.protocol.events import Event, LoginPrompt, LoginResult, PlainText

if TYPE_CHECKING:
    from freechess.protocol.decoder import DecoderState

_LOGGER = logging.getLogger(__name__)

SendCallback = Callable[[str, bool], None]

_NAME_TOO_LONG_RE = re.compile(
    r"Sorry, names may be at most 17 characters long\.\s+Try again\.", re.MULTILINE
)
_NAME_INVALID_RE = re.compile(
    r"Sorry, names can only consist of lower and upper case letters\.\s+Try again\.",
    re.MULTILINE,
)
_LOGIN_RE = re.compile(r"login:")
_GUEST_RE = re.compile(r"Press return to enter the server as")
_PASSWORD_RE = re.compile(r"password:")
_SESSION_START_RE = re.compile(
    r"\*\*\*\* Starting FICS session as ([a-zA-Z]+)(?:\(.*\))? \*\*\*\*"
)
_INVALID_PASSWORD_RE = re.compile(r"\*\*\*\* Invalid password! \*\*\*\*.*")


def login_step(
    state: DecoderState, msg: str, send: SendCallback
) -> tuple[DecoderState, tuple[Event, ...]]:
    """Advance the handshake by one server message."""
    msg = msg.replace("\ufffd", "")

    match = _NAME_TOO_LONG_RE.search(msg) or _NAME_INVALID_RE.search(msg)
    if match is not None:
        return state, (LoginPrompt(LoginPromptKind.ERROR, match[0]),)

    if _LOGIN_RE.search(msg):
        _LOGGER.debug("Login prompt; sending username %s", state.username)
        send(state.username, False)
        return replace(state, registered=False), ()

    if _GUEST_RE.search(msg):
        _LOGGER.debug("Entering as guest")
        send("", False)
        return replace(state, pending_password=""), ()

    if _PASSWORD_RE.search(msg):
        if not state.pending_password:
            text = _PASSWORD_RE.sub("", msg)
            return state, (LoginPrompt(LoginPromptKind.NEED_PASSWORD, text),)
        send(state.pending_password, False)
        return replace(state, registered=True), ()

    match = _SESSION_START_RE.search(msg)
    if match is not None:
        username = match[1]
        _LOGGER.info("Logged in as %s", username)
        new_state = replace(state, authenticated=True, username=username)
        return new_state, (LoginResult(ok=True, username=username), PlainText(msg))

    if _INVALID_PASSWORD_RE.search(msg):
        _LOGGER.info("Login rejected: invalid password")
        return state, (LoginResult(ok=False, error_text=msg),)

    return state, ()
