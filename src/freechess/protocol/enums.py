"""Enumerations shared by the protocol layer."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class ReasonCode(IntEnum):
    """Why a game ended."""

    UNKNOWN = 0
    RESIGN = 1
    DISCONNECT = 2
    CHECKMATE = 3
    TIME_FORFEIT = 4
    DRAW = 5
    ADJOURN = 6
    ABORT = 7
    PARTNER_WON = 8


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3


class LoginPromptKind(StrEnum):
    """Prompts the login handshake surfaces to the caller."""

    ERROR = "error"
    NEED_PASSWORD = "need_password"


class UtteranceKind(StrEnum):
    """In-game chat flavours."""

    KIBITZ = "kibitz"
    WHISPER = "whisper"


class MailKind(StrEnum):
    """Which listing a mail block came from."""

    ALL = "all"
    UNREAD = "unread"
    SENDER = "sender"
    ONLINE = "online"


class OfferTag(StrEnum):
    """Tag tokens of pendinfo/seekinfo lines."""

    PENDING_TO = "pt"
    PENDING_FROM = "pf"
    PENDING_REMOVED = "pr"
    SEEK = "s"
    SEEK_CLEARED = "sc"
    SEEK_NEW = "sn"
    SEEK_REMOVED = "sr"


class Direction(StrEnum):
    """Whether a pending offer was sent by us or to us."""

    TO = "to"
    FROM = "from"


class IdListKind(StrEnum):
    """What a list of removed ids refers to."""

    PENDING_REMOVED = "pending_removed"
    SEEK_REMOVED = "seek_removed"
