"""Typed events produced by the decoder.

Every decoded message becomes one of the frozen dataclasses below; the
:data:`Event` alias is the union of all of them. Consumers dispatch on the
class (``match event: case BoardUpdate(): ...``).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias

from freechess.protocol.enums import (
    GameResult,
    LoginPromptKind,
    MailKind,
    ReasonCode,
    UtteranceKind,
)
from freechess.protocol.fields import InvalidField
from freechess.protocol.results import game_result_from_score

if TYPE_CHECKING:
    from freechess.protocol.offers import OfferRecord

# ── Login ────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class LoginPrompt:
    """The handshake needs input from the user (or rejected the last input)."""

    kind: LoginPromptKind
    text: str


@dataclass(frozen=True, slots=True)
class LoginResult:
    ok: bool
    username: str | None = None
    error_text: str | None = None


# ── Games ────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class VerboseMove:
    """The previous move as coordinates, ready for SAN reconstruction."""

    piece: str
    from_square: str | None
    to_square: str
    promotion: str | None
    san: str

    @property
    def is_drop(self) -> bool:
        """True for crazyhouse/bughouse piece drops (no origin square)."""
        return self.from_square is None

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation, ``P@e4`` style for drops."""
        if self.from_square is None:
            return f"{self.piece.upper()}@{self.to_square}"
        return f"{self.from_square}{self.to_square}{self.promotion or ''}"


@dataclass(frozen=True, slots=True)
class MoveTiming:
    """Time taken for the previous move, as "(min:sec.ms)"."""

    minutes: int | InvalidField
    seconds: int | InvalidField
    milliseconds: int | InvalidField


@dataclass(frozen=True, slots=True)
class BoardUpdate:
    """A style-12 board line converted to FEN plus its auxiliary fields."""

    fen: str
    turn: str | None
    game_id: int | InvalidField
    white_name: str
    black_name: str
    role: int | InvalidField
    initial_time: int | InvalidField
    increment: int | InvalidField
    white_strength: int | InvalidField
    black_strength: int | InvalidField
    white_time: int | InvalidField
    black_time: int | InvalidField
    move_no: int | InvalidField
    verbose_move: VerboseMove | None
    prev_move_time: MoveTiming
    pretty_move: str
    flip: bool
    clock_ticking: bool = False
    lag_ms: int | InvalidField = 0


@dataclass(frozen=True, slots=True)
class HoldingsUpdate:
    """Pieces in hand for crazyhouse/bughouse games.

    *holdings* is stored as a read-only view and left out of the hash.
    """

    game_id: int | InvalidField
    holdings: Mapping[str, int] = field(hash=False)
    new_piece: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "holdings", MappingProxyType(dict(self.holdings)))


@dataclass(frozen=True, slots=True)
class GameStart:
    game_id: int | InvalidField
    player_a: str
    player_b: str


@dataclass(frozen=True, slots=True)
class GameEnd:
    game_id: int | InvalidField
    winner: str
    loser: str
    reason: ReasonCode
    score: str
    raw: str

    @property
    def result(self) -> GameResult:
        return game_result_from_score(self.score)


# ── Chat ─────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ChannelTell:
    channel: int | InvalidField
    user: str
    text: str


@dataclass(frozen=True, slots=True)
class PrivateTell:
    user: str
    text: str


@dataclass(frozen=True, slots=True)
class RoomUtterance:
    """Kibitz or whisper attached to a game."""

    channel: str
    user: str
    kind: UtteranceKind
    text: str
    suffix: str | None = None


# ── Mail ─────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MailEntry:
    id: int | InvalidField | None
    user: str
    sent_at: datetime | InvalidField
    text: str


@dataclass(frozen=True, slots=True)
class MailBlock:
    kind: MailKind
    entries: tuple[MailEntry, ...]
    raw: str


# ── Offers / seeks ───────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class OfferBlock:
    offers: tuple[OfferRecord, ...]


@dataclass(frozen=True, slots=True)
class SeekRemoved:
    """One or all of our seeks were withdrawn (empty ``ids`` means all)."""

    ids: tuple[int | InvalidField, ...]
    raw: str


# ── Fallback ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PlainText:
    text: str


Event: TypeAlias = (
    LoginPrompt
    | LoginResult
    | BoardUpdate
    | HoldingsUpdate
    | GameStart
    | GameEnd
    | ChannelTell
    | PrivateTell
    | RoomUtterance
    | MailBlock
    | OfferBlock
    | SeekRemoved
    | PlainText
)
