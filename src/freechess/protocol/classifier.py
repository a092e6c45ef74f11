"""Message classification for authenticated sessions.

Rules are tried top to bottom and the first match wins. A rule's builder may
hand text back to the decoder (``context.redecode``) when a match turns out
to cover several packed messages.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from freechess.protocol.enums import UtteranceKind
from freechess.protocol.events import (
    ChannelTell,
    Event,
    GameEnd,
    GameStart,
    HoldingsUpdate,
    OfferBlock,
    PlainText,
    PrivateTell,
    RoomUtterance,
    SeekRemoved,
)
from freechess.protocol.fields import parse_int
from freechess.protocol.mail import MAIL_HEADER_RE, mail_block_from_match
from freechess.protocol.offers import OFFER_TAG_RE, parse_id_list, parse_offer_lines
from freechess.protocol.results import classify_game_result
from freechess.protocol.style12 import STYLE12_RE, board_update_from_match

Events = tuple[Event, ...]


@dataclass(frozen=True, slots=True)
class ClassifierContext:
    """What rules need from the decoder that owns them."""

    redecode: Callable[[str], Events]
    default_timezone: float = 0


Builder = Callable[[re.Match[str], str, ClassifierContext], Events]


@dataclass(frozen=True, slots=True)
class Rule:
    name: str
    pattern: re.Pattern[str]
    build: Builder


_HELP_FILE_RE = re.compile(r"^\[?Last Modified", re.MULTILINE)

_HOLDINGS_RE = re.compile(
    r"^<b1> game (\d+) white \[(\w*)\] black \[(\w*)\](?: <- (\w+))?", re.MULTILINE
)
_GAME_START_RE = re.compile(
    r"(?:^|\n)\s*\{Game\s([0-9]+)\s\(([a-zA-Z]+)\svs\.\s([a-zA-Z]+)\)"
    r"\s(?:Creating|Continuing)[^}]*\}.*",
    re.DOTALL,
)
_GAME_END_RE = re.compile(
    r"(?:^|\n)[^():]*(?:Game\s[0-9]+:.*)?\{Game\s([0-9]+)\s\(([a-zA-Z]+)\svs\.\s([a-zA-Z]+)\)"
    r"\s([a-zA-Z]+)(?:' game|'s)?\s([^}]+)\}\s(\*|[012/]+-[012/]+).*",
    re.DOTALL,
)
_CHANNEL_TELL_RE = re.compile(r"(?:^|\n)([a-zA-Z]+)(?:\([A-Z*]+\))*\(([0-9]+)\):\s+(.*)")
_PRIVATE_TELL_RE = re.compile(
    r"(?:^|\n)([a-zA-Z]+)(?:[(\[][A-Z0-9*\-]+[)\]])* (?:tells you|says):\s+(.*)"
)
_UTTERANCE_RE = re.compile(
    r"(?:^|\n)([a-zA-Z]+)(?:\([A-Z0-9*\-]+\))*\[([0-9]+)\] (kibitzes|whispers):\s+(.*)"
    r"(?:\n(.+))?"
)
_ALL_SEEKS_REMOVED_RE = re.compile(r"^Your seeks have been removed\.", re.MULTILINE)
_SEEK_REMOVED_RE = re.compile(r"^Your seek (\d+) has been removed\.", re.MULTILINE)

_HOLDING_PIECES = "PRBNQK"


def _split_lines(msg: str, context: ClassifierContext) -> Events | None:
    """Re-decode *msg* line by line when it holds more than one line."""
    lines = [line for line in msg.split("\n") if line]
    if len(lines) < 2:
        return None
    return _flatten(context.redecode(line) for line in lines)


def _flatten(parts: Iterable[Events]) -> Events:
    return tuple(event for part in parts for event in part)


# ── Builders ─────────────────────────────────────────────────────────────────


def _board_update(match: re.Match[str], msg: str, context: ClassifierContext) -> Events:
    split = _split_lines(msg, context)
    if split is not None:
        return split
    return (board_update_from_match(match),)


def _holdings(match: re.Match[str], msg: str, context: ClassifierContext) -> Events:
    holdings = {piece: 0 for piece in _HOLDING_PIECES + _HOLDING_PIECES.lower()}
    for piece in match[2]:
        key = piece.upper()
        if key in holdings:
            holdings[key] += 1
    for piece in match[3]:
        key = piece.lower()
        if key in holdings:
            holdings[key] += 1
    return (
        HoldingsUpdate(game_id=parse_int(match[1]), holdings=holdings, new_piece=match[4]),
    )


def _game_start(match: re.Match[str], msg: str, context: ClassifierContext) -> Events:
    return (GameStart(game_id=parse_int(match[1]), player_a=match[2], player_b=match[3]),)


def _game_end(match: re.Match[str], msg: str, context: ClassifierContext) -> Events:
    split = _split_lines(msg, context)
    if split is not None:
        return split
    player_a, player_b = match[2], match[3]
    winner, loser, reason = classify_game_result(player_a, player_b, match[4], match[5])
    return (
        GameEnd(
            game_id=parse_int(match[1]),
            winner=winner,
            loser=loser,
            reason=reason,
            score=match[6],
            raw=msg,
        ),
    )


def _channel_tell(match: re.Match[str], msg: str, context: ClassifierContext) -> Events:
    return (ChannelTell(channel=parse_int(match[2]), user=match[1], text=match[3]),)


def _private_tell(match: re.Match[str], msg: str, context: ClassifierContext) -> Events:
    return (PrivateTell(user=match[1], text=match[2]),)


def _utterance(match: re.Match[str], msg: str, context: ClassifierContext) -> Events:
    kind = UtteranceKind.KIBITZ if match[3] == "kibitzes" else UtteranceKind.WHISPER
    return (
        RoomUtterance(
            channel=f"Game {match[2]}",
            user=match[1],
            kind=kind,
            text=match[4].replace("\n", ""),
            suffix=match[5],
        ),
    )


def _mail(match: re.Match[str], msg: str, context: ClassifierContext) -> Events:
    return (mail_block_from_match(match, msg, context.default_timezone),)


def _offer_block(match: re.Match[str], msg: str, context: ClassifierContext) -> Events:
    plain = msg[: match.start()].strip()
    if plain:
        return context.redecode(plain) + context.redecode(msg[match.start() :])
    return (OfferBlock(offers=parse_offer_lines(msg)),)


def _all_seeks_removed(
    match: re.Match[str], msg: str, context: ClassifierContext
) -> Events:
    return (SeekRemoved(ids=(), raw=msg),)


def _seek_removed(match: re.Match[str], msg: str, context: ClassifierContext) -> Events:
    return (SeekRemoved(ids=parse_id_list(match[1]), raw=msg),)


RULES: tuple[Rule, ...] = (
    Rule("board_update", STYLE12_RE, _board_update),
    Rule("holdings", _HOLDINGS_RE, _holdings),
    Rule("game_start", _GAME_START_RE, _game_start),
    Rule("game_end", _GAME_END_RE, _game_end),
    Rule("channel_tell", _CHANNEL_TELL_RE, _channel_tell),
    Rule("private_tell", _PRIVATE_TELL_RE, _private_tell),
    Rule("utterance", _UTTERANCE_RE, _utterance),
    Rule("mail", MAIL_HEADER_RE, _mail),
)

# Only consulted once nothing in RULES matched.
FALLBACK_RULES: tuple[Rule, ...] = (
    Rule("offer_block", OFFER_TAG_RE, _offer_block),
    Rule("all_seeks_removed", _ALL_SEEKS_REMOVED_RE, _all_seeks_removed),
    Rule("seek_removed", _SEEK_REMOVED_RE, _seek_removed),
)


def match_rule(msg: str) -> tuple[Rule, re.Match[str]] | None:
    """Return the first rule matching *msg* together with its match."""
    for rule in RULES + FALLBACK_RULES:
        match = rule.pattern.search(msg)
        if match is not None:
            return rule, match
    return None


def classify(msg: str, context: ClassifierContext) -> Events:
    """Turn one cleaned, non-empty message into events; never raises on content."""
    if _HELP_FILE_RE.search(msg):
        return (PlainText(msg),)

    found = match_rule(msg)
    if found is None:
        return (PlainText(msg),)
    rule, match = found
    return rule.build(match, msg, context)
