"""Pending-offer (pendinfo) and seek (seekinfo) block parsing."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TypeAlias

from freechess.protocol.enums import Direction, IdListKind, OfferTag
from freechess.protocol.fields import InvalidField, absent, optional_int, parse_int

_LOGGER = logging.getLogger(__name__)

TITLE_CODES: dict[int, str] = {
    0x0: "",
    0x1: "U",
    0x2: "C",
    0x4: "GM",
    0x8: "IM",
    0x10: "FM",
    0x20: "WGM",
    0x40: "WIM",
    0x80: "WFM",
}

UNRATED_SEEK = "0P"

OFFER_TAG_RE = re.compile(r"^<(pt|pf|pr|s|sc|sn|sr)>", re.MULTILINE)

_PENDING_RE = re.compile(
    r"^<(pt|pf)> (\d+) w=(\S+) t=(\S+) p=("
    r"(\S+)(?: \(\s*(\S+)\)(?: \[(black|white)\])? (\S+) \(\s*(\S+)\)"
    r" (rated|unrated) (\S+)(?: (\d+) (\d+))?(?: Loaded from (\S+))?"
    r"( \(adjourned\))?)?)"
)
_SEEK_RE = re.compile(
    r"^<(s|sn)> (\d+) w=(\S+) ti=(\d+) rt=(\S+)\s+t=(\d+) i=(\d+) r=(\S+)"
    r" tp=(\S+) c=(\S+) rr=(\S+) a=(\S+) f=(\S+)"
)
_REMOVED_RE = re.compile(r"^<(pr|sr)> (.+)")


@dataclass(frozen=True, slots=True)
class MatchOffer:
    """A pending ``match`` request, seen from our side of the board.

    ``player`` is always us, ``opponent`` the other party, whichever
    direction the offer travels.
    """

    tag: OfferTag
    id: int | InvalidField
    direction: Direction
    counterpart: str
    player: str
    player_rating: str
    opponent: str
    opponent_rating: str
    color: str | None
    rated_unrated: str
    category: str
    initial_time: int | InvalidField | None
    increment: int | InvalidField | None
    adjourned: bool
    params: str


@dataclass(frozen=True, slots=True)
class GenericOffer:
    """Any other pending offer (draw, abort, takeback, partnership...)."""

    tag: OfferTag
    id: int | InvalidField
    direction: Direction
    counterpart: str
    subtype: str
    raw_params: str


@dataclass(frozen=True, slots=True)
class SeekAd:
    tag: OfferTag
    id: int | InvalidField
    user: str
    title: str
    rating: str
    initial_time: int | InvalidField
    increment: int | InvalidField
    rated_unrated: str
    category: str
    color: str
    rating_range: str
    automatic: bool
    formula: bool


@dataclass(frozen=True, slots=True)
class SeekCleared:
    tag: OfferTag = OfferTag.SEEK_CLEARED


@dataclass(frozen=True, slots=True)
class IdList:
    tag: OfferTag
    kind: IdListKind
    ids: tuple[int | InvalidField, ...]


OfferRecord: TypeAlias = MatchOffer | GenericOffer | SeekAd | SeekCleared | IdList


def title_name(code: int | InvalidField) -> str:
    """Resolve a numeric title code; unknown or combined codes give ``""``."""
    if isinstance(code, InvalidField):
        return ""
    return TITLE_CODES.get(code, "")


def parse_id_list(text: str) -> tuple[int | InvalidField, ...]:
    return tuple(parse_int(token) for token in text.split())


def _parse_pending(match: re.Match[str]) -> MatchOffer | GenericOffer:
    tag = OfferTag(match[1])
    direction = Direction.TO if tag == OfferTag.PENDING_TO else Direction.FROM
    subtype = match[4]
    if subtype != "match":
        return GenericOffer(
            tag=tag,
            id=parse_int(match[2]),
            direction=direction,
            counterpart=match[3],
            subtype=subtype,
            raw_params=match[5],
        )

    # The params list the challenger first; swap for offers made to us.
    first, first_rating = match[6] or "", match[7] or ""
    second, second_rating = match[9] or "", match[10] or ""
    if direction == Direction.TO:
        player, player_rating, opponent, opponent_rating = (
            first, first_rating, second, second_rating,
        )
    else:
        player, player_rating, opponent, opponent_rating = (
            second, second_rating, first, first_rating,
        )

    return MatchOffer(
        tag=tag,
        id=parse_int(match[2]),
        direction=direction,
        counterpart=match[3],
        player=player,
        player_rating=player_rating,
        opponent=opponent,
        opponent_rating=opponent_rating,
        color=absent(match[8]),
        rated_unrated=match[11] or "",
        category=match[15] or match[12] or "",
        initial_time=optional_int(match[13]),
        increment=optional_int(match[14]),
        adjourned=bool(match[16]),
        params=match[5],
    )


def _parse_seek(match: re.Match[str]) -> SeekAd:
    rating = match[5]
    return SeekAd(
        tag=OfferTag(match[1]),
        id=parse_int(match[2]),
        user=match[3],
        title=title_name(parse_int(match[4])),
        rating="" if rating == UNRATED_SEEK else rating,
        initial_time=parse_int(match[6]),
        increment=parse_int(match[7]),
        rated_unrated=match[8],
        category=match[9],
        color=match[10],
        rating_range=match[11],
        automatic=match[12] == "t",
        formula=match[13] == "t",
    )


def parse_offer_line(line: str) -> OfferRecord | None:
    """Parse one tagged line, or return ``None`` when it matches no grammar."""
    line = line.strip()

    match = _PENDING_RE.match(line)
    if match is not None:
        return _parse_pending(match)

    if line == "<sc>":
        return SeekCleared()

    match = _SEEK_RE.match(line)
    if match is not None:
        return _parse_seek(match)

    match = _REMOVED_RE.match(line)
    if match is not None:
        tag = OfferTag(match[1])
        kind = (
            IdListKind.PENDING_REMOVED
            if tag == OfferTag.PENDING_REMOVED
            else IdListKind.SEEK_REMOVED
        )
        return IdList(tag=tag, kind=kind, ids=parse_id_list(match[2]))

    return None


def parse_offer_lines(text: str) -> tuple[OfferRecord, ...]:
    """Parse every line of a tagged block, dropping lines that do not parse."""
    offers: list[OfferRecord] = []
    for line in text.split("\n"):
        record = parse_offer_line(line)
        if record is None:
            if line.strip():
                _LOGGER.debug("Dropping unparsed offer line: %r", line)
            continue
        offers.append(record)
    return tuple(offers)
