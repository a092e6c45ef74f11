"""Message (mail) listings and the server's date format."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from freechess.protocol.enums import MailKind
from freechess.protocol.events import MailBlock, MailEntry
from freechess.protocol.fields import InvalidField, optional_int

# Offsets in hours for the zone abbreviations the server prints.
TIMEZONE_OFFSETS: dict[str, float] = {
    "UTC": 0,
    "GMT": 0,
    "BZLFST": -2,
    "BZLFDT": -2,
    "BZLEST": -3,
    "BZLEDT": -2,
    "BZLWST": -4,
    "BZLWDT": -3,
    "BZLAST": -5,
    "BZLADT": -4,
    "CHLEST": -4,
    "CHLEDT": -3,
    "CHLEST_ISLAND": -6,
    "CHLEDT_ISLAND": -5,
    "NST": -3.5,
    "NDT": -2.5,
    "AST": -4,
    "ADT": -3,
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
    "AKST": -9,
    "AKDT": -8,
    "YST": -9,
    "YDT": -8,
    "HST": -10,
    "HAST": -10,
    "HADT": -9,
    "BERSST": -11,
    "CUBCST": -5,
    "CUBCDT": -4,
    "NZST": 12,
    "NZDT": 13,
    "AUSEST": 10,
    "AUSEDT": 11,
    "AUSCST": 9.5,
    "AUSWST": 8,
    "CHNCST": 8,
    "CHNCDT": 9,
    "JST": 9,
    "KST": 9,
    "KDT": 10,
    "SST": 8,
    "HKT": 8,
    "IRNIST": 3.5,
    "IRNIDT": 4.5,
    "IST": 2,
    "IDT": 3,
    "EET": 2,
    "EETDST": 3,
    "BST": 1,
    "MET": 1,
    "METDST": 2,
    "CET": 1,
    "EURCST": 1,
    "WET": 0,
    "WETDST": 1,
}

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

MAIL_HEADER_RE = re.compile(
    r"^(Messages:|Messages from \w+:|Unread messages:"
    r"|The following message was received|The following message was emailed:)[\s\S]+",
    re.MULTILINE,
)
_NUMERIC_OFFSET_RE = re.compile(r"[+-]?\d{1,2}(?:\.\d+)?")
_ENTRY_RE = re.compile(
    r"(?:(\d+)\. )?(\w+) at (\w+) (\w+)\s+(\d+), (\d{2}):(\d{2}) ([\w?]+) (\d+): (.+)"
)


def month_number(name: str) -> int | None:
    """Month 1–12 from a short name such as ``jul``; ``None`` if unknown."""
    clean = name.strip()[:3].capitalize()
    try:
        return _MONTHS.index(clean) + 1
    except ValueError:
        return None


def timezone_offset(name: str, default: float = 0) -> float:
    """Hours from UTC for a zone abbreviation or a plain number."""
    if _NUMERIC_OFFSET_RE.fullmatch(name):
        return float(name)
    return TIMEZONE_OFFSETS.get(name, default)


def parse_server_date(
    *,
    month: str,
    day: str,
    hour: str,
    minute: str,
    zone: str,
    year: str,
    default_offset: float = 0,
) -> datetime | InvalidField:
    """Build an aware :class:`datetime` from the pieces of a server timestamp."""
    raw = f"{month} {day}, {hour}:{minute} {zone} {year}"
    month_no = int(month) if month.isdigit() else month_number(month)
    if month_no is None:
        return InvalidField(raw)
    offset = timedelta(hours=timezone_offset(zone, default_offset))
    try:
        return datetime(
            int(year), month_no, int(day), int(hour), int(minute), tzinfo=timezone(offset)
        )
    except ValueError:
        return InvalidField(raw)


def mail_kind(header: str) -> MailKind:
    if header == "Messages:":
        return MailKind.ALL
    if header == "Unread messages:":
        return MailKind.UNREAD
    if header.startswith("Messages from"):
        return MailKind.SENDER
    return MailKind.ONLINE


def parse_mail_entry(line: str, default_offset: float = 0) -> MailEntry | None:
    match = _ENTRY_RE.search(line)
    if match is None:
        return None
    return MailEntry(
        id=optional_int(match[1]),
        user=match[2],
        sent_at=parse_server_date(
            month=match[4],
            day=match[5],
            hour=match[6],
            minute=match[7],
            zone=match[8],
            year=match[9],
            default_offset=default_offset,
        ),
        text=match[10],
    )


def mail_block_from_match(
    match: re.Match[str], raw: str, default_offset: float = 0
) -> MailBlock:
    """Build a :class:`MailBlock` from a :data:`MAIL_HEADER_RE` match.

    Lines after the header that are not message entries are skipped.
    """
    entries: list[MailEntry] = []
    for line in match[0].split("\n")[1:]:
        entry = parse_mail_entry(line, default_offset)
        if entry is not None:
            entries.append(entry)
    return MailBlock(kind=mail_kind(match[1]), entries=tuple(entries), raw=raw)
