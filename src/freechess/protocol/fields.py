"""Field-level conversions for captured protocol text."""

from __future__ import annotations

from dataclasses import dataclass

_ABSENT = frozenset({"-", "none"})


@dataclass(frozen=True, slots=True)
class InvalidField:
    """A captured value that could not be converted.

    Carried in place of the converted value so one malformed field never
    aborts decoding of the rest of the message.
    """

    raw: str

    def __bool__(self) -> bool:
        return False


def parse_int(text: str) -> int | InvalidField:
    """Parse plain base-10 *text* (optional leading minus) without locale rules."""
    body = text[1:] if text.startswith("-") else text
    if not body or not body.isascii() or not body.isdigit():
        return InvalidField(text)
    return int(text)


def optional_int(text: str | None) -> int | InvalidField | None:
    """Like :func:`parse_int` but maps a missing or absent capture to ``None``."""
    if text is None or text in _ABSENT:
        return None
    return parse_int(text)


def absent(text: str | None) -> str | None:
    """Map ``-``/``none``/empty captures to ``None``."""
    if not text or text in _ABSENT:
        return None
    return text
