"""Square naming helpers.

Files are indexed 0–7 (a–h) and ranks 1–8, the way the server reports them.
"""

from __future__ import annotations

FILES = "abcdefgh"


def file_letter(index: int) -> str:
    """File letter for index 0–7, e.g. 4 → 'e'."""
    if not 0 <= index < 8:
        raise ValueError(f"Invalid file index: {index!r}")
    return FILES[index]


def back_rank(white: bool) -> int:
    """Home rank of a side: 1 for White, 8 for Black."""
    return 1 if white else 8
