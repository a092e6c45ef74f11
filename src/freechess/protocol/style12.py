"""Style-12 board lines: FEN conversion and previous-move decoding."""

from __future__ import annotations

import re
from collections.abc import Sequence

from freechess.protocol.events import BoardUpdate, MoveTiming, VerboseMove
from freechess.protocol.fields import parse_int
from freechess.protocol.squares import back_rank, file_letter

_PIECE_CHARS = frozenset("rnbqkpRNBQKP")
_RANK = r"([rnbqkpRNBQKP\-]{8})"

STYLE12_RE = re.compile(
    r"(?:^|\n)<12>\s"
    + r"\s".join([_RANK] * 8)
    + r"\s([BW\-])"  # 9 side to move
    r"\s(\-?[0-7])"  # 10 double pawn push file
    r"\s([01])\s([01])\s([01])\s([01])"  # 11-14 castling K Q k q
    r"\s([0-9]+)"  # 15 half-move clock
    r"\s([0-9]+)"  # 16 game number
    r"\s(\S+)\s(\S+)"  # 17-18 white, black
    r"\s(\-?[0-3])"  # 19 my relation to this game
    r"\s([0-9]+)\s([0-9]+)"  # 20-21 initial time, increment
    r"\s([0-9]+)\s([0-9]+)"  # 22-23 material strength
    r"\s(\-?[0-9]+)\s(\-?[0-9]+)"  # 24-25 remaining time
    r"\s([0-9]+)"  # 26 move number
    r"\s(\S+)"  # 27 verbose previous move
    r"\s\(([0-9]+):([0-9]+)\.([0-9]+)\)"  # 28-30 time taken
    r"\s(\S+)"  # 31 pretty previous move
    r"\s([01])"  # 32 flip
    r"\s([0-9]+)"  # 33 clock ticking
    r"\s([0-9]+)\s*"  # 34 lag
)

_VERBOSE_MOVE_RE = re.compile(r"(\S+)/(\S{2})-(\S{2})=?(\S?)")

NO_MOVE = "none"


def rank_to_fen(rank: str) -> str:
    """Run-length encode one 8-character style-12 rank, e.g. ``--p----P`` → ``2p4P``."""
    if len(rank) != 8:
        raise ValueError(f"Invalid style-12 rank (need 8 squares): {rank!r}")
    row = ""
    empty = 0
    for ch in rank:
        if ch == "-":
            empty += 1
            continue
        if ch not in _PIECE_CHARS:
            raise ValueError(f"Invalid style-12 square {ch!r}: {rank!r}")
        if empty:
            row += str(empty)
            empty = 0
        row += ch
    if empty:
        row += str(empty)
    return row


def castling_field(
    white_short: bool, white_long: bool, black_short: bool, black_long: bool
) -> str:
    """FEN castling field, always in ``KQkq`` order or ``-``."""
    castling = ""
    if white_short:
        castling += "K"
    if white_long:
        castling += "Q"
    if black_short:
        castling += "k"
    if black_long:
        castling += "q"
    return castling or "-"


def en_passant_field(push_file: int, side_to_move: str) -> str:
    """Target square behind a double pawn push on *push_file* (−1 for none)."""
    if not 0 <= push_file < 8:
        return "-"
    # White to move means Black just pushed, so the target sits on rank 6.
    return file_letter(push_file) + ("6" if side_to_move == "W" else "3")


def board_to_fen(
    ranks: Sequence[str],
    side_to_move: str,
    castling: tuple[bool, bool, bool, bool],
    push_file: int,
    halfmove_clock: str,
    fullmove_number: str,
    pretty_move: str,
) -> str:
    """Assemble a FEN string from style-12 fields.

    *ranks* run from rank 8 down to rank 1. The half-move clock is reported
    as 1 on some first positions with Black to move, so it is forced to 0
    whenever there is no previous move.
    """
    if len(ranks) != 8:
        raise ValueError(f"Invalid style-12 board (need 8 ranks): {len(ranks)}")
    board_str = "/".join(rank_to_fen(rank) for rank in ranks)
    halfmove = "0" if pretty_move == NO_MOVE else halfmove_clock
    return (
        f"{board_str} {side_to_move.lower()} {castling_field(*castling)}"
        f" {en_passant_field(push_file, side_to_move)} {halfmove} {fullmove_number}"
    )


def decode_verbose_move(
    verbose: str, pretty: str, side_to_move: str
) -> VerboseMove | None:
    """Decode the previous move from ``P/e2-e4``-style text.

    Castling is reported without coordinates, so ``O-O``/``O-O-O`` are
    rebuilt as a king move on the back rank of the side that just moved.
    """
    match = _VERBOSE_MOVE_RE.search(verbose)
    if match is not None:
        piece, origin, target, promotion = match.groups()
        return VerboseMove(
            piece=piece.lower(),
            from_square=None if origin == "@@" else origin,
            to_square=target,
            promotion=promotion.lower() or None,
            san=pretty,
        )

    if pretty in ("O-O", "O-O-O"):
        rank = back_rank(white=side_to_move != "W")
        target_file = "g" if pretty == "O-O" else "c"
        return VerboseMove(
            piece="k",
            from_square=f"e{rank}",
            to_square=f"{target_file}{rank}",
            promotion=None,
            san=pretty,
        )
    return None


def board_update_from_match(match: re.Match[str]) -> BoardUpdate:
    """Build a :class:`BoardUpdate` from a :data:`STYLE12_RE` match."""
    g = match.groups()
    ranks = g[0:8]
    side = g[8]
    push_file = int(g[9])
    castling = (g[10] == "1", g[11] == "1", g[12] == "1", g[13] == "1")
    pretty = g[30]

    fen = board_to_fen(ranks, side, castling, push_file, g[14], g[25], pretty)

    return BoardUpdate(
        fen=fen,
        turn=None if side == "-" else side.lower(),
        game_id=parse_int(g[15]),
        white_name=g[16],
        black_name=g[17],
        role=parse_int(g[18]),
        initial_time=parse_int(g[19]),
        increment=parse_int(g[20]),
        white_strength=parse_int(g[21]),
        black_strength=parse_int(g[22]),
        white_time=parse_int(g[23]),
        black_time=parse_int(g[24]),
        move_no=parse_int(g[25]),
        verbose_move=decode_verbose_move(g[26], pretty, side),
        prev_move_time=MoveTiming(
            minutes=parse_int(g[27]),
            seconds=parse_int(g[28]),
            milliseconds=parse_int(g[29]),
        ),
        pretty_move=pretty,
        flip=g[31] == "1",
        clock_ticking=g[32] != "0",
        lag_ms=parse_int(g[33]),
    )
