"""Tests for style-12 board decoding."""

import itertools

import pytest

from freechess.protocol.style12 import (
    STYLE12_RE,
    board_to_fen,
    board_update_from_match,
    castling_field,
    decode_verbose_move,
    en_passant_field,
    rank_to_fen,
)

AFTER_E4 = (
    "<12> rnbqkbnr pppppppp -------- -------- ----P--- -------- PPPP-PPP RNBQKBNR"
    " B 4 1 1 1 1 0 7 Newton Einstein 1 2 12 39 39 119 122 1 P/e2-e4 (0:06.120) e4 1 1 35"
)
BLACK_STARTS = (
    "<12> rnbqkbnr pppppppp -------- -------- -------- -------- PPPPPPPP RNBQKBNR"
    " B -1 1 1 1 1 1 5 alice bob -1 3 0 39 39 180000 180000 1 none (0:00.000) none 0 0 0"
)
WHITE_CASTLED = (
    "<12> r---k--r pppppppp -------- -------- -------- -------- PPPPPPPP RNBQ-RK-"
    " B -1 0 0 1 1 1 9 alice bob 0 5 0 30 30 200 210 8 o-o (0:02.500) O-O 0 1 0"
)


def _expand(fen_rank: str) -> str:
    return "".join("-" * int(ch) if ch.isdigit() else ch for ch in fen_rank)


class TestRankToFen:
    def test_full_rank(self) -> None:
        assert rank_to_fen("rnbqkbnr") == "rnbqkbnr"

    def test_empty_rank(self) -> None:
        assert rank_to_fen("--------") == "8"

    def test_trailing_run_at_last_file(self) -> None:
        assert rank_to_fen("pppp----") == "pppp4"
        assert rank_to_fen("-------k") == "7k"
        assert rank_to_fen("ppppppp-") == "ppppppp1"

    def test_runs_between_pieces(self) -> None:
        assert rank_to_fen("--p----P") == "2p4P"

    def test_expanding_restores_rank(self) -> None:
        for pattern in itertools.product("-p", repeat=8):
            rank = "".join(pattern)
            assert _expand(rank_to_fen(rank)) == rank

    def test_wrong_width_raises(self) -> None:
        with pytest.raises(ValueError, match="8 squares"):
            rank_to_fen("-------")

    def test_invalid_square_raises(self) -> None:
        with pytest.raises(ValueError, match="square"):
            rank_to_fen("-------x")


class TestCastlingField:
    def test_none(self) -> None:
        assert castling_field(False, False, False, False) == "-"

    def test_all(self) -> None:
        assert castling_field(True, True, True, True) == "KQkq"

    def test_order_is_fixed(self) -> None:
        for flags in itertools.product((False, True), repeat=4):
            field = castling_field(*flags)
            if field == "-":
                assert not any(flags)
                continue
            expected = "".join(ch for ch, on in zip("KQkq", flags) if on)
            assert field == expected


class TestEnPassantField:
    def test_no_push(self) -> None:
        assert en_passant_field(-1, "W") == "-"

    def test_white_pushed(self) -> None:
        assert en_passant_field(4, "B") == "e3"

    def test_black_pushed(self) -> None:
        assert en_passant_field(3, "W") == "d6"

    def test_out_of_range_is_no_square(self) -> None:
        assert en_passant_field(-5, "W") == "-"


class TestBoardToFen:
    def test_halfmove_forced_to_zero_without_previous_move(self) -> None:
        ranks = ("rnbqkbnr", "pppppppp", "--------", "--------",
                 "--------", "--------", "PPPPPPPP", "RNBQKBNR")
        fen = board_to_fen(ranks, "B", (True,) * 4, -1, "1", "1", "none")
        assert fen == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR b KQkq - 0 1"

    def test_halfmove_kept_after_a_move(self) -> None:
        ranks = ("----k---", "--------", "--------", "--------",
                 "--------", "--------", "--------", "----K---")
        fen = board_to_fen(ranks, "W", (False,) * 4, -1, "17", "40", "Kd7")
        assert fen == "4k3/8/8/8/8/8/8/4K3 w - - 17 40"

    def test_wrong_rank_count_raises(self) -> None:
        with pytest.raises(ValueError, match="8 ranks"):
            board_to_fen(("--------",) * 7, "W", (False,) * 4, -1, "0", "1", "none")


class TestVerboseMove:
    def test_plain_move(self) -> None:
        move = decode_verbose_move("P/e2-e4", "e4", "B")
        assert move is not None
        assert (move.piece, move.from_square, move.to_square) == ("p", "e2", "e4")
        assert move.promotion is None
        assert move.uci == "e2e4"
        assert not move.is_drop

    def test_promotion(self) -> None:
        move = decode_verbose_move("P/b7-b8=Q", "b8=Q", "B")
        assert move is not None
        assert move.promotion == "q"
        assert move.uci == "b7b8q"

    def test_drop(self) -> None:
        move = decode_verbose_move("N/@@-f3", "N@f3", "B")
        assert move is not None
        assert move.from_square is None
        assert move.is_drop
        assert move.uci == "N@f3"

    def test_white_short_castle(self) -> None:
        move = decode_verbose_move("o-o", "O-O", "B")
        assert move is not None
        assert (move.piece, move.from_square, move.to_square) == ("k", "e1", "g1")

    def test_black_long_castle(self) -> None:
        move = decode_verbose_move("o-o-o", "O-O-O", "W")
        assert move is not None
        assert (move.from_square, move.to_square) == ("e8", "c8")

    def test_no_move(self) -> None:
        assert decode_verbose_move("none", "none", "W") is None


class TestBoardUpdate:
    def test_after_e4(self) -> None:
        match = STYLE12_RE.search(AFTER_E4)
        assert match is not None
        update = board_update_from_match(match)
        assert update.fen == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        assert update.turn == "b"
        assert update.game_id == 7
        assert (update.white_name, update.black_name) == ("Newton", "Einstein")
        assert update.role == 1
        assert (update.initial_time, update.increment) == (2, 12)
        assert (update.white_strength, update.black_strength) == (39, 39)
        assert (update.white_time, update.black_time) == (119, 122)
        assert update.move_no == 1
        assert update.pretty_move == "e4"
        assert update.prev_move_time.seconds == 6
        assert update.prev_move_time.milliseconds == 120
        assert update.flip is True
        assert update.clock_ticking is True
        assert update.lag_ms == 35
        assert update.verbose_move is not None
        assert update.verbose_move.uci == "e2e4"

    def test_first_position_with_black_to_move(self) -> None:
        match = STYLE12_RE.search(BLACK_STARTS)
        assert match is not None
        update = board_update_from_match(match)
        assert update.fen.endswith(" b KQkq - 0 1")
        assert update.pretty_move == "none"
        assert update.verbose_move is None
        assert update.role == -1

    def test_castling_synthesised(self) -> None:
        match = STYLE12_RE.search(WHITE_CASTLED)
        assert match is not None
        update = board_update_from_match(match)
        assert update.fen == "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/RNBQ1RK1 b kq - 1 8"
        assert update.verbose_move is not None
        assert update.verbose_move.uci == "e1g1"
