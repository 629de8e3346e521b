"""Tests for FEN parsing/serialization and the text board dump."""

import pytest

from chesscore.core.enums import CastlingRights, Color, GameResult, PieceType
from chesscore.core.errors import FormatError
from chesscore.core.notation import (
    STARTING_FEN,
    castling_slots,
    castling_string,
    position_from_fen,
    position_to_fen,
    position_to_text,
)
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.types import D6, E1, E3, E8, BoardShape


class TestFenParsing:
    def test_starting_side(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.side_to_move == Color.WHITE

    def test_starting_castling(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.castling == CastlingRights.ALL

    def test_starting_en_passant(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.en_passant is None

    def test_starting_clocks(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1
        assert pos.result == GameResult.ACTIVE

    def test_starting_kings(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_matches_initial_board(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos == Position()

    def test_index_matches_full_scan(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        before = pos.board.piece_location_index
        pos.board.rebuild_index()
        assert pos.board.piece_location_index == before

    def test_en_passant_square(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        pos = position_from_fen(fen)
        assert pos.en_passant == E3

    def test_en_passant_square_white_to_move(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        assert pos.en_passant == D6

    def test_no_castling(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1"
        pos = position_from_fen(fen)
        assert pos.castling == CastlingRights.NONE

    def test_partial_castling(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w Kq - 0 1"
        pos = position_from_fen(fen)
        assert pos.castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        )

    def test_clocks(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 b - - 37 112")
        assert pos.side_to_move == Color.BLACK
        assert pos.halfmove_clock == 37
        assert pos.fullmove_number == 112

    def test_wide_board(self) -> None:
        shape = BoardShape(8, 10)
        fen = "r3k4r/pppppppppp/10/10/10/10/PPPPPPPPPP/R3K4R w KQkq - 0 1"
        pos = position_from_fen(fen, shape)
        assert pos.shape == shape
        assert len(pos.squares) == 80
        assert pos.board[9] == Piece(Color.BLACK, PieceType.ROOK)
        assert position_to_fen(pos) == fen


class TestFenErrors:
    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq -",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 extra",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR/8 w KQkq - 0 1",
            "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/7/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/44/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/08/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnx/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppp?ppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkx - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w qkQK - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KK - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq z9 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e3 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - x 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 70000",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - \u0663 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 \u0661",
            "rnbqkbnr/pppppppp/\u0668/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/1\u0667/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
        ],
    )
    def test_rejected(self, fen: str) -> None:
        with pytest.raises(FormatError):
            position_from_fen(fen)

    def test_error_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="side-to-move"):
            position_from_fen("8/8/8/8/8/8/8/8 white - - 0 1")

    def test_shape_mismatch(self) -> None:
        with pytest.raises(FormatError, match="must contain 6 ranks"):
            position_from_fen(STARTING_FEN, BoardShape(6, 8))


class TestFenSerialization:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 b Kq - 12 40",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert position_to_fen(position_from_fen(fen)) == fen

    def test_castling_string(self) -> None:
        assert castling_string(CastlingRights.ALL) == "KQkq"
        assert castling_string(CastlingRights.NONE) == "-"
        assert castling_string(CastlingRights.BLACK_BOTH) == "kq"


class TestTextDump:
    def test_starting_board(self) -> None:
        text = position_to_text(position_from_fen(STARTING_FEN))
        lines = text.splitlines()
        assert lines[:8] == [
            "rnbqkbnr",
            "pppppppp",
            "........",
            "........",
            "........",
            "........",
            "PPPPPPPP",
            "RNBQKBNR",
        ]
        assert lines[8] == "move 1 | white to play | active | castling KQkq"

    def test_status_line_partial_rights(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 b Kq - 0 7")
        status = position_to_text(pos).splitlines()[-1]
        assert status == "move 7 | black to play | active | castling K--q"

    def test_no_rights_slots(self) -> None:
        assert castling_slots(CastlingRights.NONE) == "----"

    def test_slots_match_fen_letters(self) -> None:
        partial = CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        for rights in (CastlingRights.ALL, partial):
            assert castling_slots(rights).replace("-", "") == castling_string(rights)

    def test_str_uses_dump(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert str(pos) == position_to_text(pos)
