"""Unit tests for /src/chess/board.py"""

from typing import Callable
from unittest.mock import Mock, patch

import pytest

from src.chess.board import Board, Color, Move, Square
from src.chess.pieces import Piece, PieceType
from src.core.exceptions import EngineInvariantError

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_FEN = "/".join(["8"] * 8)


# -- CREATION FROM / CONVERSION TO FEN --
def test_starting_position_from_fen() -> None:
    """Black pieces on row 0 and 1, white pieces on row 6 and 7"""
    board = Board.from_fen(STARTING_POSITION_FEN)
    assert board.piece(Square(0, 4)) == Piece(PieceType.KING, Color.BLACK)
    assert board.piece(Square(0, 3)) == Piece(PieceType.QUEEN, Color.BLACK)
    assert board.piece(Square(7, 4)) == Piece(PieceType.KING, Color.WHITE)
    assert board.piece(Square(7, 1)) == Piece(PieceType.KNIGHT, Color.WHITE)
    assert all(
        board.piece(Square(6, col)) == Piece(PieceType.PAWN, Color.WHITE)
        for col in range(8)
    )
    assert all(board.is_empty(Square(row, col)) for row in range(2, 6) for col in range(8))
    assert board == Board.starting_position()


@pytest.mark.parametrize(
    "fen",
    [
        STARTING_POSITION_FEN,
        EMPTY_FEN,
        "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1",
        "4k3/8/8/8/8/8/8/4K3",
    ],
)
def test_fen_roundtrip(fen: str) -> None:
    assert Board.from_fen(fen).to_fen() == fen


@pytest.mark.parametrize(
    "invalid_fen",
    [
        "/".join(["8"] * 7),  # missing a row
        "/".join(["8"] * 7 + ["7"]),  # row too short
        "/".join(["8"] * 7 + ["ppppppppp"]),  # row too long
    ],
)
def test_invalid_fen(invalid_fen: str) -> None:
    with pytest.raises(EngineInvariantError):
        Board.from_fen(invalid_fen)


def test_board_rows_for_display(starting_board: Board) -> None:
    rows = starting_board.rows()
    assert len(rows) == 8
    assert all(len(row) == 8 for row in rows)
    assert [piece.to_fen() for piece in rows[0] if piece] == list("rnbqkbnr")
    assert rows[4] == [None] * 8


# -- KINGS --
def test_missing_king_is_tolerated(board_with_pieces: Callable[..., Board]) -> None:
    """A position without a king is weird, but it is not in check."""
    board = board_with_pieces({"e1": "K", "a8": "q"})
    assert board.king_square(Color.BLACK) is None
    assert not board.is_check(Color.BLACK)


def test_two_kings_of_one_color_fail_loudly() -> None:
    with pytest.raises(EngineInvariantError):
        Board.from_fen("k6k/8/8/8/8/8/8/4K3")


def test_two_kings_of_one_color_detected_after_placement(kings_only_board: Board) -> None:
    kings_only_board.place_piece(Piece(PieceType.KING, Color.WHITE), Square(4, 4))
    with pytest.raises(EngineInvariantError):
        kings_only_board.king_square(Color.WHITE)


# -- COPY-ON-WRITE --
def test_clone_is_independent(starting_board: Board) -> None:
    """Changing the copy must never change the original (no shared rows / dictionaries)"""
    copy = starting_board.clone()
    assert copy == starting_board
    assert copy.position is not starting_board.position

    copy.remove_piece(Square(6, 4))
    assert starting_board.piece(Square(6, 4)) == Piece(PieceType.PAWN, Color.WHITE)
    assert copy.piece(Square(6, 4)) is None


def test_with_move_returns_new_board(starting_board: Board) -> None:
    """e2-e4 moves the pawn, the original board stays untouched"""
    move = Move(Square(6, 4), Square(4, 4))
    new_board = starting_board.with_move(move)

    assert new_board.is_empty(Square(6, 4))
    assert new_board.piece(Square(4, 4)) == Piece(PieceType.PAWN, Color.WHITE)
    assert starting_board.piece(Square(6, 4)) == Piece(PieceType.PAWN, Color.WHITE)
    assert starting_board.is_empty(Square(4, 4))


def test_with_move_overwrites_target(board_with_pieces: Callable[..., Board]) -> None:
    """No legality checks on this layer: even taking your own piece just relocates"""
    board = board_with_pieces({"a1": "R", "a2": "P"})
    new_board = board.with_move(Move(Square.from_algebraic("a1"), Square.from_algebraic("a2")))
    assert new_board.piece(Square.from_algebraic("a2")) == Piece(PieceType.ROOK, Color.WHITE)
    assert new_board.is_empty(Square.from_algebraic("a1"))


@pytest.mark.parametrize(
    "move",
    [
        Move(Square(6, 4), Square(8, 4)),
        Move(Square(-1, 0), Square(0, 0)),
        Move(Square(0, 0), Square(0, 9)),
    ],
)
def test_with_move_off_the_board(starting_board: Board, move: Move) -> None:
    with pytest.raises(EngineInvariantError):
        starting_board.with_move(move)


def test_with_move_from_square_missing_in_position() -> None:
    """A position that does not list every square: the missing one counts as empty"""
    king = Piece(PieceType.KING, Color.WHITE)
    board = Board({Square(7, 4): king})

    new_board = board.with_move(Move(Square(6, 0), Square(5, 0)))

    assert new_board.is_empty(Square(6, 0))
    assert new_board.is_empty(Square(5, 0))
    assert new_board.piece(Square(7, 4)) == king
    assert board.position == {Square(7, 4): king}


# -- LOCATING PIECES --
def test_locate_color_sorted(starting_board: Board) -> None:
    white_squares = starting_board.locate_color(Color.WHITE)
    assert len(white_squares) == 16
    assert white_squares[0] == Square(6, 0)
    assert white_squares == sorted(white_squares)


def test_generate_candidate_moves_initial_position(starting_board: Board) -> None:
    """16 pawn moves + 4 knight moves"""
    assert len(starting_board.generate_candidate_moves(Color.WHITE)) == 20
    assert len(starting_board.generate_candidate_moves(Color.BLACK)) == 20


def test_is_under_attack_calls_all_attack_rules(kings_only_board: Board) -> None:
    """Wiring: every piece type gets asked (none of them find anything here)"""
    mock_rules = {piece_type: Mock(return_value=False) for piece_type in PieceType}
    with patch.dict("src.chess.board.ATTACK_RULES", mock_rules):
        assert not kings_only_board.is_under_attack(Square(4, 4), Color.BLACK)
    for mock_rule in mock_rules.values():
        mock_rule.assert_called_once_with(Square(4, 4), Color.BLACK, kings_only_board)


def test_is_check(board_with_pieces: Callable[..., Board]) -> None:
    board = board_with_pieces({"e1": "K", "e8": "k", "e5": "r"})
    assert board.is_check(Color.WHITE)
    assert not board.is_check(Color.BLACK)
