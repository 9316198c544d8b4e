"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.pieces import Piece
from src.chess.square import Square

EMPTY_FEN = "/".join(["8"] * 8)
STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

# algebraic square name -> FEN character of the piece standing there, ex. {"e1": "K", "e8": "k"}
PiecePlacement = dict[str, str]


@pytest.fixture
def board_with_pieces() -> Callable[[PiecePlacement], Board]:
    """Call the inner function with the pieces you want on an otherwise empty board"""

    def _create_board(pieces: PiecePlacement) -> Board:
        board = Board.from_fen(EMPTY_FEN)
        for square_name, fen_char in pieces.items():
            board.place_piece(Piece.from_fen(fen_char), Square.from_algebraic(square_name))
        return board

    return _create_board


@pytest.fixture
def starting_board() -> Board:
    return Board.from_fen(STARTING_POSITION_FEN)


@pytest.fixture
def kings_only_board(board_with_pieces: Callable[[PiecePlacement], Board]) -> Board:
    """Only kings on their canonical starting squares."""
    return board_with_pieces({"e1": "K", "e8": "k"})
