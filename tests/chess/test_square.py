"""Unit tests for /src/chess/square.py"""

from string import ascii_lowercase

import pytest

from src.chess.square import BOARD_DIMENSIONS, Square, all_squares


@pytest.mark.parametrize(
    "row, col, notation",
    [
        (row, col, f"{ascii_lowercase[col]}{8 - row}")
        for row in range(8)
        for col in range(8)
    ],
)
def test_creating_from_algebraic(row: int, col: int, notation: str) -> None:
    """Row 0 is the 8th rank, column 0 the a-file"""
    square = Square.from_algebraic(notation)
    assert square.row == row
    assert square.col == col


@pytest.mark.parametrize(
    "row, col, notation",
    [(6, 4, "e2"), (4, 4, "e4"), (0, 0, "a8"), (7, 7, "h1"), (7, 1, "b1")],
)
def test_to_algebraic_notation(row: int, col: int, notation: str) -> None:
    """The display mapping: file letter a+col, rank number 8-row"""
    assert Square(row, col).to_algebraic() == notation


def test_square_within_bounds() -> None:
    """happy case: squares within the dimensions of the board"""
    for row in range(BOARD_DIMENSIONS[0]):
        for col in range(BOARD_DIMENSIONS[1]):
            assert Square(row, col).is_within_bounds()


@pytest.mark.parametrize("row, col", [(8, 0), (0, 8), (-1, 3), (3, -1), (8, 8)])
def test_square_out_of_bounds(row: int, col: int) -> None:
    assert not Square(row, col).is_within_bounds()


def test_offset_may_leave_the_board() -> None:
    assert Square(6, 4).offset(-2, 0) == Square(4, 4)
    assert not Square(0, 0).offset(-1, 0).is_within_bounds()


def test_all_squares_row_by_row() -> None:
    squares = all_squares()
    assert len(squares) == 64
    assert squares[0] == Square(0, 0)
    assert squares[-1] == Square(7, 7)
    assert squares == sorted(squares)
