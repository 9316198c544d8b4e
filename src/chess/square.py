"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8 (rows, columns)
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True, order=True)
class Square:
    """
    Indexed like the rows of the board array: row 0 is Black's home row (8th rank), row 7 is White's (1st rank).
    Columns run from the a-file (0) to the h-file (7).
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        col = ord(sq[0].lower()) - ord("a")
        row = BOARD_DIMENSIONS[0] - int(sq[1:])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a'))}{BOARD_DIMENSIONS[0] - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_col: int) -> Square:
        """The square found by stepping along a vector. May end up off the board!"""
        return Square(self.row + d_row, self.col + d_col)


def all_squares() -> list[Square]:
    """Row by row, starting in the top left corner (a8)."""
    return [
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]
