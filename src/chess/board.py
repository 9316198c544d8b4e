"""The Game board holds the `position` (in chess: the configuration of pieces on the board) and the rules that only depend on it"""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.moves import ATTACK_RULES, Move, candidate_moves
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square, all_squares
from src.core.exceptions import EngineInvariantError

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


@dataclass
class Board:
    position: dict[Square, Optional[Piece]]

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0), starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank (row 7) are the white pieces.

        FEN is read top row first, which happens to be the same order as our rows.
        """
        position: dict[Square, Optional[Piece]] = {
            square: None for square in all_squares()
        }
        fen_by_rows = fen_str.strip().split("/")
        if len(fen_by_rows) != BOARD_DIMENSIONS[0]:
            raise EngineInvariantError(
                f"Expected {BOARD_DIMENSIONS[0]} rows in FEN string, got {len(fen_by_rows)}: {fen_str!r}"
            )
        for row, fen_one_row in enumerate(fen_by_rows):
            col = 0
            for character in fen_one_row:
                if character.isalpha():
                    # simple case: a letter directly denotes the piece that should be created
                    position[Square(row, col)] = Piece.from_fen(character)
                    col += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
            if col != BOARD_DIMENSIONS[1]:
                raise EngineInvariantError(
                    f"Row {row} of FEN string does not describe {BOARD_DIMENSIONS[1]} squares: {fen_one_row!r}"
                )
        board = cls(position)
        board.validate()
        return board

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_POSITION_FEN)

    def to_fen(self) -> str:
        """Rows are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in range(BOARD_DIMENSIONS[0]))

    def _row_to_fen(self, row: int) -> str:
        """FEN string of a single row"""
        fen_characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.piece(Square(row, col))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def rows(self) -> list[list[Optional[Piece]]]:
        """Display helper: the board as an 8x8 array, row 0 first"""
        return [
            [self.piece(Square(row, col)) for col in range(BOARD_DIMENSIONS[1])]
            for row in range(BOARD_DIMENSIONS[0])
        ]

    def validate(self) -> None:
        """A missing king is tolerated (test positions). A second king of the same color never is."""
        for color in Color:
            self.king_square(color)

    # --- ACCESSORS ---
    def piece(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def locate_pieces(self, piece_type: PieceType, color: Color) -> list[Square]:
        target = Piece(piece_type, color)
        return [square for square, piece in self.position.items() if piece == target]

    def locate_color(self, color: Color) -> list[Square]:
        """Squares holding the pieces of one color, in row-then-column order"""
        return sorted(
            square
            for square, piece in self.position.items()
            if piece is not None and piece.color == color
        )

    def king_square(self, color: Color) -> Optional[Square]:
        kings = self.locate_pieces(PieceType.KING, color)
        if len(kings) > 1:
            raise EngineInvariantError(
                f"Found {len(kings)} {color.name.lower()} kings on the board: {[k.to_algebraic() for k in kings]}"
            )
        return kings[0] if kings else None

    # --- MUTATIONS (only used while setting up a position) ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        self._assert_on_board(square)
        self.position[square] = piece

    def remove_piece(self, square: Square) -> None:
        self._assert_on_board(square)
        self.position[square] = None

    # --- COPY-ON-WRITE ---
    def clone(self) -> Self:
        """Independent copy. Pieces are immutable, so a fresh dictionary is all it takes."""
        return type(self)(dict(self.position))

    def with_move(self, move: Move) -> Self:
        """
        New board with the piece relocated. Whatever stood on the target square is overwritten.
        ---

        NOTE: No legality checks at all here, that is what rules.py is for.
        """
        self._assert_on_board(move.from_square)
        self._assert_on_board(move.to_square)
        new_board = self.clone()
        new_board.position[move.to_square] = new_board.position.get(move.from_square)
        new_board.position[move.from_square] = None
        return new_board

    def _assert_on_board(self, square: Square) -> None:
        if not square.is_within_bounds():
            raise EngineInvariantError(f"Square {square} is not on the board.")

    # --- ATTACKS ---
    def generate_candidate_moves(self, color: Color) -> list[Move]:
        """
        Pseudo-legal moves of all the pieces of one color.
        These still have to be tested for legality (making sure it does not leave yourself in check).
        """
        candidates: list[Move] = []
        for starting_square in self.locate_color(color):
            candidates.extend(candidate_moves(starting_square, self))
        return candidates

    def is_under_attack(self, square: Square, by_color: Color) -> bool:
        """Can any piece of `by_color` take on the square? Uses the ATTACK_RULES, so never needs the legal move filter."""
        return any(
            is_attacked(square, by_color, self) for is_attacked in ATTACK_RULES.values()
        )

    def is_check(self, color: Color) -> bool:
        """Is the king of `color` attacked? Without a king on the board it simply can't be."""
        king = self.king_square(color)
        if king is None:
            return False
        return self.is_under_attack(king, color.opponent)
