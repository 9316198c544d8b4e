"""
The GameSession is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of chess.

Sessions are immutable snapshots: every accepted move (or resignation) returns a brand new session,
so earlier snapshots can be kept around for undo/redo (see history.py).
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Self

from loguru import logger

from src.chess.board import Board
from src.chess.moves import Move
from src.chess.pieces import Color, Piece, PieceType
from src.chess.rules import classify, legal_moves
from src.chess.square import Square
from src.chess.status import Status
from src.core.exceptions import (
    GameAlreadyOverError,
    IllegalMoveError,
    InvalidSelectionError,
)


@dataclass(frozen=True)
class MoveRecord:
    """One entry in the game's history"""

    move: Optional[Move]  # None when the entry is not a move (resignation)
    moving_piece: Optional[Piece]
    captured_piece: Optional[Piece]
    resulting_check: bool
    annotation: str
    outcome: Optional[str] = None

    def lines(self) -> list[str]:
        """The way the move shows up in the move list: the move itself, then what it caused (if anything)"""
        return [self.annotation] + ([self.outcome] if self.outcome else [])


@dataclass(frozen=True)
class CapturedPieces:
    """Pieces taken BY each color"""

    white: tuple[Piece, ...] = ()
    black: tuple[Piece, ...] = ()

    def by(self, color: Color) -> tuple[Piece, ...]:
        return self.white if color == Color.WHITE else self.black

    def add(self, color: Color, piece: Piece) -> Self:
        if color == Color.WHITE:
            return replace(self, white=self.white + (piece,))
        return replace(self, black=self.black + (piece,))

    def points(self, color: Color) -> int:
        return sum(piece.points for piece in self.by(color))


def annotate(move: Move, piece: Piece) -> str:
    """ex. 'Pe2 → e4' (piece letter in FEN style: capitals for White)"""
    return f"{piece.to_fen()}{move.from_square.to_algebraic()} → {move.to_square.to_algebraic()}"


def describe_outcome(status: Status, mover: Color) -> Optional[str]:
    """Human readable suffix for the move list, from the point of view of the player who just moved"""
    match status:
        case Status.CHECK:
            return f"{mover.opponent.display_name} is in check!"
        case Status.CHECKMATE:
            return f"{mover.display_name} wins by checkmate!"
        case Status.STALEMATE:
            return "Draw by stalemate!"
        case Status.KING_CAPTURED:
            return f"{mover.display_name} captured the king!"
        case _:
            return None


@dataclass(frozen=True)
class GameSession:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    side_to_move: Color = Color.WHITE
    history: tuple[MoveRecord, ...] = ()
    status: Status = Status.ONGOING
    winner: Optional[Color] = None
    captured: CapturedPieces = field(default_factory=CapturedPieces)

    @classmethod
    def new(cls) -> Self:
        """Standard starting position, White to move."""
        return cls(board=Board.starting_position())

    @classmethod
    def from_board(cls, board: Board, side_to_move: Color = Color.WHITE) -> Self:
        """
        Start from any position (puzzles, tests).
        The status is computed right away, so a position that is already mate is already over.
        """
        board.validate()
        status = classify(board, side_to_move)
        winner = side_to_move.opponent if status == Status.CHECKMATE else None
        return cls(
            board=board.clone(),
            side_to_move=side_to_move,
            status=status,
            winner=winner,
        )

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    @property
    def is_check(self) -> bool:
        return self.status in (Status.CHECK, Status.CHECKMATE)

    @property
    def move_log(self) -> list[str]:
        return [line for record in self.history for line in record.lines()]

    def legal_moves(self, square: Square) -> list[Square]:
        """
        Used to highlight the squares the selected piece can go to.
        ----

        Only the pieces of the side to move can be selected, and nothing moves once the game is over.
        Anything else just gives an empty list (a click on the wrong square is no error).
        """
        if self.is_over or not square.is_within_bounds():
            return []
        piece = self.board.piece(square)
        if piece is None or piece.color != self.side_to_move:
            return []
        return sorted(legal_moves(self.board, square))

    def apply_move(self, from_square: Square, to_square: Square) -> Self:
        """
        Attempt to make a move
        -----

        1. reject if the game is over
        2. reject if there is no piece of the side to move on the starting square
        3. reject if the move is not legal
        4. remember what (if anything) gets captured
        5. create the new board
        6. taking the king ends the game on the spot
        7. otherwise hand the turn over and classify the position for the opponent
        8. record the move
        """
        if self.is_over:
            raise GameAlreadyOverError(
                f"Game is over ({self.status.name.lower()}). Reset to play again."
            )

        moving_piece = (
            self.board.piece(from_square) if from_square.is_within_bounds() else None
        )
        if moving_piece is None or moving_piece.color != self.side_to_move:
            raise InvalidSelectionError(
                f"No {self.side_to_move.name.lower()} piece on {self._square_name(from_square)}."
            )

        if to_square not in legal_moves(self.board, from_square):
            raise IllegalMoveError(
                f"Move not allowed: {self._square_name(from_square)} -> {self._square_name(to_square)}"
            )

        move = Move(from_square, to_square)
        mover = self.side_to_move
        captured_piece = self.board.piece(to_square)
        board = self.board.with_move(move)
        captured = (
            self.captured.add(mover, captured_piece)
            if captured_piece is not None
            else self.captured
        )

        if captured_piece is not None and captured_piece.type == PieceType.KING:
            # NOTE: the turn does not pass on, the game is over.
            side_to_move = mover
            status = Status.KING_CAPTURED
            winner: Optional[Color] = mover
        else:
            side_to_move = mover.opponent
            status = classify(board, side_to_move)
            winner = mover if status == Status.CHECKMATE else None

        record = MoveRecord(
            move=move,
            moving_piece=moving_piece,
            captured_piece=captured_piece,
            resulting_check=status in (Status.CHECK, Status.CHECKMATE),
            annotation=annotate(move, moving_piece),
            outcome=describe_outcome(status, mover),
        )
        logger.debug(
            "move {} applied, status: {}", move.to_uci(), status.name.lower()
        )
        return replace(
            self,
            board=board,
            side_to_move=side_to_move,
            history=self.history + (record,),
            status=status,
            winner=winner,
            captured=captured,
        )

    def resign(self) -> Self:
        """The side to move gives up. The board stays as it is."""
        if self.is_over:
            raise GameAlreadyOverError(
                f"Game is over ({self.status.name.lower()}). Nothing to resign."
            )

        resigning = self.side_to_move
        record = MoveRecord(
            move=None,
            moving_piece=None,
            captured_piece=None,
            resulting_check=False,
            annotation=f"{resigning.display_name} surrendered",
        )
        logger.debug("{} resigned", resigning.name.lower())
        return replace(
            self,
            board=self.board.clone(),
            history=self.history + (record,),
            status=Status.RESIGNED,
            winner=resigning.opponent,
        )

    def _square_name(self, square: Square) -> str:
        return square.to_algebraic() if square.is_within_bounds() else str(square)
