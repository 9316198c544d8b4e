"""
Legality of moves and the end-of-game conditions.
----

A pseudo-legal move (see moves.py) becomes a legal move if it does not leave the mover's own king in check.
No exceptions: not when you are already in check, not for any other state of the game.
"""

from src.chess.board import Board
from src.chess.moves import Move, candidate_moves
from src.chess.pieces import Color
from src.chess.square import Square
from src.chess.status import Status


def is_king_in_check(board: Board, color: Color) -> bool:
    return board.is_check(color)


def _leaves_king_in_check(board: Board, move: Move, color: Color) -> bool:
    """
    plan:
    1. make the candidate move on a copy of the board
    2. determine if own king is in check on the new board
    """
    return board.with_move(move).is_check(color)


def legal_moves(board: Board, square: Square) -> set[Square]:
    """Destinations of the piece on the square that do not leave its own king in check"""
    piece = board.piece(square)
    if piece is None:
        return set()
    return {
        move.to_square
        for move in candidate_moves(square, board)
        if not _leaves_king_in_check(board, move, piece.color)
    }


def legal_moves_for_color(board: Board, color: Color) -> list[Move]:
    """
    Every legal move of one side.
    ---

    Ordered by starting square, then target square (row first): gives a reproducible list for the CPU to pick from.
    """
    moves: list[Move] = []
    for from_square in board.locate_color(color):
        moves.extend(
            Move(from_square, to_square)
            for to_square in sorted(legal_moves(board, from_square))
        )
    return moves


def has_any_legal_move(board: Board, color: Color) -> bool:
    """Stops at the first piece that can move"""
    return any(legal_moves(board, square) for square in board.locate_color(color))


def classify(board: Board, color: Color) -> Status:
    """Status of the game from the point of view of the side about to move."""
    in_check = is_king_in_check(board, color)
    if has_any_legal_move(board, color):
        return Status.CHECK if in_check else Status.ONGOING
    return Status.CHECKMATE if in_check else Status.STALEMATE
