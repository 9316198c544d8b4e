"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the pseudo-legal move sets for each piece type.


Legality (not leaving your own king in check) is checked later in rules.py
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...


# (delta row, delta column)
Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Coordinate notation (as used by the Universal Chess Interface)
        ---

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "g8f6": the black knight jumps to f6
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


# White moves UP the board (towards row 0), Black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_START_ROW: dict[Color, int] = {
    Color.WHITE: BOARD_DIMENSIONS[0] - 2,
    Color.BLACK: 1,
}

STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """
    moving_piece = board.piece(square)
    if moving_piece is None:
        return []

    moves: list[Move] = []
    for d_row, d_col in directions:
        target_square = square
        while True:
            target_square = target_square.offset(d_row, d_col)
            if not target_square.is_within_bounds():
                break

            if not board.is_empty(target_square):
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                blocker = board.piece(target_square)
                if blocker is not None and blocker.color != moving_piece.color:
                    moves.append(Move(from_square=square, to_square=target_square))
                break

            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    moving_piece = board.piece(square)
    if moving_piece is None:
        return []

    moves: list[Move] = []
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        occupant = board.piece(target_square)
        if occupant is None or occupant.color != moving_piece.color:
            moves.append(Move(from_square=square, to_square=target_square))

    return moves


def candidate_pawn_moves(square: Square, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting row), if both squares are empty
    - takes diagonally, and only when there is something to take

    NOTE: No en passant, no promotion.
    """
    pawn = board.piece(square)
    if pawn is None:
        return []

    moves: list[Move] = []
    direction = PAWN_DIRECTION[pawn.color]

    # Pawn pushes
    one_step = square.offset(direction, 0)
    if one_step.is_within_bounds() and board.is_empty(one_step):
        moves.append(Move(from_square=square, to_square=one_step))

        two_steps = square.offset(2 * direction, 0)
        on_start_row = square.row == PAWN_START_ROW[pawn.color]
        if on_start_row and two_steps.is_within_bounds() and board.is_empty(two_steps):
            moves.append(Move(from_square=square, to_square=two_steps))

    # pawns take diagonally:
    for d_col in (-1, 1):
        target_square = square.offset(direction, d_col)
        if not target_square.is_within_bounds():
            continue
        target = board.piece(target_square)
        if target is not None and target.color != pawn.color:
            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def candidate_knight_moves(square: Square, board: Board) -> list[Move]:
    """Knights jump: |delta_row| + |delta_col| = 3. Nothing can block them."""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    diagonal_moves = candidate_bishop_moves(square, board)
    horizontal_and_vertical_moves = candidate_rook_moves(square, board)
    return diagonal_moves + horizontal_and_vertical_moves


def candidate_king_moves(square: Square, board: Board) -> list[Move]:
    """
    The king can move by a single square at the time. No castling.
    """
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def candidate_moves(square: Square, board: Board) -> list[Move]:
    """Moves of whatever piece stands on the square. An empty square (or one off the board) simply has none."""
    if not square.is_within_bounds():
        return []
    piece = board.piece(square)
    if piece is None:
        return []
    return MOVEMENT_RULES[piece.type](square, board)


def pseudo_legal_moves(board: Board, square: Square) -> set[Square]:
    """All destinations of the piece on the square, ignoring whether its own king would be left in check."""
    return {move.to_square for move in candidate_moves(square, board)}


def is_pseudo_legal_move(board: Board, from_square: Square, to_square: Square) -> bool:
    if not to_square.is_within_bounds():
        return False
    return to_square in pseudo_legal_moves(board, from_square)


# --- CAPTURING RULES / ATTACKING RULES ---
def raycasting_attack(
    square: Square,
    by_color: Color,
    by_piece_type: PieceType,
    board: Board,
    directions: list[Vector],
) -> bool:
    """
    Raycasting algorithm for attacks.
    ---

    ---
    Similar to raycasting moves.
    However, where `raycasting_move()` determines
    _"What is the line-of-sight of the piece standing on the specified square?"_


    This function determines:
    _"Is the specified square in the line-of-sight of a piece of the specified color and type
    that is allowed to move along the given direction?"_

    ---
    Returns TRUE if the first piece encountered is of the specified color and type.
    """
    attacker = Piece(by_piece_type, by_color)
    for d_row, d_col in directions:
        target_square = square
        while True:
            target_square = target_square.offset(d_row, d_col)

            if not target_square.is_within_bounds():
                break

            if not board.is_empty(target_square):
                # only the first occupied square matters: anything behind it is blocked.
                if board.piece(target_square) == attacker:
                    return True
                break
    return False


def single_step_attack(
    square: Square,
    by_color: Color,
    by_piece_type: PieceType,
    board: Board,
    deltas: list[Vector],
) -> bool:
    """
    Raycasting is for sliding pieces. This is the equivalent for pawns, kings, and knights that just can move a single step along a direction.
    Hence, they also can only attack along a single direction.
    """
    attacker = Piece(by_piece_type, by_color)
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        if board.piece(target_square) == attacker:
            return True

    return False


def is_attacked_by_pawn(square: Square, by_color: Color, board: Board) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: Pawn moves are not symmetric. A white pawn moves UP the board, so a white pawn attacking your square
    stands one row further DOWN (row + 1). Vectors are exactly opposite to the ones in `candidate_pawn_moves()`
    """
    back = -PAWN_DIRECTION[by_color]
    inverse_pawn_take_deltas: list[Vector] = [(back, 1), (back, -1)]
    return single_step_attack(
        square, by_color, PieceType.PAWN, board, inverse_pawn_take_deltas
    )


def is_attacked_by_knight(square: Square, by_color: Color, board: Board) -> bool:
    return single_step_attack(square, by_color, PieceType.KNIGHT, board, KNIGHT_DELTAS)


def is_attacked_by_bishop(square: Square, by_color: Color, board: Board) -> bool:
    return raycasting_attack(square, by_color, PieceType.BISHOP, board, DIAGONALS)


def is_attacked_by_rook(square: Square, by_color: Color, board: Board) -> bool:
    return raycasting_attack(square, by_color, PieceType.ROOK, board, STRAIGHTS)


def is_attacked_by_queen(square: Square, by_color: Color, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_attack(
        square, by_color, PieceType.QUEEN, board, STRAIGHTS + DIAGONALS
    )


def is_attacked_by_king(square: Square, by_color: Color, board: Board) -> bool:
    return single_step_attack(square, by_color, PieceType.KING, board, KING_DELTAS)


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Square, Color, Board], bool]
ATTACK_RULES: dict[PieceType, IsAttackedFn] = {
    PieceType.PAWN: is_attacked_by_pawn,
    PieceType.KNIGHT: is_attacked_by_knight,
    PieceType.BISHOP: is_attacked_by_bishop,
    PieceType.ROOK: is_attacked_by_rook,
    PieceType.QUEEN: is_attacked_by_queen,
    PieceType.KING: is_attacked_by_king,
}
