"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
The Service builds them from the domain objects, and the API layer turns them into responses.
(Decouples the domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
PieceColor = str
PieceFEN = str


@dataclass
class GameModel:
    """Transport-safe, read-only projection of a game session (+ its position in the history)."""

    board_fen: str
    side_to_move: PieceColor
    status: str
    winner: Optional[PieceColor]
    move_log: list[str]
    captured_pieces: dict[PieceColor, list[PieceFEN]]
    captured_points: dict[PieceColor, int]
    current_step: int = 0
    history_length: int = 1
    mode: str = "player"
    board_rows: list[list[Optional[PieceFEN]]] = field(default_factory=list)
