"""
Status of a game

(placed in its own module as both the rules and the game session need to import it)
"""

from enum import Enum, auto


class Status(Enum):
    ONGOING = auto()
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()
    RESIGNED = auto()
    # Only reachable when a position already allowed the king to be taken (see GameSession.apply_move)
    KING_CAPTURED = auto()

    @property
    def is_terminal(self) -> bool:
        return self not in (Status.ONGOING, Status.CHECK)
