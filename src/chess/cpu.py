"""
RandomMoveAgent: picks a uniformly random legal move.
----

No search, no evaluation. Seed the random source to make it play the same game twice.
"""

import random
from typing import Optional

from loguru import logger

from src.chess.game import GameSession
from src.chess.moves import Move
from src.chess.pieces import Color
from src.chess.rules import legal_moves_for_color
from src.chess.status import Status
from src.core.exceptions import GameAlreadyOverError, NotYourTurnError

# the side to move is out of moves: nothing to play, nothing to reject
NO_MOVE_LEFT = (Status.CHECKMATE, Status.STALEMATE)


class RandomMoveAgent:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def choose(self, session: GameSession, color: Color) -> Optional[Move]:
        """None when there is nothing to play (checkmate / stalemate should have been detected already)"""
        candidates = legal_moves_for_color(session.board, color)
        if not candidates:
            return None
        return self.rng.choice(candidates)

    def play(self, session: GameSession, color: Color) -> GameSession:
        """Make a move for `color`. Returns the session unchanged if there is no move to make."""
        if session.status in NO_MOVE_LEFT and session.side_to_move == color:
            logger.debug("CPU ({}) has no move to make: {}", color.name.lower(), session.status.name.lower())
            return session
        if session.is_over:
            # a CPU move scheduled before the game ended (or before an undo/reset) arrives too late
            raise GameAlreadyOverError(
                f"Game is over ({session.status.name.lower()}). CPU does not move."
            )
        if session.side_to_move != color:
            raise NotYourTurnError(
                f"CPU plays {color.name.lower()}, but it is {session.side_to_move.name.lower()}'s turn."
            )
        move = self.choose(session, color)
        if move is None:
            logger.debug("CPU ({}) has no move to make", color.name.lower())
            return session
        logger.debug("CPU ({}) plays {}", color.name.lower(), move.to_uci())
        return session.apply_move(move.from_square, move.to_square)


def run_cpu_move(
    session: GameSession, color: Color, rng: Optional[random.Random] = None
) -> GameSession:
    return RandomMoveAgent(rng).play(session, color)
