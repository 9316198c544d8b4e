"""
Custom exceptions.

Everything deriving from GameError is an expected condition (a click on the wrong square, an undo with nothing to undo)
and gets reported back to the caller. EngineInvariantError is the odd one out: it means the engine itself is broken.
"""


class GameError(Exception):
    """Base class for all expected, recoverable errors."""

    code: str = "game_error"


class InvalidSelectionError(GameError):
    """No piece of the side to move on the selected square."""

    code = "invalid_selection"


class IllegalMoveError(GameError):
    """Destination is not among the legal moves of the selected piece."""

    code = "illegal_move"


class GameAlreadyOverError(GameError):
    """Move or resignation requested after the game ended."""

    code = "game_already_over"


class EmptyHistoryError(GameError):
    """Nothing left to undo / redo."""

    code = "empty_history"


class NotYourTurnError(GameError):
    code = "not_your_turn"


class InvalidRequestError(GameError):
    """Request could not be parsed. Raised from the pydantic validators, propagates as is."""

    code = "invalid_request"


class RepositoryError(GameError):
    code = "repository_error"


class EngineInvariantError(Exception):
    """Should never happen if the engine is used correctly (two kings of the same color, squares off the board...)"""
