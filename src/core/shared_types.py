"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    RESIGNED = "resigned"
    KING_CAPTURED = "king captured"


# --- Color is the transport version. The domain version lives in src/chess/pieces.py
# --- NOTE Same name on purpose: the imports show which version is used in what part of the code


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class GameMode(StrEnum):
    """Play against the CPU, or two players sharing the same screen."""

    CPU = "cpu"
    PLAYER = "player"
