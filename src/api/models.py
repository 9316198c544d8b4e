"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, GameMode, Status

PieceFEN = str

FILES = "abcdefgh"
RANKS = "12345678"


def _is_algebraic_notation(value: str) -> bool:
    """'a1' up to 'h8'"""
    return len(value) == 2 and value[0] in FILES and value[1] in RANKS


def validate_square_name(value: str) -> str:
    value = value.strip().lower()
    if not _is_algebraic_notation(value):
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        )
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    # None: take the configured defaults
    mode: Optional[GameMode] = None
    cpu_color: Optional[Color] = None
    # Piece placement part of a FEN string. None: standard starting position
    starting_fen: Optional[str] = None
    side_to_move: Color = Color.WHITE

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        rows = value.strip().split("/")
        if len(rows) != 8:
            raise InvalidRequestError(
                "Piece placement must contain 8 rows separated by '/'."
            )
        for row in rows:
            width = sum(int(char) if char.isdigit() else 1 for char in row)
            if width != 8 or any(char.lower() not in "pnbrqk12345678" for char in row):
                raise InvalidRequestError(
                    f"Cannot interpret {row!r} as a row of the board."
                )
        return value.strip()


class GameRequest(BaseModel):
    """Any request that only needs to know which game"""

    game_id: UUID


class GetGameRequest(GameRequest):
    pass


class ResignRequest(GameRequest):
    pass


class UndoRequest(GameRequest):
    pass


class RedoRequest(GameRequest):
    pass


class CpuMoveRequest(GameRequest):
    pass


class ResetGameRequest(GameRequest):
    pass


class DeleteGameRequest(GameRequest):
    pass


class LegalMovesRequest(GameRequest):
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


class MoveRequest(GameRequest):
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return validate_square_name(value)


# --- RESPONSE MODELS ---
class ErrorDetail(BaseModel):
    """Why a request was turned down (the game itself is left untouched)"""

    code: str
    message: str


class GameResponse(BaseModel):
    game_id: UUID
    mode: GameMode
    board_fen: str
    board_rows: list[list[Optional[PieceFEN]]]
    side_to_move: Color
    status: Status
    winner: Optional[Color]
    move_log: list[str]
    captured_pieces: dict[Color, list[PieceFEN]]
    captured_points: dict[Color, int]
    current_step: int
    history_length: int
    can_undo: bool
    can_redo: bool
    error: Optional[ErrorDetail] = None


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: str
    legal_moves: list[str]
