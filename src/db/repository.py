"""Protocol repository (in-memory for now. Games in the hub are not persisted.)"""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from src.chess.history import HistoryStack
from src.chess.pieces import Color
from src.core.shared_types import GameMode


@dataclass
class GameRecord:
    """Everything stored for one game: its snapshots, and who is playing"""

    history: HistoryStack
    mode: GameMode = GameMode.CPU
    cpu_color: Color = Color.BLACK


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameRecord | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameRecord) -> tuple[GameRecord, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameRecord) -> GameRecord | None:
        """Replace an existing record."""
        ...

    def delete_game(self, game_id: UUID) -> GameRecord | None:
        """Remove a game's record."""
        ...
