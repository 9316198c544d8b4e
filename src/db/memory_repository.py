"""Implementation of (Game)Repository using a plain dictionary"""

from uuid import UUID, uuid4

from src.db.repository import GameRecord


class InMemoryGameRepository:
    """Games only live as long as the process does"""

    def __init__(self) -> None:
        self._games: dict[UUID, GameRecord] = {}

    def get_game(self, game_id: UUID) -> GameRecord | None:
        """Get game by ID, if record exists."""
        return self._games.get(game_id)

    def create_game(self, game: GameRecord) -> tuple[GameRecord, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        new_id = uuid4()
        self._games[new_id] = game
        return game, new_id

    def update_game(self, game_id: UUID, game: GameRecord) -> GameRecord | None:
        """Replace an existing record."""
        if game_id not in self._games:
            return None
        self._games[game_id] = game
        return game

    def delete_game(self, game_id: UUID) -> GameRecord | None:
        """Remove a game's record."""
        return self._games.pop(game_id, None)

    def list_game_ids(self) -> list[UUID]:
        return list(self._games.keys())

    def clear(self) -> None:
        self._games.clear()
