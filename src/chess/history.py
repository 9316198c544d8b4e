"""
Undo / redo
-----

Every accepted move produces a new (immutable) GameSession. The HistoryStack keeps all of them,
plus a cursor pointing at the one currently shown. Undo and redo only move the cursor, nothing gets recomputed.
"""

from typing import Self

from src.chess.game import GameSession
from src.core.exceptions import EmptyHistoryError


class HistoryStack:
    def __init__(self, snapshots: list[GameSession], current_step: int = 0) -> None:
        if not snapshots:
            raise ValueError("A history needs at least the starting snapshot.")
        if not 0 <= current_step < len(snapshots):
            raise ValueError(
                f"current_step {current_step} out of range for {len(snapshots)} snapshots."
            )
        self._snapshots = list(snapshots)
        self._current_step = current_step

    @classmethod
    def start(cls, session: GameSession | None = None) -> Self:
        return cls([session if session is not None else GameSession.new()])

    @property
    def current(self) -> GameSession:
        return self._snapshots[self._current_step]

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def snapshots(self) -> tuple[GameSession, ...]:
        return tuple(self._snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)

    def can_undo(self) -> bool:
        return self._current_step > 0

    def can_redo(self) -> bool:
        return self._current_step < len(self._snapshots) - 1

    def push(self, session: GameSession) -> GameSession:
        """New action: whatever could have been redone is gone."""
        del self._snapshots[self._current_step + 1 :]
        self._snapshots.append(session)
        self._current_step += 1
        return session

    def undo(self) -> GameSession:
        if not self.can_undo():
            raise EmptyHistoryError("Nothing to undo.")
        self._current_step -= 1
        return self.current

    def redo(self) -> GameSession:
        if not self.can_redo():
            raise EmptyHistoryError("Nothing to redo.")
        self._current_step += 1
        return self.current

    def reset(self, session: GameSession | None = None) -> GameSession:
        """Throw away everything and start over"""
        self._snapshots = [session if session is not None else GameSession.new()]
        self._current_step = 0
        return self.current
