"""Orchestration of communication from API models to the chess domain and the repository (and the reverse direction)."""

import random
from typing import Callable
from uuid import UUID

from loguru import logger

from src.api.models import (
    CpuMoveRequest,
    CreateGameRequest,
    DeleteGameRequest,
    ErrorDetail,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    RedoRequest,
    ResetGameRequest,
    ResignRequest,
    UndoRequest,
)
from src.chess.board import Board
from src.chess.cpu import RandomMoveAgent
from src.chess.game import GameSession
from src.chess.history import HistoryStack
from src.chess.pieces import Color as DomainColor
from src.chess.square import Square
from src.core.config import GameConfig
from src.core.exceptions import (
    EmptyHistoryError,
    EngineInvariantError,
    GameAlreadyOverError,
    GameError,
    IllegalMoveError,
    InvalidRequestError,
    InvalidSelectionError,
    NotYourTurnError,
    RepositoryError,
)
from src.core.models import GameModel
from src.core.shared_types import Color, GameMode, Status
from src.db.repository import GameRecord, GameRepository

# Errors a player can trigger by simply clicking around. They get reported in the response instead of raised.
EXPECTED_ERRORS: tuple[type[GameError], ...] = (
    InvalidSelectionError,
    IllegalMoveError,
    GameAlreadyOverError,
    EmptyHistoryError,
    NotYourTurnError,
)


def to_domain_color(color: Color) -> DomainColor:
    return DomainColor[color.name]


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(
        self, repository: GameRepository, config: GameConfig | None = None
    ) -> None:
        self.repo = repository
        self.config = config if config is not None else GameConfig()
        self.cpu = RandomMoveAgent(random.Random(self.config.cpu_seed))

    # -- API logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a new game, from the standard position unless a starting position was supplied."""
        mode = request.mode or self.config.default_mode
        cpu_color = request.cpu_color or self.config.cpu_color

        if request.starting_fen:
            try:
                board = Board.from_fen(request.starting_fen)
            except EngineInvariantError as exc:
                raise InvalidRequestError(str(exc)) from exc
            session = GameSession.from_board(
                board, to_domain_color(request.side_to_move)
            )
        else:
            session = GameSession.new()

        record = GameRecord(
            history=HistoryStack.start(session),
            mode=mode,
            cpu_color=to_domain_color(cpu_color),
        )
        stored_game, game_id = self.repo.create_game(record)
        logger.info("created game {} (mode: {})", game_id, mode)
        return self._create_game_response(game_id, stored_game)

    def get_game(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used by the frontend to redraw the board / poll whether the CPU has moved for instance.
        """
        record = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, record)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Squares the selected piece can move to (for highlighting)."""
        record = self._fetch_game(request.game_id)
        square = Square.from_algebraic(request.square)
        targets = record.history.current.legal_moves(square)
        return LegalMovesResponse(
            game_id=request.game_id,
            square=request.square,
            legal_moves=[target.to_algebraic() for target in targets],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""
        from_square = Square.from_algebraic(request.from_square)
        to_square = Square.from_algebraic(request.to_square)

        def _move(record: GameRecord) -> GameSession:
            session = record.history.current
            if self._is_cpu_turn(record, session):
                raise NotYourTurnError("Waiting for the CPU to make its move.")
            return record.history.push(session.apply_move(from_square, to_square))

        return self._attempt(request.game_id, "move", _move)

    def cpu_move(self, request: CpuMoveRequest) -> GameResponse:
        """
        Let the CPU play its move.
        ---
        The UI decides when to call this (after `config.cpu_delay_ms`). A call arriving after the game was reset/undone
        simply gets rejected by the checks.
        """

        def _cpu_move(record: GameRecord) -> GameSession:
            if record.mode != GameMode.CPU:
                raise NotYourTurnError("There is no CPU player in this game.")
            session = record.history.current
            after_move = self.cpu.play(session, record.cpu_color)
            if after_move is session:
                return session
            return record.history.push(after_move)

        return self._attempt(request.game_id, "cpu move", _cpu_move)

    def resign(self, request: ResignRequest) -> GameResponse:
        """The side to move surrenders."""
        return self._attempt(
            request.game_id,
            "resign",
            lambda record: record.history.push(record.history.current.resign()),
        )

    def undo(self, request: UndoRequest) -> GameResponse:
        return self._attempt(
            request.game_id, "undo", lambda record: record.history.undo()
        )

    def redo(self, request: RedoRequest) -> GameResponse:
        return self._attempt(
            request.game_id, "redo", lambda record: record.history.redo()
        )

    def reset_game(self, request: ResetGameRequest) -> GameResponse:
        """Back to the standard starting position, history cleared. Mode stays the same."""
        record = self._fetch_game(request.game_id)
        record.history.reset()
        self.repo.update_game(request.game_id, record)
        logger.info("reset game {}", request.game_id)
        return self._create_game_response(request.game_id, record)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")
        logger.info("deleted game {}", request.game_id)

    # -- Internal helpers --
    def _attempt(
        self,
        game_id: UUID,
        action: str,
        apply: Callable[[GameRecord], GameSession],
    ) -> GameResponse:
        """
        Run an action on the stored game.
        ---
        Expected errors leave the game untouched and end up in the `error` field of the response.
        """
        record = self._fetch_game(game_id)
        try:
            apply(record)
        except EXPECTED_ERRORS as exc:
            logger.info("{} rejected for game {}: [{}] {}", action, game_id, exc.code, exc)
            error = ErrorDetail(code=exc.code, message=str(exc))
            return self._create_game_response(game_id, record, error)

        self.repo.update_game(game_id, record)
        return self._create_game_response(game_id, record)

    def _is_cpu_turn(self, record: GameRecord, session: GameSession) -> bool:
        return record.mode == GameMode.CPU and session.side_to_move == record.cpu_color

    def _to_model(self, record: GameRecord) -> GameModel:
        """Read-only projection of the snapshot the history cursor points at"""
        session = record.history.current
        return GameModel(
            board_fen=session.board.to_fen(),
            side_to_move=session.side_to_move.name.lower(),
            status=session.status.name.lower(),
            winner=session.winner.name.lower() if session.winner else None,
            move_log=session.move_log,
            captured_pieces={
                color.name.lower(): [piece.to_fen() for piece in session.captured.by(color)]
                for color in DomainColor
            },
            captured_points={
                color.name.lower(): session.captured.points(color)
                for color in DomainColor
            },
            current_step=record.history.current_step,
            history_length=len(record.history),
            mode=str(record.mode),
            board_rows=[
                [piece.to_fen() if piece else None for piece in row]
                for row in session.board.rows()
            ],
        )

    def _create_game_response(
        self, game_id: UUID, record: GameRecord, error: ErrorDetail | None = None
    ) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        model = self._to_model(record)
        return GameResponse(
            game_id=game_id,
            mode=GameMode(model.mode),
            board_fen=model.board_fen,
            board_rows=model.board_rows,
            side_to_move=Color(model.side_to_move),
            status=Status[model.status.upper()],
            winner=Color(model.winner) if model.winner else None,
            move_log=model.move_log,
            captured_pieces={Color(c): pieces for c, pieces in model.captured_pieces.items()},
            captured_points={Color(c): points for c, points in model.captured_points.items()},
            current_step=model.current_step,
            history_length=model.history_length,
            can_undo=record.history.can_undo(),
            can_redo=record.history.can_redo(),
            error=error,
        )

    def _fetch_game(self, game_id: UUID) -> GameRecord:
        """Attempt to find the game in the repository and raise error if it fails."""
        record = self.repo.get_game(game_id)
        if record is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return record
