"""Game state machine tracking phase transitions and move history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum, auto

from rookery.core.board import Board
from rookery.core.enums import Alliance, GameResult, MoveStatus
from rookery.core.move import Move, MoveFactory, MoveTransition
from rookery.core.notation import STARTING_FEN, board_from_fen
from rookery.core.piece import Piece
from rookery.core.rules import Rules
from rookery.core.types import Square

_LOGGER = logging.getLogger(__name__)


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    GAME_OVER = auto()


@dataclass(frozen=True, slots=True)
class GameOptions:
    """Settings a game is started with."""

    start_fen: str = STARTING_FEN
    allow_undo: bool = True


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    notation: str
    board_after: Board
    was_capture: bool = False
    was_check: bool = False


@dataclass
class GameState:
    """Manages game lifecycle: phase, result, move history.

    This is a pure data/logic class without threading or UI.  Boards are
    immutable, so undo simply steps back to the previous board.
    """

    options: GameOptions = field(default_factory=GameOptions, init=False)
    board: Board = field(default_factory=Board.create_standard_board, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    _start_board: Board | None = field(default=None, init=False, repr=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, options: GameOptions | None = None) -> None:
        """Initialise (or reset) the game."""
        self.options = options or GameOptions()
        self.board = board_from_fen(self.options.start_fen)
        self._start_board = self.board
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.move_history.clear()
        self._check_game_over()

    # ── Move application ─────────────────────────────────────────────────

    def submit(self, from_sq: Square, to_sq: Square) -> MoveTransition:
        """Try the move between two squares for the side to move.

        The board only advances when the returned status is ``DONE``.
        """
        move = MoveFactory.create_move(self.board, from_sq, to_sq)
        if self.phase != GamePhase.AWAITING_MOVE:
            _LOGGER.debug("Move %s submitted while %s", move, self.phase.name)
            return MoveTransition(self.board, self.board, move, MoveStatus.ILLEGAL_MOVE)

        transition = self.board.current_player.make_move(move)
        if not transition.move_status.is_done:
            return transition

        self.board = transition.to_board
        self.move_history.append(
            MoveRecord(
                move=move,
                notation=str(move),
                board_after=self.board,
                was_capture=move.is_attack,
                was_check=self.board.current_player.is_in_check(),
            )
        )
        self._check_game_over()
        return transition

    def undo(self) -> bool:
        """Take back the last move. Returns ``False`` if nothing was undone."""
        if not self.options.allow_undo or not self.move_history:
            return False

        self.move_history.pop()
        if self.move_history:
            self.board = self.move_history[-1].board_after
        else:
            assert self._start_board is not None
            self.board = self._start_board

        # Reset result if we un-did a game-ending move
        if self.result != GameResult.IN_PROGRESS:
            self.result = GameResult.IN_PROGRESS
            self.phase = GamePhase.AWAITING_MOVE
        return True

    # ── Resignation / draw ───────────────────────────────────────────────

    def resign(self, alliance: Alliance) -> None:
        self._finish(
            GameResult.BLACK_WINS if alliance == Alliance.WHITE else GameResult.WHITE_WINS
        )

    def set_draw(self) -> None:
        self._finish(GameResult.DRAW)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Alliance:
        return self.board.current_player.alliance

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def fullmove_display(self) -> int:
        """Current full-move number for display."""
        return (self.ply_count // 2) + 1

    def legal_moves(self) -> list[Move]:
        """Moves of the side to move that do not leave its King in check."""
        player = self.board.current_player
        return [
            move for move in player.legal_moves if player.make_move(move).move_status.is_done
        ]

    def taken_pieces(self, alliance: Alliance) -> list[Piece]:
        """Pieces of *alliance* captured so far, most valuable first."""
        taken = [
            record.move.attacked_piece
            for record in self.move_history
            if record.move.attacked_piece is not None
            and record.move.attacked_piece.alliance == alliance
        ]
        return sorted(taken, key=lambda piece: piece.piece_value, reverse=True)

    # ── Internal ─────────────────────────────────────────────────────────

    def _check_game_over(self) -> None:
        result = Rules.game_result(self.board)
        if result != GameResult.IN_PROGRESS:
            self._finish(result)

    def _finish(self, result: GameResult) -> None:
        self.result = result
        self.phase = GamePhase.GAME_OVER
        _LOGGER.info("Game over after %d plies: %s", self.ply_count, result.name)
