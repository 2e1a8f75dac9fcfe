"""High-level chess rules: check, checkmate, stalemate, game result."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.enums import Alliance, GameResult

if TYPE_CHECKING:
    from rookery.core.board import Board


class Rules:
    """Static rule-checker that operates on a :class:`Board`.

    Checkmate and stalemate tests try every legal move of the side to move,
    so they cost one board construction per move.
    """

    @staticmethod
    def is_in_check(board: Board) -> bool:
        return board.current_player.is_in_check()

    @staticmethod
    def is_checkmate(board: Board) -> bool:
        return board.current_player.is_in_checkmate()

    @staticmethod
    def is_stalemate(board: Board) -> bool:
        return board.current_player.is_in_stalemate()

    @staticmethod
    def is_threatened_board_immediate(board: Board) -> bool:
        """Whether either side's King is currently attacked."""
        return board.white_player.is_in_check() or board.black_player.is_in_check()

    @staticmethod
    def is_end_game(board: Board) -> bool:
        """Whether the side to move is checkmated or stalemated."""
        return not board.current_player.has_escape_moves()

    @staticmethod
    def game_result(board: Board) -> GameResult:
        """Determine the current game result."""
        player = board.current_player
        if player.has_escape_moves():
            return GameResult.IN_PROGRESS
        if player.is_in_check():
            return (
                GameResult.BLACK_WINS
                if player.alliance == Alliance.WHITE
                else GameResult.WHITE_WINS
            )
        return GameResult.DRAW  # stalemate
