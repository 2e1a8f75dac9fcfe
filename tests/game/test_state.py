"""Tests for GameState."""

import logging

import pytest

from rookery.core.enums import Alliance, GameResult, MoveStatus, PieceType
from rookery.core.notation import STARTING_FEN, board_to_fen
from rookery.core.types import C4, D5, D7, D8, E2, E4, E5, E7, E8, F2, F3, G2, G4, H4
from rookery.game.state import GameOptions, GamePhase, GameState

FOOLS_MATE = ((F2, F3), (E7, E5), (G2, G4), (D8, H4))


def play(gs: GameState, *squares: tuple[int, int]) -> None:
    for from_sq, to_sq in squares:
        assert gs.submit(from_sq, to_sq).move_status == MoveStatus.DONE


class TestGameStateSetup:
    def test_board_is_available_before_setup(self) -> None:
        gs = GameState()
        assert gs.phase == GamePhase.NOT_STARTED
        assert gs.side_to_move == Alliance.WHITE

    def test_setup_default(self) -> None:
        gs = GameState()
        gs.setup()
        assert gs.phase == GamePhase.AWAITING_MOVE
        assert gs.result == GameResult.IN_PROGRESS
        assert gs.options == GameOptions()
        assert gs.ply_count == 0
        assert board_to_fen(gs.board) == STARTING_FEN

    def test_setup_custom_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        gs = GameState()
        gs.setup(GameOptions(start_fen=fen))
        assert gs.side_to_move == Alliance.BLACK
        assert board_to_fen(gs.board) == fen

    def test_setup_resets(self) -> None:
        gs = GameState()
        gs.setup()
        play(gs, (E2, E4))
        assert gs.ply_count == 1
        gs.setup()
        assert gs.ply_count == 0
        assert gs.side_to_move == Alliance.WHITE

    def test_setup_on_finished_position(self) -> None:
        gs = GameState()
        gs.setup(GameOptions(start_fen="7k/8/5KQ1/8/8/8/8/8 b - - 0 1"))
        assert gs.phase == GamePhase.GAME_OVER
        assert gs.result == GameResult.DRAW

    def test_setup_rejects_capturable_king(self) -> None:
        gs = GameState()
        with pytest.raises(ValueError):
            gs.setup(GameOptions(start_fen="4k3/8/8/8/8/8/8/4R1K1 w - - 0 1"))
        assert gs.phase == GamePhase.NOT_STARTED


class TestGameStateMoves:
    def test_submit_records(self) -> None:
        gs = GameState()
        gs.setup()
        transition = gs.submit(E2, E4)
        assert transition.move_status == MoveStatus.DONE
        assert gs.board is transition.to_board
        record = gs.move_history[-1]
        assert record.notation == "e2e4"
        assert record.board_after is gs.board
        assert not record.was_capture
        assert not record.was_check
        assert gs.side_to_move == Alliance.BLACK
        assert gs.fullmove_display == 1

    def test_illegal_submit_keeps_board(self) -> None:
        gs = GameState()
        gs.setup()
        board = gs.board
        transition = gs.submit(E2, E5)
        assert transition.move_status == MoveStatus.ILLEGAL_MOVE
        assert gs.board is board
        assert gs.ply_count == 0

    def test_submit_before_setup_is_rejected(self) -> None:
        gs = GameState()
        assert gs.submit(E2, E4).move_status == MoveStatus.ILLEGAL_MOVE

    def test_legal_moves_filter_self_check(self) -> None:
        gs = GameState()
        gs.setup(GameOptions(start_fen="4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1"))
        moves = gs.legal_moves()
        assert all(move.moved_piece.piece_type == PieceType.KING for move in moves)
        assert len(moves) == 4

    def test_capture_is_recorded(self) -> None:
        gs = GameState()
        gs.setup()
        play(gs, (E2, E4), (D7, D5), (E4, D5))
        assert gs.move_history[-1].was_capture
        taken = gs.taken_pieces(Alliance.BLACK)
        assert [piece.piece_type for piece in taken] == [PieceType.PAWN]
        assert gs.taken_pieces(Alliance.WHITE) == []

    def test_taken_pieces_sorted_by_value(self) -> None:
        gs = GameState()
        gs.setup(GameOptions(start_fen="4k3/8/8/3qp3/2P5/5N2/8/4K3 w - - 0 1"))
        # Nxe5, Ke7, cxd5
        play(gs, (F3, E5), (E8, E7), (C4, D5))
        taken = gs.taken_pieces(Alliance.BLACK)
        assert [piece.piece_type for piece in taken] == [PieceType.QUEEN, PieceType.PAWN]


class TestGameOver:
    def test_fools_mate_ends_game(self) -> None:
        gs = GameState()
        gs.setup()
        play(gs, *FOOLS_MATE)
        assert gs.is_game_over
        assert gs.result == GameResult.BLACK_WINS
        assert gs.move_history[-1].was_check

    def test_no_moves_after_game_over(self) -> None:
        gs = GameState()
        gs.setup()
        play(gs, *FOOLS_MATE)
        assert gs.submit(E2, E4).move_status == MoveStatus.ILLEGAL_MOVE
        assert gs.ply_count == 4

    def test_game_over_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        gs = GameState()
        gs.setup()
        with caplog.at_level(logging.INFO, logger="rookery.game.state"):
            play(gs, *FOOLS_MATE)
        assert "BLACK_WINS" in caplog.text

    def test_resign(self) -> None:
        gs = GameState()
        gs.setup()
        gs.resign(Alliance.WHITE)
        assert gs.result == GameResult.BLACK_WINS
        assert gs.phase == GamePhase.GAME_OVER

    def test_set_draw(self) -> None:
        gs = GameState()
        gs.setup()
        gs.set_draw()
        assert gs.result == GameResult.DRAW


class TestUndo:
    def test_undo_restores(self) -> None:
        gs = GameState()
        gs.setup()
        start = gs.board
        play(gs, (E2, E4))
        assert gs.undo()
        assert gs.board is start
        assert gs.ply_count == 0

    def test_undo_steps_back_one_ply(self) -> None:
        gs = GameState()
        gs.setup()
        play(gs, (E2, E4), (E7, E5))
        after_first = gs.move_history[0].board_after
        assert gs.undo()
        assert gs.board is after_first
        assert gs.side_to_move == Alliance.BLACK

    def test_undo_empty(self) -> None:
        gs = GameState()
        gs.setup()
        assert not gs.undo()

    def test_undo_disabled(self) -> None:
        gs = GameState()
        gs.setup(GameOptions(allow_undo=False))
        play(gs, (E2, E4))
        assert not gs.undo()
        assert gs.ply_count == 1

    def test_undo_reopens_finished_game(self) -> None:
        gs = GameState()
        gs.setup()
        play(gs, *FOOLS_MATE)
        assert gs.undo()
        assert gs.phase == GamePhase.AWAITING_MOVE
        assert gs.result == GameResult.IN_PROGRESS
