"""Move-generation tests, including perft.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from rookery.core.board import Board
from rookery.core.enums import Alliance, MoveKind, PieceType
from rookery.core.move_generator import is_column_exclusion, pawn_attack_squares
from rookery.core.notation import STARTING_FEN, board_from_fen
from rookery.core.piece import Piece
from rookery.core.types import (
    A3,
    A7,
    A8,
    B6,
    C7,
    D3,
    E2,
    E3,
    E4,
    F3,
    G1,
    H3,
    H4,
    H8,
)


def perft(board: Board, depth: int) -> int:
    """Count leaf nodes at *depth* by walking immutable boards."""
    if depth == 0:
        return 1
    player = board.current_player
    nodes = 0
    for move in player.legal_moves:
        transition = player.make_move(move)
        if transition.move_status.is_done:
            nodes += perft(transition.to_board, depth - 1)
    return nodes


def destinations(board: Board, sq: int) -> set[int]:
    piece = board.get_tile(sq).piece
    assert piece is not None
    return {move.destination for move in piece.calculate_legal_moves(board)}


class TestColumnExclusion:
    def test_left_edge(self) -> None:
        assert is_column_exclusion(A8, -1)
        assert is_column_exclusion(A8, 15)
        assert is_column_exclusion(A8 + 1, -10)
        assert not is_column_exclusion(A8 + 1, -17)

    def test_right_edge(self) -> None:
        assert is_column_exclusion(H8, 1)
        assert is_column_exclusion(H8 - 1, 10)
        assert not is_column_exclusion(H8, 8)


class TestPieceMoves:
    def test_knight_in_corner(self) -> None:
        board = board_from_fen("N3k3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert destinations(board, A8) == {B6, C7}

    def test_knight_from_start(self, standard_board: Board) -> None:
        assert destinations(standard_board, G1) == {F3, H3}

    def test_rook_does_not_wrap(self) -> None:
        board = board_from_fen("4k3/8/8/8/7R/8/8/4K3 w - - 0 1")
        targets = destinations(board, H4)
        assert len(targets) == 14
        assert A3 not in targets

    def test_slider_stops_at_blockers(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/2p5/1B6/4K3 w - - 0 1")
        # Bishop b2 reaches a1, a3 and c1 and captures c3, but nothing beyond it.
        bishop_sq = 49
        assert destinations(board, bishop_sq) == {56, 40, 42, 58}

    def test_queen_combines_rook_and_bishop(self) -> None:
        board = board_from_fen("4k3/8/8/8/3Q4/8/8/4K3 w - - 0 1")
        assert len(destinations(board, 35)) == 27

    def test_king_moves(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/8/8/K7 w - - 0 1")
        assert destinations(board, 56) == {48, 49, 57}


class TestPawnMoves:
    def test_single_and_double_push(self, standard_board: Board) -> None:
        assert destinations(standard_board, E2) == {E3, E4}
        jump = [
            move
            for move in standard_board.white_player.legal_moves
            if move.current_coordinate == E2 and move.destination == E4
        ]
        assert jump[0].kind == MoveKind.PAWN_JUMP

    def test_blocked_pawn(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert destinations(board, E2) == set()

    def test_no_jump_over_piece(self) -> None:
        board = board_from_fen("4k3/8/8/8/4n3/8/4P3/4K3 w - - 0 1")
        assert destinations(board, E2) == {E3}

    def test_diagonal_captures(self) -> None:
        board = board_from_fen("4k3/8/8/8/8/3p1p2/4P3/4K3 w - - 0 1")
        assert destinations(board, E2) == {E3, E4, D3, F3}

    def test_promotion_is_queen(self) -> None:
        board = board_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        moves = board.get_tile(A7).piece.calculate_legal_moves(board)
        assert len(moves) == 1
        assert moves[0].kind == MoveKind.PROMOTION
        assert moves[0].promotion_type == PieceType.QUEEN
        assert moves[0].decorated is not None

    def test_en_passant_available(self) -> None:
        board = board_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        moves = board.get_tile(28).piece.calculate_legal_moves(board)
        en_passant = [move for move in moves if move.kind == MoveKind.EN_PASSANT]
        assert len(en_passant) == 1
        assert en_passant[0].destination == 19
        assert en_passant[0].attacked_piece.position == 27

    def test_attack_squares_at_edge(self) -> None:
        assert pawn_attack_squares(Piece.pawn(Alliance.WHITE, 48)) == [41]
        assert sorted(pawn_attack_squares(Piece.pawn(Alliance.BLACK, 12))) == [19, 21]


# ── Perft ────────────────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self, standard_board: Board) -> None:
        assert perft(standard_board, 1) == 20

    def test_depth_2(self, standard_board: Board) -> None:
        assert perft(standard_board, 2) == 400

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(board_from_fen(STARTING_FEN), 3) == 8_902


# ── Kiwipete (castling, en passant, pins) ────────────────────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(board_from_fen(KIWIPETE), 1) == 48

    @pytest.mark.slow
    def test_depth_2(self) -> None:
        assert perft(board_from_fen(KIWIPETE), 2) == 2_039


# ── Position 3: en-passant and discovered-check edge cases ───────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft(board_from_fen(POS3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(board_from_fen(POS3), 2) == 191
