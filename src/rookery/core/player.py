"""Player: per-side legal moves, check detection and move attempts."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rookery.core.enums import Alliance, MoveStatus, PieceType
from rookery.core.errors import MissingKingError
from rookery.core.move import Move, MoveTransition
from rookery.core.move_generator import pawn_attack_squares
from rookery.core.types import (
    A1,
    A8,
    B1,
    B8,
    C1,
    C8,
    D1,
    D8,
    E1,
    E8,
    F1,
    F8,
    G1,
    G8,
    H1,
    H8,
    Square,
)

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.piece import Piece

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _CastleSide:
    """Square layout of one castle for one alliance."""

    empty_squares: tuple[Square, ...]
    transit_squares: tuple[Square, ...]
    rook_start: Square
    king_destination: Square
    rook_destination: Square


@dataclass(frozen=True, slots=True)
class _CastleLayout:
    king_start: Square
    king_side: _CastleSide
    queen_side: _CastleSide


_CASTLE_LAYOUTS: dict[Alliance, _CastleLayout] = {
    Alliance.WHITE: _CastleLayout(
        king_start=E1,
        king_side=_CastleSide((F1, G1), (F1, G1), H1, G1, F1),
        queen_side=_CastleSide((B1, C1, D1), (C1, D1), A1, C1, D1),
    ),
    Alliance.BLACK: _CastleLayout(
        king_start=E8,
        king_side=_CastleSide((F8, G8), (F8, G8), H8, G8, F8),
        queen_side=_CastleSide((B8, C8, D8), (C8, D8), A8, C8, D8),
    ),
}


def calculate_attacks_on_tile(tile: Square, moves: Iterable[Move]) -> list[Move]:
    """Moves from *moves* that land on *tile* and would capture there."""
    return [
        move
        for move in moves
        if move.destination == tile and not move.is_pawn_advance and not move.is_castling_move
    ]


class Player:
    """One side of a :class:`Board`.

    Built fresh for every board.  ``legal_moves`` holds the pseudo-legal
    moves plus any available castles; whether a move exposes the King is only
    decided when it is attempted through :meth:`make_move`.
    """

    __slots__ = ("_board", "_alliance", "_king", "_legal_moves", "_is_in_check")

    def __init__(
        self,
        board: Board,
        alliance: Alliance,
        player_legals: list[Move],
        opponent_legals: list[Move],
    ) -> None:
        self._board = board
        self._alliance = alliance
        self._king = self._establish_king()
        self._is_in_check = bool(
            calculate_attacks_on_tile(self._king.position, opponent_legals)
        )
        self._legal_moves: tuple[Move, ...] = (
            *player_legals,
            *self._calculate_king_castles(opponent_legals),
        )

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def alliance(self) -> Alliance:
        return self._alliance

    @property
    def king(self) -> Piece:
        return self._king

    @property
    def legal_moves(self) -> tuple[Move, ...]:
        return self._legal_moves

    @property
    def active_pieces(self) -> tuple[Piece, ...]:
        return self._board.active_pieces(self._alliance)

    @property
    def opponent(self) -> Player:
        return self._board.player(self._alliance.opposite)

    # ── Check / terminal state ───────────────────────────────────────────

    def is_in_check(self) -> bool:
        return self._is_in_check

    def is_in_checkmate(self) -> bool:
        return self._is_in_check and not self.has_escape_moves()

    def is_in_stalemate(self) -> bool:
        return not self._is_in_check and not self.has_escape_moves()

    def has_escape_moves(self) -> bool:
        """Whether any legal move survives the self-check test."""
        return any(
            self.make_move(move).move_status.is_done for move in self._legal_moves
        )

    # ── Move attempts ────────────────────────────────────────────────────

    def is_move_legal(self, move: Move) -> bool:
        if move.moved_piece is None:
            return False
        if move.is_castling_move and self._is_in_check:
            return False
        return move in self._legal_moves

    def make_move(self, move: Move) -> MoveTransition:
        """Try *move*; the board only advances when the status is ``DONE``."""
        if not self.is_move_legal(move):
            _LOGGER.debug("%s rejected illegal move %s", self._alliance, move)
            return MoveTransition(self._board, self._board, move, MoveStatus.ILLEGAL_MOVE)

        transitioned = move.execute()
        king_attacks = calculate_attacks_on_tile(
            transitioned.current_player.opponent.king.position,
            transitioned.current_player.legal_moves,
        )
        if king_attacks:
            _LOGGER.debug("%s move %s leaves the king in check", self._alliance, move)
            return MoveTransition(
                self._board, self._board, move, MoveStatus.LEAVES_PLAYER_IN_CHECK
            )
        return MoveTransition(self._board, transitioned, move, MoveStatus.DONE)

    # ── Construction helpers ─────────────────────────────────────────────

    def _establish_king(self) -> Piece:
        for piece in self.active_pieces:
            if piece.piece_type == PieceType.KING:
                return piece
        _LOGGER.error("%s king could not be established", self._alliance)
        raise MissingKingError(f"No {self._alliance} king on board")

    def _is_tile_attacked(self, tile: Square, opponent_legals: list[Move]) -> bool:
        if calculate_attacks_on_tile(tile, opponent_legals):
            return True
        # Extends the pseudo-legal attack test: pawns only generate diagonal
        # moves onto enemy pieces, so their control of empty squares is
        # checked separately.
        for piece in self._board.active_pieces(self._alliance.opposite):
            if piece.piece_type == PieceType.PAWN and tile in pawn_attack_squares(piece):
                return True
        return False

    def _calculate_king_castles(self, opponent_legals: list[Move]) -> list[Move]:
        king = self._king
        layout = _CASTLE_LAYOUTS[self._alliance]
        if (
            not king.is_first_move
            or king.position != layout.king_start
            or self._is_in_check
        ):
            return []

        castles: list[Move] = []
        sides = (
            (layout.king_side, Move.king_side_castle),
            (layout.queen_side, Move.queen_side_castle),
        )
        for side, make_castle in sides:
            if any(self._board.get_tile(sq).is_occupied for sq in side.empty_squares):
                continue
            rook = self._board.get_tile(side.rook_start).piece
            if (
                rook is None
                or rook.piece_type != PieceType.ROOK
                or rook.alliance != self._alliance
                or not rook.is_first_move
            ):
                continue
            if any(
                self._is_tile_attacked(sq, opponent_legals) for sq in side.transit_squares
            ):
                continue
            castles.append(
                make_castle(
                    self._board,
                    king,
                    side.king_destination,
                    rook,
                    side.rook_start,
                    side.rook_destination,
                )
            )
        return castles

    def __repr__(self) -> str:
        return f"Player({self._alliance!s}, moves={len(self._legal_moves)}, check={self._is_in_check})"
