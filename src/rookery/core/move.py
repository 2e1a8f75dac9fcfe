"""Move value objects, the move factory and move transitions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rookery.core.enums import Alliance, MoveKind, MoveStatus, PieceType
from rookery.core.errors import NullMoveError
from rookery.core.piece import Piece
from rookery.core.types import Square, get_position_at_coordinate

if TYPE_CHECKING:
    from rookery.core.board import Board, Builder
    from rookery.core.player import Player

_LOGGER = logging.getLogger(__name__)

_CASTLE_KINDS = (MoveKind.KING_SIDE_CASTLE, MoveKind.QUEEN_SIDE_CASTLE)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable move, tagged by :class:`MoveKind`.

    ``board`` is the position the move was generated on; it does not take
    part in equality, so the same move generated on two boards compares
    equal.  A promotion wraps the underlying pawn move in ``decorated``.
    """

    board: Board | None = field(compare=False, repr=False)
    moved_piece: Piece | None
    destination: Square
    kind: MoveKind = MoveKind.QUIET
    attacked_piece: Piece | None = None
    castle_rook: Piece | None = None
    castle_rook_start: Square = -1
    castle_rook_destination: Square = -1
    decorated: Move | None = None
    promotion_type: PieceType | None = None

    # ── Constructors ─────────────────────────────────────────────────────

    @classmethod
    def quiet(cls, board: Board, piece: Piece, destination: Square) -> Move:
        return cls(board, piece, destination)

    @classmethod
    def attack(cls, board: Board, piece: Piece, destination: Square, attacked: Piece) -> Move:
        return cls(board, piece, destination, MoveKind.ATTACK, attacked_piece=attacked)

    @classmethod
    def pawn_jump(cls, board: Board, pawn: Piece, destination: Square) -> Move:
        return cls(board, pawn, destination, MoveKind.PAWN_JUMP)

    @classmethod
    def en_passant(cls, board: Board, pawn: Piece, destination: Square, attacked: Piece) -> Move:
        return cls(board, pawn, destination, MoveKind.EN_PASSANT, attacked_piece=attacked)

    @classmethod
    def king_side_castle(
        cls,
        board: Board,
        king: Piece,
        destination: Square,
        rook: Piece,
        rook_start: Square,
        rook_destination: Square,
    ) -> Move:
        return cls(
            board,
            king,
            destination,
            MoveKind.KING_SIDE_CASTLE,
            castle_rook=rook,
            castle_rook_start=rook_start,
            castle_rook_destination=rook_destination,
        )

    @classmethod
    def queen_side_castle(
        cls,
        board: Board,
        king: Piece,
        destination: Square,
        rook: Piece,
        rook_start: Square,
        rook_destination: Square,
    ) -> Move:
        return cls(
            board,
            king,
            destination,
            MoveKind.QUEEN_SIDE_CASTLE,
            castle_rook=rook,
            castle_rook_start=rook_start,
            castle_rook_destination=rook_destination,
        )

    @classmethod
    def promotion(cls, inner: Move, promotion_type: PieceType = PieceType.QUEEN) -> Move:
        """Wrap a pawn move that lands on the last rank."""
        return cls(
            inner.board,
            inner.moved_piece,
            inner.destination,
            MoveKind.PROMOTION,
            attacked_piece=inner.attacked_piece,
            decorated=inner,
            promotion_type=promotion_type,
        )

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def current_coordinate(self) -> Square:
        if self.moved_piece is None:
            return -1
        return self.moved_piece.position

    @property
    def is_attack(self) -> bool:
        return self.attacked_piece is not None

    @property
    def is_castling_move(self) -> bool:
        return self.kind in _CASTLE_KINDS

    @property
    def is_promotion(self) -> bool:
        return self.kind == MoveKind.PROMOTION

    @property
    def is_pawn_advance(self) -> bool:
        """A straight pawn push, which never threatens its destination."""
        if self.moved_piece is None or self.moved_piece.piece_type != PieceType.PAWN:
            return False
        return not self.is_attack

    # ── Execution ────────────────────────────────────────────────────────

    def execute(self) -> Board:
        """Build the board that results from playing this move.

        Legality is not checked here; see :meth:`Player.make_move`.
        """
        if self.kind == MoveKind.NULL:
            raise NullMoveError("cannot execute the null move")
        if self.kind == MoveKind.PROMOTION:
            return self._execute_promotion()
        if self.is_castling_move:
            return self._execute_castle()
        return self._execute_standard()

    def _mover(self) -> Player:
        assert self.board is not None and self.moved_piece is not None
        return self.moved_piece.alliance.choose_player(
            self.board.white_player, self.board.black_player
        )

    def _execute_standard(self) -> Board:
        from rookery.core.board import Builder

        assert self.moved_piece is not None
        mover = self._mover()
        builder = Builder()
        for piece in mover.active_pieces:
            if piece != self.moved_piece:
                builder.set_piece(piece)
        # An en passant victim does not stand on the destination square, so
        # captured pieces are dropped by identity rather than by square.
        for piece in mover.opponent.active_pieces:
            if piece != self.attacked_piece:
                builder.set_piece(piece)

        moved = self.moved_piece.move_piece(self)
        builder.set_piece(moved)
        if self.kind == MoveKind.PAWN_JUMP:
            builder.set_en_passant_pawn(moved)
        return self._finish(builder, mover.opponent.alliance)

    def _execute_castle(self) -> Board:
        from rookery.core.board import Builder

        assert self.board is not None
        assert self.moved_piece is not None and self.castle_rook is not None
        builder = Builder()
        for piece in self.board.all_pieces:
            if piece != self.moved_piece and piece != self.castle_rook:
                builder.set_piece(piece)
        builder.set_piece(self.moved_piece.move_piece(self))
        builder.set_piece(
            Piece.rook(
                self.castle_rook.alliance,
                self.castle_rook_destination,
                is_first_move=False,
            )
        )
        return self._finish(builder, self.moved_piece.alliance.opposite)

    def _execute_promotion(self) -> Board:
        from rookery.core.board import Builder

        assert self.decorated is not None
        pawn_moved_board = self.decorated.execute()
        promoted_pawn = pawn_moved_board.get_tile(self.destination).piece
        assert promoted_pawn is not None

        builder = Builder()
        for piece in pawn_moved_board.all_pieces:
            if piece != promoted_pawn:
                builder.set_piece(piece)
        builder.set_piece(
            promoted_pawn.promotion_piece(self.promotion_type or PieceType.QUEEN)
        )
        return self._finish(builder, pawn_moved_board.current_player.alliance)

    def _finish(self, builder: Builder, next_move_maker: Alliance) -> Board:
        builder.set_move_maker(next_move_maker)
        builder.set_transition_move(self)
        return builder.build()

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        if self.kind == MoveKind.NULL:
            return "null"
        if self.kind == MoveKind.KING_SIDE_CASTLE:
            return "O-O"
        if self.kind == MoveKind.QUEEN_SIDE_CASTLE:
            return "O-O-O"
        text = get_position_at_coordinate(self.current_coordinate) + get_position_at_coordinate(
            self.destination
        )
        if self.promotion_type is not None:
            text += self.promotion_type.symbol.lower()
        return text


NULL_MOVE = Move(None, None, -1, MoveKind.NULL)


class MoveFactory:
    """Resolves a ``(from, to)`` coordinate pair to a generated move."""

    def __init__(self) -> None:
        raise TypeError("MoveFactory is not instantiable")

    @staticmethod
    def create_move(board: Board, current_coordinate: Square, destination: Square) -> Move:
        """First legal move of *board* between the two squares, else ``NULL_MOVE``."""
        for move in board.get_all_legal_moves():
            if (
                move.current_coordinate == current_coordinate
                and move.destination == destination
            ):
                return move
        _LOGGER.debug("No move from %s to %s", current_coordinate, destination)
        return NULL_MOVE


@dataclass(frozen=True, slots=True)
class MoveTransition:
    """Result of attempting a move.

    ``to_board`` is ``from_board`` whenever the move was rejected.
    """

    from_board: Board
    to_board: Board
    move: Move
    move_status: MoveStatus
