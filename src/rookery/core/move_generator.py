"""Pseudo-legal move generation, one generator per piece type.

Every generator walks candidate offsets from the piece's square.  Offsets
that would wrap around the a- or h-file are rejected by column-exclusion
tables before the destination is looked up.  Moves produced here are not
checked for exposing the mover's own King; :class:`Player` does that when a
move is attempted.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Final

from rookery.core.enums import Alliance, PieceType
from rookery.core.move import Move
from rookery.core.types import (
    EIGHTH_COLUMN,
    FIRST_COLUMN,
    SECOND_COLUMN,
    SECOND_ROW,
    SEVENTH_COLUMN,
    SEVENTH_ROW,
    Square,
    is_valid_tile_coordinate,
)

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.piece import Piece

KNIGHT_OFFSETS: Final = (-17, -15, -10, -6, 6, 10, 15, 17)
KING_OFFSETS: Final = (-9, -8, -7, -1, 1, 7, 8, 9)
BISHOP_OFFSETS: Final = (-9, -7, 7, 9)
ROOK_OFFSETS: Final = (-8, -1, 1, 8)
QUEEN_OFFSETS: Final = BISHOP_OFFSETS + ROOK_OFFSETS

# Pawn candidate offsets, multiplied by the alliance direction.
_PAWN_STEP = 8
_PAWN_JUMP = 16
_PAWN_ATTACKS = (7, 9)


# -- Wraparound guards ------------------------------------------------------

# offset -> columns from which that offset leaves the board sideways.
_COLUMN_EXCLUSIONS: Final[dict[int, tuple[tuple[bool, ...], ...]]] = {
    -17: (FIRST_COLUMN,),
    15: (FIRST_COLUMN,),
    -10: (FIRST_COLUMN, SECOND_COLUMN),
    6: (FIRST_COLUMN, SECOND_COLUMN),
    -15: (EIGHTH_COLUMN,),
    17: (EIGHTH_COLUMN,),
    -6: (SEVENTH_COLUMN, EIGHTH_COLUMN),
    10: (SEVENTH_COLUMN, EIGHTH_COLUMN),
    -9: (FIRST_COLUMN,),
    -1: (FIRST_COLUMN,),
    7: (FIRST_COLUMN,),
    -7: (EIGHTH_COLUMN,),
    1: (EIGHTH_COLUMN,),
    9: (EIGHTH_COLUMN,),
}


def is_column_exclusion(position: Square, offset: int) -> bool:
    """Whether stepping *offset* from *position* would wrap to another rank."""
    return any(column[position] for column in _COLUMN_EXCLUSIONS.get(offset, ()))


# -- Piece-specific generators ---------------------------------------------


def _step_moves(piece: Piece, board: Board, offsets: tuple[int, ...]) -> list[Move]:
    """Single-step generation shared by Knight and King."""
    moves: list[Move] = []
    for offset in offsets:
        if is_column_exclusion(piece.position, offset):
            continue
        destination = piece.position + offset
        if not is_valid_tile_coordinate(destination):
            continue
        occupant = board.get_tile(destination).piece
        if occupant is None:
            moves.append(Move.quiet(board, piece, destination))
        elif occupant.alliance != piece.alliance:
            moves.append(Move.attack(board, piece, destination, occupant))
    return moves


def _sliding_moves(piece: Piece, board: Board, offsets: tuple[int, ...]) -> list[Move]:
    """Ray generation shared by Bishop, Rook and Queen."""
    moves: list[Move] = []
    for offset in offsets:
        current = piece.position
        while True:
            if is_column_exclusion(current, offset):
                break
            current += offset
            if not is_valid_tile_coordinate(current):
                break
            occupant = board.get_tile(current).piece
            if occupant is None:
                moves.append(Move.quiet(board, piece, current))
                continue
            if occupant.alliance != piece.alliance:
                moves.append(Move.attack(board, piece, current, occupant))
            break
    return moves


def _knight_moves(piece: Piece, board: Board) -> list[Move]:
    return _step_moves(piece, board, KNIGHT_OFFSETS)


def _king_moves(piece: Piece, board: Board) -> list[Move]:
    return _step_moves(piece, board, KING_OFFSETS)


def _bishop_moves(piece: Piece, board: Board) -> list[Move]:
    return _sliding_moves(piece, board, BISHOP_OFFSETS)


def _rook_moves(piece: Piece, board: Board) -> list[Move]:
    return _sliding_moves(piece, board, ROOK_OFFSETS)


def _queen_moves(piece: Piece, board: Board) -> list[Move]:
    return _sliding_moves(piece, board, QUEEN_OFFSETS)


def _on_pawn_start_row(pawn: Piece) -> bool:
    if pawn.alliance == Alliance.WHITE:
        return SEVENTH_ROW[pawn.position]
    return SECOND_ROW[pawn.position]


def _promote_if_needed(pawn: Piece, move: Move) -> Move:
    if pawn.alliance.is_pawn_promotion_square(move.destination):
        return Move.promotion(move)
    return move


def _pawn_attack_offsets(pawn: Piece) -> list[int]:
    """Diagonal offsets (already signed) that stay on the board's files."""
    offsets: list[int] = []
    for candidate in _PAWN_ATTACKS:
        offset = candidate * pawn.alliance.direction
        if not is_column_exclusion(pawn.position, offset):
            offsets.append(offset)
    return offsets


def _pawn_moves(pawn: Piece, board: Board) -> list[Move]:
    moves: list[Move] = []
    direction = pawn.alliance.direction

    one_step = pawn.position + direction * _PAWN_STEP
    if is_valid_tile_coordinate(one_step) and not board.get_tile(one_step).is_occupied:
        moves.append(_promote_if_needed(pawn, Move.quiet(board, pawn, one_step)))

        two_step = pawn.position + direction * _PAWN_JUMP
        if (
            pawn.is_first_move
            and _on_pawn_start_row(pawn)
            and not board.get_tile(two_step).is_occupied
        ):
            moves.append(Move.pawn_jump(board, pawn, two_step))

    for offset in _pawn_attack_offsets(pawn):
        destination = pawn.position + offset
        if not is_valid_tile_coordinate(destination):
            continue
        occupant = board.get_tile(destination).piece
        if occupant is not None:
            if occupant.alliance != pawn.alliance:
                moves.append(
                    _promote_if_needed(
                        pawn, Move.attack(board, pawn, destination, occupant)
                    )
                )
            continue

        # En passant: the victim sits one rank behind the empty destination.
        en_passant_pawn = board.en_passant_pawn
        if (
            en_passant_pawn is not None
            and en_passant_pawn.alliance != pawn.alliance
            and en_passant_pawn.position
            == destination + pawn.alliance.opposite_direction * _PAWN_STEP
        ):
            moves.append(
                _promote_if_needed(
                    pawn, Move.en_passant(board, pawn, destination, en_passant_pawn)
                )
            )
    return moves


def pawn_attack_squares(pawn: Piece) -> list[Square]:
    """Squares a pawn threatens diagonally, occupied or not."""
    squares: list[Square] = []
    for offset in _pawn_attack_offsets(pawn):
        target = pawn.position + offset
        if is_valid_tile_coordinate(target):
            squares.append(target)
    return squares


_GENERATORS: Final[dict[PieceType, Callable[[Piece, Board], list[Move]]]] = {
    PieceType.PAWN: _pawn_moves,
    PieceType.KNIGHT: _knight_moves,
    PieceType.BISHOP: _bishop_moves,
    PieceType.ROOK: _rook_moves,
    PieceType.QUEEN: _queen_moves,
    PieceType.KING: _king_moves,
}


def calculate_legal_moves(piece: Piece, board: Board) -> list[Move]:
    """All pseudo-legal moves of *piece* on *board*."""
    return _GENERATORS[piece.piece_type](piece, board)
