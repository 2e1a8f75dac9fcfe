"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum
from typing import TypeVar

from rookery.core.types import EIGHTH_ROW, FIRST_ROW, Square

_P = TypeVar("_P")


class Alliance(IntEnum):
    """Side of the board.

    White starts on the high indices (rank 1 = 56..63) and moves toward
    index 0, so its direction is ``-1``; Black moves the other way.
    """

    WHITE = 0
    BLACK = 1

    @property
    def direction(self) -> int:
        return -1 if self is Alliance.WHITE else 1

    @property
    def opposite_direction(self) -> int:
        return -self.direction

    @property
    def opposite(self) -> Alliance:
        return Alliance(1 - self.value)

    @property
    def is_white(self) -> bool:
        return self is Alliance.WHITE

    @property
    def is_black(self) -> bool:
        return self is Alliance.BLACK

    def is_pawn_promotion_square(self, sq: Square) -> bool:
        """Whether a pawn of this side promotes on *sq*."""
        return FIRST_ROW[sq] if self is Alliance.WHITE else EIGHTH_ROW[sq]

    def choose_player(self, white_player: _P, black_player: _P) -> _P:
        return white_player if self is Alliance.WHITE else black_player

    def __str__(self) -> str:
        return self.name.lower()


_PIECE_SYMBOLS: dict[int, str] = {1: "P", 2: "N", 3: "B", 4: "R", 5: "Q", 6: "K"}
_PIECE_VALUES: dict[int, int] = {1: 100, 2: 320, 3: 330, 4: 500, 5: 900, 6: 10000}


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def symbol(self) -> str:
        return _PIECE_SYMBOLS[self.value]

    @property
    def piece_value(self) -> int:
        """Centipawn value, used to order captured material."""
        return _PIECE_VALUES[self.value]

    @property
    def is_rook(self) -> bool:
        return self is PieceType.ROOK

    @property
    def is_king(self) -> bool:
        return self is PieceType.KING

    def __str__(self) -> str:
        return self.symbol


class MoveKind(IntEnum):
    """Move variant tag."""

    NULL = 0
    QUIET = 1
    ATTACK = 2
    PAWN_JUMP = 3
    EN_PASSANT = 4
    KING_SIDE_CASTLE = 5
    QUEEN_SIDE_CASTLE = 6
    PROMOTION = 7


class MoveStatus(IntEnum):
    """Outcome of :meth:`Player.make_move`."""

    DONE = 0
    ILLEGAL_MOVE = 1
    LEAVES_PLAYER_IN_CHECK = 2

    @property
    def is_done(self) -> bool:
        return self is MoveStatus.DONE


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
