"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from rookery.core.enums import Alliance, MoveKind, PieceType
from rookery.core.types import Square

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.move import Move

# FEN character ↔ (Alliance, PieceType)
_CHAR_MAP: dict[str, tuple[Alliance, PieceType]] = {
    "P": (Alliance.WHITE, PieceType.PAWN),
    "N": (Alliance.WHITE, PieceType.KNIGHT),
    "B": (Alliance.WHITE, PieceType.BISHOP),
    "R": (Alliance.WHITE, PieceType.ROOK),
    "Q": (Alliance.WHITE, PieceType.QUEEN),
    "K": (Alliance.WHITE, PieceType.KING),
    "p": (Alliance.BLACK, PieceType.PAWN),
    "n": (Alliance.BLACK, PieceType.KNIGHT),
    "b": (Alliance.BLACK, PieceType.BISHOP),
    "r": (Alliance.BLACK, PieceType.ROOK),
    "q": (Alliance.BLACK, PieceType.QUEEN),
    "k": (Alliance.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Alliance, PieceType], str] = {
    (Alliance.WHITE, PieceType.PAWN): "♙",
    (Alliance.WHITE, PieceType.KNIGHT): "♘",
    (Alliance.WHITE, PieceType.BISHOP): "♗",
    (Alliance.WHITE, PieceType.ROOK): "♖",
    (Alliance.WHITE, PieceType.QUEEN): "♕",
    (Alliance.WHITE, PieceType.KING): "♔",
    (Alliance.BLACK, PieceType.PAWN): "♟",
    (Alliance.BLACK, PieceType.KNIGHT): "♞",
    (Alliance.BLACK, PieceType.BISHOP): "♝",
    (Alliance.BLACK, PieceType.ROOK): "♜",
    (Alliance.BLACK, PieceType.QUEEN): "♛",
    (Alliance.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Alliance, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable chess piece standing on a square.

    Moving a piece never mutates it: :meth:`move_piece` returns the piece's
    next incarnation.  Equality is structural, so two pieces are equal when
    type, alliance, square and first-move flag agree.

    The castled and castle-capability flags only describe a King's castling
    history and are ignored by equality.
    """

    piece_type: PieceType
    alliance: Alliance
    position: Square
    is_first_move: bool = True
    is_castled: bool = field(default=False, compare=False)
    king_side_castle_capable: bool = field(default=False, compare=False)
    queen_side_castle_capable: bool = field(default=False, compare=False)

    # ── Factories ────────────────────────────────────────────────────────

    @classmethod
    def pawn(cls, alliance: Alliance, position: Square, is_first_move: bool = True) -> Piece:
        return cls(PieceType.PAWN, alliance, position, is_first_move)

    @classmethod
    def knight(cls, alliance: Alliance, position: Square, is_first_move: bool = True) -> Piece:
        return cls(PieceType.KNIGHT, alliance, position, is_first_move)

    @classmethod
    def bishop(cls, alliance: Alliance, position: Square, is_first_move: bool = True) -> Piece:
        return cls(PieceType.BISHOP, alliance, position, is_first_move)

    @classmethod
    def rook(cls, alliance: Alliance, position: Square, is_first_move: bool = True) -> Piece:
        return cls(PieceType.ROOK, alliance, position, is_first_move)

    @classmethod
    def queen(cls, alliance: Alliance, position: Square, is_first_move: bool = True) -> Piece:
        return cls(PieceType.QUEEN, alliance, position, is_first_move)

    @classmethod
    def king(
        cls,
        alliance: Alliance,
        position: Square,
        king_side_castle_capable: bool = True,
        queen_side_castle_capable: bool = True,
        is_first_move: bool = True,
    ) -> Piece:
        return cls(
            PieceType.KING,
            alliance,
            position,
            is_first_move,
            king_side_castle_capable=king_side_castle_capable,
            queen_side_castle_capable=queen_side_castle_capable,
        )

    # ── Rules ────────────────────────────────────────────────────────────

    def calculate_legal_moves(self, board: Board) -> list[Move]:
        """Pseudo-legal moves of this piece on *board*."""
        from rookery.core.move_generator import calculate_legal_moves

        return calculate_legal_moves(self, board)

    def move_piece(self, move: Move) -> Piece:
        """The incarnation of this piece after *move* lands."""
        if self.piece_type == PieceType.KING:
            return replace(
                self,
                position=move.destination,
                is_first_move=False,
                is_castled=move.kind
                in (MoveKind.KING_SIDE_CASTLE, MoveKind.QUEEN_SIDE_CASTLE),
                king_side_castle_capable=False,
                queen_side_castle_capable=False,
            )
        return replace(self, position=move.destination, is_first_move=False)

    def promotion_piece(self, promotion_type: PieceType = PieceType.QUEEN) -> Piece:
        """The piece that replaces this pawn on its square."""
        return Piece(promotion_type, self.alliance, self.position, is_first_move=False)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.alliance, self.piece_type)]

    @classmethod
    def from_char(cls, char: str, position: Square, is_first_move: bool = True) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            alliance, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(ptype, alliance, position, is_first_move)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.alliance, self.piece_type)]

    @property
    def piece_value(self) -> int:
        return self.piece_type.piece_value
