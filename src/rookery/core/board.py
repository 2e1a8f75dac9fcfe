"""Board - an immutable chess position built through :class:`Builder`."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from itertools import chain

from rookery.core.enums import Alliance, PieceType
from rookery.core.errors import InvariantViolationError, MissingKingError
from rookery.core.move import NULL_MOVE, Move
from rookery.core.move_generator import calculate_legal_moves
from rookery.core.piece import Piece
from rookery.core.player import Player
from rookery.core.tile import Tile, create_tile
from rookery.core.types import NUM_TILES, NUM_TILES_PER_ROW, Square

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Builder:
    """Mutable scratch space for assembling the next :class:`Board`.

    Pieces are keyed by their square, so setting a piece on an occupied
    square replaces the previous occupant.
    """

    __slots__ = ("board_config", "next_move_maker", "en_passant_pawn", "transition_move")

    def __init__(self) -> None:
        self.board_config: dict[Square, Piece] = {}
        self.next_move_maker: Alliance | None = None
        self.en_passant_pawn: Piece | None = None
        self.transition_move: Move | None = None

    def set_piece(self, piece: Piece) -> Builder:
        self.board_config[piece.position] = piece
        return self

    def set_move_maker(self, alliance: Alliance) -> Builder:
        self.next_move_maker = alliance
        return self

    def set_en_passant_pawn(self, pawn: Piece | None) -> Builder:
        self.en_passant_pawn = pawn
        return self

    def set_transition_move(self, move: Move) -> Builder:
        self.transition_move = move
        return self

    def build(self) -> Board:
        return Board(self)


class Board:
    """Immutable 64-square position with both players' move sets.

    Construction lays out the tiles, computes each side's pseudo-legal moves
    and hands both move sets to the two :class:`Player` objects, which add
    castles and work out check status.
    """

    __slots__ = (
        "_tiles",
        "_white_pieces",
        "_black_pieces",
        "_en_passant_pawn",
        "_transition_move",
        "_white_player",
        "_black_player",
        "_current_player",
    )

    def __init__(self, builder: Builder) -> None:
        if builder.next_move_maker is None:
            _LOGGER.error("Board built without a side to move")
            raise InvariantViolationError("next move maker is not set")

        self._tiles: tuple[Tile, ...] = tuple(
            create_tile(sq, builder.board_config.get(sq)) for sq in range(NUM_TILES)
        )
        self._white_pieces = self._active_pieces(builder, Alliance.WHITE)
        self._black_pieces = self._active_pieces(builder, Alliance.BLACK)
        self._en_passant_pawn = builder.en_passant_pawn
        self._transition_move = (
            builder.transition_move if builder.transition_move is not None else NULL_MOVE
        )

        white_moves = self._standard_moves(self._white_pieces)
        black_moves = self._standard_moves(self._black_pieces)
        self._white_player = Player(self, Alliance.WHITE, white_moves, black_moves)
        self._black_player = Player(self, Alliance.BLACK, black_moves, white_moves)
        self._current_player = builder.next_move_maker.choose_player(
            self._white_player, self._black_player
        )

    @staticmethod
    def _active_pieces(builder: Builder, alliance: Alliance) -> tuple[Piece, ...]:
        pieces = tuple(
            piece for piece in builder.board_config.values() if piece.alliance == alliance
        )
        kings = sum(1 for piece in pieces if piece.piece_type == PieceType.KING)
        if kings != 1:
            _LOGGER.error("%s has %d kings on board", alliance, kings)
            raise MissingKingError(f"{alliance} must have exactly one king, found {kings}")
        return pieces

    def _standard_moves(self, pieces: Iterable[Piece]) -> list[Move]:
        moves: list[Move] = []
        for piece in pieces:
            moves.extend(calculate_legal_moves(piece, self))
        return moves

    # -- Query helpers ------------------------------------------------------

    def get_tile(self, sq: Square) -> Tile:
        return self._tiles[sq]

    @property
    def white_pieces(self) -> tuple[Piece, ...]:
        return self._white_pieces

    @property
    def black_pieces(self) -> tuple[Piece, ...]:
        return self._black_pieces

    @property
    def all_pieces(self) -> Iterator[Piece]:
        return chain(self._white_pieces, self._black_pieces)

    def active_pieces(self, alliance: Alliance) -> tuple[Piece, ...]:
        return alliance.choose_player(self._white_pieces, self._black_pieces)

    @property
    def en_passant_pawn(self) -> Piece | None:
        return self._en_passant_pawn

    @property
    def transition_move(self) -> Move:
        return self._transition_move

    @property
    def white_player(self) -> Player:
        return self._white_player

    @property
    def black_player(self) -> Player:
        return self._black_player

    @property
    def current_player(self) -> Player:
        return self._current_player

    def player(self, alliance: Alliance) -> Player:
        return alliance.choose_player(self._white_player, self._black_player)

    def get_all_legal_moves(self) -> list[Move]:
        """Legal-move sets of both players, White's first."""
        return [*self._white_player.legal_moves, *self._black_player.legal_moves]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def create_standard_board(cls) -> Board:
        """Standard starting position, White to move."""
        builder = Builder()
        for file, piece_type in enumerate(_BACK_RANK):
            black_sq = file
            white_sq = NUM_TILES - NUM_TILES_PER_ROW + file
            if piece_type == PieceType.KING:
                builder.set_piece(Piece.king(Alliance.BLACK, black_sq))
                builder.set_piece(Piece.king(Alliance.WHITE, white_sq))
            else:
                builder.set_piece(Piece(piece_type, Alliance.BLACK, black_sq))
                builder.set_piece(Piece(piece_type, Alliance.WHITE, white_sq))
            builder.set_piece(Piece.pawn(Alliance.BLACK, black_sq + NUM_TILES_PER_ROW))
            builder.set_piece(Piece.pawn(Alliance.WHITE, white_sq - NUM_TILES_PER_ROW))
        builder.set_move_maker(Alliance.WHITE)
        return builder.build()

    # -- Dunder helpers -----------------------------------------------------

    def __str__(self) -> str:
        rows: list[str] = []
        for start in range(0, NUM_TILES, NUM_TILES_PER_ROW):
            tiles = self._tiles[start : start + NUM_TILES_PER_ROW]
            rows.append("".join(f"{str(tile):>3}" for tile in tiles))
        return "\n".join(rows) + "\n"

    def __repr__(self) -> str:
        return f"Board(to_move={self._current_player.alliance!s}, moved={self._transition_move!s})"
