"""Board tiles: empty or occupied squares."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Union

from rookery.core.piece import Piece
from rookery.core.types import NUM_TILES, Square


@dataclass(frozen=True, slots=True)
class EmptyTile:
    coordinate: Square

    @property
    def is_occupied(self) -> bool:
        return False

    @property
    def piece(self) -> None:
        return None

    def __str__(self) -> str:
        return "-"


@dataclass(frozen=True, slots=True)
class OccupiedTile:
    coordinate: Square
    piece: Piece

    @property
    def is_occupied(self) -> bool:
        return True

    def __str__(self) -> str:
        return str(self.piece)


Tile = Union[EmptyTile, OccupiedTile]

_EMPTY_TILES: tuple[EmptyTile, ...] = tuple(EmptyTile(sq) for sq in range(NUM_TILES))


@lru_cache(maxsize=4096)
def _occupied_tile(coordinate: Square, piece: Piece, *_king_flags: bool) -> OccupiedTile:
    # King flags are not part of piece equality, so they key the cache separately.
    return OccupiedTile(coordinate, piece)


def create_tile(coordinate: Square, piece: Piece | None) -> Tile:
    """Shared tile instance for *coordinate* holding *piece* (or nothing)."""
    if piece is None:
        return _EMPTY_TILES[coordinate]
    return _occupied_tile(
        coordinate,
        piece,
        piece.is_castled,
        piece.king_side_castle_capable,
        piece.queen_side_castle_capable,
    )
