"""Square type alias and static board-geometry tables.

Board layout (rank-major, Black's back rank first)::

    a8=0,  b8=1,  ..., h8=7
    a7=8,  b7=9,  ..., h7=15
    ...
    a1=56, b1=57, ..., h1=63

All tables are built once at import time and never mutated.
"""

from __future__ import annotations

from typing import Final, TypeAlias

Square: TypeAlias = int  # 0–63

START_TILE_INDEX: Final = 0
NUM_TILES: Final = 64
NUM_TILES_PER_ROW: Final = 8


def _init_column(column: int) -> tuple[bool, ...]:
    return tuple(sq % NUM_TILES_PER_ROW == column for sq in range(NUM_TILES))


def _init_row(first_square: int) -> tuple[bool, ...]:
    return tuple(
        first_square <= sq < first_square + NUM_TILES_PER_ROW
        for sq in range(NUM_TILES)
    )


# ── Column / row membership ─────────────────────────────────────────────────

FIRST_COLUMN: Final = _init_column(0)
SECOND_COLUMN: Final = _init_column(1)
SEVENTH_COLUMN: Final = _init_column(6)
EIGHTH_COLUMN: Final = _init_column(7)

# Rows are counted from the top of the board: FIRST_ROW is rank 8.
FIRST_ROW: Final = _init_row(0)
SECOND_ROW: Final = _init_row(8)
THIRD_ROW: Final = _init_row(16)
FOURTH_ROW: Final = _init_row(24)
FIFTH_ROW: Final = _init_row(32)
SIXTH_ROW: Final = _init_row(40)
SEVENTH_ROW: Final = _init_row(48)
EIGHTH_ROW: Final = _init_row(56)

# ── Algebraic notation ──────────────────────────────────────────────────────

ALGEBRAIC_NOTATION: Final[tuple[str, ...]] = tuple(
    f"{file}{rank}" for rank in "87654321" for file in "abcdefgh"
)
POSITION_TO_COORDINATE: Final[dict[str, Square]] = {
    name: sq for sq, name in enumerate(ALGEBRAIC_NOTATION)
}


def is_valid_tile_coordinate(sq: int) -> bool:
    """Check whether integer is a valid square index."""
    return START_TILE_INDEX <= sq < NUM_TILES


def get_position_at_coordinate(sq: Square) -> str:
    """Algebraic name of a square, e.g. 0 → 'a8', 63 → 'h1'."""
    if not is_valid_tile_coordinate(sq):
        raise ValueError(f"Invalid tile coordinate: {sq!r}")
    return ALGEBRAIC_NOTATION[sq]


def get_coordinate_at_position(name: str) -> Square:
    """Parse square name, e.g. 'e4' → 36."""
    try:
        return POSITION_TO_COORDINATE[name]
    except KeyError:
        raise ValueError(f"Invalid square name: {name!r}") from None


def file_of(sq: Square) -> int:
    """File index 0–7 (a–h)."""
    return sq % NUM_TILES_PER_ROW


def rank_of(sq: Square) -> int:
    """Rank index 0–7 (1–8)."""
    return 7 - sq // NUM_TILES_PER_ROW


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = range(0, 8)
A7, B7, C7, D7, E7, F7, G7, H7 = range(8, 16)
A6, B6, C6, D6, E6, F6, G6, H6 = range(16, 24)
A5, B5, C5, D5, E5, F5, G5, H5 = range(24, 32)
A4, B4, C4, D4, E4, F4, G4, H4 = range(32, 40)
A3, B3, C3, D3, E3, F3, G3, H3 = range(40, 48)
A2, B2, C2, D2, E2, F2, G2, H2 = range(48, 56)
A1, B1, C1, D1, E1, F1, G1, H1 = range(56, 64)
