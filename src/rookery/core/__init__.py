"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from rookery.core import Board, MoveFactory, get_coordinate_at_position

    board = Board.create_standard_board()
    move = MoveFactory.create_move(
        board, get_coordinate_at_position("e2"), get_coordinate_at_position("e4")
    )
    transition = board.current_player.make_move(move)
    print(transition.to_board)
"""

from rookery.core.board import Board, Builder
from rookery.core.enums import Alliance, GameResult, MoveKind, MoveStatus, PieceType
from rookery.core.errors import (
    ChessEngineError,
    InvariantViolationError,
    MissingKingError,
    NullMoveError,
)
from rookery.core.move import NULL_MOVE, Move, MoveFactory, MoveTransition
from rookery.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from rookery.core.piece import Piece
from rookery.core.player import Player, calculate_attacks_on_tile
from rookery.core.rules import Rules
from rookery.core.tile import EmptyTile, OccupiedTile, Tile, create_tile
from rookery.core.types import (
    Square,
    file_of,
    get_coordinate_at_position,
    get_position_at_coordinate,
    is_valid_tile_coordinate,
    rank_of,
)

__all__ = [
    # Enums
    "Alliance",
    "GameResult",
    "MoveKind",
    "MoveStatus",
    "PieceType",
    # Errors
    "ChessEngineError",
    "InvariantViolationError",
    "MissingKingError",
    "NullMoveError",
    # Types / helpers
    "Square",
    "file_of",
    "get_coordinate_at_position",
    "get_position_at_coordinate",
    "is_valid_tile_coordinate",
    "rank_of",
    # Domain objects
    "Board",
    "Builder",
    "EmptyTile",
    "Move",
    "MoveFactory",
    "MoveTransition",
    "NULL_MOVE",
    "OccupiedTile",
    "Piece",
    "Player",
    "Rules",
    "Tile",
    "calculate_attacks_on_tile",
    "create_tile",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
