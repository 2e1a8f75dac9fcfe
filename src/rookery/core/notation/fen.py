"""FEN parsing and serialization."""

from __future__ import annotations

from rookery.core.board import Board, Builder
from rookery.core.enums import Alliance, PieceType
from rookery.core.piece import Piece
from rookery.core.types import (
    A1,
    A8,
    E1,
    E8,
    H1,
    H8,
    NUM_TILES,
    NUM_TILES_PER_ROW,
    SECOND_ROW,
    SEVENTH_ROW,
    Square,
    get_coordinate_at_position,
    get_position_at_coordinate,
    rank_of,
)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# castling letter -> (alliance, rook corner)
_CASTLING_CORNERS: dict[str, tuple[Alliance, Square]] = {
    "K": (Alliance.WHITE, H1),
    "Q": (Alliance.WHITE, A1),
    "k": (Alliance.BLACK, H8),
    "q": (Alliance.BLACK, A8),
}
_KING_STARTS: dict[Alliance, Square] = {Alliance.WHITE: E1, Alliance.BLACK: E8}


def _parse_placement(placement: str, fen: str) -> dict[Square, str]:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    chars: dict[Square, str] = {}
    for row, rank_text in enumerate(ranks):
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                chars[row * NUM_TILES_PER_ROW + file] = ch
                file += 1
            if file > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")
    return chars


def _parse_castling(castling_part: str) -> set[str]:
    if castling_part == "-":
        return set()
    seen: set[str] = set()
    for ch in castling_part:
        if ch not in _CASTLING_CORNERS or ch in seen:
            raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
        seen.add(ch)
    return seen


def _is_first_move(piece: Piece, rights: set[str]) -> bool:
    """Recover the first-move flag the position implies."""
    if piece.piece_type == PieceType.PAWN:
        start_row = SEVENTH_ROW if piece.alliance == Alliance.WHITE else SECOND_ROW
        return start_row[piece.position]
    if piece.piece_type == PieceType.KING:
        return piece.position == _KING_STARTS[piece.alliance] and any(
            _CASTLING_CORNERS[right][0] == piece.alliance for right in rights
        )
    if piece.piece_type == PieceType.ROOK:
        return (piece.alliance, piece.position) in (
            _CASTLING_CORNERS[right] for right in rights
        )
    return True


def board_from_fen(fen: str) -> Board:
    """Parse a FEN string into a :class:`Board`.

    The halfmove and fullmove fields are validated but not kept.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    chars = _parse_placement(placement, fen)

    if side_part == "w":
        side = Alliance.WHITE
    elif side_part == "b":
        side = Alliance.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    rights = _parse_castling(castling_part)

    if len(parts) > 4 and int(parts[4]) < 0:
        raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")
    if len(parts) > 5 and int(parts[5]) < 1:
        raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    builder = Builder()
    for sq, ch in chars.items():
        piece = Piece.from_char(ch, sq)
        first_move = _is_first_move(piece, rights)
        if piece.piece_type == PieceType.KING:
            white = piece.alliance == Alliance.WHITE
            piece = Piece.king(
                piece.alliance,
                sq,
                king_side_castle_capable=("K" if white else "k") in rights,
                queen_side_castle_capable=("Q" if white else "q") in rights,
                is_first_move=first_move,
            )
        else:
            piece = Piece.from_char(ch, sq, is_first_move=first_move)
        builder.set_piece(piece)

    if ep_part != "-":
        target = get_coordinate_at_position(ep_part)
        expected_rank = 5 if side == Alliance.WHITE else 2
        if rank_of(target) != expected_rank:
            raise ValueError(f"Invalid FEN en-passant square for side-to-move: {ep_part!r}")
        jumper = side.opposite
        pawn = builder.board_config.get(target + jumper.direction * NUM_TILES_PER_ROW)
        if pawn is None or pawn.piece_type != PieceType.PAWN or pawn.alliance != jumper:
            raise ValueError(f"Invalid FEN en-passant square, no pawn to capture: {ep_part!r}")
        builder.set_en_passant_pawn(pawn)

    builder.set_move_maker(side)
    board = builder.build()
    if board.current_player.opponent.is_in_check():
        raise ValueError(f"Invalid FEN, side not to move is in check: {fen!r}")
    return board


def _castling_field(board: Board) -> str:
    text = ""
    for right, (alliance, corner) in _CASTLING_CORNERS.items():
        king = board.player(alliance).king
        rook = board.get_tile(corner).piece
        if (
            king.is_first_move
            and king.position == _KING_STARTS[alliance]
            and rook is not None
            and rook.piece_type == PieceType.ROOK
            and rook.alliance == alliance
            and rook.is_first_move
        ):
            text += right
    return text or "-"


def board_to_fen(board: Board) -> str:
    """Serialise a :class:`Board` to FEN.

    Move clocks are not tracked, so the last two fields are always ``0 1``.
    """
    rows: list[str] = []
    for start in range(0, NUM_TILES, NUM_TILES_PER_ROW):
        empty = 0
        row = ""
        for sq in range(start, start + NUM_TILES_PER_ROW):
            piece = board.get_tile(sq).piece
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    side = board.current_player.alliance
    side_str = "w" if side == Alliance.WHITE else "b"

    ep_str = "-"
    pawn = board.en_passant_pawn
    if pawn is not None and pawn.alliance != side:
        ep_str = get_position_at_coordinate(
            pawn.position - pawn.alliance.direction * NUM_TILES_PER_ROW
        )

    return f"{board_str} {side_str} {_castling_field(board)} {ep_str} 0 1"
