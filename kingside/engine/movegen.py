"""Pseudo-legal move generation.

Two query modes share the per-piece tables:

- ``pseudo_legal_moves``: destinations a piece may move to in play,
  including castling destinations for the king.
- ``attack_squares``: squares a piece attacks. Never considers castling,
  so attack scans cannot recurse into castling checks.

Neither mode looks at whether the mover's own king is left in check; that is
the job of ``rules``.
"""

from __future__ import annotations

from typing import List, Tuple

from .attacks import BISHOP_DIRS, KING_OFFSETS, KNIGHT_OFFSETS, ROOK_DIRS
from .attacks import is_king_in_check, is_square_attacked
from .board import Board
from .piece import Color, PieceType, Square


def _slide(
    board: Board, sq: Square, color: Color, dirs: Tuple[Tuple[int, int], ...]
) -> List[Square]:
    out: List[Square] = []
    grid = board.grid
    for dr, dc in dirs:
        r, c = sq.row + dr, sq.col + dc
        while 0 <= r < 8 and 0 <= c < 8:
            target = grid[r][c]
            if target is None:
                out.append(Square(r, c))
            else:
                if target.color is not color:
                    out.append(Square(r, c))
                break
            r += dr
            c += dc
    return out


def _step(
    board: Board, sq: Square, color: Color, offsets: Tuple[Tuple[int, int], ...]
) -> List[Square]:
    out: List[Square] = []
    grid = board.grid
    for dr, dc in offsets:
        r, c = sq.row + dr, sq.col + dc
        if 0 <= r < 8 and 0 <= c < 8:
            target = grid[r][c]
            if target is None or target.color is not color:
                out.append(Square(r, c))
    return out


def _pawn_moves(board: Board, sq: Square, color: Color) -> List[Square]:
    out: List[Square] = []
    grid = board.grid
    step = color.forward
    r = sq.row + step
    if not 0 <= r < 8:
        return out
    if grid[r][sq.col] is None:
        out.append(Square(r, sq.col))
        if sq.row == color.pawn_row and grid[r + step][sq.col] is None:
            out.append(Square(r + step, sq.col))
    for c in (sq.col - 1, sq.col + 1):
        if not 0 <= c < 8:
            continue
        target = grid[r][c]
        if target is not None and target.color is not color:
            out.append(Square(r, c))
        elif board.ep_square == (r, c):
            out.append(Square(r, c))
    return out


def _castling_moves(board: Board, sq: Square, color: Color) -> List[Square]:
    rights = board.castling[color]
    if not (rights.king_side or rights.queen_side):
        return []
    row = color.back_row
    if sq != (row, 4) or is_king_in_check(board, color):
        return []
    out: List[Square] = []
    grid = board.grid
    if rights.king_side and _has_rook(board, Square(row, 7), color):
        if grid[row][5] is None and grid[row][6] is None:
            if not is_square_attacked(board, Square(row, 5), color) and not is_square_attacked(
                board, Square(row, 6), color
            ):
                out.append(Square(row, 6))
    if rights.queen_side and _has_rook(board, Square(row, 0), color):
        if grid[row][3] is None and grid[row][2] is None and grid[row][1] is None:
            if not is_square_attacked(board, Square(row, 3), color) and not is_square_attacked(
                board, Square(row, 2), color
            ):
                out.append(Square(row, 2))
    return out


def _has_rook(board: Board, sq: Square, color: Color) -> bool:
    p = board.piece_at(sq)
    return p is not None and p.color is color and p.piece_type is PieceType.ROOK


def _piece_targets(board: Board, sq: Square, play: bool) -> List[Square]:
    piece = board.piece_at(sq)
    if piece is None:
        return []
    color = piece.color
    ptype = piece.piece_type
    if ptype is PieceType.PAWN:
        return _pawn_moves(board, sq, color)
    if ptype is PieceType.ROOK:
        return _slide(board, sq, color, ROOK_DIRS)
    if ptype is PieceType.KNIGHT:
        return _step(board, sq, color, KNIGHT_OFFSETS)
    if ptype is PieceType.BISHOP:
        return _slide(board, sq, color, BISHOP_DIRS)
    if ptype is PieceType.QUEEN:
        return _slide(board, sq, color, ROOK_DIRS) + _slide(board, sq, color, BISHOP_DIRS)
    moves = _step(board, sq, color, KING_OFFSETS)
    if play:
        moves.extend(_castling_moves(board, sq, color))
    return moves


def pseudo_legal_moves(board: Board, sq: Square) -> List[Square]:
    """Return play-mode destinations for the piece on ``sq``.

    Args:
        board (Board): Position to generate on.
        sq (Square): Origin square; empty squares yield no moves.

    Returns:
        List[Square]: Destinations in generation order, including en-passant
            captures and castling king destinations.
    """
    return _piece_targets(board, sq, play=True)


def attack_squares(board: Board, sq: Square) -> List[Square]:
    """Return the squares attacked by the piece on ``sq``.

    This is the play-mode set without castling. A pawn therefore "attacks"
    the empty squares it can push to, and a diagonal only when an enemy
    piece or the en-passant target is there.
    """
    return _piece_targets(board, sq, play=False)
