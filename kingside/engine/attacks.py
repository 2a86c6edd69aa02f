"""Attack detection by reverse scanning from the target square.

A square is attacked by a color when one of that color's pieces has it in
its attack set (see ``movegen.attack_squares``). Scanning outwards from the
target finds the same attackers without generating every enemy move.
"""

from __future__ import annotations

from typing import Optional

from .board import Board
from .piece import Color, Piece, PieceType, Square


KNIGHT_OFFSETS = ((-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1))
KING_OFFSETS = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))
ROOK_DIRS = ((0, 1), (0, -1), (1, 0), (-1, 0))
BISHOP_DIRS = ((1, 1), (1, -1), (-1, 1), (-1, -1))

_ROOK_LIKE = (PieceType.ROOK, PieceType.QUEEN)
_BISHOP_LIKE = (PieceType.BISHOP, PieceType.QUEEN)


def is_square_attacked(board: Board, sq: Square, defending_color: Color) -> bool:
    """Return True if ``sq`` is attacked by the opponent of ``defending_color``."""
    attacker = defending_color.opponent
    grid = board.grid
    row, col = sq

    # Pawns reach empty squares by pushing, occupied or en-passant squares diagonally
    target = grid[row][col]
    pr = row - attacker.forward
    if 0 <= pr < 8:
        if target is None:
            behind = grid[pr][col]
            if _is_pawn(behind, attacker):
                return True
            pr2 = pr - attacker.forward
            if behind is None and pr2 == attacker.pawn_row:
                if _is_pawn(grid[pr2][col], attacker):
                    return True
        if (target is not None and target.color is not attacker) or board.ep_square == sq:
            for pc in (col - 1, col + 1):
                if 0 <= pc < 8 and _is_pawn(grid[pr][pc], attacker):
                    return True

    for dr, dc in KNIGHT_OFFSETS:
        r, c = row + dr, col + dc
        if 0 <= r < 8 and 0 <= c < 8:
            p = grid[r][c]
            if p is not None and p.color is attacker and p.piece_type is PieceType.KNIGHT:
                return True

    for dr, dc in KING_OFFSETS:
        r, c = row + dr, col + dc
        if 0 <= r < 8 and 0 <= c < 8:
            p = grid[r][c]
            if p is not None and p.color is attacker and p.piece_type is PieceType.KING:
                return True

    for dirs, kinds in ((ROOK_DIRS, _ROOK_LIKE), (BISHOP_DIRS, _BISHOP_LIKE)):
        for dr, dc in dirs:
            r, c = row + dr, col + dc
            while 0 <= r < 8 and 0 <= c < 8:
                p = grid[r][c]
                if p is not None:
                    if p.color is attacker and p.piece_type in kinds:
                        return True
                    break
                r += dr
                c += dc
    return False


def _is_pawn(p: Optional[Piece], color: Color) -> bool:
    return p is not None and p.color is color and p.piece_type is PieceType.PAWN


def is_king_in_check(board: Board, color: Color) -> bool:
    """Return True if ``color``'s king is attacked; False without a king."""
    ksq = board.king_squares.get(color)
    if ksq is None:
        return False
    return is_square_attacked(board, ksq, color)
