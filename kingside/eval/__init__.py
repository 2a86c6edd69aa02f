"""Static evaluation of a position.

Deterministic and side-effect free: mobility is counted by applying and
undoing moves, which leaves the board exactly as it was.
"""

from __future__ import annotations

from typing import Dict, Final, Tuple

from kingside.engine.board import Board
from kingside.engine.piece import Color, PieceType
from kingside.engine.rules import count_legal_moves


# Material values in centipawns
PIECE_VALUES: Final[Dict[PieceType, int]] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20000,
}

MOBILITY_WEIGHT: Final = 10

# Square tables from white's point of view, a8 first (index = row * 8 + col)
PSQT_P: Final[Tuple[int, ...]] = (
    0, 0, 0, 0, 0, 0, 0, 0,
    50, 50, 50, 50, 50, 50, 50, 50,
    10, 10, 20, 30, 30, 20, 10, 10,
    5, 5, 10, 25, 25, 10, 5, 5,
    0, 0, 0, 20, 20, 0, 0, 0,
    5, -5, -10, 0, 0, -10, -5, 5,
    5, 10, 10, -20, -20, 10, 10, 5,
    0, 0, 0, 0, 0, 0, 0, 0,
)  # fmt: skip

PSQT_N: Final[Tuple[int, ...]] = (
    -50, -40, -30, -30, -30, -30, -40, -50,
    -40, -20, 0, 0, 0, 0, -20, -40,
    -30, 0, 10, 15, 15, 10, 0, -30,
    -30, 5, 15, 20, 20, 15, 5, -30,
    -30, 0, 15, 20, 20, 15, 0, -30,
    -30, 5, 10, 15, 15, 10, 5, -30,
    -40, -20, 0, 5, 5, 0, -20, -40,
    -50, -40, -30, -30, -30, -30, -40, -50,
)  # fmt: skip

_TABLES: Final = {PieceType.PAWN: PSQT_P, PieceType.KNIGHT: PSQT_N}


def _table_index(row: int, col: int, color: Color) -> int:
    # Black reads the tables rank-mirrored
    if color is Color.WHITE:
        return row * 8 + col
    return (7 - row) * 8 + col


def material_and_position(board: Board, color: Color) -> int:
    """Material plus square-table bonuses, positive when ``color`` is ahead."""
    score = 0
    for sq, piece in board.pieces():
        value = PIECE_VALUES[piece.piece_type]
        table = _TABLES.get(piece.piece_type)
        if table is not None:
            value += table[_table_index(sq.row, sq.col, piece.color)]
        score += value if piece.color is color else -value
    return score


def mobility(board: Board, color: Color) -> int:
    """Legal-move count difference between ``color`` and its opponent, weighted."""
    own = count_legal_moves(board, color)
    other = count_legal_moves(board, color.opponent)
    return (own - other) * MOBILITY_WEIGHT


def evaluate(board: Board, color: Color = Color.BLACK) -> int:
    """Return a material + PSQT + mobility evaluation in centipawns.

    Positive means advantage for ``color`` (the maximizing side of the
    search, black by default as the AI plays black).
    """
    return material_and_position(board, color) + mobility(board, color)
