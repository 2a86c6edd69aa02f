"""Legality filtering on top of pseudo-legal generation.

Each candidate is applied with the executor, the mover's king is tested, and
the move is undone again. Pins, discovered checks and en-passant exposure all
fall out of this; nothing is special-cased.
"""

from __future__ import annotations

from typing import List

from .attacks import is_king_in_check
from .board import Board
from .executor import make_move, unmake_move
from .move import Move
from .movegen import pseudo_legal_moves
from .piece import Color, Square


def _leaves_king_safe(board: Board, from_sq: Square, to_sq: Square, color: Color) -> bool:
    make_move(board, from_sq, to_sq)
    try:
        return not is_king_in_check(board, color)
    finally:
        unmake_move(board)


def legal_moves(board: Board, sq: Square) -> List[Square]:
    """Return legal destinations for the piece on ``sq`` (empty if none)."""
    piece = board.piece_at(sq)
    if piece is None:
        return []
    return [
        to_sq
        for to_sq in pseudo_legal_moves(board, sq)
        if _leaves_king_safe(board, sq, to_sq, piece.color)
    ]


def all_legal_moves(board: Board, color: Color) -> List[Move]:
    """Return every legal move of ``color`` in row-major board scan order."""
    moves: List[Move] = []
    for sq, _piece in list(board.pieces(color)):
        for to_sq in legal_moves(board, sq):
            moves.append(Move(sq, to_sq))
    return moves


def count_legal_moves(board: Board, color: Color) -> int:
    return sum(len(legal_moves(board, sq)) for sq, _piece in list(board.pieces(color)))


def has_legal_moves(board: Board, color: Color) -> bool:
    for sq, piece in list(board.pieces(color)):
        for to_sq in pseudo_legal_moves(board, sq):
            if _leaves_king_safe(board, sq, to_sq, piece.color):
                return True
    return False
