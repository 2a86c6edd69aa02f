from __future__ import annotations

from .board import Board
from .executor import make_move, unmake_move
from .rules import all_legal_moves


def perft(board: Board, depth: int) -> int:
    """Compute perft node count for `board` at `depth`.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Promotions always produce a queen, so counts only match published tables
    for positions without promotions inside the horizon.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    moves = all_legal_moves(board, board.side_to_move)
    if depth == 1:
        return len(moves)
    nodes = 0
    for m in moves:
        make_move(board, m.from_sq, m.to_sq)
        try:
            nodes += perft(board, depth - 1)
        finally:
            unmake_move(board)
    return nodes
