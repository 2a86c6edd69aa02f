"""Build positions from plain 8x8 text diagrams.

Rows are given top to bottom (row 0 = rank 8); each row has eight
characters: ``KQRBNP`` for white, ``kqrbnp`` for black and ``.`` for an
empty square. Used by tests and developer tooling to set up positions.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .board import Board
from .move import CastlingRights
from .piece import Color, Piece, Square


def board_from_diagram(
    rows: Sequence[str],
    side_to_move: Color = Color.WHITE,
    castling: str = "-",
    ep_square: Optional[Square] = None,
) -> Board:
    """Create a board from a text diagram.

    Args:
        rows (Sequence[str]): Eight rows of eight characters each.
        side_to_move (Color): Color to move.
        castling (str): Subset of ``"KQkq"`` or ``"-"`` for none.
        ep_square (Optional[Square]): En-passant target square, if any.

    Returns:
        Board: Board with king squares located from the grid and empty
            history.

    Raises:
        ValueError: If the diagram shape, a piece character or the castling
            string is invalid.
    """
    if len(rows) != 8:
        raise ValueError("diagram must have 8 rows")
    board = Board(side_to_move=side_to_move, ep_square=ep_square)
    for row, line in enumerate(rows):
        if len(line) != 8:
            raise ValueError(f"diagram row {row} must have 8 squares")
        for col, ch in enumerate(line):
            if ch != ".":
                board.grid[row][col] = Piece.from_char(ch)

    if castling != "-" and any(ch not in "KQkq" for ch in castling):
        raise ValueError(f"invalid castling rights: {castling!r}")
    board.castling = {
        Color.WHITE: CastlingRights("K" in castling, "Q" in castling),
        Color.BLACK: CastlingRights("k" in castling, "q" in castling),
    }
    board.locate_kings()
    return board


def board_to_diagram(board: Board) -> List[str]:
    return [
        "".join("." if p is None else p.to_char() for p in board.grid[row]) for row in range(8)
    ]
