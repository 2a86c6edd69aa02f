from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .move import CastlingRights, MoveRecord
from .piece import Color, Piece, PieceType, Square


BACK_RANK = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

Grid = List[List[Optional[Piece]]]


def _empty_grid() -> Grid:
    return [[None] * 8 for _ in range(8)]


def _full_rights() -> Dict[Color, CastlingRights]:
    return {Color.WHITE: CastlingRights(), Color.BLACK: CastlingRights()}


@dataclass
class Board:
    """Board state: the 8x8 grid plus everything a move can change.

    Notes:
    - Row 0 is black's back rank (rank 8), row 7 is white's (rank 1);
      col 0 is the a-file.
    - ``king_squares`` is kept in lockstep with the grid by the executor.
    - ``history`` and ``captured`` are the game's move list and the
      per-color captured piece types; both are reversed by undo.
    """

    grid: Grid = field(default_factory=_empty_grid)
    side_to_move: Color = Color.WHITE
    castling: Dict[Color, CastlingRights] = field(default_factory=_full_rights)
    ep_square: Optional[Square] = None
    king_squares: Dict[Color, Optional[Square]] = field(
        default_factory=lambda: {Color.WHITE: None, Color.BLACK: None}
    )
    history: List[MoveRecord] = field(default_factory=list, repr=False)
    captured: Dict[Color, List[PieceType]] = field(
        default_factory=lambda: {Color.WHITE: [], Color.BLACK: []}
    )

    @classmethod
    def startpos(cls) -> "Board":
        """Create a board initialized to the standard chess starting position.

        Returns:
            Board: Board with white to move and full castling rights.
        """
        board = cls()
        for col, ptype in enumerate(BACK_RANK):
            board.grid[0][col] = Piece(ptype, Color.BLACK)
            board.grid[1][col] = Piece(PieceType.PAWN, Color.BLACK)
            board.grid[6][col] = Piece(PieceType.PAWN, Color.WHITE)
            board.grid[7][col] = Piece(ptype, Color.WHITE)
        board.king_squares = {Color.WHITE: Square(7, 4), Color.BLACK: Square(0, 4)}
        return board

    def piece_at(self, sq: Square) -> Optional[Piece]:
        return self.grid[sq.row][sq.col]

    def set_piece(self, sq: Square, piece: Optional[Piece]) -> None:
        self.grid[sq.row][sq.col] = piece

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Square, Piece]]:
        """Yield occupied squares in row-major order, optionally for one color."""
        for row in range(8):
            for col in range(8):
                piece = self.grid[row][col]
                if piece is not None and (color is None or piece.color is color):
                    yield Square(row, col), piece

    def locate_kings(self) -> None:
        """Recompute ``king_squares`` from the grid (used after free setup)."""
        self.king_squares = {Color.WHITE: None, Color.BLACK: None}
        for sq, piece in self.pieces():
            if piece.piece_type is PieceType.KING:
                self.king_squares[piece.color] = sq

    def copy(self) -> "Board":
        """Return an independent copy of the full board state."""
        return Board(
            grid=[list(row) for row in self.grid],
            side_to_move=self.side_to_move,
            castling=dict(self.castling),
            ep_square=self.ep_square,
            king_squares=dict(self.king_squares),
            history=list(self.history),
            captured={c: list(types) for c, types in self.captured.items()},
        )
