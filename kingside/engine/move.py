from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from .piece import Color, Piece, Square, is_valid_square


KINGSIDE = "kingside"
QUEENSIDE = "queenside"


@dataclass(frozen=True)
class CastlingRights:
    """Castling availability for one color."""

    king_side: bool = True
    queen_side: bool = True


@dataclass(frozen=True)
class Move:
    """Engine-internal move representation.

    Attributes:
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.
    """

    from_sq: Square
    to_sq: Square

    def to_str(self) -> str:
        """Serialize the move as origin and destination names.

        Returns:
            str: Move encoded like ``"e2e4"``.
        """
        return square_to_str(self.from_sq) + square_to_str(self.to_sq)


@dataclass
class MoveRecord:
    """Everything needed to reverse one applied ply.

    Attributes:
        from_sq (Square): Origin of the moving piece.
        to_sq (Square): Destination of the moving piece.
        piece (Piece): Moving piece as it stood before the move (a pawn for
            promotions).
        captured (Optional[Piece]): Captured piece, if any.
        captured_sq (Optional[Square]): Where the captured piece stood; differs
            from ``to_sq`` only for en passant.
        prev_ep_square (Optional[Square]): En-passant target before the move.
        prev_castling (Dict[Color, CastlingRights]): Castling rights before the
            move.
        en_passant (bool): Whether the move was an en-passant capture.
        castling_side (Optional[str]): ``"kingside"`` or ``"queenside"`` for
            castling moves.
        promotion (bool): Whether a pawn was promoted to a queen.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Optional[Piece] = None
    captured_sq: Optional[Square] = None
    prev_ep_square: Optional[Square] = None
    prev_castling: Dict[Color, CastlingRights] = field(default_factory=dict)
    en_passant: bool = False
    castling_side: Optional[str] = None
    promotion: bool = False

    @property
    def move(self) -> Move:
        return Move(self.from_sq, self.to_sq)


def str_to_square(s: str) -> Square:
    """Convert algebraic notation into a board square.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        Square: Square with row 0 on rank 8 and col 0 on the a-file.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    col = ord(s[0]) - ord("a")
    row = 8 - int(s[1])
    return Square(row, col)


def square_to_str(sq: Square) -> str:
    """Convert a board square into algebraic notation.

    Args:
        sq (Square): Square with row and col in range 0..7.

    Returns:
        str: Algebraic notation for ``sq``.

    Raises:
        ValueError: If ``sq`` lies outside the board.
    """
    if not is_valid_square(sq.row, sq.col):
        raise ValueError(f"invalid square: {tuple(sq)}")
    return chr(ord("a") + sq.col) + str(8 - sq.row)


def parse_move(text: str) -> Move:
    """Parse a move written as two square names (``"e2e4"``).

    Raises:
        ValueError: If the string has an invalid length or squares.
    """
    if len(text) != 4:
        raise ValueError(f"invalid move length: {text!r}")
    return Move(str_to_square(text[0:2]), str_to_square(text[2:4]))
