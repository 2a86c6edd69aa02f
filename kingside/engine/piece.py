from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class Color(str, Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Row delta of a pawn step (white moves towards row 0)."""
        return -1 if self is Color.WHITE else 1

    @property
    def back_row(self) -> int:
        return 7 if self is Color.WHITE else 0

    @property
    def pawn_row(self) -> int:
        return 6 if self is Color.WHITE else 1


class PieceType(str, Enum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


PIECE_TO_CHAR = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
CHAR_TO_PIECE = {v: k for k, v in PIECE_TO_CHAR.items()}


@dataclass(frozen=True)
class Piece:
    """Immutable (type, color) value; equality is structural."""

    piece_type: PieceType
    color: Color

    def to_char(self) -> str:
        ch = PIECE_TO_CHAR[self.piece_type]
        return ch.upper() if self.color is Color.WHITE else ch

    @classmethod
    def from_char(cls, ch: str) -> "Piece":
        """Build a piece from a letter (upper-case white, lower-case black).

        Raises:
            ValueError: If ``ch`` is not one of ``KQRBNPkqrbnp``.
        """
        ptype = CHAR_TO_PIECE.get(ch.lower()) if len(ch) == 1 else None
        if ptype is None:
            raise ValueError(f"invalid piece character: {ch!r}")
        return cls(ptype, Color.WHITE if ch.isupper() else Color.BLACK)


class Square(NamedTuple):
    row: int
    col: int


def is_valid_square(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8
