from __future__ import annotations

from typing import List

from .move import KINGSIDE, MoveRecord, square_to_str
from .piece import PieceType


def format_move(record: MoveRecord) -> str:
    """Render an applied move for the move-history display.

    Castling is ``O-O`` / ``O-O-O``. Everything else is
    ``{letter}{from}{x|-}{to}`` where the letter is the upper-cased first
    letter of the piece name (pawns have none), e.g. ``e2-e4``,
    ``Qd8xh4``.
    """
    if record.castling_side is not None:
        return "O-O" if record.castling_side == KINGSIDE else "O-O-O"
    ptype = record.piece.piece_type
    letter = "" if ptype is PieceType.PAWN else ptype.value[0].upper()
    sep = "x" if record.captured is not None else "-"
    return f"{letter}{square_to_str(record.from_sq)}{sep}{square_to_str(record.to_sq)}"


def format_history(records: List[MoveRecord]) -> List[str]:
    return [format_move(r) for r in records]
