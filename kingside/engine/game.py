from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from .attacks import is_king_in_check
from .board import Board
from .executor import make_move, unmake_move
from .move import Move, MoveRecord
from .notation import format_history
from .piece import Color, Piece, PieceType, Square, is_valid_square
from .rules import all_legal_moves, has_legal_moves, legal_moves


logger = logging.getLogger(__name__)

Listener = Callable[[str, Optional[MoveRecord]], None]


class IllegalMoveError(ValueError):
    """Raised when a move outside the legal set is applied through ``Game``."""


class GameStatus(str, Enum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


@dataclass
class Game:
    """Game wrapper around a board with helper operations.

    Responsibility: track whose turn it is, expose legal moves, apply and
    undo moves, and notify listeners of state changes.
    """

    board: Board
    _listeners: List[Listener] = field(default_factory=list, repr=False)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.startpos())

    @property
    def turn(self) -> Color:
        return self.board.side_to_move

    @property
    def history(self) -> List[MoveRecord]:
        return self.board.history

    @property
    def captured(self) -> Dict[Color, List[PieceType]]:
        return self.board.captured

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, event: str, record: Optional[MoveRecord]) -> None:
        for listener in list(self._listeners):
            listener(event, record)

    def reset(self) -> None:
        self.board = Board.startpos()
        self._notify("reset", None)

    def piece_at(self, sq: Square) -> Optional[Piece]:
        return self.board.piece_at(sq)

    def get_legal_moves(self, sq: Square) -> List[Square]:
        """Legal destinations for ``sq``; empty for empty or out-of-turn squares."""
        if not is_valid_square(sq.row, sq.col):
            return []
        piece = self.board.piece_at(sq)
        if piece is None or piece.color is not self.turn:
            return []
        return legal_moves(self.board, sq)

    def legal_moves(self, color: Optional[Color] = None) -> List[Move]:
        return all_legal_moves(self.board, color or self.turn)

    def apply_move(self, from_sq: Square, to_sq: Square) -> MoveRecord:
        # Validate legality
        if to_sq not in self.get_legal_moves(from_sq):
            raise IllegalMoveError("illegal move")
        record = make_move(self.board, from_sq, to_sq)
        logger.debug("applied %s", record.move.to_str())
        self._notify("move", record)
        return record

    def undo_last_move(self) -> Optional[MoveRecord]:
        """Revert the most recent ply; a no-op returning None on empty history."""
        record = unmake_move(self.board)
        if record is not None:
            logger.debug("undid %s", record.move.to_str())
            self._notify("undo", record)
        return record

    def undo_turn(self, ai_color: Color) -> List[MoveRecord]:
        """Undo the AI reply (if it was the last ply) and the human move before it."""
        undone: List[MoveRecord] = []
        if self.history and self.history[-1].piece.color is ai_color:
            record = self.undo_last_move()
            if record is not None:
                undone.append(record)
        record = self.undo_last_move()
        if record is not None:
            undone.append(record)
        return undone

    # --- State flags for collaborators ---
    def is_in_check(self, color: Optional[Color] = None) -> bool:
        return is_king_in_check(self.board, color or self.turn)

    def has_legal_moves(self, color: Optional[Color] = None) -> bool:
        return has_legal_moves(self.board, color or self.turn)

    def is_checkmate(self, color: Optional[Color] = None) -> bool:
        c = color or self.turn
        return (not self.has_legal_moves(c)) and self.is_in_check(c)

    def is_stalemate(self, color: Optional[Color] = None) -> bool:
        c = color or self.turn
        return (not self.has_legal_moves(c)) and (not self.is_in_check(c))

    def status(self) -> GameStatus:
        in_check = self.is_in_check()
        if not self.has_legal_moves():
            return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
        return GameStatus.CHECK if in_check else GameStatus.ONGOING

    def winner(self) -> Optional[Color]:
        if self.status() is GameStatus.CHECKMATE:
            return self.turn.opponent
        return None

    def notation_history(self) -> List[str]:
        return format_history(self.history)
