from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import List, Optional

from kingside.engine.attacks import is_king_in_check
from kingside.engine.board import Board
from kingside.engine.executor import make_move, unmake_move
from kingside.engine.move import Move
from kingside.engine.piece import Color
from kingside.engine.rules import all_legal_moves
from kingside.eval import evaluate


logger = logging.getLogger(__name__)

INF = 10_000_000
MATE_SCORE = 1_000_000  # mate scores are MATE_SCORE + remaining depth


@dataclass
class SearchResult:
    best_move: Optional[Move]
    score: Optional[int]
    candidates: List[Move] = field(default_factory=list)
    nodes: int = 0
    depth: int = 0
    time_ms: int = 0
    randomized: bool = False


class SearchService:
    """Depth-limited minimax with alpha-beta pruning.

    The board is mutated only inside apply/recurse/undo steps and is left
    exactly as it was found, including when a branch is cut off. Randomness
    (tie-breaks and difficulty blunders) comes from ``rng`` so callers can
    seed it.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.nodes = 0

    def minimax(
        self,
        board: Board,
        depth: int,
        alpha: int,
        beta: int,
        maximizing: bool,
        color: Color,
        *,
        enable_pruning: bool = True,
    ) -> int:
        """Score the position from ``color``'s point of view.

        Args:
            board (Board): Position; restored before returning.
            depth (int): Remaining plies; 0 returns the static evaluation.
            alpha (int): Best score the maximizing side is assured of.
            beta (int): Best score the minimizing side is assured of.
            maximizing (bool): True when ``color`` is to move.
            color (Color): The maximizing side.
            enable_pruning (bool): Stop exploring siblings once
                ``beta <= alpha``; False gives plain minimax.

        Returns:
            int: Position score; mate sentinels grow with remaining depth so
                quicker mates are preferred.
        """
        self.nodes += 1
        if depth == 0:
            return evaluate(board, color)

        side = color if maximizing else color.opponent
        moves = all_legal_moves(board, side)
        if not moves:
            if is_king_in_check(board, side):
                return -(MATE_SCORE + depth) if maximizing else MATE_SCORE + depth
            return 0

        best = -INF if maximizing else INF
        for mv in moves:
            make_move(board, mv.from_sq, mv.to_sq)
            try:
                score = self.minimax(
                    board,
                    depth - 1,
                    alpha,
                    beta,
                    not maximizing,
                    color,
                    enable_pruning=enable_pruning,
                )
            finally:
                unmake_move(board)
            if maximizing:
                best = max(best, score)
                alpha = max(alpha, score)
            else:
                best = min(best, score)
                beta = min(beta, score)
            if enable_pruning and beta <= alpha:
                break
        return best

    def search(
        self,
        board: Board,
        depth: int,
        randomness: float = 0.0,
        color: Optional[Color] = None,
    ) -> SearchResult:
        """Choose a move for ``color`` (default: side to move).

        Every root move is scored with a full-window minimax one ply shallower;
        the result is a uniform pick among the moves tied for the best score.
        With probability ``randomness`` a uniform pick among all moves is
        played instead.

        Raises:
            ValueError: If ``depth < 1`` or ``randomness`` is outside [0, 1].
        """
        if depth < 1:
            raise ValueError("depth must be >= 1")
        if not 0.0 <= randomness <= 1.0:
            raise ValueError("randomness must be within [0, 1]")
        side = color or board.side_to_move
        start = time.perf_counter()
        self.nodes = 0

        moves = all_legal_moves(board, side)
        if not moves:
            return SearchResult(best_move=None, score=None, depth=depth)

        if randomness > 0 and self.rng.random() < randomness and len(moves) > 1:
            pick = self.rng.choice(moves)
            logger.debug("random move %s (randomness=%.2f)", pick.to_str(), randomness)
            return SearchResult(
                best_move=pick,
                score=None,
                candidates=list(moves),
                depth=depth,
                time_ms=int((time.perf_counter() - start) * 1000),
                randomized=True,
            )

        best_score = -INF
        best_moves: List[Move] = []
        for mv in moves:
            make_move(board, mv.from_sq, mv.to_sq)
            try:
                score = self.minimax(board, depth - 1, -INF, INF, False, side)
            finally:
                unmake_move(board)
            if score > best_score:
                best_score = score
                best_moves = [mv]
            elif score == best_score:
                best_moves.append(mv)

        best = self.rng.choice(best_moves)
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            "search depth=%d nodes=%d score=%d ties=%d time_ms=%d best=%s",
            depth,
            self.nodes,
            best_score,
            len(best_moves),
            elapsed_ms,
            best.to_str(),
        )
        return SearchResult(
            best_move=best,
            score=best_score,
            candidates=best_moves,
            nodes=self.nodes,
            depth=depth,
            time_ms=elapsed_ms,
        )

    def find_best_move(
        self,
        board: Board,
        depth: int,
        randomness: float = 0.0,
        color: Optional[Color] = None,
    ) -> Optional[Move]:
        """Return the chosen move, or None when ``color`` has no legal move."""
        return self.search(board, depth, randomness, color).best_move
