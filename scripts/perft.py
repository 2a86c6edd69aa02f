#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import os
import sys
import time
from typing import List, Optional, Sequence

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo root (which contains `kingside/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from kingside.engine.board import Board
from kingside.engine.diagram import board_from_diagram
from kingside.engine.executor import make_move
from kingside.engine.move import parse_move
from kingside.engine.piece import Color
from kingside.engine.perft import perft
from kingside.engine.rules import all_legal_moves


def _load_diagram(path: str, side: str, castling: str) -> Board:
    with open(path, "r", encoding="utf-8") as f:
        rows = [line.strip() for line in f if line.strip()]
    return board_from_diagram(rows, side_to_move=Color(side), castling=castling)


def play_moves(board: Board, moves: Sequence[str]) -> None:
    """Apply ``moves`` (``"e2e4"`` style) to ``board``, rejecting illegal ones."""
    for text in moves:
        mv = parse_move(text)
        if mv not in all_legal_moves(board, board.side_to_move):
            raise ValueError(f"illegal move: {text}")
        make_move(board, mv.from_sq, mv.to_sq)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Count legal move tree nodes (perft)")
    parser.add_argument(
        "--diagram",
        type=str,
        default=None,
        help="File with 8 diagram rows, rank 8 first (default: start position)",
    )
    parser.add_argument("--side", choices=["white", "black"], default="white")
    parser.add_argument("--castling", type=str, default="KQkq", help="Subset of KQkq or '-'")
    parser.add_argument(
        "--moves", nargs="*", default=[], help="Moves to play first, e.g. e2e4 e7e5"
    )
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    args = parser.parse_args(argv)

    board = (
        _load_diagram(args.diagram, args.side, args.castling) if args.diagram else Board.startpos()
    )
    try:
        play_moves(board, args.moves)
    except ValueError as e:
        parser.error(str(e))
    start = time.perf_counter()
    nodes = perft(board, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
