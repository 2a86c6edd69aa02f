from __future__ import annotations

import pytest

from kingside.engine.board import Board
from kingside.engine.diagram import board_from_diagram, board_to_diagram
from kingside.engine.piece import Color, PieceType
from kingside.eval import MOBILITY_WEIGHT, PIECE_VALUES, evaluate, material_and_position, mobility


MIDGAME = [
    "r.bqk..r",
    "pppp.ppp",
    "..n..n..",
    "..b.p...",
    "..B.P...",
    ".....N..",
    "PPPP.PPP",
    "RNBQK..R",
]


def mirrored(board: Board) -> Board:
    """Flip ranks and swap colors."""
    rows = [row.swapcase() for row in reversed(board_to_diagram(board))]
    return board_from_diagram(rows, side_to_move=board.side_to_move.opponent)


def test_startpos_is_balanced() -> None:
    b = Board.startpos()
    assert evaluate(b) == 0
    assert evaluate(b, Color.WHITE) == 0


def test_default_point_of_view_is_black() -> None:
    b = board_from_diagram(MIDGAME)
    assert evaluate(b) == evaluate(b, Color.BLACK)


@pytest.mark.parametrize(
    "rows",
    [
        MIDGAME,
        [
            "....k...",
            "..q.....",
            "........",
            "...P....",
            "........",
            ".N......",
            "........",
            "....K...",
        ],
    ],
)
def test_score_is_antisymmetric(rows: list[str]) -> None:
    b = board_from_diagram(rows)
    assert evaluate(b, Color.WHITE) == -evaluate(b, Color.BLACK)


def test_mirror_swap_gives_same_score() -> None:
    b = board_from_diagram(MIDGAME)
    assert evaluate(mirrored(b), Color.BLACK) == evaluate(b, Color.WHITE)


def test_extra_queen_favors_owner() -> None:
    b = Board.startpos()
    b.grid[7][3] = None  # remove white queen
    assert evaluate(b, Color.BLACK) > PIECE_VALUES[PieceType.QUEEN] - 100


def test_advanced_pawn_scores_higher() -> None:
    rows = [
        "k.......",
        "........",
        "........",
        "........",
        "........",
        "........",
        "........",
        ".......K",
    ]
    far = list(rows)
    far[2] = "....P..."
    near = list(rows)
    near[5] = "....P..."
    assert material_and_position(board_from_diagram(far), Color.WHITE) == 100 + 30
    assert material_and_position(board_from_diagram(near), Color.WHITE) == 100 + 0


def test_black_tables_are_rank_mirrored() -> None:
    rows = [
        "k.......",
        "........",
        "........",
        "........",
        "........",
        "........",
        "........",
        ".......K",
    ]
    rows[5] = "....p..."  # black pawn on e3, the mirror of white's e6
    assert material_and_position(board_from_diagram(rows), Color.BLACK) == 100 + 30


def test_knight_prefers_center() -> None:
    rows = [
        "k.......",
        "........",
        "........",
        "........",
        "........",
        "........",
        "........",
        ".......K",
    ]
    center = list(rows)
    center[4] = "...N...."
    corner = list(rows)
    corner[6] = "N......K"
    corner[7] = "........"
    assert material_and_position(board_from_diagram(center), Color.WHITE) > material_and_position(
        board_from_diagram(corner), Color.WHITE
    )


def test_mobility_counts_legal_moves() -> None:
    b = Board.startpos()
    assert mobility(b, Color.WHITE) == 0
    b.grid[6][4] = None  # e2 pawn gone: 9 extra moves for white
    assert mobility(b, Color.WHITE) == MOBILITY_WEIGHT * (29 - 20)


def test_evaluation_does_not_mutate() -> None:
    b = board_from_diagram(MIDGAME, castling="KQkq")
    before = board_to_diagram(b)
    evaluate(b)
    assert board_to_diagram(b) == before
    assert b.history == []
