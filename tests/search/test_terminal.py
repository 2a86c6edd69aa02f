from __future__ import annotations

from kingside.engine.diagram import board_from_diagram
from kingside.engine.game import Game
from kingside.engine.move import str_to_square
from kingside.engine.piece import Color
from kingside.search.service import INF, MATE_SCORE, SearchService


def _fools_mate() -> Game:
    g = Game.new()
    for mv in ("f2f3", "e7e5", "g2g4", "d8h4"):
        g.apply_move(str_to_square(mv[:2]), str_to_square(mv[2:]))
    return g


def test_mated_side_scores_negative_mate() -> None:
    b = _fools_mate().board
    svc = SearchService()
    assert svc.minimax(b, 2, -INF, INF, True, Color.WHITE) == -(MATE_SCORE + 2)
    assert svc.minimax(b, 2, -INF, INF, False, Color.BLACK) == MATE_SCORE + 2


def test_stalemate_scores_zero() -> None:
    b = board_from_diagram(
        [
            "k.......",
            "........",
            ".Q......",
            "........",
            "........",
            "........",
            "........",
            ".......K",
        ],
        side_to_move=Color.BLACK,
    )
    assert SearchService().minimax(b, 1, -INF, INF, True, Color.BLACK) == 0


def test_depth_zero_is_static_eval() -> None:
    b = _fools_mate().board
    # Terminal positions are only detected with depth remaining
    score = SearchService().minimax(b, 0, -INF, INF, True, Color.WHITE)
    assert abs(score) < MATE_SCORE


def test_checkmated_game_has_no_ai_move() -> None:
    b = _fools_mate().board
    assert SearchService().find_best_move(b, 2, color=Color.WHITE) is None
