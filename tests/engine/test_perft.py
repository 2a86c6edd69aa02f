from __future__ import annotations

import pytest

from kingside.engine.board import Board
from kingside.engine.diagram import board_from_diagram, board_to_diagram
from kingside.engine.perft import perft


KIWIPETE = [
    "r...k..r",
    "p.ppqpb.",
    "bn..pnp.",
    "...PN...",
    ".p..P...",
    "..N..Q.p",
    "PPPBBPPP",
    "R...K..R",
]


@pytest.mark.parametrize("depth,expected", [(0, 1), (1, 20), (2, 400), (3, 8902)])
def test_perft_startpos(depth: int, expected: int) -> None:
    b = Board.startpos()
    assert perft(b, depth) == expected
    # The tree walk leaves the board untouched
    assert board_to_diagram(b) == board_to_diagram(Board.startpos())
    assert b.history == []


@pytest.mark.parametrize("depth,expected", [(1, 48), (2, 2039)])
def test_perft_kiwipete(depth: int, expected: int) -> None:
    b = board_from_diagram(KIWIPETE, castling="KQkq")
    assert perft(b, depth) == expected


def test_perft_rejects_negative_depth() -> None:
    with pytest.raises(ValueError):
        perft(Board.startpos(), -1)
