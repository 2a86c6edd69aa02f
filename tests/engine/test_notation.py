from __future__ import annotations

import pytest

from kingside.engine.board import Board
from kingside.engine.diagram import board_from_diagram
from kingside.engine.executor import make_move
from kingside.engine.move import Move, parse_move, square_to_str, str_to_square
from kingside.engine.notation import format_history, format_move
from kingside.engine.piece import Square


def s(name: str) -> Square:
    return str_to_square(name)


def test_square_names() -> None:
    assert s("a8") == Square(0, 0)
    assert s("h1") == Square(7, 7)
    assert s("e2") == Square(6, 4)
    assert square_to_str(Square(4, 4)) == "e4"


@pytest.mark.parametrize("bad", ["", "e", "i1", "a9", "a0", "e44"])
def test_invalid_square_names(bad: str) -> None:
    with pytest.raises(ValueError):
        str_to_square(bad)


def test_square_to_str_rejects_off_board() -> None:
    with pytest.raises(ValueError):
        square_to_str(Square(8, 0))


def test_parse_move() -> None:
    assert parse_move("e2e4") == Move(s("e2"), s("e4"))
    assert Move(s("g8"), s("f6")).to_str() == "g8f6"
    with pytest.raises(ValueError):
        parse_move("e2e")


def test_quiet_pawn_move() -> None:
    b = Board.startpos()
    assert format_move(make_move(b, s("e2"), s("e4"))) == "e2-e4"


def test_piece_letter_is_first_letter_of_name() -> None:
    # Knights share the king's letter in the history display
    b = Board.startpos()
    assert format_move(make_move(b, s("b1"), s("c3"))) == "Kb1-c3"
    assert format_move(make_move(b, s("g8"), s("f6"))) == "Kg8-f6"


def test_capture_uses_x() -> None:
    b = Board.startpos()
    records = [
        make_move(b, s("e2"), s("e4")),
        make_move(b, s("d7"), s("d5")),
        make_move(b, s("e4"), s("d5")),
        make_move(b, s("d8"), s("d5")),
    ]
    assert format_history(records) == ["e2-e4", "d7-d5", "e4xd5", "Qd8xd5"]


def test_castling_notation() -> None:
    b = board_from_diagram(
        [
            "r...k..r",
            "........",
            "........",
            "........",
            "........",
            "........",
            "........",
            "R...K..R",
        ],
        castling="KQkq",
    )
    assert format_move(make_move(b, s("e1"), s("g1"))) == "O-O"
    assert format_move(make_move(b, s("e8"), s("c8"))) == "O-O-O"


def test_en_passant_is_a_capture() -> None:
    b = Board.startpos()
    for a, z in (("e2", "e4"), ("a7", "a6"), ("e4", "e5"), ("d7", "d5")):
        make_move(b, s(a), s(z))
    assert format_move(make_move(b, s("e5"), s("d6"))) == "e5xd6"
