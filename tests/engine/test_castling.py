from __future__ import annotations

from kingside.engine.board import Board
from kingside.engine.diagram import board_from_diagram
from kingside.engine.executor import make_move, unmake_move
from kingside.engine.move import KINGSIDE, QUEENSIDE, CastlingRights, str_to_square
from kingside.engine.piece import Color, Piece, PieceType, Square
from kingside.engine.rules import legal_moves


def s(name: str) -> Square:
    return str_to_square(name)


def white_board(top: str, bottom: str = "R...K..R", castling: str = "KQ") -> Board:
    return board_from_diagram(
        [top, "........", "........", "........", "........", "........", "........", bottom],
        castling=castling,
    )


def test_white_castling_available_when_clear_and_not_in_check() -> None:
    b = white_board("r...k..r", castling="KQkq")
    moves = legal_moves(b, s("e1"))
    assert s("g1") in moves
    assert s("c1") in moves


def test_castling_blocked_when_in_check() -> None:
    b = white_board("k...r...")
    moves = legal_moves(b, s("e1"))
    assert s("g1") not in moves
    assert s("c1") not in moves


def test_cannot_castle_through_attacked_square() -> None:
    b = white_board("k....r..")
    moves = legal_moves(b, s("e1"))
    assert s("g1") not in moves
    assert s("c1") in moves


def test_cannot_castle_into_attacked_square() -> None:
    b = white_board("k.....r.")
    moves = legal_moves(b, s("e1"))
    assert s("g1") not in moves
    assert s("c1") in moves


def test_queenside_b_file_may_be_attacked() -> None:
    b = white_board("kr......")
    assert s("c1") in legal_moves(b, s("e1"))


def test_castling_needs_empty_path() -> None:
    b = white_board("k.......", bottom="RN..K.NR")
    moves = legal_moves(b, s("e1"))
    assert s("g1") not in moves
    assert s("c1") not in moves


def test_castling_needs_rights_and_rook() -> None:
    b = white_board("k.......", castling="-")
    assert s("g1") not in legal_moves(b, s("e1"))
    b = white_board("k.......", bottom="R...K...", castling="KQ")
    moves = legal_moves(b, s("e1"))
    assert s("g1") not in moves
    assert s("c1") in moves


def test_kingside_castle_moves_rook_and_undo_restores() -> None:
    b = white_board("r...k..r", castling="KQkq")
    rec = make_move(b, s("e1"), s("g1"))
    assert rec.castling_side == KINGSIDE
    assert b.piece_at(s("g1")) == Piece(PieceType.KING, Color.WHITE)
    assert b.piece_at(s("f1")) == Piece(PieceType.ROOK, Color.WHITE)
    assert b.piece_at(s("h1")) is None
    assert b.castling[Color.WHITE] == CastlingRights(False, False)
    assert b.castling[Color.BLACK] == CastlingRights(True, True)

    unmake_move(b)
    assert b.piece_at(s("e1")) == Piece(PieceType.KING, Color.WHITE)
    assert b.piece_at(s("h1")) == Piece(PieceType.ROOK, Color.WHITE)
    assert b.piece_at(s("f1")) is None
    assert b.piece_at(s("g1")) is None
    assert b.castling[Color.WHITE] == CastlingRights(True, True)


def test_black_queenside_castle() -> None:
    b = white_board("r...k..r", castling="KQkq")
    b.side_to_move = Color.BLACK
    assert s("c8") in legal_moves(b, s("e8"))
    rec = make_move(b, s("e8"), s("c8"))
    assert rec.castling_side == QUEENSIDE
    assert b.piece_at(s("d8")) == Piece(PieceType.ROOK, Color.BLACK)
    assert b.piece_at(s("a8")) is None
    assert b.king_squares[Color.BLACK] == s("c8")


def pawn_near_white_king(pawn: str) -> Board:
    b = white_board("k.......", bottom="....K..R", castling="K")
    b.set_piece(s(pawn), Piece(PieceType.PAWN, Color.BLACK))
    return b


def test_empty_pawn_diagonal_does_not_block_castling() -> None:
    b = pawn_near_white_king("e2")
    moves = legal_moves(b, s("e1"))
    assert s("g1") in moves
    # Stepping onto the diagonal puts the king where the pawn can capture
    assert s("f1") not in moves
    assert s("d1") not in moves


def test_pawn_push_square_blocks_castling() -> None:
    b = pawn_near_white_king("g2")
    assert s("g1") not in legal_moves(b, s("e1"))
