from __future__ import annotations

from typing import Optional

from .board import Board
from .move import KINGSIDE, QUEENSIDE, CastlingRights, MoveRecord
from .piece import Color, Piece, PieceType, Square


def make_move(board: Board, from_sq: Square, to_sq: Square) -> MoveRecord:
    """Apply a move to ``board`` in-place with reversible state.

    Supports normal moves, captures, en passant, castling and promotion
    (always to a queen). The caller guarantees the move is legal; no
    validation happens here.

    Args:
        board (Board): Position to mutate.
        from_sq (Square): Square of the moving piece.
        to_sq (Square): Destination square.

    Returns:
        MoveRecord: Record appended to ``board.history``.

    Raises:
        ValueError: If ``from_sq`` is empty.
    """
    piece = board.piece_at(from_sq)
    if piece is None:
        raise ValueError("no piece to move from from_sq")
    color = piece.color
    record = MoveRecord(
        from_sq=from_sq,
        to_sq=to_sq,
        piece=piece,
        prev_ep_square=board.ep_square,
        prev_castling=dict(board.castling),
    )

    # En passant: the passed pawn stands one rank behind the destination
    if (
        piece.piece_type is PieceType.PAWN
        and board.ep_square is not None
        and to_sq == board.ep_square
        and from_sq.col != to_sq.col
    ):
        cap_sq = Square(to_sq.row - color.forward, to_sq.col)
        record.captured = board.piece_at(cap_sq)
        record.captured_sq = cap_sq
        record.en_passant = True
        board.set_piece(cap_sq, None)

    # Castling: king moves two columns, rook lands next to it on the inside
    if piece.piece_type is PieceType.KING and abs(to_sq.col - from_sq.col) == 2:
        if to_sq.col > from_sq.col:
            rook_from, rook_to = Square(to_sq.row, 7), Square(to_sq.row, to_sq.col - 1)
            record.castling_side = KINGSIDE
        else:
            rook_from, rook_to = Square(to_sq.row, 0), Square(to_sq.row, to_sq.col + 1)
            record.castling_side = QUEENSIDE
        board.set_piece(rook_to, board.piece_at(rook_from))
        board.set_piece(rook_from, None)

    if not record.en_passant:
        target = board.piece_at(to_sq)
        if target is not None:
            record.captured = target
            record.captured_sq = to_sq

    board.set_piece(to_sq, piece)
    board.set_piece(from_sq, None)

    if piece.piece_type is PieceType.KING:
        board.king_squares[color] = to_sq

    if piece.piece_type is PieceType.PAWN and to_sq.row == color.opponent.back_row:
        board.set_piece(to_sq, Piece(PieceType.QUEEN, color))
        record.promotion = True

    _update_castling_rights(board, piece, from_sq, record.captured, record.captured_sq)

    board.ep_square = None
    if piece.piece_type is PieceType.PAWN and abs(to_sq.row - from_sq.row) == 2:
        board.ep_square = Square(from_sq.row + color.forward, from_sq.col)

    if record.captured is not None:
        board.captured[record.captured.color].append(record.captured.piece_type)

    board.side_to_move = color.opponent
    board.history.append(record)
    return record


def unmake_move(board: Board) -> Optional[MoveRecord]:
    """Undo the last applied move in-place.

    Returns:
        Optional[MoveRecord]: The reverted record, or ``None`` when there is
            no history (no-op).
    """
    if not board.history:
        return None
    record = board.history.pop()
    piece = record.piece
    color = piece.color

    board.side_to_move = color
    board.ep_square = record.prev_ep_square
    board.castling = dict(record.prev_castling)

    if record.captured is not None:
        types = board.captured[record.captured.color]
        for i in range(len(types) - 1, -1, -1):
            if types[i] is record.captured.piece_type:
                del types[i]
                break

    if piece.piece_type is PieceType.KING:
        board.king_squares[color] = record.from_sq

    # Restoring the snapshot also reverts a promotion
    board.set_piece(record.from_sq, piece)
    board.set_piece(record.to_sq, None)
    if record.captured is not None and record.captured_sq is not None:
        board.set_piece(record.captured_sq, record.captured)

    if record.castling_side is not None:
        row = record.to_sq.row
        if record.castling_side == KINGSIDE:
            rook_from, rook_to = Square(row, 7), Square(row, record.to_sq.col - 1)
        else:
            rook_from, rook_to = Square(row, 0), Square(row, record.to_sq.col + 1)
        board.set_piece(rook_from, board.piece_at(rook_to))
        board.set_piece(rook_to, None)
    return record


def _update_castling_rights(
    board: Board,
    piece: Piece,
    from_sq: Square,
    captured: Optional[Piece],
    captured_sq: Optional[Square],
) -> None:
    """Revoke rights on king/rook moves and on rooks captured in their corner."""
    color = piece.color
    if piece.piece_type is PieceType.KING:
        board.castling[color] = CastlingRights(False, False)
    elif piece.piece_type is PieceType.ROOK:
        _revoke_corner(board, color, from_sq)
    if captured is not None and captured.piece_type is PieceType.ROOK and captured_sq is not None:
        _revoke_corner(board, captured.color, captured_sq)


def _revoke_corner(board: Board, color: Color, sq: Square) -> None:
    if sq.row != color.back_row:
        return
    rights = board.castling[color]
    if sq.col == 0 and rights.queen_side:
        board.castling[color] = CastlingRights(rights.king_side, False)
    elif sq.col == 7 and rights.king_side:
        board.castling[color] = CastlingRights(False, rights.queen_side)
