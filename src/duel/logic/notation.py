"""
Simplified move labels.

The label is a reduced form of SAN: piece letter (none for pawns), an "x"
when the destination square was occupied, the destination square, and
"=<piece>" for promotions. Pawn captures keep their source file ("exd5").

Not produced: check/mate suffixes, disambiguation between like pieces,
castling notation (a castle reads as a king move, "Kg1") and en-passant
capture markers (the destination square is empty, so "d6").
"""

import chess


def simple_label(board: chess.Board, move: chess.Move) -> str:
    """Build the label for move, evaluated on the position *before* it is played."""
    piece = board.piece_at(move.from_square)
    captured = board.piece_at(move.to_square) is not None
    destination = chess.square_name(move.to_square)

    if piece is None or piece.piece_type == chess.PAWN:
        prefix = chess.FILE_NAMES[chess.square_file(move.from_square)] if captured else ""
    else:
        prefix = piece.symbol().upper()

    label = f"{prefix}{'x' if captured else ''}{destination}"
    if move.promotion is not None:
        label += "=" + chess.piece_symbol(move.promotion).upper()
    return label
