"""
Built-in opponent for single-player games.

Looks exactly one ply ahead: every legal move gets a static score and the
best one is played. Ties go to the move that comes first in the canonical
enumeration (see validator.legal_moves), so the choice is reproducible.
"""

import chess

from duel.logic.validator import legal_moves

PIECE_VALUES: dict[chess.PieceType, int] = {
    chess.PAWN: 1,
    chess.KNIGHT: 3,
    chess.BISHOP: 3,
    chess.ROOK: 5,
    chess.QUEEN: 9,
    chess.KING: 0,
}

PROMOTION_BONUS = 5

_INNER_CENTER = (3, 4)  # d/e files, 4th/5th ranks
_OUTER_CENTER = range(2, 6)  # c-f files, 3rd-6th ranks


def square_bonus(square: chess.Square) -> int:
    """+2 for d4/e4/d5/e5, +1 for the rest of the c3-f6 box, 0 elsewhere."""
    file_index = chess.square_file(square)
    rank_index = chess.square_rank(square)
    if file_index in _INNER_CENTER and rank_index in _INNER_CENTER:
        return 2
    if file_index in _OUTER_CENTER and rank_index in _OUTER_CENTER:
        return 1
    return 0


def score_move(board: chess.Board, move: chess.Move) -> int:
    score = 0
    captured = board.piece_at(move.to_square)
    if captured is not None:
        score += PIECE_VALUES[captured.piece_type]
    if move.promotion is not None:
        score += PROMOTION_BONUS
    return score + square_bonus(move.to_square)


def choose_move(fen: str) -> str | None:
    """
    Pick the opponent's move for the side to move in fen.

    Returns the move in coordinate form, or None when there is no legal
    move or the position cannot be parsed.
    """
    try:
        board = chess.Board(fen)
    except ValueError:
        return None

    best_move = None
    best_score = None
    for move in legal_moves(board):
        score = score_move(board, move)
        if best_score is None or score > best_score:
            best_score = score
            best_move = move

    return best_move.uci() if best_move is not None else None
