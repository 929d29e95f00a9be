"""
Move validation against the full rules of chess.

A candidate move is accepted only if it is a member of the legal-move list
regenerated for the side to move, so check, pins, castling rights,
en-passant and mandatory promotion are enforced by python-chess rather than
by ad hoc checks here. Everything in this module is pure.
"""

from typing import NamedTuple

import chess

from duel.logic.exceptions import InvalidMoveError
from duel.logic.notation import simple_label
from duel.logic.types import DRAW, MatchResult
from shared.dal.models import Seat

PROMOTION_PIECES: dict[str, chess.PieceType] = {
    "q": chess.QUEEN,
    "r": chess.ROOK,
    "b": chess.BISHOP,
    "n": chess.KNIGHT,
}

_DEFAULT_PROMOTION = "q"
_COORDINATE_LENGTH = 4


class MoveComputation(NamedTuple):
    """Outcome of applying one move to a position."""

    fen: str
    uci: str
    san: str | None
    result: MatchResult | None  # None while the game goes on


def seat_of(color: chess.Color) -> Seat:
    return Seat.WHITE if color == chess.WHITE else Seat.BLACK


def load_board(fen: str) -> chess.Board:
    """Parse a stored position. Raises InvalidMoveError if the FEN is unusable."""
    try:
        return chess.Board(fen)
    except ValueError as exc:
        raise InvalidMoveError(f"position cannot be parsed: {exc}") from exc


# rank of each promotion choice within one from/to pair; no promotion sorts first
_PROMOTION_ORDER: dict[chess.PieceType | None, int] = {
    None: 0,
    chess.QUEEN: 1,
    chess.ROOK: 2,
    chess.BISHOP: 3,
    chess.KNIGHT: 4,
}


def _move_order_key(move: chess.Move) -> tuple[int, int, int]:
    return move.from_square, move.to_square, _PROMOTION_ORDER[move.promotion]


def legal_moves(board: chess.Board) -> list[chess.Move]:
    """Every legal move for the side to move, in canonical order.

    Canonical order is ascending source square index (a1=0 .. h8=63), then
    destination square index, then promotion piece (none, Q, R, B, N).
    """
    return sorted(board.legal_moves, key=_move_order_key)


def normalize_move_text(move_text: str, promotion: str | None = None) -> str:
    """Lower-case the move and fold a separate promotion hint into it."""
    text = move_text.strip().lower()
    if len(text) == _COORDINATE_LENGTH and promotion is not None:
        hint = promotion.strip().lower()
        text += hint[0] if hint else _DEFAULT_PROMOTION
    return text


def parse_move(text: str) -> chess.Move:
    """Parse normalized coordinate text ("e2e4", "e7e8q") into a move."""
    if len(text) not in (_COORDINATE_LENGTH, _COORDINATE_LENGTH + 1):
        raise InvalidMoveError(f"expected coordinates like 'e2e4', got {text!r}")

    try:
        from_square = chess.parse_square(text[0:2])
        to_square = chess.parse_square(text[2:4])
    except ValueError as exc:
        raise InvalidMoveError(f"unknown square in {text!r}") from exc

    promotion = None
    if len(text) > _COORDINATE_LENGTH:
        letter = text[_COORDINATE_LENGTH]
        if letter not in PROMOTION_PIECES:
            raise InvalidMoveError(f"unknown promotion piece {letter!r}")
        promotion = PROMOTION_PIECES[letter]

    return chess.Move(from_square, to_square, promotion=promotion)


def classify(board: chess.Board, mover: Seat) -> MatchResult | None:
    """Terminal result of the position after mover has played, if any.

    Only checkmate and stalemate end a game; other draw rules do not.
    """
    if board.is_checkmate():
        return MatchResult(winner=mover)
    if board.is_stalemate():
        return DRAW
    return None


def apply_move(fen: str, move_text: str, promotion: str | None = None) -> MoveComputation:
    """
    Validate move_text against fen and play it.

    Raises InvalidMoveError for malformed text or a move that is not legal
    in the position.
    """
    board = load_board(fen)
    uci = normalize_move_text(move_text, promotion)
    move = parse_move(uci)

    # exact membership: python-chess would also accept king-takes-rook castling
    if move not in legal_moves(board):
        raise InvalidMoveError("move is illegal in current position")

    mover = seat_of(board.turn)
    san = simple_label(board, move)
    board.push(move)

    return MoveComputation(
        fen=board.fen(),
        uci=move.uci(),
        san=san,
        result=classify(board, mover),
    )
