"""
Unit tests for the built-in one-ply opponent.
"""

import chess
import pytest

from duel.logic.opponent import PROMOTION_BONUS, choose_move, score_move, square_bonus
from duel.logic.validator import apply_move, legal_moves
from duel.tests.conftest import FOOLS_MATE, STALEMATE_IN_ONE_FEN, STALEMATE_MOVE


class TestSquareBonus:
    @pytest.mark.parametrize("square", [chess.D4, chess.E4, chess.D5, chess.E5])
    def test_inner_center(self, square):
        """The four center squares score 2."""
        assert square_bonus(square) == 2

    @pytest.mark.parametrize("square", [chess.C3, chess.F3, chess.C6, chess.F6, chess.E3, chess.C5])
    def test_outer_ring(self, square):
        """The ring around the center scores 1."""
        assert square_bonus(square) == 1

    @pytest.mark.parametrize("square", [chess.A1, chess.H8, chess.B4, chess.E2, chess.E7, chess.G5])
    def test_edges(self, square):
        """Everything else scores 0."""
        assert square_bonus(square) == 0


class TestScoreMove:
    def test_capture_adds_piece_value(self):
        """Capturing a queen scores 9 plus the square bonus."""
        board = chess.Board("r3k3/8/8/8/8/Q7/8/4K3 b - - 0 1")

        assert score_move(board, chess.Move.from_uci("a8a3")) == 9

    def test_promotion_bonus_and_center(self):
        """A corner promotion scores only the promotion bonus."""
        board = chess.Board("7k/8/8/8/8/8/8/K7 w - - 0 1")
        quiet = score_move(board, chess.Move.from_uci("a1b2"))

        assert quiet == 0
        promo_board = chess.Board("7k/P7/8/8/8/8/8/K7 w - - 0 1")
        assert score_move(promo_board, chess.Move.from_uci("a7a8q")) == PROMOTION_BONUS

    def test_pawn_capture_into_center(self):
        """A pawn capture onto d5 scores 1 + 2."""
        board = chess.Board("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1")

        assert score_move(board, chess.Move.from_uci("e4d5")) == 3


class TestChooseMove:
    def test_opening_move_prefers_center_and_lowest_square(self):
        """Ties go to the first move in canonical order."""
        # d2d4 and e2e4 both score 2; d2 comes first in canonical order
        assert choose_move(chess.STARTING_FEN) == "d2d4"

    def test_black_reply_to_e4(self):
        """Black answers e4 with d5."""
        fen = apply_move(chess.STARTING_FEN, "e2e4").fen

        assert choose_move(fen) == "d7d5"

    def test_takes_the_most_valuable_piece(self):
        """The highest-value capture wins."""
        assert choose_move("r3k3/8/8/8/8/Q7/8/4K3 b - - 0 1") == "a8a3"

    def test_promotes_to_queen_on_tie(self):
        """Queen promotion is listed first and wins the tie."""
        assert choose_move("7k/P7/8/8/8/8/8/K7 w - - 0 1") == "a7a8q"

    def test_is_deterministic(self):
        """The same position always gives the same move."""
        fen = apply_move(apply_move(chess.STARTING_FEN, "g1f3").fen, "b8c6").fen

        choices = {choose_move(fen) for _ in range(10)}

        assert len(choices) == 1

    @pytest.mark.parametrize(
        "fen",
        [
            chess.STARTING_FEN,
            "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1",
            "rnbqkbnr/pppp1ppp/8/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2",
            STALEMATE_IN_ONE_FEN,
        ],
    )
    def test_always_returns_a_legal_move(self, fen):
        """The chosen move is always one of the legal moves."""
        choice = choose_move(fen)

        assert choice in {m.uci() for m in legal_moves(chess.Board(fen))}

    def test_no_move_when_checkmated(self):
        """A mated side has no move."""
        fen = chess.STARTING_FEN
        for move in FOOLS_MATE:
            fen = apply_move(fen, move).fen

        assert choose_move(fen) is None

    def test_no_move_when_stalemated(self):
        """A stalemated side has no move."""
        fen = apply_move(STALEMATE_IN_ONE_FEN, STALEMATE_MOVE).fen

        assert choose_move(fen) is None

    def test_no_move_for_unparseable_position(self):
        """A broken FEN gives no move rather than an error."""
        assert choose_move("garbage") is None
