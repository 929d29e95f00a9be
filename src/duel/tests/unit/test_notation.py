import chess
import pytest

from duel.logic.notation import simple_label


def _label(fen: str, uci: str) -> str:
    board = chess.Board(fen)
    return simple_label(board, chess.Move.from_uci(uci))


class TestSimpleLabel:
    def test_pawn_push_has_no_piece_letter(self):
        """Pawn moves are labelled by destination only."""
        assert _label(chess.STARTING_FEN, "e2e4") == "e4"

    def test_piece_move_has_letter(self):
        """Piece moves start with the piece letter."""
        assert _label(chess.STARTING_FEN, "b1c3") == "Nc3"

    def test_piece_capture(self):
        """Captures put an x before the destination."""
        fen = "4k3/8/8/3p4/8/8/8/3RK3 w - - 0 1"
        assert _label(fen, "d1d5") == "Rxd5"

    def test_pawn_capture_keeps_source_file(self):
        """Pawn captures are prefixed with the source file."""
        fen = "4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1"
        assert _label(fen, "e4d5") == "exd5"

    @pytest.mark.parametrize(("uci", "expected"), [("a7a8q", "a8=Q"), ("a7a8r", "a8=R"), ("a7a8n", "a8=N")])
    def test_promotion_suffix(self, uci, expected):
        """Promotions end with =<piece>."""
        assert _label("7k/P7/8/8/8/8/8/4K3 w - - 0 1", uci) == expected

    def test_capturing_promotion(self):
        """Capture and promotion markers combine."""
        assert _label("1r5k/P7/8/8/8/8/8/4K3 w - - 0 1", "a7b8q") == "axb8=Q"

    def test_no_disambiguation(self):
        """Two pieces reaching the same square share a label."""
        # both knights reach d2
        fen = "4k3/8/8/8/8/8/8/1N2KN2 w - - 0 1"
        assert _label(fen, "b1d2") == "Nd2"
        assert _label(fen, "f1d2") == "Nd2"

    def test_no_check_suffix(self):
        """Checking moves carry no + suffix."""
        fen = "4k3/8/8/8/8/8/8/R3K3 w - - 0 1"
        assert _label(fen, "a1a8") == "Ra8"

    def test_black_pieces_use_uppercase_letters(self):
        """Piece letters are uppercase for both colors."""
        fen = "4k3/8/8/8/8/8/8/4K3 b - - 0 1"
        assert _label(fen, "e8d7") == "Kd7"
