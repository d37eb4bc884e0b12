"""Unit tests for move validation."""

import pytest
from sigmar.core.board import SigmarBoard
from sigmar.core.move import Move
from sigmar.core.pieces import Piece, FIRE, WATER, SALT, QUICKSILVER
from sigmar.core.validator import (
    is_legal_move, apply_move, apply_moves, validate_solution, count_pieces, has_solution,
)

DONE = Move(5, 5, 5, 5)


def salt_and_fire() -> SigmarBoard:
    board = SigmarBoard()
    board.set(2, 8, SALT)
    board.set(8, 2, FIRE)
    return board


class TestMove:
    """Tests for the move record."""

    def test_move_is_a_tuple(self):
        move = Move(1, 2, 3, 4)
        assert move == (1, 2, 3, 4)
        assert move.cells == ((1, 2), (3, 4))
        assert not move.is_done

    def test_done_sentinel(self):
        move = Move.done((5, 5))
        assert move == DONE
        assert move.is_done
        assert str(move) == "done at (5, 5)"


class TestValidator:
    """Tests for validation utilities."""

    def test_is_legal_move(self):
        """Test move legality checks."""
        board = salt_and_fire()
        assert is_legal_move(board, Move(2, 8, 8, 2))
        assert not is_legal_move(board, Move(2, 8, 3, 3))  # empty cell
        assert not is_legal_move(board, DONE)

    def test_locked_metal_move_illegal(self):
        """Test that a metal out of rank order cannot be played."""
        board = SigmarBoard()
        board.set(2, 8, Piece.metal(1))
        board.set(8, 2, QUICKSILVER)
        assert not is_legal_move(board, Move(2, 8, 8, 2))

        board.metals_taken = 1
        assert is_legal_move(board, Move(2, 8, 8, 2))

    def test_apply_move(self):
        board = salt_and_fire()
        apply_move(board, Move(2, 8, 8, 2))
        assert board.is_solved()

    def test_apply_illegal_move_raises(self):
        board = SigmarBoard()
        board.set(2, 8, FIRE)
        board.set(8, 2, WATER)
        with pytest.raises(ValueError):
            apply_move(board, Move(2, 8, 8, 2))

    def test_apply_moves_uses_copy(self):
        """Test that replaying leaves the original board alone."""
        board = salt_and_fire()
        final = apply_moves(board, [Move(2, 8, 8, 2)])
        assert final.is_solved()
        assert board.count_pieces() == 2

    def test_validate_solution(self):
        """Test full solution validation."""
        board = salt_and_fire()
        assert validate_solution(board, [Move(2, 8, 8, 2), DONE])
        assert validate_solution(board, [(8, 2, 2, 8), (5, 5, 5, 5)])

        # Missing sentinel
        assert not validate_solution(board, [Move(2, 8, 8, 2)])
        # Sentinel too early
        assert not validate_solution(board, [DONE, Move(2, 8, 8, 2), DONE])
        # Nothing removed
        assert not validate_solution(board, [DONE])
        assert not validate_solution(board, [])

    def test_count_pieces(self):
        board = salt_and_fire()
        board.set(3, 3, SALT)
        counts = count_pieces(board)
        assert counts[SALT] == 2
        assert counts[FIRE] == 1

    def test_has_solution(self):
        """Test the solver convenience check."""
        board = salt_and_fire()
        assert has_solution(board)
        board.set(3, 3, WATER)
        assert not has_solution(board)
        assert board.count_pieces() == 3


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
