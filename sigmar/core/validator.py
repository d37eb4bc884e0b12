"""Validation utilities for move lists and boards."""

from __future__ import annotations
from collections import Counter
from typing import TYPE_CHECKING, Iterable

from .move import Move

if TYPE_CHECKING:
    from .board import SigmarBoard
    from .pieces import Piece


def is_legal_move(board: SigmarBoard, move: Move) -> bool:
    """
    Check if a move can be played on the board as it stands.

    Args:
        board: The board.
        move: The move to check.

    Returns:
        True if both cells are open and hold a legal pair. The "done"
        sentinel is legal only on a solved board at its anchor.
    """
    if move.is_done:
        return board.is_solved() and (move.x1, move.y1) == board.ANCHOR

    first, second = move.cells
    if not (board.is_open(*first) and board.is_open(*second)):
        return False
    return board.get(*first).legal_pair(board.get(*second))


def apply_move(board: SigmarBoard, move: Move) -> None:
    """
    Play a move on the board in place.

    Raises:
        ValueError: If the move is not legal on this board.
    """
    if not is_legal_move(board, move):
        raise ValueError(f"Illegal move {move}")
    if not move.is_done:
        board.remove_pair(*move.cells)


def apply_moves(board: SigmarBoard, moves: Iterable[Move]) -> SigmarBoard:
    """Replay moves on a copy of the board and return the copy."""
    work_board = board.copy()
    for move in moves:
        apply_move(work_board, Move(*move))
    return work_board


def validate_solution(board: SigmarBoard, moves: Iterable[Move]) -> bool:
    """
    Validate that a move list clears the board.

    Args:
        board: The starting board (left untouched).
        moves: The proposed solution.

    Returns:
        True if every move is legal, the list ends with the "done" sentinel
        and the board is solved afterwards.
    """
    moves = [Move(*move) for move in moves]
    if not moves or not moves[-1].is_done:
        return False
    if any(move.is_done for move in moves[:-1]):
        return False

    try:
        final = apply_moves(board, moves)
    except ValueError:
        return False
    return final.is_solved()


def count_pieces(board: SigmarBoard) -> Counter[Piece]:
    """Count each kind of tile on the board."""
    return Counter(board.get(x, y) for x, y in board.occupied_cells())


def has_solution(board: SigmarBoard) -> bool:
    """
    Check if the board can be cleared.

    Args:
        board: The board (restored before returning).

    Returns:
        True if the depth-first solver finds a clearing order.
    """
    from ..solvers.dfs_solver import DFSSolver

    moves, _ = DFSSolver().solve(board)
    return moves is not None
