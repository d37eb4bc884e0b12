"""Depth-First Search solver with backtracking over removable pairs."""

from __future__ import annotations
from typing import Optional, List, Set
import logging
import time

from .base_solver import BaseSolver, SearchBudgetExceeded
from ..core.board import SigmarBoard, BoardConsistencyError
from ..core.move import Move

logger = logging.getLogger(__name__)


class DFSSolver(BaseSolver):
    """
    Depth-First Search solver using recursive backtracking.

    At every node all open tiles are listed and each legal pair is tried in
    scan order: remove it, recurse, put it back. The first complete clearing
    order found is returned.

    Features:
    - Memo of board states already proven unsolvable (optional)
    - Node and wall-clock budgets (optional)
    - Backtracking counter for performance analysis
    """

    name = "DFS+Backtracking"

    def __init__(
        self,
        use_memo: bool = True,
        max_nodes: Optional[int] = None,
        time_limit: Optional[float] = None
    ):
        """
        Initialize the DFS solver.

        Args:
            use_memo: If True, skip board states already proven dead ends.
                      This never changes which solution is found.
            max_nodes: Give up after exploring this many nodes.
            time_limit: Give up after this many seconds.
        """
        super().__init__()
        self.use_memo = use_memo
        self.max_nodes = max_nodes
        self.time_limit = time_limit
        self._dead_ends: Set[bytes] = set()
        self._deadline: Optional[float] = None

    def _solve(self, board: SigmarBoard) -> Optional[List[Move]]:
        """Solve using DFS with backtracking."""
        self.stats.iterations = 0
        self.stats.backtracks = 0
        self.stats.nodes_explored = 0
        self.stats.extra["memo_hits"] = 0
        self._dead_ends = set()
        self._deadline = None
        if self.time_limit is not None:
            self._deadline = time.perf_counter() + self.time_limit

        try:
            return self._backtrack(board)
        finally:
            self.stats.extra["dead_ends_cached"] = len(self._dead_ends)
            self._dead_ends = set()

    def _check_budget(self) -> None:
        if self.max_nodes is not None and self.stats.nodes_explored > self.max_nodes:
            raise SearchBudgetExceeded(f"node budget of {self.max_nodes} exhausted")
        if self._deadline is not None and time.perf_counter() >= self._deadline:
            raise SearchBudgetExceeded(f"time limit of {self.time_limit}s exhausted")

    def _backtrack(self, board: SigmarBoard) -> Optional[List[Move]]:
        """
        Recursive backtracking algorithm.

        Returns the move list from this state, or None if it is a dead end.
        The board is always back in its entry state when this returns.
        """
        self.stats.iterations += 1

        if board.is_solved():
            return [Move.done(board.ANCHOR)]

        if self.use_memo:
            key = board.key()
            if key in self._dead_ends:
                self.stats.extra["memo_hits"] += 1
                return None

        self.stats.nodes_explored += 1
        self._check_budget()

        open_cells = board.open_pieces()
        for i, first in enumerate(open_cells):
            first_piece = board.get(*first)
            if first_piece is None:
                raise BoardConsistencyError(f"Open cell {first} is empty")

            for second in open_cells[i + 1:]:
                second_piece = board.get(*second)
                if second_piece is None:
                    raise BoardConsistencyError(f"Open cell {second} is empty")
                if not first_piece.legal_pair(second_piece):
                    continue

                with board.removed(first, second):
                    rest = self._backtrack(board)

                if rest is not None:
                    return [Move.between(first, second)] + rest
                self.stats.backtracks += 1

        if self.use_memo:
            self._dead_ends.add(key)
        return None
