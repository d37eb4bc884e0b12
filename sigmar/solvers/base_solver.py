"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
import logging
import time
import tracemalloc

from ..core.board import SigmarBoard, BoardConsistencyError
from ..core.move import Move

logger = logging.getLogger(__name__)


class SearchBudgetExceeded(Exception):
    """Raised inside a search when its node or time budget runs out."""


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Algorithm-specific metrics
    backtracks: int = 0
    nodes_explored: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for board solvers."""

    name: str = "BaseSolver"

    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, board: SigmarBoard) -> tuple[Optional[List[Move]], SolverStats]:
        """
        Search for a clearing order with timing and memory tracking.

        The search works on the board in place and must leave it exactly as
        it found it, whatever the outcome.

        Args:
            board: The board to clear.

        Returns:
            Tuple of (move list or None, stats).

        Raises:
            BoardConsistencyError: If the board was not restored.
        """
        self.stats = SolverStats(algorithm=self.name)
        snapshot = board.copy()
        logger.debug("%s starting on %r", self.name, board)

        # Start memory tracking
        tracemalloc.start()

        # Start timing
        start_time = time.perf_counter()

        try:
            moves = self._solve(board)
        except SearchBudgetExceeded as e:
            self.stats.extra["error"] = str(e)
            logger.info("%s gave up: %s", self.name, e)
            moves = None
        finally:
            # End timing
            self.stats.time_seconds = time.perf_counter() - start_time

            # Get memory usage
            current, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.stats.memory_bytes = peak

        if board != snapshot:
            raise BoardConsistencyError(f"{self.name} did not restore the board")

        self.stats.solved = moves is not None
        logger.debug(
            "%s finished in %.4fs: %s", self.name, self.stats.time_seconds,
            f"{len(moves)} moves" if moves is not None else "no solution"
        )
        return moves, self.stats

    @abstractmethod
    def _solve(self, board: SigmarBoard) -> Optional[List[Move]]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            board: The board to clear (mutated during search, restored after).

        Returns:
            The move list ending in the "done" sentinel, or None.
        """
        pass

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
