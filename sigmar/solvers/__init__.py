"""Solvers module for clearing boards."""

from .base_solver import BaseSolver, SolverStats, SearchBudgetExceeded
from .dfs_solver import DFSSolver

__all__ = [
    "BaseSolver",
    "SolverStats",
    "SearchBudgetExceeded",
    "DFSSolver",
]
