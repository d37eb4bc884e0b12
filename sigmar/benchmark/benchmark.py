"""Benchmarking framework for comparing solver configurations."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
import json
import os

from tqdm import tqdm

from ..core.board import SigmarBoard
from ..core.validator import validate_solution
from ..generator import BoardGenerator, Difficulty
from ..solvers import BaseSolver, DFSSolver


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    board_id: int
    difficulty: str
    algorithm: str
    solved: bool
    time_seconds: float
    memory_bytes: int
    iterations: int
    backtracks: int
    nodes_explored: int
    moves: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "board_id": self.board_id,
            "difficulty": self.difficulty,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "moves": self.moves,
            **self.extra
        }


class Benchmark:
    """
    Benchmark framework for comparing solver configurations.

    Runs every solver on generated boards and collects performance metrics.
    Each board is solvable by construction, so anything short of a solution
    is a timeout.
    """

    def __init__(
        self,
        boards_per_difficulty: int = 10,
        difficulties: Optional[List[Difficulty]] = None,
        solvers: Optional[Dict[str, BaseSolver]] = None,
        timeout_seconds: float = 60.0,
        seed: Optional[int] = None
    ):
        """
        Initialize the benchmark.

        Args:
            boards_per_difficulty: Number of boards to generate per difficulty.
            difficulties: List of difficulties to test (default: all).
            solvers: Dict of solver_name -> solver_instance (default: DFS with
                     and without the dead-end memo).
            timeout_seconds: Time limit per board per default solver.
            seed: Random seed for reproducibility.
        """
        self.boards_per_difficulty = boards_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.timeout_seconds = timeout_seconds
        self.seed = seed

        # Initialize solvers
        if solvers is None:
            self.solvers = {
                "DFS+Memo": DFSSolver(use_memo=True, time_limit=timeout_seconds),
                "DFS": DFSSolver(use_memo=False, time_limit=timeout_seconds),
            }
        else:
            self.solvers = solvers

        self.boards: Dict[str, List[SigmarBoard]] = {}
        self.results: List[BenchmarkResult] = []

    def generate_boards(self) -> None:
        """Generate all boards for benchmarking."""
        generator = BoardGenerator(seed=self.seed)

        print("Generating boards...")
        for difficulty in tqdm(self.difficulties, desc="Difficulties"):
            self.boards[difficulty.value] = generator.generate_batch(
                self.boards_per_difficulty,
                difficulty
            )

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.boards:
            self.generate_boards()

        self.results = []

        total_tests = sum(len(boards) for boards in self.boards.values()) * len(self.solvers)

        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for difficulty_name, boards in self.boards.items():
            for board_id, board in enumerate(boards):
                for solver_name, solver in self.solvers.items():
                    result = self._run_single(
                        board, board_id, difficulty_name, solver_name, solver
                    )
                    self.results.append(result)
                    pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        board: SigmarBoard,
        board_id: int,
        difficulty: str,
        solver_name: str,
        solver: BaseSolver
    ) -> BenchmarkResult:
        """Run a single solver on a single board."""
        moves, stats = solver.solve(board)

        extra = dict(stats.extra)
        if moves is not None and not validate_solution(board, moves):
            extra["error"] = "Invalid solution"

        return BenchmarkResult(
            board_id=board_id,
            difficulty=difficulty,
            algorithm=solver_name,
            solved=stats.solved and "error" not in extra,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            moves=len(moves) if moves is not None else 0,
            extra=extra
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_boards": len(self.results) // len(self.solvers),
            "solvers_tested": list(self.solvers.keys()),
            "difficulties": [d.value for d in self.difficulties],
            "results_by_algorithm": {},
            "results_by_difficulty": {}
        }

        # Group by algorithm
        for solver_name in self.solvers:
            solver_results = [r for r in self.results if r.algorithm == solver_name]
            if solver_results:
                solved = [r for r in solver_results if r.solved]
                times = [r.time_seconds for r in solver_results]
                memory = [r.memory_bytes for r in solver_results]

                summary["results_by_algorithm"][solver_name] = {
                    "accuracy": len(solved) / len(solver_results) * 100,
                    "avg_time_seconds": sum(times) / len(times),
                    "max_time_seconds": max(times),
                    "min_time_seconds": min(times),
                    "avg_memory_mb": sum(memory) / len(memory) / (1024 * 1024),
                    "total_solved": len(solved),
                    "total_tested": len(solver_results)
                }

        # Group by difficulty
        for difficulty in self.difficulties:
            diff_results = [r for r in self.results if r.difficulty == difficulty.value]
            if diff_results:
                summary["results_by_difficulty"][difficulty.value] = {}

                for solver_name in self.solvers:
                    solver_diff_results = [
                        r for r in diff_results if r.algorithm == solver_name
                    ]
                    if solver_diff_results:
                        solved = [r for r in solver_diff_results if r.solved]
                        times = [r.time_seconds for r in solver_diff_results]

                        summary["results_by_difficulty"][difficulty.value][solver_name] = {
                            "accuracy": len(solved) / len(solver_diff_results) * 100,
                            "avg_time_seconds": sum(times) / len(times),
                            "solved": len(solved),
                            "tested": len(solver_diff_results)
                        }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and generated boards to files."""
        os.makedirs(output_dir, exist_ok=True)

        # Save raw results as JSON
        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        # Save summary
        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        # Save boards by difficulty
        boards_dir = os.path.join(output_dir, "boards")
        os.makedirs(boards_dir, exist_ok=True)

        for difficulty, boards in self.boards.items():
            diff_dir = os.path.join(boards_dir, difficulty)
            BoardGenerator.save_to_folder(boards, diff_dir, prefix=f"board_{difficulty}")

        print(f"Results and boards saved to {output_dir}")
