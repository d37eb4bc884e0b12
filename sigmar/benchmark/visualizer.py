"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult

DIFFICULTY_ORDER = ["easy", "medium", "hard", "expert"]


class Visualizer:
    """
    Visualization generator for solver benchmark results.

    Creates charts comparing solver configurations across difficulties.
    """

    # Color palette for solver configurations
    COLORS = {
        "DFS+Memo": "#2ecc71",  # Green
        "DFS": "#3498db",       # Blue
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        # Set style
        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def _algorithms(self) -> List[str]:
        return sorted(set(r.algorithm for r in self.results))

    def _difficulties(self) -> List[str]:
        present = set(r.difficulty for r in self.results)
        return [d for d in DIFFICULTY_ORDER if d in present]

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        charts = []

        charts.append(self.plot_time_comparison())
        charts.append(self.plot_time_by_difficulty())
        charts.append(self.plot_accuracy_comparison())
        charts.append(self.plot_nodes_comparison())

        return charts

    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times."""
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self._algorithms()
        avg_times = []
        colors = []

        for algo in algorithms:
            times = [r.time_seconds for r in self.results if r.algorithm == algo]
            avg_times.append(np.mean(times))
            colors.append(self.COLORS.get(algo, "#95a5a6"))

        bars = ax.bar(algorithms, avg_times, color=colors, edgecolor='black', linewidth=0.5)

        # Add value labels on bars
        for bar, time in zip(bars, avg_times):
            height = bar.get_height()
            ax.annotate(f'{time:.4f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, height),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Solver', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Solve Time by Solver', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        plt.tight_layout()
        path = os.path.join(self.output_dir, "time_comparison.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def _grouped_bars(self, ax, values_for) -> None:
        """Draw one bar group per difficulty, one bar per solver."""
        algorithms = self._algorithms()
        difficulties = self._difficulties()

        x = np.arange(len(difficulties))
        width = 0.8 / len(algorithms)

        for i, algo in enumerate(algorithms):
            values = [values_for(algo, diff) for diff in difficulties]
            offset = (i - len(algorithms) / 2 + 0.5) * width
            ax.bar(x + offset, values, width,
                   label=algo,
                   color=self.COLORS.get(algo, "#95a5a6"),
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_xticks(x)
        ax.set_xticklabels([d.capitalize() for d in difficulties])
        ax.legend(title='Solver')

    def _select(self, algo: str, diff: str) -> List[BenchmarkResult]:
        return [r for r in self.results if r.algorithm == algo and r.difficulty == diff]

    def plot_time_by_difficulty(self) -> str:
        """Create grouped bar chart of times by difficulty and solver."""
        fig, ax = plt.subplots(figsize=(12, 6))

        def avg_time(algo, diff):
            times = [r.time_seconds for r in self._select(algo, diff)]
            return np.mean(times) if times else 0

        self._grouped_bars(ax, avg_time)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Solve Time by Difficulty and Solver', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        plt.tight_layout()
        path = os.path.join(self.output_dir, "time_by_difficulty.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def plot_accuracy_comparison(self) -> str:
        """Create grouped bar chart of boards cleared within the time limit."""
        fig, ax = plt.subplots(figsize=(12, 6))

        def accuracy(algo, diff):
            selected = self._select(algo, diff)
            solved = sum(1 for r in selected if r.solved)
            return (solved / len(selected)) * 100 if selected else 0

        self._grouped_bars(ax, accuracy)
        ax.set_ylabel('Cleared (%)', fontsize=12)
        ax.set_title('Boards Cleared by Difficulty and Solver', fontsize=14, fontweight='bold')
        ax.set_ylim(0, 115)
        ax.axhline(y=100, color='gray', linestyle='--', alpha=0.3)

        plt.tight_layout()
        path = os.path.join(self.output_dir, "accuracy_comparison.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def plot_nodes_comparison(self) -> str:
        """Create grouped bar chart comparing search nodes by difficulty."""
        fig, ax = plt.subplots(figsize=(12, 6))

        def avg_nodes(algo, diff):
            nodes = [r.nodes_explored for r in self._select(algo, diff)]
            return np.mean(nodes) if nodes else 0

        self._grouped_bars(ax, avg_nodes)
        ax.set_ylabel('Average Nodes Explored (Log Scale)', fontsize=12)
        ax.set_title('Search Nodes by Difficulty and Solver', fontsize=14, fontweight='bold')

        # Node counts span orders of magnitude between memo and plain search
        ax.set_yscale('log')

        plt.tight_layout()
        path = os.path.join(self.output_dir, "nodes_comparison.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()

        return path

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Solver | Cleared | Avg Time | Avg Memory | Avg Nodes |",
            "|--------|---------|----------|------------|-----------|"
        ]

        for algo in self._algorithms():
            algo_results = [r for r in self.results if r.algorithm == algo]

            solved = sum(1 for r in algo_results if r.solved)
            accuracy = (solved / len(algo_results)) * 100 if algo_results else 0

            avg_time = np.mean([r.time_seconds for r in algo_results])
            avg_memory = np.mean([r.memory_bytes / (1024 * 1024) for r in algo_results])
            avg_nodes = np.mean([r.nodes_explored for r in algo_results])

            lines.append(
                f"| {algo} | {accuracy:.1f}% | {avg_time:.4f}s | {avg_memory:.2f} MB | {int(avg_nodes):,} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
