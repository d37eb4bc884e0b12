"""Tests for the benchmark runner."""

import json
import os

import pytest
from sigmar.benchmark import Benchmark
from sigmar.generator import Difficulty


class TestBenchmark:
    """Tests for Benchmark class."""

    def test_run_and_summary(self, tmp_path):
        """Test a tiny benchmark end to end."""
        benchmark = Benchmark(
            boards_per_difficulty=2,
            difficulties=[Difficulty.EASY],
            timeout_seconds=10.0,
            seed=42
        )

        results = benchmark.run(show_progress=False)

        assert len(results) == 2 * len(benchmark.solvers)
        assert all(r.solved for r in results)
        assert all(r.moves > 0 for r in results)

        summary = benchmark.get_summary()
        assert summary["total_boards"] == 2
        for stats in summary["results_by_algorithm"].values():
            assert stats["accuracy"] == 100.0

        benchmark.save_results(str(tmp_path))
        with open(os.path.join(str(tmp_path), "benchmark_results.json")) as f:
            assert len(json.load(f)) == len(results)
        assert os.path.isdir(os.path.join(str(tmp_path), "boards", "easy"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
