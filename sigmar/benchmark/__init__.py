"""Benchmark module for comparing solver configurations."""

from .benchmark import Benchmark, BenchmarkResult
from .visualizer import Visualizer

__all__ = ["Benchmark", "BenchmarkResult", "Visualizer"]
