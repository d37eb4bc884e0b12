"""Generator module for creating solvable boards."""

from .generator import BoardGenerator, Difficulty, Layout, GenerationError, example_board

__all__ = ["BoardGenerator", "Difficulty", "Layout", "GenerationError", "example_board"]
