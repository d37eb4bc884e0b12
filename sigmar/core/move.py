"""Move record produced by the solvers."""

from __future__ import annotations
from typing import NamedTuple, Tuple


class Move(NamedTuple):
    """
    Removal of the tiles at (x1, y1) and (x2, y2).

    A move whose two cells coincide is the "done" sentinel: it addresses the
    anchor cell and closes every complete solution.
    """
    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def done(cls, anchor: Tuple[int, int]) -> Move:
        """Build the completion sentinel for the given anchor cell."""
        x, y = anchor
        return cls(x, y, x, y)

    @classmethod
    def between(cls, a: Tuple[int, int], b: Tuple[int, int]) -> Move:
        return cls(a[0], a[1], b[0], b[1])

    @property
    def is_done(self) -> bool:
        return (self.x1, self.y1) == (self.x2, self.y2)

    @property
    def cells(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        return (self.x1, self.y1), (self.x2, self.y2)

    def __str__(self) -> str:
        if self.is_done:
            return f"done at ({self.x1}, {self.y1})"
        return f"({self.x1}, {self.y1}) + ({self.x2}, {self.y2})"
