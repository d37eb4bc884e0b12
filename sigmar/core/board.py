"""Hexagonal board representation embedded in a square array."""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .pieces import Piece, EMPTY_CODE, EMPTY_GLYPH

Cell = Tuple[int, int]


class OutOfBoundsError(IndexError):
    """Raised when writing outside the 11x11 backing array."""


class BoardConsistencyError(RuntimeError):
    """Raised when the board no longer satisfies its own invariants."""


@dataclass(frozen=True)
class RemovedPair:
    """Everything needed to put a removed pair back."""
    first: Cell
    second: Cell
    first_piece: Piece
    second_piece: Piece
    consumed_metal: bool


class SigmarBoard:
    """
    A hexagon of side 6 stored in an 11x11 array.

    Picture the square with its top edge pushed to the right: cell (x, y),
    counted from the bottom left, belongs to the hexagon iff
    5 <= x + y <= 15. That leaves 91 playable cells; the two corner
    triangles are padding and always stay empty.

    Besides the cells, the board tracks ``metals_taken``, the number of metal
    ranks already removed. Only the metal whose rank equals this counter can
    be taken.
    """

    SIZE = 11
    SIDE = 6
    ANCHOR: Cell = (5, 5)

    # Axial hex directions in cyclic order around a cell.
    DIRECTIONS: Tuple[Cell, ...] = ((1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1))

    _MIN_DIAGONAL = SIDE - 1
    _MAX_DIAGONAL = 3 * (SIDE - 1)

    def __init__(self, grid: Optional[np.ndarray] = None, metals_taken: int = 0):
        """
        Initialize a board.

        Args:
            grid: Optional 11x11 array of piece codes, indexed grid[x, y].
                  If None, creates an empty board.
            metals_taken: Number of metal ranks already removed.
        """
        if grid is not None:
            if grid.shape != (self.SIZE, self.SIZE):
                raise ValueError(f"Grid shape must be ({self.SIZE}, {self.SIZE})")
            grid = grid.astype(np.int8)
            if np.any(grid[~_BAND_MASK] != EMPTY_CODE):
                raise ValueError("Pieces placed outside the hexagon")
            for code in np.unique(grid):
                Piece.from_code(code)
            self.grid = grid
        else:
            self.grid = np.zeros((self.SIZE, self.SIZE), dtype=np.int8)

        if metals_taken < 0:
            raise ValueError(f"metals_taken cannot be negative, got {metals_taken}")
        self.metals_taken = metals_taken

    def copy(self) -> SigmarBoard:
        """Create a deep copy of the board."""
        new_board = SigmarBoard()
        new_board.grid = self.grid.copy()
        new_board.metals_taken = self.metals_taken
        return new_board

    @classmethod
    def in_array(cls, x: int, y: int) -> bool:
        return 0 <= x < cls.SIZE and 0 <= y < cls.SIZE

    @classmethod
    def on_board(cls, x: int, y: int) -> bool:
        """Check whether (x, y) is one of the 91 hexagon cells."""
        return cls.in_array(x, y) and cls._MIN_DIAGONAL <= x + y <= cls._MAX_DIAGONAL

    @classmethod
    def cells(cls) -> List[Cell]:
        """All hexagon cells, x outer and y inner."""
        return list(_CELLS)

    @classmethod
    def neighbors(cls, x: int, y: int) -> List[Cell]:
        """The six neighbouring coordinates in direction order (may be off-board)."""
        return [(x + dx, y + dy) for dx, dy in cls.DIRECTIONS]

    def get(self, x: int, y: int) -> Optional[Piece]:
        """Get the piece at (x, y). Anything outside the array reads as None."""
        if not self.in_array(x, y):
            return None
        return Piece.from_code(self.grid[x, y])

    def set(self, x: int, y: int, piece: Optional[Piece]) -> Optional[Piece]:
        """
        Place a piece at (x, y), or clear the cell with None.

        Returns:
            The value now stored in the cell.

        Raises:
            OutOfBoundsError: If (x, y) is outside the 11x11 array.
        """
        if not self.in_array(x, y):
            raise OutOfBoundsError(f"Attempted to place piece out of bounds at ({x}, {y})")
        self.grid[x, y] = EMPTY_CODE if piece is None else piece.code
        return self.get(x, y)

    def clear(self, x: int, y: int) -> None:
        """Clear the cell at (x, y)."""
        self.set(x, y, None)

    def is_empty(self, x: int, y: int) -> bool:
        return self.get(x, y) is None

    def _is_absent(self, x: int, y: int) -> bool:
        return not self.on_board(x, y) or self.grid[x, y] == EMPTY_CODE

    def is_open(self, x: int, y: int) -> bool:
        """
        Check whether the tile at (x, y) can be removed right now.

        A tile is open when three consecutive neighbours around it are absent
        (empty or off the board), i.e. it can slide out through a gap. A metal
        is additionally locked until every lower rank has been removed.
        """
        if not self.on_board(x, y):
            return False
        piece = self.get(x, y)
        if piece is None:
            return False
        if piece.is_metal and piece.rank != self.metals_taken:
            return False

        absent = [self._is_absent(nx, ny) for nx, ny in self.neighbors(x, y)]
        count = len(absent)
        for i in range(count):
            if absent[i] and absent[(i + 1) % count] and absent[(i + 2) % count]:
                return True
        return False

    def open_pieces(self) -> List[Cell]:
        """Get all occupied cells that are currently open, x outer and y inner."""
        return [(x, y) for x, y in _CELLS
                if self.grid[x, y] != EMPTY_CODE and self.is_open(x, y)]

    def occupied_cells(self) -> List[Cell]:
        return [(x, y) for x, y in _CELLS if self.grid[x, y] != EMPTY_CODE]

    def count_pieces(self) -> int:
        """Count the tiles on the hexagon. Padding cells are not counted."""
        return int(np.count_nonzero(self.grid[_BAND_MASK]))

    def count_empty(self) -> int:
        """Count the empty hexagon cells."""
        return len(_CELLS) - self.count_pieces()

    def is_solved(self) -> bool:
        """Check that no hexagon cell but (possibly) the anchor holds a tile."""
        return all(cell == self.ANCHOR for cell in self.occupied_cells())

    def remove_pair(self, a: Cell, b: Cell) -> RemovedPair:
        """
        Take two tiles off the board.

        Pairing a metal with quicksilver advances ``metals_taken``. Legality
        is the caller's business; this only records what is needed to undo.
        """
        first_piece, second_piece = self.get(*a), self.get(*b)
        if first_piece is None or second_piece is None or a == b:
            raise BoardConsistencyError(f"Cannot remove {a} and {b}: not two occupied cells")

        consumed_metal = first_piece.is_metal != second_piece.is_metal
        self.clear(*a)
        self.clear(*b)
        if consumed_metal:
            self.metals_taken += 1
        return RemovedPair(a, b, first_piece, second_piece, consumed_metal)

    def restore(self, removed: RemovedPair) -> None:
        """Undo a ``remove_pair``."""
        self.set(*removed.first, removed.first_piece)
        self.set(*removed.second, removed.second_piece)
        if removed.consumed_metal:
            self.metals_taken -= 1

    @contextmanager
    def removed(self, a: Cell, b: Cell) -> Iterator[RemovedPair]:
        """Remove a pair for the duration of a ``with`` block."""
        record = self.remove_pair(a, b)
        try:
            yield record
        finally:
            self.restore(record)

    def key(self) -> bytes:
        """Compact snapshot of cells and metal counter, usable as a dict key."""
        return self.grid.tobytes() + bytes([self.metals_taken])

    def to_string(self) -> str:
        """One glyph per hexagon cell, x outer and y inner ('.' is empty)."""
        chars = []
        for x, y in _CELLS:
            piece = self.get(x, y)
            chars.append(EMPTY_GLYPH if piece is None else piece.glyph)
        return ''.join(chars)

    @classmethod
    def from_string(cls, s: str, metals_taken: int = 0) -> SigmarBoard:
        """
        Create a board from its ``to_string`` form.

        Whitespace is ignored so the string may be wrapped freely.
        """
        glyphs = ''.join(s.split())
        if len(glyphs) != len(_CELLS):
            raise ValueError(f"String must hold {len(_CELLS)} cells, got {len(glyphs)}")

        board = cls(metals_taken=metals_taken)
        for (x, y), glyph in zip(_CELLS, glyphs):
            board.set(x, y, Piece.from_glyph(glyph))
        return board

    @classmethod
    def from_grid(cls, rows: Sequence[Sequence[Optional[Piece]]], metals_taken: int = 0) -> SigmarBoard:
        """
        Create a board from an 11x11 nested sequence indexed rows[x][y].

        This is the shape an external board reader hands over.
        """
        if len(rows) != cls.SIZE or any(len(row) != cls.SIZE for row in rows):
            raise ValueError(f"Grid must be {cls.SIZE}x{cls.SIZE}")

        grid = np.zeros((cls.SIZE, cls.SIZE), dtype=np.int8)
        for x, row in enumerate(rows):
            for y, piece in enumerate(row):
                if piece is not None:
                    grid[x, y] = piece.code
        return cls(grid, metals_taken=metals_taken)

    def to_grid(self) -> List[List[Optional[Piece]]]:
        return [[self.get(x, y) for y in range(self.SIZE)] for x in range(self.SIZE)]

    def __str__(self) -> str:
        """Draw the hexagon, top row first, each row shifted by half a tile."""
        lines = []
        width = 2 * (self.SIZE - 1) + 1
        for y in reversed(range(self.SIZE)):
            line = [' '] * width
            for x in range(self.SIZE):
                if self.on_board(x, y):
                    piece = self.get(x, y)
                    line[2 * x + y - self._MIN_DIAGONAL] = EMPTY_GLYPH if piece is None else piece.glyph
            lines.append(''.join(line).rstrip())
        lines.append(f"metals taken: {self.metals_taken}")
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SigmarBoard(pieces={self.count_pieces()}, metals_taken={self.metals_taken})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SigmarBoard):
            return False
        return self.metals_taken == other.metals_taken and np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.key())


_BAND_MASK = np.array([[SigmarBoard.on_board(x, y) for y in range(SigmarBoard.SIZE)]
                       for x in range(SigmarBoard.SIZE)])
_CELLS: Tuple[Cell, ...] = tuple((x, y) for x in range(SigmarBoard.SIZE)
                                 for y in range(SigmarBoard.SIZE)
                                 if SigmarBoard.on_board(x, y))
