"""Board generator producing solvable boards at several difficulty levels."""

from __future__ import annotations
import logging
import os
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Optional, Union

from ..core.board import SigmarBoard, Cell
from ..core.pieces import (
    Element, Piece, SALT, QUICKSILVER, VITAE, MORS, MAX_METAL_RANK,
)

logger = logging.getLogger(__name__)

EXAMPLE_SEED = 1729

PiecePair = Tuple[Piece, Piece]


class GenerationError(RuntimeError):
    """Raised when no board could be built within the attempt budget."""


@dataclass(frozen=True)
class Layout:
    """
    Tile counts for a board.

    Attributes:
        tiles_per_element: Copies of each of the four elements (even).
        salt: Number of salt tiles (even).
        metals: Metals removed with quicksilver, ranks 0 to metals - 1.
                One quicksilver is placed per such metal.
        vitae_mors: Number of vitae tiles, and of mors tiles.
        gold: Put the next metal rank on the anchor cell, to be taken last.
    """
    tiles_per_element: int
    salt: int
    metals: int
    vitae_mors: int
    gold: bool = True

    def __post_init__(self):
        if self.tiles_per_element % 2 or self.salt % 2:
            raise ValueError("Element and salt counts must be even")
        limit = MAX_METAL_RANK if self.gold else MAX_METAL_RANK + 1
        if not 0 <= self.metals <= limit:
            raise ValueError(f"Metal count must be 0-{limit}, got {self.metals}")
        if self.total_tiles > len(SigmarBoard.cells()):
            raise ValueError(f"Layout needs {self.total_tiles} cells, the board has {len(SigmarBoard.cells())}")

    @property
    def total_tiles(self) -> int:
        return (4 * self.tiles_per_element + self.salt + 2 * self.metals
                + 2 * self.vitae_mors + int(self.gold))


class Difficulty(Enum):
    """Difficulty levels, from a sparse board up to the full game layout."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def layout(self) -> Layout:
        """Get the tile counts for this difficulty."""
        layouts = {
            Difficulty.EASY: Layout(2, 2, 1, 1),      # 15 tiles
            Difficulty.MEDIUM: Layout(4, 2, 3, 2),    # 29 tiles
            Difficulty.HARD: Layout(6, 4, 4, 3),      # 43 tiles
            Difficulty.EXPERT: Layout(8, 4, 5, 4),    # 55 tiles, the full game
        }
        return layouts[self]


class BoardGenerator:
    """
    Generator for boards that are solvable by construction.

    Algorithm (reverse play):
    1. Start from the cleared board, holding only gold on the anchor.
    2. Put pairs back one at a time, each on two cells that are both open
       once placed. Metal pairs go back in descending rank, stepping
       ``metals_taken`` down to match.
    3. Read forwards, the placements are a legal clearing order.

    Pairs are packed into the most enclosed open cells first so the board
    grows outwards from the center without leaving sealed holes.
    """

    def __init__(self, seed: Optional[int] = None, max_attempts: int = 500):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
            max_attempts: Fresh starts allowed per board before giving up.
        """
        self.rng = random.Random(seed)
        self.max_attempts = max_attempts

    def generate(self, difficulty: Union[Difficulty, Layout] = Difficulty.MEDIUM) -> SigmarBoard:
        """
        Generate a board with the specified difficulty or layout.

        Raises:
            GenerationError: If every attempt got stuck.
        """
        layout = difficulty.layout if isinstance(difficulty, Difficulty) else difficulty

        for attempt in range(1, self.max_attempts + 1):
            board = self._try_generate(layout)
            if board is not None:
                logger.debug("Generated %d-tile board on attempt %d", layout.total_tiles, attempt)
                return board
            logger.debug("Generation attempt %d got stuck, restarting", attempt)

        raise GenerationError(f"Could not place {layout.total_tiles} tiles in {self.max_attempts} attempts")

    def generate_batch(self, count: int, difficulty: Union[Difficulty, Layout] = Difficulty.MEDIUM) -> List[SigmarBoard]:
        """
        Generate multiple boards of the same difficulty.

        Args:
            count: Number of boards to generate.
            difficulty: Desired difficulty level.

        Returns:
            List of SigmarBoard boards.
        """
        return [self.generate(difficulty) for _ in range(count)]

    def _try_generate(self, layout: Layout) -> Optional[SigmarBoard]:
        """Single reverse-play attempt. Returns None when stuck."""
        board = SigmarBoard(metals_taken=layout.metals)
        if layout.gold:
            board.set(*board.ANCHOR, Piece.metal(layout.metals))

        for first, second in self._placement_order(layout):
            if second.is_metal:
                first, second = second, first
            if first.is_metal:
                board.metals_taken = first.rank
            if not self._place_pair(board, first, second):
                return None
        return board

    def _placement_order(self, layout: Layout) -> List[PiecePair]:
        """
        Build the list of pairs in placement order (last removed first).

        Some salt pairs are split into two salt/element pairs. Metal pairs
        are spread at random positions but kept in descending rank.
        """
        element_pairs: List[PiecePair] = []
        for element in Element:
            piece = Piece.elemental(element)
            element_pairs += [(piece, piece)] * (layout.tiles_per_element // 2)
        self.rng.shuffle(element_pairs)

        pairs: List[PiecePair] = []
        for _ in range(layout.salt // 2):
            if element_pairs and self.rng.random() < 0.5:
                piece, _ = element_pairs.pop()
                pairs += [(SALT, piece), (SALT, piece)]
            else:
                pairs.append((SALT, SALT))
        pairs += element_pairs
        pairs += [(VITAE, MORS)] * layout.vitae_mors
        self.rng.shuffle(pairs)

        metal_pairs = [(Piece.metal(rank), QUICKSILVER) for rank in reversed(range(layout.metals))]
        slots = set(self.rng.sample(range(len(pairs) + len(metal_pairs)), len(metal_pairs)))

        ordered: List[PiecePair] = []
        rest, metals = iter(pairs), iter(metal_pairs)
        for index in range(len(pairs) + len(metal_pairs)):
            ordered.append(next(metals) if index in slots else next(rest))
        return ordered

    def _place_pair(self, board: SigmarBoard, first: Piece, second: Piece) -> bool:
        """Put two pieces on cells where both are open, or leave the board untouched."""
        for a in self._ranked_cells(board):
            board.set(*a, first)
            if board.is_open(*a):
                for b in self._ranked_cells(board):
                    board.set(*b, second)
                    if board.is_open(*a) and board.is_open(*b):
                        return True
                    board.clear(*b)
            board.clear(*a)
        return False

    def _ranked_cells(self, board: SigmarBoard) -> List[Cell]:
        """Free cells, most occupied neighbours first, then nearest the center."""
        ranked = []
        for x, y in board.cells():
            if (x, y) == board.ANCHOR or not board.is_empty(x, y):
                continue
            crowding = sum(1 for nx, ny in board.neighbors(x, y) if not board.is_empty(nx, ny))
            ranked.append((-crowding, self._distance((x, y)), self.rng.random(), (x, y)))
        ranked.sort()
        return [cell for *_, cell in ranked]

    @staticmethod
    def _distance(cell: Cell) -> int:
        """Hex distance from the anchor."""
        dx = cell[0] - SigmarBoard.ANCHOR[0]
        dy = cell[1] - SigmarBoard.ANCHOR[1]
        return (abs(dx) + abs(dy) + abs(dx + dy)) // 2

    @staticmethod
    def save_to_folder(boards: List[SigmarBoard], folder_path: str, prefix: str = "board") -> None:
        """
        Save a list of boards to a folder as individual text files.

        Args:
            boards: List of SigmarBoard objects.
            folder_path: Directory to save the boards.
            prefix: Prefix for the filename (default: "board").
        """
        os.makedirs(folder_path, exist_ok=True)

        for i, board in enumerate(boards, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(board.to_string())
                f.write("\n\nPretty format:\n")
                f.write(str(board))


def example_board() -> SigmarBoard:
    """The fixed full-size board used when no board is given."""
    return BoardGenerator(seed=EXAMPLE_SEED).generate(Difficulty.EXPERT)
