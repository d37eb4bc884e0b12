"""Board model, generator and exhaustive solver for a hex tile-matching puzzle."""

from .core import Element, Piece, PieceKind, SigmarBoard, Move, legal_pair
from .solvers import DFSSolver

__version__ = "1.0.0"

__all__ = ["Element", "Piece", "PieceKind", "SigmarBoard", "Move", "legal_pair", "DFSSolver"]
