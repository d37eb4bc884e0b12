"""Core module for board representation, tile rules and validation."""

from .pieces import Element, PieceKind, Piece, legal_pair
from .board import SigmarBoard, OutOfBoundsError, BoardConsistencyError
from .move import Move
from .validator import is_legal_move, validate_solution, has_solution

__all__ = [
    "Element",
    "PieceKind",
    "Piece",
    "legal_pair",
    "SigmarBoard",
    "OutOfBoundsError",
    "BoardConsistencyError",
    "Move",
    "is_legal_move",
    "validate_solution",
    "has_solution",
]
