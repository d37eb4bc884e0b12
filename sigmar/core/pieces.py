"""Tile taxonomy and the pairing rules between tile kinds."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Element(Enum):
    """The four elemental tile kinds."""
    WATER = "water"
    FIRE = "fire"
    EARTH = "earth"
    AIR = "air"


class PieceKind(Enum):
    """Categories of tiles that can sit on the board."""
    ELEMENT = "element"
    SALT = "salt"
    METAL = "metal"
    QUICKSILVER = "quicksilver"
    VITAE = "vitae"
    MORS = "mors"


# Rank 0 is the basest metal, rank 5 the noblest.
METAL_NAMES = ("lead", "tin", "iron", "copper", "silver", "gold")
MAX_METAL_RANK = len(METAL_NAMES) - 1

EMPTY_CODE = 0
EMPTY_GLYPH = "."

_ELEMENT_CODES = {Element.WATER: 1, Element.FIRE: 2, Element.EARTH: 3, Element.AIR: 4}
_ELEMENT_GLYPHS = {Element.WATER: "w", Element.FIRE: "f", Element.EARTH: "e", Element.AIR: "a"}
_KIND_CODES = {
    PieceKind.SALT: 5,
    PieceKind.QUICKSILVER: 6,
    PieceKind.VITAE: 7,
    PieceKind.MORS: 8,
}
_KIND_GLYPHS = {
    PieceKind.SALT: "s",
    PieceKind.QUICKSILVER: "q",
    PieceKind.VITAE: "v",
    PieceKind.MORS: "m",
}
_METAL_CODE_BASE = 10

# Unordered kind pairs that may be removed together (element/element is
# handled separately since it also compares the element).
_LEGAL_KIND_PAIRS = frozenset([
    frozenset([PieceKind.ELEMENT, PieceKind.SALT]),
    frozenset([PieceKind.SALT]),
    frozenset([PieceKind.METAL, PieceKind.QUICKSILVER]),
    frozenset([PieceKind.VITAE, PieceKind.MORS]),
])


@dataclass(frozen=True)
class Piece:
    """
    A single tile.

    Only ELEMENT pieces carry an ``element`` and only METAL pieces carry a
    ``rank``; every other kind has neither.
    """
    kind: PieceKind
    element: Optional[Element] = None
    rank: Optional[int] = None

    def __post_init__(self):
        if self.kind is PieceKind.ELEMENT:
            if self.element is None or self.rank is not None:
                raise ValueError("Element pieces need an element and no rank")
        elif self.kind is PieceKind.METAL:
            if self.element is not None:
                raise ValueError("Metal pieces cannot carry an element")
            if self.rank is None or not 0 <= self.rank <= MAX_METAL_RANK:
                raise ValueError(f"Metal rank must be 0-{MAX_METAL_RANK}, got {self.rank}")
        elif self.element is not None or self.rank is not None:
            raise ValueError(f"{self.kind.value} pieces take no element or rank")

    @classmethod
    def elemental(cls, element: Element) -> Piece:
        return cls(PieceKind.ELEMENT, element=element)

    @classmethod
    def metal(cls, rank: int) -> Piece:
        return cls(PieceKind.METAL, rank=rank)

    @property
    def is_metal(self) -> bool:
        return self.kind is PieceKind.METAL

    def legal_pair(self, other: Piece) -> bool:
        """
        Check whether two tiles may be removed together.

        This only looks at tile kinds. Whether a metal is unlocked yet is a
        property of the board (see ``SigmarBoard.is_open``).
        """
        if self.kind is PieceKind.ELEMENT and other.kind is PieceKind.ELEMENT:
            return self.element == other.element
        return frozenset([self.kind, other.kind]) in _LEGAL_KIND_PAIRS

    @property
    def code(self) -> int:
        """Integer code used for array storage (0 is reserved for empty)."""
        if self.kind is PieceKind.ELEMENT:
            return _ELEMENT_CODES[self.element]
        if self.kind is PieceKind.METAL:
            return _METAL_CODE_BASE + self.rank
        return _KIND_CODES[self.kind]

    @classmethod
    def from_code(cls, code: int) -> Optional[Piece]:
        """Inverse of ``code``. Returns None for the empty code."""
        code = int(code)
        if code == EMPTY_CODE:
            return None
        try:
            return _PIECES_BY_CODE[code]
        except KeyError:
            raise ValueError(f"Unknown piece code {code}") from None

    @property
    def glyph(self) -> str:
        """One-character symbol used in text dumps."""
        if self.kind is PieceKind.ELEMENT:
            return _ELEMENT_GLYPHS[self.element]
        if self.kind is PieceKind.METAL:
            return str(self.rank)
        return _KIND_GLYPHS[self.kind]

    @classmethod
    def from_glyph(cls, glyph: str) -> Optional[Piece]:
        """Inverse of ``glyph``. Returns None for the empty glyph."""
        if glyph == EMPTY_GLYPH:
            return None
        try:
            return _PIECES_BY_GLYPH[glyph.lower()]
        except KeyError:
            raise ValueError(f"Unknown piece glyph {glyph!r}") from None

    def __str__(self) -> str:
        if self.kind is PieceKind.ELEMENT:
            return self.element.value.capitalize()
        if self.kind is PieceKind.METAL:
            return METAL_NAMES[self.rank].capitalize()
        return self.kind.value.capitalize()


def legal_pair(a: Piece, b: Piece) -> bool:
    """Symmetric pairing relation between two tiles."""
    return a.legal_pair(b)


WATER = Piece.elemental(Element.WATER)
FIRE = Piece.elemental(Element.FIRE)
EARTH = Piece.elemental(Element.EARTH)
AIR = Piece.elemental(Element.AIR)
SALT = Piece(PieceKind.SALT)
QUICKSILVER = Piece(PieceKind.QUICKSILVER)
VITAE = Piece(PieceKind.VITAE)
MORS = Piece(PieceKind.MORS)
METALS = tuple(Piece.metal(rank) for rank in range(MAX_METAL_RANK + 1))
GOLD = METALS[MAX_METAL_RANK]

ALL_PIECES = (WATER, FIRE, EARTH, AIR, SALT, QUICKSILVER, VITAE, MORS) + METALS

_PIECES_BY_CODE = {piece.code: piece for piece in ALL_PIECES}
_PIECES_BY_GLYPH = {piece.glyph: piece for piece in ALL_PIECES}
