"""Unit tests for tiles and the board model."""

import pytest
from sigmar.core.board import SigmarBoard, OutOfBoundsError, BoardConsistencyError
from sigmar.core.pieces import (
    Element, Piece, PieceKind, legal_pair, ALL_PIECES,
    WATER, FIRE, EARTH, AIR, SALT, QUICKSILVER, VITAE, MORS, METALS,
)

CENTER = (5, 5)
# Neighbours of the center in direction order
RING = [(6, 5), (6, 4), (5, 4), (4, 5), (4, 6), (5, 6)]


def enclosed_center() -> SigmarBoard:
    """A fire tile at the center with salt on all six sides."""
    board = SigmarBoard()
    board.set(*CENTER, FIRE)
    for x, y in RING:
        board.set(x, y, SALT)
    return board


def full_board(piece: Piece = SALT) -> SigmarBoard:
    board = SigmarBoard()
    for x, y in board.cells():
        board.set(x, y, piece)
    return board


class TestPieces:
    """Tests for tile kinds and pairing rules."""

    def test_legal_pair_examples(self):
        """Test the basic pairing examples."""
        assert legal_pair(FIRE, FIRE)
        assert legal_pair(FIRE, SALT)
        assert legal_pair(SALT, FIRE)
        assert legal_pair(SALT, SALT)
        assert legal_pair(METALS[3], QUICKSILVER)
        assert legal_pair(VITAE, MORS)

        assert not legal_pair(FIRE, WATER)
        assert not legal_pair(SALT, QUICKSILVER)
        assert not legal_pair(QUICKSILVER, QUICKSILVER)
        assert not legal_pair(METALS[0], METALS[1])
        assert not legal_pair(VITAE, VITAE)
        assert not legal_pair(MORS, SALT)
        assert not legal_pair(METALS[2], SALT)

    def test_legal_pair_symmetric(self):
        """Test that pairing does not depend on argument order."""
        for a in ALL_PIECES:
            for b in ALL_PIECES:
                assert legal_pair(a, b) == legal_pair(b, a)

    def test_metal_rank_ignored_by_legality(self):
        """Every metal pairs with quicksilver whatever its rank."""
        for metal in METALS:
            assert metal.legal_pair(QUICKSILVER)

    def test_invalid_pieces(self):
        """Test that inconsistent pieces are rejected."""
        with pytest.raises(ValueError):
            Piece(PieceKind.ELEMENT)
        with pytest.raises(ValueError):
            Piece.metal(6)
        with pytest.raises(ValueError):
            Piece(PieceKind.SALT, element=Element.FIRE)

    def test_codes_and_glyphs(self):
        """Test that codes and glyphs identify each piece."""
        assert len({p.code for p in ALL_PIECES}) == len(ALL_PIECES)
        assert len({p.glyph for p in ALL_PIECES}) == len(ALL_PIECES)
        assert Piece.from_code(0) is None
        assert Piece.from_glyph(".") is None
        assert Piece.from_code(AIR.code) == AIR
        assert Piece.from_glyph("3") == Piece.metal(3)
        with pytest.raises(ValueError):
            Piece.from_glyph("x")

    def test_names(self):
        assert str(EARTH) == "Earth"
        assert str(METALS[0]) == "Lead"
        assert str(METALS[5]) == "Gold"


class TestSigmarBoard:
    """Tests for SigmarBoard class."""

    def test_create_empty_board(self):
        """Test creating an empty board."""
        board = SigmarBoard()
        assert len(board.cells()) == 91
        assert board.count_pieces() == 0
        assert board.count_empty() == 91
        assert board.metals_taken == 0

    def test_set_out_of_bounds(self):
        """Test that writing outside the array fails."""
        board = SigmarBoard()
        with pytest.raises(OutOfBoundsError):
            board.set(11, 11, FIRE)
        with pytest.raises(OutOfBoundsError):
            board.set(3, 11, FIRE)
        with pytest.raises(IndexError):
            board.set(-1, 0, FIRE)

    def test_set_and_get(self):
        """Test setting and getting values."""
        board = SigmarBoard()
        assert board.set(5, 5, FIRE) == FIRE
        assert board.get(5, 5) == FIRE
        assert not board.is_empty(5, 5)

        board.clear(5, 5)
        assert board.get(5, 5) is None
        assert board.is_empty(5, 5)

    def test_get_out_of_range_is_absent(self):
        """Test that reads outside the array return None."""
        board = full_board()
        assert board.get(11, 0) is None
        assert board.get(0, 11) is None
        assert board.get(-1, 5) is None

    def test_on_board(self):
        """Test the hexagon membership predicate."""
        assert SigmarBoard.on_board(5, 5)
        assert SigmarBoard.on_board(0, 5)
        assert SigmarBoard.on_board(10, 5)
        assert SigmarBoard.on_board(5, 10)
        assert not SigmarBoard.on_board(0, 4)
        assert not SigmarBoard.on_board(10, 6)
        assert not SigmarBoard.on_board(0, 0)
        assert not SigmarBoard.on_board(10, 10)
        assert not SigmarBoard.on_board(11, 4)
        assert not SigmarBoard.on_board(-1, 7)

    def test_enclosed_tile_is_not_open(self):
        """Test that a tile surrounded on all sides cannot move."""
        board = enclosed_center()
        assert not board.is_open(*CENTER)

    def test_three_consecutive_gaps_open_tile(self):
        """Test that three adjacent gaps free the tile."""
        board = enclosed_center()
        for x, y in RING[:3]:
            board.clear(x, y)
        assert board.is_open(*CENTER)

    def test_gap_wrapping_around_directions(self):
        """Test a gap that wraps from the last direction to the first."""
        board = enclosed_center()
        for x, y in (RING[4], RING[5], RING[0]):
            board.clear(x, y)
        assert board.is_open(*CENTER)

    def test_two_gaps_not_enough(self):
        """Test that two adjacent gaps keep the tile locked."""
        board = enclosed_center()
        for x, y in RING[:2]:
            board.clear(x, y)
        assert not board.is_open(*CENTER)

    def test_scattered_gaps_not_enough(self):
        """Test that three non-adjacent gaps keep the tile locked."""
        board = enclosed_center()
        for x, y in (RING[0], RING[2], RING[4]):
            board.clear(x, y)
        assert not board.is_open(*CENTER)

    def test_edge_cells_count_off_board_as_gaps(self):
        """Test openness on a full board, where only corners are free."""
        board = full_board()
        assert board.is_open(0, 5)     # corner: three directions off the board
        assert board.is_open(10, 0)
        assert not board.is_open(0, 7)  # edge: only two directions off the board
        assert not board.is_open(*CENTER)

    def test_empty_or_off_board_not_open(self):
        """Test that empty and padding cells are never open."""
        board = SigmarBoard()
        assert not board.is_open(*CENTER)
        assert not board.is_open(0, 0)
        assert not board.is_open(11, 11)

    def test_metal_rank_gating(self):
        """Test that a metal is only open when its rank is next."""
        board = SigmarBoard()
        board.set(2, 8, Piece.metal(3))
        for taken in range(3):
            board.metals_taken = taken
            assert not board.is_open(2, 8)
        board.metals_taken = 3
        assert board.is_open(2, 8)
        board.metals_taken = 4
        assert not board.is_open(2, 8)

    def test_open_pieces_scan_order(self):
        """Test that open cells come x outer, y inner."""
        board = SigmarBoard()
        board.set(8, 2, WATER)
        board.set(5, 5, FIRE)
        board.set(2, 8, AIR)
        board.set(5, 8, Piece.metal(2))  # locked
        assert board.open_pieces() == [(2, 8), (5, 5), (8, 2)]

    def test_is_solved(self):
        """Test that only the anchor may stay occupied on a solved board."""
        board = SigmarBoard()
        assert board.is_solved()

        board.set(*board.ANCHOR, Piece.metal(5))
        assert board.is_solved()

        board.set(2, 8, AIR)
        assert not board.is_solved()

    def test_padding_tile_is_ignored(self):
        """Test that a tile written into the padding is not part of the hexagon."""
        board = SigmarBoard()
        assert board.set(0, 0, FIRE) == FIRE

        assert board.is_solved()
        assert board.count_pieces() == 0
        assert board.count_empty() == 91
        assert board.occupied_cells() == []
        assert not board.is_open(0, 0)

    def test_remove_and_restore_metal_pair(self):
        """Test that removing a metal pair advances the counter and undoes cleanly."""
        board = SigmarBoard()
        board.set(2, 8, Piece.metal(0))
        board.set(8, 2, QUICKSILVER)
        before = board.copy()

        removed = board.remove_pair((2, 8), (8, 2))
        assert removed.consumed_metal
        assert board.metals_taken == 1
        assert board.count_pieces() == 0

        board.restore(removed)
        assert board == before

    def test_remove_non_metal_pair_keeps_counter(self):
        board = SigmarBoard()
        board.set(2, 8, VITAE)
        board.set(8, 2, MORS)
        board.remove_pair((2, 8), (8, 2))
        assert board.metals_taken == 0

    def test_remove_empty_cell_fails(self):
        board = SigmarBoard()
        board.set(2, 8, SALT)
        with pytest.raises(BoardConsistencyError):
            board.remove_pair((2, 8), (8, 2))

    def test_removed_context_restores_on_error(self):
        """Test that the undo guard restores the pair when the block raises."""
        board = SigmarBoard()
        board.set(2, 8, SALT)
        board.set(8, 2, SALT)
        before = board.copy()

        with pytest.raises(KeyError):
            with board.removed((2, 8), (8, 2)):
                assert board.count_pieces() == 0
                raise KeyError("boom")

        assert board == before

    def test_string_round_trip(self):
        """Test converting board to and from its string form."""
        board = SigmarBoard(metals_taken=2)
        board.set(0, 5, WATER)
        board.set(5, 5, Piece.metal(5))
        board.set(10, 5, QUICKSILVER)
        s = board.to_string()

        assert len(s) == 91
        assert s[0] == 'w'
        assert s.count('.') == 88
        assert SigmarBoard.from_string(s, metals_taken=2) == board

    def test_from_string_ignores_whitespace(self):
        s = "." * 45 + "\n  " + "." * 45 + " a"
        board = SigmarBoard.from_string(s)
        assert board.get(10, 5) == AIR

    def test_from_string_errors(self):
        """Test that malformed strings are rejected."""
        with pytest.raises(ValueError):
            SigmarBoard.from_string("." * 90)
        with pytest.raises(ValueError):
            SigmarBoard.from_string("." * 90 + "x")

    def test_from_grid(self):
        """Test building a board from an 11x11 grid of pieces."""
        rows = [[None] * 11 for _ in range(11)]
        rows[2][8] = EARTH
        rows[5][5] = SALT
        board = SigmarBoard.from_grid(rows)
        assert board.get(2, 8) == EARTH
        assert board.get(5, 5) == SALT
        assert board.to_grid() == rows

    def test_from_grid_rejects_padding_tiles(self):
        rows = [[None] * 11 for _ in range(11)]
        rows[0][0] = FIRE
        with pytest.raises(ValueError):
            SigmarBoard.from_grid(rows)

    def test_copy(self):
        """Test board copy."""
        board = SigmarBoard()
        board.set(4, 4, FIRE)
        copy = board.copy()

        assert copy.get(4, 4) == FIRE

        # Modify copy, original should be unchanged
        copy.set(4, 4, WATER)
        copy.metals_taken = 1
        assert board.get(4, 4) == FIRE
        assert board.metals_taken == 0

    def test_equality_includes_metal_counter(self):
        board = SigmarBoard()
        other = SigmarBoard(metals_taken=1)
        assert board != other
        assert board.key() != other.key()

    def test_pretty_print(self):
        """Test the hexagon drawing."""
        board = SigmarBoard()
        board.set(5, 5, Piece.metal(5))
        text = str(board)
        lines = text.split("\n")
        assert len(lines) == 12
        assert "5" in lines[5]
        assert lines[-1] == "metals taken: 0"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
