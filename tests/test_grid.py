"""Unit tests for cells and grid structure."""

import logging

import numpy as np
import pytest

from sudokugrid.core.cell import Cell
from sudokugrid.core.errors import (
    AlphabetTooSmallError,
    ConfigurationError,
    ImmutableWriteError,
    InvalidSymbolError,
    ShapeMismatchError,
)
from sudokugrid.core.grid import Grid, normalize_symbol
from sudokugrid.core.presets import PRESETS, GridConfig, get_preset


MINI_BOARD = [
    "1", "2", "", "",
    "", "", "3", "",
    "", "", "", "",
    "", "", "", "",
]


def cell_states(grid):
    return [(c.x, c.y, c.z, c.snapshot()) for c in grid]


class TestCell:
    """Tests for Cell class."""

    def test_new_cell_is_empty_and_mutable(self):
        """A fresh cell is empty, mutable and unsolved."""
        cell = Cell(2, 1, 0, "1234")
        assert cell.get_value() == ""
        assert cell.is_mutable()
        assert not cell.is_solved()
        assert cell.candidates == {"1", "2", "3", "4"}

    def test_set_and_clear(self):
        """Test writing and clearing a mutable cell."""
        cell = Cell(0, 0, 0)
        cell.set_value("5")
        assert cell.value == "5"
        cell.clear()
        assert cell.is_empty()

    def test_solve_makes_cell_immutable(self):
        """A solved cell keeps its value and rejects writes."""
        cell = Cell(3, 4, 4)
        cell.solve("7")
        assert cell.is_solved()
        assert not cell.is_mutable()
        assert cell.candidates == {"7"}

        with pytest.raises(ImmutableWriteError) as excinfo:
            cell.set_value("8")
        assert (excinfo.value.x, excinfo.value.y) == (3, 4)
        assert cell.value == "7"

        with pytest.raises(ImmutableWriteError):
            cell.clear()

    def test_reset_restores_mutability(self):
        """Only reset gives mutability back."""
        cell = Cell(0, 0, 0)
        cell.solve("1")
        cell.reset("12")
        assert cell.is_mutable()
        assert not cell.is_solved()
        assert cell.value == ""
        assert cell.candidates == {"1", "2"}

    def test_snapshot_restore(self):
        """Restoring a snapshot undoes a placement."""
        cell = Cell(0, 0, 0, "123")
        saved = cell.snapshot()
        cell.solve("2")
        cell.restore(saved)
        assert cell.value == ""
        assert cell.is_mutable()
        assert cell.candidates == {"1", "2", "3"}

    def test_is_peer(self):
        """Cells sharing a row, column or block are peers."""
        cell = Cell(0, 0, 0)
        assert cell.is_peer(Cell(5, 0, 1))
        assert cell.is_peer(Cell(0, 5, 3))
        assert cell.is_peer(Cell(1, 1, 0))
        assert not cell.is_peer(Cell(4, 4, 4))
        assert not cell.is_peer(cell)


class TestGridConfiguration:
    """Tests for grid configuration."""

    def test_default_grid(self):
        """Default grid is a classic 9x9 with 3x3 blocks."""
        grid = Grid()
        assert grid.shape == (9, 9, 3, 3)
        assert grid.block_width == 3
        assert grid.block_height == 3
        assert grid.alphabet == tuple("123456789")
        assert len(grid) == 81

    @pytest.mark.parametrize("cols,rows,block_cols,block_rows", [
        (9, 9, 0, 3),
        (9, 9, 3, 0),
        (9, 9, 10, 3),
        (9, 9, 2, 3),
        (9, 9, 3, 4),
        (0, 9, 1, 3),
        (9, -9, 3, 3),
    ])
    def test_invalid_sections(self, cols, rows, block_cols, block_rows):
        """Bad dimensions or section counts raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            Grid(cols, rows, block_cols, block_rows)

    def test_configuration_error_is_value_error(self):
        """Callers can catch configuration errors as ValueError."""
        with pytest.raises(ValueError):
            Grid(9, 9, 2, 2)

    def test_alphabet_is_trimmed_and_uppercased(self):
        """Only the first max(cols, rows) symbols are kept, uppercased."""
        grid = Grid(4, 4, 2, 2, alphabet="abcdef")
        assert grid.alphabet == ("A", "B", "C", "D")

    def test_set_alphabet_accepts_numbers(self):
        """Alphabet entries are converted to strings."""
        grid = Grid(4, 4, 2, 2)
        grid.set_alphabet([1, 2, 3, 4])
        assert grid.alphabet == ("1", "2", "3", "4")

    def test_alphabet_too_small_degrades(self, caplog):
        """A short alphabet empties the alphabet instead of raising."""
        with caplog.at_level(logging.WARNING, logger="sudokugrid"):
            grid = Grid(4, 4, 2, 2, alphabet="123")
        assert grid.alphabet == ()
        assert "alphabet" in caplog.text

        with pytest.raises(InvalidSymbolError):
            grid.set_value(0, 0, "1")
        with pytest.raises(AlphabetTooSmallError) as excinfo:
            grid.require_alphabet()
        assert excinfo.value.required == 4
        assert excinfo.value.available == 3

    def test_set_alphabet_does_not_revalidate(self):
        """Existing values survive an alphabet change."""
        grid = Grid(4, 4, 2, 2)
        grid.set_value(0, 0, "3")
        grid.set_alphabet("ABCD")
        assert grid.get_value(0, 0) == "3"

    def test_normalize_symbol(self):
        """Blank spellings normalize to the empty string."""
        assert normalize_symbol(None) == ""
        assert normalize_symbol(0) == ""
        assert normalize_symbol("0") == ""
        assert normalize_symbol(".") == ""
        assert normalize_symbol(7) == "7"
        assert normalize_symbol(" b ") == "B"


class TestGridStructure:
    """Tests for structure generation and traversal."""

    @pytest.mark.parametrize("cols,rows,block_cols,block_rows", [
        (4, 4, 2, 2),
        (6, 6, 2, 3),
        (9, 9, 3, 3),
        (6, 4, 3, 2),
        (8, 8, 2, 4),
        (16, 16, 4, 4),
    ])
    def test_block_geometry(self, cols, rows, block_cols, block_rows):
        """Every cell gets the block index of its rectangle."""
        grid = Grid(cols, rows, block_cols, block_rows)
        assert len(grid.cells) == cols * rows

        width, height = cols // block_cols, rows // block_rows
        for cell in grid:
            assert cell.z == cell.x // width + (cell.y // height) * block_cols

        blocks = {cell.z for cell in grid}
        assert blocks == set(range(block_cols * block_rows))
        for z in blocks:
            members = grid.block(z)
            assert len(members) == width * height
            assert len({c.x // width for c in members}) == 1
            assert len({c.y // height for c in members}) == 1

    def test_six_by_six_blocks(self):
        """A 6x6 grid with 2x3 sections has blocks 3 wide and 2 high."""
        grid = Grid(6, 6, 2, 3)
        assert grid.cell(4, 1).z == 1
        assert grid.cell(0, 2).z == 2
        assert grid.cell(5, 5).z == 5

    def test_row_major_order(self):
        """Cells are visited row by row."""
        grid = Grid(4, 4, 2, 2)
        coords = [(c.x, c.y) for c in grid.for_each_cell()]
        assert coords[:5] == [(0, 0), (1, 0), (2, 0), (3, 0), (0, 1)]
        for i, cell in enumerate(grid):
            assert grid.index(cell.x, cell.y) == i

    def test_traversal_is_restartable(self):
        """Each traversal starts from the first cell."""
        grid = Grid(4, 4, 2, 2)
        assert list(grid.for_each_cell()) == list(grid.for_each_cell())

    def test_structure_starts_with_full_candidates(self):
        """Fresh cells hold the whole alphabet as candidates."""
        grid = Grid(4, 4, 2, 2)
        assert all(cell.candidates == {"1", "2", "3", "4"} for cell in grid)

    def test_generate_structure_wipes_state(self):
        """Regenerating discards values and givens."""
        grid = Grid(4, 4, 2, 2)
        grid.initialize_board(MINI_BOARD)
        grid.generate_structure()
        assert grid.count_filled() == 0
        assert grid.givens is None
        assert all(cell.is_mutable() for cell in grid)

    def test_cell_out_of_range(self):
        """Coordinates outside the grid raise IndexError."""
        grid = Grid(4, 4, 2, 2)
        with pytest.raises(IndexError):
            grid.cell(4, 0)

    def test_next_mutable_wraps_around(self):
        """Tab navigation skips givens and wraps to the start."""
        grid = Grid(4, 4, 2, 2)
        grid.initialize_board("1234" + "0" * 12)
        assert grid.next_mutable(0) == 4
        assert grid.next_mutable(10) == 10

        grid.initialize_board("0" + "1" * 14 + "0")
        assert grid.next_mutable(1) == 15
        assert grid.next_mutable(16) == 0

        grid.initialize_board("1" * 16)
        assert grid.next_mutable(0) is None


class TestInitializeBoard:
    """Tests for board import."""

    def test_flat_board(self):
        """Non-blank entries become immutable givens."""
        grid = Grid(4, 4, 2, 2)
        grid.initialize_board(MINI_BOARD)
        assert grid.get_value(0, 0) == "1"
        assert not grid.is_mutable(0, 0)
        assert grid.is_solved(0, 0)
        assert grid.get_value(2, 0) == ""
        assert grid.is_mutable(2, 0)

    def test_nested_board(self):
        """A rows-of-columns board gives the same result as a flat one."""
        flat = Grid(4, 4, 2, 2)
        flat.initialize_board(MINI_BOARD)
        nested = Grid(4, 4, 2, 2)
        nested.initialize_board([MINI_BOARD[i:i + 4] for i in range(0, 16, 4)])
        assert cell_states(flat) == cell_states(nested)

    def test_string_and_numeric_boards(self):
        """Strings, zeros and numpy arrays are accepted."""
        grid = Grid(4, 4, 2, 2)
        grid.initialize_board("12000030" + "0" * 8)
        from_string = cell_states(grid)

        grid.initialize_board(np.array([[1, 2, 0, 0], [0, 0, 3, 0], [0] * 4, [0] * 4]))
        assert cell_states(grid) == from_string

        grid.initialize_board(["12..", "..3.", "....", "...."])
        assert cell_states(grid) == from_string

    def test_initialize_is_idempotent(self):
        """Importing the same board twice yields the same cell state."""
        grid = Grid(4, 4, 2, 2)
        grid.initialize_board(MINI_BOARD)
        first = cell_states(grid)
        grid.initialize_board(MINI_BOARD)
        assert cell_states(grid) == first

    def test_initialize_replaces_previous_board(self):
        """A new import discards earlier givens and edits."""
        grid = Grid(4, 4, 2, 2)
        grid.initialize_board(MINI_BOARD)
        grid.set_value(3, 3, "4")
        grid.initialize_board([""] * 16)
        assert grid.count_filled() == 0
        assert grid.is_mutable(0, 0)

    @pytest.mark.parametrize("board", [
        ["1"] * 15,
        ["1"] * 17,
        [["1", "2", "3", "4"]] * 3,
        [["1", "2", "3"]] * 4,
    ])
    def test_shape_mismatch(self, board):
        """Wrong lengths raise ShapeMismatchError."""
        grid = Grid(4, 4, 2, 2)
        with pytest.raises(ShapeMismatchError):
            grid.initialize_board(board)

    def test_unknown_symbol(self):
        """Entries outside the alphabet are rejected."""
        grid = Grid(4, 4, 2, 2)
        with pytest.raises(InvalidSymbolError) as excinfo:
            grid.initialize_board("5" + "0" * 15)
        assert excinfo.value.value == "5"

    def test_restart_keeps_givens(self):
        """Restart wipes placements but re-applies imported givens."""
        grid = Grid(4, 4, 2, 2)
        grid.initialize_board(MINI_BOARD)
        grid.cell(3, 3).solve("4")
        grid.restart()
        assert grid.get_value(3, 3) == ""
        assert grid.get_value(1, 0) == "2"
        assert not grid.is_mutable(1, 0)


class TestGridAccess:
    """Tests for per-cell reads and writes."""

    def test_set_value_uppercases(self):
        """Values are stored in symbol form."""
        grid = Grid(4, 4, 2, 2, alphabet="abcd")
        grid.set_value(1, 1, "c")
        assert grid.get_value(1, 1) == "C"

    def test_write_to_given_fails(self):
        """Writing to an immutable cell raises and keeps the value."""
        grid = Grid(4, 4, 2, 2)
        grid.initialize_board(MINI_BOARD)
        with pytest.raises(ImmutableWriteError):
            grid.set_value(0, 0, "3")
        assert grid.get_value(0, 0) == "1"

    def test_blank_write_clears(self):
        """Writing a blank value clears a mutable cell."""
        grid = Grid(4, 4, 2, 2)
        grid.set_value(2, 2, 4)
        grid.set_value(2, 2, "")
        assert grid.get_value(2, 2) == ""

    def test_user_edit_is_not_solved(self):
        """User edits change the value only."""
        grid = Grid(4, 4, 2, 2)
        grid.set_value(2, 2, "4")
        assert grid.is_mutable(2, 2)
        assert not grid.is_solved(2, 2)

    def test_string_round_trip(self):
        """to_string and from_string agree, with 0 for empty cells."""
        s = "1200003000000000"
        grid = Grid.from_string(s, 4, 4, 2, 2)
        assert grid.to_string() == s
        assert grid.to_rows()[1] == ["", "", "3", ""]
        assert grid.to_array().shape == (4, 4)

    def test_str_rendering(self):
        """Text rendering shows block dividers and dots for empty cells."""
        grid = Grid(4, 4, 2, 2)
        grid.initialize_board(MINI_BOARD)
        lines = str(grid).splitlines()
        assert lines[0] == "+-----+-----+"
        assert lines[1] == "| 1 2 | . . |"
        assert lines[3] == "+-----+-----+"
        assert len(lines) == 7


class TestPresets:
    """Tests for named configurations."""

    def test_presets_build(self):
        """Every preset builds a grid with a usable alphabet."""
        for name, config in PRESETS.items():
            grid = config.build()
            assert len(grid.alphabet) == grid.size, name

    def test_hex_alphabet(self):
        """The 16x16 preset uses 1-9 then A-G."""
        grid = get_preset("hex").build()
        assert "".join(grid.alphabet) == "123456789ABCDEFG"

    def test_custom_config(self):
        """GridConfig passes its alphabet through."""
        grid = GridConfig(4, 4, 2, 2, alphabet="WXYZ").build()
        assert grid.alphabet == ("W", "X", "Y", "Z")

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            get_preset("giant")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
