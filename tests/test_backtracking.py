"""Unit tests for the backtracking generator and solver."""

import random

import pytest

from sudokugrid.core.errors import UnsupportedShapeError
from sudokugrid.core.grid import Grid
from sudokugrid.core.propagator import recompute_candidates
from sudokugrid.core.validator import is_solved_grid
from sudokugrid.generator import BacktrackingGenerator

# A known solvable puzzle and its solution
TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


def grid_state(grid):
    return [(c.x, c.y, c.z, c.snapshot()) for c in grid]


class TestRecursiveSmartGenerator:
    """Tests for full 9x9 generation."""

    def test_generates_complete_grids(self):
        """Successful runs give complete, valid grids."""
        outcomes = []
        for seed in range(4):
            grid = Grid()
            succeeded = BacktrackingGenerator(grid, seed=seed).recursive_smart_generator()
            outcomes.append(succeeded)
            if succeeded:
                assert is_solved_grid(grid)
                assert all(cell.is_solved() for cell in grid)
        assert any(outcomes)

    def test_seed_is_reproducible(self):
        """The same seed produces the same grid."""
        first = Grid()
        second = Grid()
        BacktrackingGenerator(first, seed=11).recursive_smart_generator()
        BacktrackingGenerator(second, rng=random.Random(11)).recursive_smart_generator()
        assert first.to_string() == second.to_string()

    def test_export_and_reimport(self):
        """Re-importing a generated grid as givens reproduces its values."""
        grid = Grid()
        generator = BacktrackingGenerator(grid, seed=3)
        while not generator.recursive_smart_generator():
            pass
        rows = grid.to_rows()

        copy = Grid()
        copy.initialize_board(rows)
        assert copy.to_rows() == rows
        assert not any(cell.is_mutable() for cell in copy)

    def test_regenerates_from_scratch(self):
        """Earlier givens are discarded."""
        grid = Grid.from_string(TEST_PUZZLE)
        BacktrackingGenerator(grid, seed=2).recursive_smart_generator()
        assert grid.givens is None

    @pytest.mark.parametrize("shape", [
        (4, 4, 2, 2),
        (6, 6, 2, 3),
        (16, 16, 4, 4),
        (9, 9, 1, 9),
    ])
    def test_unsupported_shape(self, shape):
        """Other shapes raise and leave the grid untouched."""
        grid = Grid(*shape)
        grid.set_value(0, 0, "1")
        before = grid_state(grid)

        with pytest.raises(UnsupportedShapeError):
            BacktrackingGenerator(grid, seed=0).recursive_smart_generator()
        assert grid_state(grid) == before

    def test_run_records_unsupported_shape(self):
        """run() reports the shape error in the stats."""
        stats = BacktrackingGenerator(Grid(4, 4, 2, 2)).run()
        assert not stats.succeeded
        assert "9x9" in stats.extra["error"]


class TestSeeding:
    """Tests for the structured seeding of the first band and column."""

    def seeded(self, seed):
        grid = Grid()
        generator = BacktrackingGenerator(grid, seed=seed)
        generator._fill_first_block()
        generator._fill_second_block()
        generator._fill_third_block()
        generator._fill_first_column()
        return grid

    def test_first_band_rows_are_permutations(self):
        """Rows 0-2 hold every symbol once."""
        for seed in range(25):
            grid = self.seeded(seed)
            for y in range(3):
                assert sorted(c.value for c in grid.row(y)) == list("123456789")

    def test_first_band_blocks_are_permutations(self):
        """Blocks (0,0), (0,1) and (0,2) hold every symbol once."""
        for seed in range(25):
            grid = self.seeded(seed)
            for z in range(3):
                assert sorted(c.value for c in grid.block(z)) == list("123456789")

    def test_first_column_is_permutation(self):
        """Column 0 holds every symbol once and nothing else is placed."""
        for seed in range(25):
            grid = self.seeded(seed)
            assert sorted(c.value for c in grid.column(0)) == list("123456789")
            assert grid.count_filled() == 27 + 6

    def test_second_block_rows_avoid_first_block_rows(self):
        """Row y of block (0,1) shares nothing with row y of block (0,0)."""
        for seed in range(25):
            grid = self.seeded(seed)
            for y in range(3):
                first = {grid.get_value(x, y) for x in range(3)}
                second = {grid.get_value(x, y) for x in range(3, 6)}
                assert not first & second


class TestSolve:
    """Tests for completing imported boards."""

    def test_solve_known_puzzle(self):
        """A puzzle with a unique solution is completed to that solution."""
        grid = Grid.from_string(TEST_PUZZLE)
        generator = BacktrackingGenerator(grid, seed=0)

        assert generator.solve()
        assert grid.to_string() == TEST_SOLUTION
        assert generator.stats.nodes_explored > 0

    def test_solve_small_grid(self):
        """solve() is not limited to 9x9 grids."""
        grid = Grid.from_string("1000000000000000", 4, 4, 2, 2)
        assert BacktrackingGenerator(grid, seed=4).solve()
        assert is_solved_grid(grid)

    def test_failure_restores_grid(self):
        """Without a solution every tentative placement is undone."""
        # Row 0 needs 3 and 4 in (2,0) and (3,0), but block 1 already has 3
        board = "1200" + "0003" + "0000" + "0000"
        grid = Grid.from_string(board, 4, 4, 2, 2)
        recompute_candidates(grid)
        before = grid_state(grid)

        generator = BacktrackingGenerator(grid, seed=1)
        assert generator.solve() is False
        assert grid_state(grid) == before
        assert generator.stats.backtracks > 0

    def test_conflicting_givens(self):
        """Givens that already clash are not solvable."""
        grid = Grid.from_string("1100" + "0" * 12, 4, 4, 2, 2)
        assert BacktrackingGenerator(grid).solve() is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
