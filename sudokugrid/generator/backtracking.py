"""Backtracking generator for classic 9x9 grids, also usable as a solver."""

from __future__ import annotations
import logging
import random
from typing import List, Optional, Set

from .base import BaseGenerator
from ..core.errors import UnsupportedShapeError
from ..core.grid import Grid
from ..core.validator import is_valid_grid

logger = logging.getLogger(__name__)

CLASSIC_SHAPE = (9, 9, 3, 3)
BAND = 3


class BacktrackingGenerator(BaseGenerator):
    """
    Generator using structured seeding followed by recursive backtracking.

    Algorithm:
    1. Fill block (0,0) with a random permutation of the alphabet
    2. Fill block (0,1) so each of its rows avoids the same row of block (0,0)
    3. Fill block (0,2) with what is left of each row
    4. Fill the rest of column 0 with what is left of the column
    5. Complete the grid with MRV backtracking

    The seeded cells have no solved peers to learn from, so propagation alone
    would start from full candidate sets there. Once the first band and column
    are fixed the remaining search space is small and failures stay local:
    only the most recent placement is undone.
    """

    name = "Backtracking"

    def __init__(
        self,
        grid: Grid,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        seed_retries: int = 100,
    ):
        """
        Initialize the generator.

        Args:
            grid: Grid to fill.
            rng: Random source. Takes precedence over ``seed``.
            seed: Seed for a private random source.
            seed_retries: Redraws allowed when seeding block (0,1) stalls.
        """
        super().__init__(grid, rng=rng, seed=seed)
        self.seed_retries = seed_retries

    def _generate(self) -> bool:
        return self.recursive_smart_generator()

    def recursive_smart_generator(self) -> bool:
        """
        Generate a complete 9x9 grid.

        Returns:
            True if a complete consistent grid was reached. On False the grid
            holds only the seeded cells.

        Raises:
            UnsupportedShapeError: The grid is not 9x9 with 3x3 blocks. The
                grid is left untouched.
        """
        grid = self.grid
        if grid.shape != CLASSIC_SHAPE:
            raise UnsupportedShapeError(
                f"Backtracking generation needs a 9x9 grid with 3x3 blocks, got "
                f"{grid.cols}x{grid.rows} with {grid.block_cols}x{grid.block_rows} sections"
            )
        grid.require_alphabet()
        grid.generate_structure()

        self._fill_first_block()
        self._fill_second_block()
        self._fill_third_block()
        self._fill_first_column()
        logger.debug("Seeded first band and column:\n%s", grid)

        return self.solve()

    def solve(self) -> bool:
        """
        Complete the current grid by backtracking. Works on any grid shape.

        Returns:
            True if every cell got solved. On False every tentative placement
            has been undone.
        """
        self.grid.require_alphabet()
        if not is_valid_grid(self.grid):
            logger.info("Grid already holds conflicting values, nothing to solve")
            return False

        if self._search():
            logger.info(
                "Grid completed after %d nodes and %d backtracks",
                self.stats.nodes_explored, self.stats.backtracks
            )
            return True

        self.propagator.recompute_candidates()
        logger.info("No solution from the current grid state")
        return False

    def _search(self) -> bool:
        """
        Recursive backtracking step.

        Returns True if solution found, False otherwise.
        """
        self.stats.nodes_explored += 1

        unsolved = self.grid.unsolved_cells()
        if not unsolved:
            return True

        self.propagator.recompute_candidates()
        cell = min(unsolved, key=lambda c: len(c.candidates))
        if not cell.candidates:
            self.stats.dead_ends += 1
            return False

        values = self.grid.ordered(cell.candidates)
        self.rng.shuffle(values)

        for value in values:
            saved = cell.snapshot()
            cell.solve(value)
            self.stats.placements += 1

            if self._search():
                return True

            cell.restore(saved)
            self.stats.backtracks += 1

        return False

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def _place_row(self, y: int, first_x: int, symbols: List[str]) -> None:
        for offset, symbol in enumerate(symbols):
            self.grid.cell(first_x + offset, y).solve(symbol)
            self.stats.placements += 1

    def _fill_first_block(self) -> None:
        """Random permutation of the alphabet into block (0,0)."""
        values = list(self.grid.alphabet)
        self.rng.shuffle(values)
        for y in range(BAND):
            self._place_row(y, 0, values[y * BAND:(y + 1) * BAND])

    def _fill_second_block(self) -> None:
        """Fill block (0,1): row y draws from the other two rows of block (0,0)."""
        first_block = [
            [self.grid.cell(x, y).value for x in range(BAND)] for y in range(BAND)
        ]

        for retry in range(self.seed_retries):
            rows = self._draw_second_block(first_block)
            if rows is not None:
                break
            logger.debug("Seeding block (0,1) stalled, retry %d", retry + 1)
        else:
            raise RuntimeError(f"Could not seed block (0,1) in {self.seed_retries} tries")

        for y, symbols in enumerate(rows):
            self.rng.shuffle(symbols)
            self._place_row(y, BAND, symbols)

    def _draw_second_block(self, first_block: List[List[str]]) -> Optional[List[List[str]]]:
        """
        Split the alphabet into three row sets for block (0,1).

        Each row's pool starts as the symbols of the two other rows of block
        (0,0). Forced moves go first: a row whose pool equals its open slots
        takes the whole pool, and a symbol left with a single open row goes
        there. Otherwise the row with the least slack draws a random symbol.

        Returns:
            Three lists of three symbols, or None if the draw stalled.
        """
        pools: List[Set[str]] = [
            set(first_block[(y + 1) % BAND]) | set(first_block[(y + 2) % BAND])
            for y in range(BAND)
        ]
        chosen: List[List[str]] = [[] for _ in range(BAND)]
        unplaced = set(self.grid.alphabet)

        while unplaced:
            open_rows = [y for y in range(BAND) if len(chosen[y]) < BAND]
            row: Optional[int] = None
            picks: List[str] = []

            for y in open_rows:
                slots = BAND - len(chosen[y])
                if len(pools[y]) < slots:
                    return None
                if len(pools[y]) == slots:
                    row, picks = y, self.grid.ordered(pools[y])
                    break

            if row is None:
                for symbol in self.grid.ordered(unplaced):
                    rows_left = [y for y in open_rows if symbol in pools[y]]
                    if not rows_left:
                        return None
                    if len(rows_left) == 1:
                        row, picks = rows_left[0], [symbol]
                        break

            if row is None:
                row = min(open_rows, key=lambda y: (len(pools[y]) - (BAND - len(chosen[y])), y))
                picks = [self.rng.choice(self.grid.ordered(pools[row]))]

            for symbol in picks:
                chosen[row].append(symbol)
                unplaced.discard(symbol)
                for pool in pools:
                    pool.discard(symbol)
            if len(chosen[row]) == BAND:
                pools[row] = set()

        return chosen

    def _fill_third_block(self) -> None:
        """Each row of block (0,2) gets the three symbols its row still lacks."""
        for y in range(BAND):
            used = {self.grid.cell(x, y).value for x in range(2 * BAND)}
            remaining = [symbol for symbol in self.grid.alphabet if symbol not in used]
            self.rng.shuffle(remaining)
            self._place_row(y, 2 * BAND, remaining)

    def _fill_first_column(self) -> None:
        """Rows 3-8 of column 0 get a random order of what the column lacks."""
        used = {self.grid.cell(0, y).value for y in range(BAND)}
        remaining = [symbol for symbol in self.grid.alphabet if symbol not in used]
        self.rng.shuffle(remaining)
        for offset, symbol in enumerate(remaining):
            self.grid.cell(0, BAND + offset).solve(symbol)
            self.stats.placements += 1
