"""Stochastic generator: MRV placement with random restarts."""

from __future__ import annotations
import logging
import random
from typing import Optional

from .base import BaseGenerator
from ..core.errors import GenerationExhaustedError
from ..core.grid import Grid

logger = logging.getLogger(__name__)


class StochasticGenerator(BaseGenerator):
    """
    Fills a grid by repeatedly committing a random value to the most
    constrained cell.

    Algorithm (one attempt):
    1. Restart the grid (givens of an imported board are kept)
    2. Recompute candidates, collect the unsolved cells with the fewest
    3. Pick one of them at random; an empty candidate set ends the attempt
    4. Otherwise solve it with a random candidate and repeat

    There is no lookahead, so an attempt can paint itself into a corner.
    ``generate_completed`` simply starts over until an attempt succeeds.
    """

    name = "Stochastic MRV"

    def __init__(
        self,
        grid: Grid,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        max_attempts: Optional[int] = 1000,
    ):
        """
        Initialize the generator.

        Args:
            grid: Grid to fill.
            rng: Random source. Takes precedence over ``seed``.
            seed: Seed for a private random source.
            max_attempts: Attempt budget used by ``run()`` (None = unbounded).
        """
        super().__init__(grid, rng=rng, seed=seed)
        self.max_attempts = max_attempts

    def _generate(self) -> bool:
        self.generate_completed(self.max_attempts)
        return True

    def attempt_once(self) -> bool:
        """
        Try to fill the grid once.

        Returns:
            True if every cell got solved, False on a dead end.
        """
        grid = self.grid
        grid.restart()
        self.stats.attempts += 1

        while True:
            unsolved = grid.unsolved_cells()
            if not unsolved:
                return True

            self.propagator.recompute_candidates()

            fewest = min(len(cell.candidates) for cell in unsolved)
            most_constrained = [cell for cell in unsolved if len(cell.candidates) == fewest]
            cell = self.rng.choice(most_constrained)

            if not cell.candidates:
                self.stats.dead_ends += 1
                logger.debug(
                    "Dead end at (%d, %d) with %d cells left",
                    cell.x, cell.y, len(unsolved)
                )
                return False

            # Ordered by alphabet so a seed always picks the same symbol
            value = self.rng.choice(grid.ordered(cell.candidates))
            cell.solve(value)
            self.stats.placements += 1

    def generate_completed(self, max_attempts: Optional[int] = 1000) -> int:
        """
        Retry ``attempt_once`` until the grid is complete.

        Args:
            max_attempts: Attempt budget, None for no limit.

        Returns:
            Number of attempts used.

        Raises:
            AlphabetTooSmallError: The grid has no usable alphabet.
            GenerationExhaustedError: No attempt succeeded within the budget.
        """
        if max_attempts is not None and max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.grid.require_alphabet()

        attempt = 0
        while max_attempts is None or attempt < max_attempts:
            attempt += 1
            if self.attempt_once():
                logger.info("Grid completed after %d attempt(s)", attempt)
                return attempt

        logger.warning("Gave up after %d attempts", attempt)
        raise GenerationExhaustedError(attempt)
