"""Candidate computation for every cell of a grid."""

from __future__ import annotations
from collections import defaultdict
from typing import TYPE_CHECKING, Dict, List, Set

if TYPE_CHECKING:
    from .cell import Cell
    from .grid import Grid


class ConstraintPropagator:
    """
    Recomputes the legal values of every cell from the solved cells.

    A solved cell keeps its own value as only candidate. Any other cell gets
    the alphabet minus the values of the solved cells in its row, column or
    block. Every call starts from scratch; nothing is cached between calls.
    """

    def __init__(self, grid: Grid):
        self.grid = grid

    def recompute_candidates(self) -> List[Cell]:
        """
        Refresh all candidate sets.

        Returns:
            The dead cells: unsolved cells left without any candidate.
        """
        used_in_row: Dict[int, Set[str]] = defaultdict(set)
        used_in_col: Dict[int, Set[str]] = defaultdict(set)
        used_in_block: Dict[int, Set[str]] = defaultdict(set)

        for cell in self.grid:
            if cell.solved:
                used_in_row[cell.y].add(cell.value)
                used_in_col[cell.x].add(cell.value)
                used_in_block[cell.z].add(cell.value)

        alphabet = set(self.grid.alphabet)
        dead = []
        for cell in self.grid:
            if cell.solved:
                cell.candidates = {cell.value}
                continue
            cell.candidates = (
                alphabet - used_in_row[cell.y] - used_in_col[cell.x] - used_in_block[cell.z]
            )
            if not cell.candidates:
                dead.append(cell)
        return dead

    def dead_ends(self) -> List[Cell]:
        """Unsolved cells whose current candidate set is empty."""
        return [cell for cell in self.grid if not cell.solved and not cell.candidates]

    def is_dead_end(self) -> bool:
        return bool(self.dead_ends())


def recompute_candidates(grid: Grid) -> List[Cell]:
    """Shortcut for ``ConstraintPropagator(grid).recompute_candidates()``."""
    return ConstraintPropagator(grid).recompute_candidates()
