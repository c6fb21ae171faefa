"""Validation utilities for grids."""

from __future__ import annotations
from typing import TYPE_CHECKING, Iterator, List, Tuple

import numpy as np

from .grid import normalize_symbol

if TYPE_CHECKING:
    from .cell import Cell
    from .grid import Grid


def is_valid_placement(grid: Grid, x: int, y: int, value: str) -> bool:
    """
    Check if placing a value at (x, y) is valid.

    Args:
        grid: The grid.
        x: Column index.
        y: Row index.
        value: Symbol to check.

    Returns:
        True if the symbol is in the alphabet and no filled peer holds it.
    """
    symbol = normalize_symbol(value)
    if symbol not in grid.alphabet:
        return False

    target = grid.cell(x, y)
    return all(peer.value != symbol for peer in grid.peers(target))


def find_conflicts(grid: Grid) -> List[Tuple[Cell, Cell]]:
    """
    Find pairs of filled peer cells holding the same value.

    Each pair is reported once, in row-major order of its first cell.
    """
    conflicts = []
    cells = [cell for cell in grid if not cell.is_empty()]
    for i, cell in enumerate(cells):
        for other in cells[i + 1:]:
            if other.value == cell.value and cell.is_peer(other):
                conflicts.append((cell, other))
    return conflicts


def is_valid_grid(grid: Grid) -> bool:
    """
    Check if the grid state is valid (no conflicts).
    Does not check whether it is complete.
    """
    array = grid.to_array()
    for group in _groups(grid, array):
        filled = group[group != ""]
        if len(filled) != len(set(filled)):
            return False
    return True


def is_solved_grid(grid: Grid) -> bool:
    """
    Check if the grid is completely and correctly filled.

    Every row, column and block must hold distinct alphabet symbols. On a
    square grid that makes each group a permutation of the alphabet.
    """
    if not grid.alphabet or not grid.is_complete():
        return False

    alphabet = set(grid.alphabet)
    array = grid.to_array()
    for group in _groups(grid, array):
        values = set(group.tolist())
        if len(values) != len(group) or not values <= alphabet:
            return False
    return True


def _groups(grid: Grid, array: np.ndarray) -> Iterator[np.ndarray]:
    for y in range(grid.rows):
        yield array[y, :]
    for x in range(grid.cols):
        yield array[:, x]
    for top in range(0, grid.rows, grid.block_height):
        for left in range(0, grid.cols, grid.block_width):
            yield array[top:top + grid.block_height, left:left + grid.block_width].ravel()
