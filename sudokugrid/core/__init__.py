"""Core module: cells, grid, candidate propagation and validation."""

from .cell import Cell, CellState
from .errors import (
    SudokuGridError,
    ConfigurationError,
    AlphabetTooSmallError,
    ShapeMismatchError,
    InvalidSymbolError,
    ImmutableWriteError,
    GenerationExhaustedError,
    UnsupportedShapeError,
)
from .grid import Grid, DEFAULT_ALPHABET
from .presets import GridConfig, PRESETS, get_preset
from .propagator import ConstraintPropagator, recompute_candidates
from .validator import is_valid_placement, is_valid_grid, is_solved_grid, find_conflicts

__all__ = [
    "Cell",
    "CellState",
    "Grid",
    "DEFAULT_ALPHABET",
    "GridConfig",
    "PRESETS",
    "get_preset",
    "ConstraintPropagator",
    "recompute_candidates",
    "is_valid_placement",
    "is_valid_grid",
    "is_solved_grid",
    "find_conflicts",
    "SudokuGridError",
    "ConfigurationError",
    "AlphabetTooSmallError",
    "ShapeMismatchError",
    "InvalidSymbolError",
    "ImmutableWriteError",
    "GenerationExhaustedError",
    "UnsupportedShapeError",
]
