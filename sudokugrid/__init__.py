"""Sudoku-family grid engine: data model, candidate propagation and generators."""

from .core import (
    Cell,
    Grid,
    GridConfig,
    ConstraintPropagator,
    SudokuGridError,
    ConfigurationError,
    AlphabetTooSmallError,
    ShapeMismatchError,
    InvalidSymbolError,
    ImmutableWriteError,
    GenerationExhaustedError,
    UnsupportedShapeError,
)
from .generator import StochasticGenerator, BacktrackingGenerator

__version__ = "1.0.0"

__all__ = [
    "Cell",
    "Grid",
    "GridConfig",
    "ConstraintPropagator",
    "StochasticGenerator",
    "BacktrackingGenerator",
    "SudokuGridError",
    "ConfigurationError",
    "AlphabetTooSmallError",
    "ShapeMismatchError",
    "InvalidSymbolError",
    "ImmutableWriteError",
    "GenerationExhaustedError",
    "UnsupportedShapeError",
]
