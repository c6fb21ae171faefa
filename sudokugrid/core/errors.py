"""Exception types raised by the grid engine and its generators."""

from __future__ import annotations
from typing import Optional


class SudokuGridError(Exception):
    """Base class for every error raised by sudokugrid."""


class ConfigurationError(SudokuGridError, ValueError):
    """Invalid grid dimensions or block section counts."""


class AlphabetTooSmallError(SudokuGridError, ValueError):
    """The alphabet holds fewer symbols than the largest grid dimension."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Grid needs {required} symbols but the alphabet only has {available}"
        )


class ShapeMismatchError(SudokuGridError, ValueError):
    """An imported board does not match the configured grid shape."""


class InvalidSymbolError(SudokuGridError, ValueError):
    """A value is not part of the grid's alphabet."""

    def __init__(self, value: str, x: Optional[int] = None, y: Optional[int] = None):
        self.value = value
        self.x = x
        self.y = y
        where = f" at ({x}, {y})" if x is not None else ""
        super().__init__(f"Symbol {value!r}{where} is not in the alphabet")


class ImmutableWriteError(SudokuGridError, ValueError):
    """Attempt to write or clear a cell that is not mutable."""

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        super().__init__(f"Can't assign value to non-mutable cell ({x}, {y})")


class GenerationExhaustedError(SudokuGridError, RuntimeError):
    """The stochastic generator used its whole attempt budget."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"No complete grid after {attempts} attempts")


class UnsupportedShapeError(SudokuGridError, ValueError):
    """The backtracking generator only supports 9x9 grids with 3x3 blocks."""
