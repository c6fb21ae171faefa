"""Grid representation with configurable dimensions, blocks and alphabet."""

from __future__ import annotations
import logging
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell
from .errors import (
    AlphabetTooSmallError,
    ConfigurationError,
    InvalidSymbolError,
    ShapeMismatchError,
)

logger = logging.getLogger(__name__)

DEFAULT_ALPHABET = "123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Input spellings of an empty cell
BLANKS = ("", "0", ".")


def normalize_symbol(value: Any) -> str:
    """Convert an input value to its symbol form. Blank inputs become ''."""
    if value is None or value is False:
        return ""
    symbol = str(value).strip().upper()
    return "" if symbol in BLANKS else symbol


class Grid:
    """
    A cols x rows grid split into rectangular blocks.

    ``block_cols`` and ``block_rows`` are section counts: a 9x9 grid with
    3x3 blocks has ``block_cols == block_rows == 3``, a 6x6 grid with blocks
    three wide and two high has ``block_cols == 2`` and ``block_rows == 3``.

    Cells are stored row-major, ``index = x + y * cols``. Row, column and
    block membership is derived from the cell coordinates only.
    """

    def __init__(
        self,
        cols: int = 9,
        rows: int = 9,
        block_cols: int = 3,
        block_rows: int = 3,
        alphabet: Optional[Iterable[Any]] = None,
    ):
        """
        Configure the grid and build an empty structure.

        Args:
            cols, rows: Grid dimensions.
            block_cols, block_rows: Number of block sections along each axis.
            alphabet: Symbols to use (default 1-9 then A-Z).
        """
        self.cells: List[Cell] = []
        self._givens: Optional[Tuple[str, ...]] = None
        self.configure(cols, rows, block_cols, block_rows, alphabet)
        self.generate_structure()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure(
        self,
        cols: int,
        rows: int,
        block_cols: int,
        block_rows: int,
        alphabet: Optional[Iterable[Any]] = None,
    ) -> None:
        """
        Set dimensions and block sections. Existing cells are discarded.

        Raises:
            ConfigurationError: Non-positive dimensions, or section counts
                that are < 1, larger than the dimension, or not a divisor.
        """
        for name, dim, sections in (("cols", cols, block_cols), ("rows", rows, block_rows)):
            if not _is_int(dim) or dim < 1:
                raise ConfigurationError(f"{name} must be a positive integer, got {dim!r}")
            if not _is_int(sections) or sections < 1:
                raise ConfigurationError(
                    f"Block sections along {name} must be at least 1, got {sections!r}"
                )
            if sections > dim:
                raise ConfigurationError(f"{sections} block sections exceed {name}={dim}")
            if dim % sections:
                raise ConfigurationError(
                    f"{sections} block sections do not evenly divide {name}={dim}"
                )

        self.cols = cols
        self.rows = rows
        self.block_cols = block_cols
        self.block_rows = block_rows
        self.block_width = cols // block_cols
        self.block_height = rows // block_rows

        self.cells = []
        self._givens = None
        self.set_alphabet(DEFAULT_ALPHABET if alphabet is None else alphabet)

    def set_alphabet(self, symbols: Iterable[Any]) -> None:
        """
        Replace the set of valid values.

        Symbols are uppercased and de-duplicated; blank spellings are dropped.
        Only the first ``size`` symbols are kept. If there are not enough, the
        alphabet becomes empty and no value can be assigned anymore. Existing
        cell values are not revalidated.
        """
        if isinstance(symbols, str):
            symbols = list(symbols)

        normalized: List[str] = []
        for symbol in symbols:
            symbol = normalize_symbol(symbol)
            if symbol and symbol not in normalized:
                normalized.append(symbol)

        self._alphabet_available = len(normalized)
        if len(normalized) < self.size:
            logger.warning(
                "%s; no value can be assigned until a larger alphabet is set",
                AlphabetTooSmallError(self.size, len(normalized)),
            )
            self.alphabet: Tuple[str, ...] = ()
        else:
            self.alphabet = tuple(normalized[:self.size])

    def require_alphabet(self) -> None:
        """Raise AlphabetTooSmallError if the alphabet degraded to empty."""
        if not self.alphabet:
            raise AlphabetTooSmallError(self.size, self._alphabet_available)

    @property
    def size(self) -> int:
        """Number of symbols a group needs: the larger dimension."""
        return max(self.cols, self.rows)

    @property
    def cell_count(self) -> int:
        return self.cols * self.rows

    @property
    def shape(self) -> Tuple[int, int, int, int]:
        return (self.cols, self.rows, self.block_cols, self.block_rows)

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def block_index(self, x: int, y: int) -> int:
        """Block index of column x, row y."""
        return x // self.block_width + (y // self.block_height) * self.block_cols

    def generate_structure(self) -> None:
        """Rebuild every cell empty, with the full alphabet as candidates."""
        self.cells = []
        self._givens = None
        for y in range(self.rows):
            for x in range(self.cols):
                self.cells.append(Cell(x, y, self.block_index(x, y), self.alphabet))

    def initialize_board(self, values: Any) -> None:
        """
        Import a board.

        Args:
            values: A flat sequence of ``cols * rows`` entries (a string is a
                sequence of characters), a sequence of ``rows`` rows of
                ``cols`` entries, or a 2-D numpy array. Blank entries ('',
                None, 0, '0', '.') stay empty and editable; other entries
                become immutable givens.

        Raises:
            ShapeMismatchError: The input does not match the grid shape.
            InvalidSymbolError: An entry is not in the alphabet.
        """
        flat = self._flatten(values)
        symbols = []
        for i, value in enumerate(flat):
            symbol = normalize_symbol(value)
            if symbol and symbol not in self.alphabet:
                raise InvalidSymbolError(symbol, i % self.cols, i // self.cols)
            symbols.append(symbol)

        self._apply_givens(tuple(symbols))

    def restart(self) -> None:
        """Rebuild the structure, keeping the givens of the last imported board."""
        if self._givens is None:
            self.generate_structure()
        else:
            self._apply_givens(self._givens)

    @property
    def givens(self) -> Optional[Tuple[str, ...]]:
        """Flat symbols of the last imported board, or None."""
        return self._givens

    def _apply_givens(self, symbols: Tuple[str, ...]) -> None:
        self.generate_structure()
        for cell, symbol in zip(self.cells, symbols):
            if symbol:
                cell.solve(symbol)
        self._givens = symbols

    def _flatten(self, values: Any) -> List[Any]:
        if isinstance(values, np.ndarray):
            values = values.tolist()

        if isinstance(values, str):
            flat = list(values)
        else:
            values = list(values)
            if values and self._looks_like_row(values[0], len(values)):
                if len(values) != self.rows:
                    raise ShapeMismatchError(
                        f"Board has {len(values)} rows, expected {self.rows}"
                    )
                flat = []
                for y, row in enumerate(values):
                    row = list(row)
                    if len(row) != self.cols:
                        raise ShapeMismatchError(
                            f"Row {y} has {len(row)} columns, expected {self.cols}"
                        )
                    flat.extend(row)
            else:
                flat = values

        if len(flat) != self.cell_count:
            raise ShapeMismatchError(
                f"Board length must be {self.cell_count}, got {len(flat)}"
            )
        return flat

    def _looks_like_row(self, item: Any, count: int) -> bool:
        if isinstance(item, (list, tuple, np.ndarray)):
            return True
        # Rows may also be written as strings, e.g. "530070000"
        return (
            isinstance(item, str)
            and len(item) > 1
            and count == self.rows
            and count != self.cell_count
        )

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def for_each_cell(self) -> Iterator[Cell]:
        """Yield every cell in row-major order. Each call starts over."""
        for y in range(self.rows):
            for x in range(self.cols):
                yield self.cells[x + y * self.cols]

    def __iter__(self) -> Iterator[Cell]:
        return self.for_each_cell()

    def __len__(self) -> int:
        return len(self.cells)

    def index(self, x: int, y: int) -> int:
        if not (0 <= x < self.cols and 0 <= y < self.rows):
            raise IndexError(f"({x}, {y}) is outside a {self.cols}x{self.rows} grid")
        return x + y * self.cols

    def cell(self, x: int, y: int) -> Cell:
        return self.cells[self.index(x, y)]

    def row(self, y: int) -> List[Cell]:
        return [cell for cell in self if cell.y == y]

    def column(self, x: int) -> List[Cell]:
        return [cell for cell in self if cell.x == x]

    def block(self, z: int) -> List[Cell]:
        return [cell for cell in self if cell.z == z]

    def peers(self, target: Cell) -> Iterator[Cell]:
        """Cells sharing a row, column or block with ``target``."""
        return (cell for cell in self if target.is_peer(cell))

    def unsolved_cells(self) -> List[Cell]:
        return [cell for cell in self if not cell.solved]

    def ordered(self, symbols: Iterable[str]) -> List[str]:
        """Return ``symbols`` sorted by alphabet position."""
        wanted = set(symbols)
        return [symbol for symbol in self.alphabet if symbol in wanted]

    def next_mutable(self, start: int = 0) -> Optional[int]:
        """Index of the first mutable cell at or after ``start``, wrapping around."""
        count = len(self.cells)
        for offset in range(count):
            i = (start + offset) % count
            if self.cells[i].mutable:
                return i
        return None

    # ------------------------------------------------------------------
    # Per-cell access
    # ------------------------------------------------------------------

    def get_value(self, x: int, y: int) -> str:
        return self.cell(x, y).get_value()

    def set_value(self, x: int, y: int, value: Any) -> None:
        """
        Write a value at (x, y). A blank value clears the cell.

        Raises:
            InvalidSymbolError: The value is not in the alphabet.
            ImmutableWriteError: The cell is a given or solved.
        """
        symbol = normalize_symbol(value)
        if symbol and symbol not in self.alphabet:
            raise InvalidSymbolError(symbol, x, y)
        self.cell(x, y).set_value(symbol)

    def clear_value(self, x: int, y: int) -> None:
        self.cell(x, y).clear()

    def is_mutable(self, x: int, y: int) -> bool:
        return self.cell(x, y).is_mutable()

    def is_solved(self, x: int, y: int) -> bool:
        return self.cell(x, y).is_solved()

    def is_complete(self) -> bool:
        """True if every cell holds a value."""
        return all(not cell.is_empty() for cell in self)

    def count_filled(self) -> int:
        return sum(1 for cell in self if not cell.is_empty())

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_rows(self) -> List[List[str]]:
        """Values as a list of rows ('' for empty cells)."""
        return [
            [self.cells[x + y * self.cols].value for x in range(self.cols)]
            for y in range(self.rows)
        ]

    def to_array(self) -> np.ndarray:
        """Values as a rows x cols numpy array of symbols."""
        return np.array(self.to_rows(), dtype=object).reshape(self.rows, self.cols)

    def to_string(self) -> str:
        """Row-major symbol string, '0' for empty cells."""
        return "".join(cell.value or "0" for cell in self)

    @classmethod
    def from_string(
        cls,
        s: str,
        cols: int = 9,
        rows: int = 9,
        block_cols: int = 3,
        block_rows: int = 3,
        alphabet: Optional[Iterable[Any]] = None,
    ) -> Grid:
        """Create a grid from a symbol string ('0' or '.' for empty cells)."""
        grid = cls(cols, rows, block_cols, block_rows, alphabet)
        grid.initialize_board("".join(s.split()))
        return grid

    def __str__(self) -> str:
        """Render the grid as text with block dividers."""
        width = max([len(symbol) for symbol in self.alphabet] + [1])
        segment = "-" * ((width + 1) * self.block_width + 1)
        horizontal_sep = "+" + (segment + "+") * self.block_cols

        lines = []
        for y in range(self.rows):
            if y % self.block_height == 0:
                lines.append(horizontal_sep)

            row_str = "|"
            for x in range(self.cols):
                value = self.cells[x + y * self.cols].value or "."
                row_str += " " + value.rjust(width)
                if (x + 1) % self.block_width == 0:
                    row_str += " |"
            lines.append(row_str)

        lines.append(horizontal_sep)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Grid(cols={self.cols}, rows={self.rows}, block_cols={self.block_cols}, "
            f"block_rows={self.block_rows}, filled={self.count_filled()})"
        )


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)
