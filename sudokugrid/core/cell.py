"""Single grid position: value, mutability and candidate set."""

from __future__ import annotations
from typing import Iterable, NamedTuple, Set, FrozenSet

from .errors import ImmutableWriteError


class CellState(NamedTuple):
    """Saved copy of a cell's mutable fields, used to undo a placement."""
    value: str
    mutable: bool
    solved: bool
    candidates: FrozenSet[str]


class Cell:
    """
    One position of the grid.

    ``x`` is the column, ``y`` the row and ``z`` the block index. The value is
    an alphabet symbol or the empty string. A solved cell is never mutable;
    only ``reset()`` gives mutability back.
    """

    def __init__(self, x: int, y: int, z: int, candidates: Iterable[str] = ()):
        self.x = x
        self.y = y
        self.z = z
        self._value = ""
        self._mutable = True
        self._solved = False
        self.candidates: Set[str] = set(candidates)

    @property
    def value(self) -> str:
        return self._value

    @property
    def mutable(self) -> bool:
        return self._mutable

    @property
    def solved(self) -> bool:
        return self._solved

    def get_value(self) -> str:
        return self._value

    def is_mutable(self) -> bool:
        return self._mutable

    def is_solved(self) -> bool:
        return self._solved

    def is_empty(self) -> bool:
        return self._value == ""

    def set_value(self, value: str) -> None:
        """Write a value. Raises ImmutableWriteError on givens and solved cells."""
        if not self._mutable:
            raise ImmutableWriteError(self.x, self.y)
        self._value = value

    def clear(self) -> None:
        """Empty the cell. Same mutability rule as set_value."""
        self.set_value("")

    def solve(self, value: str) -> None:
        """Commit a value: the cell becomes solved and immutable."""
        self.set_value(value)
        self._solved = True
        self._mutable = False
        self.candidates = {value}

    def reset(self, candidates: Iterable[str] = ()) -> None:
        """Back to empty, mutable and unsolved."""
        self._value = ""
        self._mutable = True
        self._solved = False
        self.candidates = set(candidates)

    def snapshot(self) -> CellState:
        return CellState(self._value, self._mutable, self._solved, frozenset(self.candidates))

    def restore(self, state: CellState) -> None:
        self._value = state.value
        self._mutable = state.mutable
        self._solved = state.solved
        self.candidates = set(state.candidates)

    def is_peer(self, other: Cell) -> bool:
        """True if ``other`` is a different cell sharing a row, column or block."""
        if other is self:
            return False
        return other.x == self.x or other.y == self.y or other.z == self.z

    def __repr__(self) -> str:
        state = "solved" if self._solved else ("mutable" if self._mutable else "given")
        return f"Cell(x={self.x}, y={self.y}, z={self.z}, value={self._value!r}, {state})"
