"""Named grid configurations."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from .grid import Grid


@dataclass(frozen=True)
class GridConfig:
    """Dimensions, block sections and alphabet of a grid."""
    cols: int = 9
    rows: int = 9
    block_cols: int = 3
    block_rows: int = 3
    alphabet: Optional[str] = None

    def build(self) -> Grid:
        """Create a configured grid with an empty structure."""
        return Grid(self.cols, self.rows, self.block_cols, self.block_rows, self.alphabet)


PRESETS: Dict[str, GridConfig] = {
    "mini": GridConfig(4, 4, 2, 2),
    "six": GridConfig(6, 6, 2, 3),      # blocks 3 wide, 2 high
    "classic": GridConfig(9, 9, 3, 3),
    "hex": GridConfig(16, 16, 4, 4),   # symbols 1-9, A-G
}


def get_preset(name: str) -> GridConfig:
    """Look up a preset by name."""
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown preset {name!r}, choose from {sorted(PRESETS)}") from None
