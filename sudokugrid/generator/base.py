"""Base generator interface and run statistics."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import logging
import random
import time
import tracemalloc

from ..core.errors import SudokuGridError
from ..core.grid import Grid
from ..core.propagator import ConstraintPropagator

logger = logging.getLogger(__name__)


@dataclass
class GenerationStats:
    """Statistics from a generator run."""
    # Core metrics
    succeeded: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0

    # Algorithm-specific metrics
    attempts: int = 0
    placements: int = 0
    dead_ends: int = 0
    backtracks: int = 0
    nodes_explored: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "succeeded": self.succeeded,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "attempts": self.attempts,
            "placements": self.placements,
            "dead_ends": self.dead_ends,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseGenerator(ABC):
    """
    Abstract base class for grid generators.

    A generator owns no grid state of its own: it fills the grid it was given.
    The random source is either passed in or created from ``seed``.
    """

    name: str = "BaseGenerator"

    def __init__(
        self,
        grid: Grid,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        self.grid = grid
        self.rng = rng if rng is not None else random.Random(seed)
        self.propagator = ConstraintPropagator(grid)
        self.stats = GenerationStats(algorithm=self.name)

    def run(self) -> GenerationStats:
        """
        Fill the grid once with timing and memory tracking.

        Engine errors (exhausted attempts, unsupported shape, empty alphabet)
        are recorded in ``stats.extra["error"]`` instead of being raised.
        """
        self.stats = GenerationStats(algorithm=self.name)

        tracemalloc.start()
        start_time = time.perf_counter()

        try:
            self.stats.succeeded = bool(self._generate())
        except SudokuGridError as e:
            logger.warning("%s failed: %s", self.name, e)
            self.stats.extra["error"] = str(e)
            self.stats.succeeded = False
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            current, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.stats.memory_bytes = peak

        return self.stats

    @abstractmethod
    def _generate(self) -> bool:
        """
        Fill ``self.grid``. Implemented by subclasses.

        Returns:
            True if the grid ends up complete.
        """
        pass

    def reset_stats(self) -> None:
        """Reset generator statistics."""
        self.stats = GenerationStats(algorithm=self.name)
