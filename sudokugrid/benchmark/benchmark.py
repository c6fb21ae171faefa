"""Benchmarking framework for comparing grid generators."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
import json
import logging
import os

from tqdm import tqdm

from ..core.grid import Grid
from ..core.presets import GridConfig
from ..core.validator import is_solved_grid
from ..generator import BaseGenerator, BacktrackingGenerator, StochasticGenerator

logger = logging.getLogger(__name__)

# Builds a generator for a grid and a seed
GeneratorFactory = Callable[[Grid, int], BaseGenerator]


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    run_id: int
    seed: int
    algorithm: str
    succeeded: bool
    valid: bool
    time_seconds: float
    memory_bytes: int
    attempts: int
    placements: int
    dead_ends: int
    backtracks: int
    nodes_explored: int
    grid: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "run_id": self.run_id,
            "seed": self.seed,
            "algorithm": self.algorithm,
            "succeeded": self.succeeded,
            "valid": self.valid,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "attempts": self.attempts,
            "placements": self.placements,
            "dead_ends": self.dead_ends,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "grid": self.grid,
            **self.extra
        }


class Benchmark:
    """
    Benchmark framework for comparing grid generators.

    Every generator fills a fresh grid once per run, with seed
    ``seed + run_id`` so runs are repeatable.
    """

    def __init__(
        self,
        runs: int = 10,
        config: Optional[GridConfig] = None,
        generators: Optional[Dict[str, GeneratorFactory]] = None,
        max_attempts: int = 1000,
        seed: int = 0
    ):
        """
        Initialize the benchmark.

        Args:
            runs: Number of grids each generator fills.
            config: Grid configuration (default: classic 9x9).
            generators: Dict of name -> factory(grid, seed) (default: both).
            max_attempts: Attempt budget of the stochastic generator.
            seed: Base random seed.
        """
        self.runs = runs
        self.config = config or GridConfig()
        self.max_attempts = max_attempts
        self.seed = seed

        if generators is None:
            self.generators: Dict[str, GeneratorFactory] = {
                "Stochastic": lambda grid, s: StochasticGenerator(
                    grid, seed=s, max_attempts=self.max_attempts
                ),
            }
            if (self.config.cols, self.config.rows,
                    self.config.block_cols, self.config.block_rows) == (9, 9, 3, 3):
                self.generators["Backtracking"] = lambda grid, s: BacktrackingGenerator(grid, seed=s)
        else:
            self.generators = generators

        self.results: List[BenchmarkResult] = []

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []
        total = self.runs * len(self.generators)

        pbar = tqdm(total=total, desc="Benchmarking", disable=not show_progress)

        for run_id in range(self.runs):
            for name, factory in self.generators.items():
                self.results.append(self._run_single(run_id, name, factory))
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(self, run_id: int, name: str, factory: GeneratorFactory) -> BenchmarkResult:
        """Run a single generator on a fresh grid."""
        seed = self.seed + run_id
        grid = self.config.build()
        generator = factory(grid, seed)
        stats = generator.run()

        valid = stats.succeeded and is_solved_grid(grid)
        if stats.succeeded and not valid:
            logger.error("%s produced an invalid grid for seed %d", name, seed)

        return BenchmarkResult(
            run_id=run_id,
            seed=seed,
            algorithm=name,
            succeeded=stats.succeeded,
            valid=valid,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            attempts=stats.attempts,
            placements=stats.placements,
            dead_ends=stats.dead_ends,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            grid=grid.to_string() if stats.succeeded else "",
            extra=dict(stats.extra)
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "runs": self.runs,
            "grid": {
                "cols": self.config.cols,
                "rows": self.config.rows,
                "block_cols": self.config.block_cols,
                "block_rows": self.config.block_rows,
            },
            "generators_tested": list(self.generators.keys()),
            "results_by_algorithm": {}
        }

        for name in self.generators:
            results = [r for r in self.results if r.algorithm == name]
            if not results:
                continue

            succeeded = [r for r in results if r.succeeded]
            times = [r.time_seconds for r in results]
            memory = [r.memory_bytes for r in results]
            attempts = [r.attempts for r in results]

            summary["results_by_algorithm"][name] = {
                "success_rate": len(succeeded) / len(results) * 100,
                "valid": sum(1 for r in results if r.valid),
                "avg_time_seconds": sum(times) / len(times),
                "max_time_seconds": max(times),
                "min_time_seconds": min(times),
                "avg_memory_mb": sum(memory) / len(memory) / (1024 * 1024),
                "avg_attempts": sum(attempts) / len(attempts),
                "total_backtracks": sum(r.backtracks for r in results),
                "total_succeeded": len(succeeded),
                "total_tested": len(results)
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and generated grids to files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        grids_file = os.path.join(output_dir, "grids.txt")
        with open(grids_file, "w") as f:
            for r in self.results:
                if r.grid:
                    f.write(f"{r.algorithm}\t{r.seed}\t{r.grid}\n")

        logger.info("Results saved to %s", output_dir)
