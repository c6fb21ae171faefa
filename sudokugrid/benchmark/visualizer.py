"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for generator benchmark results.

    Compares generation time, memory, success rate and the number of
    restarts the stochastic generator needed.
    """

    COLORS = {
        "Stochastic": "#3498db",    # Blue
        "Backtracking": "#2ecc71",  # Green
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_comparison(),
            self.plot_success_rate(),
            self.plot_memory_comparison(),
            self.plot_attempts_distribution(),
        ]

    @property
    def algorithms(self) -> List[str]:
        return sorted(set(r.algorithm for r in self.results))

    def _bar_chart(self, values: List[float], label_fmt: str, ylabel: str,
                   title: str, filename: str) -> str:
        fig, ax = plt.subplots(figsize=(10, 6))

        algorithms = self.algorithms
        colors = [self.COLORS.get(algo, "#95a5a6") for algo in algorithms]
        bars = ax.bar(algorithms, values, color=colors, edgecolor='black', linewidth=0.5)

        for bar, value in zip(bars, values):
            ax.annotate(label_fmt.format(value),
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Generator', fontsize=12)
        ax.set_ylabel(ylabel, fontsize=12)
        ax.set_title(title, fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        plt.tight_layout()
        path = os.path.join(self.output_dir, filename)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return path

    def plot_time_comparison(self) -> str:
        """Bar chart of average generation time."""
        avg_times = [
            float(np.mean([r.time_seconds for r in self.results if r.algorithm == algo]))
            for algo in self.algorithms
        ]
        return self._bar_chart(avg_times, '{:.4f}s', 'Average Time (seconds)',
                               'Average Generation Time', "time_comparison.png")

    def plot_success_rate(self) -> str:
        """Bar chart of the share of runs that produced a complete grid."""
        rates = []
        for algo in self.algorithms:
            runs = [r for r in self.results if r.algorithm == algo]
            rates.append(100.0 * sum(1 for r in runs if r.succeeded) / len(runs))
        return self._bar_chart(rates, '{:.0f}%', 'Success Rate (%)',
                               'Complete Grids per Generator', "success_rate.png")

    def plot_memory_comparison(self) -> str:
        """Bar chart of average peak memory."""
        avg_memory = [
            float(np.mean([r.memory_bytes / (1024 * 1024)
                           for r in self.results if r.algorithm == algo]))
            for algo in self.algorithms
        ]
        return self._bar_chart(avg_memory, '{:.2f} MB', 'Average Memory (MB)',
                               'Memory Usage by Generator', "memory_comparison.png")

    def plot_attempts_distribution(self) -> str:
        """Histogram of the number of attempts per stochastic run."""
        fig, ax = plt.subplots(figsize=(10, 6))

        attempts = np.array([r.attempts for r in self.results if r.attempts > 0])
        if attempts.size:
            bins = min(30, max(1, len(np.unique(attempts))))
            sns.histplot(attempts, bins=bins, ax=ax, color=self.COLORS["Stochastic"])
            ax.axvline(float(np.mean(attempts)), color='black', linestyle='--',
                       label=f'mean = {np.mean(attempts):.1f}')
            ax.legend()
        else:
            ax.text(0.5, 0.5, 'No stochastic runs', ha='center', va='center',
                    transform=ax.transAxes)

        ax.set_xlabel('Attempts until complete grid', fontsize=12)
        ax.set_ylabel('Runs', fontsize=12)
        ax.set_title('Random Restarts of the Stochastic Generator', fontsize=14, fontweight='bold')

        plt.tight_layout()
        path = os.path.join(self.output_dir, "attempts_distribution.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return path
