"""Generator module for filling grids."""

from .base import BaseGenerator, GenerationStats
from .stochastic import StochasticGenerator
from .backtracking import BacktrackingGenerator

__all__ = ["BaseGenerator", "GenerationStats", "StochasticGenerator", "BacktrackingGenerator"]
