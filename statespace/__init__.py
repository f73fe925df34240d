"""Public package interface for statespace."""

from .cli import main
from .path import Path
from .search import (
    SearchBudgetExhausted,
    SearchConfig,
    SearchProblem,
    SearchStats,
    bfs_search,
    generations,
    iter_solutions,
    search,
    solve,
)

__all__ = [
    "main",
    "Path",
    "SearchBudgetExhausted",
    "SearchConfig",
    "SearchProblem",
    "SearchStats",
    "bfs_search",
    "generations",
    "iter_solutions",
    "search",
    "solve",
]
