"""Survivor selection strategies for multi-objective archiving."""

from front_runner.survival.nsga2 import assign_front_ranks, assign_sparsity, build_archive, crowded_compare

__all__ = [
    "assign_front_ranks",
    "assign_sparsity",
    "build_archive",
    "crowded_compare",
]
