"""front-runner: NSGA-II archiving and hypervolume for multi-objective optimization.

A numpy implementation of the multi-objective core of an evolutionary
algorithm: Pareto front partitioning, crowding-distance (sparsity) assignment,
fixed-size archive construction and the hypervolume quality indicator.
Breeding, genomes and problem-specific evaluation are left to the caller.

Example (archive a combined population):
    >>> from front_runner import Individual, ObjectiveSpace, build_archive
    >>> space = ObjectiveSpace.create(2, maximize=False, min_objective=0.0, max_objective=4.0)
    >>> pop = [Individual(space.fitness(v)) for v in ([1, 4], [2, 3], [3, 2], [4, 1], [4, 4])]
    >>> archive = build_archive(pop, target_size=3)
    >>> len(archive)
    3

Example (hypervolume of a front):
    >>> from front_runner import hypervolume
    >>> space = ObjectiveSpace.create(3, maximize=True)
    >>> front = [Individual(space.fitness(v)) for v in ([1, 2, 2], [2, 2, 1], [2, 1, 2])]
    >>> hypervolume(front, [0.0, 0.0, 0.0])
    7.0
"""

from front_runner.fitness import MultiObjectiveFitness, ObjectiveSpace
from front_runner.hypervolume import hypervolume, hypervolume_of_points, inclusive_hypervolume
from front_runner.population import Individual, Population
from front_runner.primitives import (
    crowding_distance,
    dominates,
    non_dominated_sort,
    pareto_front,
    partition_into_ranks,
)
from front_runner.statistics import HypervolumeStatistics, ParetoFrontStatistics
from front_runner.survival import assign_front_ranks, assign_sparsity, build_archive, crowded_compare

__all__ = [
    # Archive construction
    "assign_front_ranks",
    "assign_sparsity",
    "build_archive",
    "crowded_compare",
    # Hypervolume
    "hypervolume",
    "hypervolume_of_points",
    "inclusive_hypervolume",
    # Primitives
    "dominates",
    "pareto_front",
    "partition_into_ranks",
    "non_dominated_sort",
    "crowding_distance",
    # Data structures
    "ObjectiveSpace",
    "MultiObjectiveFitness",
    "Individual",
    "Population",
    # Statistics
    "HypervolumeStatistics",
    "ParetoFrontStatistics",
]
