"""Population data structures for multi-objective archiving.

This module provides the data structures the archive builder and hypervolume
calculator operate on:

- Individual: an opaque genome with one fitness plus the rank/sparsity
  annotations written by the archive builder
- Population: an immutable, validated collection of individuals with a
  stacked objective matrix for vectorized operations

Individuals are owned by the caller. Nothing in this package creates or
destroys them; the archive builder only reorders references and writes the
``rank`` and ``sparsity`` annotations.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from front_runner.fitness import MultiObjectiveFitness, ObjectiveSpace
from front_runner.primitives import pareto_front


@dataclass(eq=False)
class Individual:
    """One member of a population.

    Equality is identity: two individuals with equal objectives are still
    different individuals.

    Attributes:
        fitness: The individual's objective vector.
        genome: Opaque payload owned by the caller (decision variables, tree, ...).
        rank: Pareto front index (0 = first front), or None if not assigned.
        sparsity: Crowding distance within its front, or None if not assigned.
            Boundary individuals of a front get +inf.

    Example:
        >>> space = ObjectiveSpace.create(2)
        >>> ind = Individual(space.fitness([0.2, 0.8]), genome=[1, 0, 1])
        >>> ind.objectives
        array([0.2, 0.8])
    """

    fitness: MultiObjectiveFitness
    genome: Any = None
    rank: int | None = None
    sparsity: float | None = None

    @property
    def objectives(self) -> np.ndarray:
        """Return the objective values of this individual's fitness."""
        return self.fitness.objectives


@dataclass(frozen=True)
class Population:
    """Immutable, validated collection of individuals.

    Every individual must carry a MultiObjectiveFitness with the same number of
    objectives and the same maximize flags. The objective matrix is stacked
    once on construction.

    Attributes:
        individuals: The individuals, in the order given.

    Example:
        >>> space = ObjectiveSpace.create(2)
        >>> pop = Population([Individual(space.fitness([0.1, 0.9])), Individual(space.fitness([0.9, 0.1]))])
        >>> len(pop)
        2
        >>> pop.objectives.shape
        (2, 2)
    """

    individuals: tuple[Individual, ...]
    _objectives: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate individuals and stack their objectives.

        Raises:
            TypeError: If a member is not an Individual or lacks a MultiObjectiveFitness.
            ValueError: If dimensionality or maximize flags differ between individuals.
        """
        individuals = tuple(self.individuals)
        object.__setattr__(self, "individuals", individuals)

        for i, ind in enumerate(individuals):
            if not isinstance(ind, Individual):
                raise TypeError(f"individual {i} must be an Individual, got {type(ind).__name__}")
            if not isinstance(ind.fitness, MultiObjectiveFitness):
                raise TypeError(f"individual {i} must have a MultiObjectiveFitness, got {type(ind.fitness).__name__}")

        if not individuals:
            object.__setattr__(self, "_objectives", np.empty((0, 0), dtype=np.float64))
            return

        first = individuals[0].fitness
        for i, ind in enumerate(individuals[1:], start=1):
            if ind.fitness.n_obj != first.n_obj:
                raise ValueError(f"individual {i} has {ind.fitness.n_obj} objectives, expected {first.n_obj}")
            if not ind.fitness.space.compatible_with(first.space):
                raise ValueError(
                    f"individual {i} has maximize flags {ind.fitness.maximize.tolist()}, "
                    f"expected {first.maximize.tolist()}"
                )

        object.__setattr__(self, "_objectives", np.stack([ind.objectives for ind in individuals]))

    @classmethod
    def of(cls, individuals: "Population | Iterable[Individual]") -> "Population":
        """Return individuals as a Population, wrapping them if necessary."""
        if isinstance(individuals, Population):
            return individuals
        return cls(tuple(individuals))

    def __len__(self) -> int:
        """Return the number of individuals in the population."""
        return len(self.individuals)

    def __getitem__(self, idx: int) -> Individual:
        """Get an individual by position (supports negative indexing).

        Raises:
            TypeError: If idx is not an integer.
            IndexError: If idx is out of bounds.
        """
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"indices must be integers, got {type(idx).__name__}")

        n = len(self)
        if idx < -n or idx >= n:
            raise IndexError(f"index {idx} is out of bounds for population with {n} individuals")
        return self.individuals[idx]

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    @property
    def objectives(self) -> np.ndarray:
        """Return the objective matrix, shape (n, n_obj)."""
        return self._objectives

    @property
    def space(self) -> ObjectiveSpace | None:
        """Return the objective space shared by all individuals, or None if empty."""
        if not self.individuals:
            return None
        return self.individuals[0].fitness.space

    @property
    def maximize(self) -> np.ndarray | None:
        """Return the per-objective maximize flags, or None if empty."""
        space = self.space
        return space.maximize if space is not None else None

    @property
    def n_obj(self) -> int | None:
        """Return the number of objectives, or None if the population is empty."""
        space = self.space
        return space.n_obj if space is not None else None

    def pareto_front(self) -> list[Individual]:
        """Return the non-dominated individuals, in population order."""
        if not self.individuals:
            return []
        return [self.individuals[i] for i in pareto_front(self.objectives, self.maximize)]

    def sorted_pareto_front(self) -> list[Individual]:
        """Return the non-dominated individuals sorted by objective values.

        Sorting is lexicographic and ascending: by the first objective, ties
        broken by the second, and so on. This is the order used for reporting.
        """
        if not self.individuals:
            return []
        front = pareto_front(self.objectives, self.maximize)
        # lexsort treats the last key as primary
        order = np.lexsort(self.objectives[front].T[::-1])
        return [self.individuals[i] for i in front[order]]
