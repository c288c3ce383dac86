"""Shared test fixtures for front-runner tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- make_individuals: Factory turning objective rows into Individuals
- breeder_space / breeder_fronts / breeder_population: A four-front,
  two-objective maximization population with known archive and sparsities
"""

from collections.abc import Callable, Sequence

import numpy as np
import pytest

from front_runner import Individual, ObjectiveSpace


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def make_individuals() -> Callable[..., list[Individual]]:
    """Factory building individuals from objective rows in a given space.

    Each individual's genome is its position in the input, which makes order
    assertions easy to read.
    """

    def make(rows: Sequence[Sequence[float]], space: ObjectiveSpace) -> list[Individual]:
        return [Individual(space.fitness(row), genome=i) for i, row in enumerate(rows)]

    return make


@pytest.fixture
def breeder_space() -> ObjectiveSpace:
    """Two maximized objectives bounded by [0, 100] and [0, 0.5]."""
    return ObjectiveSpace.create(2, maximize=True, min_objective=0.0, max_objective=[100.0, 0.5])


@pytest.fixture
def breeder_fronts(breeder_space: ObjectiveSpace) -> list[list[Individual]]:
    """Four hand-built fronts, best first.

    Front 0: (50, 0.5), (75, 0.4), (80, 0.2), (100, 0.05)
    Front 1: (50, 0.45), (75, 0.25), (80, 0)
    Front 2: six points from (10, 0.3) to (65, 0)
    Front 3: seven points from (0, 0.25) to (30, 0.1)
    """
    rows = [
        [[50, 0.5], [75, 0.4], [80, 0.2], [100, 0.05]],
        [[50, 0.45], [75, 0.25], [80, 0.0]],
        [[10, 0.3], [30, 0.27], [50, 0.25], [55, 0.23], [60, 0.1], [65, 0.0]],
        [[0, 0.25], [5, 0.23], [10, 0.20], [15, 0.17], [20, 0.15], [25, 0.14], [30, 0.1]],
    ]
    return [[Individual(breeder_space.fitness(row)) for row in front] for front in rows]


@pytest.fixture
def breeder_population(breeder_fronts: list[list[Individual]]) -> list[Individual]:
    """The fronts shuffled together as front 1, front 2, front 0, front 3."""
    f0, f1, f2, f3 = breeder_fronts
    return f1 + f2 + f0 + f3
