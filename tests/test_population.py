"""Tests for Individual and Population data structures.

This module tests the core data structures for multi-objective archiving:
- Test behavior, not implementation
- Each test should fail for one reason
- Assert both exception type and message fragment for error tests
"""

import numpy as np
import pytest

from front_runner import Individual, ObjectiveSpace, Population


@pytest.fixture
def space() -> ObjectiveSpace:
    """Two minimized objectives in [0, 10]."""
    return ObjectiveSpace.create(2, maximize=False, min_objective=0.0, max_objective=10.0)


class TestIndividual:
    """Tests for Individual."""

    def test_defaults(self, space: ObjectiveSpace) -> None:
        """New individuals have no rank or sparsity."""
        ind = Individual(space.fitness([1.0, 2.0]))

        assert ind.genome is None
        assert ind.rank is None
        assert ind.sparsity is None

    def test_objectives_property(self, space: ObjectiveSpace) -> None:
        """objectives delegates to the fitness."""
        ind = Individual(space.fitness([1.0, 2.0]), genome="abc")

        np.testing.assert_array_equal(ind.objectives, [1.0, 2.0])
        assert ind.genome == "abc"

    def test_equality_is_identity(self, space: ObjectiveSpace) -> None:
        """Individuals with equal objectives are still distinct."""
        a = Individual(space.fitness([1.0, 2.0]))
        b = Individual(space.fitness([1.0, 2.0]))

        assert a != b
        assert a == a


class TestPopulationConstruction:
    """Tests for Population construction and validation."""

    def test_stacks_objectives(self, space: ObjectiveSpace, make_individuals) -> None:
        """The objective matrix has one row per individual, in order."""
        pop = Population(make_individuals([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]], space))

        assert len(pop) == 3
        assert pop.n_obj == 2
        np.testing.assert_array_equal(pop.objectives, [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])

    def test_accepts_list_and_stores_tuple(self, space: ObjectiveSpace, make_individuals) -> None:
        """Individuals are stored as a tuple."""
        pop = Population(make_individuals([[1.0, 2.0]], space))

        assert isinstance(pop.individuals, tuple)

    def test_empty_population(self) -> None:
        """An empty population has no space and an empty objective matrix."""
        pop = Population(())

        assert len(pop) == 0
        assert pop.n_obj is None
        assert pop.maximize is None
        assert pop.objectives.shape == (0, 0)
        assert pop.pareto_front() == []
        assert pop.sorted_pareto_front() == []

    def test_rejects_non_individual(self, space: ObjectiveSpace) -> None:
        """Members must be Individuals."""
        with pytest.raises(TypeError, match="individual 0 must be an Individual"):
            Population([space.fitness([1.0, 2.0])])

    def test_rejects_missing_fitness(self) -> None:
        """Members must carry a MultiObjectiveFitness."""
        with pytest.raises(TypeError, match="individual 0 must have a MultiObjectiveFitness"):
            Population([Individual(fitness=None)])

    def test_rejects_mixed_dimensionality(self, space: ObjectiveSpace) -> None:
        """All members need the same number of objectives."""
        other = ObjectiveSpace.create(3, maximize=False)
        individuals = [Individual(space.fitness([1.0, 2.0])), Individual(other.fitness([0.1, 0.2, 0.3]))]

        with pytest.raises(ValueError, match="individual 1 has 3 objectives, expected 2"):
            Population(individuals)

    def test_rejects_mixed_maximize_flags(self, space: ObjectiveSpace) -> None:
        """All members need the same maximize flags."""
        other = ObjectiveSpace.create(2, maximize=[False, True])
        individuals = [Individual(space.fitness([1.0, 2.0])), Individual(other.fitness([0.1, 0.2]))]

        with pytest.raises(ValueError, match="individual 1 has maximize flags"):
            Population(individuals)

    def test_of_returns_same_population(self, space: ObjectiveSpace, make_individuals) -> None:
        """Population.of does not re-wrap a Population."""
        pop = Population(make_individuals([[1.0, 2.0]], space))

        assert Population.of(pop) is pop

    def test_of_wraps_iterables(self, space: ObjectiveSpace, make_individuals) -> None:
        """Population.of accepts any iterable of individuals."""
        individuals = make_individuals([[1.0, 2.0], [2.0, 1.0]], space)
        pop = Population.of(iter(individuals))

        assert list(pop) == individuals


class TestPopulationIndexing:
    """Tests for positional access."""

    def test_getitem(self, space: ObjectiveSpace, make_individuals) -> None:
        """Positive and negative indices return the individual."""
        individuals = make_individuals([[1.0, 2.0], [3.0, 4.0]], space)
        pop = Population(individuals)

        assert pop[0] is individuals[0]
        assert pop[-1] is individuals[1]
        assert pop[np.int64(1)] is individuals[1]

    def test_getitem_out_of_bounds(self, space: ObjectiveSpace, make_individuals) -> None:
        """Out-of-range indices raise IndexError."""
        pop = Population(make_individuals([[1.0, 2.0]], space))

        with pytest.raises(IndexError, match="index 1 is out of bounds"):
            pop[1]

    def test_getitem_rejects_non_integer(self, space: ObjectiveSpace, make_individuals) -> None:
        """Slices and floats are rejected."""
        pop = Population(make_individuals([[1.0, 2.0]], space))

        with pytest.raises(TypeError, match="indices must be integers"):
            pop[0:1]


class TestPopulationFronts:
    """Tests for Pareto front extraction."""

    def test_pareto_front_in_population_order(self, space: ObjectiveSpace, make_individuals) -> None:
        """The front keeps population order."""
        individuals = make_individuals([[3.0, 1.0], [2.0, 2.0], [1.0, 3.0], [3.0, 3.0]], space)
        front = Population(individuals).pareto_front()

        assert [ind.genome for ind in front] == [0, 1, 2]

    def test_pareto_front_respects_maximize(self, make_individuals) -> None:
        """Under maximization the larger point is the front."""
        space = ObjectiveSpace.create(2, maximize=True, max_objective=10.0)
        individuals = make_individuals([[1.0, 1.0], [2.0, 2.0]], space)

        assert [ind.genome for ind in Population(individuals).pareto_front()] == [1]

    def test_sorted_pareto_front_is_lexicographic(self, make_individuals) -> None:
        """A shuffled front comes back sorted by objectives, first objective first."""
        space = ObjectiveSpace.create(2, maximize=False, min_objective=None, max_objective=None)
        sorted_rows = [[0.286, 7.976], [0.379, 7.771], [0.504, 7.663], [0.634, 7.643], [0.635, 6.895]]
        shuffled = [sorted_rows[i] for i in [3, 0, 4, 1, 2]]

        front = Population(make_individuals(shuffled, space)).sorted_pareto_front()

        np.testing.assert_array_equal([ind.objectives for ind in front], sorted_rows)

    def test_sorted_pareto_front_breaks_ties_on_later_objectives(self, make_individuals) -> None:
        """Equal first objectives are ordered by the second."""
        space = ObjectiveSpace.create(3, maximize=[False, True, True], min_objective=None, max_objective=None)
        rows = [[1.0, 5.0, 1.0], [1.0, 2.0, 9.0], [0.5, 1.0, 1.0]]

        front = Population(make_individuals(rows, space)).sorted_pareto_front()

        assert [ind.genome for ind in front] == [2, 1, 0]
