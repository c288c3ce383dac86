"""NSGA-II archive construction.

This module implements the NSGA-II survivor selection strategy which uses
Pareto ranking and crowding distance (sparsity) to reduce a combined
parent+offspring population to a fixed-size archive. The archive becomes the
next generation's population.

The three steps are exposed separately:
1. assign_front_ranks: partition into fronts and write ``rank``
2. assign_sparsity: write ``sparsity`` (crowding distance) on one front
3. build_archive: fill the archive front by front, truncating the first
   front that does not fit by descending sparsity

crowded_compare orders archived individuals by those annotations, rank first
and sparsity second, for parent selection.

All annotation state is recomputed from scratch on every call. The functions
mutate the ``rank``/``sparsity`` fields of the given individuals and must be
called from a single thread per population.
"""

import logging
from collections.abc import Iterable, Sequence

from front_runner.fitness import ObjectiveSpace
from front_runner.population import Individual, Population
from front_runner.primitives import crowding_distance, partition_into_ranks

logger = logging.getLogger(__name__)


def assign_front_ranks(individuals: Population | Iterable[Individual]) -> list[list[Individual]]:
    """Divide individuals into Pareto fronts and write each one's rank.

    Every individual receives a rank, including those in fronts that an
    archive would never reach.

    Args:
        individuals: The population to partition.

    Returns:
        List of fronts, rank 0 first. Each front lists its individuals in
        population order.

    Raises:
        ValueError: If individuals have inconsistent objective dimensionality
            or maximize flags.

    Example:
        >>> fronts = assign_front_ranks(pop)
        >>> all(ind.rank == 0 for ind in fronts[0])
        True
    """
    pop = Population.of(individuals)
    if len(pop) == 0:
        return []

    fronts: list[list[Individual]] = []
    for rank, indices in enumerate(partition_into_ranks(pop.objectives, pop.maximize)):
        front = [pop[i] for i in indices]
        for ind in front:
            ind.rank = rank
        fronts.append(front)
    return fronts


def assign_sparsity(front: Sequence[Individual], space: ObjectiveSpace | None = None) -> None:
    """Compute and write the sparsity (crowding distance) of every front member.

    Normalization uses the configured bounds of ``space`` (by default the
    space of the front's own fitnesses). When the space has no bounds the
    observed range of the front is used instead. Zero-width ranges count as 1.

    Args:
        front: Mutually non-dominating individuals.
        space: Objective space providing the bounds, or None to use the front's.

    Raises:
        ValueError: If individuals have inconsistent objective dimensionality.
    """
    pop = Population.of(front)
    if len(pop) == 0:
        return

    space = space if space is not None else pop.space
    distances = crowding_distance(pop.objectives, space.min_objective, space.max_objective)
    for ind, distance in zip(pop, distances):
        ind.sparsity = float(distance)


def build_archive(individuals: Population | Iterable[Individual], target_size: int) -> list[Individual]:
    """Reduce a population to an archive of exactly target_size individuals.

    Fronts are taken whole in rank order while they fit. The first front that
    would overflow the archive is sorted by sparsity, highest first, and the
    remaining slots are filled from its head. Equal sparsities keep their order
    within the front, which is population order, so the result is fully
    deterministic.

    Side effects:
        - ``rank`` is written on every individual.
        - ``sparsity`` is written on every individual of every front the
          archive inspects (the included ones and the truncated one).
        - ``sparsity`` is reset to None on individuals of fronts never reached.

    Args:
        individuals: Combined population (typically parents + offspring).
        target_size: Number of individuals to keep.

    Returns:
        The archive, in selection order.

    Raises:
        ValueError: If target_size is not positive, exceeds the population
            size, or individuals have inconsistent objective dimensionality.

    Example:
        >>> archive = build_archive(parents + children, target_size=len(parents))
        >>> len(archive) == len(parents)
        True
    """
    pop = Population.of(individuals)
    if target_size <= 0:
        raise ValueError(f"target_size must be positive, got {target_size}")
    if target_size > len(pop):
        raise ValueError(f"target_size ({target_size}) cannot exceed population size ({len(pop)})")

    fronts = assign_front_ranks(pop)
    for ind in pop:
        ind.sparsity = None

    archive: list[Individual] = []
    for front in fronts:
        assign_sparsity(front, pop.space)

        if len(archive) + len(front) <= target_size:
            # Whole front fits - add all
            archive.extend(front)
            if len(archive) == target_size:
                break
        else:
            # Critical front - select by highest sparsity, stable on ties
            remaining = target_size - len(archive)
            by_sparsity = sorted(front, key=lambda ind: ind.sparsity, reverse=True)
            archive.extend(by_sparsity[:remaining])
            logger.debug(
                "Truncated front %d: kept %d of %d individuals",
                front[0].rank,
                remaining,
                len(front),
            )
            break

    logger.debug("Built archive of %d from %d individuals in %d fronts", len(archive), len(pop), len(fronts))
    return archive


def crowded_compare(a: Individual, b: Individual) -> int:
    """Compare two archived individuals by rank, then sparsity.

    Lower rank wins. With equal ranks, higher sparsity wins. This is the
    ordering a crowded tournament uses to pick parents from an archive.

    Args:
        a: First individual, with ``rank`` and ``sparsity`` assigned.
        b: Second individual, with ``rank`` and ``sparsity`` assigned.

    Returns:
        A negative number if a is preferred, positive if b is preferred,
        0 if neither is. Usable with ``functools.cmp_to_key``.

    Raises:
        ValueError: If either individual lacks a rank or sparsity.

    Example:
        >>> archive = build_archive(pop, target_size=10)
        >>> best_first = sorted(archive, key=functools.cmp_to_key(crowded_compare))
    """
    for name, ind in (("a", a), ("b", b)):
        if ind.rank is None or ind.sparsity is None:
            raise ValueError(f"individual {name} has no rank/sparsity; build an archive first")

    if a.rank != b.rank:
        return -1 if a.rank < b.rank else 1
    if a.sparsity != b.sparsity:
        return -1 if a.sparsity > b.sparsity else 1
    return 0
