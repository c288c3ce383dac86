"""Pareto primitives for ranking and diversity.

This module provides the core pure functions used by the archive builder and
the hypervolume calculator:
- to_minimization: fold per-objective maximize flags into a "lower is better" matrix
- dominates: scalar Pareto dominance check
- pareto_front: non-dominated subset by incremental insertion
- partition_into_ranks: successive Pareto fronts
- non_dominated_sort: front index per individual
- crowding_distance: diversity metric for solutions in a Pareto front

Every function accepts an optional ``maximize`` boolean array of shape (n_obj,).
When it is None all objectives are minimized.
"""

import numpy as np


def to_minimization(objectives: np.ndarray, maximize: np.ndarray | None = None) -> np.ndarray:
    """Return a float copy of objectives where lower is better for every column.

    Maximized objectives are negated, which turns "higher is better" into
    "lower is better" without changing any dominance relation.

    Args:
        objectives: Objective values. Shape (n_obj,) or (n, n_obj).
        maximize: Per-objective maximize flags, shape (n_obj,), or None.

    Returns:
        Array with the same shape as objectives.

    Examples:
        >>> to_minimization(np.array([[1.0, 2.0]]), np.array([True, False]))
        array([[-1.,  2.]])
    """
    values = np.asarray(objectives, dtype=np.float64)
    if maximize is None:
        return values.copy()
    return np.where(np.asarray(maximize, dtype=bool), -values, values)


def dominates(a: np.ndarray, b: np.ndarray, maximize: np.ndarray | None = None) -> bool:
    """Check if solution a Pareto-dominates solution b.

    A solution a dominates b if and only if:
      - a is no worse than b in ALL objectives
      - a is strictly better than b in AT LEAST ONE objective

    Equal vectors never dominate each other.

    Args:
        a: Objective values for solution a. Shape (n_obj,).
        b: Objective values for solution b. Shape (n_obj,).
        maximize: Per-objective maximize flags, or None to minimize all.

    Returns:
        True if a dominates b, False otherwise.

    Examples:
        >>> dominates(np.array([1.0, 2.0]), np.array([2.0, 3.0]))
        True
        >>> dominates(np.array([1.0, 2.0]), np.array([2.0, 3.0]), np.array([True, True]))
        False
    """
    a = to_minimization(a, maximize)
    b = to_minimization(b, maximize)
    return bool(np.all(a <= b) and np.any(a < b))


def _pareto_front_min(objectives: np.ndarray) -> np.ndarray:
    # Incremental insertion over a matrix already in minimization form.
    front = np.empty(0, dtype=np.intp)
    for i in range(objectives.shape[0]):
        candidate = objectives[i]
        members = objectives[front]

        # Some member dominates the candidate: it is not in the front
        if np.any(np.all(members <= candidate, axis=1) & np.any(members < candidate, axis=1)):
            continue

        # Drop every member the candidate dominates, not just the first
        beaten = np.all(candidate <= members, axis=1) & np.any(candidate < members, axis=1)
        front = np.append(front[~beaten], i)

    return front


def pareto_front(objectives: np.ndarray, maximize: np.ndarray | None = None) -> np.ndarray:
    """Find the non-dominated subset of a set of solutions.

    Uses incremental insertion: a running front is kept, each candidate is
    compared against every current member, dominated candidates are discarded
    and members dominated by an accepted candidate are removed. Worst case
    O(M * N^2) for N solutions and M objectives.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).
        maximize: Per-objective maximize flags, or None to minimize all.

    Returns:
        Integer index array of the non-dominated individuals, in input order.

    Examples:
        >>> pareto_front(np.array([[1.0, 3.0], [2.0, 2.0], [3.0, 3.0]]))
        array([0, 1])
    """
    objectives = to_minimization(objectives, maximize)
    if objectives.shape[0] == 0:
        return np.array([], dtype=np.intp)
    return _pareto_front_min(objectives)


def partition_into_ranks(objectives: np.ndarray, maximize: np.ndarray | None = None) -> list[np.ndarray]:
    """Partition a population into successive Pareto fronts.

    Front 0 is the non-dominated subset of the whole population, front k is the
    non-dominated subset of what remains after removing fronts 0..k-1.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).
        maximize: Per-objective maximize flags, or None to minimize all.

    Returns:
        List of integer index arrays, one per front, rank 0 first. Each array is
        in input order. Every index appears in exactly one front.

    Examples:
        >>> fronts = partition_into_ranks(np.array([[2.0, 2.0], [1.0, 1.0], [1.0, 3.0]]))
        >>> [f.tolist() for f in fronts]
        [[1], [0, 2]]
    """
    objectives = to_minimization(objectives, maximize)
    remaining = np.arange(objectives.shape[0], dtype=np.intp)
    fronts: list[np.ndarray] = []

    while len(remaining) > 0:
        local = _pareto_front_min(objectives[remaining])
        fronts.append(remaining[local])
        remaining = np.delete(remaining, local)

    return fronts


def non_dominated_sort(objectives: np.ndarray, maximize: np.ndarray | None = None) -> np.ndarray:
    """Assign each individual to a Pareto front.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).
        maximize: Per-objective maximize flags, or None to minimize all.

    Returns:
        Integer array of shape (n,) where rank[i] is the front index for
        individual i. Rank 0 = Pareto optimal (first front).

    Examples:
        >>> objs = np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
        >>> non_dominated_sort(objs)
        array([0, 1, 2])
    """
    ranks = np.full(np.shape(objectives)[0], -1, dtype=np.int64)
    for rank, front in enumerate(partition_into_ranks(objectives, maximize)):
        ranks[front] = rank
    return ranks


def crowding_distance(
    front_objectives: np.ndarray,
    min_objective: np.ndarray | None = None,
    max_objective: np.ndarray | None = None,
) -> np.ndarray:
    """Compute crowding distance for individuals in a single Pareto front.

    Crowding distance measures how isolated a solution is in objective space.
    Higher values indicate more isolated solutions (preferred for diversity).

    For every objective the front is stable-sorted ascending; the first and last
    solutions of that order receive infinite distance, and every interior
    solution accumulates the gap between its two neighbours divided by the
    objective's range. Once a solution is infinite it stays infinite.

    The range comes from the configured bounds when they are given, otherwise
    from the front's observed extremes. A zero-width range is treated as 1.

    Args:
        front_objectives: Objective values for individuals in ONE front only.
            Shape (n_front, n_obj).
        min_objective: Configured lower bound per objective, shape (n_obj,).
        max_objective: Configured upper bound per objective, shape (n_obj,).

    Returns:
        Array of shape (n_front,) containing crowding distances.

    Raises:
        ValueError: If only one of min_objective/max_objective is given, or if
            the bounds do not match the number of objectives.

    Examples:
        >>> objs = np.array([[1.0, 4.0], [2.0, 3.0], [3.0, 2.0], [4.0, 1.0]])
        >>> cd = crowding_distance(objs)
        >>> np.isinf(cd[0]) and np.isinf(cd[-1])  # Boundary points
        True
    """
    front_objectives = np.asarray(front_objectives, dtype=np.float64)
    n_front = front_objectives.shape[0]

    if n_front == 0:
        return np.array([], dtype=np.float64)

    n_obj = front_objectives.shape[1]

    if (min_objective is None) != (max_objective is None):
        raise ValueError("min_objective and max_objective must be given together")
    if min_objective is None:
        span = front_objectives.max(axis=0) - front_objectives.min(axis=0)
    else:
        span = np.asarray(max_objective, dtype=np.float64) - np.asarray(min_objective, dtype=np.float64)
        if span.shape != (n_obj,):
            raise ValueError(f"objective bounds have shape {span.shape}, expected ({n_obj},)")
    span = np.where(span == 0, 1.0, span)

    distances = np.zeros(n_front, dtype=np.float64)

    for m in range(n_obj):
        order = np.argsort(front_objectives[:, m], kind="stable")
        values = front_objectives[order, m]

        # Interior points: add normalized neighbor distance
        distances[order[1:-1]] += (values[2:] - values[:-2]) / span[m]

        # Boundary points get infinite distance
        distances[order[0]] = np.inf
        distances[order[-1]] = np.inf

    return distances
