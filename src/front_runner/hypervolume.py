"""Hypervolume indicator of a Pareto front.

The hypervolume of a front is the volume of objective space that is dominated
by at least one front member and bounded by a reference point. Higher values
indicate a better front.

The computation follows the WFG algorithm:

    Lyndon While, Lucas Bradstreet, and Luigi Barone, "A Fast Way of
    Calculating Exact Hypervolumes," IEEE Transactions on Evolutionary
    Computation, 16 (1), February 2012.

The hypervolume is the sum of exclusive contributions: point i contributes
its own box minus the hypervolume of its *limit set*, the boxes it shares with
the points that come after it. The limit set is reduced to its Pareto front and
measured recursively. The recursion is exponential in the worst case and meant
for fronts of tens to hundreds of points with a handful of objectives.
"""

from collections.abc import Iterable, Sequence

import numpy as np

from front_runner.population import Individual, Population
from front_runner.primitives import pareto_front, to_minimization


def inclusive_hypervolume(point: Sequence[float] | np.ndarray, reference_point: Sequence[float] | np.ndarray) -> float:
    """Return the volume of the box spanned by a single point and the reference point.

    Args:
        point: Objective values, shape (n_obj,).
        reference_point: Reference point, shape (n_obj,).

    Returns:
        Product over objectives of ``|point[o] - reference_point[o]|``.

    Raises:
        ValueError: If the shapes differ.

    Examples:
        >>> inclusive_hypervolume([1.0, 5.0, 4.0], [0.0, 0.0, 0.0])
        20.0
    """
    point = np.asarray(point, dtype=np.float64)
    reference_point = np.asarray(reference_point, dtype=np.float64)
    if point.shape != reference_point.shape:
        raise ValueError(
            f"reference point has {reference_point.size} dimensions, but the point has {point.size}"
        )
    return float(np.prod(np.abs(point - reference_point)))


def limit_set(points: np.ndarray, index: int) -> np.ndarray:
    """Bound every point after ``index`` by the point at ``index``.

    Points must be in minimization form. Each limit point is the worse of the
    two coordinates per objective, i.e. the corner of the overlap between the
    two points' dominated boxes.

    Args:
        points: Points in minimization form, shape (n, n_obj).
        index: Position of the contributing point.

    Returns:
        Array of shape (n - index - 1, n_obj).
    """
    return np.maximum(points[index + 1 :], points[index])


def _wfg(points: np.ndarray, reference_point: np.ndarray) -> float:
    total = 0.0
    for i in range(points.shape[0]):
        contribution = inclusive_hypervolume(points[i], reference_point)
        limits = limit_set(points, i)
        if limits.shape[0] > 0:
            contribution -= _wfg(limits[pareto_front(limits)], reference_point)
        total += contribution
    return total


def hypervolume_of_points(
    points: np.ndarray,
    reference_point: Sequence[float] | np.ndarray,
    maximize: np.ndarray | None = None,
) -> float:
    """Compute the hypervolume of a set of points.

    Args:
        points: Objective values, shape (n, n_obj).
        reference_point: Reference point, shape (n_obj,). Every point must
            dominate it.
        maximize: Per-objective maximize flags, or None to minimize all.

    Returns:
        The hypervolume, >= 0. An empty point set has hypervolume 0.0.

    Raises:
        ValueError: If shapes are inconsistent or a point does not dominate the
            reference point.

    Examples:
        >>> hypervolume_of_points(np.array([[1.0, 2.0, 2.0], [2.0, 2.0, 1.0]]), [0, 0, 0], np.array([True] * 3))
        6.0
    """
    points = np.asarray(points, dtype=np.float64)
    reference_point = np.asarray(reference_point, dtype=np.float64)

    if points.shape[0] == 0:
        return 0.0
    if points.ndim != 2:
        raise ValueError(f"points must be 2D, got shape {points.shape}")
    if reference_point.shape != (points.shape[1],):
        raise ValueError(
            f"reference point has {reference_point.size} dimensions, but the points have {points.shape[1]}"
        )

    min_points = to_minimization(points, maximize)
    min_reference = to_minimization(reference_point, maximize)

    dominating = np.all(min_points <= min_reference, axis=1) & np.any(min_points < min_reference, axis=1)
    if not np.all(dominating):
        i = int(np.flatnonzero(~dominating)[0])
        raise ValueError(
            f"Point {i} ({points[i].tolist()}) does not dominate the reference point "
            f"({reference_point.tolist()}). Refusing to compute a negative hypervolume contribution; "
            "choose a different reference point or check the maximize setting of the objectives."
        )

    return _wfg(min_points, min_reference)


def hypervolume(front: Population | Iterable[Individual], reference_point: Sequence[float] | np.ndarray) -> float:
    """Compute the hypervolume of a Pareto front relative to a reference point.

    Args:
        front: Individuals of the front. Their fitnesses give the maximize flags.
        reference_point: Reference point, one value per objective. Every front
            member must dominate it.

    Returns:
        The hypervolume, >= 0. An empty front has hypervolume 0.0.

    Raises:
        ValueError: If dimensionality is inconsistent or a member does not
            dominate the reference point.

    Example:
        >>> space = ObjectiveSpace.create(2, maximize=True)
        >>> hypervolume([Individual(space.fitness([0.5, 0.5]))], [0.0, 0.0])
        0.25
    """
    pop = Population.of(front)
    if len(pop) == 0:
        return 0.0
    return hypervolume_of_points(pop.objectives, reference_point, pop.maximize)
