"""Analytical Pareto fronts of the ZDT test problems.

The ZDT (Zitzler-Deb-Thiele) test suite is a standard benchmark for
multi-objective optimization. All problems minimize two objectives and have
known Pareto-optimal fronts, which makes them convenient inputs for checking
hypervolume implementations against each other.

References:
    Zitzler, E., Deb, K., & Thiele, L. (2000). Comparison of multiobjective
    evolutionary algorithms: Empirical results. Evolutionary computation, 8(2), 173-195.
"""

from collections.abc import Callable

import numpy as np

# Slightly worse than the nadir point (1, 1) of ZDT1 and ZDT2
REF_POINT: np.ndarray = np.array([1.1, 1.1])


def zdt1_front(n_points: int) -> np.ndarray:
    """ZDT1: Convex Pareto front, f2 = 1 - sqrt(f1).

    Args:
        n_points: Number of evenly spaced points on the front.

    Returns:
        Objectives (n_points, 2) to minimize
    """
    f1 = np.linspace(0.0, 1.0, n_points)
    return np.column_stack([f1, 1.0 - np.sqrt(f1)])


def zdt2_front(n_points: int) -> np.ndarray:
    """ZDT2: Non-convex Pareto front, f2 = 1 - f1^2.

    Args:
        n_points: Number of evenly spaced points on the front.

    Returns:
        Objectives (n_points, 2) to minimize
    """
    f1 = np.linspace(0.0, 1.0, n_points)
    return np.column_stack([f1, 1.0 - f1**2])


def dtlz2_front(n_points: int, seed: int = 0) -> np.ndarray:
    """DTLZ2 (3 objectives): points on the positive unit sphere octant.

    Args:
        n_points: Number of random points on the front.
        seed: Random seed for reproducibility.

    Returns:
        Objectives (n_points, 3) to minimize
    """
    rng = np.random.default_rng(seed)
    points = np.abs(rng.standard_normal((n_points, 3)))
    return points / np.linalg.norm(points, axis=1, keepdims=True)


FRONTS: dict[str, Callable[[int], np.ndarray]] = {
    "ZDT1": zdt1_front,
    "ZDT2": zdt2_front,
    "DTLZ2": dtlz2_front,
}
