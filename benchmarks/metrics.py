"""Reference hypervolume for cross-checking front-runner.

Wraps pymoo's HV indicator, which assumes every objective is minimized.
Maximized objectives are negated (points and reference point alike) before
being handed to pymoo, which leaves the volume unchanged.
"""

import numpy as np
from pymoo.indicators.hv import HV


def reference_hypervolume(
    objectives: np.ndarray,
    ref_point: np.ndarray,
    maximize: np.ndarray | None = None,
) -> float:
    """Compute hypervolume with pymoo.

    Args:
        objectives: (n, n_obj) objective values of the front.
        ref_point: (n_obj,) reference point.
        maximize: Per-objective maximize flags, or None to minimize all.

    Returns:
        Hypervolume value.

    Raises:
        ValueError: If objectives array is empty or has wrong shape
    """
    if objectives.size == 0:
        raise ValueError("objectives array cannot be empty")

    if objectives.ndim != 2:
        raise ValueError(f"objectives must be 2D array, got shape {objectives.shape}")

    ref_point = np.asarray(ref_point, dtype=np.float64)
    if maximize is not None:
        sign = np.where(maximize, -1.0, 1.0)
        objectives = objectives * sign
        ref_point = ref_point * sign

    indicator = HV(ref_point=ref_point)
    return float(indicator(objectives))
