"""Benchmark runner comparing front-runner and Pymoo hypervolume on known fronts.

Samples the analytical Pareto fronts of ZDT1, ZDT2 and DTLZ2 at several sizes,
computes the hypervolume with both libraries and records the values, the
absolute difference and the timings. A noisy copy of each front is also
reduced to an archive to time archive construction.

Usage:
    uv run python benchmarks/zdt/run_benchmark.py
"""

import json
import logging
import sys
import time
from collections import defaultdict
from datetime import UTC, datetime
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np

from benchmarks.metrics import reference_hypervolume
from benchmarks.zdt.problems import FRONTS

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# Experiment parameters
FRONT_SIZES = [10, 25, 50, 100]
ARCHIVE_FRACTION = 0.5
NOISE = 0.05
N_RUNS = 5
SEEDS = list(range(N_RUNS))


def run_front_runner(objectives: np.ndarray, ref_point: np.ndarray) -> tuple[float, float]:
    """Compute hypervolume using front-runner.

    Returns:
        Tuple of (hypervolume, elapsed_time_seconds).
    """
    from front_runner import hypervolume_of_points

    start_time = time.perf_counter()
    hv = hypervolume_of_points(objectives, ref_point)
    return hv, time.perf_counter() - start_time


def run_pymoo(objectives: np.ndarray, ref_point: np.ndarray) -> tuple[float, float]:
    """Compute hypervolume using Pymoo.

    Returns:
        Tuple of (hypervolume, elapsed_time_seconds).
    """
    start_time = time.perf_counter()
    hv = reference_hypervolume(objectives, ref_point)
    return hv, time.perf_counter() - start_time


def run_archive(objectives: np.ndarray, seed: int) -> float:
    """Time archive construction on a noisy, dominated copy of a front.

    Returns:
        Elapsed time in seconds.
    """
    from front_runner import Individual, ObjectiveSpace, build_archive

    rng = np.random.default_rng(seed)
    n, n_obj = objectives.shape
    noisy = np.vstack([objectives, objectives + rng.uniform(0.0, NOISE, size=(n, n_obj))])
    space = ObjectiveSpace.create(n_obj, maximize=False, min_objective=0.0, max_objective=1.0 + NOISE)
    population = [Individual(space.fitness(row)) for row in noisy]

    start_time = time.perf_counter()
    build_archive(population, target_size=max(1, int(len(population) * ARCHIVE_FRACTION)))
    return time.perf_counter() - start_time


def run_benchmark() -> dict:
    """Run the full benchmark suite.

    Returns:
        Dictionary containing metadata and results.
    """
    metadata = {
        "timestamp": datetime.now(UTC).isoformat(),
        "parameters": {
            "front_sizes": FRONT_SIZES,
            "archive_fraction": ARCHIVE_FRACTION,
            "noise": NOISE,
            "n_runs": N_RUNS,
            "seeds": SEEDS,
        },
    }

    results = []
    total_runs = len(FRONTS) * len(FRONT_SIZES) * N_RUNS
    current_run = 0

    for problem_name, front_fn in FRONTS.items():
        for n_points in FRONT_SIZES:
            objectives = front_fn(n_points)
            ref_point = np.full(objectives.shape[1], 1.1)

            for seed in SEEDS:
                current_run += 1
                logger.info(
                    f"Running [{current_run}/{total_runs}]: {problem_name} with {n_points} points (seed={seed})"
                )

                hv, hv_time = run_front_runner(objectives, ref_point)
                hv_ref, ref_time = run_pymoo(objectives, ref_point)
                archive_time = run_archive(objectives, seed)

                results.append(
                    {
                        "problem": problem_name,
                        "n_points": n_points,
                        "seed": seed,
                        "hypervolume": hv,
                        "reference_hypervolume": hv_ref,
                        "abs_difference": abs(hv - hv_ref),
                        "hv_time_seconds": hv_time,
                        "reference_time_seconds": ref_time,
                        "archive_time_seconds": archive_time,
                    }
                )

                logger.info(f"  HV: {hv:.6f} (pymoo {hv_ref:.6f}), Time: {hv_time:.4f}s")

    return {"metadata": metadata, "results": results}


def print_summary(results: dict) -> None:
    """Print a summary table of the benchmark results.

    Args:
        results: The benchmark results dictionary.
    """
    data = defaultdict(list)
    for r in results["results"]:
        data[(r["problem"], r["n_points"])].append(r)

    print("\n" + "=" * 80)
    print("BENCHMARK SUMMARY")
    print("=" * 80)
    print(f"\nParameters: front_sizes={FRONT_SIZES}, runs={N_RUNS}")
    print()

    header = f"{'Problem':<10}{'Points':>8}{'HV':>14}{'max |diff|':>14}{'HV s':>10}{'pymoo s':>10}{'archive s':>12}"
    print(header)
    print("-" * len(header))

    for (problem, n_points), rows in sorted(data.items()):
        print(
            f"{problem:<10}{n_points:>8}"
            f"{rows[0]['hypervolume']:>14.6f}"
            f"{max(r['abs_difference'] for r in rows):>14.2e}"
            f"{np.mean([r['hv_time_seconds'] for r in rows]):>10.4f}"
            f"{np.mean([r['reference_time_seconds'] for r in rows]):>10.4f}"
            f"{np.mean([r['archive_time_seconds'] for r in rows]):>12.4f}"
        )

    print("-" * len(header))
    print()


def main() -> None:
    """Main entry point for the benchmark."""
    logger.info("Starting hypervolume benchmark suite")
    logger.info(f"Parameters: front_sizes={FRONT_SIZES}, runs={N_RUNS}")

    results = run_benchmark()

    # Save results to JSON
    output_path = Path(__file__).parent / "results" / "benchmark_results.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)

    logger.info(f"Results saved to {output_path}")

    print_summary(results)


if __name__ == "__main__":
    main()
