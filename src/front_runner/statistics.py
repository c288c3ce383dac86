"""Per-generation reporting of Pareto fronts and their hypervolume.

These collectors sit at the edge of the generational loop. The loop calls
``post_evaluation`` after each generation's archive has been built and
``final`` once at the end of the run. Both receive the current generation
number and the list of subpopulations (each an iterable of individuals).

- HypervolumeStatistics: writes ``<generation>, <hv>[, <hv> ...]`` lines,
  one hypervolume per subpopulation, to a text sink
- ParetoFrontStatistics: logs a summary of each front per generation and
  writes the final fronts as rows of space-separated objective values
"""

import logging
import sys
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, TextIO

import numpy as np

from front_runner import config
from front_runner.hypervolume import hypervolume
from front_runner.population import Individual, Population

logger = logging.getLogger(__name__)

P_REFERENCE_POINT = "reference-point"
P_DO_GENERATION = "do-generation"
P_DO_FINAL = "do-final"
P_SILENT = "silent"
P_SILENT_FRONT = "silent.front"

# Above this many objectives, per-generation hypervolume gets expensive
HYPERVOLUME_WARN_OBJECTIVES = 3


class HypervolumeStatistics:
    """Measure the hypervolume of each subpopulation's Pareto front.

    Args:
        reference_point: One value per objective. Every front member must
            dominate it, otherwise measuring raises ValueError.
        do_generation: Measure after every generation.
        do_final: Measure at the end of the run.
        sink: Text stream receiving the measurement lines. Defaults to stdout.

    Raises:
        ValueError: If the reference point is empty or not one-dimensional.

    Example:
        >>> stats = HypervolumeStatistics([0.0, 0.0], sink=io.StringIO())
        >>> stats.post_evaluation(0, [population])
        [0.2968823129605937]
    """

    def __init__(
        self,
        reference_point: Sequence[float] | np.ndarray,
        do_generation: bool = True,
        do_final: bool = True,
        sink: TextIO | None = None,
    ) -> None:
        reference_point = np.array(reference_point, dtype=np.float64)
        if reference_point.ndim != 1 or reference_point.size == 0:
            raise ValueError(f"reference point must be a non-empty 1D sequence, got shape {reference_point.shape}")

        self._reference_point = reference_point
        self.do_generation = do_generation
        self.do_final = do_final
        self.sink = sink

        if do_generation and reference_point.size > HYPERVOLUME_WARN_OBJECTIVES:
            logger.warning(
                "Calculating hypervolume on %d objectives at every generation. "
                "Hypervolume calculation can be very costly for more than a few objectives.",
                reference_point.size,
            )

    @classmethod
    def from_parameters(
        cls,
        params: Mapping[str, Any],
        base: str = "",
        sink: TextIO | None = None,
    ) -> "HypervolumeStatistics":
        """Build a collector from a flat parameter mapping.

        Recognized keys (relative to ``base``):
            reference-point: required, space-separated floats, e.g. "0 5 0 50"
            do-generation: default true
            do-final: default true

        Raises:
            ValueError: If the reference point is missing or malformed.
        """
        return cls(
            reference_point=config.get_floats(params, config.join(base, P_REFERENCE_POINT)),
            do_generation=config.get_bool(params, config.join(base, P_DO_GENERATION), True),
            do_final=config.get_bool(params, config.join(base, P_DO_FINAL), True),
            sink=sink,
        )

    @property
    def reference_point(self) -> np.ndarray:
        """Return a copy of the reference point."""
        return self._reference_point.copy()

    def measure(self, individuals: Population | Iterable[Individual]) -> float:
        """Return the hypervolume of the Pareto front of individuals."""
        front = Population.of(individuals).pareto_front()
        return hypervolume(front, self._reference_point)

    def post_evaluation(self, generation: int, subpopulations: Sequence[Iterable[Individual]]) -> list[float]:
        """Measure and log every subpopulation if per-generation measurement is on.

        The generation number is written either way, so with measurement off
        the log still holds one bare ``<generation>`` line per generation.
        """
        if not self.do_generation:
            self._write(generation, [])
            return []
        values = [self.measure(subpop) for subpop in subpopulations]
        self._write(generation, values)
        return values

    def final(self, generation: int, subpopulations: Sequence[Iterable[Individual]]) -> list[float]:
        """Measure and log every subpopulation if final measurement is on."""
        if not self.do_final:
            return []
        values = [self.measure(subpop) for subpop in subpopulations]
        self._write(generation, values)
        return values

    def _write(self, generation: int, values: list[float]) -> None:
        sink = self.sink if self.sink is not None else sys.stdout
        sink.write(str(generation) + "".join(f", {v}" for v in values) + "\n")


def format_objectives(front: Iterable[Individual]) -> str:
    """Format a front as ``[o1 o2 ...] [o1 o2 ...]`` for log messages."""
    return " ".join("[" + " ".join(str(v) for v in ind.objectives) + "]" for ind in front)


class ParetoFrontStatistics:
    """Report the sorted Pareto front of each subpopulation.

    Args:
        front_sink: Text stream receiving the final fronts. Defaults to stdout,
            with a warning.
        do_generation: Log a summary of every front after each generation.
        silent_front: Do not write the final fronts anywhere.
    """

    def __init__(
        self,
        front_sink: TextIO | None = None,
        do_generation: bool = True,
        silent_front: bool = False,
    ) -> None:
        if front_sink is None and not silent_front:
            logger.warning("No Pareto front sink specified, printing to stdout at end.")
        self.front_sink = front_sink
        self.do_generation = do_generation
        self.silent_front = silent_front

    @classmethod
    def from_parameters(
        cls,
        params: Mapping[str, Any],
        base: str = "",
        front_sink: TextIO | None = None,
    ) -> "ParetoFrontStatistics":
        """Build a collector from a flat parameter mapping.

        Recognized keys (relative to ``base``):
            do-generation: default true
            silent: default false, turns off the front file
            silent.front: default ``silent``, overrides it for the front file
        """
        silent = config.get_bool(params, config.join(base, P_SILENT), False)
        return cls(
            front_sink=front_sink,
            do_generation=config.get_bool(params, config.join(base, P_DO_GENERATION), True),
            silent_front=config.get_bool(params, config.join(base, P_SILENT_FRONT), silent),
        )

    def post_evaluation(
        self, generation: int, subpopulations: Sequence[Iterable[Individual]]
    ) -> list[list[Individual]]:
        """Return the sorted front of every subpopulation, logging a summary of each."""
        fronts = [Population.of(subpop).sorted_pareto_front() for subpop in subpopulations]
        if self.do_generation:
            for s, front in enumerate(fronts):
                logger.info("Generation %d, subpop %d front: %s", generation, s, format_objectives(front))
        return fronts

    def final(self, generation: int, subpopulations: Sequence[Iterable[Individual]]) -> list[list[Individual]]:
        """Write the sorted front of every subpopulation, one individual per line.

        The fronts are returned even when the front file is silenced.
        """
        fronts = [Population.of(subpop).sorted_pareto_front() for subpop in subpopulations]
        if self.silent_front:
            return fronts

        sink = self.front_sink if self.front_sink is not None else sys.stdout
        for s, front in enumerate(fronts):
            if len(fronts) > 1:
                sink.write(f"Subpopulation {s}\n")
            for ind in front:
                sink.write(" ".join(str(v) for v in ind.objectives) + "\n")
        logger.debug("Wrote final fronts of generation %d", generation)
        return fronts
