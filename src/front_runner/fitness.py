"""Multi-objective fitness and the objective space it lives in.

- ObjectiveSpace: per-objective maximize flags and configured bounds, shared by
  every fitness of a run (the fitness "prototype")
- MultiObjectiveFitness: one immutable objective vector plus its space

Both classes are immutable (frozen dataclasses); arrays are copied on
construction and marked read-only.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from front_runner import config
from front_runner.primitives import dominates

logger = logging.getLogger(__name__)


def _frozen_copy(values: np.ndarray, dtype: type) -> np.ndarray:
    copy = np.array(values, dtype=dtype)
    copy.setflags(write=False)
    return copy


@dataclass(frozen=True, eq=False)
class ObjectiveSpace:
    """Shared description of the objectives of a run.

    Attributes:
        maximize: Per-objective flags, shape (n_obj,). True means higher is better.
        min_objective: Configured lower bound per objective, shape (n_obj,), or None.
        max_objective: Configured upper bound per objective, shape (n_obj,), or None.
            Bounds are only used to normalize crowding distances and to replace
            non-finite objective values. Without bounds, crowding distance falls
            back to the observed range of the front being measured.

    Example:
        >>> space = ObjectiveSpace.create(2, maximize=[True, False], max_objective=[100.0, 0.5])
        >>> space.n_obj
        2
        >>> fit = space.fitness([50.0, 0.25])
    """

    maximize: np.ndarray
    min_objective: np.ndarray | None = None
    max_objective: np.ndarray | None = None

    def __post_init__(self) -> None:
        """Validate shapes and bounds, and copy arrays for immutability.

        Raises:
            TypeError: If an attribute is not a numpy array.
            ValueError: If shapes are inconsistent or a lower bound exceeds its upper bound.
        """
        if not isinstance(self.maximize, np.ndarray):
            raise TypeError(f"maximize must be a numpy array, got {type(self.maximize).__name__}")
        if self.maximize.ndim != 1 or self.maximize.shape[0] == 0:
            raise ValueError(f"maximize must be 1D with at least one objective, got shape {self.maximize.shape}")
        if self.maximize.dtype != np.bool_:
            raise ValueError(f"maximize must have bool dtype, got {self.maximize.dtype}")
        object.__setattr__(self, "maximize", _frozen_copy(self.maximize, np.bool_))

        if (self.min_objective is None) != (self.max_objective is None):
            raise ValueError("min_objective and max_objective must be given together")
        if self.min_objective is None:
            return

        n_obj = self.maximize.shape[0]
        for name in ("min_objective", "max_objective"):
            bound = getattr(self, name)
            if not isinstance(bound, np.ndarray):
                raise TypeError(f"{name} must be a numpy array, got {type(bound).__name__}")
            if bound.shape != (n_obj,):
                raise ValueError(f"{name} has shape {bound.shape}, expected ({n_obj},)")
            object.__setattr__(self, name, _frozen_copy(bound, np.float64))

        inverted = np.flatnonzero(self.min_objective > self.max_objective)
        if len(inverted) > 0:
            o = inverted[0]
            raise ValueError(
                f"Objective {o}: min bound {self.min_objective[o]} is greater than max bound {self.max_objective[o]}"
            )

    @classmethod
    def create(
        cls,
        n_objectives: int,
        maximize: bool | Sequence[bool] = True,
        min_objective: float | Sequence[float] | None = 0.0,
        max_objective: float | Sequence[float] | None = 1.0,
    ) -> "ObjectiveSpace":
        """Build a space from scalars or per-objective sequences.

        Scalars are broadcast to every objective. Pass None for both bounds to
        build a space without configured bounds.

        Raises:
            ValueError: If n_objectives is not positive or a sequence has the wrong length.
        """
        if n_objectives <= 0:
            raise ValueError(f"The number of objectives must be an integer >= 1, got {n_objectives}")

        def broadcast(value: Any, dtype: type, name: str) -> np.ndarray | None:
            if value is None:
                return None
            try:
                return np.broadcast_to(np.asarray(value, dtype=dtype), (n_objectives,)).copy()
            except ValueError:
                raise ValueError(
                    f"{name} must be a scalar or have {n_objectives} values, got {np.shape(value)}"
                ) from None

        return cls(
            maximize=broadcast(maximize, np.bool_, "maximize"),
            min_objective=broadcast(min_objective, np.float64, "min_objective"),
            max_objective=broadcast(max_objective, np.float64, "max_objective"),
        )

    @classmethod
    def from_parameters(cls, params: Mapping[str, Any], base: str = "") -> "ObjectiveSpace":
        """Build a space from a flat parameter mapping.

        Recognized keys (relative to ``base``):
            num-objectives: required, integer >= 1
            maximize, maximize.<i>: default true, per-objective override
            min, min.<i>: default 0.0, per-objective override
            max, max.<i>: default 1.0, per-objective override

        Raises:
            ValueError: If a parameter is missing or invalid.

        Example:
            >>> space = ObjectiveSpace.from_parameters({"num-objectives": "2", "max.0": "100"})
            >>> space.max_objective.tolist()
            [100.0, 1.0]
        """
        n = config.get_int(params, config.join(base, "num-objectives"))
        if n <= 0:
            raise ValueError(f"The number of objectives must be an integer >= 1, got {n}")

        default_max = config.get_bool(params, config.join(base, "maximize"), True)
        default_lo = config.get_float(params, config.join(base, "min"), 0.0)
        default_hi = config.get_float(params, config.join(base, "max"), 1.0)

        maximize = [config.get_bool(params, config.join(base, "maximize", i), default_max) for i in range(n)]
        lo = [config.get_float(params, config.join(base, "min", i), default_lo) for i in range(n)]
        hi = [config.get_float(params, config.join(base, "max", i), default_hi) for i in range(n)]

        return cls.create(n, maximize=maximize, min_objective=lo, max_objective=hi)

    @property
    def n_obj(self) -> int:
        """Return the number of objectives."""
        return self.maximize.shape[0]

    @property
    def has_bounds(self) -> bool:
        """Return True if min/max bounds are configured."""
        return self.min_objective is not None

    def worst_objectives(self) -> np.ndarray:
        """Return the worst configured value per objective.

        That is the lower bound for maximized objectives and the upper bound
        for minimized ones.

        Raises:
            ValueError: If the space has no bounds.
        """
        if not self.has_bounds:
            raise ValueError("Objective space has no configured bounds")
        return np.where(self.maximize, self.min_objective, self.max_objective)

    def compatible_with(self, other: "ObjectiveSpace") -> bool:
        """Return True if both spaces have the same objectives and directions."""
        return self is other or np.array_equal(self.maximize, other.maximize)

    def fitness(self, objectives: Sequence[float] | np.ndarray) -> "MultiObjectiveFitness":
        """Create a fitness in this space from raw objective values.

        Non-finite values (NaN, +/-inf) are replaced by the worst configured
        value for that objective, and a warning is logged for each.

        Raises:
            ValueError: If the number of values does not match, or a value is
                non-finite and the space has no bounds to replace it with.
        """
        values = np.array(objectives, dtype=np.float64)
        if values.shape != (self.n_obj,):
            raise ValueError(f"Expected {self.n_obj} objective values, got shape {values.shape}")

        bad = np.flatnonzero(~np.isfinite(values))
        if len(bad) > 0:
            if not self.has_bounds:
                raise ValueError(
                    f"Bad objective #{bad[0]}: {values[bad[0]]}, and no bounds are configured to replace it"
                )
            worst = self.worst_objectives()
            for o in bad:
                logger.warning(
                    "Bad objective #%d: %s, setting to worst value for that objective (%s)", o, values[o], worst[o]
                )
                values[o] = worst[o]

        return MultiObjectiveFitness(objectives=values, space=self)


@dataclass(frozen=True, eq=False)
class MultiObjectiveFitness:
    """Immutable objective vector of one individual.

    Attributes:
        objectives: Objective values, shape (n_obj,). Read-only.
        space: The ObjectiveSpace giving maximize flags and bounds.

    Example:
        >>> space = ObjectiveSpace.create(2)
        >>> a, b = space.fitness([0.5, 0.5]), space.fitness([0.4, 0.5])
        >>> a.dominates(b)
        True
    """

    objectives: np.ndarray
    space: ObjectiveSpace

    def __post_init__(self) -> None:
        """Validate shape against the space and copy objectives for immutability.

        Raises:
            TypeError: If objectives is not a numpy array or space is not an ObjectiveSpace.
            ValueError: If the number of objectives does not match the space.
        """
        if not isinstance(self.objectives, np.ndarray):
            raise TypeError(f"objectives must be a numpy array, got {type(self.objectives).__name__}")
        if not isinstance(self.space, ObjectiveSpace):
            raise TypeError(f"space must be an ObjectiveSpace, got {type(self.space).__name__}")
        if self.objectives.shape != (self.space.n_obj,):
            raise ValueError(f"objectives has shape {self.objectives.shape}, expected ({self.space.n_obj},)")
        object.__setattr__(self, "objectives", _frozen_copy(self.objectives, np.float64))

    @property
    def n_obj(self) -> int:
        """Return the number of objectives."""
        return self.objectives.shape[0]

    @property
    def maximize(self) -> np.ndarray:
        """Return the per-objective maximize flags."""
        return self.space.maximize

    def _check_comparable(self, other: "MultiObjectiveFitness") -> None:
        if self.n_obj != other.n_obj:
            raise ValueError(
                f"Cannot compare fitnesses with different numbers of objectives ({self.n_obj} vs {other.n_obj})"
            )
        if not self.space.compatible_with(other.space):
            raise ValueError(
                "Cannot compare fitnesses with different maximize settings "
                f"({self.maximize.tolist()} vs {other.maximize.tolist()})"
            )

    def dominates(self, other: "MultiObjectiveFitness") -> bool:
        """Return True if this fitness Pareto-dominates other.

        Raises:
            ValueError: If the fitnesses have different dimensionality or maximize flags.
        """
        self._check_comparable(other)
        return dominates(self.objectives, other.objectives, self.maximize)

    def equivalent_to(self, other: "MultiObjectiveFitness") -> bool:
        """Return True if neither fitness dominates the other.

        Raises:
            ValueError: If the fitnesses have different dimensionality or maximize flags.
        """
        return not self.dominates(other) and not other.dominates(self)
