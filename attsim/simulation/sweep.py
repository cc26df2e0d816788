"""Batch execution of independent attitude simulations.

Each case carries its own model, reference frame, initial state and
disturbance configuration; cases share nothing and are run one after
another. A case that fails is recorded with its error and does not stop
the remaining cases.

Example:
    >>> from attsim.simulation import SweepCase, run_sweep
    >>>
    >>> cases = [
    ...     SweepCase(name=f"izz={izz}", model=RigidBodyModel.from_principal(1.0, 2.0, izz),
    ...               initial_state=initial, duration=60.0, sampling_period=0.1)
    ...     for izz in (2.5, 3.0, 3.5)
    ... ]
    >>> results = run_sweep(cases, progress=True)
    >>> print(results.summary())
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import polars as pl
from beartype import beartype
from tqdm import tqdm

from attsim.dynamics.rigid_body import RigidBodyModel
from attsim.dynamics.state import BodyFrame, InitialState, attitude_change_angle
from attsim.environment.disturbance import DisturbanceConfig
from attsim.errors import ConfigurationError, NumericalConstraintError
from attsim.simulation.simulator import SimConfig, run_simulation
from attsim.simulation.timeline import SimulationTimeline

logger = logging.getLogger(__name__)


@beartype
@dataclass(frozen=True)
class SweepCase:
    """Inputs of one independent simulation run."""
    name: str
    model: RigidBodyModel
    initial_state: InitialState
    duration: float | int
    sampling_period: float | int
    reference_frame: BodyFrame = field(default_factory=BodyFrame.identity)
    disturbance: DisturbanceConfig = field(default_factory=DisturbanceConfig.none)
    config: SimConfig = field(default_factory=SimConfig)


@beartype
@dataclass
class SweepResults:
    """Outcome of a batch of simulation runs.

    Attributes:
        cases: Cases in execution order
        timelines: Timeline per case, None where the run failed
        errors: Error message per case, None where the run succeeded
    """
    cases: list[SweepCase]
    timelines: list[SimulationTimeline | None]
    errors: list[str | None]

    @property
    def n_succeeded(self) -> int:
        """Number of runs that completed."""
        return sum(1 for t in self.timelines if t is not None)

    def get(self, name: str) -> SimulationTimeline | None:
        """Timeline of the case with the given name."""
        for case, timeline in zip(self.cases, self.timelines, strict=True):
            if case.name == name:
                return timeline
        raise KeyError(f"No case named '{name}'")

    def summary(self) -> pl.DataFrame:
        """One row per case with final state metrics.

        attitude_change is the rotation angle between the first and last
        attitude of the run [rad].
        """
        final_rate = []
        attitude_change = []
        max_norm_error = []
        for timeline in self.timelines:
            if timeline is None:
                final_rate.append(None)
                attitude_change.append(None)
                max_norm_error.append(None)
            else:
                final_rate.append(float(np.linalg.norm(timeline.angular_velocity[-1])))
                attitude_change.append(
                    attitude_change_angle(timeline.quaternion[0], timeline.quaternion[-1])
                )
                max_norm_error.append(float(np.max(np.abs(timeline.quaternion_norms() - 1.0))))

        return pl.DataFrame({
            "name": [case.name for case in self.cases],
            "success": [t is not None for t in self.timelines],
            "final_rate": final_rate,
            "attitude_change": attitude_change,
            "max_norm_error": max_norm_error,
            "error": self.errors,
        })


@beartype
def run_sweep(cases: Sequence[SweepCase], progress: bool = False) -> SweepResults:
    """Run independent simulations for every case.

    Args:
        cases: Simulation cases
        progress: Show a progress bar over cases

    Returns:
        SweepResults with one timeline or error per case
    """
    timelines: list[SimulationTimeline | None] = []
    errors: list[str | None] = []

    iterator: Any = cases
    if progress:
        iterator = tqdm(cases, desc="Running sweep", total=len(cases))

    for case in iterator:
        try:
            timeline = run_simulation(
                case.model,
                case.reference_frame,
                case.initial_state,
                case.disturbance,
                case.duration,
                case.sampling_period,
                config=case.config,
            )
            error = None
        except (ConfigurationError, NumericalConstraintError) as e:
            logger.warning("Sweep case '%s' failed: %s", case.name, e)
            timeline = None
            error = str(e)

        timelines.append(timeline)
        errors.append(error)

    logger.info("Sweep finished: %d/%d cases succeeded", sum(e is None for e in errors), len(cases))

    return SweepResults(cases=list(cases), timelines=timelines, errors=errors)
