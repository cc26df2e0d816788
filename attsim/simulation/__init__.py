"""Simulation module for rigid body attitude dynamics.

Provides the fixed-step simulation loop, its output timeline and batch
execution of independent runs.

Example:
    >>> from attsim.simulation import Simulator
    >>> from attsim.dynamics import InitialState, RigidBodyModel
    >>>
    >>> sim = Simulator(model=RigidBodyModel.from_principal(1.0, 2.0, 3.0))
    >>> timeline = sim.run(InitialState.at_rest(), duration=10.0, sampling_period=0.1)
    >>> df = timeline.to_dataframe()
"""

from attsim.simulation.simulator import (
    NormPolicy,
    SimConfig,
    Simulator,
    run_simulation,
    sample_count,
)
from attsim.simulation.sweep import (
    SweepCase,
    SweepResults,
    run_sweep,
)
from attsim.simulation.timeline import SimulationTimeline

__all__ = [
    "NormPolicy",
    "SimConfig",
    "SimulationTimeline",
    "Simulator",
    "SweepCase",
    "SweepResults",
    "run_simulation",
    "run_sweep",
    "sample_count",
]
