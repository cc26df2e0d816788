"""attsim - Rigid body spacecraft attitude simulation.

This package propagates the rotational dynamics of a rigid spacecraft with
a fixed-step RK4 integrator, producing angular velocity, quaternion and
body-axis histories under a disturbance torque.

Example:
    >>> import numpy as np
    >>> from attsim import BodyFrame, DisturbanceConfig, InitialState, RigidBodyModel
    >>> from attsim import run_simulation
    >>>
    >>> model = RigidBodyModel(inertia=np.diag([1.0, 2.0, 3.0]))
    >>> initial = InitialState(
    ...     angular_velocity=np.array([0.0, 0.0, 0.1]),
    ...     quaternion=np.array([0.0, 0.0, 0.0, 1.0]),
    ... )
    >>> timeline = run_simulation(
    ...     model, BodyFrame.identity(), initial, DisturbanceConfig.none(),
    ...     duration=1.0, sampling_period=0.1,
    ... )
    >>> print(timeline.to_dataframe())
"""

__version__ = "0.1.0"

# Dynamics and frame math
from attsim.dynamics import (
    BodyFrame,
    InitialState,
    ReferenceFrame,
    RigidBodyModel,
    differential_dynamics,
    differential_kinematics,
    quaternion_to_dcm,
    rk4_step,
    skew_symmetric,
)

# Disturbance torques
from attsim.environment import DisturbanceConfig, DisturbanceModel, disturbance_torque

# Errors
from attsim.errors import (
    ConfigurationError,
    NumericalConstraintError,
    NumericalConstraintWarning,
)

# Orbit geometry
from attsim.orbital import (
    CircularOrbit,
    OrbitalElements,
    PeriodUnit,
    angular_velocity,
    eci_to_lvlh,
    eci_to_orbital_plane,
    lvlh_frame,
    orbital_period,
    orbital_plane_to_radial_along_track,
    orbital_velocity,
    radial_along_track_to_lvlh,
)

# Simulation
from attsim.simulation import (
    NormPolicy,
    SimConfig,
    SimulationTimeline,
    Simulator,
    SweepCase,
    SweepResults,
    run_simulation,
    run_sweep,
)

__all__ = [
    "__version__",
    # Dynamics
    "BodyFrame",
    "ReferenceFrame",
    "InitialState",
    "RigidBodyModel",
    "differential_dynamics",
    "differential_kinematics",
    "quaternion_to_dcm",
    "rk4_step",
    "skew_symmetric",
    # Environment
    "DisturbanceConfig",
    "DisturbanceModel",
    "disturbance_torque",
    # Errors
    "ConfigurationError",
    "NumericalConstraintError",
    "NumericalConstraintWarning",
    # Orbital
    "CircularOrbit",
    "OrbitalElements",
    "PeriodUnit",
    "angular_velocity",
    "orbital_velocity",
    "orbital_period",
    "eci_to_orbital_plane",
    "orbital_plane_to_radial_along_track",
    "radial_along_track_to_lvlh",
    "eci_to_lvlh",
    "lvlh_frame",
    # Simulation
    "NormPolicy",
    "SimConfig",
    "SimulationTimeline",
    "Simulator",
    "SweepCase",
    "SweepResults",
    "run_simulation",
    "run_sweep",
]
