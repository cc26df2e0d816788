"""Fixed-step attitude simulation of a rigid spacecraft.

The simulation loop advances one sample at a time:

1. Body axes at step k are computed from quaternion[k] and the fixed
   reference axes, and recorded in the timeline.
2. The disturbance source is queried once for the torque.
3. Unless k is the last sample, angular_velocity[k+1] is integrated with the
   body frame and torque held fixed, then quaternion[k+1] is integrated with
   angular_velocity[k] held fixed.

Example:
    >>> from attsim.simulation import run_simulation
    >>> from attsim.dynamics import BodyFrame, InitialState, RigidBodyModel
    >>> from attsim.environment import DisturbanceConfig
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
    >>> len(timeline)
    11
"""

import logging
import warnings
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

import numpy as np
from beartype import beartype
from numpy.typing import NDArray
from tqdm import tqdm

from attsim.dynamics.rigid_body import (
    RigidBodyModel,
    propagate_angular_velocity,
    propagate_quaternion,
)
from attsim.dynamics.state import (
    QUATERNION_NORM_BAND,
    BodyFrame,
    InitialState,
    body_frame_from_quaternion,
    check_quaternion_norm,
)
from attsim.environment.disturbance import (
    DisturbanceConfig,
    DisturbanceSource,
    disturbance_torque,
)
from attsim.errors import (
    ConfigurationError,
    NumericalConstraintError,
    NumericalConstraintWarning,
)
from attsim.simulation.timeline import SimulationTimeline

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================


class NormPolicy(Enum):
    """Action taken when a quaternion leaves the accepted norm band."""

    WARN = auto()    # Record, log and warn, then continue
    RAISE = auto()   # Abort the run
    IGNORE = auto()  # Skip the check


@beartype
@dataclass(frozen=True)
class SimConfig:
    """Simulation configuration.

    Attributes:
        norm_policy: Handling of quaternion norm violations
        disturbance_source: Function mapping the disturbance configuration to a torque
        progress: Show a progress bar over steps
    """
    norm_policy: NormPolicy = NormPolicy.WARN
    disturbance_source: DisturbanceSource = field(default=disturbance_torque)
    progress: bool = False


# =============================================================================
# Simulation Loop
# =============================================================================


@beartype
def sample_count(duration: float | int, sampling_period: float | int) -> int:
    """Number of timeline rows floor(duration / sampling_period) + 1."""
    if not (np.isfinite(duration) and duration >= 0):
        raise ConfigurationError(f"Duration must be finite and non-negative, got {duration}")
    if not (np.isfinite(sampling_period) and sampling_period > 0):
        raise ConfigurationError(
            f"Sampling period must be finite and positive, got {sampling_period}"
        )
    return int(np.floor(duration / sampling_period)) + 1


def _check_norm(
    timeline: SimulationTimeline,
    index: int,
    policy: NormPolicy,
) -> None:
    if policy is NormPolicy.IGNORE:
        return

    check = check_quaternion_norm(timeline.quaternion[index])
    if check.within_tolerance:
        return

    lo, hi = QUATERNION_NORM_BAND
    message = (
        f"Quaternion norm^2 {check.norm_squared:.6f} outside [{lo}, {hi}] "
        f"at t={timeline.time[index]:.6g} s (index {index})"
    )
    if policy is NormPolicy.RAISE:
        raise NumericalConstraintError(message)

    # Only the first violation of a run is logged and warned
    if not timeline.warnings:
        logger.warning(message)
        warnings.warn(message, NumericalConstraintWarning, stacklevel=3)
    else:
        logger.debug(message)
    timeline.warnings.append(message)


def _query_disturbance(
    source: DisturbanceSource,
    config: DisturbanceConfig,
) -> NDArray[np.float64]:
    torque = np.asarray(source(config), dtype=np.float64)
    if torque.shape != (3,):
        raise ConfigurationError(f"Disturbance torque must be shape (3,), got {torque.shape}")
    return torque


@beartype
def run_simulation(
    model: RigidBodyModel,
    reference_frame: BodyFrame,
    initial_state: InitialState,
    disturbance_config: DisturbanceConfig,
    duration: float | int,
    sampling_period: float | int,
    config: SimConfig | None = None,
) -> SimulationTimeline:
    """Run an attitude simulation of a rigid body.

    Args:
        model: Rigid body model
        reference_frame: Orthonormal inertial reference axes
        initial_state: Angular velocity and quaternion at t = 0
        disturbance_config: Configuration passed to the disturbance source
        duration: Simulated time [s]
        sampling_period: Fixed integration step [s]
        config: Simulation configuration

    Returns:
        Fully populated timeline with floor(duration / sampling_period) + 1 rows

    Raises:
        ConfigurationError: If the run settings or inputs are invalid
        NumericalConstraintError: If the quaternion norm drifts and the
            norm policy is NormPolicy.RAISE
    """
    config = config or SimConfig()

    if not reference_frame.is_orthonormal():
        raise ConfigurationError("Reference frame axes must be orthonormal")

    n = sample_count(duration, sampling_period)
    timeline = SimulationTimeline.allocate(initial_state, sampling_period, n)
    h = float(sampling_period)

    logger.debug("Running attitude simulation: %d samples, step %.6g s", n, h)

    iterator: Any = range(n)
    if config.progress:
        iterator = tqdm(iterator, desc="Simulating", total=n)

    for k in iterator:
        quaternion = timeline.quaternion[k]
        _check_norm(timeline, k, config.norm_policy)

        # Current attitude
        body_frame = body_frame_from_quaternion(quaternion, reference_frame)
        timeline.record_body_frame(k, body_frame)

        disturbance = _query_disturbance(config.disturbance_source, disturbance_config)

        # Time evolution of the system
        if k < n - 1:
            angular_velocity = timeline.angular_velocity[k]

            timeline.angular_velocity[k + 1] = propagate_angular_velocity(
                model, angular_velocity, h, body_frame.as_matrix(), disturbance,
            )
            timeline.quaternion[k + 1] = propagate_quaternion(angular_velocity, quaternion, h)

    if len(timeline.warnings) > 1:
        logger.warning(
            "Quaternion norm outside band at %d of %d samples",
            len(timeline.warnings), n,
        )
    logger.debug(
        "Simulation finished at t=%.6g s with %d norm warnings",
        timeline.final_time, len(timeline.warnings),
    )

    return timeline


# =============================================================================
# Simulator
# =============================================================================


@beartype
@dataclass
class Simulator:
    """Attitude simulator for a fixed spacecraft and environment.

    Example:
        >>> sim = Simulator(model=RigidBodyModel(inertia=np.diag([1.0, 2.0, 3.0])))
        >>> timeline = sim.run(InitialState.at_rest(), duration=10.0, sampling_period=0.1)
    """
    model: RigidBodyModel
    reference_frame: BodyFrame = field(default_factory=BodyFrame.identity)
    disturbance: DisturbanceConfig = field(default_factory=DisturbanceConfig.none)
    config: SimConfig = field(default_factory=SimConfig)

    def run(
        self,
        initial_state: InitialState,
        duration: float | int,
        sampling_period: float | int,
    ) -> SimulationTimeline:
        """Run the simulation from initial_state."""
        return run_simulation(
            self.model,
            self.reference_frame,
            initial_state,
            self.disturbance,
            duration,
            sampling_period,
            config=self.config,
        )
