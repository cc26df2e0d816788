"""Rigid body rotational equations of motion.

Implements the attitude equations of a rigid spacecraft and the fixed-step
integrator used to propagate them.

The equations use:
- Euler's rigid-body equation written with the body axes expressed in the
  inertial frame: w_dot = I^-1 (tau - C^T I [w]x C C^T w)
- Quaternion kinematics (scalar-last): q_dot = 1/2 Omega(w) q

Each equation is advanced with its own classical RK4 step. The angular
velocity step freezes the body frame and disturbance torque over all four
stages; the quaternion step freezes the angular velocity at its value at the
start of the step.

Example:
    >>> import numpy as np
    >>> from attsim.dynamics import RigidBodyModel, propagate_angular_velocity
    >>>
    >>> model = RigidBodyModel(inertia=np.diag([1.0, 2.0, 3.0]))
    >>> w = np.array([0.0, 0.0, 0.1])
    >>> w_next = propagate_angular_velocity(model, w, 0.1, np.eye(3), np.zeros(3))
"""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from attsim.dynamics.state import skew_symmetric
from attsim.errors import ConfigurationError

# =============================================================================
# Rigid Body Model
# =============================================================================


@beartype
@dataclass(frozen=True)
class RigidBodyModel:
    """Rigid body spacecraft model.

    Attributes:
        inertia: 3x3 symmetric positive-definite inertia tensor [kg*m^2]
    """
    inertia: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Validate the inertia tensor and freeze it."""
        inertia = np.array(self.inertia, dtype=np.float64)

        if inertia.shape != (3, 3):
            raise ConfigurationError(f"Inertia must be shape (3, 3), got {inertia.shape}")
        if not np.all(np.isfinite(inertia)):
            raise ConfigurationError("Inertia must be finite")

        scale = max(float(np.max(np.abs(inertia))), 1e-300)
        if not np.allclose(inertia, inertia.T, rtol=0.0, atol=1e-9 * scale):
            raise ConfigurationError("Inertia must be symmetric")

        eigenvalues = np.linalg.eigvalsh(inertia)
        if eigenvalues[0] <= 1e-12 * scale:
            raise ConfigurationError(
                f"Inertia must be positive definite (non-singular), eigenvalues {eigenvalues}"
            )

        inertia.setflags(write=False)
        object.__setattr__(self, "inertia", inertia)

    @classmethod
    def from_principal(
        cls,
        ixx: float | int,
        iyy: float | int,
        izz: float | int,
    ) -> "RigidBodyModel":
        """Create model with a diagonal inertia tensor."""
        return cls(inertia=np.diag([ixx, iyy, izz]).astype(np.float64))

    def angular_momentum(self, angular_velocity: NDArray[np.float64]) -> NDArray[np.float64]:
        """Body-frame angular momentum H = I w [kg*m^2/s]."""
        return self.inertia @ angular_velocity

    def rotational_energy(self, angular_velocity: NDArray[np.float64]) -> float:
        """Rotational kinetic energy 1/2 w.I.w [J]."""
        return float(0.5 * angular_velocity @ self.inertia @ angular_velocity)


# =============================================================================
# Equations of Motion
# =============================================================================


@beartype
def differential_dynamics(
    model: RigidBodyModel,
    angular_velocity: NDArray[np.float64],
    body_frame_matrix: NDArray[np.float64],
    disturbance: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Compute angular acceleration of the rigid body.

    Args:
        model: Rigid body model
        angular_velocity: Body rate relative to inertial frame [rad/s]
        body_frame_matrix: 3x3 matrix whose columns are the body axes
        disturbance: Disturbance torque [N*m]

    Returns:
        Angular acceleration d(w)/dt [rad/s^2]
    """
    C = body_frame_matrix
    gyroscopic = C.T @ model.inertia @ skew_symmetric(angular_velocity) @ C @ C.T @ angular_velocity

    return np.linalg.solve(model.inertia, disturbance - gyroscopic)


@beartype
def kinematics_matrix(angular_velocity: NDArray[np.float64]) -> NDArray[np.float64]:
    """4x4 quaternion kinematics matrix Omega(w), scalar-last convention."""
    w1, w2, w3 = angular_velocity

    return np.array([
        [0.0, w3, -w2, w1],
        [-w3, 0.0, w1, w2],
        [w2, -w1, 0.0, w3],
        [-w1, -w2, -w3, 0.0],
    ])


@beartype
def differential_kinematics(
    angular_velocity: NDArray[np.float64],
    quaternion: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Compute quaternion time derivative from angular velocity.

    Args:
        angular_velocity: Body rate [rad/s]
        quaternion: Current quaternion [q1, q2, q3, q4]

    Returns:
        Quaternion derivative dq/dt
    """
    return 0.5 * kinematics_matrix(angular_velocity) @ quaternion


# =============================================================================
# Integration
# =============================================================================


@beartype
def rk4_step(
    f: Callable[..., NDArray[np.float64]],
    x0: NDArray[np.float64],
    h: float | int,
    *args,
) -> NDArray[np.float64]:
    """Perform one classical RK4 step of x' = f(x, *args).

    Extra positional arguments are passed unchanged to every stage.

    Args:
        f: Derivative function f(x, *args)
        x0: State at start of step
        h: Step size [s]

    Returns:
        State at end of step
    """
    k1 = f(x0, *args)
    k2 = f(x0 + h/2 * k1, *args)
    k3 = f(x0 + h/2 * k2, *args)
    k4 = f(x0 + h * k3, *args)

    return x0 + h/6 * (k1 + 2*k2 + 2*k3 + k4)


@beartype
def propagate_angular_velocity(
    model: RigidBodyModel,
    angular_velocity: NDArray[np.float64],
    h: float | int,
    body_frame_matrix: NDArray[np.float64],
    disturbance: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Angular velocity after one step with body frame and torque held fixed."""
    def f(w: NDArray[np.float64]) -> NDArray[np.float64]:
        return differential_dynamics(model, w, body_frame_matrix, disturbance)

    return rk4_step(f, angular_velocity, h)


@beartype
def propagate_quaternion(
    angular_velocity: NDArray[np.float64],
    quaternion: NDArray[np.float64],
    h: float | int,
) -> NDArray[np.float64]:
    """Quaternion after one step with angular velocity held at its step-start value.

    The result is not renormalized.
    """
    def f(q: NDArray[np.float64]) -> NDArray[np.float64]:
        return differential_kinematics(angular_velocity, q)

    return rk4_step(f, quaternion, h)
