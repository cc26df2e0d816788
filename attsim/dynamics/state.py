"""Attitude state representation and frame math.

Quaternion convention:
- Scalar-last: q = [q1, q2, q3, q4] where q4 is the scalar part
- quaternion_to_dcm(q) maps inertial coordinates to body coordinates

Body frames are a single ordered triple of axis vectors (x, y, z) expressed
in inertial coordinates. The inertial reference frame uses the same type.
"""

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from attsim.errors import ConfigurationError

# Accepted band for ||q||^2 when a quaternion is consumed
QUATERNION_NORM_BAND: tuple[float, float] = (0.995, 1.005)


# =============================================================================
# Quaternion Utilities
# =============================================================================


@beartype
def normalize_quaternion(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Normalize a quaternion to unit length."""
    norm = np.linalg.norm(q)
    if norm < 1e-10:
        return np.array([0.0, 0.0, 0.0, 1.0])
    return q / norm


@beartype
def quaternion_multiply(p: NDArray[np.float64], q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Multiply two scalar-last quaternions (Hamilton product p * q)."""
    x1, y1, z1, w1 = p
    x2, y2, z2, w2 = q

    return np.array([
        w1*x2 + x1*w2 + y1*z2 - z1*y2,
        w1*y2 - x1*z2 + y1*w2 + z1*x2,
        w1*z2 + x1*y2 - y1*x2 + z1*w2,
        w1*w2 - x1*x2 - y1*y2 - z1*z2,
    ])


@beartype
def quaternion_conjugate(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Compute quaternion conjugate (inverse for unit quaternions)."""
    return np.array([-q[0], -q[1], -q[2], q[3]])


@beartype
def axis_angle_to_quaternion(axis: NDArray[np.float64], angle: float | int) -> NDArray[np.float64]:
    """Build a scalar-last quaternion from a rotation axis and angle.

    Args:
        axis: Rotation axis (normalized internally)
        angle: Rotation angle [rad]

    Returns:
        Unit quaternion [q1, q2, q3, q4]
    """
    norm = np.linalg.norm(axis)
    if norm < 1e-12:
        raise ConfigurationError("Rotation axis must be non-zero")
    e = axis / norm
    s = np.sin(angle / 2)
    return np.array([e[0] * s, e[1] * s, e[2] * s, np.cos(angle / 2)])


@beartype
def attitude_change_angle(q_from: NDArray[np.float64], q_to: NDArray[np.float64]) -> float:
    """Rotation angle between two attitudes [rad], in [0, pi].

    Both quaternions are normalized first, so drifted quaternions from a
    timeline can be compared directly.
    """
    delta = quaternion_multiply(
        quaternion_conjugate(normalize_quaternion(q_from)),
        normalize_quaternion(q_to),
    )
    return float(2 * np.arctan2(np.linalg.norm(delta[:3]), abs(delta[3])))


class QuaternionNormCheck(NamedTuple):
    """Outcome of a quaternion norm check."""
    norm_squared: float
    within_tolerance: bool


@beartype
def check_quaternion_norm(q: NDArray[np.float64]) -> QuaternionNormCheck:
    """Check ||q||^2 against QUATERNION_NORM_BAND."""
    norm_squared = float(q[0]**2 + q[1]**2 + q[2]**2 + q[3]**2)
    lo, hi = QUATERNION_NORM_BAND
    return QuaternionNormCheck(norm_squared, lo <= norm_squared <= hi)


# =============================================================================
# Frame Math
# =============================================================================


@beartype
def skew_symmetric(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Skew-symmetric matrix M such that M @ x == cross(v, x)."""
    return np.array([
        [0.0, -v[2], v[1]],
        [v[2], 0.0, -v[0]],
        [-v[1], v[0], 0.0],
    ])


@beartype
def quaternion_to_dcm(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert a scalar-last quaternion to a Direction Cosine Matrix.

    The quaternion is used as given (not normalized). Callers that need the
    norm constraint enforced use check_quaternion_norm first.

    Args:
        q: Quaternion [q1, q2, q3, q4] representing the inertial-to-body rotation

    Returns:
        3x3 DCM that transforms vectors from inertial to body coordinates
    """
    q1, q2, q3, q4 = q

    return np.array([
        [q1**2 - q2**2 - q3**2 + q4**2, 2*(q1*q2 + q3*q4), 2*(q1*q3 - q2*q4)],
        [2*(q2*q1 - q3*q4), q2**2 - q3**2 - q1**2 + q4**2, 2*(q2*q3 + q1*q4)],
        [2*(q3*q1 + q2*q4), 2*(q3*q2 - q1*q4), q3**2 - q1**2 - q2**2 + q4**2],
    ])


# =============================================================================
# State Classes
# =============================================================================


def _as_vector(value: NDArray[np.float64], size: int, name: str) -> NDArray[np.float64]:
    arr = np.array(value, dtype=np.float64)
    if arr.shape != (size,):
        raise ConfigurationError(f"{name} must be shape ({size},), got {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ConfigurationError(f"{name} must be finite, got {arr}")
    arr.setflags(write=False)
    return arr


@beartype
@dataclass(frozen=True)
class BodyFrame:
    """Ordered triple of axis vectors expressed in inertial coordinates.

    Attributes:
        x: First axis
        y: Second axis
        z: Third axis
    """
    x: NDArray[np.float64]
    y: NDArray[np.float64]
    z: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Copy axes into read-only float arrays and validate shapes."""
        for name in ("x", "y", "z"):
            object.__setattr__(self, name, _as_vector(getattr(self, name), 3, f"Axis {name}"))

    @classmethod
    def identity(cls) -> "BodyFrame":
        """Inertial frame with canonical unit axes."""
        return cls(
            x=np.array([1.0, 0.0, 0.0]),
            y=np.array([0.0, 1.0, 0.0]),
            z=np.array([0.0, 0.0, 1.0]),
        )

    @classmethod
    def from_matrix(cls, matrix: NDArray[np.float64]) -> "BodyFrame":
        """Create frame from a 3x3 matrix whose columns are the axes."""
        if matrix.shape != (3, 3):
            raise ConfigurationError(f"Frame matrix must be shape (3, 3), got {matrix.shape}")
        return cls(x=matrix[:, 0], y=matrix[:, 1], z=matrix[:, 2])

    def as_matrix(self) -> NDArray[np.float64]:
        """Stack axes as columns [x y z]."""
        return np.column_stack([self.x, self.y, self.z])

    def is_orthonormal(self, atol: float | int = 1e-6) -> bool:
        """Whether the axes form an orthonormal set."""
        m = self.as_matrix()
        return bool(np.allclose(m.T @ m, np.eye(3), atol=atol))

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __getitem__(self, index: int) -> NDArray[np.float64]:
        return (self.x, self.y, self.z)[index]


# Inertial reference axes share the body-frame representation
ReferenceFrame = BodyFrame


@beartype
def body_frame_from_quaternion(
    q: NDArray[np.float64],
    reference: BodyFrame,
) -> BodyFrame:
    """Body axes for attitude q, composed with the fixed reference axes."""
    dcm = quaternion_to_dcm(q)
    return BodyFrame(x=dcm @ reference.x, y=dcm @ reference.y, z=dcm @ reference.z)


@beartype
@dataclass(frozen=True)
class InitialState:
    """Initial conditions of an attitude simulation.

    Attributes:
        angular_velocity: Body rate relative to inertial frame [rad/s]
        quaternion: Attitude quaternion [q1, q2, q3, q4] (scalar-last)
    """
    angular_velocity: NDArray[np.float64]
    quaternion: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Validate vector shapes."""
        object.__setattr__(
            self, "angular_velocity",
            _as_vector(self.angular_velocity, 3, "Angular velocity"),
        )
        object.__setattr__(self, "quaternion", _as_vector(self.quaternion, 4, "Quaternion"))

    @classmethod
    def at_rest(cls) -> "InitialState":
        """Zero body rate with body axes aligned to the reference frame."""
        return cls(
            angular_velocity=np.zeros(3),
            quaternion=np.array([0.0, 0.0, 0.0, 1.0]),
        )
