"""Circular orbit geometry and orbit-following reference frames.

Provides the orbit quantities and frame transforms an attitude simulation
needs: circular-orbit rate, speed and period, Keplerian element validation,
and the ECI -> orbital plane -> radial/along-track -> LVLH transform chain.
Rotation kernels are numba-compiled.

Rotation matrices here are passive (frame) rotations: Rz(a) maps coordinates
in a frame into a frame rotated by +a about z.

Key functions:
- angular_velocity / orbital_velocity / orbital_period: circular orbit rates
- eci_to_orbital_plane: ECI -> orbital plane frame
- orbital_plane_to_radial_along_track: orbital plane -> radial/along-track
- radial_along_track_to_lvlh: radial/along-track -> LVLH row ordering

Example:
    >>> from attsim.orbital import CircularOrbit, PeriodUnit, orbital_period
    >>>
    >>> orbit = CircularOrbit(radius=6.878e6, gravitational_parameter=3.986e14)
    >>> print(f"Period: {orbital_period(orbit, PeriodUnit.MINUTE):.1f} min")
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

from attsim.dynamics.state import BodyFrame
from attsim.errors import ConfigurationError

# =============================================================================
# Constants
# =============================================================================

MU_EARTH: float = 3.986e14  # Gravitational parameter [m^3/s^2]
R_EARTH: float = 6370e3  # Mean radius [m]


# =============================================================================
# Data Classes
# =============================================================================


class PeriodUnit(Enum):
    """Unit of orbital period output."""

    SECOND = "second"
    MINUTE = "minute"


@beartype
@dataclass(frozen=True)
class CircularOrbit:
    """Parameters of a circular orbit.

    Attributes:
        radius: Orbit radius [m]
        gravitational_parameter: Standard gravitational parameter mu = GM [m^3/s^2]
    """
    radius: float | int
    gravitational_parameter: float | int = MU_EARTH

    def __post_init__(self) -> None:
        """Validate orbit parameters and store them as floats."""
        if not (self.radius > 0 and np.isfinite(self.radius)):
            raise ConfigurationError(f"Orbit radius must be positive, got {self.radius}")
        if not (self.gravitational_parameter > 0 and np.isfinite(self.gravitational_parameter)):
            raise ConfigurationError(
                f"Gravitational parameter must be positive, got {self.gravitational_parameter}"
            )
        object.__setattr__(self, "radius", float(self.radius))
        object.__setattr__(self, "gravitational_parameter", float(self.gravitational_parameter))

    @classmethod
    def from_altitude(
        cls,
        altitude: float | int,
        gravitational_parameter: float | int = MU_EARTH,
        body_radius: float | int = R_EARTH,
    ) -> "CircularOrbit":
        """Create circular orbit at altitude above the central body surface."""
        return cls(radius=body_radius + altitude, gravitational_parameter=gravitational_parameter)


@beartype
def orbital_elements_errors(
    ascending_node: float | int,
    inclination: float | int,
    semimajor_axis: float | int,
    eccentricity: float | int,
    arg_perigee: float | int,
    true_anomaly: float | int,
) -> list[str]:
    """List the constraints violated by a set of Keplerian elements.

    Angles are in degrees and must lie in [0, 360). An empty list means the
    elements are valid.
    """
    errors = []
    angles = {
        "ascending_node": ascending_node,
        "inclination": inclination,
        "arg_perigee": arg_perigee,
        "true_anomaly": true_anomaly,
    }
    for name, value in angles.items():
        if not (0 <= value < 360):
            errors.append(f"{name} must be in [0, 360) degrees, got {value}")

    if not (semimajor_axis > 0 and np.isfinite(semimajor_axis)):
        errors.append(f"semimajor_axis must be positive, got {semimajor_axis}")
    if not (eccentricity >= 0 and np.isfinite(eccentricity)):
        errors.append(f"eccentricity must be non-negative, got {eccentricity}")

    return errors


@beartype
@dataclass(frozen=True)
class OrbitalElements:
    """Keplerian orbital elements.

    Attributes:
        ascending_node: Right ascension of ascending node [deg]
        inclination: Inclination [deg]
        semimajor_axis: Semimajor axis [m]
        eccentricity: Eccentricity [-]
        arg_perigee: Argument of perigee [deg]
        true_anomaly: True anomaly at epoch [deg]
    """
    ascending_node: float | int
    inclination: float | int
    semimajor_axis: float | int
    eccentricity: float | int
    arg_perigee: float | int
    true_anomaly: float | int

    def __post_init__(self) -> None:
        """Reject out-of-range elements and store them as floats."""
        errors = orbital_elements_errors(
            self.ascending_node,
            self.inclination,
            self.semimajor_axis,
            self.eccentricity,
            self.arg_perigee,
            self.true_anomaly,
        )
        if errors:
            raise ConfigurationError("Invalid orbital elements: " + "; ".join(errors))

        for name in (
            "ascending_node", "inclination", "semimajor_axis",
            "eccentricity", "arg_perigee", "true_anomaly",
        ):
            object.__setattr__(self, name, float(getattr(self, name)))


# =============================================================================
# Core Numba Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _circular_angular_velocity(radius: float, mu: float) -> float:
    """Angular rate of a circular orbit."""
    return np.sqrt(mu / radius**3)


@njit(cache=True, fastmath=True)
def _circular_velocity(radius: float, mu: float) -> float:
    """Speed of a circular orbit."""
    return np.sqrt(mu / radius)


@njit(cache=True, fastmath=True)
def _rotation_x(angle: float) -> NDArray[np.float64]:
    """Passive rotation about x by angle [rad]."""
    c = np.cos(angle)
    s = np.sin(angle)
    m = np.zeros((3, 3))
    m[0, 0] = 1.0
    m[1, 1] = c
    m[1, 2] = s
    m[2, 1] = -s
    m[2, 2] = c
    return m


@njit(cache=True, fastmath=True)
def _rotation_z(angle: float) -> NDArray[np.float64]:
    """Passive rotation about z by angle [rad]."""
    c = np.cos(angle)
    s = np.sin(angle)
    m = np.zeros((3, 3))
    m[0, 0] = c
    m[0, 1] = s
    m[1, 0] = -s
    m[1, 1] = c
    m[2, 2] = 1.0
    return m


# =============================================================================
# Python API Functions
# =============================================================================


@beartype
def angular_velocity(orbit: CircularOrbit) -> float:
    """Angular rate of a circular orbit sqrt(mu / r^3) [rad/s]."""
    return float(_circular_angular_velocity(orbit.radius, orbit.gravitational_parameter))


@beartype
def orbital_velocity(orbit: CircularOrbit) -> float:
    """Speed of a circular orbit sqrt(mu / r) [m/s]. This is not the angular rate."""
    return float(_circular_velocity(orbit.radius, orbit.gravitational_parameter))


@beartype
def orbital_period(orbit: CircularOrbit, unit: PeriodUnit | str = PeriodUnit.SECOND) -> float:
    """Time period of a circular orbit.

    Args:
        orbit: Circular orbit
        unit: PeriodUnit.SECOND or PeriodUnit.MINUTE ("second"/"minute" accepted)

    Returns:
        Orbit period in the requested unit

    Raises:
        ConfigurationError: If unit is not a recognized period unit
    """
    try:
        unit = PeriodUnit(unit)
    except ValueError as err:
        raise ConfigurationError(f"Unknown period unit {unit!r}") from err

    period = 2 * np.pi / angular_velocity(orbit)

    if unit is PeriodUnit.MINUTE:
        return period / 60
    return period


@beartype
def eci_to_orbital_plane(elements: OrbitalElements) -> NDArray[np.float64]:
    """Transformation matrix from ECI to the orbital plane frame.

    Rx(inclination) @ Rz(ascending node).
    """
    inclination = np.radians(elements.inclination)
    ascending_node = np.radians(elements.ascending_node)
    return _rotation_x(inclination) @ _rotation_z(ascending_node)


@beartype
def orbital_plane_to_radial_along_track(
    elements: OrbitalElements,
    orbit_rate: float | int,
    time: float | int,
) -> NDArray[np.float64]:
    """Transformation matrix from the orbital plane frame to radial/along-track.

    Args:
        elements: Orbital elements (true anomaly gives the epoch position)
        orbit_rate: Orbit angular rate [rad/s]
        time: Time since epoch [s]
    """
    # angle of spacecraft from the ascending axis of the orbital plane frame
    position_angle = np.radians(elements.true_anomaly) + orbit_rate * time
    return _rotation_z(position_angle)


@beartype
def radial_along_track_to_lvlh(C: NDArray[np.float64]) -> NDArray[np.float64]:
    """Reorder radial/along-track/cross-track rows into the LVLH convention.

    New rows: (row 2, -row 3, -row 1) of C.
    """
    if C.shape != (3, 3):
        raise ConfigurationError(f"Transformation matrix must be shape (3, 3), got {C.shape}")
    return np.vstack([C[1, :], -C[2, :], -C[0, :]])


@beartype
def eci_to_lvlh(
    elements: OrbitalElements,
    orbit_rate: float | int,
    time: float | int,
) -> NDArray[np.float64]:
    """Transformation matrix from ECI to LVLH at time since epoch [s]."""
    radial_along_track = orbital_plane_to_radial_along_track(elements, orbit_rate, time)
    return radial_along_track_to_lvlh(radial_along_track) @ eci_to_orbital_plane(elements)


@beartype
def lvlh_frame(
    elements: OrbitalElements,
    orbit_rate: float | int,
    time: float | int = 0.0,
) -> BodyFrame:
    """LVLH axes expressed in ECI coordinates.

    Usable as the reference frame of an attitude simulation.
    """
    C = eci_to_lvlh(elements, orbit_rate, time)
    return BodyFrame(x=C[0, :], y=C[1, :], z=C[2, :])
