"""Unit tests for circular orbit geometry and orbit frames.

Tests the orbit rate/period functions, element validation, and the
ECI -> orbital plane -> radial/along-track -> LVLH transform chain.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from attsim.dynamics.state import axis_angle_to_quaternion, quaternion_to_dcm
from attsim.errors import ConfigurationError
from attsim.orbital import (
    MU_EARTH,
    R_EARTH,
    CircularOrbit,
    OrbitalElements,
    PeriodUnit,
    angular_velocity,
    eci_to_lvlh,
    eci_to_orbital_plane,
    lvlh_frame,
    orbital_elements_errors,
    orbital_period,
    orbital_plane_to_radial_along_track,
    orbital_velocity,
    radial_along_track_to_lvlh,
)

VALID_ELEMENTS = {
    "ascending_node": 30.0,
    "inclination": 51.6,
    "semimajor_axis": 6.878e6,
    "eccentricity": 0.0,
    "arg_perigee": 0.0,
    "true_anomaly": 45.0,
}


def make_elements(**overrides) -> OrbitalElements:
    return OrbitalElements(**{**VALID_ELEMENTS, **overrides})


# =============================================================================
# Circular Orbit Tests
# =============================================================================


class TestCircularOrbit:
    """Test circular orbit construction and rates."""

    def test_angular_velocity(self):
        """Rate is sqrt(mu / r^3)."""
        orbit = CircularOrbit(radius=6.37e6, gravitational_parameter=3.986e14)
        assert_allclose(angular_velocity(orbit), np.sqrt(3.986e14 / 6.37e6**3), rtol=1e-12)
        assert_allclose(angular_velocity(orbit), 1.2418e-3, rtol=1e-4)

    def test_period_at_earth_radius(self):
        """Orbit skimming the surface takes about 84 minutes."""
        orbit = CircularOrbit(radius=6.37e6, gravitational_parameter=3.986e14)
        assert_allclose(orbital_period(orbit, PeriodUnit.MINUTE), 84.33, rtol=1e-3)

    def test_low_earth_orbit_rate_and_period(self):
        """About 500 km altitude: ~1.107e-3 rad/s and ~94.6 minutes."""
        orbit = CircularOrbit(radius=6.877e6, gravitational_parameter=3.986e14)
        assert_allclose(angular_velocity(orbit), 1.1068e-3, rtol=1e-3)
        assert_allclose(orbital_period(orbit, PeriodUnit.MINUTE), 94.6, rtol=1e-3)

    def test_orbital_velocity(self):
        """Speed is sqrt(mu / r) and equals rate times radius."""
        orbit = CircularOrbit(radius=6.37e6, gravitational_parameter=3.986e14)
        assert_allclose(orbital_velocity(orbit), 7910.41, rtol=1e-5)
        assert_allclose(orbital_velocity(orbit), angular_velocity(orbit) * orbit.radius, rtol=1e-12)

    def test_period_units_consistent(self):
        """Seconds / 60 equals minutes."""
        for radius in (6.5e6, 7.0e6, 4.2e7):
            orbit = CircularOrbit(radius=radius)
            seconds = orbital_period(orbit, PeriodUnit.SECOND)
            minutes = orbital_period(orbit, PeriodUnit.MINUTE)
            assert_allclose(seconds / 60, minutes, rtol=1e-14)

    def test_period_default_unit_is_seconds(self):
        orbit = CircularOrbit(radius=7.0e6)
        assert orbital_period(orbit) == orbital_period(orbit, PeriodUnit.SECOND)

    def test_period_string_units(self):
        orbit = CircularOrbit(radius=7.0e6)
        assert orbital_period(orbit, "minute") == orbital_period(orbit, PeriodUnit.MINUTE)
        assert orbital_period(orbit, "second") == orbital_period(orbit, PeriodUnit.SECOND)

    def test_period_unknown_unit(self):
        orbit = CircularOrbit(radius=7.0e6)
        with pytest.raises(ConfigurationError):
            orbital_period(orbit, "hour")

    def test_geostationary_period(self):
        """Geostationary radius gives one sidereal day."""
        orbit = CircularOrbit(radius=42164e3, gravitational_parameter=3.986004418e14)
        assert_allclose(orbital_period(orbit), 86164.1, rtol=1e-4)

    def test_integer_radius(self):
        """Whole-number radius and mu give the same rates as floats."""
        orbit = CircularOrbit(radius=7000000, gravitational_parameter=398600000000000)
        assert isinstance(orbit.radius, float)
        expected = CircularOrbit(radius=7.0e6, gravitational_parameter=3.986e14)
        assert_allclose(angular_velocity(orbit), angular_velocity(expected), rtol=1e-14)
        assert_allclose(orbital_period(orbit), orbital_period(expected), rtol=1e-14)

    @pytest.mark.parametrize("radius", [0, -7000000])
    def test_invalid_integer_radius(self, radius):
        with pytest.raises(ConfigurationError):
            CircularOrbit(radius=radius)

    def test_from_altitude(self):
        orbit = CircularOrbit.from_altitude(500e3)
        assert_allclose(orbit.radius, R_EARTH + 500e3)
        assert orbit.gravitational_parameter == MU_EARTH

    @pytest.mark.parametrize(
        "radius, mu",
        [(-1.0, 3.986e14), (0.0, 3.986e14), (7.0e6, -1.0), (7.0e6, 0.0), (np.inf, 3.986e14)],
    )
    def test_invalid(self, radius, mu):
        with pytest.raises(ConfigurationError):
            CircularOrbit(radius=radius, gravitational_parameter=mu)


# =============================================================================
# Orbital Elements Tests
# =============================================================================


class TestOrbitalElements:
    """Test Keplerian element validation."""

    def test_valid(self):
        elements = make_elements()
        assert elements.inclination == 51.6

    def test_boundaries(self):
        """Zero angles and zero eccentricity are allowed; 360 is not."""
        make_elements(ascending_node=0.0, inclination=0.0, arg_perigee=0.0, true_anomaly=0.0)
        make_elements(true_anomaly=359.999)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("ascending_node", 360.0),
            ("inclination", -1.0),
            ("semimajor_axis", 0.0),
            ("eccentricity", -0.1),
            ("arg_perigee", 400.0),
            ("true_anomaly", 360.0),
            ("inclination", float("nan")),
        ],
    )
    def test_invalid(self, field, value):
        with pytest.raises(ConfigurationError, match=field):
            make_elements(**{field: value})

    def test_integer_values(self):
        """Whole-number elements are accepted and stored as floats."""
        elements = OrbitalElements(
            ascending_node=0, inclination=45, semimajor_axis=7000000,
            eccentricity=0, arg_perigee=0, true_anomaly=90,
        )
        assert elements.inclination == 45.0
        assert isinstance(elements.semimajor_axis, float)
        c = np.cos(np.pi / 4)
        assert_allclose(eci_to_orbital_plane(elements)[1], [0.0, c, c], atol=1e-12)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("ascending_node", 360),
            ("inclination", -1),
            ("semimajor_axis", 0),
            ("eccentricity", -1),
            ("arg_perigee", 400),
            ("true_anomaly", 360),
        ],
    )
    def test_invalid_integer_values(self, field, value):
        with pytest.raises(ConfigurationError, match=field):
            make_elements(**{field: value})

    def test_errors_listed(self):
        """Every violated constraint is reported."""
        errors = orbital_elements_errors(400.0, -1.0, 0.0, -0.1, 10.0, 20.0)
        assert len(errors) == 4

    def test_no_errors(self):
        assert orbital_elements_errors(**VALID_ELEMENTS) == []

    def test_immutable(self):
        elements = make_elements()
        with pytest.raises(AttributeError):
            elements.inclination = 10.0


# =============================================================================
# Frame Transform Tests
# =============================================================================


class TestEciToOrbitalPlane:
    """Test ECI to orbital plane transformation."""

    def test_equatorial_identity(self):
        elements = make_elements(ascending_node=0.0, inclination=0.0)
        assert_allclose(eci_to_orbital_plane(elements), np.eye(3), atol=1e-15)

    def test_polar_orbit(self):
        """90 degree inclination rotates the frame about x."""
        elements = make_elements(ascending_node=0.0, inclination=90.0)
        expected = np.array([
            [1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0],
            [0.0, -1.0, 0.0],
        ])
        assert_allclose(eci_to_orbital_plane(elements), expected, atol=1e-12)

    def test_ascending_node_rotation(self):
        """Node rotation about z matches the quaternion DCM for the same rotation."""
        elements = make_elements(ascending_node=30.0, inclination=0.0)
        q = axis_angle_to_quaternion(np.array([0.0, 0.0, 1.0]), np.radians(30.0))
        assert_allclose(eci_to_orbital_plane(elements), quaternion_to_dcm(q), atol=1e-12)

    def test_composition_order(self):
        """Rx(i) applied after Rz(node)."""
        elements = make_elements(ascending_node=40.0, inclination=60.0)
        node = np.radians(40.0)
        inc = np.radians(60.0)
        Rz = np.array([
            [np.cos(node), np.sin(node), 0.0],
            [-np.sin(node), np.cos(node), 0.0],
            [0.0, 0.0, 1.0],
        ])
        Rx = np.array([
            [1.0, 0.0, 0.0],
            [0.0, np.cos(inc), np.sin(inc)],
            [0.0, -np.sin(inc), np.cos(inc)],
        ])
        assert_allclose(eci_to_orbital_plane(elements), Rx @ Rz, atol=1e-12)

    def test_orbit_normal(self):
        """Third row is the orbit normal in ECI coordinates."""
        elements = make_elements(ascending_node=0.0, inclination=90.0)
        assert_allclose(eci_to_orbital_plane(elements)[2], [0.0, -1.0, 0.0], atol=1e-12)


class TestRadialAlongTrack:
    """Test orbital plane to radial/along-track transformation."""

    def test_true_anomaly_at_epoch(self):
        elements = make_elements(true_anomaly=90.0)
        expected = np.array([
            [0.0, 1.0, 0.0],
            [-1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0],
        ])
        assert_allclose(orbital_plane_to_radial_along_track(elements, 1e-3, 0.0), expected, atol=1e-12)

    def test_advances_with_orbit_rate(self):
        """After a quarter period the spacecraft has moved 90 degrees."""
        orbit = CircularOrbit(radius=7.0e6)
        rate = angular_velocity(orbit)
        quarter = orbital_period(orbit) / 4

        at_quarter = orbital_plane_to_radial_along_track(make_elements(true_anomaly=0.0), rate, quarter)
        at_epoch = orbital_plane_to_radial_along_track(make_elements(true_anomaly=90.0), rate, 0.0)

        assert_allclose(at_quarter, at_epoch, atol=1e-12)


class TestLvlh:
    """Test the LVLH row ordering and composed transforms."""

    def test_row_permutation(self):
        """Rows become (row 2, -row 3, -row 1)."""
        C = np.arange(9.0).reshape(3, 3)
        expected = np.array([
            [3.0, 4.0, 5.0],
            [-6.0, -7.0, -8.0],
            [0.0, -1.0, -2.0],
        ])
        assert_allclose(radial_along_track_to_lvlh(C), expected, atol=0)

    def test_wrong_shape(self):
        with pytest.raises(ConfigurationError):
            radial_along_track_to_lvlh(np.eye(2))

    def test_right_handed(self):
        """LVLH from a rotation matrix is itself a proper rotation."""
        elements = make_elements()
        C = eci_to_lvlh(elements, 1.1e-3, 1234.0)
        assert_allclose(C @ C.T, np.eye(3), atol=1e-12)
        assert_allclose(np.linalg.det(C), 1.0, atol=1e-12)

    def test_equatorial_epoch(self):
        """x along track, y against orbit normal, z toward nadir."""
        elements = make_elements(ascending_node=0.0, inclination=0.0, true_anomaly=90.0)
        frame = lvlh_frame(elements, 1e-3)

        # Spacecraft on +Y moving toward -X
        assert_allclose(frame.x, [-1.0, 0.0, 0.0], atol=1e-12)
        assert_allclose(frame.y, [0.0, 0.0, -1.0], atol=1e-12)
        assert_allclose(frame.z, [0.0, -1.0, 0.0], atol=1e-12)

    def test_frame_is_orthonormal(self):
        frame = lvlh_frame(make_elements(), 1.1e-3, 100.0)
        assert frame.is_orthonormal()
