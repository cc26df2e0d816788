"""Unit tests for disturbance torque models."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from attsim.environment import DisturbanceConfig, DisturbanceModel, disturbance_torque
from attsim.errors import ConfigurationError


class TestDisturbanceConfig:
    """Test disturbance configuration."""

    def test_default_is_torque_free(self):
        config = DisturbanceConfig()
        assert config.model == DisturbanceModel.NONE
        assert_allclose(config.constant_torque, 0.0)

    def test_constant(self):
        config = DisturbanceConfig.constant(np.array([1e-4, 0.0, -2e-4]))
        assert config.model == DisturbanceModel.CONSTANT
        assert_allclose(config.constant_torque, [1e-4, 0.0, -2e-4])

    def test_torque_copied_and_read_only(self):
        torque = np.array([1.0, 2.0, 3.0])
        config = DisturbanceConfig.constant(torque)
        torque[0] = 100.0

        assert config.constant_torque[0] == 1.0
        with pytest.raises(ValueError):
            config.constant_torque[0] = 5.0

    @pytest.mark.parametrize(
        "torque",
        [np.zeros(2), np.zeros((3, 1)), np.array([0.0, np.nan, 0.0]), np.array([np.inf, 0.0, 0.0])],
    )
    def test_invalid_torque(self, torque):
        with pytest.raises(ConfigurationError):
            DisturbanceConfig.constant(torque)


class TestDisturbanceTorque:
    """Test the default disturbance source."""

    def test_none(self):
        assert_allclose(disturbance_torque(DisturbanceConfig.none()), np.zeros(3), atol=0)

    def test_none_ignores_stored_torque(self):
        config = DisturbanceConfig(model=DisturbanceModel.NONE, constant_torque=np.ones(3))
        assert_allclose(disturbance_torque(config), np.zeros(3), atol=0)

    def test_constant(self):
        config = DisturbanceConfig.constant(np.array([0.0, 0.0, 0.03]))
        assert_allclose(disturbance_torque(config), [0.0, 0.0, 0.03], atol=0)

    def test_pure_function(self):
        """Repeated queries give the same torque and are independent copies."""
        config = DisturbanceConfig.constant(np.array([1.0, 2.0, 3.0]))
        first = disturbance_torque(config)
        first[0] = 0.0
        assert_allclose(disturbance_torque(config), [1.0, 2.0, 3.0], atol=0)
