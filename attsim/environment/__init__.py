"""Environment models for attitude simulation.

Provides the disturbance torque models queried by the simulation loop.

Example:
    >>> from attsim.environment import DisturbanceConfig, disturbance_torque
    >>>
    >>> tau = disturbance_torque(DisturbanceConfig.none())  # N*m
"""

from attsim.environment.disturbance import (
    DisturbanceConfig,
    DisturbanceModel,
    DisturbanceSource,
    disturbance_torque,
)

__all__ = [
    "DisturbanceConfig",
    "DisturbanceModel",
    "DisturbanceSource",
    "disturbance_torque",
]
