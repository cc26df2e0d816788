"""Disturbance torque models for attitude simulation.

The simulation queries a disturbance source once per step for the torque
acting on the spacecraft. The torque is a pure function of the disturbance
configuration.

Models available:
- None: No disturbance torque
- Constant: Fixed torque vector

Example:
    >>> from attsim.environment import DisturbanceConfig, disturbance_torque
    >>>
    >>> config = DisturbanceConfig.constant(np.array([0.0, 0.0, 1e-4]))
    >>> tau = disturbance_torque(config)  # [N*m]
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from attsim.errors import ConfigurationError

# =============================================================================
# Disturbance Model Enum
# =============================================================================


class DisturbanceModel(Enum):
    """Available disturbance torque models."""

    NONE = auto()      # Torque-free motion
    CONSTANT = auto()  # Fixed torque vector


# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass(frozen=True)
class DisturbanceConfig:
    """Disturbance torque configuration.

    Attributes:
        model: Disturbance model type
        constant_torque: Torque for the CONSTANT model [N*m]
    """
    model: DisturbanceModel = DisturbanceModel.NONE
    constant_torque: NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        """Validate torque vector."""
        torque = np.array(self.constant_torque, dtype=np.float64)
        if torque.shape != (3,):
            raise ConfigurationError(f"Disturbance torque must be shape (3,), got {torque.shape}")
        if not np.all(np.isfinite(torque)):
            raise ConfigurationError("Disturbance torque must be finite")
        torque.setflags(write=False)
        object.__setattr__(self, "constant_torque", torque)

    @classmethod
    def none(cls) -> "DisturbanceConfig":
        """Torque-free configuration."""
        return cls(model=DisturbanceModel.NONE)

    @classmethod
    def constant(cls, torque: NDArray[np.float64]) -> "DisturbanceConfig":
        """Constant torque configuration."""
        return cls(model=DisturbanceModel.CONSTANT, constant_torque=torque)


# =============================================================================
# Disturbance Sources
# =============================================================================


# Any callable mapping a configuration to a torque vector [N*m]
DisturbanceSource = Callable[[DisturbanceConfig], NDArray[np.float64]]


@beartype
def disturbance_torque(config: DisturbanceConfig) -> NDArray[np.float64]:
    """Disturbance torque for the configured model.

    Args:
        config: Disturbance configuration

    Returns:
        Torque vector [N*m]
    """
    if config.model == DisturbanceModel.NONE:
        return np.zeros(3)
    elif config.model == DisturbanceModel.CONSTANT:
        return np.array(config.constant_torque)
    else:
        raise ConfigurationError(f"Unknown disturbance model: {config.model}")
