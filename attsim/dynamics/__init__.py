"""Dynamics module for rigid body attitude simulation.

This module provides the rotational equations of motion, the RK4 integrator
and the attitude state representation.

Example:
    >>> from attsim.dynamics import RigidBodyModel, differential_kinematics
    >>> import numpy as np
    >>>
    >>> model = RigidBodyModel(inertia=np.diag([1.0, 2.0, 3.0]))
    >>> q_dot = differential_kinematics(np.array([0.0, 0.0, 0.1]), np.array([0.0, 0.0, 0.0, 1.0]))
"""

from attsim.dynamics.rigid_body import (
    RigidBodyModel,
    differential_dynamics,
    differential_kinematics,
    kinematics_matrix,
    propagate_angular_velocity,
    propagate_quaternion,
    rk4_step,
)
from attsim.dynamics.state import (
    QUATERNION_NORM_BAND,
    BodyFrame,
    InitialState,
    QuaternionNormCheck,
    ReferenceFrame,
    attitude_change_angle,
    axis_angle_to_quaternion,
    body_frame_from_quaternion,
    check_quaternion_norm,
    normalize_quaternion,
    quaternion_conjugate,
    quaternion_multiply,
    quaternion_to_dcm,
    skew_symmetric,
)

__all__ = [
    # State
    "BodyFrame",
    "ReferenceFrame",
    "InitialState",
    # Frame math
    "skew_symmetric",
    "quaternion_to_dcm",
    "body_frame_from_quaternion",
    # Quaternion utilities
    "QUATERNION_NORM_BAND",
    "QuaternionNormCheck",
    "check_quaternion_norm",
    "normalize_quaternion",
    "quaternion_conjugate",
    "quaternion_multiply",
    "axis_angle_to_quaternion",
    "attitude_change_angle",
    # Rigid body dynamics
    "RigidBodyModel",
    "differential_dynamics",
    "differential_kinematics",
    "kinematics_matrix",
    # Integration
    "rk4_step",
    "propagate_angular_velocity",
    "propagate_quaternion",
]
