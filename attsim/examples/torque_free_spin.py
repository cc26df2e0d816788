#!/usr/bin/env python
"""Spin of a rigid spacecraft with and without a disturbance torque.

Spins a body about its major principal axis, first torque-free and then
under a constant torque about the spin axis, and reports the body rate,
momentum and quaternion norm drift.
"""

import numpy as np

from attsim.dynamics import BodyFrame, InitialState, RigidBodyModel
from attsim.environment import DisturbanceConfig
from attsim.simulation import run_simulation


def main() -> None:
    model = RigidBodyModel.from_principal(1.0, 2.0, 3.0)
    initial = InitialState(
        angular_velocity=np.array([0.0, 0.0, 0.1]),
        quaternion=np.array([0.0, 0.0, 0.0, 1.0]),
    )

    cases = {
        "torque-free": DisturbanceConfig.none(),
        "constant torque": DisturbanceConfig.constant(np.array([0.0, 0.0, 0.03])),
    }

    for name, disturbance in cases.items():
        timeline = run_simulation(
            model, BodyFrame.identity(), initial, disturbance,
            duration=30.0, sampling_period=0.01,
        )

        h0 = np.linalg.norm(model.angular_momentum(timeline.angular_velocity[0]))
        h1 = np.linalg.norm(model.angular_momentum(timeline.angular_velocity[-1]))

        print(f"=== Spin, {name} ===")
        print(f"  Samples:              {len(timeline)}")
        print(f"  Final time:           {timeline.final_time:.2f} s")
        print(f"  Final body rate:      {timeline.angular_velocity[-1]} rad/s")
        print(f"  |H| change:           {h1 - h0:.3e} kg*m^2/s")
        print(f"  Energy:               {model.rotational_energy(timeline.angular_velocity[-1]):.4e} J")
        print(f"  Final body x axis:    {timeline.body_frames[-1].x}")
        print(f"  Max quaternion error: {np.max(np.abs(timeline.quaternion_norms() - 1.0)):.3e}")
        print()


if __name__ == "__main__":
    main()
