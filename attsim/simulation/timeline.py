"""Fixed-length output timeline of an attitude simulation.

The timeline is allocated once from the initial state, the sampling period
and the sample count, then filled by the simulation loop in increasing
index order. It is never resized.

Rows hold:
- time [s]
- angular velocity (3) [rad/s]
- quaternion (4), scalar-last
- body frame (axes in inertial coordinates), recorded each step
"""

from dataclasses import dataclass, field

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from attsim.dynamics.state import BodyFrame, InitialState
from attsim.errors import ConfigurationError


@beartype
@dataclass
class SimulationTimeline:
    """Time-indexed simulation output.

    Attributes:
        time: Sample times, shape (N,) [s]
        angular_velocity: Body rates, shape (N, 3) [rad/s]
        quaternion: Attitude quaternions, shape (N, 4)
        body_frames: Body frame per sample, None until recorded
        sampling_period: Fixed step between samples [s]
        warnings: Advisory messages raised during the run
    """
    time: NDArray[np.float64]
    angular_velocity: NDArray[np.float64]
    quaternion: NDArray[np.float64]
    body_frames: list[BodyFrame | None]
    sampling_period: float
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def allocate(
        cls,
        initial_state: InitialState,
        sampling_period: float | int,
        sample_count: int,
    ) -> "SimulationTimeline":
        """Allocate a timeline seeded with the initial state at row 0.

        Args:
            initial_state: Angular velocity and quaternion at t = 0
            sampling_period: Step between samples [s]
            sample_count: Number of rows N
        """
        if sample_count < 1:
            raise ConfigurationError(f"Timeline needs at least one sample, got {sample_count}")
        if not sampling_period > 0:
            raise ConfigurationError(f"Sampling period must be positive, got {sampling_period}")

        angular_velocity = np.zeros((sample_count, 3))
        quaternion = np.zeros((sample_count, 4))
        angular_velocity[0] = initial_state.angular_velocity
        quaternion[0] = initial_state.quaternion

        return cls(
            time=np.arange(sample_count, dtype=np.float64) * sampling_period,
            angular_velocity=angular_velocity,
            quaternion=quaternion,
            body_frames=[None] * sample_count,
            sampling_period=float(sampling_period),
        )

    def __len__(self) -> int:
        return len(self.time)

    def record_body_frame(self, index: int, frame: BodyFrame) -> None:
        """Store the body frame of row index."""
        self.body_frames[index] = frame

    def body_frame_matrix(self, index: int) -> NDArray[np.float64]:
        """Body frame of row index as a matrix with axes as columns."""
        frame = self.body_frames[index]
        if frame is None:
            raise IndexError(f"Body frame at index {index} has not been recorded")
        return frame.as_matrix()

    @property
    def is_complete(self) -> bool:
        """Whether every row has a recorded body frame."""
        return all(frame is not None for frame in self.body_frames)

    @property
    def final_time(self) -> float:
        """Time of the last row [s]."""
        return float(self.time[-1])

    def quaternion_norms(self) -> NDArray[np.float64]:
        """Quaternion norm per row, shape (N,)."""
        return np.linalg.norm(self.quaternion, axis=1)

    def to_dataframe(self):
        """Convert to Polars DataFrame."""
        import polars as pl

        columns = {
            "time": self.time,
            "wx": self.angular_velocity[:, 0],
            "wy": self.angular_velocity[:, 1],
            "wz": self.angular_velocity[:, 2],
            "q1": self.quaternion[:, 0],
            "q2": self.quaternion[:, 1],
            "q3": self.quaternion[:, 2],
            "q4": self.quaternion[:, 3],
        }

        for axis_index, axis_name in enumerate(("b1", "b2", "b3")):
            axes = np.array([
                frame[axis_index] if frame is not None else np.full(3, np.nan)
                for frame in self.body_frames
            ])
            for component_index, component in enumerate(("x", "y", "z")):
                columns[f"{axis_name}{component}"] = axes[:, component_index]

        return pl.DataFrame(columns)
