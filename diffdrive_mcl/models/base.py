"""
Base class for particle filter motion models.

A motion model is fed absolute odometry readings by a single producer
(``update_motion``) and is asked by the particle filter to propagate each
particle (``apply_motion``). Models sharing this interface are
interchangeable inside the filter.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from ..geometry import Pose2, PoseLike


class MotionModel(ABC):
    """Abstract base class for odometry-driven motion models."""

    # Type of the odometry readings fed to update_motion()
    update_type = Pose2
    # Type of the particle states propagated by apply_motion()
    state_type = Pose2

    @abstractmethod
    def update_motion(self, pose: PoseLike) -> None:
        """
        Register a new absolute odometry reading.

        Args:
            pose: Latest odometry pose [x, y, yaw] or Pose2.
        """
        pass

    @abstractmethod
    def apply_motion(self, state: PoseLike, rng: np.random.Generator) -> PoseLike:
        """
        Propagate one particle state by a sample of the latest motion.

        Args:
            state: Particle pose [x, y, yaw] or Pose2.
            rng: Random generator owned by the caller.

        Returns:
            New particle pose, of the same kind as ``state``.
        """
        pass

    @abstractmethod
    def latest_motion_update(self) -> Optional[Pose2]:
        """
        Recover the latest motion update.

        Returns:
            Last odometry pose received, or None if none was received.
        """
        pass

    def apply_motion_to_particles(
        self, particles: np.ndarray, rng: np.random.Generator
    ) -> np.ndarray:
        """
        Propagate every row of an (N, 3) particle array.

        Args:
            particles: Particle poses, one [x, y, yaw] per row.
            rng: Random generator owned by the caller.

        Returns:
            New (N, 3) array. The input is left untouched.

        Raises:
            ValueError: If particles does not have shape (N, 3).
        """
        particles = np.asarray(particles, dtype=np.float64)
        if particles.ndim != 2 or particles.shape[1] != 3:
            raise ValueError(
                f"particles must have shape (N, 3), got {particles.shape}"
            )

        propagated = np.empty_like(particles)
        for i in range(particles.shape[0]):
            propagated[i] = self.apply_motion(particles[i], rng)
        return propagated
