"""
Sampled odometry motion model for a differential drive robot.

Implements the odometry motion model of Probabilistic Robotics (Thrun,
Burgard, Fox), Chapter 5.4.2, table 5.6, split into two halves:

    - update_motion(): decomposes the motion between the last two odometry
      readings into a rotation δrot1, a translation δtrans and a rotation
      δrot2, and derives a normal distribution for each of them.
    - apply_motion(): draws one realization of (δrot1, δtrans, δrot2) and
      applies it to a particle in the particle's own frame.

Noise model (αi are the DifferentialDriveModelParams coefficients):

    σ²(δrot1)  = α1 · rot_var(δrot1) + α2 · δtrans²
    σ²(δtrans) = α3 · δtrans² + α4 · rot_var(δrot1 + δrot2)
    σ²(δrot2)  = α1 · rot_var(δrot2) + α2 · δtrans²

where rot_var() treats forward and backward motion symmetrically (see
diffdrive_mcl.geometry.rotation_variance).

Thread safety:
    update_motion() is called by one producer while any number of workers
    call apply_motion(). The three distributions are published together as
    one immutable MotionParameters object, so a worker always samples all
    three components from the same odometry update.
"""

import threading
import warnings
from dataclasses import dataclass, field
from typing import Mapping, Optional, Union

import numpy as np

from ..errors import InvalidInputError
from ..geometry import (
    Pose2,
    PoseLike,
    angle_diff,
    rotation_variance,
    se2_compose,
    wrap_angle,
)
from .base import MotionModel
from .config import DifferentialDriveModelParams


@dataclass(frozen=True)
class NoiseParameter:
    """Mean and standard deviation of a normal distribution."""

    mean: float = 0.0
    std: float = 0.0

    def sample(self, rng: np.random.Generator) -> float:
        """Draw one variate. A zero std returns the mean exactly."""
        return float(rng.normal(self.mean, self.std))


@dataclass(frozen=True)
class MotionParameters:
    """
    Distributions of the three motion primitives of one odometry update.

    Attributes:
        first_rotation: Rotation towards the direction of travel (rad).
        translation: Distance travelled along that direction (m).
        second_rotation: Remaining rotation to the final heading (rad).
    """

    first_rotation: NoiseParameter = field(default_factory=NoiseParameter)
    translation: NoiseParameter = field(default_factory=NoiseParameter)
    second_rotation: NoiseParameter = field(default_factory=NoiseParameter)


class DifferentialDriveModel(MotionModel):
    """
    Odometry motion model for differential drive robots.

    Example:
        >>> params = DifferentialDriveModelParams(0.1, 0.1, 0.1, 0.1)
        >>> model = DifferentialDriveModel(params)
        >>> model.update_motion(Pose2(0.0, 0.0, 0.0))
        >>> model.update_motion(Pose2(1.0, 0.0, 0.0))
        >>> rng = np.random.default_rng(42)
        >>> particle = model.apply_motion(Pose2(2.0, 3.0, np.pi/2), rng)
    """

    def __init__(
        self,
        params: Union[DifferentialDriveModelParams, Mapping[str, float]],
    ):
        """
        Initialize the motion model.

        Args:
            params: Model parameters, or a mapping accepted by
                DifferentialDriveModelParams.from_dict().

        Raises:
            TypeError: If params has an unsupported type.
            ConfigurationError: If the parameters are invalid.
        """
        if isinstance(params, Mapping):
            params = DifferentialDriveModelParams.from_dict(params)
        if not isinstance(params, DifferentialDriveModelParams):
            raise TypeError(
                f"params must be DifferentialDriveModelParams, got {type(params)}"
            )

        self.params = params
        self._last_pose: Optional[Pose2] = None
        self._motion_parameters = MotionParameters()
        self._params_lock = threading.Lock()

    def update_motion(self, pose: PoseLike) -> None:
        """
        Register a new odometry reading and recompute the noise model.

        The first reading only sets the reference pose. Every later reading
        is decomposed relative to the previous one.

        Args:
            pose: Absolute odometry pose [x, y, yaw] or Pose2.

        Raises:
            InvalidInputError: If the pose is malformed or not finite. The
                model state is left unchanged.
        """
        pose = _as_pose(pose)

        if self._last_pose is not None:
            motion_parameters = self._decompose(self._last_pose, pose)
            with self._params_lock:
                self._motion_parameters = motion_parameters

        self._last_pose = pose

    def apply_motion(self, state: PoseLike, rng: np.random.Generator) -> PoseLike:
        """
        Apply a sample of the latest motion to a particle state.

        The sampled motion is composed on the right, i.e. in the particle's
        local frame:

            state ⊕ Rot(δrot1) ⊕ Trans(δtrans, 0) ⊕ Rot(δrot2)

        Args:
            state: Particle pose [x, y, yaw] or Pose2.
            rng: Random generator owned by the caller. Variates are drawn in
                the order δrot1, δtrans, δrot2.

        Returns:
            New particle pose: a Pose2 for Pose2 input, otherwise an array
            of shape (3,).
        """
        # Single read of the published snapshot
        motion_parameters = self._motion_parameters
        first_rotation = motion_parameters.first_rotation.sample(rng)
        translation = motion_parameters.translation.sample(rng)
        second_rotation = motion_parameters.second_rotation.sample(rng)

        motion = se2_compose(
            [translation * np.cos(first_rotation),
             translation * np.sin(first_rotation),
             first_rotation],
            [0.0, 0.0, second_rotation],
        )
        propagated = se2_compose(state, motion)

        if isinstance(state, Pose2):
            return Pose2.from_array(propagated)
        return propagated

    def latest_motion_update(self) -> Optional[Pose2]:
        """Return the last odometry pose received, or None."""
        return self._last_pose

    def motion_parameters(self) -> MotionParameters:
        """Return the distributions derived from the latest odometry update."""
        return self._motion_parameters

    def _decompose(self, last_pose: Pose2, pose: Pose2) -> MotionParameters:
        """Rotate-translate-rotate decomposition of last_pose -> pose."""
        dx, dy = pose.translation - last_pose.translation
        distance = float(np.hypot(dx, dy))
        distance_variance = distance * distance

        if distance > self.params.max_expected_step:
            warnings.warn(
                f"Odometry moved {distance:.3f} m in a single update "
                f"(max_expected_step={self.params.max_expected_step}). "
                "Check for an odometry reset.",
                RuntimeWarning
            )

        if distance > self.params.distance_threshold:
            first_rotation = angle_diff(float(np.arctan2(dy, dx)), last_pose.yaw)
        else:
            # Too short to infer a heading: treat as in-place rotation
            first_rotation = 0.0
        second_rotation = wrap_angle(angle_diff(pose.yaw, last_pose.yaw) - first_rotation)
        combined_rotation = wrap_angle(first_rotation + second_rotation)

        p = self.params
        return MotionParameters(
            first_rotation=NoiseParameter(
                mean=first_rotation,
                std=float(np.sqrt(
                    p.rotation_noise_from_rotation * rotation_variance(first_rotation)
                    + p.rotation_noise_from_translation * distance_variance
                )),
            ),
            translation=NoiseParameter(
                mean=distance,
                std=float(np.sqrt(
                    p.translation_noise_from_translation * distance_variance
                    + p.translation_noise_from_rotation * rotation_variance(combined_rotation)
                )),
            ),
            second_rotation=NoiseParameter(
                mean=second_rotation,
                std=float(np.sqrt(
                    p.rotation_noise_from_rotation * rotation_variance(second_rotation)
                    + p.rotation_noise_from_translation * distance_variance
                )),
            ),
        )

    def __repr__(self) -> str:
        return f"DifferentialDriveModel(params={self.params!r})"


def _as_pose(pose: PoseLike) -> Pose2:
    """Validate an odometry reading and convert it to Pose2."""
    if isinstance(pose, Pose2):
        return pose
    try:
        arr = np.asarray(pose, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"pose must be [x, y, yaw], got {pose!r}") from e
    return Pose2.from_array(arr)
