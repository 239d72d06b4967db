"""
Planar geometry building blocks for odometry motion models.

Main components:
    - Pose2: immutable SE(2) pose
    - se2_compose, se2_inverse, se2_relative, se2_apply: SE(2) operations
    - wrap_angle, angle_diff, rotation_variance: SO(2) helpers
    - yaw_from_quaternion: heading from odometry orientation quaternions

Example usage:
    >>> from diffdrive_mcl.geometry import Pose2
    >>> import numpy as np
    >>>
    >>> last = Pose2(x=0.0, y=0.0, yaw=0.0)
    >>> new = Pose2(x=1.0, y=1.0, yaw=np.pi/2)
    >>> delta = new.relative_to(last)
"""

from .angles import (
    angle_diff,
    rotation_variance,
    wrap_angle,
    wrap_angle_array,
    yaw_from_quaternion,
)
from .se2 import (
    se2_apply,
    se2_compose,
    se2_from_matrix,
    se2_inverse,
    se2_relative,
    se2_to_matrix,
)
from .types import Pose2, PoseLike

__all__ = [
    # Core types
    "Pose2",
    "PoseLike",
    # SO(2) helpers
    "wrap_angle",
    "wrap_angle_array",
    "angle_diff",
    "rotation_variance",
    "yaw_from_quaternion",
    # SE(2) operations
    "se2_compose",
    "se2_inverse",
    "se2_relative",
    "se2_apply",
    "se2_to_matrix",
    "se2_from_matrix",
]
