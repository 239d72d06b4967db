"""Odometry motion models for particle filter localization.

This package contains the motion model half of a Monte Carlo localization
system:
- geometry: SE(2) poses and planar rotation helpers
- models: the MotionModel interface and the differential drive model
- errors: exceptions raised on invalid configuration or input
"""

from .errors import ConfigurationError, InvalidInputError, MotionModelError
from .geometry import Pose2
from .models import (
    DifferentialDriveModel,
    DifferentialDriveModelParams,
    MotionModel,
)

__all__ = [
    "Pose2",
    "MotionModel",
    "DifferentialDriveModel",
    "DifferentialDriveModelParams",
    "MotionModelError",
    "ConfigurationError",
    "InvalidInputError",
]

__version__ = "0.1.0"
