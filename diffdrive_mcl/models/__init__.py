"""
Motion models for Monte Carlo localization.

This module provides odometry-driven motion models behind a common
MotionModel interface, so that a particle filter can swap one for another.

Available models:
    - DifferentialDriveModel: rotate-translate-rotate odometry model
"""

from .base import MotionModel
from .config import ALPHA_ALIASES, PRESETS, DifferentialDriveModelParams
from .differential_drive import (
    DifferentialDriveModel,
    MotionParameters,
    NoiseParameter,
)

__all__ = [
    # Interface
    "MotionModel",
    # Differential drive
    "DifferentialDriveModel",
    "DifferentialDriveModelParams",
    "MotionParameters",
    "NoiseParameter",
    # Configuration
    "PRESETS",
    "ALPHA_ALIASES",
]
