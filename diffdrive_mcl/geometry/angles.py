"""
Planar rotation utilities.

Headings and relative rotations are plain floats in radians. Every
operation that produces a rotation wraps its result to [-π, π] so that
rotations compare and compose the same way SO(2) elements do.

Critical for:
- Decomposing odometry increments into rotate-translate-rotate primitives
- Noise magnitudes near the ±180° wrap boundary
- Converting quaternion orientations reported by odometry sources
"""

import numpy as np
from typing import Union


def wrap_angle(angle: float) -> float:
    """
    Wrap angle to [-π, π] range.

    Two headings that differ by a multiple of 2π describe the same
    rotation. Wrapping keeps relative rotations small, so a heading change
    from +179° to -179° is reported as +2° instead of -358°.

    Args:
        angle: Angle in radians (can be any value)

    Returns:
        Wrapped angle in range [-π, π]

    Example:
        >>> wrap_angle(3.5 * np.pi)  # 630° -> -90°
        -1.5707963267948966
        >>> wrap_angle(-3.5 * np.pi)  # -630° -> 90°
        1.5707963267948966
    """
    return float(np.arctan2(np.sin(angle), np.cos(angle)))


def wrap_angle_array(angles: np.ndarray) -> np.ndarray:
    """
    Wrap array of angles to [-π, π] range.

    Vectorized version of wrap_angle().

    Args:
        angles: Array of angles in radians

    Returns:
        Array of wrapped angles in range [-π, π]
    """
    angles = np.asarray(angles, dtype=np.float64)
    return np.arctan2(np.sin(angles), np.cos(angles))


def angle_diff(angle1: Union[float, np.ndarray],
               angle2: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Compute the shortest angular difference between two angles.

    Returns angle1 - angle2, wrapped to [-π, π]. In SO(2) terms this is
    R(angle1) * R(angle2)⁻¹.

    Args:
        angle1: First angle in radians
        angle2: Second angle in radians

    Returns:
        Shortest signed difference angle1 - angle2 in [-π, π]

    Example:
        >>> angle_diff(np.pi - 0.1, -np.pi + 0.1)  # Nearly opposite
        -0.2
        >>> angle_diff(0.1, -0.1)  # Small difference
        0.2
    """
    if isinstance(angle1, np.ndarray) or isinstance(angle2, np.ndarray):
        return wrap_angle_array(np.asarray(angle1) - np.asarray(angle2))
    else:
        return wrap_angle(angle1 - angle2)


def rotation_variance(angle: float) -> float:
    """
    Squared rotation magnitude, symmetric for forward and backward motion.

    A robot that reverses by turning 180° and driving forward performs
    the same motion, as far as odometry is concerned, as one that simply
    drives backward. The magnitude used for noise modelling is therefore
    the smaller of |angle| and |angle + π| (both wrapped):

        rot_var(θ) = min(|wrap(θ)|, |wrap(θ + π)|)²

    The result is in [0, (π/2)²], periodic with period π and zero for
    pure forward or pure backward motion.

    Args:
        angle: Rotation in radians (any value).

    Returns:
        Squared magnitude in rad².

    Example:
        >>> rotation_variance(0.0)
        0.0
        >>> np.isclose(rotation_variance(np.pi - 0.1), 0.01)
        True
    """
    flipped = wrap_angle(angle + np.pi)
    delta = min(abs(wrap_angle(angle)), abs(flipped))
    return delta * delta


def yaw_from_quaternion(qx: float, qy: float, qz: float, qw: float) -> float:
    """
    Extract the planar heading from an orientation quaternion.

    Odometry sources commonly publish orientation as a unit quaternion
    (scalar last). Only the rotation about the z-axis matters for a
    ground robot; roll and pitch are discarded.

    Args:
        qx, qy, qz: Vector part of the quaternion.
        qw: Scalar part of the quaternion.

    Returns:
        Yaw angle in radians, in [-π, π].

    Example:
        >>> yaw = yaw_from_quaternion(0.0, 0.0, np.sin(np.pi / 4), np.cos(np.pi / 4))
        >>> np.isclose(yaw, np.pi / 2)
        True
    """
    sin_yaw_cos_pitch = 2.0 * (qw * qz + qx * qy)
    cos_yaw_cos_pitch = 1.0 - 2.0 * (qy * qy + qz * qz)
    return float(np.arctan2(sin_yaw_cos_pitch, cos_yaw_cos_pitch))
