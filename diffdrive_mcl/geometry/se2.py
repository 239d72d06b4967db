"""SE(2) operations (Special Euclidean Group in 2D).

This module implements the rigid-transform algebra the odometry motion
model is built on: composing poses, inverting them and extracting the
relative motion between two odometry readings.

Key functions:
    - se2_compose: Compose two SE(2) poses (p1 ⊕ p2)
    - se2_inverse: Invert an SE(2) pose (p⁻¹)
    - se2_relative: Relative motion between two poses (p_from⁻¹ ⊕ p_to)
    - se2_apply: Transform points by an SE(2) pose

SE(2) representation: poses are NumPy arrays [x, y, yaw] of shape (3,).
Every function also accepts any object exposing ``to_array()`` (such as
``Pose2``) and plain sequences.
"""

from typing import Any

import numpy as np

from .angles import wrap_angle


def _as_pose_array(p: Any, name: str = "p") -> np.ndarray:
    """Convert a pose-like object to a float64 array of shape (3,)."""
    if hasattr(p, "to_array"):
        p = p.to_array()
    p = np.asarray(p, dtype=np.float64)
    if p.shape != (3,):
        raise ValueError(f"{name} must have shape (3,), got {p.shape}")
    return p


def se2_compose(p1: Any, p2: Any) -> np.ndarray:
    """
    Compose two SE(2) poses: p_result = p1 ⊕ p2.

    p2 is expressed in the local frame of p1. This is how a relative
    motion sampled for a particle is applied to that particle's pose.

    The composition formula for SE(2):
        x_result = x1 + x2*cos(yaw1) - y2*sin(yaw1)
        y_result = y1 + x2*sin(yaw1) + y2*cos(yaw1)
        yaw_result = yaw1 + yaw2  (wrapped to [-π, π])

    Args:
        p1: First pose, [x1, y1, yaw1] or Pose2 instance.
        p2: Second pose, [x2, y2, yaw2] or Pose2 instance.

    Returns:
        Composed pose as array [x, y, yaw] of shape (3,).

    Raises:
        ValueError: If poses do not have shape (3,).

    Examples:
        >>> # After 90° rotation, forward becomes left (0, 1)
        >>> p1 = np.array([0, 0, np.pi/2])
        >>> p2 = np.array([1, 0, 0])
        >>> np.allclose(se2_compose(p1, p2), [0, 1, np.pi/2], atol=1e-10)
        True
    """
    x1, y1, yaw1 = _as_pose_array(p1, "p1")
    x2, y2, yaw2 = _as_pose_array(p2, "p2")

    cos_yaw1 = np.cos(yaw1)
    sin_yaw1 = np.sin(yaw1)

    x_result = x1 + x2 * cos_yaw1 - y2 * sin_yaw1
    y_result = y1 + x2 * sin_yaw1 + y2 * cos_yaw1
    yaw_result = wrap_angle(yaw1 + yaw2)

    return np.array([x_result, y_result, yaw_result], dtype=np.float64)


def se2_inverse(p: Any) -> np.ndarray:
    """
    Compute the inverse of an SE(2) pose: p_inv = p⁻¹.

    The inverse satisfies p ⊕ p⁻¹ = identity:
        x_inv = -(x*cos(yaw) + y*sin(yaw))
        y_inv = -(-x*sin(yaw) + y*cos(yaw))
        yaw_inv = -yaw  (wrapped to [-π, π])

    Args:
        p: Pose to invert, [x, y, yaw] or Pose2 instance.

    Returns:
        Inverted pose as array [x, y, yaw] of shape (3,).

    Raises:
        ValueError: If pose does not have shape (3,).
    """
    x, y, yaw = _as_pose_array(p)

    cos_yaw = np.cos(yaw)
    sin_yaw = np.sin(yaw)

    x_inv = -(x * cos_yaw + y * sin_yaw)
    y_inv = -(-x * sin_yaw + y * cos_yaw)
    yaw_inv = wrap_angle(-yaw)

    return np.array([x_inv, y_inv, yaw_inv], dtype=np.float64)


def se2_relative(p_from: Any, p_to: Any) -> np.ndarray:
    """
    Compute relative pose between two global poses.

        p_relative = p_from⁻¹ ⊕ p_to

    For two consecutive odometry readings this is the odometry delta
    expressed in the robot frame at the first reading.

    Args:
        p_from: Starting pose [x, y, yaw] or Pose2 instance.
        p_to: Target pose [x, y, yaw] or Pose2 instance.

    Returns:
        Relative pose as array [x, y, yaw] of shape (3,).

    Examples:
        >>> p1 = np.array([0, 0, 0])
        >>> p2 = np.array([1, 1, np.pi/2])
        >>> np.allclose(se2_relative(p1, p2), [1, 1, np.pi/2], atol=1e-10)
        True
    """
    return se2_compose(se2_inverse(p_from), p_to)


def se2_apply(p: Any, points: np.ndarray) -> np.ndarray:
    """
    Transform 2D points by an SE(2) pose.

        points_transformed = R(yaw) * points + [x, y]

    Args:
        p: Pose [x, y, yaw] or Pose2 instance defining the transformation.
        points: Points to transform, array of shape (N, 2).

    Returns:
        Transformed points, array of shape (N, 2).

    Raises:
        ValueError: If points does not have shape (N, 2).
    """
    x, y, yaw = _as_pose_array(p)

    points = np.asarray(points, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 2:
        raise ValueError(
            f"points must have shape (N, 2), got {points.shape}"
        )

    R = se2_to_matrix([0.0, 0.0, yaw])[:2, :2]
    return points @ R.T + np.array([x, y], dtype=np.float64)


def se2_to_matrix(p: Any) -> np.ndarray:
    """
    Convert SE(2) pose to 3x3 homogeneous transformation matrix.

        T = [[cos(yaw), -sin(yaw), x],
             [sin(yaw),  cos(yaw), y],
             [       0,         0, 1]]

    Composition of poses corresponds to matrix multiplication, which makes
    this form handy for checking the closed-form operations above.

    Args:
        p: Pose [x, y, yaw] or Pose2 instance.

    Returns:
        Homogeneous transformation matrix of shape (3, 3).
    """
    x, y, yaw = _as_pose_array(p)
    cos_yaw = np.cos(yaw)
    sin_yaw = np.sin(yaw)

    return np.array(
        [[cos_yaw, -sin_yaw, x], [sin_yaw, cos_yaw, y], [0.0, 0.0, 1.0]],
        dtype=np.float64,
    )


def se2_from_matrix(T: np.ndarray) -> np.ndarray:
    """
    Convert 3x3 homogeneous transformation matrix to SE(2) pose.

    Args:
        T: Homogeneous transformation matrix of shape (3, 3).

    Returns:
        Pose as array [x, y, yaw] of shape (3,).

    Raises:
        ValueError: If T is not 3x3.
    """
    T = np.asarray(T, dtype=np.float64)
    if T.shape != (3, 3):
        raise ValueError(f"T must have shape (3, 3), got {T.shape}")

    yaw = np.arctan2(T[1, 0], T[0, 0])
    return np.array([T[0, 2], T[1, 2], yaw], dtype=np.float64)
