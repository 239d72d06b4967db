"""Pose type shared by odometry sources, motion models and particles.

Key types:
    - Pose2: immutable SE(2) pose (x, y, yaw)
    - PoseLike: anything accepted where a pose is expected
"""

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from ..errors import InvalidInputError
from .angles import wrap_angle
from .se2 import se2_compose, se2_inverse, se2_relative


@dataclass(frozen=True)
class Pose2:
    """
    Immutable SE(2) pose.

    Represents a rigid transformation in the plane: position (x, y) and
    orientation (yaw angle). Used both for absolute odometry readings and
    for particle states.

    Attributes:
        x: Position in x-axis (meters).
        y: Position in y-axis (meters).
        yaw: Heading angle (radians), counter-clockwise from the positive
             x-axis. Stored as given; operations producing a new pose wrap
             their yaw to [-π, π].

    Notes:
        - Composition ``a @ b`` (or ``a.compose(b)``) expresses b in the
          local frame of a. It is associative but not commutative.
        - All components must be finite. A NaN or infinite component
          raises InvalidInputError.

    Examples:
        >>> p = Pose2(x=0.0, y=0.0, yaw=np.pi/2)
        >>> q = p @ Pose2.from_translation(1.0, 0.0)
        >>> np.allclose(q.to_array(), [0.0, 1.0, np.pi/2])
        True
    """

    x: float
    y: float
    yaw: float

    def __post_init__(self) -> None:
        """Coerce components to float and reject non-finite values."""
        for name in ("x", "y", "yaw"):
            value = getattr(self, name)
            try:
                value = float(value)
            except (TypeError, ValueError) as e:
                raise InvalidInputError(
                    f"{name} must be a real number, got {value!r}"
                ) from e
            if not np.isfinite(value):
                raise InvalidInputError(f"{name} must be finite, got {value}")
            object.__setattr__(self, name, value)

    def to_array(self) -> np.ndarray:
        """Convert pose to NumPy array [x, y, yaw]."""
        return np.array([self.x, self.y, self.yaw], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: Union[np.ndarray, Sequence[float]]) -> "Pose2":
        """
        Create Pose2 from an array-like [x, y, yaw].

        Raises:
            InvalidInputError: If the array does not have exactly 3 elements
                or contains non-finite values.
        """
        arr = np.asarray(arr, dtype=np.float64)
        if arr.shape != (3,):
            raise InvalidInputError(f"Array must have shape (3,), got {arr.shape}")
        return cls(x=float(arr[0]), y=float(arr[1]), yaw=float(arr[2]))

    @classmethod
    def identity(cls) -> "Pose2":
        """Create identity pose (origin with zero rotation)."""
        return cls(x=0.0, y=0.0, yaw=0.0)

    @classmethod
    def from_rotation(cls, angle: float) -> "Pose2":
        """Pure rotation by ``angle`` radians (wrapped)."""
        return cls(x=0.0, y=0.0, yaw=wrap_angle(angle))

    @classmethod
    def from_translation(cls, x: float, y: float = 0.0) -> "Pose2":
        """Pure translation by (x, y)."""
        return cls(x=x, y=y, yaw=0.0)

    @property
    def translation(self) -> np.ndarray:
        """Translation part as array [x, y]."""
        return np.array([self.x, self.y], dtype=np.float64)

    def compose(self, other: "Pose2") -> "Pose2":
        """Return self ⊕ other."""
        return Pose2.from_array(se2_compose(self, other))

    def inverse(self) -> "Pose2":
        """Return self⁻¹."""
        return Pose2.from_array(se2_inverse(self))

    def relative_to(self, origin: "Pose2") -> "Pose2":
        """Return origin⁻¹ ⊕ self, this pose seen from ``origin``."""
        return Pose2.from_array(se2_relative(origin, self))

    def __matmul__(self, other: "Pose2") -> "Pose2":
        if not isinstance(other, Pose2):
            return NotImplemented
        return self.compose(other)

    def __repr__(self) -> str:
        """Readable string representation."""
        return f"Pose2(x={self.x:.4f}, y={self.y:.4f}, yaw={self.yaw:.4f})"


PoseLike = Union[Pose2, np.ndarray, Sequence[float]]
