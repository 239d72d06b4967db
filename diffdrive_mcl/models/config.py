"""
Configuration of the differential drive odometry motion model.

The four noise coefficients follow Probabilistic Robotics (Thrun, Burgard,
Fox), Chapter 5.4, where they are called alpha1..alpha4. Both the
descriptive field names and the textbook aliases are accepted when loading
parameters from a dictionary or a JSON file.
"""

import json
import warnings
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import numpy as np

from ..errors import ConfigurationError


# ============================================================================
# PRESET CONFIGURATIONS
# ============================================================================

PRESETS = {
    'default': {
        'description': 'Typical indoor robot on a hard floor',
        'rotation_noise_from_rotation': 0.2,
        'rotation_noise_from_translation': 0.2,
        'translation_noise_from_translation': 0.2,
        'translation_noise_from_rotation': 0.2,
        'distance_threshold': 0.01,
    },
    'precise': {
        'description': 'Well calibrated encoders, little wheel slip',
        'rotation_noise_from_rotation': 0.02,
        'rotation_noise_from_translation': 0.01,
        'translation_noise_from_translation': 0.02,
        'translation_noise_from_rotation': 0.01,
        'distance_threshold': 0.005,
    },
    'slippery': {
        'description': 'Carpet or gravel, frequent wheel slip during turns',
        'rotation_noise_from_rotation': 0.6,
        'rotation_noise_from_translation': 0.3,
        'translation_noise_from_translation': 0.4,
        'translation_noise_from_rotation': 0.3,
        'distance_threshold': 0.02,
    },
}

# Textbook names for the noise coefficients
ALPHA_ALIASES = {
    'alpha1': 'rotation_noise_from_rotation',
    'alpha2': 'rotation_noise_from_translation',
    'alpha3': 'translation_noise_from_translation',
    'alpha4': 'translation_noise_from_rotation',
}

_NUMERIC_TYPES = (int, float, np.integer, np.floating)


@dataclass(frozen=True)
class DifferentialDriveModelParams:
    """
    Parameters of a DifferentialDriveModel.

    Attributes:
        rotation_noise_from_rotation: Rotational noise generated by the
            relative rotation between two odometry updates (alpha1).
        rotation_noise_from_translation: Rotational noise generated by the
            relative translation between two odometry updates (alpha2).
        translation_noise_from_translation: Translational noise generated by
            the relative translation (alpha3).
        translation_noise_from_rotation: Translational noise generated by the
            relative rotation (alpha4).
        distance_threshold: Translations at or below this distance (meters)
            are too short to estimate a heading from. The motion is then
            treated as an in-place rotation.
        max_expected_step: Translations above this distance (meters) between
            two consecutive odometry readings trigger a RuntimeWarning.
            Use ``float('inf')`` to disable the check.

    Raises:
        TypeError: If a value is not a real number.
        ConfigurationError: If a coefficient or the threshold is negative
            or non-finite, or max_expected_step is not positive.

    Example:
        >>> params = DifferentialDriveModelParams(0.1, 0.1, 0.1, 0.1)
        >>> params.distance_threshold
        0.01
    """

    rotation_noise_from_rotation: float
    rotation_noise_from_translation: float
    translation_noise_from_translation: float
    translation_noise_from_rotation: float
    distance_threshold: float = 0.01
    max_expected_step: float = 5.0

    def __post_init__(self) -> None:
        """Validate parameter types and ranges."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, _NUMERIC_TYPES):
                raise TypeError(f"{f.name} must be numeric, got {type(value)}")
            object.__setattr__(self, f.name, float(value))

        for name, value in self.noise_coefficients().items():
            if not np.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}")
            if value < 0:
                raise ConfigurationError(
                    f"{name} must be non-negative, got {value}"
                )
            # Textbook values are well below 1
            if value > 1.0:
                warnings.warn(
                    f"{name}={value} is unusually large. "
                    "Typical noise coefficients are below 1.0.",
                    UserWarning
                )

        if not np.isfinite(self.distance_threshold) or self.distance_threshold < 0:
            raise ConfigurationError(
                f"distance_threshold must be finite and non-negative, "
                f"got {self.distance_threshold}"
            )
        if not self.max_expected_step > 0:
            raise ConfigurationError(
                f"max_expected_step must be positive, got {self.max_expected_step}"
            )

    def noise_coefficients(self) -> Dict[str, float]:
        """Return the four noise coefficients keyed by field name."""
        return {
            'rotation_noise_from_rotation': self.rotation_noise_from_rotation,
            'rotation_noise_from_translation': self.rotation_noise_from_translation,
            'translation_noise_from_translation': self.translation_noise_from_translation,
            'translation_noise_from_rotation': self.translation_noise_from_rotation,
        }

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "DifferentialDriveModelParams":
        """
        Build parameters from a mapping.

        Keys may use the field names or the aliases alpha1..alpha4. A
        ``description`` entry (as found in PRESETS) is ignored.

        Args:
            config: Mapping of parameter names to values.

        Returns:
            Validated parameters.

        Raises:
            ConfigurationError: On unknown, duplicated or missing keys.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in config.items():
            if key == 'description':
                continue
            name = ALPHA_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown motion model parameter: {key!r}")
            if name in kwargs:
                raise ConfigurationError(f"Parameter {name!r} given more than once")
            kwargs[name] = value

        missing = [name for name in ALPHA_ALIASES.values() if name not in kwargs]
        if missing:
            raise ConfigurationError(f"Missing motion model parameters: {missing}")

        return cls(**kwargs)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "DifferentialDriveModelParams":
        """
        Load parameters from a JSON file.

        The file holds either the parameter object itself or an object with
        a ``motion_model`` section containing it.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigurationError: If the content is not a JSON object or holds
                invalid parameters.
        """
        path = Path(path)
        with open(path, 'r') as f:
            config = json.load(f)

        if isinstance(config, dict) and 'motion_model' in config:
            config = config['motion_model']
        if not isinstance(config, dict):
            raise ConfigurationError(
                f"{path}: expected a JSON object, got {type(config).__name__}"
            )
        return cls.from_dict(config)

    @classmethod
    def from_preset(cls, name: str) -> "DifferentialDriveModelParams":
        """Build parameters from one of the named PRESETS."""
        if name not in PRESETS:
            raise ConfigurationError(
                f"Unknown preset {name!r}, choose from {sorted(PRESETS)}"
            )
        return cls.from_dict(PRESETS[name])
