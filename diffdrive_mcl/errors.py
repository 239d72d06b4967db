"""
Exception types raised by the motion model package.

All errors derive from ValueError so that callers which already guard
numeric routines with ``except ValueError`` keep working unchanged.
"""


class MotionModelError(ValueError):
    """Base class for errors raised by diffdrive_mcl."""


class ConfigurationError(MotionModelError):
    """Invalid motion model parameters (e.g. a negative noise coefficient)."""


class InvalidInputError(MotionModelError):
    """Malformed or non-finite pose passed to a motion model."""
