"""Utilities: errors, constants, logging setup."""

from .constants import BOUNDARY_EPSILON, SEGMENT_LENGTH
from .errors import EulerFieldError

__all__ = ["BOUNDARY_EPSILON", "SEGMENT_LENGTH", "EulerFieldError"]
