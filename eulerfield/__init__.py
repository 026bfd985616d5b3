"""eulerfield: forward Euler tables and direction fields for first-order ODEs."""

__version__ = "0.1.0"
