"""Exception types raised at the network's shape and configuration boundaries."""
from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised for invalid topology parameters or hyperparameters."""


class ShapeMismatchError(ValueError):
    """Raised when a vector length does not match the layer it is fed to."""


__all__ = ["ConfigurationError", "ShapeMismatchError"]
