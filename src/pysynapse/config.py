"""Configuration dataclasses for the network and its training loop."""
from __future__ import annotations

from dataclasses import dataclass
import math

from .errors import ConfigurationError


def validate_hyperparameters(learning_rate: float, momentum: float) -> None:
    """Reject negative or non-finite learning rates and momenta."""

    for name, value in (("learning_rate", learning_rate), ("momentum", momentum)):
        if not math.isfinite(value) or value < 0.0:
            raise ConfigurationError(f"{name} must be a finite non-negative number, got {value!r}")


@dataclass(slots=True)
class NetworkConfig:
    """Configuration controlling network topology and backpropagation.

    Parameters
    ----------
    input_size:
        Number of nodes in the input layer. Each input node passes a single
        scalar through unchanged.
    hidden_layers:
        Number of hidden layers between input and output. Hidden layer sizes
        are interpolated geometrically between ``input_size`` and
        ``output_size``.
    output_size:
        Number of sigmoid nodes in the output layer.
    learning_rate:
        Step size applied to the gradient term of every weight and bias
        delta.
    momentum:
        Fraction of the previous iteration's delta carried into the current
        one. Zero disables momentum entirely.
    seed:
        Optional seed for weight initialisation. Setting it makes network
        construction reproducible, which simplifies testing.
    """

    input_size: int
    hidden_layers: int
    output_size: int
    learning_rate: float = 0.001
    momentum: float = 0.0001
    seed: int | None = None

    def __post_init__(self) -> None:
        for name in ("input_size", "hidden_layers", "output_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.input_size <= 0 or self.output_size <= 0:
            raise ConfigurationError("input_size and output_size must be positive")
        if self.hidden_layers < 0:
            raise ConfigurationError("hidden_layers must be non-negative")
        validate_hyperparameters(self.learning_rate, self.momentum)


@dataclass(slots=True)
class TrainingConfig:
    """Alternating train/test schedule used by the command-line drivers."""

    rounds: int = 1000
    train_iterations: int = 100
    test_iterations: int = 100
    progress: bool = False

    def __post_init__(self) -> None:
        for name in ("rounds", "train_iterations", "test_iterations"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.rounds <= 0:
            raise ValueError("rounds must be positive")
        if self.train_iterations < 0:
            raise ValueError("train_iterations must be non-negative")
        if self.test_iterations <= 0:
            raise ValueError("test_iterations must be positive")


__all__ = ["NetworkConfig", "TrainingConfig", "validate_hyperparameters"]
