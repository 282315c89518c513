"""Hand-rolled multilayer sigmoid network trained by error backpropagation.

The package is organised leaf first:

- ``network``: weights, nodes, layers and the network topology,
- ``training``: gradient and delta buffers plus the per-sample trainer,
- ``tasks``: drivers that supply samples and judge outputs,
- ``persistence``: checkpoint save and load,
- ``utils``: plotting helpers.
"""

from .config import NetworkConfig, TrainingConfig
from .errors import ConfigurationError, ShapeMismatchError
from .network import Layer, Network, Node, Weight
from .training import Trainer, TrainingHistory, TrainingSample

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Layer",
    "Network",
    "NetworkConfig",
    "Node",
    "ShapeMismatchError",
    "Trainer",
    "TrainingConfig",
    "TrainingHistory",
    "TrainingSample",
    "Weight",
]
