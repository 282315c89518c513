"""Network topology: weights, nodes, layers and the network itself."""

from .activation import Vector, sigmoid, sigmoid_derivative
from .layer import Layer
from .network import Network, layer_sizes
from .node import Node
from .weight import Weight

__all__ = [
    "Layer",
    "Network",
    "Node",
    "Vector",
    "Weight",
    "layer_sizes",
    "sigmoid",
    "sigmoid_derivative",
]
