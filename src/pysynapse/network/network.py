"""Multilayer sigmoid network with geometrically interpolated layer widths."""
from __future__ import annotations

import logging
import math
import random
from typing import Any, Dict, List, Sequence, Tuple

from ..config import NetworkConfig, validate_hyperparameters
from ..errors import ConfigurationError, ShapeMismatchError
from .activation import Vector
from .layer import Layer

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def layer_sizes(input_size: int, hidden_layers: int, output_size: int) -> List[int]:
    """Node count of every layer, from input to output.

    Widths follow a geometric progression from ``input_size`` to
    ``output_size`` over ``hidden_layers + 1`` steps. The end points are
    pinned so floating point drift can never alter the input or output width.
    """

    if input_size <= 0 or output_size <= 0:
        raise ConfigurationError(
            f"input and output sizes must be positive, got {input_size} and {output_size}"
        )
    if hidden_layers < 0:
        raise ConfigurationError(f"hidden_layers must be non-negative, got {hidden_layers}")
    ratio = (output_size / input_size) ** (1.0 / (hidden_layers + 1))
    sizes = [_round_half_up(input_size * ratio**i) for i in range(hidden_layers + 2)]
    sizes[0] = input_size
    sizes[-1] = output_size
    if any(size <= 0 for size in sizes):
        raise ConfigurationError(f"topology {sizes} contains an empty layer")
    return sizes


class Network:
    """Feedforward network of :class:`Layer` objects.

    The first layer passes the input vector through unchanged; every other
    layer applies a sigmoid to the weighted sum of the previous layer's
    outputs. ``learning_rate`` and ``momentum`` are shared by all nodes and
    read by the trainer at the start of each iteration.
    """

    def __init__(
        self,
        input_size: int,
        hidden_layers: int,
        output_size: int,
        *,
        learning_rate: float = 0.001,
        momentum: float = 0.0001,
        seed: int | None = None,
    ) -> None:
        config = NetworkConfig(
            input_size=input_size,
            hidden_layers=hidden_layers,
            output_size=output_size,
            learning_rate=learning_rate,
            momentum=momentum,
            seed=seed,
        )
        self.rng = random.Random(config.seed)
        self.learning_rate = config.learning_rate
        self.momentum = config.momentum
        self._layers = self._build_layers(layer_sizes(input_size, hidden_layers, output_size))
        logger.debug("Built network with layer sizes %s", self.sizes)

    @classmethod
    def from_config(cls, config: NetworkConfig) -> "Network":
        return cls(
            config.input_size,
            config.hidden_layers,
            config.output_size,
            learning_rate=config.learning_rate,
            momentum=config.momentum,
            seed=config.seed,
        )

    def _build_layers(self, sizes: Sequence[int]) -> Tuple[Layer, ...]:
        layers = [Layer(sizes[0], 1, self.rng, is_input=True)]
        for previous, size in zip(sizes, sizes[1:]):
            layers.append(Layer(size, previous, self.rng))
        return tuple(layers)

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return self._layers

    @property
    def sizes(self) -> List[int]:
        return [len(layer) for layer in self._layers]

    @property
    def input_size(self) -> int:
        return len(self._layers[0])

    @property
    def output_size(self) -> int:
        return len(self._layers[-1])

    @property
    def hidden_layers(self) -> int:
        return len(self._layers) - 2

    @property
    def node_count(self) -> int:
        return sum(len(layer) for layer in self._layers)

    def configure(self, learning_rate: float, momentum: float) -> None:
        """Set the backpropagation hyperparameters for subsequent iterations."""

        validate_hyperparameters(learning_rate, momentum)
        self.learning_rate = learning_rate
        self.momentum = momentum

    def forward(self, inputs: Sequence[float]) -> Vector:
        """Propagate ``inputs`` left to right and return the output layer's activations."""

        if len(inputs) != self.input_size:
            raise ShapeMismatchError(
                f"The number of input values ({len(inputs)}) must match the number of "
                f"nodes in the input layer ({self.input_size})"
            )
        values: Vector = [float(value) for value in inputs]
        for layer in self._layers:
            values = layer.activate(values)
        return values

    def __call__(self, inputs: Sequence[float]) -> Vector:
        return self.forward(inputs)

    def state_dict(self) -> Dict[str, Any]:
        """Topology, hyperparameters and every parameter as plain Python lists."""

        return {
            "sizes": self.sizes,
            "learning_rate": self.learning_rate,
            "momentum": self.momentum,
            "layers": [
                {
                    "weights": layer.weight_matrix(),
                    "biases": layer.biases(),
                    "previous_weight_deltas": [list(node.previous_weight_deltas) for node in layer],
                    "previous_bias_deltas": [node.previous_bias_delta for node in layer],
                }
                for layer in self._layers
            ],
        }

    def load_state_dict(self, state: Dict[str, Any]) -> None:
        """Restore parameters saved by :meth:`state_dict` into this network.

        The whole state is checked against the topology before any value is
        written, so a rejected state leaves the network untouched.
        """

        sizes = [int(size) for size in state["sizes"]]
        if sizes != self.sizes:
            raise ShapeMismatchError(f"state has layer sizes {sizes}, network has {self.sizes}")
        layer_states = state["layers"]
        if len(layer_states) != len(self._layers):
            raise ShapeMismatchError("state layer count does not match the network")
        learning_rate = float(state["learning_rate"])
        momentum = float(state["momentum"])
        validate_hyperparameters(learning_rate, momentum)

        parsed = []
        for layer_index, (layer, layer_state) in enumerate(zip(self._layers, layer_states)):
            weights = [[float(value) for value in row] for row in layer_state["weights"]]
            biases = [float(value) for value in layer_state["biases"]]
            previous_weights = layer_state.get("previous_weight_deltas")
            previous_biases = layer_state.get("previous_bias_deltas")
            if previous_weights is not None:
                previous_weights = [[float(value) for value in row] for row in previous_weights]
            if previous_biases is not None:
                previous_biases = [float(value) for value in previous_biases]
            for name, values in (
                ("weights", weights),
                ("biases", biases),
                ("previous_weight_deltas", previous_weights),
                ("previous_bias_deltas", previous_biases),
            ):
                if values is not None and len(values) != len(layer):
                    raise ShapeMismatchError(
                        f"layer {layer_index} state has {len(values)} {name} entries, "
                        f"layer has {len(layer)} nodes"
                    )
            for rows in (weights, previous_weights or []):
                for row in rows:
                    if len(row) != layer.connections:
                        raise ShapeMismatchError(
                            f"layer {layer_index} state row has {len(row)} values, "
                            f"nodes expect {layer.connections}"
                        )
            parsed.append((weights, biases, previous_weights, previous_biases))

        for layer, (weights, biases, previous_weights, previous_biases) in zip(self._layers, parsed):
            for index, node in enumerate(layer):
                for weight, value in zip(node.weights, weights[index]):
                    weight.value = value
                node.bias = biases[index]
                if previous_weights is not None:
                    node.previous_weight_deltas = list(previous_weights[index])
                if previous_biases is not None:
                    node.previous_bias_delta = previous_biases[index]
        self.configure(learning_rate, momentum)

    @classmethod
    def from_state_dict(cls, state: Dict[str, Any]) -> "Network":
        """Rebuild a network from :meth:`state_dict` output."""

        sizes = [int(size) for size in state["sizes"]]
        if len(sizes) < 2:
            raise ConfigurationError("a network needs at least an input and an output layer")
        network = cls(sizes[0], len(sizes) - 2, sizes[-1])
        if network.sizes != sizes:
            raise ConfigurationError(
                f"layer sizes {sizes} are not a geometric interpolation this network can build"
            )
        network.load_state_dict(state)
        return network

    def __repr__(self) -> str:
        return (
            f"Network(sizes={self.sizes}, learning_rate={self.learning_rate}, "
            f"momentum={self.momentum})"
        )
