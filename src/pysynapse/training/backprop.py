"""Error backpropagation over a :class:`~pysynapse.network.Network`.

The backward pass is split into three routines that communicate through
explicit per-iteration buffers indexed by ``(layer, node)``:

* :func:`compute_gradients` fills a :class:`GradientBuffer` from the cached
  activations of the latest forward pass, right to left.
* :func:`compute_deltas` turns gradients into weight and bias deltas, adding
  the momentum term from each node's previously applied deltas.
* :func:`apply_deltas` writes the deltas into the network.

Adjacency is index based: node ``n`` of layer ``L`` uses its ``k``-th weight
for node ``k`` of layer ``L - 1``. The input layer is a passthrough and is
neither assigned a gradient nor updated.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from ..errors import ShapeMismatchError
from ..network import Network, Vector, sigmoid_derivative

Matrix = List[List[float]]


@dataclass
class GradientBuffer:
    """Per-node error gradients for one iteration; ``values[0]`` belongs to the input layer."""

    values: List[Vector]

    @classmethod
    def zeros(cls, sizes: Sequence[int]) -> "GradientBuffer":
        return cls([[0.0] * size for size in sizes])

    def layer(self, index: int) -> Vector:
        return self.values[index]


@dataclass
class LayerDeltas:
    weights: Matrix = field(default_factory=list)
    biases: Vector = field(default_factory=list)


@dataclass
class DeltaBuffer:
    """Weight and bias deltas for every non-input layer, indexed like ``network.layers``.

    ``layers[0]`` is always empty since the input layer is never updated.
    """

    layers: List[LayerDeltas]


def output_gradients(desired_output: Sequence[float], actual_output: Sequence[float]) -> Vector:
    """``(desired - actual) * y (1 - y)`` for every output node."""

    if len(desired_output) != len(actual_output):
        raise ShapeMismatchError(
            f"The number of desired outputs ({len(desired_output)}) must match the number of "
            f"nodes in the output layer ({len(actual_output)})"
        )
    return [
        (desired - actual) * sigmoid_derivative(actual)
        for desired, actual in zip(desired_output, actual_output)
    ]


def compute_gradients(
    network: Network,
    desired_output: Sequence[float],
    actual_output: Sequence[float],
) -> GradientBuffer:
    """Resolve every non-input node's gradient, one layer at a time from right to left."""

    layers = network.layers
    if len(actual_output) != len(layers[-1]):
        raise ShapeMismatchError(
            f"actual output has {len(actual_output)} values, output layer has {len(layers[-1])} nodes"
        )
    gradients = GradientBuffer.zeros(network.sizes)
    gradients.values[-1] = output_gradients(desired_output, actual_output)

    for layer_index in range(len(layers) - 2, 0, -1):
        right_weights = layers[layer_index + 1].weight_matrix()
        right_gradients = gradients.values[layer_index + 1]
        current = gradients.values[layer_index]
        for node_index, node in enumerate(layers[layer_index]):
            weighted_sum = 0.0
            for row, gradient in zip(right_weights, right_gradients):
                weighted_sum += row[node_index] * gradient
            current[node_index] = sigmoid_derivative(node.last_output) * weighted_sum
    return gradients


def compute_deltas(network: Network, gradients: GradientBuffer) -> DeltaBuffer:
    """Gradient term plus momentum term for every weight and bias of the network.

    The learning rate and momentum are read from ``network`` once, so a
    :meth:`Network.configure` call takes effect from the next iteration.
    """

    lr = network.learning_rate
    alpha = network.momentum
    layers = network.layers
    deltas = DeltaBuffer([LayerDeltas()])
    for layer_index in range(1, len(layers)):
        previous_outputs = layers[layer_index - 1].outputs()
        layer_gradients = gradients.values[layer_index]
        layer_deltas = LayerDeltas()
        for node, gradient in zip(layers[layer_index], layer_gradients):
            layer_deltas.weights.append(
                [
                    lr * gradient * previous_output + alpha * previous_delta
                    for previous_output, previous_delta in zip(previous_outputs, node.previous_weight_deltas)
                ]
            )
            layer_deltas.biases.append(lr * gradient + alpha * node.previous_bias_delta)
        deltas.layers.append(layer_deltas)
    return deltas


def apply_deltas(network: Network, deltas: DeltaBuffer) -> int:
    """Apply every delta, right to left, and return the number of updates skipped as NaN."""

    layers = network.layers
    if len(deltas.layers) != len(layers):
        raise ShapeMismatchError("delta buffer does not match the network's layer count")
    skipped = 0
    for layer_index in range(len(layers) - 1, 0, -1):
        layer_deltas = deltas.layers[layer_index]
        for node, weight_deltas, bias_delta in zip(
            layers[layer_index], layer_deltas.weights, layer_deltas.biases
        ):
            skipped += node.update_weights(weight_deltas)
            if not node.update_bias(bias_delta):
                skipped += 1
    return skipped


def backpropagate(
    network: Network,
    desired_output: Sequence[float],
    actual_output: Sequence[float],
) -> int:
    """Run gradient, delta and update steps for the latest forward pass."""

    gradients = compute_gradients(network, desired_output, actual_output)
    deltas = compute_deltas(network, gradients)
    return apply_deltas(network, deltas)


__all__ = [
    "DeltaBuffer",
    "GradientBuffer",
    "LayerDeltas",
    "apply_deltas",
    "backpropagate",
    "compute_deltas",
    "compute_gradients",
    "output_gradients",
]
