"""A single neuron with cached forward state and momentum bookkeeping."""
from __future__ import annotations

import math
import random
from typing import List, Sequence

from ..errors import ShapeMismatchError
from .activation import Vector, sigmoid
from .weight import Weight

WEIGHT_INIT_RANGE = 3.0


class Node:
    """Weighted sum plus bias squashed through a sigmoid.

    ``last_input`` and ``last_output`` are overwritten by every call to
    :meth:`activate` and are only meaningful until the next forward pass.
    ``previous_weight_deltas`` and ``previous_bias_delta`` hold the deltas
    applied in the last training iteration and feed the momentum term of the
    next one.

    A *passthrough* node has a single fixed weight of ``1.0`` and emits its
    input unchanged. The input layer is built from passthrough nodes.
    """

    __slots__ = (
        "weights",
        "bias",
        "passthrough",
        "last_input",
        "last_output",
        "previous_weight_deltas",
        "previous_bias_delta",
    )

    def __init__(
        self,
        connections: int,
        rng: random.Random | None = None,
        *,
        passthrough: bool = False,
    ) -> None:
        if connections <= 0:
            raise ValueError("a node needs at least one incoming connection")
        if passthrough and connections != 1:
            raise ValueError("passthrough nodes take exactly one connection")
        rng = rng or random.Random()
        self.passthrough = passthrough
        if passthrough:
            self.weights: List[Weight] = [Weight(1.0)]
        else:
            self.weights = [
                Weight(rng.uniform(-WEIGHT_INIT_RANGE, WEIGHT_INIT_RANGE)) for _ in range(connections)
            ]
        self.bias = 0.0
        self.last_input = math.nan
        self.last_output = math.nan
        self.previous_weight_deltas: Vector = [0.0] * connections
        self.previous_bias_delta = 0.0

    @property
    def connections(self) -> int:
        return len(self.weights)

    def weight_values(self) -> Vector:
        return [weight.value for weight in self.weights]

    def activate(self, inputs: Sequence[float]) -> float:
        """Compute the node's output for the full output vector of the previous layer."""

        if len(inputs) != len(self.weights):
            raise ShapeMismatchError(
                f"The number of input values ({len(inputs)}) must match the number of "
                f"connections to this node ({len(self.weights)})"
            )
        total = self.bias
        for value, weight in zip(inputs, self.weights):
            total += value * weight.value
        self.last_input = total
        self.last_output = total if self.passthrough else sigmoid(total)
        return self.last_output

    def update_weights(self, deltas: Sequence[float]) -> int:
        """Apply one delta per weight and return how many were skipped as NaN."""

        if len(deltas) != len(self.weights):
            raise ShapeMismatchError(
                f"The number of weight deltas ({len(deltas)}) must match the number of "
                f"weights this node has ({len(self.weights)})"
            )
        # Only applied deltas feed the next momentum term, so a NaN is never carried forward.
        skipped = 0
        for index, (weight, delta) in enumerate(zip(self.weights, deltas)):
            if weight.add(delta):
                self.previous_weight_deltas[index] = delta
            else:
                skipped += 1
        return skipped

    def update_bias(self, delta: float) -> bool:
        """Apply a bias delta; returns ``False`` when the update was skipped as NaN."""

        updated = self.bias + delta
        if math.isnan(updated):
            # previous_bias_delta keeps the last applied value.
            return False
        self.bias = updated
        self.previous_bias_delta = delta
        return True

    def __repr__(self) -> str:
        kind = "passthrough" if self.passthrough else "sigmoid"
        return f"Node({kind}, connections={self.connections}, bias={self.bias:.4f})"
