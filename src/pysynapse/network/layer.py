"""An ordered group of nodes sharing the same incoming-connection count."""
from __future__ import annotations

import random
from typing import Iterator, List, Sequence

from ..errors import ShapeMismatchError
from .activation import Vector
from .node import Node

Matrix = List[List[float]]


class Layer:
    """Layer of nodes, each connected to every node of the previous layer.

    The input layer is built with ``is_input=True``: each of its nodes is a
    passthrough receiving exactly one scalar of the network input.
    """

    def __init__(
        self,
        size: int,
        connections: int,
        rng: random.Random | None = None,
        *,
        is_input: bool = False,
    ) -> None:
        if size <= 0:
            raise ValueError("a layer needs at least one node")
        if is_input and connections != 1:
            raise ValueError("input layer nodes take exactly one connection")
        self.is_input = is_input
        self.connections = connections
        self.nodes: List[Node] = [Node(connections, rng, passthrough=is_input) for _ in range(size)]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def activate(self, inputs: Sequence[float]) -> Vector:
        if self.is_input:
            if len(inputs) != len(self.nodes):
                raise ShapeMismatchError(
                    f"The number of input values ({len(inputs)}) must match the number of "
                    f"nodes in the input layer ({len(self.nodes)})"
                )
            return [node.activate((value,)) for node, value in zip(self.nodes, inputs)]
        return [node.activate(inputs) for node in self.nodes]

    def outputs(self) -> Vector:
        """Cached activations from the most recent forward pass."""

        return [node.last_output for node in self.nodes]

    def weight_matrix(self) -> Matrix:
        """Row ``n`` holds node ``n``'s weights; column ``k`` points at previous-layer node ``k``."""

        return [node.weight_values() for node in self.nodes]

    def biases(self) -> Vector:
        return [node.bias for node in self.nodes]

    def __repr__(self) -> str:
        return f"Layer(size={len(self.nodes)}, connections={self.connections}, is_input={self.is_input})"
