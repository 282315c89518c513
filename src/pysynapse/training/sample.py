"""Training samples and the binary certainty measure."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..errors import ShapeMismatchError


@dataclass(frozen=True, slots=True)
class TrainingSample:
    """An input vector paired with the output the network should produce."""

    input: Tuple[float, ...]
    desired_output: Tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "input", tuple(float(value) for value in self.input))
        object.__setattr__(self, "desired_output", tuple(float(value) for value in self.desired_output))

    @classmethod
    def of(cls, inputs: Sequence[float], desired_output: Sequence[float]) -> "TrainingSample":
        return cls(tuple(inputs), tuple(desired_output))


def check_output_length(desired_output: Sequence[float], actual_output: Sequence[float]) -> None:
    if len(desired_output) != len(actual_output):
        raise ShapeMismatchError(
            f"desired output has {len(desired_output)} values, network produced {len(actual_output)}"
        )


def require_binary(values: Sequence[float]) -> None:
    for value in values:
        if value != 0.0 and value != 1.0:
            raise ValueError(f"Only desired outputs of 0 or 1 are supported, got {value!r}")


def certainty(desired_output: Sequence[float], actual_output: Sequence[float]) -> float:
    """Mean confidence of ``actual_output`` in the binary ``desired_output``.

    A desired ``1`` contributes the actual activation, a desired ``0``
    contributes its complement. The result lies in ``[0, 1]``.
    """

    check_output_length(desired_output, actual_output)
    if not desired_output:
        raise ValueError("certainty of an empty output is undefined")
    require_binary(desired_output)
    total = 0.0
    for desired, actual in zip(desired_output, actual_output):
        total += actual if desired == 1.0 else 1.0 - actual
    return total / len(desired_output)


__all__ = ["TrainingSample", "certainty", "check_output_length", "require_binary"]
