"""Generic sample sources and correctness judgments."""
from __future__ import annotations

from typing import Sequence

from ..training.sample import TrainingSample, check_output_length, require_binary
from ..training.trainer import Categorizer, SampleSource


def threshold_categorize(sample: TrainingSample, output: Sequence[float], threshold: float = 0.5) -> bool:
    """Correct when every output sits on the side of ``threshold`` its desired bit asks for."""

    check_output_length(sample.desired_output, output)
    require_binary(sample.desired_output)
    for desired, actual in zip(sample.desired_output, output):
        if desired == 1.0 and actual < threshold:
            return False
        if desired == 0.0 and actual > threshold:
            return False
    return True


def argmax_categorize(sample: TrainingSample, output: Sequence[float]) -> bool:
    """Correct when the strongest output marks a class the sample belongs to."""

    check_output_length(sample.desired_output, output)
    if not output:
        raise ValueError("cannot categorize an empty output")
    best = max(range(len(output)), key=output.__getitem__)
    return sample.desired_output[best] == 1.0


class FixedSampleTask:
    """Hands out the same sample on every call."""

    def __init__(self, sample: TrainingSample, categorize: Categorizer = threshold_categorize) -> None:
        self.sample = sample
        self._categorize = categorize

    def next_sample(self) -> TrainingSample:
        return self.sample

    def categorize(self, sample: TrainingSample, output: Sequence[float]) -> bool:
        return self._categorize(sample, output)


class CallableTask:
    """Adapts two plain functions to the task driver interface."""

    def __init__(self, next_sample: SampleSource, categorize: Categorizer) -> None:
        self._next_sample = next_sample
        self._categorize = categorize

    def next_sample(self) -> TrainingSample:
        return self._next_sample()

    def categorize(self, sample: TrainingSample, output: Sequence[float]) -> bool:
        return self._categorize(sample, output)


__all__ = ["CallableTask", "FixedSampleTask", "argmax_categorize", "threshold_categorize"]
