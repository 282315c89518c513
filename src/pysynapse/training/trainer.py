"""Per-sample stochastic gradient descent with momentum."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, List, Optional, Protocol, Sequence

from tqdm.auto import tqdm

from ..network import Network, Vector
from .backprop import backpropagate
from .sample import TrainingSample, certainty, check_output_length

logger = logging.getLogger(__name__)

SampleSource = Callable[[], TrainingSample]
Categorizer = Callable[[TrainingSample, Sequence[float]], bool]


class TaskDriver(Protocol):
    """Anything that can hand out samples and judge the network's answers."""

    def next_sample(self) -> TrainingSample:
        ...

    def categorize(self, sample: TrainingSample, output: Sequence[float]) -> bool:
        ...


@dataclass
class IterationResult:
    """Outcome of a single training iteration."""

    output: Vector
    loss: float
    skipped_updates: int = 0
    certainty: Optional[float] = None


@dataclass
class TrainingHistory:
    """Metrics collected during :meth:`Trainer.train_n`."""

    losses: List[float] = field(default_factory=list)
    certainties: List[float] = field(default_factory=list)
    skipped_updates: int = 0

    @property
    def iterations(self) -> int:
        return len(self.losses)


def squared_error(desired_output: Sequence[float], actual_output: Sequence[float]) -> float:
    return 0.5 * sum((desired - actual) ** 2 for desired, actual in zip(desired_output, actual_output))


class Trainer:
    """Trains and evaluates a :class:`Network` on samples from an injected source.

    ``next_sample`` supplies a fresh :class:`TrainingSample` per iteration and
    ``categorize`` judges whether an output counts as correct for a sample.
    The trainer never looks at where the samples come from.

    When ``report_certainty`` is set every training iteration also computes
    :func:`~pysynapse.training.sample.certainty`, which requires binary
    desired outputs.
    """

    def __init__(
        self,
        network: Network,
        next_sample: SampleSource,
        categorize: Categorizer,
        *,
        report_certainty: bool = False,
    ) -> None:
        self.network = network
        self.next_sample = next_sample
        self.categorize = categorize
        self.report_certainty = report_certainty
        self.step = 0

    @classmethod
    def for_task(cls, network: Network, task: TaskDriver, **kwargs) -> "Trainer":
        return cls(network, task.next_sample, task.categorize, **kwargs)

    def train_one_iteration(self, sample: TrainingSample) -> IterationResult:
        """Forward pass, backpropagation and parameter update for ``sample``."""

        actual = self.network.forward(sample.input)
        check_output_length(sample.desired_output, actual)
        loss = squared_error(sample.desired_output, actual)
        sample_certainty = certainty(sample.desired_output, actual) if self.report_certainty else None
        skipped = backpropagate(self.network, sample.desired_output, actual)
        self.step += 1
        if skipped:
            logger.debug("Iteration %d skipped %d NaN updates", self.step, skipped)
        if sample_certainty is not None:
            logger.debug(
                "Iteration %d desired=%s actual=%s certainty=%.0f%%",
                self.step,
                list(sample.desired_output),
                actual,
                sample_certainty * 100,
            )
        return IterationResult(output=actual, loss=loss, skipped_updates=skipped, certainty=sample_certainty)

    def train_n(self, iterations: int, *, progress: bool = False) -> TrainingHistory:
        """Train on ``iterations`` fresh samples pulled from the source."""

        if iterations < 0:
            raise ValueError("iterations must be non-negative")
        history = TrainingHistory()
        for _ in tqdm(range(iterations), desc="Training", disable=not progress):
            result = self.train_one_iteration(self.next_sample())
            history.losses.append(result.loss)
            history.skipped_updates += result.skipped_updates
            if result.certainty is not None:
                history.certainties.append(result.certainty)
        if history.skipped_updates:
            logger.info("Skipped %d NaN updates over %d iterations", history.skipped_updates, iterations)
        return history

    def test_one_iteration(self, sample: TrainingSample) -> bool:
        """Judge the network's answer for ``sample`` without updating it."""

        output = self.network.forward(sample.input)
        check_output_length(sample.desired_output, output)
        return bool(self.categorize(sample, output))

    def test_n(self, iterations: int) -> float:
        """Fraction of ``iterations`` fresh samples the network categorizes correctly."""

        if iterations <= 0:
            raise ValueError("iterations must be positive")
        correct = sum(1 for _ in range(iterations) if self.test_one_iteration(self.next_sample()))
        accuracy = correct / iterations
        logger.debug("Accuracy over %d samples: %.2f%%", iterations, accuracy * 100)
        return accuracy


__all__ = [
    "Categorizer",
    "IterationResult",
    "SampleSource",
    "TaskDriver",
    "Trainer",
    "TrainingHistory",
    "squared_error",
]
