"""Backpropagation and the training loop."""

from .backprop import (
    DeltaBuffer,
    GradientBuffer,
    LayerDeltas,
    apply_deltas,
    backpropagate,
    compute_deltas,
    compute_gradients,
)
from .sample import TrainingSample, certainty
from .trainer import IterationResult, TaskDriver, Trainer, TrainingHistory

__all__ = [
    "DeltaBuffer",
    "GradientBuffer",
    "IterationResult",
    "LayerDeltas",
    "TaskDriver",
    "Trainer",
    "TrainingHistory",
    "TrainingSample",
    "apply_deltas",
    "backpropagate",
    "certainty",
    "compute_deltas",
    "compute_gradients",
]
