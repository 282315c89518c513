"""Plotting utilities for training progress."""

from __future__ import annotations

from typing import Sequence

import matplotlib.pyplot as plt


def plot_accuracy_history(accuracies: Sequence[float], iterations_per_round: int = 1):
    """Plot test accuracy after each training round and return the figure."""

    figure = plt.figure()
    steps = [(index + 1) * iterations_per_round for index in range(len(accuracies))]
    plt.plot(steps, [accuracy * 100 for accuracy in accuracies])
    plt.xlabel("Training iterations")
    plt.ylabel("Accuracy (%)")
    plt.ylim(0, 100)
    plt.title("Test Accuracy")
    plt.tight_layout()
    return figure
