"""Logistic activation and its derivative."""
from __future__ import annotations

import math
from typing import List

Vector = List[float]


def sigmoid(x: float) -> float:
    # Branch on sign so math.exp never sees a large positive argument.
    if x >= 0.0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def sigmoid_derivative(y: float) -> float:
    """Derivative of the sigmoid expressed through its activation ``y``."""

    return y * (1.0 - y)
