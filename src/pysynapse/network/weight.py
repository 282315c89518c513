"""A single connection weight."""
from __future__ import annotations

import math


class Weight:
    """Scalar parameter whose updates are discarded when they would produce NaN."""

    __slots__ = ("value",)

    def __init__(self, value: float) -> None:
        self.value = float(value)

    def add(self, delta: float) -> bool:
        """Add ``delta`` to the weight and report whether the update was applied."""

        updated = self.value + delta
        if math.isnan(updated):
            return False
        self.value = updated
        return True

    def __float__(self) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"Weight({self.value:.4f})"
