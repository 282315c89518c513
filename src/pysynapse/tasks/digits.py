"""Handwritten digit recognition on the Semeion dataset.

The Semeion Handwritten Digit dataset (Semeion Research Center of Sciences
of Communication, Rome) holds 1593 black and white 16x16 images of the
digits 0 to 9. Every line of ``semeion.data`` contains 256 pixel values
followed by a one-hot encoding of the digit.
"""
from __future__ import annotations

import logging
import random
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

import numpy as np

from ..errors import ConfigurationError
from ..network import Network
from ..training.sample import TrainingSample
from .synthetic import argmax_categorize

logger = logging.getLogger(__name__)

SEMEION_URL = "https://archive.ics.uci.edu/ml/machine-learning-databases/semeion/semeion.data"
IMAGE_SIDE = 16
PIXELS = IMAGE_SIDE * IMAGE_SIDE
CLASSES = 10


@dataclass
class DigitDataset:
    samples: List[TrainingSample]

    def __len__(self) -> int:
        return len(self.samples)

    def __getitem__(self, index: int) -> TrainingSample:
        return self.samples[index]

    @classmethod
    def from_array(cls, data: np.ndarray) -> "DigitDataset":
        data = np.atleast_2d(np.asarray(data, dtype=np.float64))
        if data.shape[1] != PIXELS + CLASSES:
            raise ValueError(
                f"Semeion records need {PIXELS + CLASSES} values per row, got {data.shape[1]}"
            )
        samples = [
            TrainingSample(tuple(row[:PIXELS].tolist()), tuple(row[PIXELS:].tolist()))
            for row in data
        ]
        return cls(samples)


def load_semeion(path: str | Path) -> DigitDataset:
    """Parse a local copy of ``semeion.data``."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Semeion data file not found: {path}")
    dataset = DigitDataset.from_array(np.loadtxt(path, dtype=np.float64, ndmin=2))
    logger.info("Loaded %d digit samples from %s", len(dataset), path)
    return dataset


def download_semeion(destination: str | Path, url: str = SEMEION_URL, force: bool = False) -> Path:
    """Fetch ``semeion.data`` to ``destination`` unless it is already there."""

    destination = Path(destination)
    if destination.exists() and not force:
        logger.info("Semeion data already present at %s, skipping download", destination)
        return destination
    destination.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Downloading %s -> %s", url, destination)
    with urllib.request.urlopen(url) as response, destination.open("wb") as handle:
        handle.write(response.read())
    return destination


class DigitRecognitionTask:
    """Samples random Semeion digits and judges the network by its strongest output."""

    def __init__(self, network: Network, dataset: DigitDataset, seed: int | None = None) -> None:
        if network.input_size != PIXELS:
            raise ConfigurationError(
                f"For {IMAGE_SIDE}x{IMAGE_SIDE} images the network must have {PIXELS} input "
                f"nodes, yet it has {network.input_size}"
            )
        if network.output_size != CLASSES:
            raise ConfigurationError(
                f"Digit recognition needs {CLASSES} output nodes, yet the network has {network.output_size}"
            )
        if len(dataset) == 0:
            raise ValueError("digit dataset is empty")
        self.network = network
        self.dataset = dataset
        self.rng = random.Random(seed)

    def next_sample(self) -> TrainingSample:
        return self.dataset[self.rng.randrange(len(self.dataset))]

    def categorize(self, sample: TrainingSample, output: Sequence[float]) -> bool:
        return argmax_categorize(sample, output)


__all__ = [
    "CLASSES",
    "DigitDataset",
    "DigitRecognitionTask",
    "PIXELS",
    "SEMEION_URL",
    "download_semeion",
    "load_semeion",
]
