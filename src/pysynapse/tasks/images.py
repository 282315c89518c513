"""Binary image recognition on pictures supplied by an external fetcher.

The fetcher decides where pictures come from (a web API, a folder on disk,
a generator) and is responsible for decoding and scaling them to
``image_size`` x ``image_size``. This module only turns pixels into input
vectors and pairs them with a ``[1.0]`` or ``[0.0]`` label.
"""
from __future__ import annotations

import random
from typing import Callable, Sequence

import numpy as np

from ..errors import ConfigurationError, ShapeMismatchError
from ..network import Network, Vector
from ..training.sample import TrainingSample, require_binary

ImageFetcher = Callable[[bool], np.ndarray]


def image_to_vector(pixels: np.ndarray, image_size: int) -> Vector:
    """Flatten a square 8-bit image row by row into intensities in ``[0, 1]``.

    Colour images (``H x W x C``) are averaged over their channels first.
    """

    array = np.asarray(pixels, dtype=np.float64)
    if array.ndim == 3:
        array = array.mean(axis=2)
    if array.shape != (image_size, image_size):
        raise ShapeMismatchError(
            f"expected a {image_size}x{image_size} image, got shape {tuple(np.shape(pixels))}"
        )
    return (np.clip(array, 0.0, 255.0) / 255.0).reshape(-1).tolist()


class BinaryImageTask:
    """Asks the fetcher for positive or negative pictures and trains a one-output network on them."""

    def __init__(
        self,
        network: Network,
        image_size: int,
        fetch_image: ImageFetcher,
        seed: int | None = None,
        positive_rate: float = 0.5,
    ) -> None:
        if image_size <= 0:
            raise ConfigurationError("image_size must be positive")
        if network.input_size != image_size * image_size:
            raise ConfigurationError(
                f"For the specified image size of {image_size} the network must have "
                f"{image_size * image_size} input nodes, yet it has {network.input_size}"
            )
        if network.output_size != 1:
            raise ConfigurationError(
                f"Binary image recognition needs a single output node, yet the network has {network.output_size}"
            )
        if not 0.0 <= positive_rate <= 1.0:
            raise ValueError("positive_rate must lie in [0, 1]")
        self.network = network
        self.image_size = image_size
        self.fetch_image = fetch_image
        self.positive_rate = positive_rate
        self.rng = random.Random(seed)

    def next_sample(self) -> TrainingSample:
        positive = self.rng.random() < self.positive_rate
        pixels = image_to_vector(self.fetch_image(positive), self.image_size)
        return TrainingSample(tuple(pixels), (1.0 if positive else 0.0,))

    def categorize(self, sample: TrainingSample, output: Sequence[float]) -> bool:
        require_binary(sample.desired_output)
        if sample.desired_output[0] == 1.0:
            return output[0] >= 0.5
        return output[0] <= 0.5


__all__ = ["BinaryImageTask", "ImageFetcher", "image_to_vector"]
