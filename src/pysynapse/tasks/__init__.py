"""Task drivers that feed samples to the trainer and judge its answers."""

from .digits import DigitDataset, DigitRecognitionTask, download_semeion, load_semeion
from .images import BinaryImageTask, image_to_vector
from .synthetic import CallableTask, FixedSampleTask, argmax_categorize, threshold_categorize

__all__ = [
    "BinaryImageTask",
    "CallableTask",
    "DigitDataset",
    "DigitRecognitionTask",
    "FixedSampleTask",
    "argmax_categorize",
    "download_semeion",
    "image_to_vector",
    "load_semeion",
    "threshold_categorize",
]
