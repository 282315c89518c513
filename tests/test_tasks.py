import numpy as np
import pytest

from pysynapse import ConfigurationError, Network, ShapeMismatchError, Trainer, TrainingSample
from pysynapse.tasks import (
    BinaryImageTask,
    CallableTask,
    DigitDataset,
    DigitRecognitionTask,
    FixedSampleTask,
    argmax_categorize,
    download_semeion,
    image_to_vector,
    load_semeion,
    threshold_categorize,
)


def _semeion_rows(count: int) -> np.ndarray:
    rng = np.random.default_rng(0)
    rows = np.zeros((count, 266))
    rows[:, :256] = rng.integers(0, 2, size=(count, 256))
    for index in range(count):
        rows[index, 256 + index % 10] = 1.0
    return rows


def _write_semeion(path, rows: np.ndarray) -> None:
    np.savetxt(path, rows, fmt="%.4f")


def test_threshold_categorize() -> None:
    sample = TrainingSample.of([0.0], [1.0, 0.0])
    assert threshold_categorize(sample, [0.9, 0.1]) is True
    assert threshold_categorize(sample, [0.5, 0.5]) is True
    assert threshold_categorize(sample, [0.4, 0.1]) is False
    assert threshold_categorize(sample, [0.9, 0.6]) is False
    with pytest.raises(ValueError):
        threshold_categorize(TrainingSample.of([0.0], [0.3]), [0.3])
    with pytest.raises(ShapeMismatchError):
        threshold_categorize(sample, [0.9])


def test_argmax_categorize() -> None:
    sample = TrainingSample.of([0.0], [0.0, 0.0, 1.0])
    assert argmax_categorize(sample, [0.1, 0.2, 0.9]) is True
    assert argmax_categorize(sample, [0.8, 0.2, 0.7]) is False
    with pytest.raises(ShapeMismatchError):
        argmax_categorize(sample, [0.1, 0.9, 0.2, 0.3])


def test_callable_task_delegates() -> None:
    sample = TrainingSample.of([1.0], [0.0])
    task = CallableTask(lambda: sample, lambda s, output: output[0] < 0.5)
    assert task.next_sample() is sample
    assert task.categorize(sample, [0.2]) is True
    fixed = FixedSampleTask(sample)
    assert fixed.next_sample() is sample
    assert fixed.categorize(sample, [0.7]) is False


def test_load_semeion_parses_pixels_and_labels(tmp_path) -> None:
    rows = _semeion_rows(12)
    path = tmp_path / "semeion.data"
    _write_semeion(path, rows)

    dataset = load_semeion(path)

    assert len(dataset) == 12
    assert len(dataset[0].input) == 256
    assert dataset[3].desired_output == tuple(rows[3, 256:].tolist())
    assert dataset[3].input == tuple(rows[3, :256].tolist())


def test_load_semeion_rejects_bad_rows(tmp_path) -> None:
    path = tmp_path / "broken.data"
    np.savetxt(path, np.zeros((3, 100)))
    with pytest.raises(ValueError):
        load_semeion(path)
    with pytest.raises(FileNotFoundError):
        load_semeion(tmp_path / "missing.data")


def test_download_semeion_copies_and_skips_existing(tmp_path) -> None:
    source = tmp_path / "source.data"
    _write_semeion(source, _semeion_rows(2))
    destination = tmp_path / "out" / "semeion.data"

    download_semeion(destination, url=source.as_uri())
    assert destination.read_bytes() == source.read_bytes()

    destination.write_text("stale")
    download_semeion(destination, url=source.as_uri())
    assert destination.read_text() == "stale"
    download_semeion(destination, url=source.as_uri(), force=True)
    assert destination.read_bytes() == source.read_bytes()


def test_digit_task_validates_network_shape() -> None:
    dataset = DigitDataset.from_array(_semeion_rows(3))
    with pytest.raises(ConfigurationError):
        DigitRecognitionTask(Network(16, 0, 10), dataset)
    with pytest.raises(ConfigurationError):
        DigitRecognitionTask(Network(256, 0, 2), dataset)


def test_digit_task_samples_dataset_and_trains() -> None:
    dataset = DigitDataset.from_array(_semeion_rows(20))
    network = Network(256, 0, 10, learning_rate=0.1, seed=0)
    task = DigitRecognitionTask(network, dataset, seed=1)

    assert task.next_sample() in dataset.samples
    trainer = Trainer.for_task(network, task)
    history = trainer.train_n(10)
    assert history.iterations == 10
    accuracy = trainer.test_n(20)
    assert 0.0 <= accuracy <= 1.0


def test_image_to_vector_scales_and_flattens() -> None:
    pixels = np.array([[0, 255], [51, 102]], dtype=np.uint8)
    assert image_to_vector(pixels, 2) == pytest.approx([0.0, 1.0, 0.2, 0.4])
    colour = np.stack([pixels, pixels, pixels], axis=2)
    assert image_to_vector(colour, 2) == pytest.approx([0.0, 1.0, 0.2, 0.4])
    with pytest.raises(ShapeMismatchError):
        image_to_vector(np.zeros((3, 2)), 2)


def test_binary_image_task_labels_fetched_images() -> None:
    network = Network(16, 1, 1, seed=0)
    requested = []

    def fetch(positive: bool) -> np.ndarray:
        requested.append(positive)
        return np.full((4, 4), 255 if positive else 0, dtype=np.uint8)

    task = BinaryImageTask(network, 4, fetch, seed=3)
    for _ in range(10):
        sample = task.next_sample()
        expected = 1.0 if requested[-1] else 0.0
        assert sample.desired_output == (expected,)
        assert sample.input == (expected,) * 16

    positive = TrainingSample.of([0.0] * 16, [1.0])
    negative = TrainingSample.of([0.0] * 16, [0.0])
    assert task.categorize(positive, [0.5]) is True
    assert task.categorize(positive, [0.4]) is False
    assert task.categorize(negative, [0.5]) is True
    assert task.categorize(negative, [0.6]) is False
    with pytest.raises(ValueError):
        task.categorize(TrainingSample.of([0.0] * 16, [0.5]), [0.5])


def test_binary_image_task_validates_network_shape() -> None:
    def fetch(positive: bool) -> np.ndarray:
        return np.zeros((4, 4))

    with pytest.raises(ConfigurationError):
        BinaryImageTask(Network(15, 0, 1), 4, fetch)
    with pytest.raises(ConfigurationError):
        BinaryImageTask(Network(16, 0, 2), 4, fetch)
    with pytest.raises(ValueError):
        BinaryImageTask(Network(16, 0, 1), 4, fetch, positive_rate=1.5)
