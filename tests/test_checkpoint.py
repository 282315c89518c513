import pytest

torch = pytest.importorskip("torch")

from pysynapse import Network, Trainer, TrainingSample
from pysynapse.persistence import load_metadata, load_network, save_network
from pysynapse.persistence.checkpoint import network_from_checkpoint, network_to_checkpoint
from pysynapse.tasks import FixedSampleTask


def test_checkpoint_roundtrip_preserves_outputs(tmp_path) -> None:
    network = Network(5, 2, 3, learning_rate=0.3, momentum=0.2, seed=4)
    trainer = Trainer.for_task(network, FixedSampleTask(TrainingSample.of([0.2] * 5, [1.0, 0.0, 1.0])))
    trainer.train_n(5)

    path = save_network(network, tmp_path / "models" / "net.pt", metadata={"accuracy": 0.5})
    restored = load_network(path)

    assert restored.sizes == network.sizes
    assert restored.learning_rate == pytest.approx(0.3)
    assert restored.momentum == pytest.approx(0.2)
    assert restored.state_dict() == network.state_dict()
    sample = [0.9, 0.1, 0.4, 0.6, 0.0]
    assert restored.forward(sample) == network.forward(sample)
    assert load_metadata(path) == {"accuracy": 0.5}


def test_checkpoint_stores_float64_tensors() -> None:
    checkpoint = network_to_checkpoint(Network(3, 1, 2, seed=0))
    first = checkpoint["layers"][1]
    assert first["weights"].dtype == torch.float64
    assert tuple(first["weights"].shape) == (2, 3)
    assert tuple(checkpoint["layers"][0]["weights"].shape) == (3, 1)


def test_load_missing_checkpoint(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_network(tmp_path / "absent.pt")
    with pytest.raises(FileNotFoundError):
        load_metadata(tmp_path / "absent.pt")


def test_non_dict_checkpoint_is_rejected(tmp_path) -> None:
    path = tmp_path / "list.pt"
    torch.save([1, 2], path)
    with pytest.raises(ValueError):
        load_network(path)
    with pytest.raises(ValueError):
        load_metadata(path)


def test_incomplete_checkpoint_is_rejected() -> None:
    with pytest.raises(ValueError):
        network_from_checkpoint({"sizes": [2, 1]})
