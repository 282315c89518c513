"""Save and restore networks as ``torch.save`` checkpoints."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import torch

from ..network import Network

logger = logging.getLogger(__name__)

_LAYER_KEYS = ("weights", "biases", "previous_weight_deltas", "previous_bias_deltas")


def network_to_checkpoint(network: Network, metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Convert a network into a checkpoint dictionary of float64 tensors."""

    state = network.state_dict()
    return {
        "sizes": list(state["sizes"]),
        "learning_rate": float(state["learning_rate"]),
        "momentum": float(state["momentum"]),
        "layers": [
            {key: torch.tensor(layer[key], dtype=torch.float64) for key in _LAYER_KEYS}
            for layer in state["layers"]
        ],
        "metadata": dict(metadata or {}),
    }


def network_from_checkpoint(checkpoint: Dict[str, Any]) -> Network:
    missing = [key for key in ("sizes", "learning_rate", "momentum", "layers") if key not in checkpoint]
    if missing:
        raise ValueError(f"checkpoint is missing required keys: {missing}")
    state = {
        "sizes": [int(size) for size in checkpoint["sizes"]],
        "learning_rate": float(checkpoint["learning_rate"]),
        "momentum": float(checkpoint["momentum"]),
        "layers": [
            {key: layer[key].tolist() for key in _LAYER_KEYS if key in layer}
            for layer in checkpoint["layers"]
        ],
    }
    return Network.from_state_dict(state)


def save_network(network: Network, path: str | Path, metadata: Optional[Dict[str, Any]] = None) -> Path:
    """Persist topology, hyperparameters and every weight and bias of ``network``."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    torch.save(network_to_checkpoint(network, metadata), path)
    logger.info("Saved network %s to %s", network.sizes, path)
    return path


def _read_checkpoint(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Checkpoint not found: {path}")
    checkpoint = torch.load(path, map_location="cpu", weights_only=True)
    if not isinstance(checkpoint, dict):
        raise ValueError(f"{path} does not contain a network checkpoint")
    return checkpoint


def load_network(path: str | Path) -> Network:
    """Rebuild a network written by :func:`save_network`."""

    path = Path(path)
    network = network_from_checkpoint(_read_checkpoint(path))
    logger.info("Loaded network %s from %s", network.sizes, path)
    return network


def load_metadata(path: str | Path) -> Dict[str, Any]:
    metadata = _read_checkpoint(Path(path)).get("metadata", {})
    if not isinstance(metadata, dict):
        raise ValueError(f"{path} holds malformed checkpoint metadata")
    return dict(metadata)


__all__ = ["load_metadata", "load_network", "network_from_checkpoint", "network_to_checkpoint", "save_network"]
