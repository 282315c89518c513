"""Network persistence as torch checkpoints."""

from .checkpoint import load_metadata, load_network, save_network

__all__ = ["load_metadata", "load_network", "save_network"]
