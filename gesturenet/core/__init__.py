"""Core numerical primitives for GestureNet."""

from . import activations, errors, layer, network, numeric, types

__all__ = ["activations", "errors", "layer", "network", "numeric", "types"]
