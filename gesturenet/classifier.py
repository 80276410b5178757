"""Thresholded gesture decisions on top of a trained network."""

from __future__ import annotations

import threading
from typing import Sequence

import numpy as np

from .config import GESTURE_LABELS, NetworkConfig
from .core.network import Network
from .core.types import Array
from .features import measure_inputs


class GestureClassifier:
    """Read-only facade mapping network outputs to gesture labels.

    A label is reported only when the strongest output activation is strictly
    greater than ``threshold``; otherwise :meth:`recall` returns ``None``.
    All network access goes through one lock so a retrained network can be
    installed with :meth:`swap_network` while recall is running elsewhere.
    """

    def __init__(
        self,
        network: Network,
        labels: Sequence[str] = GESTURE_LABELS,
        threshold: float = 0.95,
    ) -> None:
        labels = tuple(labels)
        if len(labels) != network.output_size:
            raise ValueError(
                f"{len(labels)} labels given for a network with {network.output_size} outputs"
            )
        if not 0.0 <= threshold <= 1.0:
            raise ValueError("threshold must be in [0, 1]")
        self.labels = labels
        self.threshold = float(threshold)
        self._network = network
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, network: Network, config: NetworkConfig) -> "GestureClassifier":
        labels = config.labels or GESTURE_LABELS
        return cls(network, labels=labels, threshold=config.confidence_threshold)

    @property
    def network(self) -> Network:
        return self._network

    def activations(self, features: Sequence[float] | Array) -> Array:
        with self._lock:
            return self._network.forward(features)

    def recall(self, features: Sequence[float] | Array) -> str | None:
        outputs = self.activations(features)
        # argmax returns the first index on ties
        winner = int(np.argmax(outputs))
        if outputs[winner] > self.threshold:
            return self.labels[winner]
        return None

    def recall_joints(self, joints: Sequence[float] | Array) -> str | None:
        """Measure a raw joint frame and classify it."""

        return self.recall(measure_inputs(joints))

    def swap_network(self, network: Network) -> Network:
        """Install ``network`` for inference and return the one it replaces."""

        if network.output_size != len(self.labels):
            raise ValueError("replacement network has a different output size")
        with self._lock:
            previous, self._network = self._network, network
        return previous


__all__ = ["GestureClassifier"]
