"""Multilayer perceptron trained by per-sample backpropagation with momentum."""

from __future__ import annotations

import copy
from typing import Mapping, Sequence

import numpy as np

from .errors import InvalidTopology
from .layer import Layer, uniform
from .numeric import safe_cast_count
from .types import Array, Initializer


class Network:
    """Ordered sigmoid layers: hidden layers first, output layer last.

    ``hidden_sizes`` may be empty, which yields a single logistic layer
    mapping inputs straight to outputs. Weights are the only state that
    changes after construction and only :meth:`backward` changes them.
    """

    def __init__(
        self,
        input_size: int,
        output_size: int,
        hidden_sizes: Sequence[int],
        learning_rate: float,
        momentum: float,
        *,
        seed: int | None = None,
        initializer: Initializer | None = None,
    ) -> None:
        hidden = [int(h) for h in hidden_sizes]
        _validate(int(input_size), int(output_size), hidden, learning_rate, momentum)
        self.input_size = int(input_size)
        self.output_size = int(output_size)
        self.hidden_sizes = tuple(hidden)
        self.learning_rate = float(learning_rate)
        self.momentum = float(momentum)
        self.overflow_events = 0

        rng = np.random.default_rng(seed)
        init = initializer or uniform(0.5)
        dims = [self.input_size, *hidden, self.output_size]
        self.layers = [
            Layer.build(in_dim, out_dim, rng, init)
            for in_dim, out_dim in zip(dims[:-1], dims[1:])
        ]
        self._ready = False

    @classmethod
    def from_config(cls, config, *, initializer: Initializer | None = None) -> "Network":
        """Build a network from a :class:`gesturenet.config.NetworkConfig`."""

        return cls(
            config.input_size,
            config.output_size,
            config.hidden_sizes,
            config.learning_rate,
            config.momentum,
            seed=config.seed,
            initializer=initializer,
        )

    @property
    def layer_dims(self) -> list[int]:
        return [self.input_size, *self.hidden_sizes, self.output_size]

    def forward(self, inputs: Sequence[float] | Array) -> Array:
        self._ready = False
        x, clamped = safe_cast_count(np.asarray(inputs, dtype=np.float64).reshape(-1))
        if x.shape[0] != self.input_size:
            raise ValueError(f"Expected {self.input_size} inputs, got {x.shape[0]}")
        for layer in self.layers:
            x, count = layer.forward(x)
            clamped += count
        self.overflow_events += clamped
        self._ready = True
        return x.copy()

    def backward(self, targets: Sequence[float] | Array) -> None:
        if not self._ready:
            raise RuntimeError("backward must directly follow forward on the same sample")
        t = np.asarray(targets, dtype=np.float64).reshape(-1)
        if t.shape[0] != self.output_size:
            raise ValueError(f"Expected {self.output_size} targets, got {t.shape[0]}")

        deltas: list[Array] = [None] * len(self.layers)  # type: ignore[list-item]
        last = len(self.layers) - 1
        deltas[last] = self.layers[last].output_delta(t)
        for idx in reversed(range(last)):
            deltas[idx] = self.layers[idx].hidden_delta(self.layers[idx + 1], deltas[idx + 1])

        for layer, delta in zip(self.layers, deltas):
            layer.apply_delta(delta, self.learning_rate, self.momentum)
        self._ready = False

    def copy(self) -> "Network":
        """Independent deep copy, e.g. a shadow network for retraining."""

        return copy.deepcopy(self)

    def state_dict(self) -> Mapping[str, Array]:
        state: dict[str, Array] = {}
        for idx, layer in enumerate(self.layers):
            state[f"W{idx}"] = layer.weights.copy()
            state[f"M{idx}"] = layer.previous_delta.copy()
        return state

    def load_state_dict(self, state: Mapping[str, Array]) -> None:
        for idx, layer in enumerate(self.layers):
            key = f"W{idx}"
            if key not in state:
                raise KeyError(f"Missing weight {key} in state dict")
            weights = np.array(state[key], dtype=np.float64)
            if weights.shape != layer.weights.shape:
                raise InvalidTopology(
                    f"{key} has shape {weights.shape}, expected {layer.weights.shape}"
                )
            layer.weights = weights
            momentum = state.get(f"M{idx}")
            layer.previous_delta = (
                np.zeros_like(weights) if momentum is None else np.array(momentum, dtype=np.float64)
            )
            layer.clear_state()
        self._ready = False

    def parameter_count(self) -> int:
        return int(sum(layer.weights.size for layer in self.layers))

    def __repr__(self) -> str:
        return (
            f"Network(dims={self.layer_dims}, learning_rate={self.learning_rate}, "
            f"momentum={self.momentum})"
        )


def _validate(
    input_size: int,
    output_size: int,
    hidden: Sequence[int],
    learning_rate: float,
    momentum: float,
) -> None:
    if input_size <= 0:
        raise InvalidTopology(f"input_size must be positive, got {input_size}")
    if output_size <= 0:
        raise InvalidTopology(f"output_size must be positive, got {output_size}")
    bad = [h for h in hidden if h <= 0]
    if bad:
        raise InvalidTopology(f"hidden sizes must be positive, got {list(hidden)}")
    if not 0.0 < learning_rate <= 1.0:
        raise InvalidTopology(f"learning_rate must be in (0, 1], got {learning_rate}")
    if not 0.0 <= momentum < 1.0:
        raise InvalidTopology(f"momentum must be in [0, 1), got {momentum}")


__all__ = ["Network"]
