"""Fully connected sigmoid layer with momentum history."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .activations import sigmoid, sigmoid_deriv
from .errors import InvalidTopology
from .numeric import safe_cast_count
from .types import Array, Initializer, Neuron


def uniform(scale: float = 0.5) -> Initializer:
    """Return an initializer drawing from ``U(-scale, scale)``."""

    if scale <= 0:
        raise ValueError("scale must be positive")

    def _init(rng: np.random.Generator, shape: Tuple[int, int]) -> Array:
        return rng.uniform(-scale, scale, size=shape)

    return _init


def zeros(rng: np.random.Generator, shape: Tuple[int, int]) -> Array:
    """Initializer producing all-zero weights and biases."""

    return np.zeros(shape, dtype=np.float64)


class Layer:
    """A row per neuron: ``input_count`` weights followed by the bias weight.

    The layer keeps the values of its most recent forward pass (inputs,
    weighted sums and activations) because :meth:`hidden_delta` and
    :meth:`apply_delta` need them during backpropagation.
    """

    def __init__(self, input_count: int, neuron_count: int, weights: Array) -> None:
        if input_count <= 0 or neuron_count <= 0:
            raise InvalidTopology(
                f"Layer sizes must be positive, got {input_count} inputs "
                f"and {neuron_count} neurons"
            )
        weights = np.array(weights, dtype=np.float64)
        if weights.shape != (neuron_count, input_count + 1):
            raise InvalidTopology(
                f"Expected weights of shape {(neuron_count, input_count + 1)}, "
                f"got {weights.shape}"
            )
        self.input_count = int(input_count)
        self.neuron_count = int(neuron_count)
        self.weights = weights
        self.previous_delta = np.zeros_like(weights)
        self.inputs: Array | None = None
        self.pre_activation: Array | None = None
        self.activation: Array | None = None

    @classmethod
    def build(
        cls,
        input_count: int,
        neuron_count: int,
        rng: np.random.Generator,
        initializer: Initializer,
    ) -> "Layer":
        if input_count <= 0 or neuron_count <= 0:
            raise InvalidTopology(
                f"Layer sizes must be positive, got {input_count} inputs "
                f"and {neuron_count} neurons"
            )
        weights = initializer(rng, (neuron_count, input_count + 1))
        return cls(input_count, neuron_count, weights)

    def forward(self, inputs: Array) -> Tuple[Array, int]:
        """Return the layer activations and the number of clamped values."""

        with np.errstate(over="ignore"):
            terms, clamped = safe_cast_count(self.weights[:, :-1] * inputs)
            z, more = safe_cast_count(terms.sum(axis=1) + self.weights[:, -1])
        a = sigmoid(z)
        self.inputs = inputs
        self.pre_activation = z
        self.activation = a
        return a, clamped + more

    def output_delta(self, targets: Array) -> Array:
        out = self._require_activation()
        return (targets - out) * sigmoid_deriv(out)

    def hidden_delta(self, downstream: "Layer", downstream_delta: Array) -> Array:
        # Must run before ``downstream.apply_delta`` so the weights match the forward pass.
        out = self._require_activation()
        back = downstream.weights[:, :-1].T @ downstream_delta
        return back * sigmoid_deriv(out)

    def apply_delta(self, delta: Array, learning_rate: float, momentum: float) -> None:
        if self.inputs is None:
            raise RuntimeError("apply_delta called before forward")
        extended = np.append(self.inputs, 1.0)
        change = learning_rate * np.outer(delta, extended) + momentum * self.previous_delta
        self.weights = self.weights + change
        self.previous_delta = change

    def neuron(self, index: int) -> Neuron:
        row = self.weights[index]
        return Neuron(
            weights=row[:-1].copy(),
            bias=float(row[-1]),
            pre_activation=None if self.pre_activation is None else float(self.pre_activation[index]),
            activation=None if self.activation is None else float(self.activation[index]),
            previous_delta=self.previous_delta[index].copy(),
        )

    def clear_state(self) -> None:
        self.inputs = None
        self.pre_activation = None
        self.activation = None

    def _require_activation(self) -> Array:
        if self.activation is None:
            raise RuntimeError("backward called before forward")
        return self.activation

    def __len__(self) -> int:
        return self.neuron_count

    def __repr__(self) -> str:
        return f"Layer(input_count={self.input_count}, neuron_count={self.neuron_count})"


__all__ = ["Layer", "uniform", "zeros"]
