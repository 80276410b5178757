"""Activation utilities for GestureNet."""

from __future__ import annotations

import numpy as np

from .types import Array


def sigmoid(x: Array) -> Array:
    """Return the logistic activation ``1 / (1 + e^-x)``."""

    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-x))


def sigmoid_deriv(out: Array) -> Array:
    """Derivative of the sigmoid expressed through its output."""

    return out * (1.0 - out)


__all__ = ["sigmoid", "sigmoid_deriv"]
