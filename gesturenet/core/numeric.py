"""Overflow-safe numeric casting."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .types import Array


def safe_cast(values, dtype=np.float64) -> Array:
    """Cast ``values`` to ``dtype`` replacing infinities with finite extremes.

    Values that overflow during the cast, or that were already infinite, are
    clamped to ``finfo(dtype).max`` / ``finfo(dtype).min``. NaN passes
    through untouched.
    """

    out, _ = safe_cast_count(values, dtype)
    return out


def safe_cast_count(values, dtype=np.float64) -> Tuple[Array, int]:
    """Like :func:`safe_cast` but also return the number of clamped entries."""

    info = np.finfo(dtype)
    with np.errstate(over="ignore"):
        out = np.asarray(values, dtype=np.float64).astype(dtype)
    pos = np.isposinf(out)
    neg = np.isneginf(out)
    clamped = int(np.count_nonzero(pos) + np.count_nonzero(neg))
    if clamped:
        out = np.where(pos, info.max, out)
        out = np.where(neg, info.min, out).astype(dtype)
    return out, clamped


__all__ = ["safe_cast", "safe_cast_count"]
