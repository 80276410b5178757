"""Metric helpers for the trainer."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

import numpy as np

from ..core.types import Array


def _confusion(predictions: Array, targets: Array) -> Array:
    classes = targets.shape[1]
    pred_idx = np.argmax(predictions, axis=1)
    targ_idx = np.argmax(targets, axis=1)
    counts = np.bincount(targ_idx * classes + pred_idx, minlength=classes * classes)
    return counts.reshape(classes, classes)


def compute_metric(name: str, predictions: Array, targets: Array) -> float:
    """Score one-hot ``targets`` against network ``predictions`` row by row."""

    key = name.lower()
    preds = np.atleast_2d(predictions)
    targs = np.atleast_2d(targets)
    if preds.shape != targs.shape:
        raise ValueError(f"predictions {preds.shape} and targets {targs.shape} differ")
    if preds.size == 0:
        return 0.0
    if key == "mse":
        return float(np.mean((targs - preds) ** 2))
    if key == "accuracy":
        return float(np.trace(_confusion(preds, targs)) / preds.shape[0])
    if key == "macro_f1":
        # rows are true classes, columns predicted classes
        confusion = _confusion(preds, targs)
        hits = np.diag(confusion).astype(np.float64)
        support = confusion.sum(axis=1) + confusion.sum(axis=0)
        f1 = np.divide(2.0 * hits, support, out=np.zeros_like(hits), where=support > 0)
        return float(np.mean(f1))
    raise KeyError(f"Unknown metric: {name}")


def compute_metrics(names: Iterable[str], predictions: Array, targets: Array) -> Mapping[str, float]:
    results: Dict[str, float] = {}
    for name in names:
        results[name.lower()] = compute_metric(name, predictions, targets)
    return results


__all__ = ["compute_metric", "compute_metrics"]
