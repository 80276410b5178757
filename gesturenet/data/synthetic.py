"""Pure in-memory synthetic datasets."""

from __future__ import annotations

import numpy as np

from .registry import DatasetSpec, register_dataset
from .samples import one_hot, to_samples


@register_dataset("separable")
def _separable(repeats: int = 1, **_: object) -> DatasetSpec:
    """Two points, two classes: ``[0, 0] -> [1, 0]`` and ``[1, 1] -> [0, 1]``."""

    if repeats < 1:
        raise ValueError("repeats must be at least 1")
    rows = [[0.0, 0.0, 1.0, 0.0], [1.0, 1.0, 0.0, 1.0]] * int(repeats)
    samples = to_samples(rows, 2, 2)
    return DatasetSpec(
        name="separable",
        input_size=2,
        output_size=2,
        train=samples,
        test=to_samples(rows[:2], 2, 2),
        provenance={"type": "separable", "repeats": int(repeats)},
    )


@register_dataset("gesture_clusters")
def _gesture_clusters(
    n_features: int = 18,
    n_classes: int = 7,
    n_per_class: int = 40,
    spread: float = 0.05,
    test_split: float = 0.25,
    seed: int = 0,
    **_: object,
) -> DatasetSpec:
    """Seeded Gaussian clusters in distance-feature space, one per class."""

    if not 0 < test_split < 1:
        raise ValueError("test_split must be in (0, 1)")
    rng = np.random.default_rng(seed)
    centres = rng.uniform(0.1, 0.9, size=(n_classes, n_features))
    labels = np.repeat(np.arange(n_classes), n_per_class)
    x = centres[labels] + spread * rng.standard_normal((labels.shape[0], n_features))
    y = one_hot(labels, n_classes)

    order = rng.permutation(labels.shape[0])
    x, y = x[order], y[order]
    test_size = max(1, int(round(labels.shape[0] * test_split)))
    rows = np.hstack([x, y])
    train = to_samples(rows[test_size:], n_features, n_classes)
    test = to_samples(rows[:test_size], n_features, n_classes)

    return DatasetSpec(
        name="gesture_clusters",
        input_size=n_features,
        output_size=n_classes,
        train=train,
        test=test,
        provenance={
            "type": "gesture_clusters",
            "n_features": n_features,
            "n_classes": n_classes,
            "n_per_class": n_per_class,
            "spread": spread,
            "test_split": test_split,
            "seed": seed,
        },
    )
