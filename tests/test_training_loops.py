from __future__ import annotations

from typing import Mapping

import numpy as np

from gesturenet.classifier import GestureClassifier
from gesturenet.config import GESTURE_LABELS
from gesturenet.core.network import Network
from gesturenet.data import get_dataset
from gesturenet.training.trainer import Trainer


class _Capture:
    def __init__(self) -> None:
        self.history: list[tuple[int, Mapping[str, float]]] = []

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        self.history.append((epoch, {k: float(v) for k, v in metrics.items()}))


def test_gesture_clusters_training_improves_accuracy() -> None:
    dataset = get_dataset("gesture_clusters", n_per_class=30, spread=0.05, seed=0)
    net = Network(18, 7, [18], 0.3, 0.5, seed=7)
    trainer = Trainer(net)
    capture = _Capture()

    final = trainer.run(dataset.train, 100, test=dataset.test, split_loggers={"train": [capture]})

    first = capture.history[0][1]
    last = capture.history[-1][1]
    assert last["loss"] < first["loss"]
    assert final is not None
    assert final.accuracy >= 0.9

    clf = GestureClassifier(net, labels=GESTURE_LABELS, threshold=0.5)
    decided = [clf.recall(sample.inputs) for sample in dataset.test]
    expected = [GESTURE_LABELS[sample.label] for sample in dataset.test]
    hits = sum(1 for got, want in zip(decided, expected) if got == want)
    assert hits / len(expected) >= 0.8


def test_momentum_speeds_up_early_training() -> None:
    dataset = get_dataset("gesture_clusters", n_per_class=20, seed=1)
    losses = {}
    for momentum in (0.0, 0.9):
        net = Network(18, 7, [18], 0.05, momentum, seed=3)
        trainer = Trainer(net)
        for _ in range(10):
            result = trainer.train_network(len(dataset.train), dataset.train)
        losses[momentum] = result.mse
    assert losses[0.9] < losses[0.0]
    assert np.isfinite(losses[0.9])
