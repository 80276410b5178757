"""Deterministic per-sample training loops for GestureNet."""

from __future__ import annotations

from typing import Callable, List, Mapping, Sequence, Union

import numpy as np

from ..core.network import Network
from ..core.types import Array, Sample, TestResult, TrainingResult
from ..data.samples import to_samples
from .metrics import compute_metrics

Row = Union[Sequence[float], Array, Sample]


class Trainer:
    """Drive forward/backward passes over an ordered dataset.

    Each call to :meth:`train_network` is exactly one pass. :meth:`run`
    repeats it for a configured number of epochs and reports metrics to
    callbacks after every epoch.
    """

    def __init__(
        self,
        network: Network,
        *,
        shuffle: bool = False,
        seed: int | None = None,
        callbacks: Sequence[object] | None = None,
        should_stop: Callable[[], bool] | None = None,
    ) -> None:
        self.network = network
        self.shuffle = shuffle
        self.callbacks = list(callbacks or [])
        self.should_stop = should_stop
        self._rng = np.random.default_rng(seed)
        self.history: List[tuple[int, Mapping[str, float]]] = []

    def train_network(self, sample_count: int, dataset: Sequence[Row]) -> TrainingResult:
        samples = self._prepare(sample_count, dataset)
        order = self._rng.permutation(len(samples)) if self.shuffle else range(len(samples))

        sq_error = 0.0
        correct = 0
        seen = 0
        stopped = False
        for idx in order:
            if self.should_stop is not None and self.should_stop():
                stopped = True
                break
            sample = samples[idx]
            output = self.network.forward(sample.inputs)
            sq_error += float(np.mean((sample.targets - output) ** 2))
            correct += int(np.argmax(output) == sample.label)
            self.network.backward(sample.targets)
            seen += 1

        return TrainingResult(
            samples=seen,
            mse=sq_error / seen if seen else 0.0,
            accuracy=correct / seen if seen else 0.0,
            stopped=stopped,
        )

    def test_network(self, sample_count: int, dataset: Sequence[Row]) -> TestResult:
        samples = self._prepare(sample_count, dataset)
        if not samples:
            return TestResult(samples=0, correct=0, accuracy=0.0, mse=0.0)
        outputs = np.vstack([self.network.forward(s.inputs) for s in samples])
        targets = np.vstack([s.targets for s in samples])
        metrics = compute_metrics(["mse", "accuracy", "macro_f1"], outputs, targets)
        return TestResult(
            samples=len(samples),
            correct=int(round(metrics["accuracy"] * len(samples))),
            accuracy=metrics["accuracy"],
            mse=metrics["mse"],
            macro_f1=metrics["macro_f1"],
        )

    def run(
        self,
        train: Sequence[Row],
        epochs: int,
        *,
        test: Sequence[Row] | None = None,
        split_loggers: Mapping[str, Sequence[object]] | None = None,
    ) -> TestResult | None:
        """Train for ``epochs`` passes; return the last test result if ``test`` is given."""

        if epochs < 1:
            raise ValueError("epochs must be at least 1")
        split_loggers = split_loggers or {}
        last_test: TestResult | None = None
        for epoch in range(1, epochs + 1):
            result = self.train_network(len(train), train)
            train_metrics = {"loss": result.mse, "accuracy": result.accuracy}
            self.history.append((epoch, train_metrics))
            self._emit_epoch("train", epoch, train_metrics, split_loggers)
            if test is not None and len(test):
                last_test = self.test_network(len(test), test)
                self._emit_epoch(
                    "test",
                    epoch,
                    {
                        "loss": last_test.mse,
                        "accuracy": last_test.accuracy,
                        "macro_f1": last_test.macro_f1,
                    },
                    split_loggers,
                )
            if result.stopped:
                break
        return last_test

    # ------------------------------------------------------------------
    # Internal helpers

    def _prepare(self, sample_count: int, dataset: Sequence[Row]) -> List[Sample]:
        if sample_count < 0:
            raise ValueError("sample_count must be non-negative")
        if sample_count > len(dataset):
            raise ValueError(f"sample_count={sample_count} exceeds dataset size {len(dataset)}")
        # Every row is validated before the first weight update.
        return to_samples(
            (dataset[i] for i in range(sample_count)),
            self.network.input_size,
            self.network.output_size,
        )

    def _emit_epoch(
        self,
        split: str,
        epoch: int,
        metrics: Mapping[str, float],
        loggers: Mapping[str, Sequence[object]],
    ) -> None:
        for callback in self.callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(epoch, metrics)  # type: ignore[attr-defined]
        for callback in loggers.get(split, []):
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(epoch, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(epoch, metrics)


__all__ = ["Trainer"]
