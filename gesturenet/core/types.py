"""Core typing contracts for GestureNet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple

import numpy as np

Array = np.ndarray

Initializer = Callable[[np.random.Generator, Tuple[int, int]], Array]


@dataclass(frozen=True)
class Sample:
    """A feature vector paired with its target vector."""

    inputs: Array
    targets: Array

    def __post_init__(self) -> None:
        inputs = np.array(self.inputs, dtype=np.float64).reshape(-1)
        targets = np.array(self.targets, dtype=np.float64).reshape(-1)
        inputs.setflags(write=False)
        targets.setflags(write=False)
        object.__setattr__(self, "inputs", inputs)
        object.__setattr__(self, "targets", targets)

    @property
    def label(self) -> int:
        """Index of the strongest target entry."""

        return int(np.argmax(self.targets))


@dataclass(frozen=True)
class Neuron:
    """Read-only snapshot of a single neuron inside a layer."""

    weights: Array
    bias: float
    pre_activation: float | None
    activation: float | None
    previous_delta: Array


@dataclass(frozen=True)
class TrainingResult:
    """Aggregate metrics for one training pass.

    Both values are measured on each sample's output before its update.
    """

    samples: int
    mse: float
    accuracy: float
    stopped: bool = False


@dataclass(frozen=True)
class TestResult:
    """Aggregate metrics for one test pass."""

    __test__ = False

    samples: int
    correct: int
    accuracy: float
    mse: float
    macro_f1: float = 0.0


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`gesturenet.training.pipelines.run_pipeline`."""

    epochs: int
    accuracy: float
    metrics_path: str
    summary_path: str = ""
    checkpoint_path: str = ""
