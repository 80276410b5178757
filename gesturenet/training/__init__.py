"""Training loops, metrics and pipelines."""

from .metrics import compute_metrics
from .trainer import Trainer

__all__ = ["Trainer", "compute_metrics"]
