"""Training curves for a finished run."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Tuple


class PlotAdapter:
    """Record train MSE and test scores per epoch and draw them on close.

    Register :meth:`on_epoch` for the train split and :meth:`on_test_epoch`
    for the test split. Nothing is recorded or written unless
    ``enable_plots`` is set; matplotlib is only imported when drawing.
    """

    def __init__(self, run_dir: str | Path, enable_plots: bool = False):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self._train_loss: List[Tuple[int, float]] = []
        self._test: Dict[str, List[Tuple[int, float]]] = {}

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        if self.enable_plots and "loss" in metrics:
            self._train_loss.append((int(epoch), float(metrics["loss"])))

    def on_test_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        if not self.enable_plots:
            return
        for name in ("loss", "accuracy", "macro_f1"):
            if name in metrics:
                self._test.setdefault(name, []).append((int(epoch), float(metrics[name])))

    def close(self) -> Path | None:
        if not self.enable_plots or not (self._train_loss or self._test):
            return None
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt

        fig, (loss_ax, score_ax) = plt.subplots(2, 1, sharex=True, figsize=(6, 6))
        if self._train_loss:
            loss_ax.plot(*zip(*self._train_loss), label="train")
        if "loss" in self._test:
            loss_ax.plot(*zip(*self._test["loss"]), linestyle="--", label="test")
        loss_ax.set_ylabel("Mean squared error")
        loss_ax.legend(loc="upper right")

        for name in ("accuracy", "macro_f1"):
            if name in self._test:
                score_ax.plot(*zip(*self._test[name]), label=f"test {name}")
        score_ax.set_ylim(0.0, 1.05)
        score_ax.set_xlabel("Epoch")
        score_ax.set_ylabel("Score")
        if self._test:
            score_ax.legend(loc="lower right")

        self.run_dir.mkdir(parents=True, exist_ok=True)
        plot_path = self.run_dir / "curves.png"
        fig.savefig(plot_path)
        plt.close(fig)
        return plot_path


__all__ = ["PlotAdapter"]
