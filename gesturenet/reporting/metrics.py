"""Per-epoch metric sinks for training runs."""

from __future__ import annotations

import csv
import json
import subprocess
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Mapping


@lru_cache(maxsize=1)
def _source_revision() -> str:
    try:
        out = subprocess.check_output(["git", "rev-parse", "HEAD"], stderr=subprocess.DEVNULL)
        return out.decode().strip()
    except (OSError, subprocess.CalledProcessError):  # pragma: no cover - git may be unavailable
        return "unknown"


class _EpochSink:
    """Truncates ``path`` on creation and normalises each epoch record."""

    def __init__(self, path: str | Path, split: str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.split = split

    def _record(self, epoch: int, metrics: Mapping[str, float]) -> Dict[str, object]:
        record: Dict[str, object] = {"epoch": int(epoch), "split": self.split}
        for name, value in metrics.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            record[name] = float(value)
        return record

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        raise NotImplementedError

    def __call__(self, epoch: int, metrics: Mapping[str, float]) -> None:
        self.on_epoch(epoch, metrics)


class JsonlSink(_EpochSink):
    """One JSON object per epoch, tagged with the run seed and source revision."""

    def __init__(
        self,
        path: str | Path,
        *,
        split: str = "train",
        seed: int | None = None,
        sha: str | None = None,
    ) -> None:
        super().__init__(path, split)
        self.seed = seed
        self.sha = sha or _source_revision()

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        record = self._record(epoch, metrics)
        record["seed"] = self.seed
        record["sha"] = self.sha
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")


class CsvSink(_EpochSink):
    """CSV table whose columns are fixed by the first epoch written.

    ``epoch`` and ``split`` lead, followed by the metric names in the order
    the trainer reports them. A later epoch carrying a metric outside that
    header is rejected rather than silently dropped.
    """

    def __init__(self, path: str | Path, *, split: str = "train") -> None:
        super().__init__(path, split)
        self.columns: List[str] = []

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        record = self._record(epoch, metrics)
        if not self.columns:
            self.columns = list(record)
        unknown = [name for name in record if name not in self.columns]
        if unknown:
            raise ValueError(f"Metrics {unknown} are not in the CSV header {self.columns}")
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=self.columns)
            if handle.tell() == 0:
                writer.writeheader()
            writer.writerow(record)


__all__ = ["CsvSink", "JsonlSink"]
