"""
Experiment tracking for arena runs (optional MLflow backend).

MLflow is imported only when tracking is requested, so it stays an optional
dependency (``pip install ttt-engine[tracking]``).
"""
from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional


class RunTracker:
    def __init__(self, backend: Any = None) -> None:
        self._backend = backend

    @property
    def enabled(self) -> bool:
        return self._backend is not None

    def log_params(self, params: Dict[str, object]) -> None:
        if self._backend is not None:
            self._backend.log_params(params)

    def log_metrics(self, metrics: Dict[str, float]) -> None:
        if self._backend is not None:
            self._backend.log_metrics(metrics)


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[RunTracker]:
    if not enabled:
        yield RunTracker()
        return
    import mlflow  # type: ignore

    if log_dir is not None:
        mlflow.set_tracking_uri(log_dir.resolve().joinpath("mlruns").as_uri())
    with mlflow.start_run(run_name=run_name):
        yield RunTracker(mlflow)
