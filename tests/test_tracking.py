from pathlib import Path

import pytest

from ttt_engine.tracking import RunTracker, maybe_mlflow_run


def test_disabled_tracking_is_a_no_op(tmp_path: Path):
    with maybe_mlflow_run(False, run_name="arena", log_dir=tmp_path) as tracker:
        assert isinstance(tracker, RunTracker)
        assert not tracker.enabled
        tracker.log_params({"games": 1})
        tracker.log_metrics({"draw_rate": 1.0})
    assert not (tmp_path / "mlruns").exists()


def test_mlflow_run_logs_to_local_dir(tmp_path: Path):
    pytest.importorskip("mlflow")
    with maybe_mlflow_run(True, run_name="arena", log_dir=tmp_path) as tracker:
        assert tracker.enabled
        tracker.log_params({"games": 2})
        tracker.log_metrics({"draw_rate": 0.5})
    assert (tmp_path / "mlruns").exists()
