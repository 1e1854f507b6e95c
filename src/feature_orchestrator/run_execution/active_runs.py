"""Registry of runs currently executing in one orchestrator."""

from __future__ import annotations

import threading
from pathlib import Path

from .run_contracts import RunHandle, new_execution_id


class ActiveRunRegistry:
    """Thread-safe mapping from execution id to run handle.

    Entries are added when a run starts and removed on the same cleanup path
    that releases the run's temporary feature file.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._runs: dict[str, RunHandle] = {}

    def open_run(self, feature_path: Path) -> RunHandle:
        """Create a handle with an execution id not used by any active run."""
        with self._lock:
            execution_id = new_execution_id()
            while execution_id in self._runs:
                execution_id = new_execution_id()
            handle = RunHandle(execution_id=execution_id, feature_path=feature_path)
            self._runs[execution_id] = handle
            return handle

    def close_run(self, execution_id: str) -> None:
        with self._lock:
            self._runs.pop(execution_id, None)

    def execution_ids(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._runs)
