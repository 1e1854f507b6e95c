"""Run execution entities."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

EXECUTION_ID_LENGTH = 8


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one feature."""

    feature_text: str
    environment: str | None = None
    config_dir: str | None = None
    output_dir: str | None = None
    parallelism: int = 1
    thread_monitoring: bool = False


@dataclass(frozen=True)
class RunHandle:
    """Identity and input location of one in-flight run."""

    execution_id: str
    feature_path: Path
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class RunVersions:
    """Version information reported by the service."""

    engine_version: str
    runtime_version: str

    def to_payload(self) -> dict[str, str]:
        return {"karate": self.engine_version, "runtime": self.runtime_version}


def new_execution_id() -> str:
    """Return a short random token used to correlate one run in logs."""
    return uuid.uuid4().hex[:EXECUTION_ID_LENGTH]
