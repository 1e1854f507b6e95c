"""Contracts between the orchestrator and a feature execution engine."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class EngineInvocationError(Exception):
    """Raised when the engine cannot be invoked or produces no readable result."""


@dataclass(frozen=True)
class EngineRunOptions:
    """Options forwarded to the engine for one run."""

    environment: str | None = None
    config_dir: str | None = None
    output_dir: str | None = None
    parallelism: int = 1
    thread_monitoring: bool = False
    timeout_seconds: float | None = None


class RawStepNode(Protocol):
    """Read-only view of one executed step."""

    @property
    def text(self) -> str: ...

    @property
    def status(self) -> str: ...

    @property
    def error_message(self) -> str | None: ...


class RawScenarioNode(Protocol):
    """Read-only view of one executed scenario."""

    @property
    def name(self) -> str: ...

    @property
    def failed(self) -> bool: ...

    def step_results(self) -> Sequence[RawStepNode]: ...


class RawFeatureNode(Protocol):
    """Read-only view of one executed feature."""

    @property
    def name(self) -> str: ...

    def scenario_results(self) -> Sequence[RawScenarioNode]: ...


class RawEngineResult(Protocol):
    """Read-only view of a whole engine run, including engine-reported totals."""

    @property
    def scenarios_total(self) -> int: ...

    @property
    def scenarios_passed(self) -> int: ...

    @property
    def features_total(self) -> int: ...

    @property
    def features_passed(self) -> int: ...

    @property
    def fail_count(self) -> int: ...

    @property
    def elapsed_ms(self) -> float: ...

    @property
    def error_messages(self) -> Sequence[str]: ...

    def feature_results(self) -> Sequence[RawFeatureNode]: ...


class FeatureEngine(Protocol):
    """Engine able to execute one feature file and report its results."""

    @property
    def engine_version(self) -> str: ...

    @property
    def runtime_version(self) -> str: ...

    def run(self, feature_path: Path, options: EngineRunOptions) -> RawEngineResult: ...
