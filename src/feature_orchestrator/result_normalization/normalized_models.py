"""Normalized run result entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class OutcomeStatus(str, Enum):
    """Client-facing status of a scenario or step."""

    PASSED = "passed"
    FAILED = "failed"


@dataclass(frozen=True)
class OutcomeStats:
    """Total/passed/failed counters for scenarios or features."""

    total: int
    passed: int
    failed: int

    @staticmethod
    def from_engine_totals(total: int, passed: int) -> OutcomeStats:
        return OutcomeStats(total=total, passed=passed, failed=total - passed)

    def to_payload(self) -> dict[str, int]:
        return {"total": self.total, "passed": self.passed, "failed": self.failed}


@dataclass(frozen=True)
class StepCapture:
    """Per-step diagnostics attached to a step result."""

    logs: tuple[str, ...] = ()
    request_snapshot: Mapping[str, Any] = field(default_factory=dict)
    response_snapshot: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StepResult:
    """Outcome of one step."""

    name: str
    status: OutcomeStatus
    error_message: str | None
    logs: tuple[str, ...] = ()
    request_snapshot: Mapping[str, Any] = field(default_factory=dict)
    response_snapshot: Mapping[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "errorMessage": self.error_message,
            "logs": list(self.logs),
            "request": dict(self.request_snapshot),
            "response": dict(self.response_snapshot),
        }


@dataclass(frozen=True)
class ScenarioResult:
    """Outcome of one scenario with its steps in engine order."""

    name: str
    status: OutcomeStatus
    steps: tuple[StepResult, ...]

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "steps": [step.to_payload() for step in self.steps],
        }


@dataclass(frozen=True)
class NormalizedResult:
    """Flattened, client-facing view of one engine run."""

    scenario_stats: OutcomeStats
    feature_stats: OutcomeStats
    elapsed_ms: int
    feature_source_text: str
    scenarios: tuple[ScenarioResult, ...]

    def to_payload(self) -> dict[str, Any]:
        return {
            "scenarios": self.scenario_stats.to_payload(),
            "features": self.feature_stats.to_payload(),
            "time": self.elapsed_ms,
            "featureContent": self.feature_source_text,
            "scenarioResults": [scenario.to_payload() for scenario in self.scenarios],
        }


@dataclass(frozen=True)
class RunResponseEnvelope:
    """Response returned for one executed run."""

    success: bool
    result: NormalizedResult
    error_messages: tuple[str, ...]

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready wire shape of the envelope."""
        return {
            "success": self.success,
            "result": self.result.to_payload(),
            "errorMessages": list(self.error_messages),
        }
