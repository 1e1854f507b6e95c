"""Karate JSON report entities and reader."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .engine_contracts import EngineInvocationError

REPORTS_DIRNAME = "karate-reports"
SUMMARY_FILENAME = "karate-summary-json.txt"
FEATURE_REPORT_SUFFIX = ".karate-json.txt"


@dataclass(frozen=True)
class ReportStep:
    """Step entry of a Karate feature report."""

    text: str
    status: str
    error_message: str | None = None


@dataclass(frozen=True)
class ReportScenario:
    """Scenario entry of a Karate feature report."""

    name: str
    failed: bool
    steps: tuple[ReportStep, ...] = ()

    def step_results(self) -> tuple[ReportStep, ...]:
        return self.steps


@dataclass(frozen=True)
class ReportFeature:
    """One `*.karate-json.txt` feature report."""

    name: str
    scenarios: tuple[ReportScenario, ...] = ()

    def scenario_results(self) -> tuple[ReportScenario, ...]:
        return self.scenarios


@dataclass(frozen=True)
class ReportResults:  # pylint: disable=too-many-instance-attributes
    """Run-level results assembled from the Karate summary and feature reports."""

    scenarios_total: int
    scenarios_passed: int
    features_total: int
    features_passed: int
    fail_count: int
    elapsed_ms: float
    error_messages: tuple[str, ...]
    features: tuple[ReportFeature, ...]

    def feature_results(self) -> tuple[ReportFeature, ...]:
        return self.features


def read_karate_reports(output_dir: Path | str) -> ReportResults:
    """Load the Karate reports written below `output_dir`."""
    reports_dir = Path(output_dir) / REPORTS_DIRNAME
    summary = _load_json_mapping(reports_dir / SUMMARY_FILENAME)

    features = tuple(
        _parse_feature(_load_json_mapping(path))
        for path in _feature_report_paths(reports_dir, summary)
    )

    scenarios_passed = _require_count(summary, "scenariosPassed")
    scenarios_failed = _require_count(summary, "scenariosfailed", "scenariosFailed")
    features_passed = _require_count(summary, "featuresPassed")
    features_failed = _require_count(summary, "featuresFailed")
    elapsed = summary.get("elapsedTime", 0)
    if isinstance(elapsed, bool) or not isinstance(elapsed, (int, float)):
        raise EngineInvocationError("Karate summary field 'elapsedTime' must be a number.")

    return ReportResults(
        scenarios_total=scenarios_passed + scenarios_failed,
        scenarios_passed=scenarios_passed,
        features_total=features_passed + features_failed,
        features_passed=features_passed,
        fail_count=scenarios_failed,
        elapsed_ms=float(elapsed),
        error_messages=_collect_error_messages(features),
        features=features,
    )


def _feature_report_paths(reports_dir: Path, summary: Mapping[str, Any]) -> list[Path]:
    entries = summary.get("featureSummary")
    if not isinstance(entries, Sequence) or isinstance(entries, str):
        return sorted(reports_dir.glob(f"*{FEATURE_REPORT_SUFFIX}"))
    paths = []
    for entry in entries:
        if not isinstance(entry, Mapping) or not isinstance(
            entry.get("packageQualifiedName"), str
        ):
            raise EngineInvocationError("Karate feature summary entry is malformed.")
        paths.append(reports_dir / f"{entry['packageQualifiedName']}{FEATURE_REPORT_SUFFIX}")
    return paths


def _parse_feature(payload: Mapping[str, Any]) -> ReportFeature:
    name = payload.get("name") or payload.get("relativePath") or ""
    scenarios = payload.get("scenarioResults") or []
    if not isinstance(scenarios, Sequence):
        raise EngineInvocationError("Karate feature report 'scenarioResults' must be a list.")
    return ReportFeature(
        name=str(name),
        scenarios=tuple(_parse_scenario(item) for item in scenarios),
    )


def _parse_scenario(payload: Any) -> ReportScenario:
    if not isinstance(payload, Mapping):
        raise EngineInvocationError("Karate scenario result must be an object.")
    steps = payload.get("stepResults") or []
    if not isinstance(steps, Sequence):
        raise EngineInvocationError("Karate scenario 'stepResults' must be a list.")
    return ReportScenario(
        name=str(payload.get("name") or ""),
        failed=bool(payload.get("failed", False)),
        steps=tuple(_parse_step(item) for item in steps),
    )


def _parse_step(payload: Any) -> ReportStep:
    if not isinstance(payload, Mapping):
        raise EngineInvocationError("Karate step result must be an object.")
    step = payload.get("step") or {}
    result = payload.get("result") or {}
    if not isinstance(step, Mapping) or not isinstance(result, Mapping):
        raise EngineInvocationError("Karate step result is malformed.")
    error_message = result.get("errorMessage")
    return ReportStep(
        text=str(step.get("text") or ""),
        status=str(result.get("status") or ""),
        error_message=str(error_message) if error_message else None,
    )


def _collect_error_messages(features: Sequence[ReportFeature]) -> tuple[str, ...]:
    return tuple(
        step.error_message
        for feature in features
        for scenario in feature.scenarios
        if scenario.failed
        for step in scenario.steps
        if step.error_message
    )


def _load_json_mapping(path: Path) -> Mapping[str, Any]:
    try:
        parsed = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise EngineInvocationError(f"Karate report not found: {path}") from exc
    except (OSError, ValueError) as exc:
        raise EngineInvocationError(f"Failed to read Karate report {path}: {exc}") from exc
    if not isinstance(parsed, Mapping):
        raise EngineInvocationError(f"Karate report root must be an object: {path}")
    return parsed


def _require_count(payload: Mapping[str, Any], *keys: str) -> int:
    for key in keys:
        if key in payload:
            value = payload[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise EngineInvocationError(f"Karate summary field '{key}' must be a count.")
            return value
    raise EngineInvocationError(f"Karate summary is missing '{keys[0]}'.")
