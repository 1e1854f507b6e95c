"""Flattens a raw engine result tree into the normalized result model."""

from __future__ import annotations

from collections.abc import Callable

from feature_orchestrator.engine_interface.engine_contracts import (
    RawEngineResult,
    RawScenarioNode,
    RawStepNode,
)

from .normalized_models import (
    NormalizedResult,
    OutcomeStats,
    OutcomeStatus,
    ScenarioResult,
    StepCapture,
    StepResult,
)

StepCaptureHook = Callable[[RawStepNode], StepCapture]

_PASSED = OutcomeStatus.PASSED.value


def normalize_engine_result(
    raw: RawEngineResult,
    *,
    elapsed_ms: int,
    feature_source_text: str,
    step_capture: StepCaptureHook | None = None,
) -> NormalizedResult:
    """Build a `NormalizedResult` from `raw` without reordering or re-counting.

    Scenario and feature totals are taken from the engine-reported counters; the
    `scenarios` list is the walked tree in engine order (features, then
    scenarios, then steps). `step_capture` may attach logs and request/response
    snapshots to each step; without it those fields stay empty.
    """
    capture = step_capture or _empty_capture
    scenarios = tuple(
        _normalize_scenario(scenario, capture)
        for feature in raw.feature_results()
        for scenario in feature.scenario_results()
    )
    return NormalizedResult(
        scenario_stats=OutcomeStats.from_engine_totals(raw.scenarios_total, raw.scenarios_passed),
        feature_stats=OutcomeStats.from_engine_totals(raw.features_total, raw.features_passed),
        elapsed_ms=max(0, elapsed_ms),
        feature_source_text=feature_source_text,
        scenarios=scenarios,
    )


def step_status(raw_status: str | None) -> OutcomeStatus:
    """Map an engine step status string; anything other than `passed` is a failure."""
    if raw_status is not None and raw_status.lower() == _PASSED:
        return OutcomeStatus.PASSED
    return OutcomeStatus.FAILED


def scenario_status(failed: bool) -> OutcomeStatus:
    """Map the engine's scenario-level `failed` flag to the client vocabulary."""
    return OutcomeStatus.FAILED if failed else OutcomeStatus.PASSED


def _normalize_scenario(scenario: RawScenarioNode, capture: StepCaptureHook) -> ScenarioResult:
    return ScenarioResult(
        name=scenario.name,
        status=scenario_status(scenario.failed),
        steps=tuple(_normalize_step(step, capture) for step in scenario.step_results()),
    )


def _normalize_step(step: RawStepNode, capture: StepCaptureHook) -> StepResult:
    captured = capture(step)
    return StepResult(
        name=step.text,
        status=step_status(step.status),
        error_message=step.error_message,
        logs=tuple(captured.logs),
        request_snapshot=dict(captured.request_snapshot),
        response_snapshot=dict(captured.response_snapshot),
    )


def _empty_capture(_step: RawStepNode) -> StepCapture:
    return StepCapture()
