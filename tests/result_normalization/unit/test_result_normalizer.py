"""Tests for flattening raw engine results."""

from __future__ import annotations

import pytest
from feature_orchestrator.engine_interface.karate_reports import (
    ReportFeature,
    ReportResults,
    ReportScenario,
    ReportStep,
)
from feature_orchestrator.result_normalization.normalized_models import (
    OutcomeStatus,
    StepCapture,
)
from feature_orchestrator.result_normalization.result_normalizer import (
    normalize_engine_result,
    scenario_status,
    step_status,
)


def _results(*features: ReportFeature, **overrides) -> ReportResults:
    scenarios = [scenario for feature in features for scenario in feature.scenarios]
    failed = sum(1 for scenario in scenarios if scenario.failed)
    defaults = {
        "scenarios_total": len(scenarios),
        "scenarios_passed": len(scenarios) - failed,
        "features_total": len(features),
        "features_passed": sum(
            1 for feature in features if not any(s.failed for s in feature.scenarios)
        ),
        "fail_count": failed,
        "elapsed_ms": 5.0,
        "error_messages": (),
        "features": features,
    }
    defaults.update(overrides)
    return ReportResults(**defaults)


def _scenario(name: str, failed: bool = False, *steps: ReportStep) -> ReportScenario:
    return ReportScenario(name=name, failed=failed, steps=steps)


def test_normalize_preserves_engine_scenario_order() -> None:
    raw = _results(ReportFeature(name="F", scenarios=(_scenario("B"), _scenario("A"))))

    result = normalize_engine_result(raw, elapsed_ms=10, feature_source_text="Feature: F")

    assert [scenario.name for scenario in result.scenarios] == ["B", "A"]


def test_normalize_walks_features_then_scenarios_then_steps_in_order() -> None:
    raw = _results(
        ReportFeature(
            name="first",
            scenarios=(
                _scenario(
                    "s1",
                    False,
                    ReportStep(text="z step", status="passed"),
                    ReportStep(text="a step", status="passed"),
                ),
            ),
        ),
        ReportFeature(name="second", scenarios=(_scenario("s2"), _scenario("s1"))),
    )

    result = normalize_engine_result(raw, elapsed_ms=1, feature_source_text="")

    assert [scenario.name for scenario in result.scenarios] == ["s1", "s2", "s1"]
    assert [step.name for step in result.scenarios[0].steps] == ["z step", "a step"]


def test_mixed_outcome_produces_consistent_stats_and_statuses() -> None:
    raw = _results(
        ReportFeature(
            name="Users",
            scenarios=(
                _scenario("ok", False, ReportStep(text="status 200", status="passed")),
                _scenario(
                    "broken",
                    True,
                    ReportStep(text="status 201", status="failed", error_message="was 500"),
                ),
            ),
        )
    )

    result = normalize_engine_result(raw, elapsed_ms=42, feature_source_text="Feature: Users")

    assert result.scenario_stats.to_payload() == {"total": 2, "passed": 1, "failed": 1}
    assert result.feature_stats.to_payload() == {"total": 1, "passed": 0, "failed": 1}
    assert [scenario.status for scenario in result.scenarios] == [
        OutcomeStatus.PASSED,
        OutcomeStatus.FAILED,
    ]
    failing_step = result.scenarios[1].steps[0]
    assert failing_step.status is OutcomeStatus.FAILED
    assert failing_step.error_message == "was 500"
    assert result.elapsed_ms == 42
    assert result.feature_source_text == "Feature: Users"


def test_engine_reported_totals_win_over_walked_tree() -> None:
    raw = _results(
        ReportFeature(name="F", scenarios=(_scenario("only"),)),
        scenarios_total=5,
        scenarios_passed=3,
        features_total=2,
        features_passed=2,
    )

    result = normalize_engine_result(raw, elapsed_ms=0, feature_source_text="")

    assert result.scenario_stats.to_payload() == {"total": 5, "passed": 3, "failed": 2}
    assert result.feature_stats.to_payload() == {"total": 2, "passed": 2, "failed": 0}
    assert len(result.scenarios) == 1


@pytest.mark.parametrize(
    ("raw_status", "expected"),
    [
        ("passed", OutcomeStatus.PASSED),
        ("PASSED", OutcomeStatus.PASSED),
        ("Passed", OutcomeStatus.PASSED),
        ("failed", OutcomeStatus.FAILED),
        ("skipped", OutcomeStatus.FAILED),
        (" passed", OutcomeStatus.FAILED),
        ("", OutcomeStatus.FAILED),
        (None, OutcomeStatus.FAILED),
    ],
)
def test_step_status_only_accepts_passed_case_insensitively(raw_status, expected) -> None:
    assert step_status(raw_status) is expected


def test_scenario_status_negates_failed_flag() -> None:
    assert scenario_status(False) is OutcomeStatus.PASSED
    assert scenario_status(True) is OutcomeStatus.FAILED


def test_step_diagnostics_are_empty_without_capture_hook() -> None:
    raw = _results(
        ReportFeature(name="F", scenarios=(_scenario("s", False, ReportStep("x", "passed")),))
    )

    result = normalize_engine_result(raw, elapsed_ms=0, feature_source_text="")
    step = result.scenarios[0].steps[0]

    assert step.logs == ()
    assert step.request_snapshot == {}
    assert step.response_snapshot == {}
    assert step.to_payload() == {
        "name": "x",
        "status": "passed",
        "errorMessage": None,
        "logs": [],
        "request": {},
        "response": {},
    }


def test_step_capture_hook_populates_diagnostics() -> None:
    raw = _results(
        ReportFeature(name="F", scenarios=(_scenario("s", False, ReportStep("GET", "passed")),))
    )

    def _capture(step) -> StepCapture:
        return StepCapture(
            logs=(f"ran {step.text}",),
            request_snapshot={"method": "GET"},
            response_snapshot={"status": 200},
        )

    step = (
        normalize_engine_result(raw, elapsed_ms=0, feature_source_text="", step_capture=_capture)
        .scenarios[0]
        .steps[0]
    )

    assert step.logs == ("ran GET",)
    assert step.request_snapshot == {"method": "GET"}
    assert step.response_snapshot == {"status": 200}


def test_negative_elapsed_time_is_clamped_to_zero() -> None:
    result = normalize_engine_result(_results(), elapsed_ms=-3, feature_source_text="")

    assert result.elapsed_ms == 0
    assert result.scenarios == ()
