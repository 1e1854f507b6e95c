"""Tests for normalized result entities."""

from __future__ import annotations

from feature_orchestrator.result_normalization.normalized_models import (
    NormalizedResult,
    OutcomeStats,
    OutcomeStatus,
    RunResponseEnvelope,
    ScenarioResult,
    StepResult,
)


def test_outcome_stats_derives_failed_from_engine_totals() -> None:
    stats = OutcomeStats.from_engine_totals(total=7, passed=4)

    assert stats.failed == 3
    assert stats.passed + stats.failed == stats.total


def test_envelope_payload_uses_service_wire_names() -> None:
    envelope = RunResponseEnvelope(
        success=False,
        result=NormalizedResult(
            scenario_stats=OutcomeStats(total=1, passed=0, failed=1),
            feature_stats=OutcomeStats(total=1, passed=0, failed=1),
            elapsed_ms=15,
            feature_source_text="Feature: x",
            scenarios=(
                ScenarioResult(
                    name="s",
                    status=OutcomeStatus.FAILED,
                    steps=(
                        StepResult(
                            name="status 200",
                            status=OutcomeStatus.FAILED,
                            error_message="500",
                        ),
                    ),
                ),
            ),
        ),
        error_messages=("500",),
    )

    payload = envelope.to_payload()

    assert payload["success"] is False
    assert payload["errorMessages"] == ["500"]
    assert payload["result"]["scenarios"] == {"total": 1, "passed": 0, "failed": 1}
    assert payload["result"]["features"] == {"total": 1, "passed": 0, "failed": 1}
    assert payload["result"]["time"] == 15
    assert payload["result"]["featureContent"] == "Feature: x"
    [scenario] = payload["result"]["scenarioResults"]
    assert scenario["status"] == "failed"
    assert scenario["steps"][0]["errorMessage"] == "500"
