"""Run report workbook writer tests."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from feature_orchestrator.result_normalization.normalized_models import (
    NormalizedResult,
    OutcomeStats,
    OutcomeStatus,
    RunResponseEnvelope,
    ScenarioResult,
    StepResult,
)
from feature_orchestrator.results_writing import (
    RUN_INFO_SHEET_NAME,
    SCENARIOS_SHEET_NAME,
    RunMetadata,
    write_run_report,
)
from openpyxl import load_workbook


def _envelope() -> RunResponseEnvelope:
    return RunResponseEnvelope(
        success=False,
        result=NormalizedResult(
            scenario_stats=OutcomeStats(total=3, passed=2, failed=1),
            feature_stats=OutcomeStats(total=1, passed=0, failed=1),
            elapsed_ms=640,
            feature_source_text="Feature: users",
            scenarios=(
                ScenarioResult(
                    name="create user",
                    status=OutcomeStatus.FAILED,
                    steps=(
                        StepResult(
                            name="method post", status=OutcomeStatus.PASSED, error_message=None
                        ),
                        StepResult(
                            name="status 201",
                            status=OutcomeStatus.FAILED,
                            error_message="status code was: 500",
                        ),
                    ),
                ),
                ScenarioResult(name="empty", status=OutcomeStatus.PASSED, steps=()),
            ),
        ),
        error_messages=("status code was: 500",),
    )


def test_write_run_report_writes_step_rows_and_run_info(tmp_path: Path) -> None:
    output_path = tmp_path / "reports" / "run.xlsx"
    metadata = RunMetadata(
        run_start=datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC),
        feature_path=tmp_path / "users.feature",
        output_path=output_path,
        environment="qa",
    )

    written = write_run_report(_envelope(), output_path, metadata)

    assert written == output_path.resolve()
    workbook = load_workbook(output_path)
    assert workbook.sheetnames == [SCENARIOS_SHEET_NAME, RUN_INFO_SHEET_NAME]

    sheet = workbook[SCENARIOS_SHEET_NAME]
    rows = [list(row) for row in sheet.iter_rows(min_row=1, max_row=4, values_only=True)]
    assert rows[0] == ["Scenario", "Scenario Status", "Step", "Step Status", "Error"]
    assert rows[1] == ["create user", "failed", "method post", "passed", None]
    assert rows[2] == ["create user", "failed", "status 201", "failed", "status code was: 500"]
    assert rows[3][:2] == ["empty", "passed"]

    run_info_sheet = workbook[RUN_INFO_SHEET_NAME]
    run_info = {
        run_info_sheet.cell(row=row, column=1).value: run_info_sheet.cell(row=row, column=2).value
        for row in range(1, 20)
    }
    assert run_info["success"] is False
    assert run_info["environment"] == "qa"
    assert run_info["elapsed_ms"] == 640
    assert run_info["scenarios_total"] == 3
    assert run_info["scenarios_failed"] == 1
    assert run_info["features_passed"] == 0
    assert run_info["error_messages"] == "status code was: 500"
    assert run_info["run_start"] == "2026-01-02T03:04:05+00:00"
