"""Run report workbook writer service."""

from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from feature_orchestrator.result_normalization import RunResponseEnvelope, ScenarioResult

from .report_models import (
    RUN_INFO_SHEET_NAME,
    SCENARIO_COLUMNS,
    SCENARIOS_SHEET_NAME,
    RunMetadata,
)


def write_run_report(
    envelope: RunResponseEnvelope,
    output_path: Path | str,
    run_metadata: RunMetadata,
) -> Path:
    """Write one row per executed step plus a RunInfo sheet and return the written path."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = SCENARIOS_SHEET_NAME

    _write_header_row(sheet)
    row = 2
    for scenario in envelope.result.scenarios:
        row = _write_scenario_rows(sheet, scenario, row)

    _write_run_info_sheet(workbook, envelope, run_metadata)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_header_row(sheet: Worksheet) -> None:
    for column_index, name in enumerate(SCENARIO_COLUMNS, start=1):
        sheet.cell(row=1, column=column_index, value=name)
        sheet.cell(row=1, column=column_index).style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )


def _write_scenario_rows(sheet: Worksheet, scenario: ScenarioResult, row: int) -> int:
    if not scenario.steps:
        sheet.cell(row=row, column=1, value=scenario.name)
        sheet.cell(row=row, column=2, value=scenario.status.value)
        return row + 1
    for step in scenario.steps:
        values = (
            scenario.name,
            scenario.status.value,
            step.name,
            step.status.value,
            step.error_message,
        )
        for column_index, value in enumerate(values, start=1):
            sheet.cell(row=row, column=column_index, value=value)
        row += 1
    return row


def _write_run_info_sheet(
    workbook: Workbook,
    envelope: RunResponseEnvelope,
    run_metadata: RunMetadata,
) -> None:
    result = envelope.result
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    rows = [
        ("run_start", run_metadata.run_start.isoformat()),
        ("feature_path", str(run_metadata.feature_path)),
        ("output_path", str(run_metadata.output_path)),
        ("environment", run_metadata.environment or ""),
        ("success", envelope.success),
        ("elapsed_ms", result.elapsed_ms),
        ("scenarios_total", result.scenario_stats.total),
        ("scenarios_passed", result.scenario_stats.passed),
        ("scenarios_failed", result.scenario_stats.failed),
        ("features_total", result.feature_stats.total),
        ("features_passed", result.feature_stats.passed),
        ("features_failed", result.feature_stats.failed),
        ("error_messages", "\n".join(envelope.error_messages)),
    ]
    for row, (key, value) in enumerate(rows, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
