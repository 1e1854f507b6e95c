"""Results writing domain exports."""

from .report_models import RUN_INFO_SHEET_NAME, SCENARIOS_SHEET_NAME, RunMetadata
from .run_report_writer import write_run_report

__all__ = [
    "RUN_INFO_SHEET_NAME",
    "SCENARIOS_SHEET_NAME",
    "RunMetadata",
    "write_run_report",
]
