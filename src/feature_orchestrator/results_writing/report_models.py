"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

SCENARIOS_SHEET_NAME = "Scenarios"
RUN_INFO_SHEET_NAME = "RunInfo"
SCENARIO_COLUMNS = ("Scenario", "Scenario Status", "Step", "Step Status", "Error")


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    feature_path: Path
    output_path: Path
    environment: str | None
