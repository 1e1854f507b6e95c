"""Result normalization domain exports."""

from .normalized_models import (
    NormalizedResult,
    OutcomeStats,
    OutcomeStatus,
    RunResponseEnvelope,
    ScenarioResult,
    StepCapture,
    StepResult,
)
from .result_normalizer import (
    StepCaptureHook,
    normalize_engine_result,
    scenario_status,
    step_status,
)

__all__ = [
    "NormalizedResult",
    "OutcomeStats",
    "OutcomeStatus",
    "RunResponseEnvelope",
    "ScenarioResult",
    "StepCapture",
    "StepCaptureHook",
    "StepResult",
    "normalize_engine_result",
    "scenario_status",
    "step_status",
]
