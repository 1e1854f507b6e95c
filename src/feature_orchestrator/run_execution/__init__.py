"""Run execution domain exports."""

from .active_runs import ActiveRunRegistry
from .feature_run_use_case import (
    HEALTH_OK,
    SERVICE_INFO,
    ExecutionFault,
    FaultKind,
    FeatureRunError,
    FeatureRunOrchestrator,
    ValidationFault,
    create_orchestrator,
    validate_run_request,
)
from .run_contracts import RunHandle, RunRequest, RunVersions, new_execution_id

__all__ = [
    "ActiveRunRegistry",
    "ExecutionFault",
    "FaultKind",
    "FeatureRunError",
    "FeatureRunOrchestrator",
    "HEALTH_OK",
    "RunHandle",
    "RunRequest",
    "RunVersions",
    "SERVICE_INFO",
    "ValidationFault",
    "create_orchestrator",
    "new_execution_id",
    "validate_run_request",
]
