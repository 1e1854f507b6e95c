"""Execution engine domain exports."""

from .engine_contracts import (
    EngineInvocationError,
    EngineRunOptions,
    FeatureEngine,
    RawEngineResult,
    RawFeatureNode,
    RawScenarioNode,
    RawStepNode,
)
from .karate_cli_engine import (
    DEFAULT_KARATE_VERSION,
    UNKNOWN_RUNTIME_VERSION,
    EngineTimeoutError,
    KarateCliEngine,
)
from .karate_reports import (
    ReportFeature,
    ReportResults,
    ReportScenario,
    ReportStep,
    read_karate_reports,
)

__all__ = [
    "DEFAULT_KARATE_VERSION",
    "EngineInvocationError",
    "EngineRunOptions",
    "EngineTimeoutError",
    "FeatureEngine",
    "KarateCliEngine",
    "RawEngineResult",
    "RawFeatureNode",
    "RawScenarioNode",
    "RawStepNode",
    "ReportFeature",
    "ReportResults",
    "ReportScenario",
    "ReportStep",
    "UNKNOWN_RUNTIME_VERSION",
    "read_karate_reports",
]
