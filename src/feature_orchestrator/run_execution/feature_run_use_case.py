"""Feature run orchestration service."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from enum import Enum

from feature_orchestrator.configuration.runtime_settings import Configuration
from feature_orchestrator.engine_interface import (
    EngineRunOptions,
    EngineTimeoutError,
    FeatureEngine,
    KarateCliEngine,
    RawEngineResult,
)
from feature_orchestrator.result_normalization import (
    RunResponseEnvelope,
    StepCaptureHook,
    normalize_engine_result,
)
from feature_orchestrator.temp_resources import ResourceFault, TempArtifactManager

from .active_runs import ActiveRunRegistry
from .run_contracts import RunHandle, RunRequest, RunVersions

logger = logging.getLogger(__name__)

HEALTH_OK = "OK"
SERVICE_INFO = "Karate Test Service"


class FeatureRunError(Exception):
    """Base class for errors raised by the feature run service."""


class ValidationFault(FeatureRunError):
    """Raised when a run request is malformed; nothing has been acquired yet."""


class FaultKind(str, Enum):
    """Orchestration stage that failed."""

    RESOURCE = "resource"
    ENGINE = "engine"
    TIMEOUT = "timeout"


class ExecutionFault(FeatureRunError):
    """Raised when a run could not be orchestrated; the cause is chained."""

    def __init__(self, kind: FaultKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class FeatureRunOrchestrator:
    """Executes one feature per call against a feature engine."""

    def __init__(
        self,
        engine: FeatureEngine,
        *,
        temp_artifacts: TempArtifactManager | None = None,
        timeout_seconds: float | None = None,
        step_capture: StepCaptureHook | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._engine = engine
        self._temp_artifacts = temp_artifacts or TempArtifactManager()
        self._timeout_seconds = timeout_seconds
        self._step_capture = step_capture
        self._clock = clock
        self._active_runs = ActiveRunRegistry()

    def execute(self, request: RunRequest) -> RunResponseEnvelope:
        """Run `request.feature_text` once and return the normalized envelope.

        Failing scenarios are reported through `success=False`; only
        orchestration problems raise `ExecutionFault`. The temporary feature
        file is released on every exit path.
        """
        validate_run_request(request)
        try:
            with self._temp_artifacts.scoped(request.feature_text) as artifact:
                handle = self._active_runs.open_run(artifact.path)
                try:
                    return self._execute_handle(handle, request)
                finally:
                    self._active_runs.close_run(handle.execution_id)
        except ResourceFault as exc:
            logger.error("Failed to materialize feature: %s", exc)
            raise ExecutionFault(FaultKind.RESOURCE, str(exc)) from exc

    def active_execution_ids(self) -> tuple[str, ...]:
        """Return the execution ids of runs currently in flight."""
        return self._active_runs.execution_ids()

    def get_versions(self) -> RunVersions:
        return RunVersions(
            engine_version=self._engine.engine_version,
            runtime_version=self._engine.runtime_version,
        )

    def health(self) -> str:
        return HEALTH_OK

    def info(self) -> str:
        return SERVICE_INFO

    def _execute_handle(self, handle: RunHandle, request: RunRequest) -> RunResponseEnvelope:
        logger.info("Executing feature run %s from %s", handle.execution_id, handle.feature_path)
        options = EngineRunOptions(
            environment=request.environment,
            config_dir=request.config_dir,
            output_dir=request.output_dir,
            parallelism=request.parallelism,
            thread_monitoring=request.thread_monitoring,
            timeout_seconds=self._timeout_seconds,
        )
        started = self._clock()
        raw = self._invoke_engine(handle, options)
        elapsed_ms = round((self._clock() - started) * 1000)

        try:
            result = normalize_engine_result(
                raw,
                elapsed_ms=elapsed_ms,
                feature_source_text=request.feature_text,
                step_capture=self._step_capture,
            )
            fail_count = raw.fail_count
            error_messages = tuple(str(message) for message in raw.error_messages)
        except (AttributeError, TypeError, ValueError) as exc:
            logger.error("Run %s produced a malformed engine result", handle.execution_id)
            raise ExecutionFault(
                FaultKind.ENGINE, f"Engine returned a malformed result: {exc}"
            ) from exc

        logger.info(
            "Feature run %s finished in %s ms: %s/%s scenarios passed",
            handle.execution_id,
            result.elapsed_ms,
            result.scenario_stats.passed,
            result.scenario_stats.total,
        )
        return RunResponseEnvelope(
            success=fail_count == 0,
            result=result,
            error_messages=error_messages,
        )

    def _invoke_engine(self, handle: RunHandle, options: EngineRunOptions) -> RawEngineResult:
        try:
            if self._timeout_seconds is None:
                return self._engine.run(handle.feature_path, options)
            return self._run_with_deadline(handle, options, self._timeout_seconds)
        except (EngineTimeoutError, TimeoutError) as exc:
            logger.error("Feature run %s timed out", handle.execution_id)
            raise ExecutionFault(
                FaultKind.TIMEOUT,
                f"Feature run {handle.execution_id} exceeded {self._timeout_seconds} seconds",
            ) from exc
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.error("Error executing feature run %s", handle.execution_id, exc_info=True)
            raise ExecutionFault(FaultKind.ENGINE, f"Error executing feature: {exc}") from exc

    def _run_with_deadline(
        self, handle: RunHandle, options: EngineRunOptions, timeout_seconds: float
    ) -> RawEngineResult:
        executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"feature-run-{handle.execution_id}"
        )
        try:
            future = executor.submit(self._engine.run, handle.feature_path, options)
            return future.result(timeout=timeout_seconds)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)


def validate_run_request(request: RunRequest) -> None:
    """Reject requests that must never reach the engine."""
    if not isinstance(request.feature_text, str) or not request.feature_text.strip():
        raise ValidationFault("Feature content must not be empty.")
    if (
        isinstance(request.parallelism, bool)
        or not isinstance(request.parallelism, int)
        or request.parallelism < 1
    ):
        raise ValidationFault("Parallelism must be a positive integer.")


def create_orchestrator(
    configuration: Configuration,
    *,
    engine_cls=None,
) -> FeatureRunOrchestrator:
    """Wire an orchestrator from loaded configuration."""
    resolved_engine_cls = engine_cls or KarateCliEngine
    engine = resolved_engine_cls(
        karate_jar=configuration.engine.karate_jar,
        java_executable=configuration.engine.java_executable,
        karate_version=configuration.engine.karate_version,
    )
    return FeatureRunOrchestrator(
        engine,
        temp_artifacts=TempArtifactManager(configuration.temp.directory),
        timeout_seconds=configuration.run.timeout_seconds,
    )
