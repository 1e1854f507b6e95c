"""Karate standalone engine driven through a `java -jar` subprocess."""

from __future__ import annotations

import logging
import re
import shlex
import subprocess
import tempfile
from collections.abc import Callable
from pathlib import Path

from .engine_contracts import EngineInvocationError, EngineRunOptions
from .karate_reports import (
    FEATURE_REPORT_SUFFIX,
    REPORTS_DIRNAME,
    SUMMARY_FILENAME,
    ReportResults,
    read_karate_reports,
)

logger = logging.getLogger(__name__)

DEFAULT_KARATE_VERSION = "1.4.0"
UNKNOWN_RUNTIME_VERSION = "unknown"

CommandRunner = Callable[[tuple[str, ...], float | None], int]
OutputReader = Callable[[tuple[str, ...]], str]

_VERSION_QUERY_TIMEOUT_SECONDS = 30.0
_KARATE_VERSION_PATTERN = re.compile(r"karate version\s+([0-9.]+)", re.IGNORECASE)
_JAVA_VERSION_PATTERN = re.compile(r'version "([^"]+)"')


class EngineTimeoutError(EngineInvocationError):
    """Raised when the engine process exceeds its deadline."""


class KarateCliEngine:
    """Runs one feature with the Karate standalone JAR and reads its JSON reports."""

    def __init__(
        self,
        *,
        karate_jar: Path | str,
        java_executable: str = "java",
        karate_version: str = DEFAULT_KARATE_VERSION,
        run_command: CommandRunner | None = None,
        read_output: OutputReader | None = None,
    ) -> None:
        self._karate_jar = Path(karate_jar)
        self._java_executable = java_executable
        self._karate_version = karate_version
        self._run_command = run_command or _run_engine_process
        self._read_output = read_output or _read_process_output
        self._detected_karate_version: str | None = None
        self._detected_runtime_version: str | None = None

    @property
    def engine_version(self) -> str:
        """Karate version reported by the JAR, or the configured one when it reports none."""
        if self._detected_karate_version is None:
            self._detected_karate_version = self._detect_version(
                (self._java_executable, "-jar", str(self._karate_jar)),
                _KARATE_VERSION_PATTERN,
                self._karate_version,
            )
        return self._detected_karate_version

    @property
    def runtime_version(self) -> str:
        """Version of the Java runtime that executes Karate."""
        if self._detected_runtime_version is None:
            self._detected_runtime_version = self._detect_version(
                (self._java_executable, "-version"),
                _JAVA_VERSION_PATTERN,
                UNKNOWN_RUNTIME_VERSION,
            )
        return self._detected_runtime_version

    def run(self, feature_path: Path, options: EngineRunOptions) -> ReportResults:
        if options.thread_monitoring:
            logger.debug("Thread monitoring requested; the Karate CLI has no switch for it.")
        if options.output_dir:
            output_dir = Path(options.output_dir)
            output_dir.mkdir(parents=True, exist_ok=True)
            _remove_previous_reports(output_dir)
            return self._run_and_read(feature_path, options, output_dir)
        with tempfile.TemporaryDirectory(prefix="karate-output-") as scratch_dir:
            return self._run_and_read(feature_path, options, Path(scratch_dir))

    def build_command(
        self, feature_path: Path, options: EngineRunOptions, output_dir: Path
    ) -> tuple[str, ...]:
        """Return the argument vector used to invoke Karate for one feature."""
        command = [
            self._java_executable,
            "-jar",
            str(self._karate_jar),
            "-T",
            str(max(1, options.parallelism)),
            "-o",
            str(output_dir),
        ]
        if options.environment:
            command.extend(("-e", options.environment))
        if options.config_dir:
            command.extend(("-g", options.config_dir))
        command.append(str(feature_path))
        return tuple(command)

    def _run_and_read(
        self, feature_path: Path, options: EngineRunOptions, output_dir: Path
    ) -> ReportResults:
        command = self.build_command(feature_path, options, output_dir)
        exit_code = self._run_command(command, options.timeout_seconds)
        # Karate exits non-zero when scenarios fail; the reports decide the outcome.
        logger.debug("Karate exited with code %s: %s", exit_code, shlex.join(command))
        return read_karate_reports(output_dir)

    def _detect_version(
        self, command: tuple[str, ...], pattern: re.Pattern[str], fallback: str
    ) -> str:
        try:
            output = self._read_output(command)
        except EngineInvocationError as exc:
            logger.warning("Version detection failed, using %s: %s", fallback, exc)
            return fallback
        match = pattern.search(output)
        if match is None:
            logger.debug("No version in output of %s:\n%s", shlex.join(command), output)
            return fallback
        return match.group(1).strip()


def _remove_previous_reports(output_dir: Path) -> None:
    """Delete reports left by an earlier run so they cannot pass for this run's results."""
    reports_dir = output_dir / REPORTS_DIRNAME
    if not reports_dir.is_dir():
        return
    stale = [reports_dir / SUMMARY_FILENAME, *reports_dir.glob(f"*{FEATURE_REPORT_SUFFIX}")]
    for path in stale:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise EngineInvocationError(f"Failed to remove previous Karate report: {exc}") from exc


def _run_engine_process(command: tuple[str, ...], timeout_seconds: float | None) -> int:
    """Run the engine process and wrap subprocess errors with engine-level messages."""
    completed = _start_process(command, timeout_seconds)
    if completed.stderr:
        logger.debug("Karate stderr:\n%s", completed.stderr)
    return completed.returncode


def _read_process_output(command: tuple[str, ...]) -> str:
    """Return the combined stdout and stderr of a short-lived command, whatever its exit code."""
    completed = _start_process(command, _VERSION_QUERY_TIMEOUT_SECONDS)
    return f"{completed.stdout or ''}\n{completed.stderr or ''}"


def _start_process(
    command: tuple[str, ...], timeout_seconds: float | None
) -> subprocess.CompletedProcess[str]:
    try:
        return subprocess.run(
            list(command),
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout_seconds,
        )
    except FileNotFoundError as exc:
        raise EngineInvocationError(f"Engine command not found: {shlex.join(command)}") from exc
    except subprocess.TimeoutExpired as exc:
        raise EngineTimeoutError(
            f"Engine did not finish within {timeout_seconds} seconds: {shlex.join(command)}"
        ) from exc
    except OSError as exc:
        raise EngineInvocationError(f"Engine command failed to start: {exc}") from exc
