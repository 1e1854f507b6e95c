"""Sequential command loop over a persistent line-oriented channel."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Protocol, TextIO

from feature_orchestrator.result_normalization import RunResponseEnvelope
from feature_orchestrator.run_execution import RunRequest

from .command_parsing import LineCommand, parse_command_line

logger = logging.getLogger(__name__)

SENTINEL = "TEST_COMPLETE"
ERROR_PREFIX = "Error executing feature: "
READY_LINE = "Karate server ready"


class RunExecutor(Protocol):  # pylint: disable=too-few-public-methods
    """Anything able to execute a run request, usually a `FeatureRunOrchestrator`."""

    def execute(self, request: RunRequest) -> RunResponseEnvelope: ...


def _read_feature_file(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class LineProtocolServer:
    """Reads one command per line and answers with a result block and a sentinel.

    Commands are handled strictly one at a time. A failing command is reported
    on the error stream and still terminated by the sentinel, after which the
    server waits for the next line. End of input ends the loop.

    When `ready_line` is given it is written once before the first line is read.
    """

    def __init__(
        self,
        executor: RunExecutor,
        *,
        output_stream: TextIO,
        error_stream: TextIO,
        environment: str | None = None,
        default_config_dir: str | None = None,
        parallelism: int = 1,
        read_feature: Callable[[Path], str] | None = None,
        ready_line: str | None = None,
    ) -> None:
        self._executor = executor
        self._output = output_stream
        self._errors = error_stream
        self._environment = environment
        self._default_config_dir = default_config_dir
        self._parallelism = parallelism
        self._read_feature = read_feature or _read_feature_file
        self._ready_line = ready_line

    def serve(self, input_stream: Iterable[str]) -> int:
        """Process lines until end of input and return the number of commands handled."""
        if self._ready_line is not None:
            self._output.write(f"{self._ready_line}\n")
            self._output.flush()
        handled = 0
        for line in input_stream:
            self.handle_line(line)
            handled += 1
        logger.info("Input channel closed after %s commands", handled)
        return handled

    def handle_line(self, line: str) -> None:
        try:
            command = parse_command_line(line)
            envelope = self._execute(command)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            logger.debug("Command failed: %r", line, exc_info=True)
            self._errors.write(f"{ERROR_PREFIX}{exc}\n")
            self._errors.flush()
        else:
            self._write_report(command, envelope)
        self._output.write(f"{SENTINEL}\n")
        self._output.flush()

    def _execute(self, command: LineCommand) -> RunResponseEnvelope:
        feature_text = self._read_feature(Path(command.feature_path))
        return self._executor.execute(
            RunRequest(
                feature_text=feature_text,
                environment=self._environment,
                config_dir=command.config_dir or self._default_config_dir,
                output_dir=command.output_dir,
                parallelism=self._parallelism,
            )
        )

    def _write_report(self, command: LineCommand, envelope: RunResponseEnvelope) -> None:
        result = envelope.result
        scenarios = result.scenario_stats
        self._output.write(
            f"Feature: {command.feature_path}\n"
            f"Scenarios: total: {scenarios.total} | passed: {scenarios.passed}"
            f" | failed: {scenarios.failed}\n"
            f"Features: {result.feature_stats.total} | skipped: 0\n"
            f"Time: {result.elapsed_ms}\n"
        )
