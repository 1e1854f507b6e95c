"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

import click

from feature_orchestrator.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from feature_orchestrator.engine_interface import KarateCliEngine
from feature_orchestrator.line_protocol import READY_LINE, LineProtocolServer
from feature_orchestrator.results_writing import RunMetadata, write_run_report
from feature_orchestrator.run_execution import (
    HEALTH_OK,
    SERVICE_INFO,
    FeatureRunError,
    FeatureRunOrchestrator,
    RunRequest,
    create_orchestrator,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="feature-orchestrator")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Diagnostic log level; logs are written to stderr.",
)
def cli(log_level: str) -> None:
    """Karate feature execution service utility."""
    logging.basicConfig(
        level=log_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML service configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML service configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="run")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML service configuration file",
)
@click.option(
    "--feature",
    "feature_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the feature file to execute",
)
@click.option("--env", "environment", required=False, help="Karate environment name")
@click.option(
    "--config-dir",
    "config_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Directory containing karate-config.js",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Optional directory for the engine's own reports",
)
@click.option(
    "--threads",
    "parallelism",
    required=False,
    type=click.IntRange(min=1),
    help="Scenario parallelism passed to the engine",
)
@click.option(
    "--report",
    "report_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path of a run report workbook to write",
)
# pylint: disable=too-many-arguments,too-many-positional-arguments
def run_feature(
    config_path: str,
    feature_path: str,
    environment: str | None,
    config_dir: str | None,
    output_dir: str | None,
    parallelism: int | None,
    report_path: str | None,
) -> None:
    """Execute one feature file and print the JSON run envelope."""
    configuration = _load_configuration(config_path)
    try:
        feature_text = Path(feature_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CliError(f"Failed to read feature file: {exc}") from exc

    orchestrator = _build_orchestrator(configuration)
    request = RunRequest(
        feature_text=feature_text,
        environment=environment or configuration.run.environment,
        config_dir=config_dir or configuration.run.config_dir,
        output_dir=output_dir,
        parallelism=parallelism or configuration.run.parallelism,
    )
    run_start = datetime.now(UTC)
    try:
        envelope = orchestrator.execute(request)
    except FeatureRunError as exc:
        raise CliError(str(exc)) from exc

    if report_path:
        try:
            written = write_run_report(
                envelope,
                report_path,
                RunMetadata(
                    run_start=run_start,
                    feature_path=Path(feature_path).resolve(),
                    output_path=Path(report_path).resolve(),
                    environment=request.environment,
                ),
            )
        except OSError as exc:
            raise CliError(f"Failed to write run report: {exc}") from exc
        logger.info("Run report written to %s", written)

    click.echo(json.dumps(envelope.to_payload(), indent=2))
    if not envelope.success:
        click.get_current_context().exit(1)


# pylint: enable=too-many-arguments,too-many-positional-arguments


@cli.command(name="serve")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML service configuration file",
)
def serve(config_path: str) -> None:
    """Read `featurePath[,configDir[,outputDir]]` commands from stdin until it closes."""
    configuration = _load_configuration(config_path)
    server = LineProtocolServer(
        _build_orchestrator(configuration),
        output_stream=sys.stdout,
        error_stream=sys.stderr,
        environment=configuration.run.environment,
        default_config_dir=configuration.run.config_dir,
        parallelism=configuration.run.parallelism,
        ready_line=READY_LINE,
    )
    server.serve(sys.stdin)


@cli.command(name="versions")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML service configuration file",
)
def versions(config_path: str) -> None:
    """Print engine and runtime versions as JSON."""
    orchestrator = _build_orchestrator(_load_configuration(config_path))
    click.echo(json.dumps(orchestrator.get_versions().to_payload()))


@cli.command(name="health")
def health() -> None:
    """Print the liveness check answer."""
    click.echo(HEALTH_OK)


@cli.command(name="info")
def info() -> None:
    """Print the service identity."""
    click.echo(SERVICE_INFO)


def _load_configuration(config_path: str) -> Configuration:
    try:
        return load_configuration(config_path)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc


def _build_orchestrator(configuration: Configuration) -> FeatureRunOrchestrator:
    return create_orchestrator(configuration, engine_cls=KarateCliEngine)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        exit_code = cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return exit_code if isinstance(exit_code, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
