"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Service configuration template for feature-orchestrator.
# Replace every <REQUIRED> placeholder before running run, serve or versions.
# Uncomment <OPTIONAL> entries when needed; relative paths resolve against this file.

engine:
  # Path to the Karate standalone JAR.
  karate_jar: "<REQUIRED>"
  java_executable: "java"
  karate_version: "1.4.0"

run:
  # Defaults for runs that do not set their own options.
  # environment: "<OPTIONAL>"
  # config_dir: "<OPTIONAL>"
  parallelism: 1
  # Deadline per run in seconds; omit to wait indefinitely.
  # timeout_seconds: 600

temp:
  # Directory for temporary feature files; omit to use the system temp directory.
  # directory: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML service configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
