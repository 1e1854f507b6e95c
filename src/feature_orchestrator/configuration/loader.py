"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from feature_orchestrator.engine_interface import DEFAULT_KARATE_VERSION

from .runtime_settings import Configuration, EngineSettings, RunDefaults, TempSettings


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.resolve().parent
    return Configuration(
        path=path,
        engine=_parse_engine_section(parsed.get("engine"), base_path),
        run=_parse_run_section(parsed.get("run")),
        temp=_parse_temp_section(parsed.get("temp"), base_path),
    )


def _parse_engine_section(value: Any, base_path: Path) -> EngineSettings:
    section = _require_mapping(value, "engine")
    karate_jar = _require_non_empty_string(section.get("karate_jar"), "engine.karate_jar")
    java_executable = _require_non_empty_string(
        section.get("java_executable", "java"), "engine.java_executable"
    )
    karate_version = section.get("karate_version", DEFAULT_KARATE_VERSION)
    if isinstance(karate_version, (int, float)) and not isinstance(karate_version, bool):
        karate_version = str(karate_version)
    return EngineSettings(
        karate_jar=_resolve_path(base_path, karate_jar),
        java_executable=java_executable,
        karate_version=_require_non_empty_string(karate_version, "engine.karate_version"),
    )


def _parse_run_section(value: Any) -> RunDefaults:
    section = _optional_mapping(value, "run")
    timeout_seconds = section.get("timeout_seconds")
    return RunDefaults(
        environment=_optional_string(section.get("environment"), "run.environment"),
        config_dir=_optional_string(section.get("config_dir"), "run.config_dir"),
        parallelism=_require_positive_int(section.get("parallelism", 1), "run.parallelism"),
        timeout_seconds=(
            None
            if timeout_seconds is None
            else _require_positive_number(timeout_seconds, "run.timeout_seconds")
        ),
    )


def _parse_temp_section(value: Any, base_path: Path) -> TempSettings:
    section = _optional_mapping(value, "temp")
    directory = _optional_string(section.get("directory"), "temp.directory")
    return TempSettings(
        directory=_resolve_path(base_path, directory) if directory else None,
    )


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value


def _require_positive_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{field_name} must be a number.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return float(value)
