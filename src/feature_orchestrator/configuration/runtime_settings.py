"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class EngineSettings:
    """Location and identity of the Karate engine."""

    karate_jar: Path
    java_executable: str
    karate_version: str


@dataclass(frozen=True)
class RunDefaults:
    """Defaults applied to run requests that do not set their own options."""

    environment: str | None
    config_dir: str | None
    parallelism: int
    timeout_seconds: float | None


@dataclass(frozen=True)
class TempSettings:
    """Where temporary feature files are materialized."""

    directory: Path | None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    engine: EngineSettings
    run: RunDefaults
    temp: TempSettings
