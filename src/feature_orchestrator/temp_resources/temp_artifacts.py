"""Temporary feature artifact service."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ARTIFACT_PREFIX = "karate-"
ARTIFACT_SUFFIX = ".feature"


class ResourceFault(Exception):
    """Raised when a temporary feature artifact cannot be created or written."""


@dataclass(frozen=True)
class TempArtifact:
    """Handle to one materialized feature file."""

    path: Path


class TempArtifactManager:
    """Creates uniquely named feature files and removes them again."""

    def __init__(
        self,
        directory: Path | str | None = None,
        *,
        prefix: str = ARTIFACT_PREFIX,
        suffix: str = ARTIFACT_SUFFIX,
    ) -> None:
        self._directory = str(directory) if directory is not None else None
        self._prefix = prefix
        self._suffix = suffix

    def acquire(self, content: str) -> TempArtifact:
        """Write `content` verbatim into a fresh file and return its handle."""
        try:
            descriptor, raw_path = tempfile.mkstemp(
                prefix=self._prefix, suffix=self._suffix, dir=self._directory
            )
        except OSError as exc:
            raise ResourceFault(f"Failed to create temporary feature file: {exc}") from exc

        artifact = TempArtifact(path=Path(raw_path))
        try:
            with os.fdopen(descriptor, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
        except (OSError, UnicodeError) as exc:
            self.release(artifact)
            raise ResourceFault(
                f"Failed to write temporary feature file {artifact.path}: {exc}"
            ) from exc
        logger.debug("Created temporary feature file: %s", artifact.path)
        return artifact

    def release(self, artifact: TempArtifact) -> None:
        """Delete the artifact; already-missing files and delete errors are tolerated."""
        try:
            artifact.path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Failed to delete temporary file: %s", artifact.path, exc_info=True)

    @contextmanager
    def scoped(self, content: str) -> Iterator[TempArtifact]:
        """Acquire an artifact for the duration of a `with` block."""
        artifact = self.acquire(content)
        try:
            yield artifact
        finally:
            self.release(artifact)
