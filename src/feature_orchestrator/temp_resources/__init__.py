"""Temporary resource domain exports."""

from .temp_artifacts import (
    ARTIFACT_PREFIX,
    ARTIFACT_SUFFIX,
    ResourceFault,
    TempArtifact,
    TempArtifactManager,
)

__all__ = [
    "ARTIFACT_PREFIX",
    "ARTIFACT_SUFFIX",
    "ResourceFault",
    "TempArtifact",
    "TempArtifactManager",
]
