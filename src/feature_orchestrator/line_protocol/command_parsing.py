"""Line protocol command entities and parser."""

from __future__ import annotations

from dataclasses import dataclass

FIELD_SEPARATOR = ","
MAX_FIELDS = 3


class LineCommandError(Exception):
    """Raised when a protocol line cannot be parsed into a command."""


@dataclass(frozen=True)
class LineCommand:
    """One `featurePath[,configDir[,outputDir]]` command."""

    feature_path: str
    config_dir: str | None = None
    output_dir: str | None = None


def parse_command_line(line: str) -> LineCommand:
    """Parse one input line; surrounding whitespace of every field is ignored.

    A line with more than three fields is rejected rather than having the
    extra fields dropped, so a path containing a comma is not silently cut.
    """
    fields = [field.strip() for field in line.rstrip("\r\n").split(FIELD_SEPARATOR)]
    if len(fields) > MAX_FIELDS:
        raise LineCommandError(
            f"Expected at most {MAX_FIELDS} comma-separated fields, got {len(fields)}."
        )
    feature_path = fields[0]
    if not feature_path:
        raise LineCommandError("Feature path must not be empty.")
    return LineCommand(
        feature_path=feature_path,
        config_dir=_optional_field(fields, 1),
        output_dir=_optional_field(fields, 2),
    )


def _optional_field(fields: list[str], index: int) -> str | None:
    if index >= len(fields):
        return None
    return fields[index] or None
