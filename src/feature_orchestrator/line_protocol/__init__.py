"""Line protocol domain exports."""

from .command_parsing import LineCommand, LineCommandError, parse_command_line
from .protocol_server import ERROR_PREFIX, READY_LINE, SENTINEL, LineProtocolServer, RunExecutor

__all__ = [
    "ERROR_PREFIX",
    "READY_LINE",
    "SENTINEL",
    "LineCommand",
    "LineCommandError",
    "LineProtocolServer",
    "RunExecutor",
    "parse_command_line",
]
