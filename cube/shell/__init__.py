"""Interactive command shell."""

from cube.shell.client import GatewayClient
from cube.shell.state import LogLine, PendingPrompt, ShellMode, ShellState
from cube.shell.terminal import CommandShell

__all__ = [
    "GatewayClient",
    "CommandShell",
    "ShellState",
    "ShellMode",
    "PendingPrompt",
    "LogLine",
]
