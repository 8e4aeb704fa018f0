"""
Terminal front-end for the command shell.

Reads lines with prompt_toolkit without blocking the event loop and
prints whatever the shell appends to its log. The prompt reads "λ"
for commands and "?" while a secondary prompt is pending; the bottom
toolbar shows the loading indicator while the shell is busy.
"""

import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout
from prompt_toolkit.shortcuts import clear, print_formatted_text
from prompt_toolkit.styles import Style

from cube.shell.state import LogLine
from cube.shell.terminal import CommandShell

logger = logging.getLogger(__name__)

STYLE = Style.from_dict(
    {
        "log": "ansiyellow",
        "error": "ansired",
        "help.title": "ansiyellow bold",
        "help.basic": "ansigreen",
        "help.check": "ansiblue",
        "help.trending": "ansimagenta",
        "help.socials": "ansired",
        "help.audit": "ansibrightyellow",
        "prompt": "ansigreen bold",
        "bottom-toolbar": "noreverse",
    }
)

# Seconds between redraws, so the toolbar follows the busy flag
REFRESH_INTERVAL = 0.25


class ConsoleRenderer:
    """Prints log blocks with the console style."""

    def __init__(self, style: Style = STYLE):
        self._style = style

    def print_lines(self, lines: list[LogLine]) -> None:
        for line in lines:
            text = FormattedText([(f"class:{line.style or 'log'}", line.text)])
            print_formatted_text(text, style=self._style)

    def clear(self) -> None:
        clear()


def create_session(shell: CommandShell) -> PromptSession:
    """Prompt session bound to the shell's state."""

    def toolbar() -> FormattedText:
        if shell.state.busy:
            return FormattedText([("class:log", " Loading...")])
        return FormattedText([("", "")])

    return PromptSession(
        history=InMemoryHistory(),
        bottom_toolbar=toolbar,
        refresh_interval=REFRESH_INTERVAL,
        style=STYLE,
    )


def prompt_message(shell: CommandShell) -> FormattedText:
    marker = "? " if shell.state.awaiting_input else "λ "
    return FormattedText([("class:prompt", marker)])


async def run_console(
    shell: CommandShell,
    session: PromptSession | None = None,
    renderer: ConsoleRenderer | None = None,
) -> None:
    """
    Read-eval loop until Ctrl-D or Ctrl-C.

    Lines are handed to `shell.submit()`, which returns immediately,
    so the prompt stays responsive while commands run.
    """
    renderer = renderer or ConsoleRenderer()
    session = session or create_session(shell)

    renderer.print_lines(shell.state.lines)
    shell.state.subscribe(renderer.print_lines, renderer.clear)

    with patch_stdout():
        while True:
            try:
                line = await session.prompt_async(lambda: prompt_message(shell))
            except (EOFError, KeyboardInterrupt):
                logger.info("Console closed by operator")
                break
            shell.submit(line)

    await shell.close()
