"""
Interactive command shell.

Single-threaded, cooperative interpreter over one input channel and
one append-only log. `submit()` never blocks: commands that talk to
the gateway run as a task, and commands that need a second line of
input suspend on a PendingPrompt until the next submitted line.

Workflow per command:
1. Parse the first token against the command table
2. Optionally open a secondary prompt
3. Go busy, call the gateway
4. Append the rendered result (or "Error: ...") and return to idle
"""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from cube.core.exceptions import CubeError
from cube.core.protocols import GatewayApi
from cube.shell.state import LogLine, PendingPrompt, ShellMode, ShellState
from cube.templates.messages import (
    BUSY,
    HELP,
    INVALID_SELECTION,
    NO_ADDRESS,
    PROMPT_AUDIT,
    PROMPT_SOCIALS,
    TRENDING_LIMITS,
    TRENDING_MENU,
    UNKNOWN_COMMAND_HINT,
    USAGE_CHECK,
    WELCOME,
)
from cube.utils.formatters import (
    render_audit,
    render_socials,
    render_token_detail,
    render_trending,
)

logger = logging.getLogger(__name__)

Work = Coroutine[Any, Any, None]
CommandHandler = Callable[[list[str]], Work | None]


class CommandShell:
    """
    Command dispatcher and multi-step prompt protocol.

    Only one command is in flight at a time: while a command is busy
    or waiting for its secondary line, new top-level input is refused
    with a "Busy" notice.

    Usage:
        shell = CommandShell(GatewayClient("http://localhost:3001"))
        shell.start()
        task = shell.submit("check So111...")
    """

    def __init__(
        self,
        client: GatewayApi,
        state: ShellState | None = None,
        check_display_delay: float = 0.0,
    ):
        """
        Initialize shell.

        Args:
            client: Gateway access (HTTP client or test double)
            state: Shell state to drive (a fresh one by default)
            check_display_delay: Minimum seconds `check` stays busy
        """
        self._client = client
        self.state = state or ShellState()
        self._check_display_delay = check_display_delay
        self._task: asyncio.Task | None = None
        self._commands: dict[str, CommandHandler] = {
            "help": self._cmd_help,
            "clear": self._cmd_clear,
            "check": self._cmd_check,
            "trending": self._cmd_trending,
            "socials": self._cmd_socials,
            "audit": self._cmd_audit,
        }

    @property
    def commands(self) -> list[str]:
        return list(self._commands)

    def start(self) -> None:
        """Show the welcome banner."""
        self.state.append(*WELCOME)

    def submit(self, raw: str) -> asyncio.Task | None:
        """
        Feed one line of input to the shell.

        A pending secondary prompt gets the line first. Otherwise the
        line is dispatched as a command.

        Returns:
            The task running the command, if it has asynchronous work
        """
        text = raw.strip()

        if self.state.pending is not None:
            self.state.answer_prompt(text)
            return self._task

        if not text:
            return None

        if self.state.mode is not ShellMode.IDLE:
            logger.debug(f"Refused {text!r} while {self.state.mode.value}")
            self.state.append(BUSY)
            return None

        command, *args = text.split()
        self.state.transition(ShellMode.DISPATCHING)

        handler = self._commands.get(command)
        if handler is None:
            self.state.append(f"Unknown command: '{command}'", UNKNOWN_COMMAND_HINT)
            self.state.transition(ShellMode.IDLE)
            return None

        logger.info(f"Dispatching {command}")
        work = handler(args)
        if work is None:
            self.state.transition(ShellMode.IDLE)
            return None

        self._task = asyncio.create_task(self._run(command, work))
        return self._task

    async def close(self) -> None:
        """Tear down: cancel a pending prompt and any running command."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            # A task cancelled before its first step never runs its cleanup
            await asyncio.sleep(0)
            self.state.cancel_prompt()
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        self.state.cancel_prompt()
        if self.state.mode is not ShellMode.IDLE:
            self.state.transition(ShellMode.IDLE)

    async def _run(self, command: str, work: Work) -> None:
        """
        Run a command's asynchronous part.

        The single exit back to IDLE for every busy or prompting command,
        whatever the outcome.
        """
        try:
            await work
        except CubeError as e:
            logger.warning(f"{command} failed: {e.technical_message}")
            self.state.append(LogLine(text=f"Error: {e.message}", style="error"))
        except Exception as e:
            logger.exception(f"Unexpected error in {command}: {e}")
            self.state.append(LogLine(text=f"Error: {e}", style="error"))
        finally:
            if self.state.mode is not ShellMode.IDLE:
                self.state.transition(ShellMode.IDLE)

    # =========================================================================
    # Commands
    # =========================================================================

    def _cmd_help(self, args: list[str]) -> None:
        self.state.append(*HELP)

    def _cmd_clear(self, args: list[str]) -> None:
        self.state.clear()

    def _cmd_check(self, args: list[str]) -> Work | None:
        if len(args) != 1:
            self.state.append(USAGE_CHECK)
            return None
        address = args[0]
        self.state.append(f"Fetching details for {address}...")
        self.state.transition(ShellMode.BUSY)
        return self._check(address)

    def _cmd_trending(self, args: list[str]) -> Work:
        self.state.append(*TRENDING_MENU)
        return self._trending(self.state.open_prompt("trending"))

    def _cmd_socials(self, args: list[str]) -> Work:
        self.state.append(PROMPT_SOCIALS)
        return self._socials(self.state.open_prompt("socials"))

    def _cmd_audit(self, args: list[str]) -> Work:
        self.state.append(PROMPT_AUDIT)
        return self._audit(self.state.open_prompt("audit"))

    # =========================================================================
    # Asynchronous parts
    # =========================================================================

    async def _check(self, address: str) -> None:
        loop = asyncio.get_running_loop()
        started = loop.time()
        try:
            detail = await self._client.get_token_detail(address)
        except CubeError:
            await self._hold_display(started)
            raise
        await self._hold_display(started)
        self.state.append(*render_token_detail(detail))

    async def _trending(self, prompt: PendingPrompt) -> None:
        selection = await prompt.wait()
        limit = TRENDING_LIMITS.get(selection)
        if limit is None:
            self.state.append(INVALID_SELECTION)
            return

        self.state.transition(ShellMode.BUSY)
        self.state.append(f"Fetching top {limit} trending coins...")
        self.state.append(f"Fetching top {limit} trending coins from Dextools...")
        rows = await self._client.get_trending(limit)
        if not rows:
            self.state.append("No trending coins found on Dextools.")
            return
        self.state.append(*render_trending(rows, limit))

    async def _socials(self, prompt: PendingPrompt) -> None:
        address = await prompt.wait()
        if not address:
            self.state.append(NO_ADDRESS)
            return

        self.state.transition(ShellMode.BUSY)
        self.state.append(f"Fetching socials for contract: {address}...")
        links = await self._client.get_socials(address)
        self.state.append(*render_socials(links))

    async def _audit(self, prompt: PendingPrompt) -> None:
        address = await prompt.wait()
        if not address:
            self.state.append(NO_ADDRESS)
            return

        self.state.transition(ShellMode.BUSY)
        self.state.append(f"Fetching audit for contract: {address}...")
        report = await self._client.get_audit(address)
        self.state.append(*render_audit(report))

    async def _hold_display(self, started: float) -> None:
        """Keep the loading indicator up for at least the configured delay."""
        remaining = self._check_display_delay - (asyncio.get_running_loop().time() - started)
        if remaining > 0:
            await asyncio.sleep(remaining)
