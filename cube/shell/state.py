"""
Command shell state.

ShellState owns everything the shell displays and every mode change:
- an append-only log of lines (cleared only by `clear`)
- the current mode, changed only through the transition table
- at most one pending secondary prompt

Mode transitions:
    IDLE → DISPATCHING
    DISPATCHING → IDLE | AWAITING_INPUT | BUSY
    AWAITING_INPUT → BUSY | IDLE
    BUSY → IDLE
"""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ShellMode(str, Enum):
    """Where the shell is in the life of a command."""

    IDLE = "idle"
    DISPATCHING = "dispatching"
    AWAITING_INPUT = "awaiting_input"
    BUSY = "busy"


TRANSITIONS: dict[ShellMode, frozenset[ShellMode]] = {
    ShellMode.IDLE: frozenset({ShellMode.DISPATCHING}),
    ShellMode.DISPATCHING: frozenset(
        {ShellMode.IDLE, ShellMode.AWAITING_INPUT, ShellMode.BUSY}
    ),
    ShellMode.AWAITING_INPUT: frozenset({ShellMode.BUSY, ShellMode.IDLE}),
    ShellMode.BUSY: frozenset({ShellMode.IDLE}),
}


class ShellStateError(RuntimeError):
    """Raised on a mode change the transition table does not allow."""


class LogLine(BaseModel):
    """One rendered line, optionally tagged with a style name."""

    text: str
    style: str | None = None

    model_config = {"frozen": True}


LogEntry = str | LogLine | tuple[str, str]

AppendListener = Callable[[list[LogLine]], None]
ClearListener = Callable[[], None]


def _to_line(entry: LogEntry) -> LogLine:
    if isinstance(entry, LogLine):
        return entry
    if isinstance(entry, tuple):
        style, text = entry
        return LogLine(text=text, style=style)
    return LogLine(text=entry)


class PendingPrompt:
    """
    One-shot resolver for a secondary line of input.

    Fulfilled exactly once: by the operator's next line,
    or by cancellation when the shell is torn down.
    """

    def __init__(self, command: str):
        self.command = command
        self._future: asyncio.Future[str] = asyncio.get_running_loop().create_future()

    @property
    def done(self) -> bool:
        return self._future.done()

    def resolve(self, text: str) -> None:
        if self._future.done():
            raise ShellStateError(f"Prompt for {self.command} already settled")
        self._future.set_result(text)

    def cancel(self) -> None:
        self._future.cancel()

    async def wait(self) -> str:
        """Suspend the command until the answer arrives."""
        return await self._future


class ShellState:
    """
    Log, mode and pending prompt of one shell session.

    Listeners are notified once per appended block, so a console
    renders each command's output as one contiguous chunk.
    """

    def __init__(self) -> None:
        self._lines: list[LogLine] = []
        self._mode = ShellMode.IDLE
        self._pending: PendingPrompt | None = None
        self._append_listeners: list[AppendListener] = []
        self._clear_listeners: list[ClearListener] = []

    @property
    def lines(self) -> list[LogLine]:
        """Snapshot of the log."""
        return list(self._lines)

    @property
    def texts(self) -> list[str]:
        """Snapshot of the log as plain strings."""
        return [line.text for line in self._lines]

    @property
    def mode(self) -> ShellMode:
        return self._mode

    @property
    def busy(self) -> bool:
        """True while a gateway call is in flight."""
        return self._mode is ShellMode.BUSY

    @property
    def pending(self) -> PendingPrompt | None:
        return self._pending

    @property
    def awaiting_input(self) -> bool:
        return self._pending is not None

    def subscribe(
        self,
        on_append: AppendListener,
        on_clear: ClearListener | None = None,
    ) -> None:
        """Register display callbacks."""
        self._append_listeners.append(on_append)
        if on_clear is not None:
            self._clear_listeners.append(on_clear)

    def append(self, *entries: LogEntry) -> None:
        """Append a block of lines atomically."""
        block = [_to_line(entry) for entry in entries]
        if not block:
            return
        self._lines.extend(block)
        for listener in self._append_listeners:
            listener(block)

    def clear(self) -> None:
        """Empty the log. Mode is left untouched."""
        self._lines.clear()
        for listener in self._clear_listeners:
            listener()

    def transition(self, target: ShellMode) -> None:
        """
        Move to `target` mode.

        Raises:
            ShellStateError: The transition table forbids the move
        """
        if target not in TRANSITIONS[self._mode]:
            raise ShellStateError(f"Illegal transition {self._mode.value} -> {target.value}")
        logger.debug(f"Shell {self._mode.value} -> {target.value}")
        self._mode = target

    def open_prompt(self, command: str) -> PendingPrompt:
        """
        Hand the input channel to a one-shot resolver.

        Raises:
            ShellStateError: A prompt is already pending
        """
        if self._pending is not None:
            raise ShellStateError(
                f"Prompt for {self._pending.command} still pending, refusing {command}"
            )
        self.transition(ShellMode.AWAITING_INPUT)
        self._pending = PendingPrompt(command)
        return self._pending

    def answer_prompt(self, text: str) -> None:
        """Deliver a line to the pending prompt and give the input channel back."""
        if self._pending is None:
            raise ShellStateError("No prompt is pending")
        prompt, self._pending = self._pending, None
        prompt.resolve(text)

    def cancel_prompt(self) -> None:
        """Drop the pending prompt, if any (shell teardown)."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
