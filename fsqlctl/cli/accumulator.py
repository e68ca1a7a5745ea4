"""
Multi-line Input Staging.

The interactive shell reads one line at a time and needs to know when the
user has finished a command. A command is staged when:

- a blank line is entered (configurable threshold of consecutive blanks)
- the first line is a single word, such as ``help`` or ``exit``
- a line ends with ``;``
- the first line is blank (an empty command, routed as invalid)

``\\reset`` on a continuation line drops the buffer. Ctrl-C does the same.
Ctrl-D (EOFError from the reader) ends the whole session.
"""

from collections.abc import Awaitable, Callable
from enum import Enum

DEFAULT_PROMPT = "fsql> "
DEFAULT_RESET_DIRECTIVE = "\\reset"
STATEMENT_TERMINATOR = ";"


class FeedResult(str, Enum):
    """What happened to the buffer after a line was fed."""

    CONTINUE = "continue"
    STAGED = "staged"
    RESET = "reset"


class InputAccumulator:
    """
    Line buffer for one command.

    Usage:
        acc = InputAccumulator()
        if acc.feed("QUERY a.b") is FeedResult.STAGED:
            command = acc.take()
    """

    def __init__(
        self,
        blank_line_threshold: int = 1,
        reset_directive: str = DEFAULT_RESET_DIRECTIVE,
        prompt: str = DEFAULT_PROMPT,
    ) -> None:
        if blank_line_threshold < 1:
            raise ValueError("blank_line_threshold must be at least 1")
        self.blank_line_threshold = blank_line_threshold
        self.reset_directive = reset_directive.lower()
        self.first_prompt = prompt
        self._lines: list[str] = []
        self._blank_lines = 0
        self._staged = False

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def blank_lines(self) -> int:
        return self._blank_lines

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def is_staged(self) -> bool:
        return self._staged

    @property
    def prompt(self) -> str:
        """Prompt for the next line: the shell prompt, then right-aligned line numbers."""
        if not self._lines:
            return self.first_prompt
        return f"{self.line_count + 1:3}> "

    def reset(self) -> None:
        self._lines.clear()
        self._blank_lines = 0
        self._staged = False

    def interrupt(self) -> None:
        """Abandon the command being typed (Ctrl-C)."""
        self.reset()

    def feed(self, line: str) -> FeedResult:
        """
        Add one line of input.

        Args:
            line: Line as read, without its terminator

        Returns:
            STAGED when the buffer holds a complete command, RESET when the
            reset directive dropped the buffer, CONTINUE otherwise
        """
        if self._staged:
            raise RuntimeError("Command already staged; call take() first")

        trimmed = line.strip()

        if self._lines and trimmed.lower() == self.reset_directive:
            self.reset()
            return FeedResult.RESET

        self._lines.append(line + "\n")
        first_line = self.line_count == 1

        if trimmed:
            self._blank_lines = 0
        else:
            self._blank_lines += 1

        if (
            self._blank_lines >= self.blank_line_threshold
            or (first_line and trimmed and not any(c.isspace() for c in trimmed))
            or trimmed.endswith(STATEMENT_TERMINATOR)
            or (first_line and not trimmed)
        ):
            self._staged = True
            return FeedResult.STAGED

        return FeedResult.CONTINUE

    def take(self) -> str:
        """Return the staged command, trimmed, and reset for the next one."""
        if not self._staged:
            raise RuntimeError("No command staged")
        command = "".join(self._lines).strip()
        self.reset()
        return command


LineReader = Callable[[str], Awaitable[str]]


async def read_command(
    read_line: LineReader,
    accumulator: InputAccumulator,
    on_interrupt: Callable[[], None] | None = None,
    on_reset: Callable[[], None] | None = None,
) -> str:
    """
    Read lines until a command is staged.

    Args:
        read_line: Async callable taking a prompt and returning one line
        accumulator: Buffer to stage into; left empty on return
        on_interrupt: Called after Ctrl-C dropped the buffer
        on_reset: Called after the reset directive dropped the buffer

    Returns:
        The staged command text, trimmed (may be empty)

    Raises:
        EOFError: End of input; the session should close
    """
    while True:
        try:
            line = await read_line(accumulator.prompt)
        except KeyboardInterrupt:
            accumulator.interrupt()
            if on_interrupt is not None:
                on_interrupt()
            continue

        result = accumulator.feed(line)
        if result is FeedResult.STAGED:
            return accumulator.take()
        if result is FeedResult.RESET and on_reset is not None:
            on_reset()
