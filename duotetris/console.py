"""Terminal output with cursor positioning and colours, and keyboard input."""

from __future__ import annotations

import contextlib
import os
import sys
from collections import deque
from enum import IntFlag
from typing import IO, Callable, Iterable, Iterator, Protocol, runtime_checkable

CSI = "\x1b["
CLEAR_SCREEN = CSI + "2J" + CSI + "H"
HIDE_CURSOR = CSI + "?25l"
SHOW_CURSOR = CSI + "?25h"
RESET = CSI + "0m"

_BACKSPACES = ("\b", "\x7f")
_LINE_ENDS = ("\r", "\n")


class Color(IntFlag):
    """Character attributes: foreground and background colour bits."""

    FOREGROUND_BLUE = 0x01
    FOREGROUND_GREEN = 0x02
    FOREGROUND_RED = 0x04
    FOREGROUND_INTENSITY = 0x08
    BACKGROUND_BLUE = 0x10
    BACKGROUND_GREEN = 0x20
    BACKGROUND_RED = 0x40
    BACKGROUND_INTENSITY = 0x80
    WHITE = FOREGROUND_BLUE | FOREGROUND_GREEN | FOREGROUND_RED


def _ansi_sequence(color: Color) -> str:
    """Translate colour bits into an SGR escape sequence."""
    foreground = (
        (1 if color & Color.FOREGROUND_RED else 0)
        + (2 if color & Color.FOREGROUND_GREEN else 0)
        + (4 if color & Color.FOREGROUND_BLUE else 0)
    )
    background = (
        (1 if color & Color.BACKGROUND_RED else 0)
        + (2 if color & Color.BACKGROUND_GREEN else 0)
        + (4 if color & Color.BACKGROUND_BLUE else 0)
    )
    codes = ["0", str((90 if color & Color.FOREGROUND_INTENSITY else 30) + foreground)]
    background_bits = (
        Color.BACKGROUND_RED
        | Color.BACKGROUND_GREEN
        | Color.BACKGROUND_BLUE
        | Color.BACKGROUND_INTENSITY
    )
    if color & background_bits:
        codes.append(str((100 if color & Color.BACKGROUND_INTENSITY else 40) + background))
    return CSI + ";".join(codes) + "m"


@runtime_checkable
class KeySource(Protocol):
    """Something keys can be read from."""

    def read_key(self) -> str: ...

    def key_ready(self) -> bool: ...


class _QueuedKeys:
    """Keys supplied up front, read one character at a time."""

    def __init__(self, keys: Iterable[str]) -> None:
        self._pending: deque[str] = deque("".join(keys))

    def read_key(self) -> str:
        if not self._pending:
            raise EOFError("no more keys")
        return self._pending.popleft()

    def key_ready(self) -> bool:
        return bool(self._pending)


class _StreamKeys:
    """Keys read from a non-interactive text stream."""

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream

    def read_key(self) -> str:
        key = self._stream.read(1)
        if not key:
            raise EOFError("end of input")
        return key

    def key_ready(self) -> bool:
        return False


class _PosixKeys:
    """Keys read unbuffered from a terminal file descriptor."""

    def __init__(self, fd: int) -> None:
        self._fd = fd

    def read_key(self) -> str:
        data = os.read(self._fd, 1)
        if not data:
            raise EOFError("end of input")
        return data.decode("latin-1")

    def key_ready(self) -> bool:
        import select

        ready, _, _ = select.select([self._fd], [], [], 0)
        return bool(ready)


class _WindowsKeys:
    """Keys read from the Windows console."""

    def read_key(self) -> str:
        import msvcrt

        return msvcrt.getwch()

    def key_ready(self) -> bool:
        import msvcrt

        return bool(msvcrt.kbhit())


class Console:
    """A screen that can be drawn on at given positions, and a keyboard."""

    def __init__(
        self,
        output: IO[str] | None = None,
        keys: KeySource | Iterable[str] = (),
    ) -> None:
        self.output: IO[str] = output if output is not None else sys.stdout
        self.keys: KeySource = keys if isinstance(keys, KeySource) else _QueuedKeys(keys)

    def goto(self, x: int, y: int) -> None:
        """Move the cursor to column ``x`` and row ``y``, both counted from 0."""
        self.flush()
        self.output.write(f"{CSI}{y + 1};{x + 1}H")

    def write(self, text: str) -> None:
        self.output.write(text)

    def clear(self) -> None:
        """Clear the screen and put the cursor at the top left."""
        self.output.write(CLEAR_SCREEN)
        self.flush()

    def set_color(self, color: Color | int) -> None:
        self.output.write(_ansi_sequence(Color(color)))

    def hide_cursor(self) -> None:
        self.output.write(HIDE_CURSOR)

    def read_key(self) -> str:
        """Wait for one key and return it; EOFError when input has ended."""
        self.flush()
        return self.keys.read_key()

    def key_ready(self) -> bool:
        """Whether a key is waiting to be read."""
        return self.keys.key_ready()

    def read_line(self) -> str:
        """Read keys, echoing them, up to the end of the line."""
        chars: list[str] = []
        while True:
            try:
                key = self.read_key()
            except EOFError:
                if chars:
                    break
                raise
            if key in _LINE_ENDS:
                self.write("\n")
                break
            if key in _BACKSPACES:
                if chars:
                    chars.pop()
                    self.write("\b \b")
                continue
            chars.append(key)
            self.write(key)
        self.flush()
        return "".join(chars)

    def flush(self) -> None:
        self.output.flush()


@contextlib.contextmanager
def open_terminal() -> Iterator[Console]:
    """Open the process's terminal as a Console, restoring it afterwards."""
    stdin, stdout = sys.stdin, sys.stdout
    restore: Callable[[], None] | None = None
    keys: KeySource
    if stdin.isatty():
        if sys.platform == "win32":
            keys = _WindowsKeys()
        else:
            import termios
            import tty

            fd = stdin.fileno()
            saved = termios.tcgetattr(fd)
            tty.setcbreak(fd)

            def restore() -> None:
                termios.tcsetattr(fd, termios.TCSADRAIN, saved)

            keys = _PosixKeys(fd)
    else:
        keys = _StreamKeys(stdin)
    console = Console(stdout, keys)
    try:
        yield console
    finally:
        console.write(RESET + SHOW_CURSOR)
        console.flush()
        if restore is not None:
            restore()