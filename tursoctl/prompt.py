"""Interactive prompts: spinner, yes/no confirmation and text entry."""

from __future__ import annotations

import sys
import threading
from typing import TextIO

_FRAMES = ("⣾ ", "⣽ ", "⣻ ", "⢿ ", "⡿ ", "⣟ ", "⣯ ", "⣷ ")
_INTERVAL = 0.1
_CHAR_LIMIT = 80


def _is_terminal(stream) -> bool:
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        return False


def is_interactive() -> bool:
    """True when both stdin and stdout are terminals."""
    return _is_terminal(sys.stdin) and _is_terminal(sys.stdout)


class Spinner:
    """An animated progress indicator followed by a line of text."""

    def __init__(self, text: str, prefix: str = ""):
        self.prefix = prefix
        self.suffix = text
        self.quitting = False
        self._frame = 0
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def view(self) -> str:
        """The text the spinner currently shows; empty once stopped."""
        if self.quitting:
            return ""
        return f"{self.prefix}{_FRAMES[self._frame]} {self.suffix}"

    def start(self) -> None:
        """Start animating, or print the text once when not interactive."""
        if not is_interactive():
            print(self.view())
            return
        self.quitting = False
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        out = sys.stdout
        while not self._stop_event.is_set():
            out.write("\r\x1b[2K" + self.view())
            out.flush()
            self._frame = (self._frame + 1) % len(_FRAMES)
            self._stop_event.wait(_INTERVAL)
        out.write("\r\x1b[2K")
        out.flush()

    def stop(self) -> None:
        """Stop the animation and wait for the screen to be cleared."""
        self.quitting = True
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def __enter__(self) -> "Spinner":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()


def spinner(text: str) -> Spinner:
    """Create and start a spinner showing the given text."""
    s = Spinner(text)
    s.start()
    return s


def confirm(message: str, stdin: TextIO | None = None, stdout: TextIO | None = None) -> bool:
    """Ask a yes/no question up to three times."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    for _ in range(3):
        stdout.write(f"{message} [y/n]: ")
        stdout.flush()
        line = stdin.readline()
        if not line.endswith("\n"):
            raise EOFError("end of input while waiting for confirmation")
        answer = line.strip().lower()
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        stdout.write("Please answer with yes or no.\n")
    raise RuntimeError("could not get prompt confirmed by user")


def _prefilled_input(value: str) -> str:
    try:
        import readline
    except ImportError:
        return input()

    def hook() -> None:
        readline.insert_text(value)
        readline.redisplay()

    readline.set_pre_input_hook(hook)
    try:
        return input()
    finally:
        readline.set_pre_input_hook()


def text_input(prompt: str, placeholder: str = "", value: str = "") -> str:
    """Read a single line of at most 80 characters, starting from value."""
    print(f"{prompt}\n")
    if placeholder and not value:
        print(f"  ({placeholder})")
    print("(press <enter> to submit)")
    editable = value and is_interactive()
    try:
        line = _prefilled_input(value) if editable else input()
    except EOFError:
        line = ""
    except KeyboardInterrupt:
        raise RuntimeError("cancelled by user") from None
    if not line and not editable:
        line = value
    return line[:_CHAR_LIMIT]


def text_area(prompt: str, placeholder: str = "", value: str = "") -> str:
    """Read several lines of text until end of input."""
    print(f"{prompt}\n")
    if placeholder:
        print(f"  ({placeholder})")
    print("(press <ctrl-d> to submit)\n")
    lines: list[str] = []
    try:
        while True:
            lines.append(input())
    except EOFError:
        pass
    except KeyboardInterrupt:
        raise RuntimeError("cancelled by user") from None
    return "\n".join(lines)