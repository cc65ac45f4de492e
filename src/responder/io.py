"""Line-oriented I/O capability injected into the engine and the console loop."""

from __future__ import annotations

import sys
from typing import Optional, Protocol, TextIO


class LineIO(Protocol):
    def prompt_line(self, text: str) -> str:
        ...

    def emit_line(self, text: str) -> None:
        ...


class ConsoleIO:
    """stdin/stdout implementation. Raises EOFError when input runs out."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

    def prompt_line(self, text: str) -> str:
        self._stdout.write(text)
        self._stdout.flush()
        line = self._stdin.readline()
        if not line:
            raise EOFError("end of input")
        return line[:-1] if line.endswith("\n") else line

    def emit_line(self, text: str) -> None:
        self._stdout.write(f"{text}\n")
        self._stdout.flush()
