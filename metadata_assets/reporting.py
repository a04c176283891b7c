from __future__ import annotations

import os
import sys
from typing import TextIO

RED = "\x1b[31m"
YELLOW = "\x1b[33m"
RESET = "\x1b[0m"


def colorize(text: str, color: str | None) -> str:
    if not color:
        return text
    return f"{color}{text}{RESET}"


def color_enabled(stream: TextIO, disabled: bool = False) -> bool:
    if disabled or os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Reporter:
    def __init__(self, color: bool = False, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self.color = color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def _emit(self, stream: TextIO, tag: str, message: str, color: str | None = None) -> None:
        line = f"[{tag}] {message}"
        print(colorize(line, color if self.color else None), file=stream)

    def passed(self, message: str) -> None:
        self._emit(self.out, "PASS", message)

    def error(self, message: str) -> None:
        self._emit(self.err, "ERROR", message, RED)

    def warn(self, message: str) -> None:
        self._emit(self.err, "WARN", message, YELLOW)

    def section(self, message: str, stream: TextIO | None = None) -> None:
        print(message, file=stream or self.err)

    def asset_errors(self, errors: list[str]) -> None:
        self.section(f"{len(errors)} Errors found in assets folder:")
        for error in errors:
            self.error(error)

    def metadata_warnings(self, warnings: list[str]) -> None:
        self.section(f"{len(warnings)} Errors found in metadata:")
        for warning in warnings:
            self.warn(warning)
