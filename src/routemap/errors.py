# src/routemap/errors.py
from __future__ import annotations


class RouteTreeSyntaxError(SyntaxError):
    """The route tree source could not be parsed at all."""

    def __init__(self, message: str, *, lineno: int = 1, col: int = 1, filename: str | None = None):
        super().__init__(message, (filename, lineno, col, None))
        self.col = col

    def __str__(self) -> str:
        where = f"{self.filename}:" if self.filename else "line "
        return f"{self.msg} ({where}{self.lineno}:{self.col})"


class RouteMapStageError(RuntimeError):
    def __init__(self, stage: str, inner: Exception):
        super().__init__(str(inner))
        self.stage = stage
        self.inner = inner
