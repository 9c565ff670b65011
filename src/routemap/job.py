# src/routemap/job.py
from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from routemap.discovery import DEFAULT_DENY_DIRS, ROUTE_TREE_FILENAME
from routemap.locate import ROUTE_SOURCE_EXTS


class Filters(BaseModel):
    route_tree_filename: str = ROUTE_TREE_FILENAME
    deny_dirs: list[str] = list(DEFAULT_DENY_DIRS)


class ResolveOptions(BaseModel):
    # probed in order, first existing file wins
    source_exts: list[str] = list(ROUTE_SOURCE_EXTS)

    @field_validator("source_exts")
    @classmethod
    def _dotted(cls, v: list[str]) -> list[str]:
        out = [e if e.startswith(".") else f".{e}" for e in (x.strip() for x in v) if e]
        if not out:
            raise ValueError("source_exts must name at least one extension")
        return out


class Job(BaseModel):
    workspace: str = "."
    # explicit route tree file; skips discovery when set
    route_tree: str | None = None
    # route path to select, e.g. "/users/$userId"
    route: str | None = None
    filters: Filters = Field(default_factory=Filters)
    resolve: ResolveOptions = Field(default_factory=ResolveOptions)

    def workspace_path(self) -> Path:
        return Path(self.workspace).expanduser().resolve()

    def route_tree_path(self) -> Path | None:
        """
        Explicit route tree, resolved against the workspace when relative.
        """
        if not self.route_tree:
            return None
        p = Path(self.route_tree).expanduser()
        if not p.is_absolute():
            p = self.workspace_path() / p
        return p.resolve()
