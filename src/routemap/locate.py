# src/routemap/locate.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

# Probe order is significant: first hit wins.
ROUTE_SOURCE_EXTS = (
    ".tsx",
    ".ts",
    ".jsx",
    ".js",
)


def candidate_paths(import_path: str, route_tree_dir: str | Path, exts: Sequence[str] = ROUTE_SOURCE_EXTS) -> list[Path]:
    base = Path(route_tree_dir)
    return [Path(os.path.normpath(base / (import_path + ext))) for ext in exts]


def locate_route_source(
        import_path: str,
        route_tree_dir: str | Path,
        exts: Sequence[str] = ROUTE_SOURCE_EXTS,
) -> Path | None:
    """
    Map a route's module specifier (relative, no extension) to the source file on disk.
    Specifiers are relative to the directory holding the route tree file.
    Returns the first existing candidate as an absolute path, or None.
    """
    spec = (import_path or "").strip()
    if not spec:
        return None

    for cand in candidate_paths(spec, route_tree_dir, exts):
        if cand.is_file():
            return cand.resolve()
    return None
