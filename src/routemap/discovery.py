# src/routemap/discovery.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

logger = logging.getLogger("routemap.discovery")

ROUTE_TREE_FILENAME = "routeTree.gen.ts"
DEFAULT_DENY_DIRS = ("node_modules", ".git", ".next", "dist", "build", ".venv", ".output")


def find_route_tree(
        workspace: str | Path,
        filename: str = ROUTE_TREE_FILENAME,
        deny_dirs: Iterable[str] = DEFAULT_DENY_DIRS,
) -> Path | None:
    """
    First `filename` under `workspace`, walking directories in sorted order so
    the pick is stable across runs. Denied directory names are pruned at any depth.
    """
    root = Path(workspace)
    if not root.is_dir():
        raise NotADirectoryError(f"Workspace is not a directory: {root}")

    deny = set(deny_dirs)
    for cur, dirs, filenames in os.walk(root):
        dirs[:] = sorted(d for d in dirs if d not in deny)
        if filename in filenames:
            found = (Path(cur) / filename).resolve()
            logger.debug("route tree found at %s", found)
            return found
    return None
