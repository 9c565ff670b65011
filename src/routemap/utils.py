# src/routemap/utils.py
from __future__ import annotations

import hashlib
import re
from pathlib import Path


def sha256_bytes(b: bytes) -> str:
    h = hashlib.sha256()
    h.update(b)
    return h.hexdigest()


def sha256_text(s: str) -> str:
    return sha256_bytes(s.encode("utf-8"))


_PATH_SEP_RE = re.compile(r"[\\]+")


def norm_relpath(path: str) -> str:
    """
    Deterministic path normalization for displayed paths.
    - converts backslashes to forward slashes
    - strips leading "./" and leading "/"
    - collapses duplicate slashes
    - does NOT resolve ".."
    """
    p = (path or "").strip()
    p = _PATH_SEP_RE.sub("/", p)
    while p.startswith("./"):
        p = p[2:]
    p = p.lstrip("/")
    p = re.sub(r"/{2,}", "/", p)
    return p


def display_path(path: str | Path, base: str | Path) -> str:
    """
    Workspace-relative form of `path` when it lives under `base`,
    otherwise the absolute posix path.
    """
    p = Path(path).resolve()
    try:
        return norm_relpath(p.relative_to(Path(base).resolve()).as_posix())
    except ValueError:
        return p.as_posix()
