# src/routemap/main.py
from __future__ import annotations

from typing import Any, Dict


def run(
        job_payload: Dict[str, Any],
        *,
        payload_src: str = "unknown",
) -> Dict[str, Any]:
    """
    Core entrypoint used by routemap.cli.

    routemap.graph owns the workflow
    (load job -> discover -> read -> parse -> locate -> select -> emit result).
    The route tree analysis itself lives in routemap.parser and is pure.
    """
    from routemap.graph import run_routemap_graph

    # Let RouteMapStageError bubble up so the CLI can render stage-aware JSON.
    return run_routemap_graph(payload=job_payload, payload_src=payload_src)
