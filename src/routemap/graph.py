# src/routemap/graph.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, TypedDict

from routemap.discovery import find_route_tree
from routemap.errors import RouteMapStageError
from routemap.job import Job
from routemap.locate import locate_route_source
from routemap.parser import RouteEntry, parse_route_tree
from routemap.utils import display_path, sha256_text

try:
    from langgraph.graph import END, StateGraph
except Exception as e:  # pragma: no cover
    raise RuntimeError("LangGraph is required. Install 'langgraph'.") from e

logger = logging.getLogger("routemap.graph")

# -----------------------------
# Stages (canonical)
# -----------------------------
STAGE_INIT = "init"
STAGE_PARSE_JOB = "parse_job"
STAGE_DISCOVER = "discover"
STAGE_READ = "read"
STAGE_PARSE_ROUTES = "parse_routes"
STAGE_LOCATE = "locate"
STAGE_SELECT = "select"
STAGE_EMIT_RESULT = "emit_result"
STAGE_DONE = "done"


class RouteMapState(TypedDict, total=False):
    payload: dict[str, Any]
    payload_src: str
    stage: str

    job: Job
    workspace: str
    route_tree_path: str
    route_tree_dir: str

    source_text: str
    route_tree_sha256: str

    routes: list[RouteEntry]
    # aligned with routes; None when no file matched any probed extension
    source_paths: list[Optional[str]]
    selected: dict[str, Any]
    warnings: list[str]

    result: dict[str, Any]


def node_load_job(state: RouteMapState) -> RouteMapState:
    stage = STAGE_PARSE_JOB
    try:
        job = Job.model_validate(state["payload"])
        workspace = job.workspace_path()
        if not workspace.is_dir():
            raise NotADirectoryError(f"Workspace is not a directory: {workspace}")

        state["stage"] = stage
        state["job"] = job
        state["workspace"] = str(workspace)
        state["warnings"] = []
        return state
    except Exception as e:
        raise RouteMapStageError(stage, e) from e


def node_discover_route_tree(state: RouteMapState) -> RouteMapState:
    stage = STAGE_DISCOVER
    try:
        job = state["job"]
        explicit = job.route_tree_path()
        if explicit is not None:
            if not explicit.is_file():
                raise FileNotFoundError(f"Route tree file not found: {explicit}")
            found: Path | None = explicit
        else:
            found = find_route_tree(
                state["workspace"],
                filename=job.filters.route_tree_filename,
                deny_dirs=job.filters.deny_dirs,
            )
        if found is None:
            raise FileNotFoundError(f"No {job.filters.route_tree_filename} found in this workspace.")

        logger.info("using route tree %s", found)
        state["stage"] = stage
        state["route_tree_path"] = str(found)
        state["route_tree_dir"] = str(found.parent)
        return state
    except Exception as e:
        raise RouteMapStageError(stage, e) from e


def node_read_route_tree(state: RouteMapState) -> RouteMapState:
    stage = STAGE_READ
    try:
        text = Path(state["route_tree_path"]).read_text(encoding="utf-8")
        state["stage"] = stage
        state["source_text"] = text
        state["route_tree_sha256"] = sha256_text(text)
        return state
    except Exception as e:
        raise RouteMapStageError(stage, e) from e


def node_parse_routes(state: RouteMapState) -> RouteMapState:
    stage = STAGE_PARSE_ROUTES
    try:
        routes = parse_route_tree(state["source_text"])
        if not routes:
            name = Path(state["route_tree_path"]).name
            state["warnings"].append(f"No routes found in {name}.")
        logger.info("parsed %d routes", len(routes))

        state["stage"] = stage
        state["routes"] = routes
        return state
    except Exception as e:
        raise RouteMapStageError(stage, e) from e


def node_locate_sources(state: RouteMapState) -> RouteMapState:
    stage = STAGE_LOCATE
    try:
        exts = state["job"].resolve.source_exts
        source_paths: list[Optional[str]] = []
        for r in state["routes"]:
            found = locate_route_source(r.import_path, state["route_tree_dir"], exts)
            if found is None:
                logger.debug("no source file for %s (%s)", r.route_path, r.import_path)
            source_paths.append(str(found) if found is not None else None)

        state["stage"] = stage
        state["source_paths"] = source_paths
        return state
    except Exception as e:
        raise RouteMapStageError(stage, e) from e


def node_select_route(state: RouteMapState) -> RouteMapState:
    stage = STAGE_SELECT
    try:
        wanted = state["job"].route
        state["stage"] = stage
        if wanted is None:
            return state

        matches = [i for i, r in enumerate(state["routes"]) if r.route_path == wanted]
        if not matches:
            raise LookupError(f"Route not found in route tree: {wanted}")

        # duplicates keep declaration order; the first one with a file wins
        for i in matches:
            source = state["source_paths"][i]
            if source is not None:
                r = state["routes"][i]
                state["selected"] = {
                    "routePath": r.route_path,
                    "importPath": r.import_path,
                    "sourcePath": source,
                }
                return state

        raise FileNotFoundError(f"Could not find source file for route: {wanted}")
    except Exception as e:
        raise RouteMapStageError(stage, e) from e


def node_emit_result(state: RouteMapState) -> RouteMapState:
    stage = STAGE_EMIT_RESULT
    try:
        workspace = state["workspace"]
        routes_out: list[dict[str, Any]] = []
        for r, source in zip(state["routes"], state["source_paths"]):
            item: dict[str, Any] = r.to_dict()
            item["sourcePath"] = source
            routes_out.append(item)

        result: dict[str, Any] = {
            "ok": True,
            "stage": STAGE_DONE,
            "job_payload_source": state.get("payload_src", "unknown"),
            "route_tree": display_path(state["route_tree_path"], workspace),
            "route_tree_sha256": state["route_tree_sha256"],
            "routes": routes_out,
            "warnings": list(state.get("warnings", [])),
        }
        if "selected" in state:
            result["selected"] = state["selected"]

        state["stage"] = stage
        state["result"] = result
        return state
    except Exception as e:
        raise RouteMapStageError(stage, e) from e


def build_routemap_graph():
    g = StateGraph(RouteMapState)

    g.add_node("load_job", node_load_job)
    g.add_node("discover_route_tree", node_discover_route_tree)
    g.add_node("read_route_tree", node_read_route_tree)
    g.add_node("parse_routes", node_parse_routes)
    g.add_node("locate_sources", node_locate_sources)
    g.add_node("select_route", node_select_route)
    g.add_node("emit_result", node_emit_result)

    g.set_entry_point("load_job")
    g.add_edge("load_job", "discover_route_tree")
    g.add_edge("discover_route_tree", "read_route_tree")
    g.add_edge("read_route_tree", "parse_routes")
    g.add_edge("parse_routes", "locate_sources")
    g.add_edge("locate_sources", "select_route")
    g.add_edge("select_route", "emit_result")
    g.add_edge("emit_result", END)

    return g.compile()


def run_routemap_graph(
        *,
        payload: dict[str, Any],
        payload_src: str,
) -> dict[str, Any]:
    app = build_routemap_graph()
    state: RouteMapState = {
        "payload": payload,
        "payload_src": payload_src,
        "stage": STAGE_INIT,
    }
    final_state = app.invoke(state)
    return final_state["result"]
