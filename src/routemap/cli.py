# src/routemap/cli.py
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from . import __version__
from . import main as main_module
from .errors import RouteMapStageError

STAGE_PARSE_JOB = "parse_job"
JOB_ENV_VAR = "ROUTEMAP_JOB_JSON"


def _parse_dotenv_line(line: str) -> tuple[str, str] | None:
    """
    Minimal .env parser.
    Supports:
      - KEY=VALUE
      - export KEY=VALUE
      - comments (#...) when not inside quotes
      - quoted values with '...' or "..."
    No variable expansion (${...}).
    """
    s = line.strip()
    if not s or s.startswith("#"):
        return None

    if s.startswith("export "):
        s = s[len("export ") :].lstrip()
        if not s:
            return None

    if "=" not in s:
        return None

    key, rest = s.split("=", 1)
    key = key.strip()
    if not key:
        return None

    val = rest.strip()
    if not val:
        return key, ""

    if val[0] in ("'", '"'):
        quote = val[0]
        out = []
        escaped = False
        i = 1
        while i < len(val):
            ch = val[i]
            if escaped:
                out.append(ch)
                escaped = False
            elif quote == '"' and ch == "\\":
                escaped = True
            elif ch == quote:
                break
            else:
                out.append(ch)
            i += 1
        # anything after the closing quote is ignored
        return key, "".join(out)

    # unquoted: strip trailing comment
    return key, val.split("#", 1)[0].strip()


def _load_dotenv_file(path: str, *, override: bool = False) -> bool:
    """
    Loads key/value pairs from a .env file into os.environ.
    Returns True if the file existed and was read.
    """
    p = Path(path)
    if not p.exists() or not p.is_file():
        return False

    for raw_line in p.read_text(encoding="utf-8").splitlines():
        parsed = _parse_dotenv_line(raw_line)
        if not parsed:
            continue
        k, v = parsed
        if not override and k in os.environ:
            continue
        os.environ[k] = v
    return True


def _read_job_payload(payload_src_hint: str | None) -> tuple[dict[str, Any], str]:
    """
    Base payload comes from ROUTEMAP_JOB_JSON when set (a JSON object string),
    otherwise it is empty and built from CLI flags alone.

    Returns: (payload_dict, payload_src_string)
    """
    raw = os.environ.get(JOB_ENV_VAR)
    if not raw or not raw.strip():
        return {}, "cli"

    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise TypeError(f"{JOB_ENV_VAR} must decode to a JSON object (dict).")

    return payload, payload_src_hint or f"env:{JOB_ENV_VAR}"


def _apply_cli_overrides(payload: dict[str, Any], args: argparse.Namespace) -> dict[str, Any]:
    out = dict(payload)
    if args.workspace is not None:
        out["workspace"] = args.workspace
    if args.route_tree is not None:
        out["route_tree"] = args.route_tree
    if args.route is not None:
        out["route"] = args.route
    return out


def _configure_logging(verbosity: int) -> None:
    # stdout carries the JSON result only
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_success(obj: dict[str, Any]) -> None:
    print(json.dumps(obj, separators=(",", ":"), ensure_ascii=False), file=sys.stdout)


def _print_failure(stage: str, err: Exception) -> None:
    out = {
        "ok": False,
        "stage": stage,
        "error_code": f"ROUTEMAP_FAILED_{stage.upper()}",
        "error_message": str(err),
    }
    print(json.dumps(out, separators=(",", ":"), ensure_ascii=False), file=sys.stdout)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="routemap",
        description="List routes from a generated route tree and map them to their source files.",
    )
    parser.add_argument(
        "route",
        nargs="?",
        default=None,
        help="Optional route path to select, e.g. '/users/$userId'.",
    )
    parser.add_argument(
        "--workspace",
        metavar="DIR",
        default=None,
        help="Workspace root to search (default: current directory).",
    )
    parser.add_argument(
        "--route-tree",
        dest="route_tree",
        metavar="FILE",
        default=None,
        help="Use this route tree file instead of searching the workspace.",
    )
    parser.add_argument(
        "--dotenv",
        nargs="?",
        const=".env",
        default=None,
        metavar="PATH",
        help="Optional: load env vars from a local .env file (default: ./.env).",
    )
    parser.add_argument(
        "--dotenv-override",
        action="store_true",
        help="Optional: allow .env values to override already-set environment variables.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug detail).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"routemap {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)

    payload_src_hint: str | None = None
    had_payload_before = bool(os.environ.get(JOB_ENV_VAR, "").strip())

    if args.dotenv:
        loaded = _load_dotenv_file(str(args.dotenv), override=bool(args.dotenv_override))
        if loaded and not had_payload_before and bool(os.environ.get(JOB_ENV_VAR, "").strip()):
            payload_src_hint = f"dotenv:{args.dotenv}#{JOB_ENV_VAR}"

    try:
        payload, payload_src = _read_job_payload(payload_src_hint)
        payload = _apply_cli_overrides(payload, args)

        result = main_module.run(payload, payload_src=payload_src)
        _print_success(result)
        return 0

    except RouteMapStageError as e:
        _print_failure(e.stage, e)
        return 1

    except (json.JSONDecodeError, TypeError) as e:
        _print_failure(STAGE_PARSE_JOB, e)
        return 1

    except Exception as e:  # noqa: BLE001 - top-level CLI error handler
        _print_failure("unknown", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
