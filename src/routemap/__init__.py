# src/routemap/__init__.py
from __future__ import annotations

from routemap.errors import RouteMapStageError, RouteTreeSyntaxError
from routemap.parser import RouteEntry, parse_route_tree

__version__ = "0.1.0"

__all__ = [
    "RouteEntry",
    "RouteMapStageError",
    "RouteTreeSyntaxError",
    "parse_route_tree",
    "__version__",
]
