# src/routemap/parser.py
from __future__ import annotations

import logging
from dataclasses import dataclass

from routemap.facts import extract_facts
from routemap.resolve import resolve_type_name
from routemap.syntax import parse_source

logger = logging.getLogger("routemap.parser")


@dataclass(frozen=True)
class RouteEntry:
    route_path: str
    import_path: str

    def to_dict(self) -> dict[str, str]:
        return {"routePath": self.route_path, "importPath": self.import_path}


def parse_route_tree(source_text: str) -> list[RouteEntry]:
    """
    Public path -> module specifier pairs from a generated route tree file.

    Contract:
      - Pure: no I/O, same text in gives the same list out.
      - Entries whose symbol does not trace back to an import are dropped silently.
      - Sorted by route_path in code-point order (same as UTF-8 byte order);
        the sort is stable, so duplicated paths keep declaration order.
      - Unparseable text raises RouteTreeSyntaxError.
    """
    facts = extract_facts(parse_source(source_text))

    results: list[RouteEntry] = []
    for entry in facts.path_entries:
        import_path = resolve_type_name(entry.type_name, facts.children, facts.updates, facts.imports)
        if import_path is None:
            logger.debug("unresolved: %s -> %s (line %d)", entry.route_path, entry.type_name, entry.lineno)
            continue
        results.append(RouteEntry(entry.route_path, import_path))

    results.sort(key=lambda r: r.route_path)
    return results
