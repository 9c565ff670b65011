# src/routemap/facts.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tree_sitter import Node, Tree

from routemap.syntax import node_text, string_value, top_level_statements

logger = logging.getLogger("routemap.facts")

# Generator conventions (file-based route codegen)
UPDATE_METHOD = "update"
ADD_CHILDREN_METHOD = "_addFileChildren"
FULL_PATH_INTERFACE = "FileRoutesByFullPath"

VARIABLE_DECLARATIONS = ("lexical_declaration", "variable_declaration")


@dataclass(frozen=True)
class PathEntry:
    route_path: str
    type_name: str
    lineno: int = 0


@dataclass
class RouteFacts:
    """
    Symbol tables for one route tree file.

    imports:  local alias -> module specifier
    updates:  local name  -> alias it was `.update(...)`-ed from
    children: local name  -> base it was `._addFileChildren(...)`-ed from
    path_entries: FileRoutesByFullPath members, declaration order
    """

    imports: dict[str, str] = field(default_factory=dict)
    updates: dict[str, str] = field(default_factory=dict)
    children: dict[str, str] = field(default_factory=dict)
    path_entries: list[PathEntry] = field(default_factory=list)


def extract_facts(tree: Tree | Node) -> RouteFacts:
    """
    Single pass over the top-level statements. Nothing is resolved here, so
    declaration order in the source does not matter.
    Unrecognized statement shapes are skipped silently.
    """
    root = tree.root_node if isinstance(tree, Tree) else tree
    facts = RouteFacts()

    for stmt in top_level_statements(root):
        if stmt.type == "import_statement":
            _collect_import(stmt, facts)
        elif stmt.type in VARIABLE_DECLARATIONS:
            _collect_variables(stmt, facts)
        elif stmt.type == "interface_declaration":
            if node_text(stmt.child_by_field_name("name")) == FULL_PATH_INTERFACE:
                _collect_path_entries(stmt, facts)

    logger.debug(
        "facts: imports=%d updates=%d children=%d path_entries=%d",
        len(facts.imports),
        len(facts.updates),
        len(facts.children),
        len(facts.path_entries),
    )
    return facts


def _collect_import(stmt: Node, facts: RouteFacts) -> None:
    source = stmt.child_by_field_name("source")
    module_path = string_value(source) if source is not None else None
    if module_path is None:
        return

    for clause in stmt.named_children:
        if clause.type != "import_clause":
            continue
        for named in clause.named_children:
            # default (`import X from`) and namespace (`* as X`) imports are not route bindings
            if named.type != "named_imports":
                continue
            for spec in named.named_children:
                if spec.type != "import_specifier":
                    continue
                local = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                if local is None or local.type != "identifier":
                    continue
                facts.imports[node_text(local)] = module_path


def _collect_variables(stmt: Node, facts: RouteFacts) -> None:
    for decl in stmt.named_children:
        if decl.type != "variable_declarator":
            continue
        target = decl.child_by_field_name("name")
        value = decl.child_by_field_name("value")
        if target is None or target.type != "identifier" or value is None:
            continue

        callee = _member_call(value)
        if callee is None:
            continue
        object_name, method_name = callee
        var_name = node_text(target)

        if method_name == UPDATE_METHOD:
            facts.updates[var_name] = object_name
        elif method_name == ADD_CHILDREN_METHOD:
            facts.children[var_name] = object_name


def _member_call(value: Node) -> tuple[str, str] | None:
    """(object, method) for `object.method(...)` with plain identifiers, else None."""
    if value.type != "call_expression":
        return None
    fn = value.child_by_field_name("function")
    if fn is None or fn.type != "member_expression":
        return None
    obj = fn.child_by_field_name("object")
    prop = fn.child_by_field_name("property")
    if obj is None or prop is None:
        return None
    if obj.type != "identifier" or prop.type != "property_identifier":
        return None
    return node_text(obj), node_text(prop)


def _collect_path_entries(stmt: Node, facts: RouteFacts) -> None:
    body = stmt.child_by_field_name("body")
    if body is None:
        return

    for member in body.named_children:
        if member.type != "property_signature":
            continue

        key = member.child_by_field_name("name")
        route_path = string_value(key) if key is not None else None
        if route_path is None:
            continue

        type_name = _typeof_identifier(member.child_by_field_name("type"))
        if type_name is None:
            # non-route target type (object literal, string, ...)
            continue

        facts.path_entries.append(PathEntry(route_path, type_name, member.start_point[0] + 1))


def _typeof_identifier(annotation: Node | None) -> str | None:
    """`: typeof X` -> "X"; any other declared type -> None."""
    if annotation is None:
        return None
    query = annotation
    # the `type` field holds a type_annotation wrapping the actual type
    if query.type == "type_annotation" and query.named_children:
        query = query.named_children[0]
    if query.type != "type_query":
        return None
    targets = query.named_children
    if len(targets) != 1 or targets[0].type != "identifier":
        return None
    return node_text(targets[0])
