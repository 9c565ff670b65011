# src/routemap/syntax.py
from __future__ import annotations

import codecs
import logging
from typing import Iterator

import tree_sitter_typescript as tsts
from tree_sitter import Language, Node, Parser, Tree

from routemap.errors import RouteTreeSyntaxError

logger = logging.getLogger("routemap.syntax")

# The TypeScript grammar keeps interfaces/type aliases apart from value bindings,
# so `interface Foo {}` next to `const Foo = ...` parses as written.
TS_LANGUAGE = Language(tsts.language_typescript())

EXPORT_STATEMENT = "export_statement"


def parse_source(source_text: str) -> Tree:
    """
    Parse one TypeScript source file.

    Contract:
      - A fresh Parser per call (tree-sitter parsers are not shareable across threads).
      - Any ERROR or MISSING node anywhere in the tree is fatal: raises RouteTreeSyntaxError.
    """
    parser = Parser(TS_LANGUAGE)
    tree = parser.parse(source_text.encode("utf-8"))

    if tree.root_node.has_error:
        bad = _first_error_node(tree.root_node) or tree.root_node
        row, col = bad.start_point
        kind = "missing token" if bad.is_missing else "unexpected syntax"
        raise RouteTreeSyntaxError(f"{kind} near {node_text(bad)[:40]!r}", lineno=row + 1, col=col + 1)

    logger.debug("parsed %d bytes into %d top-level nodes", len(source_text), tree.root_node.named_child_count)
    return tree


def _first_error_node(root: Node) -> Node | None:
    # depth-first, source order; only descend into subtrees that carry an error
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        if not node.has_error:
            continue
        stack.extend(reversed(node.children))
    return None


def top_level_statements(root: Node) -> Iterator[Node]:
    """
    Yields top-level statements in source order.
    `export <declaration>` is unwrapped to the declaration; `export { ... }` lists
    and re-exports have no declaration and are yielded as-is.
    """
    for stmt in root.named_children:
        if stmt.type == EXPORT_STATEMENT:
            decl = stmt.child_by_field_name("declaration")
            if decl is not None:
                yield decl
                continue
        yield stmt


def node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def string_value(node: Node) -> str | None:
    """
    Contents of a string literal node, escapes decoded.
    Returns None for anything that is not a plain string literal.
    """
    if node.type != "string":
        return None

    parts: list[str] = []
    for child in node.named_children:
        if child.type == "string_fragment":
            parts.append(node_text(child))
        elif child.type == "escape_sequence":
            parts.append(_decode_escape(node_text(child)))
    return "".join(parts)


def _decode_escape(raw: str) -> str:
    # line continuations contribute nothing to the value
    if raw in ("\\\n", "\\\r\n"):
        return ""
    try:
        return codecs.decode(raw, "unicode_escape")
    except UnicodeDecodeError:
        return raw[1:]
