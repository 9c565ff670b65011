# src/routemap/resolve.py
from __future__ import annotations

from typing import Mapping, Optional


def resolve_type_name(
        type_name: str,
        children: Mapping[str, str],
        updates: Mapping[str, str],
        imports: Mapping[str, str],
) -> Optional[str]:
    """
    Follow a public-path symbol back to the module it was imported from.

    Order mirrors how the generator builds it, reversed:
      1) any number of `_addFileChildren` layers (children table)
      2) at most one `.update(...)` hop (update table)
      3) the import alias (import table)

    A revisit in the children chain stops the walk at the current name, so
    malformed input terminates instead of looping.
    Returns None when the chain does not end at a known import.
    """
    current = type_name
    seen: set[str] = set()
    while current in children:
        if current in seen:
            break
        seen.add(current)
        current = children[current]

    if current in updates:
        current = updates[current]

    return imports.get(current)
