"""Dot-path field resolution over a generic value tree.

Paths are resolved against the JSON form of a step (`Step.model_dump(mode="json")`),
so rules address steps the same way their JSON is written: `tags.action`,
`tags.time.value`, `depends_on.0`. Missing segments resolve to ABSENT; they
never raise.
"""

from typing import Any, Final


class _Absent:
    """Marker for a path that does not resolve. Distinct from None (JSON null)."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final = _Absent()


def resolve(tree: Any, path: str) -> Any:
    """Resolve a dot-separated path against nested dicts and lists.

    Dict segments are keys; list segments are non-negative integer indexes.

    Args:
        tree: Root of the value tree
        path: Dot-separated path, e.g. "tags.time.value"

    Returns:
        The value at the path, or ABSENT
    """
    return _descend(tree, path.split(".")) if path else ABSENT


def _descend(node: Any, segments: list[str]) -> Any:
    if not segments:
        return node

    head, rest = segments[0], segments[1:]

    if isinstance(node, dict):
        if head not in node:
            return ABSENT
        return _descend(node[head], rest)

    if isinstance(node, list) and head.isdigit():
        index = int(head)
        if index >= len(node):
            return ABSENT
        return _descend(node[index], rest)

    # Scalars (and None) have no children
    return ABSENT
