"""
pathmap.formats — Convert between PathMaps and plain Python data.

Supported conversions:
    • PathMap / Level → nested dicts
    • Mapping (nested)  → PathMap
"""

from collections.abc import Mapping
from typing import Any

from .core import Level, PathMap


def to_python(obj: Any) -> Any:
    """
    Convert a PathMap or Level into nested plain dicts.

    Levels become dicts in insertion order; leaves are returned as-is
    (not copied).  Any other object is returned unchanged.
    """
    if isinstance(obj, PathMap):
        obj = obj._root
    if not isinstance(obj, Level):
        return obj

    # Explicit stack so depth is not limited by the recursion limit
    result: dict = {}
    stack = [(obj, result)]
    while stack:
        level, target = stack.pop()
        for key, value in level._entries.items():
            if isinstance(value, Level):
                child: dict = {}
                target[key] = child
                stack.append((value, child))
            else:
                target[key] = value
    return result


def from_python(data: Mapping) -> PathMap:
    """
    Build a PathMap from a nested mapping.

    Nested mappings become Levels (empty ones included); every other
    value is stored as a leaf.

        m = from_python({"db": {"host": "localhost", "port": 5432}})
        m.get(("db", "port"))   → 5432
    """
    if not isinstance(data, Mapping):
        raise TypeError(f"from_python expects a mapping, got {type(data).__name__}")

    result = PathMap()
    stack = [(result._root, data)]
    while stack:
        level, mapping = stack.pop()
        for key, value in mapping.items():
            if isinstance(value, Mapping):
                child = Level()
                level._entries[key] = child
                stack.append((child, value))
            else:
                level[key] = value
    return result
