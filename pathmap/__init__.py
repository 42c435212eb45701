"""
PathMap
=======

A multi-level map: nested, insertion-ordered mappings behind one flat
API addressed by key paths.

    m = PathMap()
    m.set(("x", "y"), 1)     → Level({'y': 1})
    m.get(("x", "y"))        → 1
    m.is_map("x")            → True
    m.set(("x", "y", "z"), 2)  → ConflictError ("y" holds a leaf)

Writes create missing intermediate levels; reads of paths that do not
resolve return None / False / 0 / an empty iterator instead of raising.
"""

import logging

from pathmap.core import (
    # Types
    PathMap,
    Level,
    # Errors
    PathMapError,
    ArgumentError,
    ConflictError,
)
from pathmap.formats import from_python, to_python
from pathmap.log import get_logger, setup_logging

logging.getLogger("pathmap").addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "PathMap", "Level",
    "PathMapError", "ArgumentError", "ConflictError",
    "from_python", "to_python",
    "get_logger", "setup_logging",
]
