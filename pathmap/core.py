"""
pathmap.core — Multi-Level Map
==============================

DESIGN
══════

§1  THE PROBLEM
───────────────

Nested dictionaries are the everyday way to index data by more than
one key:

    registry["plugins"]["loader"]["timeout"] = 30

but every write has to make sure the intermediate levels exist, every
read has to guard against a missing level, and nothing stops a caller
from silently replacing a whole subtree with a scalar.

PathMap puts one flat API in front of the tree.  Every operation takes
a PATH (a sequence of keys) and resolves it from the root:

    m = PathMap()
    m.set(("plugins", "loader", "timeout"), 30)
    m.get(("plugins", "loader", "timeout"))     → 30
    m.is_map(("plugins", "loader"))             → True


§2  TWO VARIANTS
────────────────

Every slot holds exactly one of:

    (1)  Level       a nested, insertion-ordered mapping
    (2)  leaf        anything else (including a plain dict)

Levels are created by PathMap itself, on write, whenever a path needs
a level that is absent.  The variant is decided by construction: a
plain dict stored as a value is a leaf and is never descended into.


§3  RESOLUTION
──────────────

resolve(path, level, mode) follows the path from `level`:

    LOOKUP   key holds a Level  → descend
             key absent or leaf → stop, not found (None)

    CREATE   key holds a Level  → descend
             key absent         → insert a new empty Level, descend
             key holds a leaf   → ConflictError

The empty path resolves to `level` itself in both modes.  Levels
created before a conflicting segment are kept: creation happens one
segment at a time.


§4  OPERATIONS
──────────────

    clear / is_map / keys / values / entries / size    path may be empty
    delete / get / has / set                           path must not be

Only set, delete and clear mutate.  Reads never raise for a path that
does not resolve; they return None / False / 0 / an empty iterator.
delete never prunes levels it has emptied.

PathMap is not thread-safe.  Iterators are live views: do not mutate a
level while iterating it.

License: MIT
"""

from collections.abc import Iterator, MutableMapping
from enum import Enum, auto
from types import MappingProxyType
from typing import Any, Hashable, Optional, Sequence, Union

from .log import get_logger

logger = get_logger(__name__)

# Entries shown by repr() before it switches to a length summary
REPR_MAX_ENTRIES = 3

Path = Union[Sequence[Hashable], Hashable]


# ═══════════════════════════════════════════════════════════════════
#  ERRORS
# ═══════════════════════════════════════════════════════════════════

class PathMapError(Exception):
    """Base class for PathMap errors."""


class ArgumentError(PathMapError, ValueError):
    """A required key was not supplied, or a Level was passed as a value."""


class ConflictError(PathMapError):
    """
    A write needed to descend through a slot that holds a leaf value.

    Attributes:
        key:  the path segment that holds the leaf
        path: the full path that was being written
    """

    def __init__(self, key: Hashable, path: tuple):
        self.key = key
        self.path = path
        super().__init__(
            f"Could not create child level as a value already exists "
            f"for {key!r} in keys: {list(path)!r}."
        )


# ═══════════════════════════════════════════════════════════════════
#  LEVEL (nested mapping variant)
# ═══════════════════════════════════════════════════════════════════

class Level(MutableMapping):
    """
    One level of a PathMap: an insertion-ordered mapping whose values
    are either further Levels or leaves.

    Levels compare equal to any mapping with the same items, so
    `m.get("x") == {"y": 1}` reads naturally in tests and at the REPL.

    Levels are only created by PathMap writes.  A Level cannot be
    stored as a value (ArgumentError), so every level has exactly one
    parent slot and the tree stays acyclic.
    """
    __slots__ = ("_entries",)

    def __init__(self):
        self._entries: dict = {}

    def __getitem__(self, key):
        return self._entries[key]

    def __setitem__(self, key, value):
        _reject_level(value, "set")
        self._entries[key] = value

    def __delitem__(self, key):
        del self._entries[key]

    def __iter__(self) -> Iterator:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def view(self) -> MappingProxyType:
        """Live read-only view of this level's entries."""
        return MappingProxyType(self._entries)

    def __repr__(self) -> str:
        return f"Level({_entries_repr(self._entries)})"


def _entries_repr(entries: dict) -> str:
    if len(entries) <= REPR_MAX_ENTRIES:
        return repr(entries)
    return f"{{...}} len={len(entries)}"


# ═══════════════════════════════════════════════════════════════════
#  PATH RESOLUTION
# ═══════════════════════════════════════════════════════════════════

class Resolve(Enum):
    """Resolution modes."""
    LOOKUP = auto()     # Stop at the first missing or leaf segment
    CREATE = auto()     # Create missing levels, fail on leaves


def _as_path(path: Path) -> tuple:
    """Normalize a path argument: tuples and lists are paths, anything else is one key."""
    if isinstance(path, tuple):
        return path
    if isinstance(path, list):
        return tuple(path)
    return (path,)


def _resolve(
    keys: tuple, level: Level, mode: Resolve = Resolve.LOOKUP,
    full_path: Optional[tuple] = None,
) -> Optional[Level]:
    """
    Follow `keys` from `level` through nested Levels.

    Returns the Level reached, or None in LOOKUP mode when a key is
    absent or holds a leaf.  In CREATE mode absent keys get a fresh
    Level and a leaf raises ConflictError naming `full_path` (defaults
    to `keys`).
    """
    current = level
    for key in keys:
        child = current._entries.get(key)

        if isinstance(child, Level):
            current = child
            continue

        if mode is Resolve.LOOKUP:
            return None

        # A None leaf is still a leaf
        if key in current._entries:
            path = full_path if full_path is not None else keys
            logger.debug("Conflict at %r while writing %r", key, path)
            raise ConflictError(key, path)

        child = Level()
        current._entries[key] = child
        logger.debug("Created level at %r", key)
        current = child

    return current


# ═══════════════════════════════════════════════════════════════════
#  PATHMAP
# ═══════════════════════════════════════════════════════════════════

class PathMap:
    """
    A multi-level map addressed by key paths.

    Examples:
        m = PathMap()
        m.set(("key1", "key2"), 1)   # creates a level under "key1"
        m.get("key1")                # → Level({'key2': 1})
        m.get(("key1", "key2"))      # → 1
        m.has(("key1", "key2"))      # → True

    A tuple or list argument is a path; any other value is a one-key
    path.  Wrap a tuple key to use it as a single key: ((a, b),).
    """
    __slots__ = ("_root",)

    def __init__(self):
        object.__setattr__(self, "_root", Level())

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} attributes are read-only")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} attributes are read-only")

    @property
    def root(self) -> MappingProxyType:
        """Live read-only view of the root level."""
        return self._root.view()

    # ── mutators ─────────────────────────────────────────────────

    def clear(self, path: Path = ()) -> None:
        """
        Empty the root, or the level at `path`.  A path that does not
        resolve to a level is a no-op.
        """
        level = _resolve(_as_path(path), self._root)
        if level is not None:
            level.clear()

    def delete(self, path: Path) -> bool:
        """
        Remove the slot at `path`.  Returns whether it was present.

        Levels emptied by the removal are kept.
        """
        keys = _require_keys(path, "delete")
        level = _resolve(keys[:-1], self._root)
        if level is None or keys[-1] not in level._entries:
            return False
        del level._entries[keys[-1]]
        return True

    def set(self, path: Path, value: Any) -> Union[Level, MappingProxyType]:
        """
        Store `value` at `path`, creating any missing intermediate levels.

        Returns the level that received the write (the read-only root
        view for a one-key path).

        Raises:
            ArgumentError: `path` is empty
            ArgumentError: `value` is a Level
            ConflictError: a segment before the last key holds a leaf
        """
        keys = _require_keys(path, "set")
        _reject_level(value, "set")
        if len(keys) == 1:
            self._root._entries[keys[0]] = value
            return self.root

        level = _resolve(keys[:-1], self._root, Resolve.CREATE, full_path=keys)
        level._entries[keys[-1]] = value
        return level

    # ── reads ────────────────────────────────────────────────────

    def get(self, path: Path, default: Any = None) -> Any:
        """Value at `path`, or `default` when the path does not resolve."""
        keys = _require_keys(path, "get")
        level = _resolve(keys[:-1], self._root)
        if level is None:
            return default
        return level._entries.get(keys[-1], default)

    def has(self, path: Path) -> bool:
        keys = _require_keys(path, "has")
        level = _resolve(keys[:-1], self._root)
        return level is not None and keys[-1] in level._entries

    def is_map(self, path: Path = ()) -> bool:
        """Whether `path` resolves to a level.  The empty path is the root."""
        return _resolve(_as_path(path), self._root) is not None

    def size(self, path: Path = ()) -> int:
        level = _resolve(_as_path(path), self._root)
        return 0 if level is None else len(level._entries)

    def keys(self, path: Path = ()) -> Iterator:
        level = _resolve(_as_path(path), self._root)
        return iter(()) if level is None else iter(level._entries.keys())

    def values(self, path: Path = ()) -> Iterator:
        level = _resolve(_as_path(path), self._root)
        return iter(()) if level is None else iter(level._entries.values())

    def entries(self, path: Path = ()) -> Iterator:
        """Iterator of (key, value) pairs in insertion order."""
        level = _resolve(_as_path(path), self._root)
        return iter(()) if level is None else iter(level._entries.items())

    def walk(self, path: Path = ()) -> Iterator[tuple]:
        """
        Yield (full_path, leaf) for every leaf below `path`, depth-first
        in insertion order.  Empty levels contribute nothing.
        """
        prefix = _as_path(path)
        level = _resolve(prefix, self._root)
        if level is None:
            return
        yield from _walk_level(level, prefix)

    # ── mapping protocol ─────────────────────────────────────────

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator:
        return self.keys()

    def __contains__(self, path) -> bool:
        keys = _as_path(path)
        return bool(keys) and self.has(keys)

    def __getitem__(self, path):
        keys = _require_keys(path, "get")
        level = _resolve(keys[:-1], self._root)
        if level is None or keys[-1] not in level._entries:
            raise KeyError(path)
        return level._entries[keys[-1]]

    def __setitem__(self, path, value):
        self.set(path, value)

    def __delitem__(self, path):
        if not self.delete(path):
            raise KeyError(path)

    def __repr__(self) -> str:
        return f"PathMap({_entries_repr(self._root._entries)})"


def _require_keys(path: Path, operation: str) -> tuple:
    keys = _as_path(path)
    if not keys:
        raise ArgumentError(f"{operation} - no keys specified.")
    return keys


def _reject_level(value: Any, operation: str) -> None:
    if isinstance(value, Level):
        raise ArgumentError(
            f"{operation} - a Level cannot be stored as a value; "
            f"levels are created by writing to a longer path."
        )


def _walk_level(level: Level, prefix: tuple) -> Iterator[tuple]:
    # Explicit stack: depth is bounded only by memory, as in _resolve
    stack = [(iter(level._entries.items()), prefix)]
    while stack:
        entries, prefix = stack[-1]
        for key, value in entries:
            if isinstance(value, Level):
                stack.append((iter(value._entries.items()), prefix + (key,)))
                break
            yield prefix + (key,), value
        else:
            stack.pop()
