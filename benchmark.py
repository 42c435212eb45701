"""
Benchmark: pathmap vs hand-written nested dicts.

PathMap adds path normalization, conflict detection and a uniform
"not found" policy on top of plain dict traversal.  This script
measures what that costs for the common operations:

    1. set   — auto-creating writes at increasing depth
    2. get   — reads of present and absent paths
    3. walk  — flattening a populated tree

The point is NOT "we're faster" — plain dicts always win on raw
speed.  The point is how close PathMap stays while giving stronger
guarantees.
"""

import sys
import os
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from pathmap.core import PathMap
from pathmap.formats import from_python


# ═══════════════════════════════════════════════════════════════════
#  TEST DATA
# ═══════════════════════════════════════════════════════════════════

CONFIG = {
    "server": {
        "host": "0.0.0.0",
        "port": 443,
        "tls": True,
        "workers": 4,
    },
    "database": {
        "host": "db.internal",
        "port": 5432,
        "name": "production",
        "pool_size": 10,
        "ssl": True,
    },
    "logging": {
        "level": "WARN",
        "format": "json",
        "outputs": ["stdout", "file"],
    },
    "cache": {
        "backend": "redis",
        "ttl": 300,
        "max_size": 10000,
    },
}

DEPTHS = [1, 2, 4, 8, 16]
ITERATIONS = 20_000


def _paths(depth, count):
    return [tuple(f"k{i % 7}_{d}" for d in range(depth - 1)) + (i,) for i in range(count)]


def _dict_set(root, path, value):
    cur = root
    for key in path[:-1]:
        cur = cur.setdefault(key, {})
    cur[path[-1]] = value


def _dict_get(root, path):
    cur = root
    for key in path:
        if not isinstance(cur, dict) or key not in cur:
            return None
        cur = cur[key]
    return cur


def _time(fn):
    t0 = time.perf_counter()
    fn()
    return time.perf_counter() - t0


# ═══════════════════════════════════════════════════════════════════
#  BENCHMARKS
# ═══════════════════════════════════════════════════════════════════

def benchmark_set():
    print("=" * 70)
    print("  §1  SET (auto-creating writes)")
    print("=" * 70)
    print()
    print(f"  {'depth':>5}  {'dict':>10}  {'PathMap':>10}  {'ratio':>6}")

    for depth in DEPTHS:
        paths = _paths(depth, ITERATIONS)

        root = {}
        dt_dict = _time(lambda: [_dict_set(root, p, 1) for p in paths])

        m = PathMap()
        dt_map = _time(lambda: [m.set(p, 1) for p in paths])

        print(f"  {depth:>5}  {dt_dict*1000:>8.1f}ms  {dt_map*1000:>8.1f}ms  "
              f"{dt_map / dt_dict:>5.1f}x")
    print()


def benchmark_get():
    print("=" * 70)
    print("  §2  GET (present and absent paths)")
    print("=" * 70)
    print()
    print(f"  {'depth':>5}  {'dict':>10}  {'PathMap':>10}  {'ratio':>6}")

    for depth in DEPTHS:
        paths = _paths(depth, ITERATIONS)
        misses = [p[:-1] + ("missing",) for p in paths]

        root = {}
        m = PathMap()
        for p in paths:
            _dict_set(root, p, 1)
            m.set(p, 1)

        dt_dict = _time(lambda: [_dict_get(root, p) for p in paths + misses])
        dt_map = _time(lambda: [m.get(p) for p in paths + misses])

        print(f"  {depth:>5}  {dt_dict*1000:>8.1f}ms  {dt_map*1000:>8.1f}ms  "
              f"{dt_map / dt_dict:>5.1f}x")
    print()


def benchmark_walk():
    print("=" * 70)
    print("  §3  WALK (flatten a config tree)")
    print("=" * 70)
    print()

    m = from_python(CONFIG)
    leaves = []
    dt = _time(lambda: [leaves.extend(m.walk()) for _ in range(1000)])
    print(f"  {len(leaves) // 1000} leaves × 1000 walks: {dt*1000:.1f}ms")
    for path, value in list(m.walk())[:5]:
        print(f"    {'/'.join(map(str, path)):<24} {value!r}")
    print()


if __name__ == "__main__":
    benchmark_set()
    benchmark_get()
    benchmark_walk()
