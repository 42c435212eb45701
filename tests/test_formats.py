"""
Tests for pathmap.formats and pathmap.log.
"""

import io
import logging
import sys
import os

import pytest

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pathmap import PathMap, Level, from_python, to_python
from pathmap.log import SIMPLE_FORMAT, get_logger, setup_logging


# ═══════════════════════════════════════════════════════════════════
#  §1  PYTHON CONVERSION
# ═══════════════════════════════════════════════════════════════════

class TestFormats:

    def test_to_python(self):
        m = PathMap()
        m.set("a", 1)
        m.set(("b", "c"), [1, 2])
        m.set(("b", "d", "e"), None)
        assert to_python(m) == {"a": 1, "b": {"c": [1, 2], "d": {"e": None}}}

    def test_to_python_level_and_leaf(self):
        m = PathMap()
        m.set(("x", "y"), 1)
        assert to_python(m.get("x")) == {"y": 1}
        assert type(to_python(m.get("x"))) is dict
        assert to_python(42) == 42

    def test_to_python_keeps_order(self):
        m = PathMap()
        for key in ["z", "a", "m"]:
            m.set(key, 0)
        assert list(to_python(m)) == ["z", "a", "m"]

    def test_from_python(self):
        m = from_python({
            "server": {"host": "0.0.0.0", "port": 443},
            "debug": False,
            "plugins": {},
        })
        assert m.get(("server", "port")) == 443
        assert m.get("debug") is False
        assert m.is_map("server")
        assert m.is_map("plugins")
        assert m.size("plugins") == 0
        assert isinstance(m.get("server"), Level)

    def test_from_python_non_string_keys(self):
        m = from_python({1: {(2, 3): "x"}})
        assert m.get((1, (2, 3))) == "x"

    def test_from_python_rejects_non_mapping(self):
        with pytest.raises(TypeError):
            from_python([1, 2, 3])

    def test_deep_conversion(self):
        m = PathMap()
        deep = tuple(range(3000))
        m.set(deep, "bottom")
        data = to_python(m)
        node = data
        for key in deep[:-1]:
            assert list(node) == [key]
            node = node[key]
        assert node == {deep[-1]: "bottom"}

        rebuilt = from_python(data)
        assert rebuilt.get(deep) == "bottom"
        assert rebuilt.is_map(deep[:-1])

    def test_nested_conversion(self):
        obj = {
            "database": {"host": "localhost", "port": 5432, "ssl": False},
            "cache": {"ttl": 300, "backends": ["redis", "memory"]},
        }
        assert to_python(from_python(obj)) == obj


# ═══════════════════════════════════════════════════════════════════
#  §2  LOGGING
# ═══════════════════════════════════════════════════════════════════

class TestLogging:

    @pytest.fixture(autouse=True)
    def _restore_logger(self):
        logger = logging.getLogger("pathmap")
        handlers, level = list(logger.handlers), logger.level
        yield
        logger.handlers = handlers
        logger.setLevel(level)

    def test_get_logger(self):
        assert get_logger("pathmap.core").name == "pathmap.core"

    def test_setup_logging_emits_level_creation(self):
        stream = io.StringIO()
        setup_logging(logging.DEBUG, SIMPLE_FORMAT, stream)
        PathMap().set(("a", "b"), 1)
        assert "DEBUG: Created level at 'a'" in stream.getvalue()

    def test_setup_logging_replaces_own_handler(self):
        setup_logging(stream=io.StringIO())
        logger = setup_logging(stream=io.StringIO())
        own = [h for h in logger.handlers if getattr(h, "_pathmap_console", False)]
        assert len(own) == 1

    def test_silent_at_info(self):
        stream = io.StringIO()
        setup_logging(logging.INFO, SIMPLE_FORMAT, stream)
        PathMap().set(("a", "b"), 1)
        assert stream.getvalue() == ""


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
