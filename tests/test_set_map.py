"""Tests for SetMap."""

from __future__ import annotations

import threading

from molindo_utils.collections import SetMap


class TestSetMap:
    """Tests for SetMap."""

    def test_put_and_put_all(self):
        """Test single and bulk inserts merge into one set."""
        set_map: SetMap[str, str] = SetMap.new_set_map()

        set_map.put("foo", "bar")
        set_map.put_all("foo", ["bar", "baz", "cux"])

        values = set_map.get("foo")
        assert values is not None
        assert len(values) == 3
        assert values == {"bar", "baz", "cux"}

    def test_put_reports_new_values(self):
        set_map: SetMap[str, int] = SetMap()

        assert set_map.put("a", 1) is True
        assert set_map.put("a", 1) is False
        assert set_map.put_all("a", [1]) is False
        assert set_map.put_all("a", [1, 2]) is True
        assert set_map.put_all("a", []) is False

    def test_get_missing(self):
        set_map: SetMap[str, int] = SetMap()

        assert set_map.get("missing") is None
        assert set_map.get_or_empty("missing") == frozenset()
        assert "missing" not in set_map

    def test_empty_put_all_creates_no_key(self):
        set_map: SetMap[str, int] = SetMap()
        set_map.put_all("a", [])
        assert len(set_map) == 0

    def test_remove_drops_empty_key(self):
        set_map: SetMap[str, int] = SetMap()
        set_map.put_all("a", [1, 2])

        assert set_map.remove("a", 1) is True
        assert set_map.remove("a", 1) is False
        assert "a" in set_map

        assert set_map.remove("a", 2) is True
        assert "a" not in set_map
        assert set_map.remove("b", 1) is False

    def test_remove_all(self):
        set_map: SetMap[str, int] = SetMap()
        set_map.put_all("a", [1, 2])

        assert set_map.remove_all("a") == {1, 2}
        assert set_map.remove_all("a") is None

    def test_contains(self):
        set_map: SetMap[str, int] = SetMap()
        set_map.put("a", 1)

        assert set_map.contains("a", 1) is True
        assert set_map.contains("a", 2) is False
        assert set_map.contains("b", 1) is False

    def test_sizes_and_iteration(self):
        set_map: SetMap[str, int] = SetMap()
        set_map.put_all("a", [1, 2, 3])
        set_map.put("b", 3)

        assert len(set_map) == 2
        assert set_map.size() == 4
        assert set(set_map) == {"a", "b"}
        assert set_map.keys() == {"a", "b"}
        assert sorted(set_map.values()) == [1, 2, 3, 3]

    def test_clear(self):
        set_map: SetMap[str, int] = SetMap()
        set_map.put("a", 1)
        set_map.clear()

        assert len(set_map) == 0
        assert set_map.size() == 0

    def test_concurrent_puts(self):
        set_map: SetMap[str, int] = SetMap()

        def writer(offset: int) -> None:
            for i in range(200):
                set_map.put("shared", offset + i)

        threads = [threading.Thread(target=writer, args=(n * 1000,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert set_map.size() == 800
