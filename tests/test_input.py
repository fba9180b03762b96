"""Tests for key mapping and the thread-safe input queue."""

import threading

from lightcycle.core.enums import Intent
from lightcycle.core.models import EAST, NORTH, SOUTH, WEST
from lightcycle.engine.input_map import InputMapper, heading_for
from lightcycle.engine.input_queue import InputQueue


class TestInputMapper:

    def test_arrow_keys(self):
        m = InputMapper()
        assert m.map_key("ArrowUp") == Intent.UP
        assert m.map_key("ArrowDown") == Intent.DOWN
        assert m.map_key("ArrowLeft") == Intent.LEFT
        assert m.map_key("ArrowRight") == Intent.RIGHT

    def test_letter_keys_case_insensitive(self):
        m = InputMapper()
        assert m.map_key("w") == Intent.UP
        assert m.map_key("W") == Intent.UP
        assert m.map_key("h") == Intent.LEFT
        assert m.map_key("L") == Intent.RIGHT

    def test_kill_switch_keys(self):
        m = InputMapper()
        assert m.map_key("q") == Intent.QUIT
        assert m.map_key("Escape") == Intent.QUIT
        assert m.map_key("Ctrl+C") == Intent.QUIT

    def test_unbound_key(self):
        m = InputMapper()
        assert m.map_key("x") is None
        assert m.map_key("arrowup") is None

    def test_map_keys_filters_unbound(self):
        assert InputMapper().map_keys(["x", "d", "F5", "q"]) == [Intent.RIGHT, Intent.QUIT]

    def test_headings(self):
        assert heading_for(Intent.UP) == NORTH
        assert heading_for(Intent.DOWN) == SOUTH
        assert heading_for(Intent.LEFT) == WEST
        assert heading_for(Intent.RIGHT) == EAST
        assert heading_for(Intent.QUIT) is None


class TestInputQueue:

    def test_drain_preserves_order(self):
        q = InputQueue()
        for k in ("a", "b", "c"):
            q.push(k)
        assert q.drain() == ["a", "b", "c"]
        assert q.empty

    def test_concurrent_producers(self):
        q = InputQueue()

        def produce(key: str) -> None:
            for _ in range(100):
                q.push(key)

        threads = [threading.Thread(target=produce, args=(k,)) for k in "wasd"]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        keys = q.drain()
        assert len(keys) == 400
        assert {k: keys.count(k) for k in "wasd"} == {k: 100 for k in "wasd"}
