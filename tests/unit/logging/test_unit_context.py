# tests/unit/logging/test_unit_context.py - v1
"""Tests for logging/context.py: contextual logging variables."""

from __future__ import annotations

from louvain_index.logging.context import (
    clear_context,
    get_context,
    set_level_context,
    set_run_context,
)


class TestLogContext:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_initial_state(self):
        ctx = get_context()
        assert ctx.run_id is None
        assert ctx.graph_name is None
        assert ctx.level is None

    def test_set_run_context(self):
        set_run_context("run1", "karate")
        ctx = get_context()
        assert ctx.run_id == "run1"
        assert ctx.graph_name == "karate"

    def test_set_level_context(self):
        set_level_context(0, "local_moving")
        ctx = get_context()
        assert ctx.level == 0
        assert ctx.phase == "local_moving"

    def test_as_dict_keeps_level_zero(self):
        set_level_context(0)
        d = get_context().as_dict()
        assert d == {"level": 0}

    def test_clear(self):
        set_run_context("run1")
        set_level_context(1, "zoom_out")
        clear_context()
        ctx = get_context()
        assert ctx.run_id is None
        assert ctx.phase is None
