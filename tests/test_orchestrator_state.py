"""Tests for orchestrator state module."""

from app_builder.orchestrator.state import make_initial_state


class TestMakeInitialState:
    """Tests for the make_initial_state factory function."""

    def test_make_initial_state_defaults(self, sample_context):
        """All keys present with correct defaults."""
        state = make_initial_state(sample_context)

        assert state["context"] is sample_context
        assert state["result"] is None
        assert state["applied_paths"] == []
        assert state["generation_id"] is None
        assert state["errors"] == []
        assert len(state) == 5

    def test_initial_state_lists_are_fresh(self, sample_context):
        """Each call gets its own mutable lists."""
        first = make_initial_state(sample_context)
        second = make_initial_state(sample_context)
        first["errors"].append("x")
        assert second["errors"] == []
