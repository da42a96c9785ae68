"""LangGraph orchestrator for chat turns."""

from app_builder.orchestrator.exceptions import GraphBuildError, OrchestratorError
from app_builder.orchestrator.graph import ABORT_PREFIX, build_graph
from app_builder.orchestrator.state import ChatState, make_initial_state

__all__ = [
    "ABORT_PREFIX",
    "ChatState",
    "GraphBuildError",
    "OrchestratorError",
    "build_graph",
    "make_initial_state",
]
