"""LangGraph orchestrator for a single chat turn.

Wires an AIProvider and an optional ProjectWorkspace into a StateGraph:
the provider streams a generation, then the extracted file changes are
applied to the workspace, or the turn is aborted. With a workspace attached
every turn is also logged as a GenerationRecord.
"""

from datetime import datetime
from typing import Callable, Optional

from langgraph.graph import END, START, StateGraph

from app_builder.models import GenerationRecord, GenerationResult, GenerationStatus, Message
from app_builder.orchestrator.exceptions import GraphBuildError
from app_builder.orchestrator.state import ChatState
from app_builder.project.workspace import ProjectWorkspace
from app_builder.providers.base import AIProvider, StreamCallbacks

# Abort detection prefix, matched by the CLI
ABORT_PREFIX = "ABORT:"


def make_generate_node(
    provider: AIProvider,
    on_token: Optional[Callable[[str], None]] = None,
    workspace: Optional[ProjectWorkspace] = None,
) -> Callable[[ChatState], dict]:
    """Factory: returns a node closure that streams one generation.

    Tokens are relayed to ``on_token`` as they arrive. With a workspace, an
    IN_PROGRESS generation is logged before the provider is called.
    On completion returns {"result": GenerationResult}; on failure returns
    {"errors": [str]}.
    """

    def generate_node(state: ChatState) -> dict:
        outcome: dict = {}
        update: dict = {}

        def _complete(result: GenerationResult) -> None:
            outcome["result"] = result

        def _error(exc: Exception) -> None:
            outcome["error"] = exc

        try:
            if workspace is not None:
                record = workspace.record_generation(
                    GenerationRecord(
                        prompt=state["context"].prompt,
                        provider=provider.name,
                        model=provider.model,
                    )
                )
                update["generation_id"] = record.generation_id

            provider.generate_stream(
                state["context"],
                StreamCallbacks(on_token=on_token, on_complete=_complete, on_error=_error),
            )
        except Exception as exc:
            outcome["error"] = exc

        if "error" in outcome:
            return {**update, "errors": [f"generate_node error: {outcome['error']}"], "result": None}
        if "result" not in outcome:
            return {**update, "errors": ["generate_node error: provider returned no result"], "result": None}
        return {**update, "result": outcome["result"]}

    return generate_node


def _mark_failed(workspace: Optional[ProjectWorkspace], state: ChatState, message: str) -> list[str]:
    """Mark the logged generation FAILED; returns any error doing so."""
    if workspace is None or not state.get("generation_id"):
        return []
    try:
        workspace.update_generation(
            state["generation_id"],
            status=GenerationStatus.FAILED,
            error_message=message,
        )
    except Exception as exc:
        return [f"generation log error: {exc}"]
    return []


def make_apply_node(workspace: Optional[ProjectWorkspace]) -> Callable[[ChatState], dict]:
    """Factory: returns a node closure that persists the generated files.

    Without a workspace nothing is written and ``applied_paths`` stays empty.
    The user prompt and full assistant response are appended to the history,
    and the logged generation is marked COMPLETED with its token usage.
    """

    def apply_node(state: ChatState) -> dict:
        if workspace is None:
            return {"applied_paths": []}

        result = state["result"]
        try:
            applied = workspace.apply_changes(result.files)
            workspace.append_history([
                Message(role="user", content=state["context"].prompt),
                Message(role="assistant", content=result.response),
            ])
            if state.get("generation_id"):
                workspace.update_generation(
                    state["generation_id"],
                    model=result.model,
                    status=GenerationStatus.COMPLETED,
                    files_changed=result.files,
                    prompt_tokens=result.tokens_used.prompt,
                    completion_tokens=result.tokens_used.completion,
                    total_tokens=result.tokens_used.total,
                    completed_at=datetime.now(),
                )
            return {"applied_paths": applied}
        except Exception as exc:
            message = f"apply_node error: {exc}"
            return {"errors": [message, *_mark_failed(workspace, state, str(exc))], "applied_paths": []}

    return apply_node


def make_abort_node(workspace: Optional[ProjectWorkspace] = None) -> Callable[[ChatState], dict]:
    """Factory: returns the terminal node for a failed generation.

    The logged generation, if any, is marked FAILED with the reason.
    """

    def abort_node(state: ChatState) -> dict:
        result = state["result"]
        reason = result.error if result is not None and result.error else "generation failed"
        if (result is None or not result.error) and state["errors"]:
            logged_reason = state["errors"][-1]
        else:
            logged_reason = reason
        errors = _mark_failed(workspace, state, logged_reason)
        return {"errors": [*errors, f"{ABORT_PREFIX} chat turn aborted: {reason}."]}

    return abort_node


def route_after_generate(state: ChatState) -> str:
    """Router for the post-generate conditional edge: "apply" or "abort"."""
    result = state["result"]
    if result is not None and result.success:
        return "apply"
    return "abort"


def build_graph(
    provider: AIProvider,
    workspace: Optional[ProjectWorkspace] = None,
    on_token: Optional[Callable[[str], None]] = None,
):
    """Build and compile the chat-turn StateGraph.

    Edge topology:
      START -> generate_node
      generate_node -> conditional(route_after_generate) -> {apply_node, abort_node}
      apply_node -> END
      abort_node -> END

    Raises:
        GraphBuildError: If graph construction fails.
    """
    try:
        graph = StateGraph(ChatState)

        graph.add_node("generate_node", make_generate_node(provider, on_token, workspace))
        graph.add_node("apply_node", make_apply_node(workspace))
        graph.add_node("abort_node", make_abort_node(workspace))

        graph.add_edge(START, "generate_node")
        graph.add_conditional_edges(
            "generate_node",
            route_after_generate,
            {
                "apply": "apply_node",
                "abort": "abort_node",
            },
        )
        graph.add_edge("apply_node", END)
        graph.add_edge("abort_node", END)

        return graph.compile()

    except Exception as exc:
        raise GraphBuildError(f"Failed to build chat graph: {exc}") from exc
