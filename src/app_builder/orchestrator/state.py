"""State definition for the LangGraph chat-turn pipeline."""

import operator
from typing import Annotated, TypedDict

from app_builder.models import GenerationContext, GenerationResult


class ChatState(TypedDict):
    """State for one chat turn: prompt in, persisted file changes out.

    ``errors`` accumulates across nodes; other fields are overwritten.
    """

    # Input
    context: GenerationContext

    # Generation
    result: GenerationResult | None

    # Persistence
    applied_paths: list[str]
    generation_id: str | None  # Entry in the workspace generation log

    # Error accumulation
    errors: Annotated[list[str], operator.add]


def make_initial_state(context: GenerationContext) -> ChatState:
    """Create the initial state for one chat turn."""
    return {
        "context": context,
        "result": None,
        "applied_paths": [],
        "generation_id": None,
        "errors": [],
    }
