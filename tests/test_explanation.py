"""Tests for explanation extraction."""

from app_builder.parsing.explanation import DEFAULT_EXPLANATION, extract_explanation


def test_prose_after_code_block():
    response = "```filepath:src/App.tsx\nexport default function App() {}\n```\nCreated the app component."
    assert extract_explanation(response) == "Created the app component."


def test_prose_around_multiple_blocks():
    response = (
        "I made two changes.\n\n"
        "```filepath:a.ts\na\n```\n\n"
        "```filepath:b.ts\nb\n```\n\n"
        "Run npm install afterwards.\n"
    )
    assert extract_explanation(response) == "I made two changes.\nRun npm install afterwards."


def test_blank_lines_are_removed():
    assert extract_explanation("first\n\n   \nsecond\n") == "first\nsecond"


def test_fallback_when_only_code():
    assert extract_explanation("```filepath:a.ts\nconst a = 1;\n```") == DEFAULT_EXPLANATION


def test_fallback_when_empty():
    assert extract_explanation("") == DEFAULT_EXPLANATION
    assert extract_explanation("   \n\n ") == DEFAULT_EXPLANATION


def test_non_greedy_removal_keeps_text_between_blocks():
    response = "```a\nx\n```middle```b\ny\n```"
    assert extract_explanation(response) == "middle"


def test_unclosed_block_is_left_as_text():
    response = "Intro\n```ts\nconst a = 1;"
    assert extract_explanation(response) == "Intro\n```ts\nconst a = 1;"


def test_never_returns_empty():
    for response in ["", "```", "``````", "```\n```", "\n"]:
        assert extract_explanation(response)
