"""Tests for the response processing pipeline."""

from app_builder.models import FileAction
from app_builder.parsing.explanation import DEFAULT_EXPLANATION
from app_builder.parsing.pipeline import WARNING_PREFIX, format_explanation, process_response

RESPONSE = (
    "```filepath:src/App.tsx\n"
    "export default function App() { return <Header />; }\n"
    "```\n"
    "```filepath:src/Header.tsx\n"
    "export const Header = () => <h1>Hi</h1>;\n"
    "```\n"
    "Added a header and wired it into the app."
)


def test_process_response_classifies_against_existing_paths():
    result = process_response(RESPONSE, {"src/App.tsx"})
    assert [(f.path, f.action) for f in result.files] == [
        ("src/App.tsx", FileAction.UPDATE),
        ("src/Header.tsx", FileAction.CREATE),
    ]
    assert result.explanation == "Added a header and wired it into the app."
    assert result.security_issues == []


def test_process_response_appends_security_warning():
    response = "```filepath:src/config.ts\nexport const password = 'hunter2';\n```\nDone."
    result = process_response(response)
    assert result.security_issues == ["Potential Password detected in generated code"]
    assert result.explanation == (
        "Done.\n\nWarning: Potential Password detected in generated code"
    )


def test_secrets_in_prose_are_not_scanned():
    result = process_response("Set password = 'hunter2' in your .env file.")
    assert result.files == []
    assert result.security_issues == []


def test_process_response_empty_input():
    result = process_response("")
    assert result.files == []
    assert result.explanation == DEFAULT_EXPLANATION


def test_format_explanation():
    assert format_explanation("Done.", []) == "Done."
    assert format_explanation("Done.", ["a", "b"]) == f"Done.{WARNING_PREFIX}a, b"


def test_reserialized_files_round_trip():
    """Writing extracted files back in the fenced format reproduces them."""
    first = process_response(RESPONSE)
    serialized = "".join(
        f"```filepath:{f.path}\n{f.content}\n```\n" for f in first.files
    ) + first.explanation
    second = process_response(serialized)
    assert [(f.path, f.content) for f in second.files] == [
        (f.path, f.content) for f in first.files
    ]
    assert second.explanation == first.explanation
