from unittest.mock import MagicMock

import pytest

from app_builder.models import GenerationContext, Message, ProjectFile

SAMPLE_RESPONSE = (
    "```filepath:src/App.tsx\n"
    "export default function App() { return <Header />; }\n"
    "```\n"
    "```filepath:src/Header.tsx\n"
    "export const Header = () => <h1>Hello</h1>;\n"
    "```\n"
    "Added a Header component and rendered it from App."
)


@pytest.fixture
def sample_response():
    return SAMPLE_RESPONSE


@pytest.fixture
def sample_context():
    return GenerationContext(
        project_id="proj-1",
        project_name="Todo App",
        framework="React + Vite",
        existing_files=[
            ProjectFile(path="src/App.tsx", content="export default function App() {}\n"),
            ProjectFile(path="package.json", content='{"name": "todo-app"}'),
        ],
        conversation_history=[
            Message(role="system", content="Project created"),
            Message(role="user", content="Create a todo app"),
            Message(role="assistant", content="Created the app shell."),
        ],
        prompt="Add a header",
    )


@pytest.fixture
def empty_context():
    return GenerationContext(
        project_id="proj-2",
        project_name="Blank",
        prompt="Build a landing page",
    )


def make_anthropic_message(text: str, input_tokens: int = 120, output_tokens: int = 80):
    """Mock Anthropic Messages API response with a single text block."""
    text_block = MagicMock()
    text_block.type = "text"
    text_block.text = text
    message = MagicMock()
    message.content = [text_block]
    message.usage.input_tokens = input_tokens
    message.usage.output_tokens = output_tokens
    return message


def make_anthropic_stream(chunks: list[str], input_tokens: int = 120, output_tokens: int = 80):
    """Mock for ``client.messages.stream(...)`` used as a context manager."""
    stream = MagicMock()
    stream.text_stream = iter(chunks)
    stream.get_final_message.return_value = make_anthropic_message(
        "".join(chunks), input_tokens, output_tokens
    )
    manager = MagicMock()
    manager.__enter__.return_value = stream
    manager.__exit__.return_value = False
    return manager


def make_openai_completion(text: str, prompt_tokens: int = 100, completion_tokens: int = 50):
    """Mock OpenAI chat completion response."""
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = text
    response.usage.prompt_tokens = prompt_tokens
    response.usage.completion_tokens = completion_tokens
    response.usage.total_tokens = prompt_tokens + completion_tokens
    return response


def make_openai_chunks(pieces: list[str | None]) -> list:
    """Mock OpenAI streaming chunks; None yields a chunk without content."""
    chunks = []
    for piece in pieces:
        chunk = MagicMock()
        chunk.choices = [MagicMock()]
        chunk.choices[0].delta.content = piece
        chunks.append(chunk)
    return chunks


@pytest.fixture
def anthropic_message():
    return make_anthropic_message


@pytest.fixture
def anthropic_stream():
    return make_anthropic_stream


@pytest.fixture
def openai_completion():
    return make_openai_completion


@pytest.fixture
def openai_chunks():
    return make_openai_chunks
