"""Prompt construction for code generation requests."""

from app_builder.models import GenerationContext, ProjectFile

MAX_FILE_CONTEXT_LENGTH = 10_000  # Max chars of a single file sent as context
TRUNCATION_MARKER = "\n... (truncated)"


def build_system_prompt(context: GenerationContext) -> str:
    """Build the system prompt describing the project and the output format.

    The prompt asks the model to emit each file in its own
    ```filepath:<path> block, followed by a prose explanation; this is the
    format the response parser expects first.
    """
    if context.existing_files:
        file_list = "\n".join(f"- {f.path}" for f in context.existing_files)
    else:
        file_list = "No files yet - this is a new project."

    framework_info = f"\nFRAMEWORK: {context.framework}" if context.framework else ""

    return f"""You are an expert software developer building applications. \
You are working on a project called "{context.project_name}".{framework_info}

CURRENT PROJECT FILES:
{file_list}

YOUR ROLE:
- You are a senior software engineer helping users build real, working applications
- You write production-quality code with proper error handling and best practices
- You understand the full context of the project and make changes that integrate well

BEHAVIOR RULES:
1. Before making changes, understand the existing codebase structure
2. Make scoped, targeted changes - only modify what's necessary
3. Explain your assumptions and decisions clearly
4. Ask clarifying questions when requirements are ambiguous
5. NEVER embed API keys, secrets, passwords, or credentials in code
6. Use environment variables for all configuration
7. Follow the established patterns in the existing codebase
8. Provide complete, working code - no placeholders or TODOs in critical paths

OUTPUT FORMAT:
When creating or modifying files, use this exact format:

```filepath:path/to/file.ext
// Complete file content here
```

For multiple files, include each in its own code block with the filepath: prefix.

After the code blocks, provide a brief explanation of:
1. What changes you made
2. Any assumptions you made
3. How to run or test the changes

IMPORTANT:
- Always include the COMPLETE file content, not just the changes
- Use the exact filepath format shown above
- Ensure code is syntactically correct and follows best practices
- Add appropriate imports and dependencies
- Consider error handling and edge cases"""


def build_context_summary(context: GenerationContext) -> str:
    """Summarize existing files by size without including their content."""
    if not context.existing_files:
        return "This is a new project with no existing files."

    lines = []
    for f in context.existing_files:
        line_count = len(f.content.split("\n"))
        lines.append(f"- {f.path} ({line_count} lines, {len(f.content)} chars)")
    return "Existing project files:\n" + "\n".join(lines)


def build_file_context(
    files: list[ProjectFile],
    max_length: int = MAX_FILE_CONTEXT_LENGTH,
) -> str:
    """Render project files as ``=== path ===`` sections, truncating long ones."""
    if not files:
        return ""

    sections = []
    for f in files:
        content = f.content
        if len(content) > max_length:
            content = content[:max_length] + TRUNCATION_MARKER
        sections.append(f"=== {f.path} ===\n{content}\n")
    return "\n".join(sections)


def build_user_prompt(context: GenerationContext) -> str:
    """Wrap the user's request with the current project files, if any."""
    file_context = build_file_context(context.existing_files)
    if not file_context:
        return context.prompt
    return (
        "Here are the current project files for reference:\n\n"
        f"{file_context}\n\nUser request: {context.prompt}"
    )
