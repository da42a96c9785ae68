"""CLI entry point for the app builder."""
import argparse
from dotenv import load_dotenv
import json
import sys
import time
import traceback
from pathlib import Path

from app_builder.config import ProviderConfig
from app_builder.models import FileAction, GenerationContext, GenerationResult, ProviderType
from app_builder.orchestrator.exceptions import OrchestratorError
from app_builder.parsing import process_response
from app_builder.prompts import build_context_summary
from app_builder.project.exceptions import WorkspaceError
from app_builder.providers.exceptions import ProviderError
from app_builder.utils.diff_generator import generate_unified_diff

load_dotenv()

# Exit codes
EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 1
EXIT_PROVIDER_ERROR = 2
EXIT_ORCHESTRATOR_ERROR = 3
EXIT_GENERATION_ABORT = 4
EXIT_UNEXPECTED = 5
EXIT_KEYBOARD_INTERRUPT = 130

DEFAULT_GENERATION_LIMIT = 20

# Abort detection prefix, must match abort_node output in graph.py
ABORT_PREFIX = "ABORT:"

# Safe keys allowed in config output (no secrets)
_SAFE_CONFIG_KEYS = frozenset({
    "project_dir", "prompt", "provider", "model", "project_name",
    "framework", "apply", "show_diff", "output_json", "verbose",
    "available_providers",
})


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="app-builder",
        description="Generate application source files from natural language",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate", help="Run one chat turn against a project directory"
    )
    generate.add_argument("project_dir", type=str, help="Path to the project directory")
    generate.add_argument("prompt", type=str, help="What to build or change")
    generate.add_argument(
        "--provider",
        type=str.upper,
        default="",
        choices=("", *(p.value for p in ProviderType)),
        help="AI provider: CLAUDE or OPENAI (default: first configured)",
    )
    generate.add_argument("--model", type=str, default="", help="Override the provider's model")
    generate.add_argument(
        "--name", type=str, default="", help="Project name (default: directory name)"
    )
    generate.add_argument("--framework", type=str, default="", help="Project framework")
    generate.add_argument(
        "--no-apply",
        action="store_true",
        help="Print the proposed changes without writing them",
    )
    generate.add_argument(
        "--show-diff", action="store_true", help="Print diffs for updated files"
    )
    generate.add_argument("--output-json", action="store_true", help="Output results as JSON")
    generate.add_argument(
        "--dry-run", action="store_true", help="Print config and exit without running"
    )
    generate.add_argument("--verbose", action="store_true", help="Enable verbose output")

    parse = subparsers.add_parser(
        "parse", help="Extract file changes from a saved AI response"
    )
    parse.add_argument("response_file", type=str, help="Response text file, or '-' for stdin")
    parse.add_argument(
        "--existing",
        action="append",
        default=[],
        metavar="PATH",
        help="Path already stored for the project (repeatable)",
    )
    parse.add_argument(
        "--project-dir",
        type=str,
        default="",
        help="Read existing paths from this project directory",
    )
    parse.add_argument("--output-json", action="store_true", help="Output results as JSON")
    parse.add_argument("--verbose", action="store_true", help="Enable verbose output")

    export = subparsers.add_parser("export", help="Export a project directory as a ZIP")
    export.add_argument("project_dir", type=str, help="Path to the project directory")
    export.add_argument(
        "--output",
        type=str,
        default="",
        help="Output ZIP path (default: <slug>-<timestamp>.zip in the current directory)",
    )
    export.add_argument("--name", type=str, default="", help="Project name (default: directory name)")
    export.add_argument("--description", type=str, default="", help="Project description")
    export.add_argument("--framework", type=str, default="", help="Project framework")
    export.add_argument("--verbose", action="store_true", help="Enable verbose output")

    generations = subparsers.add_parser(
        "generations", help="List the generations logged for a project, newest first"
    )
    generations.add_argument("project_dir", type=str, help="Path to the project directory")
    generations.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_GENERATION_LIMIT,
        help=f"Maximum generations to list (default: {DEFAULT_GENERATION_LIMIT})",
    )
    generations.add_argument("--output-json", action="store_true", help="Output results as JSON")
    generations.add_argument("--verbose", action="store_true", help="Enable verbose output")

    return parser


def validate_project_dir(raw_path: str) -> str:
    """Validate and resolve a project directory path.

    Raises:
        SystemExit: If path is not a valid directory.
    """
    resolved = Path(raw_path).resolve()
    if not resolved.is_dir():
        print(f"Error: '{raw_path}' is not a valid directory.", file=sys.stderr)
        raise SystemExit(EXIT_INVALID_INPUT)
    return str(resolved)


def read_response_text(raw_path: str) -> str:
    """Read an AI response from a file, or stdin for '-'.

    Raises:
        SystemExit: If the file cannot be read.
    """
    if raw_path == "-":
        return sys.stdin.read()
    path = Path(raw_path)
    if not path.is_file():
        print(f"Error: '{raw_path}' is not a readable file.", file=sys.stderr)
        raise SystemExit(EXIT_INVALID_INPUT)
    return path.read_text(encoding="utf-8")


def format_result_json(result: dict) -> str:
    """Serialize result dict to JSON string.

    Calls .model_dump(mode="json") on Pydantic model values.
    """

    def _serialize(obj):
        if hasattr(obj, "model_dump"):
            return obj.model_dump(mode="json")
        if isinstance(obj, list):
            return [_serialize(item) for item in obj]
        return obj

    prepared = {k: _serialize(v) for k, v in result.items()}
    return json.dumps(prepared, indent=2, default=str)


def print_changes_human(files, explanation: str, existing_contents: dict[str, str] | None = None) -> None:
    """Print file changes and the explanation in human-readable format."""
    print(f"\n{'='*60}")
    print("App Builder Results")
    print(f"{'='*60}")

    print(f"\nFiles ({len(files)}):")
    for change in files:
        print(f"  {change.action.value:<7} {change.path}")
        if existing_contents is not None and change.action == FileAction.UPDATE:
            diff = generate_unified_diff(
                change.path,
                existing_contents.get(change.path, ""),
                change.content or "",
            )
            if diff:
                print(diff)

    print(f"\n{explanation}")
    print(f"\n{'='*60}")


def print_generations_human(records) -> None:
    """Print logged generations in human-readable format."""
    print(f"\nGenerations ({len(records)}):")
    for record in records:
        print(
            f"  {record.created_at:%Y-%m-%d %H:%M:%S}  {record.status.value:<11} "
            f"{record.provider.value}/{record.model or '-'}  "
            f"tokens={record.total_tokens} files={len(record.files_changed)}"
        )
        print(f"    {record.prompt}")
        if record.error_message:
            print(f"    error: {record.error_message}")


def print_config_human(config: dict) -> None:
    """Print configuration in human-readable format.

    Only prints keys in the safe allowlist to prevent secret leakage.
    """
    print("\nConfiguration:")
    print(f"{'='*40}")
    for key, value in config.items():
        if key in _SAFE_CONFIG_KEYS:
            print(f"  {key}: {value}")
    print(f"{'='*40}")


def determine_exit_code(state: dict) -> int:
    """Determine the exit code from the final chat state."""
    errors = state.get("errors", [])
    if not errors:
        return EXIT_SUCCESS
    for err in errors:
        if str(err).startswith(ABORT_PREFIX):
            return EXIT_GENERATION_ABORT
    return EXIT_ORCHESTRATOR_ERROR


def _handle_error(label: str, exc: BaseException, verbose: bool, exit_code: int) -> int:
    """Print error message to stderr and return the exit code."""
    print(f"{label}: {exc}", file=sys.stderr)
    if verbose:
        traceback.print_exc(file=sys.stderr)
    return exit_code


def run_generate(args: argparse.Namespace) -> int:
    """Run one chat turn: generate, then apply the changes to the project."""
    project_dir = validate_project_dir(args.project_dir)
    provider_config = ProviderConfig.from_env()

    config = {
        "project_dir": project_dir,
        "prompt": args.prompt,
        "provider": args.provider or provider_config.default_provider().value,
        "model": args.model or "(provider default)",
        "project_name": args.name or Path(project_dir).name,
        "framework": args.framework or None,
        "apply": not args.no_apply,
        "show_diff": args.show_diff,
        "output_json": args.output_json,
        "verbose": args.verbose,
        "available_providers": [p.value for p in provider_config.available_providers()],
    }

    if args.dry_run:
        if args.output_json:
            print(json.dumps(config, indent=2))
        else:
            print_config_human(config)
        return EXIT_SUCCESS

    # Deferred so --dry-run never builds clients
    from app_builder.orchestrator.graph import build_graph
    from app_builder.orchestrator.state import make_initial_state
    from app_builder.project.workspace import ProjectWorkspace
    from app_builder.providers.registry import get_provider, resolve_provider_type

    provider_type = resolve_provider_type(args.provider or None, provider_config)
    provider = get_provider(provider_type, provider_config, model=args.model or None)

    workspace = ProjectWorkspace(project_dir)
    context = GenerationContext(
        project_id=project_dir,
        project_name=config["project_name"],
        framework=config["framework"],
        existing_files=workspace.context_files(),
        conversation_history=workspace.load_history(),
        prompt=args.prompt,
    )
    if args.verbose:
        print(build_context_summary(context), file=sys.stderr)

    # Captured before the graph writes anything
    existing_contents = None
    if args.show_diff:
        existing_contents = {f.path: f.content for f in workspace.load_files()}

    def _relay(token: str) -> None:
        sys.stderr.write(token)
        sys.stderr.flush()

    graph = build_graph(
        provider=provider,
        workspace=None if args.no_apply else workspace,
        on_token=None if args.output_json else _relay,
    )
    state = graph.invoke(make_initial_state(context))

    result: GenerationResult | None = state.get("result")
    if args.output_json:
        print(format_result_json({
            "result": result,
            "applied_paths": state.get("applied_paths", []),
            "generation_id": state.get("generation_id"),
            "errors": state.get("errors", []),
        }))
    elif result is not None and result.success:
        print_changes_human(result.files, result.explanation, existing_contents)
        if args.verbose:
            usage = result.tokens_used
            print(f"Tokens: prompt={usage.prompt} completion={usage.completion} total={usage.total}")
    for err in state.get("errors", []):
        print(f"Error: {err}", file=sys.stderr)

    return determine_exit_code(state)


def run_parse(args: argparse.Namespace) -> int:
    """Extract file changes from a saved response without calling a provider."""
    response = read_response_text(args.response_file)

    existing_paths = set(args.existing)
    if args.project_dir:
        from app_builder.project.workspace import ProjectWorkspace

        existing_paths |= ProjectWorkspace(validate_project_dir(args.project_dir)).existing_paths()

    extraction = process_response(response, existing_paths)
    if args.output_json:
        print(format_result_json(extraction.model_dump(mode="json")))
    else:
        print_changes_human(extraction.files, extraction.explanation)
    return EXIT_SUCCESS


def run_export(args: argparse.Namespace) -> int:
    """Write a project directory to a ZIP archive."""
    from app_builder.project.export import build_project_zip, export_filename
    from app_builder.project.workspace import ProjectWorkspace

    project_dir = validate_project_dir(args.project_dir)
    project_name = args.name or Path(project_dir).name
    files = ProjectWorkspace(project_dir).load_files()

    payload = build_project_zip(
        files,
        project_name,
        description=args.description or None,
        framework=args.framework or None,
    )
    output = Path(args.output or export_filename(project_name, int(time.time() * 1000)))
    output = output.expanduser().resolve()
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(payload)
    print(f"Exported {len(files)} files to {output}")
    return EXIT_SUCCESS


def run_generations(args: argparse.Namespace) -> int:
    """List the generation log of a project directory."""
    from app_builder.project.workspace import ProjectWorkspace

    project_dir = validate_project_dir(args.project_dir)
    if args.limit <= 0:
        print("Error: --limit must be positive.", file=sys.stderr)
        return EXIT_INVALID_INPUT

    records = ProjectWorkspace(project_dir).load_generations(limit=args.limit)
    if args.output_json:
        print(format_result_json({"generations": records}))
    else:
        print_generations_human(records)
    return EXIT_SUCCESS


_COMMANDS = {
    "generate": run_generate,
    "parse": run_parse,
    "export": run_export,
    "generations": run_generations,
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code integer.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    verbose = getattr(args, "verbose", False)

    try:
        return _COMMANDS[args.command](args)

    except SystemExit as exc:
        return exc.code

    except ProviderError as exc:
        return _handle_error("Provider error", exc, verbose, EXIT_PROVIDER_ERROR)

    except OrchestratorError as exc:
        return _handle_error("Orchestrator error", exc, verbose, EXIT_ORCHESTRATOR_ERROR)

    except WorkspaceError as exc:
        return _handle_error("Workspace error", exc, verbose, EXIT_INVALID_INPUT)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_KEYBOARD_INTERRUPT

    except Exception as exc:
        return _handle_error("Unexpected error", exc, verbose, EXIT_UNEXPECTED)


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())
