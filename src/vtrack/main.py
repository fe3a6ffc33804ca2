"""Main CLI entry point for vtrack."""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from . import codec
from .config import RepositoryConfig
from .discovery import to_repository_path
from .errors import EmptyContentError, VTrackError
from .logging_utils import configure_logging
from .repository import RepositoryManager
from .serialize import ResultSerializer


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="vtrack",
        description="Content-addressed version tracking for files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vtrack init
  vtrack add notes/today.md
  vtrack status --format text
  vtrack show 2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824
        """,
    )

    parser.add_argument(
        "--root",
        help="Repository root (default: $VTRACK_ROOT or the current directory)",
    )
    parser.add_argument(
        "--storage-dir",
        help="Record directory relative to the root (default: data/.vcs)",
    )
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored text output",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Track every non-empty file in the repository")

    add_parser = subparsers.add_parser("add", help="Record a new version of a file")
    add_parser.add_argument("path", help="File path relative to the repository root")

    subparsers.add_parser("status", help="List modified and unmodified tracked files")

    log_parser = subparsers.add_parser("log", help="Show the recorded versions of a file")
    log_parser.add_argument("path", help="File path relative to the repository root")

    show_parser = subparsers.add_parser("show", help="Print the content stored for a digest")
    show_parser.add_argument("digest", help="Content digest")
    show_parser.add_argument(
        "--output",
        help="Write content to a file instead of stdout",
    )

    return parser


def create_config(args: argparse.Namespace) -> RepositoryConfig:
    """Create configuration from command line arguments."""
    overrides = {}
    if args.storage_dir:
        overrides["storage_dir"] = args.storage_dir
    return RepositoryConfig.from_settings(args.root, **overrides)


def run_command(
    args: argparse.Namespace, manager: RepositoryManager, serializer: ResultSerializer
) -> Tuple[Dict[str, Any], Union[str, bytes]]:
    """Run the selected command, returning its JSON payload and console text."""
    if args.command == "init":
        summary = manager.initialize()
        return summary.to_dict(), serializer.render_summary(summary)

    if args.command == "add":
        outcome = manager.record_file(args.path)
        if not outcome.ok:
            raise EmptyContentError(outcome.path)
        return outcome.to_dict(), serializer.render_outcome(outcome)

    if args.command == "status":
        report = manager.status()
        return report.to_dict(), serializer.render_status(report)

    if args.command == "log":
        repo_path = to_repository_path(manager.config.root, args.path)
        digests = manager.history(repo_path)
        payload = {"path": repo_path, "versions": digests}
        return payload, serializer.render_history(repo_path, digests)

    if args.command == "show":
        content = manager.get_content(args.digest)
        payload: Dict[str, Any] = {"digest": args.digest, "size": len(content)}
        if args.output:
            Path(args.output).write_bytes(content)
            payload["output"] = args.output
            return payload, f"Wrote {len(content)} bytes to {args.output}"
        payload["content"] = codec.encode(content)
        return payload, content

    raise ValueError(f"Unknown command: {args.command}")


def output_result(result: Any, as_text: bool) -> None:
    """Output result to stdout."""
    if as_text and isinstance(result, bytes):
        sys.stdout.flush()
        sys.stdout.buffer.write(result)
        sys.stdout.buffer.flush()
        return
    print(result)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    serializer = ResultSerializer(color=not args.no_color)
    as_text = args.format == "text"

    try:
        config = create_config(args)
        manager = RepositoryManager.open(config)
        payload, text = run_command(args, manager, serializer)

        if as_text:
            output_result(text, as_text)
        else:
            output_result(
                serializer.to_json_string(serializer.create_success_envelope(payload)),
                as_text,
            )
        return 0

    except VTrackError as e:
        result = serializer.create_error_envelope(e.code, e.message, e.details)
        if as_text:
            print(e.message, file=sys.stderr)
        else:
            output_result(serializer.to_json_string(result), as_text)
        return 1

    except Exception as e:
        result = serializer.create_error_envelope(
            "INTERNAL_ERROR",
            f"Internal error: {str(e)}",
            {"type": type(e).__name__}
        )
        if as_text:
            print(result["error"]["message"], file=sys.stderr)
        else:
            output_result(serializer.to_json_string(result), as_text)
        return 1


if __name__ == "__main__":
    sys.exit(main())
